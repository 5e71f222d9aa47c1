# dakarmarket/main.py
import logging
import os

from flask import Flask, jsonify
from flask_cors import CORS

from .config import Config
from .errors import register_error_handlers
from .models import db
from .services.notifications import init_notifier

from .blueprints.cart import bp as cart_bp
from .blueprints.favorites import bp as favorites_bp
from .blueprints.messages import bp as messages_bp
from .blueprints.orders import bp as orders_bp
from .blueprints.products import bp as products_bp
from .blueprints.profiles import bp as profiles_bp

logger = logging.getLogger(__name__)


def create_app(overrides: dict = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_mapping(Config(app.instance_path).as_dict())
    if overrides:
        app.config.from_mapping(overrides)

    logging.basicConfig(
        level=getattr(logging, str(app.config["LOG_LEVEL"]).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # CORS somente para os domínios configurados em /api/*
    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})

    # Banco
    db.init_app(app)
    with app.app_context():
        if app.config["SQLALCHEMY_DATABASE_URI"].startswith("sqlite:///"):
            os.makedirs(app.instance_path, exist_ok=True)
        db.create_all()

    init_notifier(app)
    register_error_handlers(app)

    @app.get("/api/health")
    def health():
        return jsonify({"status": "healthy", "service": "DakarMarket Backend"}), 200

    app.register_blueprint(profiles_bp, url_prefix="/api")
    app.register_blueprint(products_bp, url_prefix="/api/products")
    app.register_blueprint(cart_bp, url_prefix="/api/cart")
    app.register_blueprint(favorites_bp, url_prefix="/api/favorites")
    app.register_blueprint(orders_bp, url_prefix="/api/orders")
    app.register_blueprint(messages_bp, url_prefix="/api/messages")

    logger.info(f"DakarMarket pronto ({len(app.blueprints)} blueprints)")
    return app


if __name__ == "__main__":
    # execução local
    create_app().run(host="127.0.0.1", port=int(os.getenv("PORT", "5001")), debug=True)
