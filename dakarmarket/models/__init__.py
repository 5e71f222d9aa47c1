# dakarmarket/models/__init__.py
import uuid
from datetime import datetime, timezone
from enum import Enum

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def utcnow() -> datetime:
    """Agora em UTC, sem tzinfo (o SQLite não guarda fuso)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    return str(uuid.uuid4())


class Role(Enum):
    """Papel do perfil, definido no cadastro e imutável depois"""
    CLIENT = "client"
    MERCHANT = "merchant"


class Profile(db.Model):
    __tablename__ = "profiles"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    email = db.Column(db.String(255), nullable=False, unique=True)
    display_name = db.Column(db.String(120))
    avatar_url = db.Column(db.String(512))
    role = db.Column(db.String(16), nullable=False, default=Role.CLIENT.value)
    phone = db.Column(db.String(32))
    whatsapp_number = db.Column(db.String(32))
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<Profile id={self.id} email={self.email!r} role={self.role}>"


class Product(db.Model):
    __tablename__ = "products"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    user_id = db.Column(db.String(36), db.ForeignKey("profiles.id"), nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    price = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    image_url = db.Column(db.String(512))
    category = db.Column(db.String(64), nullable=False, default="other")
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    merchant = db.relationship("Profile", lazy="joined")

    def __repr__(self):
        return f"<Product id={self.id} title={self.title!r} price={self.price}>"


from .cart import CartItem, Favorite  # noqa: E402
from .order import Order, OrderStatus  # noqa: E402
from .message import Message  # noqa: E402

__all__ = [
    "db", "utcnow", "new_id", "Role", "Profile", "Product",
    "CartItem", "Favorite", "Order", "OrderStatus", "Message",
]
