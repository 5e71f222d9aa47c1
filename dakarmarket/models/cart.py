# dakarmarket/models/cart.py
from . import db, new_id, utcnow


class CartItem(db.Model):
    __tablename__ = "cart_items"
    __table_args__ = (db.UniqueConstraint("client_id", "product_id", name="uq_cart_client_product"),)

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    client_id = db.Column(db.String(36), db.ForeignKey("profiles.id"), nullable=False, index=True)
    product_id = db.Column(db.String(36), db.ForeignKey("products.id"), nullable=False)
    quantity = db.Column(db.Integer, nullable=False, default=1)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    product = db.relationship("Product", lazy="joined")


class Favorite(db.Model):
    __tablename__ = "favorites"
    __table_args__ = (db.UniqueConstraint("client_id", "product_id", name="uq_favorite_client_product"),)

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    client_id = db.Column(db.String(36), db.ForeignKey("profiles.id"), nullable=False, index=True)
    product_id = db.Column(db.String(36), db.ForeignKey("products.id"), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    product = db.relationship("Product", lazy="joined")
