# dakarmarket/models/order.py
from enum import Enum

from . import db, new_id, utcnow


class OrderStatus(Enum):
    """Status do pedido; pending é o inicial, delivered e cancelled são terminais"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class Order(db.Model):
    __tablename__ = "orders"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    client_id = db.Column(db.String(36), db.ForeignKey("profiles.id"), nullable=False, index=True)
    product_id = db.Column(db.String(36), db.ForeignKey("products.id"), nullable=False)
    merchant_id = db.Column(db.String(36), db.ForeignKey("profiles.id"), nullable=False, index=True)
    quantity = db.Column(db.Integer, nullable=False)
    # price * quantity no momento da criação; não é recalculado se o preço mudar
    total = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    status = db.Column(db.String(32), nullable=False, default=OrderStatus.PENDING.value)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    product = db.relationship("Product", lazy="joined")
    client = db.relationship("Profile", foreign_keys=[client_id], lazy="joined")
    merchant = db.relationship("Profile", foreign_keys=[merchant_id], lazy="joined")

    def __repr__(self):
        return f"<Order id={self.id} status={self.status} total={self.total}>"
