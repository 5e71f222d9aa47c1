# dakarmarket/blueprints/cart.py
from flask import Blueprint, jsonify, request

from ..models import Role
from ..services.cart_service import CartService
from ..session import require_role
from .serializers import cart_item_to_dict

bp = Blueprint("cart", __name__)


@bp.get("/")
@require_role(Role.CLIENT)
def list_cart(actor):
    items = CartService.get_items(actor.user_id)
    return jsonify({
        "items": [cart_item_to_dict(i) for i in items],
        "total": float(CartService.total(items)),
        "count": len(items),
    })


@bp.post("/")
@require_role(Role.CLIENT)
def add_to_cart(actor):
    data = request.get_json(silent=True) or {}
    item = CartService.add_item(actor.user_id, (data.get("product_id") or "").strip(), data.get("quantity", 1))
    return jsonify(cart_item_to_dict(item)), 201


@bp.put("/<item_id>")
@require_role(Role.CLIENT)
def update_cart_item(item_id: str, actor):
    data = request.get_json(silent=True) or {}
    item = CartService.update_quantity(actor.user_id, item_id, data.get("quantity"))
    return jsonify(cart_item_to_dict(item))


@bp.delete("/<item_id>")
@require_role(Role.CLIENT)
def remove_cart_item(item_id: str, actor):
    CartService.remove_item(actor.user_id, item_id)
    return jsonify({"deleted": item_id})


@bp.delete("/")
@require_role(Role.CLIENT)
def clear_cart(actor):
    return jsonify({"deleted": CartService.clear(actor.user_id)})
