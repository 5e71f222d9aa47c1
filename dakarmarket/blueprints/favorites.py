# dakarmarket/blueprints/favorites.py
from flask import Blueprint, jsonify, request

from ..models import Role
from ..services.cart_service import FavoriteService
from ..session import require_role
from .serializers import favorite_to_dict

bp = Blueprint("favorites", __name__)


@bp.get("/")
@require_role(Role.CLIENT)
def list_favorites(actor):
    items = FavoriteService.get_items(actor.user_id)
    return jsonify({"items": [favorite_to_dict(f) for f in items], "total": len(items)})


@bp.post("/")
@require_role(Role.CLIENT)
def add_favorite(actor):
    data = request.get_json(silent=True) or {}
    f = FavoriteService.add_item(actor.user_id, (data.get("product_id") or "").strip())
    return jsonify(favorite_to_dict(f)), 201


@bp.delete("/<product_id>")
@require_role(Role.CLIENT)
def remove_favorite(product_id: str, actor):
    removed = FavoriteService.remove_item(actor.user_id, product_id)
    return jsonify({"deleted": product_id, "removed": removed})


@bp.post("/<product_id>/toggle")
@require_role(Role.CLIENT)
def toggle_favorite(product_id: str, actor):
    return jsonify({"product_id": product_id, "is_favorite": FavoriteService.toggle(actor.user_id, product_id)})
