# dakarmarket/blueprints/orders.py
from flask import Blueprint, jsonify, request

from ..errors import PartialFailureError, ValidationError
from ..models import Role
from ..services.order_service import OrderService
from ..session import require_role, require_session
from .serializers import order_to_dict

bp = Blueprint("orders", __name__)


@bp.get("/")
@require_session
def list_orders(actor):
    status = (request.args.get("status") or "").strip() or None
    items = OrderService.list_orders(actor.user_id, actor.role, status=status)
    return jsonify({"items": [order_to_dict(o) for o in items], "total": len(items)})


@bp.get("/counts")
@require_session
def order_counts(actor):
    return jsonify(OrderService.status_counts(actor.user_id, actor.role))


@bp.get("/<order_id>")
@require_session
def get_order(order_id: str, actor):
    return jsonify(order_to_dict(OrderService.get_order(order_id, actor.user_id, actor.role)))


@bp.post("/checkout")
@require_role(Role.CLIENT)
def checkout(actor):
    try:
        order_ids = OrderService.checkout_cart(actor.user_id)
    except PartialFailureError as e:
        # pedidos confirmados: o cliente não deve repetir o checkout
        return jsonify({
            "success": True,
            "order_ids": e.order_ids,
            "cart_cleared": False,
            "message": e.message,
        }), 201
    return jsonify({
        "success": True,
        "order_ids": order_ids,
        "cart_cleared": True,
        "message": f"{len(order_ids)} pedido(s) realizado(s) com sucesso",
    }), 201


@bp.put("/<order_id>/status")
@require_session
def update_status(order_id: str, actor):
    data = request.get_json(silent=True) or {}
    status = (data.get("status") or "").strip()
    if not status:
        raise ValidationError("Campo obrigatório: status")
    o = OrderService.update_status(order_id, status, actor)
    return jsonify(order_to_dict(o))
