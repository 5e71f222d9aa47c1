# dakarmarket/blueprints/products.py
from flask import Blueprint, current_app, jsonify, request

from ..errors import ValidationError
from ..models import Role
from ..services.product_service import ProductService
from ..session import require_role
from .serializers import product_to_dict

bp = Blueprint("products", __name__)


def _int_arg(name: str, default: int) -> int:
    try:
        return int(request.args.get(name, default))
    except (TypeError, ValueError):
        raise ValidationError(f"Parâmetro inválido: {name}") from None


@bp.get("/")
def list_products():
    max_per_page = current_app.config.get("PRODUCTS_MAX_PER_PAGE", 50)
    page = max(_int_arg("page", 1), 1)
    per_page = max(min(_int_arg("per_page", 20), max_per_page), 1)

    pag = ProductService.list_products(
        search=(request.args.get("search") or "").strip(),
        category=request.args.get("category"),
        user_id=request.args.get("user_id"),
        sort_by=request.args.get("sort_by"),
        page=page,
        per_page=per_page,
    )
    return jsonify({
        "products": [product_to_dict(p) for p in pag.items],
        "page": pag.page,
        "per_page": pag.per_page,
        "pages": pag.pages,
        "total": pag.total,
    })


@bp.get("/<product_id>/")
def get_product(product_id: str):
    return jsonify(product_to_dict(ProductService.get(product_id)))


@bp.post("/")
@require_role(Role.MERCHANT)
def create_product(actor):
    data = request.get_json(silent=True) or {}
    p = ProductService.create(actor.user_id, data)
    return jsonify(product_to_dict(p)), 201


@bp.put("/<product_id>/")
@require_role(Role.MERCHANT)
def update_product(product_id: str, actor):
    data = request.get_json(silent=True) or {}
    p = ProductService.update(actor.user_id, product_id, data)
    return jsonify(product_to_dict(p))


@bp.delete("/<product_id>/")
@require_role(Role.MERCHANT)
def delete_product(product_id: str, actor):
    ProductService.delete(actor.user_id, product_id)
    return jsonify({"deleted": product_id})
