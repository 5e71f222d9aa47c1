"""
Catálogo de produtos dos lojistas: busca, filtros e CRUD do dono.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from sqlalchemy import asc, desc, func, select

from ..errors import NotFoundError, ValidationError
from ..models import db, CartItem, Favorite, Order, Product
from .store import commit

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "price": Product.price,
    "title": Product.title,
    "created_at": Product.created_at,
}

EDITABLE_FIELDS = ("title", "description", "price", "category", "image_url")


def _parse_price(value) -> Decimal:
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError("Preço inválido") from None
    if not price.is_finite() or price < 0:
        raise ValidationError("Preço inválido")
    return price.quantize(Decimal("0.01"))


class ProductService:

    @staticmethod
    def list_products(search: str = "", category: Optional[str] = None, user_id: Optional[str] = None,
                      sort_by: Optional[str] = None, page: int = 1, per_page: int = 20):
        """
        Lista produtos com filtros

        `category == "all"` não filtra. Ordenação por preço é crescente; por
        data ou título é decrescente; sem `sort_by`, mais novos primeiro.
        Retorna o objeto de paginação do Flask-SQLAlchemy.
        """
        q = Product.query
        if user_id:
            q = q.filter(Product.user_id == user_id)
        if search:
            q = q.filter(Product.title.ilike(f"%{search}%"))
        if category and category != "all":
            q = q.filter(Product.category == category)

        col = SORT_COLUMNS.get((sort_by or "").lower())
        if col is None:
            q = q.order_by(desc(Product.created_at))
        else:
            q = q.order_by(asc(col) if col is Product.price else desc(col))

        return q.paginate(page=page, per_page=per_page, error_out=False)

    @staticmethod
    def get(product_id: str) -> Product:
        product = db.session.get(Product, product_id)
        if product is None:
            raise NotFoundError(f"Produto {product_id} não encontrado")
        return product

    @staticmethod
    def count_for(merchant_id: str) -> int:
        return db.session.scalar(
            select(func.count()).select_from(Product).where(Product.user_id == merchant_id)
        ) or 0

    @staticmethod
    def create(merchant_id: str, data: Dict[str, Any]) -> Product:
        title = (data.get("title") or "").strip()
        if not title:
            raise ValidationError("Campo obrigatório: title")
        product = Product(
            user_id=merchant_id,
            title=title,
            description=(data.get("description") or "").strip() or None,
            price=_parse_price(data.get("price", 0)),
            category=(data.get("category") or "other").strip() or "other",
            image_url=(data.get("image_url") or "").strip() or None,
        )
        db.session.add(product)
        commit("criar produto")
        logger.info(f"Produto {product.id} criado por {merchant_id}")
        return product

    @staticmethod
    def _get_owned(merchant_id: str, product_id: str) -> Product:
        product = ProductService.get(product_id)
        if product.user_id != merchant_id:
            raise NotFoundError(f"Produto {product_id} não encontrado")
        return product

    @staticmethod
    def update(merchant_id: str, product_id: str, data: Dict[str, Any]) -> Product:
        product = ProductService._get_owned(merchant_id, product_id)
        for field in EDITABLE_FIELDS:
            if field not in data:
                continue
            if field == "price":
                product.price = _parse_price(data["price"])
            elif field == "title":
                title = (data["title"] or "").strip()
                if not title:
                    raise ValidationError("Campo obrigatório: title")
                product.title = title
            else:
                setattr(product, field, (data[field] or "").strip() or None)
        if not product.category:
            product.category = "other"
        commit("atualizar produto")
        return product

    @staticmethod
    def delete(merchant_id: str, product_id: str) -> None:
        product = ProductService._get_owned(merchant_id, product_id)
        # pedidos nunca são apagados, então o produto deles também fica
        if Order.query.filter_by(product_id=product.id).first() is not None:
            raise ValidationError("Produto com pedidos não pode ser removido")
        for row in CartItem.query.filter_by(product_id=product.id).all():
            db.session.delete(row)
        for row in Favorite.query.filter_by(product_id=product.id).all():
            db.session.delete(row)
        db.session.delete(product)
        commit("remover produto")
        logger.info(f"Produto {product_id} removido")
