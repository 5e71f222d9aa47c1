"""
Serviço de carrinho e favoritos do cliente
"""

import logging
from decimal import Decimal
from typing import List

from sqlalchemy import delete, func, select

from ..errors import NotFoundError, ValidationError
from ..models import db, CartItem, Favorite, Product
from .store import commit, execute

logger = logging.getLogger(__name__)


def _get_product(product_id: str) -> Product:
    product = db.session.get(Product, product_id)
    if product is None:
        raise NotFoundError(f"Produto {product_id} não encontrado")
    return product


def check_quantity(quantity) -> int:
    """Aceita apenas inteiros (ou texto com um inteiro); 1.9 e True são recusados."""
    if isinstance(quantity, str) and quantity.strip().isdigit():
        quantity = int(quantity.strip())
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError("Quantidade inválida")
    if quantity < 1:
        raise ValidationError("Quantidade deve ser no mínimo 1")
    return quantity


class CartService:
    """Linhas do carrinho: uma por (cliente, produto), quantidade agregada"""

    @staticmethod
    def get_items(client_id: str) -> List[CartItem]:
        return (
            CartItem.query.filter_by(client_id=client_id)
            .order_by(CartItem.created_at.asc())
            .all()
        )

    @staticmethod
    def count(client_id: str) -> int:
        return db.session.scalar(
            select(func.count()).select_from(CartItem).where(CartItem.client_id == client_id)
        ) or 0

    @staticmethod
    def add_item(client_id: str, product_id: str, quantity=1) -> CartItem:
        """
        Adiciona um produto ao carrinho

        Se o produto já estiver no carrinho, soma a quantidade à linha existente
        em vez de criar outra.
        """
        quantity = check_quantity(quantity)
        product = _get_product(product_id)

        item = CartItem.query.filter_by(client_id=client_id, product_id=product.id).first()
        if item:
            item.quantity += quantity
        else:
            item = CartItem(client_id=client_id, product_id=product.id, quantity=quantity)
            db.session.add(item)
        commit("adicionar item ao carrinho")
        logger.info(f"Carrinho {client_id}: {product.id} x{item.quantity}")
        return item

    @staticmethod
    def _get_owned_item(client_id: str, item_id: str) -> CartItem:
        item = db.session.get(CartItem, item_id)
        if item is None or item.client_id != client_id:
            raise NotFoundError(f"Item {item_id} não encontrado no carrinho")
        return item

    @staticmethod
    def update_quantity(client_id: str, item_id: str, quantity) -> CartItem:
        item = CartService._get_owned_item(client_id, item_id)
        item.quantity = check_quantity(quantity)
        commit("atualizar quantidade")
        return item

    @staticmethod
    def remove_item(client_id: str, item_id: str) -> None:
        item = CartService._get_owned_item(client_id, item_id)
        db.session.delete(item)
        commit("remover item do carrinho")

    @staticmethod
    def clear(client_id: str) -> int:
        result = execute("limpar carrinho", delete(CartItem).where(CartItem.client_id == client_id))
        logger.info(f"Carrinho {client_id} limpo ({result.rowcount} itens)")
        return result.rowcount

    @staticmethod
    def total(items: List[CartItem]) -> Decimal:
        return sum(
            (Decimal(str(item.product.price)) * item.quantity for item in items if item.product is not None),
            Decimal("0.00"),
        )


class FavoriteService:

    @staticmethod
    def get_items(client_id: str) -> List[Favorite]:
        return (
            Favorite.query.filter_by(client_id=client_id)
            .order_by(Favorite.created_at.desc())
            .all()
        )

    @staticmethod
    def count(client_id: str) -> int:
        return db.session.scalar(
            select(func.count()).select_from(Favorite).where(Favorite.client_id == client_id)
        ) or 0

    @staticmethod
    def is_favorite(client_id: str, product_id: str) -> bool:
        return Favorite.query.filter_by(client_id=client_id, product_id=product_id).first() is not None

    @staticmethod
    def add_item(client_id: str, product_id: str) -> Favorite:
        product = _get_product(product_id)
        favorite = Favorite.query.filter_by(client_id=client_id, product_id=product.id).first()
        if favorite:
            return favorite
        favorite = Favorite(client_id=client_id, product_id=product.id)
        db.session.add(favorite)
        commit("adicionar favorito")
        return favorite

    @staticmethod
    def remove_item(client_id: str, product_id: str) -> bool:
        result = execute(
            "remover favorito",
            delete(Favorite).where(Favorite.client_id == client_id, Favorite.product_id == product_id),
        )
        return result.rowcount > 0

    @staticmethod
    def toggle(client_id: str, product_id: str) -> bool:
        """Retorna o novo estado: True se passou a ser favorito."""
        if FavoriteService.is_favorite(client_id, product_id):
            FavoriteService.remove_item(client_id, product_id)
            return False
        FavoriteService.add_item(client_id, product_id)
        return True
