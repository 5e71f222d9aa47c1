"""
Serviço de pedidos: checkout do carrinho, listagem por papel e
mudança de status pelo lojista.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional, Union

from sqlalchemy import func, select

from ..errors import NotFoundError, PartialFailureError, StoreError, ValidationError
from ..models import db, Order, OrderStatus, Product, Role
from . import notifications
from .cart_service import CartService, check_quantity
from .order_status import parse_status, transition
from .store import commit

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


@dataclass
class CartLine:
    """Linha de checkout: produto e quantidade vindos do carrinho"""
    product: Product
    quantity: int


def _owner_column(role: Role):
    return Order.merchant_id if role is Role.MERCHANT else Order.client_id


class OrderService:
    """Operações sobre pedidos"""

    @staticmethod
    def checkout(client_id: str, cart_lines: List[CartLine]) -> List[str]:
        """
        Cria um pedido pending por linha do carrinho e depois limpa o carrinho

        Args:
            client_id: cliente que finaliza a compra
            cart_lines: linhas (produto, quantidade), quantidade >= 1

        Returns:
            Ids dos pedidos criados

        O lote de pedidos é confirmado primeiro; o carrinho só é limpo depois
        disso. Se a limpeza falhar, os pedidos continuam válidos e a falha vem
        como PartialFailureError com os ids criados.
        """
        if not cart_lines:
            raise ValidationError("Carrinho vazio")

        orders = []
        for line in cart_lines:
            quantity = check_quantity(line.quantity)
            if line.product is None:
                raise NotFoundError("Produto do carrinho não encontrado")

            total = (Decimal(str(line.product.price)) * quantity).quantize(CENTS)
            orders.append(Order(
                client_id=client_id,
                product_id=line.product.id,
                merchant_id=line.product.user_id,
                quantity=quantity,
                total=total,
                status=OrderStatus.PENDING.value,
            ))

        db.session.add_all(orders)
        commit("criar pedidos")
        order_ids = [o.id for o in orders]
        logger.info(f"Checkout do cliente {client_id}: {len(order_ids)} pedidos criados")

        for o in orders:
            notifications.notify(notifications.ORDER_CREATED, {
                "order_id": o.id,
                "client_id": o.client_id,
                "merchant_id": o.merchant_id,
            })

        try:
            CartService.clear(client_id)
        except StoreError as e:
            logger.error(f"Pedidos {order_ids} criados, mas o carrinho não foi limpo: {e}")
            raise PartialFailureError(
                "Pedido realizado com sucesso, mas não foi possível esvaziar o carrinho",
                order_ids=order_ids,
            ) from e

        return order_ids

    @staticmethod
    def checkout_cart(client_id: str) -> List[str]:
        """Finaliza o carrinho persistido do cliente."""
        items = CartService.get_items(client_id)
        return OrderService.checkout(
            client_id, [CartLine(product=item.product, quantity=item.quantity) for item in items]
        )

    @staticmethod
    def list_orders(user_id: str, role: Role, status: Optional[Union[OrderStatus, str]] = None) -> List[Order]:
        query = Order.query.filter(_owner_column(role) == user_id)
        if status:
            query = query.filter(Order.status == parse_status(status).value)
        return query.order_by(Order.created_at.desc()).all()

    @staticmethod
    def status_counts(user_id: str, role: Role) -> Dict[str, int]:
        rows = db.session.execute(
            select(Order.status, func.count())
            .where(_owner_column(role) == user_id)
            .group_by(Order.status)
        ).all()
        counts = {s.value: 0 for s in OrderStatus}
        for status, n in rows:
            if status in counts:
                counts[status] = n
        return {"all": sum(n for _, n in rows)} | counts

    @staticmethod
    def get_order(order_id: str, user_id: str, role: Role) -> Order:
        order = db.session.get(Order, order_id)
        if order is None or getattr(order, _owner_column(role).key) != user_id:
            raise NotFoundError(f"Pedido {order_id} não encontrado")
        return order

    @staticmethod
    def update_status(order_id: str, requested_status: Union[OrderStatus, str], actor) -> Order:
        """
        Muda o status de um pedido do lojista autenticado

        Pedido inexistente ou de outro lojista dá NotFoundError; papel
        diferente de merchant ou transição fora da tabela dá ValidationError.
        """
        if actor.role is not Role.MERCHANT:
            raise ValidationError("Apenas o lojista pode alterar o status do pedido")
        order = db.session.get(Order, order_id)
        if order is None or order.merchant_id != actor.user_id:
            raise NotFoundError(f"Pedido {order_id} não encontrado")

        previous = order.status
        transition(order, requested_status, actor.role)
        commit("atualizar status do pedido")
        logger.info(f"Pedido {order.id}: {previous} -> {order.status}")

        notifications.notify(notifications.ORDER_STATUS_CHANGED, {
            "order_id": order.id,
            "client_id": order.client_id,
            "status": order.status,
        })
        return order

    @staticmethod
    def revenue(merchant_id: str) -> Decimal:
        """Soma dos pedidos entregues do lojista."""
        value = db.session.scalar(
            select(func.coalesce(func.sum(Order.total), 0)).where(
                Order.merchant_id == merchant_id,
                Order.status == OrderStatus.DELIVERED.value,
            )
        )
        return Decimal(str(value or 0)).quantize(CENTS)
