"""
Máquina de estados do pedido.

    pending -> confirmed -> shipped -> delivered
    pending | confirmed -> cancelled

Só o lojista muda o status. Saltos de estado e qualquer saída de
delivered/cancelled são recusados com ValidationError.
"""

from typing import Dict, Tuple, Union

from ..errors import ValidationError
from ..models import Order, OrderStatus, Role, utcnow

TRANSITIONS: Dict[OrderStatus, Tuple[OrderStatus, ...]] = {
    OrderStatus.PENDING: (OrderStatus.CONFIRMED, OrderStatus.CANCELLED),
    OrderStatus.CONFIRMED: (OrderStatus.SHIPPED, OrderStatus.CANCELLED),
    OrderStatus.SHIPPED: (OrderStatus.DELIVERED,),
    OrderStatus.DELIVERED: (),
    OrderStatus.CANCELLED: (),
}


def parse_status(value: Union[OrderStatus, str]) -> OrderStatus:
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus((value or "").strip().lower())
    except ValueError:
        raise ValidationError(f"Status inválido: {value!r}") from None


def allowed_transitions(status: Union[OrderStatus, str]) -> Tuple[OrderStatus, ...]:
    return TRANSITIONS[parse_status(status)]


def is_terminal(status: Union[OrderStatus, str]) -> bool:
    return not allowed_transitions(status)


def transition(order: Order, requested_status: Union[OrderStatus, str], actor_role: Role) -> Order:
    """
    Aplica a transição no pedido (em memória, sem commit)

    Args:
        order: pedido a alterar
        requested_status: status desejado (enum ou valor em texto)
        actor_role: papel de quem pede a mudança

    Returns:
        O mesmo pedido, com status e updated_at atualizados
    """
    if actor_role is not Role.MERCHANT:
        raise ValidationError("Apenas o lojista pode alterar o status do pedido")

    target = parse_status(requested_status)
    current = parse_status(order.status)
    if target not in TRANSITIONS[current]:
        if is_terminal(current):
            raise ValidationError(f"Pedido já está {current.value}; nenhuma transição permitida")
        raise ValidationError(f"Transição inválida: {current.value} -> {target.value}")

    order.status = target.value
    order.updated_at = utcnow()
    return order
