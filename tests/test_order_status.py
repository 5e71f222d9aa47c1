"""
Testes da máquina de estados do pedido.
"""
from datetime import datetime

import pytest

from dakarmarket.errors import ValidationError
from dakarmarket.models import Order, OrderStatus, Role
from dakarmarket.services.order_status import (
    TRANSITIONS,
    allowed_transitions,
    is_terminal,
    parse_status,
    transition,
)

OLD = datetime(2024, 1, 1, 12, 0, 0)

VALID = {
    (OrderStatus.PENDING, OrderStatus.CONFIRMED),
    (OrderStatus.CONFIRMED, OrderStatus.SHIPPED),
    (OrderStatus.SHIPPED, OrderStatus.DELIVERED),
    (OrderStatus.PENDING, OrderStatus.CANCELLED),
    (OrderStatus.CONFIRMED, OrderStatus.CANCELLED),
}


def _order(status: OrderStatus) -> Order:
    return Order(id="o-1", status=status.value, updated_at=OLD, quantity=1)


class TestTransition:

    @pytest.mark.parametrize("current,target", sorted(VALID, key=lambda t: (t[0].value, t[1].value)))
    def test_valid_transitions_apply(self, current, target):
        order = _order(current)
        result = transition(order, target, Role.MERCHANT)
        assert result is order
        assert order.status == target.value
        assert order.updated_at > OLD

    @pytest.mark.parametrize(
        "current,target",
        [(c, t) for c in OrderStatus for t in OrderStatus if (c, t) not in VALID],
    )
    def test_other_pairs_rejected_and_order_untouched(self, current, target):
        order = _order(current)
        with pytest.raises(ValidationError):
            transition(order, target, Role.MERCHANT)
        assert order.status == current.value
        assert order.updated_at == OLD

    def test_client_cannot_transition(self):
        order = _order(OrderStatus.PENDING)
        with pytest.raises(ValidationError):
            transition(order, OrderStatus.CONFIRMED, Role.CLIENT)
        assert order.status == "pending"

    def test_accepts_string_status(self):
        order = _order(OrderStatus.PENDING)
        transition(order, " Confirmed ", Role.MERCHANT)
        assert order.status == "confirmed"

    def test_unknown_status_rejected(self):
        order = _order(OrderStatus.PENDING)
        with pytest.raises(ValidationError):
            transition(order, "refunded", Role.MERCHANT)
        assert order.status == "pending"


class TestHelpers:

    def test_terminal_states(self):
        assert is_terminal(OrderStatus.DELIVERED)
        assert is_terminal("cancelled")
        assert not is_terminal(OrderStatus.SHIPPED)

    def test_allowed_transitions(self):
        assert allowed_transitions("pending") == (OrderStatus.CONFIRMED, OrderStatus.CANCELLED)
        assert allowed_transitions(OrderStatus.SHIPPED) == (OrderStatus.DELIVERED,)

    def test_table_covers_every_status(self):
        assert set(TRANSITIONS) == set(OrderStatus)

    def test_parse_status_rejects_empty(self):
        with pytest.raises(ValidationError):
            parse_status("")
