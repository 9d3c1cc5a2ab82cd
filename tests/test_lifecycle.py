"""Order status transition table."""
import itertools

import pytest

from order_core.domain.enums import OrderStatus
from order_core.domain.errors import InvalidTransitionError
from order_core.domain.lifecycle import (
    ALLOWED_TRANSITIONS,
    TERMINAL_STATUSES,
    can_transition,
    validate_transition,
)

EXPECTED_EDGES = {
    (OrderStatus.PENDING, OrderStatus.CONFIRMED),
    (OrderStatus.PENDING, OrderStatus.PROCESSING),
    (OrderStatus.PENDING, OrderStatus.SHIPPED),
    (OrderStatus.PENDING, OrderStatus.CANCELLED),
    (OrderStatus.CONFIRMED, OrderStatus.PROCESSING),
    (OrderStatus.CONFIRMED, OrderStatus.SHIPPED),
    (OrderStatus.CONFIRMED, OrderStatus.CANCELLED),
    (OrderStatus.PROCESSING, OrderStatus.SHIPPED),
    (OrderStatus.PROCESSING, OrderStatus.CANCELLED),
    (OrderStatus.SHIPPED, OrderStatus.DELIVERED),
    (OrderStatus.SHIPPED, OrderStatus.CANCELLED),
    (OrderStatus.DELIVERED, OrderStatus.REFUNDED),
}


def test_every_status_has_an_entry():
    assert set(ALLOWED_TRANSITIONS) == set(OrderStatus)


def test_table_matches_expected_edges():
    edges = {(src, dst) for src, targets in ALLOWED_TRANSITIONS.items() for dst in targets}
    assert edges == EXPECTED_EDGES


def test_terminal_statuses():
    assert TERMINAL_STATUSES == {OrderStatus.CANCELLED, OrderStatus.REFUNDED}


def test_table_is_read_only():
    with pytest.raises(TypeError):
        ALLOWED_TRANSITIONS[OrderStatus.CANCELLED] = frozenset({OrderStatus.PENDING})
    with pytest.raises(AttributeError):
        ALLOWED_TRANSITIONS[OrderStatus.PENDING].add(OrderStatus.REFUNDED)


@pytest.mark.parametrize("status", list(OrderStatus))
def test_same_status_is_allowed(status):
    assert can_transition(status, status)
    validate_transition(status, status)


def test_every_pair_outside_the_table_is_rejected():
    for current, requested in itertools.product(OrderStatus, OrderStatus):
        if current == requested or (current, requested) in EXPECTED_EDGES:
            continue
        with pytest.raises(InvalidTransitionError) as exc:
            validate_transition(current, requested)
        assert exc.value.current == current
        assert exc.value.requested == requested


def test_error_names_both_states():
    with pytest.raises(InvalidTransitionError) as exc:
        validate_transition(OrderStatus.DELIVERED, OrderStatus.CANCELLED)

    assert "DELIVERED" in str(exc.value)
    assert "CANCELLED" in str(exc.value)
    assert exc.value.to_dict() == {
        "detail": str(exc.value),
        "code": "invalid_transition",
        "current": "DELIVERED",
        "requested": "CANCELLED",
    }
