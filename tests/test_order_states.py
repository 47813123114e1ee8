import pytest

from storefront_api.app.core.order_states import (
    TERMINAL_STATES,
    OrderStatus,
    can_transition,
    parse_status,
)


def test_forward_flow():
    assert can_transition(OrderStatus.PENDING, OrderStatus.PROCESSING)
    assert can_transition(OrderStatus.PROCESSING, OrderStatus.COMPLETED)
    assert not can_transition(OrderStatus.PENDING, OrderStatus.COMPLETED)


def test_resubmission_while_processing():
    assert can_transition(OrderStatus.PROCESSING, OrderStatus.PROCESSING)


def test_failed_reachable_from_non_terminal_states():
    for state in (OrderStatus.PENDING, OrderStatus.PROCESSING):
        assert can_transition(state, OrderStatus.FAILED)


def test_terminal_states_have_no_exits():
    for state in TERMINAL_STATES:
        assert not any(can_transition(state, target) for target in OrderStatus)


def test_parse_status():
    assert parse_status("completed") is OrderStatus.COMPLETED
    with pytest.raises(ValueError):
        parse_status("shipped")
    with pytest.raises(ValueError):
        parse_status("")
