"""
Order lifecycle states and the transitions allowed in the automated flow.

``pending -> processing -> completed``, with ``failed`` reachable from
any non-terminal state.  ``processing -> processing`` is permitted so a
customer can resubmit a corrected payment reference.  Operators bypass
this table through ``OrderService.set_status``.
"""

from enum import Enum
from typing import Dict, FrozenSet


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


TERMINAL_STATES: FrozenSet[OrderStatus] = frozenset({OrderStatus.COMPLETED, OrderStatus.FAILED})

TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PROCESSING, OrderStatus.FAILED}),
    OrderStatus.PROCESSING: frozenset(
        {OrderStatus.PROCESSING, OrderStatus.COMPLETED, OrderStatus.FAILED}
    ),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.FAILED: frozenset(),
}


def parse_status(value: str) -> OrderStatus:
    """Return the ``OrderStatus`` named by ``value``.

    Raises ``ValueError`` for anything that is not one of the four
    statuses.
    """
    try:
        return OrderStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValueError(f"Unknown order status '{value}'. Allowed: {allowed}") from None


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in TRANSITIONS[current]
