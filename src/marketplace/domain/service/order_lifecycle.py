"""Domain service: Order Lifecycle.

The single authoritative rule set for order status changes. Every rule
is a table lookup keyed on ``(current status, actor role)``; nothing here
touches storage or the network, so the whole machine is testable on its
own.

    PENDING -> ACCEPTED -> PREPARING -> READY -> DISPATCHED -> DELIVERED
       \\          \\           \\
        +----------+-----------+--> CANCELLED

DELIVERED and CANCELLED are absorbing.
"""

from __future__ import annotations

from marketplace.domain.exceptions import InvalidTransitionError
from marketplace.domain.model.status import ActorRole, OrderStatus

# Forward moves: each role has at most one successor per state.
ADVANCE_TABLE: dict[ActorRole, dict[OrderStatus, OrderStatus]] = {
    ActorRole.CUSTOMER: {},
    ActorRole.VENDOR: {
        OrderStatus.PENDING: OrderStatus.ACCEPTED,
        OrderStatus.ACCEPTED: OrderStatus.PREPARING,
        OrderStatus.PREPARING: OrderStatus.READY,
    },
    ActorRole.DRIVER: {
        OrderStatus.READY: OrderStatus.DISPATCHED,
        OrderStatus.DISPATCHED: OrderStatus.DELIVERED,
    },
}

# Cancellation window closes once preparation is complete.
CANCEL_TABLE: dict[ActorRole, frozenset[OrderStatus]] = {
    ActorRole.CUSTOMER: frozenset(
        {OrderStatus.PENDING, OrderStatus.ACCEPTED, OrderStatus.PREPARING}
    ),
    ActorRole.VENDOR: frozenset(
        {OrderStatus.PENDING, OrderStatus.ACCEPTED, OrderStatus.PREPARING}
    ),
    ActorRole.DRIVER: frozenset(),
}


def next_status(current: OrderStatus, role: ActorRole) -> OrderStatus | None:
    """Return the single forward successor for ``role``, or None."""
    return ADVANCE_TABLE[role].get(current)


def can_cancel(current: OrderStatus, role: ActorRole) -> bool:
    return current in CANCEL_TABLE[role]


def allowed_targets(current: OrderStatus, role: ActorRole) -> list[OrderStatus]:
    """Every status ``role`` may move an order to from ``current``."""
    targets: list[OrderStatus] = []
    successor = next_status(current, role)
    if successor is not None:
        targets.append(successor)
    if can_cancel(current, role):
        targets.append(OrderStatus.CANCELLED)
    return targets


def resolve_transition(
    current: OrderStatus, role: ActorRole, target: OrderStatus
) -> OrderStatus:
    """Return ``target`` if ``role`` may move ``current`` there.

    Raises InvalidTransitionError otherwise, including every attempt to
    leave a terminal status.
    """
    if current.is_terminal:
        raise InvalidTransitionError(
            f"Order is {current.value}; no further status changes are allowed"
        )
    if target not in allowed_targets(current, role):
        raise InvalidTransitionError(
            f"A {role.value} cannot move an order from {current.value} "
            f"to {target.value}"
        )
    return target


def resolve_advance(current: OrderStatus, role: ActorRole) -> OrderStatus:
    """Return the next status for ``role`` or raise InvalidTransitionError."""
    if current.is_terminal:
        raise InvalidTransitionError(
            f"Order is {current.value}; no further status changes are allowed"
        )
    successor = next_status(current, role)
    if successor is None:
        raise InvalidTransitionError(
            f"A {role.value} has no next step for an order in {current.value}"
        )
    return successor


def is_legal(current: OrderStatus, target: OrderStatus) -> bool:
    """True if any actor may move ``current`` to ``target``.

    Used where the writer does not know who asked (the backend itself).
    """
    return any(target in allowed_targets(current, role) for role in ActorRole)


def sources_of(target: OrderStatus) -> frozenset[OrderStatus]:
    """Every status from which some actor may move an order to ``target``."""
    return frozenset(s for s in OrderStatus if is_legal(s, target))


def only_source_of(target: OrderStatus) -> OrderStatus | None:
    """The single status that leads to ``target``, or None if there are several.

    When an order already holds ``target`` this tells whether the source it
    came from is known.
    """
    sources = sources_of(target)
    if len(sources) == 1:
        return next(iter(sources))
    return None
