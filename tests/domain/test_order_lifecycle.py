"""Unit tests for the order lifecycle rules.

The table is small enough to check exhaustively: every (status, role,
target) triple outside the allowed set must be rejected.
"""

import pytest

from marketplace.domain.exceptions import InvalidTransitionError
from marketplace.domain.model.status import ActorRole, OrderStatus
from marketplace.domain.service.order_lifecycle import (
    allowed_targets,
    can_cancel,
    is_legal,
    next_status,
    only_source_of,
    resolve_advance,
    resolve_transition,
    sources_of,
)

S = OrderStatus
R = ActorRole

ALLOWED = {
    (S.PENDING, R.VENDOR, S.ACCEPTED),
    (S.ACCEPTED, R.VENDOR, S.PREPARING),
    (S.PREPARING, R.VENDOR, S.READY),
    (S.READY, R.DRIVER, S.DISPATCHED),
    (S.DISPATCHED, R.DRIVER, S.DELIVERED),
    (S.PENDING, R.CUSTOMER, S.CANCELLED),
    (S.ACCEPTED, R.CUSTOMER, S.CANCELLED),
    (S.PREPARING, R.CUSTOMER, S.CANCELLED),
    (S.PENDING, R.VENDOR, S.CANCELLED),
    (S.ACCEPTED, R.VENDOR, S.CANCELLED),
    (S.PREPARING, R.VENDOR, S.CANCELLED),
}

ALL_TRIPLES = [(s, r, t) for s in S for r in R for t in S]


# ── next_status ──────────────────────────────────────────────────────────────


class TestNextStatus:

    def test_vendor_chain(self):
        assert next_status(S.PENDING, R.VENDOR) == S.ACCEPTED
        assert next_status(S.ACCEPTED, R.VENDOR) == S.PREPARING
        assert next_status(S.PREPARING, R.VENDOR) == S.READY
        assert next_status(S.READY, R.VENDOR) is None

    def test_driver_chain(self):
        assert next_status(S.READY, R.DRIVER) == S.DISPATCHED
        assert next_status(S.DISPATCHED, R.DRIVER) == S.DELIVERED
        assert next_status(S.PENDING, R.DRIVER) is None

    def test_customer_never_advances(self):
        assert all(next_status(s, R.CUSTOMER) is None for s in S)

    @pytest.mark.parametrize("status", [S.DELIVERED, S.CANCELLED])
    def test_terminal_has_no_successor(self, status):
        assert all(next_status(status, r) is None for r in R)


# ── can_cancel ───────────────────────────────────────────────────────────────


class TestCanCancel:

    @pytest.mark.parametrize("status", [S.PENDING, S.ACCEPTED, S.PREPARING])
    def test_open_window(self, status):
        assert can_cancel(status, R.CUSTOMER)
        assert can_cancel(status, R.VENDOR)

    @pytest.mark.parametrize(
        "status", [S.READY, S.DISPATCHED, S.DELIVERED, S.CANCELLED]
    )
    def test_closed_window(self, status):
        assert not can_cancel(status, R.CUSTOMER)
        assert not can_cancel(status, R.VENDOR)

    def test_driver_never_cancels(self):
        assert not any(can_cancel(s, R.DRIVER) for s in S)


# ── resolve_transition ───────────────────────────────────────────────────────


class TestResolveTransition:

    @pytest.mark.parametrize("current,role,target", sorted(ALLOWED, key=str))
    def test_allowed(self, current, role, target):
        assert resolve_transition(current, role, target) == target

    @pytest.mark.parametrize(
        "current,role,target",
        [t for t in ALL_TRIPLES if t not in ALLOWED],
    )
    def test_everything_else_rejected(self, current, role, target):
        with pytest.raises(InvalidTransitionError):
            resolve_transition(current, role, target)

    @pytest.mark.parametrize("status", [S.DELIVERED, S.CANCELLED])
    def test_terminal_message(self, status):
        with pytest.raises(InvalidTransitionError, match="no further status changes"):
            resolve_transition(status, R.VENDOR, S.PENDING)

    def test_customer_cancels_before_ready(self):
        assert resolve_transition(S.ACCEPTED, R.CUSTOMER, S.CANCELLED) == S.CANCELLED

    def test_vendor_cannot_cancel_once_ready(self):
        with pytest.raises(InvalidTransitionError):
            resolve_transition(S.READY, R.VENDOR, S.CANCELLED)

    def test_vendor_cannot_skip_steps(self):
        with pytest.raises(InvalidTransitionError):
            resolve_transition(S.PENDING, R.VENDOR, S.READY)

    def test_allowed_targets_match_table(self):
        for current in S:
            for role in R:
                expected = {t for (s, r, t) in ALLOWED if s == current and r == role}
                assert set(allowed_targets(current, role)) == expected


# ── resolve_advance ──────────────────────────────────────────────────────────


class TestResolveAdvance:

    def test_vendor_advances(self):
        assert resolve_advance(S.PENDING, R.VENDOR) == S.ACCEPTED

    def test_driver_advances(self):
        assert resolve_advance(S.DISPATCHED, R.DRIVER) == S.DELIVERED

    def test_vendor_cannot_dispatch(self):
        with pytest.raises(InvalidTransitionError, match="no next step"):
            resolve_advance(S.READY, R.VENDOR)

    def test_customer_cannot_advance(self):
        with pytest.raises(InvalidTransitionError):
            resolve_advance(S.PENDING, R.CUSTOMER)

    def test_vendor_walks_pending_to_ready_then_stops(self):
        status = S.PENDING
        for _ in range(3):
            status = resolve_advance(status, R.VENDOR)
        assert status == S.READY
        with pytest.raises(InvalidTransitionError):
            resolve_advance(status, R.VENDOR)

    def test_customer_cannot_cancel_ready(self):
        with pytest.raises(InvalidTransitionError):
            resolve_transition(S.READY, R.CUSTOMER, S.CANCELLED)

    def test_delivered_is_absorbing(self):
        with pytest.raises(InvalidTransitionError, match="no further status changes"):
            resolve_advance(S.DELIVERED, R.DRIVER)


# ── is_legal ─────────────────────────────────────────────────────────────────


class TestIsLegal:

    def test_union_over_roles(self):
        legal = {(s, t) for (s, _, t) in ALLOWED}
        for current in S:
            for target in S:
                assert is_legal(current, target) == ((current, target) in legal)


# ── Status parsing ───────────────────────────────────────────────────────────


class TestStatusParsing:

    def test_case_insensitive(self):
        assert OrderStatus("ready") == S.READY

    def test_processing_alias(self):
        assert OrderStatus("PROCESSING") == S.PREPARING

    def test_unknown_rejected(self):
        with pytest.raises(ValueError):
            OrderStatus("LOST")

    def test_role_case_insensitive(self):
        assert ActorRole("Driver") == R.DRIVER

    def test_terminal_flags(self):
        assert {s for s in S if s.is_terminal} == {S.DELIVERED, S.CANCELLED}


# ── Predecessors ─────────────────────────────────────────────────────────────


class TestSources:

    def test_forward_steps_have_one_source(self):
        assert only_source_of(S.ACCEPTED) == S.PENDING
        assert only_source_of(S.DELIVERED) == S.DISPATCHED

    def test_cancelled_has_several_sources(self):
        assert sources_of(S.CANCELLED) == {S.PENDING, S.ACCEPTED, S.PREPARING}
        assert only_source_of(S.CANCELLED) is None

    def test_initial_status_has_none(self):
        assert sources_of(S.PENDING) == frozenset()
        assert only_source_of(S.PENDING) is None
