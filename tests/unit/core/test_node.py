"""Unit tests for the Node state machine."""

from __future__ import annotations

import pytest

from ringelection.core.direction import Direction
from ringelection.core.node import Node, NodeState


def started_node(node_id: int = 5) -> Node:
    """A node that has already sent its phase-0 probes."""
    node = Node(node_id)
    node.mark_phase_started()
    return node


class TestNodeInitialState:
    """Tests for a freshly created node."""

    def test_initial_state(self):
        """A new node is an active candidate in phase 0 awaiting its first start."""
        node = Node(42)

        assert node.id == 42
        assert node.active is True
        assert node.phase == 0
        assert node.started_phase == -1
        assert node.state is NodeState.AWAITING_PHASE_START
        assert node.got_forward_reply is False
        assert node.got_backward_reply is False

    def test_needs_to_start_phase_zero(self):
        assert Node(1).needs_to_start_current_phase() is True


class TestPhaseStart:
    """Tests for marking a phase as started."""

    def test_mark_phase_started(self):
        node = started_node()

        assert node.started_phase == 0
        assert node.state is NodeState.AWAITING_BOTH_REPLIES
        assert node.needs_to_start_current_phase() is False

    def test_cannot_start_same_phase_twice(self):
        node = started_node()

        with pytest.raises(RuntimeError):
            node.mark_phase_started()

    def test_eliminated_node_cannot_start(self):
        node = Node(3)
        node.eliminate()

        assert node.needs_to_start_current_phase() is False
        with pytest.raises(RuntimeError):
            node.mark_phase_started()


class TestElimination:
    """Tests for permanent deactivation."""

    def test_eliminate(self):
        node = started_node()

        node.eliminate()

        assert node.active is False
        assert node.state is NodeState.ELIMINATED

    def test_eliminate_is_idempotent(self):
        node = Node(3)
        node.eliminate()
        node.eliminate()

        assert node.active is False

    def test_eliminated_node_ignores_replies(self):
        """A reply reaching an eliminated origin never advances its phase."""
        node = started_node()
        node.eliminate()

        assert node.record_reply(Direction.FORWARD, 0) is False
        assert node.record_reply(Direction.BACKWARD, 0) is False
        assert node.phase == 0
        assert node.active is False


class TestReplies:
    """Tests for reply aggregation and phase advance."""

    def test_first_reply_sets_one_flag(self):
        node = started_node()

        advanced = node.record_reply(Direction.FORWARD, 0)

        assert advanced is False
        assert node.got_forward_reply is True
        assert node.got_backward_reply is False
        assert node.state is NodeState.AWAITING_BACKWARD_REPLY

    def test_backward_first(self):
        node = started_node()

        node.record_reply(Direction.BACKWARD, 0)

        assert node.got_backward_reply is True
        assert node.state is NodeState.AWAITING_FORWARD_REPLY

    def test_both_replies_advance_phase(self):
        """Replies from both sides advance the phase and clear both flags."""
        node = started_node()

        node.record_reply(Direction.BACKWARD, 0)
        advanced = node.record_reply(Direction.FORWARD, 0)

        assert advanced is True
        assert node.phase == 1
        assert node.got_forward_reply is False
        assert node.got_backward_reply is False
        assert node.state is NodeState.AWAITING_PHASE_START
        assert node.needs_to_start_current_phase() is True

    def test_same_side_twice_does_not_advance(self):
        node = started_node()

        node.record_reply(Direction.FORWARD, 0)
        advanced = node.record_reply(Direction.FORWARD, 0)

        assert advanced is False
        assert node.phase == 0
        assert node.got_forward_reply is True

    def test_stale_reply_discarded(self):
        """A reply for an earlier phase never touches the current phase's flags."""
        node = started_node()
        node.record_reply(Direction.FORWARD, 0)
        node.record_reply(Direction.BACKWARD, 0)
        node.mark_phase_started()

        advanced = node.record_reply(Direction.FORWARD, 0)

        assert advanced is False
        assert node.phase == 1
        assert node.got_forward_reply is False
        assert node.state is NodeState.AWAITING_BOTH_REPLIES

    def test_reply_before_phase_start_is_illegal(self):
        node = Node(5)

        with pytest.raises(RuntimeError):
            node.record_reply(Direction.FORWARD, 0)

    def test_phase_is_monotonic_across_several_phases(self):
        node = Node(5)
        for expected in range(4):
            assert node.phase == expected
            node.mark_phase_started()
            node.record_reply(Direction.FORWARD, expected)
            node.record_reply(Direction.BACKWARD, expected)

        assert node.phase == 4
        assert node.started_phase == 3


class TestResetReplies:
    def test_reset_clears_flags(self):
        node = started_node()
        node.record_reply(Direction.FORWARD, 0)

        node.reset_replies_for_new_phase()

        assert node.got_forward_reply is False
        assert node.got_backward_reply is False

    def test_reset_does_not_reactivate(self):
        node = started_node()
        node.eliminate()

        node.reset_replies_for_new_phase()

        assert node.active is False


class TestNodeRepr:
    def test_repr(self):
        assert repr(Node(7)) == "Node(id=7, phase=0, state=AWAITING_PHASE_START)"
