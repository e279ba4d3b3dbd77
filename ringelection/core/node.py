"""Per-process state machine for Hirschberg-Sinclair election.

Each ring position holds one Node. A node starts as a candidate in phase 0.
In phase ``k`` it probes ``2**k`` hops in both directions and waits for a
reply from each side; once both are in it advances to phase ``k + 1``. A
node that sees a probe from a larger identifier is eliminated for good.

State transitions::

    AWAITING_PHASE_START --mark_phase_started--> AWAITING_BOTH_REPLIES
    AWAITING_BOTH_REPLIES --reply(FORWARD side)--> AWAITING_BACKWARD_REPLY
    AWAITING_BOTH_REPLIES --reply(BACKWARD side)--> AWAITING_FORWARD_REPLY
    AWAITING_*_REPLY --other side--> AWAITING_PHASE_START (phase + 1)
    any --eliminate--> ELIMINATED
"""

from __future__ import annotations

import logging
from enum import Enum, auto

from ringelection.core.direction import Direction

logger = logging.getLogger(__name__)


class NodeState(Enum):
    """Lifecycle states of a ring node."""

    AWAITING_PHASE_START = auto()
    AWAITING_BOTH_REPLIES = auto()
    AWAITING_FORWARD_REPLY = auto()
    AWAITING_BACKWARD_REPLY = auto()
    ELIMINATED = auto()


class Node:
    """One process on the ring.

    Args:
        node_id: Globally unique identifier supplied by the caller.
    """

    def __init__(self, node_id: int) -> None:
        self.id = node_id
        self._state = NodeState.AWAITING_PHASE_START
        self._phase = 0
        self._started_phase = -1

    @property
    def state(self) -> NodeState:
        return self._state

    @property
    def active(self) -> bool:
        """Whether the node is still a candidate."""
        return self._state is not NodeState.ELIMINATED

    @property
    def phase(self) -> int:
        return self._phase

    @property
    def started_phase(self) -> int:
        """Last phase this node emitted probes for (-1 before the first)."""
        return self._started_phase

    @property
    def got_forward_reply(self) -> bool:
        return self._state is NodeState.AWAITING_BACKWARD_REPLY

    @property
    def got_backward_reply(self) -> bool:
        return self._state is NodeState.AWAITING_FORWARD_REPLY

    def needs_to_start_current_phase(self) -> bool:
        """True if the node is active and has not probed for its current phase."""
        return self.active and self._started_phase != self._phase

    def mark_phase_started(self) -> None:
        """Record that probes for the current phase have been sent."""
        if not self.needs_to_start_current_phase():
            raise RuntimeError(
                f"Node {self.id} cannot start phase {self._phase} from state {self._state.name}"
            )
        self._started_phase = self._phase
        self._state = NodeState.AWAITING_BOTH_REPLIES

    def eliminate(self) -> None:
        """Permanently withdraw this node from candidacy."""
        if self._state is not NodeState.ELIMINATED:
            logger.debug("Node %d eliminated in phase %d", self.id, self._phase)
        self._state = NodeState.ELIMINATED

    def record_reply(self, side: Direction, phase: int) -> bool:
        """Register a reply to one of this node's own probes.

        Args:
            side: The side of this node the reply arrived from.
            phase: Phase the replied-to probe was sent in.

        Returns:
            True if this reply completed the current phase and the node
            advanced to the next one.
        """
        if self._state is NodeState.ELIMINATED:
            return False

        if phase != self._phase:
            logger.debug(
                "Node %d discarding stale reply for phase %d (current phase %d)",
                self.id, phase, self._phase,
            )
            return False

        if self._state is NodeState.AWAITING_PHASE_START:
            raise RuntimeError(
                f"Node {self.id} received a phase {phase} reply before starting that phase"
            )

        if self._state is NodeState.AWAITING_BOTH_REPLIES:
            if side is Direction.FORWARD:
                self._state = NodeState.AWAITING_BACKWARD_REPLY
            else:
                self._state = NodeState.AWAITING_FORWARD_REPLY
            return False

        waiting_for = (
            Direction.FORWARD
            if self._state is NodeState.AWAITING_FORWARD_REPLY
            else Direction.BACKWARD
        )
        if side is not waiting_for:
            # Repeat from a side already heard from.
            return False

        self._phase += 1
        self.reset_replies_for_new_phase()
        logger.debug("Node %d advanced to phase %d", self.id, self._phase)
        return True

    def reset_replies_for_new_phase(self) -> None:
        """Clear both reply flags at a phase transition."""
        if self._state is not NodeState.ELIMINATED:
            self._state = NodeState.AWAITING_PHASE_START

    def __repr__(self) -> str:
        return f"Node(id={self.id}, phase={self._phase}, state={self._state.name})"
