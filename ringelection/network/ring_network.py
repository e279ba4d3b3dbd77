"""Synchronous round engine for Hirschberg-Sinclair leader election.

The ring is simulated in lock-step rounds. Messages sent during round ``r``
land in the outbox and are delivered as the inbox of round ``r + 1``.
Each round has two steps that must stay separate:

1. Deliver every inbox message, in ring-position order and then arrival
   order, stopping the moment a leader is declared.
2. Let every candidate that completed a phase during step 1 start its
   next phase. Those probes go to the outbox, so no candidate gets ahead
   of the others.

The run ends when a candidate's own probe travels the whole ring and comes
back to it. That candidate holds the maximum identifier.

Example::

    from ringelection import RingNetwork

    ring = RingNetwork([5, 12, 3, 9, 7, 1, 10])
    result = ring.run()
    result.leader_id            # 12
    result.rounds               # 27
    result.total_messages_sent  # 75
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Sequence

from ringelection.core.direction import Direction
from ringelection.core.message import Message
from ringelection.core.node import Node
from ringelection.instrumentation.summary import ElectionResult
from ringelection.instrumentation.trace import RoundTrace

logger = logging.getLogger(__name__)


def _validate_ids(ids: list[int]) -> None:
    for node_id in ids:
        if isinstance(node_id, bool) or not isinstance(node_id, int):
            raise ValueError(f"Node IDs must be integers, got {node_id!r}")
    if len(ids) < 2:
        raise ValueError(f"Ring must contain at least 2 nodes, got {len(ids)}")
    duplicates = sorted(node_id for node_id, count in Counter(ids).items() if count > 1)
    if duplicates:
        raise ValueError(f"All node IDs must be unique, duplicates: {duplicates}")


class RingNetwork:
    """Bidirectional ring of nodes running Hirschberg-Sinclair election.

    Args:
        ids: Node identifiers in ring order. Position ``i`` neighbours
            positions ``i - 1`` and ``i + 1`` modulo the ring size.
        record_trace: Keep a per-round RoundTrace of the run.

    Raises:
        ValueError: If fewer than 2 identifiers are given, an identifier
            is not an integer, or identifiers repeat.
    """

    def __init__(self, ids: Sequence[int], record_trace: bool = True) -> None:
        ids = list(ids)
        _validate_ids(ids)

        self._nodes: list[Node] = [Node(node_id) for node_id in ids]
        self._n = len(self._nodes)

        self._inbox: list[list[Message]] = self._new_empty_boxes()
        self._outbox: list[list[Message]] = self._new_empty_boxes()

        self._total_messages_sent: int = 0
        self._rounds: int = 0
        self._leader_id: int | None = None
        self._started: bool = False
        self._trace: RoundTrace | None = RoundTrace() if record_trace else None

    # === Topology ===

    @property
    def size(self) -> int:
        return self._n

    @property
    def nodes(self) -> tuple[Node, ...]:
        return tuple(self._nodes)

    def neighbor(self, position: int, direction: Direction) -> int:
        """Ring position one hop from ``position`` in ``direction``."""
        return (position + direction.offset) % self._n

    def _new_empty_boxes(self) -> list[list[Message]]:
        return [[] for _ in range(len(self._nodes))]

    # === Messaging ===

    @property
    def messages_in_flight(self) -> int:
        """Messages waiting in the inbox for delivery."""
        return sum(len(box) for box in self._inbox)

    def send(self, position: int, direction: Direction, message: Message) -> None:
        """Queue ``message`` for the neighbour of ``position`` in ``direction``.

        Delivery happens next round. Every call counts as one message.
        """
        self._outbox[self.neighbor(position, direction)].append(message)
        self._total_messages_sent += 1

    def _swap_buffers(self) -> None:
        self._inbox = self._outbox
        self._outbox = self._new_empty_boxes()

    # === Protocol ===

    def start_phase(self, position: int) -> bool:
        """Send probes for the current phase of the node at ``position``.

        The hop budget is ``2**phase`` in each direction. Does nothing for
        an eliminated node or one that already probed for this phase.

        Returns:
            True if probes were sent.
        """
        node = self._nodes[position]
        if not node.needs_to_start_current_phase():
            return False

        hop_limit = 1 << node.phase
        for direction in (Direction.BACKWARD, Direction.FORWARD):
            self.send(position, direction, Message(node.id, node.phase, hop_limit, direction))
        node.mark_phase_started()
        return True

    def handle_message(self, position: int, message: Message) -> int | None:
        """Apply one delivered message to the node at ``position``.

        Returns:
            The leader's identifier if this message elected one, else None.
        """
        node = self._nodes[position]
        logger.debug("Round %d: node %d received %s", self._rounds, node.id, message)
        if message.is_reply:
            self._handle_reply(position, node, message)
            return None
        return self._handle_probe(position, node, message)

    def _handle_probe(self, position: int, node: Node, message: Message) -> int | None:
        if message.origin_id == node.id:
            # Own probe went all the way around: nothing larger exists.
            logger.info("Node %d elected leader in round %d", node.id, self._rounds)
            return node.id

        if message.origin_id < node.id:
            return None

        node.eliminate()
        if message.ttl == 0:
            reply = message.to_reply()
            self.send(position, reply.direction, reply)
        else:
            self.send(position, message.direction, message.dec_ttl())
        return None

    def _handle_reply(self, position: int, node: Node, message: Message) -> None:
        if message.origin_id != node.id:
            self.send(position, message.direction, message)
            return
        node.record_reply(message.arrival_side, message.phase)

    def _start_pending_phases(self) -> int:
        started = 0
        for position, node in enumerate(self._nodes):
            if node.needs_to_start_current_phase() and self.start_phase(position):
                started += 1
        return started

    def _deliver_inbox(self) -> int | None:
        for position, box in enumerate(self._inbox):
            for message in box:
                leader_id = self.handle_message(position, message)
                if leader_id is not None:
                    return leader_id
        return None

    # === Round loop ===

    def run(self) -> ElectionResult:
        """Run rounds until a leader is elected.

        Returns:
            The ElectionResult. Calling ``run()`` again after completion
            returns the same result.

        Raises:
            RuntimeError: If a round ends with no messages in transit and
                no leader, or if a previous run of this ring failed.
        """
        if self._leader_id is not None:
            return self.result
        if self._started:
            raise RuntimeError("RingNetwork cannot resume a run that already failed")
        self._started = True

        logger.info("Starting election on a ring of %d nodes", self._n)

        phases_started = self._start_pending_phases()
        self._record_round(0, 0, self._total_messages_sent, phases_started)
        self._swap_buffers()
        self._rounds = 0

        while True:
            self._rounds += 1
            delivered = self.messages_in_flight
            sent_before = self._total_messages_sent

            leader_id = self._deliver_inbox()
            if leader_id is not None:
                self._leader_id = leader_id
                self._record_round(
                    self._rounds, delivered, self._total_messages_sent - sent_before, 0
                )
                break

            phases_started = self._start_pending_phases()
            self._record_round(
                self._rounds, delivered, self._total_messages_sent - sent_before, phases_started
            )

            self._swap_buffers()
            self._safety_check()

        logger.info(
            "Election finished: leader=%d rounds=%d messages=%d",
            self._leader_id, self._rounds, self._total_messages_sent,
        )
        return self.result

    def _safety_check(self) -> None:
        if self.messages_in_flight == 0:
            raise RuntimeError(
                f"No messages in transit after round {self._rounds} but no leader elected. "
                "Check correctness/IDs."
            )

    def _record_round(
        self, round: int, delivered: int, sent: int, phases_started: int
    ) -> None:
        if self._trace is None:
            return
        active = [node for node in self._nodes if node.active]
        self._trace.record(
            round=round,
            messages_delivered=delivered,
            messages_sent=sent,
            active_nodes=len(active),
            max_phase=max((node.phase for node in active), default=0),
            phases_started=phases_started,
        )

    # === Results ===

    @property
    def is_complete(self) -> bool:
        return self._leader_id is not None

    @property
    def trace(self) -> RoundTrace | None:
        return self._trace

    def _require_complete(self) -> None:
        if self._leader_id is None:
            raise RuntimeError("Election not finished yet; call run() first")

    @property
    def leader_id(self) -> int:
        self._require_complete()
        return self._leader_id

    @property
    def rounds(self) -> int:
        self._require_complete()
        return self._rounds

    @property
    def total_messages_sent(self) -> int:
        self._require_complete()
        return self._total_messages_sent

    @property
    def result(self) -> ElectionResult:
        self._require_complete()
        return ElectionResult(
            leader_id=self._leader_id,
            rounds=self._rounds,
            total_messages_sent=self._total_messages_sent,
            ring_size=self._n,
        )

    def __repr__(self) -> str:
        return (
            f"RingNetwork(size={self._n}, "
            f"leader={self._leader_id}, "
            f"rounds={self._rounds})"
        )
