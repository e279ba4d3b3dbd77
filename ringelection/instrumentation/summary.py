"""Outcome of a completed election run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ElectionResult:
    """Exit values of a Hirschberg-Sinclair run.

    Attributes:
        leader_id: Identifier of the elected leader.
        rounds: Synchronous rounds executed until the leader was found.
        total_messages_sent: Every hop of every message, summed.
        ring_size: Number of nodes on the ring.
    """
    leader_id: int
    rounds: int
    total_messages_sent: int
    ring_size: int

    def __str__(self) -> str:
        lines = [
            "Election Summary",
            f"  Ring size: {self.ring_size}",
            f"  Leader: {self.leader_id}",
            f"  Rounds: {self.rounds}",
            f"  Messages: {self.total_messages_sent}",
        ]
        return "\n".join(lines)

    def to_lines(self) -> list[str]:
        """The ``key=value`` lines printed by the command-line driver."""
        return [
            f"leaderId={self.leader_id}",
            f"rounds={self.rounds}",
            f"messages={self.total_messages_sent}",
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "leader_id": self.leader_id,
            "rounds": self.rounds,
            "total_messages_sent": self.total_messages_sent,
            "ring_size": self.ring_size,
        }
