"""Hirschberg-Sinclair protocol messages.

A candidate announces itself with an outbound probe (``is_reply=False``)
carrying a hop budget of ``2**phase``. When the budget is exhausted at a
weaker node, the probe turns into a reply that travels back to the
candidate. Messages are immutable; every hop produces a new value.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from ringelection.core.direction import Direction


@dataclass(frozen=True)
class Message:
    """A probe or reply travelling along the ring.

    Attributes:
        origin_id: Identifier of the candidate that launched the wave.
        phase: The candidate's phase when the probe was sent.
        ttl: Remaining hop budget. Only meaningful for probes; replies
            always carry 0.
        direction: Direction of travel.
        is_reply: False for an outbound probe, True for a returning reply.
    """

    origin_id: int
    phase: int
    ttl: int
    direction: Direction
    is_reply: bool = False

    def __post_init__(self) -> None:
        if self.ttl < 0:
            raise ValueError(f"ttl must be >= 0, got {self.ttl}")
        if self.phase < 0:
            raise ValueError(f"phase must be >= 0, got {self.phase}")

    @property
    def arrival_side(self) -> Direction:
        """Side of the receiving node this message enters from.

        A message travelling FORWARD comes in over the receiver's BACKWARD
        link, and vice versa.
        """
        return self.direction.opposite()

    def dec_ttl(self) -> Message:
        """Return a copy with the hop budget reduced by one."""
        if self.ttl == 0:
            raise ValueError("Cannot decrement ttl below zero; convert the probe to a reply instead")
        return replace(self, ttl=self.ttl - 1)

    def to_reply(self) -> Message:
        """Turn an exhausted probe around, heading back toward its origin."""
        return Message(
            origin_id=self.origin_id,
            phase=self.phase,
            ttl=0,
            direction=self.direction.opposite(),
            is_reply=True,
        )

    def __str__(self) -> str:
        if self.is_reply:
            return f"REPLY(origin={self.origin_id}, phase={self.phase}, {self.direction.name})"
        return f"OUT(origin={self.origin_id}, phase={self.phase}, ttl={self.ttl}, {self.direction.name})"
