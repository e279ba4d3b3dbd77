"""Unit tests for HS protocol messages."""

from __future__ import annotations

import dataclasses

import pytest

from ringelection.core.direction import Direction
from ringelection.core.message import Message


class TestMessageConstruction:
    """Tests for field validation and defaults."""

    def test_defaults_to_probe(self):
        """A message is an outbound probe unless marked as a reply."""
        msg = Message(origin_id=7, phase=0, ttl=1, direction=Direction.FORWARD)

        assert msg.is_reply is False

    def test_negative_ttl_rejected(self):
        with pytest.raises(ValueError, match="ttl"):
            Message(origin_id=7, phase=0, ttl=-1, direction=Direction.FORWARD)

    def test_negative_phase_rejected(self):
        with pytest.raises(ValueError, match="phase"):
            Message(origin_id=7, phase=-1, ttl=1, direction=Direction.FORWARD)

    def test_is_immutable(self):
        msg = Message(origin_id=7, phase=0, ttl=1, direction=Direction.FORWARD)

        with pytest.raises(dataclasses.FrozenInstanceError):
            msg.ttl = 0  # type: ignore[misc]


class TestDecTtl:
    """Tests for hop-budget decrement."""

    def test_returns_new_message_with_one_less_hop(self):
        msg = Message(origin_id=12, phase=2, ttl=4, direction=Direction.BACKWARD)

        forwarded = msg.dec_ttl()

        assert forwarded.ttl == 3
        assert forwarded.origin_id == 12
        assert forwarded.phase == 2
        assert forwarded.direction is Direction.BACKWARD
        assert forwarded.is_reply is False

    def test_source_message_unchanged(self):
        msg = Message(origin_id=12, phase=2, ttl=4, direction=Direction.BACKWARD)

        msg.dec_ttl()

        assert msg.ttl == 4

    def test_cannot_go_below_zero(self):
        msg = Message(origin_id=12, phase=0, ttl=0, direction=Direction.FORWARD)

        with pytest.raises(ValueError):
            msg.dec_ttl()


class TestToReply:
    """Tests for probe-to-reply conversion."""

    def test_reply_heads_back(self):
        """The reply keeps origin and phase and reverses direction."""
        probe = Message(origin_id=9, phase=1, ttl=0, direction=Direction.FORWARD)

        reply = probe.to_reply()

        assert reply.is_reply is True
        assert reply.origin_id == 9
        assert reply.phase == 1
        assert reply.ttl == 0
        assert reply.direction is Direction.BACKWARD


class TestArrivalSide:
    """Tests for the side a message enters the receiver from."""

    def test_forward_travel_arrives_from_backward_side(self):
        msg = Message(origin_id=1, phase=0, ttl=0, direction=Direction.FORWARD, is_reply=True)

        assert msg.arrival_side is Direction.BACKWARD

    def test_backward_travel_arrives_from_forward_side(self):
        msg = Message(origin_id=1, phase=0, ttl=0, direction=Direction.BACKWARD, is_reply=True)

        assert msg.arrival_side is Direction.FORWARD


class TestMessageStr:
    def test_probe_str(self):
        msg = Message(origin_id=12, phase=1, ttl=2, direction=Direction.FORWARD)

        assert str(msg) == "OUT(origin=12, phase=1, ttl=2, FORWARD)"

    def test_reply_str(self):
        msg = Message(origin_id=12, phase=1, ttl=0, direction=Direction.BACKWARD, is_reply=True)

        assert str(msg) == "REPLY(origin=12, phase=1, BACKWARD)"
