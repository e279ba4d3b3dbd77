"""Synchronous ring network running Hirschberg-Sinclair election."""

from ringelection.network.ring_network import RingNetwork

__all__ = [
    "RingNetwork",
]
