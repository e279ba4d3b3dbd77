"""Protocol primitives: directions, messages and per-node state."""

from ringelection.core.direction import Direction
from ringelection.core.message import Message
from ringelection.core.node import Node, NodeState

__all__ = [
    "Direction",
    "Message",
    "Node",
    "NodeState",
]
