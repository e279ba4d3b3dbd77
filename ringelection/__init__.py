"""Hirschberg-Sinclair leader election on a synchronous bidirectional ring.

Quick start::

    from ringelection import RingNetwork

    result = RingNetwork([5, 12, 3, 9, 7, 1, 10]).run()
    print(result.leader_id, result.rounds, result.total_messages_sent)
"""

import logging

from ringelection.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_file_logging,
    enable_json_logging,
    set_level,
    set_module_level,
)

# Silent unless the application configures logging.
logging.getLogger("ringelection").addHandler(logging.NullHandler())

from ringelection.core import Direction, Message, Node, NodeState
from ringelection.instrumentation import ElectionResult, RoundRecord, RoundTrace
from ringelection.network import RingNetwork

__all__ = [
    # Core
    "Direction",
    "Message",
    "Node",
    "NodeState",
    # Network
    "RingNetwork",
    # Instrumentation
    "ElectionResult",
    "RoundRecord",
    "RoundTrace",
    # Logging
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_file_logging",
    "enable_json_logging",
    "set_level",
    "set_module_level",
]
