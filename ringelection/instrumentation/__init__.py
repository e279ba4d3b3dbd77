"""Run results and per-round tracing."""

from ringelection.instrumentation.summary import ElectionResult
from ringelection.instrumentation.trace import RoundRecord, RoundTrace

__all__ = [
    "ElectionResult",
    "RoundRecord",
    "RoundTrace",
]
