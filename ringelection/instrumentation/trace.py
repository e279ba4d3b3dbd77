"""Per-round trace of an election run.

RoundTrace collects one RoundRecord per synchronous round so a run can be
inspected after the fact: how many messages were in flight, how many
candidates survived, and how far the strongest candidate's phase got.
Round 0 is the initial phase start, before any delivery.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields

import pandas as pd


@dataclass(frozen=True)
class RoundRecord:
    """Snapshot of a single round.

    Attributes:
        round: Round number (0 for the initial phase starts).
        messages_delivered: Messages in the inbox when the round began.
        messages_sent: Send-primitive calls made during the round,
            including deferred phase starts.
        active_nodes: Candidates still active after the round.
        max_phase: Highest phase among active candidates after the round.
        phases_started: Candidates that started a new phase this round.
    """
    round: int
    messages_delivered: int
    messages_sent: int
    active_nodes: int
    max_phase: int
    phases_started: int


class RoundTrace:
    """Container for RoundRecords in round order."""

    def __init__(self) -> None:
        self._records: list[RoundRecord] = []

    def record(
        self,
        round: int,
        messages_delivered: int,
        messages_sent: int,
        active_nodes: int,
        max_phase: int,
        phases_started: int,
    ) -> RoundRecord:
        """Append a record for the given round and return it."""
        if self._records and round <= self._records[-1].round:
            raise ValueError(
                f"Rounds must be recorded in increasing order: got {round} "
                f"after {self._records[-1].round}"
            )
        rec = RoundRecord(
            round=round,
            messages_delivered=messages_delivered,
            messages_sent=messages_sent,
            active_nodes=active_nodes,
            max_phase=max_phase,
            phases_started=phases_started,
        )
        self._records.append(rec)
        return rec

    @property
    def records(self) -> list[RoundRecord]:
        return list(self._records)

    def total_messages_sent(self) -> int:
        return sum(r.messages_sent for r in self._records)

    def active_counts(self) -> list[int]:
        """Active candidate count after each recorded round."""
        return [r.active_nodes for r in self._records]

    def to_dataframe(self) -> pd.DataFrame:
        """Export the trace as a DataFrame with one row per round."""
        columns = [f.name for f in fields(RoundRecord)]
        return pd.DataFrame([asdict(r) for r in self._records], columns=columns)

    def __len__(self) -> int:
        return len(self._records)

    def __bool__(self) -> bool:
        return len(self._records) > 0
