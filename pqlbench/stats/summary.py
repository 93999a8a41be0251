from __future__ import annotations

import statistics
from dataclasses import dataclass, field
from typing import Iterable

from pqlbench.executor import BatchResult, Failure, Outcome, Success


@dataclass(frozen=True)
class Stats:
    """
    Latency summary of one benchmark run, all durations in milliseconds.

    When no query succeeded the latency fields are None.
    """

    # Average query time
    average: float | None
    # Minimum query time (for a single query)
    fastest: int | None
    # Median query time of all successful queries
    median: float | None
    # Maximum query time (for a single query)
    slowest: int | None
    # Number of queries that completed successfully
    processed: int
    # Wall-clock time of the whole batch, not derived from per-query timings
    total: int
    # Causes of every failed query
    errors: tuple[str, ...] = field(default_factory=tuple)

    @property
    def failed(self) -> int:
        return len(self.errors)


def summarize(outcomes: Iterable[Outcome], total_ms: int) -> Stats:
    elapsed: list[int] = []
    errors: list[str] = []

    for outcome in outcomes:
        if isinstance(outcome, Success):
            elapsed.append(outcome.elapsed_ms)
        elif isinstance(outcome, Failure):
            errors.append(str(outcome))
        else:
            raise TypeError(f"unexpected outcome type: {type(outcome)}")

    if not elapsed:
        return Stats(
            average=None,
            fastest=None,
            median=None,
            slowest=None,
            processed=0,
            total=total_ms,
            errors=tuple(errors),
        )

    return Stats(
        average=statistics.fmean(elapsed),
        fastest=min(elapsed),
        median=float(statistics.median(elapsed)),
        slowest=max(elapsed),
        processed=len(elapsed),
        total=total_ms,
        errors=tuple(errors),
    )


def summarize_batch(batch: BatchResult) -> Stats:
    return summarize(batch.outcomes, batch.total_ms)
