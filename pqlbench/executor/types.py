from dataclasses import dataclass
from typing import Callable

from pqlbench.queries import Query


@dataclass(frozen=True)
class Success:
    query: Query
    # Measured wall-clock window around the call, unix epoch in milliseconds
    start_ms: int
    end_ms: int

    @property
    def elapsed_ms(self) -> int:
        return self.end_ms - self.start_ms


@dataclass(frozen=True)
class Failure:
    query: Query
    cause: str

    def __str__(self) -> str:
        return f"query={self.query.text!r}, error={self.cause}"


Outcome = Success | Failure

QueryExecutor = Callable[[Query], Outcome]


@dataclass(frozen=True)
class BatchResult:
    outcomes: tuple[Outcome, ...]
    start_s: float
    end_s: float

    @property
    def total_ms(self) -> int:
        return int((self.end_s - self.start_s) * 1000)

    @property
    def successes(self) -> list[Success]:
        return [o for o in self.outcomes if isinstance(o, Success)]

    @property
    def failures(self) -> list[Failure]:
        return [o for o in self.outcomes if isinstance(o, Failure)]


class DispatcherError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
