from .dispatcher import Dispatcher
from .types import (
    BatchResult,
    DispatcherError,
    Failure,
    Outcome,
    QueryExecutor,
    Success,
)

__all__ = [
    "Dispatcher",
    "BatchResult",
    "DispatcherError",
    "Failure",
    "Outcome",
    "QueryExecutor",
    "Success",
]
