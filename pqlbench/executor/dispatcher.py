import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed

from pqlbench.queries import Query

from .types import BatchResult, DispatcherError, Failure, Outcome, QueryExecutor

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Fans queries out to at most `concurrency` simultaneous executor calls.

    Worker threads only run the executor and hand the outcome back through
    their future; the calling thread is the single collector of outcomes.

    Each `run` gets its own thread pool, while the permit pool belongs to the
    dispatcher: batches run concurrently on one dispatcher share the same
    `concurrency` permits.
    """

    def __init__(self, execute: QueryExecutor, concurrency: int = 1):
        if isinstance(concurrency, bool) or not isinstance(concurrency, int):
            raise DispatcherError(
                f"concurrency should be an integer, got {type(concurrency)}"
            )
        if concurrency < 1:
            raise DispatcherError(f"concurrency must be >= 1, got {concurrency}")

        self.execute = execute
        self.concurrency = concurrency
        self._permits = threading.BoundedSemaphore(concurrency)

    def run(self, queries: list[Query]) -> BatchResult:
        outcomes: list[Outcome] = []

        logger.info(
            "Starting batch of %d queries with %d workers",
            len(queries),
            self.concurrency,
        )
        start = time.perf_counter()
        with ThreadPoolExecutor(
            max_workers=self.concurrency, thread_name_prefix="pqlbench"
        ) as pool:
            futures = [pool.submit(self._run_one, q) for q in queries]
            for future in as_completed(futures):
                outcome = future.result()
                if isinstance(outcome, Failure):
                    logger.warning("error: %s", outcome)
                outcomes.append(outcome)
        end = time.perf_counter()

        batch = BatchResult(tuple(outcomes), start, end)
        logger.info(
            "Batch finished in %dms: %d ok, %d failed",
            batch.total_ms,
            len(batch.successes),
            len(batch.failures),
        )
        return batch

    def _run_one(self, query: Query) -> Outcome:
        with self._permits:
            try:
                return self.execute(query)
            except Exception as exc:
                # Expected errors come back as Failure; anything raised counts as one too.
                logger.exception("executor raised for query %r", query.text)
                return Failure(query, f"unexpected {type(exc).__name__}: {exc}")
