import csv
from pathlib import Path
from typing import Iterable, TextIO

from .types import Query, QueryFileError

FIELDS = ("query", "start", "end", "step")

# 9999-12-31T23:59:59.999Z, the last instant RFC3339 can express
MAX_EPOCH_MS = 253_402_300_799_999


def load_queries(path: str | Path) -> list[Query]:
    pure_path = Path(path).expanduser().resolve()

    if not pure_path.exists():
        raise QueryFileError(f"Query file not found: {pure_path}")

    if not pure_path.is_file():
        raise QueryFileError(f"Query path is not a file: {pure_path}")

    try:
        with pure_path.open(encoding="utf-8", newline="") as stream:
            return read_queries(stream)
    except (OSError, UnicodeDecodeError) as exc:
        raise QueryFileError(f"{pure_path}: unable to read file") from exc


def read_queries(stream: TextIO | Iterable[str]) -> list[Query]:
    """
    Parse `query|start_ms|end_ms|step` records, one per line, no header.

    Quotes are taken literally since PromQL label matchers are quoted.
    """
    reader = csv.reader(stream, delimiter="|", quoting=csv.QUOTE_NONE)
    queries: list[Query] = []

    try:
        for row in reader:
            if not row or all(not field.strip() for field in row):
                continue
            queries.append(_build_query(reader.line_num, row))
    except csv.Error as exc:
        raise QueryFileError(f"line {reader.line_num}: {exc}") from exc

    return queries


def _build_query(line: int, row: list[str]) -> Query:
    if len(row) != len(FIELDS):
        raise QueryFileError(
            f"line {line}: expected {len(FIELDS)} fields "
            f"({'|'.join(FIELDS)}), got {len(row)}"
        )

    text = row[0].strip()
    if len(text) < 1:
        raise QueryFileError(f"line {line}: query is empty")

    start = _parse_int(line, "start", row[1])
    end = _parse_int(line, "end", row[2])
    step = _parse_int(line, "step", row[3])

    for name, value in (("start", start), ("end", end)):
        if not 0 <= value <= MAX_EPOCH_MS:
            raise QueryFileError(
                f"line {line}: {name} ({value}) is outside the supported range 0..{MAX_EPOCH_MS}"
            )

    if end < start:
        raise QueryFileError(f"line {line}: end ({end}) is before start ({start})")

    if step < 1:
        raise QueryFileError(f"line {line}: step must be positive, got {step}")

    return Query(text, start, end, step)


def _parse_int(line: int, name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise QueryFileError(
            f"line {line}: {name} should be an integer, got {raw!r}"
        ) from exc
