from dataclasses import dataclass


@dataclass(frozen=True)
class Query:
    text: str
    # Requested range, unix epoch in milliseconds
    start_ms: int
    end_ms: int
    step: int


class QueryFileError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
