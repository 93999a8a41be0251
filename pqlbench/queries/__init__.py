from .reader import load_queries, read_queries
from .types import Query, QueryFileError

__all__ = ["load_queries", "read_queries", "Query", "QueryFileError"]
