from .report import render
from .summary import Stats, summarize, summarize_batch

__all__ = ["render", "Stats", "summarize", "summarize_batch"]
