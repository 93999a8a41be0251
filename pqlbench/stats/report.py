from .summary import Stats


def _ms(value: float | int | None, precision: int = 0) -> str:
    if value is None:
        return "n/a"
    return f"{value:.{precision}f}ms"


def render(stats: Stats) -> str:
    lines = [
        f"Number of queries processed: {stats.processed}",
        f"Number of queries failed: {stats.failed}",
        f"Total processing time across all queries: {_ms(stats.total)}",
        f"Minimum query time (for a single query): {_ms(stats.fastest)}",
        f"Maximum query time (for a single query): {_ms(stats.slowest)}",
        f"Median query time: {_ms(stats.median, 3)}",
        f"Average query time: {_ms(stats.average, 3)}",
    ]
    if stats.errors:
        lines.append("Errors:")
        lines.extend(f"  {cause}" for cause in stats.errors)
    return "\n".join(lines)
