from __future__ import annotations

import argparse

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pqlbench",
        description="Benchmark PromQL range query performance across concurrent workers.",
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Optional config file (.yaml/.yml, .toml, .json) with a 'benchmark' section",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=LOG_LEVELS,
        type=str.upper,
        help="Logging verbosity",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
    )

    # benchmark
    benchmark = subparsers.add_parser("benchmark", help="Run the query benchmark")
    benchmark.add_argument(
        "--filepath",
        default=None,
        help="Query file to process, one 'query|start|end|step' record per line. (Required).",
    )
    benchmark.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of concurrent workers. (Default 1).",
    )
    benchmark.add_argument(
        "--promscale.url",
        dest="url",
        default=None,
        help="Promscale web address. The scheme defaults to 'https' if not provided in the URL.",
    )
    benchmark.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per query client timeout in seconds. (Default 1.0).",
    )
    benchmark.add_argument(
        "--api-version",
        dest="api_version",
        default=None,
        help="Query API version. (Default v1).",
    )

    return parser
