from __future__ import annotations

import argparse
import logging
import sys

from pqlbench.client import HTTPClient
from pqlbench.config import BenchConfig, ConfigError, read_config_file, resolve_config
from pqlbench.executor import Dispatcher, DispatcherError
from pqlbench.queries import QueryFileError, load_queries
from pqlbench.stats import Stats, render, summarize_batch

from .args import build_parser

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def run_cli(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        logging.basicConfig(level=args.log_level, format=LOG_FORMAT)

        match args.command:
            case "benchmark":
                return cmd_benchmark(args)
            case _:
                return 2

    except (ConfigError, QueryFileError, DispatcherError) as exc:
        print(str(exc), file=sys.stderr)
        return 2

    except KeyboardInterrupt:
        return 130


def cmd_benchmark(args: argparse.Namespace) -> int:
    stats = _run_with(_config_from(args))
    print(render(stats))
    return 1 if stats.errors else 0


def _config_from(args: argparse.Namespace) -> BenchConfig:
    values = read_config_file(args.config) if args.config else {}
    overrides = {
        "filepath": args.filepath,
        "workers": args.workers,
        "url": args.url,
        "timeout": args.timeout,
        "api_version": args.api_version,
    }
    return resolve_config(values, overrides)


def _run_with(cfg: BenchConfig) -> Stats:
    queries = load_queries(cfg.filepath)
    logger.info("Loaded %d queries from %s", len(queries), cfg.filepath)

    with HTTPClient(cfg.url, version=cfg.api_version, timeout=cfg.timeout) as client:
        dispatcher = Dispatcher(client.execute, cfg.workers)
        batch = dispatcher.run(queries)

    return summarize_batch(batch)
