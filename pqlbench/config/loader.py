import json
import tomllib
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml

from .types import (
    DEFAULT_API_VERSION,
    DEFAULT_TIMEOUT_S,
    DEFAULT_URL,
    DEFAULT_WORKERS,
    BenchConfig,
    ConfigError,
    UnsupportedConfigFormatError,
)

KEYS = {"filepath", "workers", "url", "timeout", "api_version"}


def load_config(path: str | Path) -> BenchConfig:
    return resolve_config(read_config_file(path))


def read_config_file(path: str | Path) -> dict[str, Any]:
    """
    Read the `benchmark` section of a config file and validate its fields.

    Only the keys present in the file are returned, so command line flags
    can still be layered on top before defaults apply.
    """
    pure_path = Path(path).expanduser().resolve()

    if not pure_path.exists():
        raise ConfigError(f"Config file not found: {pure_path}")

    if not pure_path.is_file():
        raise ConfigError(f"Config path is not a file: {pure_path}")

    decode, decode_errors = _decoder_for(pure_path)

    try:
        text = pure_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"{pure_path}: unable to read config file") from exc

    try:
        raw_file = decode(text)
    except decode_errors as exc:
        raise ConfigError(f"{pure_path}: invalid {pure_path.suffix[1:]} config") from exc

    if not isinstance(raw_file, Mapping):
        raise ConfigError(
            f"{pure_path}: top-level value is not an object: {type(raw_file)}"
        )

    return _build_section(raw_file)


def resolve_config(
    values: Mapping[str, Any], overrides: Mapping[str, Any] | None = None
) -> BenchConfig:
    merged = dict(values)
    for key, value in (overrides or {}).items():
        if value is not None:
            merged[key] = value

    fields = _validate_fields(merged)

    if "filepath" not in fields:
        raise ConfigError("required input file")

    return BenchConfig(
        filepath=fields["filepath"],
        workers=fields.get("workers", DEFAULT_WORKERS),
        url=fields.get("url", DEFAULT_URL),
        timeout=fields.get("timeout", DEFAULT_TIMEOUT_S),
        api_version=fields.get("api_version", DEFAULT_API_VERSION),
    )


def _decoder_for(
    path: Path,
) -> tuple[Callable[[str], Any], type[Exception] | tuple[type[Exception], ...]]:
    match path.suffix:
        case ".yaml" | ".yml":
            return yaml.safe_load, yaml.YAMLError
        case ".toml":
            return tomllib.loads, tomllib.TOMLDecodeError
        case ".json":
            return json.loads, json.JSONDecodeError
        case other:
            raise UnsupportedConfigFormatError(
                f"Non supported file extension: {other}\n Expected format: .yml/.yaml, .toml, .json"
            )


def _build_section(raw: Mapping[str, Any]) -> dict[str, Any]:
    if "benchmark" not in raw:
        raise ConfigError("Missing 'benchmark' field")

    section = raw["benchmark"]
    if not isinstance(section, Mapping):
        raise ConfigError(f"'benchmark' must be a mapping, got {type(section)}")

    return _validate_fields(section)


def _validate_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}

    for key in fields.keys():
        if key not in KEYS:
            raise ConfigError(f"benchmark: Can't process: {key}")

    for key in ("filepath", "url", "api_version"):
        if key not in fields:
            continue
        value = fields[key]
        if not isinstance(value, str):
            raise ConfigError(f"benchmark: '{key}' should be a string")
        if len(value.strip()) < 1:
            raise ConfigError(f"benchmark: '{key}' can't be empty")
        out[key] = value.strip()

    if "workers" in fields:
        workers = fields["workers"]
        # bool is an int subclass
        if isinstance(workers, bool) or not isinstance(workers, int):
            raise ConfigError("benchmark: 'workers' should be an integer")
        if workers < 1:
            raise ConfigError(
                f"benchmark: 'workers' must be at least 1, got {workers}"
            )
        out["workers"] = workers

    if "timeout" in fields:
        timeout = fields["timeout"]
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            raise ConfigError("benchmark: 'timeout' should be a number of seconds")
        if timeout <= 0:
            raise ConfigError(
                f"benchmark: 'timeout' must be positive, got {timeout}"
            )
        out["timeout"] = float(timeout)

    return out
