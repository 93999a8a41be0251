from .loader import load_config, read_config_file, resolve_config
from .types import BenchConfig, ConfigError, UnsupportedConfigFormatError

__all__ = [
    "load_config",
    "read_config_file",
    "resolve_config",
    "BenchConfig",
    "ConfigError",
    "UnsupportedConfigFormatError",
]
