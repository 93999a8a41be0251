from dataclasses import dataclass

DEFAULT_WORKERS = 1
DEFAULT_URL = "http://localhost:9201"
DEFAULT_TIMEOUT_S = 1.0
DEFAULT_API_VERSION = "v1"


@dataclass(frozen=True)
class BenchConfig:
    filepath: str
    workers: int = DEFAULT_WORKERS
    url: str = DEFAULT_URL
    timeout: float = DEFAULT_TIMEOUT_S
    api_version: str = DEFAULT_API_VERSION


class ConfigError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class UnsupportedConfigFormatError(ConfigError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
