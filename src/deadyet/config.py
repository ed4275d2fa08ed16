import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "DEADYET_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _parse_positive_int(name: str, raw: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    """Runtime settings. Every field can be overridden by a DEADYET_* variable."""

    cache_size: int = 8192
    log_level: str = "WARNING"
    json_logs: bool = False
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    api_endpoint: str = "http://127.0.0.1:8000"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        values = {}

        def lookup(field: str) -> Optional[str]:
            return env.get(f"{ENV_PREFIX}{field.upper()}")

        if (raw := lookup("cache_size")) is not None:
            values["cache_size"] = _parse_positive_int("DEADYET_CACHE_SIZE", raw)
        if (raw := lookup("log_level")) is not None:
            values["log_level"] = raw.strip().upper()
        if (raw := lookup("json_logs")) is not None:
            values["json_logs"] = _parse_bool("DEADYET_JSON_LOGS", raw)
        if (raw := lookup("api_host")) is not None:
            values["api_host"] = raw.strip()
        if (raw := lookup("api_port")) is not None:
            values["api_port"] = _parse_positive_int("DEADYET_API_PORT", raw)
        if (raw := lookup("api_endpoint")) is not None:
            values["api_endpoint"] = raw.strip().rstrip("/")

        return cls(**values)
