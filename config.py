# config.py
from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    data_source: str = "data.json"
    http_timeout: float = 30.0
    resize_debounce_ms: float = 250.0
    log_level: str = "INFO"

    @property
    def resize_debounce_seconds(self) -> float:
        return self.resize_debounce_ms / 1000.0

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            data_source=os.getenv("TOPIC_DATA_SOURCE", "data.json"),
            http_timeout=_env_float("TOPIC_HTTP_TIMEOUT", 30.0),
            resize_debounce_ms=_env_float("TOPIC_RESIZE_DEBOUNCE_MS", 250.0),
            log_level=os.getenv("TOPIC_LOG_LEVEL", "INFO"),
        )
