"""Environment-driven settings for the word count margin."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "WORDCOUNT_"


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def env_float(name: str, fallback: Optional[float]) -> Optional[float]:
    raw = env(name)
    if raw is None or not raw.strip():
        return fallback
    try:
        return float(raw)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class MarginSettings:
    """Knobs a host can flip without touching the counting rules."""

    enabled: bool = True
    # ``None`` waits for the updater thread indefinitely on dispose.
    shutdown_timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "MarginSettings":
        return cls(
            enabled=env_flag("ENABLED", True),
            shutdown_timeout=env_float("SHUTDOWN_TIMEOUT", None),
        )


__all__ = ["ENV_PREFIX", "MarginSettings", "env", "env_flag", "env_float"]
