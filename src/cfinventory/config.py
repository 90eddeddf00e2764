"""Runtime settings read from the environment."""

import logging
import os
from dataclasses import dataclass, fields, replace

ENV_PREFIX = "CFINVENTORY_"

# CloudFront is a global service served from us-east-1.
DEFAULT_REGION = "us-east-1"
MAX_CONCURRENT_LIMIT = 50


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    """Transport and concurrency knobs for one cfinventory run."""

    region: str = DEFAULT_REGION
    profile: str | None = None
    max_concurrent: int = 5
    max_attempts: int = 3
    read_timeout: int = 20
    connect_timeout: int = 10
    log_level: str = "WARNING"

    def __post_init__(self):
        clamped = min(max(self.max_concurrent, 1), MAX_CONCURRENT_LIMIT)
        object.__setattr__(self, "max_concurrent", clamped)
        object.__setattr__(self, "max_attempts", max(self.max_attempts, 1))
        level = self.log_level.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"{ENV_PREFIX}LOG_LEVEL must be a logging level name, got {self.log_level!r}")
        object.__setattr__(self, "log_level", level)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            region=os.environ.get(ENV_PREFIX + "REGION") or DEFAULT_REGION,
            profile=os.environ.get(ENV_PREFIX + "PROFILE") or None,
            max_concurrent=_env_int("MAX_CONCURRENT", 5),
            max_attempts=_env_int("MAX_ATTEMPTS", 3),
            read_timeout=_env_int("READ_TIMEOUT", 20),
            connect_timeout=_env_int("CONNECT_TIMEOUT", 10),
            log_level=os.environ.get(ENV_PREFIX + "LOG_LEVEL") or "WARNING",
        )

    def override(self, **kwargs) -> "Settings":
        """Return a copy with every non-None keyword applied."""
        names = {f.name for f in fields(self)}
        unknown = set(kwargs) - names
        if unknown:
            raise TypeError(f"Unknown settings: {sorted(unknown)}")
        return replace(self, **{k: v for k, v in kwargs.items() if v is not None})
