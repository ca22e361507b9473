from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not an integer); using %d", name, raw, default)
        return default


@dataclass(frozen=True)
class Settings:
    top_k: int = 10
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Settings":
        """Read settings from the environment, loading `.env` first if present."""
        load_dotenv(dotenv_path=env_file)
        level = os.environ.get("ROOMMATES_LOG_LEVEL", cls.log_level).strip().upper()
        if level not in LOG_LEVELS:
            logger.warning("Unknown ROOMMATES_LOG_LEVEL %r; using %s", level, cls.log_level)
            level = cls.log_level
        top_k = _env_int("ROOMMATES_TOP_K", cls.top_k)
        if top_k <= 0:
            logger.warning("ROOMMATES_TOP_K must be positive, got %d; using %d", top_k, cls.top_k)
            top_k = cls.top_k
        return cls(top_k=top_k, log_level=level)
