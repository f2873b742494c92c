"""Engine configuration utilities."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


@dataclass(slots=True)
class EngineConfig:
    seed: int | None = None
    strict_invariants: bool = False
    save_dir: Path | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "EngineConfig":
        raw_seed = os.getenv("COSMIC_SEED", "").strip()
        seed = int(raw_seed) if raw_seed else None
        raw_dir = os.getenv("COSMIC_SAVE_DIR", "").strip()
        save_dir = Path(raw_dir).expanduser() if raw_dir else None
        log_level = os.getenv("COSMIC_LOG_LEVEL", "INFO").strip().upper() or "INFO"
        if not isinstance(logging.getLevelName(log_level), int):
            log_level = "INFO"

        return cls(
            seed=seed,
            strict_invariants=_env_flag("COSMIC_STRICT_INVARIANTS"),
            save_dir=save_dir,
            log_level=log_level,
        )


def configure_logging(config: EngineConfig) -> None:
    """Install a basic root handler at the configured level (host use only)."""
    logging.basicConfig(level=getattr(logging, config.log_level, logging.INFO))


__all__ = ["EngineConfig", "configure_logging"]
