"""Save / load engine state to JSON.

Uses platformdirs for cross-platform save location:
  Linux:   ~/.local/share/cosmic_genesis/save.json
  macOS:   ~/Library/Application Support/cosmic_genesis/save.json
  Windows: C:/Users/.../AppData/Local/cosmic_genesis/save.json

Static content (theory definitions, tiers, achievements, paths) is rebuilt
from code; only mutable state is persisted. Python's JSON float encoding
is round-trip exact, so ledger values reload bit-for-bit.
"""

from __future__ import annotations

import json
import logging
import random
from pathlib import Path

from platformdirs import user_data_dir

from ..config import EngineConfig
from ..constants import SAVE_FORMAT_VERSION
from ..economy import CosmicEconomy
from ..engine import CosmicEngine
from ..progression import ProgressionSystem

log = logging.getLogger(__name__)

SAVE_DIR = Path(user_data_dir("cosmic_genesis"))
SAVE_FILE_NAME = "save.json"


def save_path(config: EngineConfig | None = None) -> Path:
    """Where the save file lives; ``COSMIC_SAVE_DIR`` overrides platformdirs."""
    if config is not None and config.save_dir is not None:
        return Path(config.save_dir) / SAVE_FILE_NAME
    return SAVE_DIR / SAVE_FILE_NAME


# ── Serialise helpers ─────────────────────────────────────────────────

def engine_to_dict(engine: CosmicEngine) -> dict:
    return {
        "version": SAVE_FORMAT_VERSION,
        "economy": engine.economy.to_dict(),
        "progression": engine.progression.to_dict(),
    }


def engine_from_dict(
    data: dict,
    config: EngineConfig | None = None,
    rng: random.Random | None = None,
) -> CosmicEngine:
    config = config if config is not None else EngineConfig()
    rng = rng if rng is not None else random.Random(config.seed)
    return CosmicEngine(
        config=config,
        rng=rng,
        economy=CosmicEconomy.from_dict(
            data.get("economy", {}), rng=rng, strict=config.strict_invariants,
        ),
        progression=ProgressionSystem.from_dict(
            data.get("progression", {}), rng=rng, strict=config.strict_invariants,
        ),
    )


# ── Top-level API ─────────────────────────────────────────────────────

def save_game(engine: CosmicEngine, path: Path | None = None) -> Path:
    """Serialize full engine state to JSON and return the save path."""
    target = path if path is not None else save_path(engine.config)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(engine_to_dict(engine), indent=2))
    log.info("Saved session to %s", target)
    return target


def load_game(
    path: Path | None = None,
    config: EngineConfig | None = None,
    rng: random.Random | None = None,
) -> CosmicEngine | None:
    """Deserialize an engine from JSON. Returns None if no usable save exists."""
    source = path if path is not None else save_path(config)
    if not source.exists():
        return None
    try:
        data = json.loads(source.read_text())
    except (json.JSONDecodeError, OSError) as exc:
        log.warning("Could not read save %s: %s", source, exc)
        return None
    if not isinstance(data, dict) or data.get("version") != SAVE_FORMAT_VERSION:
        log.warning("Unsupported save format in %s", source)
        return None

    try:
        engine = engine_from_dict(data, config=config, rng=rng)
    except (KeyError, TypeError, ValueError) as exc:
        log.warning("Corrupt save %s: %s", source, exc)
        return None
    log.info("Loaded session from %s", source)
    return engine


def has_save(path: Path | None = None, config: EngineConfig | None = None) -> bool:
    """Check if a save file exists."""
    return (path if path is not None else save_path(config)).exists()


def delete_save(path: Path | None = None, config: EngineConfig | None = None) -> None:
    """Remove the save file if it exists."""
    target = path if path is not None else save_path(config)
    if target.exists():
        target.unlink()
