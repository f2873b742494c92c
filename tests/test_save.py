from __future__ import annotations

import json
from pathlib import Path

import pytest

from cosmic_genesis.config import EngineConfig
from cosmic_genesis.constants import SAVE_FORMAT_VERSION
from cosmic_genesis.engine import CosmicEngine
from cosmic_genesis.models.resources import ResourceType
from cosmic_genesis.models.save import (
    SAVE_FILE_NAME,
    delete_save,
    engine_to_dict,
    has_save,
    load_game,
    save_game,
    save_path,
)


def _make_played_engine() -> CosmicEngine:
    engine = CosmicEngine(EngineConfig(seed=21))
    engine.extract_resources("information_processing", 1.3, 17)
    engine.update_physics(123.4)
    engine.manipulate_cosmic_structure("accelerate_expansion", 3)
    engine.economy.ledger.set(ResourceType.STRONG_NUCLEAR_FORCE, 250)
    engine.conduct_research("Big Bang Nucleosynthesis", 2000)
    engine.update_physics(16.7)
    engine.add_mastery("energy_mastery", 150)
    engine.add_mastery("quantum_manipulation", 900)
    return engine


def test_save_path_honours_config(tmp_path: Path) -> None:
    assert save_path(EngineConfig(save_dir=tmp_path)) == tmp_path / SAVE_FILE_NAME
    assert save_path().name == SAVE_FILE_NAME


def test_round_trip_is_exact(tmp_path: Path) -> None:
    engine = _make_played_engine()
    target = tmp_path / "slot1" / "save.json"

    assert save_game(engine, target) == target
    loaded = load_game(target)

    assert loaded is not None
    assert engine_to_dict(loaded) == engine_to_dict(engine)
    assert loaded.get_resources() == engine.get_resources()
    assert loaded.get_cosmic_time() == engine.get_cosmic_time()
    assert [e.source for e in loaded.get_active_effects()] == [
        "Big Bang Nucleosynthesis", "Big Bang Nucleosynthesis",
    ]
    assert loaded.get_current_tier().name == "Stellar Architect"
    assert loaded.has_unlocked_ability("Stellar Lifecycle Mastery")
    assert [a.achievement_id for a in loaded.get_completed_achievements()] == ["first_fusion"]


def test_loaded_session_keeps_playing(tmp_path: Path) -> None:
    engine = _make_played_engine()
    save_game(engine, tmp_path / "save.json")
    loaded = load_game(tmp_path / "save.json")

    result = loaded.add_mastery("stellar_engineering", 100)

    assert result.achievements_unlocked == []
    assert loaded.conduct_research("Big Bang Nucleosynthesis", 5000) is False


def test_save_uses_config_directory(tmp_path: Path) -> None:
    config = EngineConfig(seed=4, save_dir=tmp_path)
    engine = CosmicEngine(config)

    assert not has_save(config=config)
    save_game(engine)
    assert has_save(config=config)
    assert load_game(config=config) is not None

    delete_save(config=config)
    assert not has_save(config=config)
    delete_save(config=config)


def test_missing_save_loads_nothing(tmp_path: Path) -> None:
    assert load_game(tmp_path / "nope.json") is None


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        json.dumps({"version": SAVE_FORMAT_VERSION + 1, "economy": {}, "progression": {}}),
        json.dumps([1, 2, 3]),
        json.dumps({"version": SAVE_FORMAT_VERSION,
                    "economy": {"research": {"active_effects": [{"effect_type": "bogus"}]}}}),
    ],
)
def test_unusable_saves_load_nothing(tmp_path: Path, content: str) -> None:
    target = tmp_path / "save.json"
    target.write_text(content)

    assert load_game(target) is None


def test_save_file_is_plain_json(tmp_path: Path) -> None:
    engine = _make_played_engine()
    target = save_game(engine, tmp_path / "save.json")

    data = json.loads(target.read_text())

    assert data["version"] == SAVE_FORMAT_VERSION
    assert set(data) == {"version", "economy", "progression"}
    assert data["economy"]["resources"]["darkEnergy"] == engine.get_resource("darkEnergy")
