from __future__ import annotations

import random

import pytest

from cosmic_genesis.config import EngineConfig
from cosmic_genesis.engine import CosmicEngine
from cosmic_genesis.errors import InvariantViolation
from cosmic_genesis.models.resources import ResourceType


def _make_engine(seed: int = 1) -> CosmicEngine:
    return CosmicEngine(EngineConfig(seed=seed))


def test_fresh_session() -> None:
    engine = _make_engine()

    assert engine.get_resource("hydrogenFuel") == 5000
    assert engine.get_resource(ResourceType.DARK_ENERGY) == 6900
    assert engine.get_resource("unobtainium") == 0
    assert engine.get_cosmic_time() == 0
    assert engine.get_entropy_level() == 0
    assert engine.get_dark_energy_acceleration() == 0
    assert engine.get_active_effects() == []
    assert len(engine.get_theories()) == 10
    assert engine.get_current_tier().name == "Particle Manipulator"
    assert engine.get_completed_achievements() == []
    assert len(engine.get_achievements()) == 4
    assert len(engine.get_evolution_paths()) == 2


def test_extraction_returns_deltas_and_raises_entropy() -> None:
    engine = _make_engine()

    delta = engine.extract_resources("stellar_nucleosynthesis", 1, 10)

    assert delta == {
        "hydrogenFuel": pytest.approx(-4.0),
        "heliumAsh": pytest.approx(1.0),
        "stellarNeutrinos": pytest.approx(2.0),
        "heavyElements": pytest.approx(0.01),
    }
    assert engine.get_resource("hydrogenFuel") == pytest.approx(4996)
    assert engine.get_entropy_level() == pytest.approx(1.0)


def test_unknown_extraction_changes_nothing() -> None:
    engine = _make_engine()
    before = engine.get_resources()

    assert engine.extract_resources("asteroid_mining", 1, 10) == {}
    assert engine.get_resources() == before
    assert engine.get_entropy_level() == 0


@pytest.mark.parametrize("effort", [-1.0, float("nan")])
def test_invalid_research_effort_is_refused(effort: float) -> None:
    engine = _make_engine()
    before = engine.get_resources()

    assert engine.conduct_research("Big Bang Nucleosynthesis", effort) is False
    assert engine.get_resources() == before


def test_accelerating_expansion_feeds_physics() -> None:
    engine = _make_engine()

    assert engine.manipulate_cosmic_structure("accelerate_expansion", 10) is True
    assert engine.manipulate_cosmic_structure("accelerate_expansion", -10) is False
    assert engine.get_dark_energy_acceleration() == pytest.approx(0.1)

    engine.update_physics(100)

    assert engine.get_resource("spacetimeCurvature") == pytest.approx(0.1 * 100 * 0.1)


def test_trade_through_the_engine() -> None:
    engine = _make_engine()

    assert engine.trade_resources({"hydrogenFuel": 100}, {"heavyElements": 1}) is True
    assert engine.get_resource("heavyElements") == pytest.approx(51)


def test_mastery_through_the_engine() -> None:
    engine = _make_engine()

    result = engine.add_mastery("energy_mastery", 100, context="tokamak")

    assert [a.achievement_id for a in result.achievements_unlocked] == ["first_fusion"]
    assert engine.get_mastery_level("energy_mastery") == 100
    assert engine.get_progression_status().achievement_count == 1
    assert not engine.has_unlocked_ability("Quantum State Control")


def test_resources_snapshot_is_a_copy() -> None:
    engine = _make_engine()

    engine.get_resources()["darkEnergy"] = 0
    engine.get_theories()[0].unlocked = True

    assert engine.get_resource("darkEnergy") == 6900
    assert not any(t.unlocked for t in engine.get_theories())


def test_same_seed_same_session() -> None:
    first, second = _make_engine(99), _make_engine(99)
    for engine in (first, second):
        for _ in range(40):
            engine.update_physics(300)
            engine.extract_resources("vacuum_energy_tap", 1.5, 20)

    assert first.get_resources() == second.get_resources()
    assert first.get_entropy_level() == second.get_entropy_level()


def test_random_play_keeps_the_physics_invariants() -> None:
    engine = _make_engine(5)
    rng = random.Random(8)
    time = entropy = 0.0

    for _ in range(300):
        roll = rng.random()
        if roll < 0.4:
            engine.update_physics(rng.uniform(0, 50))
        elif roll < 0.6:
            engine.extract_resources(rng.choice(["stellar_nucleosynthesis", "spacetime_mining"]),
                                     rng.uniform(0, 2), rng.uniform(0, 30))
        elif roll < 0.8:
            engine.trade_resources({"darkMatter": rng.uniform(0, 50)}, {"antimatter": 0.01})
        else:
            engine.manipulate_cosmic_structure("accelerate_expansion", rng.uniform(0, 1))
        assert engine.get_cosmic_time() >= time
        assert engine.get_entropy_level() >= entropy
        time, entropy = engine.get_cosmic_time(), engine.get_entropy_level()


def test_each_engine_keeps_its_own_strictness() -> None:
    strict = CosmicEngine(EngineConfig(strict_invariants=True))
    lenient = CosmicEngine(EngineConfig())

    for engine in (strict, lenient):
        theory = engine.economy.research.get("Big Bang Nucleosynthesis")
        theory.unlocked = True
        engine.progression.add_mastery("energy_mastery", 1000)

    with pytest.raises(InvariantViolation):
        strict.economy.research._unlock(strict.economy.research.get("Big Bang Nucleosynthesis"))
    with pytest.raises(InvariantViolation):
        strict.progression.tiers._grant(strict.progression.tiers.current)

    lenient.economy.research._unlock(lenient.economy.research.get("Big Bang Nucleosynthesis"))
    lenient.progression.tiers._grant(lenient.progression.tiers.current)
    assert lenient.get_active_effects() == []
    assert len(lenient.progression.tiers.unlocked_abilities) == 2


def test_trade_against_an_overdrawn_resource_is_refused() -> None:
    engine = _make_engine()
    engine.extract_resources("stellar_nucleosynthesis", 1, 12750)
    assert engine.get_resource("hydrogenFuel") == pytest.approx(-100)
    engine.economy.ledger.set(ResourceType.HYDROGEN_FUEL, -100.0)
    before = engine.get_resources()

    assert engine.trade_resources({"darkMatter": 10}, {"hydrogenFuel": 1}) is False
    assert engine.trade_resources({"hydrogenFuel": 1}, {"darkMatter": 10}) is False
    assert engine.get_resources() == before
