from __future__ import annotations

import pytest

from cosmic_genesis.models.resources import (
    STARTING_RESOURCES,
    ExtractionType,
    ResourceLedger,
    ResourceType,
    coerce_delta,
    extract,
    extraction_deltas,
)


def test_fresh_ledger_matches_cosmic_composition() -> None:
    ledger = ResourceLedger()

    assert len(list(ledger)) == 20
    assert ledger[ResourceType.HYDROGEN_FUEL] == 5000
    assert ledger[ResourceType.DARK_ENERGY] == 6900
    assert ledger[ResourceType.DARK_MATTER] == 2600
    assert ledger[ResourceType.SPACETIME_CURVATURE] == 0
    assert ledger.snapshot() == {r.value: v for r, v in STARTING_RESOURCES.items()}


def test_lookup_accepts_value_name_and_unknown_keys() -> None:
    ledger = ResourceLedger()

    assert ledger.get("heliumAsh") == 1200
    assert ledger.get("HELIUM_ASH") == 1200
    assert ledger.get("helium_ash") == 1200
    assert ledger.get("unobtainium") == 0.0


def test_snapshot_is_a_copy() -> None:
    ledger = ResourceLedger()
    snap = ledger.snapshot()
    snap["hydrogenFuel"] = -1

    assert ledger[ResourceType.HYDROGEN_FUEL] == 5000


def test_stellar_nucleosynthesis_formula() -> None:
    ledger = ResourceLedger()

    delta = extract(ledger, "stellar_nucleosynthesis", 1, 10)

    assert delta[ResourceType.HELIUM_ASH] == pytest.approx(1.0)
    assert delta[ResourceType.HYDROGEN_FUEL] == pytest.approx(-4.0)
    assert delta[ResourceType.STELLAR_NEUTRINOS] == pytest.approx(2.0)
    assert delta[ResourceType.HEAVY_ELEMENTS] == pytest.approx(0.01)
    assert ledger[ResourceType.HYDROGEN_FUEL] == pytest.approx(4996)
    assert ledger[ResourceType.HELIUM_ASH] == pytest.approx(1201)


@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        (ExtractionType.DARK_MATTER_HARVESTING,
         {ResourceType.DARK_MATTER: 1.0, ResourceType.GRAVITATIONAL_FORCE: 0.1}),
        (ExtractionType.VACUUM_ENERGY_TAP,
         {ResourceType.QUANTUM_VACUUM_ENERGY: 0.4, ResourceType.QUANTUM_ENTANGLEMENT: 0.2}),
        (ExtractionType.SPACETIME_MINING,
         {ResourceType.SPACETIME_CURVATURE: 0.2, ResourceType.GRAVITATIONAL_WAVES: 0.06}),
        (ExtractionType.INFORMATION_PROCESSING,
         {ResourceType.COSMIC_INFORMATION: 1.6, ResourceType.EMERGENT_COMPLEXITY: 0.32}),
    ],
)
def test_extraction_tables(kind: ExtractionType, expected: dict) -> None:
    delta = extraction_deltas(kind, 2, 10)

    assert set(delta) == set(expected)
    for resource, amount in expected.items():
        assert delta[resource] == pytest.approx(amount)


def test_unknown_extraction_is_a_noop() -> None:
    ledger = ResourceLedger()
    before = ledger.snapshot()

    assert extract(ledger, "asteroid_mining", 5, 100) == {}
    assert ledger.snapshot() == before


def test_extraction_has_no_floor() -> None:
    ledger = ResourceLedger()

    extract(ledger, ExtractionType.STELLAR_NUCLEOSYNTHESIS, 1, 20_000)

    assert ledger[ResourceType.HYDROGEN_FUEL] < 0


def test_coerce_delta_reports_bad_keys() -> None:
    delta, bad = coerce_delta({
        "darkMatter": 5,
        "phlogiston": 1,
        "heliumAsh": float("nan"),
        "antimatter": "abc",
        "heavyElements": [1],
    })

    assert delta == {ResourceType.DARK_MATTER: 5.0}
    assert sorted(bad) == ["antimatter", "heavyElements", "heliumAsh", "phlogiston"]


def test_ledger_round_trips_through_dict() -> None:
    ledger = ResourceLedger()
    extract(ledger, "information_processing", 0.37, 13.1)

    restored = ResourceLedger.from_dict(ledger.to_dict())

    assert restored.snapshot() == ledger.snapshot()
