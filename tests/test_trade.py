from __future__ import annotations

import math

import pytest

from cosmic_genesis.models.resources import ResourceLedger, ResourceType
from cosmic_genesis.models.trade import (
    execute_trade,
    quote_trade,
    resource_scarcity,
    resource_utility,
)


def _make_ledger(**overrides: float) -> ResourceLedger:
    ledger = ResourceLedger()
    for key, value in overrides.items():
        ledger.set(ResourceType.from_value(key), value)
    return ledger


def test_scarcity_tracks_holdings_with_a_floor() -> None:
    ledger = _make_ledger(darkEnergy=20_000)

    assert resource_scarcity(ledger, ResourceType.HEAVY_ELEMENTS) == pytest.approx(1000 / 150)
    assert resource_scarcity(ledger, ResourceType.DARK_ENERGY) == pytest.approx(0.1)


def test_unlisted_resources_have_unit_utility() -> None:
    assert resource_utility(ResourceType.DARK_ENERGY) == 10.0
    assert resource_utility(ResourceType.HOLOGRAPHIC_DATA) == 1.0


def test_fair_trade_is_executed() -> None:
    ledger = _make_ledger()
    offer = {"hydrogenFuel": 100}
    demand = {"heavyElements": 1}

    quote, _, _ = quote_trade(ledger, offer, demand)
    assert quote.offer_value == pytest.approx(100 * (1000 / 5100) * 3)
    assert quote.demand_value == pytest.approx(1 * (1000 / 150) * 4)
    assert quote.acceptable

    assert execute_trade(ledger, offer, demand) is True
    assert ledger[ResourceType.HYDROGEN_FUEL] == pytest.approx(4900)
    assert ledger[ResourceType.HEAVY_ELEMENTS] == pytest.approx(51)


def test_unaffordable_offer_leaves_ledger_untouched() -> None:
    ledger = _make_ledger()
    before = ledger.snapshot()

    assert execute_trade(ledger, {"hydrogenFuel": 6000}, {"heavyElements": 1}) is False
    assert ledger.snapshot() == before


def test_unfair_ratio_is_refused() -> None:
    ledger = _make_ledger()
    before = ledger.snapshot()

    assert execute_trade(ledger, {"stellarNeutrinos": 1}, {"darkEnergy": 100}) is False
    assert ledger.snapshot() == before


@pytest.mark.parametrize(
    ("offer", "demand"),
    [
        ({}, {"heavyElements": 1}),
        ({"hydrogenFuel": 0}, {"heavyElements": 1}),
        ({"hydrogenFuel": 100}, {"heavyElements": -1}),
        ({"hydrogenFuel": 100, "phlogiston": 5}, {"heavyElements": 1}),
        ({"hydrogenFuel": float("inf")}, {"heavyElements": 1}),
        ({"hydrogenFuel": "abc"}, {"heavyElements": 1}),
    ],
)
def test_malformed_trades_are_refused(offer: dict, demand: dict) -> None:
    ledger = _make_ledger()
    before = ledger.snapshot()

    assert execute_trade(ledger, offer, demand) is False
    assert ledger.snapshot() == before


def test_prices_follow_the_current_ledger() -> None:
    ledger = _make_ledger()
    offer = {"stellarNeutrinos": 100}
    demand = {"heavyElements": 2}

    assert quote_trade(ledger, offer, demand)[0].acceptable

    ledger.set(ResourceType.STELLAR_NEUTRINOS, 20_000)
    assert not quote_trade(ledger, offer, demand)[0].acceptable


@pytest.mark.parametrize("holding", [-100.0, -100.5, -5000.0])
def test_overdrawn_resources_are_infinitely_scarce(holding: float) -> None:
    ledger = _make_ledger(hydrogenFuel=holding)

    assert resource_scarcity(ledger, ResourceType.HYDROGEN_FUEL) == math.inf


def test_trades_touching_an_overdrawn_resource_are_refused() -> None:
    ledger = _make_ledger(hydrogenFuel=-100)
    before = ledger.snapshot()

    assert execute_trade(ledger, {"darkMatter": 10}, {"hydrogenFuel": 1}) is False
    assert execute_trade(ledger, {"hydrogenFuel": 1}, {"darkMatter": 10}) is False
    assert execute_trade(ledger, {"darkMatter": 10}, {"heavyElements": 0.1}) is True
    assert ledger[ResourceType.HYDROGEN_FUEL] == before["hydrogenFuel"]
