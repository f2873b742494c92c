"""Barter trading against the cosmic market.

Trades are priced by scarcity × utility. Scarcity is read from the ledger
at call time, so the same trade can be fair one frame and refused the next.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Mapping

from ..constants import SCARCITY_FLOOR, SCARCITY_NUMERATOR, SCARCITY_OFFSET, TRADE_TOLERANCE
from .resources import ResourceDelta, ResourceLedger, ResourceType, coerce_delta

log = logging.getLogger(__name__)

RESOURCE_UTILITY: dict[ResourceType, float] = {
    ResourceType.DARK_ENERGY: 10.0,                 # Drives cosmic acceleration
    ResourceType.ANTIMATTER: 9.0,                   # Perfect energy source
    ResourceType.SPACETIME_CURVATURE: 8.0,          # Enables FTL travel
    ResourceType.ALCUBIERRE_DRIVE_POTENTIAL: 8.0,
    ResourceType.COSMIC_INFORMATION: 7.0,
    ResourceType.QUANTUM_ENTANGLEMENT: 6.0,         # Instant communication
    ResourceType.HEAVY_ELEMENTS: 4.0,               # Complex chemistry
    ResourceType.HYDROGEN_FUEL: 3.0,
    ResourceType.STELLAR_NEUTRINOS: 2.0,
}


def resource_scarcity(ledger: ResourceLedger, resource: ResourceType) -> float:
    """Inverse of abundance: scarcer resources are worth more.

    A resource overdrawn to ``-SCARCITY_OFFSET`` or below is infinitely scarce.
    """
    headroom = ledger.get(resource) + SCARCITY_OFFSET
    if headroom <= 0:
        return math.inf
    return max(SCARCITY_FLOOR, SCARCITY_NUMERATOR / headroom)


def resource_utility(resource: ResourceType) -> float:
    return RESOURCE_UTILITY.get(resource, 1.0)


def resource_value(ledger: ResourceLedger, resources: Mapping[ResourceType, float]) -> float:
    """Market value of a bundle at current ledger levels."""
    return sum(
        amount * resource_scarcity(ledger, resource) * resource_utility(resource)
        for resource, amount in resources.items()
        if amount
    )


@dataclass
class TradeQuote:
    """Valuation of a proposed trade, before execution."""

    offer_value: float
    demand_value: float
    affordable: bool
    negative_amounts: bool = False
    unknown_keys: list[str] = field(default_factory=list)

    @property
    def ratio(self) -> float:
        if self.offer_value <= 0:
            return float("inf")
        return self.demand_value / self.offer_value

    @property
    def acceptable(self) -> bool:
        return (
            not self.unknown_keys
            and not self.negative_amounts
            and self.offer_value > 0
            and self.ratio <= TRADE_TOLERANCE
            and self.affordable
        )


def quote_trade(
    ledger: ResourceLedger,
    offer: Mapping[ResourceType | str, float],
    demand: Mapping[ResourceType | str, float],
) -> tuple[TradeQuote, ResourceDelta, ResourceDelta]:
    """Price a trade without touching the ledger."""
    offer_delta, unknown_offer = coerce_delta(offer)
    demand_delta, unknown_demand = coerce_delta(demand)
    quote = TradeQuote(
        offer_value=resource_value(ledger, offer_delta),
        demand_value=resource_value(ledger, demand_delta),
        affordable=ledger.has(offer_delta),
        negative_amounts=any(v < 0 for v in (*offer_delta.values(), *demand_delta.values())),
        unknown_keys=unknown_offer + unknown_demand,
    )
    return quote, offer_delta, demand_delta


def execute_trade(
    ledger: ResourceLedger,
    offer: Mapping[ResourceType | str, float],
    demand: Mapping[ResourceType | str, float],
) -> bool:
    """Swap ``offer`` for ``demand`` if the market accepts. Returns True on success."""
    quote, offer_delta, demand_delta = quote_trade(ledger, offer, demand)
    if not quote.acceptable:
        log.debug(
            "Trade rejected (ratio %.3f, affordable=%s, unknown=%s)",
            quote.ratio, quote.affordable, quote.unknown_keys,
        )
        return False
    ledger.consume(offer_delta)
    ledger.add(demand_delta)
    return True
