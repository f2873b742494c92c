"""Cosmic economy: ledger, research, structure manipulation and the physics tick."""

from __future__ import annotations

import logging
import math
import random
from typing import Mapping

from .constants import EXTRACTION_ENTROPY_RATE
from .models.physics import PhysicsState, PhysicsTicker
from .models.research import CosmicEffect, ResearchTree, Theory
from .models.resources import (
    ExtractionType,
    ResourceLedger,
    ResourceType,
    delta_to_dict,
    extract,
)
from .models.structures import StellarBody, StructureAction, manipulate_structure
from .models.trade import execute_trade

log = logging.getLogger(__name__)


def _valid_amount(value: float) -> bool:
    return math.isfinite(value) and value >= 0


class CosmicEconomy:
    """Owns the economy half of the simulation."""

    def __init__(
        self,
        rng: random.Random | None = None,
        ledger: ResourceLedger | None = None,
        research: ResearchTree | None = None,
        physics: PhysicsState | None = None,
        strict: bool = False,
    ) -> None:
        self.ledger = ledger if ledger is not None else ResourceLedger()
        self.research = research if research is not None else ResearchTree(strict=strict)
        self.physics = physics if physics is not None else PhysicsState()
        self.ticker = PhysicsTicker(self.ledger, self.research, self.physics, rng=rng)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def extract_resources(
        self, extraction_type: ExtractionType | str, efficiency: float, time_spent: float,
    ) -> dict[str, float]:
        """Harvest resources; returns the applied deltas keyed by resource name."""
        delta = extract(self.ledger, extraction_type, efficiency, time_spent)
        if delta:
            self.physics.entropy += max(0.0, time_spent * EXTRACTION_ENTROPY_RATE)
        return delta_to_dict(delta)

    def trade_resources(
        self,
        offer: Mapping[ResourceType | str, float],
        demand: Mapping[ResourceType | str, float],
    ) -> bool:
        return execute_trade(self.ledger, offer, demand)

    def conduct_research(self, theory_id: str, effort: float) -> bool:
        if not _valid_amount(effort):
            log.debug("Rejecting research effort %r", effort)
            return False
        return self.research.conduct(self.ledger, theory_id, effort)

    def manipulate_cosmic_structure(
        self, action: StructureAction | str, investment: float, target: StellarBody | None = None,
    ) -> bool:
        if not _valid_amount(investment):
            log.debug("Rejecting structure investment %r", investment)
            return False
        success, acceleration = manipulate_structure(self.ledger, action, investment, target)
        if success:
            self.physics.dark_energy_acceleration += acceleration
        return success

    def update_physics(self, dt: float) -> None:
        self.ticker.update(dt)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_resources(self) -> dict[str, float]:
        return self.ledger.snapshot()

    def get_resource(self, resource: ResourceType | str) -> float:
        return self.ledger.get(resource)

    def get_theories(self) -> list[Theory]:
        return self.research.snapshot()

    def get_active_effects(self) -> list[CosmicEffect]:
        return self.research.effects_snapshot()

    def get_cosmic_time(self) -> float:
        return self.physics.cosmic_time

    def get_entropy_level(self) -> float:
        return self.physics.entropy

    def get_dark_energy_acceleration(self) -> float:
        return self.physics.dark_energy_acceleration

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        return {
            "resources": self.ledger.to_dict(),
            "research": self.research.to_dict(),
            "physics": self.physics.to_dict(),
        }

    @classmethod
    def from_dict(
        cls, data: dict, rng: random.Random | None = None, strict: bool = False,
    ) -> "CosmicEconomy":
        return cls(
            rng=rng,
            ledger=ResourceLedger.from_dict(data.get("resources", {})),
            research=ResearchTree.from_dict(data.get("research", {}), strict=strict),
            physics=PhysicsState.from_dict(data.get("physics", {})),
        )
