"""Cosmic Genesis session engine (the host-facing surface).

One :class:`CosmicEngine` is built per play session and held by the host
game loop. It owns the economy and progression halves and the single
random source they share. Every query hands back copies.
"""

from __future__ import annotations

import random
from typing import Mapping

from .config import EngineConfig
from .economy import CosmicEconomy
from .models.achievements import CosmicAchievement
from .models.evolution import EvolutionPath
from .models.mastery import ProgressionTier
from .models.research import CosmicEffect, Theory
from .models.resources import ExtractionType, ResourceType
from .models.structures import StellarBody, StructureAction
from .progression import ProgressionResult, ProgressionStatus, ProgressionSystem


class CosmicEngine:
    """Core simulation: economy + mastery progression."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        rng: random.Random | None = None,
        economy: CosmicEconomy | None = None,
        progression: ProgressionSystem | None = None,
    ) -> None:
        self.config = config if config is not None else EngineConfig()
        self.rng = rng if rng is not None else random.Random(self.config.seed)

        strict = self.config.strict_invariants
        self.economy = economy if economy is not None else CosmicEconomy(rng=self.rng, strict=strict)
        self.progression = (
            progression if progression is not None else ProgressionSystem(rng=self.rng, strict=strict)
        )

    # ------------------------------------------------------------------
    # Economy commands
    # ------------------------------------------------------------------

    def extract_resources(
        self, extraction_type: ExtractionType | str, efficiency: float, time_spent: float,
    ) -> dict[str, float]:
        return self.economy.extract_resources(extraction_type, efficiency, time_spent)

    def trade_resources(
        self,
        offer: Mapping[ResourceType | str, float],
        demand: Mapping[ResourceType | str, float],
    ) -> bool:
        return self.economy.trade_resources(offer, demand)

    def conduct_research(self, theory_id: str, effort: float) -> bool:
        return self.economy.conduct_research(theory_id, effort)

    def manipulate_cosmic_structure(
        self, action: StructureAction | str, investment: float, target: StellarBody | None = None,
    ) -> bool:
        return self.economy.manipulate_cosmic_structure(action, investment, target)

    def update_physics(self, dt: float) -> None:
        """Advance the simulation by one host frame (``dt`` in ms)."""
        self.economy.update_physics(dt)

    # ------------------------------------------------------------------
    # Progression commands
    # ------------------------------------------------------------------

    def add_mastery(self, skill: str, amount: float, context: str | None = None) -> ProgressionResult:
        return self.progression.add_mastery(skill, amount, context)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_resources(self) -> dict[str, float]:
        return self.economy.get_resources()

    def get_resource(self, resource: ResourceType | str) -> float:
        return self.economy.get_resource(resource)

    def get_theories(self) -> list[Theory]:
        return self.economy.get_theories()

    def get_active_effects(self) -> list[CosmicEffect]:
        return self.economy.get_active_effects()

    def get_cosmic_time(self) -> float:
        return self.economy.get_cosmic_time()

    def get_entropy_level(self) -> float:
        return self.economy.get_entropy_level()

    def get_dark_energy_acceleration(self) -> float:
        return self.economy.get_dark_energy_acceleration()

    def get_mastery_level(self, skill: str) -> float:
        return self.progression.get_mastery_level(skill)

    def get_current_tier(self) -> ProgressionTier:
        return self.progression.get_current_tier()

    def get_progression_status(self) -> ProgressionStatus:
        return self.progression.get_progression_status()

    def has_unlocked_ability(self, name: str) -> bool:
        return self.progression.has_unlocked_ability(name)

    def get_achievements(self) -> list[CosmicAchievement]:
        return self.progression.get_achievements()

    def get_completed_achievements(self) -> list[CosmicAchievement]:
        return self.progression.get_completed_achievements()

    def get_evolution_paths(self) -> list[EvolutionPath]:
        return self.progression.get_evolution_paths()
