"""Skill mastery and the tier ladder.

Mastery only ever grows. Tiers gate on the total across all skills and
advance at most one step per mastery gain; later gains pick up any
remaining advancement.
"""

from __future__ import annotations

import copy
import enum
import logging
import math
from dataclasses import dataclass, field

from ..errors import check_invariant

log = logging.getLogger(__name__)

DEFAULT_SKILLS: tuple[str, ...] = (
    "quantum_manipulation",
    "stellar_engineering",
    "consciousness_studies",
    "spacetime_control",
    "energy_mastery",
    "information_theory",
    "galactic_dynamics",
    "dark_sector_physics",
    "vacuum_engineering",
)


class CosmicScale(enum.Enum):
    """Physical scale a tier operates at."""

    PARTICLE = "particle"
    ATOMIC = "atomic"
    MOLECULAR = "molecular"
    PLANETARY = "planetary"
    STELLAR = "stellar"
    GALACTIC = "galactic"
    UNIVERSAL = "universal"
    MULTIVERSAL = "multiversal"


class UnlockType(enum.Enum):
    ABILITY = "ability"
    KNOWLEDGE = "knowledge"
    RESOURCE = "resource"
    TECHNOLOGY = "technology"
    COSMIC_LAW = "cosmic_law"
    REALITY_ACCESS = "reality_access"


@dataclass
class ProgressionUnlock:
    """A named capability granted when a tier is reached."""

    unlock_type: UnlockType
    name: str
    description: str
    mechanic_change: str = ""


@dataclass
class PrestigeReward:
    name: str
    description: str
    rarity: str = "common"


@dataclass
class ProgressionTier:
    """One rung of the ladder, gated on total mastery."""

    tier_id: str
    name: str
    description: str
    required_mastery: float
    cosmic_scale: CosmicScale
    unlocks: list[ProgressionUnlock] = field(default_factory=list)
    prestige_rewards: list[PrestigeReward] = field(default_factory=list)


@dataclass
class TierAdvancement:
    """Reported when a mastery gain moves the ladder up one tier."""

    tier_index: int
    new_tier: ProgressionTier
    unlocked_abilities: list[ProgressionUnlock]
    cosmic_scale_reached: CosmicScale


def create_default_tiers() -> list[ProgressionTier]:
    """Particle to universal, each an order of magnitude apart."""
    U = UnlockType
    return [
        ProgressionTier(
            tier_id="particle_manipulator",
            name="Particle Manipulator",
            description="Master the fundamental building blocks of reality.",
            required_mastery=0,
            cosmic_scale=CosmicScale.PARTICLE,
            unlocks=[
                ProgressionUnlock(U.ABILITY, "Quantum State Control",
                                  "Directly manipulate quantum states of individual particles.",
                                  "Can alter probability outcomes at quantum level."),
                ProgressionUnlock(U.KNOWLEDGE, "Uncertainty Principle Mastery",
                                  "Intuitive grasp of Heisenberg uncertainty.",
                                  "Precision vs speed trade-offs become visible."),
            ],
            prestige_rewards=[PrestigeReward(
                "Quantum Pioneer", "First to demonstrate macroscopic quantum effects.", "rare")],
        ),
        ProgressionTier(
            tier_id="stellar_architect",
            name="Stellar Architect",
            description="Design and control the birth, life, and death of stars.",
            required_mastery=1000,
            cosmic_scale=CosmicScale.STELLAR,
            unlocks=[
                ProgressionUnlock(U.ABILITY, "Stellar Lifecycle Mastery",
                                  "Control every phase of stellar evolution.",
                                  "Can accelerate, slow, or reverse stellar aging."),
                ProgressionUnlock(U.COSMIC_LAW, "Nuclear Fusion Optimization",
                                  "Modify fusion rates and stellar composition.",
                                  "Create stars with custom properties and lifespans."),
            ],
            prestige_rewards=[PrestigeReward(
                "Dyson Sphere Architect", "Master of stellar energy harvesting.", "epic")],
        ),
        ProgressionTier(
            tier_id="galactic_gardener",
            name="Galactic Gardener",
            description="Cultivate and guide the evolution of entire galaxies.",
            required_mastery=10000,
            cosmic_scale=CosmicScale.GALACTIC,
            unlocks=[
                ProgressionUnlock(U.ABILITY, "Dark Matter Sculpting",
                                  "Shape galactic structure through dark matter.",
                                  "Can modify galactic rotation curves."),
                ProgressionUnlock(U.REALITY_ACCESS, "Spacetime Curvature Control",
                                  "Bend spacetime on galactic scales.",
                                  "Can create galactic-scale gravitational effects."),
            ],
            prestige_rewards=[PrestigeReward(
                "Spiral Arm Weaver", "Master of galactic spiral structure.", "legendary")],
        ),
        ProgressionTier(
            tier_id="universal_consciousness",
            name="Universal Consciousness",
            description="Transcend physical existence to become one with cosmic awareness.",
            required_mastery=100000,
            cosmic_scale=CosmicScale.UNIVERSAL,
            unlocks=[
                ProgressionUnlock(U.REALITY_ACCESS, "Consciousness Field Manipulation",
                                  "Direct control over the universal consciousness field.",
                                  "Can influence decisions across the universe."),
                ProgressionUnlock(U.COSMIC_LAW, "Physical Constant Modification",
                                  "Alter the fundamental constants of physics.",
                                  "Can change the speed of light, G, and more."),
            ],
            prestige_rewards=[PrestigeReward(
                "Universal Empathy", "Feel all conscious experience in the universe.", "cosmic")],
        ),
    ]


class MasteryTracker:
    """Cumulative level per skill."""

    def __init__(self, skills: tuple[str, ...] = DEFAULT_SKILLS) -> None:
        self.levels: dict[str, float] = {skill: 0.0 for skill in skills}

    def add(self, skill: str, amount: float) -> float:
        """Raise ``skill`` by ``amount`` and return the new level."""
        if not math.isfinite(amount) or amount < 0:
            raise ValueError(f"Mastery gains must be non-negative, got {amount!r}")
        self.levels[skill] = self.levels.get(skill, 0.0) + amount
        return self.levels[skill]

    def level(self, skill: str) -> float:
        return self.levels.get(skill, 0.0)

    @property
    def total(self) -> float:
        return sum(self.levels.values())


class TierLadder:
    """Ordered tiers and the abilities they have granted."""

    def __init__(self, tiers: list[ProgressionTier] | None = None, strict: bool = False) -> None:
        self.tiers = tiers if tiers is not None else create_default_tiers()
        self.current_index: int = 0
        self.unlocked_abilities: set[str] = set()
        self.strict = strict

    @property
    def current(self) -> ProgressionTier:
        return self.tiers[self.current_index]

    @property
    def next_tier(self) -> ProgressionTier | None:
        if self.current_index + 1 < len(self.tiers):
            return self.tiers[self.current_index + 1]
        return None

    def check_advancement(self, total_mastery: float) -> TierAdvancement | None:
        """Advance to the nearest qualifying tier above the current one."""
        for index in range(self.current_index + 1, len(self.tiers)):
            tier = self.tiers[index]
            if total_mastery >= tier.required_mastery:
                self.current_index = index
                self._grant(tier)
                log.info("Reached tier %d: %s", index, tier.name)
                return TierAdvancement(
                    tier_index=index,
                    new_tier=copy.deepcopy(tier),
                    unlocked_abilities=copy.deepcopy(tier.unlocks),
                    cosmic_scale_reached=tier.cosmic_scale,
                )
        return None

    def _grant(self, tier: ProgressionTier) -> None:
        for unlock in tier.unlocks:
            if not check_invariant(
                unlock.name not in self.unlocked_abilities,
                f"ability {unlock.name!r} granted twice",
                self.strict,
            ):
                continue
            self.unlocked_abilities.add(unlock.name)

    def has_ability(self, name: str) -> bool:
        return name in self.unlocked_abilities
