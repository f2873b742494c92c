"""Mastery progression: one entry point fanning out to tiers, achievements, paths."""

from __future__ import annotations

import copy
import logging
import random
from dataclasses import dataclass, field

from .constants import UNDERSTANDING_PER_MASTERY
from .models.achievements import AchievementEvaluator, CosmicAchievement
from .models.evolution import EvolutionGraph, EvolutionPath, EvolutionUpdate
from .models.mastery import MasteryTracker, ProgressionTier, TierAdvancement, TierLadder

log = logging.getLogger(__name__)


@dataclass
class ProgressionResult:
    """Everything that happened because of one mastery gain."""

    mastery_gained: float
    new_mastery_level: float
    tier_advancement: TierAdvancement | None
    achievements_unlocked: list[CosmicAchievement] = field(default_factory=list)
    evolution_progress: list[EvolutionUpdate] = field(default_factory=list)
    cosmic_understanding: float = 0.0


@dataclass
class NextMilestone:
    milestone_type: str  # "tier_advancement", "achievement", "evolution_stage"
    name: str
    description: str
    progress: float      # 0–1
    requirements: list[str] = field(default_factory=list)


@dataclass
class ProgressionStatus:
    current_tier: ProgressionTier
    mastery_levels: dict[str, float]
    total_cosmic_understanding: float
    unlocked_abilities: frozenset[str]
    achievement_count: int
    total_achievements: int
    evolution_progress: dict[str, float]
    next_milestones: list[NextMilestone] = field(default_factory=list)


class ProgressionSystem:
    """Owns the mastery half of the simulation."""

    def __init__(self, rng: random.Random | None = None, strict: bool = False) -> None:
        self.mastery = MasteryTracker()
        self.tiers = TierLadder(strict=strict)
        self.achievements = AchievementEvaluator(rng=rng)
        self.evolution = EvolutionGraph()
        self.total_cosmic_understanding: float = 0.0

    def add_mastery(self, skill: str, amount: float, context: str | None = None) -> ProgressionResult:
        new_level = self.mastery.add(skill, amount)
        tier_advancement = self.tiers.check_advancement(self.mastery.total)
        unlocked = self.achievements.evaluate(self.mastery, skill, new_level, context)
        self.total_cosmic_understanding += amount * UNDERSTANDING_PER_MASTERY
        evolution = self.evolution.update(skill, amount)

        return ProgressionResult(
            mastery_gained=amount,
            new_mastery_level=new_level,
            tier_advancement=tier_advancement,
            achievements_unlocked=unlocked,
            evolution_progress=evolution,
            cosmic_understanding=self.total_cosmic_understanding,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_mastery_level(self, skill: str) -> float:
        return self.mastery.level(skill)

    def get_current_tier(self) -> ProgressionTier:
        return copy.deepcopy(self.tiers.current)

    def has_unlocked_ability(self, name: str) -> bool:
        return self.tiers.has_ability(name)

    def get_achievements(self) -> list[CosmicAchievement]:
        return self.achievements.snapshot()

    def get_completed_achievements(self) -> list[CosmicAchievement]:
        return self.achievements.completed()

    def get_evolution_paths(self) -> list[EvolutionPath]:
        return self.evolution.snapshot()

    def get_progression_status(self) -> ProgressionStatus:
        return ProgressionStatus(
            current_tier=self.get_current_tier(),
            mastery_levels=dict(self.mastery.levels),
            total_cosmic_understanding=self.total_cosmic_understanding,
            unlocked_abilities=frozenset(self.tiers.unlocked_abilities),
            achievement_count=len(self.achievements.unlocked_ids),
            total_achievements=len(self.achievements.achievements),
            evolution_progress=dict(self.evolution.progress),
            next_milestones=self._next_milestones(),
        )

    def _next_milestones(self) -> list[NextMilestone]:
        milestones: list[NextMilestone] = []

        nxt = self.tiers.next_tier
        if nxt is not None:
            milestones.append(NextMilestone(
                milestone_type="tier_advancement",
                name=nxt.name,
                description=nxt.description,
                progress=min(1.0, self.mastery.total / nxt.required_mastery),
                requirements=[f"Reach {nxt.required_mastery:g} total mastery"],
            ))

        for path_id, path in self.evolution.paths.items():
            reached = self.evolution.current_stage(path_id)
            if reached >= len(path.stages):
                continue
            stage = path.stages[reached]
            milestones.append(NextMilestone(
                milestone_type="evolution_stage",
                name=stage.name,
                description=stage.description,
                progress=min(1.0, self.evolution.progress[path_id] / stage.threshold),
                requirements=[f"Reach {stage.threshold:g} progress on {path.name}"],
            ))

        for achievement in self.achievements.achievements.values():
            if achievement.achievement_id in self.achievements.unlocked_ids:
                continue
            milestones.append(NextMilestone(
                milestone_type="achievement",
                name=achievement.title,
                description=achievement.description,
                progress=0.0,
                requirements=[achievement.requirement],
            ))
        return milestones

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        return {
            "mastery_levels": dict(self.mastery.levels),
            "current_tier": self.tiers.current_index,
            "unlocked_abilities": sorted(self.tiers.unlocked_abilities),
            "total_cosmic_understanding": self.total_cosmic_understanding,
            "achieved_milestones": sorted(self.achievements.unlocked_ids),
            "granted_titles": list(self.achievements.granted_titles),
            "granted_rewards": list(self.achievements.granted_rewards),
            "evolution_progress": dict(self.evolution.progress),
        }

    @classmethod
    def from_dict(
        cls, data: dict, rng: random.Random | None = None, strict: bool = False,
    ) -> "ProgressionSystem":
        system = cls(rng=rng, strict=strict)
        system.mastery.levels.update(
            {skill: float(level) for skill, level in data.get("mastery_levels", {}).items()}
        )
        tier = int(data.get("current_tier", 0))
        system.tiers.current_index = max(0, min(tier, len(system.tiers.tiers) - 1))
        system.tiers.unlocked_abilities = set(data.get("unlocked_abilities", []))
        system.total_cosmic_understanding = data.get("total_cosmic_understanding", 0.0)
        system.achievements.restore(
            data.get("achieved_milestones", []),
            data.get("granted_titles", []),
            data.get("granted_rewards", []),
        )
        for path_id, progress in data.get("evolution_progress", {}).items():
            if path_id in system.evolution.progress:
                system.evolution.progress[path_id] = float(progress)
        return system
