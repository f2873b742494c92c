"""Cosmic achievements modelled on real scientific milestones.

Each achievement carries a deterministic predicate over the mastery
ledger. Once unlocked an achievement is never evaluated again.
"""

from __future__ import annotations

import copy
import enum
import logging
import random
from dataclasses import dataclass, field
from typing import Callable

from .mastery import MasteryTracker

log = logging.getLogger(__name__)


class AchievementCategory(enum.Enum):
    SCIENTIFIC = "scientific"
    ETHICAL = "ethical"
    STRATEGIC = "strategic"
    CREATIVE = "creative"
    TRANSCENDENT = "transcendent"


class AchievementDifficulty(enum.Enum):
    NOVICE = "novice"
    ADEPT = "adept"
    EXPERT = "expert"
    MASTER = "master"
    GRANDMASTER = "grandmaster"
    COSMIC = "cosmic"


class RewardType(enum.Enum):
    TITLE = "title"
    ABILITY = "ability"
    KNOWLEDGE = "knowledge"
    COSMIC_ARTIFACT = "cosmic_artifact"
    REALITY_MODIFICATION = "reality_modification"


@dataclass
class AchievementReward:
    reward_type: RewardType
    name: str
    effect: str


@dataclass
class AchievementContext:
    """Everything a predicate may look at for one mastery gain."""

    skill: str
    level: float
    context: str | None
    mastery: MasteryTracker
    rng: random.Random


Predicate = Callable[[AchievementContext], bool]


def skill_at_least(**thresholds: float) -> Predicate:
    """Predicate: every named skill has reached its threshold."""

    def check(ctx: AchievementContext) -> bool:
        return all(ctx.mastery.level(skill) >= value for skill, value in thresholds.items())

    return check


def any_skill_at_least(**thresholds: float) -> Predicate:
    """Predicate: at least one named skill has reached its threshold."""

    def check(ctx: AchievementContext) -> bool:
        return any(ctx.mastery.level(skill) >= value for skill, value in thresholds.items())

    return check


@dataclass
class CosmicAchievement:
    """A one-way milestone with rewards."""

    achievement_id: str
    title: str
    description: str
    category: AchievementCategory
    difficulty: AchievementDifficulty
    requirement: str
    predicate: Predicate
    rewards: list[AchievementReward] = field(default_factory=list)
    scientific_significance: str = ""
    unlocked: bool = False


def create_default_achievements() -> list[CosmicAchievement]:
    C = AchievementCategory
    D = AchievementDifficulty
    T = RewardType
    return [
        CosmicAchievement(
            achievement_id="first_fusion",
            title="Prometheus's Fire",
            description="Ignite your first controlled fusion reaction.",
            category=C.SCIENTIFIC,
            difficulty=D.NOVICE,
            requirement="Reach 100 mastery in energy mastery or stellar engineering.",
            predicate=any_skill_at_least(energy_mastery=100, stellar_engineering=100),
            rewards=[
                AchievementReward(T.TITLE, "Fire Bringer", "All fusion reactions 20% more efficient"),
                AchievementReward(T.KNOWLEDGE, "Nuclear Physics Intuition",
                                  "See fusion probabilities in real time"),
            ],
            scientific_significance="Fusion powers every star.",
        ),
        CosmicAchievement(
            achievement_id="gravity_waves_detected",
            title="Ripples in Spacetime",
            description="Detect and analyse gravitational waves from cosmic events.",
            category=C.SCIENTIFIC,
            difficulty=D.EXPERT,
            requirement="Reach 500 mastery in spacetime control.",
            predicate=skill_at_least(spacetime_control=500),
            rewards=[
                AchievementReward(T.ABILITY, "Gravitational Wave Communication",
                                  "Send messages via spacetime distortions"),
            ],
            scientific_significance="Gravitational waves confirm general relativity.",
        ),
        CosmicAchievement(
            achievement_id="consciousness_transfer",
            title="Digital Immortality",
            description="Transfer consciousness between physical and digital substrates.",
            category=C.TRANSCENDENT,
            difficulty=D.GRANDMASTER,
            requirement="Reach 5000 consciousness studies and 2000 information theory.",
            predicate=skill_at_least(consciousness_studies=5000, information_theory=2000),
            rewards=[
                AchievementReward(T.REALITY_MODIFICATION, "Substrate Independence",
                                  "Consciousness can exist in any sufficiently complex system"),
            ],
            scientific_significance="Questions the nature of identity.",
        ),
        CosmicAchievement(
            achievement_id="vacuum_engineering",
            title="Master of Nothing",
            description="Manipulate the quantum vacuum without triggering false vacuum decay.",
            category=C.SCIENTIFIC,
            difficulty=D.COSMIC,
            requirement="Reach 10000 vacuum engineering and 5000 quantum manipulation.",
            predicate=skill_at_least(vacuum_engineering=10000, quantum_manipulation=5000),
            rewards=[
                AchievementReward(T.COSMIC_ARTIFACT, "Vacuum Engine",
                                  "Unlimited energy from quantum fluctuations"),
            ],
            scientific_significance="Ultimate mastery of quantum field theory.",
        ),
    ]


class AchievementEvaluator:
    """Checks predicates after every mastery gain and applies rewards."""

    def __init__(
        self,
        achievements: list[CosmicAchievement] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        source = achievements if achievements is not None else create_default_achievements()
        self.achievements: dict[str, CosmicAchievement] = {a.achievement_id: a for a in source}
        self.unlocked_ids: set[str] = set()
        self.granted_titles: list[str] = []
        self.granted_rewards: list[str] = []
        self.rng = rng if rng is not None else random.Random()

    def evaluate(
        self, mastery: MasteryTracker, skill: str, level: float, context: str | None = None,
    ) -> list[CosmicAchievement]:
        """Unlock every pending achievement whose predicate now holds."""
        ctx = AchievementContext(skill=skill, level=level, context=context, mastery=mastery, rng=self.rng)
        newly: list[CosmicAchievement] = []
        for achievement in self.achievements.values():
            if achievement.achievement_id in self.unlocked_ids:
                continue
            if achievement.predicate(ctx):
                self._unlock(achievement)
                newly.append(copy.deepcopy(achievement))
        return newly

    def _unlock(self, achievement: CosmicAchievement) -> None:
        achievement.unlocked = True
        self.unlocked_ids.add(achievement.achievement_id)
        log.info("Achievement unlocked: %s", achievement.title)
        self.apply_rewards(achievement)

    def apply_rewards(self, achievement: CosmicAchievement) -> None:
        for reward in achievement.rewards:
            if reward.reward_type == RewardType.TITLE:
                self.granted_titles.append(reward.name)
            else:
                self.granted_rewards.append(reward.name)
            log.info("Achievement reward applied: %s - %s", reward.name, reward.effect)

    def restore(self, unlocked_ids: list[str], titles: list[str], rewards: list[str]) -> None:
        """Reinstate saved unlocks without re-applying rewards."""
        for achievement_id in unlocked_ids:
            achievement = self.achievements.get(achievement_id)
            if achievement is None:
                continue
            achievement.unlocked = True
            self.unlocked_ids.add(achievement_id)
        self.granted_titles = list(titles)
        self.granted_rewards = list(rewards)

    def snapshot(self) -> list[CosmicAchievement]:
        return [copy.deepcopy(a) for a in self.achievements.values()]

    def completed(self) -> list[CosmicAchievement]:
        return [copy.deepcopy(a) for a in self.achievements.values() if a.achievement_id in self.unlocked_ids]
