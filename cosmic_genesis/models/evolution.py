"""Evolution paths: branching ladders fed by weighted mastery.

Unlike the tier ladder, a path jumps straight to the highest stage its
progress qualifies for, so one large gain can skip several stages.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field

from ..constants import DEFAULT_PATH_AFFINITY

log = logging.getLogger(__name__)


@dataclass
class EvolutionStage:
    name: str
    description: str
    threshold: float
    capabilities: list[str] = field(default_factory=list)
    consciousness_level: int = 0
    cosmic_understanding: int = 0


@dataclass
class Transcendence:
    name: str
    description: str
    requirements: list[str] = field(default_factory=list)
    ending_type: str = "ascension"  # "victory", "transformation", "ascension", "unity"


@dataclass
class EvolutionPath:
    path_id: str
    name: str
    philosophy: str
    stages: list[EvolutionStage] = field(default_factory=list)
    final_transcendence: Transcendence | None = None

    def stage_for(self, progress: float) -> int:
        """1-based index of the highest stage reached; 0 if none."""
        for index in range(len(self.stages) - 1, -1, -1):
            if progress >= self.stages[index].threshold:
                return index + 1
        return 0


@dataclass
class EvolutionUpdate:
    """Emitted when a path reaches a higher stage."""

    path_id: str
    path_name: str
    stage_index: int
    new_stage: EvolutionStage
    new_capabilities: list[str]
    consciousness_level: int


# path → skill → weight; unlisted pairs weigh DEFAULT_PATH_AFFINITY
PATH_AFFINITIES: dict[str, dict[str, float]] = {
    "scientific_transcendence": {
        "quantum_manipulation": 1.5,
        "information_theory": 1.8,
        "vacuum_engineering": 2.0,
    },
    "cosmic_gardener": {
        "stellar_engineering": 1.5,
        "consciousness_studies": 2.0,
        "galactic_dynamics": 1.3,
    },
}


def path_affinity(path_id: str, skill: str) -> float:
    return PATH_AFFINITIES.get(path_id, {}).get(skill, DEFAULT_PATH_AFFINITY)


def create_default_paths() -> list[EvolutionPath]:
    return [
        EvolutionPath(
            path_id="scientific_transcendence",
            name="The Path of Knowledge",
            philosophy="Through understanding comes power, through power comes responsibility.",
            stages=[
                EvolutionStage("Curious Observer", "Begin to question the nature of reality.",
                               100, ["advanced_observation", "hypothesis_formation"], 1, 1),
                EvolutionStage("Quantum Theorist", "Grasp the weirdness of quantum mechanics.",
                               1000, ["quantum_intuition", "probability_manipulation"], 2, 3),
                EvolutionStage("Cosmic Physicist", "Understand the universe as a unified system.",
                               10000, ["unified_field_theory", "spacetime_engineering"], 4, 7),
                EvolutionStage("Reality Theorist", "See beyond the veil of apparent reality.",
                               100000, ["reality_debugging", "existence_programming"], 8, 10),
            ],
            final_transcendence=Transcendence(
                "The Omniscient",
                "Perfect knowledge of all that is, was, and could be.",
                ["complete_understanding", "ethical_perfection", "cosmic_responsibility"],
                "ascension",
            ),
        ),
        EvolutionPath(
            path_id="cosmic_gardener",
            name="The Path of Nurturing",
            philosophy="To create and protect life throughout the cosmos.",
            stages=[
                EvolutionStage("Life Tender", "Care for individual organisms and ecosystems.",
                               50, ["biological_enhancement", "ecosystem_design"], 1, 1),
                EvolutionStage("World Shaper", "Create conditions for life to flourish.",
                               500, ["planetary_engineering", "atmospheric_design"], 2, 2),
                EvolutionStage("Stellar Gardener", "Tend stellar nurseries and cosmic evolution.",
                               5000, ["stellar_cultivation", "galaxy_ecology"], 5, 6),
                EvolutionStage("Universal Shepherd", "Guide the evolution of consciousness itself.",
                               50000, ["consciousness_cultivation", "universal_ecology"], 9, 8),
            ],
            final_transcendence=Transcendence(
                "The Eternal Gardener",
                "Forever devoted to nurturing all forms of consciousness.",
                ["universal_compassion", "infinite_patience", "ecological_mastery"],
                "unity",
            ),
        ),
    ]


class EvolutionGraph:
    """Per-path progress and stage tracking."""

    def __init__(self, paths: list[EvolutionPath] | None = None) -> None:
        source = paths if paths is not None else create_default_paths()
        self.paths: dict[str, EvolutionPath] = {p.path_id: p for p in source}
        self.progress: dict[str, float] = {path_id: 0.0 for path_id in self.paths}

    def update(self, skill: str, mastery_gained: float) -> list[EvolutionUpdate]:
        updates: list[EvolutionUpdate] = []
        for path_id, path in self.paths.items():
            before = self.progress.get(path_id, 0.0)
            after = before + mastery_gained * path_affinity(path_id, skill)
            self.progress[path_id] = after

            old_stage = path.stage_for(before)
            new_stage = path.stage_for(after)
            if new_stage > old_stage:
                stage = path.stages[new_stage - 1]
                log.info("%s reached stage %d: %s", path.name, new_stage, stage.name)
                updates.append(EvolutionUpdate(
                    path_id=path_id,
                    path_name=path.name,
                    stage_index=new_stage,
                    new_stage=copy.deepcopy(stage),
                    new_capabilities=list(stage.capabilities),
                    consciousness_level=stage.consciousness_level,
                ))
        return updates

    def current_stage(self, path_id: str) -> int:
        path = self.paths.get(path_id)
        if path is None:
            return 0
        return path.stage_for(self.progress.get(path_id, 0.0))

    def snapshot(self) -> list[EvolutionPath]:
        return [copy.deepcopy(p) for p in self.paths.values()]
