"""Research tree: cosmic theories gated by resource thresholds.

Every research attempt that meets the requirements pays them in full,
whether or not it produces the breakthrough. Once a theory is unlocked it
is never researched (or paid for) again.
"""

from __future__ import annotations

import copy
import enum
import logging
from dataclasses import dataclass, field

from ..constants import BREAKTHROUGH_BASE, BREAKTHROUGH_PER_REQUIREMENT
from ..errors import check_invariant
from .resources import ResourceDelta, ResourceLedger, ResourceType

log = logging.getLogger(__name__)

PERMANENT = -1.0


class EffectType(enum.Enum):
    """What an unlocked theory does to the economy."""

    RESOURCE_GENERATION = "resource_generation"
    EFFICIENCY_BOOST = "efficiency_boost"
    NEW_ABILITY = "new_ability"
    UNIVERSE_MODIFICATION = "universe_modification"


@dataclass
class CosmicEffect:
    """A timed or permanent modifier produced by a breakthrough."""

    effect_type: EffectType
    magnitude: float
    target: str
    duration: float = PERMANENT   # -1 = never expires
    source: str = ""              # Theory that produced it

    @property
    def is_permanent(self) -> bool:
        return self.duration == PERMANENT

    @property
    def target_resource(self) -> ResourceType | None:
        return ResourceType.from_value(self.target)

    def to_dict(self) -> dict:
        return {
            "effect_type": self.effect_type.value,
            "magnitude": self.magnitude,
            "target": self.target,
            "duration": self.duration,
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CosmicEffect":
        return cls(
            effect_type=EffectType(data["effect_type"]),
            magnitude=data["magnitude"],
            target=data["target"],
            duration=data.get("duration", PERMANENT),
            source=data.get("source", ""),
        )


@dataclass
class Theory:
    """A node of the research tree."""

    name: str
    description: str
    requirements: ResourceDelta
    effects: list[CosmicEffect] = field(default_factory=list)
    real_world_basis: str = ""
    research_progress: float = 0.0
    unlocked: bool = False

    @property
    def breakthrough_threshold(self) -> float:
        return BREAKTHROUGH_BASE + BREAKTHROUGH_PER_REQUIREMENT * len(self.requirements)

    @property
    def progress_fraction(self) -> float:
        return min(1.0, self.research_progress / self.breakthrough_threshold)


def _effect(kind: EffectType, magnitude: float, target: str) -> CosmicEffect:
    return CosmicEffect(kind, magnitude, target)


def create_default_theories() -> list[Theory]:
    """The starting research tree, modelled on real astrophysics."""
    R = ResourceType
    E = EffectType
    return [
        Theory(
            name="Big Bang Nucleosynthesis",
            description="Understand how the first light elements formed in the early universe.",
            requirements={R.STRONG_NUCLEAR_FORCE: 200, R.COSMIC_INFORMATION: 100},
            effects=[
                _effect(E.RESOURCE_GENERATION, 2.0, R.HYDROGEN_FUEL.value),
                _effect(E.RESOURCE_GENERATION, 1.5, R.HELIUM_ASH.value),
            ],
            real_world_basis="BBN explains the observed abundances of light elements.",
        ),
        Theory(
            name="Cosmic Inflation Theory",
            description="Harness the exponential expansion that shaped spacetime itself.",
            requirements={R.DARK_ENERGY: 1000, R.QUANTUM_VACUUM_ENERGY: 500},
            effects=[
                _effect(E.UNIVERSE_MODIFICATION, 10, "spacetime_scale"),
                _effect(E.NEW_ABILITY, 1, "inflation_field_control"),
            ],
            real_world_basis="Guth's inflation explains cosmic homogeneity and flatness.",
        ),
        Theory(
            name="Dark Matter Dynamics",
            description="Manipulate the invisible scaffolding that shapes galactic structure.",
            requirements={R.DARK_MATTER: 2000, R.GRAVITATIONAL_FORCE: 100},
            effects=[
                _effect(E.EFFICIENCY_BOOST, 3.0, "galaxy_formation"),
                _effect(E.NEW_ABILITY, 1, "dark_matter_sculpting"),
            ],
            real_world_basis="Cold dark matter halos seed large-scale structure.",
        ),
        Theory(
            name="Alcubierre Warp Drive",
            description="Bend spacetime to travel faster than light without breaking relativity.",
            requirements={R.SPACETIME_CURVATURE: 1000, R.DARK_ENERGY: 5000},
            effects=[
                _effect(E.NEW_ABILITY, 1, "warp_travel"),
                _effect(E.RESOURCE_GENERATION, 1.0, R.ALCUBIERRE_DRIVE_POTENTIAL.value),
            ],
            real_world_basis="Alcubierre's solution to Einstein's field equations.",
        ),
        Theory(
            name="Holographic Principle",
            description="The universe's information lives on its boundary; edit reality's source.",
            requirements={R.HOLOGRAPHIC_DATA: 500, R.COSMIC_INFORMATION: 1000},
            effects=[
                _effect(E.EFFICIENCY_BOOST, 5.0, "information_processing"),
                _effect(E.NEW_ABILITY, 1, "reality_programming"),
            ],
            real_world_basis="Maldacena's AdS/CFT correspondence.",
        ),
        Theory(
            name="Quantum Entanglement Networks",
            description="Instantaneous information transfer across cosmic distances.",
            requirements={R.QUANTUM_ENTANGLEMENT: 200, R.COSMIC_INFORMATION: 500},
            effects=[
                _effect(E.NEW_ABILITY, 1, "quantum_communication"),
                _effect(E.EFFICIENCY_BOOST, 2.0, "coordination_efficiency"),
            ],
            real_world_basis="Quantum non-locality, 'spooky action at a distance'.",
        ),
        Theory(
            name="Stellar Engineering",
            description="Turn stars into power sources and computation engines.",
            requirements={R.STELLAR_NEUTRINOS: 1000, R.HEAVY_ELEMENTS: 500},
            effects=[
                _effect(E.NEW_ABILITY, 1, "dyson_sphere_construction"),
                _effect(E.RESOURCE_GENERATION, 10.0, "energy_output"),
            ],
            real_world_basis="Freeman Dyson's stellar megastructures.",
        ),
        Theory(
            name="Gravitational Wave Manipulation",
            description="Control ripples in spacetime to communicate and detect across the cosmos.",
            requirements={R.GRAVITATIONAL_WAVES: 100, R.SPACETIME_CURVATURE: 500},
            effects=[
                _effect(E.NEW_ABILITY, 1, "gravitational_detection"),
                _effect(E.EFFICIENCY_BOOST, 3.0, "cosmic_awareness"),
            ],
            real_world_basis="LIGO detections of black hole mergers.",
        ),
        Theory(
            name="Strange Matter Physics",
            description="Harness the most stable form of matter in the universe.",
            requirements={R.STRONG_NUCLEAR_FORCE: 500, R.HEAVY_ELEMENTS: 1000},
            effects=[
                _effect(E.RESOURCE_GENERATION, 1.0, "strange_matter"),
                _effect(E.NEW_ABILITY, 1, "matter_conversion"),
            ],
            real_world_basis="Witten's strange quark matter hypothesis.",
        ),
        Theory(
            name="False Vacuum Decay",
            description="Manipulate metastable quantum fields that could unmake reality.",
            requirements={R.QUANTUM_VACUUM_ENERGY: 2000, R.COSMIC_INFORMATION: 1500},
            effects=[
                _effect(E.UNIVERSE_MODIFICATION, 100, "reality_substrate"),
                _effect(E.NEW_ABILITY, 1, "vacuum_engineering"),
            ],
            real_world_basis="Coleman's work on quantum field theory vacuum states.",
        ),
    ]


class ResearchTree:
    """Tracks research progress and the effects produced by breakthroughs."""

    def __init__(self, theories: list[Theory] | None = None, strict: bool = False) -> None:
        self.theories: dict[str, Theory] = {
            t.name: t for t in (theories if theories is not None else create_default_theories())
        }
        self.active_effects: list[CosmicEffect] = []
        self.strict = strict

    def get(self, theory_id: str) -> Theory | None:
        return self.theories.get(theory_id)

    def conduct(self, ledger: ResourceLedger, theory_id: str, effort: float) -> bool:
        """Spend resources on a theory. True only on the breakthrough call."""
        theory = self.theories.get(theory_id)
        if theory is None or theory.unlocked:
            return False
        if not ledger.has(theory.requirements):
            log.debug("Research on %r blocked: requirements not met", theory_id)
            return False

        ledger.consume(theory.requirements)
        theory.research_progress += effort

        if theory.research_progress >= theory.breakthrough_threshold:
            self._unlock(theory)
            return True
        return False

    def _unlock(self, theory: Theory) -> None:
        if not check_invariant(
            not theory.unlocked, f"theory {theory.name!r} unlocked twice", self.strict,
        ):
            return
        theory.unlocked = True
        for effect in theory.effects:
            active = copy.copy(effect)
            active.source = theory.name
            self.active_effects.append(active)
        log.info("Breakthrough: %s (%d effects active)", theory.name, len(theory.effects))

    def tick_effects(self, dt: float) -> list[CosmicEffect]:
        """Age finite effects by ``dt``; drop and return the expired ones."""
        kept: list[CosmicEffect] = []
        expired: list[CosmicEffect] = []
        for effect in self.active_effects:
            if effect.is_permanent:
                kept.append(effect)
                continue
            effect.duration -= dt
            if effect.duration > 0:
                kept.append(effect)
            else:
                expired.append(effect)
        self.active_effects = kept
        return expired

    @property
    def unlocked_names(self) -> frozenset[str]:
        return frozenset(name for name, t in self.theories.items() if t.unlocked)

    def snapshot(self) -> list[Theory]:
        return [copy.deepcopy(t) for t in self.theories.values()]

    def effects_snapshot(self) -> list[CosmicEffect]:
        return [copy.copy(e) for e in self.active_effects]

    def to_dict(self) -> dict:
        return {
            "theories": {
                name: {"research_progress": t.research_progress, "unlocked": t.unlocked}
                for name, t in self.theories.items()
            },
            "active_effects": [e.to_dict() for e in self.active_effects],
        }

    @classmethod
    def from_dict(cls, data: dict, strict: bool = False) -> "ResearchTree":
        tree = cls(strict=strict)
        for name, state in data.get("theories", {}).items():
            theory = tree.theories.get(name)
            if theory is None:
                continue
            theory.research_progress = state.get("research_progress", 0.0)
            theory.unlocked = state.get("unlocked", False)
        tree.active_effects = [CosmicEffect.from_dict(e) for e in data.get("active_effects", [])]
        return tree
