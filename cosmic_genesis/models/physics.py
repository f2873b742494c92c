"""Per-frame cosmic physics.

The pipeline runs in a fixed order each frame:

1. advance cosmic time
2. Hubble expansion dilutes matter (dark energy is a cosmological constant)
3. quantum fluctuations occasionally pay out vacuum energy
4. entropy rises and every positive quantity slowly decays
5. dark-energy acceleration bends spacetime
6. passive regeneration, including theory-driven generation
7. timed effects age and expire
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass

from ..constants import (
    COSMIC_TIME_SCALE,
    DARK_ENERGY_CURVATURE_RATE,
    DECAY_RATE,
    EFFECT_GENERATION_RATE,
    ENTROPY_RATE,
    EXPANSION_TIME_SCALE,
    FLUCTUATION_ENTANGLEMENT_BONUS,
    FLUCTUATION_RATE,
    FLUCTUATION_THRESHOLD,
    FLUCTUATION_VACUUM_BONUS,
    GRAVITATIONAL_WAVE_REGEN_RATE,
    HUBBLE_CONSTANT,
    INFORMATION_REGEN_RATE,
    NEUTRINO_REGEN_RATE,
)
from .research import EffectType, ResearchTree
from .resources import ResourceLedger, ResourceType

log = logging.getLogger(__name__)

# Quantities whose density falls with volume as the universe expands.
MATTER_LIKE: tuple[ResourceType, ...] = (ResourceType.DARK_MATTER, ResourceType.HYDROGEN_FUEL)


@dataclass
class PhysicsState:
    """Scalars evolved by the ticker alongside the ledger."""

    cosmic_time: float = 0.0               # billion years since the Big Bang
    entropy: float = 0.0
    quantum_fluctuations: float = 0.0
    dark_energy_acceleration: float = 0.0

    def to_dict(self) -> dict:
        return {
            "cosmic_time": self.cosmic_time,
            "entropy": self.entropy,
            "quantum_fluctuations": self.quantum_fluctuations,
            "dark_energy_acceleration": self.dark_energy_acceleration,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PhysicsState":
        return cls(
            cosmic_time=data.get("cosmic_time", 0.0),
            entropy=data.get("entropy", 0.0),
            quantum_fluctuations=data.get("quantum_fluctuations", 0.0),
            dark_energy_acceleration=data.get("dark_energy_acceleration", 0.0),
        )


class PhysicsTicker:
    """Runs the per-frame pipeline against a ledger, research tree and state."""

    def __init__(
        self,
        ledger: ResourceLedger,
        research: ResearchTree,
        state: PhysicsState,
        rng: random.Random | None = None,
    ) -> None:
        self.ledger = ledger
        self.research = research
        self.state = state
        self.rng = rng if rng is not None else random.Random()

    def update(self, dt: float) -> None:
        if not math.isfinite(dt) or dt < 0:
            raise ValueError(f"Frame time must be a non-negative number, got {dt!r}")
        if dt == 0:
            return

        self.state.cosmic_time += dt * COSMIC_TIME_SCALE
        self._expand(dt)
        self._fluctuate(dt)
        self._thermodynamics(dt)
        self._dark_energy(dt)
        self._regenerate(dt)
        self.research.tick_effects(dt)

    def _expand(self, dt: float) -> None:
        expansion_rate = HUBBLE_CONSTANT * (1 + self.state.dark_energy_acceleration)
        scale_factor = 1 + expansion_rate * dt * EXPANSION_TIME_SCALE
        dilution = 1 / scale_factor ** 3
        for resource in MATTER_LIKE:
            self.ledger.scale(resource, dilution)

    def _fluctuate(self, dt: float) -> None:
        # Heisenberg uncertainty: virtual particles
        self.state.quantum_fluctuations += self.rng.random() * dt * FLUCTUATION_RATE
        if self.state.quantum_fluctuations > FLUCTUATION_THRESHOLD:
            self.ledger.apply({
                ResourceType.QUANTUM_VACUUM_ENERGY: FLUCTUATION_VACUUM_BONUS,
                ResourceType.QUANTUM_ENTANGLEMENT: FLUCTUATION_ENTANGLEMENT_BONUS,
            })
            self.state.quantum_fluctuations = 0.0
            log.debug("Quantum fluctuation burst at t=%.4f", self.state.cosmic_time)

    def _thermodynamics(self, dt: float) -> None:
        self.state.entropy += dt * ENTROPY_RATE
        # Flat decay; not scaled by entropy.
        decay = 1 - DECAY_RATE * dt
        for resource, amount in list(self.ledger.items()):
            if amount > 0:
                self.ledger.scale(resource, decay)

    def _dark_energy(self, dt: float) -> None:
        if self.state.dark_energy_acceleration > 0:
            self.ledger.apply({
                ResourceType.SPACETIME_CURVATURE:
                    self.state.dark_energy_acceleration * dt * DARK_ENERGY_CURVATURE_RATE,
            })

    def _regenerate(self, dt: float) -> None:
        self.ledger.apply({
            ResourceType.STELLAR_NEUTRINOS: dt * NEUTRINO_REGEN_RATE,
            ResourceType.GRAVITATIONAL_WAVES: dt * GRAVITATIONAL_WAVE_REGEN_RATE,
            ResourceType.COSMIC_INFORMATION: dt * INFORMATION_REGEN_RATE,
        })
        for effect in self.research.active_effects:
            if effect.effect_type != EffectType.RESOURCE_GENERATION:
                continue
            resource = effect.target_resource
            if resource is None:
                continue
            self.ledger.apply({resource: effect.magnitude * dt * EFFECT_GENERATION_RATE})
