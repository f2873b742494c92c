"""Cosmic resource ledger and extraction for Cosmic Genesis.

The ledger holds a fixed set of twenty quantities seeded in rough
proportion to the composition of the real universe (69% dark energy,
26% dark matter, 5% baryonic). Values are not floored: consumption may
drive a quantity below zero.
"""

from __future__ import annotations

import enum
import logging
import math
from typing import Iterator, Mapping

log = logging.getLogger(__name__)


class ResourceType(enum.Enum):
    """The closed set of ledger keys."""

    # Fundamental forces
    STRONG_NUCLEAR_FORCE = "strongNuclearForce"
    WEAK_NUCLEAR_FORCE = "weakNuclearForce"
    ELECTROMAGNETIC_FORCE = "electromagneticForce"
    GRAVITATIONAL_FORCE = "gravitationalForce"

    # Exotic matter & energy
    DARK_MATTER = "darkMatter"
    DARK_ENERGY = "darkEnergy"
    ANTIMATTER = "antimatter"
    QUANTUM_VACUUM_ENERGY = "quantumVacuumEnergy"

    # Stellar byproducts
    HYDROGEN_FUEL = "hydrogenFuel"
    HELIUM_ASH = "heliumAsh"
    HEAVY_ELEMENTS = "heavyElements"
    STELLAR_NEUTRINOS = "stellarNeutrinos"

    # Spacetime
    SPACETIME_CURVATURE = "spacetimeCurvature"
    GRAVITATIONAL_WAVES = "gravitationalWaves"
    ALCUBIERRE_DRIVE_POTENTIAL = "alcubierreDrivePotential"
    WORMHOLE_STABILITY = "wormholeStability"

    # Information & complexity
    COSMIC_INFORMATION = "cosmicInformation"
    EMERGENT_COMPLEXITY = "emergentComplexity"
    QUANTUM_ENTANGLEMENT = "quantumEntanglement"
    HOLOGRAPHIC_DATA = "holographicData"

    @classmethod
    def from_value(cls, value: "ResourceType | str") -> "ResourceType | None":
        """Resolve a member from itself, its value or its name; None if unknown."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        try:
            return cls(text)
        except ValueError:
            pass
        return cls.__members__.get(text.upper())


# Partial delta record: only the keys that change.
ResourceDelta = dict[ResourceType, float]

STARTING_RESOURCES: dict[ResourceType, float] = {
    ResourceType.STRONG_NUCLEAR_FORCE: 100.0,
    ResourceType.WEAK_NUCLEAR_FORCE: 50.0,
    ResourceType.ELECTROMAGNETIC_FORCE: 75.0,
    ResourceType.GRAVITATIONAL_FORCE: 25.0,
    ResourceType.DARK_MATTER: 2600.0,
    ResourceType.DARK_ENERGY: 6900.0,
    ResourceType.ANTIMATTER: 1.0,             # Extremely rare
    ResourceType.QUANTUM_VACUUM_ENERGY: 1000.0,
    ResourceType.HYDROGEN_FUEL: 5000.0,       # Most abundant element
    ResourceType.HELIUM_ASH: 1200.0,
    ResourceType.HEAVY_ELEMENTS: 50.0,
    ResourceType.STELLAR_NEUTRINOS: 500.0,
    ResourceType.SPACETIME_CURVATURE: 0.0,
    ResourceType.GRAVITATIONAL_WAVES: 0.0,
    ResourceType.ALCUBIERRE_DRIVE_POTENTIAL: 0.0,
    ResourceType.WORMHOLE_STABILITY: 0.0,
    ResourceType.COSMIC_INFORMATION: 100.0,
    ResourceType.EMERGENT_COMPLEXITY: 10.0,
    ResourceType.QUANTUM_ENTANGLEMENT: 25.0,
    ResourceType.HOLOGRAPHIC_DATA: 50.0,
}


def coerce_delta(
    raw: Mapping[ResourceType | str, float],
) -> tuple[ResourceDelta, list[str]]:
    """Convert a loosely keyed mapping to a typed delta.

    Returns the delta and the list of keys that did not name a resource or
    carried a non-numeric or non-finite amount.
    Repeated keys (e.g. an enum member and its string value) are summed.
    """
    delta: ResourceDelta = {}
    unknown: list[str] = []
    for key, amount in raw.items():
        resource = ResourceType.from_value(key)
        if resource is None:
            unknown.append(str(key))
            continue
        try:
            value = float(amount or 0.0)
        except (TypeError, ValueError):
            unknown.append(str(key))
            continue
        if not math.isfinite(value):
            unknown.append(str(key))
            continue
        delta[resource] = delta.get(resource, 0.0) + value
    return delta, unknown


def delta_to_dict(delta: Mapping[ResourceType, float]) -> dict[str, float]:
    """Serialise a delta with the ledger's string keys."""
    return {resource.value: amount for resource, amount in delta.items()}


class ResourceLedger:
    """Account of every cosmic quantity in the session."""

    def __init__(self, amounts: Mapping[ResourceType | str, float] | None = None) -> None:
        self._amounts: dict[ResourceType, float] = {r: 0.0 for r in ResourceType}
        seed = STARTING_RESOURCES if amounts is None else amounts
        for key, value in seed.items():
            resource = ResourceType.from_value(key)
            if resource is not None:
                self._amounts[resource] = float(value)

    def get(self, resource: ResourceType | str) -> float:
        """Current amount; unknown keys read as zero."""
        key = ResourceType.from_value(resource)
        if key is None:
            return 0.0
        return self._amounts[key]

    def set(self, resource: ResourceType, amount: float) -> None:
        self._amounts[resource] = float(amount)

    def __getitem__(self, resource: ResourceType | str) -> float:
        return self.get(resource)

    def __iter__(self) -> Iterator[ResourceType]:
        return iter(self._amounts)

    def items(self):
        return self._amounts.items()

    def apply(self, delta: Mapping[ResourceType, float]) -> None:
        """Add every amount in ``delta`` (negative amounts subtract)."""
        for resource, amount in delta.items():
            self._amounts[resource] += amount

    def has(self, requirements: Mapping[ResourceType, float]) -> bool:
        """True if every required amount is currently held."""
        return all(self._amounts[r] >= amount for r, amount in requirements.items())

    def consume(self, requirements: Mapping[ResourceType, float]) -> None:
        for resource, amount in requirements.items():
            self._amounts[resource] -= amount

    def add(self, resources: Mapping[ResourceType, float]) -> None:
        self.apply(resources)

    def scale(self, resource: ResourceType, factor: float) -> None:
        self._amounts[resource] *= factor

    def snapshot(self) -> dict[str, float]:
        """Plain copy keyed by resource name, safe to hand to the host."""
        return {resource.value: amount for resource, amount in self._amounts.items()}

    def to_dict(self) -> dict[str, float]:
        return self.snapshot()

    @classmethod
    def from_dict(cls, data: Mapping[str, float]) -> "ResourceLedger":
        ledger = cls({})
        for key, value in data.items():
            resource = ResourceType.from_value(key)
            if resource is not None:
                ledger._amounts[resource] = float(value)
        return ledger


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

class ExtractionType(enum.Enum):
    """Ways of harvesting resources from cosmic phenomena."""

    STELLAR_NUCLEOSYNTHESIS = "stellar_nucleosynthesis"
    DARK_MATTER_HARVESTING = "dark_matter_harvesting"
    VACUUM_ENERGY_TAP = "vacuum_energy_tap"
    SPACETIME_MINING = "spacetime_mining"
    INFORMATION_PROCESSING = "information_processing"


# type → (base rate, {resource: multiple of rate})
_EXTRACTION_TABLE: dict[ExtractionType, tuple[float, dict[ResourceType, float]]] = {
    # 4 H -> 1 He, neutrinos released, trace metals
    ExtractionType.STELLAR_NUCLEOSYNTHESIS: (0.1, {
        ResourceType.HYDROGEN_FUEL: -4.0,
        ResourceType.HELIUM_ASH: 1.0,
        ResourceType.STELLAR_NEUTRINOS: 2.0,
        ResourceType.HEAVY_ELEMENTS: 0.01,
    }),
    # Cosmic web filaments
    ExtractionType.DARK_MATTER_HARVESTING: (0.05, {
        ResourceType.DARK_MATTER: 1.0,
        ResourceType.GRAVITATIONAL_FORCE: 0.1,
    }),
    # Casimir effect
    ExtractionType.VACUUM_ENERGY_TAP: (0.02, {
        ResourceType.QUANTUM_VACUUM_ENERGY: 1.0,
        ResourceType.QUANTUM_ENTANGLEMENT: 0.5,
    }),
    ExtractionType.SPACETIME_MINING: (0.01, {
        ResourceType.SPACETIME_CURVATURE: 1.0,
        ResourceType.GRAVITATIONAL_WAVES: 0.3,
    }),
    # Landauer's principle
    ExtractionType.INFORMATION_PROCESSING: (0.08, {
        ResourceType.COSMIC_INFORMATION: 1.0,
        ResourceType.EMERGENT_COMPLEXITY: 0.2,
    }),
}


def extraction_deltas(
    extraction_type: ExtractionType | str, efficiency: float, time_spent: float,
) -> ResourceDelta:
    """Deterministic deltas for one extraction; empty for unknown types."""
    try:
        kind = ExtractionType(extraction_type)
    except ValueError:
        return {}
    base_rate, multiples = _EXTRACTION_TABLE[kind]
    rate = efficiency * time_spent * base_rate
    return {resource: rate * multiple for resource, multiple in multiples.items()}


def extract(
    ledger: ResourceLedger,
    extraction_type: ExtractionType | str,
    efficiency: float,
    time_spent: float,
) -> ResourceDelta:
    """Apply an extraction to the ledger and return the applied deltas.

    There is no rollback and no floor check; unknown types are a no-op.
    """
    delta = extraction_deltas(extraction_type, efficiency, time_spent)
    if not delta:
        log.debug("Ignoring unknown extraction type %r", extraction_type)
        return delta
    ledger.apply(delta)
    return delta
