"""Large-scale cosmic manipulation: expansion, filaments, stars, wormholes."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from .resources import ResourceDelta, ResourceLedger, ResourceType

log = logging.getLogger(__name__)


class StructureAction(enum.Enum):
    """Reshaping actions the player can fund."""

    ACCELERATE_EXPANSION = "accelerate_expansion"
    CREATE_GALAXY_FILAMENT = "create_galaxy_filament"
    IGNITE_STELLAR_FUSION = "ignite_stellar_fusion"
    OPEN_WORMHOLE = "open_wormhole"


@dataclass
class StellarBody:
    """Minimal view of a star the host wants ignited."""

    name: str
    stellar_type: str = "protostar"
    luminosity: float = 0.0


def structure_cost(action: StructureAction, investment: float) -> ResourceDelta:
    """Resources consumed by ``action`` at the given investment."""
    R = ResourceType
    if action == StructureAction.ACCELERATE_EXPANSION:
        return {R.DARK_ENERGY: investment * 10}
    if action == StructureAction.CREATE_GALAXY_FILAMENT:
        return {R.DARK_MATTER: investment * 100, R.GRAVITATIONAL_FORCE: investment * 50}
    if action == StructureAction.IGNITE_STELLAR_FUSION:
        return {R.HYDROGEN_FUEL: investment * 1000, R.STRONG_NUCLEAR_FORCE: investment * 10}
    if action == StructureAction.OPEN_WORMHOLE:
        return {R.SPACETIME_CURVATURE: investment * 500, R.ALCUBIERRE_DRIVE_POTENTIAL: investment * 100}
    return {}


def manipulate_structure(
    ledger: ResourceLedger,
    action: StructureAction | str,
    investment: float,
    target: StellarBody | None = None,
) -> tuple[bool, float]:
    """Attempt a structure action.

    Returns ``(success, dark_energy_acceleration_gained)``. Unknown actions
    and unaffordable costs leave the ledger untouched.
    """
    try:
        kind = StructureAction(action)
    except ValueError:
        log.debug("Unknown structure action %r", action)
        return False, 0.0

    cost = structure_cost(kind, investment)
    if not ledger.has(cost):
        return False, 0.0
    ledger.consume(cost)

    acceleration = 0.0
    if kind == StructureAction.ACCELERATE_EXPANSION:
        acceleration = investment * 0.01
    elif kind == StructureAction.IGNITE_STELLAR_FUSION and target is not None:
        target.stellar_type = "main_sequence"
        target.luminosity = investment
    elif kind == StructureAction.OPEN_WORMHOLE:
        ledger.apply({ResourceType.WORMHOLE_STABILITY: investment * 0.1})

    log.info("Structure action %s succeeded (investment %.2f)", kind.value, investment)
    return True, acceleration
