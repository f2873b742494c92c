"""Invariant reporting for the simulation core.

Ordinary game flow never raises: failed trades and research attempts are
reported through return values. Only internal invariant violations are
surfaced, and only loudly for components built in strict mode.
"""

from __future__ import annotations

import logging

log = logging.getLogger(__name__)


class InvariantViolation(AssertionError):
    """An internal state-machine invariant was broken."""


def check_invariant(condition: bool, message: str, strict: bool = False) -> bool:
    """Return ``condition``; report a violation when it is false.

    With ``strict`` a violation raises :class:`InvariantViolation`. Otherwise
    it is logged as a warning and the caller is expected to skip the step.
    """
    if condition:
        return True
    if strict:
        raise InvariantViolation(message)
    log.warning("Invariant violated: %s", message)
    return False
