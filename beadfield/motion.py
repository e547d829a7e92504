"""Per-bead motion functions.

Every bead pulses with

    level  = sin(log(index + 2) * t)
    radius = |level * base_radius|
    color  = color2 if level < 0 else color1

The ``log(index + 2)`` term gives each bead its own frequency so the
field does not pulse in lockstep.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class BeadState:
    """Instantaneous appearance of a bead."""

    radius: float
    color: str


@dataclass(frozen=True)
class MotionFunction:
    """Closed-form motion of one bead, built once at layout time.

    Attributes:
        base_radius: Peak radius reached when ``|level| == 1``.
        index: Bead loop index; seeds the oscillation frequency.
        color1: Color while the level is non-negative.
        color2: Color while the level is negative.
    """

    base_radius: float
    index: float
    color1: str
    color2: str

    @property
    def frequency(self) -> float:
        """Oscillation frequency; NaN where ``log(index + 2)`` is undefined."""
        if self.index <= -2:
            return math.nan
        return math.log(self.index + 2)

    def level(self, t: float) -> float:
        """Oscillation level in [-1, 1]; 0 when the phase is not finite."""
        phase = self.frequency * t
        if not math.isfinite(phase):
            return 0.0
        return math.sin(phase)

    def __call__(self, t: float) -> BeadState:
        level = self.level(t)
        return BeadState(
            radius=abs(level * self.base_radius),
            color=self.color2 if level < 0 else self.color1,
        )
