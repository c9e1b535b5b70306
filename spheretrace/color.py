"""
Color types used by the tracer.

- FRGBA: linear floating point color, unbounded while light is accumulated
- RGBA: 8-bit display color, the final pixel format
- SampledColor: per-pixel accumulator that averages samples and applies
  square-root gamma correction
"""

from __future__ import annotations
from dataclasses import dataclass
import math


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _quantize(value: float) -> int:
    return int(_clamp(value) * 255.999)


@dataclass(frozen=True)
class FRGBA:
    """A color in RGBA, in floating point terms.

    Channels are not clamped here; clamping happens when converting to RGBA.
    """

    r: float
    g: float
    b: float
    a: float = 1.0

    def __add__(self, other: FRGBA) -> FRGBA:
        return FRGBA(self.r + other.r, self.g + other.g, self.b + other.b, self.a + other.a)

    def __mul__(self, other) -> FRGBA:
        # Channel-wise product for colors, uniform scale for numbers
        if isinstance(other, FRGBA):
            return FRGBA(self.r * other.r, self.g * other.g, self.b * other.b, self.a * other.a)
        return FRGBA(self.r * other, self.g * other, self.b * other, self.a * other)

    def __rmul__(self, scale: float) -> FRGBA:
        return self * scale

    def __truediv__(self, scale: float) -> FRGBA:
        return FRGBA(self.r / scale, self.g / scale, self.b / scale, self.a / scale)

    def lerp(self, t: float, other: FRGBA) -> FRGBA:
        """Linearly interpolate towards ``other`` (t=0 gives self, t=1 other).

        The result is fully opaque.
        """
        def mix(a: float, b: float) -> float:
            return a - t * (a - b)

        return frgb(mix(self.r, other.r), mix(self.g, other.g), mix(self.b, other.b))

    def clamp(self) -> FRGBA:
        """Clamp every channel to [0, 1]."""
        return FRGBA(_clamp(self.r), _clamp(self.g), _clamp(self.b), _clamp(self.a))

    def to_rgba(self) -> RGBA:
        return RGBA.from_frgba(self)


def frgb(r: float, g: float, b: float) -> FRGBA:
    """Create a new FRGBA color with full opacity."""
    return FRGBA(float(r), float(g), float(b), 1.0)


BLACK = frgb(0.0, 0.0, 0.0)
WHITE = frgb(1.0, 1.0, 1.0)


@dataclass(frozen=True)
class RGBA:
    """An 8-bit RGBA pixel."""

    r: int
    g: int
    b: int
    a: int = 255

    @classmethod
    def from_frgba(cls, color: FRGBA) -> RGBA:
        """Clamp each channel to [0, 1] and quantize with floor(c * 255.999)."""
        return cls(_quantize(color.r), _quantize(color.g), _quantize(color.b), _quantize(color.a))

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)


@dataclass
class SampledColor:
    """Accumulates color samples for a single pixel.

    Created empty, fed one sample per stochastic ray, then consumed once
    through ``result()``.
    """

    sample_count: int = 0
    total: FRGBA = FRGBA(0.0, 0.0, 0.0, 0.0)

    def add(self, color: FRGBA) -> None:
        """Add a single sample."""
        self.total = self.total + color
        self.sample_count += 1

    def result(self) -> FRGBA:
        """Average the samples and apply gamma correction.

        r, g and b go through a square root (gamma 2.0); alpha is the plain
        average. All channels are clamped to [0, 1].

        Raises:
            ValueError: If no samples were added
        """
        if self.sample_count == 0:
            raise ValueError("cannot finalize a pixel with no samples")

        mean = self.total / self.sample_count
        return FRGBA(
            math.sqrt(_clamp(mean.r)),
            math.sqrt(_clamp(mean.g)),
            math.sqrt(_clamp(mean.b)),
            _clamp(mean.a),
        )
