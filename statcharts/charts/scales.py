"""
Module: scales

Purpose: Map data domains (category sets, numeric ranges) to pixel ranges.

Key Components:
- BandScale: ordered categories -> equal-width bands separated by gutters
- LinearScale: numbers -> pixels, with d3-compatible nice() and ticks()
- OrdinalColorScale: categories -> palette colours by first-seen index
- linear_extent_scale: [0, max(values)] scale used by the cartesian charts

All scales are immutable and their __call__ is a pure function.
"""

import math
from collections.abc import Hashable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import TypeVar

import numpy as np

from statcharts.exceptions import ScaleError

T = TypeVar("T", bound=Hashable)

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def unique_in_order(values: Iterable[T]) -> list[T]:
    """Distinct values in first-seen order."""
    return list(dict.fromkeys(values))


# =============================================================================
# TICK ARITHMETIC
# =============================================================================


def tick_increment(start: float, stop: float, count: int) -> float:
    """Return the round tick step for a domain, d3 style.

    A positive result is the step itself (1, 2, 5 times a power of ten);
    a negative result -k means a step of 1/k, which keeps small steps exact.
    """
    step = (stop - start) / max(0, count) if count > 0 else math.inf
    if step == 0 or not math.isfinite(step):
        return 0.0
    power = math.floor(math.log10(step))
    error = step / 10**power
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1
    if power >= 0:
        return factor * 10**power
    return -(10 ** -power) / factor


def nice_domain(lo: float, hi: float, count: int = 10) -> tuple[float, float]:
    """Extend a domain outward so both ends land on round tick values."""
    if not (math.isfinite(lo) and math.isfinite(hi)) or lo == hi:
        return lo, hi

    reverse = hi < lo
    start, stop = (hi, lo) if reverse else (lo, hi)
    prestep = None
    for _ in range(10):
        step = tick_increment(start, stop, count)
        if step == prestep:
            break
        if step > 0:
            start = math.floor(start / step) * step
            stop = math.ceil(stop / step) * step
        elif step < 0:
            start = math.ceil(start * step) / step
            stop = math.floor(stop * step) / step
        else:
            break
        prestep = step

    return (stop, start) if reverse else (start, stop)


def ticks(lo: float, hi: float, count: int) -> list[float]:
    """Round tick values between lo and hi (inclusive), d3 style."""
    if not (math.isfinite(lo) and math.isfinite(hi)) or count <= 0:
        return []
    if lo == hi:
        return [lo]

    reverse = hi < lo
    start, stop = (hi, lo) if reverse else (lo, hi)
    step = tick_increment(start, stop, count)
    if step == 0:
        return []
    if step > 0:
        i0, i1 = math.ceil(start / step), math.floor(stop / step)
        values = np.arange(i0, i1 + 1) * step
    else:
        inv = -step
        i0, i1 = math.ceil(start * inv), math.floor(stop * inv)
        values = np.arange(i0, i1 + 1) / inv

    result = [float(v) for v in values]
    return result[::-1] if reverse else result


# =============================================================================
# BAND SCALE
# =============================================================================


@dataclass(frozen=True)
class BandScale:
    """Map ordered categories to uniform bands inside a pixel range.

    Each of the n categories owns a slot of ``step = width / n``. A gutter of
    ``padding * step`` is split evenly on both sides of every band, so the
    bands are equally wide and ``n * (bandwidth + gutter)`` equals the range
    width.
    """

    domain: tuple[Hashable, ...]
    range: tuple[float, float]
    padding: float = 0.0
    _index: dict[Hashable, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not 0.0 <= self.padding <= 1.0:
            raise ScaleError(
                f"Band padding must be within [0, 1], got {self.padding}",
                scale_type="band",
                context={"padding": self.padding},
            )
        object.__setattr__(self, "domain", tuple(unique_in_order(self.domain)))
        object.__setattr__(self, "_index", {label: i for i, label in enumerate(self.domain)})

    @classmethod
    def from_values(cls, values: Iterable[Hashable], width: float, *, padding: float) -> "BandScale":
        """Band scale over [0, width] for the distinct values in first-seen order."""
        return cls(domain=tuple(values), range=(0.0, float(width)), padding=padding)

    @property
    def step(self) -> float:
        """Width of the slot each category owns (band plus gutter)."""
        n = len(self.domain)
        if n == 0:
            return 0.0
        return (self.range[1] - self.range[0]) / n

    @property
    def bandwidth(self) -> float:
        """Width of each band."""
        return self.step * (1.0 - self.padding)

    @property
    def gutter(self) -> float:
        """Space between two adjacent bands."""
        return self.step * self.padding

    def __call__(self, label: Hashable) -> float | None:
        """Left edge of the band for a label, or None if it is not in the domain."""
        i = self._index.get(label)
        if i is None:
            return None
        return self.range[0] + self.step * i + self.gutter / 2.0

    def center(self, label: Hashable) -> float | None:
        """Horizontal centre of a label's band."""
        left = self(label)
        return None if left is None else left + self.bandwidth / 2.0


# =============================================================================
# LINEAR SCALE
# =============================================================================


@dataclass(frozen=True)
class LinearScale:
    """Continuous, monotonic map from a numeric domain to a pixel range."""

    domain: tuple[float, float]
    range: tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        span = d1 - d0
        if span == 0 or math.isnan(span):
            t = 0.5 if span == 0 else math.nan
        else:
            t = (value - d0) / span
        return r0 + t * (r1 - r0)

    def invert(self, pixel: float) -> float:
        """Map a pixel position back into the domain."""
        inverse = LinearScale(domain=self.range, range=self.domain)
        return inverse(pixel)

    def nice(self, count: int = 10) -> "LinearScale":
        """Copy of this scale with the domain extended to round values."""
        return LinearScale(domain=nice_domain(*self.domain, count=count), range=self.range)

    def ticks(self, count: int = 10) -> list[float]:
        """Round values inside the domain, for gridlines and axis labels."""
        return ticks(self.domain[0], self.domain[1], count)


def nan_max(values: Iterable[float]) -> float:
    """Maximum ignoring NaN; NaN when there is no comparable value."""
    array = np.asarray(list(values), dtype=float)
    valid = array[~np.isnan(array)]
    if valid.size == 0:
        return math.nan
    return float(valid.max())


def linear_extent_scale(
    values: Iterable[float],
    range_: tuple[float, float],
    *,
    nice: bool = True,
    headroom: float = 1.0,
) -> LinearScale:
    """Linear scale with domain [0, max(values) * headroom].

    Args:
        values: Data values; NaN is ignored when finding the maximum
        range_: Pixel range, e.g. (inner_height, 0) or (0, radius)
        nice: Extend the upper bound to a round tick value
        headroom: Multiplier applied to the maximum before nicing

    Returns:
        LinearScale whose upper bound is >= the data maximum
    """
    scale = LinearScale(domain=(0.0, nan_max(values) * headroom), range=range_)
    return scale.nice() if nice else scale


# =============================================================================
# ORDINAL COLOUR SCALE
# =============================================================================


@dataclass(frozen=True)
class OrdinalColorScale:
    """Assign palette colours to categories in first-seen order.

    Categories beyond the palette length wrap around and share colours.
    Labels not in the domain are appended on first use, like d3's implicit
    ordinal domain, but without mutating this instance.
    """

    domain: tuple[Hashable, ...]
    palette: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.palette:
            raise ScaleError("Colour palette must not be empty", scale_type="ordinal")
        object.__setattr__(self, "domain", tuple(unique_in_order(self.domain)))
        object.__setattr__(self, "palette", tuple(self.palette))

    @classmethod
    def from_values(cls, values: Iterable[Hashable], palette: Sequence[str]) -> "OrdinalColorScale":
        """Colour scale for the distinct values in first-seen order."""
        return cls(domain=tuple(values), palette=tuple(palette))

    def __call__(self, label: Hashable) -> str:
        try:
            i = self.domain.index(label)
        except ValueError:
            i = len(self.domain)
        return self.palette[i % len(self.palette)]
