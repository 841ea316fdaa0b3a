# bubble_scales.py
#
# x: log income, y: linear life expectancy, r: sqrt population, color: region.
# Domains come from the WHOLE dataset, computed once, so the axes don't move
# while the years play.

import math
from dataclasses import dataclass

import numpy as np
import pandas as pd
from matplotlib.ticker import EngFormatter, LogLocator, MaxNLocator

from load_data import LoadFailure
from scrolly_config import (
    WIDTH, HEIGHT, X_DOMAIN_MIN, R_RANGE, REGION_COLORS, FALLBACK_COLOR,
)

# ────────────────────────────────────────────────────────────────────────────
# 1. CONTINUOUS SCALES
# ────────────────────────────────────────────────────────────────────────────


def _interpolate(t, range_):
    r0, r1 = range_
    return r0 + t * (r1 - r0)


def _apply(values, fn):
    """Run `fn` on a float array; hand back a float when given a scalar."""
    arr = np.asarray(values, dtype=float)
    with np.errstate(divide='ignore', invalid='ignore'):
        out = fn(arr)
    return float(out) if arr.ndim == 0 else out


class LinearScale:
    """domain → range by straight interpolation. No clamping."""

    def __init__(self, domain, range_):
        self.domain = (float(domain[0]), float(domain[1]))
        self.range_ = (float(range_[0]), float(range_[1]))

    def _transform(self, v):
        return v

    def _normalize(self, v):
        d0, d1 = (self._transform(np.asarray(d, dtype=float)) for d in self.domain)
        if d1 == d0:
            # degenerate domain: everything lands mid-range
            return np.full_like(v, 0.5, dtype=float)
        return (self._transform(v) - d0) / (d1 - d0)

    def __call__(self, values):
        return _apply(values, lambda v: _interpolate(self._normalize(v), self.range_))

    def ticks(self, count: int = 10) -> list[float]:
        lo, hi = sorted(self.domain)
        if lo == hi:
            return [lo]
        locator = MaxNLocator(nbins=count, steps=[1, 2, 5, 10])
        return [float(t) for t in locator.tick_values(lo, hi) if lo <= t <= hi]


class SqrtScale(LinearScale):
    """Interpolates sqrt(value), so circle AREA follows the data."""

    def _transform(self, v):
        return np.sign(v) * np.sqrt(np.abs(v))


class LogScale(LinearScale):
    """Base-10 log interpolation. Non-positive inputs come back as NaN."""

    def _transform(self, v):
        return np.where(v > 0, np.log10(v), np.nan)

    def ticks(self, count: int = 10) -> list[float]:
        lo, hi = sorted(self.domain)
        decades = math.log10(hi) - math.log10(lo)
        # 1..9 in every decade while that stays readable, powers of ten beyond
        subs = range(1, 10) if decades < count else (1.0,)
        locator = LogLocator(base=10, subs=subs, numticks=100)
        return [float(t) for t in locator.tick_values(lo, hi) if lo <= t <= hi]


def si_format(value: float, digits: int = 2) -> str:
    """Tick label with `digits` significant digits and an SI suffix (1000 → '1.0k')."""
    rounded = float(f"{value:.{digits}g}")
    if rounded == 0:
        places = digits - 1
    else:
        # digits already left of the point inside the engineering group
        places = max(0, digits - 1 - math.floor(math.log10(abs(rounded))) % 3)
    return EngFormatter(places=places, sep="").format_eng(rounded)


# ────────────────────────────────────────────────────────────────────────────
# 2. COLOR
# ────────────────────────────────────────────────────────────────────────────


class ColorScale:
    """Fixed region → color table with a fallback for anything unlisted."""

    def __init__(self, table: dict, fallback: str = FALLBACK_COLOR):
        self.table = dict(table)
        self.fallback = fallback

    def __call__(self, region) -> str:
        if not isinstance(region, str):
            return self.fallback
        return self.table.get(region.strip(), self.fallback)


# ────────────────────────────────────────────────────────────────────────────
# 3. SCALE SET
# ────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ScaleSet:
    x: LogScale
    y: LinearScale
    r: SqrtScale
    color: ColorScale
    width: int
    height: int


def _extent(series: pd.Series) -> tuple[float, float]:
    vals = pd.to_numeric(series, errors='coerce').dropna()
    if vals.empty:
        raise LoadFailure(f"no numeric values in column '{series.name}'")
    return float(vals.min()), float(vals.max())


def build_scales(df: pd.DataFrame, width: int = WIDTH, height: int = HEIGHT) -> ScaleSet:
    """
    Build the four encodings from the full dataset.

      x = log10 income,      [10, max income]   → [0, width]
      y = life expectancy,   [min, max]         → [height, 0]  (higher = up)
      r = sqrt population,   [min, max]         → [2, 40] px
      color = region lookup, unknown → FALLBACK_COLOR
    """
    _, income_max = _extent(df['income_per_person'])
    life_extent = _extent(df['life_expectancy'])
    pop_extent = _extent(df['population'])

    return ScaleSet(
        x=LogScale((X_DOMAIN_MIN, income_max), (0, width)),
        y=LinearScale(life_extent, (height, 0)),
        r=SqrtScale(pop_extent, R_RANGE),
        color=ColorScale(REGION_COLORS),
        width=width,
        height=height,
    )
