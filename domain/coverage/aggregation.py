"""Coverage Bounded Context - Statistics Reduction.

CoverageAccumulator is the partial result of scanning any subset of grid
points. Accumulators merge associatively and commutatively, so per-chunk
partials can be combined in any grouping and still produce identical
statistics.

The signal sum is an exact Fraction; the average is rounded to float once,
in to_statistics().
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from fractions import Fraction

from domain.coverage.value_objects import CoveragePoint, CoverageStatistics
from domain.geodesy.services import rectangle_area_km2
from domain.geodesy.value_objects import GeoArea

STRONG_BARS = 4  # bars >= 4
WEAK_BARS = (1, 2)


@dataclass(frozen=True)
class CoverageAccumulator:
    """Counts and exact signal sum for a set of grid points."""

    total: int = 0
    covered: int = 0
    strong: int = 0
    weak: int = 0
    finite: int = 0  # points contributing to signal_sum
    signal_sum: Fraction = field(default_factory=Fraction)

    @classmethod
    def of(cls, point: CoveragePoint) -> "CoverageAccumulator":
        """Contribution of a single point."""
        bars = point.signal_bars
        is_finite = math.isfinite(point.signal_strength)
        return cls(
            total=1,
            covered=int(bars > 0),
            strong=int(bars >= STRONG_BARS),
            weak=int(bars in WEAK_BARS),
            finite=int(is_finite),
            signal_sum=Fraction(point.signal_strength) if is_finite else Fraction(0),
        )

    @classmethod
    def from_points(cls, points: list[CoveragePoint]) -> "CoverageAccumulator":
        """Reduce a sequence of points in one pass."""
        total = covered = strong = weak = finite = 0
        signal_sum = Fraction(0)
        for point in points:
            bars = point.signal_bars
            total += 1
            if bars > 0:
                covered += 1
            if bars >= STRONG_BARS:
                strong += 1
            if bars in WEAK_BARS:
                weak += 1
            if math.isfinite(point.signal_strength):
                finite += 1
                signal_sum += Fraction(point.signal_strength)
        return cls(total, covered, strong, weak, finite, signal_sum)

    def merge(self, other: "CoverageAccumulator") -> "CoverageAccumulator":
        return CoverageAccumulator(
            total=self.total + other.total,
            covered=self.covered + other.covered,
            strong=self.strong + other.strong,
            weak=self.weak + other.weak,
            finite=self.finite + other.finite,
            signal_sum=self.signal_sum + other.signal_sum,
        )

    __add__ = merge

    def to_statistics(self, area: GeoArea) -> CoverageStatistics:
        """Finalize into percentages, average and covered area.

        Raises:
            ValueError: If the accumulator holds no points
        """
        if self.total == 0:
            raise ValueError("Cannot compute statistics over zero points")

        covered_ratio = self.covered / self.total
        average = float(self.signal_sum / self.finite) if self.finite else None

        return CoverageStatistics(
            overall_coverage=covered_ratio * 100,
            strong_coverage=self.strong / self.total * 100,
            weak_coverage=self.weak / self.total * 100,
            no_coverage=(self.total - self.covered) / self.total * 100,
            average_signal_strength=average,
            coverage_area=rectangle_area_km2(area) * covered_ratio,
        )
