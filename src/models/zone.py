"""Zone, crosswalk and metric data types."""

from dataclasses import dataclass
from enum import Enum


class Grade(Enum):
    A = "A"  # "Best"
    B = "B"  # "Still desirable"
    C = "C"  # "Declining"
    D = "D"  # "Hazardous"

    @classmethod
    def parse(cls, label: str | None) -> "Grade | None":
        """Return the grade for a label, or None for ungraded / unknown labels."""
        if label is None:
            return None
        try:
            return cls(label)
        except ValueError:
            return None


@dataclass(frozen=True)
class CrosswalkRecord:
    zone_id: str
    sub_area_id: str  # census tract GEOID
    overlap_weight: float  # fraction of the tract inside the zone


@dataclass(frozen=True)
class MetricRecord:
    sub_area_id: str
    value: float | None = None  # None = no usable observation (not zero)


@dataclass(frozen=True)
class ZoneMetric:
    """Area-weighted value of one zone.

    weighted_value is None whenever contributing_units == 0. It is also None
    when sub-areas contributed but their weights sum to 0, so a null value
    does not imply zero contributing units.
    """

    zone_id: str
    weighted_value: float | None
    total_weight: float
    contributing_units: int


@dataclass(frozen=True)
class RankedZoneMetric(ZoneMetric):
    percentile_rank: int | None = None  # 0-100


@dataclass(frozen=True)
class GradeAverages:
    A: float | None = None
    B: float | None = None
    C: float | None = None
    D: float | None = None

    def get(self, grade: Grade) -> float | None:
        return getattr(self, grade.value)

    def as_dict(self) -> dict[str, float | None]:
        return {g.value: self.get(g) for g in Grade}
