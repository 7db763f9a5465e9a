"""Overlay definitions and computed overlay results."""

from dataclasses import dataclass, field
from enum import Enum

from src.models.color import ColorScaleDomain, RGB
from src.models.zone import Grade, GradeAverages, RankedZoneMetric


class Dataset(Enum):
    INCOME = "income"
    HEALTH = "health"
    ENVIRONMENT = "environment"
    VALUE = "value"
    RACE = "race"


@dataclass(frozen=True)
class OverlayDefinition:
    dataset: Dataset
    label: str
    unit: str
    domain: ColorScaleDomain
    invert_percentile: bool = False  # True when a low value is the favorable end
    ratio_numerator: Grade = Grade.A
    ratio_denominator: Grade = Grade.D


@dataclass(frozen=True)
class MeasureValue:
    name: str
    value: float | None
    unit: str = "%"


@dataclass(frozen=True)
class OverlayResult:
    definition: OverlayDefinition
    zones: list[RankedZoneMetric]
    grade_averages: GradeAverages
    insight_ratio: str | None

    def zone(self, zone_id: str) -> RankedZoneMetric | None:
        for z in self.zones:
            if z.zone_id == zone_id:
                return z
        return None


@dataclass(frozen=True)
class ZoneOverlaySummary:
    dataset: Dataset
    zone_id: str
    grade: Grade | None
    weighted_value: float | None
    percentile_rank: int | None
    color: RGB
    total_weight: float
    contributing_units: int
    grade_averages: GradeAverages
    insight_ratio: str | None
    years_since_holc: int
    measures: list[MeasureValue] = field(default_factory=list)
    measure_grade_averages: dict[str, GradeAverages] = field(default_factory=dict)
