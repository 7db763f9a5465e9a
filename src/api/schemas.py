"""Pydantic schemas for API response models."""

from pydantic import BaseModel

from src.config import settings
from src.engine.color_scale import hex_for, rgba_for
from src.models.color import ColorScaleDomain
from src.models.overlay import OverlayDefinition, OverlayResult, ZoneOverlaySummary
from src.models.zone import GradeAverages


class ColorDomainResponse(BaseModel):
    min: float
    max: float
    low_color: str
    high_color: str
    neutral_color: str

    @classmethod
    def from_domain(cls, domain: ColorScaleDomain) -> "ColorDomainResponse":
        return cls(
            min=domain.min,
            max=domain.max,
            low_color=domain.low_color.hex,
            high_color=domain.high_color.hex,
            neutral_color=domain.neutral_color.hex,
        )


class OverlayInfoResponse(BaseModel):
    dataset: str
    label: str
    unit: str
    domain: ColorDomainResponse
    invert_percentile: bool
    ratio: str  # e.g. "A/D"

    @classmethod
    def from_definition(cls, definition: OverlayDefinition) -> "OverlayInfoResponse":
        return cls(
            dataset=definition.dataset.value,
            label=definition.label,
            unit=definition.unit,
            domain=ColorDomainResponse.from_domain(definition.domain),
            invert_percentile=definition.invert_percentile,
            ratio=f"{definition.ratio_numerator.value}/{definition.ratio_denominator.value}",
        )


class GradeAveragesResponse(BaseModel):
    A: float | None = None
    B: float | None = None
    C: float | None = None
    D: float | None = None

    @classmethod
    def from_averages(cls, averages: GradeAverages) -> "GradeAveragesResponse":
        return cls(**averages.as_dict())


class ZoneValueResponse(BaseModel):
    zone_id: str
    weighted_value: float | None = None
    percentile_rank: int | None = None
    total_weight: float
    contributing_units: int
    color: str
    rgba: tuple[int, int, int, int]


class OverlayResponse(BaseModel):
    overlay: OverlayInfoResponse
    zones: list[ZoneValueResponse]
    grade_averages: GradeAveragesResponse
    insight_ratio: str | None = None

    @classmethod
    def from_result(cls, result: OverlayResult) -> "OverlayResponse":
        domain = result.definition.domain
        zones = []
        for z in result.zones:
            zones.append(
                ZoneValueResponse(
                    zone_id=z.zone_id,
                    weighted_value=z.weighted_value,
                    percentile_rank=z.percentile_rank,
                    total_weight=z.total_weight,
                    contributing_units=z.contributing_units,
                    color=hex_for(z.weighted_value, domain),
                    rgba=rgba_for(z.weighted_value, domain, alpha=settings.color_alpha),
                )
            )
        return cls(
            overlay=OverlayInfoResponse.from_definition(result.definition),
            zones=zones,
            grade_averages=GradeAveragesResponse.from_averages(result.grade_averages),
            insight_ratio=result.insight_ratio,
        )


class MeasureResponse(BaseModel):
    name: str
    value: float | None = None
    unit: str


class ZoneSummaryResponse(BaseModel):
    dataset: str
    zone_id: str
    grade: str | None = None
    weighted_value: float | None = None
    percentile_rank: int | None = None
    color: str
    total_weight: float
    contributing_units: int
    grade_averages: GradeAveragesResponse
    insight_ratio: str | None = None
    years_since_holc: int
    measures: list[MeasureResponse] = []
    measure_grade_averages: dict[str, GradeAveragesResponse] = {}

    @classmethod
    def from_summary(cls, summary: ZoneOverlaySummary) -> "ZoneSummaryResponse":
        return cls(
            dataset=summary.dataset.value,
            zone_id=summary.zone_id,
            grade=summary.grade.value if summary.grade else None,
            weighted_value=summary.weighted_value,
            percentile_rank=summary.percentile_rank,
            color=summary.color.hex,
            total_weight=summary.total_weight,
            contributing_units=summary.contributing_units,
            grade_averages=GradeAveragesResponse.from_averages(summary.grade_averages),
            insight_ratio=summary.insight_ratio,
            years_since_holc=summary.years_since_holc,
            measures=[
                MeasureResponse(name=m.name, value=m.value, unit=m.unit)
                for m in summary.measures
            ],
            measure_grade_averages={
                name: GradeAveragesResponse.from_averages(averages)
                for name, averages in summary.measure_grade_averages.items()
            },
        )
