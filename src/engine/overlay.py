"""Generic overlay pipeline.

One pipeline serves every dataset:

    crosswalk index + sub-area values
        -> aggregate_by_zone -> {compute_grade_averages, rank_zones}
        -> format_insight_ratio
    and color_for per zone at summary time.

Each dataset only supplies its OverlayDefinition (color domain, ranking
direction, ratio orientation) and, upstream, its adapter.
"""

from datetime import date
from typing import Mapping

from src.engine.aggregate import aggregate_by_zone, aggregate_zone
from src.engine.color_scale import (
    ENVIRONMENT_DOMAIN,
    HEALTH_DOMAIN,
    INCOME_DOMAIN,
    RACE_DOMAIN,
    VALUE_DOMAIN,
    color_for,
)
from src.engine.composite import measure_values
from src.engine.crosswalk import CrosswalkIndex
from src.engine.grades import compute_grade_averages
from src.engine.insight import format_insight_ratio
from src.engine.percentile import rank_zones
from src.models.overlay import (
    Dataset,
    MeasureValue,
    OverlayDefinition,
    OverlayResult,
    ZoneOverlaySummary,
)
from src.models.zone import Grade, GradeAverages

HOLC_SURVEY_YEAR = 1938

OVERLAYS: dict[Dataset, OverlayDefinition] = {
    Dataset.INCOME: OverlayDefinition(
        dataset=Dataset.INCOME,
        label="Median household income",
        unit="$",
        domain=INCOME_DOMAIN,
    ),
    Dataset.HEALTH: OverlayDefinition(
        dataset=Dataset.HEALTH,
        label="Health risk index",
        unit="",
        domain=HEALTH_DOMAIN,
        invert_percentile=True,
        ratio_numerator=Grade.D,
        ratio_denominator=Grade.A,
    ),
    Dataset.ENVIRONMENT: OverlayDefinition(
        dataset=Dataset.ENVIRONMENT,
        label="Environmental burden",
        unit="%",
        domain=ENVIRONMENT_DOMAIN,
        invert_percentile=True,
        ratio_numerator=Grade.D,
        ratio_denominator=Grade.A,
    ),
    Dataset.VALUE: OverlayDefinition(
        dataset=Dataset.VALUE,
        label="Average assessed value",
        unit="$",
        domain=VALUE_DOMAIN,
    ),
    Dataset.RACE: OverlayDefinition(
        dataset=Dataset.RACE,
        label="Black population share",
        unit="%",
        domain=RACE_DOMAIN,
        ratio_numerator=Grade.D,
        ratio_denominator=Grade.A,
    ),
}


def compute_overlay(
    definition: OverlayDefinition,
    index: CrosswalkIndex,
    values: Mapping[str, float],
    grade_of: Mapping[str, str | None],
) -> OverlayResult:
    """Run the full aggregation / ranking pipeline for one dataset."""
    zone_metrics = aggregate_by_zone(index, values)
    grade_averages = compute_grade_averages(zone_metrics, grade_of)
    ranked = rank_zones(zone_metrics, invert=definition.invert_percentile)
    insight_ratio = format_insight_ratio(
        grade_averages,
        numerator=definition.ratio_numerator,
        denominator=definition.ratio_denominator,
    )
    return OverlayResult(
        definition=definition,
        zones=ranked,
        grade_averages=grade_averages,
        insight_ratio=insight_ratio,
    )


def measure_breakdown(
    zone_id: str,
    index: CrosswalkIndex,
    measures_by_sub_area: Mapping[str, Mapping[str, float]],
    measure_names: list[str],
) -> list[MeasureValue]:
    """Weight each individual measure of a composite dataset for one zone."""
    sub_areas = index.sub_areas(zone_id)
    return [
        MeasureValue(
            name=name,
            value=aggregate_zone(
                zone_id, sub_areas, measure_values(measures_by_sub_area, name)
            ).weighted_value,
        )
        for name in measure_names
    ]


def measure_grade_averages(
    index: CrosswalkIndex,
    measures_by_sub_area: Mapping[str, Mapping[str, float]],
    measure_names: list[str],
    grade_of: Mapping[str, str | None],
) -> dict[str, GradeAverages]:
    """Per-grade averages of each individual measure, e.g. racial composition by grade."""
    return {
        name: compute_grade_averages(
            aggregate_by_zone(index, measure_values(measures_by_sub_area, name)), grade_of
        )
        for name in measure_names
    }


def summarize_zone(
    result: OverlayResult,
    zone_id: str,
    grade_of: Mapping[str, str | None],
    measures: list[MeasureValue] | None = None,
    measure_grades: dict[str, GradeAverages] | None = None,
    today: date | None = None,
) -> ZoneOverlaySummary | None:
    """Build the statistics panel for one zone; None if the zone is unknown."""
    zone = result.zone(zone_id)
    if zone is None:
        return None

    year = (today or date.today()).year
    return ZoneOverlaySummary(
        dataset=result.definition.dataset,
        zone_id=zone_id,
        grade=Grade.parse(grade_of.get(zone_id)),
        weighted_value=zone.weighted_value,
        percentile_rank=zone.percentile_rank,
        color=color_for(zone.weighted_value, result.definition.domain),
        total_weight=zone.total_weight,
        contributing_units=zone.contributing_units,
        grade_averages=result.grade_averages,
        insight_ratio=result.insight_ratio,
        years_since_holc=year - HOLC_SURVEY_YEAR,
        measures=measures or [],
        measure_grade_averages=measure_grades or {},
    )
