"""Grade-level averages of zone values."""

from typing import Mapping

from src.models.zone import Grade, GradeAverages, ZoneMetric


def _mean(values: list[float]) -> float | None:
    if not values:
        return None
    return sum(values) / len(values)


def compute_grade_averages(
    zone_metrics: list[ZoneMetric],
    grade_of: Mapping[str, str | None],
) -> GradeAverages:
    """Average the non-null weighted values per HOLC grade.

    Zones that are ungraded or carry a label outside A-D are left out of every
    bucket. An empty bucket is None.
    """
    buckets: dict[Grade, list[float]] = {g: [] for g in Grade}

    for zone in zone_metrics:
        grade = Grade.parse(grade_of.get(zone.zone_id))
        if grade is None or zone.weighted_value is None:
            continue
        buckets[grade].append(zone.weighted_value)

    return GradeAverages(**{g.value: _mean(buckets[g]) for g in Grade})
