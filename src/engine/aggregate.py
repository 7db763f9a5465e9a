"""Area-weighted zone aggregation.

weighted_value = SUM(value * weight) / SUM(weight), summed over the sub-areas
that have a value. Normalizing by the included weight only keeps zones with
partial coverage on the right scale instead of pulling them toward zero.

Pure functions. No I/O. No rounding.
"""

from typing import Mapping

from src.engine.crosswalk import CrosswalkIndex
from src.models.zone import MetricRecord, ZoneMetric


def values_from_records(records: list[MetricRecord]) -> dict[str, float]:
    """Collapse metric records to a value map, skipping null observations.

    The first non-null value for a sub-area wins.
    """
    values: dict[str, float] = {}
    for record in records:
        if record.value is not None and record.sub_area_id not in values:
            values[record.sub_area_id] = record.value
    return values


def aggregate_zone(
    zone_id: str,
    sub_areas: list[tuple[str, float]],
    values: Mapping[str, float],
) -> ZoneMetric:
    weighted_sum = 0.0
    total_weight = 0.0
    contributing_units = 0

    for sub_area_id, weight in sub_areas:
        value = values.get(sub_area_id)
        if value is None:
            continue
        weighted_sum += value * weight
        total_weight += weight
        contributing_units += 1

    # All-zero weights would divide by zero; treat as no data
    weighted_value = (
        weighted_sum / total_weight
        if contributing_units > 0 and total_weight > 0
        else None
    )

    return ZoneMetric(
        zone_id=zone_id,
        weighted_value=weighted_value,
        total_weight=total_weight,
        contributing_units=contributing_units,
    )


def aggregate_by_zone(
    index: CrosswalkIndex,
    values: Mapping[str, float],
) -> list[ZoneMetric]:
    """Compute one ZoneMetric per crosswalk zone, in index order."""
    return [aggregate_zone(zone_id, sub_areas, values) for zone_id, sub_areas in index]
