"""Percentile ranking of zones by weighted value.

Pure functions. No I/O.
"""

from src.engine.numeric import round_half_up
from src.models.zone import RankedZoneMetric, ZoneMetric

# Percentile assigned when only one zone has a value (i / (n - 1) is undefined)
SINGLE_ZONE_PERCENTILE = 50


def rank_zones(
    zone_metrics: list[ZoneMetric],
    invert: bool = False,
) -> list[RankedZoneMetric]:
    """Assign each valued zone a 0-100 percentile; null zones get None.

    Zones are sorted ascending by weighted value and the zone at index i of n
    gets round(i / (n - 1) * 100). The sort is stable, so tied values keep
    their input order and receive different percentiles.

    invert=True reports 100 - p, for datasets where a low value is favorable.
    Output preserves input order.
    """
    order = sorted(
        (pos for pos, z in enumerate(zone_metrics) if z.weighted_value is not None),
        key=lambda pos: zone_metrics[pos].weighted_value,
    )
    n = len(order)

    percentiles: dict[int, int] = {}
    for i, pos in enumerate(order):
        if n == 1:
            p = SINGLE_ZONE_PERCENTILE
        else:
            p = round_half_up(i / (n - 1) * 100)
        percentiles[pos] = 100 - p if invert else p

    return [
        RankedZoneMetric(
            zone_id=z.zone_id,
            weighted_value=z.weighted_value,
            total_weight=z.total_weight,
            contributing_units=z.contributing_units,
            percentile_rank=percentiles.get(pos),
        )
        for pos, z in enumerate(zone_metrics)
    ]
