"""Composite index combination for multi-measure datasets.

A sub-area's composite is the unweighted mean of whichever measures are
present for it. Missing measures do not block the composite; a sub-area with
no measures at all gets no entry.
"""

from typing import Mapping


def combine_measures(
    measures_by_sub_area: Mapping[str, Mapping[str, float]],
) -> dict[str, float]:
    composite: dict[str, float] = {}
    for sub_area_id, measures in measures_by_sub_area.items():
        values = [v for v in measures.values() if v is not None]
        if not values:
            continue
        composite[sub_area_id] = sum(values) / len(values)
    return composite


def measure_values(
    measures_by_sub_area: Mapping[str, Mapping[str, float]],
    measure: str,
) -> dict[str, float]:
    """Project a single measure out of the per-sub-area measure table."""
    return {
        sub_area_id: measures[measure]
        for sub_area_id, measures in measures_by_sub_area.items()
        if measures.get(measure) is not None
    }
