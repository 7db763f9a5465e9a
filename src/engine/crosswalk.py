"""Zone -> sub-area crosswalk index.

Pure functions. No I/O.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from src.models.zone import CrosswalkRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CrosswalkIndex:
    """Zone id -> ordered (sub_area_id, overlap_weight) pairs.

    Zones iterate in first-occurrence order. Duplicate (zone, sub-area) pairs
    are kept: upstream geometry may split one tract across disjoint fragments
    of the same zone, and each fragment contributes.
    """

    zones: dict[str, list[tuple[str, float]]] = field(default_factory=dict)

    def __iter__(self) -> Iterator[tuple[str, list[tuple[str, float]]]]:
        return iter(self.zones.items())

    def __len__(self) -> int:
        return len(self.zones)

    def __contains__(self, zone_id: object) -> bool:
        return zone_id in self.zones

    def sub_areas(self, zone_id: str) -> list[tuple[str, float]]:
        return list(self.zones.get(zone_id, []))

    @property
    def zone_ids(self) -> list[str]:
        return list(self.zones)


def _usable_weight(weight: object) -> float | None:
    try:
        w = float(weight)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if math.isnan(w) or math.isinf(w) or w < 0:
        return None
    return w


def build_crosswalk_index(records: Iterable[CrosswalkRecord]) -> CrosswalkIndex:
    """Group crosswalk records by zone.

    Records lacking a sub-area id or carrying a non-numeric / negative weight
    are dropped; incomplete joins are expected in the upstream geometry.
    """
    zones: dict[str, list[tuple[str, float]]] = {}
    dropped = 0

    for record in records:
        sub_area = str(record.sub_area_id or "").strip()
        weight = _usable_weight(record.overlap_weight)
        if not sub_area or weight is None or not record.zone_id:
            dropped += 1
            continue
        zones.setdefault(str(record.zone_id), []).append((sub_area, weight))

    if dropped:
        logger.debug("Dropped %d malformed crosswalk records", dropped)

    return CrosswalkIndex(zones=zones)
