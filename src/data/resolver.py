"""Overlay resolver: orchestrates fetchers, adapters and the engine.

Flow per dataset: fetch raw payload (once per session) -> adapter.parse ->
compute_overlay against the crosswalk index and zone grades.

Fetch failures propagate through the cache uncached; only the public getters
turn them into empty data, so the next call fetches again.
"""

import logging
from dataclasses import dataclass
from typing import Any

from src.config import settings
from src.data.assessor import AssessedValueAdapter, AssessorClient
from src.data.base import DatasetAdapter, DatasetFetcher, DatasetFetchError, MeasureAdapter
from src.data.cache import DatasetCache
from src.data.census import MEDIAN_INCOME, AcsTableSource, IncomeAdapter, RaceAdapter
from src.data.crosswalk import load_crosswalk, load_zone_grades
from src.data.places import (
    ENVIRONMENT_MEASURES,
    HEALTH_MEASURES,
    PlacesSource,
    environment_adapter,
    health_adapter,
)
from src.engine.crosswalk import CrosswalkIndex, build_crosswalk_index
from src.engine.overlay import (
    OVERLAYS,
    compute_overlay,
    measure_breakdown,
    measure_grade_averages,
    summarize_zone,
)
from src.models.overlay import Dataset, OverlayResult, ZoneOverlaySummary
from src.models.zone import CrosswalkRecord, GradeAverages

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatasetSource:
    fetcher: DatasetFetcher
    adapter: DatasetAdapter


def default_sources() -> dict[Dataset, DatasetSource]:
    race = RaceAdapter("black")
    return {
        Dataset.INCOME: DatasetSource(AcsTableSource([MEDIAN_INCOME]), IncomeAdapter()),
        Dataset.HEALTH: DatasetSource(PlacesSource(list(HEALTH_MEASURES)), health_adapter()),
        Dataset.ENVIRONMENT: DatasetSource(
            PlacesSource(list(ENVIRONMENT_MEASURES)), environment_adapter()
        ),
        Dataset.VALUE: DatasetSource(AssessorClient(), AssessedValueAdapter()),
        Dataset.RACE: DatasetSource(AcsTableSource(race.variables), race),
    }


class OverlayResolver:
    def __init__(
        self,
        crosswalk: list[CrosswalkRecord],
        grades: dict[str, str | None],
        sources: dict[Dataset, DatasetSource] | None = None,
        cache: DatasetCache | None = None,
    ):
        self.index: CrosswalkIndex = build_crosswalk_index(crosswalk)
        self.grades = grades
        self.sources = sources or default_sources()
        self.cache = cache or DatasetCache()
        logger.info(
            "Resolver ready: %d zones in crosswalk, %d graded zones",
            len(self.index), len(grades),
        )

    @classmethod
    def from_files(
        cls,
        crosswalk_path: str | None = None,
        zones_path: str | None = None,
        **kwargs: Any,
    ) -> "OverlayResolver":
        return cls(
            load_crosswalk(crosswalk_path or settings.crosswalk_path),
            load_zone_grades(zones_path or settings.zones_path),
            **kwargs,
        )

    def _source(self, dataset: Dataset) -> DatasetSource:
        source = self.sources.get(dataset)
        if source is None:
            raise ValueError(f"No data source configured for {dataset.value}")
        return source

    async def _payload(self, dataset: Dataset) -> Any:
        source = self._source(dataset)
        return await self.cache.get_or_load(f"payload:{dataset.value}", source.fetcher.fetch)

    async def _values(self, dataset: Dataset) -> dict[str, float]:
        async def load() -> dict[str, float]:
            payload = await self._payload(dataset)
            values = self._source(dataset).adapter.parse(payload)
            logger.info("%s: %d sub-areas with values", dataset.value, len(values))
            return values

        return await self.cache.get_or_load(f"values:{dataset.value}", load)

    async def _overlay(self, dataset: Dataset) -> OverlayResult:
        async def load() -> OverlayResult:
            values = await self._values(dataset)
            result = compute_overlay(OVERLAYS[dataset], self.index, values, self.grades)
            valued = sum(1 for z in result.zones if z.weighted_value is not None)
            logger.info(
                "%s overlay: %d/%d zones valued, insight %s",
                dataset.value, valued, len(result.zones), result.insight_ratio,
            )
            return result

        return await self.cache.get_or_load(f"overlay:{dataset.value}", load)

    async def _measures(self, dataset: Dataset, adapter: MeasureAdapter) -> dict[str, dict[str, float]]:
        async def load() -> dict[str, dict[str, float]]:
            return adapter.parse_measures(await self._payload(dataset))

        return await self.cache.get_or_load(f"measures:{dataset.value}", load)

    async def _measure_grades(self, dataset: Dataset, adapter: MeasureAdapter) -> dict[str, GradeAverages]:
        async def load() -> dict[str, GradeAverages]:
            table = await self._measures(dataset, adapter)
            return measure_grade_averages(self.index, table, adapter.measure_names, self.grades)

        return await self.cache.get_or_load(f"measure_grades:{dataset.value}", load)

    async def get_values(self, dataset: Dataset) -> dict[str, float]:
        """Parsed sub-area -> value map for a dataset (fetched once per session).

        An unreachable source yields {} for this call only; the next call retries.
        """
        try:
            return await self._values(dataset)
        except DatasetFetchError as e:
            logger.warning("%s unavailable, no values: %s", dataset.value, e)
            return {}

    async def get_overlay(self, dataset: Dataset) -> OverlayResult:
        """Overlay for every zone. An unreachable source yields an all-null overlay, uncached."""
        try:
            return await self._overlay(dataset)
        except DatasetFetchError as e:
            logger.warning("%s unavailable, serving empty overlay: %s", dataset.value, e)
            return compute_overlay(OVERLAYS[dataset], self.index, {}, self.grades)

    async def get_zone_summary(self, dataset: Dataset, zone_id: str) -> ZoneOverlaySummary | None:
        """Statistics panel for one zone; None if the zone is not in the crosswalk."""
        if zone_id not in self.index:
            return None

        result = await self.get_overlay(dataset)
        adapter = self._source(dataset).adapter
        measures = None
        measure_grades = None
        if isinstance(adapter, MeasureAdapter):
            try:
                table = await self._measures(dataset, adapter)
                measure_grades = await self._measure_grades(dataset, adapter)
            except DatasetFetchError as e:
                logger.warning("%s measures unavailable: %s", dataset.value, e)
            else:
                measures = measure_breakdown(zone_id, self.index, table, adapter.measure_names)
        return summarize_zone(
            result, zone_id, self.grades, measures=measures, measure_grades=measure_grades,
        )
