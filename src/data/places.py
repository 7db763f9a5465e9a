"""CDC PLACES client and composite-index adapters (health, environment).

PLACES publishes one row per (tract, measure). Both overlays fetch several
measures, then average whichever are present per tract into one composite.
"""

import logging
import math
from typing import Any

import httpx

from src.config import settings
from src.data.base import DatasetFetchError
from src.engine.composite import combine_measures

logger = logging.getLogger(__name__)

PLACES_BASE_URL = "https://data.cdc.gov/resource"

# PLACES measure name -> short field name
HEALTH_MEASURES = {
    "Current asthma among adults": "asthma",
    "Diagnosed diabetes among adults": "diabetes",
    "Frequent mental distress among adults": "mental_distress",
    "Frequent physical distress among adults": "physical_distress",
    "Fair or poor self-rated health status among adults": "poor_health",
}

# Environmental burden proxies (EJScreen has no stable public API)
ENVIRONMENT_MEASURES = {
    "Current asthma among adults": "respiratory",
    "Any disability among adults": "disability",
    "Food insecurity in the past 12 months among adults": "food_insecurity",
    "Current lack of health insurance among adults aged 18-64 years": "uninsured",
    "Housing insecurity in the past 12 months among adults": "housing_insecurity",
}

# Mean prevalence (%) that maps to a health risk index of 1.0
HEALTH_INDEX_SCALE = 50.0


class PlacesClient:
    def __init__(self, app_token: str | None = None):
        self.app_token = app_token or settings.cdc_app_token

    async def get_measure(self, measure: str, county_fips: str | None = None) -> list[dict]:
        """Fetch every tract row for one measure, following $offset pagination.

        Raises DatasetFetchError if any page fails, so a partial table is never
        cached as complete.
        """
        county = county_fips or f"{settings.state_fips}{settings.county_fips}"
        limit = settings.places_page_size
        headers = {"Accept": "application/json"}
        if self.app_token:
            headers["X-App-Token"] = self.app_token

        records: list[dict] = []
        offset = 0
        async with httpx.AsyncClient(timeout=settings.http_timeout, headers=headers) as client:
            while True:
                params = {
                    "$where": f"countyfips='{county}' AND measure='{measure}'",
                    "$select": "locationid,measure,data_value",
                    "$limit": limit,
                    "$offset": offset,
                }
                try:
                    resp = await client.get(
                        f"{PLACES_BASE_URL}/{settings.places_dataset}.json", params=params
                    )
                    resp.raise_for_status()
                    batch = resp.json()
                except (httpx.HTTPError, ValueError) as e:
                    logger.warning("CDC PLACES request failed for %r: %s", measure, e)
                    raise DatasetFetchError(f"CDC PLACES request failed for {measure!r}: {e}") from e

                if not batch:
                    break
                records.extend(batch)
                offset += limit
                if len(batch) < limit:
                    break

        logger.info("CDC PLACES: %d tract records for %r", len(records), measure)
        return records


class PlacesSource:
    """Fetcher for a set of PLACES measures, concatenated into one payload."""

    def __init__(self, measures: list[str], client: PlacesClient | None = None):
        self.measures = measures
        self.client = client or PlacesClient()

    async def fetch(self) -> list[dict]:
        records: list[dict] = []
        for measure in self.measures:
            records.extend(await self.client.get_measure(measure))
        return records


def _parse_value(raw: Any) -> float | None:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


class CompositeMeasureAdapter:
    """Combine several PLACES measures into one composite value per tract.

    index_scale, when set, divides the composite and clamps it to 0-1.
    """

    def __init__(self, measures: dict[str, str], index_scale: float | None = None):
        self.measures = measures
        self.index_scale = index_scale

    @property
    def measure_names(self) -> list[str]:
        return list(self.measures.values())

    def parse_measures(self, payload: list[dict]) -> dict[str, dict[str, float]]:
        table: dict[str, dict[str, float]] = {}
        for record in payload or []:
            field = self.measures.get(record.get("measure", ""))
            geoid = record.get("locationid")
            value = _parse_value(record.get("data_value"))
            if field is None or not geoid or value is None:
                continue
            table.setdefault(geoid, {})[field] = value
        return table

    def parse(self, payload: list[dict]) -> dict[str, float]:
        composite = combine_measures(self.parse_measures(payload))
        if self.index_scale is None:
            return composite
        return {
            geoid: max(0.0, min(1.0, value / self.index_scale))
            for geoid, value in composite.items()
        }


def health_adapter() -> CompositeMeasureAdapter:
    return CompositeMeasureAdapter(HEALTH_MEASURES, index_scale=HEALTH_INDEX_SCALE)


def environment_adapter() -> CompositeMeasureAdapter:
    return CompositeMeasureAdapter(ENVIRONMENT_MEASURES)
