"""Milwaukee MPROP parcel client and assessed-value adapter.

Parcels carry their census tract (GEO_TRACT), so assessed values are averaged
per tract first and then flow through the same crosswalk weighting as every
other overlay.
"""

import logging
import math
from typing import Any

import httpx

from src.config import settings
from src.data.base import DatasetFetchError

logger = logging.getLogger(__name__)

OUT_FIELDS = ["TAXKEY", "C_A_TOTAL", "GEO_TRACT"]


class AssessorClient:
    def __init__(self, url: str | None = None):
        self.url = url or settings.mprop_url

    async def get_parcels(self) -> list[dict]:
        """Fetch parcel attributes, paging with resultOffset.

        Raises DatasetFetchError if any page fails.
        """
        limit = settings.mprop_page_size
        parcels: list[dict] = []
        offset = 0

        async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
            while True:
                params = {
                    "where": "1=1",
                    "outFields": ",".join(OUT_FIELDS),
                    "returnGeometry": "false",
                    "resultOffset": offset,
                    "resultRecordCount": limit,
                    "f": "json",
                }
                try:
                    resp = await client.get(self.url, params=params)
                    resp.raise_for_status()
                    data = resp.json()
                except (httpx.HTTPError, ValueError) as e:
                    logger.warning("MPROP parcel request failed at offset %d: %s", offset, e)
                    raise DatasetFetchError(f"MPROP parcel request failed at offset {offset}: {e}") from e

                features = data.get("features", [])
                if not features:
                    break
                parcels.extend(features)
                offset += len(features)
                if not data.get("exceededTransferLimit") and len(features) < limit:
                    break

        logger.info("MPROP: %d parcels fetched", len(parcels))
        return parcels

    async def fetch(self) -> list[dict]:
        return await self.get_parcels()


def _attributes(feature: dict) -> dict:
    # ArcGIS JSON uses "attributes"; GeoJSON exports use "properties"
    return feature.get("attributes") or feature.get("properties") or {}


def _tract_geoid(raw: Any, state_fips: str, county_fips: str) -> str | None:
    """Build an 11-digit tract GEOID from a GEO_TRACT value.

    Integers and digit strings are 6-digit tract codes, often stored without
    leading zeros (35100 -> 035100). Floats and strings with a decimal point
    are tract numbers (1864.0 -> 186400, "18.5" -> 001850).
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, float) or (isinstance(raw, str) and "." in raw):
        try:
            number = float(raw)
        except ValueError:
            return None
        if not math.isfinite(number) or number < 0:
            return None
        code = f"{round(number * 100):06d}"
    else:
        code = str(raw).strip()
        if not code.isdigit():
            return None
        if len(code) == 11:
            return code
        code = code.zfill(6)

    if len(code) != 6:
        return None
    return f"{state_fips}{county_fips}{code}"


class AssessedValueAdapter:
    """Mean assessed value (C_A_TOTAL) of the parcels in each tract."""

    def __init__(
        self,
        value_field: str = "C_A_TOTAL",
        tract_field: str = "GEO_TRACT",
        state_fips: str | None = None,
        county_fips: str | None = None,
    ):
        self.value_field = value_field
        self.tract_field = tract_field
        self.state_fips = state_fips or settings.state_fips
        self.county_fips = county_fips or settings.county_fips

    def parse(self, payload: list[dict]) -> dict[str, float]:
        totals: dict[str, tuple[float, int]] = {}
        dropped = 0

        for feature in payload or []:
            attrs = _attributes(feature)
            geoid = _tract_geoid(attrs.get(self.tract_field), self.state_fips, self.county_fips)
            try:
                value = float(attrs.get(self.value_field))
            except (TypeError, ValueError):
                value = None
            # Exempt / unassessed parcels report 0
            if geoid is None or value is None or not math.isfinite(value) or value <= 0:
                dropped += 1
                continue
            value_sum, count = totals.get(geoid, (0.0, 0))
            totals[geoid] = (value_sum + value, count + 1)

        if dropped:
            logger.debug("Assessed value: dropped %d parcels", dropped)

        return {geoid: value_sum / count for geoid, (value_sum, count) in totals.items()}
