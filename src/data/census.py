"""Census ACS client and tract-table adapters (income, race)."""

import logging
import math
from typing import Any, Iterator

import httpx

from src.config import settings
from src.data.base import DatasetFetchError
from src.engine.composite import measure_values

logger = logging.getLogger(__name__)

CENSUS_BASE_URL = "https://api.census.gov/data"

# ACS 5-year variable codes
MEDIAN_INCOME = "B19013_001E"
TOTAL_POPULATION = "B02001_001E"
RACE_GROUPS = {
    "white": "B02001_002E",
    "black": "B02001_003E",
    "asian": "B02001_005E",
    "hispanic": "B03002_012E",
}

# Census annotation values that stand in for an estimate
# (-666666666 = "not applicable / too few sample observations")
SENTINELS = {
    "-999999999",
    "-888888888",
    "-666666666",
    "-555555555",
    "-333333333",
    "-222222222",
}


def safe_number(raw: Any) -> float | None:
    """Parse an ACS cell, returning None for blanks, sentinels and junk."""
    if raw is None:
        return None
    text = str(raw).strip()
    if not text or text in SENTINELS:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    # "-666666666.0" and friends
    if value.is_integer() and str(int(value)) in SENTINELS:
        return None
    return value


class CensusClient:
    def __init__(self, api_key: str | None = None):
        self.api_key = api_key or settings.census_api_key

    async def get_tract_table(
        self,
        variables: list[str],
        state_fips: str | None = None,
        county_fips: str | None = None,
    ) -> list[list[str]]:
        """Fetch ACS 5-year variables for every tract in a county.

        Returns the API's array-of-arrays (header row first). Raises
        DatasetFetchError when the request fails.
        """
        params = {
            "get": ",".join(variables),
            "for": "tract:*",
            "in": f"state:{state_fips or settings.state_fips} county:{county_fips or settings.county_fips}",
        }
        if self.api_key:
            params["key"] = self.api_key

        try:
            async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
                resp = await client.get(
                    f"{CENSUS_BASE_URL}/{settings.acs_year}/acs/acs5",
                    params=params,
                )
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Census ACS request failed: %s", e)
            raise DatasetFetchError(f"Census ACS request failed: {e}") from e

        logger.info("Census ACS returned %d tract rows", max(len(data) - 1, 0))
        return data


class AcsTableSource:
    """Fetcher for one ACS tract table."""

    def __init__(self, variables: list[str], client: CensusClient | None = None):
        self.variables = variables
        self.client = client or CensusClient()

    async def fetch(self) -> list[list[str]]:
        return await self.client.get_tract_table(self.variables)


def iter_tract_rows(payload: list[list[str]]) -> Iterator[tuple[str, dict[str, str]]]:
    """Yield (GEOID, row-as-dict) for each data row of an ACS tract table.

    GEOID = state + county + tract. Rows missing any geography part are skipped.
    """
    if not payload or len(payload) < 2:
        return
    headers = payload[0]
    for values in payload[1:]:
        row = dict(zip(headers, values))
        state, county, tract = row.get("state"), row.get("county"), row.get("tract")
        if not (state and county and tract):
            continue
        yield f"{state}{county}{tract}", row


class IncomeAdapter:
    """Median household income per tract."""

    def __init__(self, variable: str = MEDIAN_INCOME):
        self.variable = variable

    def parse(self, payload: list[list[str]]) -> dict[str, float]:
        income_by_geoid: dict[str, float] = {}
        dropped = 0
        for geoid, row in iter_tract_rows(payload):
            income = safe_number(row.get(self.variable))
            if income is None:
                dropped += 1
                continue
            income_by_geoid.setdefault(geoid, income)
        if dropped:
            logger.debug("Income: dropped %d tracts without an estimate", dropped)
        return income_by_geoid


# Remainder after the named groups. Hispanic origin overlaps the race
# categories in ACS, so the remainder is clamped at 0.
OTHER_GROUP = "other"


class RaceAdapter:
    """Racial / ethnic composition per tract, in percent (0-100).

    parse() gives the share of one group, which drives the overlay.
    parse_measures() gives every group plus "other" for the zone breakdown.
    """

    def __init__(self, group: str = "black"):
        if group not in RACE_GROUPS:
            raise ValueError(f"Unknown race group {group!r}; expected one of {sorted(RACE_GROUPS)}")
        self.group = group
        self.variable = RACE_GROUPS[group]

    @property
    def variables(self) -> list[str]:
        return [TOTAL_POPULATION, *RACE_GROUPS.values()]

    @property
    def measure_names(self) -> list[str]:
        return [*RACE_GROUPS, OTHER_GROUP]

    def parse_measures(self, payload: list[list[str]]) -> dict[str, dict[str, float]]:
        table: dict[str, dict[str, float]] = {}
        for geoid, row in iter_tract_rows(payload):
            if geoid in table:
                continue
            total = safe_number(row.get(TOTAL_POPULATION))
            if not total or total <= 0:
                continue

            shares: dict[str, float] = {}
            for name, variable in RACE_GROUPS.items():
                count = safe_number(row.get(variable))
                if count is not None and count >= 0:
                    shares[name] = count / total * 100
            if len(shares) == len(RACE_GROUPS):
                shares[OTHER_GROUP] = max(0.0, 100 - sum(shares.values()))
            if shares:
                table[geoid] = shares
        return table

    def parse(self, payload: list[list[str]]) -> dict[str, float]:
        return measure_values(self.parse_measures(payload), self.group)
