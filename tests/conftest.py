"""Canonical test fixtures used across engine and data tests.

Fixture: two Milwaukee HOLC zones.
  Zone 6284 (grade A) overlaps three tracts (0.75 / 0.15 / 0.10).
  Zone 6300 (grade D) overlaps two tracts (0.60 / 0.40).
Median incomes 100K / 80K / 120K and 25K / 22K give 99,000 and 23,800.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.engine.crosswalk import CrosswalkIndex, build_crosswalk_index
from src.models.zone import CrosswalkRecord


@pytest.fixture
def canonical_crosswalk() -> list[CrosswalkRecord]:
    return [
        CrosswalkRecord("6284", "55079035100", 0.75),
        CrosswalkRecord("6284", "55079035200", 0.15),
        CrosswalkRecord("6284", "55079060200", 0.10),
        CrosswalkRecord("6300", "55079010100", 0.60),
        CrosswalkRecord("6300", "55079010200", 0.40),
    ]


@pytest.fixture
def canonical_index(canonical_crosswalk) -> CrosswalkIndex:
    return build_crosswalk_index(canonical_crosswalk)


@pytest.fixture
def canonical_incomes() -> dict[str, float]:
    return {
        "55079035100": 100000,
        "55079035200": 80000,
        "55079060200": 120000,
        "55079010100": 25000,
        "55079010200": 22000,
    }


@pytest.fixture
def canonical_grades() -> dict[str, str | None]:
    return {"6284": "A", "6300": "D"}


@pytest.fixture
def census_income_response() -> list[list[str]]:
    """ACS response in the real format: header row + data rows."""
    return [
        ["B19013_001E", "state", "county", "tract"],
        ["100000", "55", "079", "035100"],
        ["80000", "55", "079", "035200"],
        ["120000", "55", "079", "060200"],
        ["25000", "55", "079", "010100"],
        ["22000", "55", "079", "010200"],
        ["-666666666", "55", "079", "980000"],  # no-data tract
    ]


@pytest.fixture
def places_records() -> list[dict]:
    """CDC PLACES rows for two tracts; tract 035200 only has two measures."""
    return [
        {"locationid": "55079035100", "measure": "Current asthma among adults", "data_value": "10.0"},
        {"locationid": "55079035100", "measure": "Diagnosed diabetes among adults", "data_value": "12.0"},
        {"locationid": "55079035100", "measure": "Frequent mental distress among adults", "data_value": "14.0"},
        {"locationid": "55079035100", "measure": "Frequent physical distress among adults", "data_value": "16.0"},
        {"locationid": "55079035100", "measure": "Fair or poor self-rated health status among adults", "data_value": "18.0"},
        {"locationid": "55079035200", "measure": "Current asthma among adults", "data_value": "20.0"},
        {"locationid": "55079035200", "measure": "Diagnosed diabetes among adults", "data_value": "30.0"},
        {"locationid": "55079010100", "measure": "Current asthma among adults", "data_value": ""},
    ]


@pytest.fixture
def mock_http():
    """Build a stand-in for httpx.AsyncClient.

    Each item of ``responses`` is either a JSON body (returned from resp.json())
    or an exception raised by client.get().
    """

    def factory(*responses):
        side_effects = []
        for item in responses:
            if isinstance(item, Exception):
                side_effects.append(item)
                continue
            resp = MagicMock()
            resp.raise_for_status.return_value = None
            resp.json.return_value = item
            side_effects.append(resp)

        client = AsyncMock()
        client.get.side_effect = side_effects
        client.__aenter__.return_value = client
        client.__aexit__.return_value = False
        return client

    return factory


@pytest.fixture
def census_race_response() -> list[list[str]]:
    """ACS race/ethnicity counts for the canonical tracts.

    Shares (white / black / asian / hispanic / other):
      035100  60 / 25 / 5 / 5 / 5
      035200  50 / 30 / 5 / 5 / 10
      060200  50 / -- / 1 / 10 / --   (black estimate suppressed)
      010100   5 / 90 / 0 / 3 / 2
      010200  10 / 70 / 0 / 30 / 0    (remainder clamped)
    """
    return [
        ["B02001_001E", "B02001_002E", "B02001_003E", "B02001_005E", "B03002_012E", "state", "county", "tract"],
        ["4000", "2400", "1000", "200", "200", "55", "079", "035100"],
        ["2000", "1000", "600", "100", "100", "55", "079", "035200"],
        ["3000", "1500", "-666666666", "30", "300", "55", "079", "060200"],
        ["2000", "100", "1800", "0", "60", "55", "079", "010100"],
        ["1000", "100", "700", "0", "300", "55", "079", "010200"],
        ["0", "0", "0", "0", "0", "55", "079", "980000"],
    ]
