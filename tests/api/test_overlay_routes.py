"""Tests for the overlay API routes."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from src.api.app import app
from src.api.deps import get_resolver
from src.data.census import IncomeAdapter, RaceAdapter
from src.data.places import health_adapter
from src.data.resolver import DatasetSource, OverlayResolver
from src.models.overlay import Dataset


class StaticFetcher:
    def __init__(self, payload):
        self.payload = payload

    async def fetch(self):
        return self.payload


@pytest.fixture
def client(
    canonical_crosswalk, canonical_grades, census_income_response, census_race_response, places_records,
):
    resolver = OverlayResolver(
        canonical_crosswalk,
        canonical_grades,
        sources={
            Dataset.INCOME: DatasetSource(StaticFetcher(census_income_response), IncomeAdapter()),
            Dataset.HEALTH: DatasetSource(StaticFetcher(places_records), health_adapter()),
            Dataset.RACE: DatasetSource(StaticFetcher(census_race_response), RaceAdapter()),
        },
    )
    app.dependency_overrides[get_resolver] = lambda: resolver
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestListOverlays:
    def test_lists_every_dataset(self, client):
        resp = client.get("/api/v1/overlays")
        assert resp.status_code == 200
        body = resp.json()
        assert [o["dataset"] for o in body] == [d.value for d in Dataset]

    def test_legend_domain(self, client):
        income = client.get("/api/v1/overlays").json()[0]
        assert income["domain"] == {
            "min": 2000,
            "max": 120000,
            "low_color": "#f44336",
            "high_color": "#4caf50",
            "neutral_color": "#9e9e9e",
        }
        assert income["ratio"] == "A/D"


class TestGetOverlay:
    def test_income_overlay(self, client):
        resp = client.get("/api/v1/overlays/income")
        assert resp.status_code == 200
        body = resp.json()

        assert body["insight_ratio"] == "4.2x"
        assert body["grade_averages"]["A"] == pytest.approx(99000)
        assert body["grade_averages"]["B"] is None

        zones = {z["zone_id"]: z for z in body["zones"]}
        assert zones["6284"]["percentile_rank"] == 100
        assert zones["6300"]["percentile_rank"] == 0
        assert zones["6284"]["color"].startswith("#")
        assert zones["6284"]["rgba"][3] == 190

    def test_fill_alpha_from_settings(self, client):
        with patch("src.api.schemas.settings") as mock_settings:
            mock_settings.color_alpha = 80
            body = client.get("/api/v1/overlays/income").json()
        assert all(z["rgba"][3] == 80 for z in body["zones"])

    def test_null_zone_is_neutral(self, client):
        body = client.get("/api/v1/overlays/health").json()
        zone = next(z for z in body["zones"] if z["zone_id"] == "6300")
        assert zone["weighted_value"] is None
        assert zone["percentile_rank"] is None
        assert zone["color"] == "#9e9e9e"

    def test_unknown_dataset(self, client):
        assert client.get("/api/v1/overlays/crime").status_code == 422


class TestGetZone:
    def test_zone_summary(self, client):
        resp = client.get("/api/v1/overlays/income/zones/6284")
        assert resp.status_code == 200
        body = resp.json()
        assert body["grade"] == "A"
        assert body["weighted_value"] == pytest.approx(99000)
        assert body["contributing_units"] == 3
        assert body["years_since_holc"] >= 88
        assert body["measures"] == []

    def test_composite_zone_lists_measures(self, client):
        body = client.get("/api/v1/overlays/health/zones/6284").json()
        assert [m["name"] for m in body["measures"]][:2] == ["asthma", "diabetes"]

    def test_race_zone_composition_by_grade(self, client):
        body = client.get("/api/v1/overlays/race/zones/6300").json()
        assert [m["name"] for m in body["measures"]] == ["white", "black", "asian", "hispanic", "other"]
        assert body["measure_grade_averages"]["black"]["D"] == pytest.approx(82.0)
        assert body["measure_grade_averages"]["black"]["B"] is None
        assert body["insight_ratio"] == "3.2x"

    def test_unknown_zone(self, client):
        resp = client.get("/api/v1/overlays/income/zones/9999")
        assert resp.status_code == 404
