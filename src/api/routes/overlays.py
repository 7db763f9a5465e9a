"""Overlay statistics routes."""

from fastapi import APIRouter, Depends, HTTPException

from src.api.deps import get_resolver
from src.api.schemas import OverlayInfoResponse, OverlayResponse, ZoneSummaryResponse
from src.data.resolver import OverlayResolver
from src.engine.overlay import OVERLAYS
from src.models.overlay import Dataset

router = APIRouter(prefix="/api/v1/overlays", tags=["overlays"])


@router.get("", response_model=list[OverlayInfoResponse])
async def list_overlays():
    """List overlay datasets with their legend domains."""
    return [OverlayInfoResponse.from_definition(d) for d in OVERLAYS.values()]


@router.get("/{dataset}", response_model=OverlayResponse)
async def get_overlay(dataset: Dataset, resolver: OverlayResolver = Depends(get_resolver)):
    """Every zone's value, percentile and color, plus grade comparison."""
    result = await resolver.get_overlay(dataset)
    return OverlayResponse.from_result(result)


@router.get("/{dataset}/zones/{zone_id}", response_model=ZoneSummaryResponse)
async def get_zone(
    dataset: Dataset,
    zone_id: str,
    resolver: OverlayResolver = Depends(get_resolver),
):
    """Statistics panel for one zone."""
    summary = await resolver.get_zone_summary(dataset, zone_id)
    if summary is None:
        raise HTTPException(status_code=404, detail=f"Unknown zone {zone_id}")
    return ZoneSummaryResponse.from_summary(summary)
