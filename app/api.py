"""HTTP route definitions for the service."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.schemas import PresentationResult, SnapshotRequest
from models.records import SensorSnapshot
from services.errors import AQIError
from services.pipeline import AQIPipeline, build_default_pipeline
from sources.purpleair import PurpleAirClient, SensorDataError, build_default_client

logger = logging.getLogger(__name__)

router = APIRouter()


def get_pipeline() -> AQIPipeline:
    return build_default_pipeline()


def get_client() -> PurpleAirClient:
    return build_default_client()


def _run_pipeline(pipeline: AQIPipeline, snapshot: SensorSnapshot) -> PresentationResult:
    try:
        return pipeline.run(snapshot)
    except AQIError as exc:
        logger.warning(
            "AQI computation failed",
            extra={"sensor_id": snapshot.sensor_id, "reason": str(exc)},
        )
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc


@router.get(
    "/sensors/{sensor_id}/aqi",
    response_model=PresentationResult,
    summary="Fetch a PurpleAir sensor and compute its corrected AQI.",
)
def sensor_aqi(
    sensor_id: str,
    client: PurpleAirClient = Depends(get_client),
    pipeline: AQIPipeline = Depends(get_pipeline),
) -> PresentationResult:
    try:
        snapshot = client.fetch_snapshot(sensor_id)
    except SensorDataError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(exc),
        ) from exc
    return _run_pipeline(pipeline, snapshot)


@router.post(
    "/aqi",
    response_model=PresentationResult,
    summary="Compute the corrected AQI for readings supplied in the request.",
)
def compute_aqi(
    request: SnapshotRequest,
    pipeline: AQIPipeline = Depends(get_pipeline),
) -> PresentationResult:
    return _run_pipeline(pipeline, request.to_snapshot())


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
