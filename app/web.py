from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from services.errors import AQIError
from services.levels import select_colors
from services.pipeline import AQIPipeline, build_default_pipeline
from sources.purpleair import PurpleAirClient, build_default_client

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


def get_pipeline() -> AQIPipeline:
    return build_default_pipeline()


def get_client() -> PurpleAirClient:
    return build_default_client()


router = APIRouter(include_in_schema=False)


@router.get("/ui/sensors/{sensor_id}", name="ui_widget", response_class=HTMLResponse)
def ui_widget(
    request: Request,
    sensor_id: str,
    appearance: Literal["light", "dark"] = Query("light"),
    client: PurpleAirClient = Depends(get_client),
    pipeline: AQIPipeline = Depends(get_pipeline),
) -> HTMLResponse:
    try:
        result = pipeline.run(client.fetch_snapshot(sensor_id))
    except AQIError as exc:
        logger.warning(
            "Rendering fallback widget",
            extra={"sensor_id": sensor_id, "reason": str(exc)},
        )
        return templates.TemplateResponse(
            request,
            "ui/error.html",
            {"sensor_id": sensor_id, "error": str(exc)},
        )

    level = result.classification.level
    return templates.TemplateResponse(
        request,
        "ui/widget.html",
        {
            "result": result,
            "header": result.trend.header_text(),
            "updated": result.updated_text(),
            "colors": select_colors(level, appearance == "dark"),
        },
    )
