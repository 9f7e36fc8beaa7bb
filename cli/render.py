from __future__ import annotations

from datetime import tzinfo
from typing import Any, Iterable, Optional

import typer

from app.schemas import PresentationResult
from services.levels import select_colors


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_presentation(
    result: PresentationResult, dark_mode: bool = False, tz: Optional[tzinfo] = None
) -> None:
    classification = result.classification
    level = classification.level
    colors = select_colors(level, dark_mode)

    echo_heading(result.trend.header_text())
    typer.secho(str(classification.aqi), bold=True)
    typer.echo(level.label)
    typer.echo()
    typer.echo(result.label or f"Sensor {result.sensor_id}")
    typer.echo(result.updated_text(tz))

    typer.echo()
    echo_key_values(
        [
            ("corrected_pm2.5", f"{result.corrected_concentration:.2f}"),
            ("trend_delta", result.trend.delta),
            ("appearance", "dark" if dark_mode else "light"),
            ("gradient", f"#{colors.start} -> #{colors.end}"),
            ("text_color", f"#{colors.text}"),
            ("text_size", level.text_size),
            ("map", result.map_url),
        ]
    )


def render_failure(exc: Exception) -> None:
    typer.secho(str(exc), fg=typer.colors.RED, err=True)
