from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import typer

from cli.config import CLIConfig, load_config
from cli.render import render_failure, render_presentation
from logging_config import configure_logging
from models.records import SensorSnapshot
from services.errors import AQIError
from services.pipeline import AQIPipeline, build_default_pipeline
from sources.purpleair import PurpleAirClient

logger = logging.getLogger(__name__)


@dataclass
class CLIState:
    config: CLIConfig
    client: PurpleAirClient
    pipeline: AQIPipeline


app = typer.Typer(
    help="Corrected AQI, level and trend for a PurpleAir sensor.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


def _run_and_render(state: CLIState, snapshot: SensorSnapshot, as_json: bool) -> None:
    try:
        result = state.pipeline.run(snapshot)
    except AQIError as exc:
        logger.warning(
            "AQI computation failed",
            extra={"sensor_id": snapshot.sensor_id, "reason": str(exc)},
        )
        render_failure(exc)
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        return
    render_presentation(result, dark_mode=state.config.dark_mode)


@app.callback()
def main(
    ctx: typer.Context,
    sensor_id: Optional[str] = typer.Option(
        None,
        "--sensor-id",
        "-s",
        help="PurpleAir sensor ID (defaults to PURPLEAIR_SENSOR_ID env or 34663).",
    ),
    api_url: Optional[str] = typer.Option(
        None,
        "--api-url",
        help="PurpleAir JSON endpoint prefix; the sensor ID is appended.",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for the PurpleAir response.",
    ),
    dark_mode: Optional[bool] = typer.Option(
        None,
        "--dark/--light",
        help="Appearance used to pick the level colours (defaults to AQI_APPEARANCE env).",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(
        sensor_id=sensor_id,
        api_url=api_url,
        timeout=timeout,
        dark_mode=dark_mode,
    )
    client = PurpleAirClient(config.api_url, timeout=config.timeout)
    ctx.obj = CLIState(config=config, client=client, pipeline=build_default_pipeline())
    ctx.call_on_close(client.close)


@app.command("show")
def show_command(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
) -> None:
    """Fetch the configured sensor and display its AQI."""
    state = _get_state(ctx)
    sensor_id = state.config.sensor_id
    try:
        snapshot = state.client.fetch_snapshot(sensor_id)
    except AQIError as exc:
        render_failure(exc)
        raise typer.Exit(code=1) from exc
    _run_and_render(state, snapshot, as_json)


@app.command("compute")
def compute_command(
    ctx: typer.Context,
    channel_a: str = typer.Option(..., "--channel-a", "-a", help="PM2.5 cf_1 reading, channel A."),
    channel_b: str = typer.Option(..., "--channel-b", "-b", help="PM2.5 cf_1 reading, channel B."),
    humidity: str = typer.Option(..., "--humidity", help="Relative humidity percent."),
    short_window: Optional[str] = typer.Option(
        None, "--short", help="Live rolling average used for the trend."
    ),
    long_window: Optional[str] = typer.Option(
        None, "--long", help="Longer rolling average used for the trend."
    ),
    label: Optional[str] = typer.Option(None, "--label", help="Location label to display."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
) -> None:
    """Compute the AQI from readings given on the command line."""
    state = _get_state(ctx)
    snapshot = SensorSnapshot(
        sensor_id=state.config.sensor_id,
        channel_a=channel_a,
        channel_b=channel_b,
        humidity=humidity,
        stat_short_window=short_window,
        stat_long_window=long_window,
        label=label,
    )
    _run_and_render(state, snapshot, as_json)


def run() -> None:
    """Console script entry point."""
    configure_logging("WARNING")
    app()
