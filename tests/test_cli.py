from __future__ import annotations

import json
from typing import Any, Dict, Iterator, List

import httpx
import pytest
from typer.testing import CliRunner

from cli.app import app
from settings import get_settings
from sources.purpleair import PurpleAirClient


def _payload() -> Dict[str, Any]:
    return {
        "results": [
            {
                "Label": "Mission District",
                "Lat": 37.7609,
                "Lon": -122.4194,
                "LastSeen": 1602868765,
                "humidity": "40",
                "pm2_5_cf_1": "20.31",
                "Stats": json.dumps({"v1": 50.8, "v2": 44.2}),
            },
            {"pm2_5_cf_1": "22.87"},
        ]
    }


class ClientRecorder:
    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self.requests: List[httpx.Request] = []
        self.configs: List[tuple[str, float]] = []

    def factory(self, api_url: str, timeout: float = 10.0) -> PurpleAirClient:
        self.configs.append((api_url, timeout))
        return PurpleAirClient(api_url, timeout=timeout, transport=httpx.MockTransport(self._handle))

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch) -> Iterator[None]:
    monkeypatch.delenv("AQI_APPEARANCE", raising=False)
    monkeypatch.delenv("PURPLEAIR_SENSOR_ID", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _install(monkeypatch, response: httpx.Response) -> ClientRecorder:
    recorder = ClientRecorder(response)
    monkeypatch.setattr("cli.app.PurpleAirClient", recorder.factory)
    return recorder


def test_show_fetches_configured_sensor(monkeypatch, runner: CliRunner) -> None:
    recorder = _install(monkeypatch, httpx.Response(200, json=_payload()))

    result = runner.invoke(
        app,
        ["--sensor-id", "1234", "--api-url", "https://purpleair.test/json?show=", "--timeout", "3", "show"],
    )

    assert result.exit_code == 0, result.output
    assert recorder.configs == [("https://purpleair.test/json?show=", 3.0)]
    assert recorder.requests[0].url.params["show"] == "1234"
    assert "AQI Worsening" in result.output
    assert "53" in result.output
    assert "Moderate" in result.output
    assert "Mission District" in result.output
    assert "gradient: #ffff00 -> #cccc00" in result.output
    assert "select=1234" in result.output


def test_show_json_output(monkeypatch, runner: CliRunner) -> None:
    _install(monkeypatch, httpx.Response(200, json=_payload()))

    result = runner.invoke(app, ["show", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["sensor_id"] == "34663"
    assert payload["classification"]["aqi"] == 53
    assert payload["trend"]["direction"] == "Worsening"


def test_show_reports_fetch_failure(monkeypatch, runner: CliRunner) -> None:
    _install(monkeypatch, httpx.Response(500))

    result = runner.invoke(app, ["show"])

    assert result.exit_code == 1
    assert "PurpleAir returned status 500" in result.output


def test_compute_offline(monkeypatch, runner: CliRunner) -> None:
    recorder = _install(monkeypatch, httpx.Response(500))

    result = runner.invoke(
        app,
        ["compute", "-a", "20", "-b", "22", "--humidity", "40", "--short", "50", "--long", "44"],
    )

    assert result.exit_code == 0, result.output
    assert recorder.requests == []
    assert "AQI Worsening" in result.output
    assert "53" in result.output
    assert "corrected_pm2.5: 13.23" in result.output


def test_compute_dark_appearance(monkeypatch, runner: CliRunner) -> None:
    _install(monkeypatch, httpx.Response(500))

    result = runner.invoke(app, ["--dark", "compute", "-a", "0", "-b", "0", "--humidity", "60"])

    assert result.exit_code == 0, result.output
    assert "Good" in result.output
    assert "appearance: dark" in result.output
    assert "gradient: #000000 -> #000000" in result.output


def test_appearance_from_environment(monkeypatch, runner: CliRunner) -> None:
    _install(monkeypatch, httpx.Response(500))
    monkeypatch.setenv("AQI_APPEARANCE", "dark")

    result = runner.invoke(app, ["compute", "-a", "0", "-b", "0", "--humidity", "60"])

    assert result.exit_code == 0, result.output
    assert "appearance: dark" in result.output


def test_compute_rejects_unreadable_reading(monkeypatch, runner: CliRunner) -> None:
    _install(monkeypatch, httpx.Response(500))

    result = runner.invoke(app, ["compute", "-a", "offline", "-b", "22", "--humidity", "40"])

    assert result.exit_code == 1
    assert "Invalid channel_a reading" in result.output


def test_compute_reports_undefined_aqi(monkeypatch, runner: CliRunner) -> None:
    _install(monkeypatch, httpx.Response(500))

    result = runner.invoke(app, ["compute", "-a", "0", "-b", "0", "--humidity", "100"])

    assert result.exit_code == 1
    assert "AQI is undefined" in result.output
