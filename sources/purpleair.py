"""PurpleAir JSON retrieval."""

from __future__ import annotations

import json
import logging
import math
from functools import lru_cache
from typing import Any, Dict, Mapping, Optional, Sequence

import httpx

from models.records import SensorSnapshot
from services.errors import AQIError
from settings import get_settings

logger = logging.getLogger(__name__)

MAP_URL_TEMPLATE = (
    "https://www.purpleair.com/map?opt=1/i/mAQI/a10/cC0&select={sensor_id}#14/{lat}/{lon}"
)


class SensorDataError(AQIError):
    """Sensor data could not be fetched or is not shaped as expected."""


def build_map_url(sensor_id: str, latitude: Optional[float], longitude: Optional[float]) -> str:
    return MAP_URL_TEMPLATE.format(sensor_id=sensor_id, lat=latitude, lon=longitude)


def _safe_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _safe_int(value: Any) -> Optional[int]:
    parsed = _safe_float(value)
    if parsed is None or not math.isfinite(parsed):
        return None
    return int(parsed)


def _decode_stats(raw: Any) -> Mapping[str, Any]:
    if isinstance(raw, Mapping):
        return raw
    if isinstance(raw, (str, bytes)):
        try:
            decoded = json.loads(raw)
        except json.JSONDecodeError:
            return {}
        if isinstance(decoded, Mapping):
            return decoded
    return {}


def snapshot_from_payload(payload: Any, sensor_id: str) -> SensorSnapshot:
    """Resolve a PurpleAir ``/json?show=`` document into a snapshot.

    The first result carries the location, humidity and rolling statistics;
    the ``cf_1`` PM2.5 readings come from the first two results, one per
    laser counter.
    """
    if not isinstance(payload, Mapping):
        raise SensorDataError(f"Sensor {sensor_id} response is not a JSON object.")
    results = payload.get("results")
    if not isinstance(results, Sequence) or isinstance(results, (str, bytes)):
        raise SensorDataError(f"Sensor {sensor_id} response has no results.")
    if len(results) < 2:
        raise SensorDataError(
            f"Sensor {sensor_id} reported {len(results)} channel(s); two are required."
        )
    primary, secondary = results[0], results[1]
    if not isinstance(primary, Mapping) or not isinstance(secondary, Mapping):
        raise SensorDataError(f"Sensor {sensor_id} results are malformed.")

    stats = _decode_stats(primary.get("Stats"))
    label = primary.get("Label")
    return SensorSnapshot(
        sensor_id=str(sensor_id),
        channel_a=primary.get("pm2_5_cf_1"),
        channel_b=secondary.get("pm2_5_cf_1"),
        humidity=primary.get("humidity"),
        stat_short_window=stats.get("v1"),
        stat_long_window=stats.get("v2"),
        observed_at_epoch_seconds=_safe_int(primary.get("LastSeen")),
        label=str(label) if label is not None else None,
        latitude=_safe_float(primary.get("Lat")),
        longitude=_safe_float(primary.get("Lon")),
    )


class PurpleAirClient:
    """Minimal HTTP client for the PurpleAir sensor JSON endpoint."""

    def __init__(
        self,
        api_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.api_url = api_url
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def fetch_payload(self, sensor_id: str) -> Dict[str, Any]:
        url = f"{self.api_url}{sensor_id}"
        logger.debug("Fetching sensor data", extra={"sensor_id": sensor_id})
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Sensor request rejected",
                extra={"sensor_id": sensor_id, "status_code": exc.response.status_code},
            )
            raise SensorDataError(
                f"PurpleAir returned status {exc.response.status_code} for sensor {sensor_id}."
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "Sensor request failed", extra={"sensor_id": sensor_id, "reason": str(exc)}
            )
            raise SensorDataError(f"Could not reach PurpleAir for sensor {sensor_id}: {exc}") from exc

        try:
            return response.json()
        except ValueError as exc:
            raise SensorDataError(f"PurpleAir returned invalid JSON for sensor {sensor_id}.") from exc

    def fetch_snapshot(self, sensor_id: str) -> SensorSnapshot:
        return snapshot_from_payload(self.fetch_payload(sensor_id), sensor_id)


@lru_cache
def build_default_client() -> PurpleAirClient:
    """Factory that wires the client from environment settings."""
    settings = get_settings()
    return PurpleAirClient(api_url=settings.api_url, timeout=settings.request_timeout)
