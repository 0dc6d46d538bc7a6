# footpress/sensors/client.py
import math
import logging
from typing import Dict

import requests
import certifi

from footpress import config
from footpress.reference.regions import SENSOR_FIELDS

logger = logging.getLogger(__name__)


class SensorReadError(RuntimeError):
    pass


def parse_reading(data) -> Dict[str, float]:
    """
    Map one sensor JSON document to {region_key: kPa}.

    All four sensor fields must be present and numeric; otherwise the whole
    document is rejected so a partial reading never skews the average.
    """
    if not isinstance(data, dict):
        raise SensorReadError(f"Expected a JSON object, got {type(data).__name__}")

    reading = {}
    for field, key in SENSOR_FIELDS.items():
        raw = data.get(field)
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise SensorReadError(f"Field {field} missing or not numeric: {raw!r}")
        if not math.isfinite(raw):
            raise SensorReadError(f"Field {field} is not finite: {raw!r}")
        reading[key] = float(raw)
    return reading


class SensorClient:
    """Fetches the latest insole reading from the sensor HTTP endpoint."""

    def __init__(self, url: str | None = None, timeout: float | None = None, session=None):
        self.url = url or config.SENSOR_URL
        self.timeout = timeout if timeout is not None else config.SENSOR_TIMEOUT_SECONDS
        self.http = session or requests.Session()

    def fetch(self) -> Dict[str, float]:
        try:
            resp = self.http.get(self.url, timeout=self.timeout, verify=certifi.where())
            resp.raise_for_status()
            data = resp.json()
        except requests.exceptions.RequestException as e:
            raise SensorReadError(f"Sensor request failed: {e}") from e
        except ValueError as e:
            raise SensorReadError(f"Sensor returned non-JSON body: {e}") from e
        return parse_reading(data)

    def close(self):
        self.http.close()
