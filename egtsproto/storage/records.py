"""Navigation records exported to storages."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Protocol

from egtsproto.codes import _json_field, _to_json_value


class _Message(Protocol):
    def to_bytes(self) -> bytes: ...


@dataclass
class AnSensor:
    """Reading of one analog sensor."""

    sensor_number: int = _json_field("sensor_number", default=0)
    value: int = _json_field("value", default=0)


@dataclass
class LiquidSensor:
    """Reading of one liquid level sensor."""

    sensor_number: int = _json_field("sensor_number", default=0)
    error_flag: str = _json_field("error_flag", default="")
    value_mm: int = _json_field("value_mm", default=0)
    value_l: int = _json_field("value_l", default=0)


@dataclass
class NavRecord:
    """A position report with the sensor readings that came with it."""

    client: int = _json_field("client", default=0)
    packet_id: int = _json_field("packet_id", default=0)
    navigation_timestamp: int = _json_field("navigation_unix_time", default=0)
    received_timestamp: int = _json_field("received_unix_time", default=0)
    latitude: float = _json_field("latitude", default=0.0)
    longitude: float = _json_field("longitude", default=0.0)
    speed: int = _json_field("speed", default=0)
    pdop: int = _json_field("pdop", default=0)
    hdop: int = _json_field("hdop", default=0)
    vdop: int = _json_field("vdop", default=0)
    nsat: int = _json_field("nsat", default=0)
    ns: int = _json_field("ns", default=0)
    course: int = _json_field("course", default=0)
    an_sensors: list[AnSensor] = _json_field("an_sensors", default_factory=list)
    liquid_sensors: list[LiquidSensor] = _json_field("liquid_sensors", default_factory=list)

    def to_bytes(self) -> bytes:
        """Compact JSON encoding; empty sensor lists are written as null."""
        data = _to_json_value(self)
        for key in ("an_sensors", "liquid_sensors"):
            if not data[key]:
                data[key] = None
        for key in ("latitude", "longitude"):
            value = data[key]
            if isinstance(value, float) and value.is_integer():
                data[key] = int(value)
        text = json.dumps(data, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        return text.encode("utf-8")