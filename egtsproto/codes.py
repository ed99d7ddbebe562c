"""Protocol codes and the common interface of binary sections."""

from __future__ import annotations

import base64
import datetime as _dt
import enum
from abc import ABC, abstractmethod
from dataclasses import field, fields, is_dataclass
from typing import Any

# Processing result codes.
PC_OK = 0
PC_DECRYPT_ERROR = 129
PC_INC_HEADERFORM = 131
PC_INC_DATAFORM = 132
PC_UNS_TYPE = 133
PC_HEADERCRC_ERROR = 137
PC_SRVC_DENIED = 0x95


class SubrecordType(enum.IntEnum):
    """Subrecord type codes."""

    RECORD_RESPONSE = 0
    TERM_IDENTITY = 1
    MODULE_DATA = 2
    DISPATCHER_IDENTITY = 5
    AUTH_INFO = 7
    RESULT_CODE = 9
    EGTS_PLUS_DATA = 15
    POS_DATA = 16
    EXT_POS_DATA = 17
    AD_SENSORS_DATA = 18
    COUNTERS_DATA = 19
    # Holds STATE_DATA when five bytes long, ACCEL_DATA otherwise.
    TYPE_20 = 20
    STATE_DATA = 21
    LOOPIN_DATA = 22
    ABS_DIG_SENS_DATA = 23
    ABS_AN_SENS_DATA = 24
    ABS_CNTR_DATA = 25
    ABS_LOOPIN_DATA = 26
    LIQUID_LEVEL_SENSOR = 27
    PASSENGERS_COUNTERS = 28


class PacketType(enum.IntEnum):
    """Transport packet types."""

    RESPONSE = 0
    APPDATA = 1


class ServiceType(enum.IntEnum):
    """Service types."""

    AUTH = 1
    TELEDATA = 2


class BinaryData(ABC):
    """A section that can be read from and written to bytes."""

    @abstractmethod
    def decode(self, content: bytes) -> None:
        """Fill the section from its encoded bytes."""

    @abstractmethod
    def encode(self) -> bytes:
        """Return the encoded bytes of the section."""

    def length(self) -> int:
        """Length of the encoded section, 0 if it cannot be encoded."""
        try:
            return len(self.encode())
        except ValueError:
            return 0


def _json_field(name: str | None, **kwargs: Any) -> Any:
    """A dataclass field carrying its JSON key (None to leave it out)."""
    return field(metadata={"json": name}, **kwargs)


def _to_json_value(obj: Any) -> Any:
    """Convert a section tree to plain JSON-ready values."""
    if is_dataclass(obj) and not isinstance(obj, type):
        result = {}
        for item in fields(obj):
            key = item.metadata.get("json", item.name)
            if key:
                result[key] = _to_json_value(getattr(obj, item.name))
        return result
    if isinstance(obj, enum.Enum):
        return obj.value
    if isinstance(obj, _dt.datetime):
        return obj.isoformat().replace("+00:00", "Z")
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    if isinstance(obj, (list, tuple)):
        return [_to_json_value(value) for value in obj]
    if isinstance(obj, dict):
        return {str(key): _to_json_value(value) for key, value in obj.items()}
    return obj