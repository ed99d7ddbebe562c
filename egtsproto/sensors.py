"""Subrecords carrying the state of single sensor, counter and loop inputs."""

from __future__ import annotations

from dataclasses import dataclass

from egtsproto.codes import BinaryData, _json_field

_U24_MASK = 0xFFFFFF


def _check_range(value: int, limit: int, what: str) -> int:
    if not 0 <= value <= limit:
        raise ValueError(f"{what} out of range: {value}")
    return value


def _read_u24(content: bytes, pos: int, what: str) -> tuple[int, int]:
    """Read a three-byte little-endian value; a short tail is padded with zeros."""
    chunk = content[pos:pos + 3]
    if not chunk:
        raise ValueError(f"cannot read {what}")
    return int.from_bytes(chunk.ljust(3, b"\x00"), "little"), pos + len(chunk)


def _u24_bytes(value: int, what: str) -> bytes:
    """The three low bytes of a 32-bit value, little-endian."""
    _check_range(value, 0xFFFFFFFF, what)
    return (value & _U24_MASK).to_bytes(3, "little")


@dataclass
class SrAbsAnSensData(BinaryData):
    """EGTS_SR_ABS_AN_SENS_DATA: the state of one analog input."""

    sensor_number: int = _json_field("SensorNumber", default=0)
    value: int = _json_field("Value", default=0)

    def decode(self, content: bytes) -> None:
        content = bytes(content)
        if len(content) < self.length():
            raise ValueError("invalid data size")
        self.sensor_number = content[0]
        self.value = int.from_bytes(content[1:4], "little")

    def encode(self) -> bytes:
        _check_range(self.sensor_number, 0xFF, "sensor number")
        _check_range(self.value, 0xFFFFFFFF, "sensor value")
        return bytes([self.sensor_number]) + (self.value & _U24_MASK).to_bytes(3, "little")

    def length(self) -> int:
        return 4


@dataclass
class SrAbsCntrData(BinaryData):
    """EGTS_SR_ABS_CNTR_DATA: the state of one counting input."""

    counter_number: int = _json_field("CN", default=0)
    counter_value: int = _json_field("CNV", default=0)

    def decode(self, content: bytes) -> None:
        content = bytes(content)
        if not content:
            raise ValueError("cannot read counter input number")
        self.counter_number = content[0]
        self.counter_value, _ = _read_u24(content, 1, "counter input value")

    def encode(self) -> bytes:
        _check_range(self.counter_number, 0xFF, "counter input number")
        return bytes([self.counter_number]) + _u24_bytes(
            self.counter_value, "counter input value"
        )

    def length(self) -> int:
        """Length of the encoded subrecord, or 0 when it cannot be encoded."""
        try:
            return len(self.encode()) & 0xFFFF
        except ValueError:
            return 0


@dataclass
class SrAbsDigSensData(BinaryData):
    """EGTS_SR_ABS_DIG_SENS_DATA: the state of one digital input."""

    sensor_number: int = _json_field("DSN", default=0)
    sensor_state: int = _json_field("DSST", default=0)

    def decode(self, content: bytes) -> None:
        content = bytes(content)
        if len(content) < 2:
            raise ValueError(f"invalid sr_abs_dig_sens_data content length: {len(content)}")
        low, high = content[0], content[1]
        self.sensor_state = low & 0x0F
        self.sensor_number = (high << 4) | (low >> 4)

    def encode(self) -> bytes:
        if not 0 <= self.sensor_number <= 0x0FFF:
            raise ValueError(f"invalid digital input number: {self.sensor_number}")
        _check_range(self.sensor_state, 0xFF, "digital input state")
        low = ((self.sensor_number & 0x0F) << 4) | (self.sensor_state & 0x0F)
        return bytes([low, self.sensor_number >> 4])

    def length(self) -> int:
        return 2


@dataclass
class SrAbsLoopinData(BinaryData):
    """EGTS_SR_ABS_LOOPIN_DATA: the state of one loop input."""

    loop_in_number: int = _json_field("LIN", default=0)
    loop_in_state: int = _json_field("LIS", default=0)

    def decode(self, content: bytes) -> None:
        content = bytes(content)
        if len(content) < 2:
            raise ValueError(f"invalid sr_abs_loopin_data content length: {len(content)}")
        low, high = content[0], content[1]
        self.loop_in_state = low & 0x0F
        self.loop_in_number = ((low >> 4) & 0x0F) | (high << 4)

    def encode(self) -> bytes:
        if not 0 <= self.loop_in_state <= 0x0F:
            raise ValueError(f"invalid LIS value: {self.loop_in_state}")
        if not 0 <= self.loop_in_number <= 0x0FFF:
            raise ValueError(f"invalid LIN number: {self.loop_in_number}")
        low = ((self.loop_in_number & 0x0F) << 4) | self.loop_in_state
        return bytes([low, self.loop_in_number >> 4])

    def length(self) -> int:
        return 2