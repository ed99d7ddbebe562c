"""EGTS_SR_AD_SENSORS_DATA subrecord."""

from __future__ import annotations

import re
from dataclasses import dataclass

from egtsproto.codes import BinaryData, _json_field
from egtsproto.sensors import _check_range, _read_u24, _u24_bytes

_BITS = re.compile(r"[01]+")
_DIGITAL_FLAGS = tuple(f"digital_inputs_octet_exists{i}" for i in range(1, 9))
_DIGITAL_VALUES = tuple(f"additional_digital_inputs_octet{i}" for i in range(1, 9))
_ANALOG_FLAGS = tuple(f"analog_sensor_field_exists{i}" for i in range(1, 9))
_ANALOG_VALUES = tuple(f"analog_sensor{i}" for i in range(1, 9))


def _flags_byte(bits: str, what: str) -> int:
    if not _BITS.fullmatch(bits) or int(bits, 2) > 0xFF:
        raise ValueError(f"cannot build ad_sensors_data {what} flags byte from {bits!r}")
    return int(bits, 2)


@dataclass
class SrAdSensorsData(BinaryData):
    """State of additional digital and analog inputs; presence flags are "0"/"1" strings."""

    digital_inputs_octet_exists1: str = _json_field("DIOE1", default="0")
    digital_inputs_octet_exists2: str = _json_field("DIOE2", default="0")
    digital_inputs_octet_exists3: str = _json_field("DIOE3", default="0")
    digital_inputs_octet_exists4: str = _json_field("DIOE4", default="0")
    digital_inputs_octet_exists5: str = _json_field("DIOE5", default="0")
    digital_inputs_octet_exists6: str = _json_field("DIOE6", default="0")
    digital_inputs_octet_exists7: str = _json_field("DIOE7", default="0")
    digital_inputs_octet_exists8: str = _json_field("DIOE8", default="0")
    digital_outputs: int = _json_field("DOUT", default=0)
    analog_sensor_field_exists1: str = _json_field("ASFE1", default="0")
    analog_sensor_field_exists2: str = _json_field("ASFE2", default="0")
    analog_sensor_field_exists3: str = _json_field("ASFE3", default="0")
    analog_sensor_field_exists4: str = _json_field("ASFE4", default="0")
    analog_sensor_field_exists5: str = _json_field("ASFE5", default="0")
    analog_sensor_field_exists6: str = _json_field("ASFE6", default="0")
    analog_sensor_field_exists7: str = _json_field("ASFE7", default="0")
    analog_sensor_field_exists8: str = _json_field("ASFE8", default="0")
    additional_digital_inputs_octet1: int = _json_field("ADIO1", default=0)
    additional_digital_inputs_octet2: int = _json_field("ADIO2", default=0)
    additional_digital_inputs_octet3: int = _json_field("ADIO3", default=0)
    additional_digital_inputs_octet4: int = _json_field("ADIO4", default=0)
    additional_digital_inputs_octet5: int = _json_field("ADIO5", default=0)
    additional_digital_inputs_octet6: int = _json_field("ADIO6", default=0)
    additional_digital_inputs_octet7: int = _json_field("ADIO7", default=0)
    additional_digital_inputs_octet8: int = _json_field("ADIO8", default=0)
    analog_sensor1: int = _json_field("ANS1", default=0)
    analog_sensor2: int = _json_field("ANS2", default=0)
    analog_sensor3: int = _json_field("ANS3", default=0)
    analog_sensor4: int = _json_field("ANS4", default=0)
    analog_sensor5: int = _json_field("ANS5", default=0)
    analog_sensor6: int = _json_field("ANS6", default=0)
    analog_sensor7: int = _json_field("ANS7", default=0)
    analog_sensor8: int = _json_field("ANS8", default=0)

    def _present(self, flags: tuple[str, ...], values: tuple[str, ...]):
        """Yield (index, value attribute) of each field flagged as present."""
        for index, (flag, value) in enumerate(zip(flags, values), start=1):
            if getattr(self, flag) == "1":
                yield index, value

    def decode(self, content: bytes) -> None:
        content = bytes(content)
        if len(content) < 1:
            raise ValueError("cannot read ad_sensors_data digital inputs flags byte")
        # The most significant bit stands for the eighth input.
        for flag, bit in zip(_DIGITAL_FLAGS, reversed(f"{content[0]:08b}")):
            setattr(self, flag, bit)

        if len(content) < 2:
            raise ValueError("cannot read digital outputs flags")
        self.digital_outputs = content[1]

        if len(content) < 3:
            raise ValueError("cannot read ad_sensors_data analog inputs flags byte")
        for flag, bit in zip(_ANALOG_FLAGS, reversed(f"{content[2]:08b}")):
            setattr(self, flag, bit)

        pos = 3
        for index, value in self._present(_DIGITAL_FLAGS, _DIGITAL_VALUES):
            if pos >= len(content):
                raise ValueError(f"cannot read ADIO{index} byte")
            setattr(self, value, content[pos])
            pos += 1

        for index, value in self._present(_ANALOG_FLAGS, _ANALOG_VALUES):
            reading, pos = _read_u24(content, pos, f"ANS{index} reading")
            setattr(self, value, reading)

    def encode(self) -> bytes:
        digital_bits = "".join(getattr(self, flag) for flag in reversed(_DIGITAL_FLAGS))
        result = bytearray([_flags_byte(digital_bits, "digital inputs")])
        result.append(_check_range(self.digital_outputs, 0xFF, "digital outputs"))

        # The analog flags byte is written with the first sensor in the high bit.
        analog_bits = "".join(getattr(self, flag) for flag in _ANALOG_FLAGS)
        result.append(_flags_byte(analog_bits, "analog inputs"))

        for index, value in self._present(_DIGITAL_FLAGS, _DIGITAL_VALUES):
            result.append(_check_range(getattr(self, value), 0xFF, f"ADIO{index}"))

        for index, value in self._present(_ANALOG_FLAGS, _ANALOG_VALUES):
            result += _u24_bytes(getattr(self, value), f"ANS{index} reading")
        return bytes(result)

    def length(self) -> int:
        """Length of the encoded subrecord, or 0 when it cannot be encoded."""
        try:
            return len(self.encode()) & 0xFFFF
        except ValueError:
            return 0