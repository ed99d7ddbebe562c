"""EGTS_SR_COUNTERS_DATA subrecord."""

from __future__ import annotations

import re
from dataclasses import dataclass

from egtsproto.codes import BinaryData, _json_field
from egtsproto.sensors import _read_u24, _u24_bytes

_BITS = re.compile(r"[01]+")
_FLAGS = tuple(f"counter_field_exists{i}" for i in range(1, 9))
_VALUES = tuple(f"counter{i}" for i in range(1, 9))


@dataclass
class SrCountersData(BinaryData):
    """Values of up to eight counting inputs; presence flags are "0"/"1" strings."""

    counter_field_exists1: str = _json_field("CFE1", default="0")
    counter_field_exists2: str = _json_field("CFE2", default="0")
    counter_field_exists3: str = _json_field("CFE3", default="0")
    counter_field_exists4: str = _json_field("CFE4", default="0")
    counter_field_exists5: str = _json_field("CFE5", default="0")
    counter_field_exists6: str = _json_field("CFE6", default="0")
    counter_field_exists7: str = _json_field("CFE7", default="0")
    counter_field_exists8: str = _json_field("CFE8", default="0")
    counter1: int = _json_field("CN1", default=0)
    counter2: int = _json_field("CN2", default=0)
    counter3: int = _json_field("CN3", default=0)
    counter4: int = _json_field("CN4", default=0)
    counter5: int = _json_field("CN5", default=0)
    counter6: int = _json_field("CN6", default=0)
    counter7: int = _json_field("CN7", default=0)
    counter8: int = _json_field("CN8", default=0)

    def _present(self):
        """Yield (index, value attribute) of each counter flagged as present."""
        for index, (flag, value) in enumerate(zip(_FLAGS, _VALUES), start=1):
            if getattr(self, flag) == "1":
                yield index, value

    def decode(self, content: bytes) -> None:
        content = bytes(content)
        if not content:
            raise ValueError("cannot read sr_counters_data flags byte")
        # The most significant bit stands for the eighth counter.
        for flag, bit in zip(_FLAGS, reversed(f"{content[0]:08b}")):
            setattr(self, flag, bit)

        pos = 1
        for index, value in self._present():
            reading, pos = _read_u24(content, pos, f"CN{index} reading")
            setattr(self, value, reading)

    def encode(self) -> bytes:
        bits = "".join(getattr(self, flag) for flag in reversed(_FLAGS))
        if not _BITS.fullmatch(bits) or int(bits, 2) > 0xFF:
            raise ValueError(f"cannot build counters_data flags byte from {bits!r}")
        result = bytearray([int(bits, 2)])
        for index, value in self._present():
            result += _u24_bytes(getattr(self, value), f"CN{index} reading")
        return bytes(result)

    def length(self) -> int:
        """Length of the encoded subrecord, or 0 when it cannot be encoded."""
        try:
            return len(self.encode()) & 0xFFFF
        except ValueError:
            return 0