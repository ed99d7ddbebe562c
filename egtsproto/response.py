"""EGTS_PT_RESPONSE frame."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Callable

from egtsproto.codes import BinaryData, _json_field


@dataclass
class _OpaqueData(BinaryData):
    """A section kept as raw bytes."""

    data: bytes = _json_field("data", default=b"")

    def decode(self, content: bytes) -> None:
        self.data = bytes(content)

    def encode(self) -> bytes:
        return self.data

    def length(self) -> int:
        return len(self.data) & 0xFFFF


@dataclass
class PtResponse(BinaryData):
    """Transport-level response: confirmed packet id, result and optional records."""

    response_packet_id: int = _json_field("RPID", default=0)
    processing_result: int = _json_field("PR", default=0)
    sdr: BinaryData | None = _json_field("SDR", default=None)
    sdr_type: Callable[[], BinaryData] | None = _json_field(
        None, default=None, compare=False, repr=False
    )

    def decode(self, content: bytes) -> None:
        content = bytes(content)
        if len(content) < 2:
            raise ValueError("cannot read the response packet identifier")
        (self.response_packet_id,) = struct.unpack_from("<H", content)
        if len(content) < 3:
            raise ValueError("cannot read the processing result")
        self.processing_result = content[2]
        rest = content[3:]
        if rest:
            section = (self.sdr_type or _OpaqueData)()
            section.decode(rest)
            self.sdr = section

    def encode(self) -> bytes:
        try:
            head = struct.pack("<HB", self.response_packet_id, self.processing_result)
        except struct.error as exc:
            raise ValueError(f"cannot encode response header: {exc}") from exc
        if self.sdr is None:
            return head
        return head + self.sdr.encode()

    def length(self) -> int:
        """Length of the encoded frame, or 0 when it cannot be encoded."""
        try:
            return len(self.encode()) & 0xFFFF
        except ValueError:
            return 0