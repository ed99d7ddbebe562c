"""EGTS transport packet."""

from __future__ import annotations

import json
import re
import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Mapping

from egtsproto.codes import (
    PC_DECRYPT_ERROR,
    PC_HEADERCRC_ERROR,
    PC_INC_DATAFORM,
    PC_INC_HEADERFORM,
    PC_OK,
    PC_UNS_TYPE,
    BinaryData,
    PacketType,
    _json_field,
    _to_json_value,
)
from egtsproto.crc import crc8, crc16
from egtsproto.response import PtResponse, _OpaqueData

DEFAULT_HEADER_LEN = 11

_BITS = re.compile(r"[01]+")


class EgtsError(ValueError):
    """A packet could not be decoded; ``code`` is the processing result code."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code


class SecretKey(ABC):
    """Cipher for the services frame data of encrypted packets."""

    @abstractmethod
    def decode(self, data: bytes) -> bytes:
        """Decrypt frame data."""

    @abstractmethod
    def encode(self, data: bytes) -> bytes:
        """Encrypt frame data."""


_DEFAULT_FRAME_TYPES: Mapping[int, Callable[[], BinaryData]] = {
    PacketType.APPDATA: _OpaqueData,
    PacketType.RESPONSE: PtResponse,
}


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self.pos = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self.pos

    def take(self, size: int, what: str, code: int) -> bytes:
        chunk = self._data[self.pos:self.pos + size]
        if len(chunk) < size:
            raise EgtsError(code, f"cannot read {what}")
        self.pos += size
        return chunk

    def byte(self, what: str, code: int) -> int:
        return self.take(1, what, code)[0]

    def u16(self, what: str, code: int) -> int:
        return struct.unpack("<H", self.take(2, what, code))[0]


def _pack(fmt: str, *values: int) -> bytes:
    try:
        return struct.pack(fmt, *values)
    except struct.error as exc:
        raise ValueError(f"value out of range: {exc}") from exc


@dataclass
class Package:
    """An EGTS transport packet; flag groups are kept as bit strings."""

    protocol_version: int = _json_field("PRV", default=0)
    security_key_id: int = _json_field("SKID", default=0)
    prefix: str = _json_field("PRF", default="00")
    route: str = _json_field("RTE", default="0")
    encryption_alg: str = _json_field("ENA", default="00")
    compression: str = _json_field("CMP", default="0")
    priority: str = _json_field("PR", default="00")
    header_length: int = _json_field("HL", default=0)
    header_encoding: int = _json_field("HE", default=0)
    frame_data_length: int = _json_field("FDL", default=0)
    packet_identifier: int = _json_field("PID", default=0)
    packet_type: int = _json_field("PT", default=0)
    peer_address: int = _json_field("PRA", default=0)
    recipient_address: int = _json_field("RCA", default=0)
    time_to_live: int = _json_field("TTL", default=0)
    header_check_sum: int = _json_field("HCS", default=0)
    services_frame_data: BinaryData | None = _json_field("SFRD", default=None)
    services_frame_data_check_sum: int = _json_field("SFRCS", default=0)

    def decode(
        self,
        content: bytes,
        secret_key: SecretKey | None = None,
        frame_types: Mapping[int, Callable[[], BinaryData]] | None = None,
    ) -> int:
        """Fill the packet from bytes and return the OK result code.

        ``frame_types`` maps packet types to frame factories; by default
        responses are decoded and application data is kept as raw bytes.
        Raises EgtsError carrying the result code on failure.
        """
        content = bytes(content)
        types = _DEFAULT_FRAME_TYPES if frame_types is None else frame_types
        reader = _Reader(content)
        hdr = PC_INC_HEADERFORM

        self.protocol_version = reader.byte("protocol version", hdr)
        self.security_key_id = reader.byte("security key id", hdr)
        bits = f"{reader.byte('flags', hdr):08b}"
        self.prefix = bits[:2]
        self.route = bits[2:3]
        self.encryption_alg = bits[3:5]
        self.compression = bits[5:6]
        self.priority = bits[6:]
        encrypted = self.encryption_alg != "00"

        self.header_length = reader.byte("header length", hdr)
        self.header_encoding = reader.byte("header encoding", hdr)
        self.frame_data_length = reader.u16("frame data length", hdr)
        self.packet_identifier = reader.u16("packet identifier", hdr)
        self.packet_type = reader.byte("packet type", hdr)

        if self.route == "1":
            self.peer_address = reader.u16("peer address", hdr)
            self.recipient_address = reader.u16("recipient address", hdr)
            self.time_to_live = reader.byte("time to live", hdr)

        self.header_check_sum = reader.byte("header checksum", hdr)
        if self.header_length == 0 or self.header_length - 1 > len(content):
            raise EgtsError(hdr, f"invalid header length: {self.header_length}")
        if self.header_check_sum != crc8(content[:self.header_length - 1]):
            raise EgtsError(PC_HEADERCRC_ERROR, "header checksum mismatch")

        if reader.remaining == 0:
            raise EgtsError(PC_INC_DATAFORM, "cannot read frame data")
        frame = reader.take(self.frame_data_length, "frame data", PC_INC_DATAFORM)

        factory = types.get(self.packet_type)
        if factory is None:
            raise EgtsError(PC_UNS_TYPE, f"unknown packet type: {self.packet_type}")
        frame_data = factory()
        self.services_frame_data = frame_data

        if encrypted:
            if secret_key is None:
                raise EgtsError(
                    PC_DECRYPT_ERROR, "package is encrypted but secret key is missing"
                )
            try:
                frame = secret_key.decode(frame)
            except ValueError as exc:
                raise EgtsError(PC_DECRYPT_ERROR, str(exc)) from exc

        try:
            frame_data.decode(frame)
        except ValueError as exc:
            raise EgtsError(PC_DECRYPT_ERROR, str(exc)) from exc

        self.services_frame_data_check_sum = reader.u16("frame checksum", PC_DECRYPT_ERROR)
        start = self.header_length
        if self.services_frame_data_check_sum != crc16(
            content[start:start + self.frame_data_length]
        ):
            raise EgtsError(PC_HEADERCRC_ERROR, "frame data checksum mismatch")
        return PC_OK

    def encode(self, secret_key: SecretKey | None = None) -> bytes:
        """Encode the packet, updating header length and frame data length."""
        header = bytearray(_pack("<BB", self.protocol_version, self.security_key_id))

        bits = (
            self.prefix + self.route + self.encryption_alg + self.compression + self.priority
        )
        if not _BITS.fullmatch(bits) or int(bits, 2) > 0xFF:
            raise ValueError(f"cannot build flags byte from {bits!r}")
        header.append(int(bits, 2))

        if self.header_length == 0:
            self.header_length = DEFAULT_HEADER_LEN + (5 if self.route == "1" else 0)
        header += _pack("<BB", self.header_length, self.header_encoding)

        frame = b""
        if self.services_frame_data is not None:
            frame = self.services_frame_data.encode()
            if self.encryption_alg != "00":
                if secret_key is None:
                    raise ValueError("package is encrypted but secret key is missing")
                frame = secret_key.encode(frame)
        if len(frame) > 0xFFFF:
            raise ValueError(f"frame data too long: {len(frame)} bytes")
        self.frame_data_length = len(frame)

        header += _pack(
            "<HHB", self.frame_data_length, self.packet_identifier, self.packet_type
        )
        if self.route == "1":
            header += _pack(
                "<HHB", self.peer_address, self.recipient_address, self.time_to_live
            )
        header.append(crc8(bytes(header)))

        if self.frame_data_length > 0:
            header += frame
            header += struct.pack("<H", crc16(frame))
        return bytes(header)

    def to_json(self) -> str:
        """JSON representation of the packet."""
        return json.dumps(_to_json_value(self), separators=(",", ":"), ensure_ascii=False)