"""Subrecords carrying authentication and dispatcher identity data."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from egtsproto.codes import BinaryData, _json_field

# String fields of EGTS_SR_AUTH_INFO are terminated by a zero byte.
_SEP = b"\x00"
_NO_TEXT = ""
_UPSW = "UPSW"


def _text(raw: bytes) -> str:
    return raw.decode("utf-8", errors="surrogateescape")


def _raw(text: str) -> bytes:
    return text.encode("utf-8", errors="surrogateescape")


@dataclass
class SrAuthInfo(BinaryData):
    """EGTS_SR_AUTH_INFO: user name, password and optional server sequence."""

    user_name: str = _json_field("UNM", default=_NO_TEXT)
    user_password: str = _json_field(_UPSW, default=_NO_TEXT)
    server_sequence: str = _json_field("SS", default=_NO_TEXT)

    def decode(self, content: bytes) -> None:
        content = bytes(content)
        pos = 0

        def read_field(what: str) -> str:
            nonlocal pos
            end = content.find(_SEP, pos)
            if end < 0:
                raise ValueError(f"cannot read {what} of sr_auth_info")
            value = _text(content[pos:end])
            pos = end + 1
            return value

        self.user_name = read_field("user name")
        self.user_password = read_field("password")
        if pos < len(content):
            self.server_sequence = read_field("server sequence")

    def encode(self) -> bytes:
        result = _raw(self.user_name) + _SEP + _raw(self.user_password) + _SEP
        if self.server_sequence:
            result += _raw(self.server_sequence) + _SEP
        return result

    def length(self) -> int:
        """Length of the encoded subrecord, or 0 when it cannot be encoded."""
        try:
            return len(self.encode()) & 0xFFFF
        except ValueError:
            return 0


@dataclass
class SrDispatcherIdentity(BinaryData):
    """EGTS_SR_DISPATCHER_IDENTITY: dispatcher type, identifier and description."""

    dispatcher_type: int = _json_field("DT", default=0)
    dispatcher_id: int = _json_field("DID", default=0)
    description: str = _json_field("DSCR", default=_NO_TEXT)

    def decode(self, content: bytes) -> None:
        content = bytes(content)
        if not content:
            raise ValueError("cannot read dispatcher type")
        self.dispatcher_type = content[0]
        id_bytes = content[1:5]
        if not id_bytes:
            raise ValueError("cannot read dispatcher identifier")
        self.dispatcher_id = int.from_bytes(id_bytes.ljust(4, b"\x00"), "little")
        self.description = _text(content[1 + len(id_bytes):])

    def encode(self) -> bytes:
        try:
            head = struct.pack("<BI", self.dispatcher_type, self.dispatcher_id)
        except struct.error as exc:
            raise ValueError(f"cannot encode dispatcher identity: {exc}") from exc
        return head + _raw(self.description)

    def length(self) -> int:
        """Length of the encoded subrecord, or 0 when it cannot be encoded."""
        try:
            return len(self.encode()) & 0xFFFF
        except ValueError:
            return 0