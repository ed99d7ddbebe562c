from dataclasses import dataclass

import pytest

from egtsproto.codes import BinaryData
from egtsproto.response import PtResponse


@dataclass
class _Recorder(BinaryData):
    raw: bytes = b""

    def decode(self, content):
        self.raw = bytes(content)

    def encode(self):
        return self.raw


def test_encode_minimal():
    resp = PtResponse(response_packet_id=14357, processing_result=0)
    assert resp.encode() == b"\x15\x38\x00"


def test_decode_minimal():
    resp = PtResponse()
    resp.decode(b"\x15\x38\x00")
    assert resp == PtResponse(response_packet_id=14357, processing_result=0)
    assert resp.sdr is None


def test_length():
    assert PtResponse(response_packet_id=1, processing_result=5).length() == 3


def test_length_zero_when_not_encodable():
    assert PtResponse(response_packet_id=70000).length() == 0


def test_encode_rejects_out_of_range():
    with pytest.raises(ValueError):
        PtResponse(processing_result=300).encode()


@pytest.mark.parametrize("content", [b"", b"\x01", b"\x01\x02"])
def test_decode_too_short(content):
    with pytest.raises(ValueError):
        PtResponse().decode(content)


def test_trailing_records_round_trip():
    data = b"\xe8\x04\x00\x06\x00\x01\x00\x20\x02\x02\x00\x03\x00\xa1\x0a\x00"
    resp = PtResponse()
    resp.decode(data)
    assert resp.response_packet_id == 0x04E8
    assert resp.processing_result == 0
    assert resp.sdr.encode() == data[3:]
    assert resp.encode() == data


def test_sdr_type_factory_is_used():
    resp = PtResponse(sdr_type=_Recorder)
    resp.decode(b"\x01\x00\x00\xaa\xbb")
    assert resp.sdr == _Recorder(raw=b"\xaa\xbb")