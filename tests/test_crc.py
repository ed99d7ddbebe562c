import pytest

from egtsproto.crc import crc8, crc16


def test_crc8_check_value():
    assert crc8(b"123456789") == 0xF7


def test_crc16_check_value():
    assert crc16(b"123456789") == 0x29B1


def test_crc8_empty_is_initial_value():
    assert crc8(b"") == 0xFF


def test_crc16_empty_is_initial_value():
    assert crc16(b"") == 0xFFFF


@pytest.mark.parametrize("data", [b"\x00", b"abc", bytes(range(256))])
def test_results_fit_their_width(data):
    assert 0 <= crc8(data) <= 0xFF
    assert 0 <= crc16(data) <= 0xFFFF


def test_crc8_detects_single_byte_change():
    assert crc8(b"123456789") != crc8(b"123456788")