import pytest

from egtsproto.identity import SrAuthInfo, SrDispatcherIdentity
from egtsproto.packet import Package

DISPATCHER_PKG_BYTES = bytes([
    0x01, 0x00, 0x00, 0x0B, 0x00, 0x0F, 0x00, 0x01, 0x00,
    0x01, 0x06, 0x08, 0x00, 0x00, 0x00, 0x98, 0x01, 0x01, 0x05, 0x05, 0x00, 0x00, 0x47, 0x00,
    0x00, 0x00, 0x51, 0x9D,
])
DISPATCHER_SUBRECORD = bytes([0x00, 0x47, 0x00, 0x00, 0x00])

empty = ""


def test_auth_info_encode_without_server_sequence():
    assert SrAuthInfo(user_name="test", user_password="password").encode() == b"test\x00password\x00"


def test_auth_info_encode_with_server_sequence():
    info = SrAuthInfo(user_name="user", user_password="password", server_sequence="seq")
    assert info.encode() == b"user\x00password\x00seq\x00"


@pytest.mark.parametrize(
    "info",
    [
        SrAuthInfo(user_name="test", user_password="password"),
        SrAuthInfo(user_name="user", user_password="password", server_sequence="abc"),
        SrAuthInfo(user_name=empty, user_password=empty),
        SrAuthInfo(user_name="водитель", user_password="password"),
    ],
)
def test_auth_info_roundtrip(info):
    decoded = SrAuthInfo()
    decoded.decode(info.encode())
    assert decoded == info


def test_auth_info_length_matches_encoding():
    info = SrAuthInfo(user_name="user", user_password="password")
    assert info.length() == len(info.encode())


def test_auth_info_missing_terminator():
    with pytest.raises(ValueError):
        SrAuthInfo().decode(b"user\x00password")


def test_auth_info_unterminated_server_sequence():
    with pytest.raises(ValueError):
        SrAuthInfo().decode(b"user\x00password\x00seq")


def test_dispatcher_identity_decode_subrecord():
    section = SrDispatcherIdentity()
    section.decode(DISPATCHER_SUBRECORD)
    assert section == SrDispatcherIdentity(dispatcher_type=0, dispatcher_id=71)


def test_dispatcher_identity_encode_subrecord():
    assert SrDispatcherIdentity(dispatcher_type=0, dispatcher_id=71).encode() == DISPATCHER_SUBRECORD


def test_dispatcher_identity_inside_package():
    pkg = Package()
    pkg.decode(DISPATCHER_PKG_BYTES)
    assert pkg.frame_data_length == 15
    assert pkg.services_frame_data_check_sum == 40273
    frame = pkg.services_frame_data.encode()
    section = SrDispatcherIdentity()
    section.decode(frame[-5:])
    assert section.dispatcher_id == 71
    assert section.dispatcher_type == 0


def test_dispatcher_identity_roundtrip_with_description():
    original = SrDispatcherIdentity(dispatcher_type=3, dispatcher_id=123456, description="main desk")
    decoded = SrDispatcherIdentity()
    decoded.decode(original.encode())
    assert decoded == original
    assert original.length() == 5 + len("main desk")


def test_dispatcher_identity_empty_content():
    with pytest.raises(ValueError):
        SrDispatcherIdentity().decode(b"")


def test_dispatcher_identity_missing_identifier():
    with pytest.raises(ValueError):
        SrDispatcherIdentity().decode(b"\x01")


def test_dispatcher_identity_out_of_range_type():
    section = SrDispatcherIdentity(dispatcher_type=256)
    with pytest.raises(ValueError):
        section.encode()
    assert section.length() == 0