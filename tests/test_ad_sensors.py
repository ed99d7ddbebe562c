import pytest

from egtsproto.ad_sensors import SrAdSensorsData

SR_AD_SENSORS_DATA_BYTES = bytes(
    [0x01, 0x0F, 0xFF] + [0x00] * 25
)


def _reference() -> SrAdSensorsData:
    return SrAdSensorsData(
        digital_inputs_octet_exists1="1",
        digital_inputs_octet_exists2="0",
        digital_inputs_octet_exists3="0",
        digital_inputs_octet_exists4="0",
        digital_inputs_octet_exists5="0",
        digital_inputs_octet_exists6="0",
        digital_inputs_octet_exists7="0",
        digital_inputs_octet_exists8="0",
        digital_outputs=15,
        analog_sensor_field_exists1="1",
        analog_sensor_field_exists2="1",
        analog_sensor_field_exists3="1",
        analog_sensor_field_exists4="1",
        analog_sensor_field_exists5="1",
        analog_sensor_field_exists6="1",
        analog_sensor_field_exists7="1",
        analog_sensor_field_exists8="1",
        additional_digital_inputs_octet1=0,
        analog_sensor1=0,
        analog_sensor2=0,
        analog_sensor3=0,
        analog_sensor4=0,
        analog_sensor5=0,
        analog_sensor6=0,
        analog_sensor7=0,
        analog_sensor8=0,
    )


def test_encode_matches_reference_bytes():
    assert _reference().encode() == SR_AD_SENSORS_DATA_BYTES


def test_decode_matches_reference_struct():
    data = SrAdSensorsData()
    data.decode(SR_AD_SENSORS_DATA_BYTES)
    assert data == _reference()


def test_length_of_reference():
    assert _reference().length() == 0x1C


def test_round_trip_with_values():
    original = SrAdSensorsData(
        digital_inputs_octet_exists1="1",
        digital_inputs_octet_exists3="1",
        digital_inputs_octet_exists8="1",
        digital_outputs=0xA5,
        additional_digital_inputs_octet1=0x11,
        additional_digital_inputs_octet3=0x33,
        additional_digital_inputs_octet8=0x88,
        analog_sensor_field_exists1="1",
        analog_sensor_field_exists8="1",
        analog_sensor1=0x123456,
        analog_sensor8=0xABCDEF,
    )
    encoded = original.encode()
    assert encoded[:3] == bytes([0x85, 0xA5, 0x81])
    assert encoded[3:6] == bytes([0x11, 0x33, 0x88])
    assert encoded[6:] == bytes([0x56, 0x34, 0x12, 0xEF, 0xCD, 0xAB])

    decoded = SrAdSensorsData()
    decoded.decode(encoded)
    assert decoded == original


def test_only_flag_bytes_when_nothing_present():
    data = SrAdSensorsData(digital_outputs=7)
    assert data.encode() == bytes([0x00, 0x07, 0x00])
    assert data.length() == 3


@pytest.mark.parametrize(
    "content",
    [
        b"",
        b"\x01",
        b"\x01\x00",
        b"\x01\x00\x00",
        b"\x00\x00\x01",
    ],
)
def test_decode_truncated_raises(content):
    with pytest.raises(ValueError):
        SrAdSensorsData().decode(content)


def test_encode_invalid_flag_raises():
    data = SrAdSensorsData(digital_inputs_octet_exists2="2")
    with pytest.raises(ValueError):
        data.encode()
    assert data.length() == 0


def test_encode_digital_outputs_out_of_range_raises():
    with pytest.raises(ValueError):
        SrAdSensorsData(digital_outputs=256).encode()


def test_encode_analog_value_out_of_range_raises():
    data = SrAdSensorsData(analog_sensor_field_exists1="1", analog_sensor1=-1)
    with pytest.raises(ValueError):
        data.encode()