import json

import pytest

from egtsproto.storage.records import AnSensor, LiquidSensor, NavRecord


def test_keys_follow_record_layout():
    data = json.loads(NavRecord().to_bytes())
    assert list(data) == [
        "client",
        "packet_id",
        "navigation_unix_time",
        "received_unix_time",
        "latitude",
        "longitude",
        "speed",
        "pdop",
        "hdop",
        "vdop",
        "nsat",
        "ns",
        "course",
        "an_sensors",
        "liquid_sensors",
    ]


def test_empty_sensor_lists_are_null():
    data = json.loads(NavRecord().to_bytes())
    assert data["an_sensors"] is None
    assert data["liquid_sensors"] is None


def test_integral_coordinates_have_no_fraction():
    raw = NavRecord(latitude=45.0, longitude=0.0).to_bytes()
    assert b'"latitude":45,' in raw
    assert b'"longitude":0,' in raw


def test_round_trip_values():
    record = NavRecord(
        client=12,
        packet_id=138,
        navigation_timestamp=1530821333,
        received_timestamp=1530821340,
        latitude=55.55389399769574,
        longitude=37.43236696287812,
        speed=200,
        course=172,
        an_sensors=[AnSensor(sensor_number=1, value=300)],
        liquid_sensors=[LiquidSensor(sensor_number=2, error_flag="1", value_mm=40)],
    )
    data = json.loads(record.to_bytes())
    assert data["client"] == record.client
    assert data["packet_id"] == record.packet_id
    assert data["latitude"] == record.latitude
    assert data["longitude"] == record.longitude
    assert data["an_sensors"] == [{"sensor_number": 1, "value": 300}]
    assert data["liquid_sensors"] == [
        {"sensor_number": 2, "error_flag": "1", "value_mm": 40, "value_l": 0}
    ]


def test_encoding_is_compact():
    raw = NavRecord(client=5).to_bytes()
    assert raw.startswith(b'{"client":5,')
    assert b" " not in raw


def test_nan_cannot_be_encoded():
    with pytest.raises(ValueError):
        NavRecord(latitude=float("nan")).to_bytes()