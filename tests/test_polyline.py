import random

import pytest

from src.juanmap.errors import PolylineDecodeError, ValidationError
from src.juanmap.geo import polyline
from src.juanmap.models import Coordinate

KNOWN = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"


def test_decode_known_vector():
    points = polyline.decode(KNOWN)
    expected = [(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)]
    assert len(points) == 3
    for point, (lat, lng) in zip(points, expected):
        assert point.lat == pytest.approx(lat, abs=1e-5)
        assert point.lng == pytest.approx(lng, abs=1e-5)


def test_encode_known_vector():
    coords = [
        Coordinate(lat=38.5, lng=-120.2),
        Coordinate(lat=40.7, lng=-120.95),
        Coordinate(lat=43.252, lng=-126.453),
    ]
    assert polyline.encode(coords) == KNOWN


@pytest.mark.parametrize("value", ["", None, 42, b"_p~iF", ["_p~iF"]])
def test_decode_empty_or_non_string_returns_empty(value):
    assert polyline.decode(value) == []


def test_round_trip_random_paths():
    rng = random.Random(20240501)
    for _ in range(50):
        coords = [
            Coordinate(lat=rng.uniform(-90, 90), lng=rng.uniform(-180, 180))
            for _ in range(rng.randint(1, 30))
        ]
        decoded = polyline.decode(polyline.encode(coords))
        assert len(decoded) == len(coords)
        for original, point in zip(coords, decoded):
            assert point.lat == pytest.approx(original.lat, abs=1e-5)
            assert point.lng == pytest.approx(original.lng, abs=1e-5)


def test_decode_truncated_mid_varint_raises():
    # 最後一個字元帶延續位元，差值未結束
    with pytest.raises(PolylineDecodeError):
        polyline.decode(KNOWN[:-1])


def test_decode_missing_longitude_raises():
    # "_p~iF" 只有緯度差值
    with pytest.raises(PolylineDecodeError):
        polyline.decode("_p~iF")


def test_decode_error_is_validation_error():
    with pytest.raises(ValidationError):
        polyline.decode("~")


def test_decode_out_of_range_raises():
    # 緯度 95 度，超出合法範圍
    encoded = polyline._encode_value(9_500_000) + "?"
    with pytest.raises(PolylineDecodeError):
        polyline.decode(encoded)


def test_delta_wraps_to_int32():
    # 第 7 個 5-bit 區塊落在 bit 30~34，超出 32 位元的部分被截斷，累加值成為 -1
    value, index = polyline._decode_delta("~~~~~~~?", 0)
    assert index == 8
    assert value == 0


def test_single_point_at_origin():
    assert polyline.encode([Coordinate(lat=0, lng=0)]) == "??"
    point = polyline.decode("??")[0]
    assert (point.lat, point.lng) == (0, 0)
