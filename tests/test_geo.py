import math

import pytest

from overlog.geo import (
    calculate_acceleration,
    calculate_bearing,
    calculate_destination,
    calculate_distance,
    calculate_g_force_magnitude,
    kmh_to_ms,
    local_to_wgs84,
    mph_to_ms,
    ms_to_kmh,
    ms_to_mph,
    wgs84_to_local,
)


def test_distance_new_york_los_angeles():
    distance = calculate_distance(40.7128, -74.0060, 34.0522, -118.2437)
    assert abs(distance - 3935000.0) < 100000.0


def test_distance_small_step_positive():
    assert calculate_distance(40.7128, -74.0060, 40.7129, -74.0059) > 0.0


def test_distance_to_self_is_zero():
    assert calculate_distance(12.5, 45.25, 12.5, 45.25) == 0.0


def test_distance_is_symmetric():
    a = calculate_distance(10.0, 20.0, -5.0, 33.0)
    b = calculate_distance(-5.0, 33.0, 10.0, 20.0)
    assert a == pytest.approx(b)


def test_bearing_north():
    assert abs(calculate_bearing(0.0, 0.0, 1.0, 0.0) - 0.0) < 1.0


def test_bearing_in_range():
    bearing = calculate_bearing(40.7128, -74.0060, 40.7129, -74.0059)
    assert 0.0 <= bearing <= 360.0


def test_bearing_west_normalised():
    bearing = calculate_bearing(0.0, 0.0, 0.0, -1.0)
    assert bearing == pytest.approx(270.0)


def test_speed_conversions():
    assert abs(ms_to_kmh(10.0) - 36.0) < 0.1
    assert abs(ms_to_mph(10.0) - 22.37) < 0.1
    assert ms_to_kmh(10.0) == 36.0


@pytest.mark.parametrize("value", [0.0, 1.5, 10.0, 123.4])
def test_speed_round_trips(value):
    assert kmh_to_ms(ms_to_kmh(value)) == pytest.approx(value)
    assert mph_to_ms(ms_to_mph(value)) == pytest.approx(value)


def test_g_force_magnitude():
    assert abs(calculate_g_force_magnitude(1.0, 1.0, 1.0) - math.sqrt(3.0)) < 0.001
    assert calculate_g_force_magnitude(1.0, 1.0, 1.0) == 3.0 ** 0.5


def test_acceleration_zero_delta():
    assert calculate_acceleration(5.0, 10.0, 0.0) == 0.0


def test_acceleration_sign_follows_speed_change():
    assert calculate_acceleration(10.0, 5.0, 1.0) < 0.0
    assert calculate_acceleration(5.0, 10.0, 1.0) > 0.0


def test_destination_consistent_with_distance_and_bearing():
    lat, lon = calculate_destination(40.0, -74.0, 45.0, 5000.0)
    assert calculate_distance(40.0, -74.0, lat, lon) == pytest.approx(5000.0, rel=1e-6)
    assert calculate_bearing(40.0, -74.0, lat, lon) == pytest.approx(45.0, abs=0.01)


def test_destination_zero_distance_is_origin():
    lat, lon = calculate_destination(12.0, 34.0, 90.0, 0.0)
    assert lat == pytest.approx(12.0)
    assert lon == pytest.approx(34.0)


def test_local_reference_is_origin():
    assert wgs84_to_local(40.0, -74.0, 40.0, -74.0) == (0.0, 0.0)


@pytest.mark.parametrize(
    ("lat", "lon"), [(40.001, -74.002), (39.99, -73.95), (40.0, -74.0)]
)
def test_local_round_trip(lat, lon):
    x, y = wgs84_to_local(lat, lon, 40.0, -74.0)
    back_lat, back_lon = local_to_wgs84(x, y, 40.0, -74.0)
    assert back_lat == pytest.approx(lat)
    assert back_lon == pytest.approx(lon)


def test_local_axes_orientation():
    x, y = wgs84_to_local(40.001, -73.999, 40.0, -74.0)
    assert x > 0.0
    assert y > 0.0