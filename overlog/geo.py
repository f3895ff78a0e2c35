"""Geographic and kinematic helper calculations."""

from __future__ import annotations

import math

EARTH_RADIUS_M = 6371000.0


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in metres between two points (haversine)."""
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2.0) * math.sin(delta_lat / 2.0)
        + math.cos(lat1_rad)
        * math.cos(lat2_rad)
        * math.sin(delta_lon / 2.0)
        * math.sin(delta_lon / 2.0)
    )
    c = 2.0 * math.asin(math.sqrt(a))
    return EARTH_RADIUS_M * c


def calculate_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Initial bearing in degrees (0-360) from the first point to the second."""
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lon = math.radians(lon2 - lon1)

    y = math.sin(delta_lon) * math.cos(lat2_rad)
    x = math.cos(lat1_rad) * math.sin(lat2_rad) - math.sin(lat1_rad) * math.cos(
        lat2_rad
    ) * math.cos(delta_lon)

    bearing = math.degrees(math.atan2(y, x))
    return math.fmod(bearing + 360.0, 360.0)


def calculate_destination(
    lat: float, lon: float, bearing: float, distance: float
) -> tuple[float, float]:
    """Point reached after travelling ``distance`` metres on ``bearing`` degrees."""
    lat_rad = math.radians(lat)
    lon_rad = math.radians(lon)
    bearing_rad = math.radians(bearing)
    angular = distance / EARTH_RADIUS_M

    lat2_rad = math.asin(
        math.sin(lat_rad) * math.cos(angular)
        + math.cos(lat_rad) * math.sin(angular) * math.cos(bearing_rad)
    )
    lon2_rad = lon_rad + math.atan2(
        math.sin(bearing_rad) * math.sin(angular) * math.cos(lat_rad),
        math.cos(angular) - math.sin(lat_rad) * math.sin(lat2_rad),
    )
    return math.degrees(lat2_rad), math.degrees(lon2_rad)


def ms_to_kmh(speed_ms: float) -> float:
    """Convert metres per second to kilometres per hour."""
    return speed_ms * 3.6


def kmh_to_ms(speed_kmh: float) -> float:
    """Convert kilometres per hour to metres per second."""
    return speed_kmh / 3.6


def ms_to_mph(speed_ms: float) -> float:
    """Convert metres per second to miles per hour."""
    return speed_ms * 2.23694


def mph_to_ms(speed_mph: float) -> float:
    """Convert miles per hour to metres per second."""
    return speed_mph / 2.23694


def calculate_g_force_magnitude(gx: float, gy: float, gz: float) -> float:
    """Magnitude of a g-force vector."""
    return math.sqrt(gx * gx + gy * gy + gz * gz)


def calculate_acceleration(speed1: float, speed2: float, time_delta: float) -> float:
    """Acceleration between two speeds; zero when no time has passed."""
    if time_delta == 0.0:
        return 0.0
    return (speed2 - speed1) / time_delta


def wgs84_to_local(
    lat: float, lon: float, ref_lat: float, ref_lon: float
) -> tuple[float, float]:
    """Project WGS84 coordinates to local metres around a reference point."""
    ref_lat_rad = math.radians(ref_lat)
    delta_lat = math.radians(lat) - ref_lat_rad
    delta_lon = math.radians(lon) - math.radians(ref_lon)

    x = delta_lon * EARTH_RADIUS_M * math.cos(ref_lat_rad)
    y = delta_lat * EARTH_RADIUS_M
    return x, y


def local_to_wgs84(
    x: float, y: float, ref_lat: float, ref_lon: float
) -> tuple[float, float]:
    """Inverse of :func:`wgs84_to_local`."""
    ref_lat_rad = math.radians(ref_lat)
    ref_lon_rad = math.radians(ref_lon)

    delta_lat = y / EARTH_RADIUS_M
    delta_lon = x / (EARTH_RADIUS_M * math.cos(ref_lat_rad))

    return math.degrees(ref_lat_rad + delta_lat), math.degrees(ref_lon_rad + delta_lon)