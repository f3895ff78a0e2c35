from datetime import datetime, timezone

import pytest

from overlog.renderer import OverlayRenderer
from overlog.telemetry import TelemetryPoint

TS = datetime(2024, 1, 15, 10, 0, 0, tzinfo=timezone.utc)
WHITE = (255, 255, 255, 255)
CLEAR = (0, 0, 0, 0)


def test_renderer_creation():
    renderer = OverlayRenderer(1920, 1080, "default")
    assert renderer.width == 1920
    assert renderer.height == 1080
    assert renderer.style == "default"


def test_frame_rendering_size():
    renderer = OverlayRenderer(640, 480, "default")
    point = TelemetryPoint(
        timestamp=TS,
        latitude=40.7128,
        longitude=-74.0060,
        altitude=10.0,
        speed=8.33,
        heading=90.0,
        g_force_x=0.1,
        g_force_y=0.0,
        g_force_z=1.0,
        acceleration=0.5,
        rpm=2000.0,
        throttle=0.3,
        brake=0.0,
        steering=0.1,
    )
    frame = renderer.render_frame(point, 0)
    assert frame.size == (640, 480)
    assert frame.mode == "RGBA"


def test_empty_point_draws_only_timestamp():
    renderer = OverlayRenderer(640, 480)
    frame = renderer.render_frame(TelemetryPoint(timestamp=TS), 0)
    assert frame.getpixel((640 - 150, 50)) == (150, 150, 150, 255)
    assert frame.getpixel((50, 50)) == CLEAR
    assert frame.getpixel((320, 240)) == CLEAR


def test_speed_text_is_white():
    renderer = OverlayRenderer(640, 480)
    frame = renderer.render_frame(TelemetryPoint(timestamp=TS, speed=10.0), 1)
    assert frame.getpixel((50, 50)) == WHITE
    assert frame.getpixel((57, 57)) == WHITE
    assert frame.getpixel((50, 58)) == CLEAR


def test_gps_and_altitude_colours():
    renderer = OverlayRenderer(640, 480)
    point = TelemetryPoint(timestamp=TS, latitude=1.0, longitude=2.0, altitude=5.0)
    frame = renderer.render_frame(point, 0)
    assert frame.getpixel((50, 150)) == (200, 200, 200, 255)
    assert frame.getpixel((50, 200)) == WHITE


@pytest.mark.parametrize(
    ("gx", "expected"),
    [(3.0, (255, 0, 0, 255)), (0.5, WHITE)],
)
def test_g_force_text_colour(gx, expected):
    renderer = OverlayRenderer(640, 480)
    point = TelemetryPoint(timestamp=TS, g_force_x=gx, g_force_y=0.0, g_force_z=0.0)
    frame = renderer.render_frame(point, 0)
    assert frame.getpixel((50, 100)) == expected


def test_g_force_ring_and_vector():
    renderer = OverlayRenderer(640, 480)
    point = TelemetryPoint(timestamp=TS, g_force_x=3.0, g_force_y=0.0, g_force_z=0.0)
    frame = renderer.render_frame(point, 0)
    assert frame.getpixel((320, 340)) == (100, 100, 100, 255)
    assert frame.getpixel((320, 240)) == (255, 255, 0, 255)
    assert frame.getpixel((420, 240)) == (255, 255, 0, 255)
    assert frame.getpixel((422, 242)) == (255, 255, 0, 255)


def test_zero_g_force_marks_centre():
    renderer = OverlayRenderer(640, 480)
    point = TelemetryPoint(timestamp=TS, g_force_x=0.0, g_force_y=0.0, g_force_z=0.0)
    frame = renderer.render_frame(point, 0)
    assert frame.getpixel((320, 240)) == (255, 255, 0, 255)
    assert frame.getpixel((318, 238)) == (255, 255, 0, 255)


def test_text_stops_at_right_edge():
    renderer = OverlayRenderer(60, 60)
    frame = renderer.render_frame(TelemetryPoint(timestamp=TS, speed=10.0), 0)
    assert frame.getpixel((57, 50)) == WHITE
    assert frame.getpixel((58, 50)) == CLEAR