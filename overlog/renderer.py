"""Rendering of telemetry overlay frames as transparent RGBA images."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime

from PIL import Image

from .geo import calculate_g_force_magnitude, ms_to_kmh
from .telemetry import TelemetryPoint

Color = tuple[int, int, int, int]

TRANSPARENT: Color = (0, 0, 0, 0)
WHITE: Color = (255, 255, 255, 255)
RED: Color = (255, 0, 0, 255)
YELLOW: Color = (255, 255, 0, 255)
LIGHT_GREY: Color = (200, 200, 200, 255)
GREY: Color = (150, 150, 150, 255)
RING_GREY: Color = (100, 100, 100, 255)

FONT_WIDTH = 8
FONT_HEIGHT = 8
RING_RADIUS = 100
MAX_G = 3.0
HIGH_G = 2.0

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def _to_i32(value: float) -> int:
    """Truncate a float to a 32-bit integer, saturating; NaN becomes zero."""
    if math.isnan(value):
        return 0
    if value >= _I32_MAX:
        return _I32_MAX
    if value <= _I32_MIN:
        return _I32_MIN
    return int(value)


@dataclass
class OverlayRenderer:
    """Draws telemetry readouts onto frames of a fixed size."""

    width: int
    height: int
    style: str = "default"

    def render_frame(self, point: TelemetryPoint, frame_number: int) -> Image.Image:
        """Render one transparent overlay frame for ``point``."""
        image = Image.new("RGBA", (self.width, self.height), TRANSPARENT)

        if point.speed is not None:
            self._render_speed(image, point.speed)

        if None not in (point.g_force_x, point.g_force_y, point.g_force_z):
            self._render_g_force(image, point.g_force_x, point.g_force_y, point.g_force_z)

        if point.latitude is not None and point.longitude is not None:
            self._render_gps(image, point.latitude, point.longitude)

        if point.altitude is not None:
            self._render_altitude(image, point.altitude)

        self._render_timestamp(image, point.timestamp)
        return image

    def _render_speed(self, image: Image.Image, speed: float) -> None:
        text = f"{ms_to_kmh(speed):.0f} km/h"
        self._draw_text(image, text, 50, 50, WHITE)

    def _render_g_force(self, image: Image.Image, gx: float, gy: float, gz: float) -> None:
        magnitude = calculate_g_force_magnitude(gx, gy, gz)
        color = RED if magnitude > HIGH_G else WHITE
        self._draw_text(image, f"G: {magnitude:.2f}", 50, 100, color)
        self._draw_g_force_ring(image, gx, gy, gz)

    def _render_gps(self, image: Image.Image, lat: float, lon: float) -> None:
        self._draw_text(image, f"GPS: {lat:.6f}, {lon:.6f}", 50, 150, LIGHT_GREY)

    def _render_altitude(self, image: Image.Image, altitude: float) -> None:
        self._draw_text(image, f"Alt: {altitude:.0f}m", 50, 200, WHITE)

    def _render_timestamp(self, image: Image.Image, timestamp: datetime) -> None:
        self._draw_text(image, timestamp.strftime("%H:%M:%S"), self.width - 150, 50, GREY)

    @staticmethod
    def _put(image: Image.Image, x: int, y: int, color: Color) -> None:
        if 0 <= x < image.width and 0 <= y < image.height:
            image.putpixel((x, y), color)

    @staticmethod
    def _fill(image: Image.Image, x0: int, y0: int, x1: int, y1: int, color: Color) -> None:
        """Fill the half-open box [x0, x1) x [y0, y1), clipped to the image."""
        left, top = max(x0, 0), max(y0, 0)
        right, bottom = min(x1, image.width), min(y1, image.height)
        if left < right and top < bottom:
            image.paste(color, (left, top, right, bottom))

    def _draw_text(self, image: Image.Image, text: str, x: int, y: int, color: Color) -> None:
        """Draw each character as a solid block, stopping at the right edge."""
        char_x = x
        for _ in text:
            if char_x + FONT_WIDTH > image.width:
                break
            self._fill(image, char_x, y, char_x + FONT_WIDTH, y + FONT_HEIGHT, color)
            char_x += FONT_WIDTH

    def _draw_g_force_ring(self, image: Image.Image, gx: float, gy: float, gz: float) -> None:
        center_x = self.width // 2
        center_y = self.height // 2
        radius = float(RING_RADIUS)

        for angle in range(360):
            rad = math.radians(angle)
            x = center_x + _to_i32(radius * math.cos(rad))
            y = center_y + _to_i32(radius * math.sin(rad))
            self._put(image, x, y, RING_GREY)

        magnitude = calculate_g_force_magnitude(gx, gy, gz)
        scaled = min(magnitude / MAX_G, 1.0)
        if magnitude == 0.0:
            offset_x = offset_y = 0
        else:
            offset_x = _to_i32(radius * scaled * gx / magnitude)
            offset_y = _to_i32(radius * scaled * gy / magnitude)
        vector_x = center_x + offset_x
        vector_y = center_y + offset_y

        if 0 <= vector_x < image.width and 0 <= vector_y < image.height:
            self._draw_line(image, center_x, center_y, vector_x, vector_y, YELLOW)
            self._fill(image, vector_x - 2, vector_y - 2, vector_x + 3, vector_y + 3, YELLOW)

    def _draw_line(
        self, image: Image.Image, x1: int, y1: int, x2: int, y2: int, color: Color
    ) -> None:
        dx = abs(x2 - x1)
        dy = abs(y2 - y1)
        sx = 1 if x1 < x2 else -1
        sy = 1 if y1 < y2 else -1
        err = dx - dy
        x, y = x1, y1
        while True:
            self._put(image, x, y, color)
            if x == x2 and y == y2:
                break
            e2 = 2 * err
            if e2 > -dy:
                err -= dy
                x += sx
            if e2 < dx:
                err += dx
                y += sy