"""Formatting, validation and conversion helpers."""

from __future__ import annotations

import math
import os
from datetime import datetime, timedelta, timezone
from pathlib import PurePath
from typing import TypeVar

_U32_MAX = 2**32 - 1

_VIDEO_FORMATS = frozenset({"mp4", "mov", "webm", "avi", "mkv", "m4v"})
_TELEMETRY_FORMATS = frozenset({"gpx", "csv", "json", "tcx", "bin"})

T = TypeVar("T")


def format_duration(seconds: float) -> str:
    """Format seconds as ``M:SS`` or ``H:MM:SS``."""
    hours = int(seconds / 3600.0)
    minutes = int(math.fmod(seconds, 3600.0) / 60.0)
    secs = int(math.fmod(seconds, 60.0))
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_speed(speed_ms: float) -> str:
    """Format a speed in m/s as km/h."""
    speed_kmh = speed_ms * 3.6
    if speed_kmh >= 100.0:
        return f"{speed_kmh:.0f} km/h"
    return f"{speed_kmh:.1f} km/h"


def format_distance(meters: float) -> str:
    """Format a distance in metres, switching to km from 1000 m."""
    if meters >= 1000.0:
        return f"{meters / 1000.0:.2f} km"
    return f"{meters:.0f} m"


def get_file_extension(path: str | os.PathLike[str]) -> str | None:
    """Lower-cased extension of ``path``, or None when it has none."""
    name = PurePath(path).name
    if not name or name == "..":
        return None
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return None
    return ext.lower()


def file_exists_and_readable(path: str | os.PathLike[str]) -> bool:
    """True when ``path`` is an existing regular file whose metadata is readable."""
    try:
        os.stat(path)
    except OSError:
        return False
    return os.path.isfile(path)


def create_timestamp_string() -> str:
    """Current UTC time formatted for use in file names."""
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")


def is_valid_video_format(extension: str) -> bool:
    """True for a supported video file extension."""
    return extension in _VIDEO_FORMATS


def is_valid_telemetry_format(extension: str) -> bool:
    """True for a supported telemetry file extension."""
    return extension in _TELEMETRY_FORMATS


def _whole_milliseconds(delta: timedelta) -> int:
    micros = (delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds
    millis = abs(micros) // 1000
    return millis if micros >= 0 else -millis


def timestamp_to_frame(timestamp: datetime, start_time: datetime, fps: float) -> int:
    """Frame index of ``timestamp`` relative to ``start_time``; never negative."""
    seconds = _whole_milliseconds(timestamp - start_time) / 1000.0
    frames = seconds * fps
    if math.isnan(frames) or frames <= 0.0:
        return 0
    if frames >= _U32_MAX:
        return _U32_MAX
    return int(frames)


def frame_to_timestamp(frame: int, start_time: datetime, fps: float) -> datetime:
    """Timestamp of ``frame`` relative to ``start_time``."""
    seconds = frame / fps
    return start_time + timedelta(milliseconds=math.trunc(seconds * 1000.0))


def clamp(value: T, minimum: T, maximum: T) -> T:
    """Restrict ``value`` to the range [minimum, maximum]."""
    if value < minimum:  # type: ignore[operator]
        return minimum
    if value > maximum:  # type: ignore[operator]
        return maximum
    return value


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation from ``a`` to ``b``."""
    return a + (b - a) * t


def degrees_to_radians(degrees: float) -> float:
    """Convert degrees to radians."""
    return degrees * math.pi / 180.0


def radians_to_degrees(radians: float) -> float:
    """Convert radians to degrees."""
    return radians * 180.0 / math.pi


def normalize_angle(angle: float) -> float:
    """Normalise an angle into the range [0, 360)."""
    normalized = math.fmod(angle, 360.0)
    if normalized < 0.0:
        normalized += 360.0
    return normalized