"""Creation of overlay videos and compositing them onto footage with ffmpeg."""

from __future__ import annotations

import json
import math
import subprocess
import tempfile
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any

from .errors import ConfigError, FfmpegError, ImageError, InvalidInputError, JsonError
from .renderer import OverlayRenderer
from .telemetry import TelemetryData, TelemetryPoint

DEFAULT_FPS = 30.0
_U32_MAX = 2**32 - 1
_U64_MAX = 2**64 - 1


@dataclass
class VideoInfo:
    """Basic properties of a video file as reported by ffprobe."""

    duration: float | None
    width: int
    height: int
    fps: float


def _parse_float(text: str) -> float | None:
    if not text or text != text.strip() or "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def parse_fps(fps_str: str) -> float:
    """Parse a frame rate such as ``30000/1001``; falls back to 30."""
    parts = fps_str.split("/")
    if len(parts) == 2:
        num, den = (_parse_float(part) for part in parts)
        if num is not None and den is not None and den != 0.0:
            return num / den
    return DEFAULT_FPS


def _format_number(value: float) -> str:
    """Plain decimal rendering of a float, without exponent or trailing ``.0``."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value == 0.0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def _to_u32(value: float) -> int:
    if math.isnan(value) or value <= 0.0:
        return 0
    if value >= _U32_MAX:
        return _U32_MAX
    return int(value)


def _lookup(value: Any, *keys: str | int) -> Any:
    for key in keys:
        if isinstance(key, int) and isinstance(value, list):
            value = value[key] if 0 <= key < len(value) else None
        elif isinstance(key, str) and isinstance(value, dict):
            value = value.get(key)
        else:
            return None
    return value


def _as_u32(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U64_MAX:
        return 0
    return value & _U32_MAX


class VideoProcessor:
    """Drives ffmpeg to encode overlays and burn them into videos."""

    def __init__(self) -> None:
        try:
            result = subprocess.run(["ffmpeg", "-version"], capture_output=True)
        except OSError as exc:
            raise ConfigError(
                "FFmpeg not found. Please install FFmpeg and ensure it's in your PATH."
            ) from exc
        if result.returncode != 0:
            raise ConfigError("FFmpeg is not working properly")

    def render_overlay(
        self,
        renderer: OverlayRenderer,
        telemetry: TelemetryData,
        output_path: str,
        fps: int,
        duration: float,
    ) -> None:
        """Render overlay frames for ``duration`` seconds and encode them as VP9 with alpha."""
        temp_dir = Path(tempfile.gettempdir()) / "overlog_frames"
        temp_dir.mkdir(parents=True, exist_ok=True)

        total_frames = _to_u32(duration * fps)
        frame_duration = duration / total_frames if total_frames else math.inf
        start_time = telemetry.metadata.start_time

        for frame_num in range(total_frames):
            if start_time is not None:
                millis = frame_num * frame_duration * 1000.0
                timestamp = start_time + timedelta(milliseconds=math.trunc(millis))
            else:
                timestamp = datetime.now(timezone.utc)

            point = telemetry.interpolate_at_time(timestamp)
            if point is None:
                point = telemetry.points[0] if telemetry.points else TelemetryPoint()

            frame = renderer.render_frame(point, frame_num)
            frame_path = temp_dir / f"frame_{frame_num:06d}.png"
            try:
                frame.save(frame_path, format="PNG")
            except (OSError, ValueError) as exc:
                raise ImageError(exc) from exc

        frame_pattern = str(temp_dir / "frame_%06d.png")
        result = subprocess.run(
            [
                "ffmpeg",
                "-y",
                "-framerate", str(fps),
                "-i", frame_pattern,
                "-c:v", "libvpx-vp9",
                "-pix_fmt", "yuva420p",
                "-crf", "30",
                "-b:v", "0",
                output_path,
            ]
        )
        if result.returncode != 0:
            raise FfmpegError("Failed to create video from frames")

        for entry in temp_dir.iterdir():
            try:
                entry.unlink()
            except OSError:
                pass
        try:
            temp_dir.rmdir()
        except OSError:
            pass

    def burn_overlay(
        self, video_path: str, overlay_path: str, output_path: str, offset: float
    ) -> None:
        """Composite the overlay video onto the source video, keeping its audio."""
        if not Path(video_path).exists():
            raise InvalidInputError(f"Video file not found: {video_path}")
        if not Path(overlay_path).exists():
            raise InvalidInputError(f"Overlay file not found: {overlay_path}")

        if offset != 0.0:
            start = _format_number(offset)
            end = _format_number(offset + 999999.0)
            offset_arg = f":enable='between(t,{start},{end})'"
        else:
            offset_arg = ""
        filter_complex = f"[0:v][1:v]overlay=0:0{offset_arg}[outv]"

        result = subprocess.run(
            [
                "ffmpeg",
                "-y",
                "-i", video_path,
                "-i", overlay_path,
                "-filter_complex", filter_complex,
                "-map", "[outv]",
                "-map", "0:a",
                "-c:a", "copy",
                output_path,
            ]
        )
        if result.returncode != 0:
            raise FfmpegError("Failed to burn overlay into video")

    def get_video_info(self, video_path: str) -> VideoInfo:
        """Query duration, size and frame rate of a video with ffprobe."""
        result = subprocess.run(
            [
                "ffprobe",
                "-v", "quiet",
                "-print_format", "json",
                "-show_format",
                "-show_streams",
                video_path,
            ],
            capture_output=True,
        )
        if result.returncode != 0:
            raise FfmpegError("Failed to get video info")

        try:
            info = json.loads(result.stdout)
        except ValueError as exc:
            raise JsonError(exc) from exc

        raw_duration = _lookup(info, "format", "duration")
        duration = _parse_float(raw_duration) if isinstance(raw_duration, str) else None

        raw_fps = _lookup(info, "streams", 0, "r_frame_rate")
        fps = parse_fps(raw_fps if isinstance(raw_fps, str) else "30/1")

        return VideoInfo(
            duration=duration,
            width=_as_u32(_lookup(info, "streams", 0, "width")),
            height=_as_u32(_lookup(info, "streams", 0, "height")),
            fps=fps,
        )