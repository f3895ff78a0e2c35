"""High-level operations behind the command-line subcommands."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

from .errors import InvalidInputError, UnsupportedFormatError
from .renderer import OverlayRenderer
from .telemetry import TelemetryData
from .utils import get_file_extension
from .video import VideoProcessor

DEFAULT_DURATION = 30.0

_KNOWN_FORMATS = frozenset({"gpx", "csv", "json", "tcx"})

_READERS: dict[str, Callable[[str], TelemetryData]] = {
    "gpx": TelemetryData.from_gpx,
    "csv": TelemetryData.from_csv,
    "json": TelemetryData.from_json,
}


def detect_format(path: str | os.PathLike[str]) -> str:
    """Telemetry format implied by the file extension, or ``"unknown"``."""
    extension = get_file_extension(path)
    return extension if extension in _KNOWN_FORMATS else "unknown"


def parse_telemetry(
    input_path: str | os.PathLike[str],
    output: str | os.PathLike[str] | None = None,
    fmt: str | None = None,
) -> None:
    """Read a telemetry file and write it as JSON to ``output`` or stdout."""
    source = Path(input_path)
    if not source.exists():
        raise InvalidInputError(f"Input file not found: {input_path}")

    content = source.read_text(encoding="utf-8")
    detected = fmt if fmt is not None else detect_format(source)

    reader = _READERS.get(detected)
    if reader is None:
        raise UnsupportedFormatError(detected)
    telemetry = reader(content)

    json_output = telemetry.to_json()
    if output is not None:
        Path(output).write_text(json_output, encoding="utf-8")
        print("Telemetry data parsed and saved to output file")
    else:
        print(json_output)


def render_overlay(
    input_path: str | os.PathLike[str],
    output: str,
    width: int = 1920,
    height: int = 1080,
    duration: float | None = None,
    fps: int = 30,
    style: str = "default",
) -> None:
    """Render an overlay video from telemetry previously saved as JSON."""
    content = Path(input_path).read_text(encoding="utf-8")
    telemetry = TelemetryData.from_json(content)

    renderer = OverlayRenderer(width, height, style)

    if duration is None:
        duration = (
            telemetry.metadata.duration
            if telemetry.metadata.duration is not None
            else DEFAULT_DURATION
        )

    processor = VideoProcessor()
    processor.render_overlay(renderer, telemetry, output, fps, duration)
    print(f"Overlay rendered to: {output}")


def burn_overlay(video: str, overlay: str, output: str, offset: float = 0.0) -> None:
    """Composite an overlay video onto a source video."""
    processor = VideoProcessor()
    processor.burn_overlay(video, overlay, output, offset)
    print(f"Overlay burned into video: {output}")