"""Exception hierarchy for overlog."""

from __future__ import annotations

from typing import ClassVar


class OverlogError(Exception):
    """Base class of every error raised by overlog."""

    label: ClassVar[str] = ""

    def __init__(self, detail: object = "") -> None:
        self.detail = str(detail)
        message = f"{self.label}: {self.detail}" if self.label else self.detail
        super().__init__(message)


class JsonError(OverlogError):
    """JSON could not be read or written."""

    label = "JSON serialization error"


class CsvError(OverlogError):
    """CSV input could not be parsed."""

    label = "CSV parsing error"


class GpxError(OverlogError):
    """GPX input could not be parsed."""

    label = "GPX parsing error"


class FfmpegError(OverlogError):
    """An ffmpeg or ffprobe invocation failed."""

    label = "FFmpeg error"


class VideoError(OverlogError):
    """Video processing failed."""

    label = "Video processing error"


class TelemetryError(OverlogError):
    """Telemetry data could not be interpreted."""

    label = "Telemetry parsing error"


class GeoError(OverlogError):
    """A geographic calculation failed."""

    label = "Geographic calculation error"


class RenderingError(OverlogError):
    """An overlay frame could not be rendered."""

    label = "Rendering error"


class UnsupportedFormatError(OverlogError):
    """The input format is not supported."""

    label = "Unsupported format"


class InvalidInputError(OverlogError):
    """The input given by the caller is invalid."""

    label = "Invalid input"


class ConfigError(OverlogError):
    """The environment or configuration is unusable."""

    label = "Configuration error"


class ImageError(OverlogError):
    """An image could not be processed or saved."""

    label = "Image processing error"