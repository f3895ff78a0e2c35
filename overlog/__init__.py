"""Parse telemetry (GPX, CSV, JSON), render overlay frames and composite them onto video with FFmpeg."""

__version__ = "0.1.0"