import pytest

from overlog.errors import (
    ConfigError,
    CsvError,
    FfmpegError,
    GeoError,
    GpxError,
    ImageError,
    InvalidInputError,
    JsonError,
    OverlogError,
    RenderingError,
    TelemetryError,
    UnsupportedFormatError,
    VideoError,
)


@pytest.mark.parametrize(
    ("cls", "prefix"),
    [
        (JsonError, "JSON serialization error"),
        (CsvError, "CSV parsing error"),
        (GpxError, "GPX parsing error"),
        (FfmpegError, "FFmpeg error"),
        (VideoError, "Video processing error"),
        (TelemetryError, "Telemetry parsing error"),
        (GeoError, "Geographic calculation error"),
        (RenderingError, "Rendering error"),
        (UnsupportedFormatError, "Unsupported format"),
        (InvalidInputError, "Invalid input"),
        (ConfigError, "Configuration error"),
        (ImageError, "Image processing error"),
    ],
)
def test_message_carries_prefix_and_detail(cls, prefix):
    err = cls("detail text")
    assert str(err) == f"{prefix}: detail text"
    assert err.detail == "detail text"


@pytest.mark.parametrize(
    ("cls", "prefix"),
    [
        (JsonError, "JSON serialization error"),
        (CsvError, "CSV parsing error"),
        (GpxError, "GPX parsing error"),
        (FfmpegError, "FFmpeg error"),
        (VideoError, "Video processing error"),
        (ConfigError, "Configuration error"),
        (ImageError, "Image processing error"),
    ],
)
def test_subclasses_are_caught_as_base(cls, prefix):
    err = cls("boom")
    assert issubclass(cls, OverlogError)
    assert str(err) == f"{prefix}: boom"
    assert err.detail == "boom"


def test_unsupported_format_names_the_format():
    err = UnsupportedFormatError("tcx")
    assert str(err) == "Unsupported format: tcx"
    assert err.detail == "tcx"


def test_detail_is_stringified():
    err = InvalidInputError(42)
    assert err.detail == "42"
    assert str(err).endswith(": 42")


def test_base_error_has_plain_message():
    assert str(OverlogError("plain")) == "plain"


def test_cause_is_kept_when_chained():
    original = ValueError("bad json")
    err = JsonError(original)
    assert err.detail == "bad json"
    assert str(err) == "JSON serialization error: bad json"
    try:
        raise err from original
    except JsonError as caught:
        result = caught
    assert result.__cause__ is original
    assert result.detail == "bad json"