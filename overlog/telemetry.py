"""Telemetry samples, their summary metadata and the readers for GPX, CSV and JSON."""

from __future__ import annotations

import csv
import io
import json
import math
import re
import xml.etree.ElementTree as ET
from bisect import bisect_left
from dataclasses import dataclass, field, fields
from datetime import datetime, timedelta, timezone
from operator import attrgetter
from typing import Any, Iterator, Mapping

from .errors import CsvError, GpxError, JsonError, TelemetryError
from .geo import calculate_distance, calculate_g_force_magnitude

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)
_ONE_S = timedelta(seconds=1)
_GPX_VERSIONS = frozenset({"1.0", "1.1"})

_TIMESTAMP_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt ](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
    r"(?:([Zz])|([+-])(\d{2}):?(\d{2}))$"
)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _parse_timestamp(text: str) -> datetime:
    match = _TIMESTAMP_RE.match(text.strip())
    if match is None:
        raise ValueError(f"invalid timestamp: {text!r}")
    year, month, day, hour, minute, second = (int(g) for g in match.group(1, 2, 3, 4, 5, 6))
    fraction = match.group(7) or ""
    micro = int((fraction + "000000")[:6])
    if match.group(8):
        tz = timezone.utc
    else:
        sign = -1 if match.group(9) == "-" else 1
        offset = timedelta(hours=int(match.group(10)), minutes=int(match.group(11)))
        tz = timezone(sign * offset)
    try:
        parsed = datetime(year, month, day, hour, minute, second, micro, tzinfo=tz)
    except ValueError as exc:
        raise ValueError(f"invalid timestamp: {text!r}") from exc
    return parsed.astimezone(timezone.utc)


def _format_timestamp(value: datetime) -> str:
    value = _as_utc(value)
    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    micro = value.microsecond
    if micro:
        text += f".{micro // 1000:03d}" if micro % 1000 == 0 else f".{micro:06d}"
    return text + "Z"


def _millis(value: datetime) -> int:
    return (value - _EPOCH) // _ONE_MS


def _json_float(data: Mapping[str, Any], key: str) -> float | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"invalid type for `{key}`: expected a number")
    return float(value)


def _json_timestamp(data: Mapping[str, Any], key: str, required: bool) -> datetime | None:
    if key not in data or data[key] is None:
        if required:
            raise ValueError(f"missing field `{key}`")
        return None
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"invalid type for `{key}`: expected a string")
    return _parse_timestamp(value)


def _json_string(data: Mapping[str, Any], key: str) -> str:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"invalid type for `{key}`: expected a string")
    return value


def _text_float(text: str) -> float:
    if text != text.strip() or "_" in text:
        raise ValueError(f"invalid float literal: {text!r}")
    return float(text)


def _interpolate(a: float | None, b: float | None, ratio: float) -> float | None:
    if a is not None and b is not None:
        return a + (b - a) * ratio
    return a if a is not None else b


@dataclass
class TelemetryPoint:
    """A single telemetry sample; every measurement except the time is optional."""

    timestamp: datetime = _EPOCH
    latitude: float | None = None
    longitude: float | None = None
    altitude: float | None = None
    speed: float | None = None
    heading: float | None = None
    g_force_x: float | None = None
    g_force_y: float | None = None
    g_force_z: float | None = None
    acceleration: float | None = None
    rpm: float | None = None
    throttle: float | None = None
    brake: float | None = None
    steering: float | None = None

    def __post_init__(self) -> None:
        self.timestamp = _as_utc(self.timestamp)

    @classmethod
    def measurement_names(cls) -> tuple[str, ...]:
        """Names of the optional measurement fields, in declaration order."""
        return tuple(f.name for f in fields(cls) if f.name != "timestamp")

    def measurements(self) -> Iterator[tuple[str, float | None]]:
        """Pairs of measurement name and value."""
        for name in self.measurement_names():
            yield name, getattr(self, name)

    def g_force_magnitude(self) -> float | None:
        """Magnitude of the g-force vector when all three components are known."""
        if None in (self.g_force_x, self.g_force_y, self.g_force_z):
            return None
        return calculate_g_force_magnitude(self.g_force_x, self.g_force_y, self.g_force_z)

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping suitable for JSON output."""
        result: dict[str, Any] = {"timestamp": _format_timestamp(self.timestamp)}
        result.update(self.measurements())
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TelemetryPoint:
        """Build a point from a mapping such as one produced by :meth:`to_dict`."""
        if not isinstance(data, Mapping):
            raise TelemetryError("telemetry point must be an object")
        try:
            timestamp = _json_timestamp(data, "timestamp", required=True)
            values = {name: _json_float(data, name) for name in cls.measurement_names()}
        except ValueError as exc:
            raise TelemetryError(exc) from exc
        return cls(timestamp=timestamp, **values)


@dataclass
class TelemetryMetadata:
    """Origin of a telemetry set and statistics derived from its points."""

    source: str = ""
    format: str = ""
    start_time: datetime | None = None
    end_time: datetime | None = None
    duration: float | None = None
    total_distance: float | None = None
    max_speed: float | None = None
    max_g_force: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping suitable for JSON output."""
        return {
            "source": self.source,
            "format": self.format,
            "start_time": None if self.start_time is None else _format_timestamp(self.start_time),
            "end_time": None if self.end_time is None else _format_timestamp(self.end_time),
            "duration": self.duration,
            "total_distance": self.total_distance,
            "max_speed": self.max_speed,
            "max_g_force": self.max_g_force,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TelemetryMetadata:
        """Build metadata from a mapping such as one produced by :meth:`to_dict`."""
        if not isinstance(data, Mapping):
            raise TelemetryError("metadata must be an object")
        try:
            return cls(
                source=_json_string(data, "source"),
                format=_json_string(data, "format"),
                start_time=_json_timestamp(data, "start_time", required=False),
                end_time=_json_timestamp(data, "end_time", required=False),
                duration=_json_float(data, "duration"),
                total_distance=_json_float(data, "total_distance"),
                max_speed=_json_float(data, "max_speed"),
                max_g_force=_json_float(data, "max_g_force"),
            )
        except ValueError as exc:
            raise TelemetryError(exc) from exc


def _local_name(tag: str) -> str:
    return tag.rpartition("}")[2]


def _children(element: ET.Element, name: str) -> Iterator[ET.Element]:
    return (child for child in element if _local_name(child.tag) == name)


def _first_child(element: ET.Element, name: str) -> ET.Element | None:
    return next(_children(element, name), None)


def _gpx_point(trkpt: ET.Element) -> TelemetryPoint:
    try:
        latitude = _text_float(trkpt.attrib["lat"])
        longitude = _text_float(trkpt.attrib["lon"])
    except KeyError as exc:
        raise GpxError(f"track point is missing attribute {exc.args[0]!r}") from exc
    except ValueError as exc:
        raise GpxError(exc) from exc

    altitude = None
    ele = _first_child(trkpt, "ele")
    if ele is not None:
        try:
            altitude = _text_float((ele.text or "").strip())
        except ValueError as exc:
            raise GpxError(f"invalid elevation: {ele.text!r}") from exc

    time_el = _first_child(trkpt, "time")
    if time_el is not None:
        try:
            timestamp = _parse_timestamp(time_el.text or "").replace(microsecond=0)
        except ValueError as exc:
            raise GpxError(exc) from exc
    else:
        timestamp = datetime.now(timezone.utc)

    return TelemetryPoint(
        timestamp=timestamp, latitude=latitude, longitude=longitude, altitude=altitude
    )


@dataclass
class TelemetryData:
    """An ordered set of telemetry points with its metadata."""

    points: list[TelemetryPoint] = field(default_factory=list)
    metadata: TelemetryMetadata = field(default_factory=TelemetryMetadata)

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping suitable for JSON output."""
        return {
            "points": [point.to_dict() for point in self.points],
            "metadata": self.metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TelemetryData:
        """Build telemetry from a mapping such as one produced by :meth:`to_dict`."""
        if not isinstance(data, Mapping):
            raise TelemetryError("telemetry data must be an object")
        if "points" not in data:
            raise TelemetryError("missing field `points`")
        if "metadata" not in data:
            raise TelemetryError("missing field `metadata`")
        raw_points = data["points"]
        if not isinstance(raw_points, list):
            raise TelemetryError("invalid type for `points`: expected a list")
        return cls(
            points=[TelemetryPoint.from_dict(item) for item in raw_points],
            metadata=TelemetryMetadata.from_dict(data["metadata"]),
        )

    def to_json(self) -> str:
        """Pretty-printed JSON representation."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_gpx(cls, gpx_data: str) -> TelemetryData:
        """Read the track points of a GPX document."""
        try:
            root = ET.fromstring(gpx_data)
        except ET.ParseError as exc:
            raise GpxError(exc) from exc
        if _local_name(root.tag) != "gpx":
            raise GpxError(f"unexpected root element <{_local_name(root.tag)}>")
        version = root.attrib.get("version")
        if version is None:
            raise GpxError("missing gpx version")
        if version not in _GPX_VERSIONS:
            raise GpxError(f"unknown gpx version {version!r}")

        telemetry = cls(metadata=TelemetryMetadata(format="gpx"))
        for track in _children(root, "trk"):
            for segment in _children(track, "trkseg"):
                telemetry.points.extend(
                    _gpx_point(trkpt) for trkpt in _children(segment, "trkpt")
                )
        telemetry.calculate_metadata()
        return telemetry

    @classmethod
    def from_csv(cls, csv_data: str) -> TelemetryData:
        """Read points from CSV with a header row naming the point fields."""
        telemetry = cls(metadata=TelemetryMetadata(format="csv"))
        try:
            rows = [row for row in csv.reader(io.StringIO(csv_data)) if row]
        except csv.Error as exc:
            raise CsvError(exc) from exc
        if not rows:
            return telemetry

        header, *records = rows
        if "timestamp" not in header:
            if records:
                raise CsvError("missing field `timestamp`")
            return telemetry

        names = set(TelemetryPoint.measurement_names())
        for line, record in enumerate(records, start=2):
            if len(record) != len(header):
                raise CsvError(
                    f"found record with {len(record)} fields, but the previous "
                    f"record has {len(header)} fields (line {line})"
                )
            values: dict[str, Any] = {}
            try:
                for column, text in zip(header, record):
                    if column == "timestamp":
                        values["timestamp"] = _parse_timestamp(text)
                    elif column in names:
                        values[column] = _text_float(text) if text else None
            except ValueError as exc:
                raise CsvError(f"line {line}: {exc}") from exc
            telemetry.points.append(TelemetryPoint(**values))

        telemetry.calculate_metadata()
        return telemetry

    @classmethod
    def from_json(cls, json_data: str) -> TelemetryData:
        """Read telemetry previously written as JSON; metadata is taken as given."""
        try:
            data = json.loads(json_data)
        except json.JSONDecodeError as exc:
            raise JsonError(exc) from exc
        try:
            return cls.from_dict(data)
        except TelemetryError as exc:
            raise JsonError(exc.detail) from exc

    def calculate_metadata(self) -> None:
        """Sort the points by time and derive start, end, duration and maxima."""
        if not self.points:
            return
        self.points.sort(key=attrgetter("timestamp"))

        start = self.points[0].timestamp
        end = self.points[-1].timestamp
        self.metadata.start_time = start
        self.metadata.end_time = end
        self.metadata.duration = float((end - start) // _ONE_S)

        speeds = [p.speed for p in self.points if p.speed is not None]
        self.metadata.max_speed = max(speeds) if speeds else None

        forces = [g for g in (p.g_force_magnitude() for p in self.points) if g is not None]
        self.metadata.max_g_force = max(forces) if forces else None

        self.metadata.total_distance = self._total_distance()

    def _total_distance(self) -> float | None:
        if len(self.points) < 2:
            return None
        total = 0.0
        for first, second in zip(self.points, self.points[1:]):
            coords = (first.latitude, first.longitude, second.latitude, second.longitude)
            if None not in coords:
                total += calculate_distance(*coords)
        return total

    def _search(self, timestamp: datetime) -> tuple[int, bool]:
        index = bisect_left(self.points, timestamp, key=attrgetter("timestamp"))
        found = index < len(self.points) and self.points[index].timestamp == timestamp
        return index, found

    def get_point_at_time(self, timestamp: datetime) -> TelemetryPoint | None:
        """The point recorded exactly at ``timestamp``, if any."""
        index, found = self._search(_as_utc(timestamp))
        return self.points[index] if found else None

    def interpolate_at_time(self, timestamp: datetime) -> TelemetryPoint | None:
        """A point at ``timestamp`` interpolated between its neighbours.

        Returns None outside the recorded time range.
        """
        timestamp = _as_utc(timestamp)
        index, found = self._search(timestamp)
        if found:
            point = self.points[index]
            return TelemetryPoint(timestamp=point.timestamp, **dict(point.measurements()))
        if index == 0 or index >= len(self.points):
            return None

        before = self.points[index - 1]
        after = self.points[index]
        t1 = _millis(before.timestamp)
        t2 = _millis(after.timestamp)
        t = _millis(timestamp)
        ratio = (t - t1) / (t2 - t1) if t2 != t1 else math.nan

        return TelemetryPoint(
            timestamp=timestamp,
            **{
                name: _interpolate(getattr(before, name), getattr(after, name), ratio)
                for name in TelemetryPoint.measurement_names()
            },
        )