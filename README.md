# overlog

A terminal tool for overlaying telemetry data (GPS position, speed, altitude,
g-forces) onto video files.

Telemetry is read from GPX, CSV or JSON and turned into a single JSON
document. That document is rendered frame by frame into a transparent overlay
video, which FFmpeg then burns into your footage.

## Requirements

- Python 3.10 or later
- `ffmpeg` and `ffprobe` on your `PATH`. You need them to render and burn
  overlays. Parsing works without them.

## Installation

```
pip install .
```

## Usage

The `overlog` command has three subcommands: `parse`, `render` and `burn`.
`overlog --version` prints the version. When a command fails, it prints
`Error: ...` to standard error and exits with status 1.

### Parse telemetry

`parse` converts a GPX, CSV or JSON file into overlog's JSON format. The format
is taken from the file extension. Use `-f`/`--format` to set it yourself.

```
overlog parse --input ride.gpx --output ride.json
overlog parse -i data.csv
overlog parse -i track.txt -f gpx
```

Without `-o`/`--output`, the JSON is printed to standard output.

Points are sorted by time. When a file is read as GPX or CSV, start and end
time, duration (whole seconds), maximum speed, maximum g-force and total
distance (haversine, in metres) are computed. A JSON file is read back as it
is, metadata included.

- **GPX**: `lat`, `lon`, `<ele>` and `<time>` are read from the track points
  (`<trk>/<trkseg>/<trkpt>`). GPX versions 1.0 and 1.1 are accepted. A point
  without a time is given the current time.
- **CSV**: a header row is required, and it must have a `timestamp` column of
  RFC 3339 times such as `2024-01-15T10:00:00Z`. All other columns are
  optional: `latitude`, `longitude`, `altitude`, `speed` (m/s), `heading`,
  `g_force_x`, `g_force_y`, `g_force_z`, `acceleration`, `rpm`, `throttle`,
  `brake` and `steering`. An empty cell means the value is not known. Columns
  with any other name are ignored.

### Render an overlay

`render` takes parsed JSON telemetry and encodes it as a transparent overlay
video. The codec is VP9 (`libvpx-vp9`) with an alpha channel, so write to a
`.webm` file:

```
overlog render --input ride.json --output overlay.webm
overlog render -i ride.json -o overlay.webm --width 1280 --height 720 --fps 60 --duration 45
```

By default the overlay is 1920×1080 at 30 fps. The duration comes from the
telemetry metadata, or is 30 seconds if the metadata has none. Values for each
frame are interpolated linearly between the nearest telemetry points.

Each frame shows:

- speed in km/h
- the g-force magnitude, in red above 2 g
- a g-force ring with a vector in the centre of the frame
- GPS coordinates
- altitude
- the time of day

A frame only shows what the telemetry holds, except the time of day, which is
always there. The frames are written as PNG files to an `overlog_frames`
directory in the system temporary directory. That directory is removed once
encoding has finished.

### Burn an overlay into a video

```
overlog burn --video footage.mp4 --overlay overlay.webm --output final.mp4
overlog burn -v footage.mp4 --overlay overlay.webm -o final.mp4 --offset 2.5
```

The overlay is placed at the top-left corner of the video. A non-zero
`--offset` makes the overlay visible only from that many seconds into the
video. The audio of the source video is copied unchanged, so the source video
must have an audio stream.

## Library use

```python
from overlog.telemetry import TelemetryData
from overlog.utils import format_distance, format_speed

with open("ride.gpx", encoding="utf-8") as handle:
    telemetry = TelemetryData.from_gpx(handle.read())

meta = telemetry.metadata
print(len(telemetry.points), "points")
if meta.max_speed is not None:
    print("max speed:", format_speed(meta.max_speed))
if meta.total_distance is not None:
    print("distance:", format_distance(meta.total_distance))

print(telemetry.to_json())
```

The library is split into these modules:

- `overlog.telemetry`: `TelemetryPoint`, `TelemetryMetadata` and
  `TelemetryData`, with `from_gpx`, `from_csv`, `from_json`, `to_json`,
  `calculate_metadata`, `get_point_at_time` and `interpolate_at_time`.
- `overlog.renderer`: `OverlayRenderer(width, height, style)`. Its
  `render_frame(point, frame_number)` method returns a Pillow RGBA image.
- `overlog.video`: `VideoProcessor`, which runs FFmpeg, with `render_overlay`,
  `burn_overlay` and `get_video_info`. `get_video_info` returns a `VideoInfo`.
  The module also has `parse_fps`.
- `overlog.geo`: geographic and unit helpers such as `calculate_distance`,
  `calculate_bearing`, `calculate_destination`, `ms_to_kmh` and
  `calculate_g_force_magnitude`.
- `overlog.utils`: formatting and conversion helpers such as
  `format_duration`, `format_speed`, `format_distance`, `timestamp_to_frame`
  and `normalize_angle`.
- `overlog.commands`: the operations behind the subcommands
  (`parse_telemetry`, `render_overlay`, `burn_overlay`, `detect_format`).

All errors derive from `overlog.errors.OverlogError`.

## Limitations

- Text in the overlay is drawn as solid 8×8 blocks, one per character. It is
  not drawn with a font, so it cannot be read as text.
- `--style` is accepted, but only one overlay look exists.
- A `.tcx` extension is recognised but cannot be parsed. It is reported as an
  unsupported format.
- Speed and other sensor values are not read from GPX files. Only position,
  elevation and time are.