"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from . import commands
from .errors import OverlogError

_VERSION = "0.1.0"


def build_parser() -> argparse.ArgumentParser:
    """Argument parser with the parse, render and burn subcommands."""
    parser = argparse.ArgumentParser(
        prog="overlog",
        description="Terminal-based tool for overlaying telemetry data onto video files",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_VERSION}")
    subcommands = parser.add_subparsers(dest="command", required=True)

    parse = subcommands.add_parser("parse", help="Parse telemetry data from various formats")
    parse.add_argument("-i", "--input", required=True, help="Input file path")
    parse.add_argument(
        "-o", "--output", default=None, help="Output file path (defaults to stdout)"
    )
    parse.add_argument(
        "-f", "--format", default=None, help="Input format (auto-detected if not specified)"
    )

    render = subcommands.add_parser("render", help="Render telemetry overlay")
    render.add_argument("-i", "--input", required=True, help="Input telemetry data file")
    render.add_argument("-o", "--output", required=True, help="Output video file")
    render.add_argument("--width", type=int, default=1920, help="Video width")
    render.add_argument("--height", type=int, default=1080, help="Video height")
    render.add_argument("--duration", type=float, default=None, help="Video duration in seconds")
    render.add_argument("--fps", type=int, default=30, help="Frame rate")
    render.add_argument("--style", default="default", help="Overlay style")

    burn = subcommands.add_parser("burn", help="Burn overlay into video file")
    burn.add_argument("-v", "--video", required=True, help="Input video file")
    burn.add_argument("--overlay", required=True, help="Input overlay file")
    burn.add_argument("-o", "--output", required=True, help="Output video file")
    burn.add_argument("--offset", type=float, default=0.0, help="Sync offset in seconds")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; returns the process exit status."""
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)

    try:
        if args.command == "parse":
            commands.parse_telemetry(args.input, args.output, args.format)
        elif args.command == "render":
            commands.render_overlay(
                args.input,
                args.output,
                args.width,
                args.height,
                args.duration,
                args.fps,
                args.style,
            )
        else:
            commands.burn_overlay(args.video, args.overlay, args.output, args.offset)
    except (OverlogError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())