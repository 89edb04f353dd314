"""Command-line front door for termevents.

Decodes captured terminal input (a file, stdin, or a hex string) and prints
one line per event with the raw bytes that produced it.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from .config import LOG_LEVELS, DecoderSettings, load_settings, normalize_log_level, save_settings
from .decoder import iter_events
from .events import Event
from .highlight import DEFAULT_STYLE, colorize_line
from .log import configure_logging


def _hex_bytes(value: str) -> bytes:
    """argparse type for hex-encoded byte strings."""
    try:
        return bytes.fromhex("".join(value.split()))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid hex data: {value!r}") from exc


def _log_level(value: str) -> str:
    level = normalize_log_level(value)
    if level is None:
        raise argparse.ArgumentTypeError(f"log level must be one of {', '.join(LOG_LEVELS)}")
    return level


def _read_input(path: str | None) -> bytes:
    if path is None or path == "-":
        return sys.stdin.buffer.read()
    target = Path(path)
    if not target.is_file():
        raise SystemExit(f"Path not found: {target}")
    try:
        return target.read_bytes()
    except OSError as exc:
        raise SystemExit(f"Cannot read {target}: {exc}") from exc


def format_event_line(event: Event, raw: bytes) -> str:
    return f"{event!r}  # {raw.hex(' ')}"


def render_events(
    data: bytes,
    *,
    color: bool,
    style: str = DEFAULT_STYLE,
    settings: DecoderSettings | None = None,
) -> str:
    """Decode ``data`` and render one listing line per event."""
    out: list[str] = []
    for event, raw in iter_events(data, settings=settings):
        line = format_event_line(event, raw)
        out.append(colorize_line(line, style) if color else line)
        out.append("\n")
    return "".join(out)


def main() -> None:
    """Parse CLI arguments, decode the selected input, and print its events."""
    parser = argparse.ArgumentParser(
        description="Decode raw terminal input bytes into key and mouse events."
    )
    parser.add_argument("path", nargs="?", default=None, help="File of captured input bytes. Defaults to stdin.")
    parser.add_argument("--hex", type=_hex_bytes, default=None, help="Decode these hex-encoded bytes instead.")
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for colored output.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--log-level", type=_log_level, default=None, help="Override the configured log level.")
    parser.add_argument("--save", action="store_true", help="Persist the effective settings to the config file.")
    args = parser.parse_args()

    if args.hex is not None and args.path is not None:
        raise SystemExit("Cannot combine positional path with --hex.")

    settings = load_settings()
    if args.log_level is not None:
        settings = replace(settings, log_level=args.log_level)
    if args.save:
        save_settings(settings)
    configure_logging(settings.log_level)

    data = args.hex if args.hex is not None else _read_input(args.path)
    color = not args.no_color and sys.stdout.isatty()
    sys.stdout.write(render_events(data, color=color, style=args.style, settings=settings))


if __name__ == "__main__":
    main()
