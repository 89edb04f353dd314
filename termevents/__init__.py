"""Public package surface for termevents.

Decodes raw terminal input bytes into key, mouse, and unsupported events.
Most implementation lives in submodules under ``termevents``.
"""

from __future__ import annotations

from .config import DecoderSettings
from .decoder import decode_bytes, iter_events, iter_keys, parse_event
from .errors import (
    ByteSourceError,
    DecodeError,
    InvalidEncodingError,
    InvalidInputError,
    UnexpectedEndError,
)
from .events import (
    Event,
    Key,
    KeyKind,
    KeyPress,
    MouseAction,
    MouseButton,
    MouseEvent,
    MouseInput,
    Unsupported,
    describe_event,
)
from .reader import FdByteSource, read_event


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "ByteSourceError",
    "DecodeError",
    "DecoderSettings",
    "Event",
    "FdByteSource",
    "InvalidEncodingError",
    "InvalidInputError",
    "Key",
    "KeyKind",
    "KeyPress",
    "MouseAction",
    "MouseButton",
    "MouseEvent",
    "MouseInput",
    "UnexpectedEndError",
    "Unsupported",
    "decode_bytes",
    "describe_event",
    "iter_events",
    "iter_keys",
    "main",
    "parse_event",
    "read_event",
]
