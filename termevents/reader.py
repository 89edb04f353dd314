"""Event reading from a raw-mode terminal file descriptor.

Bytes are read one at a time with ``os.read``; ``select`` bounds how long the
reader waits for the rest of an escape sequence. A lone ESC that is not
followed by sequence bytes in time is reported as the Esc key.
"""

from __future__ import annotations

import logging
import os
import select

from .config import DecoderSettings
from .decoder import parse_event
from .dispatch import ESC
from .events import Event, Key, KeyKind, KeyPress, describe_event

logger = logging.getLogger(__name__)


def _wait_readable(fd: int, timeout_ms: int) -> bool:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    return bool(ready)


def _read_byte(fd: int, timeout_ms: int | None) -> int | None:
    if timeout_ms is not None and not _wait_readable(fd, timeout_ms):
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch[0]


class FdByteSource:
    """Iterator over single bytes of ``fd``; ends on timeout or EOF.

    ``OSError`` from ``os.read`` propagates to the consumer.
    """

    def __init__(self, fd: int, timeout_ms: int | None) -> None:
        self.fd = fd
        self.timeout_ms = timeout_ms

    def __iter__(self) -> FdByteSource:
        return self

    def __next__(self) -> int:
        byte = _read_byte(self.fd, self.timeout_ms)
        if byte is None:
            raise StopIteration
        return byte


def read_event(
    fd: int,
    timeout_ms: int | None = None,
    *,
    settings: DecoderSettings | None = None,
) -> tuple[Event, bytes] | None:
    """Read and decode one event from ``fd``.

    Waits up to ``timeout_ms`` for the first byte (forever when ``None``) and
    returns ``None`` on timeout or EOF.
    """
    if settings is None:
        settings = DecoderSettings()
    first = _read_byte(fd, timeout_ms)
    if first is None:
        return None
    if first == ESC and not _wait_readable(fd, settings.escape_timeout_ms):
        event = KeyPress(Key(KeyKind.ESC))
        logger.debug("Event: %s", describe_event(event))
        return event, bytes([ESC])
    source = FdByteSource(fd, settings.escape_timeout_ms)
    return parse_event(first, source, settings=settings)
