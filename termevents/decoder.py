"""Decode entry point and event iteration.

``parse_event`` turns one already-read byte plus a byte iterator into exactly
one event. Decode failures never escape: they become ``Unsupported`` events
carrying the bytes consumed so far.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .capture import CapturingReader
from .config import DecoderSettings
from .dispatch import dispatch_byte
from .errors import ByteSourceError
from .events import Event, Key, KeyPress, Unsupported, describe_event

logger = logging.getLogger(__name__)

_DEFAULT_SETTINGS = DecoderSettings()


def _source_failure(exc: BaseException | None) -> ByteSourceError | None:
    """Return the ``ByteSourceError`` in the ``__cause__`` chain of ``exc``, if any."""
    while exc is not None:
        if isinstance(exc, ByteSourceError):
            return exc
        exc = exc.__cause__
    return None


def _contain_failure(exc: Exception, captured: bytes, settings: DecoderSettings) -> Unsupported:
    failure = _source_failure(exc)
    if failure is not None and settings.propagate_source_errors:
        raise failure
    logger.warning("Event parse error: %s", exc)
    return Unsupported(captured, cause=failure if failure is not None else exc)


def parse_event(
    first_byte: int,
    source: Iterable[int],
    *,
    settings: DecoderSettings | None = None,
) -> tuple[Event, bytes]:
    """Decode one event starting at ``first_byte``.

    Further bytes are pulled from ``source`` only as the grammar requires.
    Returns the event and every byte consumed for it, ``first_byte`` included.
    Malformed input and failures raised by ``source`` yield ``Unsupported``;
    with ``settings.propagate_source_errors`` the latter raise
    ``ByteSourceError`` instead.
    """
    if settings is None:
        settings = _DEFAULT_SETTINGS
    reader = CapturingReader(iter(source), first=first_byte)
    try:
        event = dispatch_byte(first_byte, reader)
    except Exception as exc:
        event = _contain_failure(exc, reader.captured, settings)
    logger.debug("Event: %s", describe_event(event))
    return event, reader.captured


def iter_events(
    source: Iterable[int],
    *,
    settings: DecoderSettings | None = None,
) -> Iterator[tuple[Event, bytes]]:
    """Yield ``(event, raw_bytes)`` pairs until ``source`` is exhausted.

    Iteration stops after an event whose byte source failed, so a broken
    stream does not produce an endless run of ``Unsupported`` events. A source
    that fails while the first byte of an event is read yields
    ``Unsupported(b"")``; nothing was consumed for it.
    """
    if settings is None:
        settings = _DEFAULT_SETTINGS
    it = iter(source)
    while True:
        try:
            first_byte = CapturingReader(it).next_byte()
        except ByteSourceError as exc:
            event = _contain_failure(exc, b"", settings)
            logger.debug("Event: %s", describe_event(event))
            yield event, b""
            return
        if first_byte is None:
            return
        event, raw = parse_event(first_byte, it, settings=settings)
        yield event, raw
        if isinstance(event, Unsupported) and event.source_failed:
            return


def iter_keys(source: Iterable[int], *, settings: DecoderSettings | None = None) -> Iterator[Key]:
    """Yield only the keys from ``source``; mouse and unsupported input is dropped."""
    for event, _raw in iter_events(source, settings=settings):
        if isinstance(event, KeyPress):
            yield event.key


def decode_bytes(data: bytes, *, settings: DecoderSettings | None = None) -> list[Event]:
    return [event for event, _raw in iter_events(data, settings=settings)]
