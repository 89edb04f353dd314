"""Byte-source decorator that records everything it yields.

The decode entry point owns one ``CapturingReader`` per call. Sub-decoders
read through it, so a failed decode can report exactly the consumed bytes.
"""

from __future__ import annotations

from collections.abc import Iterator

from .errors import ByteSourceError, UnexpectedEndError


class CapturingReader:
    def __init__(self, source: Iterator[int], first: int | None = None) -> None:
        self._source = source
        self._captured = bytearray()
        if first is not None:
            self._captured.append(first)

    @property
    def captured(self) -> bytes:
        return bytes(self._captured)

    def next_byte(self) -> int | None:
        """Return the next byte, or ``None`` once the source is exhausted.

        An exception raised by the source is re-raised as ``ByteSourceError``
        (chained to the original) and nothing is recorded for that read.
        """
        try:
            byte = next(self._source)
        except StopIteration:
            return None
        except Exception as exc:
            raise ByteSourceError(f"byte source failed: {exc!r}", self.captured) from exc
        self._captured.append(byte)
        return byte

    def pop(self) -> int:
        """Return the next byte, treating exhaustion as a truncated sequence."""
        byte = self.next_byte()
        if byte is None:
            raise UnexpectedEndError("byte source ended mid-sequence")
        return byte
