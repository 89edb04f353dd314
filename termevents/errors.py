"""Exceptions raised inside the decoder.

``parse_event`` catches all of them and reports an ``Unsupported`` event;
they only escape when a caller opts into source-error propagation.
"""

from __future__ import annotations


class DecodeError(Exception):
    """Base class for every decoder failure."""


class InvalidInputError(DecodeError):
    """Malformed or unrecognized escape sequence."""


class UnexpectedEndError(DecodeError):
    """Byte source ran out in the middle of a sequence."""


class InvalidEncodingError(DecodeError):
    """Bytes do not form a valid UTF-8 character."""


class ByteSourceError(DecodeError):
    """The byte source raised while a sequence was being read.

    ``captured`` holds the bytes consumed before the failure; the source's
    own exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, captured: bytes) -> None:
        super().__init__(message)
        self.captured = captured
