"""Decode one UTF-8 character from a lead byte plus continuation bytes."""

from __future__ import annotations

from .capture import CapturingReader
from .errors import ByteSourceError, InvalidEncodingError

MAX_UTF8_LENGTH = 4


def decode_utf8_char(lead: int, reader: CapturingReader) -> str:
    """Return the character starting with ``lead``.

    ASCII needs no further reads. Otherwise bytes are appended one at a time
    and the whole buffer re-validated until it decodes; four bytes without a
    valid character, a source that ends, or a source that raises all count as
    an invalid encoding.
    """
    if lead < 0x80:
        return chr(lead)

    buf = bytearray([lead])
    while True:
        try:
            byte = reader.next_byte()
        except ByteSourceError as exc:
            raise InvalidEncodingError("input character is not valid UTF-8") from exc
        if byte is None:
            raise InvalidEncodingError("input character is not valid UTF-8")
        buf.append(byte)
        try:
            text = buf.decode("utf-8")
        except UnicodeDecodeError:
            if len(buf) >= MAX_UTF8_LENGTH:
                raise InvalidEncodingError("input character is not valid UTF-8") from None
            continue
        return text[0]
