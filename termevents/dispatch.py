"""First-byte classification for terminal input.

Maps control bytes directly to keys, hands ``ESC [`` to the CSI decoder,
and decodes everything else as one (possibly multi-byte) character.
"""

from __future__ import annotations

from .capture import CapturingReader
from .csi import parse_csi
from .events import Event, Key, KeyKind, KeyPress, Unsupported
from .utf8 import decode_utf8_char

ESC = 0x1B
DEL = 0x7F


def _parse_ss3(reader: CapturingReader) -> Event:
    # ESC O P..S are F1-F4 on xterm-like terminals.
    byte = reader.next_byte()
    if byte is None:
        return Unsupported(bytes([ESC, ord("O")]))
    if ord("P") <= byte <= ord("S"):
        return KeyPress(Key.f(1 + byte - ord("P")))
    return Unsupported(bytes([ESC, ord("O"), byte]))


def _parse_escape(reader: CapturingReader) -> Event:
    byte = reader.next_byte()
    if byte is None:
        return Unsupported(bytes([ESC]))
    if byte == ord("O"):
        return _parse_ss3(reader)
    if byte == ord("["):
        return parse_csi(reader)
    return KeyPress(Key.alt(decode_utf8_char(byte, reader)))


def dispatch_byte(byte: int, reader: CapturingReader) -> Event:
    """Decode the event introduced by ``byte``, reading more from ``reader`` as needed."""
    if byte == ESC:
        return _parse_escape(reader)
    if byte in (ord("\n"), ord("\r")):
        return KeyPress(Key.char("\n"))
    if byte == ord("\t"):
        return KeyPress(Key.char("\t"))
    if byte == DEL:
        return KeyPress(Key(KeyKind.BACKSPACE))
    if 0x01 <= byte <= 0x1A:
        return KeyPress(Key.ctrl(chr(byte - 0x01 + ord("a"))))
    if 0x1C <= byte <= 0x1F:
        return KeyPress(Key.ctrl(chr(byte - 0x1C + ord("4"))))
    if byte == 0x00:
        return KeyPress(Key(KeyKind.NULL))
    return KeyPress(Key.char(decode_utf8_char(byte, reader)))
