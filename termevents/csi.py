"""Decoding of CSI sequences (everything after ``ESC [``).

Covers cursor and editing keys, the legacy Linux-console F1-F5 form, and the
three mouse dialects terminals emit: X10 (``ESC [ M`` plus three raw bytes),
SGR/xterm (``ESC [ < b ; x ; y M|m``) and rxvt (``ESC [ b ; x ; y M``).
"""

from __future__ import annotations

from .capture import CapturingReader
from .errors import InvalidInputError
from .events import Event, Key, KeyKind, KeyPress, MouseButton, MouseEvent, MouseInput

_CURSOR_KEYS = {
    ord("D"): KeyKind.LEFT,
    ord("C"): KeyKind.RIGHT,
    ord("A"): KeyKind.UP,
    ord("B"): KeyKind.DOWN,
    ord("H"): KeyKind.HOME,
    ord("F"): KeyKind.END,
}

_SGR_BUTTONS = {
    0: MouseButton.LEFT,
    1: MouseButton.MIDDLE,
    2: MouseButton.RIGHT,
    64: MouseButton.WHEEL_UP,
    65: MouseButton.WHEEL_DOWN,
}

_RXVT_BUTTONS = {
    32: MouseButton.LEFT,
    33: MouseButton.MIDDLE,
    34: MouseButton.RIGHT,
    96: MouseButton.WHEEL_UP,
    97: MouseButton.WHEEL_UP,
}

_SPECIAL_KEYS = {
    1: KeyKind.HOME,
    2: KeyKind.INSERT,
    3: KeyKind.DELETE,
    4: KeyKind.END,
    5: KeyKind.PAGE_UP,
    6: KeyKind.PAGE_DOWN,
    7: KeyKind.HOME,
    8: KeyKind.END,
}

# Final bytes of a CSI sequence lie in 0x40-0x7E.
_FINAL_BYTE_MIN = 64
_FINAL_BYTE_MAX = 126
_MAX_PARAM = 0xFFFF
# Longest parameter run accepted before a terminator; keeps reads bounded.
MAX_PARAM_BYTES = 64
_WHEEL_BIT = 0x40


def _special_key_function_number(code: int) -> int | None:
    # F-key codes skip 16 and 22.
    if 11 <= code <= 15:
        return code - 10
    if 17 <= code <= 21:
        return code - 11
    if 23 <= code <= 24:
        return code - 12
    return None


def _check_payload_length(payload: bytearray) -> None:
    if len(payload) > MAX_PARAM_BYTES:
        raise InvalidInputError(f"CSI parameters exceed {MAX_PARAM_BYTES} bytes")


def _parse_params(buf: bytes | bytearray) -> list[int]:
    """Split ``;``-separated unsigned decimal parameters."""
    try:
        text = bytes(buf).decode("ascii")
    except UnicodeDecodeError as exc:
        raise InvalidInputError(f"non-ASCII CSI parameters: {bytes(buf)!r}") from exc
    values: list[int] = []
    for part in text.split(";"):
        if not part or not part.isdigit():
            raise InvalidInputError(f"invalid CSI parameter {part!r} in {text!r}")
        value = int(part)
        if value > _MAX_PARAM:
            raise InvalidInputError(f"CSI parameter out of range: {value}")
        values.append(value)
    return values


def _mouse_params(buf: bytes | bytearray) -> tuple[int, int, int]:
    values = _parse_params(buf)
    if len(values) != 3:
        raise InvalidInputError(f"mouse report needs 3 parameters, got {len(values)}")
    cb, cx, cy = values
    return cb, cx, cy


def _parse_x10_mouse(reader: CapturingReader) -> MouseEvent:
    b1 = reader.pop()
    b2 = reader.pop()
    b3 = reader.pop()

    # Button byte is read as a signed 8-bit value before removing the offset.
    cb = (b1 - 256 if b1 >= 128 else b1) - 32
    # (1, 1) is the upper-left cell.
    cx = max(b2 - 32, 0)
    cy = max(b3 - 32, 0)
    button = cb & 0b11
    if button == 0:
        if cb & _WHEEL_BIT:
            return MouseEvent.press(MouseButton.WHEEL_UP, cx, cy)
        return MouseEvent.press(MouseButton.LEFT, cx, cy)
    if button == 1:
        if cb & _WHEEL_BIT:
            return MouseEvent.press(MouseButton.WHEEL_DOWN, cx, cy)
        return MouseEvent.press(MouseButton.MIDDLE, cx, cy)
    if button == 2:
        return MouseEvent.press(MouseButton.RIGHT, cx, cy)
    return MouseEvent.release(cx, cy)


def _parse_sgr_mouse(reader: CapturingReader) -> MouseEvent:
    payload = bytearray()
    final = reader.pop()
    while final not in (ord("M"), ord("m")):
        payload.append(final)
        _check_payload_length(payload)
        final = reader.pop()

    cb, cx, cy = _mouse_params(payload)
    if cb == 32:
        return MouseEvent.hold(cx, cy)
    if cb == 3:
        return MouseEvent.release(cx, cy)
    button = _SGR_BUTTONS.get(cb)
    if button is None:
        raise InvalidInputError(f"unknown SGR mouse button code {cb}")
    if final == ord("M"):
        return MouseEvent.press(button, cx, cy)
    return MouseEvent.release(cx, cy)


def _parse_rxvt_mouse(payload: bytearray) -> MouseEvent:
    cb, cx, cy = _mouse_params(payload)
    if cb == 35:
        return MouseEvent.release(cx, cy)
    if cb == 64:
        return MouseEvent.hold(cx, cy)
    button = _RXVT_BUTTONS.get(cb)
    if button is None:
        raise InvalidInputError(f"unknown rxvt mouse button code {cb}")
    return MouseEvent.press(button, cx, cy)


def _parse_special_key(payload: bytearray) -> Key:
    values = _parse_params(payload)
    if len(values) != 1:
        # Modifier parameters (e.g. ESC [ 3 ; 2 ~ for Shift+Delete) are not decoded.
        raise InvalidInputError(f"special key with modifiers is not supported: {bytes(payload)!r}")
    code = values[0]
    kind = _SPECIAL_KEYS.get(code)
    if kind is not None:
        return Key(kind)
    number = _special_key_function_number(code)
    if number is None:
        raise InvalidInputError(f"unknown special key code {code}")
    return Key.f(number)


def _parse_numbered_escape(lead: int, reader: CapturingReader) -> Event:
    payload = bytearray([lead])
    final = reader.pop()
    while not _FINAL_BYTE_MIN <= final <= _FINAL_BYTE_MAX:
        payload.append(final)
        _check_payload_length(payload)
        final = reader.pop()

    if final == ord("M"):
        return MouseInput(_parse_rxvt_mouse(payload))
    if final == ord("~"):
        return KeyPress(_parse_special_key(payload))
    raise InvalidInputError(f"unsupported CSI final byte {chr(final)!r}")


def parse_csi(reader: CapturingReader) -> Event:
    """Decode the rest of a CSI sequence; ``ESC [`` is already consumed."""
    lead = reader.pop()

    if lead == ord("["):
        byte = reader.pop()
        if ord("A") <= byte <= ord("E"):
            return KeyPress(Key.f(1 + byte - ord("A")))
        raise InvalidInputError(f"unknown ESC [ [ sequence byte {byte:#04x}")

    kind = _CURSOR_KEYS.get(lead)
    if kind is not None:
        return KeyPress(Key(kind))
    if lead == ord("M"):
        return MouseInput(_parse_x10_mouse(reader))
    if lead == ord("<"):
        return MouseInput(_parse_sgr_mouse(reader))
    if ord("0") <= lead <= ord("9"):
        return _parse_numbered_escape(lead, reader)
    raise InvalidInputError(f"unknown CSI sequence byte {lead:#04x}")
