"""Value types produced by the terminal input decoder.

Keys, mouse reports, and the raw-byte fallback are frozen dataclasses.
``Event`` is the closed union every decode call returns exactly one of.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Union

from .errors import ByteSourceError


class KeyKind(enum.Enum):
    BACKSPACE = "backspace"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    DELETE = "delete"
    INSERT = "insert"
    F = "f"
    CHAR = "char"
    ALT = "alt"
    CTRL = "ctrl"
    NULL = "null"
    ESC = "esc"


_CHAR_KINDS = frozenset({KeyKind.CHAR, KeyKind.ALT, KeyKind.CTRL})
MAX_FUNCTION_KEY = 12


@dataclass(frozen=True)
class Key:
    """One key press.

    ``value`` holds the character for ``CHAR``/``ALT``/``CTRL`` and the
    function-key number (1-12) for ``F``; it is ``None`` for every other kind.
    """

    kind: KeyKind
    value: str | int | None = None

    def __post_init__(self) -> None:
        if self.kind in _CHAR_KINDS:
            if not isinstance(self.value, str) or len(self.value) != 1:
                raise ValueError(f"{self.kind.name} key needs a single character, got {self.value!r}")
        elif self.kind is KeyKind.F:
            if isinstance(self.value, bool) or not isinstance(self.value, int):
                raise ValueError(f"function key needs an integer, got {self.value!r}")
            if not 1 <= self.value <= MAX_FUNCTION_KEY:
                raise ValueError(f"function key out of range: F{self.value}")
        elif self.value is not None:
            raise ValueError(f"{self.kind.name} key carries no value, got {self.value!r}")

    @classmethod
    def char(cls, ch: str) -> Key:
        return cls(KeyKind.CHAR, ch)

    @classmethod
    def alt(cls, ch: str) -> Key:
        return cls(KeyKind.ALT, ch)

    @classmethod
    def ctrl(cls, ch: str) -> Key:
        return cls(KeyKind.CTRL, ch)

    @classmethod
    def f(cls, number: int) -> Key:
        return cls(KeyKind.F, number)

    def __str__(self) -> str:
        if self.kind is KeyKind.CHAR:
            return repr(self.value)
        if self.kind is KeyKind.ALT:
            return f"Alt+{self.value}"
        if self.kind is KeyKind.CTRL:
            return f"Ctrl+{self.value}"
        if self.kind is KeyKind.F:
            return f"F{self.value}"
        return "".join(part.capitalize() for part in self.kind.value.split("_"))


class MouseButton(enum.Enum):
    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"
    WHEEL_UP = "wheel_up"
    WHEEL_DOWN = "wheel_down"


class MouseAction(enum.Enum):
    PRESS = "press"
    RELEASE = "release"
    HOLD = "hold"


@dataclass(frozen=True)
class MouseEvent:
    """A mouse report at one-based terminal coordinates.

    Only ``PRESS`` names a button; terminals do not report which button was
    released or is being held.
    """

    action: MouseAction
    x: int
    y: int
    button: MouseButton | None = None

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError(f"mouse coordinates must be non-negative, got ({self.x}, {self.y})")
        if (self.action is MouseAction.PRESS) != (self.button is not None):
            raise ValueError(f"{self.action.name} event with button {self.button!r}")

    @classmethod
    def press(cls, button: MouseButton, x: int, y: int) -> MouseEvent:
        return cls(MouseAction.PRESS, x, y, button)

    @classmethod
    def release(cls, x: int, y: int) -> MouseEvent:
        return cls(MouseAction.RELEASE, x, y)

    @classmethod
    def hold(cls, x: int, y: int) -> MouseEvent:
        return cls(MouseAction.HOLD, x, y)

    def __str__(self) -> str:
        action = self.action.value.capitalize()
        if self.button is not None:
            button = "".join(part.capitalize() for part in self.button.value.split("_"))
            return f"{action} {button} ({self.x}, {self.y})"
        return f"{action} ({self.x}, {self.y})"


@dataclass(frozen=True)
class KeyPress:
    key: Key


@dataclass(frozen=True)
class MouseInput:
    mouse: MouseEvent


@dataclass(frozen=True)
class Unsupported:
    """Bytes that could not be classified, kept verbatim for logging/replay.

    ``cause`` is the exception that aborted decoding, if any; a failing byte
    source shows up as ``ByteSourceError`` chained to the source's exception.
    It is excluded from equality and hashing so two captures of the same bytes
    compare equal.
    """

    data: bytes
    cause: BaseException | None = field(default=None, compare=False, repr=False)

    @property
    def source_failed(self) -> bool:
        """True when the byte source itself raised, not a malformed sequence."""
        return isinstance(self.cause, ByteSourceError)


Event = Union[KeyPress, MouseInput, Unsupported]


def describe_event(event: Event) -> str:
    """Short human label for ``event`` used by the CLI and log output."""
    if isinstance(event, KeyPress):
        return str(event.key)
    if isinstance(event, MouseInput):
        return str(event.mouse)
    return f"Unsupported {event.data.hex()}"
