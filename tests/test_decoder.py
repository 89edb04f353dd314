"""Tests for the decode entry point and event iteration.

Verifies byte capture on every path, byte-source failure handling, logging,
and that streams are consumed exactly once in order.
"""

from __future__ import annotations

import random
import unittest

from termevents import (
    ByteSourceError,
    DecoderSettings,
    InvalidInputError,
    Key,
    KeyKind,
    KeyPress,
    MouseButton,
    MouseEvent,
    MouseInput,
    Unsupported,
    decode_bytes,
    iter_events,
    iter_keys,
    parse_event,
)


def _failing_source(data: bytes, exc: BaseException):
    yield from data
    raise exc


class ParseEventTests(unittest.TestCase):
    def test_successful_decode_returns_consumed_bytes(self) -> None:
        event, raw = parse_event(0x1B, iter(b"[<0;5;10M"))
        self.assertEqual(event, MouseInput(MouseEvent.press(MouseButton.LEFT, 5, 10)))
        self.assertEqual(raw, b"\x1b[<0;5;10M")

    def test_malformed_sequence_keeps_decode_error_as_cause(self) -> None:
        event, raw = parse_event(0x1B, iter(b"[x"))
        self.assertEqual(raw, b"\x1b[x")
        self.assertIsInstance(event, Unsupported)
        self.assertIsInstance(event.cause, InvalidInputError)
        self.assertFalse(event.source_failed)

    def test_source_error_becomes_unsupported_with_bytes_read_so_far(self) -> None:
        failure = OSError("input closed")
        event, raw = parse_event(0x1B, _failing_source(b"[<0;5", failure))
        self.assertEqual(event, Unsupported(b"\x1b[<0;5"))
        self.assertEqual(raw, b"\x1b[<0;5")
        self.assertIsInstance(event.cause, ByteSourceError)
        self.assertIs(event.cause.__cause__, failure)
        self.assertTrue(event.source_failed)

    def test_source_error_inside_utf8_character_is_reported_as_source_failure(self) -> None:
        failure = OSError("input closed")
        event, raw = parse_event(0xE2, _failing_source(b"\x82", failure))
        self.assertEqual(event, Unsupported(b"\xe2\x82"))
        self.assertIsInstance(event.cause, ByteSourceError)
        self.assertIs(event.cause.__cause__, failure)
        self.assertTrue(event.source_failed)

    def test_propagate_source_errors_raises_with_captured_bytes(self) -> None:
        failure = OSError("input closed")
        settings = DecoderSettings(propagate_source_errors=True)
        with self.assertRaises(ByteSourceError) as exc_info:
            parse_event(0x1B, _failing_source(b"[", failure), settings=settings)
        self.assertEqual(exc_info.exception.captured, b"\x1b[")
        self.assertIs(exc_info.exception.__cause__, failure)

    def test_propagate_source_errors_from_inside_utf8_character(self) -> None:
        failure = OSError("input closed")
        settings = DecoderSettings(propagate_source_errors=True)
        with self.assertRaises(ByteSourceError) as exc_info:
            parse_event(0xE2, _failing_source(b"\x82", failure), settings=settings)
        self.assertEqual(exc_info.exception.captured, b"\xe2\x82")
        self.assertIs(exc_info.exception.__cause__, failure)

    def test_out_of_range_source_value_is_not_a_source_failure(self) -> None:
        settings = DecoderSettings(propagate_source_errors=True)
        event, raw = parse_event(0x1B, iter([ord("["), 300]), settings=settings)
        self.assertEqual(event, Unsupported(b"\x1b["))
        self.assertEqual(raw, b"\x1b[")
        self.assertIsInstance(event.cause, ValueError)
        self.assertFalse(event.source_failed)

    def test_propagate_source_errors_still_converts_malformed_input(self) -> None:
        settings = DecoderSettings(propagate_source_errors=True)
        event, raw = parse_event(0x1B, iter(b"[3;2~"), settings=settings)
        self.assertEqual(event, Unsupported(b"\x1b[3;2~"))
        self.assertEqual(raw, b"\x1b[3;2~")

    def test_failed_decode_logs_warning(self) -> None:
        with self.assertLogs("termevents.decoder", level="WARNING") as logs:
            parse_event(0x1B, iter(b"[x"))
        self.assertIn("Event parse error", logs.output[0])

    def test_every_decode_logs_event_at_debug(self) -> None:
        with self.assertLogs("termevents.decoder", level="DEBUG") as logs:
            parse_event(0x01, iter(b""))
            parse_event(0x1B, iter(b"[x"))
        debug_lines = [line for line in logs.output if line.startswith("DEBUG")]
        self.assertEqual(
            debug_lines,
            [
                "DEBUG:termevents.decoder:Event: Ctrl+a",
                "DEBUG:termevents.decoder:Event: Unsupported 1b5b78",
            ],
        )


class IterEventsTests(unittest.TestCase):
    def test_mixed_stream_decodes_in_order(self) -> None:
        pairs = list(iter_events(b"a\x1b[A\x1b[<0;5;10M\x1b[xq"))
        self.assertEqual(
            pairs,
            [
                (KeyPress(Key.char("a")), b"a"),
                (KeyPress(Key(KeyKind.UP)), b"\x1b[A"),
                (MouseInput(MouseEvent.press(MouseButton.LEFT, 5, 10)), b"\x1b[<0;5;10M"),
                (Unsupported(b"\x1b[x"), b"\x1b[x"),
                (KeyPress(Key.char("q")), b"q"),
            ],
        )

    def test_iteration_stops_after_source_failure(self) -> None:
        events = [event for event, _raw in iter_events(_failing_source(b"a\x1b", OSError("gone")))]
        self.assertEqual(events, [KeyPress(Key.char("a")), Unsupported(b"\x1b")])
        self.assertTrue(events[-1].source_failed)

    def test_source_failure_between_events_is_reported_and_stops_iteration(self) -> None:
        failure = OSError("gone")
        pairs = list(iter_events(_failing_source(b"a", failure)))
        self.assertEqual(pairs, [(KeyPress(Key.char("a")), b"a"), (Unsupported(b""), b"")])
        unsupported = pairs[-1][0]
        self.assertTrue(unsupported.source_failed)
        self.assertIs(unsupported.cause.__cause__, failure)

    def test_source_failure_between_events_raises_when_propagating(self) -> None:
        failure = OSError("gone")
        settings = DecoderSettings(propagate_source_errors=True)
        events = iter_events(_failing_source(b"a", failure), settings=settings)
        self.assertEqual(next(events), (KeyPress(Key.char("a")), b"a"))
        with self.assertRaises(ByteSourceError) as exc_info:
            next(events)
        self.assertEqual(exc_info.exception.captured, b"")
        self.assertIs(exc_info.exception.__cause__, failure)

    def test_raw_bytes_cover_random_input_exactly_once(self) -> None:
        rng = random.Random(1234)
        alphabet = b"\x1b[<;~MmO0123456789ABCDHFPabcz\x00\x01\x7f\xc3\xa9\xe2\x82\xac\xff"
        for _ in range(300):
            data = bytes(rng.choice(alphabet) for _ in range(rng.randint(1, 40)))
            with self.subTest(data=data):
                pairs = list(iter_events(data))
                self.assertTrue(all(raw for _event, raw in pairs))
                self.assertEqual(b"".join(raw for _event, raw in pairs), data)
                for event, raw in pairs:
                    if isinstance(event, Unsupported):
                        self.assertEqual(event.data, raw)

    def test_decode_bytes_and_iter_keys(self) -> None:
        data = b"\x1b[3~\x1b[<64;1;1Mx"
        self.assertEqual(
            decode_bytes(data),
            [
                KeyPress(Key(KeyKind.DELETE)),
                MouseInput(MouseEvent.press(MouseButton.WHEEL_UP, 1, 1)),
                KeyPress(Key.char("x")),
            ],
        )
        self.assertEqual(list(iter_keys(data)), [Key(KeyKind.DELETE), Key.char("x")])


if __name__ == "__main__":
    unittest.main()
