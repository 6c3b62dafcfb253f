"""Tests for rustme.scanner."""

from __future__ import annotations

from rustme.scanner import ByteScanner


def test_read_until_stops_before_match() -> None:
    scanner = ByteScanner("abc$def")
    assert scanner.read_until_byte(ord("$")) == "abc"
    assert scanner.next_byte() == ord("$")
    assert scanner.read_until_byte(ord("$")) == "def"
    assert scanner.at_end
    assert scanner.next_byte() is None


def test_read_until_can_include_match() -> None:
    scanner = ByteScanner("a,b")
    assert scanner.read_until(lambda byte: byte == ord(","), True) == "a,"
    assert scanner.read_until(lambda byte: byte == ord(","), True) == "b"


def test_read_line_keeps_newline_and_returns_empty_at_end() -> None:
    scanner = ByteScanner("one\ntwo")
    assert scanner.read_line() == "one\n"
    assert scanner.read_line() == "two"
    assert scanner.read_line() == ""


def test_predicate_never_sees_multibyte_sequences() -> None:
    seen: list[int] = []

    def predicate(byte: int) -> bool:
        seen.append(byte)
        return byte == ord("!")

    scanner = ByteScanner("héllo→!")
    assert scanner.read_until(predicate, False) == "héllo→"
    assert all(byte < 128 for byte in seen)


def test_try_match_only_consumes_on_success() -> None:
    scanner = ByteScanner("```rust\n")
    assert scanner.try_match("```python") is False
    assert scanner.try_match("```rust") is True
    assert scanner.read_line() == "\n"


def test_iteration_yields_remaining_bytes() -> None:
    scanner = ByteScanner("ab")
    scanner.next_byte()
    assert list(scanner) == [ord("b")]
