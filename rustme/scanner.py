"""Byte-level cursor over UTF-8 text used by the snippet and token scanners."""

from __future__ import annotations

from typing import Callable, Iterator, Optional

from .errors import InvalidUnicodeError

_NEWLINE = ord("\n")


class ByteScanner:
    """Reads a UTF-8 buffer byte by byte without splitting code points.

    Predicates passed to :meth:`read_until` only ever see ASCII bytes; bytes of
    multi-byte sequences are skipped over, so a match can never land inside a
    code point. Returned slices are still decoded strictly and a bad boundary
    surfaces as :class:`InvalidUnicodeError`.
    """

    def __init__(self, text: str) -> None:
        self._buffer = text.encode("utf-8")
        self._position = 0

    @property
    def at_end(self) -> bool:
        return self._position >= len(self._buffer)

    def read_until(self, predicate: Callable[[int], bool], include_match: bool) -> str:
        """Consume bytes up to the first ASCII byte accepted by ``predicate``.

        The matching byte is consumed and returned when ``include_match`` is set,
        otherwise the cursor stops in front of it. Without a match the rest of
        the buffer is consumed.
        """
        start = self._position
        end = len(self._buffer)
        for index in range(start, end):
            byte = self._buffer[index]
            if byte < 128 and predicate(byte):
                end = index + 1 if include_match else index
                break
        self._position = end
        return self._decode(start, end)

    def read_until_byte(self, value: int) -> str:
        return self.read_until(lambda byte: byte == value, False)

    def read_line(self) -> str:
        """Return the next line including its newline, or ``""`` at end of input."""
        return self.read_until(lambda byte: byte == _NEWLINE, True)

    def try_match(self, literal: str) -> bool:
        encoded = literal.encode("utf-8")
        if self._buffer.startswith(encoded, self._position):
            self._position += len(encoded)
            return True
        return False

    def next_byte(self) -> Optional[int]:
        if self.at_end:
            return None
        byte = self._buffer[self._position]
        self._position += 1
        return byte

    def __iter__(self) -> Iterator[int]:
        while True:
            byte = self.next_byte()
            if byte is None:
                return
            yield byte

    def _decode(self, start: int, end: int) -> str:
        try:
            return self._buffer[start:end].decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidUnicodeError(str(exc)) from exc


__all__ = ["ByteScanner"]
