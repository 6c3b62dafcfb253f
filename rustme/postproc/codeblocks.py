"""Rustdoc-style preprocessing of rust code blocks."""

from __future__ import annotations

from ..errors import InvalidUnicodeError, MalformedCodeBlockError
from ..scanner import ByteScanner

_BACKTICK = ord("`")


class CodeBlockRewriter:
    """Drops hidden `# ` lines from ```rust blocks the way rustdoc does.

    Only blocks opened with the language tag are touched; every other fence and
    all text outside blocks is copied unchanged.
    """

    OPENING_TAIL = "``rust"
    FENCE = "```"
    HIDDEN_PREFIX = "# "

    def rewrite(self, markdown: str) -> str:
        processed = bytearray()
        scanner = ByteScanner(markdown)
        for byte in scanner:
            if byte != _BACKTICK or not scanner.try_match(self.OPENING_TAIL):
                processed.append(byte)
                continue

            processed.extend(f"`{self.OPENING_TAIL}".encode("utf-8"))
            processed.extend(scanner.read_line().encode("utf-8"))
            while True:
                line = scanner.read_line()
                if not line:
                    raise MalformedCodeBlockError()
                trimmed = line.lstrip()
                if trimmed.startswith(self.FENCE):
                    processed.extend(line.encode("utf-8"))
                    break
                if trimmed.startswith(self.HIDDEN_PREFIX):
                    continue
                processed.extend(line.encode("utf-8"))

        try:
            return processed.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidUnicodeError(str(exc)) from exc


__all__ = ["CodeBlockRewriter"]
