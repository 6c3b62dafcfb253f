"""Extraction and memoization of snippets marked inside source files."""

from __future__ import annotations

import string
from pathlib import Path
from typing import Dict, List, Optional, Set

from ..errors import MalformedSnippetError, SnippetAlreadyDefinedError, SnippetNotFoundError
from ..logging import get_logger
from ..scanner import ByteScanner
from .resources import ResourceCache

SNIPPET_START = "begin rustme snippet:"
SNIPPET_END = "end rustme snippet"

_WHITESPACE = frozenset(string.whitespace)
_PUNCTUATION = frozenset(string.punctuation)

logger = get_logger("snippets")


def remove_shared_prefix(lines: List[str]) -> List[str]:
    """Strip the leading column shared by every line.

    One character is removed from every line for as long as all lines are
    non-empty and start with the same whitespace character. A shared
    punctuation character is removed only when every line follows it with
    whitespace, like a comment marker, so ``["# foo", "# bar"]`` becomes
    ``["foo", "bar"]`` while ``#[derive(Debug)]`` is left alone.
    """
    stripped = list(lines)
    if not stripped:
        return stripped
    while True:
        first = stripped[0][:1]
        if any(line[:1] != first for line in stripped[1:]):
            return stripped
        if first in _PUNCTUATION:
            if any(line[1:2] not in _WHITESPACE for line in stripped):
                return stripped
        elif not first or first not in _WHITESPACE:
            return stripped
        stripped = [line[1:] for line in stripped]


def extract_snippets(ref_path: str, contents: str) -> Dict[str, str]:
    """Return every snippet defined in ``contents`` keyed by ``<ref_path>:<name>``.

    The whole file is included under ``ref_path`` itself.
    """
    snippets: Dict[str, str] = {}
    current_name: Optional[str] = None
    current_lines: List[str] = []

    scanner = ByteScanner(contents)
    while not scanner.at_end:
        line = _strip_line_ending(scanner.read_line())
        start = line.find(SNIPPET_START)
        if start != -1:
            tokens = line[start + len(SNIPPET_START) :].split()
            if not tokens:
                raise MalformedSnippetError(f"snippet begin marker without a name in {ref_path}")
            if current_name is not None:
                logger.warning(
                    "Snippet %s in %s was never ended; restarting at %s",
                    current_name,
                    ref_path,
                    tokens[0],
                )
            current_name = tokens[0]
            current_lines = []
        elif SNIPPET_END in line:
            if current_name is None:
                raise MalformedSnippetError()
            key = f"{ref_path}:{current_name}"
            if key in snippets:
                raise SnippetAlreadyDefinedError(current_name)
            snippets[key] = "\n".join(remove_shared_prefix(current_lines))
            current_name = None
            current_lines = []
        elif current_name is not None:
            current_lines.append(line)

    if current_name is not None:
        logger.warning("Snippet %s in %s has no end marker; ignoring it", current_name, ref_path)

    # Allow referring to an entire file as a snippet.
    snippets[ref_path] = contents
    return snippets


def _strip_line_ending(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


class SnippetStore:
    """Loads snippet source files on demand and serves named regions from memory."""

    def __init__(self, cache: ResourceCache) -> None:
        self._cache = cache
        self._snippets: Dict[str, str] = {}
        self._loaded: Set[str] = set()

    def load_snippet(self, reference: str, base_dir: Path) -> str:
        """Return the snippet for ``path`` or ``path:name`` relative to ``base_dir``."""
        if reference not in self._snippets:
            ref_path = reference.split(":", 1)[0]
            if ref_path not in self._loaded:
                self._load_file(ref_path, base_dir)
        try:
            return self._snippets[reference]
        except KeyError:
            raise SnippetNotFoundError(reference) from None

    def __contains__(self, reference: object) -> bool:
        return reference in self._snippets

    def _load_file(self, ref_path: str, base_dir: Path) -> None:
        logger.debug("Loading snippets from %s", ref_path)
        contents = self._cache.get(ref_path, base_dir, lambda: SnippetNotFoundError(ref_path))
        self._snippets.update(extract_snippets(ref_path, contents))
        self._loaded.add(ref_path)


__all__ = [
    "SNIPPET_END",
    "SNIPPET_START",
    "SnippetStore",
    "extract_snippets",
    "remove_shared_prefix",
]
