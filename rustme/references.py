"""Replacement of `$reference$` tokens with glossary terms and snippets."""

from __future__ import annotations

from pathlib import Path
from typing import List, Mapping

from .errors import MalformedSnippetReferenceError
from .glossary import render_term
from .models import OutputContext, Term
from .scanner import ByteScanner
from .stores.snippets import SnippetStore

_DOLLAR = ord("$")


class ReferenceResolver:
    """Expands `$name$` tokens; `$$` is an escaped dollar sign.

    Glossary terms take precedence over snippets. Anything else is treated as a
    snippet reference (``path`` or ``path:name``) relative to ``base_dir``.
    """

    def __init__(self, snippets: SnippetStore) -> None:
        self.snippets = snippets

    def resolve(
        self,
        markdown: str,
        base_dir: Path,
        glossary: Mapping[str, Term],
        context: OutputContext,
    ) -> str:
        processed: List[str] = []
        scanner = ByteScanner(markdown)
        while True:
            processed.append(scanner.read_until_byte(_DOLLAR))
            if scanner.next_byte() is None:
                break

            reference = scanner.read_until_byte(_DOLLAR)
            if scanner.next_byte() is None:
                raise MalformedSnippetReferenceError()

            if not reference:
                processed.append("$")
            elif reference in glossary:
                processed.append(render_term(glossary[reference], context))
            else:
                processed.append(self.snippets.load_snippet(reference, base_dir))
        return "".join(processed)


__all__ = ["ReferenceResolver"]
