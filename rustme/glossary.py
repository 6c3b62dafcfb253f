"""Glossary parsing, merging and context-sensitive rendering."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, MutableMapping, Optional

import yaml

from .errors import GlossaryError, RustmeError
from .logging import get_logger
from .models import (
    ConditionalTerm,
    ExternalGlossary,
    Glossary,
    OutputContext,
    StaticTerm,
    Term,
)
from .stores.resources import ResourceCache

_CONDITIONAL_KEYS = ("for_docs", "release", "default")


def parse_term(value: Any) -> Term:
    """Convert a deserialized value into a :class:`StaticTerm` or :class:`ConditionalTerm`."""
    if isinstance(value, dict):
        unknown = set(value) - set(_CONDITIONAL_KEYS)
        if unknown:
            raise ValueError(f"unknown term keys: {', '.join(sorted(map(str, unknown)))}")
        return ConditionalTerm(
            for_docs=_optional_text(value.get("for_docs")),
            release=_optional_text(value.get("release")),
            default=_optional_text(value.get("default")),
        )
    text = _optional_text(value)
    if text is None:
        raise ValueError("a term must be a string or a mapping")
    return StaticTerm(text)


def parse_terms(data: Any) -> Dict[str, Term]:
    if not isinstance(data, dict):
        raise ValueError("a glossary must be a mapping of term names to values")
    terms: Dict[str, Term] = {}
    for name, value in data.items():
        try:
            terms[str(name)] = parse_term(value)
        except ValueError as exc:
            raise ValueError(f"term {name!r}: {exc}") from exc
    return terms


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"expected a string, found {value!r}")
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ValueError(f"expected a string, found {type(value).__name__}")


def merge_term(existing: Optional[Term], incoming: Term) -> Term:
    """Combine ``incoming`` on top of ``existing``.

    Static terms always win. A conditional term only overrides the facets it
    sets and inherits a static value as its default.
    """
    if isinstance(incoming, StaticTerm) or existing is None:
        return incoming
    if isinstance(existing, StaticTerm):
        return ConditionalTerm(
            for_docs=incoming.for_docs,
            release=incoming.release,
            default=incoming.default if incoming.default is not None else existing.value,
        )
    return ConditionalTerm(
        for_docs=incoming.for_docs if incoming.for_docs is not None else existing.for_docs,
        release=incoming.release if incoming.release is not None else existing.release,
        default=incoming.default if incoming.default is not None else existing.default,
    )


def render_term(term: Term, context: OutputContext) -> str:
    if isinstance(term, StaticTerm):
        return term.value
    if context.for_docs and term.for_docs is not None:
        return term.for_docs
    if context.release and term.release is not None:
        return term.release
    return term.default or ""


class GlossaryResolver:
    """Loads glossary sources through the resource cache and merges them in order."""

    def __init__(self, cache: ResourceCache, base_dir: Path) -> None:
        self._cache = cache
        self._base_dir = base_dir
        self.logger = get_logger("glossary")

    def load(
        self,
        glossaries: Iterable[Glossary],
        into: Optional[MutableMapping[str, Term]] = None,
    ) -> Dict[str, Term]:
        """Merge ``glossaries`` left-to-right, on top of a copy of ``into`` when given."""
        combined: Dict[str, Term] = dict(into) if into is not None else {}
        for glossary in glossaries:
            try:
                terms = self._load_terms(glossary)
            except GlossaryError:
                raise
            except (RustmeError, ValueError, yaml.YAMLError) as exc:
                raise GlossaryError(glossary.location, str(exc)) from exc
            for name, term in terms.items():
                combined[name] = merge_term(combined.get(name), term)
        return combined

    def _load_terms(self, glossary: Glossary) -> Dict[str, Term]:
        if not isinstance(glossary, ExternalGlossary):
            return dict(glossary.terms)

        location = glossary.location
        text = self._cache.get(
            location,
            self._base_dir,
            lambda: GlossaryError(location, "not found"),
        )
        self.logger.debug("Parsing glossary %s", location)
        return parse_terms(yaml.safe_load(text) or {})


__all__ = [
    "GlossaryResolver",
    "merge_term",
    "parse_term",
    "parse_terms",
    "render_term",
]
