"""Core data models shared across rustme components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Union


@dataclass(frozen=True)
class StaticTerm:
    """A glossary term that renders the same value in every context."""

    value: str


@dataclass(frozen=True)
class ConditionalTerm:
    """A glossary term whose value is selected by the output context."""

    for_docs: Optional[str] = None
    release: Optional[str] = None
    default: Optional[str] = None


Term = Union[StaticTerm, ConditionalTerm]


@dataclass(frozen=True)
class OutputContext:
    """Selects which facet of a conditional term is rendered."""

    for_docs: bool = False
    release: bool = False


@dataclass(frozen=True)
class ExternalGlossary:
    """A glossary stored in a local file or at a URL."""

    location: str


@dataclass(frozen=True)
class InlineGlossary:
    """A glossary declared directly inside the configuration."""

    terms: Dict[str, Term] = field(default_factory=dict)

    @property
    def location(self) -> str:
        return "(inline)"


Glossary = Union[ExternalGlossary, InlineGlossary]


def is_url(reference: str) -> bool:
    return reference.startswith("http://") or reference.startswith("https://")


__all__ = [
    "ConditionalTerm",
    "ExternalGlossary",
    "Glossary",
    "InlineGlossary",
    "OutputContext",
    "StaticTerm",
    "Term",
    "is_url",
]
