"""Run-scoped stores for fetched resources and extracted snippets."""

from .resources import ResourceCache
from .snippets import SnippetStore

__all__ = ["ResourceCache", "SnippetStore"]
