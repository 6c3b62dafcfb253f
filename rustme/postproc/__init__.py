"""Post-processing applied to resolved markdown."""

from .codeblocks import CodeBlockRewriter

__all__ = ["CodeBlockRewriter"]
