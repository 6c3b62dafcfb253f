"""Generate README-like files from configured sections, snippets and glossaries."""

from .config import Configuration, FileSpec, load_config
from .errors import RustmeError
from .orchestrator import Orchestrator

__all__ = [
    "Configuration",
    "FileSpec",
    "Orchestrator",
    "RustmeError",
    "load_config",
]
