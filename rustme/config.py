"""Configuration loading for rustme (.rustme.yml or .rustme/config.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigError
from .glossary import parse_terms
from .models import ExternalGlossary, Glossary, InlineGlossary

CONFIG_FILENAME = ".rustme.yml"
CONFIG_DIRNAME = ".rustme"
CONFIG_DIR_FILENAME = "config.yml"


@dataclass
class FileSpec:
    """Sections and glossaries that make up one generated file."""

    sections: List[str] = field(default_factory=list)
    for_docs: bool = False
    glossaries: List[Glossary] = field(default_factory=list)


@dataclass
class Configuration:
    """Represents the output files and glossaries defined in a configuration file."""

    root: Path
    files: Dict[str, FileSpec] = field(default_factory=dict)
    glossaries: List[Glossary] = field(default_factory=list)
    path: Optional[Path] = None


def load_config(config_path: Path) -> Configuration:
    """Load a configuration from a file, a ``.rustme`` directory or a project directory."""
    config_file = resolve_config_path(Path(config_path))
    try:
        text = config_file.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigError(f"Configuration file not found: {config_file}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed to read {config_file}: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {config_file.name}: {exc}") from exc

    config = parse_config(data, root=config_file.parent)
    config.path = config_file
    return config


def resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        if config_path.name == CONFIG_DIRNAME:
            return (config_path / CONFIG_DIR_FILENAME).resolve()
        candidate = config_path / CONFIG_FILENAME
        if candidate.exists():
            return candidate.resolve()
        return (config_path / CONFIG_DIRNAME / CONFIG_DIR_FILENAME).resolve()
    return config_path.resolve()


def parse_config(data: Any, *, root: Path) -> Configuration:
    """Build a :class:`Configuration` from already-deserialized YAML data."""
    if not isinstance(data, dict):
        raise ConfigError("configuration must contain a mapping at the root")

    raw_files = data.get("files")
    if not isinstance(raw_files, dict):
        raise ConfigError("configuration requires a 'files' mapping")

    files: Dict[str, FileSpec] = {}
    for name, raw_spec in raw_files.items():
        files[str(name)] = _parse_file_spec(str(name), raw_spec)

    glossaries = _parse_glossaries(data.get("glossaries"), context="glossaries")
    return Configuration(root=root, files=files, glossaries=glossaries)


def _parse_file_spec(name: str, raw: Any) -> FileSpec:
    if isinstance(raw, list):
        return FileSpec(sections=_as_sections(raw, name))
    if not isinstance(raw, dict):
        raise ConfigError(f"files.{name} must be a list of sections or a mapping")

    unknown = set(raw) - {"sections", "for_docs", "glossaries"}
    if unknown:
        raise ConfigError(f"files.{name} has unknown keys: {', '.join(sorted(map(str, unknown)))}")
    if "sections" not in raw:
        raise ConfigError(f"files.{name} requires 'sections'")

    for_docs = raw.get("for_docs", False)
    if not isinstance(for_docs, bool):
        raise ConfigError(f"files.{name}.for_docs must be true or false")

    return FileSpec(
        sections=_as_sections(raw["sections"], name),
        for_docs=for_docs,
        glossaries=_parse_glossaries(raw.get("glossaries"), context=f"files.{name}.glossaries"),
    )


def _as_sections(value: Any, name: str) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"files.{name} sections must be a list of strings")
    return list(value)


def _parse_glossaries(value: Any, *, context: str) -> List[Glossary]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"{context} must be a list")

    glossaries: List[Glossary] = []
    for index, entry in enumerate(value):
        if isinstance(entry, str):
            glossaries.append(ExternalGlossary(location=entry))
        elif isinstance(entry, dict):
            try:
                terms = parse_terms(entry)
            except ValueError as exc:
                raise ConfigError(f"{context}[{index}]: {exc}") from exc
            glossaries.append(InlineGlossary(terms=terms))
        else:
            raise ConfigError(f"{context}[{index}] must be a location string or a mapping of terms")
    return glossaries


__all__ = [
    "CONFIG_DIRNAME",
    "CONFIG_DIR_FILENAME",
    "CONFIG_FILENAME",
    "Configuration",
    "FileSpec",
    "load_config",
    "parse_config",
    "resolve_config_path",
]
