"""Generation pipeline: sections -> references -> code blocks -> output files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from .config import Configuration, FileSpec, load_config
from .discovery import find_configurations
from .errors import NoConfigurationError, SnippetNotFoundError
from .glossary import GlossaryResolver
from .logging import get_logger
from .models import OutputContext, Term, is_url
from .postproc.codeblocks import CodeBlockRewriter
from .references import ReferenceResolver
from .stores import ResourceCache, SnippetStore

SECTION_SEPARATOR = "\n"


@dataclass
class GenerationRun:
    """State shared by every file generated from one configuration."""

    configuration: Configuration
    cache: ResourceCache
    snippets: SnippetStore
    glossaries: GlossaryResolver
    glossary: Dict[str, Term]
    release: bool


class Orchestrator:
    """Coordinates generation of every file listed in a configuration."""

    def __init__(self, rewriter: CodeBlockRewriter | None = None) -> None:
        self.rewriter = rewriter or CodeBlockRewriter()
        self.logger = get_logger("orchestrator")

    def generate_in_directory(self, directory: Path | str, *, release: bool = False) -> List[Path]:
        """Generate every configuration found below ``directory`` with one shared cache."""
        directory = Path(directory)
        config_paths = find_configurations(directory)
        if not config_paths:
            raise NoConfigurationError(str(directory))

        cache = ResourceCache()
        written: List[Path] = []
        for config_path in config_paths:
            self.logger.info("Processing %s", config_path)
            configuration = load_config(config_path)
            written.extend(self.generate(configuration, release=release, cache=cache))
        return written

    def generate(
        self,
        configuration: Configuration,
        *,
        release: bool = False,
        cache: Optional[ResourceCache] = None,
    ) -> List[Path]:
        """Write each configured file and return the written paths in order.

        Files written before a failure are left in place.
        """
        if cache is None:
            cache = ResourceCache()
        run = self._start_run(configuration, release, cache)
        written: List[Path] = []
        for name, spec in configuration.files.items():
            output_path = configuration.root / name
            contents = self.render_file(run, spec)
            if output_path.exists():
                output_path.unlink()
            output_path.write_bytes(contents.encode("utf-8"))
            self.logger.info("Wrote %s", output_path)
            written.append(output_path)
        return written

    def render_file(self, run: GenerationRun, spec: FileSpec) -> str:
        glossary: Mapping[str, Term] = run.glossary
        if spec.glossaries:
            glossary = run.glossaries.load(spec.glossaries, into=run.glossary)
        context = OutputContext(for_docs=spec.for_docs, release=run.release)

        root = run.configuration.root
        resolver = ReferenceResolver(run.snippets)
        rendered: List[str] = []
        for section in spec.sections:
            markdown = self._load_section(run, section)
            self.logger.debug("Resolving section %s", section)
            expanded = resolver.resolve(markdown, root, glossary, context)
            rendered.append(self.rewriter.rewrite(expanded))
        return SECTION_SEPARATOR.join(rendered)

    @staticmethod
    def _load_section(run: GenerationRun, section: str) -> str:
        root = run.configuration.root
        if not is_url(section) and ":" in section:
            return run.snippets.load_snippet(section, root)
        return run.cache.get(section, root, lambda: SnippetNotFoundError(section))

    @staticmethod
    def _start_run(configuration: Configuration, release: bool, cache: ResourceCache) -> GenerationRun:
        glossaries = GlossaryResolver(cache, configuration.root)
        return GenerationRun(
            configuration=configuration,
            cache=cache,
            snippets=SnippetStore(cache),
            glossaries=glossaries,
            glossary=glossaries.load(configuration.glossaries),
            release=release,
        )


def generate(directory: Path | str = ".", *, release: bool = False) -> List[Path]:
    """Generate every configuration found within ``directory``."""
    return Orchestrator().generate_in_directory(directory, release=release)


__all__ = ["GenerationRun", "Orchestrator", "SECTION_SEPARATOR", "generate"]
