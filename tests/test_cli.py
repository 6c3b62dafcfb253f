"""CLI parser and entrypoint tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from rustme.cli import _build_parser, main
from tests._fixtures.project_builder import ProjectBuilder


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "generate"])
    assert args.verbose is True
    assert args.command == "generate"
    assert args.path == "."


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["release", "docs", "--verbose"])
    assert args.verbose is True
    assert args.command == "release"
    assert args.path == "docs"


def test_cli_accepts_release_flag() -> None:
    parser = _build_parser()
    args = parser.parse_args(["generate", "--release"])
    assert args.release is True


def test_cli_generates_from_directory(project: ProjectBuilder, capsys) -> None:
    project.write(
        {
            ".rustme.yml": """
                files:
                  README.md: [intro.md]
                glossaries:
                  - version: {release: "1.0", default: "dev"}
                """,
            "intro.md": "v$version$\n",
        }
    )

    main(["release", str(project.path())])

    assert project.read("README.md") == "v1.0\n"
    assert "README.md" in capsys.readouterr().out


def test_cli_generates_single_configuration_file(project: ProjectBuilder) -> None:
    project.write({"custom.yml": "files:\n  OUT.md: [a.md]\n", "a.md": "$$5\n"})

    main(["generate", str(project.path() / "custom.yml")])

    assert project.read("OUT.md") == "$5\n"


def test_cli_reports_missing_configuration(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(tmp_path)])
    assert excinfo.value.code == 1
    assert "no configuration found" in capsys.readouterr().err


def test_cli_reports_generation_errors(project: ProjectBuilder, capsys) -> None:
    project.write({".rustme.yml": "files:\n  README.md: [missing.md]\n"})

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(project.path())])

    assert excinfo.value.code == 1
    assert "snippet not found: missing.md" in capsys.readouterr().err


def test_cli_writes_log_file(project: ProjectBuilder, tmp_path: Path) -> None:
    project.write({".rustme.yml": "files:\n  README.md: [a.md]\n", "a.md": "text\n"})
    log_file = tmp_path / "rustme.log"

    main(["--log-file", str(log_file), "generate", str(project.path())])

    logged = log_file.read_text(encoding="utf-8")
    assert "Processing" in logged
    assert "Wrote" in logged
