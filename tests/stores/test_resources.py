"""Tests for the run-scoped resource cache."""

from __future__ import annotations

import io
from pathlib import Path
from urllib.error import HTTPError, URLError

import pytest

import rustme.stores.resources as resources_module
from rustme.errors import HttpError, InvalidUnicodeError, ResourceIOError, SnippetNotFoundError
from rustme.stores import ResourceCache


class FakeResponse:
    def __init__(self, payload: bytes) -> None:
        self._payload = payload

    def read(self) -> bytes:
        return self._payload

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        return None


def _not_found(name: str):
    return lambda: SnippetNotFoundError(name)


def test_cache_reads_local_file_once(tmp_path: Path) -> None:
    section = tmp_path / "intro.md"
    section.write_text("# Intro\n", encoding="utf-8")
    cache = ResourceCache()

    assert cache.get("intro.md", tmp_path, _not_found("intro.md")) == "# Intro\n"
    section.write_text("changed", encoding="utf-8")
    assert cache.get("./intro.md", tmp_path, _not_found("intro.md")) == "# Intro\n"
    assert len(cache) == 1


def test_cache_preserves_line_endings(tmp_path: Path) -> None:
    (tmp_path / "crlf.md").write_bytes(b"a\r\nb\r\n")
    assert ResourceCache().get("crlf.md", tmp_path, _not_found("crlf.md")) == "a\r\nb\r\n"


def test_cache_maps_missing_file_to_not_found(tmp_path: Path) -> None:
    with pytest.raises(SnippetNotFoundError) as excinfo:
        ResourceCache().get("missing.md", tmp_path, _not_found("missing.md"))
    assert excinfo.value.reference == "missing.md"


def test_cache_wraps_other_io_failures(tmp_path: Path) -> None:
    (tmp_path / "folder").mkdir()
    with pytest.raises(ResourceIOError):
        ResourceCache().get("folder", tmp_path, _not_found("folder"))


def test_cache_rejects_invalid_utf8(tmp_path: Path) -> None:
    (tmp_path / "bad.md").write_bytes(b"\xff\xfe")
    with pytest.raises(InvalidUnicodeError):
        ResourceCache().get("bad.md", tmp_path, _not_found("bad.md"))


def test_cache_fetches_url_with_user_agent(monkeypatch) -> None:
    captured: list[object] = []

    def fake_urlopen(request):
        captured.append(request)
        return FakeResponse("remote ✓".encode("utf-8"))

    monkeypatch.setattr(resources_module, "urlopen", fake_urlopen)
    cache = ResourceCache()
    url = "https://example.com/glossary.yml"

    assert cache.get(url, Path("."), _not_found(url)) == "remote ✓"
    assert cache.get(url, Path("/elsewhere"), _not_found(url)) == "remote ✓"
    assert len(captured) == 1
    assert captured[0].full_url == url
    assert captured[0].get_header("User-agent") == "rustme"


def test_cache_maps_404_to_not_found(monkeypatch) -> None:
    url = "https://example.com/missing.md"

    def fake_urlopen(request):
        raise HTTPError(url, 404, "Not Found", {}, io.BytesIO(b""))

    monkeypatch.setattr(resources_module, "urlopen", fake_urlopen)
    with pytest.raises(SnippetNotFoundError):
        ResourceCache().get(url, Path("."), _not_found(url))


def test_cache_raises_http_error_for_other_failures(monkeypatch) -> None:
    url = "https://example.com/broken.md"

    def fake_urlopen(request):
        raise HTTPError(url, 500, "Server Error", {}, io.BytesIO(b""))

    monkeypatch.setattr(resources_module, "urlopen", fake_urlopen)
    with pytest.raises(HttpError) as excinfo:
        ResourceCache().get(url, Path("."), _not_found(url))
    assert excinfo.value.status == 500


def test_cache_raises_http_error_for_network_failures(monkeypatch) -> None:
    def fake_urlopen(request):
        raise URLError("connection refused")

    monkeypatch.setattr(resources_module, "urlopen", fake_urlopen)
    with pytest.raises(HttpError) as excinfo:
        ResourceCache().get("http://localhost:1/x", Path("."), _not_found("x"))
    assert excinfo.value.status is None
