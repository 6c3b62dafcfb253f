"""Run-scoped cache for local files and remote URLs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..errors import HttpError, InvalidUnicodeError, ResourceIOError
from ..logging import get_logger
from ..models import is_url

USER_AGENT = "rustme"


@dataclass(frozen=True)
class CacheKey:
    """Identifies a cached resource by kind ("path" or "url") and location."""

    kind: str
    value: str


class ResourceCache:
    """Memoizes the text of every section, snippet file and glossary read in a run.

    Entries are never invalidated: a run is short-lived and the filesystem and
    network are assumed stable while it lasts.
    """

    def __init__(self) -> None:
        self._entries: Dict[CacheKey, str] = {}
        self.logger = get_logger("cache")

    def get(
        self,
        resource: str,
        relative_to: Path,
        not_found: Callable[[], Exception],
    ) -> str:
        """Return the text of ``resource``, loading it on first use.

        ``resource`` is either an ``http(s)://`` URL or a path relative to
        ``relative_to``. A missing file or an HTTP 404 raises the exception built
        by ``not_found``; other failures raise :class:`ResourceIOError` or
        :class:`HttpError`.
        """
        key = self.key_for(resource, relative_to)
        cached = self._entries.get(key)
        if cached is not None:
            self.logger.debug("Cache hit for %s", key.value)
            return cached

        if key.kind == "url":
            contents = self._fetch_url(key.value, not_found)
        else:
            contents = self._read_path(Path(key.value), not_found)
        self._entries[key] = contents
        return contents

    @staticmethod
    def key_for(resource: str, relative_to: Path) -> CacheKey:
        if is_url(resource):
            return CacheKey("url", resource)
        return CacheKey("path", str((relative_to / resource).resolve()))

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    # ------------------------------------------------------------------
    # Internal helpers

    def _read_path(self, path: Path, not_found: Callable[[], Exception]) -> str:
        self.logger.debug("Reading %s", path)
        try:
            raw = path.read_bytes()
        except FileNotFoundError as exc:
            raise not_found() from exc
        except OSError as exc:
            raise ResourceIOError(str(path), exc.strerror or str(exc)) from exc
        return _decode(raw, str(path))

    def _fetch_url(self, url: str, not_found: Callable[[], Exception]) -> str:
        self.logger.info("Requesting %s", url)
        request = Request(url, headers={"User-Agent": USER_AGENT})
        try:
            with urlopen(request) as response:  # type: ignore[arg-type]
                raw = response.read()
        except HTTPError as exc:
            if exc.code == 404:
                raise not_found() from exc
            raise HttpError(url, str(exc.reason), exc.code) from exc
        except URLError as exc:
            raise HttpError(url, str(exc.reason)) from exc
        return _decode(raw, url)


def _decode(raw: bytes, location: str) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidUnicodeError(f"{location}: {exc}") from exc


__all__ = ["CacheKey", "ResourceCache", "USER_AGENT"]
