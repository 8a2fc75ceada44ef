"""Locate translation resource files on disk."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from .locales import is_valid_locale

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceFile:
    """A translation resource named ``<domain>.<locale>.<extension>``."""

    path: Path
    domain: str
    locale: str
    extension: str

    @classmethod
    def from_path(cls, path: Path) -> ResourceFile | None:
        parts = path.name.split(".")
        if len(parts) != 3 or not all(parts):
            return None
        domain, locale, extension = parts
        if not is_valid_locale(locale):
            return None
        return cls(path=path, domain=domain, locale=locale, extension=extension)


class TranslationFinder:
    """Scan configured directories for translation resources."""

    def __init__(self, directories: Iterable[str | Path]) -> None:
        self.directories = tuple(Path(directory) for directory in directories)

    def _iter_resources(self) -> Iterator[ResourceFile]:
        for directory in self.directories:
            if not directory.is_dir():
                logger.debug("Skipping missing translation directory %s", directory)
                continue
            for path in sorted(directory.iterdir()):
                if not path.is_file():
                    continue
                resource = ResourceFile.from_path(path)
                if resource is not None:
                    yield resource

    def get(self, domain: str, locale: str) -> list[Path]:
        """Return the resource files for a domain/locale pair."""

        return [
            resource.path
            for resource in self._iter_resources()
            if resource.domain == domain and resource.locale == locale
        ]

    def all(self) -> list[Path]:
        return [resource.path for resource in self._iter_resources()]

    def locales(self) -> list[str]:
        return sorted({resource.locale for resource in self._iter_resources()})

    def domains(self) -> list[str]:
        return sorted({resource.domain for resource in self._iter_resources()})


__all__ = ["ResourceFile", "TranslationFinder"]
