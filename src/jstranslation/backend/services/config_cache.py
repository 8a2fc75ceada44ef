"""File-backed cache whose freshness follows its source resources."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)


class ConfigCache:
    """Cache a rendered payload on disk alongside the resources it came from.

    Outside debug mode an existing cache file is always considered fresh. In
    debug mode the ``.meta`` sidecar lists the resource files and the cache is
    stale as soon as one of them is missing or newer than the cache file.
    """

    def __init__(self, path: str | Path, debug: bool = False) -> None:
        self.path = Path(path)
        self.debug = debug

    @property
    def meta_path(self) -> Path:
        return self.path.with_name(self.path.name + ".meta")

    def is_fresh(self) -> bool:
        if not self.path.is_file():
            return False

        if not self.debug:
            return True

        if not self.meta_path.is_file():
            return False

        try:
            resources = json.loads(self.meta_path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Discarding unreadable cache metadata %s", self.meta_path)
            return False

        if not isinstance(resources, list):
            return False

        timestamp = self.path.stat().st_mtime
        for resource in resources:
            resource_path = Path(str(resource))
            if not resource_path.exists():
                return False
            if resource_path.stat().st_mtime > timestamp:
                return False
        return True

    def write(self, content: str, resources: Iterable[str | Path] = ()) -> None:
        """Persist ``content`` and the resource list atomically."""

        self.path.parent.mkdir(parents=True, exist_ok=True)
        _dump_atomic(self.path, content)
        metadata = json.dumps([str(Path(resource)) for resource in resources])
        _dump_atomic(self.meta_path, metadata)

    def read(self) -> str:
        return self.path.read_text(encoding="utf-8")


def _dump_atomic(path: Path, content: str) -> None:
    handle, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
    try:
        with os.fdopen(handle, "w", encoding="utf-8") as stream:
            stream.write(content)
        os.replace(temp_name, path)
    except OSError:
        if os.path.exists(temp_name):
            os.unlink(temp_name)
        raise


__all__ = ["ConfigCache"]
