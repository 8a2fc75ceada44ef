"""Tests for the file-backed translation cache."""

from __future__ import annotations

import json
import os
from pathlib import Path

from jstranslation.backend.services.config_cache import ConfigCache


def _touch(path: Path, mtime: float) -> None:
    os.utime(path, (mtime, mtime))


def test_missing_cache_is_stale(tmp_path: Path) -> None:
    assert not ConfigCache(tmp_path / "messages.en.js").is_fresh()
    assert not ConfigCache(tmp_path / "messages.en.js", debug=True).is_fresh()


def test_write_creates_content_and_metadata(tmp_path: Path) -> None:
    resource = tmp_path / "messages.en.yaml"
    resource.write_text("a: b\n", encoding="utf-8")
    cache = ConfigCache(tmp_path / "nested" / "messages.en.js", debug=True)

    cache.write("payload", [resource])

    assert cache.read() == "payload"
    assert json.loads(cache.meta_path.read_text(encoding="utf-8")) == [str(resource)]
    assert not list(cache.path.parent.glob(".messages.en.js.*"))


def test_existing_cache_is_fresh_outside_debug_mode(tmp_path: Path) -> None:
    resource = tmp_path / "messages.en.yaml"
    resource.write_text("a: b\n", encoding="utf-8")
    cache = ConfigCache(tmp_path / "messages.en.js", debug=False)
    cache.write("payload", [resource])

    _touch(cache.path, 1_000)
    _touch(resource, 2_000)

    assert cache.is_fresh()


def test_debug_cache_goes_stale_when_resource_changes(tmp_path: Path) -> None:
    resource = tmp_path / "messages.en.yaml"
    resource.write_text("a: b\n", encoding="utf-8")
    cache = ConfigCache(tmp_path / "messages.en.js", debug=True)
    cache.write("payload", [resource])

    _touch(resource, 1_000)
    _touch(cache.path, 2_000)
    assert cache.is_fresh()

    _touch(resource, 3_000)
    assert not cache.is_fresh()


def test_debug_cache_goes_stale_when_resource_is_removed(tmp_path: Path) -> None:
    resource = tmp_path / "messages.en.yaml"
    resource.write_text("a: b\n", encoding="utf-8")
    cache = ConfigCache(tmp_path / "messages.en.js", debug=True)
    cache.write("payload", [resource])

    resource.unlink()

    assert not cache.is_fresh()


def test_debug_cache_without_metadata_is_stale(tmp_path: Path) -> None:
    cache = ConfigCache(tmp_path / "messages.en.js", debug=True)
    cache.write("payload", [])
    cache.meta_path.unlink()

    assert not cache.is_fresh()


def test_debug_cache_with_corrupt_metadata_is_stale(tmp_path: Path) -> None:
    cache = ConfigCache(tmp_path / "messages.en.js", debug=True)
    cache.write("payload", [])
    cache.meta_path.write_text("{broken", encoding="utf-8")

    assert not cache.is_fresh()
