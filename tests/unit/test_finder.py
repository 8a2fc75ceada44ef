"""Tests for translation resource discovery."""

from __future__ import annotations

from pathlib import Path

from jstranslation.backend.services.finder import ResourceFile, TranslationFinder


def test_get_returns_files_for_domain_and_locale(translations_dir: Path) -> None:
    finder = TranslationFinder([translations_dir])

    files = finder.get("messages", "en")

    assert [path.name for path in files] == [
        "messages.en.json",
        "messages.en.xliff",
        "messages.en.yaml",
    ]


def test_get_returns_empty_list_for_unknown_pair(translations_dir: Path) -> None:
    finder = TranslationFinder([translations_dir])

    assert finder.get("validators", "fr") == []


def test_locales_and_domains_are_discovered(translations_dir: Path) -> None:
    finder = TranslationFinder([translations_dir])

    assert finder.locales() == ["de", "en", "fr"]
    assert finder.domains() == ["messages", "validators"]
    assert all(path.name != "README.txt" for path in finder.all())


def test_directories_are_searched_in_order(tmp_path: Path) -> None:
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    second.joinpath("messages.en.yaml").write_text("a: 1\n", encoding="utf-8")
    first.joinpath("messages.en.yaml").write_text("a: 2\n", encoding="utf-8")

    finder = TranslationFinder([first, second, tmp_path / "missing"])

    assert finder.get("messages", "en") == [
        first / "messages.en.yaml",
        second / "messages.en.yaml",
    ]


def test_resource_file_rejects_unexpected_names() -> None:
    assert ResourceFile.from_path(Path("messages.yaml")) is None
    assert ResourceFile.from_path(Path("messages.english.yaml")) is None
    assert ResourceFile.from_path(Path("messages..yaml")) is None

    resource = ResourceFile.from_path(Path("validators.en_GB.json"))
    assert resource is not None
    assert (resource.domain, resource.locale, resource.extension) == (
        "validators",
        "en_GB",
        "json",
    )
