"""File loaders turning translation resources into message catalogues."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Protocol

import yaml
from babel.messages.pofile import PoFileError, read_po


class LoaderError(ValueError):
    """Raised when a translation resource cannot be parsed."""


class MessageCatalogue:
    """Messages for a single locale, grouped by domain."""

    def __init__(self, locale: str, messages: Mapping[str, Mapping[str, str]] | None = None):
        self.locale = locale
        self._messages: dict[str, dict[str, str]] = {}
        for domain, entries in (messages or {}).items():
            self.add(entries, domain)

    def add(self, messages: Mapping[str, str], domain: str = "messages") -> None:
        self._messages.setdefault(domain, {}).update(messages)

    def all(self, domain: str) -> dict[str, str]:
        return dict(self._messages.get(domain, {}))

    def domains(self) -> list[str]:
        return list(self._messages)

    def __repr__(self) -> str:
        return f"MessageCatalogue(locale={self.locale!r}, domains={self.domains()!r})"


class Loader(Protocol):
    def load(self, path: Path, locale: str, domain: str = "messages") -> MessageCatalogue:
        ...


def flatten_messages(tree: Mapping[Any, Any], prefix: str = "") -> dict[str, str]:
    """Collapse nested mappings into dot-separated message keys.

    List items are keyed by their index, so ``days: [Mon, Tue]`` becomes
    ``days.0`` and ``days.1``.
    """

    items: dict[str, str] = {}
    for key, value in tree.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, (list, tuple)):
            value = dict(enumerate(value))
        if isinstance(value, Mapping):
            items.update(flatten_messages(value, path))
        else:
            items[path] = "" if value is None else str(value)
    return items


class _MappingFileLoader:
    """Shared behaviour for formats that decode to a nested mapping."""

    def _parse(self, text: str) -> Any:
        raise NotImplementedError

    def load(self, path: Path, locale: str, domain: str = "messages") -> MessageCatalogue:
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise LoaderError(f"Unable to read {path}: {exc}") from exc

        data = self._parse(text) if text.strip() else {}
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise LoaderError(f"{path} must define a mapping at the top level")

        catalogue = MessageCatalogue(locale)
        catalogue.add(flatten_messages(data), domain)
        return catalogue


class JsonFileLoader(_MappingFileLoader):
    def _parse(self, text: str) -> Any:
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise LoaderError(f"Invalid JSON translation resource: {exc}") from exc


class YamlFileLoader(_MappingFileLoader):
    def _parse(self, text: str) -> Any:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise LoaderError(f"Invalid YAML translation resource: {exc}") from exc


class PoFileLoader:
    """Read gettext ``.po`` catalogues through Babel.

    Plural entries are keyed by their singular ``msgid`` and their forms are
    joined with ``|``. Fuzzy or untranslated entries are left out.
    """

    def load(self, path: Path, locale: str, domain: str = "messages") -> MessageCatalogue:
        path = Path(path)
        try:
            with path.open("rb") as handle:
                po_catalog = read_po(handle, abort_invalid=True)
        except OSError as exc:
            raise LoaderError(f"Unable to read {path}: {exc}") from exc
        except PoFileError as exc:
            raise LoaderError(f"Invalid PO translation resource {path}: {exc}") from exc

        messages: dict[str, str] = {}
        for message in po_catalog:
            if not message.id or message.fuzzy:
                continue
            if isinstance(message.id, (list, tuple)):
                key = message.id[0]
                forms = [form for form in message.string if form]
                if not forms:
                    continue
                messages[key] = "|".join(forms)
            elif message.string:
                messages[message.id] = message.string

        catalogue = MessageCatalogue(locale)
        catalogue.add(messages, domain)
        return catalogue


def default_loaders() -> dict[str, Loader]:
    """Return the loaders registered by the application, keyed by extension."""

    yaml_loader = YamlFileLoader()
    return {
        "json": JsonFileLoader(),
        "yaml": yaml_loader,
        "yml": yaml_loader,
        "po": PoFileLoader(),
    }


__all__ = [
    "JsonFileLoader",
    "Loader",
    "LoaderError",
    "MessageCatalogue",
    "PoFileLoader",
    "YamlFileLoader",
    "default_loaders",
    "flatten_messages",
]
