"""Jinja2 rendering of translation payloads for client-side consumers."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from jinja2 import Environment, FileSystemLoader, StrictUndefined

TEMPLATES_DIRECTORY = Path(__file__).resolve().parent / "templates"
SUPPORTED_FORMATS = ("js", "json")

Translations = Mapping[str, Mapping[str, Mapping[str, str]]]


class UnsupportedFormatError(ValueError):
    """Raised when an output format has no template."""


class TemplateRenderer:
    """Render ``translations.<format>`` and ``config.<format>`` templates."""

    def __init__(self, directory: str | Path = TEMPLATES_DIRECTORY) -> None:
        self.environment = Environment(
            loader=FileSystemLoader(str(directory)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        # Keep locale and message order as assembled.
        self.environment.policies["json.dumps_kwargs"] = {"sort_keys": False}

    def _template(self, name: str, fmt: str):
        if fmt not in SUPPORTED_FORMATS:
            raise UnsupportedFormatError(f"Unsupported translation format: {fmt}")
        return self.environment.get_template(f"{name}.{fmt}.j2")

    def render_translations(
        self,
        fmt: str,
        *,
        translations: Translations,
        fallback: str,
        default_domain: str,
        include_config: bool = True,
    ) -> str:
        context: dict[str, Any] = {
            "translations": translations,
            "fallback": fallback,
            "default_domain": default_domain,
            "include_config": include_config,
        }
        return self._template("translations", fmt).render(**context)

    def render_config(self, fmt: str, *, fallback: str, default_domain: str) -> str:
        return self._template("config", fmt).render(
            fallback=fallback,
            default_domain=default_domain,
        )


__all__ = [
    "SUPPORTED_FORMATS",
    "TEMPLATES_DIRECTORY",
    "TemplateRenderer",
    "Translations",
    "UnsupportedFormatError",
]
