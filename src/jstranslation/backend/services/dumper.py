"""Export translation catalogues as static files for front-end bundling."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Iterable, Sequence

from jstranslation.backend.config.settings import ConfigurationError, Settings, load_settings

from . import build_controller
from .controller import TranslationController
from .loaders import LoaderError
from .renderer import SUPPORTED_FORMATS

logger = logging.getLogger(__name__)


def _filter_active(discovered: Iterable[str], active: Sequence[str]) -> list[str]:
    values = list(discovered)
    if not active:
        return values
    return [value for value in values if value in active]


class TranslationDumper:
    """Write ``config`` and per-domain/locale payloads under ``<target>/translations``."""

    def __init__(self, controller: TranslationController, settings: Settings) -> None:
        self.controller = controller
        self.settings = settings

    def domains(self) -> list[str]:
        return _filter_active(self.controller.finder.domains(), self.settings.active_domains)

    def locales(self) -> list[str]:
        return _filter_active(self.controller.finder.locales(), self.settings.active_locales)

    def _write(self, path: Path, content: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        logger.debug("Wrote %s", path)
        return path

    def dump(
        self,
        target: str | Path,
        formats: Sequence[str] = SUPPORTED_FORMATS,
        *,
        merge_domains: bool = False,
    ) -> list[Path]:
        root = Path(target) / "translations"
        renderer = self.controller.renderer
        written: list[Path] = []

        for fmt in formats:
            written.append(
                self._write(
                    root / f"config.{fmt}",
                    renderer.render_config(
                        fmt,
                        fallback=self.settings.locale_fallback,
                        default_domain=self.settings.default_domain,
                    ),
                )
            )

            if merge_domains:
                written.extend(self._dump_merged(root, fmt))
            else:
                written.extend(self._dump_per_domain(root, fmt))

        return written

    def _render(self, fmt: str, translations) -> str:
        return self.controller.renderer.render_translations(
            fmt,
            translations=translations,
            fallback=self.settings.locale_fallback,
            default_domain=self.settings.default_domain,
            include_config=False,
        )

    def _dump_per_domain(self, root: Path, fmt: str) -> list[Path]:
        written: list[Path] = []
        for domain in self.domains():
            for locale in self.locales():
                translations, resources = self.controller.collect_translations(domain, [locale])
                if not resources:
                    continue
                written.append(
                    self._write(root / domain / f"{locale}.{fmt}", self._render(fmt, translations))
                )
        return written

    def _dump_merged(self, root: Path, fmt: str) -> list[Path]:
        written: list[Path] = []
        for locale in self.locales():
            merged: dict[str, dict[str, str]] = {}
            for domain in self.domains():
                translations, resources = self.controller.collect_translations(domain, [locale])
                if resources:
                    merged.update(translations[locale])
            if not merged:
                continue
            written.append(
                self._write(root / f"{locale}.{fmt}", self._render(fmt, {locale: merged}))
            )
        return written


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Dump translation catalogues as static JS/JSON files."
    )
    parser.add_argument("target", help="Directory that receives the translations/ folder")
    parser.add_argument(
        "--format",
        dest="formats",
        action="append",
        choices=SUPPORTED_FORMATS,
        help="Output format (repeatable, defaults to every supported format)",
    )
    parser.add_argument(
        "--merge-domains",
        action="store_true",
        help="Write one file per locale containing every domain",
    )
    parser.add_argument("--config", help="Path to a YAML settings file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``jstranslation-dump`` command."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        settings = load_settings(args.config)
    except (ConfigurationError, FileNotFoundError) as error:
        print(f"failed to load settings: {error}")
        return 1

    dumper = TranslationDumper(build_controller(settings), settings)

    try:
        written = dumper.dump(
            args.target,
            args.formats or SUPPORTED_FORMATS,
            merge_domains=args.merge_domains,
        )
    except (LoaderError, OSError) as error:
        print(f"failed to dump translations: {error}")
        return 1

    for path in written:
        print(f"Created {path}")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
