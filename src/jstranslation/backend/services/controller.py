"""Assemble translation catalogues and serve them with HTTP caching headers."""

from __future__ import annotations

import hashlib
import logging
import re
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Sequence

from flask import Request, Response
from werkzeug.exceptions import NotFound

from .config_cache import ConfigCache
from .finder import TranslationFinder
from .loaders import Loader
from .locales import negotiate_request_locale, select_locales
from .renderer import SUPPORTED_FORMATS, TemplateRenderer

logger = logging.getLogger(__name__)

DOMAIN_PATTERN = re.compile(r"^\w+$")

MIMETYPES = {
    "js": "application/javascript",
    "json": "application/json",
}

TranslationTree = dict[str, dict[str, dict[str, str]]]


class TranslationController:
    """Expose per-domain catalogues for the requested locales."""

    def __init__(
        self,
        finder: TranslationFinder,
        renderer: TemplateRenderer,
        cache_dir: str | Path,
        debug: bool = False,
        locale_fallback: str = "",
        default_domain: str = "",
        http_cache_time: int = 86400,
        default_locale: str = "en",
    ) -> None:
        self.finder = finder
        self.renderer = renderer
        self.cache_dir = Path(cache_dir)
        self.debug = debug
        self.locale_fallback = locale_fallback
        self.default_domain = default_domain
        self.http_cache_time = http_cache_time
        self.default_locale = default_locale
        self.loaders: dict[str, Loader] = {}

    def add_loader(self, loader_id: str, loader: Loader) -> None:
        """Register ``loader`` for a file extension unless one already exists."""

        if loader_id not in self.loaders:
            self.loaders[loader_id] = loader

    def get_locales(self, request: Request) -> list[str]:
        request_locale = negotiate_request_locale(
            request.accept_languages,
            self.finder.locales(),
            self.default_locale,
        )
        return select_locales(request.args.get("locales"), request_locale)

    def collect_translations(
        self, domain: str, locales: Sequence[str]
    ) -> tuple[TranslationTree, list[Path]]:
        """Merge every loadable resource per locale for ``domain``.

        Files found later override keys from earlier ones. Resources whose
        extension has no registered loader are ignored.
        """

        translations: TranslationTree = {}
        resources: list[Path] = []

        for locale in locales:
            translations[locale] = {}

            files = self.finder.get(domain, locale)
            if not files:
                continue

            merged: dict[str, str] = {}
            for path in files:
                extension = path.suffix.lstrip(".")
                loader = self.loaders.get(extension)
                if loader is None:
                    logger.debug("No loader registered for %s, skipping", path)
                    continue

                resources.append(path)
                catalogue = loader.load(path, locale, domain)
                merged.update(catalogue.all(domain))

            translations[locale][domain] = merged

        return translations, resources

    def dump_translations(self, domain: str, locales: Sequence[str], fmt: str) -> ConfigCache:
        """Return the cache holding the rendered payload, rebuilding it if stale."""

        cache_path = self.cache_dir / f"{domain}.{'-'.join(locales)}.{fmt}"
        cache = ConfigCache(cache_path, self.debug)

        if not cache.is_fresh():
            logger.info("Regenerating translation cache %s", cache_path)
            translations, resources = self.collect_translations(domain, locales)
            content = self.renderer.render_translations(
                fmt,
                translations=translations,
                fallback=self.locale_fallback,
                default_domain=self.default_domain,
                include_config=True,
            )

            # Directories catch resource files added after this write.
            tracked = [*resources, *(path for path in self.finder.directories if path.is_dir())]
            try:
                cache.write(content, tracked)
            except OSError as exc:
                logger.error("Unable to write translation cache %s: %s", cache_path, exc)
                raise NotFound() from exc

        return cache

    def _validate(self, domain: str, fmt: str, locales: Sequence[str]) -> None:
        if not locales:
            raise NotFound("No valid locale requested")
        if fmt not in SUPPORTED_FORMATS:
            raise NotFound(f"Unsupported format: {fmt}")
        if not DOMAIN_PATTERN.match(domain):
            raise NotFound(f"Invalid domain: {domain}")

    def get_translations(self, request: Request, domain: str, fmt: str) -> Response:
        locales = self.get_locales(request)
        self._validate(domain, fmt, locales)

        content = self.dump_translations(domain, locales, fmt).read()

        response = Response(content, status=200, mimetype=MIMETYPES[fmt])
        response.cache_control.public = True
        response.set_etag(hashlib.md5(content.encode("utf-8"), usedforsecurity=False).hexdigest())
        response.expires = datetime.now(timezone.utc) + timedelta(seconds=self.http_cache_time)
        response.make_conditional(request)

        return response

    def get_multiple_translations(self, request: Request, domains: str, fmt: str) -> Response:
        locales = self.get_locales(request)
        bodies: list[str] = []
        for domain in domains.split(","):
            self._validate(domain, fmt, locales)
            bodies.append(self.dump_translations(domain, locales, fmt).read())

        return Response("".join(bodies), status=200, mimetype=MIMETYPES[fmt])


__all__ = ["DOMAIN_PATTERN", "MIMETYPES", "TranslationController"]
