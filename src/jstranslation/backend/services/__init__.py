"""Service-layer helpers for the JS translation backend."""

from __future__ import annotations

from jstranslation.backend.config.settings import Settings

from .config_cache import ConfigCache
from .controller import TranslationController
from .finder import TranslationFinder
from .loaders import LoaderError, MessageCatalogue, default_loaders
from .locales import select_locales
from .renderer import TemplateRenderer


def build_controller(settings: Settings) -> TranslationController:
    """Wire a controller with the finder, renderer and loaders for ``settings``."""

    controller = TranslationController(
        TranslationFinder(settings.translation_dirs),
        TemplateRenderer(),
        settings.cache_dir,
        debug=settings.debug,
        locale_fallback=settings.locale_fallback,
        default_domain=settings.default_domain,
        http_cache_time=settings.http_cache_time,
        default_locale=settings.default_locale,
    )
    for loader_id, loader in default_loaders().items():
        controller.add_loader(loader_id, loader)
    return controller


__all__ = [
    "ConfigCache",
    "LoaderError",
    "MessageCatalogue",
    "TemplateRenderer",
    "TranslationController",
    "TranslationFinder",
    "build_controller",
    "select_locales",
]
