"""Resolve the locales a client asked for."""

from __future__ import annotations

import re
from typing import Iterable, Sequence

from werkzeug.datastructures import LanguageAccept

LOCALE_PATTERN = re.compile(r"^[a-z]{2}([-_][a-zA-Z]{2})?$")


def is_valid_locale(locale: str) -> bool:
    return LOCALE_PATTERN.match(locale) is not None


def select_locales(locales_param: str | None, request_locale: str) -> list[str]:
    """Return the validated, de-duplicated locales for a translation request.

    An explicit ``locales`` query value wins over the request locale. Entries
    are matched as received, so padded values such as ``" en"`` are dropped.
    """

    if locales_param is not None:
        candidates: Sequence[str] = locales_param.split(",")
    else:
        candidates = [request_locale]

    selected: list[str] = []
    for candidate in candidates:
        if not is_valid_locale(candidate):
            continue
        locale = candidate.strip()
        if locale not in selected:
            selected.append(locale)
    return selected


def negotiate_request_locale(
    accept_languages: LanguageAccept,
    available: Iterable[str],
    default: str,
) -> str:
    """Pick the best ``Accept-Language`` match among known locales."""

    # werkzeug compares language tags with '-' separators only.
    by_tag = {locale.replace("_", "-"): locale for locale in available}
    if not by_tag:
        return default

    match = accept_languages.best_match(list(by_tag))
    if match is None:
        return default
    return by_tag[match]


__all__ = [
    "LOCALE_PATTERN",
    "is_valid_locale",
    "negotiate_request_locale",
    "select_locales",
]
