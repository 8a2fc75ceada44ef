"""Serve translation catalogues to client-side code."""

from __future__ import annotations

import re

from flask import Blueprint, Response, current_app, request
from werkzeug.exceptions import NotFound

from jstranslation.backend.services import TranslationController

blueprint = Blueprint("translations", __name__, url_prefix="/translations")

# ``messages``, ``messages.json`` or ``messages,validators.js``
_TARGET_PATTERN = re.compile(r"^(?P<domains>\w+(?:,\w+)*)(?:\.(?P<format>\w+))?$")
_DEFAULT_FORMAT = "js"


def _controller() -> TranslationController:
    return current_app.extensions["jstranslation"]["controller"]


@blueprint.get("")
def get_default_translations() -> Response:
    """Return the default domain as JavaScript."""

    controller = _controller()
    return controller.get_translations(request, controller.default_domain, _DEFAULT_FORMAT)


@blueprint.get("/<target>")
def get_translations(target: str) -> Response:
    """Return one domain, or several comma-separated domains concatenated."""

    match = _TARGET_PATTERN.match(target)
    if match is None:
        raise NotFound(f"Unknown translation resource: {target}")

    domains = match.group("domains")
    fmt = match.group("format") or _DEFAULT_FORMAT

    controller = _controller()
    if "," in domains:
        return controller.get_multiple_translations(request, domains, fmt)
    return controller.get_translations(request, domains, fmt)
