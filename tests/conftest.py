"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from jstranslation.backend.app import create_app  # noqa: E402
from jstranslation.backend.config.settings import Settings  # noqa: E402

MESSAGES_EN_YAML = """\
greeting: Hello
navigation:
  home: Home
"""

MESSAGES_EN_JSON = """\
{"farewell": "Goodbye", "greeting": "Hi there"}
"""

MESSAGES_FR_YAML = """\
greeting: Bonjour
navigation:
  home: Accueil
"""

VALIDATORS_EN_JSON = """\
{"required": "This value should not be blank."}
"""

MESSAGES_DE_PO = """\
msgid ""
msgstr ""
"Content-Type: text/plain; charset=UTF-8\\n"

msgid "greeting"
msgstr "Hallo"

#, fuzzy
msgid "farewell"
msgstr "Tschuess"

msgid "apple"
msgid_plural "apples"
msgstr[0] "Apfel"
msgstr[1] "Aepfel"

msgid "untranslated"
msgstr ""
"""


@pytest.fixture()
def translations_dir(tmp_path: Path) -> Path:
    """Create a directory of resource files covering every loader."""

    directory = tmp_path / "translations"
    directory.mkdir()
    directory.joinpath("messages.en.yaml").write_text(MESSAGES_EN_YAML, encoding="utf-8")
    directory.joinpath("messages.en.json").write_text(MESSAGES_EN_JSON, encoding="utf-8")
    directory.joinpath("messages.fr.yaml").write_text(MESSAGES_FR_YAML, encoding="utf-8")
    directory.joinpath("messages.de.po").write_text(MESSAGES_DE_PO, encoding="utf-8")
    directory.joinpath("validators.en.json").write_text(VALIDATORS_EN_JSON, encoding="utf-8")
    directory.joinpath("messages.en.xliff").write_text("<xliff/>", encoding="utf-8")
    directory.joinpath("README.txt").write_text("not a resource", encoding="utf-8")
    return directory


@pytest.fixture()
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "cache"


@pytest.fixture()
def settings(translations_dir: Path, cache_dir: Path) -> Settings:
    return Settings(
        translation_dirs=(translations_dir,),
        cache_dir=cache_dir,
        debug=True,
        locale_fallback="en",
        default_domain="messages",
        http_cache_time=3600,
    )


@pytest.fixture()
def app(settings: Settings) -> Flask:
    """Return a configured Flask application for integration tests."""

    application = create_app(settings)
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()
