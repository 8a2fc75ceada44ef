"""Service settings loaded from YAML and validated with pydantic."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

CONFIG_ENV = "JSTRANSLATION_CONFIG"
DEFAULT_TRANSLATIONS_DIRECTORY = Path(__file__).resolve().parents[2] / "translations"
DEFAULT_CACHE_DIRECTORY = Path(tempfile.gettempdir()) / "jstranslation-cache"


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class Settings(BaseModel):
    """Runtime options for the translation endpoints and the dump command."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    translation_dirs: tuple[Path, ...] = (DEFAULT_TRANSLATIONS_DIRECTORY,)
    cache_dir: Path = DEFAULT_CACHE_DIRECTORY
    debug: bool = False
    locale_fallback: str = "en"
    default_domain: str = "messages"
    default_locale: str = "en"
    http_cache_time: int = Field(default=86400, ge=0)
    active_locales: tuple[str, ...] = ()
    active_domains: tuple[str, ...] = ()
    allowed_origins: tuple[str, ...] = ()

    @field_validator("translation_dirs", mode="before")
    @classmethod
    def _coerce_directories(cls, value: Any) -> Any:
        if isinstance(value, (str, Path)):
            return (value,)
        return value

    @field_validator("default_domain")
    @classmethod
    def _validate_domain(cls, value: str) -> str:
        if not value or not value.replace("_", "").isalnum():
            raise ConfigurationError(f"Invalid default domain: {value!r}")
        return value


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as error:
            raise ConfigurationError(f"Invalid YAML in {path}: {error}") from error
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


def _resolve_paths(raw: dict[str, Any], base: Path) -> None:
    """Anchor relative directories on the configuration file location."""

    dirs = raw.get("translation_dirs")
    if isinstance(dirs, (str, Path)):
        dirs = [dirs]
    if isinstance(dirs, list):
        raw["translation_dirs"] = [base / Path(entry) for entry in dirs]

    cache_dir = raw.get("cache_dir")
    if isinstance(cache_dir, (str, Path)):
        raw["cache_dir"] = base / Path(cache_dir)


def _parse_bool(value: str, *, env: str) -> bool | None:
    lowered = value.strip().lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    logger.warning("Ignoring invalid value for %s: %s", env, value)
    return None


def _parse_non_negative_int(value: str, *, env: str) -> int | None:
    try:
        parsed = int(value)
    except ValueError:
        logger.warning("Ignoring invalid value for %s: %s", env, value)
        return None
    if parsed < 0:
        logger.warning("Ignoring negative value for %s: %s", env, value)
        return None
    return parsed


def _apply_environment(raw: dict[str, Any], environ: Mapping[str, str]) -> None:
    cache_dir = environ.get("JSTRANSLATION_CACHE_DIR")
    if cache_dir:
        raw["cache_dir"] = Path(cache_dir).expanduser()

    dirs = environ.get("JSTRANSLATION_TRANSLATION_DIRS")
    if dirs:
        raw["translation_dirs"] = [
            Path(entry).expanduser() for entry in dirs.split(os.pathsep) if entry.strip()
        ]

    debug = environ.get("JSTRANSLATION_DEBUG")
    if debug:
        parsed_debug = _parse_bool(debug, env="JSTRANSLATION_DEBUG")
        if parsed_debug is not None:
            raw["debug"] = parsed_debug

    cache_time = environ.get("JSTRANSLATION_HTTP_CACHE_TIME")
    if cache_time:
        parsed_time = _parse_non_negative_int(cache_time, env="JSTRANSLATION_HTTP_CACHE_TIME")
        if parsed_time is not None:
            raw["http_cache_time"] = parsed_time

    origins = environ.get("JSTRANSLATION_ALLOWED_ORIGINS")
    if origins:
        raw["allowed_origins"] = [
            origin.strip() for origin in origins.split(",") if origin.strip()
        ]


def load_settings(
    path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build settings from an optional YAML file and environment overrides."""

    env = os.environ if environ is None else environ
    raw: dict[str, Any] = {}

    config_path = path or env.get(CONFIG_ENV)
    if config_path:
        config_file = Path(config_path).expanduser()
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_file}")
        raw = _load_yaml(config_file)
        _resolve_paths(raw, config_file.resolve().parent)

    _apply_environment(raw, env)

    try:
        return Settings.model_validate(raw)
    except ValidationError as error:
        raise ConfigurationError(f"Settings validation failed: {error}") from error


__all__ = [
    "CONFIG_ENV",
    "ConfigurationError",
    "DEFAULT_CACHE_DIRECTORY",
    "DEFAULT_TRANSLATIONS_DIRECTORY",
    "Settings",
    "load_settings",
]
