"""
Configuration for the respcast extraction engine.

Settings come from the ``[respcast]`` table of a ``respcast.toml`` manifest
and can be overridden per process with environment variables:

    RESPCAST_DEFAULT_CURRENCY     currency code for bare numbers (default "usd")
    RESPCAST_STRICT               "1"/"true" to reject mismatched values
    RESPCAST_PATH_CACHE_SIZE      parsed-path LRU size, 0 disables (default 256)
    RESPCAST_MISSING_PLACEHOLDER  "keep" or "empty" (default "keep")

Example respcast.toml:

    [respcast]
    default_currency = "eur"
    strict = false
    path_cache_size = 512
    missing_placeholder = "keep"
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from enum import StrEnum
from pathlib import Path
from typing import Any

from .errors import ConfigError
from .ir.values import DEFAULT_CURRENCY_UNIT

logger = logging.getLogger(__name__)

MANIFEST_NAME = "respcast.toml"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class MissingPlaceholder(StrEnum):
    """What the formatter leaves behind for an unresolved placeholder."""

    KEEP = "keep"  # leave the original ${name} token
    EMPTY = "empty"  # substitute an empty string


@dataclass(frozen=True)
class ExtractorConfig:
    """Engine settings.

    Attributes:
        default_currency_unit: Code applied to numbers/strings declared as Currency
        strict: Raise CoercionError instead of passing mismatched values through
        path_cache_size: Size of the per-extractor parsed path cache
        missing_placeholder: Formatter policy for unresolved names
    """

    default_currency_unit: str = DEFAULT_CURRENCY_UNIT
    strict: bool = False
    path_cache_size: int = 256
    missing_placeholder: MissingPlaceholder = MissingPlaceholder.KEEP


DEFAULT_CONFIG = ExtractorConfig()


def load_config(path: Path | None = None, environ: dict[str, str] | None = None) -> ExtractorConfig:
    """Load engine settings from a manifest and the environment.

    Args:
        path: Manifest path. When None, ``respcast.toml`` in the current
            directory is used if it exists.
        environ: Environment mapping (defaults to ``os.environ``).

    Returns:
        The resolved ExtractorConfig.

    Raises:
        ConfigError: If the manifest cannot be parsed or a value is invalid.
    """
    env = os.environ if environ is None else environ
    config = DEFAULT_CONFIG

    manifest = path if path is not None else Path.cwd() / MANIFEST_NAME
    if manifest.exists():
        config = _apply_manifest(config, manifest)
    elif path is not None:
        raise ConfigError(f"Config file not found: {path}")

    return _apply_environment(config, env)


def _apply_manifest(config: ExtractorConfig, manifest: Path) -> ExtractorConfig:
    try:
        data = tomllib.loads(manifest.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {manifest}: {e}") from e

    section: dict[str, Any] = data.get("respcast", {})
    if not isinstance(section, dict):
        raise ConfigError(f"[respcast] in {manifest} must be a table")

    logger.debug("Loaded respcast settings from %s", manifest)
    return replace(
        config,
        default_currency_unit=_currency(
            section.get("default_currency", config.default_currency_unit)
        ),
        strict=_boolean("strict", section.get("strict", config.strict)),
        path_cache_size=_cache_size(section.get("path_cache_size", config.path_cache_size)),
        missing_placeholder=_placeholder(
            section.get("missing_placeholder", config.missing_placeholder)
        ),
    )


def _apply_environment(config: ExtractorConfig, env: Any) -> ExtractorConfig:
    overrides: dict[str, Any] = {}
    if "RESPCAST_DEFAULT_CURRENCY" in env:
        overrides["default_currency_unit"] = _currency(env["RESPCAST_DEFAULT_CURRENCY"])
    if "RESPCAST_STRICT" in env:
        overrides["strict"] = _boolean("RESPCAST_STRICT", env["RESPCAST_STRICT"])
    if "RESPCAST_PATH_CACHE_SIZE" in env:
        overrides["path_cache_size"] = _cache_size(env["RESPCAST_PATH_CACHE_SIZE"])
    if "RESPCAST_MISSING_PLACEHOLDER" in env:
        overrides["missing_placeholder"] = _placeholder(env["RESPCAST_MISSING_PLACEHOLDER"])
    return replace(config, **overrides) if overrides else config


def _currency(value: Any) -> str:
    if not isinstance(value, str) or len(value) != 3 or not value.isalpha():
        raise ConfigError(f"Currency code must be three letters, got {value!r}")
    return value.lower()


def _boolean(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


def _cache_size(value: Any) -> int:
    try:
        size = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"path_cache_size must be an integer, got {value!r}") from e
    if size < 0:
        raise ConfigError(f"path_cache_size must be >= 0, got {size}")
    return size


def _placeholder(value: Any) -> MissingPlaceholder:
    try:
        return MissingPlaceholder(str(value).strip().lower())
    except ValueError as e:
        choices = ", ".join(m.value for m in MissingPlaceholder)
        raise ConfigError(f"missing_placeholder must be one of {choices}, got {value!r}") from e
