"""
Type-directed coercion of raw JSON values.

``coerce(value, type)`` converts a decoded JSON value into the shape its
declared semantic type calls for. Rules are tried in this order:

    Array      string        split on "," plus optional whitespace, coerce each piece
    Array      sequence      coerce each element
    Date       any           datetime from ISO/RFC text, epoch milliseconds, or date
    Number     string        permissive leading-numeric float parse (NaN if none)
    Measure    string        same as Number
    Currency   number        Currency(value, default unit)
    Currency   string        Currency(parsed float, default unit)
    Currency   {value,unit}  Currency(value, unit)
    Entity     string        EntityValue(value, display=None)
    Entity     {value,...}   EntityValue(value, display)
    Location   {x,y}         Location(latitude=y, longitude=x)  (screen axes)
    Location   {latitude,longitude}
    Location   {lat,lon}

Every other (type, value) pair passes through unchanged, including ``None``
and values whose declared type is not in the vocabulary. With
``ExtractorConfig(strict=True)`` the mismatches that would otherwise pass
through (or become NaN) raise CoercionError instead; ``None`` still passes
through in strict mode.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from datetime import UTC, date, datetime, time
from typing import Any

from dateutil import parser as date_parser
from pydantic import ValidationError

from .config import DEFAULT_CONFIG, ExtractorConfig
from .errors import CoercionError
from .ir.types import SemanticType, TypeKind
from .ir.values import Currency, EntityValue, Location

logger = logging.getLogger(__name__)

_LIST_SEPARATOR = re.compile(r",\s*")

# Longest numeric prefix, following the usual permissive float-parse rules
_FLOAT_PREFIX = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def coerce(value: Any, type_: SemanticType, config: ExtractorConfig | None = None) -> Any:
    """Coerce a raw value to its declared semantic type.

    Args:
        value: Decoded JSON value (None for an absent field).
        type_: Declared type of the argument.
        config: Engine settings; defaults to permissive mode with "usd".

    Returns:
        The coerced value, or the raw value when no rule applies.

    Raises:
        CoercionError: Only in strict mode, when the value cannot be
            converted to the declared type.
    """
    cfg = config or DEFAULT_CONFIG
    if value is None:
        return None

    kind = type_.kind

    if kind == TypeKind.ARRAY:
        return _coerce_array(value, type_, cfg)
    if kind == TypeKind.DATE:
        return _coerce_date(value, cfg)
    if type_.is_numeric and isinstance(value, str):
        return parse_number(value, strict=cfg.strict)
    if kind == TypeKind.CURRENCY:
        return _coerce_currency(value, cfg)
    if kind == TypeKind.ENTITY:
        return _coerce_entity(value, cfg)
    if kind == TypeKind.LOCATION:
        return _coerce_location(value, cfg)

    if cfg.strict:
        _check_primitive(value, type_)
    return value


def parse_number(text: str, *, strict: bool = False) -> float:
    """Parse the longest numeric prefix of ``text``.

    ``"12.5kg"`` gives 12.5, ``"  -3e2"`` gives -300.0, and text without a
    numeric prefix gives NaN. In strict mode the whole string (minus
    surrounding whitespace) must be numeric.
    """
    stripped = text.strip()
    match = _FLOAT_PREFIX.match(stripped)
    if match is None:
        if strict:
            raise CoercionError(f"Cannot parse {text!r} as a number")
        return math.nan
    if strict and match.end() != len(stripped):
        raise CoercionError(f"Trailing characters after number in {text!r}")
    return float(match.group(0))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _mismatch(value: Any, type_name: str, cfg: ExtractorConfig) -> Any:
    """Pass a mismatched value through, or reject it in strict mode."""
    if cfg.strict:
        logger.debug("Strict coercion rejected %r for %s", value, type_name)
        raise CoercionError(f"Cannot coerce {type(value).__name__} {value!r} to {type_name}")
    return value


def _coerce_array(value: Any, type_: SemanticType, cfg: ExtractorConfig) -> Any:
    if type_.elem is None:
        raise CoercionError("Array type has no element type")
    if isinstance(value, str):
        return [coerce(piece, type_.elem, cfg) for piece in _LIST_SEPARATOR.split(value)]
    if isinstance(value, (list, tuple)):
        return [coerce(item, type_.elem, cfg) for item in value]
    return _mismatch(value, str(type_), cfg)


def _coerce_date(value: Any, cfg: ExtractorConfig) -> Any:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    if isinstance(value, date):
        return datetime.combine(value, time(), tzinfo=UTC)
    if _is_number(value):
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return _mismatch(value, "Date", cfg)
    if isinstance(value, str):
        try:
            parsed = date_parser.parse(value)
        except (ValueError, OverflowError):
            return _mismatch(value, "Date", cfg)
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
    return _mismatch(value, "Date", cfg)


def _coerce_currency(value: Any, cfg: ExtractorConfig) -> Any:
    if _is_number(value):
        return Currency(value=value, code=cfg.default_currency_unit)
    if isinstance(value, str):
        amount = parse_number(value, strict=cfg.strict)
        return Currency(value=amount, code=cfg.default_currency_unit)
    if isinstance(value, Mapping) and "value" in value:
        amount = value["value"]
        if isinstance(amount, str):
            amount = parse_number(amount, strict=cfg.strict)
        unit = value.get("unit") or cfg.default_currency_unit
        try:
            return Currency(value=amount, code=unit)
        except ValidationError:
            return _mismatch(value, "Currency", cfg)
    return _mismatch(value, "Currency", cfg)


def _coerce_entity(value: Any, cfg: ExtractorConfig) -> Any:
    if isinstance(value, str):
        return EntityValue(value=value, display=None)
    if isinstance(value, Mapping) and "value" in value:
        display = value.get("display")
        try:
            return EntityValue(
                value=value["value"],
                display=str(display) if display is not None else None,
            )
        except ValidationError:
            return _mismatch(value, "Entity", cfg)
    return _mismatch(value, "Entity", cfg)


def _coerce_location(value: Any, cfg: ExtractorConfig) -> Any:
    if not isinstance(value, Mapping):
        return _mismatch(value, "Location", cfg)

    display = value.get("display")
    if "x" in value and "y" in value:
        latitude, longitude = value["y"], value["x"]
    elif "latitude" in value and "longitude" in value:
        latitude, longitude = value["latitude"], value["longitude"]
    elif "lat" in value and "lon" in value:
        latitude, longitude = value["lat"], value["lon"]
    else:
        return _mismatch(value, "Location", cfg)

    try:
        return Location(
            latitude=latitude,
            longitude=longitude,
            display=str(display) if display is not None else None,
        )
    except ValidationError:
        return _mismatch(value, "Location", cfg)


def _check_primitive(value: Any, type_: SemanticType) -> None:
    """Strict-mode check for values that reached the pass-through arm."""
    kind = type_.kind
    if kind == TypeKind.STRING and not isinstance(value, str):
        raise CoercionError(f"Expected String, got {type(value).__name__} {value!r}")
    if kind == TypeKind.BOOLEAN and not isinstance(value, bool):
        raise CoercionError(f"Expected Boolean, got {type(value).__name__} {value!r}")
    if type_.is_numeric and not _is_number(value):
        raise CoercionError(f"Expected {type_}, got {type(value).__name__} {value!r}")
