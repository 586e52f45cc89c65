"""
Placeholder formatting for URLs and user-visible strings.

Templates name values with ``${name}`` (or bare ``$name``); ``$$`` is a
literal dollar sign. Names resolve against call-specific parameters first
and fall back to device-level parameters when the call has no value (or
an empty one). Formatting never fails: an unresolved placeholder is kept
as written, or replaced with an empty string when configured so.

Examples:
    format_string("https://api.example.com/${user}/feed", {"user": "bob"})
        -> "https://api.example.com/bob/feed"
    format_string("${x}", {"x": "device"}, {"x": "call"})  -> "call"
    format_string("${y}", {"x": "device"})                 -> "${y}"
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from .config import MissingPlaceholder

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\$(?:(\$)|\{(\w+)\}|(\w+))")


def resolve_param(
    name: str,
    device_params: Mapping[str, Any],
    function_params: Mapping[str, Any] | None = None,
) -> Any:
    """Look a name up in the call scope, then the device scope.

    Returns None if neither scope has a usable value.
    """
    if function_params is not None:
        value = function_params.get(name)
        if value is not None and value != "":
            return value
    return device_params.get(name)


def format_string(
    template: str,
    device_params: Mapping[str, Any],
    function_params: Mapping[str, Any] | None = None,
    *,
    missing: MissingPlaceholder | str = MissingPlaceholder.KEEP,
) -> str:
    """Substitute placeholders in ``template``.

    Args:
        template: Text containing ``${name}`` / ``$name`` placeholders.
        device_params: Device-level values (e.g. persisted device state).
        function_params: Call-specific values; take precedence when set.
        missing: Policy for unresolved names, "keep" or "empty".

    Returns:
        The formatted string.
    """
    policy = MissingPlaceholder(missing)
    unresolved: list[str] = []

    def replacer(match: re.Match[str]) -> str:
        if match.group(1):
            return "$"
        name = match.group(2) or match.group(3)
        value = resolve_param(name, device_params, function_params)
        if value is None:
            unresolved.append(name)
            return match.group(0) if policy == MissingPlaceholder.KEEP else ""
        return _to_text(value)

    result = _PLACEHOLDER.sub(replacer, template)
    if unresolved:
        logger.debug("Unresolved placeholder(s) %s in %r", ", ".join(unresolved), template)
    return result


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
