"""
respcast - schema-driven extraction of typed records from JSON APIs.

Given a function signature (argument names, declared types, and optional
``json_key`` paths), respcast turns loosely structured API responses into
normalized records, and formats ``${name}`` URL templates from device and
call parameters.
"""

from __future__ import annotations

import re
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

# Re-export commonly used types for convenience
from .core import ir
from .core.errors import (
    CoercionError,
    ConfigError,
    ExtractionError,
    RespcastError,
    SignatureError,
    SourceError,
    TypeSyntaxError,
)


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    # In editable mode, read directly from pyproject.toml for live updates
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    # Fall back to installed metadata
    try:
        return _metadata_version("respcast")
    except Exception:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    "RespcastError",
    "TypeSyntaxError",
    "SignatureError",
    "CoercionError",
    "ExtractionError",
    "ConfigError",
    "SourceError",
]
