"""
Accessors for configuration mixin arguments.

Two deliberately different lookups over the same ordered parameter list:
``get_mixin_args`` builds the full mapping, so a repeated name keeps its
last value; ``find_mixin_arg`` scans in declaration order and returns the
first match.
"""

from __future__ import annotations

from typing import Any

from .ir.mixins import MixinInvocation


def get_mixin_args(mixin: MixinInvocation) -> dict[str, Any]:
    """Evaluate every parameter to a native value, keyed by name (last write wins)."""
    args: dict[str, Any] = {}
    for param in mixin.in_params:
        args[param.name] = param.value.to_native()
    return args


def find_mixin_arg(mixin: MixinInvocation, name: str) -> Any:
    """Return the first parameter named ``name`` evaluated to a native value, or None."""
    for param in mixin.in_params:
        if param.name == name:
            return param.value.to_native()
    return None
