"""
User-visible device labels.

A device class declares name and description templates such as
``"Hue Bridge at ${host}"``; each configured instance renders them
against its own persisted state.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from respcast.core.formatting import format_string


@dataclass(frozen=True)
class DeviceLabels:
    """Rendered name and description of one device instance."""

    name: str | None
    description: str | None


def render_device_labels(
    name_template: str | None,
    description_template: str | None,
    state: Mapping[str, Any],
) -> DeviceLabels:
    """Render a device's name and description from its state.

    Empty or missing templates are returned unchanged.
    """
    name = format_string(name_template, state) if name_template else name_template
    description = (
        format_string(description_template, state) if description_template else description_template
    )
    return DeviceLabels(name=name, description=description)


def default_unique_id(
    kind: str,
    auth_type: str,
    params: Sequence[str],
    state: Mapping[str, Any],
) -> str | None:
    """Derive the default unique id of a device instance.

    - no authentication and no parameters: the class kind itself
    - no authentication with parameters: ``kind-p1:v1-p2:v2``
      (a parameter missing from the state, or None, renders as ``p1:``)
    - any other authentication: None, leaving the choice to the device store
    """
    if auth_type != "none":
        return None
    if not params:
        return kind
    pieces = []
    for param in params:
        value = state.get(param)
        pieces.append(f"{param}:" if value is None else f"{param}:{value}")
    return "-".join([kind, *pieces])
