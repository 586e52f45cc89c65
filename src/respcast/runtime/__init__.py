"""
respcast runtime helpers that sit around the core: device labels, URL
classification, and the generic REST polling source.
"""

from .device_labels import DeviceLabels, default_unique_id, render_device_labels
from .rest_source import RestSource
from .urls import is_publicly_accessible

__all__ = [
    "DeviceLabels",
    "render_device_labels",
    "default_unique_id",
    "RestSource",
    "is_publicly_accessible",
]
