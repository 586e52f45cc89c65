"""URL classification helpers."""

from __future__ import annotations

import ipaddress
from urllib.parse import urlsplit

# Special-use names (RFC 6761, RFC 6762, RFC 7686) plus the common "localdomain"
_PRIVATE_SUFFIXES = frozenset({"local", "localhost", "localdomain", "invalid", "onion"})


def is_publicly_accessible(url: str) -> bool:
    """Whether another server on the internet could fetch ``url``.

    True only for http(s) URLs whose host is a public IP address or a
    multi-label DNS name outside the special-use suffixes. Single-label
    names resolve through the local search domain, so they count as private.
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    if parts.scheme not in ("http", "https"):
        return False

    host = parts.hostname
    if not host:
        return False

    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        address = None
    if address is not None:
        return address.is_global

    labels = host.rstrip(".").split(".")
    if len(labels) == 1:
        return False
    return labels[-1].lower() not in _PRIVATE_SUFFIXES
