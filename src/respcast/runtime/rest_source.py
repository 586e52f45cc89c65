"""Generic REST query source.

Fetches a JSON API described only by a URL template and a function
signature, and turns each response into typed records.

Data flow::

    url_template + device/function params → format_string
        → GET via httpx (caller-owned AsyncClient)
        → decode JSON
        → ResponseExtractor.extract(response, signature)

``poll()`` repeats this every ``poll_interval`` of the signature. A failed
tick is logged and skipped; the loop keeps going. There is no retry or
backoff inside a tick.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Mapping
from typing import Any

import httpx

from respcast.core.errors import RespcastError, SourceError
from respcast.core.extractor import ExtractedRecord, ResponseExtractor
from respcast.core.formatting import format_string
from respcast.core.ir.signatures import FunctionSignature, get_poll_interval

logger = logging.getLogger(__name__)

_DEFAULT_USER_AGENT = "respcast"


class RestSource:
    """A monitorable query backed by an HTTP JSON endpoint.

    Args:
        url_template: URL with ``${name}`` placeholders.
        signature: Signature of the query's output.
        device_params: Device state used for placeholders (and the OAuth token).
        client: HTTP client; the caller owns its lifecycle.
        extractor: Extractor to use; a default one is created when omitted.
        user_agent: Value of the User-Agent header.
        use_oauth2: Send ``Authorization: Bearer <accessToken>`` from device state.
        headers: Extra request headers.
    """

    def __init__(
        self,
        url_template: str,
        signature: FunctionSignature,
        device_params: Mapping[str, Any],
        *,
        client: httpx.AsyncClient,
        extractor: ResponseExtractor | None = None,
        user_agent: str | None = None,
        use_oauth2: bool = False,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.url_template = url_template
        self.signature = signature
        self.device_params = device_params
        self._client = client
        self._extractor = extractor or ResponseExtractor()
        self._user_agent = user_agent or _DEFAULT_USER_AGENT
        self._use_oauth2 = use_oauth2
        self._headers = dict(headers or {})

    def build_url(self, function_params: Mapping[str, Any] | None = None) -> str:
        """Resolve the URL template for one call."""
        return format_string(
            self.url_template,
            self.device_params,
            function_params,
            missing=self._extractor.config.missing_placeholder,
        )

    def build_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json", "User-Agent": self._user_agent}
        if self._use_oauth2:
            token = self.device_params.get("accessToken")
            if token:
                headers["Authorization"] = f"Bearer {token}"
            else:
                logger.warning(
                    "OAuth2 requested for %s but device has no access token",
                    self.signature.name,
                )
        headers.update(self._headers)
        return headers

    async def fetch(
        self, function_params: Mapping[str, Any] | None = None
    ) -> list[ExtractedRecord]:
        """Perform one GET and extract its records.

        Raises:
            SourceError: On a non-2xx status or a body that is not JSON.
            ExtractionError: If the decoded body has no records to iterate.
            httpx.HTTPError: On transport failures.
        """
        url = self.build_url(function_params)
        response = await self._client.get(url, headers=self.build_headers())

        if not response.is_success:
            raise SourceError(
                f"GET {url} returned {response.status_code}: {response.text[:200]}"
            )
        try:
            payload = response.json()
        except ValueError as e:
            raise SourceError(f"GET {url} did not return JSON: {e}") from e

        return self._extractor.extract(payload, self.signature)

    async def poll(
        self,
        function_params: Mapping[str, Any] | None = None,
        *,
        interval_ms: int | None = None,
    ) -> AsyncIterator[list[ExtractedRecord]]:
        """Yield the extracted records of each successful tick, forever.

        Args:
            function_params: Call parameters used for every tick.
            interval_ms: Override of the signature's poll interval.

        Raises:
            SourceError: If no interval is given and the signature is not polled.
        """
        interval = interval_ms if interval_ms is not None else get_poll_interval(self.signature)
        if interval < 0:
            raise SourceError(f"Function '{self.signature.name}' has no poll interval")

        while True:
            try:
                records = await self.fetch(function_params)
            except (RespcastError, httpx.HTTPError) as e:
                logger.warning(
                    "Error reading from upstream server for %s: %s", self.signature.name, e
                )
            else:
                yield records
            await asyncio.sleep(interval / 1000)
