"""
Generic response extraction.

Turns a decoded JSON response into one normalized record per result,
driven only by a function signature:

    1. unwrap the envelope named by the signature's ``json_key``, if any
    2. treat a single object as a one-element sequence
    3. for each element, read every output argument (through its own
       ``json_key`` path, or by its name) and coerce it to the declared type

Every record has exactly the output argument names as keys; fields the
response did not carry come through as None.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from .coercion import coerce
from .config import DEFAULT_CONFIG, ExtractorConfig
from .errors import CoercionError, make_coercion_error, make_extraction_error
from .ir.signatures import ArgumentSpec, FunctionSignature
from .paths import PathCache, get_by_path

logger = logging.getLogger(__name__)

ExtractedRecord = dict[str, Any]


class ResponseExtractor:
    """Extract typed records from raw responses.

    Holds the engine settings and its own parsed-path cache, so repeated
    extractions against the same signature parse each ``json_key`` once.

    Args:
        config: Engine settings; defaults to permissive mode.
        cache: Path cache to use. A new cache sized from the config is
            created when omitted.
    """

    def __init__(
        self,
        config: ExtractorConfig | None = None,
        *,
        cache: PathCache | None = None,
    ) -> None:
        self._config = config or DEFAULT_CONFIG
        self._cache = cache if cache is not None else PathCache(self._config.path_cache_size)

    @property
    def config(self) -> ExtractorConfig:
        return self._config

    @property
    def cache(self) -> PathCache:
        return self._cache

    def extract(self, raw: Any, signature: FunctionSignature) -> list[ExtractedRecord]:
        """Extract one record per response element.

        Args:
            raw: Decoded JSON response (object or array of objects).
            signature: Signature describing the output arguments.

        Returns:
            List of records keyed by output argument name.

        Raises:
            ExtractionError: If the response (after envelope unwrapping) or
                one of its elements is None.
            CoercionError: In strict mode, if a value does not fit its type.
        """
        if signature.source_path:
            raw = get_by_path(raw, signature.source_path, self._cache)
            logger.debug(
                "Unwrapped envelope %r for %s",
                signature.source_path,
                signature.name or "<anonymous>",
            )

        if raw is None:
            where = f" at {signature.source_path!r}" if signature.source_path else ""
            raise make_extraction_error(
                f"Response{where} is null, expected an object or an array",
                function=signature.name or None,
            )

        elements = raw if _is_sequence(raw) else [raw]
        outputs = signature.output_args

        records = [
            self._extract_one(element, index, outputs, signature)
            for index, element in enumerate(elements)
        ]
        logger.debug(
            "Extracted %d record(s) with %d field(s) for %s",
            len(records),
            len(outputs),
            signature.name or "<anonymous>",
        )
        return records

    def _extract_one(
        self,
        element: Any,
        index: int,
        outputs: list[ArgumentSpec],
        signature: FunctionSignature,
    ) -> ExtractedRecord:
        if element is None:
            raise make_extraction_error(
                "Response element is null", function=signature.name or None, index=index
            )

        record: ExtractedRecord = {}
        for arg in outputs:
            if arg.source_path:
                raw_value = get_by_path(element, arg.source_path, self._cache)
            else:
                raw_value = get_by_path(element, (arg.name,))
            try:
                record[arg.name] = coerce(raw_value, arg.type, self._config)
            except CoercionError as e:
                raise make_coercion_error(
                    e.message,
                    function=signature.name or None,
                    argument=arg.name,
                    index=index,
                ) from e
        return record


def extract(
    raw: Any,
    signature: FunctionSignature,
    config: ExtractorConfig | None = None,
) -> list[ExtractedRecord]:
    """Extract records with a throwaway ResponseExtractor.

    Convenience wrapper for one-off calls; long-running callers should keep
    a ResponseExtractor so its path cache is reused.
    """
    return ResponseExtractor(config).extract(raw, signature)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))
