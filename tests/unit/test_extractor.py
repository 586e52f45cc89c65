"""Tests for generic response extraction."""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import Any

import pytest

from respcast.core.config import ExtractorConfig
from respcast.core.errors import CoercionError, ExtractionError
from respcast.core.extractor import ResponseExtractor, extract
from respcast.core.ir import ArgDirection, ArgumentSpec, EntityValue, FunctionSignature
from respcast.core.paths import PathCache

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _signature(
    *args: tuple[str, str, str | None],
    name: str = "f",
    json_key: str | None = None,
) -> FunctionSignature:
    return FunctionSignature(
        name=name,
        source_path=json_key,
        args=[ArgumentSpec(name=n, type=t, source_path=p) for n, t, p in args],
    )


# ---------------------------------------------------------------------------
# Shape
# ---------------------------------------------------------------------------


class TestShape:
    def test_single_object_wrapped(self) -> None:
        sig = _signature(("temp", "Number", None))
        assert extract({"temp": "21"}, sig) == [{"temp": 21.0}]

    def test_array_response(self) -> None:
        sig = _signature(("id", "String", None))
        assert extract([{"id": "a"}, {"id": "b"}], sig) == [{"id": "a"}, {"id": "b"}]

    def test_empty_array(self) -> None:
        assert extract([], _signature(("id", "String", None))) == []

    def test_records_have_exactly_output_names(self) -> None:
        sig = FunctionSignature(
            name="f",
            args=[
                ArgumentSpec(name="q", direction=ArgDirection.IN, type="String"),
                ArgumentSpec(name="a", type="String"),
                ArgumentSpec(name="b", type="Number"),
            ],
        )
        records = extract([{"a": "x", "q": "ignored", "extra": 1}, {}], sig)
        assert [set(r) for r in records] == [{"a", "b"}, {"a", "b"}]
        assert records[1] == {"a": None, "b": None}

    def test_no_output_args(self) -> None:
        assert extract([{"a": 1}, {"a": 2}], FunctionSignature(name="f")) == [{}, {}]


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


class TestPaths:
    def test_envelope_and_argument_paths(
        self, posts_signature: FunctionSignature, posts_response: dict[str, Any]
    ) -> None:
        records = extract(posts_response, posts_signature)
        assert len(records) == 2
        first, second = records
        assert first["title"] == "First"
        assert first["score"] == 42.0
        assert first["created"] == datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)
        assert first["author"] == EntityValue(value="alice")
        assert second["score"] == 7
        assert second["created"] == datetime(2024, 3, 1, 12, 0, tzinfo=UTC)
        assert second["author"] is None

    def test_escaped_key(self) -> None:
        sig = _signature(("v", "Number", "stats.avg\\.temp"))
        assert extract({"stats": {"avg.temp": "3.5"}}, sig) == [{"v": 3.5}]

    def test_indexed_path(self) -> None:
        sig = _signature(("first", "String", "tags.0"))
        assert extract({"tags": ["a", "b"]}, sig) == [{"first": "a"}]

    def test_envelope_holding_single_object(self) -> None:
        sig = _signature(("temp", "Number", None), json_key="current")
        assert extract({"current": {"temp": 5}}, sig) == [{"temp": 5}]

    def test_nan_for_garbage_number(self) -> None:
        sig = _signature(("n", "Number", None))
        assert math.isnan(extract({"n": "n/a"}, sig)[0]["n"])


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    def test_none_response(self) -> None:
        with pytest.raises(ExtractionError):
            extract(None, _signature(("a", "String", None)))

    def test_missing_envelope(self) -> None:
        sig = _signature(("a", "String", None), name="get_posts", json_key="data.children")
        with pytest.raises(ExtractionError, match="data.children") as excinfo:
            extract({"data": {}}, sig)
        assert "function get_posts" in str(excinfo.value)

    def test_none_element(self) -> None:
        with pytest.raises(ExtractionError) as excinfo:
            extract([{"a": "x"}, None], _signature(("a", "String", None)))
        assert excinfo.value.context is not None
        assert excinfo.value.context.index == 1

    def test_strict_error_has_context(self) -> None:
        extractor = ResponseExtractor(ExtractorConfig(strict=True))
        sig = _signature(("price", "Number", None), name="get_price")
        with pytest.raises(CoercionError) as excinfo:
            extractor.extract([{"price": 1}, {"price": "cheap"}], sig)
        context = excinfo.value.context
        assert context is not None
        assert context.function == "get_price"
        assert context.argument == "price"
        assert context.index == 1
        assert "argument price" in str(excinfo.value)

    def test_strict_allows_missing_fields(self) -> None:
        extractor = ResponseExtractor(ExtractorConfig(strict=True))
        assert extractor.extract({}, _signature(("a", "Number", None))) == [{"a": None}]


# ---------------------------------------------------------------------------
# Extractor object
# ---------------------------------------------------------------------------


class TestResponseExtractor:
    def test_cache_reused_across_calls(
        self, posts_signature: FunctionSignature, posts_response: dict[str, Any]
    ) -> None:
        extractor = ResponseExtractor()
        extractor.extract(posts_response, posts_signature)
        misses = extractor.cache.misses
        extractor.extract(posts_response, posts_signature)
        assert extractor.cache.misses == misses
        assert extractor.cache.hits > 0

    def test_cache_sized_from_config(self) -> None:
        extractor = ResponseExtractor(ExtractorConfig(path_cache_size=3))
        assert extractor.cache.maxsize == 3

    def test_explicit_cache(self) -> None:
        cache = PathCache(maxsize=10)
        extractor = ResponseExtractor(cache=cache)
        extractor.extract({"a": {"b": 1}}, _signature(("x", "Number", "a.b")))
        assert "a.b" in cache

    def test_config_currency_applied(self) -> None:
        extractor = ResponseExtractor(ExtractorConfig(default_currency_unit="eur"))
        records = extractor.extract({"p": 2}, _signature(("p", "Currency", None)))
        assert records[0]["p"].code == "eur"
