"""Tests for ${name} placeholder formatting."""

from __future__ import annotations

import pytest

from respcast.core.config import MissingPlaceholder
from respcast.core.formatting import format_string, resolve_param


class TestResolveParam:
    def test_function_scope_wins(self) -> None:
        assert resolve_param("x", {"x": "device"}, {"x": "call"}) == "call"

    def test_device_fallback(self) -> None:
        assert resolve_param("x", {"x": "device"}, {}) == "device"

    def test_empty_call_value_falls_back(self) -> None:
        assert resolve_param("x", {"x": "device"}, {"x": ""}) == "device"
        assert resolve_param("x", {"x": "device"}, {"x": None}) == "device"

    def test_zero_is_a_value(self) -> None:
        assert resolve_param("x", {"x": 5}, {"x": 0}) == 0

    def test_false_is_a_value(self) -> None:
        assert resolve_param("x", {"x": True}, {"x": False}) is False
        assert format_string("flag=${x}", {"x": True}, {"x": False}) == "flag=false"

    def test_unresolved(self) -> None:
        assert resolve_param("x", {}, None) is None


class TestFormatString:
    def test_url_template(self) -> None:
        result = format_string(
            "https://api.example.com/r/${subreddit}/hot.json?limit=${limit}",
            {"limit": 25},
            {"subreddit": "python"},
        )
        assert result == "https://api.example.com/r/python/hot.json?limit=25"

    def test_call_scope_overrides_device(self) -> None:
        assert format_string("${x}", {"x": "device"}, {"x": "call"}) == "call"

    def test_device_only(self) -> None:
        assert format_string("Hue Bridge at ${host}", {"host": "10.0.0.2"}) == (
            "Hue Bridge at 10.0.0.2"
        )

    def test_bare_dollar_name(self) -> None:
        assert format_string("$user/feed", {"user": "bob"}) == "bob/feed"

    def test_double_dollar_is_literal(self) -> None:
        assert format_string("cost: $$${amount}", {"amount": 5}) == "cost: $5"

    def test_lone_dollar_kept(self) -> None:
        assert format_string("5 $", {}) == "5 $"

    def test_missing_kept_by_default(self) -> None:
        assert format_string("a/${missing}/b", {}) == "a/${missing}/b"

    def test_missing_empty_policy(self) -> None:
        assert format_string("a/${missing}/b", {}, missing=MissingPlaceholder.EMPTY) == "a//b"
        assert format_string("a/${missing}/b", {}, missing="empty") == "a//b"

    def test_unknown_policy_rejected(self) -> None:
        with pytest.raises(ValueError):
            format_string("x", {}, missing="drop")

    def test_booleans_and_integral_floats(self) -> None:
        assert format_string("${a},${b},${c}", {"a": True, "b": 3.0, "c": 2.5}) == "true,3,2.5"

    def test_no_placeholders(self) -> None:
        assert format_string("plain text", {"x": 1}) == "plain text"
