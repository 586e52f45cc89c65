"""Tests for function signatures and the signature loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from respcast.core.errors import SignatureError, TypeSyntaxError
from respcast.core.ir import (
    ArgDirection,
    ArgumentSpec,
    FunctionSignature,
    TypeKind,
    get_poll_interval,
)
from respcast.core.signature_loader import load_signature, signature_from_dict


class TestArgumentSpec:
    def test_type_string_parsed(self) -> None:
        arg = ArgumentSpec(name="temp", type="Measure(C)")
        assert arg.type.kind == TypeKind.MEASURE
        assert arg.type.unit == "C"

    def test_json_key_alias(self) -> None:
        arg = ArgumentSpec.model_validate({"name": "t", "type": "String", "json_key": "a.b"})
        assert arg.source_path == "a.b"

    def test_defaults_to_output(self) -> None:
        arg = ArgumentSpec(name="t", type="String")
        assert arg.direction == ArgDirection.OUT
        assert not arg.is_input

    def test_bad_type_string(self) -> None:
        with pytest.raises(TypeSyntaxError):
            ArgumentSpec(name="t", type="Array(")


class TestFunctionSignature:
    def test_output_args_in_order(self, posts_signature: FunctionSignature) -> None:
        names = [arg.name for arg in posts_signature.output_args]
        assert names == ["title", "score", "created", "author"]

    def test_duplicate_names_rejected(self) -> None:
        with pytest.raises(SignatureError, match="Duplicate argument 'x'"):
            FunctionSignature(
                name="f",
                args=[
                    ArgumentSpec(name="x", type="String"),
                    ArgumentSpec(name="x", direction=ArgDirection.IN, type="Number"),
                ],
            )

    def test_get_argument(self, posts_signature: FunctionSignature) -> None:
        arg = posts_signature.get_argument("score")
        assert arg is not None
        assert arg.source_path == "data.score"
        assert posts_signature.get_argument("missing") is None

    def test_poll_interval(self, posts_signature: FunctionSignature) -> None:
        assert get_poll_interval(posts_signature) == 600000

    def test_no_poll_interval(self) -> None:
        assert get_poll_interval(FunctionSignature(name="f")) == -1

    def test_zero_poll_interval(self) -> None:
        assert get_poll_interval(FunctionSignature(name="f", poll_interval=0)) == 0


class TestSignatureLoader:
    def test_from_dict(self) -> None:
        sig = signature_from_dict(
            {
                "name": "get_weather",
                "json_key": "current",
                "args": [
                    {"name": "city", "direction": "in", "type": "String"},
                    {"name": "temp", "type": "Measure(C)", "json_key": "temp_c"},
                ],
            }
        )
        assert sig.source_path == "current"
        assert [a.name for a in sig.output_args] == ["temp"]

    def test_not_an_object(self) -> None:
        with pytest.raises(SignatureError):
            signature_from_dict(["name"])

    def test_validation_error_wrapped(self) -> None:
        with pytest.raises(SignatureError):
            signature_from_dict({"name": "f", "args": [{"name": "x"}]})

    def test_bad_direction_wrapped(self) -> None:
        with pytest.raises(SignatureError):
            signature_from_dict({"args": [{"name": "x", "type": "String", "direction": "up"}]})

    def test_load_file(self, write_json) -> None:
        path = write_json(
            "sig.json",
            {"name": "f", "poll_interval": 1000, "args": [{"name": "x", "type": "Number"}]},
        )
        sig = load_signature(path)
        assert sig.name == "f"
        assert get_poll_interval(sig) == 1000

    def test_load_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "sig.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SignatureError, match="Invalid JSON"):
            load_signature(path)
