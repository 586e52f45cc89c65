"""Shared pytest fixtures for respcast tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from respcast.core.ir import ArgDirection, ArgumentSpec, FunctionSignature, SemanticType, TypeKind


@pytest.fixture
def posts_signature() -> FunctionSignature:
    """Return a signature for a Reddit-style listing wrapped in an envelope."""
    return FunctionSignature(
        name="get_posts",
        source_path="data.children",
        poll_interval=600000,
        args=[
            ArgumentSpec(name="subreddit", direction=ArgDirection.IN, type="String"),
            ArgumentSpec(name="title", type="String", source_path="data.title"),
            ArgumentSpec(name="score", type="Number", source_path="data.score"),
            ArgumentSpec(name="created", type="Date", source_path="data.created_utc"),
            ArgumentSpec(name="author", type="Entity(tt:username)", source_path="data.author"),
        ],
    )


@pytest.fixture
def posts_response() -> dict[str, Any]:
    """Return a raw listing response matching ``posts_signature``."""
    return {
        "kind": "Listing",
        "data": {
            "children": [
                {
                    "data": {
                        "title": "First",
                        "score": "42",
                        "created_utc": 1700000000000,
                        "author": "alice",
                    }
                },
                {
                    "data": {
                        "title": "Second",
                        "score": 7,
                        "created_utc": "2024-03-01T12:00:00Z",
                    }
                },
            ]
        },
    }


@pytest.fixture
def number_type() -> SemanticType:
    return SemanticType(kind=TypeKind.NUMBER)


@pytest.fixture
def write_json(tmp_path: Path):
    """Return a helper that writes JSON text to a file under tmp_path."""
    def _write(name: str, data: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
