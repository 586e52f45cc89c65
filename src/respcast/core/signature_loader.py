"""
Load function signatures from JSON files.

A signature file looks like::

    {
      "name": "get_posts",
      "json_key": "data.children",
      "poll_interval": 600000,
      "args": [
        {"name": "subreddit", "direction": "in", "type": "String"},
        {"name": "title", "type": "String", "json_key": "data.title"},
        {"name": "score", "type": "Number", "json_key": "data.score"}
      ]
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import SignatureError
from .ir.signatures import FunctionSignature

logger = logging.getLogger(__name__)


def signature_from_dict(data: Any) -> FunctionSignature:
    """Build a FunctionSignature from decoded JSON.

    Raises:
        SignatureError: If the data is not an object or fails validation.
        TypeSyntaxError: If an argument type string is malformed.
    """
    if not isinstance(data, dict):
        raise SignatureError(f"Signature must be a JSON object, got {type(data).__name__}")
    try:
        return FunctionSignature.model_validate(data)
    except ValidationError as e:
        raise SignatureError(f"Invalid signature: {e}") from e


def load_signature(path: Path) -> FunctionSignature:
    """Read and validate a signature file.

    Raises:
        SignatureError: If the file is not valid JSON or not a valid signature.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SignatureError(f"Invalid JSON in {path}: {e}") from e

    signature = signature_from_dict(data)
    logger.debug(
        "Loaded signature %r with %d argument(s) from %s",
        signature.name,
        len(signature.args),
        path,
    )
    return signature
