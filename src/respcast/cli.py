"""
respcast command line interface.

Commands:

- extract: run a signature over a JSON response and print the records
- format: resolve a ``${name}`` template from device and call parameters
- parse-path: show how a dotted property path splits into segments
- type: parse a declarative type string
"""

from __future__ import annotations

import json
import logging
import math
import sys
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any

import typer
from pydantic import BaseModel

from respcast import __version__
from respcast.core.config import load_config
from respcast.core.errors import RespcastError
from respcast.core.extractor import ResponseExtractor
from respcast.core.formatting import format_string
from respcast.core.paths import parse_path
from respcast.core.signature_loader import load_signature
from respcast.core.type_parser import parse_type

app = typer.Typer(
    help="respcast - extract typed records from JSON API responses",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"respcast {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
) -> None:
    """respcast CLI main callback for global options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


# =============================================================================
# Helpers
# =============================================================================


def _to_jsonable(value: Any) -> Any:
    """Convert records to plain JSON data; NaN and infinities become null."""
    if isinstance(value, BaseModel):
        return _to_jsonable(value.model_dump())
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    return value


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(_to_jsonable(data), indent=2, ensure_ascii=False, allow_nan=False))


def _parse_pairs(pairs: list[str] | None, option: str) -> dict[str, str]:
    result: dict[str, str] = {}
    for pair in pairs or []:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            typer.echo(f"Error: {option} expects NAME=VALUE, got {pair!r}", err=True)
            raise typer.Exit(code=1)
        result[name] = value
    return result


def _read_response(source: str) -> Any:
    try:
        text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    except OSError as e:
        typer.echo(f"Error: cannot read {source}: {e}", err=True)
        raise typer.Exit(code=1)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        typer.echo(f"Error: response is not valid JSON: {e}", err=True)
        raise typer.Exit(code=1)


# =============================================================================
# Commands
# =============================================================================


@app.command("extract")
def extract_command(
    response: str = typer.Argument(..., help="Response JSON file, or '-' for stdin"),
    signature: Path = typer.Option(
        ..., "--signature", "-s", help="Function signature JSON file"
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to respcast.toml (default: ./respcast.toml if present)"
    ),
    strict: bool = typer.Option(False, "--strict", help="Reject values that do not fit their type"),
) -> None:
    """
    Extract typed records from a JSON response and print them as JSON.
    """
    try:
        cfg = load_config(config)
        if strict:
            cfg = replace(cfg, strict=True)
        sig = load_signature(signature)
        raw = _read_response(response)
        records = ResponseExtractor(cfg).extract(raw, sig)
    except OSError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except RespcastError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    _echo_json(records)


@app.command("format")
def format_command(
    template: str = typer.Argument(..., help="Template with ${name} placeholders"),
    param: list[str] | None = typer.Option(
        None, "--param", "-p", help="Call parameter NAME=VALUE (repeatable)"
    ),
    device: list[str] | None = typer.Option(
        None, "--device", "-d", help="Device parameter NAME=VALUE (repeatable)"
    ),
    missing: str | None = typer.Option(
        None, "--missing", help="Unresolved placeholders: 'keep' or 'empty'"
    ),
) -> None:
    """
    Substitute placeholders; call parameters take precedence over device ones.
    """
    function_params = _parse_pairs(param, "--param")
    device_params = _parse_pairs(device, "--device")
    try:
        policy = missing if missing is not None else load_config().missing_placeholder
        typer.echo(format_string(template, device_params, function_params, missing=policy))
    except ValueError:
        typer.echo(f"Error: --missing must be 'keep' or 'empty', got {missing!r}", err=True)
        raise typer.Exit(code=1)
    except RespcastError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.command("parse-path")
def parse_path_command(
    path: str = typer.Argument(..., help="Dotted property path, e.g. 'data.items.0'"),
) -> None:
    """Print the segments of a property path as a JSON array."""
    _echo_json(list(parse_path(path)))


@app.command("type")
def type_command(
    type_string: str = typer.Argument(
        ..., metavar="TYPE", help="Type string, e.g. 'Array(Number)'"
    ),
) -> None:
    """Parse a type string and print its structure."""
    try:
        parsed = parse_type(type_string)
    except RespcastError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    _echo_json({"type": str(parsed), **parsed.model_dump(mode="json", exclude_none=True)})


def main() -> None:
    app(standalone_mode=True)


if __name__ == "__main__":
    main()
