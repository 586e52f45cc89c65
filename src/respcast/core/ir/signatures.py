"""
Function signature types for respcast IR.

A signature is the declarative description of one upstream API call:
its ordered arguments, their directions and declared types, and the
optional ``json_key`` annotations telling the extractor where in the raw
response a value lives.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from ..errors import SignatureError
from .types import SemanticType


class ArgDirection(StrEnum):
    """Direction of a function argument."""

    IN = "in"
    OUT = "out"


class ArgumentSpec(BaseModel):
    """
    Specification for a single function argument.

    Attributes:
        name: Argument identifier, unique within the signature
        direction: Input arguments are skipped by the extractor
        type: Declared semantic type (a type string is parsed on load)
        source_path: Dotted path into each response element (``json_key``)
    """

    name: str
    direction: ArgDirection = ArgDirection.OUT
    type: SemanticType
    source_path: str | None = Field(
        default=None, validation_alias=AliasChoices("source_path", "json_key")
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("type", mode="before")
    @classmethod
    def parse_type_string(cls, v: Any) -> Any:
        """Accept declarative type strings such as ``Array(Number)``."""
        if isinstance(v, str):
            from ..type_parser import parse_type

            return parse_type(v)
        return v

    @property
    def is_input(self) -> bool:
        return self.direction == ArgDirection.IN


class FunctionSignature(BaseModel):
    """
    Resolved signature of a query function.

    Attributes:
        name: Function identifier, used in error context and logs
        args: Ordered argument specifications
        source_path: Envelope path unwrapped before extraction (``json_key``)
        poll_interval: Polling interval in milliseconds for monitorable queries
    """

    name: str = ""
    args: list[ArgumentSpec] = Field(default_factory=list)
    source_path: str | None = Field(
        default=None, validation_alias=AliasChoices("source_path", "json_key")
    )
    poll_interval: int | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="after")
    def validate_unique_names(self) -> FunctionSignature:
        seen: set[str] = set()
        for arg in self.args:
            if arg.name in seen:
                raise SignatureError(
                    f"Duplicate argument '{arg.name}' in function '{self.name or '<anonymous>'}'"
                )
            seen.add(arg.name)
        return self

    @property
    def output_args(self) -> list[ArgumentSpec]:
        """Output-direction arguments in declaration order."""
        return [arg for arg in self.args if not arg.is_input]

    def get_argument(self, name: str) -> ArgumentSpec | None:
        """Look up an argument by name."""
        for arg in self.args:
            if arg.name == name:
                return arg
        return None


def get_poll_interval(signature: FunctionSignature) -> int:
    """Return the declared poll interval in milliseconds, or -1 if the function is not polled."""
    if signature.poll_interval is not None:
        return signature.poll_interval
    return -1
