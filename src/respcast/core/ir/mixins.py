"""
Configuration mixin types for respcast IR.

A mixin invocation is the parsed form of a device configuration block such
as ``import config from @org.thingpedia.config.oauth2(client_id="...",
authorize="https://...")``: an ordered list of name/value pairs whose
values are expressions evaluated on demand.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, field_validator


@runtime_checkable
class ValueExpression(Protocol):
    """Anything the configuration parser hands us that can become a native value."""

    def to_native(self) -> Any: ...


class LiteralValue(BaseModel):
    """A constant value expression (string, number, boolean, list, or mapping)."""

    value: Any = None

    model_config = ConfigDict(frozen=True)

    def to_native(self) -> Any:
        if isinstance(self.value, list):
            return list(self.value)
        if isinstance(self.value, dict):
            return dict(self.value)
        return self.value


class InputParam(BaseModel):
    """
    A single ``name=value`` pair inside a mixin invocation.

    Attributes:
        name: Parameter name
        value: Value expression; raw JSON values are wrapped as LiteralValue
    """

    name: str
    value: Any

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @field_validator("value", mode="before")
    @classmethod
    def wrap_literal(cls, v: Any) -> Any:
        if isinstance(v, ValueExpression):
            return v
        return LiteralValue(value=v)


class MixinInvocation(BaseModel):
    """
    A parsed configuration mixin.

    Attributes:
        kind: Mixin identifier, e.g. "org.thingpedia.config.oauth2"
        in_params: Ordered parameters; duplicates are allowed and preserved
    """

    kind: str = ""
    in_params: list[InputParam] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
