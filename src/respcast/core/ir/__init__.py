"""
respcast Internal Representation (IR).

Declared types, function signatures, configuration mixins, and the value
objects the coercion engine produces. All models are frozen pydantic
models.
"""

from .types import (
    BOOLEAN,
    CURRENCY,
    DATE,
    ENTITY,
    LOCATION,
    MEASURE,
    NUMBER,
    STRING,
    SemanticType,
    TypeKind,
    array_of,
)
from .values import DEFAULT_CURRENCY_UNIT, Currency, EntityValue, Location
from .mixins import InputParam, LiteralValue, MixinInvocation, ValueExpression
from .signatures import ArgDirection, ArgumentSpec, FunctionSignature, get_poll_interval

__all__ = [
    # Types
    "TypeKind",
    "SemanticType",
    "array_of",
    "STRING",
    "NUMBER",
    "BOOLEAN",
    "DATE",
    "MEASURE",
    "CURRENCY",
    "ENTITY",
    "LOCATION",
    # Values
    "DEFAULT_CURRENCY_UNIT",
    "Currency",
    "EntityValue",
    "Location",
    # Mixins
    "ValueExpression",
    "LiteralValue",
    "InputParam",
    "MixinInvocation",
    # Signatures
    "ArgDirection",
    "ArgumentSpec",
    "FunctionSignature",
    "get_poll_interval",
]
