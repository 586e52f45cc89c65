"""
Semantic type definitions for respcast IR.

This module contains the declared-type vocabulary used by function
signatures. Types are a closed set of kinds; ``Array`` is the only
recursive kind, every other kind is a leaf. Type names that are not part
of the vocabulary are kept as ``OTHER`` so that newer signatures still
load and their values pass through coercion untouched.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, model_validator


class TypeKind(StrEnum):
    """Enumeration of declared semantic types."""

    STRING = "String"
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    ARRAY = "Array"
    DATE = "Date"
    MEASURE = "Measure"
    CURRENCY = "Currency"
    ENTITY = "Entity"
    LOCATION = "Location"
    OTHER = "Other"


class SemanticType(BaseModel):
    """
    Represents a declared semantic type.

    Examples:
        - Number: SemanticType(kind=NUMBER)
        - Measure(C): SemanticType(kind=MEASURE, unit="C")
        - Entity(tt:email_address): SemanticType(kind=ENTITY, entity_type="tt:email_address")
        - Array(Number): SemanticType(kind=ARRAY, elem=SemanticType(kind=NUMBER))
        - Time: SemanticType(kind=OTHER, name="Time")
    """

    kind: TypeKind
    elem: SemanticType | None = None  # for Array
    unit: str | None = None  # for Measure
    entity_type: str | None = None  # for Entity
    name: str | None = None  # original spelling, for Other

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_elem(self) -> SemanticType:
        """Array types must carry an element type; other kinds must not."""
        if self.kind == TypeKind.ARRAY and self.elem is None:
            raise ValueError("Array type requires an element type")
        if self.kind != TypeKind.ARRAY and self.elem is not None:
            raise ValueError(f"{self.kind.value} type cannot have an element type")
        return self

    @property
    def is_array(self) -> bool:
        return self.kind == TypeKind.ARRAY

    @property
    def is_numeric(self) -> bool:
        """Number and Measure share the string-to-float coercion."""
        return self.kind in (TypeKind.NUMBER, TypeKind.MEASURE)

    def __str__(self) -> str:
        if self.kind == TypeKind.ARRAY:
            return f"Array({self.elem})"
        if self.kind == TypeKind.MEASURE and self.unit:
            return f"Measure({self.unit})"
        if self.kind == TypeKind.ENTITY and self.entity_type:
            return f"Entity({self.entity_type})"
        if self.kind == TypeKind.OTHER:
            return self.name or "Other"
        return self.kind.value


def array_of(elem: SemanticType) -> SemanticType:
    """Build an ``Array(elem)`` type."""
    return SemanticType(kind=TypeKind.ARRAY, elem=elem)


STRING = SemanticType(kind=TypeKind.STRING)
NUMBER = SemanticType(kind=TypeKind.NUMBER)
BOOLEAN = SemanticType(kind=TypeKind.BOOLEAN)
DATE = SemanticType(kind=TypeKind.DATE)
MEASURE = SemanticType(kind=TypeKind.MEASURE)
CURRENCY = SemanticType(kind=TypeKind.CURRENCY)
ENTITY = SemanticType(kind=TypeKind.ENTITY)
LOCATION = SemanticType(kind=TypeKind.LOCATION)
