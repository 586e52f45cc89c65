"""
Value objects produced by the coercion engine.

Currency amounts, tagged entities, and geographic locations are the
domain-specific shapes a declared type can normalize raw JSON into.

Usage:
    price = Currency(value=9.99, code="usd")
    author = EntityValue(value="@bob", display="Bob")
    here = Location(latitude=37.43, longitude=-122.17, display="Stanford")

    # JSON serialization (automatic, just use model_dump())
    payload = price.model_dump()  # {"value": 9.99, "code": "usd"}
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Unit applied to bare numbers and strings declared as Currency
DEFAULT_CURRENCY_UNIT = "usd"


class Currency(BaseModel):
    """
    A currency amount.

    Attributes:
        value: Amount in major units (float; NaN when a permissive parse failed)
        code: Three-letter currency code, lowercase (e.g. "usd", "eur")
    """

    value: float
    code: str = DEFAULT_CURRENCY_UNIT

    model_config = ConfigDict(frozen=True)

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        """Normalize currency code to lowercase."""
        return v.lower()

    def __str__(self) -> str:
        return f"{self.value} {self.code.upper()}"


class EntityValue(BaseModel):
    """
    A tagged entity: an opaque identifier plus an optional display label.

    Attributes:
        value: Entity identifier as the upstream API spells it
        display: Human readable label, or None when the API gave only the id
    """

    value: str
    display: str | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("value", mode="before")
    @classmethod
    def stringify_value(cls, v: object) -> object:
        """Numeric ids are kept as their string form."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    def __str__(self) -> str:
        return self.display if self.display is not None else self.value


class Location(BaseModel):
    """
    A geographic point.

    Attributes:
        latitude: Degrees north
        longitude: Degrees east
        display: Optional human readable place name
    """

    latitude: float
    longitude: float
    display: str | None = Field(default=None)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if self.display:
            return self.display
        return f"[Latitude: {self.latitude:.3f} deg, Longitude: {self.longitude:.3f} deg]"
