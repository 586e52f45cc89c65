"""
Parser for declarative type strings.

Function signatures spell their argument types as text, for example::

    String
    Measure(C)
    Entity(tt:email_address)
    Array(Entity(tt:hashtag))

Names outside the known vocabulary (``Time``, ``Enum(on,off)``, ...) parse
to an ``Other`` type that keeps the original text, so newer signatures
still load.
"""

from __future__ import annotations

from .errors import TypeSyntaxError
from .ir.types import SemanticType, TypeKind

_LEAF_KINDS: dict[str, TypeKind] = {
    "String": TypeKind.STRING,
    "Number": TypeKind.NUMBER,
    "Boolean": TypeKind.BOOLEAN,
    "Date": TypeKind.DATE,
    "Currency": TypeKind.CURRENCY,
    "Location": TypeKind.LOCATION,
}


def parse_type(text: str) -> SemanticType:
    """Parse a declarative type string.

    Args:
        text: Type string, e.g. ``"Array(Measure(kg))"``.

    Returns:
        The parsed SemanticType.

    Raises:
        TypeSyntaxError: If the string is empty, has unbalanced
            parentheses, or has trailing text after the type.
    """
    parser = _TypeParser(text)
    result = parser.parse_type()
    parser.skip_spaces()
    if parser.pos != len(text):
        raise TypeSyntaxError(f"Unexpected {text[parser.pos:]!r} after type in {text!r}")
    return result


class _TypeParser:
    """Recursive descent over a single type string."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def skip_spaces(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def parse_type(self) -> SemanticType:
        self.skip_spaces()
        start = self.pos
        name = self._parse_name()

        self.skip_spaces()
        if self.pos < len(self.text) and self.text[self.pos] == "(":
            if name == "Array":
                self.pos += 1
                elem = self.parse_type()
                self.skip_spaces()
                self._expect(")")
                return SemanticType(kind=TypeKind.ARRAY, elem=elem)

            argument = self._parse_raw_argument()
            if name == "Measure":
                return SemanticType(kind=TypeKind.MEASURE, unit=argument)
            if name == "Entity":
                return SemanticType(kind=TypeKind.ENTITY, entity_type=argument)
            return SemanticType(kind=TypeKind.OTHER, name=self.text[start : self.pos].strip())

        if name in _LEAF_KINDS:
            return SemanticType(kind=_LEAF_KINDS[name])
        if name == "Measure":
            return SemanticType(kind=TypeKind.MEASURE)
        if name == "Entity":
            return SemanticType(kind=TypeKind.ENTITY)
        if name == "Array":
            raise TypeSyntaxError(f"Array type requires an element type in {self.text!r}")
        return SemanticType(kind=TypeKind.OTHER, name=name)

    def _parse_name(self) -> str:
        start = self.pos
        while self.pos < len(self.text) and (
            self.text[self.pos].isalnum() or self.text[self.pos] == "_"
        ):
            self.pos += 1
        if self.pos == start:
            if self.pos >= len(self.text):
                raise TypeSyntaxError(f"Expected type name at end of {self.text!r}")
            raise TypeSyntaxError(
                f"Expected type name at position {self.pos} in {self.text!r}"
            )
        return self.text[start : self.pos]

    def _parse_raw_argument(self) -> str:
        """Consume a balanced ``(...)`` group and return its stripped contents."""
        self._expect("(")
        depth = 1
        start = self.pos
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            if ch == "(":
                depth += 1
            elif ch == ")":
                depth -= 1
                if depth == 0:
                    argument = self.text[start : self.pos].strip()
                    self.pos += 1
                    return argument
            self.pos += 1
        raise TypeSyntaxError(f"Unbalanced parentheses in {self.text!r}")

    def _expect(self, ch: str) -> None:
        if self.pos >= len(self.text) or self.text[self.pos] != ch:
            found = repr(self.text[self.pos]) if self.pos < len(self.text) else "end of input"
            raise TypeSyntaxError(f"Expected {ch!r} but found {found} in {self.text!r}")
        self.pos += 1
