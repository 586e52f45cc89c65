"""
Error types for respcast signature loading, coercion, and extraction.

Path parsing, value lookup, and placeholder formatting never raise; the
errors below cover the places where the core does reject input.
"""

from dataclasses import dataclass
from typing import Optional


class RespcastError(Exception):
    """Base exception for all respcast errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class TypeSyntaxError(RespcastError):
    """
    Raised when a declared type string cannot be parsed.

    Examples:
    - Empty type string
    - Unbalanced parentheses, e.g. ``Array(Number``
    - Trailing text after a complete type
    """

    pass


class SignatureError(RespcastError):
    """
    Raised when a function signature is malformed.

    Examples:
    - Duplicate argument names
    - Signature file that is not a JSON object
    """

    pass


class CoercionError(RespcastError):
    """
    Raised by the coercion engine in strict mode only.

    In the default permissive mode mismatched values pass through (or
    become NaN for numeric parses) instead.
    """

    pass


class ExtractionError(RespcastError):
    """
    Raised when a raw response cannot be treated as a sequence of records.

    Examples:
    - ``None`` top-level response (including a missing envelope key)
    - ``None`` element inside a response sequence
    """

    pass


class ConfigError(RespcastError):
    """Raised when a respcast.toml manifest or environment override is invalid."""

    pass


class SourceError(RespcastError):
    """Raised when an HTTP source returns a non-2xx status or invalid JSON."""

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error.

    Attributes:
        function: Function signature name being processed
        argument: Argument name, if the error concerns a single argument
        index: Element index inside the response sequence
    """

    function: str | None = None
    argument: str | None = None
    index: int | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "in function get_posts, argument title, element 3"
        """
        parts = []
        if self.function:
            parts.append(f"function {self.function}")
        if self.argument:
            parts.append(f"argument {self.argument}")
        if self.index is not None:
            parts.append(f"element {self.index}")
        return "in " + ", ".join(parts) if parts else ""


def make_extraction_error(
    message: str,
    function: str | None = None,
    index: int | None = None,
) -> ExtractionError:
    """Helper to create an ExtractionError with optional context."""
    if function or index is not None:
        return ExtractionError(message, ErrorContext(function=function, index=index))
    return ExtractionError(message)


def make_coercion_error(
    message: str,
    function: str | None = None,
    argument: str | None = None,
    index: int | None = None,
) -> CoercionError:
    """Helper to create a CoercionError with optional context."""
    if function or argument or index is not None:
        return CoercionError(
            message, ErrorContext(function=function, argument=argument, index=index)
        )
    return CoercionError(message)
