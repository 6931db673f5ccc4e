"""Exception types raised by flexml.

Missing data is never an error here: an absent text value, attribute or child
is reported as ``None`` or an empty list. Exceptions are reserved for input
that cannot be represented at all.
"""

from typing import Optional


class FlexmlError(Exception):
    """Base exception for all flexml errors."""


class MalformedMarkupError(FlexmlError, ValueError):
    """Raised when markup text is not well-formed XML.

    Attributes:
        line: 1-based line of the failure, when the parser reported one
        column: 0-based column of the failure, when the parser reported one
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.line = line
        self.column = column

    def __str__(self) -> str:
        message = super().__str__()
        if self.line is None:
            return message
        return f"{message} (line {self.line}, column {self.column})"


class NameCollisionError(FlexmlError):
    """Raised when an attribute and a child element would share one key."""

    def __init__(self, message: str, name: str) -> None:
        super().__init__(message)
        self.name = name


class AdapterError(FlexmlError):
    """Raised when a node cannot be converted to or from a target library."""
