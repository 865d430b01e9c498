"""
Custom exception classes for the text_stylization package.

Failures that reach the caller are precondition violations: a malformed range,
a node that is not a text leaf, or input markup that cannot be turned into a
single-root tree.
"""

from typing import Any


class TextStylizationError(Exception):
    """Base exception for all text_stylization errors."""

    pass


class InvalidRangeError(TextStylizationError, ValueError):
    """Raised when a text range has negative or reversed offsets.

    Attributes:
        start: The requested start offset
        end: The requested end offset
    """

    def __init__(self, start: Any, end: Any, reason: str | None = None) -> None:
        self.start = start
        self.end = end
        self.reason = reason
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format an error message naming the offending range."""
        msg = f"Invalid text range ({self.start!r}, {self.end!r})"
        if self.reason:
            msg += f": {self.reason}"
        return msg


class NotATextLeafError(TextStylizationError, TypeError):
    """Raised when a node that does not carry text is used as a text leaf.

    Attributes:
        node: The offending node
    """

    def __init__(self, node: Any) -> None:
        self.node = node
        super().__init__(f"Expected a text node, got {node!r}")


class MarkupError(TextStylizationError):
    """Raised when HTML input cannot be parsed into a single-root tree."""

    pass


class RangesFileError(TextStylizationError):
    """Raised when a ranges file cannot be read or has the wrong shape.

    Attributes:
        path: Path of the ranges file
    """

    def __init__(self, message: str, path: Any = None) -> None:
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)
