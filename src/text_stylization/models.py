"""
Value types shared by the offset resolver and the stylization engine.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .errors import InvalidRangeError


@dataclass(frozen=True)
class TextRange:
    """A span of global character offsets into the text under a root.

    Attributes:
        start: Offset of the first character in the span (inclusive)
        end: Offset just past the last character in the span (exclusive)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        for value in (self.start, self.end):
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidRangeError(self.start, self.end, "offsets must be integers")
        if self.start < 0 or self.end < 0:
            raise InvalidRangeError(self.start, self.end, "offsets must not be negative")
        if self.start > self.end:
            raise InvalidRangeError(self.start, self.end, "start is after end")

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @classmethod
    def coerce(cls, value: Any) -> "TextRange":
        """Build a TextRange from a range-like value.

        Accepts a TextRange, a ``(start, end)`` pair, a mapping with ``start``
        and ``end`` keys, or any object with ``start`` and ``end`` attributes
        (such as a text selection).

        Raises:
            InvalidRangeError: If the value has no usable start/end
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            if "start" not in value or "end" not in value:
                raise InvalidRangeError(
                    value.get("start"), value.get("end"), "missing 'start' or 'end'"
                )
            return cls(value["start"], value["end"])
        if isinstance(value, list | tuple):
            if len(value) != 2:
                raise InvalidRangeError(value, None, "expected a (start, end) pair")
            return cls(value[0], value[1])
        if hasattr(value, "start") and hasattr(value, "end"):
            return cls(value.start, value.end)
        raise InvalidRangeError(value, None, "not a range")

    def __str__(self) -> str:
        return f"{self.start}:{self.end}"


@dataclass
class NodeAndOffset:
    """A text node and a character offset inside its payload.

    Attributes:
        node: The text node
        offset: Local character offset within the node's text
    """

    node: Any
    offset: int
