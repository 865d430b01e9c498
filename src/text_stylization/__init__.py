"""
text_stylization - Apply and remove class-name styles over character ranges.

Text in a document tree is usually spread over many text nodes and nested
inline elements. This package takes ranges expressed as offsets into the plain
text under a root element, finds the text nodes they fall on, and wraps exactly
that text in ``<span class="...">`` containers. Styles can be removed again,
restoring contiguous text nodes.

Example:
    >>> from text_stylization import TextStylization, parse_html
    >>> root = parse_html("<div>0123456789</div>")
    >>> styler = TextStylization(root, "foo")
    >>> groups = styler.apply_to_ranges([(3, 6)])
    >>> root.outer_html
    '<div>012<span class="foo">345</span>6789</div>'
"""

__version__ = "0.1.0"
__all__ = [
    "TextStylization",
    "TextRange",
    "NodeAndOffset",
    "OffsetResolver",
    "LeafVisit",
    "group_node_and_offsets",
    "Document",
    "Element",
    "Text",
    "NodeFilter",
    "TreeWalker",
    "parse_html",
    "to_html",
    "load_ranges_file",
    "parse_range_spec",
    "TextStylizationError",
    "InvalidRangeError",
    "NotATextLeafError",
    "MarkupError",
    "RangesFileError",
]

from .dom import Document, Element, NodeFilter, Text, TreeWalker, parse_html, to_html
from .errors import (
    InvalidRangeError,
    MarkupError,
    NotATextLeafError,
    RangesFileError,
    TextStylizationError,
)
from .models import NodeAndOffset, TextRange
from .offsets import LeafVisit, OffsetResolver, group_node_and_offsets
from .range_files import load_ranges_file, parse_range_spec
from .stylization import TextStylization
