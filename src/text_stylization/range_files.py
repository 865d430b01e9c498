"""
Loading text ranges from command-line specs and YAML/JSON files.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from .errors import InvalidRangeError, RangesFileError
from .models import TextRange


def parse_range_spec(spec: str) -> TextRange:
    """Parse a ``START:END`` string such as ``"3:6"`` into a TextRange.

    Raises:
        InvalidRangeError: If the spec is not two integers separated by a colon
    """
    start, sep, end = spec.partition(":")
    if not sep:
        raise InvalidRangeError(spec, None, "expected START:END")
    try:
        start_value, end_value = int(start), int(end)
    except ValueError as e:
        raise InvalidRangeError(start, end, "offsets must be integers") from e
    return TextRange(start_value, end_value)


def ranges_from_data(data: Any) -> list[TextRange]:
    """Build TextRanges from already-loaded file content.

    The content must be a mapping with a ``ranges`` key holding a list. Each
    item is either ``{start: int, end: int}`` or a two-item list.

    Raises:
        RangesFileError: If the content does not have that shape
        InvalidRangeError: If an item is not a valid range
    """
    if not isinstance(data, dict):
        raise RangesFileError("Ranges file must contain a dictionary/object")

    if "ranges" not in data:
        raise RangesFileError("Ranges file must contain a 'ranges' key")

    items = data["ranges"]
    if not isinstance(items, list):
        raise RangesFileError("'ranges' must be a list")

    return [TextRange.coerce(item) for item in items]


def load_ranges_file(path: str | Path, format: str = "yaml") -> list[TextRange]:
    """Load ranges from a YAML or JSON file.

    Args:
        path: Path to the ranges file
        format: File format - "yaml" or "json" (default: "yaml")

    Returns:
        The ranges, in file order

    Raises:
        RangesFileError: If the file cannot be parsed or has an invalid shape
        FileNotFoundError: If the file does not exist

    Example YAML file:
        ```yaml
        ranges:
          - start: 3
            end: 6
          - [7, 11]
        ```
    """
    file_path = Path(path)

    if not file_path.exists():
        raise FileNotFoundError(f"Ranges file not found: {path}")

    try:
        with open(file_path, encoding="utf-8") as f:
            if format == "yaml":
                data = yaml.safe_load(f)
            elif format == "json":
                data = json.load(f)
            else:
                raise RangesFileError(f"Unsupported format: {format}", path)
    except yaml.YAMLError as e:
        raise RangesFileError(f"Failed to parse YAML file: {e}", path) from e
    except json.JSONDecodeError as e:
        raise RangesFileError(f"Failed to parse JSON file: {e}", path) from e

    try:
        return ranges_from_data(data)
    except RangesFileError as e:
        raise RangesFileError(str(e), path) from e
