"""
Structural comparison helpers for response validation.

This module holds the stateless helpers the assertion engine uses to
compare decoded JSON values independently of mapping key order, and to
render expectation-vs-actual failure messages.
"""

from __future__ import annotations

import json
import re
from typing import Any

# Markup tags and comments removed for the plain-text view of a body
_TAG_PATTERN = re.compile(r"<!--.*?-->|<[^>]*>", re.DOTALL)

# JSON number grammar; Python-only spellings like "1_000" or "nan" are not numbers
_NUMBER_PATTERN = re.compile(
    r"-?(?:0|[1-9]\d*)(?P<fraction>\.\d+)?(?P<exponent>[eE][+-]?\d+)?"
)


def recursive_sort(value: Any) -> Any:
    """
    Sort mapping keys at every nesting level.

    Lists keep their element order (elements are sorted recursively),
    tuples become lists and scalars are returned unchanged. Two mappings
    holding the same data in a different key order serialize identically
    once sorted.

    Args:
        value: A nested structure of dicts, lists and scalars

    Returns:
        The canonicalized copy of value
    """
    if isinstance(value, dict):
        return {key: recursive_sort(value[key]) for key in sorted(value, key=str)}
    if isinstance(value, (list, tuple)):
        return [recursive_sort(item) for item in value]
    return value


def canonical_json(value: Any) -> str:
    """Serialize a value compactly with sorted keys."""
    return json.dumps(
        recursive_sort(value),
        separators=(",", ":"),
        ensure_ascii=False,
    )


def make_expectation_message(summary: str, expected: Any, actual: Any) -> str:
    """
    Build a failure message showing what was expected and what was found.

    Example:
        Could not find data subset in response

        Expected:
        {
          "id": 5
        }

        Actual:
        {
          "id": 6
        }
    """
    return "\n".join([
        summary,
        "",
        "Expected:",
        _pretty(expected),
        "",
        "Actual:",
        _pretty(actual),
    ])


def _pretty(value: Any) -> str:
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, indent=2, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(value)


def replace_recursive(base: Any, replacements: Any) -> Any:
    """
    Deep-merge replacements onto base without mutating either.

    Dicts merge by key and lists merge by index (surplus replacement
    items are appended). Anywhere else the replacement value wins.
    """
    if isinstance(base, dict) and isinstance(replacements, dict):
        merged = dict(base)
        for key, value in replacements.items():
            if key in merged:
                merged[key] = replace_recursive(merged[key], value)
            else:
                merged[key] = value
        return merged

    if isinstance(base, list) and isinstance(replacements, list):
        merged = list(base)
        for index, value in enumerate(replacements):
            if index < len(merged):
                merged[index] = replace_recursive(merged[index], value)
            else:
                merged.append(value)
        return merged

    return replacements


def strict_equals(left: Any, right: Any) -> bool:
    """Structural equality that never coerces types ("1" != 1, 1 != 1.0, True != 1)."""
    if type(left) is not type(right):
        return False

    if isinstance(left, dict):
        if left.keys() != right.keys():
            return False
        return all(strict_equals(left[key], right[key]) for key in left)

    if isinstance(left, list):
        if len(left) != len(right):
            return False
        return all(strict_equals(a, b) for a, b in zip(left, right))

    return left == right


def loose_equals(left: Any, right: Any) -> bool:
    """
    Structural equality with scalar type coercion.

    Rules, applied to scalars:
        - None only equals None
        - a bool compared with any other scalar compares truthiness
        - two numbers compare exactly with ==
        - a string holding a JSON number compares by its numeric value
          ("1" == 1 == 1.0, but "1_000" != 1000)
        - everything else uses plain equality

    Dicts need the same keys and lists the same length; their members are
    compared loosely.
    """
    if isinstance(left, dict) or isinstance(right, dict):
        if not (isinstance(left, dict) and isinstance(right, dict)):
            return False
        if left.keys() != right.keys():
            return False
        return all(loose_equals(left[key], right[key]) for key in left)

    if isinstance(left, list) or isinstance(right, list):
        if not (isinstance(left, list) and isinstance(right, list)):
            return False
        if len(left) != len(right):
            return False
        return all(loose_equals(a, b) for a, b in zip(left, right))

    if left is None or right is None:
        return left is None and right is None

    if isinstance(left, bool) or isinstance(right, bool):
        return bool(left) == bool(right)

    # Numbers compare exactly, ints above 2**53 included
    if not isinstance(left, str) and not isinstance(right, str):
        return left == right

    left_number = _as_number(left)
    right_number = _as_number(right)
    if left_number is not None and right_number is not None:
        return left_number == right_number

    return left == right


def _as_number(value: Any) -> int | float | None:
    if isinstance(value, (int, float)):
        return value
    if not isinstance(value, str):
        return None

    match = _NUMBER_PATTERN.fullmatch(value.strip())
    if match is None:
        return None
    if match.group("fraction") or match.group("exponent"):
        return float(match.group(0))
    return int(match.group(0))


def strip_tags(text: str) -> str:
    """Remove markup tags and comments, leaving the text content."""
    return _TAG_PATTERN.sub("", text)
