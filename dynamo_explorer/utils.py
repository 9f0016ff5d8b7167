"""
dynamo-explorer Utilities

Conversion between DynamoDB items (as returned by the boto3 resource layer,
with Decimal numbers, sets and Binary values) and plain JSON text, used by the
item viewer and editor of the session layer.

- to_plain_value / item_to_json: item -> JSON-friendly Python values / text
- json_to_item: editor text -> item ready for PutItem
- format_value: short single-line rendering of a value for table cells
- validate_table_name / missing_key_attributes: write-side input checks
- fuzzy_find: ranks table names against the table finder pattern
"""

import base64
import json
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from boto3.dynamodb.types import Binary

from .exceptions import ValidationError
from .models import TableMatch

_NAME_SEPARATORS = "_-. "


def to_plain_value(value: Any) -> Any:
    """Convert a DynamoDB value to a JSON-serializable Python value.

    Integral Decimals become ints, other Decimals floats. Sets become sorted
    lists, binary values base64 strings.
    """
    if isinstance(value, dict):
        return {k: to_plain_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [to_plain_value(v) for v in value]
    elif isinstance(value, (set, frozenset)):
        plain = [to_plain_value(v) for v in value]
        try:
            return sorted(plain)
        except TypeError:
            return plain
    elif isinstance(value, Decimal):
        if value == value.to_integral_value():
            return int(value)
        return float(value)
    elif isinstance(value, Binary):
        return base64.b64encode(value.value).decode('ascii')
    elif isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode('ascii')
    return value


def item_to_json(item: Dict[str, Any], indent: bool = True) -> str:
    """Render an item as JSON text.

    Args:
        item: Item as returned by a Scan/Query/GetItem
        indent: Pretty-print with two-space indentation

    Returns:
        JSON text with keys in sorted order
    """
    return json.dumps(to_plain_value(item), indent=2 if indent else None, sort_keys=True, ensure_ascii=False)


def json_to_item(text: str) -> Dict[str, Any]:
    """Parse editor JSON text into an item.

    Numbers are parsed straight to Decimal, the number type boto3 expects.

    Args:
        text: JSON object text

    Returns:
        Item dictionary

    Raises:
        ValidationError: If the text is not valid JSON or not a JSON object
    """
    try:
        data = json.loads(text, parse_float=Decimal, parse_int=Decimal)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}", original_error=e) from e

    if not isinstance(data, dict):
        raise ValidationError(f"Item JSON must be an object, got {type(data).__name__}")
    return data


def format_value(value: Any, max_len: int = 50) -> str:
    """Single-line rendering of an attribute value, truncated to ``max_len``."""
    if value is None:
        text = "null"
    elif isinstance(value, str):
        text = value
    else:
        text = json.dumps(to_plain_value(value), ensure_ascii=False)

    if max_len > 0 and len(text) > max_len:
        return text[:max_len - 3] + "..."
    return text


def validate_table_name(table_name: str) -> None:
    """
    Validate a DynamoDB table name before CreateTable.

    Raises:
        ValidationError: If the name is empty, not 3-255 characters long, or
            contains characters other than alphanumerics, '-', '_' and '.'
    """
    if not table_name:
        raise ValidationError("Table name cannot be empty")
    if len(table_name) < 3 or len(table_name) > 255:
        raise ValidationError("Table name must be between 3 and 255 characters")
    if not all(c.isalnum() or c in "-_." for c in table_name):
        raise ValidationError(
            "Table name can only contain alphanumeric characters, hyphens, underscores, and periods"
        )


def missing_key_attributes(item: Dict[str, Any], key_names: Iterable[str]) -> List[str]:
    """Key attribute names that are absent from ``item`` or set to None/empty string."""
    return [name for name in key_names if item.get(name) in (None, "")]


def fuzzy_find(pattern: str, names: Iterable[str]) -> List[TableMatch]:
    """
    Rank table names against a finder pattern.

    A name matches when the pattern's characters appear in it in order,
    ignoring case. Each matched character scores points, with bonuses for
    runs of consecutive matches, a match at the start of the name, after a
    separator (``_ - .``) or at a camelCase boundary. Shorter names, names
    starting with the pattern and exact matches rank higher.

    Args:
        pattern: Text typed into the table finder
        names: Table names in listing order

    Returns:
        Matches, best first; equal scores keep listing order. An empty
        pattern returns every name with score 0.
    """
    if not pattern:
        return [TableMatch(name=name) for name in names]

    pattern = pattern.lower()
    matches = []
    for name in names:
        match = _fuzzy_match(pattern, name)
        if match is not None:
            matches.append(match)
    return sorted(matches, key=lambda match: match.score, reverse=True)


def _fuzzy_match(pattern: str, name: str) -> Optional[TableMatch]:
    # Table names are ASCII, so lowering keeps positions aligned with ``name``
    text = name.lower()
    indices: List[int] = []
    score = 0
    streak = 0
    last_index = -1

    for index, char in enumerate(text):
        if len(indices) == len(pattern):
            break
        if char != pattern[len(indices)]:
            continue

        score += 10
        if last_index == index - 1:
            streak += 1
            score += streak * 5
        else:
            streak = 0

        if index == 0:
            score += 25
        else:
            previous = name[index - 1]
            if previous in _NAME_SEPARATORS:
                score += 20
            if previous.islower() and name[index].isupper():
                score += 15

        last_index = index
        indices.append(index)

    if len(indices) < len(pattern):
        return None

    score += 100 - len(text)
    if text.startswith(pattern):
        score += 50
    if text == pattern:
        score += 100
    return TableMatch(name=name, score=score, matched_indices=tuple(indices))
