"""
Filter Compiler

Turns the operator's ordered filter conditions into a DynamoDB expression with
``#attrN`` name placeholders and ``:valN`` value placeholders, all clauses
joined with AND.

Compilation never fails: a condition without an attribute name is skipped, and
a value operator without a value is dropped. Placeholder numbering is threaded
through a fold over the condition list, so ``compile_filters`` is a pure
function of its input.

Numbering rules:
- A name placeholder is reserved for every condition with a non-blank attribute
  name, before its value is looked at. A condition dropped for an empty value
  therefore leaves its ``#attrN`` reserved and unused.
- The value counter is separate and only advances when a value is emitted.

Example:
    >>> compile_filters([
    ...     FilterCondition(attribute_name="status", operator=OperatorKind.EXISTS),
    ...     FilterCondition(attribute_name="age", operator=OperatorKind.GREATER_THAN, value="30"),
    ... ]).expression_text
    'attribute_exists(#attr0) AND #attr1 > :val0'
"""

import logging
import math
from decimal import Decimal, DecimalException
from functools import reduce
from typing import Any, Dict, NamedTuple, Optional, Sequence, Tuple

from boto3.dynamodb.types import DYNAMODB_CONTEXT

from ..models import CompiledClause, CompiledExpression, FilterCondition, OperatorKind

logger = logging.getLogger(__name__)

NAME_PLACEHOLDER_PREFIX = "#attr"
VALUE_PLACEHOLDER_PREFIX = ":val"

_TEMPLATES = {
    OperatorKind.EQUALS: "{name} = {value}",
    OperatorKind.NOT_EQUALS: "{name} <> {value}",
    OperatorKind.GREATER_THAN: "{name} > {value}",
    OperatorKind.LESS_THAN: "{name} < {value}",
    OperatorKind.GREATER_OR_EQUAL: "{name} >= {value}",
    OperatorKind.LESS_OR_EQUAL: "{name} <= {value}",
    OperatorKind.CONTAINS: "contains({name}, {value})",
    OperatorKind.NOT_CONTAINS: "NOT contains({name}, {value})",
    OperatorKind.BEGINS_WITH: "begins_with({name}, {value})",
    OperatorKind.EXISTS: "attribute_exists({name})",
    OperatorKind.NOT_EXISTS: "attribute_not_exists({name})",
}


class _Accumulator(NamedTuple):
    names: Tuple[Tuple[str, str], ...] = ()
    values: Tuple[Tuple[str, Any], ...] = ()
    clauses: Tuple[CompiledClause, ...] = ()


def coerce_value(text: str) -> Any:
    """Sniff the type of a value typed by the operator.

    Numbers DynamoDB can store become ``Decimal`` (the number type boto3
    accepts), ``true``/``false`` become booleans and ``null`` becomes None,
    all case-insensitive. Anything else stays a string.

    Args:
        text: Trimmed value text

    Returns:
        Decimal, bool, None or the original string
    """
    number = _parse_number(text)
    if number is not None:
        return number

    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if lowered == "null":
        return None
    return text


def _parse_number(text: str) -> Optional[Decimal]:
    # Digit separators are not part of the number syntax
    if "_" in text:
        return None
    try:
        as_float = float(text)
    except ValueError:
        return None
    # NaN and Infinity have no DynamoDB representation
    if not math.isfinite(as_float):
        return None
    # More than 38 significant digits, or a magnitude outside 1E-130..1E125,
    # cannot be stored as an N value; such text is compared as a string.
    try:
        return DYNAMODB_CONTEXT.create_decimal(text)
    except DecimalException:
        logger.debug(f"'{text}' is outside the DynamoDB number range; keeping it as a string")
        return None


def _compile_step(acc: _Accumulator, condition: FilterCondition) -> _Accumulator:
    name = condition.attribute_name.strip()
    if not name:
        return acc

    name_placeholder = f"{NAME_PLACEHOLDER_PREFIX}{len(acc.names)}"
    names = acc.names + ((name_placeholder, name),)
    operator = OperatorKind(condition.operator)

    if not operator.needs_value:
        clause = CompiledClause(
            operator=operator,
            attribute_name=name,
            name_placeholder=name_placeholder,
            text=_TEMPLATES[operator].format(name=name_placeholder),
        )
        return _Accumulator(names, acc.values, acc.clauses + (clause,))

    raw_value = condition.value.strip()
    if not raw_value:
        logger.debug(f"Dropping condition on '{name}': operator {operator.value} needs a value")
        return _Accumulator(names, acc.values, acc.clauses)

    value_placeholder = f"{VALUE_PLACEHOLDER_PREFIX}{len(acc.values)}"
    value = raw_value if operator.keeps_raw_string else coerce_value(raw_value)
    clause = CompiledClause(
        operator=operator,
        attribute_name=name,
        name_placeholder=name_placeholder,
        value_placeholder=value_placeholder,
        text=_TEMPLATES[operator].format(name=name_placeholder, value=value_placeholder),
    )
    return _Accumulator(names, acc.values + ((value_placeholder, value),), acc.clauses + (clause,))


def compile_filters(conditions: Sequence[FilterCondition]) -> Optional[CompiledExpression]:
    """Compile ordered filter conditions into a parameterized expression.

    Args:
        conditions: Conditions in the order the operator entered them

    Returns:
        CompiledExpression, or None when no condition produced a clause
        (meaning "no filtering")
    """
    acc = reduce(_compile_step, conditions, _Accumulator())
    if not acc.clauses:
        return None

    names: Dict[str, str] = dict(acc.names)
    values: Dict[str, Any] = dict(acc.values)
    return CompiledExpression(
        expression_text=" AND ".join(clause.text for clause in acc.clauses),
        name_placeholders=names,
        value_placeholders=values,
        clauses=acc.clauses,
    )


def has_filters(conditions: Sequence[FilterCondition]) -> bool:
    """True when at least one condition names an attribute."""
    return any(condition.attribute_name.strip() for condition in conditions)


def summarize_filters(conditions: Sequence[FilterCondition]) -> str:
    """Short human-readable summary of the active conditions.

    Example: ``status Exists AND age > 30``. Conditions that would be dropped
    by the compiler are left out.
    """
    parts = []
    for condition in conditions:
        name = condition.attribute_name.strip()
        if not name:
            continue
        operator = OperatorKind(condition.operator)
        value = condition.value.strip()
        if not operator.needs_value:
            parts.append(f"{name} {operator.label}")
        elif value:
            parts.append(f"{name} {operator.symbol} {value}")
    return " AND ".join(parts)
