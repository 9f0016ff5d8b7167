"""
Query/Scan Planner

Decides whether a compiled filter can be served by a Query instead of a Scan.

DynamoDB only accepts equality on the partition key in a KeyConditionExpression,
so a Query is possible when the first condition is an equality on:
1. the table's partition key (always preferred), or
2. the partition key of a secondary index (first match in catalog order).

The remaining conditions become a post-filter on the Query. They are applied by
DynamoDB after the key lookup and do not reduce read cost.

Everything else falls back to a full Scan carrying the whole expression. That
includes an equality whose typed value cannot be the key (``42`` for a string
key, ``true`` for any key), which DynamoDB would reject in a Query. The planner
performs no I/O and never fails.
"""

import logging
from decimal import Decimal
from typing import Any, Optional

from boto3.dynamodb.types import Binary

from ..models import (
    CompiledExpression,
    FullScan,
    KeyLookup,
    KeySchema,
    OperatorKind,
    QueryPlan,
)
from .compiler import NAME_PLACEHOLDER_PREFIX

logger = logging.getLogger(__name__)

FIRST_NAME_PLACEHOLDER = f"{NAME_PLACEHOLDER_PREFIX}0"

_KEY_VALUE_TYPES = {
    "S": (str,),
    "N": (Decimal,),
    "B": (bytes, bytearray, Binary),
}


def plan_read(compiled: Optional[CompiledExpression], schema: Optional[KeySchema]) -> QueryPlan:
    """Choose between a key lookup and a full scan.

    Args:
        compiled: Output of compile_filters (None means no filtering)
        schema: Key schema of the table (None when not yet described)

    Returns:
        KeyLookup when the first condition is an equality on a known
        partition key, FullScan otherwise
    """
    if compiled is None or not compiled.clauses:
        return FullScan(filter=None)
    if schema is None:
        return FullScan(filter=compiled)

    first = compiled.clauses[0]
    # The first clause must belong to the first condition; if that condition
    # was dropped, #attr0 is reserved but unused and no lookup is attempted.
    if first.name_placeholder != FIRST_NAME_PLACEHOLDER:
        return FullScan(filter=compiled)
    if first.operator != OperatorKind.EQUALS or first.value_placeholder is None:
        return FullScan(filter=compiled)

    attribute_name = first.attribute_name
    key_value = compiled.value_placeholders[first.value_placeholder]
    if attribute_name == schema.partition_key.name:
        index_name = None
        key_type = schema.partition_key.type
    else:
        index = schema.index_for_partition_key(attribute_name)
        if index is None:
            logger.debug(f"'{attribute_name}' is not a partition key of the table or any index; scanning")
            return FullScan(filter=compiled)
        index_name = index.name
        key_type = index.partition_key_type

    if not _matches_key_type(key_value, key_type):
        logger.debug(
            f"Value {key_value!r} does not fit key '{attribute_name}' of type {key_type}; scanning"
        )
        return FullScan(filter=compiled)

    residual = compiled.subset(compiled.clauses[1:])
    plan = KeyLookup(
        index_name=index_name,
        key_attribute_name=attribute_name,
        key_name_placeholder=first.name_placeholder,
        key_placeholder=first.value_placeholder,
        key_value=key_value,
        residual=residual,
    )
    logger.debug(f"Planned key lookup on '{attribute_name}' (index: {index_name or 'table'})")
    return plan


def describe_plan(plan: QueryPlan) -> str:
    """One-line description of a plan for status messages."""
    if isinstance(plan, KeyLookup):
        target = f"index {plan.index_name}" if plan.index_name else "table"
        text = f"Query on {target} where {plan.key_attribute_name} = {plan.key_value!r}"
        if plan.residual is not None:
            text += f" filtered by {plan.residual.expression_text}"
        return text
    if plan.filter is not None:
        return f"Scan filtered by {plan.filter.expression_text}"
    return "Scan"


def _matches_key_type(value: Any, key_type: Optional[str]) -> bool:
    # Unknown key types are left for DynamoDB to check
    expected = _KEY_VALUE_TYPES.get(key_type)
    if expected is None:
        return True
    return isinstance(value, expected) and not isinstance(value, bool)
