"""
Page Readers

A page reader is a callable ``reader(cursor, limit) -> Page`` bound to one
table and one read plan. The continuous scan executor only ever talks to a
reader, which keeps it independent of whether pages come from a Scan or a
Query.
"""

from typing import Callable, Dict, Optional

from ..core import StoreGateway
from ..models import CompiledExpression, KeyLookup, Page, PaginationCursor, QueryPlan

PageReader = Callable[[PaginationCursor, int], Page]


def scan_reader(
    gateway: StoreGateway,
    table_name: str,
    filter_expression: Optional[CompiledExpression] = None
) -> PageReader:
    """Reader issuing Scan requests with an optional server-side filter."""
    names: Optional[Dict[str, str]] = None
    values = None
    text = None
    if filter_expression is not None:
        text = filter_expression.expression_text
        names = filter_expression.referenced_names()
        values = dict(filter_expression.value_placeholders)

    def read(cursor: PaginationCursor, limit: int) -> Page:
        return gateway.read_page(
            table_name,
            limit=limit,
            filter_expression=text,
            expression_attribute_names=names,
            expression_attribute_values=values,
            cursor=cursor,
        )

    return read


def query_reader(gateway: StoreGateway, table_name: str, plan: KeyLookup) -> PageReader:
    """Reader issuing Query requests for a key lookup plan.

    The residual conditions travel as the FilterExpression, with their
    original placeholders alongside the key placeholders.
    """
    names = {plan.key_name_placeholder: plan.key_attribute_name}
    values = {plan.key_placeholder: plan.key_value}
    text = None
    if plan.residual is not None:
        text = plan.residual.expression_text
        names.update(plan.residual.referenced_names())
        values.update(plan.residual.value_placeholders)

    def read(cursor: PaginationCursor, limit: int) -> Page:
        return gateway.read_page(
            table_name,
            limit=limit,
            index_name=plan.index_name,
            key_condition=plan.key_condition,
            filter_expression=text,
            expression_attribute_names=names,
            expression_attribute_values=values,
            cursor=cursor,
        )

    return read


def reader_for_plan(gateway: StoreGateway, table_name: str, plan: QueryPlan) -> PageReader:
    """Build the reader matching a plan produced by ``plan_read``."""
    if isinstance(plan, KeyLookup):
        return query_reader(gateway, table_name, plan)
    return scan_reader(gateway, table_name, plan.filter)
