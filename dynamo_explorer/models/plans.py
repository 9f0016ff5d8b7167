"""
Compiled Expressions and Read Plans

A CompiledExpression is the parameterized form of the operator's filter
conditions. Each rendered sub-expression keeps the operator that produced it,
so the read planner can decide Query eligibility structurally instead of by
inspecting the rendered text.

A QueryPlan is either a KeyLookup (Query on the table or on an index, with an
optional residual filter) or a FullScan (with an optional filter).
"""

from typing import Any, Dict, Iterable, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .filters import OperatorKind


class CompiledClause(BaseModel):
    """One rendered condition, e.g. ``#attr0 = :val0``."""

    operator: OperatorKind
    attribute_name: str
    name_placeholder: str
    value_placeholder: Optional[str] = None
    text: str

    model_config = ConfigDict(frozen=True)


class CompiledExpression(BaseModel):
    """Parameterized AND-expression ready to be sent to DynamoDB.

    ``name_placeholders`` holds one entry per condition with a non-blank
    attribute name, in condition order, including conditions that were later
    dropped for lacking a value. ``value_placeholders`` holds one entry per
    emitted value; the two counters advance independently.
    """

    expression_text: str
    name_placeholders: Dict[str, str] = Field(default_factory=dict)
    value_placeholders: Dict[str, Any] = Field(default_factory=dict)
    clauses: Tuple[CompiledClause, ...] = ()

    model_config = ConfigDict(frozen=True)

    def referenced_names(self) -> Dict[str, str]:
        """Name placeholders actually used by the expression text.

        DynamoDB rejects requests carrying unused ExpressionAttributeNames, so
        this is what goes on the wire.
        """
        used = {clause.name_placeholder for clause in self.clauses}
        return {k: v for k, v in self.name_placeholders.items() if k in used}

    def subset(self, clauses: Iterable[CompiledClause]) -> Optional['CompiledExpression']:
        """Expression made of the given clauses with their original placeholders."""
        clauses = tuple(clauses)
        if not clauses:
            return None
        names = {c.name_placeholder: c.attribute_name for c in clauses}
        values = {
            c.value_placeholder: self.value_placeholders[c.value_placeholder]
            for c in clauses
            if c.value_placeholder is not None
        }
        return CompiledExpression(
            expression_text=" AND ".join(c.text for c in clauses),
            name_placeholders=names,
            value_placeholders=values,
            clauses=clauses,
        )


class KeyLookup(BaseModel):
    """Query on a partition key (table or secondary index) with equality."""

    kind: Literal["key_lookup"] = "key_lookup"
    index_name: Optional[str] = Field(None, description="Index to query; None queries the table itself")
    key_attribute_name: str
    key_name_placeholder: str
    key_placeholder: str
    key_value: Any = None
    residual: Optional[CompiledExpression] = Field(
        None, description="Conditions 2..N applied as a post-filter"
    )

    model_config = ConfigDict(frozen=True)

    @property
    def key_condition(self) -> str:
        return f"{self.key_name_placeholder} = {self.key_placeholder}"


class FullScan(BaseModel):
    """Scan of the whole table with an optional server-side filter."""

    kind: Literal["full_scan"] = "full_scan"
    filter: Optional[CompiledExpression] = None

    model_config = ConfigDict(frozen=True)


QueryPlan = Union[KeyLookup, FullScan]
