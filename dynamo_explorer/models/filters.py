"""
Filter Condition Models

Conditions are composed by the operator one row at a time. Their position in
the list is meaningful: the first kept condition is the one the read planner
inspects when deciding between a Query and a Scan.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class OperatorKind(str, Enum):
    """Comparison operators available to filter conditions."""
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    GREATER_OR_EQUAL = "greater_or_equal"
    LESS_OR_EQUAL = "less_or_equal"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    BEGINS_WITH = "begins_with"
    EXISTS = "exists"
    NOT_EXISTS = "not_exists"

    @property
    def needs_value(self) -> bool:
        return self not in (OperatorKind.EXISTS, OperatorKind.NOT_EXISTS)

    @property
    def keeps_raw_string(self) -> bool:
        """String-oriented operators whose value is never type-sniffed."""
        return self in (OperatorKind.CONTAINS, OperatorKind.NOT_CONTAINS, OperatorKind.BEGINS_WITH)

    @property
    def label(self) -> str:
        return _OPERATOR_DISPLAY[self][0]

    @property
    def symbol(self) -> str:
        return _OPERATOR_DISPLAY[self][1]


_OPERATOR_DISPLAY = {
    OperatorKind.EQUALS: ("Equals", "="),
    OperatorKind.NOT_EQUALS: ("Not Equals", "≠"),
    OperatorKind.GREATER_THAN: ("Greater Than", ">"),
    OperatorKind.LESS_THAN: ("Less Than", "<"),
    OperatorKind.GREATER_OR_EQUAL: ("Greater or Equal", "≥"),
    OperatorKind.LESS_OR_EQUAL: ("Less or Equal", "≤"),
    OperatorKind.CONTAINS: ("Contains", "∋"),
    OperatorKind.NOT_CONTAINS: ("Not Contains", "∌"),
    OperatorKind.BEGINS_WITH: ("Begins With", "^"),
    OperatorKind.EXISTS: ("Exists", "∃"),
    OperatorKind.NOT_EXISTS: ("Not Exists", "∄"),
}


class FilterCondition(BaseModel):
    """A single attribute condition as entered by the operator.

    Values are kept as the raw text the operator typed; typing happens at
    compile time.
    """

    attribute_name: str = Field(default="", description="Attribute the condition applies to")
    operator: OperatorKind = Field(default=OperatorKind.EQUALS, description="Comparison operator")
    value: str = Field(default="", description="Raw value text (ignored by Exists/Not Exists)")

    model_config = ConfigDict(
        validate_assignment=True
    )
