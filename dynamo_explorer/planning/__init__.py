"""
Filter compilation and read planning.

Both stages are pure functions over their inputs.
"""

from .compiler import coerce_value, compile_filters, has_filters, summarize_filters
from .planner import describe_plan, plan_read

__all__ = [
    "coerce_value",
    "compile_filters",
    "describe_plan",
    "has_filters",
    "plan_read",
    "summarize_filters",
]
