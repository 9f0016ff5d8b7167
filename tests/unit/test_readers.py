"""
Unit tests for page readers built from read plans.
"""

from decimal import Decimal
from unittest.mock import Mock

from dynamo_explorer.execution import query_reader, reader_for_plan, scan_reader
from dynamo_explorer.models import FilterCondition, KeyAttribute, KeySchema, OperatorKind, Page
from dynamo_explorer.planning import compile_filters, plan_read


def cond(name, operator=OperatorKind.EQUALS, value=""):
    return FilterCondition(attribute_name=name, operator=operator, value=value)


SCHEMA = KeySchema(partition_key=KeyAttribute(name="pk", type="S"))


def make_gateway():
    gateway = Mock()
    gateway.read_page.return_value = Page()
    return gateway


class TestScanReader:
    """Test Scan request parameters."""

    def test_unfiltered(self):
        gateway = make_gateway()

        scan_reader(gateway, 'things')(None, 500)

        gateway.read_page.assert_called_once_with(
            'things',
            limit=500,
            filter_expression=None,
            expression_attribute_names=None,
            expression_attribute_values=None,
            cursor=None,
        )

    def test_unused_name_placeholders_are_not_sent(self):
        gateway = make_gateway()
        compiled = compile_filters([cond("a", value=""), cond("b", value="x")])

        scan_reader(gateway, 'things', compiled)({'pk': 'k'}, 100)

        kwargs = gateway.read_page.call_args.kwargs
        assert kwargs['filter_expression'] == "#attr1 = :val0"
        assert kwargs['expression_attribute_names'] == {"#attr1": "b"}
        assert kwargs['expression_attribute_values'] == {":val0": "x"}
        assert kwargs['cursor'] == {'pk': 'k'}


class TestQueryReader:
    """Test Query request parameters."""

    def test_key_and_residual_placeholders_are_merged(self):
        gateway = make_gateway()
        plan = plan_read(
            compile_filters([cond("pk", value="user#1"), cond("age", OperatorKind.GREATER_THAN, "30")]),
            SCHEMA,
        )

        query_reader(gateway, 'things', plan)(None, 500)

        gateway.read_page.assert_called_once_with(
            'things',
            limit=500,
            index_name=None,
            key_condition="#attr0 = :val0",
            filter_expression="#attr1 > :val1",
            expression_attribute_names={"#attr0": "pk", "#attr1": "age"},
            expression_attribute_values={":val0": "user#1", ":val1": Decimal("30")},
            cursor=None,
        )

    def test_reader_for_plan_dispatch(self):
        gateway = make_gateway()

        reader_for_plan(gateway, 'things', plan_read(compile_filters([cond("pk", value="a")]), SCHEMA))(None, 1)
        reader_for_plan(gateway, 'things', plan_read(compile_filters([cond("x", value="a")]), SCHEMA))(None, 1)

        first, second = gateway.read_page.call_args_list
        assert first.kwargs['key_condition'] == "#attr0 = :val0"
        assert 'key_condition' not in second.kwargs
