"""
Unit tests for item conversion and write-side input checks.
"""

from decimal import Decimal

import pytest
from boto3.dynamodb.types import Binary

from dynamo_explorer.exceptions import ValidationError
from dynamo_explorer.utils import (
    format_value,
    fuzzy_find,
    item_to_json,
    json_to_item,
    missing_key_attributes,
    to_plain_value,
    validate_table_name,
)


class TestToPlainValue:
    """Test DynamoDB value to JSON-friendly value conversion."""

    def test_decimals(self):
        assert to_plain_value(Decimal("3")) == 3
        assert isinstance(to_plain_value(Decimal("3")), int)
        assert to_plain_value(Decimal("2.5")) == 2.5

    def test_nested_structures(self):
        value = {'tags': {'b', 'a'}, 'scores': [Decimal(1), {'x': Decimal("0.5")}]}

        assert to_plain_value(value) == {'tags': ['a', 'b'], 'scores': [1, {'x': 0.5}]}

    def test_binary(self):
        assert to_plain_value(Binary(b"hi")) == "aGk="
        assert to_plain_value(b"hi") == "aGk="


class TestJsonConversion:
    """Test item viewer and editor conversions."""

    def test_item_to_json_sorts_keys(self):
        text = item_to_json({'b': Decimal(2), 'a': 'x'}, indent=False)

        assert text == '{"a": "x", "b": 2}'

    def test_item_to_json_indents(self):
        assert item_to_json({'a': 1}) == '{\n  "a": 1\n}'

    def test_json_to_item_uses_decimal(self):
        item = json_to_item('{"id": "a", "n": 1, "price": 9.99, "ok": true, "none": null}')

        assert item == {'id': 'a', 'n': Decimal(1), 'price': Decimal("9.99"), 'ok': True, 'none': None}
        assert isinstance(item['price'], Decimal)

    def test_invalid_json(self):
        with pytest.raises(ValidationError, match="Invalid JSON"):
            json_to_item('{"id": ')

    def test_non_object_json(self):
        with pytest.raises(ValidationError, match="must be an object"):
            json_to_item('[1, 2]')

    def test_viewer_round_trip(self):
        item = {'id': 'a', 'n': Decimal(5), 'nested': {'price': Decimal("1.25")}}

        assert json_to_item(item_to_json(item)) == item


class TestFormatValue:
    """Test table cell rendering."""

    def test_values(self):
        assert format_value(None) == "null"
        assert format_value("text") == "text"
        assert format_value(Decimal(7)) == "7"
        assert format_value({'a': 1}) == '{"a": 1}'

    def test_truncation(self):
        assert format_value("x" * 60, max_len=10) == "xxxxxxx..."
        assert format_value("x" * 60, max_len=0) == "x" * 60


class TestWriteChecks:
    """Test table name validation and key presence checks."""

    @pytest.mark.parametrize("name", ["abc", "my-table_1.v2", "x" * 255])
    def test_valid_table_names(self, name):
        validate_table_name(name)

    @pytest.mark.parametrize("name,message", [
        ("", "cannot be empty"),
        ("ab", "between 3 and 255"),
        ("x" * 256, "between 3 and 255"),
        ("bad name", "can only contain"),
        ("bad/name", "can only contain"),
    ])
    def test_invalid_table_names(self, name, message):
        with pytest.raises(ValidationError, match=message):
            validate_table_name(name)

    def test_missing_key_attributes(self):
        item = {'pk': 'a', 'sk': '', 'n': Decimal(0)}

        assert missing_key_attributes(item, ['pk', 'sk', 'other']) == ['sk', 'other']
        assert missing_key_attributes(item, ['pk', 'n']) == []


class TestFuzzyFind:
    """Test table name ranking for the table finder."""

    def test_empty_pattern_returns_every_name(self):
        matches = fuzzy_find("", ["orders", "accounts"])

        assert [(m.name, m.score, m.matched_indices) for m in matches] == [
            ("orders", 0, ()),
            ("accounts", 0, ()),
        ]

    def test_prefix_match_scores_highest(self):
        matches = fuzzy_find("ord", ["customer_orders", "users", "order_items_archive", "orders"])

        assert [(m.name, m.score) for m in matches] == [
            ("orders", 229),
            ("order_items_archive", 216),
            ("customer_orders", 115),
        ]

    def test_matched_indices_are_first_occurrences(self):
        match = fuzzy_find("ord", ["customer_orders"])[0]

        assert match.matched_indices == (4, 7, 11)

    def test_case_insensitive(self):
        assert [m.name for m in fuzzy_find("ORD", ["Orders", "users"])] == ["Orders"]

    def test_word_boundaries_earn_bonuses(self):
        matches = fuzzy_find("oi", ["orderitems", "OrderItems", "order_items"])

        assert [(m.name, m.score) for m in matches] == [
            ("order_items", 159),
            ("OrderItems", 155),
            ("orderitems", 140),
        ]

    def test_exact_match_first(self):
        assert fuzzy_find("orders", ["orders_v2", "orders"])[0].name == "orders"

    def test_characters_must_appear_in_order(self):
        assert fuzzy_find("sro", ["orders"]) == []

    def test_equal_scores_keep_listing_order(self):
        assert [m.name for m in fuzzy_find("a", ["ba", "ca"])] == ["ba", "ca"]

    def test_long_names_still_match(self):
        name = "t" + "x" * 199

        matches = fuzzy_find("t", [name])

        assert [m.name for m in matches] == [name]
        assert matches[0].score < 0
