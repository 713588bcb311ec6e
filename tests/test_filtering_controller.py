import pytest

from gridquery.data.modifiers import FilterCondition, FilterModifier, FilterRule
from gridquery.querying.errors import InvalidFilterConditionError
from gridquery.querying.querying_controller import QueryingController


def test_set_filter_builds_modifier(table):
    q = QueryingController(table)
    q.filtering.set_filter("v", "lessThan", 9)
    assert q.should_be_updated is True
    assert q.filtering.modifier == FilterModifier((FilterRule("v", FilterCondition.LESS_THAN, 9),))
    assert q.proceed().get_column("id") == [1, 3, 5]


def test_rules_are_combined_with_and(table):
    q = QueryingController(table)
    q.filtering.set_filter("v", "lessThan", 9)
    q.filtering.set_filter("name", "contains", "E")
    assert q.proceed().get_column("id") == [1, 3, 5]
    q.filtering.set_filter("name", "beginsWith", "ch")
    assert q.proceed().get_column("id") == [5]


def test_replacing_rule_keeps_position(table):
    q = QueryingController(table)
    q.filtering.set_filter("v", "lessThan", 9)
    q.filtering.set_filter("name", "notEmpty")
    q.filtering.set_filter("v", "greaterThan", 1)
    assert [r.column_id for r in q.filtering.current_filtering.rules] == ["v", "name"]
    assert q.filtering.current_filtering.rule_for("v").condition is FilterCondition.GREATER_THAN


def test_same_filter_twice_is_not_dirty(table):
    q = QueryingController(table)
    q.filtering.set_filter("v", "equals", 9)
    q.proceed()
    q.filtering.set_filter("v", "equals", 9)
    assert q.should_be_updated is False


def test_clear_filter(table):
    q = QueryingController(table)
    q.filtering.set_filter("v", "lessThan", 9)
    q.filtering.set_filter("id", "doesNotEqual", 1)
    q.filtering.clear_filter("v")
    assert [r.column_id for r in q.filtering.current_filtering.rules] == ["id"]
    q.filtering.clear_filter()
    assert q.filtering.modifier is None
    assert q.proceed().get_row_count() == 5


def test_invalid_condition_rejected(table):
    q = QueryingController(table)
    with pytest.raises(InvalidFilterConditionError):
        q.filtering.set_filter("v", "roughly", 3)
    assert q.filtering.current_filtering is None


def test_set_filtering_wholesale(table):
    q = QueryingController(table)
    q.filtering.set_filtering([FilterRule("v", "greaterThanOrEqualTo", 5)])
    assert q.filtering.current_filtering.rules[0].condition is FilterCondition.GREATER_THAN_OR_EQUAL_TO
    assert q.proceed().get_column("id") == [1, 2, 4]


def test_load_options_in_declaration_order(table):
    q = QueryingController(
        table,
        {
            "name": {"filtering": {"condition": "endsWith", "value": "o"}},
            "v": {"filtering": {"condition": "lessThanOrEqualTo", "value": 9}},
            "id": {"filtering": {}},
        },
    )
    q.load_options()
    assert [r.column_id for r in q.filtering.current_filtering.rules] == ["name", "v"]
    assert q.proceed().get_column("id") == [3, 4]


def test_reload_keeps_api_filters(table):
    q = QueryingController(table, {"v": {"filtering": {"condition": "lessThan", "value": 9}}})
    q.load_options()
    q.filtering.clear_filter()
    q.proceed()
    q.load_options()
    assert q.filtering.modifier is None
    assert q.should_be_updated is False


def test_filtering_changed_event(table, bus, recorded):
    q = QueryingController(table, event_bus=bus)
    q.filtering.set_filter("v", "lessThan", 9)
    assert recorded == [
        (
            "filtering_changed",
            {"rules": [{"column_id": "v", "condition": "lessThan", "value": 9}]},
        )
    ]
