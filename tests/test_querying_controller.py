import pytest

from gridquery.data.data_table import DataTable, UnknownColumnError
from gridquery.data.modifiers import ChainModifier, FilterModifier, SortModifier
from gridquery.querying.querying_controller import QueryingController, QueryingState


def _ids(view):
    return view.get_column("id")


def test_state_machine(table):
    q = QueryingController(table)
    assert q.state is QueryingState.UNCONFIGURED
    q.load_options()
    assert q.state is QueryingState.DIRTY
    q.proceed()
    assert q.state is QueryingState.IDLE
    q.sorting.set_sorting("asc", "v")
    assert q.state is QueryingState.DIRTY
    q.proceed()
    assert q.state is QueryingState.IDLE


def test_no_op_pipeline_returns_table_order(table):
    q = QueryingController(table, {"v": {}, "name": {"sorting": {}}})
    q.load_options()
    assert q.get_modifiers() == []
    assert q.get_pipeline().modifiers == ()
    view = q.proceed()
    assert view.get_rows() == table.get_rows()
    assert view is not table


def test_filter_applied_before_sort(table):
    q = QueryingController(table)
    q.filtering.set_filter("v", "lessThan", 9)
    q.sorting.set_sorting("desc", "v")
    modifiers = q.get_modifiers()
    assert isinstance(modifiers[0], FilterModifier)
    assert isinstance(modifiers[1], SortModifier)
    assert _ids(q.proceed()) == [1, 5, 3]


def test_comparator_only_sees_filtered_rows(table):
    seen = set()

    def tracking_compare(a, b):
        seen.update((a, b))
        return (a > b) - (a < b)

    q = QueryingController(
        table,
        {
            "v": {
                "sorting": {"order": "desc", "compare": tracking_compare},
                "filtering": {"condition": "lessThan", "value": 9},
            }
        },
    )
    q.load_options()
    view = q.proceed()
    assert _ids(view) == [1, 5, 3]
    assert 9 not in seen
    # Sorting the full table first would have compared the filtered-out rows
    sort_first = table.apply_modifier(SortModifier("v", "desc", tracking_compare))
    assert 9 in seen
    assert _ids(sort_first)[:2] == [2, 4]


def test_proceed_skips_work_when_clean(table):
    q = QueryingController(table)
    q.load_options()
    first = q.proceed()
    assert q.proceed() is first
    forced = q.proceed(force=True)
    assert forced is not first
    assert forced.get_rows() == first.get_rows()


def test_proceed_propagates_unknown_column(table):
    q = QueryingController(table)
    q.load_options()
    previous = q.proceed()
    q.sorting.set_sorting("asc", "missing")
    with pytest.raises(UnknownColumnError):
        q.proceed()
    assert q.should_be_updated is True
    assert q.presentation_table is previous


def test_source_table_untouched(table):
    before = table.get_rows()
    q = QueryingController(table)
    q.sorting.set_sorting("desc", "name")
    q.filtering.set_filter("v", "greaterThan", 1)
    q.proceed()
    assert table.get_rows() == before


def test_set_data_table_marks_dirty(table):
    q = QueryingController(table)
    q.sorting.set_sorting("asc", "v")
    q.proceed()
    q.set_data_table(DataTable({"id": [7, 6], "v": [2, 1]}))
    assert q.should_be_updated is True
    assert _ids(q.proceed()) == [6, 7]


def test_column_options_map_is_read_only(table):
    q = QueryingController(table, {"v": {"sorting": {"order": "asc"}}})
    with pytest.raises(TypeError):
        q.column_options_map["id"] = None  # type: ignore[index]
    assert list(q.column_options_map) == ["v"]


def test_comparator_config_change_reflected_without_state_change(table):
    def reverse_compare(a, b):
        return (b > a) - (b < a)

    q = QueryingController(table, {"v": {"sorting": {"order": "asc"}}})
    q.load_options()
    q.proceed()
    q.set_column_options({"v": {"sorting": {"order": "asc", "compare": reverse_compare}}})
    # Same column/order: sorting state unchanged, modifier picks up the comparator
    assert q.sorting.modifier.compare is reverse_compare
    assert q.should_be_updated is True
    assert _ids(q.proceed()) == [2, 4, 1, 5, 3]


def test_view_updated_event(table, bus, recorded):
    q = QueryingController(table, event_bus=bus)
    q.filtering.set_filter("v", "lessThan", 9)
    recorded.clear()
    q.proceed()
    q.proceed()
    assert recorded == [("view_updated", {"row_count": 3})]


def test_empty_table_pipeline():
    q = QueryingController(DataTable({"v": []}), {"v": {"sorting": {"order": "asc"}}})
    q.load_options()
    assert q.proceed().get_row_count() == 0


def test_host_recomputing_from_sorting_event_sees_new_order(table, bus):
    q = QueryingController(table, event_bus=bus)
    q.load_options()
    q.proceed()
    bus.subscribe("sorting_changed", lambda evt: q.proceed())
    q.sorting.set_sorting("desc", "v")
    assert _ids(q.presentation_table) == [2, 4, 1, 5, 3]
    assert q.should_be_updated is False


def test_host_recomputing_from_filtering_event_sees_new_rows(table, bus):
    q = QueryingController(table, event_bus=bus)
    q.load_options()
    q.proceed()
    bus.subscribe("filtering_changed", lambda evt: q.proceed())
    q.filtering.set_filter("v", "lessThan", 9)
    assert q.presentation_table.get_row_count() == 3
    assert q.should_be_updated is False


def _rock_paper_scissors(a, b):
    # Intransitive: each hand beats exactly one other, so results depend on the row set
    beats = {("rock", "paper"), ("paper", "scissors"), ("scissors", "rock")}
    if a == b:
        return 0
    return -1 if (a, b) in beats else 1


def test_filter_then_sort_differs_from_sort_then_filter():
    table = DataTable({"id": [1, 2, 3], "hand": ["rock", "scissors", "paper"]})
    q = QueryingController(
        table,
        {
            "hand": {
                "sorting": {"order": "asc", "compare": _rock_paper_scissors},
                "filtering": {"condition": "doesNotEqual", "value": "scissors"},
            }
        },
    )
    q.load_options()
    filter_first = q.proceed()
    sort_first = table.apply_modifier(
        ChainModifier((q.sorting.modifier, q.filtering.modifier))
    )
    assert _ids(filter_first) == [1, 3]
    assert _ids(sort_first) == [3, 1]
