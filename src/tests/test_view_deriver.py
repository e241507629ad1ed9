"""Tests for the filter -> sort -> group view pipeline.

Tests coverage:
- Filter operators, passthrough rules, empty/non-empty partition
- Numeric vs lexical sorting, timestamp sorting, stability in both directions
- Group bucketing and bucket order
- Composability and non-mutation of inputs
- Filter value suggestions, summary line, option lists, DataFrame export
"""

import copy

import pytest

from models.table import PLACEHOLDER, ColumnDef, FilterOp, RowData, SortDirection, ViewParams
from views.deriver import (
    derive_view,
    filter_options,
    filter_rows,
    filter_value_suggestions,
    group_options,
    group_rows,
    sort_options,
    sort_rows,
    visible_summary,
)
from views.frame import GROUP_COLUMN, rows_to_frame, view_to_frame

COLUMNS = [
    ColumnDef(name="Name", property_name="Name", type="title"),
    ColumnDef(name="Score", property_name="Score", type="number"),
    ColumnDef(name="Status", property_name="Status", type="status"),
    ColumnDef(name="Done", property_name="Done", type="checkbox"),
]


def _row(record_id, name, score, status, created=None, edited=None):
    return RowData(
        record_id=record_id,
        cells={"Name": name, "Score": score, "Status": status, "Done": "No"},
        created_at=created,
        last_edited_at=edited,
    )


@pytest.fixture
def rows():
    return [
        _row("r1", "alpha", "10", "Done", "2024-01-03T00:00:00.000Z", "2024-02-01T00:00:00.000Z"),
        _row("r2", "Beta", "2", "Todo", "2024-01-01T00:00:00.000Z", "2024-02-03T00:00:00.000Z"),
        _row("r3", "gamma", "", "Done", "2024-01-02T00:00:00.000Z", "2024-02-02T00:00:00.000Z"),
        _row("r4", "Alphabet", "2", "", "2024-01-04T00:00:00.000Z", "2024-02-04T00:00:00.000Z"),
        _row("r5", "delta", "abc", "In progress", "2024-01-05T00:00:00.000Z", "2024-02-05T00:00:00.000Z"),
    ]


def _ids(rows):
    return [r.record_id for r in rows]


class TestFilter:
    def test_no_filter_key_is_noop(self, rows):
        assert filter_rows(rows, COLUMNS, ViewParams()) == rows

    def test_unknown_column_is_noop(self, rows):
        params = ViewParams(filter_key="Nope", filter_value="x")
        assert filter_rows(rows, COLUMNS, params) == rows

    def test_contains_case_insensitive(self, rows):
        params = ViewParams(filter_key="Name", filter_op=FilterOp.CONTAINS, filter_value="ALPHA")
        assert _ids(filter_rows(rows, COLUMNS, params)) == ["r1", "r4"]

    def test_equals_case_insensitive(self, rows):
        params = ViewParams(filter_key="Name", filter_op=FilterOp.EQUALS, filter_value="beta")
        assert _ids(filter_rows(rows, COLUMNS, params)) == ["r2"]

    def test_blank_value_passes_through(self, rows):
        for op in (FilterOp.CONTAINS, FilterOp.EQUALS):
            params = ViewParams(filter_key="Name", filter_op=op, filter_value="   ")
            assert filter_rows(rows, COLUMNS, params) == rows

    def test_is_empty_ignores_value(self, rows):
        params = ViewParams(filter_key="Status", filter_op=FilterOp.IS_EMPTY, filter_value="Done")
        assert _ids(filter_rows(rows, COLUMNS, params)) == ["r4"]

    def test_placeholder_counts_as_empty(self):
        rows = [RowData("a", {"Status": PLACEHOLDER}), RowData("b", {"Status": "x"})]
        params = ViewParams(filter_key="Status", filter_op=FilterOp.IS_EMPTY)
        assert _ids(filter_rows(rows, COLUMNS, params)) == ["a"]

    def test_empty_partition(self, rows):
        empty = filter_rows(rows, COLUMNS, ViewParams(filter_key="Score", filter_op=FilterOp.IS_EMPTY))
        not_empty = filter_rows(rows, COLUMNS, ViewParams(filter_key="Score", filter_op=FilterOp.IS_NOT_EMPTY))
        assert not set(_ids(empty)) & set(_ids(not_empty))
        assert sorted(_ids(empty) + _ids(not_empty)) == sorted(_ids(rows))

    def test_unknown_operator_is_noop(self, rows):
        params = ViewParams(filter_key="Name", filter_op="starts_with", filter_value="a")
        assert filter_rows(rows, COLUMNS, params) == rows


class TestSort:
    def test_no_sort_key_is_noop(self, rows):
        assert sort_rows(rows, COLUMNS, ViewParams()) == rows

    def test_numeric_column_sorts_numerically(self):
        rows = [RowData("ten", {"Score": "10"}), RowData("two", {"Score": "2"})]
        assert _ids(sort_rows(rows, COLUMNS, ViewParams(sort_key="Score"))) == ["two", "ten"]

    def test_unparseable_numbers_sort_as_zero(self, rows):
        # r3 "" and r5 "abc" both count as 0 and keep their prior order
        assert _ids(sort_rows(rows, COLUMNS, ViewParams(sort_key="Score"))) == ["r3", "r5", "r2", "r4", "r1"]

    def test_text_sorts_case_insensitive(self, rows):
        assert _ids(sort_rows(rows, COLUMNS, ViewParams(sort_key="Name"))) == ["r1", "r4", "r2", "r5", "r3"]

    def test_descending(self, rows):
        params = ViewParams(sort_key="Name", sort_direction=SortDirection.DESCENDING)
        assert _ids(sort_rows(rows, COLUMNS, params)) == ["r3", "r5", "r2", "r4", "r1"]

    @pytest.mark.parametrize("key", ["created_time", "createdAt"])
    def test_created_timestamp(self, rows, key):
        assert _ids(sort_rows(rows, COLUMNS, ViewParams(sort_key=key))) == ["r2", "r3", "r1", "r4", "r5"]

    def test_last_edited_descending(self, rows):
        params = ViewParams(sort_key="lastEditedAt", sort_direction=SortDirection.DESCENDING)
        assert _ids(sort_rows(rows, COLUMNS, params)) == ["r5", "r4", "r2", "r3", "r1"]

    @pytest.mark.parametrize("direction", list(SortDirection))
    def test_stable_for_ties(self, rows, direction):
        # r2 and r4 share Score "2"
        ordered = _ids(sort_rows(rows, COLUMNS, ViewParams(sort_key="Score", sort_direction=direction)))
        assert ordered.index("r2") < ordered.index("r4")


class TestGroup:
    def test_no_group_key_single_group(self, rows):
        groups = group_rows(rows, COLUMNS, ViewParams())
        assert len(groups) == 1
        assert groups[0].value == ""
        assert list(groups[0].rows) == rows

    def test_unknown_group_key_single_group(self, rows):
        assert len(group_rows(rows, COLUMNS, ViewParams(group_key="Nope"))) == 1

    def test_buckets_sorted_lexically(self, rows):
        groups = group_rows(rows, COLUMNS, ViewParams(group_key="Status"))
        assert [g.value for g in groups] == ["", "Done", "In progress", "Todo"]
        assert _ids(groups[1].rows) == ["r1", "r3"]

    def test_numeric_buckets(self):
        rows = [RowData("a", {"Score": "10"}), RowData("b", {"Score": "9"}), RowData("c", {"Score": "9"})]
        groups = group_rows(rows, COLUMNS, ViewParams(group_key="Score"))
        assert [g.value for g in groups] == ["9", "10"]
        assert _ids(groups[0].rows) == ["b", "c"]

    def test_missing_cell_buckets_under_placeholder(self):
        rows = [RowData("a", {}), RowData("b", {"Status": "Done"})]
        groups = group_rows(rows, COLUMNS, ViewParams(group_key="Status"))
        assert [g.value for g in groups] == ["Done", PLACEHOLDER]


class TestDeriveView:
    def test_group_concatenation_matches_sorted(self, rows):
        params = ViewParams(
            sort_key="Score",
            sort_direction=SortDirection.DESCENDING,
            group_key="Status",
            filter_key="Name",
            filter_op=FilterOp.CONTAINS,
            filter_value="a",
        )
        view = derive_view(COLUMNS, rows, params)
        assert view.sorted == tuple(sort_rows(filter_rows(rows, COLUMNS, params), COLUMNS, params))
        for group in view.groups:
            positions = [view.sorted.index(r) for r in group.rows]
            assert positions == sorted(positions)
        assert sorted(_ids(r for g in view.groups for r in g.rows)) == sorted(_ids(view.sorted))

    def test_inputs_not_mutated(self, rows):
        snapshot = copy.deepcopy(rows)
        params = ViewParams(sort_key="Name", group_key="Status", filter_key="Score", filter_op=FilterOp.IS_NOT_EMPTY)
        derive_view(COLUMNS, rows, params)
        assert rows == snapshot

    def test_summary(self, rows):
        params = ViewParams(filter_key="Status", filter_op=FilterOp.EQUALS, filter_value="done")
        view = derive_view(COLUMNS, rows, params)
        assert visible_summary(view, params) == "Showing 2 of 5"
        assert visible_summary(derive_view(COLUMNS, rows, ViewParams()), ViewParams()) == ""


class TestViewOptions:
    def test_filter_value_suggestions(self, rows):
        assert filter_value_suggestions(rows, "Status") == ["Done", "In progress", "Todo"]
        assert filter_value_suggestions(rows, "") == []

    def test_suggestions_capped(self):
        rows = [RowData(str(i), {"Name": f"n{i:03d}"}) for i in range(80)]
        assert len(filter_value_suggestions(rows, "Name")) == 50

    def test_sort_option_round_trip(self):
        params = ViewParams().with_sort_option("Score:desc")
        assert params.sort_key == "Score"
        assert params.sort_direction is SortDirection.DESCENDING
        assert params.sort_option == "Score:desc"
        assert ViewParams().with_sort_option("").sort_key == ""
        assert ViewParams().with_sort_option("Name").sort_option == "Name:asc"

    def test_group_and_filter_options(self):
        assert group_options(COLUMNS[:2]) == [("", "Group: None"), ("Name", "By Name"), ("Score", "By Score")]
        assert filter_options(COLUMNS[:1]) == [("", "Filter: None"), ("Name", "Name")]

    def test_sort_options_list(self):
        options = [o for o, _ in sort_options(COLUMNS[:1])]
        assert options == [
            "",
            "Name:asc",
            "Name:desc",
            "created_time:asc",
            "created_time:desc",
            "last_edited_time:asc",
            "last_edited_time:desc",
        ]


class TestFrameExport:
    def test_rows_to_frame(self, rows):
        frame = rows_to_frame(COLUMNS, rows)
        assert list(frame.columns) == ["Name", "Score", "Status", "Done"]
        assert frame.index.name == "record_id"
        assert frame.loc["r1", "Score"] == "10"

    def test_formatted_frame(self, rows):
        frame = rows_to_frame(COLUMNS, rows, formatted=True)
        assert frame.loc["r3", "Score"] == PLACEHOLDER
        assert frame.loc["r1", "Done"] == PLACEHOLDER

    def test_grouped_view_frame(self, rows):
        view = derive_view(COLUMNS, rows, ViewParams(group_key="Status"))
        frame = view_to_frame(COLUMNS, view, formatted=False)
        assert list(frame.columns)[0] == GROUP_COLUMN
        assert list(frame.index) == ["r4", "r1", "r3", "r5", "r2"]

    def test_ungrouped_view_frame(self, rows):
        frame = view_to_frame(COLUMNS, derive_view(COLUMNS, rows, ViewParams()))
        assert GROUP_COLUMN not in frame.columns
        assert len(frame) == 5
