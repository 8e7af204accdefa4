"""Tests for fragment collection and expansion."""

import logging

from graphql import parse

from gql_irgen.core.fragments import collect_fragments, expand_fragments


def operation_and_fragments(source):
    document = parse(source, no_location=True)
    return document.definitions[0], collect_fragments(document.definitions)


def names(selections):
    return [selection.name.value for selection in selections]


class TestCollectFragments:
    """Tests for collect_fragments."""

    def test_collects_by_name(self):
        _, fragments = operation_and_fragments(
            "query { a } fragment F on T { b c } fragment G on T { d }"
        )
        assert sorted(fragments) == ["F", "G"]
        assert names(fragments["F"]) == ["b", "c"]


class TestExpandFragments:
    """Tests for expand_fragments."""

    def test_no_spreads_unchanged(self):
        operation, fragments = operation_and_fragments("query { a b { c } d }")
        selections = operation.selection_set.selections
        expanded = expand_fragments(fragments, selections)
        assert len(expanded) == len(selections)
        assert all(new is old for new, old in zip(expanded, selections))

    def test_spread_inlined_in_order(self):
        operation, fragments = operation_and_fragments(
            "query { a ...F z } fragment F on T { b c d }"
        )
        expanded = expand_fragments(fragments, operation.selection_set.selections)
        assert names(expanded) == ["a", "b", "c", "d", "z"]

    def test_nested_spreads(self):
        operation, fragments = operation_and_fragments(
            "query { ...F } fragment F on T { a ...G } fragment G on T { b ...H } fragment H on T { c }"
        )
        expanded = expand_fragments(fragments, operation.selection_set.selections)
        assert names(expanded) == ["a", "b", "c"]

    def test_only_current_level_expanded(self):
        operation, fragments = operation_and_fragments(
            "query { a { ...F } } fragment F on T { b }"
        )
        expanded = expand_fragments(fragments, operation.selection_set.selections)
        assert names(expanded) == ["a"]
        assert expanded[0].selection_set.selections[0].name.value == "F"

    def test_input_not_modified(self):
        operation, fragments = operation_and_fragments("query { ...F } fragment F on T { a }")
        selections = list(operation.selection_set.selections)
        expand_fragments(fragments, selections)
        assert len(selections) == 1
        assert selections[0].name.value == "F"

    def test_unknown_fragment_skipped(self):
        operation, fragments = operation_and_fragments("query { a ...Missing b }")
        expanded = expand_fragments(fragments, operation.selection_set.selections)
        assert names(expanded) == ["a", "b"]

    def test_cycle_cut(self, caplog):
        operation, fragments = operation_and_fragments(
            "query { ...F } fragment F on T { a ...F }"
        )
        with caplog.at_level(logging.WARNING):
            expanded = expand_fragments(fragments, operation.selection_set.selections)
        assert names(expanded) == ["a"]
        assert "fragment F spreads itself" in caplog.text

    def test_none(self):
        assert expand_fragments({}, None) == []
