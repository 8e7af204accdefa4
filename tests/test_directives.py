"""Tests for directive collection."""

import logging

import pytest
from graphql import parse

from gql_irgen.core.directives import collect_directives, merge_directives
from gql_irgen.core.errors import DirectiveValueError


def field_directives(sdl):
    """Directives of the first field of the first type in sdl."""
    document = parse(sdl, no_location=True)
    return document.definitions[0].fields[0].directives


class TestCollectDirectives:
    """Tests for collect_directives."""

    def test_scalar_literals(self):
        directives = field_directives(
            'type T { f: Int @size(max: 64, unit: BYTES, label: "x", ratio: 1.5, strict: true, none: null) }'
        )
        assert collect_directives(directives) == {
            "size": {
                "max": 64,
                "unit": "BYTES",
                "label": "x",
                "ratio": 1.5,
                "strict": True,
                "none": None,
            }
        }

    def test_list_becomes_tag_set(self):
        directives = field_directives('type T { f: Int @tags(of: ["a", B]) }')
        assert collect_directives(directives) == {"tags": {"of": {"a": 1, "B": 1}}}

    def test_unsupported_list_element_skipped(self, caplog):
        directives = field_directives('type T { f: Int @tags(of: ["a", 1]) }')
        with caplog.at_level(logging.WARNING):
            result = collect_directives(directives)
        assert result == {"tags": {"of": {"a": 1}}}
        assert "unsupported list element" in caplog.text

    def test_object_recurses(self):
        directives = field_directives('type T { f: Int @db(index: {name: "ix", order: 2}) }')
        assert collect_directives(directives) == {"db": {"index": {"name": "ix", "order": 2}}}

    def test_variable_gives_name(self):
        document = parse("query Q($v: Boolean!) { f @include(if: $v) }", no_location=True)
        selection = document.definitions[0].selection_set.selections[0]
        assert collect_directives(selection.directives) == {"include": {"if": "v"}}

    def test_directive_without_arguments(self):
        directives = field_directives("type T { f: Int @deprecated }")
        assert collect_directives(directives) == {"deprecated": {}}

    def test_negative_int_is_fatal(self):
        directives = field_directives("type T { f: Int @size(max: -1) }")
        with pytest.raises(DirectiveValueError) as exc_info:
            collect_directives(directives)
        assert exc_info.value.directive == "size"
        assert exc_info.value.argument == "max"
        assert "not a valid unsigned integer" in str(exc_info.value)

    def test_too_large_int_is_fatal(self):
        directives = field_directives("type T { f: Int @size(max: 18446744073709551616) }")
        with pytest.raises(DirectiveValueError):
            collect_directives(directives)

    def test_max_unsigned_accepted(self):
        directives = field_directives("type T { f: Int @size(max: 18446744073709551615) }")
        assert collect_directives(directives) == {"size": {"max": 18446744073709551615}}

    def test_merge_into_existing(self):
        directives = field_directives("type T { f: Int @size(max: 8) @pk }")
        existing = {"size": {"max": 1, "min": 0}}
        result = collect_directives(directives, into=existing)
        assert result == {"size": {"max": 8, "min": 0}, "pk": {}}
        assert existing == {"size": {"max": 1, "min": 0}}

    def test_none(self):
        assert collect_directives(None) == {}


class TestMergeDirectives:
    """Tests for merge_directives."""

    def test_source_entries_win(self):
        target = {"mask": {"with": "x"}, "size": {"max": 1}}
        source = {"size": {"max": 64}}
        assert merge_directives(target, source) == {"mask": {"with": "x"}, "size": {"max": 64}}

    def test_inputs_not_modified(self):
        target = {"a": {}}
        source = {"b": {"tags": {"x": 1}}}
        merged = merge_directives(target, source)
        merged["b"]["tags"]["y"] = 1
        assert target == {"a": {}}
        assert source == {"b": {"tags": {"x": 1}}}
