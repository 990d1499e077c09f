"""Unit tests for path expressions and tree matching."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from graphql_i18n.core.paths import (
    PathExpression,
    Segment,
    extract,
    flatten_keys,
    get_at,
    locate,
    parse_path,
)
from graphql_i18n.errors import ConfigError


@dataclass
class Author:
    name: str


@dataclass
class Book:
    id: str
    author: Author


class TestParsePath:
    def test_empty_text_is_empty_expression(self) -> None:
        assert parse_path("") == PathExpression()
        assert parse_path(None) == PathExpression()
        assert not parse_path("")

    def test_literal_and_wildcard_segments(self) -> None:
        path = parse_path("edges[].book")
        assert path.segments == (Segment("edges", wildcard=True), Segment("book"))
        assert path.has_wildcard
        assert path.anchor == "book"
        assert str(path) == "edges[].book"

    def test_anchor_of_trailing_wildcard_is_its_name(self) -> None:
        assert parse_path("data.items[]").anchor == "items"

    def test_anchor_of_empty_expression(self) -> None:
        assert PathExpression().anchor == ""

    @pytest.mark.parametrize("text", [".", "a..b", "a.", ".a", "[]", "a.[]"])
    def test_empty_segment_raises(self, text: str) -> None:
        with pytest.raises(ConfigError):
            parse_path(text)

    @pytest.mark.parametrize("text", [5, 0, ["a"]])
    def test_non_string_raises(self, text: object) -> None:
        with pytest.raises(ConfigError):
            parse_path(text)  # type: ignore[arg-type]

    @pytest.mark.parametrize("text", ["a[0]", "a[].b]", "a[b]"])
    def test_malformed_brackets_raise(self, text: str) -> None:
        with pytest.raises(ConfigError):
            parse_path(text)


class TestExtract:
    def test_empty_path_returns_whole_tree(self) -> None:
        tree = {"id": "1"}
        assert extract(tree, PathExpression()) is tree

    def test_empty_path_on_list_returns_list(self) -> None:
        tree = [{"id": "1"}, {"id": "2"}]
        assert extract(tree, PathExpression()) == tree

    def test_literal_path_returns_single_node(self) -> None:
        tree = {"data": {"book": {"id": "1"}}}
        assert extract(tree, parse_path("data.book")) == {"id": "1"}

    def test_wildcard_returns_list(self) -> None:
        tree = {"edges": [{"book": {"id": "1"}}, {"book": {"id": "2"}}]}
        assert extract(tree, parse_path("edges[].book")) == [{"id": "1"}, {"id": "2"}]

    def test_wildcard_with_single_element_still_returns_list(self) -> None:
        tree = {"edges": [{"book": {"id": "1"}}]}
        assert extract(tree, parse_path("edges[].book")) == [{"id": "1"}]

    def test_root_list_returns_list(self) -> None:
        tree = [{"book": {"id": "1"}}, {"book": {"id": "2"}}]
        assert extract(tree, parse_path("book")) == [{"id": "1"}, {"id": "2"}]

    def test_missing_intermediate_key_returns_none(self) -> None:
        assert extract({"data": {}}, parse_path("data.book.author")) is None
        assert extract({"data": None}, parse_path("data.book")) is None

    def test_missing_keys_in_some_elements_are_skipped(self) -> None:
        tree = {"edges": [{"book": {"id": "1"}}, {"other": 1}, {"book": None}]}
        assert extract(tree, parse_path("edges[].book")) == [{"id": "1"}]

    def test_list_valued_target_is_flattened(self) -> None:
        tree = {"shelves": [{"books": [{"id": "1"}, None]}, {"books": [{"id": "2"}]}]}
        assert extract(tree, parse_path("shelves[].books")) == [{"id": "1"}, {"id": "2"}]

    def test_literal_path_to_list_returns_the_list(self) -> None:
        tree = {"books": [{"id": "1"}]}
        assert extract(tree, parse_path("books")) == [{"id": "1"}]

    def test_nested_lists_of_any_depth(self) -> None:
        tree = {"a": [{"b": [{"c": {"id": "1"}}, {"c": {"id": "2"}}]}, {"b": [{"c": {"id": "3"}}]}]}
        assert extract(tree, parse_path("a[].b[].c")) == [{"id": "1"}, {"id": "2"}, {"id": "3"}]

    def test_object_attributes_are_followed(self) -> None:
        tree = {"book": Book(id="1", author=Author(name="a"))}
        assert extract(tree, parse_path("book.author")) == Author(name="a")


class TestLocate:
    def test_positions_address_each_match(self) -> None:
        tree = {"edges": [{"book": {"id": "1"}}, {"skip": True}, {"book": {"id": "3"}}]}
        found = locate(tree, parse_path("edges[].book"))
        assert [position for position, _ in found] == [("edges", 0, "book"), ("edges", 2, "book")]
        for position, node in found:
            assert get_at(tree, position) is node

    def test_root_list_positions_start_with_index(self) -> None:
        tree = [{"book": {"id": "1"}}, {"book": {"id": "2"}}]
        assert [p for p, _ in locate(tree, parse_path("book"))] == [(0, "book"), (1, "book")]

    def test_position_holding_a_list_is_returned_once(self) -> None:
        tree = {"data": {"books": [{"id": "1"}, {"id": "2"}]}}
        assert locate(tree, parse_path("data.books")) == [(("data", "books"), tree["data"]["books"])]

    def test_empty_path_locates_the_root(self) -> None:
        tree = {"id": "1"}
        assert locate(tree, PathExpression()) == [((), tree)]
        assert locate(None, PathExpression()) == []

    def test_no_match_is_empty(self) -> None:
        assert locate({"a": 1}, parse_path("b.c")) == []


class TestGetAt:
    def test_out_of_range_index_is_none(self) -> None:
        assert get_at({"a": [1]}, ("a", 3)) is None

    def test_index_on_mapping_is_none(self) -> None:
        assert get_at({"a": {"0": 1}}, ("a", 0)) is None


class TestFlattenKeys:
    def test_nested_mapping(self) -> None:
        assert flatten_keys({"name": "x", "author": {"name": "y", "bio": "z"}}) == {
            "name",
            "author.name",
            "author.bio",
        }

    def test_lists_use_indices(self) -> None:
        assert flatten_keys({"tags": ["a", "b"]}) == {"tags.0", "tags.1"}

    def test_empty_container_counts_as_leaf(self) -> None:
        assert flatten_keys({"author": {}}) == {"author"}

    def test_empty_data(self) -> None:
        assert flatten_keys({}) == set()
