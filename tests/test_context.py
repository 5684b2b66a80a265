# tests/test_context.py - Context classifier tests
"""
Tests for classifying the cursor position.
"""
import pytest
from conftest import locate

from pipecomp.completion import (
    NoContext,
    StageContext,
    StageName,
    StagesContext,
    classify,
    find_cursor_node,
)
from pipecomp.completion.context import ancestor_path, detect_stage, is_stages_context
from pipecomp.parser import NodeKind


def context_of(parser, marked):
    tree, node = locate(parser, marked)
    return classify(tree, node)


class TestStagesContext:
    """Tests for the slot where a new stage is typed."""

    @pytest.mark.parametrize("marked", [
        "[{se|}]",
        "[{ | }]",
        "[{$search: {}}, { | }]",
        "[{$limit: 1}, {$li|}]",
        "[\n  {\n    |\n  }\n]",
    ])
    def test_stages_context(self, parser, marked):
        """Test positions where a stage name is expected."""
        assert context_of(parser, marked) == StagesContext()

    def test_collapsed_empty_object(self, parser):
        """Test that "{}" with nothing between the braces is not a slot."""
        assert context_of(parser, "[{|}]") == NoContext()

    def test_second_property(self, parser):
        """Test that a stage object with two keys is not a slot."""
        assert context_of(parser, "[{$search: 1, $li|}]") == NoContext()

    def test_value_position(self, parser):
        """Test a literal stage value."""
        assert context_of(parser, "[{$limit: 1|0}]") == NoContext()


class TestStageContext:
    """Tests for positions inside a stage body."""

    def test_search_body(self, parser):
        """Test a key inside $search."""
        assert context_of(parser, "[{$search:{te|}}]") == StageContext(StageName.SEARCH)

    def test_limit_body(self, parser):
        """Test that any recognized stage is detected."""
        assert context_of(parser, "[{$limit:{te|}}]") == StageContext(StageName.LIMIT)

    def test_multi_line_body(self, parser, fixtures_dir):
        """Test a stage body spread over several lines."""
        text = (fixtures_dir / "typing_stage_body.js").read_text()
        tree = parser.parse(text)
        node = find_cursor_node(tree, 4, 8)

        assert node.name == "te"
        assert classify(tree, node) == StageContext(StageName.SEARCH)

    def test_unknown_stage(self, parser):
        """Test a stage name that is not recognized."""
        assert context_of(parser, "[{$match:{te|}}]") == NoContext()

    def test_stage_with_sibling_key(self, parser):
        """Test a stage object holding more than one key."""
        assert context_of(parser, "[{$search:{te|}, $limit: 1}]") == NoContext()

    def test_nested_operator(self, parser):
        """Test a key two levels inside a stage."""
        assert context_of(parser, "[{$search:{text: {qu|}}}]") == NoContext()

    def test_string_stage_key(self, parser):
        """Test that only identifier keys name stages."""
        assert context_of(parser, '[{"$search":{te|}}]') == NoContext()


class TestNoContext:
    """Tests for documents outside the recognized shape."""

    def test_no_array(self, parser):
        """Test a top-level object."""
        assert context_of(parser, "{se|}") == NoContext()

    def test_nested_array(self, parser):
        """Test an array inside the pipeline."""
        assert context_of(parser, "[[{se|}]]") == NoContext()

    def test_no_cursor_node(self, parser):
        """Test that a missing cursor node has no context."""
        tree = parser.parse("[]")
        assert classify(tree, None) == NoContext()


class TestHelpers:
    """Tests for the classifier helpers."""

    def test_ancestor_path(self, parser):
        tree, node = locate(parser, "[{se|}]")

        assert ancestor_path(tree, node) == (
            NodeKind.IDENTIFIER,
            NodeKind.PROPERTY,
            NodeKind.OBJECT_EXPRESSION,
            NodeKind.EXPRESSION_STATEMENT,
            NodeKind.PROGRAM,
        )
        assert ancestor_path(tree, node, 2) == (NodeKind.IDENTIFIER, NodeKind.PROPERTY)

    def test_detect_stage(self, parser):
        tree, node = locate(parser, "[{$search:{te|}}]")
        assert detect_stage(tree, node) is StageName.SEARCH

    def test_stage_body_takes_precedence(self, parser):
        """Test that a stage body match is reported over a slot match."""
        tree, node = locate(parser, "[{$search:{te|}}]")

        assert not is_stages_context(tree, node)
        assert classify(tree, node) == StageContext(StageName.SEARCH)

    def test_context_str(self):
        assert str(StagesContext()) == "stages"
        assert str(StageContext(StageName.SEARCH)) == "stage $search"
        assert str(NoContext()) == "none"
