# tests/conftest.py - Pytest configuration
"""
Pytest configuration and shared fixtures.

Test documents mark the cursor with "|", e.g. "[{se|}]".
"""
import pytest
from pathlib import Path

from pipecomp.completion import Document, PipelineCompletion, StageName
from pipecomp.completion.cursor import find_cursor_node
from pipecomp.completion.providers import SearchStageCompletionProvider, StagesCompletionProvider
from pipecomp.parser import PipelineParser


# Fixture directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"

CURSOR = "|"


def make_document(marked: str) -> Document:
    """Build a document from text with a cursor marker."""
    offset = marked.index(CURSOR)
    return Document.from_offset(marked.replace(CURSOR, "", 1), offset)


def locate(parser: PipelineParser, marked: str):
    """Parse marked text and return (tree, cursor node)."""
    document = make_document(marked)
    tree = parser.parse(document.text)
    return tree, find_cursor_node(tree, document.line, document.column_index)


@pytest.fixture
def fixtures_dir():
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def search_pipeline():
    """Return path to search_pipeline.js."""
    return FIXTURES_DIR / "search_pipeline.js"


@pytest.fixture
def parser():
    """Create a recovering parser."""
    return PipelineParser()


@pytest.fixture
def engine():
    """Create an engine with the built-in providers."""
    return PipelineCompletion(
        stages_provider=StagesCompletionProvider(),
        stage_providers={StageName.SEARCH: SearchStageCompletionProvider()},
    )
