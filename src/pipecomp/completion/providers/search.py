# pipecomp.completion.providers.search - $search operator suggestions
"""
Suggests operators inside a $search stage body.

Operators may legally repeat, so nothing is filtered out.
"""
from typing import Optional

from pipecomp.completion.items import ReplacementRange, SuggestionItem
from pipecomp.completion.providers.base import SnippetDefinition, StageCompletionProvider
from pipecomp.completion.reflector import PipelineReflector
from pipecomp.completion.stages import StageName

TEXT_INSERT_TEXT = """text: {
    query: "${1:search query}",
    // search across all string type fields
    path: {
        wildcard: "*"
    }
}"""

COMPOUND_INSERT_TEXT = """compound: {
    should: [
        {
            text: {
                query: "${1:search query}",
                path: {
                    wildcard: "*"
                }
            }
        }
    ],
    shouldNot: [],
    must: [],
    mustNot: [],
}"""

OPERATOR_DEFINITIONS: tuple[SnippetDefinition, ...] = (
    SnippetDefinition(
        label="text",
        description="text description",
        label_detail=" -> text detail",
        detail="search in text fields",
        documentation="text markdown [see Google](https://www.google.com)",
        insert_text=TEXT_INSERT_TEXT,
    ),
    SnippetDefinition(
        label="compound",
        description="compound description",
        label_detail=" -> compound detail",
        detail="compound details",
        documentation="compound markdown [see Google](https://www.google.com)",
        insert_text=COMPOUND_INSERT_TEXT,
    ),
)


class SearchStageCompletionProvider(StageCompletionProvider):
    """Suggest $search operators."""

    name = "$search"
    help = "Operators inside a $search stage"
    stage_name = StageName.SEARCH

    async def suggest(
        self,
        range: ReplacementRange,
        reflector: Optional[PipelineReflector] = None,
    ) -> list[SuggestionItem]:
        return [definition.to_item(range) for definition in OPERATOR_DEFINITIONS]
