# pipecomp.completion.providers.stages - Stage name suggestions
"""
Suggests the stages that can be added to the pipeline.
"""
from typing import Optional

from pipecomp.completion.items import ReplacementRange, SuggestionItem
from pipecomp.completion.providers.base import CompletionProvider, SnippetDefinition
from pipecomp.completion.reflector import PipelineReflector
from pipecomp.completion.stages import StageName

SEARCH_INSERT_TEXT = """\\$search: {
    index: 'default',
    text: {
        query: "${1:search query}",
        // search across all string type fields
        path: {
            wildcard: "*"
        }
    }
}"""

LIMIT_INSERT_TEXT = "\\$limit: ${1:10}"

STAGE_DEFINITIONS: dict[StageName, SnippetDefinition] = {
    StageName.SEARCH: SnippetDefinition(
        label="$search",
        description="$search description",
        label_detail=" -> $search detail",
        detail="full text search",
        documentation="The NULLIF function... [see Google](https://www.google.com)",
        insert_text=SEARCH_INSERT_TEXT,
        sort_text="a",
    ),
    StageName.LIMIT: SnippetDefinition(
        label="$limit",
        description="$limit description",
        label_detail=" -> $limit detail",
        detail="limit num of docs",
        documentation="$limit markdown [see Google](https://www.google.com)",
        insert_text=LIMIT_INSERT_TEXT,
        sort_text="b",
    ),
}


class StagesCompletionProvider(CompletionProvider):
    """Suggest stages that are not in the pipeline yet."""

    name = "stages"
    help = "Stage names, for the slot between stages"

    def __init__(self, definitions: Optional[dict[StageName, SnippetDefinition]] = None):
        self.definitions = dict(STAGE_DEFINITIONS if definitions is None else definitions)

    async def suggest(
        self,
        range: ReplacementRange,
        reflector: Optional[PipelineReflector] = None,
    ) -> list[SuggestionItem]:
        existing = set(reflector.stage_names_present()) if reflector else set()
        return [
            definition.to_item(range)
            for stage, definition in self.definitions.items()
            if stage not in existing
        ]
