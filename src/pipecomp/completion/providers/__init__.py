# pipecomp.completion.providers - Completion provider implementations
from pipecomp.completion.providers.base import (
    CompletionProvider,
    SnippetDefinition,
    StageCompletionProvider,
)
from pipecomp.completion.providers.stages import StagesCompletionProvider
from pipecomp.completion.providers.search import SearchStageCompletionProvider

__all__ = [
    "CompletionProvider",
    "SnippetDefinition",
    "StageCompletionProvider",
    "StagesCompletionProvider",
    "SearchStageCompletionProvider",
]
