# pipecomp.completion - Context resolution and completion dispatch
from pipecomp.completion.context import (
    Context,
    NoContext,
    StageContext,
    StagesContext,
    classify,
)
from pipecomp.completion.cursor import AncestorLinker, find_cursor_node
from pipecomp.completion.document import Document
from pipecomp.completion.engine import PipelineCompletion, Resolution
from pipecomp.completion.items import CompletionLabel, ReplacementRange, SuggestionItem
from pipecomp.completion.reflector import PipelineReflector
from pipecomp.completion.stages import StageName

__all__ = [
    "Context",
    "NoContext",
    "StageContext",
    "StagesContext",
    "classify",
    "AncestorLinker",
    "find_cursor_node",
    "Document",
    "PipelineCompletion",
    "Resolution",
    "CompletionLabel",
    "ReplacementRange",
    "SuggestionItem",
    "PipelineReflector",
    "StageName",
]
