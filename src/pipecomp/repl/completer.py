# pipecomp.repl.completer - prompt_toolkit completion adapter
"""
Feeds pipeline suggestions into prompt_toolkit.
"""
from typing import AsyncGenerator, Iterable

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document as PromptDocument

from pipecomp.completion.document import Document
from pipecomp.completion.engine import PipelineCompletion
from pipecomp.completion.items import SuggestionItem
from pipecomp.completion.snippets import expand_snippet


class PipelineCompleter(Completer):
    """
    Completer for pipeline text.

    prompt_toolkit has no snippet support, so tab stops are replaced by
    their default text on insertion.
    """

    def __init__(self, engine: PipelineCompletion):
        """
        Initialize completer.

        Args:
            engine: Completion engine that resolves providers
        """
        self.engine = engine

    @staticmethod
    def to_document(document: PromptDocument) -> Document:
        """Convert a prompt_toolkit document (0-based) to an editor document."""
        return Document(
            text=document.text,
            line=document.cursor_position_row + 1,
            column=document.cursor_position_col + 1,
        )

    @staticmethod
    def to_completions(
        document: Document,
        suggestions: list[SuggestionItem],
    ) -> Iterable[Completion]:
        """Convert suggestions, ordered the way an editor orders them."""
        for item in sorted(suggestions, key=lambda s: s.sort_key):
            yield Completion(
                expand_snippet(item.insert_text),
                start_position=min(0, item.range.start_column - document.column),
                display=item.label.label,
                display_meta=item.detail or "",
            )

    def get_completions(
        self,
        document: PromptDocument,
        complete_event: CompleteEvent,
    ) -> Iterable[Completion]:
        doc = self.to_document(document)
        yield from self.to_completions(doc, self.engine.complete(doc))

    async def get_completions_async(
        self,
        document: PromptDocument,
        complete_event: CompleteEvent,
    ) -> AsyncGenerator[Completion, None]:
        doc = self.to_document(document)
        suggestions = await self.engine.provide_completions(doc)
        for completion in self.to_completions(doc, suggestions):
            yield completion
