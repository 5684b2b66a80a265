# pipecomp.completion.engine - Completion dispatch
"""
Resolves the provider for a cursor position and collects its suggestions.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from pipecomp.completion.context import (
    Context,
    NoContext,
    StageContext,
    StagesContext,
    ancestor_path,
    classify,
)
from pipecomp.completion.cursor import find_cursor_node
from pipecomp.completion.document import Document
from pipecomp.completion.items import SuggestionItem
from pipecomp.completion.providers.base import CompletionProvider, StageCompletionProvider
from pipecomp.completion.providers.search import SearchStageCompletionProvider
from pipecomp.completion.providers.stages import StagesCompletionProvider
from pipecomp.completion.reflector import PipelineReflector
from pipecomp.completion.stages import StageName
from pipecomp.parser.ast import SyntaxNode, SyntaxTree
from pipecomp.parser.pipeline_parser import NESTING_ERROR, ParseError, PipelineParser

logger = logging.getLogger(__name__)

BUILTIN_STAGE_PROVIDERS: dict[StageName, type[StageCompletionProvider]] = {
    StageName.SEARCH: SearchStageCompletionProvider,
}


@dataclass
class Resolution:
    """Outcome of resolving a cursor position."""
    tree: Optional[SyntaxTree]
    cursor_node: Optional[SyntaxNode]
    context: Context
    provider: Optional[CompletionProvider]
    error: Optional[str] = None

    @property
    def path(self) -> list[str]:
        """Ancestor kinds of the cursor node, cursor first."""
        if self.tree is None or self.cursor_node is None:
            return []
        return [k.value for k in ancestor_path(self.tree, self.cursor_node)]

    def to_dict(self) -> dict:
        node = self.cursor_node
        return {
            "context": str(self.context),
            "cursor_node": node.to_dict() if node else None,
            "path": self.path,
            "provider": self.provider.name if self.provider else None,
            "error": self.error,
        }


class PipelineCompletion:
    """
    Completion engine for pipeline documents.

    Holds a general provider for the slot between stages and one provider
    per stage for stage bodies. The registry is not changed while requests
    are served.
    """

    def __init__(
        self,
        stages_provider: Optional[CompletionProvider] = None,
        stage_providers: Optional[dict[StageName, CompletionProvider]] = None,
        parser: Optional[PipelineParser] = None,
    ):
        """
        Initialize completion engine.

        Args:
            stages_provider: Provider for new stages
            stage_providers: Providers for stage bodies, by stage name
            parser: Parser used for every request
        """
        self.stages_provider = stages_provider
        self.stage_providers: dict[StageName, CompletionProvider] = dict(stage_providers or {})
        self.parser = parser or PipelineParser()

    @classmethod
    def from_config(cls, config) -> "PipelineCompletion":
        """
        Create an engine with the built-in providers enabled in config.

        Args:
            config: Config instance

        Returns:
            PipelineCompletion
        """
        stage_providers: dict[StageName, CompletionProvider] = {}
        for name in config.stage_providers:
            stage = StageName.from_name(name)
            provider_class = BUILTIN_STAGE_PROVIDERS.get(stage) if stage else None
            if provider_class is None:
                logger.warning("No built-in completion provider for stage %s", name)
                continue
            stage_providers[stage] = provider_class()

        return cls(
            stages_provider=StagesCompletionProvider() if config.stages_provider else None,
            stage_providers=stage_providers,
            parser=PipelineParser(recover=config.recover, debug=config.debug_parser),
        )

    def register(self, provider: StageCompletionProvider) -> None:
        """
        Register a stage provider.

        Args:
            provider: Provider keyed by its stage_name
        """
        self.stage_providers[provider.stage_name] = provider

    def provider_for(self, context: Context) -> Optional[CompletionProvider]:
        """Map a context to its provider."""
        if isinstance(context, StageContext):
            provider = self.stage_providers.get(context.stage_name)
            if provider is None:
                logger.warning(
                    "Cannot find completion provider for stage %s", context.stage_name,
                )
            return provider

        if isinstance(context, StagesContext):
            return self.stages_provider

        return None

    def find_completion_provider(
        self,
        tree: SyntaxTree,
        cursor_node: SyntaxNode,
    ) -> Optional[CompletionProvider]:
        """
        Get the provider for a linked cursor node.

        Args:
            tree: Tree with parent links
            cursor_node: Node under the cursor

        Returns:
            Provider, or None if nothing should be suggested
        """
        return self.provider_for(classify(tree, cursor_node))

    def resolve(self, document: Document) -> Resolution:
        """
        Parse the document and resolve the provider for its cursor.

        Args:
            document: Text and cursor

        Returns:
            Resolution, with provider None when nothing applies
        """
        try:
            tree = self.parser.parse(document.text)
        except ParseError as e:
            logger.debug("Cannot parse pipeline: %s", e)
            return Resolution(None, None, NoContext(), None, error=str(e))

        try:
            node = find_cursor_node(tree, document.line, document.column_index)
            context = classify(tree, node)
        except RecursionError:
            logger.debug("Cannot link pipeline: %s", NESTING_ERROR)
            return Resolution(tree, None, NoContext(), None, error=NESTING_ERROR)

        if node is None:
            return Resolution(tree, None, NoContext(), None)
        return Resolution(tree, node, context, self.provider_for(context))

    async def provide_completions(self, document: Document) -> list[SuggestionItem]:
        """
        Get suggestions for a cursor position.

        Args:
            document: Text and cursor

        Returns:
            Suggestion items, empty when nothing applies
        """
        resolution = self.resolve(document)
        provider = resolution.provider
        if provider is None or resolution.tree is None:
            return []

        reflector = PipelineReflector(resolution.tree)
        try:
            suggestions = await provider.suggest(document.replacement_range(), reflector)
        except Exception:
            logger.exception("Completion provider %s failed", provider.name)
            return []
        return list(suggestions)

    def complete(self, document: Document) -> list[SuggestionItem]:
        """Synchronous provide_completions, for callers without an event loop."""
        return asyncio.run(self.provide_completions(document))
