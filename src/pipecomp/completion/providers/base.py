# pipecomp.completion.providers.base - Base provider classes
"""
Base classes for completion providers.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from pipecomp.completion.items import CompletionLabel, ReplacementRange, SuggestionItem
from pipecomp.completion.reflector import PipelineReflector
from pipecomp.completion.stages import StageName


@dataclass(frozen=True)
class SnippetDefinition:
    """Static description of one suggestion."""
    label: str
    detail: str
    documentation: str
    insert_text: str
    description: Optional[str] = None
    label_detail: Optional[str] = None
    sort_text: Optional[str] = None

    def to_item(self, range: ReplacementRange) -> SuggestionItem:
        """Build the suggestion for a replacement range."""
        return SuggestionItem(
            label=CompletionLabel(
                label=self.label,
                description=self.description,
                detail=self.label_detail,
            ),
            insert_text=self.insert_text,
            range=range,
            detail=self.detail,
            documentation=self.documentation,
            sort_text=self.sort_text,
        )


class CompletionProvider(ABC):
    """
    Base class for completion providers.

    Subclasses decide what to suggest for the cursor context they are
    registered for.
    """

    # Provider name (e.g., "stages", "$search")
    name: str = ""

    # Help text
    help: str = ""

    @abstractmethod
    async def suggest(
        self,
        range: ReplacementRange,
        reflector: Optional[PipelineReflector] = None,
    ) -> list[SuggestionItem]:
        """
        Produce suggestions.

        Args:
            range: Text the accepted suggestion replaces
            reflector: Queries over the current pipeline

        Returns:
            Suggestion items in display order
        """
        pass


class StageCompletionProvider(CompletionProvider):
    """Provider for the body of one stage."""

    stage_name: StageName
