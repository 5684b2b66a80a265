# pipecomp.completion.items - Suggestion data model
"""
Suggestion items handed back to the host editor.
"""
from dataclasses import dataclass
from typing import Optional

SNIPPET_KIND = "snippet"


@dataclass(frozen=True)
class ReplacementRange:
    """Text replaced when a suggestion is accepted. 1-based, single line."""
    line: int
    start_column: int
    end_column: int

    def to_dict(self) -> dict:
        return {
            "start_line": self.line,
            "end_line": self.line,
            "start_column": self.start_column,
            "end_column": self.end_column,
        }


@dataclass(frozen=True)
class CompletionLabel:
    """Label shown in the suggestion list."""
    label: str
    description: Optional[str] = None
    detail: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "description": self.description,
            "detail": self.detail,
        }


@dataclass(frozen=True)
class SuggestionItem:
    """A single completion suggestion."""
    label: CompletionLabel
    insert_text: str  # snippet syntax: ${1:default} tab stops, \$ escapes
    range: ReplacementRange
    detail: Optional[str] = None
    documentation: str = ""  # markdown
    sort_text: Optional[str] = None
    kind: str = SNIPPET_KIND

    @property
    def name(self) -> str:
        return self.label.label

    @property
    def sort_key(self) -> str:
        """Order used by editors: sort text, falling back to the label."""
        return self.sort_text if self.sort_text is not None else self.label.label

    def format_text(self) -> str:
        """Format for terminal display."""
        line = f"  {self.label.label}"
        if self.detail:
            line += f"  - {self.detail}"
        return line

    def to_dict(self) -> dict:
        return {
            "label": self.label.to_dict(),
            "kind": self.kind,
            "detail": self.detail,
            "documentation": self.documentation,
            "insert_text": self.insert_text,
            "sort_text": self.sort_text,
            "range": self.range.to_dict(),
        }
