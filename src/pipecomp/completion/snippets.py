# pipecomp.completion.snippets - Snippet helpers
"""
Helpers for snippet insert texts (${1:default} tab stops, \\$ escapes).
"""
import re

_PLACEHOLDER = re.compile(r"(?<!\\)\$\{(\d+):([^}]*)\}")
_EMPTY_TABSTOP = re.compile(r"(?<!\\)\$\{(\d+)\}")
_TABSTOP = re.compile(r"(?<!\\)\$(\d+)")
_ESCAPE = re.compile(r"\\([$}\\])")


def expand_snippet(snippet: str) -> str:
    """
    Turn a snippet into the plain text an editor would insert.

    Placeholders become their default text, bare tab stops disappear and
    escaped characters are unescaped.
    """
    text = _PLACEHOLDER.sub(r"\2", snippet)
    text = _EMPTY_TABSTOP.sub("", text)
    text = _TABSTOP.sub("", text)
    return _ESCAPE.sub(r"\1", text)


def apply_suggestion(text: str, line: int, start_column: int, end_column: int, snippet: str) -> str:
    """
    Replace a single-line column range with an expanded snippet.

    Args:
        text: Document text
        line: 1-based line
        start_column: 1-based start column
        end_column: 1-based end column (exclusive)
        snippet: Insert text in snippet syntax

    Returns:
        The edited document text
    """
    lines = text.split("\n")
    current = lines[line - 1]
    lines[line - 1] = (
        current[:start_column - 1] + expand_snippet(snippet) + current[end_column - 1:]
    )
    return "\n".join(lines)
