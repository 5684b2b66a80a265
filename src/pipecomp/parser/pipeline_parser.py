# pipecomp.parser.pipeline_parser - Fault-tolerant pipeline parser
"""
Pipeline parser built on a Lark LALR grammar.

The user is usually in the middle of typing, so the parser repairs the
input while it parses: unknown characters are skipped, a missing
separator, colon, value or closing bracket is inserted as a zero-width
token, and a token that cannot be repaired is dropped. The result is a
best-effort SyntaxTree instead of an error.
"""
import logging
from pathlib import Path
from typing import Optional

from lark import Lark, Token, Transformer, v_args
from lark.exceptions import LarkError, UnexpectedCharacters, UnexpectedInput, UnexpectedToken

from pipecomp.parser.ast import NodeKind, SourceLocation, SyntaxNode, SyntaxTree

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "pipeline.lark"

# Name given to identifiers the parser had to invent
PLACEHOLDER_NAME = "✖"

KEYWORD_LITERALS = ("true", "false", "null")

TOKEN_TEXT = {
    "COMMA": ",",
    "COLON": ":",
    "NAME": PLACEHOLDER_NAME,
    "RBRACE": "}",
    "RSQB": "]",
    "RPAR": ")",
}

# Tried in order in front of an unexpected token
REPAIR_TOKENS = ("COMMA", "COLON", "NAME", "RBRACE", "RSQB", "RPAR")

# Tried in order to close whatever is still open at end of input
CLOSING_TOKENS = ("RBRACE", "RSQB", "RPAR", "COLON", "NAME")

MAX_CLOSING_TOKENS = 1000

NESTING_ERROR = "Input is nested too deeply"

_cached_lark: Optional[Lark] = None


class ParseError(Exception):
    """Exception raised when the input cannot be turned into a tree."""
    def __init__(self, message: str, line: int = 0, column: int = 0):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f"Line {line}:{column} - {message}")


def get_lark() -> Lark:
    """Get the compiled grammar, compiling it on first use."""
    global _cached_lark
    if _cached_lark is None:
        _cached_lark = Lark(
            GRAMMAR_PATH.read_text(encoding="utf-8"),
            parser="lalr",
            propagate_positions=True,
            maybe_placeholders=False,
        )
    return _cached_lark


def _synthetic_token(type_: str, anchor: Token, at_end: bool = False) -> Token:
    """Create a zero-width token placed before (or right after) anchor."""
    if at_end and anchor.end_pos is not None:
        pos, line, column = anchor.end_pos, anchor.end_line, anchor.end_column
    else:
        pos, line, column = anchor.start_pos, anchor.line, anchor.column
    return Token(type_, TOKEN_TEXT[type_], pos, line, column, line, column, pos)


class ErrorRecovery:
    """
    on_error handler for Lark's LALR parser.

    Returning True tells Lark to resume parsing; returning False lets the
    error propagate.
    """

    def __init__(self, debug: bool = False):
        self.debug = debug
        self.repairs = 0

    def __call__(self, error: UnexpectedInput) -> bool:
        if isinstance(error, UnexpectedCharacters):
            self._note(error, "skipped character")
            return True

        if not isinstance(error, UnexpectedToken):
            return False

        parser = error.interactive_parser
        token = error.token

        if token.type == "$END":
            return self._close_open_structures(parser, token)

        for type_ in REPAIR_TOKENS:
            synthetic = _synthetic_token(type_, token)
            trial = parser.copy()
            try:
                trial.feed_token(synthetic)
            except UnexpectedToken:
                continue
            if token.type in trial.accepts():
                parser.feed_token(synthetic)
                parser.feed_token(token)
                self._note(error, f"inserted {type_}")
                return True

        self._note(error, f"dropped {token.type}")
        return True

    def _close_open_structures(self, parser, token: Token) -> bool:
        """Feed synthetic tokens until the parser accepts end of input."""
        for _ in range(MAX_CLOSING_TOKENS):
            accepts = parser.accepts()
            if "$END" in accepts:
                return True
            type_ = next((t for t in CLOSING_TOKENS if t in accepts), None)
            if type_ is None:
                return False
            parser.feed_token(_synthetic_token(type_, token, at_end=True))
            self.repairs += 1
        return False

    def _note(self, error: UnexpectedInput, action: str) -> None:
        self.repairs += 1
        if self.debug:
            logger.debug(
                "Recovered at line %s:%s (%s)",
                getattr(error, "line", "?"),
                getattr(error, "column", "?"),
                action,
            )


def _location(meta) -> Optional[SourceLocation]:
    """Convert Lark 1-based columns into 0-based columns."""
    if getattr(meta, "empty", True):
        return None
    return SourceLocation(
        line_start=meta.line,
        line_end=meta.end_line,
        col_start=meta.column - 1,
        col_end=meta.end_column - 1,
    )


@v_args(meta=True)
class PipelineTreeBuilder(Transformer):
    """Transformer that turns the Lark parse tree into SyntaxTree nodes."""

    def __init__(self, tree: SyntaxTree):
        super().__init__()
        self.tree = tree

    def _add(self, kind: NodeKind, type_: str, meta, **fields) -> int:
        empty = getattr(meta, "empty", True)
        return self.tree.add(SyntaxNode(
            kind=kind,
            type=type_,
            location=_location(meta),
            start=None if empty else meta.start_pos,
            end=None if empty else meta.end_pos,
            **fields,
        ))

    def start(self, meta, children):
        source = self.tree.source
        lines = source.split("\n")
        return self.tree.add(SyntaxNode(
            kind=NodeKind.PROGRAM,
            type="Program",
            location=SourceLocation(
                line_start=1,
                line_end=len(lines),
                col_start=0,
                col_end=len(lines[-1]),
            ),
            start=0,
            end=len(source),
            body=list(children),
        ))

    def expression_statement(self, meta, children):
        return self._add(
            NodeKind.EXPRESSION_STATEMENT, "ExpressionStatement", meta,
            expression=children[0],
        )

    def array(self, meta, children):
        # [a,,b] has a hole; a single trailing comma adds nothing
        elements: list[Optional[int]] = []
        pending: Optional[int] = None
        for child in children:
            if isinstance(child, Token):
                elements.append(pending)
                pending = None
            else:
                if pending is not None:
                    elements.append(pending)
                pending = child
        if pending is not None:
            elements.append(pending)
        return self._add(
            NodeKind.ARRAY_EXPRESSION, "ArrayExpression", meta, elements=elements,
        )

    def object(self, meta, children):
        return self._add(
            NodeKind.OBJECT_EXPRESSION, "ObjectExpression", meta,
            properties=list(children),
        )

    def property(self, meta, children):
        key, value = children
        return self._add(NodeKind.PROPERTY, "Property", meta, key=key, value=value)

    def shorthand_property(self, meta, children):
        key = children[0]
        value = self.tree.copy_node(key)
        return self._add(NodeKind.PROPERTY, "Property", meta, key=key, value=value)

    def call(self, meta, children):
        return self._add(
            NodeKind.OTHER, "CallExpression", meta, arguments=list(children),
        )

    def unary(self, meta, children):
        operator, argument = children
        return self._add(
            NodeKind.OTHER, "UnaryExpression", meta,
            raw=str(operator), arguments=[argument],
        )

    def identifier(self, meta, children):
        name = str(children[0])
        if name in KEYWORD_LITERALS:
            return self._add(NodeKind.OTHER, "Literal", meta, raw=name)
        return self._add(NodeKind.IDENTIFIER, "Identifier", meta, name=name)

    def literal(self, meta, children):
        return self._add(NodeKind.OTHER, "Literal", meta, raw=str(children[0]))


class PipelineParser:
    """
    Pipeline text parser.

    Provides:
    - LALR parsing of the pipeline grammar
    - Error recovery for text that is still being typed
    - Arena-based SyntaxTree output
    """

    def __init__(self, recover: bool = True, debug: bool = False):
        """
        Initialize parser.

        Args:
            recover: Repair malformed input instead of failing
            debug: Log every repair made during recovery
        """
        self.recover = recover
        self.debug = debug

    def parse(self, source: str) -> SyntaxTree:
        """
        Parse pipeline text.

        Args:
            source: Document text

        Returns:
            SyntaxTree for the document

        Raises:
            ParseError: If the text cannot be parsed or repaired
        """
        recovery = ErrorRecovery(self.debug) if self.recover else None
        tree = SyntaxTree(source=source)
        try:
            parse_tree = get_lark().parse(source, on_error=recovery)
            tree.root = PipelineTreeBuilder(tree).transform(parse_tree)
        except UnexpectedInput as e:
            summary = str(e).strip().splitlines()
            raise ParseError(
                summary[0] if summary else type(e).__name__,
                getattr(e, "line", 0),
                getattr(e, "column", 0),
            ) from e
        except RecursionError as e:
            raise ParseError(NESTING_ERROR) from e
        except LarkError as e:
            # VisitError wraps errors raised while building nodes
            nested = isinstance(getattr(e, "orig_exc", None), RecursionError)
            raise ParseError(NESTING_ERROR if nested else str(e)) from e

        if recovery is not None:
            tree.recovered = recovery.repairs
        return tree

    def parse_file(self, path: Path) -> SyntaxTree:
        """Parse a pipeline file."""
        return self.parse(path.read_text(encoding="utf-8"))
