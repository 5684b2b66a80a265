# pipecomp.parser.ast - Syntax tree definitions
"""
Syntax tree definitions for pipeline documents.

Nodes live in a per-parse arena (SyntaxTree.nodes). Children and parent
links are indices into that arena, so a tree is discarded as a whole once
a completion request is answered.
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator, Optional


class NodeKind(Enum):
    """Node kinds the completion engine inspects. Everything else is OTHER."""
    PROGRAM = "Program"
    EXPRESSION_STATEMENT = "ExpressionStatement"
    ARRAY_EXPRESSION = "ArrayExpression"
    OBJECT_EXPRESSION = "ObjectExpression"
    PROPERTY = "Property"
    IDENTIFIER = "Identifier"
    OTHER = "Other"


@dataclass
class SourceLocation:
    """Source location: 1-based lines, 0-based columns, end column exclusive."""
    line_start: int
    line_end: int
    col_start: int = 0
    col_end: int = 0

    def __str__(self) -> str:
        if self.line_start == self.line_end:
            return f"line {self.line_start}:{self.col_start}-{self.col_end}"
        return (
            f"lines {self.line_start}:{self.col_start}-"
            f"{self.line_end}:{self.col_end}"
        )

    def to_dict(self) -> dict:
        return {
            "line_start": self.line_start,
            "line_end": self.line_end,
            "col_start": self.col_start,
            "col_end": self.col_end,
        }


@dataclass
class SyntaxNode:
    """A node of the pipeline syntax tree."""
    kind: NodeKind
    type: str  # raw node type as produced by the parser, e.g. Literal
    location: Optional[SourceLocation] = None
    start: Optional[int] = None  # source offsets
    end: Optional[int] = None
    name: Optional[str] = None  # Identifier
    raw: Optional[str] = None  # Literal source text, unary operator
    body: list[int] = field(default_factory=list)  # Program
    expression: Optional[int] = None  # ExpressionStatement
    elements: list[Optional[int]] = field(default_factory=list)  # ArrayExpression
    properties: list[int] = field(default_factory=list)  # ObjectExpression
    key: Optional[int] = None  # Property
    value: Optional[int] = None  # Property
    arguments: list[int] = field(default_factory=list)  # calls, unary
    parent: Optional[int] = None
    index: int = -1

    @property
    def span(self) -> int:
        """Length of the node in characters, 0 when offsets are unknown."""
        if self.start is None or self.end is None:
            return 0
        return self.end - self.start

    def to_dict(self) -> dict:
        data: dict = {
            "index": self.index,
            "type": self.type,
            "location": self.location.to_dict() if self.location else None,
            "parent": self.parent,
        }
        if self.name is not None:
            data["name"] = self.name
        if self.raw is not None:
            data["raw"] = self.raw
        if self.kind is NodeKind.PROGRAM:
            data["body"] = self.body
        elif self.kind is NodeKind.EXPRESSION_STATEMENT:
            data["expression"] = self.expression
        elif self.kind is NodeKind.ARRAY_EXPRESSION:
            data["elements"] = self.elements
        elif self.kind is NodeKind.OBJECT_EXPRESSION:
            data["properties"] = self.properties
        elif self.kind is NodeKind.PROPERTY:
            data["key"] = self.key
            data["value"] = self.value
        if self.arguments:
            data["arguments"] = self.arguments
        return data


@dataclass
class SyntaxTree:
    """Arena holding every node of one parsed document."""
    source: str
    nodes: list[SyntaxNode] = field(default_factory=list)
    root: int = -1
    recovered: int = 0  # number of repairs made by error recovery

    def add(self, node: SyntaxNode) -> int:
        """Append a node to the arena and return its index."""
        node.index = len(self.nodes)
        self.nodes.append(node)
        return node.index

    def copy_node(self, index: int) -> int:
        """Add a detached copy of a node and return the copy's index."""
        return self.add(replace(self.nodes[index], parent=None))

    def __getitem__(self, index: int) -> SyntaxNode:
        return self.nodes[index]

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def program(self) -> SyntaxNode:
        return self.nodes[self.root]

    def get(self, index: Optional[int]) -> Optional[SyntaxNode]:
        """Get node by index, None for absent children."""
        if index is None:
            return None
        return self.nodes[index]

    def parent(self, node: SyntaxNode) -> Optional[SyntaxNode]:
        return self.get(node.parent)

    def ancestors(self, node: SyntaxNode) -> Iterator[SyntaxNode]:
        """Yield node, its parent, and so on up to the root."""
        current: Optional[SyntaxNode] = node
        while current is not None:
            yield current
            current = self.get(current.parent)

    def to_dict(self) -> dict:
        return {
            "root": self.root,
            "recovered": self.recovered,
            "nodes": [n.to_dict() for n in self.nodes],
        }
