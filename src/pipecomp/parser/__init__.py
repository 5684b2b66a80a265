# pipecomp.parser - Pipeline parsing module
from pipecomp.parser.ast import (
    NodeKind,
    SourceLocation,
    SyntaxNode,
    SyntaxTree,
)
from pipecomp.parser.pipeline_parser import ParseError, PipelineParser

__all__ = [
    "NodeKind",
    "SourceLocation",
    "SyntaxNode",
    "SyntaxTree",
    "ParseError",
    "PipelineParser",
]
