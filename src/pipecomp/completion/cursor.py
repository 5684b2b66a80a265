# pipecomp.completion.cursor - Parent links and cursor node lookup
"""
Links every reachable node to its parent and finds the node under the
cursor in the same walk.

Only the edges the context classifier cares about are followed:
Program -> statement, ExpressionStatement -> element of its array,
ObjectExpression -> Property and Property -> key/value. The array node
itself is skipped, so stage objects hang directly off their statement.
"""
from typing import Optional

from pipecomp.parser.ast import NodeKind, SyntaxNode, SyntaxTree


class AncestorLinker:
    """
    Adds parent links to a tree and locates the cursor node.

    The cursor line is 1-based and the column 0-based. When several nodes
    contain the cursor the one visited last wins, which is the most deeply
    nested one because a node is tested before its children.
    """

    def __init__(self, tree: SyntaxTree, line: int, column: int):
        self.tree = tree
        self.line = line
        self.column = column
        self.cursor_node: Optional[SyntaxNode] = None

    def link(self) -> Optional[SyntaxNode]:
        """
        Walk the tree from the root.

        Returns:
            The node under the cursor, or None if no node covers it
        """
        self.cursor_node = None
        self._visit(self.tree.program, None)
        return self.cursor_node

    def covers(self, node: SyntaxNode) -> bool:
        """Check whether the cursor falls inside node, bounds inclusive."""
        loc = node.location
        if loc is None:
            return False

        if loc.line_start < self.line < loc.line_end:
            return True

        in_columns = loc.col_start <= self.column <= loc.col_end
        if self.line == loc.line_start and in_columns:
            return True
        if self.line == loc.line_end and in_columns:
            return True
        return False

    def _visit(self, node: SyntaxNode, parent: Optional[SyntaxNode]) -> None:
        if parent is not None:
            node.parent = parent.index

        if self.covers(node):
            self.cursor_node = node

        tree = self.tree
        if node.kind is NodeKind.PROGRAM:
            for index in node.body:
                self._visit(tree[index], node)

        elif node.kind is NodeKind.EXPRESSION_STATEMENT:
            expression = tree.get(node.expression)
            if expression is not None and expression.kind is NodeKind.ARRAY_EXPRESSION:
                for index in expression.elements:
                    if index is not None:
                        self._visit(tree[index], node)

        elif node.kind is NodeKind.OBJECT_EXPRESSION:
            for index in node.properties:
                self._visit(tree[index], node)

        elif node.kind is NodeKind.PROPERTY:
            if node.key is not None:
                self._visit(tree[node.key], node)
            if node.value is not None:
                self._visit(tree[node.value], node)


def find_cursor_node(tree: SyntaxTree, line: int, column: int) -> Optional[SyntaxNode]:
    """
    Link parents and return the node under the cursor.

    Args:
        tree: Parsed document
        line: Cursor line, 1-based
        column: Cursor column, 0-based

    Returns:
        Most specific node containing the cursor, or None
    """
    return AncestorLinker(tree, line, column).link()
