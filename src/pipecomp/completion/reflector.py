# pipecomp.completion.reflector - Whole-pipeline queries
"""
Read-only queries over the whole pipeline, independent of the cursor.
"""
from typing import Optional

from pipecomp.completion.stages import StageName
from pipecomp.parser.ast import NodeKind, SyntaxNode, SyntaxTree


class PipelineReflector:
    """
    Answers questions about the pipeline a document holds.

    The text may be half typed, so anything that does not look like a
    stage is ignored rather than reported.
    """

    def __init__(self, tree: SyntaxTree):
        self.tree = tree

    def pipeline_array(self) -> Optional[SyntaxNode]:
        """
        Get the pipeline array.

        Returns:
            The ArrayExpression, or None unless the document is exactly
            one statement holding an array
        """
        program = self.tree.program
        if len(program.body) != 1:
            return None

        statement = self.tree[program.body[0]]
        if statement.kind is not NodeKind.EXPRESSION_STATEMENT:
            return None

        array = self.tree.get(statement.expression)
        if array is None or array.kind is not NodeKind.ARRAY_EXPRESSION:
            return None
        return array

    def stage_name_of(self, element: Optional[SyntaxNode]) -> Optional[StageName]:
        """Get the stage an array element names, None if it is not a stage."""
        if element is None or element.kind is not NodeKind.OBJECT_EXPRESSION:
            return None
        if len(element.properties) != 1:
            return None

        prop = self.tree[element.properties[0]]
        if prop.kind is not NodeKind.PROPERTY:
            return None

        key = self.tree.get(prop.key)
        if key is None or key.kind is not NodeKind.IDENTIFIER:
            return None
        return StageName.from_name(key.name)

    def stage_names_present(self) -> list[StageName]:
        """Get recognized stage names in pipeline order."""
        array = self.pipeline_array()
        if array is None:
            return []

        names: list[StageName] = []
        for index in array.elements:
            name = self.stage_name_of(self.tree.get(index))
            if name is not None:
                names.append(name)
        return names
