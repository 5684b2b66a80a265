# pipecomp.completion.context - Cursor context classification
"""
Classifies the cursor node by the kinds of its ancestors.

    [{ se| }]            -> StagesContext         (typing a stage name)
    [{ | }]              -> StagesContext         (inside an empty stage)
    [{ $search: { te| }}] -> StageContext($search) (inside a stage body)

Anything else is NoContext.
"""
from dataclasses import dataclass
from itertools import islice
from typing import Optional, Union

from pipecomp.completion.stages import StageName
from pipecomp.parser.ast import NodeKind, SyntaxNode, SyntaxTree

K = NodeKind

# Ancestor paths, cursor node first, on which a new stage can be typed
STAGE_SLOT_PATHS: tuple[tuple[NodeKind, ...], ...] = (
    (K.OBJECT_EXPRESSION, K.EXPRESSION_STATEMENT, K.PROGRAM),
    (K.IDENTIFIER, K.PROPERTY, K.OBJECT_EXPRESSION, K.EXPRESSION_STATEMENT, K.PROGRAM),
)

# Identifier inside the body object of a stage object
STAGE_BODY_PATH: tuple[NodeKind, ...] = (
    K.IDENTIFIER, K.PROPERTY, K.OBJECT_EXPRESSION, K.PROPERTY, K.OBJECT_EXPRESSION,
)

MAX_PATH_LENGTH = max(len(p) for p in STAGE_SLOT_PATHS + (STAGE_BODY_PATH,))

# An object spanning only "{}" has no room for the cursor
MIN_EMPTY_OBJECT_SPAN = 2


@dataclass(frozen=True)
class StagesContext:
    """Cursor is where a new top-level stage belongs."""

    def __str__(self) -> str:
        return "stages"


@dataclass(frozen=True)
class StageContext:
    """Cursor is inside the body of a recognized stage."""
    stage_name: StageName

    def __str__(self) -> str:
        return f"stage {self.stage_name}"


@dataclass(frozen=True)
class NoContext:
    """No recognized pattern, no suggestions."""

    def __str__(self) -> str:
        return "none"


Context = Union[StagesContext, StageContext, NoContext]


def ancestor_path(tree: SyntaxTree, node: SyntaxNode, limit: Optional[int] = None) -> tuple[NodeKind, ...]:
    """
    Get the kinds from node up to the root.

    Args:
        tree: Linked tree
        node: Start node
        limit: Stop after this many kinds

    Returns:
        Tuple of kinds, node first
    """
    return tuple(n.kind for n in islice(tree.ancestors(node), limit))


def is_stages_context(tree: SyntaxTree, node: SyntaxNode) -> bool:
    """Check whether a new stage can be typed at the cursor node."""
    # One extra kind so that longer paths never match a prefix
    path = ancestor_path(tree, node, MAX_PATH_LENGTH + 1)
    if path not in STAGE_SLOT_PATHS:
        return False

    if node.kind is K.IDENTIFIER:
        prop = tree.parent(node)
        obj = tree.parent(prop) if prop is not None else None
        if (
            prop is not None and prop.kind is K.PROPERTY
            and obj is not None and obj.kind is K.OBJECT_EXPRESSION
            and len(obj.properties) < 2
        ):
            return True

    if (
        node.kind is K.OBJECT_EXPRESSION
        and node.span > MIN_EMPTY_OBJECT_SPAN
        and not node.properties
    ):
        return True

    return False


def detect_stage(tree: SyntaxTree, node: SyntaxNode) -> Optional[StageName]:
    """
    Find the stage whose body holds the cursor node.

    Returns:
        Stage name, or None if the node is not a key inside a stage body
    """
    chain = list(islice(tree.ancestors(node), len(STAGE_BODY_PATH)))
    if tuple(n.kind for n in chain) != STAGE_BODY_PATH:
        return None

    stage_object = chain[-1]
    if len(stage_object.properties) != 1:
        return None

    key = tree.get(tree[stage_object.properties[0]].key)
    if key is None or key.kind is not K.IDENTIFIER:
        return None
    return StageName.from_name(key.name)


def classify(tree: SyntaxTree, node: Optional[SyntaxNode]) -> Context:
    """
    Classify the cursor node.

    A stage body match wins over a stage slot match.
    """
    if node is None:
        return NoContext()

    stage_name = detect_stage(tree, node)
    if stage_name is not None:
        return StageContext(stage_name)

    if is_stages_context(tree, node):
        return StagesContext()

    return NoContext()
