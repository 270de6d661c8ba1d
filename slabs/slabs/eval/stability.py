from typing import FrozenSet

from slabs.slabs.models.geometry import Brick
from slabs.slabs.models.support import SupportGraph


def unsafe_bricks(graph: SupportGraph) -> FrozenSet[Brick]:
    """Bricks that are the only support of at least one other brick."""
    return frozenset(
        next(iter(below))
        for below in graph.supporters.values()
        if len(below) == 1
    )


def safe_bricks(graph: SupportGraph) -> FrozenSet[Brick]:
    return frozenset(graph.supporters) - unsafe_bricks(graph)


def count_safe(graph: SupportGraph) -> int:
    return len(safe_bricks(graph))
