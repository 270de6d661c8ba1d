from typing import Dict, FrozenSet, Optional, Set, Tuple

from slabs.slabs.models.geometry import Brick, stacking_key
from slabs.slabs.models.support import SupportGraph
from slabs.configurations import debug


def chain_count(graph: SupportGraph, brick: Brick) -> int:
    """
    Number of other bricks that end up falling when `brick` is removed.

    Fixed point over whole passes: a brick falls once it had at least one
    supporter and every supporter has fallen. Each pass tests against the
    fallen set as it stood when the pass began, so the order of entries
    within a pass does not change the result. Ground bricks (no supporters)
    never fall.
    """
    if brick not in graph:
        raise KeyError(brick)

    fallen: Set[Brick] = {brick}
    remaining: Dict[Brick, FrozenSet[Brick]] = {
        b: below for b, below in graph.supporters.items() if b != brick
    }

    passes = 0
    while True:
        snapshot = frozenset(fallen)
        falling = [b for b, below in remaining.items() if below and below <= snapshot]
        if not falling:
            break
        passes += 1
        fallen.update(falling)
        remaining = {b: below for b, below in remaining.items() if b not in fallen}

    if debug:
        print(f"[CHAIN] {brick!r} -> {len(fallen) - 1} fall(s) in {passes} pass(es)")

    return len(fallen) - 1


def chain_counts(graph: SupportGraph) -> Dict[Brick, int]:
    return {b: chain_count(graph, b) for b in graph.supporters}


def total_chain_count(graph: SupportGraph) -> int:
    # sum over every key; equal counts must each contribute
    return sum(chain_counts(graph).values())


def most_destructive(
    graph: SupportGraph,
    counts: Optional[Dict[Brick, int]] = None,
) -> Optional[Tuple[Brick, int]]:
    """Brick with the largest chain count; lowest brick wins ties."""
    if len(graph) == 0:
        return None
    if counts is None:
        counts = chain_counts(graph)
    best = min(graph.supporters, key=lambda b: (-counts[b], stacking_key(b)))
    return best, counts[best]
