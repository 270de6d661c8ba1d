# slabs/slabs/solve.py
from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter
from typing import Dict, Iterable

from slabs.slabs.models.geometry import Brick
from slabs.slabs.models.support import SupportGraph
from slabs.slabs.settle.settler import settle
from slabs.slabs.eval.stability import count_safe
from slabs.slabs.eval.chain import chain_counts


@dataclass(frozen=True)
class SolveResult:
    graph: SupportGraph
    part1: int                      # safe-to-disintegrate count
    part2: int                      # sum of chain-reaction counts
    chain_counts: Dict[Brick, int]
    settle_sec: float
    analyse_sec: float

    def __repr__(self) -> str:
        return (
            f"SolveResult(bricks={len(self.graph)}, part1={self.part1}, part2={self.part2}, "
            f"settle={self.settle_sec:.4f}s, analyse={self.analyse_sec:.4f}s)"
        )


def solve_part1(bricks: Iterable[Brick]) -> int:
    return count_safe(settle(bricks))


def solve_part2(bricks: Iterable[Brick]) -> int:
    return sum(chain_counts(settle(bricks)).values())


def solve(bricks: Iterable[Brick]) -> SolveResult:
    """Settles once and answers both parts."""
    t0 = perf_counter()
    graph = settle(bricks)
    settle_sec = perf_counter() - t0

    t0 = perf_counter()
    part1 = count_safe(graph)
    counts = chain_counts(graph)
    analyse_sec = perf_counter() - t0

    return SolveResult(
        graph=graph,
        part1=part1,
        part2=sum(counts.values()),
        chain_counts=counts,
        settle_sec=settle_sec,
        analyse_sec=analyse_sec,
    )
