# slabs/slabs/settle/settler.py
from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, List

from slabs.slabs.models.geometry import (Brick, drop_one, overlaps,
                                         spanning_axes, touches_ground)
from slabs.slabs.models.support import SupportGraph
from slabs.configurations import FLOOR_Z, debug


class SettleError(RuntimeError):
    pass


def _validate(brick: Brick, floor_z: int) -> None:
    for p in (brick.start, brick.end):
        for v in (p.x, p.y, p.z):
            if isinstance(v, bool) or not isinstance(v, int):
                raise SettleError(f"Non-integer coordinate {v!r} in {brick!r}")
            if v < 0:
                raise SettleError(f"Negative coordinate {v} in {brick!r}")

    if len(spanning_axes(brick)) > 1:
        raise SettleError(f"{brick!r} is not a unit-cross-section brick")

    if brick.z_min <= floor_z:
        raise SettleError(f"{brick!r} starts at or below the floor z={floor_z}")


def collisions(candidate: Brick, settled: Iterable[Brick]) -> FrozenSet[Brick]:
    return frozenset(b for b in settled if overlaps(candidate, b))


def settle(bricks: Iterable[Brick], floor_z: int = FLOOR_Z) -> SupportGraph:
    """
    Drops every brick one z-unit at a time until it rests on the ground or
    on an already-settled brick.

    Bricks are processed lowest-first, so everything a brick could land on is
    already final when its turn comes. The resting brick is recorded at its
    current position together with the settled bricks its one-step-lower
    position would collide with (its direct supporters).
    """
    pending: List[Brick] = sorted(bricks, key=lambda b: b.z_min)
    for b in pending:
        _validate(b, floor_z)

    settled: Dict[Brick, FrozenSet[Brick]] = {}

    # stack: head of the worklist sits at the end of the list
    pending.reverse()
    steps = 0
    limit = pending[-1].z_min - floor_z if pending else 0

    while pending:
        brick = pending[-1]
        lower = drop_one(brick)
        hit = collisions(lower, settled)

        if touches_ground(lower, floor_z) or hit:
            pending.pop()
            settled[brick] = hit
            if debug:
                print(f"[SETTLE] {brick!r} after {steps} step(s) | supporters={sorted(hit, key=repr)}")
            steps = 0
            if pending:
                limit = pending[-1].z_min - floor_z
            continue

        steps += 1
        if steps >= limit:
            raise SettleError(f"{brick!r} fell {steps} steps without reaching the floor z={floor_z}")
        pending[-1] = lower

    return SupportGraph(settled)
