# slabs/slabs/models/support.py
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterator, List, Mapping

from slabs.slabs.models.geometry import Brick, stacking_key


@dataclass(frozen=True)
class SupportGraph:
    """
    Settled brick -> bricks directly underneath it that carry its weight.

    An empty supporter set means the brick rests on the ground. Support is
    contact only, never transitive. The mapping is frozen after construction.
    """
    supporters: Mapping[Brick, FrozenSet[Brick]]
    _dependents: Mapping[Brick, FrozenSet[Brick]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        frozen = {b: frozenset(s) for b, s in self.supporters.items()}
        object.__setattr__(self, "supporters", MappingProxyType(frozen))

        dependents: Dict[Brick, set] = {b: set() for b in frozen}
        for brick, below in frozen.items():
            for s in below:
                if s not in dependents:
                    raise KeyError(f"Supporter {s!r} of {brick!r} is not a settled brick")
                dependents[s].add(brick)
        object.__setattr__(
            self, "_dependents",
            MappingProxyType({b: frozenset(d) for b, d in dependents.items()}),
        )

    # mapping protocol
    def __len__(self) -> int:
        return len(self.supporters)

    def __iter__(self) -> Iterator[Brick]:
        return iter(self.supporters)

    def __contains__(self, brick: object) -> bool:
        return brick in self.supporters

    def __getitem__(self, brick: Brick) -> FrozenSet[Brick]:
        return self.supporters[brick]

    def items(self):
        return self.supporters.items()

    @property
    def bricks(self) -> List[Brick]:
        """Settled bricks, lowest first."""
        return sorted(self.supporters, key=stacking_key)

    def supporters_of(self, brick: Brick) -> FrozenSet[Brick]:
        return self.supporters[brick]

    def dependents_of(self, brick: Brick) -> FrozenSet[Brick]:
        """Bricks resting directly on top of `brick`."""
        return self._dependents[brick]

    def ground_bricks(self) -> List[Brick]:
        return [b for b in self.bricks if not self.supporters[b]]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SupportGraph):
            return NotImplemented
        return dict(self.supporters) == dict(other.supporters)

    def __hash__(self) -> int:
        return hash(frozenset(self.supporters.items()))

    def __repr__(self) -> str:
        n_ground = sum(1 for s in self.supporters.values() if not s)
        return f"SupportGraph(bricks={len(self)}, ground={n_ground})"
