from dataclasses import dataclass, field
from typing import Tuple

from slabs.configurations import FLOOR_Z


@dataclass(frozen=True)
class Point:
    x: int
    y: int
    z: int


@dataclass(frozen=True)
class Brick:
    start: Point    # either corner; start/end are not sorted per axis
    end: Point

    # sorted bounds, filled once in __post_init__; not part of identity
    x_min: int = field(init=False, repr=False, compare=False)
    x_max: int = field(init=False, repr=False, compare=False)
    y_min: int = field(init=False, repr=False, compare=False)
    y_max: int = field(init=False, repr=False, compare=False)
    z_min: int = field(init=False, repr=False, compare=False)
    z_max: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        s, e = self.start, self.end
        object.__setattr__(self, "x_min", min(s.x, e.x))
        object.__setattr__(self, "x_max", max(s.x, e.x))
        object.__setattr__(self, "y_min", min(s.y, e.y))
        object.__setattr__(self, "y_max", max(s.y, e.y))
        object.__setattr__(self, "z_min", min(s.z, e.z))
        object.__setattr__(self, "z_max", max(s.z, e.z))

    @property
    def length(self) -> int:
        """Number of unit cells occupied."""
        return (
            (self.x_max - self.x_min + 1) *
            (self.y_max - self.y_min + 1) *
            (self.z_max - self.z_min + 1)
        )

    def __repr__(self) -> str:
        s, e = self.start, self.end
        return f"Brick({s.x},{s.y},{s.z}~{e.x},{e.y},{e.z})"


def brick_from_coords(x1: int, y1: int, z1: int, x2: int, y2: int, z2: int) -> Brick:
    return Brick(Point(x1, y1, z1), Point(x2, y2, z2))


#* Geometry utility functions

def overlaps(a: Brick, b: Brick) -> bool:
    """
    True if the two bricks share at least one cell.
    Each axis is a closed interval built from min/max of the endpoints, so
    start/end order never matters. Called once per settled brick on every
    fall step, so it stays plain comparisons.
    """
    return (
        a.x_max >= b.x_min and b.x_max >= a.x_min and
        a.y_max >= b.y_min and b.y_max >= a.y_min and
        a.z_max >= b.z_min and b.z_max >= a.z_min
    )


def touches_ground(brick: Brick, floor_z: int = FLOOR_Z) -> bool:
    return brick.z_min == floor_z


def drop_one(brick: Brick) -> Brick:
    """Same brick one z-unit lower. x and y are unchanged."""
    s, e = brick.start, brick.end
    return Brick(Point(s.x, s.y, s.z - 1), Point(e.x, e.y, e.z - 1))


def spanning_axes(brick: Brick) -> Tuple[str, ...]:
    """Axes along which the two corners differ ('x', 'y', 'z')."""
    s, e = brick.start, brick.end
    out = []
    if s.x != e.x:
        out.append("x")
    if s.y != e.y:
        out.append("y")
    if s.z != e.z:
        out.append("z")
    return tuple(out)


def stacking_key(brick: Brick) -> Tuple[int, int, int, int, int, int]:
    # lowest first; coordinates break ties deterministically
    return (brick.z_min, brick.z_max, brick.x_min, brick.y_min, brick.x_max, brick.y_max)
