# slabs/slabs/data/snapshot.py
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Set

from slabs.slabs.models.geometry import Brick, Point, spanning_axes


class SnapshotLoaderError(RuntimeError):
    pass


@dataclass(frozen=True)
class Snapshot:
    name: str               # file stem, e.g. "example"
    bricks: List[Brick]     # input order, not settled
    source_path: Optional[Path] = None


_LINE_RE = re.compile(r"^(\d+),(\d+),(\d+)~(\d+),(\d+),(\d+)$")
_SIGNED_RE = re.compile(r"^-?\d+,-?\d+,-?\d+~-?\d+,-?\d+,-?\d+$")


def _where(lineno: Optional[int], src: Optional[Path]) -> str:
    parts = []
    if lineno is not None:
        parts.append(f"line {lineno}")
    if src is not None:
        parts.append(str(src))
    return f" ({', '.join(parts)})" if parts else ""


def parse_brick_line(line: str, lineno: Optional[int] = None, src: Optional[Path] = None) -> Brick:
    """
    Parses one `x1,y1,z1~x2,y2,z2` line into a Brick.
    All six components must be non-negative integers.
    """
    text = line.strip()
    m = _LINE_RE.match(text)
    if m is None:
        if _SIGNED_RE.match(text):
            raise SnapshotLoaderError(f"Negative coordinate in {text!r}{_where(lineno, src)}")
        raise SnapshotLoaderError(f"Expected 'x1,y1,z1~x2,y2,z2', got {text!r}{_where(lineno, src)}")

    x1, y1, z1, x2, y2, z2 = (int(g) for g in m.groups())
    brick = Brick(Point(x1, y1, z1), Point(x2, y2, z2))

    if len(spanning_axes(brick)) > 1:
        raise SnapshotLoaderError(
            f"Brick {text!r} spans more than one axis{_where(lineno, src)}"
        )
    return brick


def parse_snapshot(text: str, src: Optional[Path] = None) -> List[Brick]:
    """One brick per line; blank lines are skipped. Duplicate bricks are rejected."""
    out: List[Brick] = []
    seen: Set[Brick] = set()
    for i, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        brick = parse_brick_line(line, lineno=i, src=src)
        # bricks are identified by value, so a repeat would collapse in the graph
        if brick in seen:
            raise SnapshotLoaderError(f"Duplicate brick {line.strip()!r}{_where(i, src)}")
        seen.add(brick)
        out.append(brick)
    return out


def load_snapshot(path: str | Path) -> Snapshot:
    """
    Loads: <path>  (plain text, UTF-8)
    Example: .../slabs/datasets/example.txt
    """
    src = Path(path)
    if not src.exists():
        raise SnapshotLoaderError(f"File not found: {src}")

    try:
        text = src.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SnapshotLoaderError(f"Unreadable snapshot: {src} ({e})") from e

    bricks = parse_snapshot(text, src=src)
    return Snapshot(name=src.stem, bricks=bricks, source_path=src)
