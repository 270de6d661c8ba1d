# slabs/slabs/results/schema.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from slabs.slabs.models.geometry import Brick
from slabs.slabs.models.support import SupportGraph


SCHEMA_VERSION = "1.0"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def make_run_id(timestamp_utc: str, snapshot_name: str) -> str:
    # timestamp_utc like "2025-12-23T17:04:55Z"
    ts = timestamp_utc.replace("-", "").replace(":", "").replace("T", "_").replace("Z", "")
    return f"{ts}_{snapshot_name}"


def run_skeleton(
    *,
    snapshot_name: str,
    source_path: Optional[str],
    brick_count: int,
    params: Dict[str, Any],
) -> Dict[str, Any]:
    """Return an empty-but-valid run dict you will populate later."""
    ts = utc_now_iso()
    run_id = make_run_id(ts, snapshot_name)

    return {
        "schema_version": SCHEMA_VERSION,
        "run_id": run_id,
        "timestamp_utc": ts,
        "dataset": {
            "name": snapshot_name,
            "source_path": source_path,
            "brick_count": brick_count,
        },
        "algorithm": {
            "name": "unit-step-settle",
            "params": params,            # e.g. {"floor_z": 0}
        },
        "answers": {
            "part1": None,               # safe-to-disintegrate count
            "part2": None,               # sum of chain-reaction counts
        },
        "layout": {"bricks": []},        # list[ {id, start, end, supporters, dependents, chain_count} ]
        "diagnostics": {},
        "meta": {"notes": ""},
    }


def brick_to_dict(b: Brick) -> Dict[str, Any]:
    return {
        "start": [b.start.x, b.start.y, b.start.z],
        "end": [b.end.x, b.end.y, b.end.z],
    }


def layout_rows(graph: SupportGraph, counts: Optional[Dict[Brick, int]] = None) -> List[Dict[str, Any]]:
    """
    Settled bricks, lowest first. Supporters and dependents are referenced by
    row id so the JSON stays a flat list.
    """
    order = graph.bricks
    ids = {b: i for i, b in enumerate(order)}
    rows: List[Dict[str, Any]] = []
    for b in order:
        row = {"id": ids[b], **brick_to_dict(b)}
        row["supporters"] = sorted(ids[s] for s in graph.supporters_of(b))
        row["dependents"] = sorted(ids[d] for d in graph.dependents_of(b))
        if counts is not None:
            row["chain_count"] = int(counts[b])
        rows.append(row)
    return rows


def stack_height(graph: SupportGraph) -> int:
    return max((b.z_max for b in graph), default=0)
