# slabs/slabs/results/index.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from .writer import read_json, write_json


def ensure_index(path: Path) -> None:
    if not path.exists():
        write_json([], path)
        return
    if path.read_text(encoding="utf-8").strip() == "":
        write_json([], path)


def index_entry(run: Dict[str, Any], out_path: Path) -> Dict[str, Any]:
    # paths are stored relative to the index so a results dir can be moved
    return {
        "run_id": run["run_id"],
        "path": out_path.name,
        "snapshot": run["dataset"]["name"],
        "bricks": run["dataset"]["brick_count"],
        "part1": run["answers"]["part1"],
        "part2": run["answers"]["part2"],
        "timestamp_utc": run["timestamp_utc"],
    }


def append_run(index_path: Path, run: Dict[str, Any], out_path: Path) -> Dict[str, Any]:
    """Appends one entry for `run` (written to `out_path`) and returns it."""
    ensure_index(index_path)
    data: List[Dict[str, Any]] = read_json(index_path)
    if not isinstance(data, list):
        raise ValueError(f"Run index is not a JSON list: {index_path}")
    entry = index_entry(run, out_path)
    data.append(entry)
    write_json(data, index_path)
    return entry
