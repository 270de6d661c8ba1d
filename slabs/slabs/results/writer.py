# slabs/slabs/results/writer.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from .schema import SCHEMA_VERSION


def _json_dump(obj: Any) -> str:
    return json.dumps(obj, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def run_path(run: Dict[str, Any], results_root: Path) -> Path:
    """One file per snapshot: <results_root>/<dataset name>.json"""
    return results_root / f"{run['dataset']['name']}.json"


def write_run(run: Dict[str, Any], results_root: Path) -> Path:
    """Writes the run record under `results_root`, replacing an earlier run of the same snapshot."""
    out_path = run_path(run, results_root)
    write_json(run, out_path)
    return out_path


def read_run(path: Path) -> Dict[str, Any]:
    data = read_json(path)
    if not isinstance(data, dict) or "run_id" not in data:
        raise ValueError(f"Not a run record: {path}")
    if data.get("schema_version") != SCHEMA_VERSION:
        raise ValueError(
            f"Schema version {data.get('schema_version')!r} in {path}, expected {SCHEMA_VERSION!r}"
        )
    return data


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def write_json(obj: Any, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(_json_dump(obj), encoding="utf-8")
