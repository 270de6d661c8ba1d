
from __future__ import annotations

import csv
import json
from pathlib import Path
from statistics import mean, median, stdev
from typing import Any, Dict, List, Optional, Tuple
from openpyxl import Workbook

from slabs.slabs.results.writer import read_run
from slabs.configurations import INDEX_FILE_NAME, RESULTS_DIR_NAME, RESULTS_ROOT, SUMMARY_DIR_NAME

# ---- CONFIG ----
OUT_FILE_NAME = RESULTS_DIR_NAME
OUT_DIR = RESULTS_ROOT / SUMMARY_DIR_NAME

FLAT_FIELDS = [
    "snapshot", "bricks",
    "part1", "part2",
    "settled", "ground", "top", "unsafe", "stack_height", "max_chain",
    "elapsed", "settle", "analyse",
    "timestamp_utc", "run_id",
]

STAT_COLS = [
    # flat column, summary suffix, rounding
    ("bricks", "bricks", 4),
    ("part1", "part1", 4),
    ("part2", "part2", 4),
    ("stack_height", "height", 4),
    ("elapsed", "time_sec", 6),
]


def _safe_get(d: Dict[str, Any], keys: List[str], default=None):
    cur: Any = d
    for k in keys:
        if not isinstance(cur, dict) or k not in cur:
            return default
        cur = cur[k]
    return cur


def read_case(path: Path) -> Optional[Dict[str, Any]]:
    """
    Read one run json and extract the metrics we care about.
    Returns None if file is invalid or missing expected structure.
    """
    try:
        data = read_run(path)
        ans = data["answers"]
        diag = data["diagnostics"]
        max_chain = diag.get("max_chain")

        return {
            "snapshot": str(data["dataset"]["name"]),
            "bricks": int(data["dataset"]["brick_count"]),
            "part1": int(ans["part1"]),
            "part2": int(ans["part2"]),
            "settled": int(diag["settled_count"]),
            "ground": int(diag["ground_count"]),
            "top": int(diag["top_count"]),
            "unsafe": int(diag["unsafe_count"]),
            "stack_height": int(diag["stack_height"]),
            "max_chain": int(max_chain["count"]) if max_chain else 0,
            "elapsed": float(diag["elapsed_sec"]),
            "settle": float(diag["settle_sec"]),
            "analyse": float(diag["analyse_sec"]),
            "timestamp_utc": _safe_get(data, ["timestamp_utc"], ""),
            "run_id": _safe_get(data, ["run_id"], ""),
        }
    except json.JSONDecodeError as e:
        print(f"[read_case] Invalid JSON in {path}: {e}")
    except KeyError as e:
        print(f"[read_case] Missing key {e} in {path}")
    except (TypeError, ValueError) as e:
        print(f"[read_case] Bad value in {path}: {e}")
    return None


def write_json(path: Path, obj: Any) -> None:
    path.write_text(json.dumps(obj, indent=2), encoding="utf-8")


def write_xlsx(path, rows, sheet_name="data"):
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name

    if not rows:
        wb.save(path)
        return

    headers = list(rows[0].keys())
    ws.append(headers)

    for r in rows:
        ws.append([r.get(h, "") for h in headers])

    wb.save(path)


def write_csv(path: Path, rows: List[Dict[str, Any]], fieldnames: List[str]) -> None:
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for r in rows:
            w.writerow({k: r.get(k, "") for k in fieldnames})


def std(vals):
    return stdev(vals) if len(vals) > 1 else 0.0


def col(rows, name):
    return [float(r[name]) for r in rows]


def summarize(rows: List[Dict[str, Any]], label: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {"label": label, "n": len(rows)}
    for name, suffix, nd in STAT_COLS:
        vals = col(rows, name)
        out[f"mean_{suffix}"] = round(mean(vals), nd)
        out[f"median_{suffix}"] = round(median(vals), nd)
        out[f"std_{suffix}"] = round(std(vals), nd)
        out[f"min_{suffix}"] = round(min(vals), nd)
        out[f"max_{suffix}"] = round(max(vals), nd)
    return out


def aggregate_results(
    results_root: Path = RESULTS_ROOT,
    out_dir: Path = OUT_DIR,
    out_name: str = OUT_FILE_NAME,
) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """
    Produces:
      - flat table: one row per snapshot run
      - summary table: one row for the whole results dir with mean/median stats
    Returns (flat_rows, summary_rows).
    """
    flat_rows: List[Dict[str, Any]] = []

    for path in sorted(results_root.glob("*.json")):
        if path.name == INDEX_FILE_NAME:
            continue
        r = read_case(path)
        if r is None:
            continue
        flat_rows.append(r)

    summary_rows: List[Dict[str, Any]] = [summarize(flat_rows, out_name)] if flat_rows else []

    # ---- WRITE OUTPUTS ----
    out_dir.mkdir(parents=True, exist_ok=True)

    flat_json = out_dir / f"{out_name}_flat.json"
    flat_csv = out_dir / f"{out_name}_flat.csv"
    flat_xlsx = out_dir / f"{out_name}_flat.xlsx"

    write_json(flat_json, flat_rows)
    write_csv(flat_csv, flat_rows, FLAT_FIELDS)
    write_xlsx(flat_xlsx, flat_rows, sheet_name="flat")

    summary_json = out_dir / f"{out_name}_summary.json"
    summary_csv = out_dir / f"{out_name}_summary.csv"
    summary_xlsx = out_dir / f"{out_name}_summary.xlsx"

    write_json(summary_json, summary_rows)
    summary_fields = ["label", "n"] + [
        f"{stat}_{suffix}"
        for _, suffix, _ in STAT_COLS
        for stat in ("mean", "median", "std", "min", "max")
    ]
    write_csv(summary_csv, summary_rows, summary_fields)
    write_xlsx(summary_xlsx, summary_rows, sheet_name="summary")

    print("Wrote:")
    print(" -", flat_json)
    print(" -", flat_csv)
    print(" -", flat_xlsx)
    print(" -", summary_json)
    print(" -", summary_csv)
    print(" -", summary_xlsx)

    return flat_rows, summary_rows


if __name__ == "__main__":
    aggregate_results()
