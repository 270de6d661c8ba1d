
from pathlib import Path
from typing import Any, Dict, List, Optional
from time import perf_counter

from slabs.slabs.data.snapshot import load_snapshot
from slabs.slabs.solve import solve
from slabs.slabs.eval.stability import unsafe_bricks
from slabs.slabs.eval.chain import most_destructive
from slabs.slabs.results.schema import run_skeleton, layout_rows, brick_to_dict, stack_height
from slabs.slabs.results.writer import write_run
from slabs.slabs.results.index import append_run
from slabs.configurations import (DATASET_DIR, FLOOR_Z, INDEX_FILE_NAME,
                                  PLOT_SETTLED_STACK, RESULTS_DIR_NAME, RESULTS_ROOT)


def run_one_snapshot(snapshot_path: Path, plot: bool = False) -> Dict[str, Any]:
    snap = load_snapshot(snapshot_path)

    t0 = perf_counter()
    res = solve(snap.bricks)
    elapsed = perf_counter() - t0

    run = run_skeleton(
        snapshot_name=snap.name,
        source_path=str(snap.source_path).replace("\\", "/") if snap.source_path else None,
        brick_count=len(snap.bricks),
        params={"floor_z": FLOOR_Z, "results_dir": RESULTS_DIR_NAME},
    )

    run["answers"]["part1"] = int(res.part1)
    run["answers"]["part2"] = int(res.part2)
    run["layout"]["bricks"] = layout_rows(res.graph, res.chain_counts)

    worst = most_destructive(res.graph, res.chain_counts)
    ground = res.graph.ground_bricks()

    run["diagnostics"] = {
        "elapsed_sec": round(elapsed, 6),
        "settle_sec": round(res.settle_sec, 6),
        "analyse_sec": round(res.analyse_sec, 6),
        "settled_count": int(len(res.graph)),
        "ground_count": int(len(ground)),
        "top_count": sum(1 for b in res.graph if not res.graph.dependents_of(b)),
        "unsafe_count": int(len(unsafe_bricks(res.graph))),
        "stack_height": int(stack_height(res.graph)),
        "max_chain": None if worst is None else {
            "brick": brick_to_dict(worst[0]),
            "count": int(worst[1]),
        },
    }
    run["meta"]["timing"] = {"elapsed_sec": round(elapsed, 6)}

    if plot:
        # imported lazily: vedo pulls in VTK
        from slabs.slabs.viz.debug_viz import plot_stack_debug
        plot_stack_debug(res.graph, res.chain_counts, title=f"Slabs: {snap.name}")

    return run


def run_batch(dataset_dir: Path, results_root: Path, plot: bool = False) -> List[Path]:
    snapshot_paths = sorted(dataset_dir.glob("*.txt"))
    index_path = results_root / INDEX_FILE_NAME
    written: List[Path] = []

    overall_t0 = perf_counter()
    for path in snapshot_paths:
        run = run_one_snapshot(path, plot=plot)

        out_path = write_run(run, results_root)
        append_run(index_path, run, out_path)
        written.append(out_path)

        print(f"✅ {path.stem}: part1={run['answers']['part1']} part2={run['answers']['part2']} -> {out_path}")

    overall_elapsed = perf_counter() - overall_t0
    print(f"🏁 All done. {len(written)} snapshot(s), total time: {overall_elapsed:.2f}s (index: {index_path})")
    return written


def main(dataset_dir: Optional[Path] = None) -> None:
    run_batch(dataset_dir or DATASET_DIR, RESULTS_ROOT, plot=PLOT_SETTLED_STACK)


if __name__ == "__main__":
    main()
