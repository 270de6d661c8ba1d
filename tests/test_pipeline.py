"""
Integration tests: batch driver -> run JSON -> aggregation -> comparison plot.
"""

import json

import pytest

import debug_run
from slabs.scripts.aggregate_results import aggregate_results, read_case


@pytest.fixture
def dataset_dir(tmp_path, example_text):
    d = tmp_path / "datasets"
    d.mkdir()
    (d / "example.txt").write_text(example_text, encoding="utf-8")
    (d / "column.txt").write_text("0,0,3~0,0,3\n0,0,7~0,0,8\n", encoding="utf-8")
    return d


class TestRunOneSnapshot:
    def test_example_run(self, dataset_dir):
        run = debug_run.run_one_snapshot(dataset_dir / "example.txt")
        assert run["answers"] == {"part1": 5, "part2": 7}
        assert run["dataset"]["name"] == "example"
        assert run["dataset"]["brick_count"] == 7

        diag = run["diagnostics"]
        assert diag["settled_count"] == 7
        assert diag["ground_count"] == 1
        assert diag["top_count"] == 1
        assert diag["unsafe_count"] == 2
        assert diag["stack_height"] == 6
        assert diag["max_chain"]["count"] == 6
        assert len(run["layout"]["bricks"]) == 7

    def test_run_is_json_serializable(self, dataset_dir):
        run = debug_run.run_one_snapshot(dataset_dir / "column.txt")
        assert json.loads(json.dumps(run))["answers"] == {"part1": 1, "part2": 1}


class TestBatchAndAggregate:
    def test_batch_writes_runs_and_index(self, dataset_dir, tmp_path):
        results = tmp_path / "results"
        written = debug_run.run_batch(dataset_dir, results)

        assert sorted(p.name for p in written) == ["column.json", "example.json"]
        index = json.loads((results / "run_index.json").read_text(encoding="utf-8"))
        assert {e["snapshot"] for e in index} == {"column", "example"}

    def test_aggregate(self, dataset_dir, tmp_path):
        results = tmp_path / "results"
        debug_run.run_batch(dataset_dir, results)
        out_dir = results / "_summary"

        flat, summary = aggregate_results(results, out_dir, "unit")

        assert [r["snapshot"] for r in flat] == ["column", "example"]
        assert summary[0]["n"] == 2
        assert summary[0]["mean_part2"] == 4.0
        assert summary[0]["max_part1"] == 5.0
        for name in ("unit_flat.json", "unit_flat.csv", "unit_flat.xlsx",
                     "unit_summary.json", "unit_summary.csv", "unit_summary.xlsx"):
            assert (out_dir / name).exists()

    def test_aggregate_skips_bad_files(self, tmp_path, capsys):
        results = tmp_path / "results"
        results.mkdir()
        (results / "broken.json").write_text("{not json", encoding="utf-8")
        (results / "partial.json").write_text('{"answers": {}}', encoding="utf-8")

        flat, summary = aggregate_results(results, results / "_summary", "unit")
        assert flat == [] and summary == []
        assert "[read_case]" in capsys.readouterr().out

    def test_read_case_skips_old_schema(self, dataset_dir, tmp_path, capsys):
        results = tmp_path / "results"
        debug_run.run_batch(dataset_dir, results)
        path = results / "example.json"
        run = json.loads(path.read_text(encoding="utf-8"))
        run["schema_version"] = "0.1"
        path.write_text(json.dumps(run), encoding="utf-8")

        assert read_case(path) is None
        assert "Schema version" in capsys.readouterr().out

    def test_read_case_missing_key(self, tmp_path):
        path = tmp_path / "x.json"
        path.write_text('{"dataset": {"name": "x"}}', encoding="utf-8")
        assert read_case(path) is None


class TestCompareSummaries:
    def test_plot_two_labels(self, dataset_dir, tmp_path):
        pytest.importorskip("pandas")
        matplotlib = pytest.importorskip("matplotlib")
        matplotlib.use("Agg")
        from slabs.scripts.compare_summaries import load_summary, merge_summaries, plot_comparison

        results = tmp_path / "results"
        debug_run.run_batch(dataset_dir, results)
        aggregate_results(results, results / "_summary", "unit")
        flat_xlsx = results / "_summary" / "unit_flat.xlsx"

        df = merge_summaries([load_summary(flat_xlsx, "a"), load_summary(flat_xlsx, "b")])
        assert set(df["label"]) == {"a", "b"}
        assert len(df) == 4

        out = plot_comparison(df, tmp_path / "plots" / "cmp.png", dpi=50)
        assert out.exists()

    def test_missing_columns(self):
        pd = pytest.importorskip("pandas")
        from slabs.scripts.compare_summaries import merge_summaries

        with pytest.raises(ValueError, match="Missing columns"):
            merge_summaries([pd.DataFrame({"snapshot": ["x"], "label": ["a"]})])

    def test_missing_file(self, tmp_path):
        pytest.importorskip("pandas")
        from slabs.scripts.compare_summaries import load_summary

        with pytest.raises(FileNotFoundError):
            load_summary(tmp_path / "nope.xlsx", "a")

    def test_main_writes_plot_and_merged_workbook(self, dataset_dir, tmp_path):
        pytest.importorskip("pandas")
        matplotlib = pytest.importorskip("matplotlib")
        matplotlib.use("Agg")
        from slabs.scripts.compare_summaries import main

        results = tmp_path / "results"
        debug_run.run_batch(dataset_dir, results)
        aggregate_results(results, results / "_summary", "unit")
        flat_xlsx = results / "_summary" / "unit_flat.xlsx"

        out = main([(flat_xlsx, "a"), (flat_xlsx, "b")], out_dir=tmp_path / "cmp")
        assert out == tmp_path / "cmp" / "compare_snapshots.png"
        assert (tmp_path / "cmp" / "merged_summaries.xlsx").exists()

    def test_main_needs_two_summaries(self, tmp_path):
        pytest.importorskip("pandas")
        from slabs.scripts.compare_summaries import main

        with pytest.raises(ValueError, match="at least two"):
            main([(tmp_path / "only.xlsx", "a")], out_dir=tmp_path)
        with pytest.raises(ValueError, match="at least two"):
            main([], out_dir=tmp_path)

    def test_flat_summary_path(self):
        pytest.importorskip("pandas")
        from slabs.configurations import WD_DIR
        from slabs.scripts.compare_summaries import flat_summary_path

        p = flat_summary_path(WD_DIR[1])
        assert p.name == f"{WD_DIR[1]}_flat.xlsx"
        assert p.parent.name == "_summary"
