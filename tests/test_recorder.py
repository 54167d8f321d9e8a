import json
import numpy as np
from problems.benchmarks import FirstDeJong
from solvers.random_search import RandomSearch
from utils.recorder import (
    RunConfig, create_run_dir, read_convergence, save_convergence_csv,
    save_run_metadata, summarize_runs,
)


def test_convergence_roundtrip(tmp_path):
    run_dir = create_run_dir(tmp_path, "random_search", "First De Jong")
    assert run_dir.parent == tmp_path / "random_search" / "first_de_jong"

    path = save_convergence_csv(run_dir, [3.0, 1.0, 2.0])
    df = read_convergence(path)
    assert list(df.columns) == ["iter", "cost", "best_so_far"]
    assert np.allclose(df["best_so_far"], [3.0, 1.0, 1.0])


def test_run_dirs_are_unique(tmp_path):
    a = create_run_dir(tmp_path, "de", "x")
    b = create_run_dir(tmp_path, "de", "x")
    assert a != b


def test_metadata(tmp_path):
    p = FirstDeJong.builder().minimum(-5).maximum(5).dimensions(2).build()
    rs = RandomSearch(p, options={"max_iter": 20})
    best = rs.run()
    cfg = RunConfig(solver=rs.name, problem=p.name, dim=p.dimensions, options=rs.options)
    path = save_run_metadata(tmp_path, cfg, extra={"best_x": best["x"], "best_f": best["f"]})
    meta = json.loads(path.read_text())
    assert meta["solver"] == "random_search"
    assert meta["options"] == {"max_iter": 20}
    assert len(meta["best_x"]) == 2


def test_summarize_runs():
    rows = [
        {"solver": "de", "problem": "sphere", "best_f": 1.0},
        {"solver": "de", "problem": "sphere", "best_f": 3.0},
        {"solver": "pso", "problem": "sphere", "best_f": 2.0},
    ]
    df = summarize_runs(rows).set_index("solver")
    assert df.loc["de", "count"] == 2
    assert df.loc["de", "mean"] == 2.0
    assert df.loc["pso", "min"] == 2.0
    assert summarize_runs([]).empty
