from __future__ import annotations

import csv
import json
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Sequence

import numpy as np
import pandas as pd


@dataclass
class RunConfig:
    """Minimal run configuration metadata to store with each run."""
    solver: str          # e.g. "de", "pso"
    problem: str         # e.g. "Griewank"
    dim: int
    seed: Optional[int] = None
    options: Dict[str, Any] = field(default_factory=dict)


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _slug(text: str) -> str:
    return "_".join(text.lower().split())


def create_run_dir(root: Path, solver: str, problem: str) -> Path:
    """
    Create and return a unique directory for a single run.

    Structure:
        {root}/{solver}/{problem}/run_YYYYmmdd_HHMMSS_XXXX/
    """
    base = Path(root) / _slug(solver) / _slug(problem)
    _ensure_dir(base)

    now = datetime.now()
    run_name = f"run_{now.strftime('%Y%m%d_%H%M%S')}_{now.strftime('%f')[-4:]}"
    run_dir = base / run_name
    # two runs inside the same 100us tick
    n = 1
    while run_dir.exists():
        run_dir = base / f"{run_name}_{n}"
        n += 1
    _ensure_dir(run_dir)
    return run_dir


def save_convergence_csv(run_dir: Path, history: Sequence[float]) -> Path:
    """
    Save a cost history to CSV:
        iter, cost, best_so_far
    """
    path = Path(run_dir) / "convergence.csv"
    best = np.minimum.accumulate(np.asarray(history, dtype=float)) if len(history) else []
    with path.open("w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["iter", "cost", "best_so_far"])
        for i, (c, b) in enumerate(zip(history, best)):
            writer.writerow([i, f"{c:.12e}", f"{b:.12e}"])
    return path


def save_run_metadata(run_dir: Path, config: RunConfig, extra: Optional[Dict[str, Any]] = None) -> Path:
    """
    Save run configuration and optional extra info to metadata.json.
    """
    meta: Dict[str, Any] = asdict(config)
    if extra:
        meta.update(extra)

    path = Path(run_dir) / "metadata.json"
    with path.open("w") as f:
        json.dump(meta, f, indent=2, default=_to_json)
    return path


def _to_json(value: Any):
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def read_convergence(csv_path: Path) -> pd.DataFrame:
    """Read a CSV written by save_convergence_csv and coerce columns."""
    df = pd.read_csv(csv_path)
    for c in ["cost", "best_so_far"]:
        df[c] = pd.to_numeric(df[c], errors="coerce")
    return df


def summarize_runs(rows: Iterable[Dict[str, Any]]) -> pd.DataFrame:
    """
    Aggregate best costs of repeated runs.

    Each row needs at least "solver", "problem" and "best_f" keys.
    Returns one row per (solver, problem) with count/mean/std/min/max.
    """
    df = pd.DataFrame(list(rows))
    if df.empty:
        return pd.DataFrame(columns=["solver", "problem", "count", "mean", "std", "min", "max"])
    return (
        df.groupby(["solver", "problem"])["best_f"]
        .agg(["count", "mean", "std", "min", "max"])
        .reset_index()
    )
