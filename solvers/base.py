from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple
import logging
import multiprocessing
import numpy as np
from problems.base import ProblemDomain, require

logger = logging.getLogger(__name__)


def project(x: np.ndarray, minimum: float, maximum: float) -> np.ndarray:
    return np.minimum(np.maximum(x, minimum), maximum)


def frozen(x: Sequence[float]) -> np.ndarray:
    """Read-only float copy of `x`."""
    out = np.array(x, dtype=float)
    out.flags.writeable = False
    return out


@dataclass(frozen=True, eq=False)
class Member:
    """Evaluated candidate. Coordinates are frozen once the cost is known."""
    coordinates: np.ndarray
    cost: float

    def __post_init__(self):
        object.__setattr__(self, "coordinates", frozen(self.coordinates))
        object.__setattr__(self, "cost", float(self.cost))


def _evaluate(task) -> float:
    """Pool worker. Reseeds the problem copy so noisy costs stay independent."""
    problem, x, seed = task
    if seed is not None:
        problem.rng = np.random.default_rng(seed)
    return problem.cost(x)


def best_of(members: Sequence[Member]) -> Member:
    """Lowest-cost member; the earliest one wins ties."""
    best = members[0]
    for m in members[1:]:
        if m.cost < best.cost:
            best = m
    return best


class Optimizer:
    """
    Solver-agnostic ask/tell interface to enable clean separation between
    candidate proposal (ask) and cost evaluation (tell).

    Subclasses implement `_propose`, `_accept` and `done`. `run` drives the
    cycle to completion against `problem.cost`.
    """
    name = "optimizer"
    requires: Tuple[type, ...] = (ProblemDomain,)

    def __init__(self, problem, seed: Optional[int] = None, options: Optional[Dict] = None):
        require(problem, *self.requires)
        self.problem = problem
        self.D: int = int(problem.dimensions)
        self.rng = np.random.default_rng(seed)
        self.options: Dict = options or {}

        self.gbest_x: Optional[np.ndarray] = None
        self.gbest_f: Optional[float] = None
        self.iter = 0
        self.evals_total = 0
        self._history: List[float] = []
        self._last_f = np.array([], dtype=float)
        self._asked: List[np.ndarray] = []
        self._state_phase = "ask"

    def ask(self) -> List[np.ndarray]:
        if self._state_phase != "ask":
            raise RuntimeError("Call tell() before ask()")
        if self.done():
            raise RuntimeError(f"{self.name} has already finished")
        self._asked = [np.array(x, dtype=float) for x in self._propose()]
        self._state_phase = "tell"
        return [x.copy() for x in self._asked]

    def tell(self, fitness: Sequence[float]):
        if self._state_phase != "tell":
            raise RuntimeError("Call ask() before tell()")
        f = [float(v) for v in fitness]
        if len(f) != len(self._asked):
            raise RuntimeError(f"Expected {len(self._asked)} costs, got {len(f)}")

        self.evals_total += len(f)
        self._last_f = np.asarray(f, dtype=float)
        self._accept(self._asked, f)
        self.iter += 1
        self._state_phase = "ask"

    def done(self) -> bool:
        raise NotImplementedError

    def _propose(self) -> List[np.ndarray]:
        raise NotImplementedError

    def _accept(self, X: List[np.ndarray], F: List[float]):
        raise NotImplementedError

    def _update_best(self, x: np.ndarray, f: float) -> bool:
        # strict '<' keeps the earliest of equal costs
        if self.gbest_f is None or f < self.gbest_f:
            self.gbest_f = f
            self.gbest_x = frozen(x)
            return True
        return False

    def run(self, n_jobs: int = 1) -> Dict:
        """
        Evaluate ask() batches until done(). With n_jobs > 1 each batch is
        mapped over a process pool; results come back in ask order.
        """
        logger.info("%s: starting on %r", self.name, self.problem)
        pool = None
        if n_jobs > 1:
            logger.debug("%s: evaluating with %d worker processes", self.name, n_jobs)
            pool = multiprocessing.Pool(processes=n_jobs)
        try:
            while not self.done():
                X = self.ask()
                if pool:
                    F = pool.map(_evaluate, self._tasks(X))
                else:
                    F = [self.problem.cost(x) for x in X]
                self.tell(F)
                logger.debug("%s: iter %d evals %d best %.6e",
                             self.name, self.iter, self.evals_total, self.gbest_f)
        finally:
            if pool:
                pool.close()
                pool.join()
                logger.debug("%s: worker pool closed", self.name)
        logger.info("%s: finished after %d evaluations, best cost %.6e",
                    self.name, self.evals_total, self.gbest_f)
        return self.best()

    def _tasks(self, X: List[np.ndarray]) -> List[Tuple]:
        # each pickled copy would otherwise replay the parent generator state
        rng = getattr(self.problem, "rng", None)
        if isinstance(rng, np.random.Generator):
            seeds = [int(s) for s in rng.integers(0, 2 ** 63 - 1, len(X))]
        else:
            seeds = [None] * len(X)
        return [(self.problem, x, s) for x, s in zip(X, seeds)]

    def best(self) -> Dict:
        x = None if self.gbest_x is None else self.gbest_x.copy()
        return {"x": x, "f": self.gbest_f}

    @property
    def history(self) -> List[float]:
        return list(self._history)

    def state(self) -> Dict:
        f = self._last_f
        has = f.size > 0
        return {
            "iter": self.iter,
            "evals_total": self.evals_total,
            "gbest_f": self.gbest_f,
            "f_best": float(np.min(f)) if has else np.nan,
            "f_mean": float(np.mean(f)) if has else np.nan,
            "f_std": float(np.std(f)) if has else np.nan,
        }
