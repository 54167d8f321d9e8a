from __future__ import annotations
from typing import Dict, List, Optional
import numpy as np
from problems.base import HasLocal, HasRandom, ProblemDomain
from .base import Optimizer


class HillClimber(Optimizer):
    """
    Greedy-but-wandering hill climbing.

    Each step samples `max_local_iter` neighbours of the current base point,
    all derived from the same base. The best neighbour becomes the next base
    whether or not it improves on the running best.

    Options:
    - max_iter: outer steps (default 1000)
    - max_local_iter: neighbours per step (default 10)
    """
    name = "hill_climber"
    requires = (ProblemDomain, HasRandom, HasLocal)

    def __init__(self, problem, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().__init__(problem, seed, options)
        self.max_iter = int(self.options.get("max_iter", 1000))
        self.max_local_iter = int(self.options.get("max_local_iter", 10))
        if self.max_iter < 0:
            raise ValueError(f"max_iter must be >= 0, got {self.max_iter}")
        if self.max_local_iter < 1:
            raise ValueError(f"max_local_iter must be >= 1, got {self.max_local_iter}")
        self.base_x: Optional[np.ndarray] = None

    def done(self) -> bool:
        # iteration 0 is the random start
        return self.iter > self.max_iter

    def _propose(self) -> List[np.ndarray]:
        if self.iter == 0:
            return [self.problem.random_point()]
        return [self.problem.local_step(self.base_x) for _ in range(self.max_local_iter)]

    def _accept(self, X, F):
        k = int(np.argmin(F))  # first minimum wins
        self._update_best(X[k], F[k])
        self.base_x = X[k]
        self._history.append(F[k])
