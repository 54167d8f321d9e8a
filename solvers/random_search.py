from __future__ import annotations
from typing import Dict, List, Optional
import numpy as np
from problems.base import HasRandom, ProblemDomain
from .base import Optimizer


class RandomSearch(Optimizer):
    """
    Pure random search: every iteration draws an independent uniform point.

    Options:
    - max_iter: number of evaluations, the first one included (default 1000)

    History holds the cost of every sample, not the running best.
    """
    name = "random_search"
    requires = (ProblemDomain, HasRandom)

    def __init__(self, problem, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().__init__(problem, seed, options)
        self.max_iter = int(self.options.get("max_iter", 1000))
        if self.max_iter < 1:
            raise ValueError(f"max_iter must be >= 1, got {self.max_iter}")

    def done(self) -> bool:
        return self.iter >= self.max_iter

    def _propose(self) -> List[np.ndarray]:
        return [self.problem.random_point()]

    def _accept(self, X, F):
        self._update_best(X[0], F[0])
        self._history.append(F[0])
