from __future__ import annotations
from typing import Dict, List, Optional
import logging
import math
import numpy as np
from problems.base import HasLocal, HasRandom, ProblemDomain
from .base import Optimizer

logger = logging.getLogger(__name__)


class SimulatedAnnealing(Optimizer):
    """
    Simulated annealing with Metropolis acceptance and geometric cooling.

    Options:
    - max_temperature: starting temperature (default 1000.0)
    - min_temperature: run stops once the temperature falls below it (default 0.1)
    - step: cooling multiplier in (0, 1) (default 0.98)
    - max_local_iter: proposals per temperature level (default 10)

    History records the cost of the current (accepted) state after every
    proposal. `best()` is the lowest accepted cost, which the current state
    may have since moved away from.
    """
    name = "simulated_annealing"
    requires = (ProblemDomain, HasRandom, HasLocal)

    def __init__(self, problem, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().__init__(problem, seed, options)
        opt = self.options
        self.max_temperature = float(opt.get("max_temperature", 1000.0))
        self.min_temperature = float(opt.get("min_temperature", 0.1))
        self.step = float(opt.get("step", 0.98))
        self.max_local_iter = int(opt.get("max_local_iter", 10))
        if not 0.0 < self.step < 1.0:
            raise ValueError(f"step must lie in (0, 1), got {self.step}")
        if self.min_temperature <= 0.0:
            raise ValueError(f"min_temperature must be > 0, got {self.min_temperature}")
        if self.max_local_iter < 1:
            raise ValueError(f"max_local_iter must be >= 1, got {self.max_local_iter}")

        self.temperature = self.max_temperature
        self.current_x: Optional[np.ndarray] = None
        self.current_f: Optional[float] = None
        self.accepted = 0
        self._local_iter = 0

    def done(self) -> bool:
        return self.iter > 0 and self.temperature < self.min_temperature

    def metropolis(self, new_f: float) -> bool:
        """Always accept an improvement, otherwise accept with exp(-delta / T)."""
        delta = new_f - self.current_f
        if delta < 0:
            return True
        return self.rng.random() < math.exp(-delta / self.temperature)

    def _propose(self) -> List[np.ndarray]:
        if self.iter == 0:
            return [self.problem.random_point()]
        return [self.problem.local_step(self.current_x)]

    def _accept(self, X, F):
        x, f = X[0], F[0]
        if self.iter == 0 or self.metropolis(f):
            self.current_x, self.current_f = x, f
            self.accepted += 1
            self._update_best(x, f)
        self._history.append(self.current_f)
        if self.iter == 0:
            return

        self._local_iter += 1
        if self._local_iter == self.max_local_iter:
            self._local_iter = 0
            self.temperature *= self.step
            logger.debug("%s: cooled to T=%.6g (current %.6e)", self.name, self.temperature, self.current_f)

    def state(self) -> Dict:
        st = super().state()
        st.update({"temperature": self.temperature, "current_f": self.current_f, "accepted": self.accepted})
        return st
