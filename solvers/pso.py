from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional
import logging
import numpy as np
from problems.base import HasRandom, ProblemDomain
from .base import Optimizer, frozen, project

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Particle:
    """
    Position history plus the index of the personal best inside it.
    The last history entry is the current position.
    """
    cost: float
    velocity: np.ndarray
    history: List[np.ndarray] = field(default_factory=list)
    best_index: int = 0
    best_cost: float = np.inf

    @classmethod
    def spawn(cls, position: np.ndarray, velocity: np.ndarray, cost: float) -> "Particle":
        return cls(cost=cost, velocity=frozen(velocity), history=[frozen(position)],
                   best_index=0, best_cost=cost)

    @property
    def position(self) -> np.ndarray:
        return self.history[-1]

    @property
    def best_position(self) -> np.ndarray:
        return self.history[self.best_index]

    def move(self, position: np.ndarray, velocity: np.ndarray, cost: float, keep_history: bool = True):
        self.history.append(frozen(position))
        self.velocity = frozen(velocity)
        self.cost = cost
        if cost < self.best_cost:
            self.best_cost = cost
            self.best_index = len(self.history) - 1
        if not keep_history:
            if self.best_index == len(self.history) - 1:
                self.history = [self.history[-1]]
            else:
                self.history = [self.history[self.best_index], self.history[-1]]
            self.best_index = 0


class PSO(Optimizer):
    """
    Particle Swarm Optimisation (continuous, gbest topology)
    - inertia w, cognitive c1, social c2
    - budget given in cost evaluations; the last step moves only as many
      particles as the budget still allows
    - positions are not clamped unless clamp_positions is set

    Options:
    - max_cost_evaluations (default 1000), pop (default 10)
    - w (0.7), c1 (0.8), c2 (0.9)
    - clamp_positions (False), keep_history (True)
    """
    name = "pso"
    requires = (ProblemDomain, HasRandom)

    def __init__(self, problem, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().__init__(problem, seed, options)
        opt = self.options

        self.max_cost_evaluations: int = int(opt.get("max_cost_evaluations", 1000))
        self.pop: int = int(opt.get("pop", 10))
        self.w: float = float(opt.get("w", 0.7))
        self.c1: float = float(opt.get("c1", 0.8))
        self.c2: float = float(opt.get("c2", 0.9))
        self.clamp_positions: bool = bool(opt.get("clamp_positions", False))
        self.keep_history: bool = bool(opt.get("keep_history", True))

        if self.pop < 1:
            raise ValueError(f"pop must be >= 1, got {self.pop}")
        if self.max_cost_evaluations < self.pop:
            raise ValueError(
                f"max_cost_evaluations ({self.max_cost_evaluations}) must cover the initial swarm ({self.pop})")

        self.swarm: List[Particle] = []
        self._velocities: List[np.ndarray] = []

    @property
    def particles(self) -> List[Particle]:
        return list(self.swarm)

    def done(self) -> bool:
        return self.evals_total >= self.max_cost_evaluations

    def _propose(self) -> List[np.ndarray]:
        if not self.swarm:
            # velocities are drawn like positions, from the problem's sampler
            X = []
            self._velocities = []
            for _ in range(self.pop):
                X.append(self.problem.random_point())
                self._velocities.append(self.problem.random_point())
            return X

        n = min(self.pop, self.max_cost_evaluations - self.evals_total)
        g = self.gbest_x  # fixed for the whole step
        X = []
        self._velocities = []
        for p in self.swarm[:n]:
            x = p.position
            r1 = self.rng.random(self.D)
            r2 = self.rng.random(self.D)

            v = self.w * p.velocity + self.c2 * r2 * (g - x) + self.c1 * r1 * (p.best_position - x)
            x_new = x + v
            if self.clamp_positions:
                x_new = project(x_new, self.problem.minimum, self.problem.maximum)
            X.append(x_new)
            self._velocities.append(v)
        return X

    def _accept(self, X, F):
        if not self.swarm:
            self.swarm = [Particle.spawn(x, v, f) for x, v, f in zip(X, self._velocities, F)]
        else:
            for p, x, v, f in zip(self.swarm, X, self._velocities, F):
                p.move(x, v, f, keep_history=self.keep_history)

        step_best = self.swarm[0]
        for p in self.swarm[1:]:
            if p.cost < step_best.cost:
                step_best = p
        self._update_best(step_best.position, step_best.cost)
        self._history.append(step_best.cost)
        logger.debug("%s: step %d evals %d swarm best %.6e", self.name, self.iter, self.evals_total, step_best.cost)

    def state(self) -> Dict:
        st = super().state()
        st["budget_left"] = self.max_cost_evaluations - self.evals_total
        return st
