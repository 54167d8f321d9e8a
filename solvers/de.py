from __future__ import annotations
from typing import Dict, List, Optional, Tuple
import logging
import numpy as np
from problems.base import HasRandom, ProblemDomain
from .base import Member, Optimizer, best_of, project

logger = logging.getLogger(__name__)

VARIANTS = ("rnd", "best")
STRATEGIES = ("bin",)

Generation = Tuple[Member, ...]


class DE(Optimizer):
    """
    Differential Evolution, DE/{rnd,best}/1/bin.

    Options:
    - max_generations: generations including the random first one (default 500)
    - pop: population size (default 10)
    - F: scaling factor of the difference vector (default 0.8)
    - CR: crossover probability (default 0.5)
    - variant: "rnd" (random donor as base) or "best" (generation best as base)
    - difference_vectors: only 1 is implemented
    - strategy: only "bin" (binomial crossover) is implemented

    Selection is greedy per index: a trial replaces its parent only when its
    cost is strictly lower. Trials are clipped to the problem bounds.
    """
    name = "de"
    requires = (ProblemDomain, HasRandom)

    def __init__(self, problem, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().__init__(problem, seed, options)
        opt = self.options

        self.max_generations: int = int(opt.get("max_generations", 500))
        self.pop: int = int(opt.get("pop", 10))
        self.F: float = float(opt.get("F", 0.8))
        self.CR: float = float(opt.get("CR", 0.5))
        self.variant: str = str(opt.get("variant", "rnd")).lower()
        self.difference_vectors: int = int(opt.get("difference_vectors", 1))
        self.strategy: str = str(opt.get("strategy", "bin")).lower()

        if self.difference_vectors != 1:
            raise NotImplementedError(
                f"DE with {self.difference_vectors} difference vectors is not implemented")
        if self.variant not in VARIANTS:
            raise ValueError(f"Unknown DE variant: {self.variant}")
        if self.strategy not in STRATEGIES:
            raise NotImplementedError(f"DE crossover strategy '{self.strategy}' is not implemented")
        if self.max_generations < 1:
            raise ValueError(f"max_generations must be >= 1, got {self.max_generations}")
        # donors are drawn from the other members: 3 for rnd, 2 for best
        min_pop = 4 if self.variant == "rnd" else 3
        if self.pop < min_pop:
            raise ValueError(f"DE/{self.variant}/1 needs a population of at least {min_pop}, got {self.pop}")

        self._bias_increment = (self.CR + 0.001) / self.D
        self._generations: List[Generation] = []

    @property
    def generations(self) -> Tuple[Generation, ...]:
        return tuple(self._generations)

    def current_generation(self) -> Generation:
        if not self._generations:
            raise RuntimeError("No generation evaluated yet; call tell() first")
        return self._generations[-1]

    def done(self) -> bool:
        return len(self._generations) >= self.max_generations

    def _propose(self) -> List[np.ndarray]:
        if not self._generations:
            return [self.problem.random_point() for _ in range(self.pop)]

        parents = self.current_generation()
        base_best = best_of(parents).coordinates
        return [self._trial(parents, i, base_best) for i in range(self.pop)]

    def _trial(self, parents: Generation, i: int, gen_best: np.ndarray) -> np.ndarray:
        others = [j for j in range(self.pop) if j != i]
        k = 3 if self.variant == "rnd" else 2
        donors = [parents[j].coordinates for j in self.rng.choice(others, k, replace=False)]

        if self.variant == "rnd":
            mutant = donors[2] + self.F * (donors[0] - donors[1])
        else:
            mutant = gen_best + self.F * (donors[0] - donors[1])

        return project(self._crossover(parents[i].coordinates, mutant),
                       self.problem.minimum, self.problem.maximum)

    def _crossover(self, parent: np.ndarray, mutant: np.ndarray) -> np.ndarray:
        """
        Binomial crossover with a bias ramp: every trial component taken adds
        (CR + 0.001) / D to the next draw; taking a parent component resets it.
        """
        child = np.empty(self.D, dtype=float)
        draws = self.rng.random(self.D)
        bias = 0.0
        for j in range(self.D):
            if draws[j] + bias > self.CR:
                child[j] = parent[j]
                bias = 0.0
            else:
                child[j] = mutant[j]
                bias += self._bias_increment
        return child

    def _accept(self, X, F):
        if not self._generations:
            generation = tuple(Member(x, f) for x, f in zip(X, F))
        else:
            parents = self.current_generation()
            generation = tuple(
                Member(x, f) if f < parent.cost else parent
                for parent, x, f in zip(parents, X, F)
            )
        self._generations.append(generation)

        gen_best = best_of(generation)
        self._update_best(gen_best.coordinates, gen_best.cost)
        self._history.append(gen_best.cost)
        logger.debug("%s: generation %d best %.6e", self.name, len(self._generations), gen_best.cost)

    def state(self) -> Dict:
        st = super().state()
        st["generation"] = len(self._generations)
        return st
