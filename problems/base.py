from __future__ import annotations
from typing import Protocol, Sequence, runtime_checkable
import numpy as np


@runtime_checkable
class ProblemDomain(Protocol):
    """
    A bounded, fixed-dimension minimisation target.

    Bounds are the same scalar interval along every axis.
    """
    @property
    def minimum(self) -> float: ...

    @property
    def maximum(self) -> float: ...

    @property
    def dimensions(self) -> int: ...

    def cost(self, point: Sequence[float]) -> float: ...


@runtime_checkable
class HasRandom(Protocol):
    def random_point(self) -> np.ndarray:
        """Uniform sample of the whole box."""
        ...


@runtime_checkable
class HasLocal(Protocol):
    def local_step(self, point: Sequence[float]) -> np.ndarray:
        """Perturbed copy of `point` that stays inside the box."""
        ...


def require(problem, *capabilities) -> None:
    for cap in capabilities:
        if not isinstance(problem, cap):
            raise TypeError(f"{type(problem).__name__} does not implement {cap.__name__}")
