from __future__ import annotations
from typing import Any, Dict, Generic, Optional, Sequence, Type, TypeVar
import numpy as np


class BuilderError(ValueError):
    """Raised when a benchmark cannot be built from the given parameters."""
    message = "Error while building object"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class MissingMinimum(BuilderError):
    message = "Error while building object: Minimum is missing"


class MissingMaximum(BuilderError):
    message = "Error while building object: Maximum is missing"


class MissingDimensions(BuilderError):
    message = "Error while building object: Number of dimensions is missing"


class Benchmark:
    """
    Closed-form test problem over the box [minimum, maximum]^dimensions.

    Implements cost evaluation, uniform sampling and local perturbation.
    Instances are meant to be created through `builder()`.
    """
    name: str = "benchmark"

    def __init__(self, minimum: float, maximum: float, dimensions: int,
                 expected_min: Optional[float] = None,
                 expected_min_coords: Optional[Sequence[float]] = None,
                 seed: Optional[int] = None):
        self._min = float(minimum)
        self._max = float(maximum)
        self._dim = int(dimensions)
        self._expected_min = None if expected_min is None else float(expected_min)
        self._expected_min_coords = None
        if expected_min_coords is not None:
            coords = np.array(expected_min_coords, dtype=float)
            coords.flags.writeable = False
            self._expected_min_coords = coords
        self.rng = np.random.default_rng(seed)

    @classmethod
    def builder(cls) -> "BenchmarkBuilder":
        return BenchmarkBuilder(cls)

    @property
    def minimum(self) -> float:
        return self._min

    @property
    def maximum(self) -> float:
        return self._max

    @property
    def dimensions(self) -> int:
        return self._dim

    @property
    def expected_min(self) -> Optional[float]:
        return self._expected_min

    @property
    def expected_min_coords(self) -> Optional[np.ndarray]:
        return self._expected_min_coords

    def cost(self, point: Sequence[float]) -> float:
        x = np.asarray(point, dtype=float)
        if x.shape != (self._dim,):
            raise ValueError(f"{self.name}: expected {self._dim} coordinates, got shape {x.shape}")
        return float(self.evaluate(x))

    def evaluate(self, x: np.ndarray) -> float:
        raise NotImplementedError

    __call__ = cost

    def random_point(self) -> np.ndarray:
        # uniform is half-open; widen by one ulp so maximum is reachable, then clip rounding
        x = self.rng.uniform(self._min, np.nextafter(self._max, np.inf), self._dim)
        return np.minimum(x, self._max)

    def local_step(self, point: Sequence[float]) -> np.ndarray:
        # sigma = range/10/6: a 3-sigma step stays within a tenth of the range
        sigma = (self._max - self._min) / 60.0
        base = np.array(point, dtype=float)
        out = base + self.rng.normal(0.0, sigma, base.shape)
        bad = (out < self._min) | (out > self._max)
        # rejection: redraw only the components that left the box
        while np.any(bad):
            out[bad] = base[bad] + self.rng.normal(0.0, sigma, int(bad.sum()))
            bad = (out < self._min) | (out > self._max)
        return out

    def __repr__(self) -> str:
        return f"{type(self).__name__}(min={self._min}, max={self._max}, dim={self._dim})"


B = TypeVar("B", bound=Benchmark)


class BenchmarkBuilder(Generic[B]):
    """Collects construction parameters and validates them in `build()`."""

    def __init__(self, cls: Type[B]):
        self._cls = cls
        self._min: Optional[float] = None
        self._max: Optional[float] = None
        self._dim: Optional[int] = None
        self._expected_min: Optional[float] = None
        self._expected_min_coords: Optional[Sequence[float]] = None
        self._seed: Optional[int] = None
        self._params: Dict[str, Any] = {}

    def minimum(self, value: float) -> "BenchmarkBuilder[B]":
        self._min = value
        return self

    def maximum(self, value: float) -> "BenchmarkBuilder[B]":
        self._max = value
        return self

    def dimensions(self, value: int) -> "BenchmarkBuilder[B]":
        self._dim = value
        return self

    def expected_min(self, value: float) -> "BenchmarkBuilder[B]":
        self._expected_min = value
        return self

    def expected_min_coords(self, value: Sequence[float]) -> "BenchmarkBuilder[B]":
        self._expected_min_coords = value
        return self

    def seed(self, value: int) -> "BenchmarkBuilder[B]":
        self._seed = value
        return self

    def params(self, **kwargs) -> "BenchmarkBuilder[B]":
        self._params.update(kwargs)
        return self

    def build(self) -> B:
        if self._min is None:
            raise MissingMinimum()
        if self._max is None:
            raise MissingMaximum()
        if self._dim is None:
            raise MissingDimensions()
        if self._min > self._max:
            raise BuilderError(f"Error while building object: minimum {self._min} exceeds maximum {self._max}")
        if int(self._dim) < 1:
            raise BuilderError(f"Error while building object: dimensions must be positive, got {self._dim}")
        return self._cls(
            self._min, self._max, self._dim,
            expected_min=self._expected_min,
            expected_min_coords=self._expected_min_coords,
            seed=self._seed,
            **self._params,
        )
