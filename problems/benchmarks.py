from __future__ import annotations
from typing import Dict, Type
import numpy as np
from . import functions as fx
from .benchmark import Benchmark


class FirstDeJong(Benchmark):
    name = "First De Jong"

    def evaluate(self, x: np.ndarray) -> float:
        return fx.first_dejong(x)


class SecondDeJong(Benchmark):
    name = "Second De Jong"

    def evaluate(self, x: np.ndarray) -> float:
        return fx.second_dejong(x)


class ThirdDeJong(Benchmark):
    name = "Third De Jong"

    def evaluate(self, x: np.ndarray) -> float:
        return fx.third_dejong(x)


class FourthDeJong(Benchmark):
    """Noisy quartic; uses the problem's own generator for the noise term."""
    name = "Fourth De Jong"

    def evaluate(self, x: np.ndarray) -> float:
        return fx.fourth_dejong(x, self.rng)


class Ackley(Benchmark):
    name = "Ackley"

    def __init__(self, *args, a: float = 20.0, b: float = 0.2, c: float = 2.0 * np.pi, **kwargs):
        super().__init__(*args, **kwargs)
        self.a = float(a)
        self.b = float(b)
        self.c = float(c)

    def evaluate(self, x: np.ndarray) -> float:
        return fx.ackley(x, self.a, self.b, self.c)


class Griewank(Benchmark):
    name = "Griewank"

    def evaluate(self, x: np.ndarray) -> float:
        return fx.griewank(x)


class Rastrigin(Benchmark):
    name = "Rastrigin"

    def evaluate(self, x: np.ndarray) -> float:
        return fx.rastrigin(x)


class Schwefel(Benchmark):
    name = "Schwefel"

    def evaluate(self, x: np.ndarray) -> float:
        return fx.schwefel(x)


class Michalewicz(Benchmark):
    name = "Michalewicz"

    def __init__(self, *args, m: int = 10, **kwargs):
        super().__init__(*args, **kwargs)
        self.m = int(m)

    def evaluate(self, x: np.ndarray) -> float:
        return fx.michalewicz(x, self.m)


class Alpine2(Benchmark):
    name = "Alpine 2"

    def evaluate(self, x: np.ndarray) -> float:
        return fx.alpine2(x)


class Deb1(Benchmark):
    name = "Deb 1"

    def evaluate(self, x: np.ndarray) -> float:
        return fx.deb1(x)


class Periodic(Benchmark):
    name = "Periodic"

    def evaluate(self, x: np.ndarray) -> float:
        return fx.periodic(x)


class Qing(Benchmark):
    name = "Qing"

    def evaluate(self, x: np.ndarray) -> float:
        return fx.qing(x)


class Quintic(Benchmark):
    name = "Quintic"

    def evaluate(self, x: np.ndarray) -> float:
        return fx.quintic(x)


class Salomon(Benchmark):
    name = "Salomon"

    def evaluate(self, x: np.ndarray) -> float:
        return fx.salomon(x)


BENCHMARKS: Dict[str, Type[Benchmark]] = {
    "first_dejong": FirstDeJong,
    "second_dejong": SecondDeJong,
    "third_dejong": ThirdDeJong,
    "fourth_dejong": FourthDeJong,
    "ackley": Ackley,
    "griewank": Griewank,
    "rastrigin": Rastrigin,
    "schwefel": Schwefel,
    "michalewicz": Michalewicz,
    "alpine2": Alpine2,
    "deb1": Deb1,
    "periodic": Periodic,
    "qing": Qing,
    "quintic": Quintic,
    "salomon": Salomon,
}
