import numpy as np

# Formulas after https://www.sfu.ca/~ssurjano/ where available.


def first_dejong(x: np.ndarray) -> float:
    """Sphere. Global minimum f(0) = 0."""
    x = np.asarray(x, dtype=float)
    return float(np.sum(x * x))


def second_dejong(x: np.ndarray) -> float:
    """Rosenbrock valley chained over consecutive pairs. Minimum f(1, ..., 1) = 0."""
    x = np.asarray(x, dtype=float)
    a, b = x[:-1], x[1:]
    return float(np.sum(100.0 * (b - a * a) ** 2 + (1.0 - a) ** 2))


def third_dejong(x: np.ndarray) -> float:
    """Step function: 10*D + sum(floor(x))."""
    x = np.asarray(x, dtype=float)
    return float(10.0 * len(x) + np.sum(np.floor(x)))


def fourth_dejong(x: np.ndarray, rng: np.random.Generator) -> float:
    """
    Quartic with noise. Each term gets an independent uniform [0, 1) draw
    scaled by 1e7, so repeated evaluations of one point differ.
    """
    x = np.asarray(x, dtype=float)
    i = np.arange(1, len(x) + 1, dtype=float)
    return float(np.sum(i * x ** 4 + rng.random(len(x)) * 1e7))


def ackley(x: np.ndarray, a: float = 20.0, b: float = 0.2, c: float = 2.0 * np.pi) -> float:
    """
    Ackley function. Global minimum at x = 0, f = 0.
    """
    x = np.asarray(x, dtype=float)
    d = len(x)
    s1 = np.sqrt(np.sum(x * x) / d)
    s2 = np.sum(np.cos(c * x)) / d
    return float(-a * np.exp(-b * s1) - np.exp(s2) + a + np.e)


def griewank(x: np.ndarray) -> float:
    """
    Griewank benchmark function.
    Global minimum at x = 0, f = 0. Bounds typically [-600, 600]^D.
    """
    x = np.asarray(x, dtype=float)
    s = np.sum(x * x) / 4000.0
    p = np.prod(np.cos(x / np.sqrt(np.arange(1, len(x) + 1, dtype=float))))
    return float(1.0 + s - p)


def rastrigin(x: np.ndarray) -> float:
    x = np.asarray(x, dtype=float)
    return float(10.0 * len(x) + np.sum(x * x - 10.0 * np.cos(2.0 * np.pi * x)))


def schwefel(x: np.ndarray) -> float:
    """Minimum close to 0 at x_i = 420.9687. Bounds [-500, 500]^D."""
    x = np.asarray(x, dtype=float)
    return float(418.9829 * len(x) - np.sum(x * np.sin(np.sqrt(np.abs(x)))))


def michalewicz(x: np.ndarray, m: int = 10) -> float:
    x = np.asarray(x, dtype=float)
    i = np.arange(1, len(x) + 1, dtype=float)
    return float(-np.sum(np.sin(x) * np.sin(i * x * x / np.pi) ** (2 * m)))


def alpine2(x: np.ndarray) -> float:
    """Product form, defined on x >= 0 (usually [0, 10]^D)."""
    x = np.asarray(x, dtype=float)
    return float(np.prod(np.sqrt(x) * np.sin(x)))


def deb1(x: np.ndarray) -> float:
    x = np.asarray(x, dtype=float)
    return float(-np.sum(np.sin(5.0 * np.pi * x) ** 6) / len(x))


def periodic(x: np.ndarray) -> float:
    """Global minimum f(0) = 0.9."""
    x = np.asarray(x, dtype=float)
    return float(1.0 + np.sum(np.sin(x) ** 2) - 0.1 * np.exp(-np.sum(x * x)))


def qing(x: np.ndarray) -> float:
    """Minima at x_i = +-sqrt(i), f = 0."""
    x = np.asarray(x, dtype=float)
    i = np.arange(1, len(x) + 1, dtype=float)
    return float(np.sum((x * x - i) ** 2))


def quintic(x: np.ndarray) -> float:
    x = np.asarray(x, dtype=float)
    return float(np.sum(np.abs(x ** 5 - 3 * x ** 4 + 4 * x ** 3 + 2 * x ** 2 - 10 * x - 4)))


def salomon(x: np.ndarray) -> float:
    x = np.asarray(x, dtype=float)
    r = np.sqrt(np.sum(x * x))
    return float(1.0 - np.cos(2.0 * np.pi * r) + 0.1 * r)
