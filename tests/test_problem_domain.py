import numpy as np
import pytest
from problems.base import HasLocal, HasRandom, ProblemDomain
from problems.benchmark import (
    BuilderError, MissingDimensions, MissingMaximum, MissingMinimum,
)
from problems.benchmarks import Schwefel


def schwefel(dim=5):
    return Schwefel.builder().minimum(-500.0).maximum(500.0).dimensions(dim).build()


def test_capabilities():
    p = schwefel()
    assert isinstance(p, ProblemDomain)
    assert isinstance(p, HasRandom)
    assert isinstance(p, HasLocal)


def test_random_points_distinct_and_in_range():
    p = schwefel()
    r1, r2, r3 = p.random_point(), p.random_point(), p.random_point()
    assert not np.array_equal(r1, r2)
    assert not np.array_equal(r1, r3)
    assert not np.array_equal(r2, r3)
    for r in (r1, r2, r3):
        assert r.shape == (5,)
        assert np.all((r >= -500.0) & (r <= 500.0))


def test_local_step_moves_and_stays_in_range():
    p = schwefel()
    x = p.random_point()
    y = p.local_step(x)
    assert y.shape == x.shape
    assert not np.array_equal(x, y)
    assert np.all((y >= -500.0) & (y <= 500.0))


def test_local_step_from_the_boundary():
    p = schwefel()
    for _ in range(50):
        low = p.local_step(np.full(5, -500.0))
        high = p.local_step(np.full(5, 500.0))
        assert np.all((low >= -500.0) & (low <= 500.0))
        assert np.all((high >= -500.0) & (high <= 500.0))


def test_local_step_does_not_modify_input():
    p = schwefel()
    x = np.full(5, 500.0)
    p.local_step(x)
    assert np.all(x == 500.0)


def test_local_step_scale():
    p = schwefel(dim=2000)
    d = p.local_step(np.zeros(2000))
    # sigma = 1000 / 60
    assert np.std(d) == pytest.approx(1000.0 / 60.0, rel=0.1)


def test_seeded_problems_sample_the_same_points():
    a = Schwefel.builder().minimum(-1).maximum(1).dimensions(3).seed(7).build()
    b = Schwefel.builder().minimum(-1).maximum(1).dimensions(3).seed(7).build()
    assert np.array_equal(a.random_point(), b.random_point())


def test_builder_reports_missing_fields():
    with pytest.raises(MissingMinimum):
        Schwefel.builder().maximum(1).dimensions(2).build()
    with pytest.raises(MissingMaximum):
        Schwefel.builder().minimum(-1).dimensions(2).build()
    with pytest.raises(MissingDimensions):
        Schwefel.builder().minimum(-1).maximum(1).build()


def test_builder_checks_minimum_first():
    with pytest.raises(MissingMinimum):
        Schwefel.builder().build()


def test_builder_messages_differ():
    msgs = {str(MissingMinimum()), str(MissingMaximum()), str(MissingDimensions())}
    assert len(msgs) == 3
    assert all(issubclass(e, BuilderError) for e in (MissingMinimum, MissingMaximum, MissingDimensions))


def test_builder_rejects_bad_values():
    with pytest.raises(BuilderError):
        Schwefel.builder().minimum(1).maximum(-1).dimensions(2).build()
    with pytest.raises(BuilderError):
        Schwefel.builder().minimum(-1).maximum(1).dimensions(0).build()


def test_built_problem_is_read_only():
    p = Schwefel.builder().minimum(-1).maximum(1).dimensions(2).expected_min_coords([0.0, 0.0]).build()
    with pytest.raises(AttributeError):
        p.minimum = 3.0
    with pytest.raises(ValueError):
        p.expected_min_coords[0] = 1.0


def test_random_point_can_reach_maximum():
    p = Schwefel.builder().minimum(2.0).maximum(2.0).dimensions(4).build()
    assert np.all(p.random_point() == 2.0)
    hi = np.nextafter(1.0, np.inf)
    q = Schwefel.builder().minimum(1.0).maximum(hi).dimensions(1000).build()
    r = q.random_point()
    assert np.all((r >= 1.0) & (r <= hi))
