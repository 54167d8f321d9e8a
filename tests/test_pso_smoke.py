import copy
import numpy as np
import pytest
from problems.benchmarks import FirstDeJong, Griewank
from solvers.pso import PSO, Particle


def test_pso_runs_and_improves():
    D = 2
    p = Griewank.builder().minimum(-600.0).maximum(600.0).dimensions(D).build()
    opt = PSO(p, seed=0, options={"pop": 20, "max_cost_evaluations": 2000, "w": 0.72, "c1": 1.6, "c2": 1.6})
    best = opt.run()
    assert np.isfinite(best["f"])
    assert best["f"] < opt.history[0]


def test_pso_budget_is_exact():
    p = FirstDeJong.builder().minimum(-5).maximum(5).dimensions(3).build()
    for budget in (500, 105, 10):
        opt = PSO(p, options={"pop": 10, "max_cost_evaluations": budget})
        opt.run()
        assert opt.evals_total == budget


def test_pso_partial_last_step():
    p = FirstDeJong.builder().minimum(-5).maximum(5).dimensions(3).build()
    opt = PSO(p, options={"pop": 10, "max_cost_evaluations": 25})
    opt.run()
    lengths = [len(q.history) for q in opt.particles]
    assert lengths == [3] * 5 + [2] * 5


def test_pso_best_below_history():
    p = FirstDeJong.builder().minimum(-5).maximum(5).dimensions(4).build()
    opt = PSO(p, options={"pop": 15, "max_cost_evaluations": 1500})
    best = opt.run()
    assert best["f"] <= min(opt.history)
    for q in opt.particles:
        assert q.best_cost == min(p.cost(x) for x in q.history)
        assert q.best_cost >= best["f"]


def test_pso_clamped_positions_stay_in_bounds():
    p = FirstDeJong.builder().minimum(-1).maximum(1).dimensions(3).build()
    opt = PSO(p, options={"pop": 10, "max_cost_evaluations": 300, "w": 1.5, "clamp_positions": True})
    opt.run()
    for q in opt.particles:
        for x in q.history:
            assert np.all((x >= -1) & (x <= 1))


def test_pso_short_history():
    p = FirstDeJong.builder().minimum(-5).maximum(5).dimensions(3).build()
    opt = PSO(p, options={"pop": 10, "max_cost_evaluations": 400, "keep_history": False})
    opt.run()
    for q in opt.particles:
        assert 1 <= len(q.history) <= 2
        assert q.best_cost == pytest.approx(p.cost(q.best_position))


def test_particle_tracks_personal_best_index():
    q = Particle.spawn(np.zeros(2), np.ones(2), 5.0)
    q.move(np.ones(2), np.ones(2), 3.0)
    q.move(2 * np.ones(2), np.ones(2), 4.0)
    assert q.best_index == 1
    assert q.best_cost == 3.0
    assert np.array_equal(q.position, 2 * np.ones(2))
    assert np.array_equal(q.best_position, np.ones(2))


def test_pso_budget_must_cover_swarm():
    p = FirstDeJong.builder().minimum(-5).maximum(5).dimensions(3).build()
    with pytest.raises(ValueError):
        PSO(p, options={"pop": 10, "max_cost_evaluations": 5})


def test_pso_velocity_uses_social_weight_and_fixed_gbest():
    p = FirstDeJong.builder().minimum(-5).maximum(5).dimensions(3).build()
    opt = PSO(p, seed=11, options={"pop": 6, "max_cost_evaluations": 100, "w": 0.5, "c1": 0.0, "c2": 1.5})
    X = opt.ask()
    opt.tell([p.cost(x) for x in X])

    g = opt.gbest_x.copy()
    before = [(q.position.copy(), q.velocity.copy()) for q in opt.particles]
    rng = copy.deepcopy(opt.rng)

    X = opt.ask()
    for (x, v), x_new in zip(before, X):
        rng.random(3)  # r1, unused with c1 = 0
        r2 = rng.random(3)
        expected_v = 0.5 * v + 1.5 * r2 * (g - x)
        assert np.allclose(x_new, x + expected_v)
