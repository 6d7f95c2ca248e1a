import logging
import math

import pytest
import torch

from pinnode.integrators import euler_implicit, jacobian, newton_solve


def test_jacobian_of_linear_map_matches_matrix():
    A = torch.tensor([[2.0, -1.0, 0.5], [0.0, 3.0, 1.0], [4.0, 0.0, -2.0]], dtype=torch.float64)
    J = jacobian(lambda y: A @ y, torch.tensor([0.3, -1.2, 2.0]))
    assert torch.allclose(J, A, atol=1e-6)


def test_jacobian_of_nonlinear_map():
    F = lambda y: torch.stack([y[0] ** 2, y[0] * y[1]])
    J = jacobian(F, torch.tensor([1.0, 2.0]))
    expected = torch.tensor([[2.0, 0.0], [2.0, 1.0]], dtype=torch.float64)
    assert torch.allclose(J, expected, atol=1e-5)


def test_newton_finds_square_root_of_two():
    result = newton_solve(lambda y: y ** 2 - 2.0, torch.tensor([1.0]))
    assert result.converged
    assert abs(float(result.y[0]) - math.sqrt(2.0)) < 1e-10
    assert result.iterations <= 20


def test_newton_reports_nonconvergence_at_budget():
    result = newton_solve(lambda y: y ** 2 - 2.0, torch.tensor([10.0]), maxit=1)
    assert not result.converged
    assert result.iterations == 1
    # the last iterate is still returned
    assert abs(float(result.y[0]) - 5.1) < 1e-6


def test_implicit_euler_warns_on_nonconvergence(caplog):
    t = torch.linspace(0.0, 1.0, 11, dtype=torch.float64)
    with caplog.at_level(logging.WARNING, logger='pinnode'):
        Y = euler_implicit(lambda t, y: -y, t, [1.0], maxit=1)
    assert 'did not converge' in caplog.text
    assert torch.isfinite(Y).all()


def test_implicit_euler_strict_raises():
    t = torch.linspace(0.0, 1.0, 11, dtype=torch.float64)
    with pytest.raises(RuntimeError, match='did not converge'):
        euler_implicit(lambda t, y: -y, t, [1.0], maxit=1, strict=True)
