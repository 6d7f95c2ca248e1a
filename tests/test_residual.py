import torch
import torch.nn as nn

from pinnode.diffeq import HookeSystem, LorenzSystem
from pinnode.losses import PhysicsLoss, compute_residual
from pinnode.models import PINN


class SinCos(nn.Module):
    """Y(t) = [sin t; cos t], an exact Hooke trajectory."""

    dtype = torch.float64

    def forward(self, t, mode=None):
        t = torch.as_tensor(t, dtype=self.dtype).reshape(1, -1)
        return torch.cat([torch.sin(t), torch.cos(t)], dim=0)


def test_residual_vanishes_on_exact_solution():
    t = torch.linspace(0.0, 6.0, 25, dtype=torch.float64)
    R, dYdt, Y = compute_residual(HookeSystem(), SinCos(), t)
    assert R.shape == (2, 25)
    assert torch.allclose(dYdt[0], torch.cos(t))
    assert torch.allclose(dYdt[1], -torch.sin(t))
    assert torch.allclose(R, torch.zeros_like(R), atol=1e-12)


def test_residual_of_pinn_backpropagates_to_parameters():
    model = PINN(output_dim=3, hidden_sizes=(8, 8))
    t = torch.rand(1, 16) * 2.0
    loss = PhysicsLoss(LorenzSystem())(model, t)
    assert loss.dim() == 0
    loss.backward()
    assert all(p.grad is not None and torch.isfinite(p.grad).all() for p in model.parameters())


def test_residual_stats_keys():
    stats = PhysicsLoss(HookeSystem()).compute_stats(SinCos(), torch.linspace(0.0, 1.0, 5))
    assert set(stats) == {'mean', 'std', 'max', 'min', 'rms'}
    assert abs(stats['rms']) < 1e-12
