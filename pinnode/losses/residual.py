"""
Physics Residual
R = dY/dt - f(t, Y) for a surrogate Y(t)
"""

from typing import Tuple

import torch

from ..diffeq.base import BaseODE


def compute_residual(
    system: BaseODE,
    model,
    t,
    mode: str = 'eval'
) -> Tuple[torch.Tensor, torch.Tensor, torch.Tensor]:
    """
    Physics residual of a first-order system y' = f(t, y).

    dY/dt is obtained channel by channel: for output i the scalar
    sum_j Y[i, j] is differentiated with respect to the whole time batch.
    Because sample j of the forward pass depends only on t[j], entry j of
    that gradient equals dY[i, j]/dt[j]. Models with batch coupling (e.g.
    batch normalization) break this assumption.

    The graph is kept (create_graph=True) so the residual can itself be
    backpropagated into the model parameters.

    Args:
        system: ODE system providing derivative(t, Y)
        model: Surrogate with forward(t, mode) -> [D, N]
        t: Time batch [1, N] (row, column or 1-D accepted)
        mode: 'train' (dropout active) or 'eval'

    Returns:
        R: Residuals [D, N]
        dYdt: Time derivatives [D, N]
        Y: Predicted states [D, N]
    """
    if not isinstance(t, torch.Tensor):
        t = torch.as_tensor(t)
    t = t.detach().to(model.dtype).reshape(1, -1).requires_grad_(True)

    Y = model(t, mode=mode)

    channels = []
    for i in range(Y.shape[0]):
        g = torch.autograd.grad(
            Y[i].sum(), t,
            create_graph=True,
            retain_graph=True
        )[0]
        channels.append(g.reshape(-1))
    dYdt = torch.stack(channels)

    R = dYdt - system.derivative(t, Y)
    return R, dYdt, Y
