"""
Optimizers for PINN training

- MomentumSGD: v <- momentum * v - lr * g;  theta <- theta + v
- Adam: bias-corrected moments with an explicit step counter
"""

from enum import Enum
from typing import Union

import torch
from torch.optim import Optimizer


class OptimizerKind(str, Enum):
    SGD = 'sgd'
    ADAM = 'adam'


class MomentumSGD(Optimizer):
    """
    Heavy-ball SGD with the learning rate inside the velocity.

    Unlike torch.optim.SGD the velocity accumulates -lr * g, so a learning
    rate change only affects new contributions.

    Args:
        params: Iterable of parameters
        lr: Learning rate
        momentum: Velocity decay in [0, 1)
    """

    def __init__(self, params, lr: float = 1e-3, momentum: float = 0.9):
        if lr < 0:
            raise ValueError(f"Invalid learning rate: {lr}")
        if not 0.0 <= momentum < 1.0:
            raise ValueError(f"Invalid momentum: {momentum}")
        super().__init__(params, dict(lr=lr, momentum=momentum))

        for group in self.param_groups:
            for p in group['params']:
                self.state[p]['velocity'] = torch.zeros_like(p, memory_format=torch.preserve_format)

    @torch.no_grad()
    def step(self, closure=None):
        loss = None
        if closure is not None:
            with torch.enable_grad():
                loss = closure()

        for group in self.param_groups:
            lr, momentum = group['lr'], group['momentum']
            for p in group['params']:
                if p.grad is None:
                    continue
                v = self.state[p]['velocity']
                v.mul_(momentum).add_(p.grad, alpha=-lr)
                p.add_(v)

        return loss


class Adam(Optimizer):
    """
    Adam with bias correction and a controllable step counter.

    With step_unit='batch' the counter advances on every step() as in the
    usual formulation. With step_unit='epoch' it only advances through
    advance_step(), which the trainer calls once per epoch; every batch of
    an epoch then shares the same bias correction.

    Args:
        params: Iterable of parameters
        lr: Learning rate
        betas: (beta1, beta2)
        eps: Denominator term
        step_unit: 'epoch' or 'batch'
    """

    def __init__(
        self,
        params,
        lr: float = 1e-3,
        betas=(0.9, 0.999),
        eps: float = 1e-8,
        step_unit: str = 'epoch'
    ):
        if lr < 0:
            raise ValueError(f"Invalid learning rate: {lr}")
        if not 0.0 <= betas[0] < 1.0 or not 0.0 <= betas[1] < 1.0:
            raise ValueError(f"Invalid betas: {betas}")
        if eps <= 0:
            raise ValueError(f"Invalid epsilon: {eps}")
        if step_unit not in ('epoch', 'batch'):
            raise ValueError(f"step_unit must be 'epoch' or 'batch', got {step_unit!r}")
        super().__init__(params, dict(lr=lr, betas=tuple(betas), eps=eps, step=0))
        self.step_unit = step_unit

        for group in self.param_groups:
            for p in group['params']:
                self.state[p]['exp_avg'] = torch.zeros_like(p, memory_format=torch.preserve_format)
                self.state[p]['exp_avg_sq'] = torch.zeros_like(p, memory_format=torch.preserve_format)

    def advance_step(self) -> None:
        """Advance the bias-correction counter by one."""
        for group in self.param_groups:
            group['step'] += 1

    @torch.no_grad()
    def step(self, closure=None):
        loss = None
        if closure is not None:
            with torch.enable_grad():
                loss = closure()

        if self.step_unit == 'batch':
            self.advance_step()

        for group in self.param_groups:
            beta1, beta2 = group['betas']
            lr, eps = group['lr'], group['eps']
            # a counter still at 0 (no advance yet) is treated as the first step
            k = max(group['step'], 1)
            bias1 = 1 - beta1 ** k
            bias2 = 1 - beta2 ** k

            for p in group['params']:
                if p.grad is None:
                    continue
                g = p.grad
                m = self.state[p]['exp_avg']
                v = self.state[p]['exp_avg_sq']
                m.mul_(beta1).add_(g, alpha=1 - beta1)
                v.mul_(beta2).addcmul_(g, g, value=1 - beta2)

                denom = (v / bias2).sqrt_().add_(eps)
                p.addcdiv_(m / bias1, denom, value=-lr)

        return loss


def build_optimizer(
    params,
    kind: Union[OptimizerKind, str],
    lr: float,
    momentum: float = 0.9,
    beta1: float = 0.9,
    beta2: float = 0.999,
    eps: float = 1e-8,
    adam_step_unit: str = 'epoch'
) -> Optimizer:
    """Create the optimizer selected by kind ('sgd' or 'adam')."""
    try:
        kind = OptimizerKind(kind)
    except ValueError:
        raise ValueError(
            f"Unknown optimizer: {kind}. "
            f"Choose from {[k.value for k in OptimizerKind]}"
        ) from None

    if kind is OptimizerKind.ADAM:
        return Adam(params, lr=lr, betas=(beta1, beta2), eps=eps, step_unit=adam_step_unit)
    return MomentumSGD(params, lr=lr, momentum=momentum)
