"""
Integrator dispatch and the solver-suite runner.
"""

import logging
from enum import Enum
from typing import Dict, Optional, Tuple, Union

import numpy as np
import torch

from ..diffeq.base import BaseODE
from .base import Integrator
from .crank_nicolson import crank_nicolson
from .euler import euler_explicit, euler_implicit
from .leapfrog import leapfrog
from .rk4 import runge_kutta

logger = logging.getLogger(__name__)


class IntegratorKind(str, Enum):
    EULER_EXPLICIT = 'euler_explicit'
    EULER_IMPLICIT = 'euler_implicit'
    CRANK_NICOLSON = 'crank_nicolson'
    RUNGE_KUTTA = 'runge_kutta'
    LEAPFROG = 'leapfrog'


_INTEGRATORS = {
    IntegratorKind.EULER_EXPLICIT: euler_explicit,
    IntegratorKind.EULER_IMPLICIT: euler_implicit,
    IntegratorKind.CRANK_NICOLSON: crank_nicolson,
    IntegratorKind.RUNGE_KUTTA: runge_kutta,
    IntegratorKind.LEAPFROG: leapfrog,
}

_IMPLICIT = (IntegratorKind.EULER_IMPLICIT, IntegratorKind.CRANK_NICOLSON)


def _as_kind(kind: Union[IntegratorKind, str]) -> IntegratorKind:
    try:
        return IntegratorKind(kind)
    except ValueError:
        raise ValueError(
            f"Unknown integrator: {kind}. "
            f"Choose from {[k.value for k in IntegratorKind]}"
        ) from None


def get_integrator(kind: Union[IntegratorKind, str]) -> Integrator:
    """
    Look up an integrator function by kind.

    Args:
        kind: IntegratorKind or its name ('euler_explicit', 'runge_kutta', ...)

    Returns:
        Function integrator(func, t, y0, **options) -> [D, N]

    Example:
        >>> rk4 = get_integrator('runge_kutta')
        >>> Y = rk4(system.derivative, t, system.y0)
    """
    return _INTEGRATORS[_as_kind(kind)]


def time_grid(time_span: Tuple[float, float], h: float) -> torch.Tensor:
    """Uniform grid t0, t0 + h, ... up to and including t1 when it falls on the grid."""
    t0, t1 = float(time_span[0]), float(time_span[1])
    if h <= 0:
        raise ValueError(f"step size must be positive, got {h}")
    n = int(np.floor((t1 - t0) / h + 1e-9)) + 1
    return t0 + h * torch.arange(n, dtype=torch.float64)


def integrate(
    system: BaseODE,
    kind: Union[IntegratorKind, str],
    t,
    **options
) -> torch.Tensor:
    """
    Integrate a system with one method of the suite.

    Leapfrog is fed the system's acceleration, every other method its
    derivative.

    Args:
        system: ODE system
        kind: Integrator to use
        t: Time grid [N]; t[0] is the time of the system's initial state
        **options: Extra keyword arguments (tol, maxit, strict) for implicit methods

    Returns:
        Trajectory [D, N]
    """
    kind = _as_kind(kind)
    fn = _INTEGRATORS[kind]
    y0 = system.initial_condition()

    if kind is IntegratorKind.LEAPFROG:
        if not system.has_acceleration:
            raise ValueError(f"{system.name} has no acceleration; leapfrog is not applicable")
        return fn(system.acceleration, t, y0)
    if kind in _IMPLICIT:
        return fn(system.derivative, t, y0, **options)
    return fn(system.derivative, t, y0)


def run_solvers(
    system: BaseODE,
    h: float,
    time_span: Optional[Tuple[float, float]] = None,
    **options
) -> Dict[str, torch.Tensor]:
    """
    Run the whole integrator suite on a common uniform grid.

    Leapfrog only runs on second-order systems with an even state and an
    acceleration; otherwise its entry is an all-NaN [D, N] array marking it
    unavailable.

    Args:
        system: ODE system
        h: Step size
        time_span: Override of the system's time domain
        **options: Passed to the implicit integrators

    Returns:
        Dict with 't' and one [D, N] trajectory per IntegratorKind value
    """
    t = time_grid(time_span or system.domain_t, h)
    results = {'t': t}

    for kind in IntegratorKind:
        if kind is IntegratorKind.LEAPFROG and not system.is_symplectic_compatible:
            results[kind.value] = torch.full((system.state_dim, t.numel()), float('nan'), dtype=torch.float64)
            continue
        logger.debug("Running %s on %s (%d steps)", kind.value, system.name, t.numel() - 1)
        results[kind.value] = integrate(system, kind, t, **options)

    return results


def integrate_at(
    system: BaseODE,
    kind: Union[IntegratorKind, str],
    t_eval,
    h: float
) -> torch.Tensor:
    """
    Integrate from the system's t0 on a uniform grid and sample the solution at t_eval.

    The trajectory is linearly interpolated onto t_eval, which may be
    non-uniform and need not start at t0.

    Args:
        system: ODE system
        kind: Integrator to use
        t_eval: Query times [M]
        h: Integration step

    Returns:
        States at t_eval [D, M]
    """
    t_eval = np.asarray(torch.as_tensor(t_eval, dtype=torch.float64).reshape(-1))
    t0 = system.domain_t[0]
    t_end = max(float(t_eval.max()), t0) if t_eval.size else t0

    t = time_grid((t0, t_end), h)
    if float(t[-1]) < t_end:
        t = torch.cat([t, t[-1:] + h])

    Y = integrate(system, kind, t).numpy()
    grid = t.numpy()
    out = np.stack([np.interp(t_eval, grid, Y[d]) for d in range(Y.shape[0])])
    return torch.from_numpy(out)
