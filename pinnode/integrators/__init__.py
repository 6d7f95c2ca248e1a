"""
Numerical integrators for y' = f(t, y).

Available integrators:
- euler_explicit: 1st order, explicit, uniform grid only
- euler_implicit: 1st order, implicit (Newton-solved)
- crank_nicolson: 2nd order trapezoidal rule, implicit (Newton-solved)
- runge_kutta: classic 4th order Runge-Kutta
- leapfrog: velocity-Verlet, symplectic, second-order systems only
"""

from .base import Integrator
from .newton import NewtonResult, jacobian, newton_solve
from .euler import euler_explicit, euler_implicit
from .crank_nicolson import crank_nicolson
from .rk4 import runge_kutta
from .leapfrog import leapfrog
from .runner import (
    IntegratorKind,
    get_integrator,
    integrate,
    integrate_at,
    run_solvers,
    time_grid,
)

__all__ = [
    'Integrator',
    'IntegratorKind',
    'NewtonResult',
    'jacobian',
    'newton_solve',
    'euler_explicit',
    'euler_implicit',
    'crank_nicolson',
    'runge_kutta',
    'leapfrog',
    'get_integrator',
    'integrate',
    'integrate_at',
    'run_solvers',
    'time_grid',
]
