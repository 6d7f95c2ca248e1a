"""
Base ODE System Class

Abstract descriptor shared by the integrator suite and the PINN trainer.
"""

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Tuple

import torch


class BaseODE(ABC):
    """
    Abstract base class for ODE systems y' = f(t, y).

    A system is immutable once constructed. Its derivative must accept a
    batch of states laid out column-wise (state_dim x N) and return a
    derivative batch of the same shape. Derivatives are written with torch
    ops so the same function serves the numerical integrators (float64
    tensors) and the physics residual (autograd-tracked network outputs).

    Second-order systems lay out the state as [positions; velocities] and
    provide acceleration(t, x, v) for symplectic integration.

    Args:
        name: Human readable name
        order: Order of the original ODE (1, 2 or 3)
        state_dim: Dimension D of the first-order state vector
        domain_t: Tuple (t0, t1) for the time domain
        y0: Initial state, D entries
        params: Physical parameters of the system
    """

    def __init__(
        self,
        name: str,
        order: int,
        state_dim: int,
        domain_t: Tuple[float, float],
        y0: Sequence[float],
        params: Optional[Mapping[str, object]] = None
    ):
        y0 = tuple(float(v) for v in torch.as_tensor(y0, dtype=torch.float64).reshape(-1).tolist())

        if order not in (1, 2, 3):
            raise ValueError(f"order must be 1, 2 or 3, got {order}")
        if len(y0) != state_dim:
            raise ValueError(
                f"{name}: initial state has {len(y0)} entries, expected state_dim={state_dim}"
            )
        if order == 2:
            if state_dim % 2 != 0:
                raise ValueError(f"{name}: second-order system needs an even state_dim, got {state_dim}")
            if not self.has_acceleration:
                raise ValueError(f"{name}: second-order system must provide acceleration()")

        t0, t1 = float(domain_t[0]), float(domain_t[1])
        if not t1 > t0:
            raise ValueError(f"{name}: time domain must be increasing, got ({t0}, {t1})")

        self._name = name
        self._order = order
        self._state_dim = state_dim
        self._domain_t = (t0, t1)
        self._y0 = y0
        self._params = MappingProxyType(dict(params or {}))

    @property
    def name(self) -> str:
        return self._name

    @property
    def order(self) -> int:
        return self._order

    @property
    def state_dim(self) -> int:
        return self._state_dim

    @property
    def domain_t(self) -> Tuple[float, float]:
        return self._domain_t

    @property
    def y0(self) -> Tuple[float, ...]:
        return self._y0

    @property
    def params(self) -> Mapping[str, object]:
        return self._params

    @abstractmethod
    def derivative(self, t, y: torch.Tensor) -> torch.Tensor:
        """
        Right-hand side f(t, y).

        Args:
            t: Scalar time or time batch [1, N]
            y: State batch [state_dim, N]

        Returns:
            dy/dt [state_dim, N]
        """
        pass

    def acceleration(self, t, x: torch.Tensor, v: torch.Tensor) -> torch.Tensor:
        """
        Acceleration a(t, x, v) for second-order systems.

        Args:
            t: Scalar time
            x: Positions [state_dim/2, N]
            v: Velocities [state_dim/2, N]

        Returns:
            Accelerations [state_dim/2, N]
        """
        raise NotImplementedError(f"{self.name} does not provide an acceleration")

    @property
    def has_acceleration(self) -> bool:
        return type(self).acceleration is not BaseODE.acceleration

    @property
    def is_symplectic_compatible(self) -> bool:
        """True when leapfrog can integrate this system."""
        return self.order == 2 and self.state_dim % 2 == 0 and self.has_acceleration

    def initial_condition(self, dtype: torch.dtype = torch.float64) -> torch.Tensor:
        """Initial state as a fresh [state_dim, 1] tensor."""
        return torch.tensor(self._y0, dtype=dtype).reshape(-1, 1)

    def get_domain(self) -> dict:
        """Get temporal domain bounds."""
        return {'t_min': self._domain_t[0], 't_max': self._domain_t[1]}

    def get_params(self) -> dict:
        return dict(self._params)

    def __repr__(self):
        return f"{type(self).__name__}(t={self._domain_t}, dim={self._state_dim}, order={self._order})"
