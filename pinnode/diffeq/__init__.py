"""
Dynamical systems

Base class:
- BaseODE: System descriptor consumed by the integrators and the PINN trainer

Systems (pinnode.diffeq.odes):
- HookeSystem, HarmonicOscillator, VanDerPolOscillator, DoublePendulum,
  ThreeBodySystem, LorenzSystem, JerkSystem, BlasiusEquation
"""

from enum import Enum
from typing import Union

from .base import BaseODE
from .odes import (
    HookeSystem,
    HarmonicOscillator,
    VanDerPolOscillator,
    LorenzSystem,
    DoublePendulum,
    ThreeBodySystem,
    JerkSystem,
    BlasiusEquation,
)


class SystemKind(str, Enum):
    HOOKE = 'hooke'
    HARMONIC = 'harmonic'
    VAN_DER_POL = 'van_der_pol'
    LORENZ = 'lorenz'
    DOUBLE_PENDULUM = 'double_pendulum'
    THREE_BODY = 'three_body'
    JERK = 'jerk'
    BLASIUS = 'blasius'


_SYSTEMS = {
    SystemKind.HOOKE: HookeSystem,
    SystemKind.HARMONIC: HarmonicOscillator,
    SystemKind.VAN_DER_POL: VanDerPolOscillator,
    SystemKind.LORENZ: LorenzSystem,
    SystemKind.DOUBLE_PENDULUM: DoublePendulum,
    SystemKind.THREE_BODY: ThreeBodySystem,
    SystemKind.JERK: JerkSystem,
    SystemKind.BLASIUS: BlasiusEquation,
}


def get_system(kind: Union[SystemKind, str], **params) -> BaseODE:
    """
    Factory function to build a benchmark system.

    Args:
        kind: SystemKind or its name ('hooke', 'lorenz', ...)
        **params: Overrides passed to the system constructor

    Returns:
        BaseODE instance

    Example:
        >>> sys = get_system('harmonic', c=0.0)
        >>> sys.state_dim
        2
    """
    try:
        kind = SystemKind(kind)
    except ValueError:
        raise ValueError(
            f"Unknown system: {kind}. "
            f"Choose from {[k.value for k in SystemKind]}"
        ) from None
    return _SYSTEMS[kind](**params)


__all__ = [
    'BaseODE',
    'SystemKind',
    'get_system',
    'HookeSystem',
    'HarmonicOscillator',
    'VanDerPolOscillator',
    'LorenzSystem',
    'DoublePendulum',
    'ThreeBodySystem',
    'JerkSystem',
    'BlasiusEquation',
]
