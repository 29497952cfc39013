"""Analytic partial derivatives of rotational-dynamics torque models.

Provides the per-epoch sensitivities of torque models w.r.t. a body's
rotational state and w.r.t. estimated physical parameters, for use in
variational equations and estimation filters.

Available components:

- :class:`TorquePartial` -- Base contract for torque partial providers
- :class:`InertialTorquePartial` -- Partials of ``-omega x (I omega)``
- :class:`InertialTorqueCache` -- Per-epoch cache of the inertial partial
- :class:`TorquePartialAssembler` -- Combines providers into Jacobians
- :class:`ParameterPartial` / :data:`NO_PARAMETER_DEPENDENCY` --
  Parameter dispatch results
- :class:`TorqueType`, :class:`IntegratedStateType` -- Tags
"""

from torquejax.partials._types import (
    NO_PARAMETER_DEPENDENCY,
    IntegratedStateType,
    ParameterPartial,
    TorqueType,
)
from torquejax.partials.assembler import TorquePartialAssembler
from torquejax.partials.inertial_torque import InertialTorqueCache, InertialTorquePartial
from torquejax.partials.torque_partial import TorquePartial

__all__ = [
    "TorqueType",
    "IntegratedStateType",
    "ParameterPartial",
    "NO_PARAMETER_DEPENDENCY",
    "TorquePartial",
    "InertialTorquePartial",
    "InertialTorqueCache",
    "TorquePartialAssembler",
]
