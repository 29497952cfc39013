"""Type definitions for torque partial models.

- :class:`TorqueType`: Tag identifying the torque model a partial belongs to.
- :class:`IntegratedStateType`: Kinds of propagated state a torque may
  depend on.
- :class:`ParameterPartial`: Result of parameter dispatch, a
  ``(function, n_columns)`` pair.
- :data:`NO_PARAMETER_DEPENDENCY`: The "no dependency" result.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from typing import NamedTuple

from jax import Array


class TorqueType(enum.Enum):
    """Torque model tag used to route composition rules."""

    INERTIAL = "inertial"
    SECOND_ORDER_GRAVITATIONAL = "second_order_gravitational"
    SPHERICAL_HARMONIC_GRAVITATIONAL = "spherical_harmonic_gravitational"
    AERODYNAMIC = "aerodynamic"


class IntegratedStateType(enum.Enum):
    """Kind of numerically integrated state."""

    TRANSLATIONAL = "translational"
    ROTATIONAL = "rotational"
    BODY_MASS = "body_mass"
    CUSTOM = "custom"


class ParameterPartial(NamedTuple):
    """Partial derivative function for one parameter.

    Unpacks as ``function, n_columns = result``.  When ``n_columns`` is
    zero the torque does not depend on the parameter and ``function``
    must be skipped rather than invoked.

    Attributes:
        function: Callable taking an output matrix of shape
            ``(3, n_columns)`` and returning it with the partial written.
        n_columns: Number of columns in the partial; 0 for no dependency.
    """

    function: Callable[[Array], Array]
    n_columns: int

    @property
    def has_dependency(self) -> bool:
        """Whether the torque depends on the parameter."""
        return self.n_columns > 0


def _no_partial(partial_matrix: Array) -> Array:
    return partial_matrix


NO_PARAMETER_DEPENDENCY = ParameterPartial(function=_no_partial, n_columns=0)
"""Dispatch result for a parameter the torque does not depend on."""
