"""Partial derivatives of the inertial (torque-free) pseudo-torque.

Euler's equation written in the body frame contains the term

.. math::

    \\tau_{in} = -\\omega \\times (I \\omega)

which couples the components of the angular velocity.  Its partial
w.r.t. the angular velocity is

.. math::

    \\frac{\\partial \\tau_{in}}{\\partial \\omega}
        = -[\\omega \\times] I + [(I \\omega) \\times]

and it does not depend on orientation at all.  The parameter partials
follow from the same bilinear relation, holding :math:`\\omega` fixed:

.. math::

    \\frac{\\partial \\tau_{in}}{\\partial p}
        = -[\\omega \\times] \\frac{\\partial I}{\\partial p} \\omega

with :math:`\\partial I / \\partial p` taken from the gravity-field
inertia model in :mod:`torquejax.attitude_dynamics.inertia`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from torquejax.attitude_dynamics.inertia import (
    inertia_tensor_partial_wrt_cosine_coefficient,
    inertia_tensor_partial_wrt_gravitational_parameter,
    inertia_tensor_partial_wrt_mean_moment_of_inertia,
    inertia_tensor_partial_wrt_sine_coefficient,
)
from torquejax.config import get_dtype
from torquejax.linear_algebra import (
    check_block_bounds,
    check_floating_matrix,
    cross_product_matrix,
)
from torquejax.parameters import (
    EstimatableParameter,
    ParameterType,
    SphericalHarmonicsCoefficients,
)
from torquejax.partials._types import (
    NO_PARAMETER_DEPENDENCY,
    IntegratedStateType,
    ParameterPartial,
    TorqueType,
)
from torquejax.partials.torque_partial import TorquePartial

logger = logging.getLogger(__name__)


class InertialTorqueCache(NamedTuple):
    """Quantities cached by :class:`InertialTorquePartial` for one epoch.

    Attributes:
        angular_velocity: Body angular velocity, shape ``(3,)`` [rad/s].
        angular_velocity_cross_product_matrix: ``[omega x]``, shape ``(3, 3)``.
        inertia_tensor: Inertia tensor, shape ``(3, 3)`` [kg m^2].
        inverse_inertia_tensor: Inverse of ``inertia_tensor``.
        inertia_tensor_normalization_factor: ``M R^2`` [kg m^2].
        gravitational_parameter: Body gravitational parameter [m^3/s^2].
        partial_wrt_angular_velocity: ``-[omega x] I + [(I omega) x]``,
            shape ``(3, 3)``.
    """

    angular_velocity: Array
    angular_velocity_cross_product_matrix: Array
    inertia_tensor: Array
    inverse_inertia_tensor: Array
    inertia_tensor_normalization_factor: Array
    gravitational_parameter: Array
    partial_wrt_angular_velocity: Array


class InertialTorquePartial(TorquePartial):
    """Partials of the inertial pseudo-torque ``-omega x (I omega)``.

    The pseudo-torque acts on a body by virtue of its own rotation, so the
    accelerated and exerting bodies coincide.

    Args:
        angular_velocity_function: Returns the body-frame angular velocity,
            shape ``(3,)`` [rad/s].
        inertia_tensor_function: Returns the inertia tensor, shape
            ``(3, 3)`` [kg m^2].
        inertia_tensor_normalization_function: Returns ``M R^2`` [kg m^2].
        gravitational_parameter_function: Returns the body's gravitational
            parameter [m^3/s^2].
        accelerated_body: Name of the body.
        normalized_coefficients: Whether estimated gravity field
            coefficients are fully normalized.

    Examples:
        ```python
        import jax.numpy as jnp
        omega = jnp.array([0.1, 0.2, 0.3])
        I = jnp.diag(jnp.array([1.0, 2.0, 3.0]))
        partial = InertialTorquePartial(
            lambda: omega, lambda: I, lambda: 1.0, lambda: 1.0, "Moon"
        )
        partial.update(0.0)
        block = partial.wrt_rotational_velocity_of_accelerated_body(
            jnp.zeros((3, 6))
        )
        ```
    """

    def __init__(
        self,
        angular_velocity_function: Callable[[], ArrayLike],
        inertia_tensor_function: Callable[[], ArrayLike],
        inertia_tensor_normalization_function: Callable[[], float],
        gravitational_parameter_function: Callable[[], float],
        accelerated_body: str,
        normalized_coefficients: bool = True,
    ):
        super().__init__(accelerated_body, accelerated_body, TorqueType.INERTIAL)
        self._angular_velocity_function = angular_velocity_function
        self._inertia_tensor_function = inertia_tensor_function
        self._inertia_tensor_normalization_function = inertia_tensor_normalization_function
        self._gravitational_parameter_function = gravitational_parameter_function
        self.normalized_coefficients = normalized_coefficients
        self._cache: InertialTorqueCache | None = None

    @property
    def cache(self) -> InertialTorqueCache:
        """Cached quantities of the current epoch.

        Raises:
            RuntimeError: If called before :meth:`update`.
        """
        self._require_fresh("cache")
        return self._cache

    def _refresh(self) -> None:
        _float = get_dtype()

        omega = jnp.asarray(self._angular_velocity_function(), dtype=_float)
        omega_cross = cross_product_matrix(omega)

        normalization_factor = jnp.asarray(
            self._inertia_tensor_normalization_function(), dtype=_float
        )
        gm = jnp.asarray(self._gravitational_parameter_function(), dtype=_float)

        I = jnp.asarray(self._inertia_tensor_function(), dtype=_float)  # noqa: E741
        I_inv = jnp.linalg.inv(I)

        partial = -omega_cross @ I + cross_product_matrix(I @ omega)

        self._cache = InertialTorqueCache(
            angular_velocity=omega,
            angular_velocity_cross_product_matrix=omega_cross,
            inertia_tensor=I,
            inverse_inertia_tensor=I_inv,
            inertia_tensor_normalization_factor=normalization_factor,
            gravitational_parameter=gm,
            partial_wrt_angular_velocity=partial,
        )

    # ------------------------------------------------------------------
    # State partials
    # ------------------------------------------------------------------

    def wrt_orientation_of_accelerated_body(
        self,
        partial_matrix: ArrayLike,
        add_contribution: bool = True,
        start_row: int = 0,
        start_column: int = 0,
    ) -> Array:
        # The pseudo-torque does not depend on orientation.
        self._require_fresh("wrt_orientation_of_accelerated_body")
        check_block_bounds(partial_matrix, start_row, start_column, 3, 3)
        return partial_matrix

    def wrt_rotational_velocity_of_accelerated_body(
        self,
        partial_matrix: ArrayLike,
        add_contribution: bool = True,
        start_row: int = 0,
        start_column: int = 3,
    ) -> Array:
        self._require_fresh("wrt_rotational_velocity_of_accelerated_body")
        check_block_bounds(partial_matrix, start_row, start_column, 3, 3)

        partial = self._cache.partial_wrt_angular_velocity
        if not add_contribution:
            partial = -partial

        partial_matrix = jnp.asarray(partial_matrix)
        return partial_matrix.at[
            start_row:start_row + 3, start_column:start_column + 3
        ].add(partial.astype(partial_matrix.dtype))

    def is_state_derivative_dependent_on_integrated_non_rotational_state(
        self,
        state_reference_point: tuple[str, str],
        integrated_state_type: IntegratedStateType,
    ) -> bool:
        return False

    def is_state_derivative_dependent_on_integrated_additional_state_types(
        self,
        state_reference_point: tuple[str, str],
        integrated_state_type: IntegratedStateType,
    ) -> bool:
        return False

    # ------------------------------------------------------------------
    # Parameter partials
    # ------------------------------------------------------------------

    def get_scalar_parameter_partial_function(
        self,
        parameter: EstimatableParameter,
    ) -> ParameterPartial:
        if parameter.body != self.accelerated_body:
            return NO_PARAMETER_DEPENDENCY

        if parameter.parameter_type == ParameterType.MEAN_MOMENT_OF_INERTIA:
            function = self._partial_function(self._wrt_mean_moment_of_inertia, 1)
            return ParameterPartial(function, 1)
        if parameter.parameter_type == ParameterType.GRAVITATIONAL_PARAMETER:
            function = self._partial_function(self._wrt_gravitational_parameter, 1)
            return ParameterPartial(function, 1)
        return NO_PARAMETER_DEPENDENCY

    def get_vector_parameter_partial_function(
        self,
        parameter: EstimatableParameter,
    ) -> ParameterPartial:
        if parameter.body != self.accelerated_body:
            return NO_PARAMETER_DEPENDENCY
        if not isinstance(parameter, SphericalHarmonicsCoefficients):
            return NO_PARAMETER_DEPENDENCY

        entries = parameter.degree_two_entries()
        if not entries:
            logger.debug("Coefficient block %s has no degree-2 entries", parameter)
            return NO_PARAMETER_DEPENDENCY

        n_columns = parameter.size
        if parameter.is_sine:
            compute = self._wrt_sine_coefficients
        else:
            compute = self._wrt_cosine_coefficients

        def evaluate() -> Array:
            return compute(entries, n_columns)

        return ParameterPartial(self._partial_function(evaluate, n_columns), n_columns)

    def _partial_function(
        self,
        compute: Callable[[], Array],
        n_columns: int,
    ) -> Callable[[ArrayLike], Array]:
        """Wrap *compute* into a function filling a ``(3, n_columns)`` output."""

        def partial_function(partial_matrix: ArrayLike) -> Array:
            self._require_fresh("parameter partial")
            shape = jnp.shape(partial_matrix)
            if shape != (3, n_columns):
                raise ValueError(
                    f"Parameter partial output must have shape (3, {n_columns}), "
                    f"got {shape}."
                )
            check_floating_matrix(partial_matrix)
            partial_matrix = jnp.asarray(partial_matrix)
            return partial_matrix.at[:, :].set(compute().astype(partial_matrix.dtype))

        return partial_function

    def _torque_partial_from_inertia_partial(self, inertia_partial: Array) -> Array:
        cache = self._cache
        return -cache.angular_velocity_cross_product_matrix @ inertia_partial @ cache.angular_velocity

    def _wrt_mean_moment_of_inertia(self) -> Array:
        inertia_partial = inertia_tensor_partial_wrt_mean_moment_of_inertia(
            self._cache.inertia_tensor_normalization_factor
        )
        return self._torque_partial_from_inertia_partial(inertia_partial)[:, None]

    def _wrt_gravitational_parameter(self) -> Array:
        inertia_partial = inertia_tensor_partial_wrt_gravitational_parameter(
            self._cache.inertia_tensor, self._cache.gravitational_parameter
        )
        return self._torque_partial_from_inertia_partial(inertia_partial)[:, None]

    def _wrt_cosine_coefficients(self, entries: dict[int, int], n_columns: int) -> Array:
        partial = jnp.zeros((3, n_columns), dtype=get_dtype())
        for order, column in entries.items():
            inertia_partial = inertia_tensor_partial_wrt_cosine_coefficient(
                order,
                self._cache.inertia_tensor_normalization_factor,
                normalized=self.normalized_coefficients,
            )
            partial = partial.at[:, column].set(
                self._torque_partial_from_inertia_partial(inertia_partial)
            )
        return partial

    def _wrt_sine_coefficients(self, entries: dict[int, int], n_columns: int) -> Array:
        partial = jnp.zeros((3, n_columns), dtype=get_dtype())
        for order, column in entries.items():
            inertia_partial = inertia_tensor_partial_wrt_sine_coefficient(
                order,
                self._cache.inertia_tensor_normalization_factor,
                normalized=self.normalized_coefficients,
            )
            partial = partial.at[:, column].set(
                self._torque_partial_from_inertia_partial(inertia_partial)
            )
        return partial
