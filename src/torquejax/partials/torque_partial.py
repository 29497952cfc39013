"""Base class for partial derivatives of torque models.

Every torque model that contributes to a body's rotational equations of
motion has a matching partial provider subclassing :class:`TorquePartial`.
An assembler builds one provider per (body, torque model) pair, calls
:meth:`TorquePartial.update` once per epoch and then queries:

- the 3x3 state partial blocks w.r.t. the body's orientation error and
  angular velocity,
- a ``(function, n_columns)`` pair per estimated parameter,
- whether the torque depends on any non-rotational integrated state.

Providers hold accessor functions for the quantities they need (never
the quantities themselves) and cache everything derived from them per
epoch.  The epoch handling is a two-state machine owned by this base
class:

- **Stale** -- before the first update; the epoch marker is NaN and every
  accessor raises ``RuntimeError``.
- **Fresh(t)** -- after ``update(t)``.  ``update(t)`` again is a no-op;
  ``update(t2)`` with ``t2 != t`` recomputes.  NaN never compares equal,
  so ``update(nan)`` always recomputes.

Providers are not thread-safe.  Distinct instances share no state.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod

from jax import Array
from jax.typing import ArrayLike

from torquejax.parameters import EstimatableParameter
from torquejax.partials._types import (
    IntegratedStateType,
    ParameterPartial,
    TorqueType,
)

logger = logging.getLogger(__name__)


class TorquePartial(ABC):
    """Abstract base for the partials of one torque acting on one body.

    Subclasses implement :meth:`_refresh` to rebuild their epoch cache and
    the abstract accessors.  They must call :meth:`_require_fresh` before
    reading cached values.

    Args:
        accelerated_body: Body undergoing the torque.
        exerting_body: Body exerting the torque.
        torque_type: Torque model tag.
    """

    def __init__(
        self,
        accelerated_body: str,
        exerting_body: str,
        torque_type: TorqueType,
    ):
        self.accelerated_body = accelerated_body
        self.exerting_body = exerting_body
        self.torque_type = torque_type
        self._current_epoch = math.nan
        self._fresh = False

    # ------------------------------------------------------------------
    # Epoch state machine
    # ------------------------------------------------------------------

    @property
    def current_epoch(self) -> float:
        """Epoch of the cached values (NaN before the first update)."""
        return self._current_epoch

    @property
    def is_fresh(self) -> bool:
        """Whether :meth:`update` has completed at least once."""
        return self._fresh

    def update(self, epoch: float = math.nan) -> None:
        """Refresh all cached quantities for *epoch*.

        Does nothing when *epoch* equals the cached epoch.  If a bound
        accessor function raises, the exception propagates and the cache
        keeps its previous state.

        Args:
            epoch: Current time [s].
        """
        if self._current_epoch == epoch:
            return
        logger.debug(
            "Refreshing %s torque partial of %s at epoch %s",
            self.torque_type.value,
            self.accelerated_body,
            epoch,
        )
        self._refresh()
        self._current_epoch = epoch
        self._fresh = True

    def _require_fresh(self, operation: str) -> None:
        if not self._fresh:
            raise RuntimeError(
                f"{type(self).__name__}.{operation} called before update(); "
                f"no cached values for body '{self.accelerated_body}'."
            )

    @abstractmethod
    def _refresh(self) -> None:
        """Recompute every cached quantity from the bound accessors."""

    # ------------------------------------------------------------------
    # State partials
    # ------------------------------------------------------------------

    @abstractmethod
    def wrt_orientation_of_accelerated_body(
        self,
        partial_matrix: ArrayLike,
        add_contribution: bool = True,
        start_row: int = 0,
        start_column: int = 0,
    ) -> Array:
        """Partial of the torque w.r.t. the body's orientation error.

        Args:
            partial_matrix: Caller-owned matrix receiving the 3x3 block.
            add_contribution: Add the block if ``True``, subtract otherwise.
            start_row: Row of the block in *partial_matrix*.
            start_column: Column of the block in *partial_matrix*.

        Returns:
            *partial_matrix* with the block updated; nothing outside the
            block changes.

        Raises:
            RuntimeError: If called before :meth:`update`.
            ValueError: If the block does not fit in *partial_matrix*.
        """

    @abstractmethod
    def wrt_rotational_velocity_of_accelerated_body(
        self,
        partial_matrix: ArrayLike,
        add_contribution: bool = True,
        start_row: int = 0,
        start_column: int = 3,
    ) -> Array:
        """Partial of the torque w.r.t. the body's angular velocity.

        Same contract as :meth:`wrt_orientation_of_accelerated_body`.
        """

    # ------------------------------------------------------------------
    # Dependency queries
    # ------------------------------------------------------------------

    @abstractmethod
    def is_state_derivative_dependent_on_integrated_non_rotational_state(
        self,
        state_reference_point: tuple[str, str],
        integrated_state_type: IntegratedStateType,
    ) -> bool:
        """Whether the torque depends on a non-rotational integrated state.

        Args:
            state_reference_point: ``(body, reference point)`` of the state.
            integrated_state_type: Type of the propagated state.
        """

    @abstractmethod
    def is_state_derivative_dependent_on_integrated_additional_state_types(
        self,
        state_reference_point: tuple[str, str],
        integrated_state_type: IntegratedStateType,
    ) -> bool:
        """Whether the torque depends on an additional integrated state.

        Additional states are those neither rotational nor translational
        (e.g. body mass or custom states).
        """

    # ------------------------------------------------------------------
    # Parameter partials
    # ------------------------------------------------------------------

    def get_parameter_partial_function(
        self,
        parameter: EstimatableParameter,
    ) -> ParameterPartial:
        """Return the partial function and column count for *parameter*.

        Routes to :meth:`get_scalar_parameter_partial_function` or
        :meth:`get_vector_parameter_partial_function`.  A parameter the
        torque has no notion of is not an error: the result has zero
        columns.

        Args:
            parameter: Parameter w.r.t. which the partial is taken.

        Returns:
            ParameterPartial: ``(function, n_columns)``.
        """
        if parameter.is_vector:
            result = self.get_vector_parameter_partial_function(parameter)
        else:
            result = self.get_scalar_parameter_partial_function(parameter)
        if not result.has_dependency:
            logger.debug(
                "%s torque on %s has no dependency on %s",
                self.torque_type.value,
                self.accelerated_body,
                parameter,
            )
        return result

    @abstractmethod
    def get_scalar_parameter_partial_function(
        self,
        parameter: EstimatableParameter,
    ) -> ParameterPartial:
        """Parameter dispatch for scalar parameters."""

    @abstractmethod
    def get_vector_parameter_partial_function(
        self,
        parameter: EstimatableParameter,
    ) -> ParameterPartial:
        """Parameter dispatch for vector parameters."""

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(accelerated_body={self.accelerated_body!r}, "
            f"exerting_body={self.exerting_body!r}, "
            f"torque_type={self.torque_type.value!r})"
        )
