"""Assembly of torque partials into rotational-dynamics Jacobians.

Composes the partials of every torque model acting on a set of bodies
into the two matrices an estimator needs each epoch:

- the **state partial** matrix ``d(torques) / d(rotational state)`` of
  shape ``(3 n, 6 n)``, and
- the **parameter partial** matrix ``d(torques) / d(parameters)`` of
  shape ``(3 n, sum of parameter sizes)``,

where *n* is the number of bodies.  Body *k* owns torque rows
``3k:3k+3`` and state columns ``6k:6k+6``, laid out as
``[orientation error (3), angular velocity (3)]``.

Contributions of all providers acting on the same body are summed; each
provider is registered with a sign so that, e.g., a coupling term can be
subtracted for the second body of a mutually rotating pair.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

import jax.numpy as jnp
from jax import Array

from torquejax.config import get_dtype
from torquejax.parameters import EstimatableParameter
from torquejax.partials._types import IntegratedStateType
from torquejax.partials.torque_partial import TorquePartial

logger = logging.getLogger(__name__)

_TORQUE_ROWS = 3
_STATE_COLUMNS = 6


class TorquePartialAssembler:
    """Collects torque partial providers and builds combined Jacobians.

    Args:
        bodies: Names of the bodies with propagated rotational state, in
            state-vector order.
        torque_partials: Providers to register.  Each entry is either a
            :class:`TorquePartial` (added) or a
            ``(TorquePartial, add_contribution)`` pair.

    Raises:
        ValueError: If *bodies* is empty or contains duplicates, or a
            provider acts on a body not in *bodies*.

    Examples:
        ```python
        assembler = TorquePartialAssembler(["Moon"], [inertial_partial])
        assembler.update(0.0)
        dtau_dx = assembler.state_partials()
        ```
    """

    def __init__(
        self,
        bodies: Sequence[str],
        torque_partials: Iterable = (),
    ):
        bodies = list(bodies)
        if not bodies:
            raise ValueError("At least one body is required.")
        if len(set(bodies)) != len(bodies):
            raise ValueError(f"Duplicate body names: {bodies}.")
        self.bodies = bodies
        self._body_index = {body: k for k, body in enumerate(bodies)}
        self._entries: list[tuple[TorquePartial, bool]] = []

        for entry in torque_partials:
            if isinstance(entry, TorquePartial):
                self.register(entry)
            else:
                torque_partial, add_contribution = entry
                self.register(torque_partial, add_contribution)

    @property
    def torque_partials(self) -> list[TorquePartial]:
        """Registered providers, in registration order."""
        return [torque_partial for torque_partial, _ in self._entries]

    def register(self, torque_partial: TorquePartial, add_contribution: bool = True) -> None:
        """Register a provider.

        Args:
            torque_partial: Provider to register.
            add_contribution: Add its partials if ``True``, subtract otherwise.

        Raises:
            ValueError: If the provider's accelerated body is unknown.
        """
        if torque_partial.accelerated_body not in self._body_index:
            raise ValueError(
                f"Torque partial acts on unknown body "
                f"'{torque_partial.accelerated_body}'; known bodies: {self.bodies}."
            )
        self._entries.append((torque_partial, add_contribution))
        logger.debug(
            "Registered %r (%s)",
            torque_partial,
            "added" if add_contribution else "subtracted",
        )

    def update(self, epoch: float = math.nan) -> None:
        """Update every registered provider to *epoch*."""
        for torque_partial, _ in self._entries:
            torque_partial.update(epoch)

    def state_partials(self) -> Array:
        """Build the combined state partial matrix.

        Returns:
            Matrix of shape ``(3 n, 6 n)``.
        """
        n_bodies = len(self.bodies)
        partials = jnp.zeros(
            (_TORQUE_ROWS * n_bodies, _STATE_COLUMNS * n_bodies), dtype=get_dtype()
        )
        for torque_partial, add_contribution in self._entries:
            k = self._body_index[torque_partial.accelerated_body]
            row = _TORQUE_ROWS * k
            column = _STATE_COLUMNS * k
            partials = torque_partial.wrt_orientation_of_accelerated_body(
                partials, add_contribution, row, column
            )
            partials = torque_partial.wrt_rotational_velocity_of_accelerated_body(
                partials, add_contribution, row, column + 3
            )
        return partials

    def parameter_partials(self, parameters: Sequence[EstimatableParameter]) -> Array:
        """Build the combined parameter partial matrix.

        Providers reporting no dependency on a parameter are skipped.

        Args:
            parameters: Estimated parameters, in column order.

        Returns:
            Matrix of shape ``(3 n, sum(p.size for p in parameters))``.
        """
        _float = get_dtype()
        n_bodies = len(self.bodies)
        n_columns = sum(parameter.size for parameter in parameters)
        partials = jnp.zeros((_TORQUE_ROWS * n_bodies, n_columns), dtype=_float)

        column = 0
        for parameter in parameters:
            for torque_partial, add_contribution in self._entries:
                function, width = torque_partial.get_parameter_partial_function(parameter)
                if width == 0:
                    continue
                if width != parameter.size:
                    raise ValueError(
                        f"{torque_partial!r} returned {width} columns for "
                        f"{parameter}, which has size {parameter.size}."
                    )
                block = function(jnp.zeros((_TORQUE_ROWS, width), dtype=_float))
                if not add_contribution:
                    block = -block
                row = _TORQUE_ROWS * self._body_index[torque_partial.accelerated_body]
                partials = partials.at[
                    row:row + _TORQUE_ROWS, column:column + width
                ].add(block)
            column += parameter.size
        return partials

    def is_dependent_on_non_rotational_state(
        self,
        state_reference_point: tuple[str, str],
        integrated_state_type: IntegratedStateType,
    ) -> bool:
        """Whether any registered torque depends on the given state."""
        return any(
            torque_partial.is_state_derivative_dependent_on_integrated_non_rotational_state(
                state_reference_point, integrated_state_type
            )
            or torque_partial.is_state_derivative_dependent_on_integrated_additional_state_types(
                state_reference_point, integrated_state_type
            )
            for torque_partial, _ in self._entries
        )

    def __repr__(self) -> str:
        return (
            f"TorquePartialAssembler(bodies={self.bodies}, "
            f"n_torque_partials={len(self._entries)})"
        )
