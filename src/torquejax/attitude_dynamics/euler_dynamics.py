"""Inertial pseudo-torque of Euler's rotational equation of motion.

Provides :func:`inertial_torque`, the torque-free coupling term
``-omega x (I @ omega)`` whose partial derivatives are modelled in
:mod:`torquejax.partials`.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from torquejax.config import get_dtype


def inertial_torque(
    omega: ArrayLike,
    I: ArrayLike,  # noqa: E741
) -> Array:
    """Compute the inertial pseudo-torque in the body frame.

    The body-frame form of Euler's equation contains the coupling term::

        tau_inertial = -omega x (I @ omega)

    which is not an applied torque but a consequence of writing the
    equation in a rotating frame.

    Args:
        omega: Angular velocity in the body frame ``[wx, wy, wz]``
            of shape ``(3,)`` [rad/s].
        I: Inertia tensor of shape ``(3, 3)`` [kg m^2].

    Returns:
        Pseudo-torque of shape ``(3,)`` [N m].

    Examples:
        ```python
        import jax.numpy as jnp
        omega = jnp.array([0.1, 0.2, 0.3])
        I = jnp.diag(jnp.array([1.0, 2.0, 3.0]))
        tau = inertial_torque(omega, I)
        tau.shape
        ```
    """
    _float = get_dtype()
    omega = jnp.asarray(omega, dtype=_float)
    I = jnp.asarray(I, dtype=_float)  # noqa: E741

    return -jnp.cross(omega, I @ omega)
