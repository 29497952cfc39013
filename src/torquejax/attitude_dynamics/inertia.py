"""Inertia tensor of a body derived from its degree-2 gravity field.

The degree-2 Stokes coefficients of a body are linear combinations of
its inertia tensor entries (MacCullagh's formula).  Inverting that
relation, with the mean moment of inertia supplying the trace that the
gravity field cannot observe, gives:

.. math::

    I = N \\left( \\bar{I} E + \\begin{bmatrix}
        C_{20}/3 - 2 C_{22} & -2 S_{22} & -C_{21} \\\\
        -2 S_{22} & C_{20}/3 + 2 C_{22} & -S_{21} \\\\
        -C_{21} & -S_{21} & -2 C_{20}/3
    \\end{bmatrix} \\right)

with unnormalized coefficients, :math:`\\bar{I} = (A + B + C) / (3 M R^2)`
the scaled mean moment of inertia and the normalization factor
:math:`N = M R^2 = (\\mu / G) R^2`.

Because the relation is linear in every coefficient and in
:math:`\\bar{I}`, and proportional to :math:`\\mu` through :math:`N`, its
partial derivatives are constant matrices scaled by :math:`N` (or
:math:`I / \\mu` for the gravitational parameter).  Those partials are
provided here and consumed by the torque partial models.

References:
    1. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, 2012, p. 57-59.
"""

from __future__ import annotations

import math

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from torquejax.config import get_dtype
from torquejax.constants import G

# Unnormalized dI/dC2m and dI/dS2m, before scaling by N.
_COSINE_COEFFICIENT_SHAPES = {
    0: ((1.0 / 3.0, 0.0, 0.0), (0.0, 1.0 / 3.0, 0.0), (0.0, 0.0, -2.0 / 3.0)),
    1: ((0.0, 0.0, -1.0), (0.0, 0.0, 0.0), (-1.0, 0.0, 0.0)),
    2: ((-2.0, 0.0, 0.0), (0.0, 2.0, 0.0), (0.0, 0.0, 0.0)),
}

_SINE_COEFFICIENT_SHAPES = {
    1: ((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, -1.0, 0.0)),
    2: ((0.0, -2.0, 0.0), (-2.0, 0.0, 0.0), (0.0, 0.0, 0.0)),
}


def _factorial_product(n: int, m: int) -> float:
    """Compute (n-m)!/(n+m)! efficiently without full factorials."""
    p = 1.0
    for i in range(n - m + 1, n + m + 1):
        p /= i
    return p


def degree_two_normalization_factor(order: int) -> float:
    """Return the Legendre normalization factor of a degree-2 coefficient.

    Fully normalized coefficients relate to unnormalized ones through
    ``C_nm = N_nm * C_nm_bar`` with::

        N_nm = sqrt((2 - delta_0m) (2n + 1) (n - m)! / (n + m)!)

    which for degree 2 gives ``sqrt(5)``, ``sqrt(5/3)`` and ``sqrt(5/12)``.

    Args:
        order: Order *m* of the degree-2 coefficient (0, 1 or 2).

    Returns:
        float: The factor ``N_2m``.

    Raises:
        ValueError: If *order* is not 0, 1 or 2.
    """
    if order not in (0, 1, 2):
        raise ValueError(f"Degree-2 order must be 0, 1 or 2, got {order}.")
    delta = 1.0 if order == 0 else 0.0
    return math.sqrt((2.0 - delta) * 5.0 * _factorial_product(2, order))


def inertia_tensor_normalization_factor(gm: float, radius: float) -> float:
    """Return the factor ``M R^2`` relating scaled and physical inertia.

    Args:
        gm: Gravitational parameter of the body [m^3/s^2].
        radius: Reference radius of the gravity field [m].

    Returns:
        float: ``(gm / G) * radius**2`` [kg m^2].
    """
    return gm / G * radius**2


def inertia_tensor_from_gravity_field(
    c20: ArrayLike,
    c21: ArrayLike,
    c22: ArrayLike,
    s21: ArrayLike,
    s22: ArrayLike,
    mean_moment_of_inertia: ArrayLike,
    normalization_factor: ArrayLike,
    normalized: bool = True,
) -> Array:
    """Compute the inertia tensor from degree-2 gravity field coefficients.

    All numeric arguments may be JAX tracers, so the function can be
    differentiated with ``jax.jacfwd`` with respect to any of them.

    Args:
        c20: Degree-2, order-0 cosine coefficient.
        c21: Degree-2, order-1 cosine coefficient.
        c22: Degree-2, order-2 cosine coefficient.
        s21: Degree-2, order-1 sine coefficient.
        s22: Degree-2, order-2 sine coefficient.
        mean_moment_of_inertia: Scaled mean moment of inertia
            ``(A + B + C) / (3 M R^2)``.
        normalization_factor: ``M R^2`` [kg m^2], see
            :func:`inertia_tensor_normalization_factor`.
        normalized: Whether the coefficients are fully normalized.

    Returns:
        Inertia tensor of shape ``(3, 3)`` [kg m^2].

    Examples:
        ```python
        I = inertia_tensor_from_gravity_field(
            -2.03e-4, 0.0, 2.24e-5, 0.0, 0.0, 0.3929, 1.0
        )
        I.shape
        ```
    """
    _float = get_dtype()
    c20, c21, c22, s21, s22 = (
        jnp.asarray(c, dtype=_float) for c in (c20, c21, c22, s21, s22)
    )
    if normalized:
        c20 = c20 * degree_two_normalization_factor(0)
        c21 = c21 * degree_two_normalization_factor(1)
        c22 = c22 * degree_two_normalization_factor(2)
        s21 = s21 * degree_two_normalization_factor(1)
        s22 = s22 * degree_two_normalization_factor(2)

    deviatoric = jnp.array([
        [c20 / 3.0 - 2.0 * c22, -2.0 * s22, -c21],
        [-2.0 * s22, c20 / 3.0 + 2.0 * c22, -s21],
        [-c21, -s21, -2.0 * c20 / 3.0],
    ], dtype=_float)

    mean = jnp.asarray(mean_moment_of_inertia, dtype=_float) * jnp.eye(3, dtype=_float)
    return jnp.asarray(normalization_factor, dtype=_float) * (mean + deviatoric)


def inertia_tensor_partial_wrt_mean_moment_of_inertia(
    normalization_factor: ArrayLike,
) -> Array:
    """Partial of the inertia tensor w.r.t. the scaled mean moment of inertia.

    Args:
        normalization_factor: ``M R^2`` [kg m^2].

    Returns:
        ``N * E``, shape ``(3, 3)``.
    """
    _float = get_dtype()
    return jnp.asarray(normalization_factor, dtype=_float) * jnp.eye(3, dtype=_float)


def inertia_tensor_partial_wrt_gravitational_parameter(
    inertia_tensor: ArrayLike,
    gm: ArrayLike,
) -> Array:
    """Partial of the inertia tensor w.r.t. the body's gravitational parameter.

    The tensor scales with ``M = gm / G`` through the normalization factor,
    so the partial is ``I / gm``.

    Args:
        inertia_tensor: Current inertia tensor, shape ``(3, 3)``.
        gm: Gravitational parameter [m^3/s^2].

    Returns:
        Matrix of shape ``(3, 3)``.
    """
    _float = get_dtype()
    return jnp.asarray(inertia_tensor, dtype=_float) / jnp.asarray(gm, dtype=_float)


def inertia_tensor_partial_wrt_cosine_coefficient(
    order: int,
    normalization_factor: ArrayLike,
    normalized: bool = True,
) -> Array:
    """Partial of the inertia tensor w.r.t. a degree-2 cosine coefficient.

    Args:
        order: Order *m* of ``C_2m`` (0, 1 or 2).
        normalization_factor: ``M R^2`` [kg m^2].
        normalized: Whether the coefficient is fully normalized.

    Returns:
        Matrix of shape ``(3, 3)``.

    Raises:
        ValueError: If *order* is not 0, 1 or 2.
    """
    if order not in _COSINE_COEFFICIENT_SHAPES:
        raise ValueError(f"Cosine coefficient order must be 0, 1 or 2, got {order}.")
    return _coefficient_partial(
        _COSINE_COEFFICIENT_SHAPES[order], order, normalization_factor, normalized
    )


def inertia_tensor_partial_wrt_sine_coefficient(
    order: int,
    normalization_factor: ArrayLike,
    normalized: bool = True,
) -> Array:
    """Partial of the inertia tensor w.r.t. a degree-2 sine coefficient.

    Args:
        order: Order *m* of ``S_2m`` (1 or 2).
        normalization_factor: ``M R^2`` [kg m^2].
        normalized: Whether the coefficient is fully normalized.

    Returns:
        Matrix of shape ``(3, 3)``.

    Raises:
        ValueError: If *order* is not 1 or 2.
    """
    if order not in _SINE_COEFFICIENT_SHAPES:
        raise ValueError(f"Sine coefficient order must be 1 or 2, got {order}.")
    return _coefficient_partial(
        _SINE_COEFFICIENT_SHAPES[order], order, normalization_factor, normalized
    )


def _coefficient_partial(shape, order, normalization_factor, normalized) -> Array:
    _float = get_dtype()
    scale = degree_two_normalization_factor(order) if normalized else 1.0
    return (
        jnp.asarray(normalization_factor, dtype=_float)
        * scale
        * jnp.array(shape, dtype=_float)
    )
