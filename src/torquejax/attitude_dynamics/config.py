"""Configuration dataclass describing a body's inertia.

Provides :class:`GravityFieldInertia` for an inertia tensor derived from
a body's degree-2 gravity field.  Its methods are the accessor functions
a torque partial provider binds at construction.
"""

from __future__ import annotations

from dataclasses import dataclass

from jax import Array

from torquejax.attitude_dynamics.inertia import (
    inertia_tensor_from_gravity_field,
    inertia_tensor_normalization_factor,
)
from torquejax.constants import GM_MOON, MEAN_MOMENT_OF_INERTIA_MOON, R_MOON


@dataclass(frozen=True)
class GravityFieldInertia:
    """Inertia of a natural body expressed through its gravity field.

    The inertia tensor follows from the degree-2 Stokes coefficients, the
    scaled mean moment of inertia and the normalization factor
    ``M R^2 = (gm / G) * radius**2`` (see
    :mod:`torquejax.attitude_dynamics.inertia`).

    Args:
        gm: Gravitational parameter [m^3/s^2].
        radius: Reference radius of the gravity field [m].
        mean_moment_of_inertia: Scaled mean moment of inertia.
        c20: Degree-2, order-0 cosine coefficient.
        c21: Degree-2, order-1 cosine coefficient.
        c22: Degree-2, order-2 cosine coefficient.
        s21: Degree-2, order-1 sine coefficient.
        s22: Degree-2, order-2 sine coefficient.
        normalized: Whether the coefficients are fully normalized.

    Examples:
        ```python
        moon = GravityFieldInertia.moon()
        moon.inertia_tensor().shape
        ```
    """

    gm: float
    radius: float
    mean_moment_of_inertia: float
    c20: float = 0.0
    c21: float = 0.0
    c22: float = 0.0
    s21: float = 0.0
    s22: float = 0.0
    normalized: bool = True

    def normalization_factor(self) -> float:
        """Return ``M R^2`` [kg m^2]."""
        return inertia_tensor_normalization_factor(self.gm, self.radius)

    def gravitational_parameter(self) -> float:
        """Return the gravitational parameter [m^3/s^2]."""
        return self.gm

    def inertia_tensor(self) -> Array:
        """Return the inertia tensor, shape ``(3, 3)`` [kg m^2]."""
        return inertia_tensor_from_gravity_field(
            self.c20,
            self.c21,
            self.c22,
            self.s21,
            self.s22,
            self.mean_moment_of_inertia,
            self.normalization_factor(),
            normalized=self.normalized,
        )

    @staticmethod
    def moon() -> GravityFieldInertia:
        """Preset: approximate lunar degree-2 field (fully normalized).

        Returns:
            GravityFieldInertia: Moon inertia configuration.
        """
        return GravityFieldInertia(
            gm=GM_MOON,
            radius=R_MOON,
            mean_moment_of_inertia=MEAN_MOMENT_OF_INERTIA_MOON,
            c20=-9.0881e-5,
            c21=-2.7e-10,
            c22=3.4673e-5,
            s21=1.6e-9,
            s22=1.7e-8,
        )
