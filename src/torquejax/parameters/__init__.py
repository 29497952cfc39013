"""Estimatable parameter identities.

Available components:

- :class:`ParameterType` -- Kind of physical parameter
- :class:`EstimatableParameter` -- Scalar parameter of a body
- :class:`SphericalHarmonicsCoefficients` -- Cosine/sine coefficient block
- :func:`mean_moment_of_inertia`, :func:`gravitational_parameter`,
  :func:`spherical_harmonics_cosine_block`,
  :func:`spherical_harmonics_sine_block` -- Constructors
"""

from torquejax.parameters._types import (
    EstimatableParameter,
    ParameterType,
    SphericalHarmonicsCoefficients,
    gravitational_parameter,
    mean_moment_of_inertia,
    spherical_harmonics_cosine_block,
    spherical_harmonics_sine_block,
)

__all__ = [
    "ParameterType",
    "EstimatableParameter",
    "SphericalHarmonicsCoefficients",
    "mean_moment_of_inertia",
    "gravitational_parameter",
    "spherical_harmonics_cosine_block",
    "spherical_harmonics_sine_block",
]
