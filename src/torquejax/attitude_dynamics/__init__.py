"""Rigid-body rotational dynamics building blocks.

Provides the torque terms and inertia models whose partial derivatives
are computed in :mod:`torquejax.partials`:

- **Euler dynamics**: Inertial pseudo-torque
- **Inertia**: Inertia tensor from a degree-2 gravity field and its partials
- **Config**: Gravity-field inertia configuration
"""

from .config import GravityFieldInertia
from .euler_dynamics import inertial_torque
from .inertia import (
    degree_two_normalization_factor,
    inertia_tensor_from_gravity_field,
    inertia_tensor_normalization_factor,
    inertia_tensor_partial_wrt_cosine_coefficient,
    inertia_tensor_partial_wrt_gravitational_parameter,
    inertia_tensor_partial_wrt_mean_moment_of_inertia,
    inertia_tensor_partial_wrt_sine_coefficient,
)

__all__ = [
    # Config
    "GravityFieldInertia",
    # Euler dynamics
    "inertial_torque",
    # Inertia
    "degree_two_normalization_factor",
    "inertia_tensor_normalization_factor",
    "inertia_tensor_from_gravity_field",
    "inertia_tensor_partial_wrt_mean_moment_of_inertia",
    "inertia_tensor_partial_wrt_gravitational_parameter",
    "inertia_tensor_partial_wrt_cosine_coefficient",
    "inertia_tensor_partial_wrt_sine_coefficient",
]
