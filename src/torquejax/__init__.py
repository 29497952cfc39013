"""
torquejax provides analytic partial derivatives of rotational-dynamics torque models, implemented in JAX.
"""

from .constants import (
    G,
    R_EARTH,
    GM_EARTH,
    GM_MOON,
    R_MOON,
    MEAN_MOMENT_OF_INERTIA_MOON,
)

from .config import set_dtype, get_dtype

from .linear_algebra import cross_product_matrix

from .attitude_dynamics import (
    GravityFieldInertia,
    inertial_torque,
    inertia_tensor_from_gravity_field,
)

from .parameters import (
    ParameterType,
    EstimatableParameter,
    SphericalHarmonicsCoefficients,
    mean_moment_of_inertia,
    gravitational_parameter,
    spherical_harmonics_cosine_block,
    spherical_harmonics_sine_block,
)

from .partials import (
    TorqueType,
    IntegratedStateType,
    ParameterPartial,
    NO_PARAMETER_DEPENDENCY,
    TorquePartial,
    InertialTorquePartial,
    TorquePartialAssembler,
)

__all__ = [
    # Constants
    "G",
    "R_EARTH",
    "GM_EARTH",
    "GM_MOON",
    "R_MOON",
    "MEAN_MOMENT_OF_INERTIA_MOON",
    # Config
    "set_dtype",
    "get_dtype",
    # Linear algebra
    "cross_product_matrix",
    # Attitude Dynamics
    "GravityFieldInertia",
    "inertial_torque",
    "inertia_tensor_from_gravity_field",
    # Parameters
    "ParameterType",
    "EstimatableParameter",
    "SphericalHarmonicsCoefficients",
    "mean_moment_of_inertia",
    "gravitational_parameter",
    "spherical_harmonics_cosine_block",
    "spherical_harmonics_sine_block",
    # Partials
    "TorqueType",
    "IntegratedStateType",
    "ParameterPartial",
    "NO_PARAMETER_DEPENDENCY",
    "TorquePartial",
    "InertialTorquePartial",
    "TorquePartialAssembler",
]
