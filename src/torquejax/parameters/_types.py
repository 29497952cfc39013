"""Type definitions for estimatable parameter identities.

Provides the identity objects handed to a torque partial's parameter
dispatch:

- :class:`ParameterType`: Kind of physical parameter.
- :class:`EstimatableParameter`: Scalar parameter tied to a body.
- :class:`SphericalHarmonicsCoefficients`: Vector parameter holding a
  block of cosine or sine gravity field coefficients.

Which parameters are estimated is decided by the caller; these objects
only say *what* a column of the parameter-partial matrix refers to.
Instances are frozen and hashable, so they can key dictionaries.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ParameterType(enum.Enum):
    """Kind of estimatable parameter."""

    GRAVITATIONAL_PARAMETER = "gravitational_parameter"
    MEAN_MOMENT_OF_INERTIA = "mean_moment_of_inertia"
    SPHERICAL_HARMONICS_COSINE_COEFFICIENT_BLOCK = "spherical_harmonics_cosine_coefficient_block"
    SPHERICAL_HARMONICS_SINE_COEFFICIENT_BLOCK = "spherical_harmonics_sine_coefficient_block"
    CONSTANT_ROTATION_RATE = "constant_rotation_rate"
    CONSTANT_DRAG_COEFFICIENT = "constant_drag_coefficient"
    RADIATION_PRESSURE_COEFFICIENT = "radiation_pressure_coefficient"

    def __str__(self) -> str:
        return self.value


_COEFFICIENT_BLOCK_TYPES = (
    ParameterType.SPHERICAL_HARMONICS_COSINE_COEFFICIENT_BLOCK,
    ParameterType.SPHERICAL_HARMONICS_SINE_COEFFICIENT_BLOCK,
)


@dataclass(frozen=True)
class EstimatableParameter:
    """Identity of a scalar estimatable parameter.

    Attributes:
        parameter_type: Kind of parameter.
        body: Name of the body the parameter belongs to.
    """

    parameter_type: ParameterType
    body: str

    @property
    def size(self) -> int:
        """Number of entries in the parameter (columns in its partial)."""
        return 1

    @property
    def is_vector(self) -> bool:
        """Whether the parameter is vector-valued."""
        return False

    def __str__(self) -> str:
        return f"{self.parameter_type} of {self.body}"


@dataclass(frozen=True)
class SphericalHarmonicsCoefficients(EstimatableParameter):
    """Block of cosine or sine spherical harmonic coefficients of a body.

    Column *k* of the parameter corresponds to ``block_indices[k]``, a
    ``(degree, order)`` pair.

    Attributes:
        parameter_type: Cosine or sine coefficient block.
        body: Name of the body whose gravity field holds the coefficients.
        block_indices: ``(degree, order)`` of each entry, in column order.

    Raises:
        ValueError: If the block is empty, contains duplicates, has an
            entry with degree < 2 or order > degree, contains a sine entry
            of order 0, or *parameter_type* is not a coefficient block.
    """

    block_indices: tuple[tuple[int, int], ...] = ()

    def __post_init__(self):
        if self.parameter_type not in _COEFFICIENT_BLOCK_TYPES:
            raise ValueError(
                f"Parameter type {self.parameter_type} is not a spherical "
                f"harmonic coefficient block."
            )
        indices = tuple((int(n), int(m)) for n, m in self.block_indices)
        if not indices:
            raise ValueError("Coefficient block must contain at least one entry.")
        if len(set(indices)) != len(indices):
            raise ValueError(f"Coefficient block contains duplicates: {indices}.")
        for n, m in indices:
            if n < 2 or m < 0 or m > n:
                raise ValueError(
                    f"Invalid coefficient (degree={n}, order={m}); "
                    f"requires degree >= 2 and 0 <= order <= degree."
                )
            if m == 0 and self.is_sine:
                raise ValueError(
                    f"Sine coefficient block cannot contain order 0 (degree={n})."
                )
        object.__setattr__(self, "block_indices", indices)

    @property
    def size(self) -> int:
        return len(self.block_indices)

    @property
    def is_vector(self) -> bool:
        return True

    @property
    def is_sine(self) -> bool:
        """Whether the block holds sine coefficients."""
        return (
            self.parameter_type
            == ParameterType.SPHERICAL_HARMONICS_SINE_COEFFICIENT_BLOCK
        )

    def index_of(self, degree: int, order: int) -> int | None:
        """Return the column of coefficient (*degree*, *order*), or ``None``."""
        try:
            return self.block_indices.index((degree, order))
        except ValueError:
            return None

    def degree_two_entries(self) -> dict[int, int]:
        """Map the order of every degree-2 entry in the block to its column.

        Returns:
            dict[int, int]: ``{order: column}`` for each ``(2, order)``
            present; empty if the block has no degree-2 entries.
        """
        entries = {}
        for order in range(3):
            column = self.index_of(2, order)
            if column is not None:
                entries[order] = column
        return entries


def mean_moment_of_inertia(body: str) -> EstimatableParameter:
    """Create the identity of a body's scaled mean moment of inertia."""
    return EstimatableParameter(ParameterType.MEAN_MOMENT_OF_INERTIA, body)


def gravitational_parameter(body: str) -> EstimatableParameter:
    """Create the identity of a body's gravitational parameter."""
    return EstimatableParameter(ParameterType.GRAVITATIONAL_PARAMETER, body)


def spherical_harmonics_cosine_block(
    body: str,
    block_indices,
) -> SphericalHarmonicsCoefficients:
    """Create a cosine coefficient block parameter.

    Args:
        body: Body whose gravity field holds the coefficients.
        block_indices: Iterable of ``(degree, order)`` pairs.

    Returns:
        SphericalHarmonicsCoefficients: The block parameter.

    Examples:
        ```python
        p = spherical_harmonics_cosine_block("Moon", [(2, 0), (2, 1), (2, 2)])
        p.size  # 3
        ```
    """
    return SphericalHarmonicsCoefficients(
        ParameterType.SPHERICAL_HARMONICS_COSINE_COEFFICIENT_BLOCK,
        body,
        tuple(block_indices),
    )


def spherical_harmonics_sine_block(
    body: str,
    block_indices,
) -> SphericalHarmonicsCoefficients:
    """Create a sine coefficient block parameter.

    Args:
        body: Body whose gravity field holds the coefficients.
        block_indices: Iterable of ``(degree, order)`` pairs, order >= 1.

    Returns:
        SphericalHarmonicsCoefficients: The block parameter.
    """
    return SphericalHarmonicsCoefficients(
        ParameterType.SPHERICAL_HARMONICS_SINE_COEFFICIENT_BLOCK,
        body,
        tuple(block_indices),
    )
