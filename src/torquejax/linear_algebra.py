"""Small linear-algebra helpers shared by the torque partial models.

- :func:`cross_product_matrix` -- skew-symmetric matrix ``[v x]``.
- :func:`check_block_bounds` -- shape check for writes into a sub-block
  of a caller-owned matrix.
- :func:`check_floating_matrix` -- dtype check for the same writes.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from torquejax.config import get_dtype


def cross_product_matrix(v: ArrayLike) -> Array:
    """Return the skew-symmetric cross-product matrix of a 3-vector.

    The matrix satisfies ``cross_product_matrix(v) @ w == jnp.cross(v, w)``
    for every 3-vector ``w``::

                [  0   -vz   vy ]
        [v x] = [  vz   0   -vx ]
                [ -vy   vx   0  ]

    Args:
        v: Vector of shape ``(3,)``.

    Returns:
        Matrix of shape ``(3, 3)``.

    Examples:
        ```python
        import jax.numpy as jnp
        S = cross_product_matrix(jnp.array([0.0, 0.0, 1.0]))
        S @ jnp.array([1.0, 0.0, 0.0])  # -> [0, 1, 0]
        ```
    """
    _float = get_dtype()
    v = jnp.asarray(v, dtype=_float)

    vx, vy, vz = v[0], v[1], v[2]
    return jnp.array([
        [0.0, -vz, vy],
        [vz, 0.0, -vx],
        [-vy, vx, 0.0],
    ], dtype=_float)


def check_block_bounds(
    matrix: ArrayLike,
    start_row: int,
    start_column: int,
    n_rows: int,
    n_columns: int,
) -> None:
    """Validate that an ``n_rows x n_columns`` block fits inside *matrix*.

    JAX indexed updates drop or clamp out-of-bounds writes without error,
    so every write into a caller-owned block is checked up front.

    Args:
        matrix: Two-dimensional target matrix.
        start_row: First row of the block.
        start_column: First column of the block.
        n_rows: Number of rows in the block.
        n_columns: Number of columns in the block.

    Raises:
        ValueError: If *matrix* is not two-dimensional or not floating
            point, an offset is negative, or the block extends past the
            matrix edge.
    """
    shape = jnp.shape(matrix)
    if len(shape) != 2:
        raise ValueError(
            f"Partial matrix must be two-dimensional, got shape {shape}."
        )
    if start_row < 0 or start_column < 0:
        raise ValueError(
            f"Block offsets must be non-negative, got "
            f"(start_row={start_row}, start_column={start_column})."
        )
    if start_row + n_rows > shape[0] or start_column + n_columns > shape[1]:
        raise ValueError(
            f"A {n_rows}x{n_columns} block at (start_row={start_row}, "
            f"start_column={start_column}) does not fit in a matrix of "
            f"shape {shape}."
        )
    check_floating_matrix(matrix)


def check_floating_matrix(matrix: ArrayLike) -> None:
    """Validate that *matrix* has a floating-point dtype.

    Writing a partial into an integer matrix would truncate every entry
    toward zero when JAX casts the update to the target dtype.

    Raises:
        ValueError: If *matrix* has an integer or boolean dtype.
    """
    dtype = jnp.asarray(matrix).dtype
    if not jnp.issubdtype(dtype, jnp.inexact):
        raise ValueError(
            f"Partial matrix must have a floating-point dtype, got {dtype}."
        )
