"""Tests for the torquejax.config module."""

import jax
import jax.numpy as jnp
import pytest

from torquejax.attitude_dynamics import inertial_torque
from torquejax.config import get_dtype, set_dtype
from torquejax.linear_algebra import cross_product_matrix
from torquejax.partials import InertialTorquePartial

pytestmark = pytest.mark.order("first")


@pytest.fixture(autouse=True)
def reset_dtype():
    """Reset dtype to float32 before and after each test."""
    set_dtype(jnp.float32)
    yield
    set_dtype(jnp.float32)


class TestGetSetDtype:
    def test_default_dtype(self):
        assert get_dtype() == jnp.float32

    def test_set_float64(self):
        set_dtype(jnp.float64)
        assert get_dtype() == jnp.float64

    def test_set_float16(self):
        set_dtype(jnp.float16)
        assert get_dtype() == jnp.float16

    def test_set_bfloat16(self):
        set_dtype(jnp.bfloat16)
        assert get_dtype() == jnp.bfloat16

    def test_roundtrip(self):
        for dtype in (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64):
            set_dtype(dtype)
            assert get_dtype() == dtype

    def test_invalid_dtype_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype(jnp.int32)

    def test_invalid_dtype_string_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype("float32")

    def test_float64_enables_x64(self):
        set_dtype(jnp.float64)
        assert jax.config.jax_enable_x64 is True


class TestDtypeSwitchingOutputs:
    """Verify that output dtypes match the configured dtype."""

    def test_cross_product_matrix_dtype_float64(self):
        set_dtype(jnp.float64)
        S = cross_product_matrix(jnp.array([0.1, 0.2, 0.3]))
        assert S.dtype == jnp.float64

    def test_inertial_torque_dtype_float32(self):
        tau = inertial_torque(jnp.array([0.1, 0.2, 0.3]), jnp.eye(3))
        assert tau.dtype == jnp.float32

    def test_cache_follows_dtype_at_refresh(self):
        """Cached arrays take the dtype active when update() recomputes."""
        partial = InertialTorquePartial(
            lambda: jnp.array([0.1, 0.2, 0.3]),
            lambda: jnp.diag(jnp.array([1.0, 2.0, 3.0])),
            lambda: 1.0,
            lambda: 1.0,
            "Body",
        )
        partial.update(0.0)
        assert partial.cache.partial_wrt_angular_velocity.dtype == jnp.float32

        set_dtype(jnp.float64)
        partial.update(1.0)
        assert partial.cache.partial_wrt_angular_velocity.dtype == jnp.float64
