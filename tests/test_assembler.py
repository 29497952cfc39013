"""Tests for TorquePartialAssembler.

Tests cover:
- Registration and validation of providers
- Single update per provider per epoch
- State partial layout, accumulation and sign control
- Parameter partial layout and skipping of non-dependent providers
- Non-rotational dependency query
"""

import jax.numpy as jnp
import pytest

from torquejax.config import get_dtype
from torquejax.linear_algebra import cross_product_matrix
from torquejax.parameters import (
    gravitational_parameter,
    mean_moment_of_inertia,
    spherical_harmonics_cosine_block,
)
from torquejax.partials import (
    InertialTorquePartial,
    IntegratedStateType,
    TorquePartialAssembler,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _inertial_partial(body, omega, diag, gm=1.0, counter=None):
    omega = jnp.array(omega, dtype=get_dtype())
    I = jnp.diag(jnp.array(diag, dtype=get_dtype()))  # noqa: E741

    def angular_velocity():
        if counter is not None:
            counter.append(body)
        return omega

    return InertialTorquePartial(
        angular_velocity, lambda: I, lambda: 1.0, lambda: gm, body
    )


def _velocity_partial(omega, diag):
    omega = jnp.array(omega, dtype=get_dtype())
    I = jnp.diag(jnp.array(diag, dtype=get_dtype()))  # noqa: E741
    return -cross_product_matrix(omega) @ I + cross_product_matrix(I @ omega)


# ===========================================================================
# Registration
# ===========================================================================


class TestRegistration:
    def test_register_plain_and_signed(self):
        a = _inertial_partial("Earth", [0.1, 0.2, 0.3], [1.0, 2.0, 3.0])
        b = _inertial_partial("Moon", [0.3, 0.2, 0.1], [3.0, 2.0, 1.0])
        assembler = TorquePartialAssembler(["Earth", "Moon"], [a, (b, False)])
        assert assembler.torque_partials == [a, b]

    def test_unknown_body(self):
        a = _inertial_partial("Mars", [0.1, 0.2, 0.3], [1.0, 2.0, 3.0])
        with pytest.raises(ValueError, match="unknown body"):
            TorquePartialAssembler(["Earth"], [a])

    def test_empty_bodies(self):
        with pytest.raises(ValueError, match="At least one body"):
            TorquePartialAssembler([])

    def test_duplicate_bodies(self):
        with pytest.raises(ValueError, match="Duplicate"):
            TorquePartialAssembler(["Moon", "Moon"])


# ===========================================================================
# Update
# ===========================================================================


class TestUpdate:
    def test_each_provider_refreshed_once_per_epoch(self):
        calls = []
        a = _inertial_partial("Earth", [0.1, 0.2, 0.3], [1.0, 2.0, 3.0], counter=calls)
        b = _inertial_partial("Moon", [0.3, 0.2, 0.1], [3.0, 2.0, 1.0], counter=calls)
        assembler = TorquePartialAssembler(["Earth", "Moon"], [a, b])

        assembler.update(10.0)
        assembler.update(10.0)
        assert sorted(calls) == ["Earth", "Moon"]

        assembler.update(20.0)
        assert len(calls) == 4
        assert a.current_epoch == 20.0
        assert b.current_epoch == 20.0

    def test_state_partials_before_update(self):
        a = _inertial_partial("Earth", [0.1, 0.2, 0.3], [1.0, 2.0, 3.0])
        assembler = TorquePartialAssembler(["Earth"], [a])
        with pytest.raises(RuntimeError, match="before update"):
            assembler.state_partials()


# ===========================================================================
# State partials
# ===========================================================================


class TestStatePartials:
    def test_layout(self):
        """Each body's velocity block sits at rows 3k, columns 6k + 3."""
        a = _inertial_partial("Earth", [0.1, 0.2, 0.3], [1.0, 2.0, 3.0])
        b = _inertial_partial("Moon", [0.3, -0.2, 0.1], [3.0, 2.0, 1.5])
        assembler = TorquePartialAssembler(["Earth", "Moon"], [a, b])
        assembler.update(0.0)

        partials = assembler.state_partials()
        assert partials.shape == (6, 12)
        assert jnp.allclose(
            partials[0:3, 3:6], _velocity_partial([0.1, 0.2, 0.3], [1.0, 2.0, 3.0])
        )
        assert jnp.allclose(
            partials[3:6, 9:12], _velocity_partial([0.3, -0.2, 0.1], [3.0, 2.0, 1.5])
        )
        # Orientation blocks and cross-body blocks stay zero.
        assert jnp.array_equal(partials[0:3, 0:3], jnp.zeros((3, 3)))
        assert jnp.array_equal(partials[3:6, 6:9], jnp.zeros((3, 3)))
        assert jnp.array_equal(partials[0:3, 6:12], jnp.zeros((3, 6)))
        assert jnp.array_equal(partials[3:6, 0:6], jnp.zeros((3, 6)))

    def test_same_body_contributions_accumulate(self):
        a = _inertial_partial("Moon", [0.1, 0.2, 0.3], [1.0, 2.0, 3.0])
        b = _inertial_partial("Moon", [0.1, 0.2, 0.3], [1.0, 2.0, 3.0])
        assembler = TorquePartialAssembler(["Moon"], [a, b])
        assembler.update(0.0)
        expected = 2.0 * _velocity_partial([0.1, 0.2, 0.3], [1.0, 2.0, 3.0])
        assert jnp.allclose(assembler.state_partials()[:, 3:], expected)

    def test_opposite_signs_cancel(self):
        a = _inertial_partial("Moon", [0.1, 0.2, 0.3], [1.0, 2.0, 3.0])
        b = _inertial_partial("Moon", [0.1, 0.2, 0.3], [1.0, 2.0, 3.0])
        assembler = TorquePartialAssembler(["Moon"], [(a, True), (b, False)])
        assembler.update(0.0)
        assert jnp.array_equal(assembler.state_partials(), jnp.zeros((3, 6)))

    def test_no_providers(self):
        assembler = TorquePartialAssembler(["Moon"])
        assembler.update(0.0)
        assert jnp.array_equal(assembler.state_partials(), jnp.zeros((3, 6)))


# ===========================================================================
# Parameter partials
# ===========================================================================


class TestParameterPartials:
    def test_shape_and_skipping(self):
        """Columns follow parameter order; non-dependent providers are skipped."""
        a = _inertial_partial("Earth", [0.1, 0.2, 0.3], [1.0, 2.0, 3.0])
        b = _inertial_partial("Moon", [0.3, -0.2, 0.1], [3.0, 2.0, 1.5])
        assembler = TorquePartialAssembler(["Earth", "Moon"], [a, b])
        assembler.update(0.0)

        parameters = [
            gravitational_parameter("Moon"),
            spherical_harmonics_cosine_block("Earth", [(2, 0), (2, 1), (2, 2)]),
            gravitational_parameter("Mars"),
        ]
        partials = assembler.parameter_partials(parameters)
        assert partials.shape == (6, 5)

        function, _ = b.get_parameter_partial_function(parameters[0])
        expected_gm = function(jnp.zeros((3, 1)))
        assert jnp.allclose(partials[3:6, 0:1], expected_gm)
        assert jnp.array_equal(partials[0:3, 0], jnp.zeros(3))

        function, _ = a.get_parameter_partial_function(parameters[1])
        expected_c = function(jnp.zeros((3, 3)))
        assert jnp.allclose(partials[0:3, 1:4], expected_c)
        assert jnp.array_equal(partials[3:6, 1:4], jnp.zeros((3, 3)))

        assert jnp.array_equal(partials[:, 4], jnp.zeros(6))

    def test_subtracted_provider(self):
        a = _inertial_partial("Moon", [0.1, 0.2, 0.3], [1.0, 2.0, 3.0], gm=2.0)
        added = TorquePartialAssembler(["Moon"], [(a, True)])
        subtracted = TorquePartialAssembler(["Moon"], [(a, False)])
        added.update(0.0)
        subtracted.update(0.0)
        parameters = [gravitational_parameter("Moon"), mean_moment_of_inertia("Moon")]
        assert jnp.allclose(
            added.parameter_partials(parameters),
            -subtracted.parameter_partials(parameters),
        )

    def test_no_parameters(self):
        a = _inertial_partial("Moon", [0.1, 0.2, 0.3], [1.0, 2.0, 3.0])
        assembler = TorquePartialAssembler(["Moon"], [a])
        assembler.update(0.0)
        assert assembler.parameter_partials([]).shape == (3, 0)


# ===========================================================================
# Dependency query
# ===========================================================================


class TestDependencyQuery:
    @pytest.mark.parametrize("state_type", list(IntegratedStateType))
    def test_inertial_only_is_independent(self, state_type):
        a = _inertial_partial("Moon", [0.1, 0.2, 0.3], [1.0, 2.0, 3.0])
        assembler = TorquePartialAssembler(["Moon"], [a])
        assert assembler.is_dependent_on_non_rotational_state(("Moon", ""), state_type) is False
