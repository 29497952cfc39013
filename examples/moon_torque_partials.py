# /// script
# requires-python = ">=3.11"
# dependencies = ["typer>=0.9.0", "torquejax"]
#
# [tool.uv.sources]
# torquejax = { path = ".." }
# ///
"""Evaluate inertial torque partials of the Moon and check them against autodiff.

Builds the lunar inertia tensor from its degree-2 gravity field, registers an
inertial torque partial with an assembler, and prints the state and parameter
partial matrices at a single epoch.  Each analytic block is compared with the
forward-mode Jacobian of the pseudo-torque computed by ``jax.jacfwd``.

Requires torquejax to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/moon_torque_partials.py [OPTIONS]

Examples:
    # Default: synchronous spin with a small libration
    uv run examples/moon_torque_partials.py

    # Faster tumbling about a skewed axis
    uv run examples/moon_torque_partials.py --wx 1e-5 --wy -2e-5 --wz 4e-5

    # Unnormalized coefficients
    uv run examples/moon_torque_partials.py --no-normalized
"""

import dataclasses
from typing import Annotated

import jax
import jax.numpy as jnp
import typer

from torquejax import (
    GravityFieldInertia,
    InertialTorquePartial,
    TorquePartialAssembler,
    gravitational_parameter,
    inertia_tensor_from_gravity_field,
    inertial_torque,
    mean_moment_of_inertia,
    set_dtype,
    spherical_harmonics_cosine_block,
    spherical_harmonics_sine_block,
)

set_dtype(jnp.float64)


def _report(name: str, analytic: jax.Array, reference: jax.Array) -> None:
    error = float(jnp.max(jnp.abs(analytic - reference)))
    scale = float(jnp.max(jnp.abs(reference)))
    print(f"  {name:<24s} max |error| = {error:.3e}  (max |value| = {scale:.3e})")


def main(
    wx: Annotated[float, typer.Option(help="Angular velocity x [rad/s]")] = 1.0e-7,
    wy: Annotated[float, typer.Option(help="Angular velocity y [rad/s]")] = -5.0e-8,
    wz: Annotated[float, typer.Option(help="Angular velocity z [rad/s]")] = 2.6617e-6,
    normalized: Annotated[bool, typer.Option(help="Fully normalized coefficients")] = True,
    epoch: Annotated[float, typer.Option(help="Evaluation epoch [s]")] = 0.0,
):
    moon = dataclasses.replace(GravityFieldInertia.moon(), normalized=normalized)
    omega = jnp.array([wx, wy, wz])
    I = moon.inertia_tensor()  # noqa: E741

    print("── Inertia tensor [kg m^2] ──")
    print(I)
    print(f"\n── Pseudo-torque at omega = {omega} ──")
    print(inertial_torque(omega, I))

    partial = InertialTorquePartial(
        lambda: omega,
        moon.inertia_tensor,
        moon.normalization_factor,
        moon.gravitational_parameter,
        "Moon",
        normalized_coefficients=normalized,
    )
    assembler = TorquePartialAssembler(["Moon"], [partial])
    assembler.update(epoch)

    parameters = [
        gravitational_parameter("Moon"),
        mean_moment_of_inertia("Moon"),
        spherical_harmonics_cosine_block("Moon", [(2, 0), (2, 1), (2, 2)]),
        spherical_harmonics_sine_block("Moon", [(2, 1), (2, 2)]),
    ]

    state_partials = assembler.state_partials()
    parameter_partials = assembler.parameter_partials(parameters)

    print("\n── State partials d(tau)/d(orientation, omega) ──")
    print(state_partials)
    print("\n── Parameter partials d(tau)/d(gm, I_mean, C20, C21, C22, S21, S22) ──")
    print(parameter_partials)

    # Autodiff reference
    def torque(gm, mean, cosine, sine, w):
        normalization_factor = dataclasses.replace(moon, gm=gm).normalization_factor()
        inertia = inertia_tensor_from_gravity_field(
            cosine[0], cosine[1], cosine[2], sine[0], sine[1],
            mean, normalization_factor, normalized=normalized,
        )
        return inertial_torque(w, inertia)

    args = (
        jnp.asarray(moon.gm),
        jnp.asarray(moon.mean_moment_of_inertia),
        jnp.array([moon.c20, moon.c21, moon.c22]),
        jnp.array([moon.s21, moon.s22]),
        omega,
    )
    d_gm, d_mean, d_cosine, d_sine, d_omega = jax.jacfwd(torque, argnums=(0, 1, 2, 3, 4))(*args)

    print("\n── Analytic versus jax.jacfwd ──")
    _report("omega", state_partials[:, 3:6], d_omega)
    _report("gravitational parameter", parameter_partials[:, 0], d_gm)
    _report("mean moment of inertia", parameter_partials[:, 1], d_mean)
    _report("cosine coefficients", parameter_partials[:, 2:5], d_cosine)
    _report("sine coefficients", parameter_partials[:, 5:7], d_sine)

    print("\nDone.")


if __name__ == "__main__":
    typer.run(main)
