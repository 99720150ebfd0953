"""SE(3) homogeneous transforms in JAX.

A transform is a (4, 4) float64 array. Composition is plain matrix product,
``parent @ child`` applies ``child`` first.
"""

import jax
import jax.numpy as jnp

Array = jax.Array


def identity() -> Array:
    return jnp.eye(4, dtype=jnp.float64)


def from_position_and_rotation(p: Array, R: Array) -> Array:
    """
    Construct a transform from a (3,) translation and a (3, 3) rotation.
    """
    T = jnp.eye(4, dtype=jnp.float64)
    T = T.at[:3, :3].set(jnp.asarray(R, dtype=jnp.float64))
    T = T.at[:3, 3].set(jnp.asarray(p, dtype=jnp.float64))
    return T


def from_translation(p) -> Array:
    return from_position_and_rotation(jnp.asarray(p, dtype=jnp.float64), jnp.eye(3))


def multiply(T1: Array, T2: Array) -> Array:
    """T1 @ T2, i.e. express T2 (given in the T1 frame) in the outer frame."""
    return jnp.matmul(T1, T2)


def get_position(T: Array) -> Array:
    return T[..., :3, 3]


def get_rotation(T: Array) -> Array:
    return T[..., :3, :3]
