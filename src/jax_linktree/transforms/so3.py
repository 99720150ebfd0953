"""SO(3) rotation helpers in JAX.

Rotations are (..., 3, 3) matrices. All functions are pure and JIT-able, and
smooth in their angle arguments so they can sit under ``jax.jacfwd``.
"""

import jax
import jax.numpy as jnp

Array = jax.Array


def skew_symmetric(v: Array) -> Array:
    """Cross-product matrix [v]_x of a (..., 3) vector."""
    zeros = jnp.zeros(v.shape[:-1], dtype=v.dtype)
    return jnp.stack([
        jnp.stack([zeros, -v[..., 2], v[..., 1]], axis=-1),
        jnp.stack([v[..., 2], zeros, -v[..., 0]], axis=-1),
        jnp.stack([-v[..., 1], v[..., 0], zeros], axis=-1),
    ], axis=-2)


def vee(K: Array) -> Array:
    """Inverse of skew_symmetric(): (..., 3, 3) -> (..., 3)."""
    return jnp.stack([K[..., 2, 1], K[..., 0, 2], K[..., 1, 0]], axis=-1)


def from_axis_angle(axis: Array, angle) -> Array:
    """
    Rodrigues' formula for a rotation of ``angle`` about a unit ``axis``.

    Taking the axis and angle separately (instead of one rotation vector)
    keeps the derivative w.r.t. ``angle`` well defined at zero.

    Args:
        axis: (3,) unit rotation axis
        angle: scalar rotation angle in radians

    Returns:
        (3, 3) rotation matrix
    """
    K = skew_symmetric(jnp.asarray(axis, dtype=jnp.float64))
    I = jnp.eye(3, dtype=K.dtype)
    return I + jnp.sin(angle) * K + (1.0 - jnp.cos(angle)) * jnp.matmul(K, K)


def from_rpy(roll, pitch, yaw) -> Array:
    """
    Fixed-axis roll/pitch/yaw to rotation matrix, R = Rz(yaw) Ry(pitch) Rx(roll).

    This is the convention URDF uses for ``<origin rpy="...">``.
    """
    cr, sr = jnp.cos(roll), jnp.sin(roll)
    cp, sp = jnp.cos(pitch), jnp.sin(pitch)
    cy, sy = jnp.cos(yaw), jnp.sin(yaw)
    return jnp.array([
        [cy * cp, cy * sp * sr - sy * cr, cy * sp * cr + sy * sr],
        [sy * cp, sy * sp * sr + cy * cr, sy * sp * cr - cy * sr],
        [-sp, cp * sr, cp * cr],
    ], dtype=jnp.float64)


def from_quaternion(quaternion: Array) -> Array:
    """Unit quaternion (w, x, y, z) to rotation matrix. Input is normalized first."""
    q = jnp.asarray(quaternion, dtype=jnp.float64)
    q = q / jnp.linalg.norm(q, axis=-1, keepdims=True)
    w, x, y, z = jnp.moveaxis(q, -1, 0)
    return jnp.stack([
        jnp.stack([1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)], axis=-1),
        jnp.stack([2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)], axis=-1),
        jnp.stack([2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)], axis=-1),
    ], axis=-2)
