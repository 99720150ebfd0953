"""Joint primitive: type, limits and current value of one actuation axis."""

from typing import Optional

import jax
import jax.numpy as jnp
from flax import struct

from jax_linktree.errors import JointError, OutOfLimitError
from jax_linktree.transforms import se3, so3

Array = jax.Array

FIXED = "fixed"
ROTATIONAL = "rotational"
LINEAR = "linear"


@struct.dataclass
class Range:
    """Inclusive [min, max] joint limits."""
    min: float = struct.field(pytree_node=False)
    max: float = struct.field(pytree_node=False)

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def clamp(self, value: float) -> float:
        return min(max(value, self.min), self.max)


@struct.dataclass
class JointType:
    """Immutable description of how a joint moves.

    Attributes:
        kind: One of "fixed", "rotational" or "linear". Static for JIT.
        axis: (3,) unit axis in the link frame. Zero for fixed joints.
    """
    kind: str = struct.field(pytree_node=False)
    axis: Array

    @classmethod
    def fixed(cls) -> "JointType":
        return cls(kind=FIXED, axis=jnp.zeros(3, dtype=jnp.float64))

    @classmethod
    def rotational(cls, axis) -> "JointType":
        return cls(kind=ROTATIONAL, axis=_unit(axis))

    @classmethod
    def linear(cls, axis) -> "JointType":
        return cls(kind=LINEAR, axis=_unit(axis))

    @property
    def is_fixed(self) -> bool:
        return self.kind == FIXED

    def motion(self, value) -> Array:
        """Transform produced by moving this joint to ``value``."""
        if self.kind == ROTATIONAL:
            return se3.from_position_and_rotation(
                jnp.zeros(3), so3.from_axis_angle(self.axis, value)
            )
        if self.kind == LINEAR:
            return se3.from_translation(self.axis * value)
        return se3.identity()


def _unit(axis) -> Array:
    axis = jnp.asarray(axis, dtype=jnp.float64)
    norm = jnp.linalg.norm(axis)
    if float(norm) == 0.0:
        raise ValueError("Joint axis must be non-zero")
    return axis / norm


class Joint:
    """A named joint holding its current value.

    Fixed joints carry no value: ``get_joint_angle()`` returns None and
    setting one raises :class:`JointError`.
    """

    def __init__(self, name: str, joint_type: JointType, limits: Optional[Range] = None):
        self.name = name
        self.joint_type = joint_type
        self.limits = limits
        self.angle: Optional[float] = None if joint_type.is_fixed else 0.0

    def __repr__(self):
        return f"Joint(name={self.name!r}, kind={self.joint_type.kind!r}, angle={self.angle})"

    def has_joint_angle(self) -> bool:
        return not self.joint_type.is_fixed

    def get_joint_angle(self) -> Optional[float]:
        return self.angle

    def set_joint_angle(self, angle: float) -> None:
        if self.joint_type.is_fixed:
            raise JointError(f"Joint '{self.name}' is fixed and has no angle")
        angle = float(angle)
        if self.limits is not None and not self.limits.contains(angle):
            raise OutOfLimitError(self.name, angle, self.limits)
        self.angle = angle

    def motion_transform(self, angle=None) -> Array:
        """Joint motion at ``angle``, or at the current value when omitted."""
        if angle is None:
            angle = self.angle if self.angle is not None else 0.0
        return self.joint_type.motion(angle)
