"""Link: one rigid body of the mechanism and its (optional) joint."""

from typing import Optional

import jax
import jax.numpy as jnp

from jax_linktree.core.joint import Joint, JointType, Range
from jax_linktree.transforms import se3, so3

Array = jax.Array


class Link:
    """A rigid body attached to its parent through ``joint``.

    Attributes:
        name: Link name. Chain extraction deduplicates on it.
        joint: The joint between this link and its parent.
        transform: Static (4, 4) offset from the parent frame to the joint
            frame. For the root link this is the base transform.
        world_transform_cache: World pose written by
            ``LinkTree.calc_link_transforms``; None until computed.
    """

    def __init__(self, name: str, joint: Joint, transform: Optional[Array] = None):
        self.name = name
        self.joint = joint
        self.transform = se3.identity() if transform is None else jnp.asarray(transform, dtype=jnp.float64)
        self.world_transform_cache: Optional[Array] = None

    def __repr__(self):
        return f"Link(name={self.name!r}, joint={self.joint!r})"

    def has_joint_angle(self) -> bool:
        return self.joint.has_joint_angle()

    def get_joint_angle(self) -> Optional[float]:
        return self.joint.get_joint_angle()

    def set_joint_angle(self, angle: float) -> None:
        self.joint.set_joint_angle(angle)

    def get_joint_name(self) -> str:
        return self.joint.name

    def calc_transform(self) -> Array:
        """Local transform relative to the parent at the current joint value."""
        return se3.multiply(self.transform, self.joint.motion_transform())

    def transform_at(self, angle) -> Array:
        """Pure variant of calc_transform() for an explicit joint value."""
        return se3.multiply(self.transform, self.joint.motion_transform(angle))


class LinkBuilder:
    """Fluent constructor for :class:`Link`.

    Example:
        >>> link = (LinkBuilder()
        ...         .name("upper_arm")
        ...         .translation([0.0, 0.0, 0.3])
        ...         .joint("shoulder", JointType.rotational([0, 1, 0]))
        ...         .finalize())
    """

    def __init__(self):
        self._name = ""
        self._joint = None
        self._position = jnp.zeros(3, dtype=jnp.float64)
        self._rotation = jnp.eye(3, dtype=jnp.float64)

    def name(self, name: str) -> "LinkBuilder":
        self._name = name
        return self

    def translation(self, xyz) -> "LinkBuilder":
        self._position = jnp.asarray(xyz, dtype=jnp.float64)
        return self

    def rotation(self, R) -> "LinkBuilder":
        self._rotation = jnp.asarray(R, dtype=jnp.float64)
        return self

    def rpy(self, roll: float, pitch: float, yaw: float) -> "LinkBuilder":
        self._rotation = so3.from_rpy(roll, pitch, yaw)
        return self

    def quaternion(self, wxyz) -> "LinkBuilder":
        self._rotation = so3.from_quaternion(wxyz)
        return self

    def joint(self, name: str, joint_type: JointType, limits: Optional[Range] = None) -> "LinkBuilder":
        self._joint = Joint(name, joint_type, limits)
        return self

    def finalize(self) -> Link:
        # Links built without a joint hang off their parent rigidly
        joint = self._joint if self._joint is not None else Joint(self._name, JointType.fixed())
        return Link(
            self._name,
            joint,
            se3.from_position_and_rotation(self._position, self._rotation),
        )
