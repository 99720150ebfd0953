"""Kinematic chains: root-to-end views over the nodes of a LinkTree.

A chain does not copy links. Setting joint angles through a chain is visible
through the tree it was derived from, and vice versa.
"""

from functools import reduce
from typing import List, Optional, Sequence

import jax
import jax.numpy as jnp
from jax import Array

from jax_linktree.core import TreeNode, iter_ancestors, map_ancestors
from jax_linktree.errors import SizeMismatchError, StructureError
from jax_linktree.transforms import se3, so3


class KinematicChain:
    """Ordered path of nodes from a root link down to an end link.

    Attributes:
        name: Chain name.
        joint_with_links: Nodes on the path, root first, end last.
        transform: Base transform applied before the first link.
    """

    def __init__(self, name: str, end: TreeNode, root: Optional[TreeNode] = None):
        if root is None:
            links = map_ancestors(end, lambda n: n)
        else:
            links = _path_to(root, end)
        links.reverse()
        self.name = name
        self.joint_with_links: List[TreeNode] = links
        self.transform: Array = se3.identity()

    @classmethod
    def from_root(cls, name: str, root: TreeNode, end: TreeNode) -> "KinematicChain":
        """Chain from ``root`` down to ``end``, both inclusive."""
        return cls(name, end, root=root)

    def __repr__(self):
        return f"KinematicChain(name={self.name!r}, links={len(self.joint_with_links)}, dof={self.dof()})"

    def __len__(self) -> int:
        return len(self.joint_with_links)

    @property
    def root(self) -> TreeNode:
        return self.joint_with_links[0]

    @property
    def end(self) -> TreeNode:
        return self.joint_with_links[-1]

    def _jointed(self) -> List[TreeNode]:
        return [n for n in self.joint_with_links if n.data.has_joint_angle()]

    def dof(self) -> int:
        return len(self._jointed())

    def calc_end_transform(self) -> Array:
        """Pose of the end link, folding the base transform with each local one.

        World transform caches on the links are neither read nor written.
        """
        return reduce(
            lambda acc, node: se3.multiply(acc, node.data.calc_transform()),
            self.joint_with_links,
            self.transform,
        )

    def get_joint_angles(self) -> List[float]:
        return [n.data.get_joint_angle() for n in self._jointed()]

    def get_joint_names(self) -> List[str]:
        return [n.data.get_joint_name() for n in self._jointed()]

    def set_joint_angles(self, angles: Sequence[float]) -> None:
        """Set joint angles in chain order.

        Raises:
            SizeMismatchError: if the count differs from dof(). Nothing is written.
            OutOfLimitError: on the first value outside its limits; earlier
                joints keep their new values.
        """
        jointed = self._jointed()
        if len(angles) != len(jointed):
            raise SizeMismatchError(len(jointed), len(angles))
        for node, angle in zip(jointed, angles):
            node.data.set_joint_angle(angle)

    def jacobian(self, angles: Optional[Sequence[float]] = None) -> Array:
        """Geometric Jacobian of the end link w.r.t. the chain's joint angles.

        Rows are [vx, vy, vz, wx, wy, wz] in the base frame: the velocity of the
        end link origin and the angular velocity. Computed with forward-mode
        autodiff; link state is not modified.

        Args:
            angles: Joint values to evaluate at. Defaults to the current ones.

        Returns:
            (6, dof) Jacobian matrix
        """
        links = [node.data for node in self.joint_with_links]
        dof = sum(1 for link in links if link.has_joint_angle())
        q = jnp.asarray(
            self.get_joint_angles() if angles is None else angles, dtype=jnp.float64
        )
        if q.shape != (dof,):
            raise SizeMismatchError(dof, int(q.size))
        base = self.transform

        def end_transform(q: Array) -> Array:
            T = base
            i = 0
            for link in links:
                if link.has_joint_angle():
                    T = se3.multiply(T, link.transform_at(q[i]))
                    i += 1
                else:
                    T = se3.multiply(T, link.calc_transform())
            return T

        T = end_transform(q)
        dT = jax.jacfwd(end_transform)(q)  # (4, 4, dof)

        linear = dT[:3, 3, :]
        # dR/dq_i @ R^T is the skew matrix of the i-th angular velocity column
        angular = so3.vee(jnp.einsum("ijn,kj->nik", dT[:3, :3, :], T[:3, :3]))
        return jnp.concatenate([linear, angular.T], axis=0)


def _path_to(root: TreeNode, end: TreeNode) -> List[TreeNode]:
    """Nodes from ``end`` up to ``root`` inclusive, end first."""
    path = []
    for node in iter_ancestors(end):
        path.append(node)
        if node is root:
            return path
    raise StructureError(f"'{root.data.name}' is not an ancestor of '{end.data.name}'")
