"""LinkTree: the whole mechanism as a tree of links.

The tree keeps a flattened pre-order list of its nodes. Every node appears
after its parent, so world transforms can be propagated in one linear pass
that reads the parent's cached world transform. Call :meth:`LinkTree.reindex`
after changing the structure of the node graph.
"""

from typing import Callable, Iterator, List, Optional, Sequence, TypeVar

import jax

from jax_linktree.core import Link, TreeNode, map_descendants
from jax_linktree.errors import SizeMismatchError
from jax_linktree.transforms import se3

Array = jax.Array
K = TypeVar("K")


class LinkTree:
    """Kinematic tree sharing its nodes with any chains derived from it.

    Args:
        name: Name of the mechanism.
        root_link: Root node of an already linked node graph.
    """

    def __init__(self, name: str, root_link: TreeNode):
        self.name = name
        self.root_link = root_link
        self._expanded_links: List[TreeNode] = map_descendants(root_link, lambda n: n)

    def __repr__(self):
        return f"LinkTree(name={self.name!r}, links={len(self)}, dof={self.dof()})"

    def __iter__(self) -> Iterator[TreeNode]:
        return iter(self._expanded_links)

    def __len__(self) -> int:
        return len(self._expanded_links)

    def reindex(self) -> None:
        """Recompute the flattened order from the current node graph."""
        self._expanded_links = map_descendants(self.root_link, lambda n: n)

    def set_root_transform(self, transform: Array) -> None:
        """Overwrite the base transform of the root link.

        Cached world transforms are refreshed by the next
        :meth:`calc_link_transforms`.
        """
        self.root_link.data.transform = transform

    def calc_link_transforms(self) -> List[Array]:
        """World transform of every link, in flattened order.

        Each link's result is stored in ``link.world_transform_cache`` and used
        by its children later in the same pass.
        """
        transforms = []
        for node in self._expanded_links:
            parent = node.parent
            if parent is None or parent.data.world_transform_cache is None:
                parent_transform = se3.identity()
            else:
                parent_transform = parent.data.world_transform_cache
            world = se3.multiply(parent_transform, node.data.calc_transform())
            node.data.world_transform_cache = world
            transforms.append(world)
        return transforms

    def iter_joints(self) -> Iterator[TreeNode]:
        """Nodes whose link has a joint angle, in flattened order."""
        return (node for node in self._expanded_links if node.data.has_joint_angle())

    def map_link(self, func: Callable[[Link], K]) -> List[K]:
        return [func(node.data) for node in self._expanded_links]

    def filter_map_link(self, func: Callable[[Link], Optional[K]]) -> List[K]:
        """Like map_link() but drops None results."""
        results = (func(node.data) for node in self._expanded_links)
        return [r for r in results if r is not None]

    def map_for_joints_link(self, func: Callable[[Link], K]) -> List[K]:
        return [func(node.data) for node in self.iter_joints()]

    def get_joint_angles(self) -> List[float]:
        """Angles of all non-fixed joints. The length equals dof()."""
        return self.filter_map_link(lambda link: link.get_joint_angle())

    def set_joint_angles(self, angles: Sequence[float]) -> None:
        """Set the angles of all non-fixed joints in flattened order.

        Raises:
            SizeMismatchError: if ``len(angles) != dof()``. Nothing is written.
            OutOfLimitError: if a value violates a joint's limits. Joints
                before the failing one keep their new values.
        """
        dof = self.dof()
        if len(angles) != dof:
            raise SizeMismatchError(dof, len(angles))
        for node, angle in zip(self.iter_joints(), angles):
            node.data.set_joint_angle(angle)

    def get_joint_names(self) -> List[str]:
        """Joint names, skipping fixed joints."""
        return self.map_for_joints_link(lambda link: link.get_joint_name())

    def get_all_joint_names(self) -> List[str]:
        """Joint names, including fixed joints."""
        return self.map_link(lambda link: link.get_joint_name())

    def link_names(self) -> List[str]:
        return self.map_link(lambda link: link.name)

    def find_link(self, name: str) -> TreeNode:
        for node in self._expanded_links:
            if node.data.name == name:
                return node
        raise ValueError(f"Link '{name}' not found in tree '{self.name}'")

    def dof(self) -> int:
        """Number of non-fixed joints."""
        return sum(1 for _ in self.iter_joints())
