"""Core data structures: joints, links and the nodes that tie them into a tree."""

from .joint import Joint, JointType, Range
from .link import Link, LinkBuilder
from .node import (
    TreeNode,
    iter_ancestors,
    iter_descendants,
    map_ancestors,
    map_descendants,
    set_parent_child,
)

__all__ = [
    "Joint",
    "JointType",
    "Range",
    "Link",
    "LinkBuilder",
    "TreeNode",
    "iter_ancestors",
    "iter_descendants",
    "map_ancestors",
    "map_descendants",
    "set_parent_child",
]
