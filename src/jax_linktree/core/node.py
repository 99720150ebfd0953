"""Tree nodes holding links, and the traversal primitives built on them.

A node owns its children. The parent is held through ``weakref.ref`` so
children never keep their parent alive; once the parent has been collected
``node.parent`` resolves to None.

Both walks are iterative, so deep mechanisms do not hit the recursion limit.
Cyclic graphs are a precondition violation and are not detected here.
"""

import weakref
from typing import Callable, Iterator, List, Optional, TypeVar

from jax_linktree.core.link import Link
from jax_linktree.errors import StructureError

K = TypeVar("K")


class TreeNode:
    """A link plus its owned children and a weak reference to its parent."""

    def __init__(self, data: Link):
        self.data = data
        self.children: List["TreeNode"] = []
        self._parent: Optional[weakref.ref] = None

    def __repr__(self):
        return f"TreeNode({self.data.name!r}, children={len(self.children)})"

    @property
    def parent(self) -> Optional["TreeNode"]:
        if self._parent is None:
            return None
        return self._parent()

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def add_child(self, child: "TreeNode") -> "TreeNode":
        set_parent_child(self, child)
        return child

    def detach(self) -> None:
        """Remove this node from its parent's children."""
        parent = self.parent
        if parent is not None:
            parent.children = [c for c in parent.children if c is not self]
        self._parent = None


def set_parent_child(parent: TreeNode, child: TreeNode) -> None:
    """Attach ``child`` under ``parent``, moving it from any previous parent.

    Raises:
        StructureError: if ``child`` is ``parent`` or one of its ancestors.
    """
    for ancestor in iter_ancestors(parent):
        if ancestor is child:
            raise StructureError(
                f"Cannot attach '{child.data.name}' under its own descendant '{parent.data.name}'"
            )
    child.detach()
    parent.children.append(child)
    child._parent = weakref.ref(parent)


def iter_ancestors(node: TreeNode) -> Iterator[TreeNode]:
    """Yield ``node`` then each parent up to the root."""
    current = node
    while current is not None:
        yield current
        current = current.parent


def iter_descendants(node: TreeNode) -> Iterator[TreeNode]:
    """Yield ``node`` and all descendants in pre-order, children in order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def map_ancestors(node: TreeNode, func: Callable[[TreeNode], K]) -> List[K]:
    """Apply ``func`` from ``node`` up to the root, in child-to-root order."""
    return [func(n) for n in iter_ancestors(node)]


def map_descendants(node: TreeNode, func: Callable[[TreeNode], K]) -> List[K]:
    """Apply ``func`` to ``node`` and its descendants, parents before children."""
    return [func(n) for n in iter_descendants(node)]
