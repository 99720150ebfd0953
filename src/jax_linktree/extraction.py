"""Split a LinkTree into kinematic chains for per-limb IK solvers.

Every leaf yields at most one chain running from the tree root downwards. When
the path to a leaf carries more than ``dof_limit`` joints, the chain is cut
short at the leaf end so exactly ``dof_limit`` joints remain. Chains are named
after their last link; a name that was already used is skipped, and chains
with fewer than ``min_joints`` joints are dropped.
"""

from dataclasses import dataclass
from logging import getLogger
from typing import List, Optional

from .chain import KinematicChain
from .core import TreeNode, map_ancestors
from .errors import StructureError
from .tree import LinkTree

logger = getLogger(__name__)

MIN_CHAIN_JOINTS = 6


@dataclass
class ChainExtractionConfig:
    """Policy for :func:`create_kinematic_chains`.

    Attributes:
        dof_limit: Maximum joints per chain. None means unlimited.
        min_joints: Chains with fewer joints than this are discarded.
    """

    dof_limit: Optional[int] = None
    min_joints: int = MIN_CHAIN_JOINTS


def create_kinematic_chains(
    tree: LinkTree, config: Optional[ChainExtractionConfig] = None
) -> List[KinematicChain]:
    """Create the kinematic chains of ``tree`` for use by IK solvers."""
    config = config or ChainExtractionConfig()
    return create_kinematic_chains_with_dof_limit(
        tree, dof_limit=config.dof_limit, min_joints=config.min_joints
    )


def create_kinematic_chains_with_dof_limit(
    tree: LinkTree,
    dof_limit: Optional[int] = None,
    min_joints: int = MIN_CHAIN_JOINTS,
) -> List[KinematicChain]:
    """Create kinematic chains with at most ``dof_limit`` joints each.

    Args:
        tree: Tree to decompose. The chains share its nodes.
        dof_limit: Maximum joints per chain, None for unlimited.
        min_joints: Minimum joints for a chain to be kept.

    Returns:
        Chains in leaf discovery order.

    Raises:
        StructureError: if a leaf runs out of ancestors before the joints
            above ``dof_limit`` have been cut.
    """
    used_names = set()
    chains = []
    for leaf in tree:
        if not leaf.is_leaf:
            continue
        end = _truncate(leaf, dof_limit)
        name = end.data.name
        if name in used_names:
            logger.debug("Skipping chain for leaf '%s': '%s' already used", leaf.data.name, name)
            continue
        # Recorded before the size filter, so a short chain still claims its name
        used_names.add(name)

        chain = KinematicChain(name, end)
        dof = chain.dof()
        if dof < min_joints:
            logger.debug("Dropping chain '%s': %d joints < %d", name, dof, min_joints)
            continue
        chains.append(chain)
    return chains


def _truncate(leaf: TreeNode, dof_limit: Optional[int]) -> TreeNode:
    """Walk up from ``leaf`` past every joint in excess of ``dof_limit``."""
    dof = sum(map_ancestors(leaf, lambda n: n.data.has_joint_angle()))
    end = leaf
    if dof_limit is None or dof <= dof_limit:
        return end

    # Leaving a fixed link behind costs nothing
    surplus = dof - dof_limit
    while surplus > 0:
        if end.data.has_joint_angle():
            surplus -= 1
        parent = end.parent
        if parent is None:
            raise StructureError(
                f"Ran out of ancestors above '{leaf.data.name}' while limiting to {dof_limit} joints"
            )
        end = parent
    return end
