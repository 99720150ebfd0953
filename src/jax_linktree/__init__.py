"""
jax_linktree: forward kinematics over trees of links.

A mechanism is a tree of shared, mutable link nodes. ``LinkTree`` propagates
world transforms in a single pass over a flattened pre-order, and
``create_kinematic_chains`` splits the tree into root-to-end chains for IK
solvers. Transforms are float64 JAX arrays.
"""

import jax
jax.config.update("jax_enable_x64", True)

from . import transforms
from . import core
from . import io
from .chain import KinematicChain
from .core import Joint, JointType, Link, LinkBuilder, Range, TreeNode, set_parent_child
from .errors import JointError, OutOfLimitError, SizeMismatchError, StructureError
from .extraction import (
    MIN_CHAIN_JOINTS,
    ChainExtractionConfig,
    create_kinematic_chains,
    create_kinematic_chains_with_dof_limit,
)
from .tree import LinkTree

__version__ = "0.1.0"
__all__ = [
    "transforms",
    "core",
    "io",
    "ChainExtractionConfig",
    "Joint",
    "JointError",
    "JointType",
    "KinematicChain",
    "Link",
    "LinkBuilder",
    "LinkTree",
    "MIN_CHAIN_JOINTS",
    "OutOfLimitError",
    "Range",
    "SizeMismatchError",
    "StructureError",
    "TreeNode",
    "create_kinematic_chains",
    "create_kinematic_chains_with_dof_limit",
    "set_parent_child",
]
