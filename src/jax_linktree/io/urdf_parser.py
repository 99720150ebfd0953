"""URDF loader building a LinkTree of shared, mutable nodes.

Each URDF ``<link>`` becomes one node. The ``<joint>`` whose child is that
link becomes the node's joint, and its ``<origin>`` becomes the link's static
transform. Children keep the document order of their joints.

Only ``<link>`` and ``<joint>`` elements directly under ``<robot>`` are read;
``<joint>`` references nested in ``<transmission>`` or ``<gazebo>`` blocks
are not kinematic joints.
"""

from logging import getLogger
from typing import Dict, List, Optional, Tuple

import jax.numpy as jnp
from lxml import etree

from jax_linktree.core import Joint, JointType, Link, Range, TreeNode, set_parent_child
from jax_linktree.transforms import se3, so3
from jax_linktree.tree import LinkTree

logger = getLogger(__name__)

_ROTATIONAL_TYPES = ("revolute", "continuous")


def load_urdf(urdf_path: str) -> LinkTree:
    """Load a URDF file into a LinkTree.

    Args:
        urdf_path: Path to the URDF file to load.

    Returns:
        LinkTree named after the ``<robot>`` element.
    """
    return _build_tree(etree.parse(urdf_path).getroot())


def load_urdf_string(urdf: str) -> LinkTree:
    """Same as load_urdf() for a URDF document held in memory."""
    return _build_tree(etree.fromstring(urdf.encode("utf-8")))


def _build_tree(robot) -> LinkTree:
    link_names: List[str] = [link.get("name") for link in robot.findall("link")]
    joint_elems = robot.findall("joint")
    topology = [_parent_and_child(j) for j in joint_elems]

    child_links = {child for _, child in topology}
    roots = [name for name in link_names if name not in child_links]
    if len(roots) != 1:
        raise ValueError(f"Expected exactly one root link, found: {roots}")

    joint_by_child = {child: j for j, (_, child) in zip(joint_elems, topology)}
    nodes: Dict[str, TreeNode] = {}
    for name in link_names:
        joint_elem = joint_by_child.get(name)
        if joint_elem is None:
            link = Link(name, Joint(name, JointType.fixed()))
        else:
            link = Link(name, _parse_joint(joint_elem), _parse_origin(joint_elem.find("origin")))
        nodes[name] = TreeNode(link)

    for joint_elem, (parent_name, child_name) in zip(joint_elems, topology):
        if parent_name not in nodes or child_name not in nodes:
            raise ValueError(f"Joint '{joint_elem.get('name')}' refers to an unknown link")
        set_parent_child(nodes[parent_name], nodes[child_name])

    tree = LinkTree(robot.get("name", ""), nodes[roots[0]])
    if len(tree) != len(nodes):
        raise ValueError("URDF link graph is not connected to its root")
    logger.debug("Loaded URDF '%s': %d links, %d dof", tree.name, len(tree), tree.dof())
    return tree


def _parent_and_child(joint_elem) -> Tuple[str, str]:
    parent_elem = joint_elem.find("parent")
    child_elem = joint_elem.find("child")
    if parent_elem is None or child_elem is None:
        raise ValueError(f"Joint '{joint_elem.get('name')}' needs both <parent> and <child>")
    return parent_elem.get("link"), child_elem.get("link")


def _parse_joint(joint_elem) -> Joint:
    name = joint_elem.get("name")
    joint_type = joint_elem.get("type")
    if joint_type == "fixed":
        return Joint(name, JointType.fixed())

    axis_elem = joint_elem.find("axis")
    axis = _floats(axis_elem.get("xyz") if axis_elem is not None else None, "1 0 0")
    if joint_type in _ROTATIONAL_TYPES:
        kind = JointType.rotational(axis)
    elif joint_type == "prismatic":
        kind = JointType.linear(axis)
    else:
        raise ValueError(f"Unsupported joint type '{joint_type}' for joint '{name}'")

    # Continuous joints have no position limits even when <limit> is present
    return Joint(name, kind, None if joint_type == "continuous" else _parse_limits(joint_elem))


def _parse_limits(joint_elem) -> Optional[Range]:
    limit_elem = joint_elem.find("limit")
    if limit_elem is None or (limit_elem.get("lower") is None and limit_elem.get("upper") is None):
        return None
    return Range(min=float(limit_elem.get("lower", 0.0)), max=float(limit_elem.get("upper", 0.0)))


def _parse_origin(origin_elem):
    if origin_elem is None:
        return se3.identity()
    xyz = _floats(origin_elem.get("xyz"), "0 0 0")
    roll, pitch, yaw = _floats(origin_elem.get("rpy"), "0 0 0")
    return se3.from_position_and_rotation(jnp.array(xyz), so3.from_rpy(roll, pitch, yaw))


def _floats(text: Optional[str], default: str) -> List[float]:
    return [float(x) for x in (text or default).split()]
