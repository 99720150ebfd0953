"""Shared builders for link trees used across the test suite."""

import pytest

from jax_linktree import JointType, LinkBuilder, LinkTree, TreeNode, set_parent_child

Y_AXIS = [0.0, 1.0, 0.0]


def rot_node(name, joint_name, xyz=(0.0, 0.1, 0.1), axis=Y_AXIS, limits=None):
    link = (LinkBuilder()
            .name(name)
            .translation(xyz)
            .joint(joint_name, JointType.rotational(axis), limits)
            .finalize())
    return TreeNode(link)


def fixed_node(name, xyz=(0.0, 0.0, 0.1)):
    link = (LinkBuilder()
            .name(name)
            .translation(xyz)
            .joint(f"{name}_fixed", JointType.fixed())
            .finalize())
    return TreeNode(link)


def serial_nodes(nodes):
    """Link ``nodes`` parent to child in order; returns them unchanged."""
    for parent, child in zip(nodes, nodes[1:]):
        set_parent_child(parent, child)
    return nodes


@pytest.fixture
def branchy_nodes():
    """Root with two branches: up to 'link3' (4 joints) and up to 'link5' (3 joints).

    The first three links deliberately share the name 'link1'.
    """
    n0 = rot_node("link1", "j0", xyz=(0.0, 0.1, 0.0))
    n1 = rot_node("link1", "j1")
    n2 = rot_node("link1", "j2")
    n3 = rot_node("link3", "j3", xyz=(0.0, 0.1, 0.2))
    n4 = rot_node("link4", "j4")
    n5 = rot_node("link5", "j5")
    serial_nodes([n0, n1, n2, n3])
    serial_nodes([n0, n4, n5])
    return [n0, n1, n2, n3, n4, n5]


@pytest.fixture
def branchy_tree(branchy_nodes):
    return LinkTree("branchy", branchy_nodes[0])


@pytest.fixture
def make_serial_tree():
    """Factory for a straight tree of ``n`` revolute links named l0..l{n-1}."""
    def make(n, step=(0.0, 0.0, 0.1)):
        nodes = serial_nodes([rot_node(f"l{i}", f"j{i}", xyz=step) for i in range(n)])
        return LinkTree(f"serial{n}", nodes[0]), nodes
    return make
