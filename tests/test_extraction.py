"""Tests for splitting a LinkTree into kinematic chains."""

import logging

import pytest

from jax_linktree import (
    ChainExtractionConfig,
    LinkTree,
    StructureError,
    create_kinematic_chains,
    create_kinematic_chains_with_dof_limit,
)

from conftest import fixed_node, rot_node, serial_nodes


def test_short_branches_are_dropped(branchy_tree):
    assert create_kinematic_chains(branchy_tree) == []


def test_lower_minimum_keeps_long_branch(branchy_tree, branchy_nodes):
    chains = create_kinematic_chains_with_dof_limit(branchy_tree, min_joints=4)

    assert len(chains) == 1
    chain = chains[0]
    assert chain.name == "link3"
    assert chain.end is branchy_nodes[3]
    assert chain.get_joint_names() == ["j0", "j1", "j2", "j3"]


def test_config_object(branchy_tree):
    chains = create_kinematic_chains(branchy_tree, ChainExtractionConfig(min_joints=3))
    assert [c.name for c in chains] == ["link3", "link5"]


def test_long_chains_are_kept(make_serial_tree):
    tree, nodes = make_serial_tree(7)
    chains = create_kinematic_chains(tree)
    assert len(chains) == 1
    assert chains[0].dof() == 7
    assert chains[0].root is nodes[0]


def test_dof_limit_cuts_leaf_end(make_serial_tree):
    tree, nodes = make_serial_tree(8)
    chains = create_kinematic_chains_with_dof_limit(tree, dof_limit=5, min_joints=1)

    assert len(chains) == 1
    chain = chains[0]
    assert chain.dof() == 5
    # Fourth link counting back from the leaf
    assert chain.end is nodes[4]
    assert chain.name == "l4"
    assert chain.get_joint_names() == ["j0", "j1", "j2", "j3", "j4"]


def test_dof_limit_not_reached_keeps_whole_path(make_serial_tree):
    tree, nodes = make_serial_tree(4)
    chains = create_kinematic_chains_with_dof_limit(tree, dof_limit=6, min_joints=1)
    assert chains[0].end is nodes[-1]
    assert chains[0].dof() == 4


def test_fixed_links_do_not_use_up_the_limit():
    nodes = serial_nodes(
        [rot_node(f"l{i}", f"j{i}") for i in range(4)]
        + [fixed_node("flange"), rot_node("l4", "j4"), fixed_node("tool")]
    )
    tree = LinkTree("arm", nodes[0])

    chains = create_kinematic_chains_with_dof_limit(tree, dof_limit=3, min_joints=1)

    assert chains[0].dof() == 3
    assert chains[0].get_joint_names() == ["j0", "j1", "j2"]


def test_dedup_by_name():
    root = rot_node("root", "jr")
    for side in ("a", "b"):
        serial_nodes([root, rot_node(f"{side}1", f"{side}j1"), rot_node("finger", f"{side}j2")])
    tree = LinkTree("hand", root)

    chains = create_kinematic_chains_with_dof_limit(tree, min_joints=1)

    assert len(chains) == 1
    assert chains[0].get_joint_names() == ["jr", "aj1", "aj2"]


def test_discarded_chain_still_claims_its_name(caplog):
    root = rot_node("root", "jr")
    serial_nodes([root, rot_node("tip", "a1")])
    serial_nodes([root] + [rot_node(f"b{i}", f"bj{i}") for i in range(6)] + [rot_node("tip", "b6")])
    tree = LinkTree("uneven", root)

    with caplog.at_level(logging.DEBUG, logger="jax_linktree.extraction"):
        chains = create_kinematic_chains(tree)

    assert chains == []
    assert "already used" in caplog.text


def test_running_out_of_ancestors(make_serial_tree):
    tree, _ = make_serial_tree(3)
    with pytest.raises(StructureError, match="Ran out of ancestors"):
        create_kinematic_chains_with_dof_limit(tree, dof_limit=0)


def test_chains_share_tree_nodes(make_serial_tree):
    tree, _ = make_serial_tree(6)
    chain = create_kinematic_chains(tree)[0]
    chain.set_joint_angles([0.5] * 6)
    assert tree.get_joint_angles() == pytest.approx([0.5] * 6)


def test_dropped_chain_is_logged_with_its_joint_count(branchy_tree, caplog):
    with caplog.at_level(logging.DEBUG, logger="jax_linktree.extraction"):
        create_kinematic_chains(branchy_tree)

    assert "Dropping chain 'link3': 4 joints < 6" in caplog.text
    assert "Dropping chain 'link5': 3 joints < 6" in caplog.text
