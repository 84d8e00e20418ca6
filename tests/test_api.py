"""Tests for the configuration, planning and functional query layers."""

import pytest

from difftreelib import (
    DepthConfig,
    FilterConfig,
    InvalidArgumentError,
    State,
    TraversalConfig,
    TraversalPlan,
    count_nodes,
    find_nodes,
    get_changed_nodes,
    get_leaf_nodes,
    get_node_paths,
    get_tree_stats,
    traverse_tree,
)
from conftest import make_node


def names(nodes):
    return [node.get_property_name() or "root" for node in nodes]


class TestTraversalConfig:

    def test_default_config_is_valid(self):
        assert TraversalConfig().validate() == []

    def test_negative_depths_rejected(self):
        config = TraversalConfig(depth=DepthConfig(min_depth=-1, max_depth=-2))
        errors = config.validate()
        assert "min_depth cannot be negative" in errors
        assert "max_depth cannot be negative" in errors

    def test_max_depth_below_min_depth(self):
        config = TraversalConfig(depth=DepthConfig(min_depth=3, max_depth=1))
        assert config.validate() == ["max_depth cannot be less than min_depth"]

    def test_max_nodes_must_be_positive(self):
        assert TraversalConfig(max_nodes=0).validate() == ["max_nodes must be positive"]

    def test_states_must_be_state_members(self):
        config = TraversalConfig(filter=FilterConfig(states={"changed"}))
        assert len(config.validate()) == 1

    def test_shallow_scan(self):
        config = TraversalConfig.shallow_scan()
        assert config.depth.max_depth == 1

    def test_changes_only(self):
        config = TraversalConfig.changes_only()
        assert config.filter.states == {State.ADDED, State.CHANGED, State.REMOVED}
        assert TraversalConfig.changes_only(State.ADDED).filter.states == {State.ADDED}

    def test_depth_config(self):
        depth = DepthConfig(min_depth=1, max_depth=2)
        assert not depth.should_yield(0)
        assert depth.should_yield(2)
        assert not depth.should_yield(3)
        assert depth.should_explore(1)
        assert not depth.should_explore(2)

    def test_specific_depths(self):
        depth = DepthConfig(specific_depths={2})
        assert not depth.should_yield(1)
        assert depth.should_yield(2)
        assert depth.should_explore(1)
        assert not depth.should_explore(2)


class TestTraversalPlan:

    def test_invalid_config_rejected(self):
        with pytest.raises(InvalidArgumentError, match="Invalid configuration"):
            TraversalPlan(TraversalConfig(max_nodes=-1))

    def test_execute_reports_depths(self, sample_tree):
        plan = TraversalPlan(TraversalConfig())
        result = plan.execute(sample_tree["root"])
        assert [(names([n])[0], d) for n, d in result] == [
            ("root", 0), ("x", 1), ("z", 2), ("y", 1)
        ]
        assert plan.nodes_processed == 4

    def test_depths_are_relative_to_start(self, sample_tree):
        result = TraversalPlan(TraversalConfig()).execute(sample_tree["x"])
        assert [(names([n])[0], d) for n, d in result] == [("x", 0), ("z", 1)]

    def test_summary(self):
        plan = TraversalPlan(TraversalConfig.changes_only())
        summary = plan.get_summary()
        assert summary["states"] == ["ADDED", "CHANGED", "REMOVED"]
        assert summary["max_depth"] is None
        assert summary["include_start"] is True


class TestTraverseTree:

    def test_default_is_pre_order(self, sample_tree):
        assert names(traverse_tree(sample_tree["root"])) == ["root", "x", "z", "y"]

    def test_max_depth(self, sample_tree):
        assert names(traverse_tree(sample_tree["root"], max_depth=1)) == ["root", "x", "y"]

    def test_min_depth(self, sample_tree):
        assert names(traverse_tree(sample_tree["root"], min_depth=2)) == ["z"]

    def test_exclude_start(self, sample_tree):
        assert names(traverse_tree(sample_tree["root"], include_start=False)) == ["x", "z", "y"]

    def test_max_nodes_stops_early(self, sample_tree):
        assert names(traverse_tree(sample_tree["root"], max_nodes=2)) == ["root", "x"]

    def test_exclude_filter_keeps_descendants(self, sample_tree):
        result = traverse_tree(sample_tree["root"],
                               exclude_filter=lambda n: n.get_property_name() == "x")
        assert names(result) == ["root", "z", "y"]

    def test_exclude_filter_with_pruning(self, sample_tree):
        result = traverse_tree(sample_tree["root"],
                               exclude_filter=lambda n: n.get_property_name() == "x",
                               prune_on_exclude=True)
        assert names(result) == ["root", "y"]

    def test_state_filter_does_not_prune(self, sample_tree):
        sample_tree["z"].set_state(State.ADDED)
        assert names(traverse_tree(sample_tree["root"], states=[State.ADDED])) == ["z"]

    def test_category_filter(self, root):
        make_node("a", parent=root, categories={"billing"})
        make_node("b", parent=root, categories={"profile"})
        assert names(traverse_tree(root, categories={"billing"})) == ["a"]

    def test_unknown_option(self, sample_tree):
        with pytest.raises(TypeError, match="Unknown traversal option"):
            list(traverse_tree(sample_tree["root"], colour="red"))

    def test_config_attributes_are_not_options(self, sample_tree):
        for option in ({"depth": 2}, {"validate": True}, {"filter": None},
                       {"shallow_scan": 1}, {"changes_only": True}):
            with pytest.raises(TypeError, match="Unknown traversal option"):
                list(traverse_tree(sample_tree["root"], **option))

    def test_single_state_accepted(self, sample_tree):
        sample_tree["z"].set_state(State.CHANGED)
        assert names(traverse_tree(sample_tree["root"], states=State.CHANGED)) == ["z"]
        assert names(get_changed_nodes(sample_tree["root"], states=State.CHANGED)) == ["z"]

    def test_single_category_accepted(self, root):
        make_node("a", parent=root, categories={"billing"})
        make_node("b", parent=root, categories={"profile"})
        assert names(traverse_tree(root, categories="billing")) == ["a"]

    def test_invalid_option_value(self, sample_tree):
        with pytest.raises(InvalidArgumentError):
            list(traverse_tree(sample_tree["root"], max_depth=-1))


class TestQueries:

    def test_count_nodes(self, sample_tree):
        assert count_nodes(sample_tree["root"]) == 4
        assert count_nodes(sample_tree["root"], max_depth=0) == 1

    def test_find_nodes(self, sample_tree):
        found = find_nodes(sample_tree["root"], lambda n: not n.has_children())
        assert names(found) == ["z", "y"]

    def test_get_changed_nodes(self, root):
        make_node("a", State.ADDED, parent=root)
        make_node("b", parent=root)
        make_node("c", State.REMOVED, parent=root)
        assert names(get_changed_nodes(root)) == ["root", "a", "c"]

    def test_get_changed_nodes_with_custom_states(self, root):
        make_node("a", State.IGNORED, parent=root)
        make_node("b", State.CIRCULAR, parent=root)
        assert names(get_changed_nodes(root, states={State.IGNORED})) == ["a"]

    def test_get_node_paths(self, sample_tree):
        paths = get_node_paths(sample_tree["root"])
        assert [str(p) for p in paths] == ["/", "/x", "/x/z", "/y"]

    def test_get_leaf_nodes(self, sample_tree):
        assert names(get_leaf_nodes(sample_tree["root"])) == ["z", "y"]


class TestTreeStats:

    def test_stats_of_sample_tree(self, sample_tree):
        stats = get_tree_stats(sample_tree["root"])
        assert stats["total_nodes"] == 4
        assert stats["leaf_nodes"] == 2
        assert stats["internal_nodes"] == 2
        assert stats["max_depth"] == 2
        assert stats["depths"] == {0: 1, 1: 2, 2: 1}
        assert stats["states"]["UNTOUCHED"] == 4
        assert stats["circular_nodes"] == 0
        assert stats["average_branching"] == 1.5

    def test_stats_of_single_node(self, root):
        stats = get_tree_stats(root)
        assert stats["total_nodes"] == 1
        assert stats["internal_nodes"] == 0
        assert stats["average_branching"] == 0

    def test_circular_nodes_counted(self, root):
        node = make_node("self_ref", State.CIRCULAR, parent=root)
        node.set_circle_start_node(root)
        stats = get_tree_stats(root)
        assert stats["circular_nodes"] == 1
        assert stats["states"]["CIRCULAR"] == 1
