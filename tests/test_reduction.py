"""
Transitive reduction tests for FishGraph.

networkx's transitive closure is the reachability oracle.
"""

import networkx as nx

from fishgraph.engine import dedupe_edges, transitive_reduce_links
from fishgraph.schemas import RawEdge


def closure(node_ids, edges):
    graph = nx.DiGraph()
    graph.add_nodes_from(node_ids)
    graph.add_edges_from(edges)
    return set(nx.transitive_closure(graph, reflexive=False).edges)


DAG_NODES = ["A", "B", "C", "D", "E", "F"]
DAG_EDGES = [
    ("A", "B"), ("B", "C"), ("A", "C"),     # triangle: A -> C is implied
    ("C", "D"), ("A", "D"), ("B", "D"),     # both implied via C
    ("E", "F"),
    ("D", "F"),
]


class TestDagReduction:
    """Test reduction on acyclic input."""

    def test_triangle(self):
        reduced = transitive_reduce_links(["A", "B", "C"], [("A", "B"), ("B", "C"), ("A", "C")])
        assert reduced == [("A", "B"), ("B", "C")]

    def test_expected_edges(self):
        reduced = transitive_reduce_links(DAG_NODES, DAG_EDGES)
        assert reduced == [("A", "B"), ("B", "C"), ("C", "D"), ("E", "F"), ("D", "F")]

    def test_reachability_preserved(self):
        reduced = transitive_reduce_links(DAG_NODES, DAG_EDGES)
        assert closure(DAG_NODES, reduced) == closure(DAG_NODES, DAG_EDGES)

    def test_idempotent(self):
        once = transitive_reduce_links(DAG_NODES, DAG_EDGES)
        twice = transitive_reduce_links(DAG_NODES, once)
        assert twice == once

    def test_matches_networkx_reduction(self):
        graph = nx.DiGraph(DAG_EDGES)
        expected = set(nx.transitive_reduction(graph).edges)
        assert set(transitive_reduce_links(DAG_NODES, DAG_EDGES)) == expected

    def test_keeps_input_order_and_objects(self):
        edges = [RawEdge(source="B", target="C"), RawEdge(source="A", target="C"), RawEdge(source="A", target="B")]
        reduced = transitive_reduce_links(["A", "B", "C"], edges)
        assert reduced == [edges[0], edges[2]]
        assert reduced[0] is edges[0]

    def test_nothing_to_reduce(self):
        edges = [("A", "B"), ("C", "D")]
        assert transitive_reduce_links(["A", "B", "C", "D"], edges) == edges


class TestCyclicInput:
    """Reduction is skipped entirely when the subgraph has a cycle."""

    def test_cycle_returns_deduplicated_input(self):
        edges = [("A", "B"), ("B", "C"), ("A", "C"), ("C", "A"), ("A", "B")]
        assert transitive_reduce_links(["A", "B", "C"], edges) == [("A", "B"), ("B", "C"), ("A", "C"), ("C", "A")]

    def test_cycle_elsewhere_blocks_reduction(self):
        # The triangle would reduce, but the D <-> E cycle in the same view prevents it
        edges = [("A", "B"), ("B", "C"), ("A", "C"), ("D", "E"), ("E", "D")]
        assert transitive_reduce_links(["A", "B", "C", "D", "E"], edges) == edges

    def test_self_loop_counts_as_cycle(self):
        edges = [("A", "B"), ("B", "C"), ("A", "C"), ("C", "C")]
        assert transitive_reduce_links(["A", "B", "C"], edges) == edges


class TestDedupe:
    """Test edge de-duplication and filtering."""

    def test_first_occurrence_wins(self):
        first = RawEdge(source="A", target="B")
        second = RawEdge(source="A", target="B")
        unique, keys = dedupe_edges(["A", "B"], [first, second])
        assert len(unique) == 1
        assert unique[0] is first
        assert keys == [("A", "B")]

    def test_edges_outside_subset_dropped(self):
        reduced = transitive_reduce_links(["A", "B"], [("A", "B"), ("A", "Z"), ("Z", "B")])
        assert reduced == [("A", "B")]

    def test_empty_inputs(self):
        assert transitive_reduce_links([], [("A", "B")]) == [("A", "B")]
        assert transitive_reduce_links(["A"], []) == []
