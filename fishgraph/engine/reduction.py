"""
Transitive reduction of prerequisite edges.

Removes every edge (u, v) for which another path u -> ... -> v already
exists, without changing reachability. Only runs on DAGs: if the active
subgraph has a cycle, the de-duplicated edges come back unchanged.
"""

import logging
from typing import Iterable, Sequence, TypeVar

import networkx as nx

from fishgraph.schemas import EdgeKey

from .progression import edge_keys


logger = logging.getLogger(__name__)

EdgeT = TypeVar("EdgeT")


def dedupe_edges(
    node_ids: Iterable[str],
    edges: Sequence[EdgeT],
) -> tuple[list[EdgeT], list[EdgeKey]]:
    """
    Drop edges with unknown endpoints and repeated (source, target) keys.

    Returns:
        Tuple of (unique edges in input order, their keys). First
        occurrence wins.
    """
    edges = list(edges)
    node_set = set(node_ids)
    unique: list[EdgeT] = []
    keys: list[EdgeKey] = []
    seen: set[EdgeKey] = set()

    for edge, key in zip(edges, edge_keys(edges)):
        if key.source not in node_set or key.target not in node_set:
            continue
        if key in seen:
            continue
        seen.add(key)
        unique.append(edge)
        keys.append(key)
    return unique, keys


def descendant_sets(graph: nx.DiGraph, topo_order: list[str]) -> dict[str, set[str]]:
    """Reachability closure built in reverse topological order."""
    descendants: dict[str, set[str]] = {node_id: set() for node_id in graph.nodes}
    for source_id in reversed(topo_order):
        source_desc = descendants[source_id]
        for target_id in graph.successors(source_id):
            source_desc.add(target_id)
            source_desc |= descendants[target_id]
    return descendants


def transitive_reduce_links(node_ids: Iterable[str], edges: Sequence[EdgeT]) -> list[EdgeT]:
    """
    Reduce the edge set of the given node subset.

    Args:
        node_ids: IDs of the active nodes (call with the visible subgraph only)
        edges: RawEdge/ResolvedEdge/tuple edges; any mix edge_keys accepts

    Returns:
        Kept edges, in input order. Unchanged (de-duplicated) when the
        subgraph is not a DAG.
    """
    node_ids = list(dict.fromkeys(node_ids))
    if not node_ids or not edges:
        return list(edges or [])

    unique, keys = dedupe_edges(node_ids, edges)

    graph = nx.DiGraph()
    graph.add_nodes_from(node_ids)
    graph.add_edges_from(keys)

    try:
        topo_order = list(nx.topological_sort(graph))
    except nx.NetworkXUnfeasible:
        logger.info("Subgraph has a cycle; skipping transitive reduction")
        return unique

    if len(topo_order) < len(node_ids):
        logger.info("Topological sort incomplete; skipping transitive reduction")
        return unique

    descendants = descendant_sets(graph, topo_order)

    reduced = []
    for edge, (source_id, target_id) in zip(unique, keys):
        redundant = any(
            target_id in descendants[neighbor_id]
            for neighbor_id in graph.successors(source_id)
            if neighbor_id != target_id
        )
        if not redundant:
            reduced.append(edge)

    logger.debug(f"Transitive reduction kept {len(reduced)} of {len(unique)} edges")
    return reduced
