"""NetworkX graph of parent links."""

import networkx as nx

from models import ParentLink, Person, PersonId


def build_parent_graph(persons: list[Person], links: list[ParentLink]) -> nx.DiGraph:
    """
    Build a directed graph with a parent -> child edge per recorded parent.

    Edges carry `role` ("father" or "mother"). Ids referenced by a link but
    missing from `persons` are added as nodes with `missing=True`.
    """
    G = nx.DiGraph()

    for p in persons:
        G.add_node(p.id, person_name=p.name, sex=p.sex, hidden=p.hidden, missing=False)

    for link in links:
        for role, parent_id in (("father", link.father), ("mother", link.mother)):
            if parent_id is None:
                continue
            for node in (parent_id, link.child):
                if node not in G:
                    G.add_node(node, missing=True)
            G.add_edge(parent_id, link.child, role=role)

    return G


def get_ancestor_subgraph(G: nx.DiGraph, root_id: PersonId, generations: int) -> nx.DiGraph:
    """
    Extract the root and its ancestors up to `generations` steps away.

    Args:
        G: Parent graph from build_parent_graph
        root_id: The person to start from
        generations: Maximum number of parent steps

    Returns:
        The subgraph induced by the root and the ancestors found
    """
    if root_id not in G:
        raise ValueError(f"Person ID {root_id} not found in graph")

    # Parents are predecessors, so walk the reversed graph
    reached = nx.single_source_shortest_path_length(G.reverse(copy=False), root_id, cutoff=generations)
    return G.subgraph(reached.keys()).copy()
