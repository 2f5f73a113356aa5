"""Data checks on persons and parent links."""

import networkx as nx

from graph import build_parent_graph, get_ancestor_subgraph
from models import ParentLink, Person, PersonId, Sex


def validate_links(
    persons: list[Person],
    links: list[ParentLink],
    root_id: PersonId | None = None,
    generations: int | None = None,
) -> list[str]:
    """
    Validate parent links for:
    - Cycles in parent-child relationships
    - Links pointing at unknown persons
    - Persons recorded as their own parent
    - Fathers recorded as female and mothers recorded as male

    When root_id and generations are given only the root's ancestry up to that
    depth is checked. Returns a list of warning messages.
    """
    warnings: list[str] = []

    G = build_parent_graph(persons, links)
    if root_id is not None and generations is not None and root_id in G:
        G = get_ancestor_subgraph(G, root_id, generations)

    for parent, child in G.edges():
        if parent == child:
            warnings.append(f"Impossible: {parent} is recorded as their own parent")

    try:
        cycle = nx.find_cycle(G, orientation="original")
        cycle_nodes = [edge[0] for edge in cycle]
        if len(cycle_nodes) > 1:
            warnings.append(f"Cycle detected in parent-child relationships: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass

    for node, data in G.nodes(data=True):
        if data.get("missing"):
            warnings.append(f"Dangling: person {node} is referenced by a link but not recorded")

    for parent, child, data in G.edges(data=True):
        sex = G.nodes[parent].get("sex")
        role = data.get("role")
        if role == "father" and sex == Sex.FEMALE:
            warnings.append(f"Suspicious: father {parent} of {child} is recorded as female")
        elif role == "mother" and sex == Sex.MALE:
            warnings.append(f"Suspicious: mother {parent} of {child} is recorded as male")

    return warnings
