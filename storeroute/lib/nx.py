"""NetworkX graph conversion utilities.

This module converts a ``FloorPlan`` into an undirected ``networkx.Graph`` so
floors can be analysed or drawn with the wider NetworkX ecosystem, and so
route distances can be checked against an independent shortest-path
implementation.

Example:
    >>> import networkx as nx
    >>> from storeroute.lib.nx import to_networkx
    >>>
    >>> G = to_networkx(floor)
    >>> nx.shortest_path_length(G, (0, 0), (7, 3), weight="cost")
    16
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import networkx as nx

if TYPE_CHECKING:
    from storeroute.model.floor import FloorPlan


def to_networkx(floor: FloorPlan) -> nx.Graph:
    """Convert a floor plan to a NetworkX grid graph.

    Nodes are the passable cells as ``(x, y)`` tuples. Each carries a
    ``role`` attribute (``"entrance"``, ``"exit"``, ``"article"`` or
    ``"aisle"``) and a ``label`` attribute (article label or None). Edges join
    4-adjacent passable cells and carry ``cost=1``.

    Args:
        floor: Floor plan to convert. Its current passability is captured.

    Returns:
        A new ``networkx.Graph``.
    """
    G = nx.Graph()
    G.graph["width"] = floor.width
    G.graph["height"] = floor.height

    blocked = floor.to_array()
    for y in range(floor.height):
        for x in range(floor.width):
            if blocked[y, x]:
                continue
            G.add_node((x, y), role="aisle", label=None)
            # Link back to the left and upper neighbours already added.
            if x > 0 and not blocked[y, x - 1]:
                G.add_edge((x - 1, y), (x, y), cost=1)
            if y > 0 and not blocked[y - 1, x]:
                G.add_edge((x, y - 1), (x, y), cost=1)

    for cell, label in floor.articles.items():
        G.nodes[cell.as_tuple()].update(role="article", label=label)
    # Landmarks override article roles when they coincide.
    G.nodes[floor.entrance.as_tuple()]["role"] = "entrance"
    G.nodes[floor.exit.as_tuple()]["role"] = "exit"
    return G
