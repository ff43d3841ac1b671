"""Turtle paths as NetworkX graphs.

Py Ver:     3.12
Status:     Stable

Notes
-----
    * Every distinct end point (after rounding to ``precision`` decimals)
      becomes one node with ``x`` and ``y`` attributes. Nodes are numbered in
      the order they are first reached.
    * Every drawn edge becomes a directed edge carrying its drawing ``order``
      and ``length``. Retracing an edge keeps the first ``order``.
    * JSON uses the node-link layout, so the files load back with
      :func:`load_graph_from_json`.

References
----------
    [1] https://networkx.org/documentation/stable/reference/readwrite/generated/networkx.readwrite.json_graph.node_link_data.html
"""

from __future__ import annotations

# Standard library
import json
from pathlib import Path as FilePath

# Third-party libraries
import networkx as nx
from networkx import DiGraph
from networkx.readwrite import json_graph

# Local libraries
from lsystems.errors import IoError
from lsystems.geometry.primitives import Path, Point


def _key(point: Point, precision: int) -> tuple[float, float]:
    # ``+ 0.0`` folds -0.0 into 0.0
    return (round(point.x, precision) + 0.0, round(point.y, precision) + 0.0)


def path_to_digraph(path: Path, precision: int = 6) -> DiGraph:
    graph = nx.DiGraph()
    ids: dict[tuple[float, float], int] = {}

    def node_for(point: Point) -> int:
        key = _key(point, precision)
        if key not in ids:
            ids[key] = len(ids)
            graph.add_node(ids[key], x=key[0], y=key[1])
        return ids[key]

    for order, edge in enumerate(path):
        start, end = node_for(edge.start), node_for(edge.end)
        if start == end or graph.has_edge(start, end):
            continue
        graph.add_edge(start, end, order=order, length=edge.length)
    return graph


def graph_to_json(graph: DiGraph) -> str:
    data = json_graph.node_link_data(graph, edges="edges")
    return json.dumps(data, indent=4)


def save_graph_as_json(graph: DiGraph, save_file: FilePath | str) -> None:
    try:
        with FilePath(save_file).open("w", encoding="utf-8") as f:
            f.write(graph_to_json(graph))
    except OSError as exc:
        msg = f"unable to write graph to {save_file}: {exc.strerror or exc}"
        raise IoError(msg) from exc


def load_graph_from_json(load_file: FilePath | str) -> DiGraph:
    try:
        with FilePath(load_file).open("r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as exc:
        msg = f"unable to read graph from {load_file}: {exc.strerror or exc}"
        raise IoError(msg) from exc
    return json_graph.node_link_graph(
        data,
        directed=True,
        multigraph=False,
        edges="edges",
    )
