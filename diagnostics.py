from collections import defaultdict

import pandas as pd
import networkx as nx

from matplotlib import pyplot as plt

from chart import Chart
from item import Item


def chart_frame(chart: Chart) -> pd.DataFrame:
    records = []
    for column in chart:
        for item in column:
            records.append(
                {
                    "column": column.index,
                    "lhs": item.lhs.name,
                    "rhs": item.dotted(),
                    "dot": item.dot_pos,
                    "origin": item.origin,
                }
            )
    return pd.DataFrame.from_records(records, columns=["column", "lhs", "rhs", "dot", "origin"])


def _retreat(item: Item) -> Item:
    return Item(production=item.production, dot_pos=item.dot_pos - 1, origin=item.origin)


def chart_graph(chart: Chart) -> nx.DiGraph:
    """Builds a graph of chart items linked by the step that derived them.

    Nodes are `(column, item)` pairs. Edges are labeled `scan`, `predict` or
    `complete`; nullable skips inside a column count as `complete`.
    """
    graph = nx.DiGraph()
    for column in chart:
        for row, item in enumerate(column):
            graph.add_node((column.index, item), label=str(item), layer=column.index, row=row)

    for column in chart:
        i = column.index
        completed = defaultdict(set)  # key - nonterminal, value - origins of its completed items
        for item in column:
            if item.is_complete():
                completed[item.lhs].add(item.origin)

        for item in column:
            if item.dot_pos == 0:
                for parent in column:
                    if parent.next_symbol() == item.lhs and item.origin == i:
                        graph.add_edge((i, parent), (i, item), step="predict")
                continue

            prev = _retreat(item)
            moved_over = prev.next_symbol()
            if moved_over.is_terminal():
                if i > 0 and prev in chart[i - 1]:
                    graph.add_edge((i - 1, prev), (i, item), step="scan")
                continue

            for k in range(item.origin, i + 1):
                if prev in chart[k] and (k == i or k in completed[moved_over]):
                    graph.add_edge((k, prev), (i, item), step="complete")
    return graph


def visualize(chart: Chart, show: bool = True) -> nx.DiGraph:
    graph = chart_graph(chart)

    # one vertical lane per column, items stacked in insertion order
    pos = {}
    y_spacing = 1
    for node, data in graph.nodes.items():
        pos[node] = (data["layer"] * 3, -data["row"] * y_spacing)

    colors = {"scan": "tab:blue", "predict": "tab:gray", "complete": "tab:green"}
    edge_colors = [colors[d["step"]] for _, _, d in graph.edges(data=True)]

    nx.draw(graph, pos, arrows=True, node_shape="s", node_size=300, alpha=0.4, edge_color=edge_colors)
    nx.draw_networkx_labels(
        graph, pos, labels={k: v["label"] for k, v in graph.nodes.items()}, font_size=7
    )
    if show:
        plt.show()
    return graph
