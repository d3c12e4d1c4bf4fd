"""
Input/Output Manager
Reads and writes tabular data sets and ground-truth graphs in the plain text
conventions used by simulation directories.
"""
from __future__ import annotations

import csv
import logging
import math
import os
import re
from typing import List, Tuple

from causallearn.graph.Endpoint import Endpoint
from causallearn.utils.TXT2GeneralGraph import txt2generalgraph
import networkx as nx
import numpy as np

from causalcompare.config import (
    COMMENT_MARKER, DATA_DELIMITER, MISSING_VALUE_MARKER, MIXED_MAX_DISCRETE_CATEGORIES, QUOTE_CHAR,
)
from causalcompare.model.data import (
    MISSING_DISCRETE, ContinuousVariable, DataSet, DiscreteVariable, Node, encode_categories,
    integral_categories,
)

# Get module logger
logger = logging.getLogger(__name__)

ENDPOINTS: tuple[str, ...] = ("-->", "---", "<->", "o->", "o-o")

_LEFT_MARKS = {Endpoint.TAIL: "-", Endpoint.ARROW: "<", Endpoint.CIRCLE: "o"}
_RIGHT_MARKS = {Endpoint.TAIL: "-", Endpoint.ARROW: ">", Endpoint.CIRCLE: "o"}

# Numbered edge line, e.g. "3. X1 --> X2"
_EDGE_LINE_RE = re.compile(r"^\d+\.\s+\S+\s+(?:-->|<--|---|<->|o->|<-o|o-o)\s+\S+(?:\s+.*)?$")


# ---------------------------------------------------------------------------
# Tabular data
# ---------------------------------------------------------------------------

def _read_table(
    path: str,
    *,
    comment: str,
    quote: str,
    has_header: bool,
    delimiter: str,
) -> Tuple[List[str], List[List[str]]]:
    """Split a delimited text file into a header and rows of raw cells."""
    with open(path, mode='r', encoding='utf-8-sig', newline='') as f:
        lines = [
            line.rstrip("\r\n") for line in f
            if line.strip() and not line.lstrip().startswith(comment)
        ]

    rows = [[cell.strip() for cell in row] for row in csv.reader(lines, delimiter=delimiter, quotechar=quote)]
    if not rows:
        raise ValueError(f"File '{path}' contains no data.")

    if has_header:
        header, body = rows[0], rows[1:]
    else:
        header, body = [f"X{i + 1}" for i in range(len(rows[0]))], rows

    for line_no, row in enumerate(body, start=1):
        if len(row) != len(header):
            raise ValueError(
                f"Row {line_no} of '{path}' has {len(row)} cells, expected {len(header)}."
            )
    return header, body


def _data_set_name(path: str) -> str:
    return os.path.splitext(os.path.basename(path))[0]


def load_continuous_data(
    path: str,
    *,
    comment: str = COMMENT_MARKER,
    quote: str = QUOTE_CHAR,
    missing: str = MISSING_VALUE_MARKER,
    has_header: bool = True,
    delimiter: str = DATA_DELIMITER,
) -> DataSet:
    """
    Load a continuous data set from a delimited text file.

    Raises:
        ValueError: If the file is empty, ragged or holds a non-numeric cell.
    """
    header, body = _read_table(path, comment=comment, quote=quote, has_header=has_header, delimiter=delimiter)

    matrix = np.empty((len(body), len(header)), dtype=float)
    for i, row in enumerate(body):
        for j, cell in enumerate(row):
            if cell == missing:
                matrix[i, j] = np.nan
                continue
            try:
                matrix[i, j] = float(cell)
            except ValueError:
                raise ValueError(
                    f"Non-numeric value {cell!r} in column '{header[j]}' of '{path}'."
                ) from None

    variables: List[Node] = [ContinuousVariable(name) for name in header]
    logger.debug(f"Loaded {matrix.shape[0]} x {matrix.shape[1]} continuous data from {path}")
    return DataSet(name=_data_set_name(path), variables=variables, data=matrix)


def load_mixed_data(
    path: str,
    *,
    max_discrete_categories: int = MIXED_MAX_DISCRETE_CATEGORIES,
    comment: str = COMMENT_MARKER,
    quote: str = QUOTE_CHAR,
    missing: str = MISSING_VALUE_MARKER,
    has_header: bool = True,
    delimiter: str = DATA_DELIMITER,
) -> DataSet:
    """
    Load a data set whose columns may be continuous or discrete.

    A column is discrete when it holds a non-numeric label, or when it passes
    `integral_categories` (integral values, at most `max_discrete_categories`
    distinct ones), the same rule `DataSet.to_mixed` applies.
    """
    header, body = _read_table(path, comment=comment, quote=quote, has_header=has_header, delimiter=delimiter)

    variables: List[Node] = []
    columns: List[np.ndarray] = []
    for j, name in enumerate(header):
        cells = [row[j] for row in body]
        present = [c for c in cells if c != missing]

        if _all_numeric(present):
            values = np.array([np.nan if c == missing else float(c) for c in cells], dtype=float)
            labels = integral_categories(values, max_discrete_categories)
            if labels is None:
                variables.append(ContinuousVariable(name))
                columns.append(values)
            else:
                variables.append(DiscreteVariable(name, labels))
                columns.append(encode_categories(values, labels))
        else:
            labels = tuple(sorted(set(present)))
            index = {label: k for k, label in enumerate(labels)}
            variables.append(DiscreteVariable(name, labels))
            columns.append(np.array([MISSING_DISCRETE if c == missing else index[c] for c in cells], dtype=float))

    matrix = np.column_stack(columns) if columns else np.empty((len(body), 0))
    return DataSet(name=_data_set_name(path), variables=variables, data=matrix)


def _all_numeric(cells: List[str]) -> bool:
    for cell in cells:
        try:
            float(cell)
        except ValueError:
            return False
    return True


def save_data(
    data_set: DataSet,
    path: str,
    *,
    delimiter: str = DATA_DELIMITER,
    missing: str = MISSING_VALUE_MARKER,
) -> None:
    """Write a data set with a header row, using category labels for discrete cells."""
    with open(path, mode='w', encoding='utf-8', newline='') as f:
        writer = csv.writer(f, delimiter=delimiter, quotechar=QUOTE_CHAR, lineterminator="\n")
        writer.writerow(data_set.variable_names)
        for row in data_set.data:
            cells = []
            for var, value in zip(data_set.variables, row):
                if isinstance(var, DiscreteVariable):
                    cells.append(missing if value == MISSING_DISCRETE else var.categories[int(value)])
                else:
                    cells.append(missing if math.isnan(value) else repr(float(value)))
            writer.writerow(cells)
    logger.debug(f"Saved data set '{data_set.name}' to {path}")


# ---------------------------------------------------------------------------
# Graphs
# ---------------------------------------------------------------------------

def _check_edge_lines(path: str) -> None:
    """Reject numbered edge lines with unknown endpoint marks before causal-learn parses the file."""
    with open(path, mode='r', encoding='utf-8-sig') as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            words = line.split()
            if words and words[0].endswith(".") and words[0][:-1].isdigit():
                if not _EDGE_LINE_RE.match(line):
                    raise ValueError(f"Malformed edge on line {line_no} of '{path}': {line!r}")


def _edge_endpoint(edge) -> Tuple[str, str, str]:
    """(source, target, endpoint string) of a causal-learn edge, arrow pointing right."""
    a, b = edge.get_node1().get_name(), edge.get_node2().get_name()
    end1, end2 = edge.get_endpoint1(), edge.get_endpoint2()
    if end1 == Endpoint.ARROW and end2 in (Endpoint.TAIL, Endpoint.CIRCLE):
        a, b, end1, end2 = b, a, end2, end1
    if end1 not in _LEFT_MARKS or end2 not in _RIGHT_MARKS:
        raise ValueError(f"Unsupported endpoints {end1}, {end2} on edge {a} - {b}.")
    endpoint = f"{_LEFT_MARKS[end1]}-{_RIGHT_MARKS[end2]}"
    if endpoint not in ENDPOINTS:
        raise ValueError(f"Unsupported edge {a} {endpoint} {b}.")
    return a, b, endpoint


def load_graph_txt(path: str) -> nx.DiGraph:
    """
    Load a graph in the "Graph Nodes: / Graph Edges:" text format.

    Parsing is done by causal-learn; the result is converted to a networkx
    DiGraph with the nodes in file order and an `endpoint` attribute per edge.

    Raises:
        ValueError: If the file has no nodes, a malformed edge line, or an
            edge between unknown nodes.
    """
    _check_edge_lines(path)
    try:
        general_graph = txt2generalgraph(path)
    except (KeyError, IndexError) as e:
        raise ValueError(f"Malformed graph file '{path}': unknown node or short edge line ({e}).") from e

    graph = nx.DiGraph()
    graph.add_nodes_from(node.get_name() for node in general_graph.get_nodes())
    if graph.number_of_nodes() == 0:
        raise ValueError(f"File '{path}' has no 'Graph Nodes:' section.")

    for edge in general_graph.get_graph_edges():
        a, b, endpoint = _edge_endpoint(edge)
        graph.add_edge(a, b, endpoint=endpoint)

    logger.debug(f"Loaded graph with {graph.number_of_nodes()} nodes and {graph.number_of_edges()} edges from {path}")
    return graph


def save_graph_txt(graph: nx.DiGraph, path: str) -> None:
    with open(path, mode='w', encoding='utf-8') as f:
        f.write("Graph Nodes:\n")
        f.write(";".join(str(n) for n in graph.nodes) + "\n\n")
        f.write("Graph Edges:\n")
        for i, (a, b, end) in enumerate(graph.edges(data="endpoint", default="-->"), start=1):
            f.write(f"{i}. {a} {end} {b}\n")
