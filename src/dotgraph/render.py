"""Render a dotgraph tree back into DOT text."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Protocol

from dotgraph.ast import (
    AList,
    AssignStmt,
    AttrList,
    AttrStmt,
    CompassPt,
    EdgePoint,
    EdgeStmt,
    Float,
    Graph,
    ID,
    Integer,
    Name,
    NodeID,
    NodeStmt,
    Port,
    Stmt,
    StringLiteral,
    Subgraph,
    SubgraphStmt,
)
from dotgraph.config import Config
from dotgraph.errors import TooDeepError

logger = logging.getLogger(__name__)


class TextSink(Protocol):
    def write(self, text: str, /) -> object: ...


def edge_op(directed: bool) -> str:
    return "->" if directed else "--"


def render_id(value: ID) -> str:
    if isinstance(value, Name):
        return value.value
    if isinstance(value, Integer):
        return str(value.value)
    if isinstance(value, Float):
        return _format_float(value.value)
    if isinstance(value, StringLiteral):
        # No escaping: embedded quotes are emitted as-is.
        return f'"{value.value}"'
    raise TypeError(f"Unsupported identifier: {value!r}")


def render_compass(compass: CompassPt) -> str:
    return compass.value


def render_port(port: Port) -> str:
    if port.id is not None and port.compass is not None:
        return f"{render_id(port.id)}:{render_compass(port.compass)}"
    if port.id is not None:
        return render_id(port.id)
    return render_compass(port.compass)


def render_node_id(node_id: NodeID) -> str:
    if node_id.port is None:
        return render_id(node_id.id)
    return f"{render_id(node_id.id)}:{render_port(node_id.port)}"


def render_a_list(a_list: AList, minimal: bool = False) -> str:
    pairs = [f"{render_id(key)} = {render_id(value)}" for key, value in a_list]
    if not pairs:
        return "[ ]"
    if minimal:
        return "[ " + "; ".join(pairs) + " ]"
    return "[ " + "".join(f"{pair}; " for pair in pairs) + "]"


def render_attr_list(attrs: AttrList, minimal: bool = False) -> str:
    return "".join(render_a_list(a_list, minimal) for a_list in attrs)


def render_stmt(stmt: Stmt, directed: bool, config: Config | None = None, depth: int = 0) -> str:
    """Render one statement, terminated by its semicolon.

    ``directed`` selects the edge operator and is handed unchanged to every
    nested subgraph. ``depth`` is the nesting level of the enclosing scope.
    """
    settings = config or Config()

    if isinstance(stmt, NodeStmt):
        text = render_node_id(stmt.node_id) + _attached_attrs(stmt.attrs, settings)
    elif isinstance(stmt, EdgeStmt):
        points = [_render_edge_point(stmt.start, directed, settings, depth)]
        for point in stmt.rhs:
            points.append(_render_edge_point(point, directed, settings, depth))
        text = f" {edge_op(directed)} ".join(points) + _attached_attrs(stmt.attrs, settings)
    elif isinstance(stmt, AttrStmt):
        text = f"{stmt.ty.value} {render_attr_list(stmt.attrs, settings.minimal)} "
    elif isinstance(stmt, AssignStmt):
        separator = " = " if settings.minimal else " "
        text = f"{render_id(stmt.lhs)}{separator}{render_id(stmt.rhs)}"
    elif isinstance(stmt, SubgraphStmt):
        text = render_subgraph(stmt.subgraph, directed, settings, depth + 1)
    else:
        raise TypeError(f"Unsupported statement: {stmt!r}")

    return text + ";"


def render_subgraph(
    subgraph: Subgraph, directed: bool, config: Config | None = None, depth: int = 1
) -> str:
    settings = config or Config()
    if depth > settings.max_depth:
        raise TooDeepError(settings.max_depth)

    header = "subgraph "
    if subgraph.id is not None:
        header += f"{render_id(subgraph.id)} "
    lines = [header + "{"]
    for stmt in subgraph.stmt_list:
        lines.append(render_stmt(stmt, directed, settings, depth))
    lines.append("}")
    return "\n".join(lines)


def render_graph(graph: Graph, config: Config | None = None) -> str:
    settings = config or Config()
    directed = graph.graph_type.directed

    header = "strict " if graph.is_strict else ""
    header += f"{graph.graph_type.value} {render_id(graph.id)} {{"
    lines = [header]
    for stmt in graph.stmt_list:
        lines.append(render_stmt(stmt, directed, settings, 0))
    lines.append("}")

    logger.debug(
        "Rendered %s %s with %d top-level statements",
        graph.graph_type.value,
        render_id(graph.id),
        len(graph.stmt_list),
    )
    return "\n".join(lines)


def write_graph(graph: Graph, sink: TextSink, config: Config | None = None) -> None:
    sink.write(render_graph(graph, config))


def _render_edge_point(point: EdgePoint, directed: bool, config: Config, depth: int) -> str:
    if isinstance(point, NodeID):
        return render_node_id(point)
    if isinstance(point, Subgraph):
        return render_subgraph(point, directed, config, depth + 1)
    raise TypeError(f"Unsupported edge point: {point!r}")


def _attached_attrs(attrs: AttrList | None, config: Config) -> str:
    if not attrs:
        return ""
    return render_attr_list(attrs, config.minimal) + " "


def _format_float(value: float) -> str:
    # Shortest repr, expanded to positional notation since DOT numerals
    # have no exponent form.
    text = format(Decimal(repr(value)), "f")
    if "." not in text:
        text += ".0"
    return text
