"""Lower a dotgraph tree into a networkx multigraph.

Vertices are keyed by their identifier and carry an ``ID -> ID`` attribute
mapping; every edge carries a copy of its statement's attribute mapping.
Ports and compass points have no counterpart in networkx and are dropped.

A subgraph used as an edge endpoint is lowered in place and stands for every
vertex referenced anywhere inside it, so ``a -> subgraph { b c }`` produces the
edges ``(a, b)`` and ``(a, c)``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import networkx as nx

from dotgraph.ast import (
    AssignStmt,
    AttrList,
    AttrStmt,
    AttrStmtType,
    EdgePoint,
    EdgeStmt,
    Graph,
    ID,
    NodeID,
    NodeStmt,
    Stmt,
    Subgraph,
    SubgraphStmt,
)
from dotgraph.config import Config
from dotgraph.errors import EmptyChainError, TooDeepError, UndeclaredEndpointError

logger = logging.getLogger(__name__)

LibraryGraph = nx.MultiDiGraph | nx.MultiGraph
Attributes = dict[ID, ID]


def lower(graph: Graph, config: Config | None = None) -> LibraryGraph:
    settings = config or Config()
    library: LibraryGraph = nx.MultiDiGraph() if graph.graph_type.directed else nx.MultiGraph()

    declared: _Declarations | None = None
    if not settings.implicit_nodes:
        declared = _Declarations()
        _collect_declared(graph.stmt_list, declared, settings, 0)

    lowering = _Lowering(library, settings, declared)
    lowering.lower_scope(graph.stmt_list, _Scope(), depth=0, root=True)

    logger.debug(
        "Lowered %s into %d vertices and %d edges",
        graph.graph_type.value,
        library.number_of_nodes(),
        library.number_of_edges(),
    )
    return library


def flatten_attrs(attrs: AttrList | None) -> Attributes:
    """Merge bracket groups in order; later keys override earlier ones."""
    merged: Attributes = {}
    for a_list in attrs or []:
        for key, value in a_list:
            merged[key] = value
    return merged


class _Scope:
    def __init__(
        self, node_defaults: Attributes | None = None, edge_defaults: Attributes | None = None
    ):
        self.node_defaults: Attributes = dict(node_defaults or {})
        self.edge_defaults: Attributes = dict(edge_defaults or {})

    def child(self) -> _Scope:
        return _Scope(self.node_defaults, self.edge_defaults)


class _Declarations:
    """Node statement ids, plus the edge statements that name each endpoint."""

    def __init__(self):
        self.nodes: set[ID] = set()
        self.edges: dict[ID, set[int]] = {}

    def add_endpoint(self, vertex: ID, stmt: EdgeStmt) -> None:
        self.edges.setdefault(vertex, set()).add(id(stmt))

    def declares(self, vertex: ID, stmt: EdgeStmt) -> bool:
        if vertex in self.nodes:
            return True
        return bool(self.edges.get(vertex, set()) - {id(stmt)})


class _Lowering:
    def __init__(self, library: LibraryGraph, config: Config, declared: _Declarations | None):
        self._library = library
        self._config = config
        self._declared = declared

    def lower_scope(
        self, stmts: Iterable[Stmt], scope: _Scope, depth: int, root: bool = False
    ) -> list[ID]:
        """Lower statements and return every vertex they reference, in first-seen order."""
        referenced: dict[ID, None] = {}

        for stmt in stmts:
            if isinstance(stmt, NodeStmt):
                vertex = self._add_vertex(stmt.node_id.id, scope)
                self._library.nodes[vertex].update(flatten_attrs(stmt.attrs))
                referenced[vertex] = None
            elif isinstance(stmt, EdgeStmt):
                for vertex in self._lower_edge(stmt, scope, depth):
                    referenced[vertex] = None
            elif isinstance(stmt, AttrStmt):
                self._apply_attr_stmt(stmt, scope, root)
            elif isinstance(stmt, AssignStmt):
                if root:
                    self._library.graph[stmt.lhs] = stmt.rhs
            elif isinstance(stmt, SubgraphStmt):
                for vertex in self._lower_subgraph(stmt.subgraph, scope, depth + 1):
                    referenced[vertex] = None
            else:
                raise TypeError(f"Unsupported statement: {stmt!r}")

        return list(referenced)

    def _lower_subgraph(self, subgraph: Subgraph, scope: _Scope, depth: int) -> list[ID]:
        if depth > self._config.max_depth:
            raise TooDeepError(self._config.max_depth)
        return self.lower_scope(subgraph.stmt_list, scope.child(), depth)

    def _lower_edge(self, stmt: EdgeStmt, scope: _Scope, depth: int) -> list[ID]:
        if not stmt.rhs:
            raise EmptyChainError("edge statement needs at least one point after its start")

        attrs = dict(scope.edge_defaults)
        attrs.update(flatten_attrs(stmt.attrs))

        groups: list[list[ID]] = []
        for point in [stmt.start, *stmt.rhs]:
            groups.append(self._endpoint_vertices(point, stmt, scope, depth))
        for left, right in zip(groups, groups[1:]):
            for source in left:
                for target in right:
                    key = self._library.add_edge(source, target)
                    self._library[source][target][key].update(attrs)

        referenced: dict[ID, None] = {}
        for group in groups:
            for vertex in group:
                referenced[vertex] = None
        return list(referenced)

    def _endpoint_vertices(
        self, point: EdgePoint, stmt: EdgeStmt, scope: _Scope, depth: int
    ) -> list[ID]:
        if isinstance(point, NodeID):
            if self._declared is not None and not self._declared.declares(point.id, stmt):
                raise UndeclaredEndpointError(point.id)
            return [self._add_vertex(point.id, scope)]
        if isinstance(point, Subgraph):
            vertices = self._lower_subgraph(point, scope, depth + 1)
            if not vertices:
                raise EmptyChainError("subgraph edge endpoint references no vertices")
            return vertices
        raise TypeError(f"Unsupported edge point: {point!r}")

    def _add_vertex(self, vertex: ID, scope: _Scope) -> ID:
        if vertex not in self._library:
            self._library.add_node(vertex)
            self._library.nodes[vertex].update(scope.node_defaults)
        return vertex

    def _apply_attr_stmt(self, stmt: AttrStmt, scope: _Scope, root: bool) -> None:
        attrs = flatten_attrs(stmt.attrs)
        if stmt.ty is AttrStmtType.NODE:
            scope.node_defaults.update(attrs)
        elif stmt.ty is AttrStmtType.EDGE:
            scope.edge_defaults.update(attrs)
        elif root:
            self._library.graph.update(attrs)


def _collect_declared(
    stmts: Iterable[Stmt], declared: _Declarations, config: Config, depth: int
) -> None:
    for stmt in stmts:
        if isinstance(stmt, NodeStmt):
            declared.nodes.add(stmt.node_id.id)
        elif isinstance(stmt, SubgraphStmt):
            _collect_subgraph(stmt.subgraph, declared, config, depth + 1)
        elif isinstance(stmt, EdgeStmt):
            for point in [stmt.start, *stmt.rhs]:
                if isinstance(point, NodeID):
                    declared.add_endpoint(point.id, stmt)
                elif isinstance(point, Subgraph):
                    _collect_subgraph(point, declared, config, depth + 1)


def _collect_subgraph(
    subgraph: Subgraph, declared: _Declarations, config: Config, depth: int
) -> None:
    if depth > config.max_depth:
        raise TooDeepError(config.max_depth)
    _collect_declared(subgraph.stmt_list, declared, config, depth)
