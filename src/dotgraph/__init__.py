"""DOT graph-description documents as typed trees."""

from dotgraph.ast import (
    AssignStmt,
    AttrStmt,
    AttrStmtType,
    CompassPt,
    EdgeStmt,
    Float,
    Graph,
    GraphType,
    Integer,
    Name,
    NodeID,
    NodeStmt,
    Port,
    StringLiteral,
    Subgraph,
    SubgraphStmt,
)
from dotgraph.config import Config
from dotgraph.errors import (
    ConfigurationError,
    DotGraphError,
    DotSyntaxError,
    EmptyChainError,
    LoweringError,
    TooDeepError,
    UndeclaredEndpointError,
)
from dotgraph.lowering import lower
from dotgraph.parser import parse_dot
from dotgraph.render import render_graph, write_graph
from dotgraph.runner import reformat

__all__ = [
    "AssignStmt",
    "AttrStmt",
    "AttrStmtType",
    "CompassPt",
    "Config",
    "ConfigurationError",
    "DotGraphError",
    "DotSyntaxError",
    "EdgeStmt",
    "EmptyChainError",
    "Float",
    "Graph",
    "GraphType",
    "Integer",
    "LoweringError",
    "Name",
    "NodeID",
    "NodeStmt",
    "Port",
    "StringLiteral",
    "Subgraph",
    "SubgraphStmt",
    "TooDeepError",
    "UndeclaredEndpointError",
    "lower",
    "parse_dot",
    "reformat",
    "render_graph",
    "write_graph",
]
