from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum


@dataclass(slots=True, frozen=True)
class Name:
    value: str


@dataclass(slots=True, frozen=True)
class Integer:
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool):
            raise ValueError(f"DOT integers cannot be booleans, got {self.value!r}")


@dataclass(slots=True, frozen=True)
class Float:
    value: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.value):
            raise ValueError(f"DOT numerals must be finite, got {self.value!r}")


@dataclass(slots=True, frozen=True)
class StringLiteral:
    # Content between the quotes, kept exactly as written.
    value: str


ID = Name | Integer | Float | StringLiteral


class CompassPt(str, Enum):
    N = "n"
    NE = "ne"
    E = "e"
    SE = "se"
    S = "s"
    SW = "sw"
    W = "w"
    NW = "nw"
    C = "c"
    UNDERSCORE = "_"


@dataclass(slots=True, frozen=True)
class Port:
    id: ID | None = None
    compass: CompassPt | None = None

    def __post_init__(self) -> None:
        if self.id is None and self.compass is None:
            raise ValueError("port needs an id, a compass point, or both")


@dataclass(slots=True, frozen=True)
class NodeID:
    id: ID
    port: Port | None = None


AList = list[tuple[ID, ID]]
AttrList = list[AList]


class AttrStmtType(str, Enum):
    GRAPH = "graph"
    NODE = "node"
    EDGE = "edge"


class GraphType(str, Enum):
    GRAPH = "graph"
    DIGRAPH = "digraph"

    @property
    def directed(self) -> bool:
        return self is GraphType.DIGRAPH


@dataclass(slots=True)
class NodeStmt:
    node_id: NodeID
    attrs: AttrList | None = None

    def __post_init__(self) -> None:
        if self.attrs == []:
            self.attrs = None


@dataclass(slots=True)
class EdgeStmt:
    start: EdgePoint
    rhs: list[EdgePoint] = field(default_factory=list)
    attrs: AttrList | None = None

    def __post_init__(self) -> None:
        if self.attrs == []:
            self.attrs = None


@dataclass(slots=True)
class AttrStmt:
    ty: AttrStmtType
    attrs: AttrList = field(default_factory=list)

    def __post_init__(self) -> None:
        # An attribute statement always renders at least one bracket group.
        if not self.attrs:
            self.attrs = [[]]


@dataclass(slots=True)
class AssignStmt:
    lhs: ID
    rhs: ID


@dataclass(slots=True)
class SubgraphStmt:
    subgraph: Subgraph


@dataclass(slots=True)
class Subgraph:
    id: ID | None = None
    stmt_list: list[Stmt] = field(default_factory=list)


@dataclass(slots=True)
class Graph:
    is_strict: bool
    graph_type: GraphType
    id: ID
    stmt_list: list[Stmt] = field(default_factory=list)


Stmt = NodeStmt | EdgeStmt | AttrStmt | AssignStmt | SubgraphStmt
EdgePoint = NodeID | Subgraph
