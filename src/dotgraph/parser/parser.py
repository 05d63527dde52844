import logging

from dotgraph.ast import (
    AList,
    AssignStmt,
    AttrList,
    AttrStmt,
    AttrStmtType,
    CompassPt,
    EdgePoint,
    EdgeStmt,
    Float,
    Graph,
    GraphType,
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
from dotgraph.errors import DotSyntaxError, TooDeepError
from dotgraph.parser.lexer import Token, lex

logger = logging.getLogger(__name__)

KEYWORDS = {"strict", "graph", "digraph", "node", "edge", "subgraph"}
COMPASS_TOKENS = {compass.value: compass for compass in CompassPt}
ID_KINDS = {"IDENT", "NUMBER", "STRING"}


class DotParser:
    def __init__(self, source: str, config: Config | None = None):
        self._tokens = lex(source)
        self._index = 0
        self._config = config or Config()
        self._edge_kind = "ARROW"

    def parse(self) -> Graph:
        is_strict = False
        if self._keyword(self._peek()) == "strict":
            self._consume()
            is_strict = True

        token = self._peek()
        keyword = self._keyword(token)
        if keyword not in {"graph", "digraph"}:
            raise DotSyntaxError("Expected 'graph' or 'digraph'", position=token.position)
        self._consume()
        graph_type = GraphType(keyword)
        self._edge_kind = "ARROW" if graph_type.directed else "LINE"

        graph_id = self._parse_id()
        self._expect("LBRACE")
        stmt_list = self._parse_stmt_list(depth=0)
        self._expect("RBRACE")
        self._expect("EOF")

        logger.debug("Parsed %s with %d top-level statements", graph_type.value, len(stmt_list))
        return Graph(is_strict=is_strict, graph_type=graph_type, id=graph_id, stmt_list=stmt_list)

    def _parse_stmt_list(self, depth: int) -> list[Stmt]:
        stmts: list[Stmt] = []
        while self._peek().kind not in {"RBRACE", "EOF"}:
            stmts.append(self._parse_statement(depth))
            if self._peek().kind == "SEMICOLON":
                self._consume()
        return stmts

    def _parse_statement(self, depth: int) -> Stmt:
        token = self._peek()
        keyword = self._keyword(token)

        if keyword in {"graph", "node", "edge"}:
            self._consume()
            return AttrStmt(ty=AttrStmtType(keyword), attrs=self._parse_attr_list())

        if keyword == "subgraph" or token.kind == "LBRACE":
            subgraph = self._parse_subgraph(depth + 1)
            if self._at_edge_op():
                return self._parse_edge_statement(subgraph, depth)
            return SubgraphStmt(subgraph=subgraph)

        lead = self._parse_id()
        if self._peek().kind == "EQUALS":
            self._consume()
            return AssignStmt(lhs=lead, rhs=self._parse_id())

        node_id = self._parse_node_id(lead)
        if self._at_edge_op():
            return self._parse_edge_statement(node_id, depth)

        return NodeStmt(node_id=node_id, attrs=self._parse_attr_list(optional=True))

    def _parse_edge_statement(self, start: EdgePoint, depth: int) -> EdgeStmt:
        rhs: list[EdgePoint] = []
        while self._at_edge_op():
            self._consume()
            rhs.append(self._parse_edge_point(depth))

        attrs = self._parse_attr_list(optional=True)
        return EdgeStmt(start=start, rhs=rhs, attrs=attrs)

    def _parse_edge_point(self, depth: int) -> EdgePoint:
        token = self._peek()
        if self._keyword(token) == "subgraph" or token.kind == "LBRACE":
            return self._parse_subgraph(depth + 1)
        return self._parse_node_id(self._parse_id())

    def _parse_subgraph(self, depth: int) -> Subgraph:
        if depth > self._config.max_depth:
            raise TooDeepError(self._config.max_depth)

        subgraph_id: ID | None = None
        if self._keyword(self._peek()) == "subgraph":
            self._consume()
            if self._peek().kind in ID_KINDS:
                subgraph_id = self._parse_id()

        self._expect("LBRACE")
        stmt_list = self._parse_stmt_list(depth)
        self._expect("RBRACE")
        return Subgraph(id=subgraph_id, stmt_list=stmt_list)

    def _parse_node_id(self, id: ID) -> NodeID:
        if self._peek().kind != "COLON":
            return NodeID(id=id)
        self._consume()

        port_id = self._parse_id()
        if self._peek().kind == "COLON":
            self._consume()
            return NodeID(id=id, port=Port(id=port_id, compass=self._parse_compass()))

        if isinstance(port_id, Name) and port_id.value in COMPASS_TOKENS:
            return NodeID(id=id, port=Port(compass=COMPASS_TOKENS[port_id.value]))
        return NodeID(id=id, port=Port(id=port_id))

    def _parse_compass(self) -> CompassPt:
        token = self._peek()
        if token.kind != "IDENT" or token.value not in COMPASS_TOKENS:
            raise DotSyntaxError("Expected compass point", position=token.position)
        self._consume()
        return COMPASS_TOKENS[token.value]

    def _parse_attr_list(self, optional: bool = False) -> AttrList | None:
        if self._peek().kind != "LBRACKET":
            if optional:
                return None
            raise DotSyntaxError("Expected attribute list", position=self._peek().position)

        attrs: AttrList = []
        while self._peek().kind == "LBRACKET":
            self._consume()
            a_list: AList = []
            while self._peek().kind != "RBRACKET":
                key = self._parse_id()
                self._expect("EQUALS")
                value = self._parse_id()
                a_list.append((key, value))
                if self._peek().kind in {"COMMA", "SEMICOLON"}:
                    self._consume()
            self._expect("RBRACKET")
            attrs.append(a_list)
        return attrs

    def _parse_id(self) -> ID:
        token = self._peek()
        if token.kind == "STRING":
            self._consume()
            return StringLiteral(token.value)
        if token.kind == "NUMBER":
            self._consume()
            if "." in token.value:
                return Float(float(token.value))
            return Integer(int(token.value))
        if token.kind == "IDENT" and self._keyword(token) is None:
            self._consume()
            return Name(token.value)
        raise DotSyntaxError("Expected identifier", position=token.position)

    def _at_edge_op(self) -> bool:
        token = self._peek()
        if token.kind not in {"ARROW", "LINE"}:
            return False
        if token.kind != self._edge_kind:
            raise DotSyntaxError(
                f"Edge operator {token.value!r} does not match the graph type",
                position=token.position,
            )
        return True

    def _keyword(self, token: Token) -> str | None:
        if token.kind != "IDENT":
            return None
        lowered = token.value.lower()
        return lowered if lowered in KEYWORDS else None

    def _expect(self, kind: str) -> Token:
        token = self._peek()
        if token.kind != kind:
            raise DotSyntaxError(f"Expected {kind}", position=token.position)
        return self._consume()

    def _peek(self) -> Token:
        return self._tokens[self._index]

    def _consume(self) -> Token:
        token = self._tokens[self._index]
        self._index += 1
        return token


def parse_dot(source: str, config: Config | None = None) -> Graph:
    return DotParser(source, config).parse()
