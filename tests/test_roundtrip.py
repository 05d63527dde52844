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
from dotgraph.parser.parser import parse_dot
from dotgraph.render import render_graph


def _sample_graph(graph_type: GraphType) -> Graph:
    return Graph(
        is_strict=True,
        graph_type=graph_type,
        id=StringLiteral("my graph"),
        stmt_list=[
            AttrStmt(AttrStmtType.GRAPH, [[(Name("rankdir"), Name("LR"))]]),
            NodeStmt(
                NodeID(Name("a"), Port(Name("out"), CompassPt.SE)),
                [[(Name("shape"), Name("box"))], [(Name("color"), StringLiteral("light blue"))]],
            ),
            EdgeStmt(
                NodeID(Name("a")),
                [
                    NodeID(Integer(7)),
                    Subgraph(
                        Name("inner"),
                        [NodeStmt(NodeID(Name("b"))), EdgeStmt(NodeID(Name("b")), [NodeID(Name("c"))])],
                    ),
                ],
                [[(Name("weight"), Float(0.5))]],
            ),
            SubgraphStmt(
                Subgraph(None, [SubgraphStmt(Subgraph(Integer(2), [NodeStmt(NodeID(Integer(-1)))]))])
            ),
        ],
    )


def test_render_then_parse_restores_the_tree():
    for graph_type in GraphType:
        graph = _sample_graph(graph_type)

        text = render_graph(graph)
        reparsed = parse_dot(text)

        assert reparsed == graph
        assert render_graph(reparsed) == text


def test_minimal_mode_round_trips_assignments():
    graph = Graph(
        is_strict=False,
        graph_type=GraphType.GRAPH,
        id=Name("G"),
        stmt_list=[
            AssignStmt(Name("label"), StringLiteral("title")),
            NodeStmt(NodeID(Name("a")), [[(Name("x"), Integer(1)), (Name("y"), Integer(2))]]),
        ],
    )
    config = Config(minimal=True)

    text = render_graph(graph, config)

    assert text == 'graph G {\nlabel = "title";\na[ x = 1; y = 2 ] ;\n}'
    assert parse_dot(text) == graph


def test_empty_attribute_lists_round_trip():
    graph = Graph(
        is_strict=False,
        graph_type=GraphType.GRAPH,
        id=Name("G"),
        stmt_list=[
            NodeStmt(NodeID(Name("A")), attrs=[]),
            EdgeStmt(NodeID(Name("A")), [NodeID(Name("B"))], attrs=[]),
            AttrStmt(AttrStmtType.NODE, []),
        ],
    )

    text = render_graph(graph)

    assert text == "graph G {\nA;\nA -- B;\nnode [ ] ;\n}"
    assert parse_dot(text) == graph
    assert graph.stmt_list[0].attrs is None
    assert graph.stmt_list[2].attrs == [[]]
