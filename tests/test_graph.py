import pytest

from stackette.core.graph import GraphNode, Graph


def test_graph_traversal_and_validation():
    # Build small diamond graph: a -> b, a -> c, b -> d, c -> d
    a = GraphNode(id="a", ref="A")
    b = GraphNode(id="b", ref="B")
    c = GraphNode(id="c", ref="C")
    d = GraphNode(id="d", ref="D")

    a.connect(b, c)
    b.connect(d)
    c.connect(d)

    g = Graph([a])

    # Nodes returned in depth-first order without duplicates
    ids = [n.id for n in g.nodes()]
    assert ids[0] == "a"
    assert set(ids) == {"a", "b", "c", "d"}

    # DAG validation should not raise
    g.validate_dag()

    order = [n.id for n in g.topological_order()]
    assert order[0] == "a" and order[-1] == "d"


def test_topological_order_follows_registration_for_independent_nodes():
    g = Graph()
    late = g.add_node(GraphNode(id="late", ref=None))
    first = g.add_node(GraphNode(id="first", ref=None))
    second = g.add_node(GraphNode(id="second", ref=None))
    second.connect(late)

    assert [n.id for n in g.topological_order()] == ["first", "second", "late"]


def test_cycle_detected():
    x = GraphNode(id="x", ref=None)
    y = GraphNode(id="y", ref=None)
    x.connect(y)
    y.connect(x)

    with pytest.raises(ValueError, match="Cycle"):
        Graph([x]).topological_order()


def test_duplicate_node_rejected():
    g = Graph()
    g.add_node(GraphNode(id="a", ref=None))
    with pytest.raises(ValueError):
        g.add_node(GraphNode(id="a", ref=None))
