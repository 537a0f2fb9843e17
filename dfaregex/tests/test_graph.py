import pytest

from dfaregex.errors import CapacityExhausted
from dfaregex.graph import (
    EMPTY, BUCKET_SIZE, Bucket, LabeledBucket, Graph, LabeledGraph, make_nodes,
)


def make_graph(size=8, buckets_per_node=1, bucket_size=BUCKET_SIZE):
    g = Graph(make_nodes(size))
    for node_id in range(size):
        for _ in range(buckets_per_node):
            g.add_bucket(node_id, Bucket(bucket_size))
    return g


def test_graph_init():
    nodes = make_nodes(5)
    for node in nodes:
        node.id = 42
    g = Graph(nodes)

    assert (g.size, g.num_nodes, g.num_edges) == (5, 0, 0)
    assert [ node.id for node in nodes ] == list(range(5))
    assert all(node.edges_out is None for node in nodes)


def test_graph_reinit_resizes():
    g = make_graph(4)
    assert g.add_edge(0, 1)

    old_nodes = g.nodes
    bigger = make_nodes(10)
    g.init(bigger)
    assert g.size == 10
    assert g.num_edges == 0
    assert g.nodes is bigger
    assert not g.has_edge(0, 1)
    # the previous storage is untouched
    assert old_nodes[0].edges_out is not None


def test_node_id_valid():
    g = Graph(make_nodes(3))
    assert [ g.node_id_valid(i) for i in (-1, 0, 2, 3) ] == [False, True, True, False]


def test_new_node_exhausted():
    g = Graph(make_nodes(2))
    assert g.new_node() == 0
    assert g.new_node() == 1
    with pytest.raises(CapacityExhausted) as exec_info:
        g.new_node()
    assert exec_info.value.resource == 'node'
    assert exec_info.value.capacity == 2


def test_add_edge_without_bucket_fails():
    g = Graph(make_nodes(2))
    assert not g.add_edge(0, 1)
    assert not g.has_edge(0, 1)
    assert g.num_edges == 0


def test_add_has_del_edge():
    g = make_graph(6)
    for u in range(6):
        for v in range(6):
            assert g.add_edge(u, v)
            assert g.has_edge(u, v)
            g.del_edge(u, v)
            assert not g.has_edge(u, v)
    assert g.num_edges == 0


def test_del_edge_absent_is_noop():
    g = make_graph(3)
    g.add_edge(0, 1)
    g.del_edge(0, 2)
    g.del_edge(0, 2)
    assert g.has_edge(0, 1)
    assert g.num_edges == 1


def test_bucket_exhaustion_and_chaining():
    g = make_graph(4, bucket_size=2)
    assert g.add_edge(0, 1)
    assert g.add_edge(0, 2)
    assert not g.add_edge(0, 3)

    g.add_bucket(0, Bucket(2))
    assert g.add_edge(0, 3)
    assert list(g.successors(0)) == [1, 2, 3]
    assert len(list(g.buckets(0))) == 2


def test_empty_slot_reused():
    g = make_graph(4, bucket_size=2)
    g.add_edge(0, 1)
    g.add_edge(0, 2)
    g.del_edge(0, 1)
    assert g.add_edge(0, 3)
    assert g.nodes[0].edges_out.adj_nodes == [3, 2]


def test_add_bucket_clears():
    bucket = Bucket(3)
    bucket.adj_nodes[1] = 7
    bucket.next = Bucket(3)

    g = Graph(make_nodes(2))
    g.add_bucket(0, bucket)
    assert bucket.adj_nodes == [EMPTY] * 3
    assert bucket.next is None


def test_labeled_graph():
    g = LabeledGraph(make_nodes(3))
    g.add_bucket(0, LabeledBucket(2))
    assert g.add_edge(0, 1, 'x')
    assert g.add_edge(0, 2, 'y')
    assert not g.add_edge(0, 0, 'z')

    assert g.edge_label(0, 2) == 'y'
    assert list(g.edges_out(0)) == [(1, 'x'), (2, 'y')]

    g.del_edge(0, 1)
    assert g.nodes[0].edges_out.labels == [None, 'y']
    with pytest.raises(KeyError):
        g.edge_label(0, 1)
