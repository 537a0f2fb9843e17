"""
A directed graph over client-owned storage, with bucketed adjacency lists.

The graph does no allocation of its own. The client hands it a list of
:class:`Node` objects to keep its nodes in (see :func:`make_nodes`), and feeds
every node the :class:`Bucket` objects its edges live in via
:meth:`Graph.add_bucket`. Without a bucket with a free slot,
:meth:`Graph.add_edge` fails.

Nodes are addressed by their id, which is their index in the storage list.
Every method except :meth:`Graph.node_id_valid` assumes the ids it receives
are valid.
"""

from dfaregex.errors import CapacityExhausted


__all__ = (
    'EMPTY', 'BUCKET_SIZE', 'Node', 'Bucket', 'LabeledBucket',
    'Graph', 'LabeledGraph', 'make_nodes',
)


# slot value of an empty edge, node ids are never negative
EMPTY = -1

# how many edges out per bucket
BUCKET_SIZE = 10


class Node:
    __slots__ = ('id', 'edges_out')

    def __init__(self, id=0):
        self.id = id
        self.edges_out = None   # type: Bucket

    def __repr__(self):
        return '<Node {}>'.format(self.id)


class Bucket:
    """A block of edge slots out of a node, chained through ``next``."""

    __slots__ = ('adj_nodes', 'next')

    def __init__(self, size=BUCKET_SIZE):
        self.adj_nodes = [EMPTY] * size
        self.next = None

    def __len__(self):
        return len(self.adj_nodes)

    def clear(self):
        for idx in range(len(self.adj_nodes)):
            self.clear_slot(idx)
        self.next = None

    def clear_slot(self, idx):
        self.adj_nodes[idx] = EMPTY


class LabeledBucket(Bucket):
    """A bucket carrying one label per edge slot."""

    __slots__ = ('labels',)

    def __init__(self, size=BUCKET_SIZE):
        self.labels = [None] * size
        super().__init__(size)

    def clear_slot(self, idx):
        super().clear_slot(idx)
        self.labels[idx] = None


def make_nodes(size):
    return [Node(idx) for idx in range(size)]


class Graph:
    def __init__(self, nodes=None, size=None):
        self.size = 0
        self.num_nodes = 0
        self.num_edges = 0
        self.nodes = []
        self.init(nodes if nodes is not None else [], size)

    def __repr__(self):
        return '<{cls} nodes={n}/{size} edges={e}>'.format(
            cls=self.__class__.__name__, n=self.num_nodes, size=self.size, e=self.num_edges,
        )

    def init(self, nodes, size=None):
        """
        Bind the graph to ``nodes`` and reset it.

        Every storage slot gets an id equal to its index and an empty edge
        list. The previous storage is left untouched, so this can also be used
        to move the graph to larger or smaller storage.
        """
        if size is None:
            size = len(nodes)
        assert size <= len(nodes)

        self.size = size
        self.num_nodes = 0
        self.num_edges = 0
        self.nodes = nodes

        for idx in range(size):
            nodes[idx].id = idx
            nodes[idx].edges_out = None

    def node_id_valid(self, node_id: int) -> bool:
        # a node's id is just its index
        return 0 <= node_id < self.size

    def new_node(self) -> int:
        """Activate the next free node and return its id."""
        if self.num_nodes >= self.size:
            raise CapacityExhausted('node', self.size)
        node_id = self.num_nodes
        self.num_nodes += 1
        return node_id

    def add_bucket(self, node_id: int, bucket: Bucket):
        """Empty ``bucket`` and link it as the last bucket of the node's chain."""
        bucket.clear()

        node = self.nodes[node_id]
        if node.edges_out is None:
            node.edges_out = bucket
        else:
            cursor = node.edges_out
            while cursor.next is not None:
                cursor = cursor.next
            cursor.next = bucket

    def add_edge(self, from_id: int, to_id: int) -> bool:
        """
        Store an edge in the first empty slot out of ``from_id``.

        :return: False if every bucket of the node is full.
        """
        bucket, idx = self._find_slot(from_id, EMPTY)
        if bucket is None:
            return False

        self._fill_slot(bucket, idx, to_id)
        self.num_edges += 1
        return True

    def del_edge(self, from_id: int, to_id: int):
        bucket, idx = self._find_slot(from_id, to_id)
        if bucket is None:
            # edge doesn't exist, consider it deleted
            return

        bucket.clear_slot(idx)
        self.num_edges -= 1

    def has_edge(self, from_id: int, to_id: int) -> bool:
        bucket, _ = self._find_slot(from_id, to_id)
        return bucket is not None

    def buckets(self, node_id: int):
        cursor = self.nodes[node_id].edges_out
        while cursor is not None:
            yield cursor
            cursor = cursor.next

    def successors(self, node_id: int):
        for bucket in self.buckets(node_id):
            for to_id in bucket.adj_nodes:
                if to_id != EMPTY:
                    yield to_id

    def _fill_slot(self, bucket, idx, to_id):
        bucket.adj_nodes[idx] = to_id

    def _find_slot(self, node_id, target):
        """
        Find the slot out of ``node_id`` holding ``target``.

        ``target`` may be ``EMPTY`` to find the first free slot.
        :return: (bucket, index), or (None, None) when there is no such slot.
        """
        for bucket in self.buckets(node_id):
            for idx, to_id in enumerate(bucket.adj_nodes):
                if to_id == target:
                    return bucket, idx

        return None, None


class LabeledGraph(Graph):
    """A graph whose edges carry a label, stored beside the edge in its bucket.

    Buckets given to a labeled graph must be :class:`LabeledBucket`.
    """

    def add_edge(self, from_id: int, to_id: int, label=None) -> bool:
        bucket, idx = self._find_slot(from_id, EMPTY)
        if bucket is None:
            return False

        self._fill_slot(bucket, idx, to_id)
        bucket.labels[idx] = label
        self.num_edges += 1
        return True

    def edge_label(self, from_id: int, to_id: int):
        bucket, idx = self._find_slot(from_id, to_id)
        if bucket is None:
            raise KeyError((from_id, to_id))
        return bucket.labels[idx]

    def edges_out(self, node_id: int):
        for bucket in self.buckets(node_id):
            for to_id, label in zip(bucket.adj_nodes, bucket.labels):
                if to_id != EMPTY:
                    yield to_id, label
