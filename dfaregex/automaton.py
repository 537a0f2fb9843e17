import logging

from dfaregex.errors import CapacityExhausted
from dfaregex.graph import BUCKET_SIZE, LabeledBucket, LabeledGraph, make_nodes


__all__ = ('EPSILON', 'BucketPool', 'Automaton')


logger = logging.getLogger('dfaregex.automaton')


# label of a transition that consumes no input
EPSILON = None


class BucketPool:
    """A fixed number of buckets, handed out one by one and never taken back."""

    def __init__(self, capacity: int, bucket_size=BUCKET_SIZE, bucket_cls=LabeledBucket):
        self.capacity = capacity
        self.bucket_size = bucket_size
        self.bucket_cls = bucket_cls
        self.used = 0

    @property
    def remaining(self):
        return self.capacity - self.used

    def take(self):
        if self.used >= self.capacity:
            raise CapacityExhausted('bucket', self.capacity)
        self.used += 1
        return self.bucket_cls(self.bucket_size)


class Automaton:
    """
    States and labeled transitions of a finite automaton, on fixed storage.

    A transition label is either EPSILON or a :class:`dfaregex.charset.CharSet`.
    """

    def __init__(self, capacity: int, bucket_capacity: int, bucket_size=BUCKET_SIZE):
        self.graph = LabeledGraph(make_nodes(capacity))
        self.pool = BucketPool(bucket_capacity, bucket_size)

    def __len__(self):
        return self.graph.num_nodes

    def __repr__(self):
        return '<{cls} states={states} transitions={edges} buckets={used}/{cap}>'.format(
            cls=self.__class__.__name__, states=self.num_states, edges=self.num_transitions,
            used=self.pool.used, cap=self.pool.capacity,
        )

    @property
    def num_states(self):
        return self.graph.num_nodes

    @property
    def num_transitions(self):
        return self.graph.num_edges

    def states(self):
        return range(self.graph.num_nodes)

    def new_state(self) -> int:
        try:
            return self.graph.new_node()
        except CapacityExhausted:
            logger.debug('out of states after %d', self.graph.size)
            raise

    def connect(self, from_id: int, to_id: int, label=EPSILON):
        assert self.graph.node_id_valid(from_id) and self.graph.node_id_valid(to_id)
        if self.graph.add_edge(from_id, to_id, label):
            return

        # every bucket of the state is full, give it one more
        try:
            bucket = self.pool.take()
        except CapacityExhausted:
            logger.debug('out of buckets at state %d', from_id)
            raise
        self.graph.add_bucket(from_id, bucket)
        added = self.graph.add_edge(from_id, to_id, label)
        assert added

    def transitions(self, state: int):
        """Yield (target, label) pairs of the transitions out of ``state``."""
        return self.graph.edges_out(state)

    def label(self, from_id: int, to_id: int):
        return self.graph.edge_label(from_id, to_id)
