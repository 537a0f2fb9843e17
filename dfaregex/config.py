from collections import namedtuple

from dfaregex.graph import BUCKET_SIZE


__all__ = ('CompileOptions', 'DEFAULT_OPTIONS')


DEFAULT_DFA_CAPACITY = 1024


class CompileOptions(namedtuple('CompileOptions', (
        'dfa_capacity', 'nfa_capacity', 'dfa_buckets', 'nfa_buckets', 'bucket_size'))):
    """
    Storage sizes for compiling a pattern.

    Automata never grow their storage. A pattern needing more states or
    buckets than configured fails with :class:`dfaregex.errors.CapacityExhausted`.

    :param dfa_capacity: maximum number of DFA states.
    :param nfa_capacity: maximum number of NFA states. None sizes it from the pattern.
    :param dfa_buckets: number of edge buckets for the DFA. None means twice its capacity.
    :param nfa_buckets: number of edge buckets for the NFA. None means twice its capacity.
    :param bucket_size: edge slots per bucket.
    """

    __slots__ = ()

    def __new__(cls, dfa_capacity=DEFAULT_DFA_CAPACITY, nfa_capacity=None,
                dfa_buckets=None, nfa_buckets=None, bucket_size=BUCKET_SIZE):
        if bucket_size < 1:
            raise ValueError('bucket_size must be positive')
        return super().__new__(cls, dfa_capacity, nfa_capacity, dfa_buckets, nfa_buckets, bucket_size)

    def nfa_storage(self, pattern: str):
        # every token adds at most two states, an empty pattern needs one
        capacity = self.nfa_capacity
        if capacity is None:
            capacity = 2 * len(pattern) + 2
        buckets = self.nfa_buckets
        if buckets is None:
            buckets = 2 * capacity
        return capacity, buckets

    def dfa_storage(self):
        buckets = self.dfa_buckets
        if buckets is None:
            buckets = 2 * self.dfa_capacity
        return self.dfa_capacity, buckets


DEFAULT_OPTIONS = CompileOptions()
