import logging
from collections import deque

from dfaregex.automaton import EPSILON, Automaton
from dfaregex.charset import CharSet
from dfaregex.graph import BUCKET_SIZE


__all__ = ('Dfa', 'ε_closure', 'split_moves')


logger = logging.getLogger('dfaregex.dfa')


def ε_closure(nfa: Automaton, states):
    """
    :type states: set[int]
    :rtype: frozenset[int]
    """
    ans = set(states)
    delta = ans
    while True:
        delta = { to for s in delta for to, label in nfa.transitions(s)
                  if label is EPSILON and to not in ans }
        if delta:
            ans.update(delta)
        else:
            return frozenset(ans)


def split_moves(nfa: Automaton, states):
    """
    Partition the characters leaving ``states`` by where they lead.

    Yields (CharSet, frozenset) pairs: every character of the CharSet moves
    ``states`` to the same epsilon closed set of NFA states. The sets are
    distinct, and characters that lead nowhere are left out.
    """
    moves = [ (label, to) for s in states for to, label in nfa.transitions(s)
              if label is not EPSILON ]
    points = sorted({ p for label, _ in moves for p in label.boundaries() })

    closures = dict()   # raw targets -> closure
    groups = dict()     # closure -> ranges
    for lo, end in zip(points, points[1:]):
        # membership of every label is constant over [lo, end)
        char = chr(lo)
        targets = frozenset(to for label, to in moves if char in label)
        if not targets:
            continue
        if targets not in closures:
            closures[targets] = ε_closure(nfa, targets)
        groups.setdefault(closures[targets], []).append((lo, end - 1))

    for target_set, ranges in groups.items():
        yield CharSet(ranges), target_set


class Dfa:
    """
    A deterministic automaton: at most one transition per character out of a state.

    There is no dead state. A character with no transition out of the current
    state means the input is rejected, it is not an error.
    """

    def __init__(self, automaton: Automaton, start: int, accepting):
        self.automaton = automaton
        self.start = start
        self.accepting = frozenset(accepting)

    def __len__(self):
        return len(self.automaton)

    def __repr__(self):
        return '<{cls} states={states} start={start} accepting={accepting}>'.format(
            cls=self.__class__.__name__, states=len(self),
            start=self.start, accepting=sorted(self.accepting),
        )

    def _repr_svg_(self):
        return self.to_graphviz()._repr_svg_()

    def to_graphviz(self):
        from dfaregex.visualize import dfa_to_gv
        return dfa_to_gv(self)

    @classmethod
    def from_nfa(cls, nfa: Automaton, fragment, capacity: int, bucket_capacity: int,
                 bucket_size=BUCKET_SIZE):
        """
        Subset construction.

        :type fragment: dfaregex.nfa.Fragment
        """
        dfa = Automaton(capacity, bucket_capacity, bucket_size)
        accepting = set()

        # state sets are only needed while building, ids are all that remain
        start_set = ε_closure(nfa, {fragment.start})
        set_to_state = { start_set: dfa.new_state() }

        q = deque([start_set])
        while q:
            states = q.popleft()
            state = set_to_state[states]
            if fragment.accept in states:
                accepting.add(state)

            for label, target_set in split_moves(nfa, states):
                if target_set not in set_to_state:
                    set_to_state[target_set] = dfa.new_state()
                    q.append(target_set)
                dfa.connect(state, set_to_state[target_set], label)

        logger.debug('subset construction: %d nfa states -> %d dfa states',
                     len(nfa), len(dfa))
        return cls(dfa, set_to_state[start_set], accepting)

    def follow(self, state: int, char: str):
        """The state reached from ``state`` on ``char``, None if there is no transition."""
        for to, label in self.automaton.transitions(state):
            if char in label:
                return to
        return None

    def is_accepting(self, state: int) -> bool:
        return state in self.accepting
