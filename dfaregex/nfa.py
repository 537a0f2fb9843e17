from collections import namedtuple

from dfaregex.automaton import EPSILON, Automaton
from dfaregex.charset import CharSet
from dfaregex.config import DEFAULT_OPTIONS
from dfaregex.parser import (
    BaseNode, Char, Bracket, CharRange, Dot,
    Star, Plus, Question, Cat, Or, Group, Empty,
    ast_from_string,
)


__all__ = ('Fragment', 'ast_to_nfa', 'nfa_from_string')


class Fragment(namedtuple('Fragment', ('start', 'accept'))):
    """Start and accept state ids of a piece of NFA."""


def merge_bracket_ranges(node: Bracket) -> CharSet:
    cs = CharSet()
    for child in node.children:
        if isinstance(child, Char):
            cs |= CharSet.from_char(child.children[0])
        elif isinstance(child, CharRange):
            cs |= CharSet.from_range(child.start, child.end)
        elif isinstance(child, Bracket):
            cs |= merge_bracket_ranges(child)
        else:
            assert not 'possible'

    if node.complement:
        cs = cs.complement()
    return cs


def _single(nfa: Automaton, label: CharSet) -> Fragment:
    start = nfa.new_state()
    accept = nfa.new_state()
    nfa.connect(start, accept, label)
    return Fragment(start, accept)


def ast_to_nfa(node: BaseNode, nfa: Automaton) -> Fragment:
    """Add the states of ``node`` to ``nfa``, return the fragment they form."""
    if isinstance(node, Char):
        return _single(nfa, CharSet.from_char(node.children[0]))
    elif isinstance(node, Bracket):
        return _single(nfa, merge_bracket_ranges(node))
    elif isinstance(node, Dot):
        return _single(nfa, CharSet.all())
    elif isinstance(node, (Star, Plus, Question)):
        start = nfa.new_state()
        accept = nfa.new_state()
        sub_start, sub_accept = ast_to_nfa(node.children[0], nfa)

        nfa.connect(start, sub_start)
        if not isinstance(node, Plus):
            # skip
            nfa.connect(start, accept)
        if not isinstance(node, Question):
            # repeat
            nfa.connect(sub_accept, sub_start)
        nfa.connect(sub_accept, accept)

        return Fragment(start, accept)
    elif isinstance(node, Cat):
        assert len(node.children) > 0
        start = None
        prev_accept = None
        for s, a in (ast_to_nfa(child, nfa) for child in node.children):
            if start is None:
                start = s
            if prev_accept is not None:
                nfa.connect(prev_accept, s)
            prev_accept = a

        return Fragment(start, prev_accept)
    elif isinstance(node, Or):
        assert len(node.children) > 0
        start = nfa.new_state()
        accept = nfa.new_state()
        for s, a in (ast_to_nfa(child, nfa) for child in node.children):
            nfa.connect(start, s, EPSILON)
            nfa.connect(a, accept, EPSILON)

        return Fragment(start, accept)
    elif isinstance(node, Group):
        return ast_to_nfa(node.children[0], nfa)
    elif isinstance(node, Empty):
        state = nfa.new_state()
        return Fragment(state, state)
    else:
        raise NotImplementedError(node.__class__.__name__)


def nfa_from_string(pattern: str, options=None):
    """
    Parse ``pattern`` and build its NFA.

    :return: (Automaton, Fragment)
    """
    options = options or DEFAULT_OPTIONS
    capacity, buckets = options.nfa_storage(pattern)
    nfa = Automaton(capacity, buckets, options.bucket_size)
    fragment = ast_to_nfa(ast_from_string(pattern), nfa)
    return nfa, fragment
