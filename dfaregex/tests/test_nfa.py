import pytest

from dfaregex.automaton import EPSILON, Automaton
from dfaregex.charset import CharSet
from dfaregex.config import CompileOptions
from dfaregex.errors import CapacityExhausted
from dfaregex.nfa import Fragment, ast_to_nfa, nfa_from_string
from dfaregex.parser import ast_from_string


def test_nfa_literal():
    nfa, frag = nfa_from_string('a')
    assert frag == Fragment(0, 1)
    assert len(nfa) == 2
    assert nfa.label(0, 1) == CharSet.from_char('a')


def test_nfa_empty():
    nfa, frag = nfa_from_string('')
    assert frag.start == frag.accept
    assert len(nfa) == 1
    assert nfa.num_transitions == 0


def test_nfa_cat():
    nfa, frag = nfa_from_string('ab')
    assert frag == Fragment(0, 3)
    assert nfa.label(0, 1) == CharSet.from_char('a')
    assert nfa.label(1, 2) is EPSILON
    assert nfa.label(2, 3) == CharSet.from_char('b')
    assert nfa.num_transitions == 3


def test_nfa_union():
    nfa, frag = nfa_from_string('a|b')
    start, accept = frag
    assert (start, accept) == (0, 1)
    assert sorted(to for to, _ in nfa.transitions(start)) == [2, 4]
    assert all(label is EPSILON for _, label in nfa.transitions(start))
    assert nfa.label(3, accept) is EPSILON
    assert nfa.label(5, accept) is EPSILON


def test_nfa_star():
    nfa, frag = nfa_from_string('a*')
    start, accept = frag
    sub_start, sub_accept = 2, 3
    assert sorted(to for to, _ in nfa.transitions(start)) == [accept, sub_start]
    assert sorted(to for to, _ in nfa.transitions(sub_accept)) == [accept, sub_start]
    assert nfa.label(sub_start, sub_accept) == CharSet.from_char('a')


def test_nfa_plus_and_question():
    nfa, (start, accept) = nfa_from_string('a+')
    assert not nfa.graph.has_edge(start, accept)
    assert nfa.graph.has_edge(3, 2)

    nfa, (start, accept) = nfa_from_string('a?')
    assert nfa.graph.has_edge(start, accept)
    assert not nfa.graph.has_edge(3, 2)


def test_nfa_group_adds_no_state():
    assert len(nfa_from_string('((a))')[0]) == len(nfa_from_string('a')[0])


def test_nfa_bracket_label():
    nfa, frag = nfa_from_string('[^a-c\\d]')
    label = nfa.label(frag.start, frag.accept)
    assert label == (CharSet.from_range('a', 'c') | CharSet.from_range('0', '9')).complement()

    nfa, frag = nfa_from_string('.')
    assert nfa.label(frag.start, frag.accept) == CharSet.all()


def test_nfa_state_ids_not_reused():
    nfa, frag = nfa_from_string('(a|bc)*d+')
    targets = [ to for s in nfa.states() for to, _ in nfa.transitions(s) ]
    assert all(0 <= to < len(nfa) for to in targets)
    assert len(nfa) == len(set(nfa.states()))


def test_nfa_default_capacity_is_enough():
    for pattern in ('((a|b)*c+)?', 'a|b|c', '[abc]*\\d+.?', '(((a)))'):
        nfa, _ = nfa_from_string(pattern)
        assert len(nfa) <= CompileOptions().nfa_storage(pattern)[0]


def test_nfa_wide_union_chains_buckets():
    pattern = '|'.join('abcdefghijklmnopqrstuvwxyz')
    nfa, frag = nfa_from_string(pattern, CompileOptions(bucket_size=4))
    assert len(list(nfa.graph.buckets(frag.start))) == 7
    assert len(list(nfa.transitions(frag.start))) == 26


def test_nfa_capacity_exhausted():
    ast = ast_from_string('a|b')
    with pytest.raises(CapacityExhausted) as exec_info:
        ast_to_nfa(ast, Automaton(3, 10))
    assert exec_info.value.resource == 'node'

    with pytest.raises(CapacityExhausted) as exec_info:
        ast_to_nfa(ast, Automaton(6, 1))
    assert exec_info.value.resource == 'bucket'
