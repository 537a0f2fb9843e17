from dfaregex.api import compile
from dfaregex.nfa import nfa_from_string
from dfaregex.parser import ast_from_string
from dfaregex.visualize import nfa_to_gv


def test_ast_to_gv():
    g = ast_from_string('ab(a|b|[^a-c])*|c').to_graphviz()
    assert 'Or' in g.source
    assert 'Bracket^' in g.source
    assert 'rank=same' in g.source


def test_nfa_to_gv():
    nfa, fragment = nfa_from_string('ab*')
    source = nfa_to_gv(nfa, fragment).source
    assert 'START' in source
    assert 'END' in source
    assert 'ε' in source

    nfa, fragment = nfa_from_string('')
    assert 'START & END' in nfa_to_gv(nfa, fragment).source


def test_dfa_to_gv():
    source = compile('ab|[^a-c]').to_graphviz().source
    assert 'START' in source
    assert 'ε' not in source
    assert '^a-c' in source
