from graphviz import Digraph

from dfaregex.automaton import EPSILON, Automaton
from dfaregex.parser import BaseNode, Cat
from dfaregex.utils import make_serial


def ast_to_gv(ast: BaseNode):
    g = Digraph()
    g.attr('node', width='0', height='0', shape='box', fontname='Fira Code')
    ast._add_to_gv(g, make_serial())
    return g


def add_ast_node_to_gv(node: BaseNode, graph: Digraph, serial, parent_name=None, edge_opts=None):
    name = 'N_{}'.format(serial())
    graph.node(name, node._node_label())
    if parent_name is not None:
        graph.edge(parent_name, name, **(edge_opts or {}))

    for c in node.children:
        if isinstance(c, BaseNode):
            c._add_to_gv(graph, serial, name)

    return name


def add_cat_node_to_gv(node: Cat, graph: Digraph, serial, parent_name=None, edge_opts=None):
    root_name = 'N_{}'.format(serial())
    graph.node(root_name, node._node_label())

    child_names = []
    prev_name = root_name
    for i, ch in enumerate(node.children):
        sub_edge_opts = dict(arrowhead='none') if i != 0 else {}
        name = ch._add_to_gv(graph, serial, prev_name, edge_opts=sub_edge_opts)
        child_names.append(name)
        prev_name = name

    subgraph = Digraph()
    subgraph.attr('graph', rank='same')
    for ch_name in child_names:
        subgraph.node(ch_name)
    graph.subgraph(subgraph)

    if parent_name is not None:
        graph.edge(parent_name, root_name, **(edge_opts or {}))
    return root_name


def edge_label(label):
    if label is EPSILON:
        return 'ε'
    return str(label)


def automaton_to_gv(automaton: Automaton, start: int, accepting):
    g = Digraph()
    g.attr('node', style='filled', width='0', height='0', shape='box', fontname='Fira Code')

    for state in automaton.states():
        name = 'S{}'.format(state)
        if state == start and state in accepting:
            g.node(name, 'START & END', color='gray')
        elif state == start:
            g.node(name, 'START', color='black', fontcolor='white')
        elif state in accepting:
            g.node(name, 'END', color='green', fontcolor='white')
        else:
            g.node(name, name)

    for state in automaton.states():
        for to, label in automaton.transitions(state):
            g.edge('S{}'.format(state), 'S{}'.format(to), edge_label(label))

    return g


def nfa_to_gv(nfa: Automaton, fragment):
    """
    :type fragment: dfaregex.nfa.Fragment
    """
    return automaton_to_gv(nfa, fragment.start, {fragment.accept})


def dfa_to_gv(dfa):
    """
    :type dfa: dfaregex.dfa.Dfa
    """
    return automaton_to_gv(dfa.automaton, dfa.start, dfa.accepting)
