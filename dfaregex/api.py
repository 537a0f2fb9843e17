import logging

from dfaregex.config import DEFAULT_OPTIONS
from dfaregex.dfa import Dfa
from dfaregex.nfa import ast_to_nfa
from dfaregex.automaton import Automaton
from dfaregex.parser import parse
from dfaregex.tokenizer import tokenize


__all__ = ('Regex', 'compile', 'matches', 'match_begin', 'match_full')


logger = logging.getLogger('dfaregex.api')


class Regex:
    """A compiled pattern. Matching never modifies it."""

    def __init__(self, pattern: str, dfa: Dfa):
        self.pattern, self.dfa = pattern, dfa

    def __repr__(self):
        return '<{cls} {pattern!r} states={states}>'.format(
            cls=self.__class__.__name__, pattern=self.pattern, states=len(self.dfa))

    def _repr_svg_(self):
        return self.to_graphviz()._repr_svg_()

    def to_graphviz(self):
        return self.dfa.to_graphviz()

    def matches(self, string: str) -> bool:
        """Whether the whole of ``string`` is in the language."""
        dfa = self.dfa
        state = dfa.start
        for ch in string:
            state = dfa.follow(state, ch)
            if state is None:
                # no transition, nothing after this can match
                return False

        return dfa.is_accepting(state)

    def match_begin(self, string: str) -> int:
        """Length of the longest prefix of ``string`` in the language, -1 if none is."""
        dfa = self.dfa
        state = dfa.start
        last_match = 0 if dfa.is_accepting(state) else -1

        for i, ch in enumerate(string):
            state = dfa.follow(state, ch)
            if state is None:
                break
            if dfa.is_accepting(state):
                last_match = i + 1

        return last_match

    def match_full(self, string: str) -> bool:
        return self.matches(string)


def compile(pattern: str, options=None) -> Regex:
    """
    Compile ``pattern`` into a DFA.

    :type options: dfaregex.config.CompileOptions
    :raises dfaregex.errors.CompileError: on a malformed pattern or exhausted storage.
    """
    options = options or DEFAULT_OPTIONS

    ast = parse(tokenize(pattern))

    nfa_capacity, nfa_buckets = options.nfa_storage(pattern)
    nfa = Automaton(nfa_capacity, nfa_buckets, options.bucket_size)
    fragment = ast_to_nfa(ast, nfa)

    dfa_capacity, dfa_buckets = options.dfa_storage()
    dfa = Dfa.from_nfa(nfa, fragment, dfa_capacity, dfa_buckets, options.bucket_size)

    logger.debug('compiled %r: %d nfa states, %d dfa states', pattern, len(nfa), len(dfa))
    return Regex(pattern, dfa)


def matches(regex: Regex, string: str) -> bool:
    return regex.matches(string)


def match_begin(pattern: str, string: str) -> int:
    reg = compile(pattern)
    return reg.match_begin(string)


def match_full(pattern: str, string: str) -> bool:
    reg = compile(pattern)
    return reg.matches(string)
