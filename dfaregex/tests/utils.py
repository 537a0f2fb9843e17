import pytest

from dfaregex.api import compile
from dfaregex.errors import ParseError
from dfaregex.parser import ast_from_string


def expect_parser_raise(string, exception=ParseError, *, msg=None, pos=None):
    with pytest.raises(exception) as exec_info:
        ast_from_string(string)
    if msg is not None:
        assert msg in repr(exec_info.value)
    if pos is not None:
        assert exec_info.value.pos == pos


def expect_compile_raise(string, exception, options=None):
    with pytest.raises(exception) as exec_info:
        compile(string, options)
    return exec_info.value


def all_strings(alphabet, max_len):
    """Every string over ``alphabet`` up to ``max_len`` characters, shortest first."""
    level = ['']
    yield ''
    for _ in range(max_len):
        level = [ s + ch for s in level for ch in alphabet ]
        yield from level
