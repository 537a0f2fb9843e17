__all__ = (
    'CompileError', 'LexError', 'IllegalEscape',
    'ParseError', 'BadRange', 'UnexpectedToken', 'UnexpectedEOF',
    'CapacityExhausted',
)


class CompileError(Exception):
    pass


class LexError(CompileError):
    def __init__(self, msg=None, *, pos=None):
        super().__init__(msg, dict(pos=pos))
        self.msg = msg
        self.pos = pos


class IllegalEscape(LexError):
    def __init__(self, string=None, *, pos=None, msg=None):
        super().__init__(msg or 'illegal escape', pos=pos)
        self.string = string

    def __repr__(self):
        return '<{name} {id:#x} string={string} pos={pos}>'.format(
            name=self.__class__.__name__, id=id(self), string=self.string, pos=self.pos
        )


class ParseError(CompileError):
    def __init__(self, msg=None, *, pos=None):
        super().__init__(msg, dict(pos=pos))
        self.msg = msg
        self.pos = pos

    def __repr__(self):
        return '<{name} {id:#x} msg={msg} pos={pos}>'.format(
            name=self.__class__.__name__, id=id(self), msg=self.msg, pos=self.pos
        )


class BadRange(ParseError):
    pass


class UnexpectedToken(ParseError):
    def __init__(self, *, got, expect=None, msg=None):
        super().__init__(msg or '', pos=got.pos)
        self.args = (self.msg, dict(got=got, expect=expect, pos=got.pos))
        self.got = got
        self.expect = expect

    def __repr__(self):
        return '<{name} {id:#x} msg={msg} expect={expect}, got={got}, pos={pos}>'\
            .format(name=self.__class__.__name__, id=id(self),
                    msg=self.msg, expect=self.expect, got=self.got, pos=self.pos)


class UnexpectedEOF(UnexpectedToken):
    def __init__(self, *, got=None, expect=None, msg=None):
        from dfaregex.tokenizer import Token

        if got is not None:
            assert got.type is Token.EOF
        else:
            got = Token.EOF()
        super().__init__(got=got, expect=expect, msg=msg)


class CapacityExhausted(CompileError):
    """Graph storage ran out while building an automaton.

    Storage is never grown behind the caller's back; retry with larger
    capacities in :class:`dfaregex.config.CompileOptions`.
    """

    def __init__(self, resource, capacity):
        super().__init__('{} capacity exhausted ({})'.format(resource, capacity))
        self.resource = resource
        self.capacity = capacity
