from dfaregex.errors import ParseError, BadRange, UnexpectedToken, UnexpectedEOF
from dfaregex.tokenizer import Token, tokenize
from dfaregex.utils import BufferedGen, repr_range


__all__ = (
    'BaseNode', 'Empty', 'Char', 'CharRange', 'Bracket', 'Dot',
    'Star', 'Plus', 'Question', 'Cat', 'Or', 'Group',
    'parse', 'ast_from_string',
)


class TokenGen(BufferedGen):
    def __init__(self, gen):
        super().__init__(gen)
        self.eof = None

    def get(self) -> Token:
        if self.eof is None:
            ret = super().get()
            if ret.type is Token.EOF:
                self.eof = ret
            else:
                return ret

        return self.eof

    def unget(self, item):
        if item.type is not Token.EOF:
            super().unget(item)

    def eat(self, expect: Token=None, msg=None) -> Token:
        assert expect is None or expect.type is not Token.EOF
        tok = self.get()
        if tok.type is Token.EOF:
            raise UnexpectedEOF(got=tok, expect=expect, msg=msg)
        if expect is not None and tok != expect:
            raise UnexpectedToken(got=tok, expect=expect, msg=msg)
        return tok


def parse_par(tokens: TokenGen):
    tokens.eat(Token.LPAR())
    ret = parse_exp(tokens)
    tokens.eat(Token.RPAR(), msg='missing )')
    return Group(ret)


def parse_bracket(tokens: TokenGen):
    tokens.eat(Token.LBRACKET())
    complement = tokens.peek().type is Token.NOT
    if complement:
        tokens.eat(Token.NOT())

    ors = []
    while True:
        tok = tokens.get()
        if tok.type is Token.RBRACKET:
            assert len(ors) != 0
            return Bracket(*ors, complement=complement)
        elif tok.type is Token.EOF:
            raise UnexpectedEOF(got=tok, expect=Token.RBRACKET(), msg='missing ]')
        elif tok.type is Token.DASH:
            if len(ors) == 0:
                ors.append(Char('-'))
            else:
                next_tok = tokens.peek()
                if next_tok.type is Token.RBRACKET:
                    ors.append(Char('-'))
                elif next_tok.type is Token.EOF:
                    raise UnexpectedEOF(got=next_tok, expect=Token.RBRACKET(), msg='missing ]')
                elif next_tok.type is Token.CHAR:
                    if isinstance(ors[-1], CharRange):
                        ors.append(Char('-'))
                    elif isinstance(ors[-1], Char):
                        end = tokens.get()
                        if ord(end.value) < ord(ors[-1].children[0]):
                            raise BadRange('reversed range', pos=end.pos)
                        ors[-1] = CharRange(start=ors[-1].children[0], end=end.value)
                    else:
                        raise BadRange('not character type', pos=tok.pos)
                else:
                    raise BadRange('not character type', pos=next_tok.pos)
        elif tok.type is Token.CHAR:
            assert len(tok.value) == 1
            ors.append(Char(tok.value))
        elif tok.type is Token.CLASS:
            ors.append(lookup_class(tok))
        else:
            raise UnexpectedToken(got=tok, msg='unexpected token in bracket')


def parse_cat(tokens: TokenGen):
    cats = []
    while True:
        tok = tokens.peek()
        if tok.type in (Token.EOF, Token.OR, Token.RPAR):
            break
        elif tok.type is Token.LPAR:
            cats.append(parse_par(tokens))
        elif tok.type is Token.LBRACKET:
            cats.append(parse_bracket(tokens))
        elif tok.type in (Token.STAR, Token.PLUS, Token.QUESTION):
            if not cats:
                raise ParseError('nothing to repeat', pos=tok.pos)
            if isinstance(cats[-1], (Star, Plus, Question)):
                raise ParseError('multiple repeat', pos=tok.pos)
            tok2node = {
                Token.STAR: Star,
                Token.PLUS: Plus,
                Token.QUESTION: Question,
            }
            cats[-1] = tok2node[tok.type](cats[-1])
            tokens.eat(tok)
        elif tok.type is Token.DOT:
            cats.append(Dot())
            tokens.eat(tok)
        elif tok.type is Token.CHAR:
            assert isinstance(tok.value, str) and len(tok.value) == 1
            cats.append(Char(tok.value))
            tokens.eat(tok)
        elif tok.type is Token.CLASS:
            cats.append(lookup_class(tok))
            tokens.eat(tok)
        else:
            assert tok.type in (Token.RBRACKET, Token.DASH, Token.NOT)
            assert not 'possible'

    if len(cats) == 0:
        # only a whole pattern may be empty, see parse()
        raise UnexpectedToken(got=tok, msg='empty alternative')
    elif len(cats) == 1:
        return cats[0]
    else:
        return Cat(*cats)


def parse_exp(tokens: TokenGen):
    ors = []
    while True:
        cat = parse_cat(tokens)
        ors.append(cat)
        tok = tokens.peek()
        if tok.type is Token.OR:
            tokens.eat(Token.OR())
        else:
            assert tok.type in (Token.EOF, Token.RPAR)
            break

    assert len(ors) != 0
    if len(ors) == 1:
        return ors[0]
    else:
        return Or(*ors)


def parse(tokens):
    """
    Build the AST of a token sequence.

    :type tokens: iterable[Token]
    """
    tokens = TokenGen(iter(tokens))
    if tokens.peek().type is Token.EOF:
        return Empty()

    exp = parse_exp(tokens)
    tok = tokens.peek()
    if tok.type is Token.RPAR:
        raise UnexpectedToken(got=tok, msg='unbalanced parenthesis')
    assert tok.type is Token.EOF
    return exp


def ast_from_string(string):
    return parse(tokenize(string))


class BaseNode:
    def __init__(self, *children, **kwargs):
        """
        :type children: tuple[BaseNode|str]
        """
        self.children = children

    def __eq__(self, other: 'BaseNode'):
        if not isinstance(other, BaseNode):
            raise TypeError('uncomparable types: BaseNode vs {}'.format(other.__class__.__name__))
        else:
            return (self.__class__ is other.__class__
                    and self.children == other.children)

    def __repr__(self):
        return '{}({})'.format(self.__class__.__name__, ', '.join(map(repr, self.children)))

    def _repr_svg_(self):
        return self.to_graphviz()._repr_svg_()

    def to_graphviz(self):
        from dfaregex.visualize import ast_to_gv
        return ast_to_gv(self)

    def _node_label(self):
        return self.__class__.__name__

    def _add_to_gv(self, graph, serial, parent_name=None, edge_opts=None):
        from dfaregex.visualize import add_ast_node_to_gv
        return add_ast_node_to_gv(self, graph, serial, parent_name, edge_opts)


class Empty(BaseNode):
    def _node_label(self):
        return 'NIL'


class Char(BaseNode):
    def _node_label(self):
        assert len(self.children) == 1
        return repr_range(self.children[0], self.children[0])


class CharRange(BaseNode):
    def __init__(self, *, start=None, end=None):
        for ch in (start, end):
            assert isinstance(ch, str) and len(ch) == 1
        if ord(end) < ord(start):
            raise BadRange('reversed range')

        super().__init__()
        self.start, self.end = start, end

    def __eq__(self, other):
        return (isinstance(other, CharRange)
                and (self.start, self.end) == (other.start, other.end))

    def __repr__(self):
        return 'CharRange(start={!r}, end={!r})'.format(self.start, self.end)

    def _node_label(self):
        return '{cls}: {range}'.format(
            cls=self.__class__.__name__,
            range=repr_range(self.start, self.end),
        )


class Bracket(BaseNode):
    def __init__(self, *children, complement: bool):
        super().__init__(*children)
        self.complement = complement

    def __repr__(self):
        return '{}({}, complement={})'.format(
            self.__class__.__name__, ', '.join(map(repr, self.children)), self.complement)

    def _node_label(self):
        ret = self.__class__.__name__
        if self.complement:
            ret += '^'
        return ret

    def __eq__(self, other):
        return super().__eq__(other) and self.complement is other.complement


class Dot(BaseNode):
    pass


class Star(BaseNode):
    pass


class Plus(BaseNode):
    pass


class Question(BaseNode):
    pass


class Cat(BaseNode):
    def _add_to_gv(self, graph, serial, parent_name=None, edge_opts=None):
        from dfaregex.visualize import add_cat_node_to_gv
        return add_cat_node_to_gv(self, graph, serial, parent_name, edge_opts)


class Or(BaseNode):
    pass


class Group(BaseNode):
    pass


def lookup_class(tok: Token) -> BaseNode:
    assert tok.value in PREDEFINED_RANGE
    return PREDEFINED_RANGE[tok.value]


# ASCII only, unicode categories are not supported
PREDEFINED_RANGE = {
    'w': ast_from_string('[a-zA-Z0-9_]'),
    'W': ast_from_string('[^a-zA-Z0-9_]'),
    's': ast_from_string('[ \\t\\n\\r\\f\\v]'),
    'S': ast_from_string('[^ \\t\\n\\r\\f\\v]'),
    'd': ast_from_string('[0-9]'),
    'D': ast_from_string('[^0-9]'),
}
