from dfaregex.utils import BufferedGen
from dfaregex.errors import IllegalEscape


__all__ = ('Token', 'tokenize')


class TokenMeta(type):
    def __new__(metacls, name, bases, namespaces):
        sub_types = set()
        for attr, value in namespaces.items():
            if value == ():
                sub_types.add(attr)
        for attr in sub_types:
            del namespaces[attr]

        klass = super().__new__(metacls, name, bases, namespaces)
        for attr in sub_types:
            sub_cls = super().__new__(metacls, attr, (klass,), namespaces)
            setattr(klass, attr, sub_cls)

        return klass


class Token(metaclass=TokenMeta):
    OR = ()         # type: TokenMeta

    LPAR = ()       # type: TokenMeta
    RPAR = ()       # type: TokenMeta

    LBRACKET = ()   # type: TokenMeta
    RBRACKET = ()   # type: TokenMeta
    DASH = ()       # type: TokenMeta
    NOT = ()        # type: TokenMeta

    STAR = ()       # type: TokenMeta
    PLUS = ()       # type: TokenMeta
    QUESTION = ()   # type: TokenMeta

    DOT = ()        # type: TokenMeta
    CHAR = ()       # type: TokenMeta
    CLASS = ()      # type: TokenMeta

    EOF = ()        # type: TokenMeta

    def __init__(self, value=None, pos=None):
        self.value = value
        self.pos = pos
        self.type = self.__class__

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return (self.type, self.value) == (other.type, other.value)

    def __hash__(self):
        return hash((self.type, self.value))

    def __repr__(self):
        if self.value is None:
            return '<{} @{}>'.format(self.type.__name__, self.pos)
        return '<{} {!r} @{}>'.format(self.type.__name__, self.value, self.pos)


ASCII_ESCAPES = {
    'a': '\a',
    'f': '\f',
    'n': '\n',
    'r': '\r',
    't': '\t',
    'v': '\v',
    '\\': '\\',
}


def read_escape(chars: BufferedGen, in_bracket: bool, pos: int) -> Token:
    def check_hex_digits(digits):
        for d in digits:
            if d not in '0123456789abcdef':
                return False
        else:
            return True

    try:
        ch = chars.get()
    except StopIteration:
        raise IllegalEscape('\\', pos=pos, msg='trailing backslash') from None

    if ch == 'b' and in_bracket:
        return Token.CHAR('\b', pos)
    elif ch in ASCII_ESCAPES:
        return Token.CHAR(ASCII_ESCAPES[ch], pos)
    elif ch in 'xuU':
        digits_num = {'x': 2, 'u': 4, 'U': 8}[ch]
        try:
            digits = [ chars.get().lower() for _ in range(digits_num) ]
        except StopIteration:
            raise IllegalEscape('\\' + ch, pos=pos, msg='truncated hex escape') from None
        if not check_hex_digits(digits):
            raise IllegalEscape('\\' + ch + ''.join(digits), pos=pos)
        code = int(''.join(digits), base=16)
        if code > 0x10ffff:
            raise IllegalEscape('\\' + ch + ''.join(digits), pos=pos, msg='code point out of range')
        return Token.CHAR(chr(code), pos)
    elif ch in 'wWsSdD':
        return Token.CLASS(ch, pos)
    elif in_bracket:
        return Token.CHAR(ch, pos)
    elif ch in 'bBAZ' or ch.isdecimal():
        # word boundaries, anchors and backreferences
        raise IllegalEscape('\\' + ch, pos=pos, msg='unsupported escape')
    else:
        return Token.CHAR(ch, pos)


def tokenize(source: str):
    """
    Split a pattern into tokens, ending with ``Token.EOF``.

    Every call starts afresh, the same string may be tokenized any number of times.
    """
    direct_yield = {
        '|': Token.OR,
        '(': Token.LPAR,
        ')': Token.RPAR,
        '*': Token.STAR,
        '+': Token.PLUS,
        '?': Token.QUESTION,
        '.': Token.DOT,
    }

    chars = BufferedGen(iter(source))
    in_bracket = False
    prev = None
    while True:
        pos = chars.pos
        try:
            ch = chars.get()
        except StopIteration:
            yield Token.EOF(pos=pos)
            return

        if in_bracket:
            if ch == '\\':
                tok = read_escape(chars, in_bracket, pos)
            elif ch == ']':
                if prev.type in (Token.LBRACKET, Token.NOT):
                    # empty bracket not allowed, ']' right after '[' is a regular char.
                    tok = Token.CHAR(ch, pos)
                else:
                    in_bracket = False
                    tok = Token.RBRACKET(pos=pos)
            elif ch == '^' and prev.type is Token.LBRACKET:
                tok = Token.NOT(pos=pos)
            elif ch == '-':
                tok = Token.DASH(pos=pos)
            else:
                tok = Token.CHAR(ch, pos)
        else:
            if ch in direct_yield:
                tok = direct_yield[ch](pos=pos)
            elif ch == '[':
                in_bracket = True
                tok = Token.LBRACKET(pos=pos)
            elif ch == '\\':
                tok = read_escape(chars, in_bracket, pos)
            else:
                tok = Token.CHAR(ch, pos)

        prev = tok
        yield tok
