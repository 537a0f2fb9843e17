from dfaregex.charset import CharSet, MIN_CHAR, MAX_CHAR


def expand(cs):
    ans = set()
    for start, end in cs.get_ranges():
        ans.update(chr(cp) for cp in range(ord(start), ord(end) + 1))
    return ans


def test_charset_normalize():
    cs = CharSet([(ord('e'), ord('g')), (ord('a'), ord('c')), (ord('d'), ord('d')), (ord('x'), ord('x'))])
    assert cs.ranges == ((ord('a'), ord('g')), (ord('x'), ord('x')))
    assert expand(cs) == set('abcdefgx')


def test_charset_contains():
    cs = CharSet.from_range('b', 'd') | CharSet.from_char('x')
    for ch in 'bcdx':
        assert ch in cs
    for ch in 'aefwy' + MIN_CHAR + MAX_CHAR:
        assert ch not in cs


def test_charset_empty():
    cs = CharSet()
    assert not cs
    assert 'a' not in cs
    assert cs.complement() == CharSet.all()


def test_charset_complement():
    def run(chars):
        cs = CharSet()
        for ch in chars:
            cs |= CharSet.from_char(ch)
        assert expand(cs) == set(chars)

        inverted = cs.complement()
        for ch in chars:
            assert ch not in inverted
        for ch in 'Q' + MAX_CHAR:
            assert (ch in inverted) is (ch not in chars)
        assert inverted.complement() == cs

    run('123')
    run('1az-')
    run(MIN_CHAR + MAX_CHAR)


def test_charset_all():
    cs = CharSet.all()
    assert MIN_CHAR in cs and MAX_CHAR in cs
    assert not cs.complement()
    assert str(cs) == 'ANY'


def test_charset_boundaries():
    cs = CharSet.from_range('a', 'c') | CharSet.from_char('x')
    assert list(cs.boundaries()) == [ord('a'), ord('d'), ord('x'), ord('y')]


def test_charset_hash_eq():
    assert CharSet.from_range('a', 'b') == CharSet.from_char('b') | CharSet.from_char('a')
    assert len({ CharSet.from_char('a'), CharSet.from_range('a', 'a') }) == 1


def test_charset_str():
    assert str(CharSet.from_range('a', 'c') | CharSet.from_char('x')) == 'a-cx'
    assert str(CharSet.from_char('\n')) == '\\n'
    assert str(CharSet.from_char('a').complement()) == '^a'
