import itertools


def make_serial():
    gen = itertools.count()
    return lambda: next(gen)


def repr_range(start, end):
    if start == end:
        return repr(start)[1:-1]
    else:
        return '{}-{}'.format(*map(lambda x: repr(x)[1:-1], (start, end)))


class BufferedGen:
    """Wrap an iterator with peek and unget, counting the items consumed in ``pos``."""

    def __init__(self, gen):
        self.gen = gen
        self.buffer = []
        self.pos = 0

    def peek(self):
        ret = self.get()
        self.unget(ret)
        return ret

    def get(self):
        if self.buffer:
            ret = self.buffer.pop()
        else:
            ret = next(self.gen)
        self.pos += 1
        return ret

    def unget(self, item):
        self.buffer.append(item)
        self.pos -= 1
