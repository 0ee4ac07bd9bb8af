class Singleton:
    """Class with a single instance"""

    def __new__(cls):
        obj = object.__new__(cls)
        cls.__new__ = lambda _: obj
        return obj


class EmptyCell(Singleton):
    """The terminal cell that ends every finite stream"""

    @staticmethod
    def is_empty():
        return True

    def __copy__(self):
        return self

    def __deepcopy__(self, memodict={}):
        return self

    def __reduce__(self):
        return EmptyCell, ()

    def __repr__(self):
        return 'EMPTY'


EMPTY = EmptyCell()


class Cell(tuple):
    """One realized node of a stream: a value and a thunk of the rest.

    This container type is immutable. The thunk yields the tail stream when
    forced; whether it caches is up to the thunk.
    """

    def __new__(cls, *args):
        if not args:
            return EMPTY
        if len(args) != 2 or args[1] is None:
            raise TypeError("Cell takes a value and a next thunk, or nothing for EMPTY")
        value, next_thunk = args
        return super().__new__(cls, (value, next_thunk))

    @staticmethod
    def is_empty():
        return False

    @property
    def value(self):
        return self[0]

    @property
    def next(self):
        return self[1]

    def __setattr__(self, *args, **kwargs):
        raise TypeError("'{}' object does not support item assignment".format(type(self).__name__))

    def __repr__(self):
        return 'Cell({!r}, {!r})'.format(self.value, self.next)
