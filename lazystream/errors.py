class StreamError(Exception):
    """Base class of all errors raised by lazystream"""


class EmptyStreamError(StreamError, IndexError):
    """head or tail of the empty stream"""

    def __init__(self, operation):
        super().__init__("{}() of empty stream".format(operation))
        self.operation = operation


class InfiniteStreamError(StreamError):
    """A strict operation was applied to an unbounded stream.

    Raised immediately when the stream is known to be infinite, or after
    `limit` cells when a strict traversal limit is configured.
    """

    def __init__(self, operation, limit=None):
        if limit is None:
            message = "{}() of infinite stream; take() a prefix first".format(operation)
        else:
            message = "{}() traversed more than {} cells".format(operation, limit)
        super().__init__(message)
        self.operation = operation
        self.limit = limit


class ReentrantForceError(StreamError):
    """A thunk was forced again from inside its own producer"""


class UnboundStreamError(StreamError):
    """A forward stream reference was forced before it was bound"""
