"""
Library-wide defaults.

MEMOIZE
    Streams constructed without an explicit `memo` argument cache their cells
    when this is true, and recompute them on every traversal otherwise.

STRICT_LIMIT
    None, or the number of cells a strict operation (to_list, fold, sum) may
    traverse before giving up with InfiniteStreamError.
"""

MEMOIZE = True
STRICT_LIMIT = None

_DEFAULTS = {'MEMOIZE': MEMOIZE, 'STRICT_LIMIT': STRICT_LIMIT}
_UNSET = object()


def configure(memoize=_UNSET, strict_limit=_UNSET, **unknown):
    global MEMOIZE, STRICT_LIMIT
    if unknown:
        raise TypeError("configure() got unknown options: {}".format(', '.join(sorted(unknown))))

    if memoize is not _UNSET:
        MEMOIZE = bool(memoize)
    if strict_limit is not _UNSET:
        if strict_limit is not None and (isinstance(strict_limit, bool) or not isinstance(strict_limit, int)
                                         or strict_limit < 0):
            raise ValueError("strict_limit must be None or a non-negative int, not {!r}".format(strict_limit))
        STRICT_LIMIT = strict_limit


def reset_config():
    global MEMOIZE, STRICT_LIMIT
    MEMOIZE = _DEFAULTS['MEMOIZE']
    STRICT_LIMIT = _DEFAULTS['STRICT_LIMIT']


def resolve_memo(memo):
    if memo is None:
        return MEMOIZE
    return bool(memo)
