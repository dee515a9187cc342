"""Standard codes shared by the classification, decomposition and range checking code."""

from enum import IntEnum, unique


@unique
class FP(IntEnum):
    """Floating-point value categories, as returned by fpclassify."""
    NAN = 0
    INFINITE = 1
    ZERO = 2
    SUBNORMAL = 3
    NORMAL = 4

class Strategy(IntEnum):
    """How to compute the classification primitives for a format."""
    PLATFORM = 0
    NATIVE = 0
    PORTABLE = 1
    FALLBACK = 1


# ilogb sentinels, with the usual C values for a 32-bit int
INT_MAX = (1 << 31) - 1
ILOGB0 = -INT_MAX
ILOGBNAN = -INT_MAX - 1


platform_synonyms = {'platform', 'native', 'library', 'builtin'}
portable_synonyms = {'portable', 'fallback', 'constexpr', 'generic'}

def parse_strategy(s):
    """Convert a strategy name (or a Strategy) into a Strategy."""
    if isinstance(s, Strategy):
        return s
    name = str(s).strip().lower()
    if name in platform_synonyms:
        return Strategy.PLATFORM
    elif name in portable_synonyms:
        return Strategy.PORTABLE
    else:
        raise ValueError('unknown classification strategy {}'.format(repr(s)))
