"""numpy floating and integer scalar types.
"""

import numpy as np

from ..core.ops import FP, INT_MAX, ILOGB0, ILOGBNAN
from . import evalctx


np_precs = {}
np_precs.update((k, np.float16) for k in evalctx.binary16_synonyms)
np_precs.update((k, np.float32) for k in evalctx.binary32_synonyms)
np_precs.update((k, np.float64) for k in evalctx.binary64_synonyms)
np_precs.update((k, np.longdouble) for k in evalctx.longdouble_synonyms)


class NumpyFloatCtx(evalctx.FloatCtx):
    """Context for one of numpy's floating scalar types.
    Arithmetic stays in the scalar type; limits come from np.finfo.
    """

    dtype = np.float64

    def __init__(self, dtype=None):
        if dtype is not None:
            self.dtype = np.dtype(dtype).type
        if not issubclass(self.dtype, np.floating):
            raise ValueError('not a numpy floating type: {}'.format(repr(dtype)))

        finfo = np.finfo(self.dtype)
        self.name = np.dtype(self.dtype).name
        self.radix = 2
        self.digits = finfo.nmant + 1
        self.min_exponent = finfo.minexp + 1
        self.max_exponent = finfo.maxexp

        self._max = self.dtype(finfo.max)
        self._min = self.dtype(finfo.smallest_normal)
        self._denorm_min = self.dtype(finfo.smallest_subnormal)

    def cast(self, x):
        return self.dtype(x)

    def owns(self, x):
        return type(x) is self.dtype

    def context(self):
        return np.errstate(all='ignore')

    def max(self):
        return self._max

    def min(self):
        return self._min

    def denorm_min(self):
        return self._denorm_min

    def infinity(self):
        return self.dtype(np.inf)

    def quiet_nan(self):
        return self.dtype(np.nan)

    def signbit(self, f):
        return bool(np.signbit(f))

    def copysign(self, f, s):
        return self.dtype(np.copysign(f, s))

    def fpclassify(self, f):
        if np.isnan(f):
            return FP.NAN
        elif np.isinf(f):
            return FP.INFINITE
        else:
            return self._classify_finite(f, self._min)

    def ilogb(self, f):
        if np.isnan(f):
            return ILOGBNAN
        elif np.isinf(f):
            return INT_MAX
        elif f == 0:
            return ILOGB0
        else:
            m, e = np.frexp(f)
            return int(e) - 1

    def scalbn(self, f, exp):
        limit = self.scale_limit()
        exp = max(-limit, min(exp, limit))
        with self.context():
            return self.dtype(np.ldexp(f, np.intc(exp)))


used_dtypes = {}
def np_ctx(dtype):
    t = np.dtype(dtype).type
    try:
        return used_dtypes[t]
    except KeyError:
        ctx = NumpyFloatCtx(dtype=t)
        used_dtypes[t] = ctx
        return ctx


def np_int_ctx(dtype):
    """Integer context matching a numpy integer type."""
    t = np.dtype(dtype).type
    if not issubclass(t, np.integer):
        raise ValueError('not a numpy integer type: {}'.format(repr(dtype)))
    iinfo = np.iinfo(t)
    return evalctx.int_ctx(iinfo.bits, signed=(iinfo.min < 0))
