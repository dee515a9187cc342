"""Builtin Python floats, using the math module for the primitives."""


import math
import sys

from ..core.ops import FP, INT_MAX, ILOGB0, ILOGBNAN
from . import evalctx


_SMALLEST_NORMAL = sys.float_info.min


class NativeCtx(evalctx.FloatCtx):
    """Context for builtin Python floats (IEEE 754 binary64 on every platform we care about)."""

    name = 'native'
    radix = sys.float_info.radix
    digits = sys.float_info.mant_dig
    min_exponent = sys.float_info.min_exp
    max_exponent = sys.float_info.max_exp

    def cast(self, x):
        return float(x)

    def owns(self, x):
        return type(x) is float

    def max(self):
        return sys.float_info.max

    def min(self):
        return _SMALLEST_NORMAL

    def denorm_min(self):
        return math.ldexp(1.0, self.min_exponent - self.digits)

    def infinity(self):
        return math.inf

    def quiet_nan(self):
        return math.nan

    def signbit(self, f):
        return math.copysign(1.0, f) < 0

    def copysign(self, f, s):
        return math.copysign(f, s)

    def fpclassify(self, f):
        if math.isnan(f):
            return FP.NAN
        elif math.isinf(f):
            return FP.INFINITE
        else:
            return self._classify_finite(f, _SMALLEST_NORMAL)

    def ilogb(self, f):
        if math.isnan(f):
            return ILOGBNAN
        elif math.isinf(f):
            return INT_MAX
        elif f == 0:
            return ILOGB0
        else:
            # frexp normalizes to [0.5, 1)
            m, e = math.frexp(f)
            return e - 1

    def scalbn(self, f, exp):
        limit = self.scale_limit()
        exp = max(-limit, min(exp, limit))
        try:
            return math.ldexp(f, exp)
        except OverflowError:
            # ldexp raises instead of returning infinity
            return math.copysign(math.inf, f)


native_ctx = NativeCtx()
