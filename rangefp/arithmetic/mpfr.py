"""Emulated IEEE 754-like binary formats of any width, using GMP (via gmpy2)
as a backend. Values are mpfr numbers rounded to the format's precision
and exponent range.
"""

import gmpy2 as gmp

from ..core.ops import FP, INT_MAX, ILOGB0, ILOGBNAN
from . import evalctx


class MPFRCtx(evalctx.FloatCtx):
    """Context for an IEEE 754-like binary format with exponent width es and total width
    nbits, including the sign bit. Subnormals, infinities and NaN are supported.
    """

    es = 11
    nbits = 64

    def __init__(self, es=None, nbits=None):
        if es is not None:
            self.es = es
        if nbits is not None:
            self.nbits = nbits
        if self.es < 2 or self.nbits - self.es < 2:
            raise ValueError('format with es={}, nbits={} is not IEEE 754-like'
                             .format(repr(self.es), repr(self.nbits)))

        self.name = 'float({:d},{:d})'.format(self.es, self.nbits)
        self.radix = 2
        self.p = self.nbits - self.es
        self.emax = (1 << (self.es - 1)) - 1
        self.emin = 1 - self.emax

        self.digits = self.p
        self.min_exponent = self.emin + 1
        self.max_exponent = self.emax + 1

        # mpfr exponents are for significands in [0.5, 1), one more than IEEE 754 exponents
        self._gmp_kwargs = dict(
            precision=self.p,
            emin=self.emin - self.p + 2,
            emax=self.emax + 1,
            subnormalize=True,
            round=gmp.RoundToNearest,
            trap_underflow=False,
            trap_overflow=False,
            trap_inexact=False,
            trap_invalid=False,
            trap_erange=False,
            trap_divzero=False,
        )

        with self.context():
            self._max = gmp.mul_2exp(gmp.mpfr((1 << self.p) - 1), self.emax - self.p + 1)
            self._min = gmp.mul_2exp(gmp.mpfr(1), self.emin)
            self._denorm_min = gmp.mul_2exp(gmp.mpfr(1), self.emin - self.p + 1)

    @property
    def key(self):
        return (type(self).__name__, self.es, self.nbits)

    def __repr__(self):
        return '{}(es={}, nbits={})'.format(type(self).__name__, repr(self.es), repr(self.nbits))

    def context(self):
        return gmp.context(**self._gmp_kwargs)

    def cast(self, x):
        with self.context():
            return gmp.mpfr(x)

    def owns(self, x):
        if not (isinstance(x, type(self._max)) and x.precision == self.p):
            return False
        elif gmp.is_nan(x) or gmp.is_infinite(x):
            return True
        # out of range values, and subnormals with too many bits, change when rounded
        with self.context():
            return gmp.mul_2exp(x, 0) == x

    def trunc(self, f):
        # int() on an mpfr rounds in the current rounding mode
        with self.context():
            return int(gmp.trunc(f))

    def max(self):
        return self._max

    def min(self):
        return self._min

    def denorm_min(self):
        return self._denorm_min

    def infinity(self):
        with self.context():
            return gmp.inf(1)

    def quiet_nan(self):
        with self.context():
            return gmp.nan()

    def signbit(self, f):
        return gmp.is_signed(f)

    def copysign(self, f, s):
        with self.context():
            return gmp.copy_sign(f, s)

    def fpclassify(self, f):
        if gmp.is_nan(f):
            return FP.NAN
        elif gmp.is_infinite(f):
            return FP.INFINITE
        else:
            return self._classify_finite(f, self._min)

    def ilogb(self, f):
        if gmp.is_nan(f):
            return ILOGBNAN
        elif gmp.is_infinite(f):
            return INT_MAX
        elif gmp.is_zero(f):
            return ILOGB0
        else:
            return gmp.get_exp(f) - 1

    def scalbn(self, f, exp):
        limit = self.scale_limit()
        exp = max(-limit, min(exp, limit))
        with self.context():
            return gmp.mul_2exp(f, exp)


used_ctxs = {}
def ieee_ctx(es, nbits):
    try:
        return used_ctxs[(es, nbits)]
    except KeyError:
        ctx = MPFRCtx(es=es, nbits=nbits)
        used_ctxs[(es, nbits)] = ctx
        return ctx
