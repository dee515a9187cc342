"""Decimal (radix 10) floating-point formats, using the decimal module.
"""

import decimal
from decimal import Decimal

from ..core.ops import FP, INT_MAX, ILOGB0, ILOGBNAN
from . import evalctx


class DecimalCtx(evalctx.FloatCtx):
    """Context for a decimal format with prec significant digits and largest
    adjusted exponent emax, like the IEEE 754 decimal interchange formats.
    """

    prec = 16
    emax = 384

    def __init__(self, prec=None, emax=None):
        if prec is not None:
            self.prec = prec
        if emax is not None:
            self.emax = emax
        if self.prec < 1 or self.emax < 1:
            raise ValueError('unsupported decimal format prec={}, emax={}'
                             .format(repr(self.prec), repr(self.emax)))

        self.name = 'decimal({:d},{:d})'.format(self.prec, self.emax)
        self.emin = 1 - self.emax
        self.radix = 10
        self.digits = self.prec
        self.min_exponent = self.emin + 1
        self.max_exponent = self.emax + 1

        self._context = decimal.Context(
            prec=self.prec,
            rounding=decimal.ROUND_HALF_EVEN,
            Emin=self.emin,
            Emax=self.emax,
            capitals=1,
            clamp=0,
            flags=[],
            traps=[],
        )

        self._max = Decimal((0, (9,) * self.prec, self.emax - self.prec + 1))
        self._min = Decimal((0, (1,), self.emin))
        self._denorm_min = Decimal((0, (1,), self.emin - self.prec + 1))

    @property
    def key(self):
        return (type(self).__name__, self.prec, self.emax)

    def __repr__(self):
        return '{}(prec={}, emax={})'.format(type(self).__name__, repr(self.prec), repr(self.emax))

    def context(self):
        return decimal.localcontext(self._context)

    def cast(self, x):
        return self._context.create_decimal(x)

    def owns(self, x):
        if not isinstance(x, Decimal):
            return False
        elif x.is_nan() or x.is_infinite():
            return True
        else:
            return self._context.plus(x) == x

    def negate(self, f):
        # unary minus rounds, and turns -0 into +0
        return f.copy_negate()

    def zero(self, negative=False):
        if negative:
            return Decimal('-0')
        else:
            return Decimal('0')

    def max(self):
        return self._max

    def min(self):
        return self._min

    def denorm_min(self):
        return self._denorm_min

    def infinity(self):
        return Decimal('Infinity')

    def quiet_nan(self):
        return Decimal('NaN')

    def signbit(self, f):
        return f.is_signed()

    def copysign(self, f, s):
        return f.copy_sign(s)

    def fpclassify(self, f):
        if f.is_nan():
            return FP.NAN
        elif f.is_infinite():
            return FP.INFINITE
        elif f.is_zero():
            return FP.ZERO
        elif f.is_subnormal(context=self._context):
            return FP.SUBNORMAL
        else:
            return FP.NORMAL

    def ilogb(self, f):
        if f.is_nan():
            return ILOGBNAN
        elif f.is_infinite():
            return INT_MAX
        elif f.is_zero():
            return ILOGB0
        else:
            return f.adjusted()

    def scalbn(self, f, exp):
        limit = self.scale_limit()
        exp = max(-limit, min(exp, limit))
        return f.scaleb(exp, context=self._context)


used_ctxs = {}
def decimal_ctx(prec, emax):
    try:
        return used_ctxs[(prec, emax)]
    except KeyError:
        ctx = DecimalCtx(prec=prec, emax=emax)
        used_ctxs[(prec, emax)] = ctx
        return ctx
