"""Exact classification of floating-point values: category, sign bit and radix exponent.

The five primitives (signbit, copysign, fpclassify, ilogb, scalbn) come in two
strategies. The platform strategy forwards to the format's own library functions
(math, numpy, gmpy2, decimal). The portable strategy uses nothing but comparisons
and arithmetic against the format's limits, so it works for any format that can
describe itself, library or no library. The two must agree on everything except
the sign of NaN.
"""

import os

from .ops import FP, Strategy, INT_MAX, ILOGB0, ILOGBNAN, parse_strategy


default_strategy = parse_strategy(os.environ.get('RANGEFP_STRATEGY', 'platform'))


def resolve_strategy(ctx, strategy=None):
    """Pick the strategy actually used for ctx: the requested one (or the default),
    unless the format has no library primitives to forward to.
    """
    if strategy is None:
        strategy = default_strategy
    else:
        strategy = parse_strategy(strategy)
    if strategy is Strategy.PLATFORM and not ctx.has_platform:
        return Strategy.PORTABLE
    return strategy


class PlatformPrimitives(object):
    """Primitives forwarded to the format's library."""

    strategy = Strategy.PLATFORM

    def __init__(self, ctx):
        self.ctx = ctx

    def signbit(self, f):
        return bool(self.ctx.signbit(f))

    def copysign(self, f, s):
        return self.ctx.copysign(f, s)

    def fpclassify(self, f):
        return self.ctx.fpclassify(f)

    def ilogb(self, f):
        return self.ctx.ilogb(f)

    def scalbn(self, f, exp):
        return self.ctx.scalbn(f, exp)


class PortablePrimitives(object):
    """Primitives computed from comparisons and arithmetic in the format itself.
    Slow (the exponent loops take one step per power of the radix) but
    independent of any library support.
    """

    strategy = Strategy.PORTABLE

    def __init__(self, ctx):
        self.ctx = ctx

    def _isfinite(self, f):
        return self.ctx.lowest() <= f <= self.ctx.max()

    def signbit(self, f):
        with self.ctx.context():
            if f < 0:
                return True
            elif f == 0:
                # the only thing that tells the zeros apart is how they print
                return str(f).lstrip().startswith('-')
            else:
                # positive, or NaN
                return False

    def copysign(self, f, s):
        if self.signbit(f) == self.signbit(s):
            return f
        else:
            return self.ctx.negate(f)

    def fpclassify(self, f):
        ctx = self.ctx
        with ctx.context():
            tiny = ctx.min()
            if f == 0:
                return FP.ZERO
            elif f != f:
                return FP.NAN
            elif ctx.negate(tiny) < f < tiny:
                return FP.SUBNORMAL
            elif self._isfinite(f):
                return FP.NORMAL
            else:
                return FP.INFINITE

    def ilogb(self, f):
        ctx = self.ctx
        with ctx.context():
            if f == 0:
                return ILOGB0
            elif f != f:
                return ILOGBNAN
            elif not self._isfinite(f):
                return INT_MAX

            if f < 0:
                f = ctx.negate(f)

            one = ctx.cast(1)
            radix = ctx.cast(ctx.radix)

            exp = 0
            while f < one:
                f = f * radix
                exp -= 1
            while f >= radix:
                f = f / radix
                exp += 1

            return exp

    def scalbn(self, f, exp):
        ctx = self.ctx
        with ctx.context():
            if f == 0 or f != f or not self._isfinite(f):
                return f

            limit = ctx.scale_limit()
            exp = max(-limit, min(exp, limit))
            radix = ctx.cast(ctx.radix)

            while exp < 0:
                f = f / radix
                exp += 1
            while exp > 0:
                f = f * radix
                exp -= 1

            return f


def primitives(ctx, strategy=None):
    """The classification primitives for format ctx."""
    if resolve_strategy(ctx, strategy) is Strategy.PLATFORM:
        return PlatformPrimitives(ctx)
    else:
        return PortablePrimitives(ctx)


def classify(f, ctx, strategy=None):
    """Classify the floating-point value f of format ctx.
    Returns (category, negative, exp), where for normal and subnormal values
    ctx.radix ** exp <= abs(f) < ctx.radix ** (exp + 1).
    """
    prims = primitives(ctx, strategy)
    return prims.fpclassify(f), prims.signbit(f), prims.ilogb(f)
