"""Conversions between the numeric types of the supported formats and
decomposed representation.

Floating-point values convert exactly in both directions (given enough
digits). Integers convert to decomposed form, truncated (never rounded)
to the requested number of digits, and decomposed values convert back
to integers by truncation toward zero.
"""


from . import utils
from . import classify
from .decomposed import Decomposed
from .ops import FP


def _rescale(f, n, ctx, prims):
    """f * radix**n, in steps small enough that radix**step is itself finite."""
    step = max(ctx.max_exponent - 1, 1)
    while n > step:
        f = prims.scalbn(f, step)
        n -= step
    while n < -step:
        f = prims.scalbn(f, -step)
        n += step
    return prims.scalbn(f, n)


def float_to_decomposed(f, ctx, capacity=None, strategy=None):
    """Decompose the floating-point value f of format ctx into capacity digits
    (by default, the precision of the format). Exact if capacity >= ctx.digits.
    """
    utils.require(ctx.owns(f), '{} is not a value of format {}'.format(repr(f), str(ctx)))
    if capacity is None:
        capacity = ctx.digits

    prims = classify.primitives(ctx, strategy)
    category = prims.fpclassify(f)
    negative = prims.signbit(f)
    exp = prims.ilogb(f)

    digits = [0] * capacity
    if category is FP.NORMAL or category is FP.SUBNORMAL:
        with ctx.context():
            # use the magnitude for digit extraction
            if negative:
                f = ctx.negate(f)

            # normalize so that the leading digit is in [1, radix)
            f = _rescale(f, -exp, ctx, prims)

            radix = ctx.cast(ctx.radix)
            for d in range(min(ctx.digits, capacity)):
                digit = ctx.trunc(f)
                digits[d] = digit
                f = f - ctx.cast(digit)
                if f == 0:
                    break
                f = f * radix

    return Decomposed(category=category, negative=negative, exp=exp, digits=digits,
                      radix=ctx.radix, capacity=capacity)


def decomposed_to_float(x, ctx, strategy=None):
    """Reconstruct a value of format ctx from the decomposed number x.
    Digits beyond the precision of the format are ignored (truncated), and
    exponents beyond its range saturate to infinity.
    """
    utils.require(x.radix == ctx.radix, 'cannot convert radix {} digits to {} (radix {})'
                  .format(x.radix, str(ctx), ctx.radix))

    prims = classify.primitives(ctx, strategy)

    if x.is_zero():
        return ctx.zero(negative=x.negative)
    elif x.isnan:
        if not ctx.has_quiet_nan:
            raise utils.RepresentabilityError('{} has no quiet NaN'.format(str(ctx)))
        f = ctx.quiet_nan()
    elif x.isinf or x.exp >= ctx.max_exponent:
        if not ctx.has_infinity:
            raise utils.RepresentabilityError('{} has no infinity to represent {}'
                                              .format(str(ctx), str(x)))
        f = ctx.infinity()
    else:
        with ctx.context():
            f = ctx.cast(0)
            for d in range(min(ctx.digits, x.capacity)):
                f = f + prims.scalbn(ctx.cast(x.digits[d]), -d)
            f = _rescale(f, x.exp, ctx, prims)

    if x.negative:
        f = prims.copysign(f, ctx.cast(-1))

    return f


def int_to_decomposed(i, radix, capacity):
    """Decompose the integer i into capacity radix digits.
    The result is truncated, not rounded, if i needs more than capacity digits.
    """
    utils.require(utils.is_integer_value(i), '{} is not an integer'.format(repr(i)))
    i = int(i)

    if i == 0:
        return Decomposed(category=FP.ZERO, negative=False, exp=0, radix=radix, capacity=capacity)

    # digits of the magnitude, most significant first, dropping any beyond capacity
    digits = utils.digits_of(abs(i), radix)
    digits.reverse()

    return Decomposed(category=FP.NORMAL, negative=(i < 0), exp=len(digits) - 1,
                      digits=digits[:capacity], radix=radix, capacity=capacity)


def decomposed_to_int(x, ictx=None):
    """The integer part of the decomposed number x (truncated toward zero).
    If an integer format ictx is given, the result saturates to its range,
    and infinities saturate to its extremes.
    """
    if x.isnan:
        raise utils.RepresentabilityError('integers cannot represent NaN')
    elif x.isinf:
        if ictx is None:
            raise utils.RepresentabilityError('integers cannot represent {}'.format(str(x)))
        return ictx.lowest() if x.negative else ictx.max()
    elif x.is_zero():
        return 0

    # digits at or above the radix point; nothing if exp < 0
    i = 0
    for d in range(min(x.capacity, x.exp + 1)):
        i = i * x.radix + x.digits[d]
    if x.exp + 1 > x.capacity:
        i *= x.radix ** (x.exp + 1 - x.capacity)

    if x.negative:
        i = -i

    if ictx is not None:
        i = max(ictx.lowest(), min(i, ictx.max()))

    return i


def int_capacity(ictx, radix):
    """Digits needed to represent every value of the integer format ictx exactly."""
    return max(utils.count_digits(ictx.lowest(), radix), utils.count_digits(ictx.max(), radix))
