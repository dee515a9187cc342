"""Formats and hypothesis strategies shared by the test modules."""

from decimal import Decimal

import numpy as np
from hypothesis import strategies as st

import rangefp
from rangefp.core.ops import FP
from rangefp.core.classify import PlatformPrimitives
from rangefp.arithmetic.decnum import DecimalCtx


native = rangefp.native_ctx
binary16 = rangefp.np_ctx(np.float16)
binary32 = rangefp.np_ctx(np.float32)
binary64 = rangefp.np_ctx(np.float64)
longdouble = rangefp.np_ctx(np.longdouble)
mpfr16 = rangefp.ieee_ctx(5, 16)
bfloat16 = rangefp.ieee_ctx(8, 16)
mpfr32 = rangefp.ieee_ctx(8, 32)
decimal32 = rangefp.decimal_ctx(7, 96)

FLOAT_FORMATS = [native, binary16, binary32, binary64, longdouble,
                 mpfr16, bfloat16, mpfr32, decimal32]

# width of the Python floats that are exactly representable in each binary format
_float_widths = {
    native: 64,
    binary16: 16,
    binary32: 32,
    binary64: 64,
    longdouble: 64,
    mpfr16: 16,
    mpfr32: 32,
}


def special_values(ctx):
    """Zeros, limits, small integers and a few subnormals, both signs,
    then the infinities and NaN.
    """
    with ctx.context():
        positive = [ctx.denorm_min(), ctx.denorm_min() * ctx.cast(5), ctx.min(), ctx.max(),
                    ctx.cast(1), ctx.cast(ctx.radix), ctx.cast(3)]
    values = [ctx.zero(), ctx.zero(negative=True)]
    values += positive
    values += [ctx.negate(f) for f in positive]
    values += [ctx.infinity(), ctx.negate(ctx.infinity()), ctx.quiet_nan()]
    return values


def _to_bfloat16(x):
    # clear the low 16 bits of the binary32 encoding
    bits = np.array([x], dtype=np.float32).view(np.uint32) & np.uint32(0xffff0000)
    return float(bits.view(np.float32)[0])


def finite_values(ctx):
    """Strategy generating finite values of ctx, subnormals included."""
    if isinstance(ctx, DecimalCtx):
        return st.builds(
            lambda sign, coeff, exp: ctx.cast(Decimal((sign, tuple(int(c) for c in str(coeff)), exp))),
            st.integers(0, 1),
            st.integers(0, 10 ** ctx.digits - 1),
            st.integers(ctx.min_exponent - ctx.digits, ctx.max_exponent - ctx.digits),
        )
    elif ctx is bfloat16:
        return st.floats(width=32, allow_nan=False, allow_infinity=False).map(_to_bfloat16).map(ctx.cast)
    else:
        return st.floats(width=_float_widths[ctx], allow_nan=False, allow_infinity=False).map(ctx.cast)


def same_value(a, b, ctx):
    """Are a and b the same value of ctx? The zeros are told apart by sign,
    and any NaN is the same as any other.
    """
    prims = PlatformPrimitives(ctx)
    if prims.fpclassify(a) is FP.NAN or prims.fpclassify(b) is FP.NAN:
        return prims.fpclassify(a) is prims.fpclassify(b)
    return bool(a == b) and prims.signbit(a) == prims.signbit(b)
