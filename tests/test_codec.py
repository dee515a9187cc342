"""Tests for conversions between values of the supported formats and decomposed form."""

from decimal import Decimal

import numpy as np
import pytest
from hypothesis import given
from hypothesis import strategies as st

import rangefp
from rangefp.core import codec
from rangefp.core import utils
from rangefp.core.decomposed import Decomposed
from rangefp.core.ops import FP
from rangefp.core.utils import PreconditionError, RepresentabilityError
from rangefp.arithmetic.native import NativeCtx

import support


class PlainCtx(NativeCtx):
    """Python floats, pretending they have neither infinities nor NaN."""

    name = 'plain'
    has_infinity = False
    has_quiet_nan = False


def round_trip(f, ctx, strategy=None, capacity=None):
    x = codec.float_to_decomposed(f, ctx, capacity=capacity, strategy=strategy)
    return codec.decomposed_to_float(x, ctx, strategy=strategy)


# ---------------------------------------------------------------------------
# Floating-point round trips
# ---------------------------------------------------------------------------

@pytest.mark.parametrize('ctx', support.FLOAT_FORMATS, ids=str)
class TestFloatRoundTrip:

    def test_special_values(self, ctx, strategy):
        for f in support.special_values(ctx):
            back = round_trip(f, ctx, strategy)
            assert ctx.owns(back)
            assert support.same_value(back, f, ctx)

    @given(data=st.data())
    def test_finite_values(self, ctx, data):
        f = data.draw(support.finite_values(ctx))
        back = round_trip(f, ctx)
        assert ctx.owns(back)
        assert support.same_value(back, f, ctx)

    @given(data=st.data())
    def test_extra_capacity(self, ctx, data):
        f = data.draw(support.finite_values(ctx))
        x = codec.float_to_decomposed(f, ctx, capacity=ctx.digits + 7)
        assert x.capacity == ctx.digits + 7
        assert x.digits[ctx.digits:] == (0,) * 7
        assert support.same_value(codec.decomposed_to_float(x, ctx), f, ctx)


class TestDecomposition:

    def test_binary32(self):
        x = codec.float_to_decomposed(np.float32(-6.5), support.binary32)
        assert x.category is FP.NORMAL
        assert x.negative
        assert x.exp == 2
        assert x.capacity == 24
        assert x.digits[:5] == (1, 1, 0, 1, 0)

    def test_subnormal_keeps_own_exponent(self, strategy):
        x = codec.float_to_decomposed(np.float32(5 * 2.0 ** -149), support.binary32, strategy=strategy)
        assert x.category is FP.SUBNORMAL
        assert x.exp == -147
        assert x.digits[:4] == (1, 0, 1, 0)

    def test_decimal(self, strategy):
        x = codec.float_to_decomposed(Decimal('-12.5'), support.decimal32, strategy=strategy)
        assert x.radix == 10
        assert x.negative
        assert x.exp == 1
        assert x.digits == (1, 2, 5, 0, 0, 0, 0)

    def test_emulated(self):
        ctx = rangefp.ieee_ctx(11, 64)
        x = codec.float_to_decomposed(ctx.cast(0.75), ctx)
        assert x.exp == -1
        assert x.digits[:3] == (1, 1, 0)

    @pytest.mark.parametrize('es, nbits', [(5, 16), (15, 128)])
    def test_emulated_digits_truncate(self, es, nbits):
        ctx = rangefp.ieee_ctx(es, nbits)
        x = codec.float_to_decomposed(ctx.cast(3), ctx)
        assert x.exp == 1
        assert x.digits[:3] == (1, 1, 0)
        y = codec.float_to_decomposed(ctx.cast(-1.5), ctx)
        assert y.exp == 0
        assert y.digits[:3] == (1, 1, 0)
        assert codec.decomposed_to_float(y, ctx) == ctx.cast(-1.5)

    def test_truncated_to_capacity(self):
        f = np.float32(1.0) + np.finfo(np.float32).eps
        x = codec.float_to_decomposed(f, support.binary32, capacity=8)
        assert x.digits == (1, 0, 0, 0, 0, 0, 0, 0)
        assert codec.decomposed_to_float(x, support.binary32) == np.float32(1.0)

    def test_value_not_of_format(self):
        with pytest.raises(PreconditionError):
            codec.float_to_decomposed(1.0, support.binary32)
        with pytest.raises(PreconditionError):
            codec.float_to_decomposed(np.float64(1.0), support.binary32)


class TestReconstruction:

    def test_radix_mismatch(self):
        x = codec.float_to_decomposed(Decimal('1.5'), support.decimal32)
        with pytest.raises(PreconditionError):
            codec.decomposed_to_float(x, support.binary32)

    def test_saturates_to_infinity(self, strategy):
        big = Decomposed(category=FP.NORMAL, exp=200, digits=(1,), capacity=24)
        assert codec.decomposed_to_float(big, support.binary32, strategy) == np.float32(np.inf)
        neg = Decomposed(big, negative=True)
        assert codec.decomposed_to_float(neg, support.binary32, strategy) == np.float32(-np.inf)

    def test_extra_digits_truncated(self):
        x = codec.int_to_decomposed(2 ** 24 + 1, 2, 30)
        assert codec.decomposed_to_float(x, support.binary32) == np.float32(2 ** 24)
        x = codec.int_to_decomposed(-(2 ** 25 - 1), 2, 30)
        assert codec.decomposed_to_float(x, support.binary32) == np.float32(-(2 ** 25 - 2))

    def test_no_infinity(self):
        ctx = PlainCtx()
        inf = codec.float_to_decomposed(float('inf'), support.native)
        with pytest.raises(RepresentabilityError):
            codec.decomposed_to_float(inf, ctx)
        big = Decomposed(category=FP.NORMAL, exp=1024, digits=(1,), capacity=53)
        with pytest.raises(RepresentabilityError):
            codec.decomposed_to_float(big, ctx)
        assert codec.decomposed_to_float(Decomposed(big, exp=1023), ctx) == 2.0 ** 1023

    def test_no_nan(self):
        nan = codec.float_to_decomposed(float('nan'), support.native)
        with pytest.raises(RepresentabilityError):
            codec.decomposed_to_float(nan, PlainCtx())


# ---------------------------------------------------------------------------
# Integers
# ---------------------------------------------------------------------------

class TestIntDecomposition:

    def test_zero(self):
        x = codec.int_to_decomposed(0, 2, 8)
        assert x.is_zero()
        assert not x.negative
        assert x.exp == 0

    def test_negative(self):
        x = codec.int_to_decomposed(-6, 2, 8)
        assert x.category is FP.NORMAL
        assert x.negative
        assert x.exp == 2
        assert x.digits == (1, 1, 0, 0, 0, 0, 0, 0)

    def test_truncated(self):
        x = codec.int_to_decomposed(1234567, 10, 4)
        assert x.exp == 6
        assert x.digits == (1, 2, 3, 4)
        assert codec.decomposed_to_int(x) == 1234000

    def test_numpy_integers(self):
        x = codec.int_to_decomposed(np.int32(-2 ** 31), 2, 32)
        assert x.exp == 31
        assert x.digits == (1,) + (0,) * 31

    @pytest.mark.parametrize('value', [True, np.bool_(False), 1.0, '1'])
    def test_not_integers(self, value):
        with pytest.raises(PreconditionError):
            codec.int_to_decomposed(value, 2, 8)

    @given(i=st.integers(-2 ** 80, 2 ** 80), radix=st.sampled_from([2, 3, 10, 16]),
           capacity=st.integers(1, 40))
    def test_truncation_error(self, i, radix, capacity):
        x = codec.int_to_decomposed(i, radix, capacity)
        t = codec.decomposed_to_int(x)
        assert abs(t) <= abs(i)
        assert t == 0 or (t < 0) == (i < 0)
        if x.exp < capacity:
            assert t == i
        else:
            assert abs(i - t) < radix ** (x.exp - capacity + 1)


class TestIntReconstruction:

    @pytest.mark.parametrize('f, expected', [
        (np.float32(-2.75), -2),
        (np.float32(0.5), 0),
        (np.float32(-0.0), 0),
        (np.float32(2 ** 31), 2 ** 31),
        (np.finfo(np.float32).max, 2 ** 128 - 2 ** 104),
    ])
    def test_truncates_toward_zero(self, f, expected):
        assert codec.decomposed_to_int(codec.float_to_decomposed(f, support.binary32)) == expected

    def test_decimal(self):
        x = codec.float_to_decomposed(Decimal('1E+3'), support.decimal32)
        assert codec.decomposed_to_int(x) == 1000

    def test_saturates(self):
        int32 = rangefp.int_ctx(32)
        f32 = support.binary32
        assert codec.decomposed_to_int(codec.float_to_decomposed(f32.max(), f32), int32) == 2 ** 31 - 1
        assert codec.decomposed_to_int(codec.float_to_decomposed(f32.lowest(), f32), int32) == -2 ** 31
        assert codec.decomposed_to_int(codec.float_to_decomposed(np.float32(-np.inf), f32), int32) == -2 ** 31
        uint8 = rangefp.int_ctx(8, signed=False)
        assert codec.decomposed_to_int(codec.float_to_decomposed(np.float32(-3.0), f32), uint8) == 0

    def test_not_representable(self):
        f32 = support.binary32
        with pytest.raises(RepresentabilityError):
            codec.decomposed_to_int(codec.float_to_decomposed(np.float32(np.inf), f32))
        with pytest.raises(RepresentabilityError):
            codec.decomposed_to_int(codec.float_to_decomposed(np.float32(np.nan), f32), rangefp.int_ctx(32))


class TestDigitCounts:

    @pytest.mark.parametrize('i, radix, expected', [
        (0, 10, 1),
        (9, 10, 1),
        (-10, 10, 2),
        (-255, 16, 2),
        (256, 16, 3),
        (-2 ** 31, 2, 32),
    ])
    def test_count_digits(self, i, radix, expected):
        assert utils.count_digits(i, radix) == expected

    def test_digits_of(self):
        assert utils.digits_of(6, 2) == [0, 1, 1]
        assert utils.digits_of(0, 10) == [0]

    @pytest.mark.parametrize('name, radix, expected', [
        ('int32', 2, 32),
        ('uint32', 2, 32),
        ('int8', 10, 3),
        ('uint64', 10, 20),
        ('int64', 16, 16),
    ])
    def test_int_capacity(self, name, radix, expected):
        assert codec.int_capacity(rangefp.lookup(name), radix) == expected
