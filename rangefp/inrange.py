"""Range checks between integer and floating-point formats, free of conversion rounding.

The hard part of each check is finding the lowest and highest values of the
source type that are in range for the destination type. This cannot be done by
direct conversion, because of rounding: binary32 has 24 bits of precision, so
float32(2**31 - 1) rounds to 2**31, just outside int32's range.

Instead the extremes of both types are decomposed into digits of the floating-point
radix, compared exactly, and the tighter bound of each pair is converted back to
the source type, where it is always exactly representable. Each bound pair is
computed once per (destination, source) pair and reused, so the check itself is
two ordinary comparisons in the source type.
"""

import logging

from .core import utils
from .core import classify
from .core import codec
from .core.ops import FP
from .arithmetic import evalctx
from .arithmetic import formats


logger = logging.getLogger(__name__)


# (kind, dst key, src key, strategy) -> (lower, upper), in the source type
_boundaries = {}

def clear_cache():
    """Forget all memoized boundaries."""
    _boundaries.clear()


def _memoized(kind, dst, src, strategy, compute):
    if strategy is None:
        strategy = classify.default_strategy
    else:
        strategy = classify.parse_strategy(strategy)
    key = (kind, dst.key, src.key, strategy)
    try:
        return _boundaries[key]
    except KeyError:
        bounds = compute(dst, src, strategy)
        logger.debug('%s in range of %s: [%s, %s] (%s strategy)',
                     str(src), str(dst), str(bounds[0]), str(bounds[1]), strategy.name.lower())
        _boundaries[key] = bounds
        return bounds


def _float_ctx(x, what):
    ctx = formats.lookup(x)
    utils.require(isinstance(ctx, evalctx.FloatCtx),
                  '{} format must be floating-point, got {}'.format(what, str(ctx)))
    return ctx

def _int_ctx(x, what):
    ctx = formats.lookup(x)
    utils.require(isinstance(ctx, evalctx.IntCtx),
                  '{} format must be an integer format, got {}'.format(what, str(ctx)))
    return ctx

def _source(value, src):
    if src is not None:
        return formats.lookup(src)
    else:
        return formats.infer(value)


# boundary computations

def _float_bounds_for_int(ictx, fctx, strategy):
    """Lowest and highest values of float format fctx in range of integer format ictx."""
    radix = fctx.radix
    capacity = max(fctx.digits, codec.int_capacity(ictx, radix))

    # integer extremes are exact here; converting back to fctx truncates them toward zero
    dimin = codec.int_to_decomposed(ictx.lowest(), radix, capacity)
    dimax = codec.int_to_decomposed(ictx.max(), radix, capacity)
    dfmin = codec.float_to_decomposed(fctx.lowest(), fctx, capacity, strategy)
    dfmax = codec.float_to_decomposed(fctx.max(), fctx, capacity, strategy)

    lower = dimin if dfmin < dimin else dfmin
    upper = dimax if dimax < dfmax else dfmax

    return (codec.decomposed_to_float(lower, fctx, strategy),
            codec.decomposed_to_float(upper, fctx, strategy))

def _int_bounds_for_float(fctx, ictx, strategy):
    """Lowest and highest values of integer format ictx in range of float format fctx."""
    radix = fctx.radix
    capacity = max(fctx.digits, codec.int_capacity(ictx, radix))

    dimin = codec.int_to_decomposed(ictx.lowest(), radix, capacity)
    dimax = codec.int_to_decomposed(ictx.max(), radix, capacity)
    dfmin = codec.float_to_decomposed(fctx.lowest(), fctx, capacity, strategy)
    dfmax = codec.float_to_decomposed(fctx.max(), fctx, capacity, strategy)

    if dimin < dfmin:
        lower = codec.decomposed_to_int(dfmin, ictx)
    else:
        lower = ictx.lowest()
    if dfmax < dimax:
        upper = codec.decomposed_to_int(dfmax, ictx)
    else:
        upper = ictx.max()

    return lower, upper

def _float_bounds_for_float(dctx, sctx, strategy):
    """Lowest and highest values of float format sctx in range of float format dctx."""
    capacity = max(dctx.digits, sctx.digits)

    dmin = codec.float_to_decomposed(dctx.lowest(), dctx, capacity, strategy)
    dmax = codec.float_to_decomposed(dctx.max(), dctx, capacity, strategy)
    smin = codec.float_to_decomposed(sctx.lowest(), sctx, capacity, strategy)
    smax = codec.float_to_decomposed(sctx.max(), sctx, capacity, strategy)

    lower = smin if dmin < smin else dmin
    upper = smax if smax < dmax else dmax

    return (codec.decomposed_to_float(lower, sctx, strategy),
            codec.decomposed_to_float(upper, sctx, strategy))


def boundaries(dst, src, strategy=None):
    """The lowest and highest values of format src that are in range for format dst,
    as a pair of values of src.
    """
    dctx = formats.lookup(dst)
    sctx = formats.lookup(src)

    if isinstance(dctx, evalctx.IntCtx):
        if isinstance(sctx, evalctx.IntCtx):
            return max(dctx.lowest(), sctx.lowest()), min(dctx.max(), sctx.max())
        else:
            return _memoized('float-int', dctx, sctx, strategy, _float_bounds_for_int)
    else:
        if isinstance(sctx, evalctx.IntCtx):
            return _memoized('int-float', dctx, sctx, strategy, _int_bounds_for_float)
        else:
            utils.require(dctx.radix == sctx.radix,
                          'radices must match for floating-point range checks: {} has radix {}, {} has radix {}'
                          .format(str(dctx), dctx.radix, str(sctx), sctx.radix))
            return _memoized('float-float', dctx, sctx, strategy, _float_bounds_for_float)


def _within(value, lower, upper, ctx, strategy):
    # NaN is never in range; signaling decimal NaN would also complain about ordering
    if classify.primitives(ctx, strategy).fpclassify(value) is FP.NAN:
        return False
    with ctx.context():
        return bool(lower <= value and value <= upper)


# range checks

def float_in_int_range(dst, f, src=None, strategy=None):
    """Is the floating-point value f within the range of integer format dst?
    The format of f is inferred for Python and numpy floats; pass src otherwise.
    """
    ictx = _int_ctx(dst, 'destination')
    fctx = _source(f, src)
    utils.require(isinstance(fctx, evalctx.FloatCtx),
                  'source format must be floating-point, got {}'.format(str(fctx)))
    utils.require(fctx.owns(f), '{} is not a value of format {}'.format(repr(f), str(fctx)))

    lower, upper = boundaries(ictx, fctx, strategy=strategy)
    return _within(f, lower, upper, fctx, strategy)


def int_in_float_range(dst, i, src=None, strategy=None):
    """Is the integer value i within the range of floating-point format dst?
    Plain Python ints with no src format are checked exactly, as themselves.
    """
    fctx = _float_ctx(dst, 'destination')
    ictx = _source(i, src)

    if ictx is None:
        utils.require(utils.is_integer_value(i), '{} is not an integer'.format(repr(i)))
        return _exact_int_in_float_range(fctx, int(i), strategy)

    utils.require(isinstance(ictx, evalctx.IntCtx),
                  'source format must be an integer format, got {}'.format(str(ictx)))
    utils.require(ictx.owns(i), '{} is not a value of format {}'.format(repr(i), str(ictx)))

    lower, upper = boundaries(fctx, ictx, strategy=strategy)
    return lower <= int(i) <= upper


def _exact_int_in_float_range(fctx, i, strategy):
    capacity = max(fctx.digits, utils.count_digits(i, fctx.radix))
    di = codec.int_to_decomposed(i, fctx.radix, capacity)
    dfmin = codec.float_to_decomposed(fctx.lowest(), fctx, capacity, strategy)
    dfmax = codec.float_to_decomposed(fctx.max(), fctx, capacity, strategy)
    return not (di < dfmin or dfmax < di)


def float_in_float_range(dst, f, src=None, strategy=None):
    """Is the floating-point value f within the range of floating-point format dst?
    Both formats must have the same radix.
    """
    dctx = _float_ctx(dst, 'destination')
    sctx = _source(f, src)
    utils.require(isinstance(sctx, evalctx.FloatCtx),
                  'source format must be floating-point, got {}'.format(str(sctx)))
    utils.require(sctx.owns(f), '{} is not a value of format {}'.format(repr(f), str(sctx)))

    lower, upper = boundaries(dctx, sctx, strategy=strategy)
    return _within(f, lower, upper, sctx, strategy)


def int_in_int_range(dst, i, src=None):
    """Is the integer value i within the range of integer format dst?"""
    ictx = _int_ctx(dst, 'destination')
    utils.require(utils.is_integer_value(i), '{} is not an integer'.format(repr(i)))
    sctx = _source(i, src)
    if sctx is not None:
        utils.require(sctx.owns(i), '{} is not a value of format {}'.format(repr(i), str(sctx)))
    return ictx.lowest() <= int(i) <= ictx.max()


def in_range(dst, value, src=None, strategy=None):
    """Is value within the range of format dst?

    dst and src can be anything formats.lookup() accepts. If src is not given,
    it is inferred from the value: Python floats are binary64, numpy scalars
    have their own types, and plain ints are exact. Values from gmpy2 or the
    decimal module need an explicit src.
    """
    dctx = formats.lookup(dst)
    sctx = _source(value, src)
    if isinstance(dctx, evalctx.IntCtx):
        if sctx is None or isinstance(sctx, evalctx.IntCtx):
            return int_in_int_range(dctx, value, src=sctx)
        else:
            return float_in_int_range(dctx, value, src=sctx, strategy=strategy)
    else:
        if sctx is None or isinstance(sctx, evalctx.IntCtx):
            return int_in_float_range(dctx, value, src=sctx, strategy=strategy)
        else:
            return float_in_float_range(dctx, value, src=sctx, strategy=strategy)
