"""Command line range checks, boundary reports, and a self-test of the
well-known binary32 / binary64 / int32 / int64 boundary cases.

    python -m rangefp.demo --dst int32 --src binary32 2147483520 2147483648
    python -m rangefp.demo --dst int32 --src binary32 --bounds
    python -m rangefp.demo --selftest
"""

import sys
import logging

import numpy as np

from .core import utils
from .core import codec
from .core.ops import Strategy
from .arithmetic import evalctx
from .arithmetic import formats
from . import inrange


INT32_MIN, INT32_MAX = -(1 << 31), (1 << 31) - 1
INT64_MIN, INT64_MAX = -(1 << 63), (1 << 63) - 1


def parse_value(text, ctx):
    """Read a value of format ctx from the command line. Integers may be
    written in any base Python understands; floats may also be hex floats.
    """
    text = text.strip()
    if ctx is None or isinstance(ctx, evalctx.IntCtx):
        return int(text, 0)
    elif 'x' in text.lower() and ctx.radix == 2:
        return ctx.cast(float.fromhex(text))
    else:
        return ctx.cast(text)


def selftest(strategy=None, verbose=False):
    """Run the standard checks. Returns a list of descriptions of failed checks."""
    failures = []

    def check(cond, desc):
        if verbose:
            print('{:4s} {}'.format('ok' if cond else 'FAIL', desc))
        if not cond:
            failures.append(desc)

    f32 = formats.lookup('binary32')
    f64 = formats.lookup('binary64')
    neg_inf32 = np.float32(-np.inf)
    pos_inf32 = np.float32(np.inf)

    # round trips through decomposed form
    for f in [np.float32(-0.0), np.float32(0.0),
              -f32.denorm_min(), f32.denorm_min(), -f32.min(), f32.min(),
              np.float32(-1.0), np.float32(1.0), f32.lowest(), f32.max()]:
        back = codec.decomposed_to_float(codec.float_to_decomposed(f, f32, strategy=strategy), f32, strategy=strategy)
        check(back == f and np.signbit(back) == np.signbit(f), 'round trip {!r}'.format(f))

    for i in [0, -1, 1, -(f32.radix - 1), f32.radix - 1]:
        back = codec.decomposed_to_float(codec.int_to_decomposed(i, f32.radix, f32.digits), f32, strategy=strategy)
        check(back == i and not (i == 0 and np.signbit(back)), 'integer round trip {!r}'.format(i))

    def in_range(dst, value):
        return inrange.in_range(dst, value, strategy=strategy)

    # the boundaries around int32
    check(not in_range('int32', -np.float32(np.nan)), 'binary32 -nan not in int32')
    check(not in_range('int32', neg_inf32), 'binary32 -inf not in int32')
    check(not in_range('int32', f32.lowest()), 'binary32 lowest not in int32')
    check(not in_range('int32', np.nextafter(np.float32(INT32_MIN), neg_inf32)),
          'binary32 below INT32_MIN not in int32')
    check(in_range('int32', np.float32(INT32_MIN)), 'binary32 INT32_MIN in int32')
    check(in_range('int32', np.float32(0x7fffff80)), 'binary32 0x7fffff80 in int32')
    check(not in_range('int32', np.nextafter(np.float32(0x7fffff80), pos_inf32)),
          'binary32 above 0x7fffff80 not in int32')
    check(not in_range('int32', np.float32(INT32_MAX)), 'binary32 INT32_MAX (rounded) not in int32')
    check(not in_range('int32', f32.max()), 'binary32 max not in int32')
    check(not in_range('int32', pos_inf32), 'binary32 +inf not in int32')
    check(not in_range('int32', np.float32(np.nan)), 'binary32 +nan not in int32')

    check(in_range('int32', np.float64(INT32_MIN)), 'binary64 INT32_MIN in int32')
    check(in_range('int32', np.float64(INT32_MAX)), 'binary64 INT32_MAX in int32')
    check(in_range('binary32', np.int32(INT32_MIN)), 'INT32_MIN in binary32')
    check(in_range('binary32', np.int32(INT32_MAX)), 'INT32_MAX in binary32')
    check(in_range('binary64', np.int32(INT32_MIN)), 'INT32_MIN in binary64')
    check(in_range('binary64', np.int32(INT32_MAX)), 'INT32_MAX in binary64')

    # and around int64
    check(in_range('int64', np.float32(INT64_MIN)), 'binary32 INT64_MIN in int64')
    check(not in_range('int64', np.float32(INT64_MAX)), 'binary32 INT64_MAX (rounded) not in int64')
    check(in_range('binary32', np.int64(INT64_MIN)), 'INT64_MIN in binary32')
    check(in_range('binary32', np.int64(INT64_MAX)), 'INT64_MAX in binary32')
    check(in_range('int64', np.float64(INT64_MIN)), 'binary64 INT64_MIN in int64')
    check(not in_range('int64', np.float64(INT64_MAX)), 'binary64 INT64_MAX (rounded) not in int64')
    check(in_range('binary64', np.int64(INT64_MIN)), 'INT64_MIN in binary64')
    check(in_range('binary64', np.int64(INT64_MAX)), 'INT64_MAX in binary64')

    # between floating-point formats
    flt_max = np.float64(f32.max())
    dbl_eps = np.finfo(np.float64).eps
    check(in_range('binary32', flt_max), 'FLT_MAX in binary32')
    check(not in_range('binary32', f64.max()), 'DBL_MAX not in binary32')
    check(not in_range('binary32', flt_max * (np.float64(1.0) + dbl_eps)),
          'FLT_MAX * (1 + DBL_EPSILON) not in binary32')

    return failures


def report(dst, src, strategy=None):
    lower, upper = inrange.boundaries(dst, src, strategy=strategy)
    print('{} values in range of {}: [{}, {}]'.format(
        str(formats.lookup(src)), str(formats.lookup(dst)), str(lower), str(upper)))


if __name__ == '__main__':
    import argparse

    parser = argparse.ArgumentParser(description='exact range checks between numeric formats')
    parser.add_argument('values', nargs='*',
                        help='values to check, written in the source format')
    parser.add_argument('--dst', type=str, default='int32',
                        help='destination format (default int32)')
    parser.add_argument('--src', type=str, default='binary64',
                        help='source format; "exact" checks integers as themselves (default binary64)')
    parser.add_argument('--bounds', action='store_true',
                        help='print the boundary values of the source format')
    parser.add_argument('--selftest', action='store_true',
                        help='run the built-in checks')
    parser.add_argument('--portable', action='store_true',
                        help='use the portable classification primitives')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='print each check, and debug logging')
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s')

    strategy = Strategy.PORTABLE if args.portable else None

    if args.selftest:
        failures = selftest(strategy=strategy, verbose=args.verbose)
        for desc in failures:
            print('self-test failed: {}'.format(desc), file=sys.stderr)
        if failures:
            sys.exit(1)
        print('self-test passed')

    try:
        if args.src.strip().lower() == 'exact':
            srcctx = None
        else:
            srcctx = formats.lookup(args.src)

        if args.bounds:
            if srcctx is None:
                print('exact integers have no boundaries', file=sys.stderr)
            else:
                report(args.dst, srcctx, strategy=strategy)

        for text in args.values:
            value = parse_value(text, srcctx)
            result = inrange.in_range(args.dst, value, src=srcctx, strategy=strategy)
            print('{}: {}'.format(str(value), 'in range' if result else 'out of range'))

    except (ValueError, utils.RangeFPError) as exn:
        print('error: {}'.format(str(exn)), file=sys.stderr)
        sys.exit(2)
