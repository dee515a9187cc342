from .core import utils, ops, classify, decomposed, codec
from .arithmetic import evalctx, formats, native, np, mpfr, decnum
from . import inrange

Decomposed = decomposed.Decomposed
FP = ops.FP
Strategy = ops.Strategy

RangeFPError = utils.RangeFPError
PreconditionError = utils.PreconditionError
RepresentabilityError = utils.RepresentabilityError

FloatCtx = evalctx.FloatCtx
IntCtx = evalctx.IntCtx
int_ctx = evalctx.int_ctx
np_ctx = np.np_ctx
ieee_ctx = mpfr.ieee_ctx
decimal_ctx = decnum.decimal_ctx
native_ctx = native.native_ctx
lookup = formats.lookup

in_range = inrange.in_range
float_in_int_range = inrange.float_in_int_range
int_in_float_range = inrange.int_in_float_range
float_in_float_range = inrange.float_in_float_range
int_in_int_range = inrange.int_in_int_range
boundaries = inrange.boundaries
clear_cache = inrange.clear_cache
