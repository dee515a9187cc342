"""Format contexts: descriptions of the numeric types that range checks are computed for,
shared across arithmetics.
"""

import contextlib

from ..core import utils
from ..core.ops import FP


binary16_synonyms = {'binary16', 'float16', 'float16_t', 'half'}
binary32_synonyms = {'binary32', 'float32', 'float32_t', 'single', 'float'}
binary64_synonyms = {'binary64', 'float64', 'float64_t', 'double'}
binary80_synonyms = {'binary80', 'float80', 'extended'}
binary128_synonyms = {'binary128', 'float128', 'float128_t', 'quad', 'quadruple'}
bfloat16_synonyms = {'bfloat16', 'bf16', 'brainfloat'}
longdouble_synonyms = {'longdouble', 'long double'}
native_synonyms = {'native', 'pyfloat', 'python'}

decimal32_synonyms = {'decimal32', 'd32', '_decimal32'}
decimal64_synonyms = {'decimal64', 'd64', '_decimal64'}
decimal128_synonyms = {'decimal128', 'd128', '_decimal128'}

int8_synonyms = {'int8', 'int8_t', 'signed char'}
int16_synonyms = {'int16', 'int16_t', 'short'}
int32_synonyms = {'int32', 'int32_t', 'int'}
int64_synonyms = {'int64', 'int64_t', 'long', 'long long'}
uint8_synonyms = {'uint8', 'uint8_t', 'unsigned char'}
uint16_synonyms = {'uint16', 'uint16_t', 'unsigned short'}
uint32_synonyms = {'uint32', 'uint32_t', 'unsigned', 'unsigned int'}
uint64_synonyms = {'uint64', 'uint64_t', 'unsigned long', 'unsigned long long'}

# character types are not integers for the purpose of range checks
excluded_synonyms = {'bool', 'char', 'wchar_t', 'char8_t', 'char16_t', 'char32_t'}


# IEEE 754 binary formats as (es, nbits); the hidden bit counts toward the precision,
# so binary80 (which stores its integer bit explicitly) is described as (15, 79).
IEEE_esnbits = {}
IEEE_esnbits.update((k, (5, 16)) for k in binary16_synonyms)
IEEE_esnbits.update((k, (8, 32)) for k in binary32_synonyms)
IEEE_esnbits.update((k, (11, 64)) for k in binary64_synonyms)
IEEE_esnbits.update((k, (15, 79)) for k in binary80_synonyms)
IEEE_esnbits.update((k, (15, 128)) for k in binary128_synonyms)
IEEE_esnbits.update((k, (8, 16)) for k in bfloat16_synonyms)

# IEEE 754 decimal interchange formats as (prec, emax)
decimal_precemax = {}
decimal_precemax.update((k, (7, 96)) for k in decimal32_synonyms)
decimal_precemax.update((k, (16, 384)) for k in decimal64_synonyms)
decimal_precemax.update((k, (34, 6144)) for k in decimal128_synonyms)

int_bitssigned = {}
int_bitssigned.update((k, (8, True)) for k in int8_synonyms)
int_bitssigned.update((k, (16, True)) for k in int16_synonyms)
int_bitssigned.update((k, (32, True)) for k in int32_synonyms)
int_bitssigned.update((k, (64, True)) for k in int64_synonyms)
int_bitssigned.update((k, (8, False)) for k in uint8_synonyms)
int_bitssigned.update((k, (16, False)) for k in uint16_synonyms)
int_bitssigned.update((k, (32, False)) for k in uint32_synonyms)
int_bitssigned.update((k, (64, False)) for k in uint64_synonyms)


class FormatCtx(object):
    """Generic context describing a numeric format."""

    name = 'format'

    @property
    def key(self):
        """Identity of the format; contexts with the same key describe the same type."""
        return (type(self).__name__, self.name)

    def __eq__(self, other):
        return isinstance(other, FormatCtx) and self.key == other.key

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash(self.key)

    def __repr__(self):
        return '{}(name={})'.format(type(self).__name__, repr(self.name))

    def __str__(self):
        return self.name


class FloatCtx(FormatCtx):
    """Context for a floating-point format with a fixed radix and precision.

    The limits follow C's numeric_limits: the smallest normal number is
    radix ** (min_exponent - 1), and every finite number is less than
    radix ** max_exponent in magnitude. Concrete contexts say how to build
    values of the format, how to do arithmetic on them (inside context()),
    and may provide library implementations of the classification primitives.
    """

    name = 'float'
    radix = 2
    digits = 53
    min_exponent = -1021
    max_exponent = 1024
    has_infinity = True
    has_quiet_nan = True
    # does this format come with library implementations of signbit, ilogb, etc.?
    has_platform = True

    # values

    def cast(self, x):
        """Convert x (usually a small int) into a value of this format."""
        raise NotImplementedError()

    def owns(self, x):
        """Is x a value of this format?"""
        raise NotImplementedError()

    def context(self):
        """Context manager for arithmetic on values of this format."""
        return contextlib.nullcontext()

    def max(self):
        """Largest finite value."""
        raise NotImplementedError()

    def lowest(self):
        """Most negative finite value."""
        return self.negate(self.max())

    def min(self):
        """Smallest positive normal value."""
        raise NotImplementedError()

    def denorm_min(self):
        """Smallest positive subnormal value."""
        raise NotImplementedError()

    def negate(self, f):
        """Exact sign flip, including for zeros."""
        with self.context():
            return -f

    def trunc(self, f):
        """The integer part of the finite value f, as a Python int."""
        return int(f)

    def zero(self, negative=False):
        z = self.cast(0)
        if negative:
            return self.negate(z)
        else:
            return z

    def infinity(self):
        raise utils.RepresentabilityError('{} has no infinity'.format(self.name))

    def quiet_nan(self):
        raise utils.RepresentabilityError('{} has no quiet NaN'.format(self.name))

    # platform primitives

    def signbit(self, f):
        raise NotImplementedError()

    def copysign(self, f, s):
        raise NotImplementedError()

    def fpclassify(self, f):
        raise NotImplementedError()

    def ilogb(self, f):
        raise NotImplementedError()

    def scalbn(self, f, exp):
        raise NotImplementedError()

    def _classify_finite(self, f, tiny):
        """Shared tail of fpclassify, once NaN and infinity are ruled out."""
        if f == 0:
            return FP.ZERO
        elif -tiny < f < tiny:
            return FP.SUBNORMAL
        else:
            return FP.NORMAL

    def scale_limit(self):
        """Scaling by more than this many places in either direction always overflows
        or underflows, so library scaling functions can be clamped to it.
        """
        return self.max_exponent - self.min_exponent + self.digits + 1


class IntCtx(FormatCtx):
    """Context for a fixed-width integer format, signed (two's complement) or unsigned."""

    bits = 32
    signed = True

    def __init__(self, bits=None, signed=None):
        if bits is not None:
            self.bits = bits
        if signed is not None:
            self.signed = signed
        utils.require(isinstance(self.bits, int) and self.bits > 0,
                      'integer width must be positive, got {}'.format(repr(self.bits)))

        if self.signed:
            self._lowest = -(1 << (self.bits - 1))
            self._max = (1 << (self.bits - 1)) - 1
            self.name = 'int{:d}'.format(self.bits)
        else:
            self._lowest = 0
            self._max = (1 << self.bits) - 1
            self.name = 'uint{:d}'.format(self.bits)

    def lowest(self):
        return self._lowest

    def max(self):
        return self._max

    def owns(self, x):
        return utils.is_integer_value(x) and self._lowest <= int(x) <= self._max


used_ints = {}
def int_ctx(bits, signed=True):
    try:
        return used_ints[(bits, signed)]
    except KeyError:
        ctx = IntCtx(bits=bits, signed=signed)
        used_ints[(bits, signed)] = ctx
        return ctx


def parse_int_name(name):
    """Decipher int<N> or uint<N> for any width N, or one of the usual C names."""
    s = str(name).strip().lower()
    if s in int_bitssigned:
        return int_bitssigned[s]
    for prefix, signed in (('uint', False), ('int', True)):
        if s.startswith(prefix):
            bits = s[len(prefix):]
            if bits.endswith('_t'):
                bits = bits[:-2]
            if bits.isdigit() and int(bits) > 0:
                return int(bits), signed
    return None
