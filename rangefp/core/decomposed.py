"""Decomposed representation of numbers (in any radix), for exact comparison"""

import typing

from . import utils
from .ops import FP


class Decomposed(object):
    """A number split into category, sign, radix exponent and a fixed number of
    radix digits, most significant first.

    For normal and subnormal values the magnitude is exactly
        sum(digits[d] * radix ** (exp - d) for d in range(capacity))
    with digits[0] != 0. Zeros, infinities and NaN are described by the category
    and sign alone; their exponent is a placeholder and their digits are zero.
    """

    _category : FP = FP.ZERO
    _negative : bool = False
    _exp : int = 0
    _digits : typing.Tuple[int, ...] = (0,)
    _radix : int = 2

    # the internal state is not directly visible: expose it with properties

    @property
    def category(self):
        """One of FP.ZERO, FP.SUBNORMAL, FP.NORMAL, FP.INFINITE, FP.NAN."""
        return self._category

    @property
    def negative(self):
        """The sign bit. Meaningful for zeros; not consulted for NaN."""
        return self._negative

    @property
    def exp(self):
        """Radix exponent of the leading digit."""
        return self._exp

    @property
    def digits(self):
        """Tuple of capacity digits in [0, radix), most significant first."""
        return self._digits

    @property
    def radix(self):
        return self._radix

    @property
    def capacity(self):
        """Number of digits stored."""
        return len(self._digits)

    @property
    def isnan(self):
        return self._category is FP.NAN

    @property
    def isinf(self):
        return self._category is FP.INFINITE

    def is_zero(self):
        return self._category is FP.ZERO

    def is_pos(self):
        return not (self._negative or self.isnan or self.is_zero())

    def is_neg(self):
        return self._negative and not (self.isnan or self.is_zero())

    def is_posinf(self):
        return self.isinf and not self._negative

    def is_neginf(self):
        return self.isinf and self._negative

    def __init__(self,
                 x=None,
                 category=None,
                 negative=None,
                 exp=None,
                 digits=None,
                 radix=None,
                 capacity=None,
    ):
        """Create a new decomposed number. The first argument, "x", is a base number
        to clone and update, otherwise the default values will be used.
        digits may be shorter than capacity, in which case it is zero-filled;
        if capacity is not given, it is the length of digits.
        """
        if x is not None:
            category = x._category if category is None else category
            negative = x._negative if negative is None else negative
            exp = x._exp if exp is None else exp
            radix = x._radix if radix is None else radix
            if digits is None:
                digits = x._digits
            if capacity is None:
                capacity = len(x._digits)

        if category is None:
            category = type(self)._category
        if negative is None:
            negative = type(self)._negative
        if exp is None:
            exp = type(self)._exp
        if radix is None:
            radix = type(self)._radix
        if digits is None:
            digits = ()
        if capacity is None:
            capacity = max(len(digits), 1)

        utils.require(isinstance(radix, int) and radix >= 2,
                      'radix must be an integer >= 2, got {}'.format(repr(radix)))
        utils.require(isinstance(capacity, int) and capacity >= 1,
                      'capacity must be a positive integer, got {}'.format(repr(capacity)))

        digits = tuple(int(d) for d in digits[:capacity])
        for d in digits:
            utils.require(0 <= d < radix, 'digit {} out of range for radix {}'.format(d, radix))
        digits = digits + (0,) * (capacity - len(digits))

        self._category = FP(category)
        self._negative = bool(negative)
        self._exp = int(exp)
        self._radix = radix
        if self._category is FP.NORMAL or self._category is FP.SUBNORMAL:
            self._digits = digits
        else:
            self._digits = (0,) * capacity

    def __repr__(self):
        return '{}(category={}, negative={}, exp={}, digits={}, radix={})'.format(
            type(self).__name__, str(self._category), repr(self._negative), repr(self._exp),
            repr(self._digits), repr(self._radix),
        )

    def __str__(self):
        sign = '-' if self._negative else '+'
        if self.isnan:
            return sign + 'nan'
        elif self.isinf:
            return sign + 'inf'
        elif self.is_zero():
            return sign + '0'
        else:
            digits = list(self._digits)
            while len(digits) > 1 and digits[-1] == 0:
                digits.pop()
            # digits above 9 need separators
            sep = '' if self._radix <= 10 else ':'
            ds = str(digits[0])
            if len(digits) > 1:
                ds += '.' + sep.join(str(d) for d in digits[1:])
            return '{}{} * {:d}**{:d}'.format(sign, ds, self._radix, self._exp)

    def is_identical_to(self, other):
        """Is this value encoded identically to some other value?
        This is a structural property, and is stricter than equality
        (the zeros are equal but not identical, and NaN is identical to itself).
        """
        return (
            self._category is other._category
            and self._negative == other._negative
            and self._exp == other._exp
            and self._digits == other._digits
            and self._radix == other._radix
        )

    def __hash__(self):
        if self.is_zero():
            return hash((FP.ZERO, self._radix, len(self._digits)))
        elif self.isnan or self.isinf:
            return hash((self._category, self._negative, self._radix, len(self._digits)))
        # subnormal and normal values with the same digits are equal
        return hash((self._negative, self._exp, self._digits, self._radix))

    def compareto(self, other):
        """Compare to another decomposed number of the same shape. The ordering returned is:
            -1 iff self < other
             0 iff self = other
             1 iff self > other
          None iff self and other are unordered
        """
        utils.require(isinstance(other, Decomposed), 'cannot compare {} to {}'
                      .format(type(self).__name__, repr(other)))
        utils.require(self._radix == other._radix and len(self._digits) == len(other._digits),
                      'cannot compare decomposed numbers of different shapes: radix {} capacity {} vs. radix {} capacity {}'
                      .format(self._radix, len(self._digits), other._radix, len(other._digits)))

        # deal with special cases
        if self.isnan or other.isnan:
            return None

        if self.isinf or other.isinf:
            if self.is_neginf() and not other.is_neginf():
                return -1
            elif self.is_posinf() and not other.is_posinf():
                return 1
            elif other.is_posinf() and not self.is_posinf():
                return -1
            elif other.is_neginf() and not self.is_neginf():
                return 1
            else:
                return 0

        if self.is_zero() or other.is_zero():
            if self.is_zero() and other.is_zero():
                return 0
            elif self.is_zero():
                return -1 if other.is_pos() else 1
            else:
                return -1 if self.is_neg() else 1

        # both values are subnormal or normal
        if self._negative != other._negative:
            return -1 if self._negative else 1

        # compare magnitudes, then flip for negatives
        if self._exp != other._exp:
            order = -1 if self._exp < other._exp else 1
        elif self._digits != other._digits:
            order = -1 if self._digits < other._digits else 1
        else:
            order = 0

        if self._negative:
            return -order
        else:
            return order

    def __lt__(self, other):
        order = self.compareto(other)
        return order is not None and order < 0

    def __le__(self, other):
        order = self.compareto(other)
        return order is not None and order <= 0

    def __eq__(self, other):
        if not isinstance(other, Decomposed):
            return NotImplemented
        order = self.compareto(other)
        return order is not None and order == 0

    def __ne__(self, other):
        if not isinstance(other, Decomposed):
            return NotImplemented
        order = self.compareto(other)
        return order is None or order != 0

    def __ge__(self, other):
        order = self.compareto(other)
        return order is not None and order >= 0

    def __gt__(self, other):
        order = self.compareto(other)
        return order is not None and order > 0
