"""General utilities, such as exception classes."""

import typing

import numpy as np

# rangefp-specific exceptions

class RangeFPError(Exception):
    """Base rangefp error."""

class PreconditionError(RangeFPError):
    """The engine was instantiated or called in a way it does not support,
    such as comparing floating-point formats with different radices.
    """

class RepresentabilityError(RangeFPError):
    """A format cannot represent a value the computation has to produce,
    such as an infinity in a format without infinities.
    """


def require(cond: bool, msg: str) -> None:
    """Raise a PreconditionError with msg unless cond holds."""
    if not cond:
        raise PreconditionError(msg)


# Useful things

def is_integer_value(x) -> bool:
    """Is x an integer in the sense of a C integral type, i.e. an int or numpy integer
    that is not a boolean?
    """
    if isinstance(x, (bool, np.bool_)):
        return False
    return isinstance(x, (int, np.integer))

def count_digits(i: int, radix: int) -> int:
    """Number of radix digits needed to write the magnitude of i. Zero takes one digit."""
    u = abs(int(i))
    ndigits = 1
    while u >= radix:
        ndigits += 1
        u //= radix
    return ndigits

def digits_of(u: int, radix: int) -> typing.List[int]:
    """Digits of the nonnegative integer u, least significant first."""
    digits = [u % radix]
    u //= radix
    while u > 0:
        digits.append(u % radix)
        u //= radix
    return digits
