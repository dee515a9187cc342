"""Finding the format context for a type name, a Python or numpy type, or a value."""

import numpy as np

from ..core import utils
from . import evalctx
from . import native
from . import np as npfmt
from . import mpfr
from . import decnum


def lookup(x):
    """Resolve x to a format context. x can be a context, a type name such as
    'binary32' or 'uint16', a tuple ('float', es, nbits), ('decimal', prec, emax),
    ('int', bits) or ('uint', bits), a numpy type or dtype, or the builtin float type.
    """
    if isinstance(x, evalctx.FormatCtx):
        return x

    elif x is float:
        return native.native_ctx

    elif x is int or x is bool:
        raise ValueError('{} has no fixed width; use a sized integer format such as int64'
                         .format(repr(x)))

    elif isinstance(x, tuple):
        try:
            kind = str(x[0]).strip().lower()
            if kind == 'float':
                return mpfr.ieee_ctx(int(x[1]), int(x[2]))
            elif kind == 'decimal':
                return decnum.decimal_ctx(int(x[1]), int(x[2]))
            elif kind == 'int':
                return evalctx.int_ctx(int(x[1]), signed=True)
            elif kind == 'uint':
                return evalctx.int_ctx(int(x[1]), signed=False)
        except (IndexError, TypeError, ValueError) as exn:
            raise ValueError('unsupported numeric format {}'.format(repr(x))) from exn
        raise ValueError('unsupported numeric format {}'.format(repr(x)))

    elif isinstance(x, str):
        s = x.strip().lower()
        if s in evalctx.excluded_synonyms:
            raise ValueError('{} is neither an integer nor a floating-point format'.format(repr(x)))
        elif s in evalctx.native_synonyms:
            return native.native_ctx
        elif s in npfmt.np_precs:
            return npfmt.np_ctx(npfmt.np_precs[s])
        elif s in evalctx.IEEE_esnbits:
            return mpfr.ieee_ctx(*evalctx.IEEE_esnbits[s])
        elif s in evalctx.decimal_precemax:
            return decnum.decimal_ctx(*evalctx.decimal_precemax[s])

        bitssigned = evalctx.parse_int_name(s)
        if bitssigned is not None:
            return evalctx.int_ctx(*bitssigned)

        raise ValueError('unknown numeric format {}'.format(repr(x)))

    try:
        t = np.dtype(x).type
    except TypeError as exn:
        raise ValueError('unknown numeric format {}'.format(repr(x))) from exn

    if issubclass(t, np.floating):
        return npfmt.np_ctx(t)
    elif issubclass(t, np.integer):
        return npfmt.np_int_ctx(t)
    else:
        raise ValueError('{} is neither an integer nor a floating-point format'.format(repr(x)))


def infer(value):
    """The format of value, for values that carry their own type.
    Returns None for plain Python ints, which are exact and have no width.
    Raises PreconditionError when the format cannot be determined.
    """
    if isinstance(value, (bool, np.bool_)):
        raise utils.PreconditionError('booleans are not numbers for range checks: {}'.format(repr(value)))
    elif type(value) is float:
        return native.native_ctx
    elif isinstance(value, np.floating):
        return npfmt.np_ctx(type(value))
    elif isinstance(value, np.integer):
        return npfmt.np_int_ctx(type(value))
    elif isinstance(value, int):
        return None
    else:
        raise utils.PreconditionError('cannot infer the format of {} (a {}); pass it explicitly as src'
                                      .format(repr(value), type(value).__name__))
