"""
NB: this module cannot import anything from symops itself
"""
from __future__ import annotations
import logging as _logging
import functools as _functools
import numbers as _numbers


import typing as _t
if _t.TYPE_CHECKING:
    from fractions import Fraction as F
else:
    from quicktions import Fraction as F


__all__ = (
    'getLogger',
    'F',
    'asF',
    'isIntegral',
    'isRational',
    'time_t',
)


time_t: _t.TypeAlias = _t.Union[int, float, F]


def asF(t: int | float | str | F) -> F:
    """
    Convert ``t`` to a fraction if needed
    """
    if isinstance(t, F):
        return t
    elif isinstance(t, (int, float, str, _numbers.Rational)):
        return F(t)
    else:
        raise TypeError(f"Could not convert {t} to a rational")


def isIntegral(t) -> bool:
    """True if t is an integer (python or numpy), excluding bools"""
    return isinstance(t, _numbers.Integral) and not isinstance(t, bool)


def isRational(t) -> bool:
    """True if t is an exact rational which is not an integer (a Fraction)"""
    return isinstance(t, _numbers.Rational) and not isinstance(t, _numbers.Integral)


@_functools.cache
def getLogger(name: str,
              fmt='[%(name)s:%(filename)s:%(lineno)s:%(funcName)s:%(levelname)s] %(message)s',
              filelog: str = '',
              force=True
              ) -> _logging.Logger:
    """
    Construct a logger

    Args:
        name: the name of the logger
        fmt: the format used
        filelog: if given, logging info is **also** output to this file
        force: set own handlers, even if the logger already exists

    Returns:
        the logger
    """
    logger = _logging.getLogger(name)
    if logger.hasHandlers():
        if not force:
            return logger
        logger.handlers.clear()

    logger.propagate = False
    handler = _logging.StreamHandler()
    formatter = _logging.Formatter(fmt)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    if filelog:
        filehandler = _logging.FileHandler(filelog)
        filehandler.setFormatter(formatter)
        logger.addHandler(filehandler)
    return logger
