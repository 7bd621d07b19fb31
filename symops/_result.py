from __future__ import annotations
from typing import Generic, TypeVar


_T = TypeVar('_T')


__all__ = ('Result',)


class Result(Generic[_T]):
    """
    The outcome of an operation which can fail without raising

    Args:
        ok: True if ok, False if failed
        value: the value returned by the operation
        info: an error message if the operation failed
        error: the exception class corresponding to the failure. It is
            used by :meth:`unwrap`

    Example
    -------

    .. code::

        from symops import checkBreakpoints

        if result := checkBreakpoints([0, 50, 100], [0, 100, 300]):
            curve = result.value
        else:
            print(result.info)

        # or raise the corresponding error on failure
        curve = checkBreakpoints(xs, ys).unwrap()

    """
    __slots__ = ('ok', '_value', 'info', 'error')

    def __init__(self, ok: bool, value: _T | None = None, info: str = '',
                 error: type[Exception] = ValueError):
        self.ok: bool = ok
        self._value: _T | None = value
        self.info: str = info
        self.error = error

    @property
    def value(self) -> _T:
        if not self.ok:
            raise ValueError(f"Cannot access the value of a failed result ({self.info})")
        assert self._value is not None
        return self._value

    def unwrap(self) -> _T:
        """The value, raising this result's error if the operation failed"""
        if not self.ok:
            raise self.error(self.info)
        return self.value

    def __bool__(self) -> bool:
        return self.ok

    @property
    def failed(self) -> bool:
        """True if operation failed"""
        return not self.ok

    def __repr__(self):
        if self.ok:
            return f"Ok(value={self._value})"
        return f'Fail(error={self.error.__name__}, info="{self.info}")'

    @classmethod
    def Fail(cls, info: str, error: type[Exception] = ValueError) -> Result:
        """Create a Result object for a failed operation."""
        if not isinstance(info, str):
            raise TypeError(f"The info parameter should be a str, got {info}")
        return cls(False, value=None, info=info, error=error)

    @classmethod
    def Ok(cls, value: _T | None = None) -> Result:
        """Create a Result object for a successful operation."""
        return cls(True, value=value)
