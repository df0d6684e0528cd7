"""Exception wrappers for AppError.

Most of the library reports failures as ``Err`` values. These exceptions are
for the few places that must fail loudly instead.
"""
from __future__ import annotations

from .types import AppError, ErrorCode


class AppErrorException(Exception):
    """Exception wrapper for AppError.

    Use this when an AppError has to be raised in code that
    doesn't use the Result monad.
    """

    def __init__(self, error: AppError):
        self.error = error
        super().__init__(str(error))


class FeatureNotSupported(AppErrorException):
    """Raised when a caller asks for a feature this version does not implement."""


def raise_error(error: AppError) -> None:
    """Raise the matching exception for ``error``."""
    if error.code is ErrorCode.E9002_NOT_IMPLEMENTED:
        raise FeatureNotSupported(error)
    raise AppErrorException(error)
