"""Exception types raised by the signal processing core.

All errors are raised synchronously at the point a contract violation is
detected. ``InvalidArgument`` reports a bad call shape (wrong lengths, out of
range parameters); ``NumericFailure`` reports a problem that depends on the
coefficient values themselves, such as a singular steady-state system.
"""
from __future__ import annotations


class SignalError(Exception):
    """Base class for errors raised by :mod:`sigproc`."""


class InvalidArgument(SignalError, ValueError):
    """A precondition on the arguments of an operation was violated."""


class NumericFailure(SignalError, ArithmeticError):
    """A numeric step (e.g. a linear solve) could not produce a valid result."""
