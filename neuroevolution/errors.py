"""Exception types raised by genome construction and evaluation."""

from __future__ import annotations


class ArgumentError(ValueError):
    """Raised when genes or inputs handed to a genome are invalid."""


class StateError(RuntimeError):
    """Raised when a genome reaches an inconsistent state while being used."""


__all__ = ["ArgumentError", "StateError"]
