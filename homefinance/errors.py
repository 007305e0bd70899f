"""Exceptions raised by the calculation core."""


class InvalidInput(ValueError):
    """A calculation precondition was violated.

    The message is one of the fixed strings in :mod:`homefinance.presets` so
    callers can match on it.
    """
