class HexError(Exception):
    """Base class for all errors raised by hexmc."""


class BoardSizeError(HexError, ValueError):
    """The requested board dimension is outside the supported range."""


class InvariantViolation(HexError, AssertionError):
    """Internal bookkeeping is inconsistent, e.g. move counter vs. occupied cells."""


class RandomSourceError(HexError, RuntimeError):
    """The random generator for the Monte Carlo playouts could not be created."""
