class HoverKdError(Exception):
    """Base class for errors raised by hoverkd."""


class InvalidPointError(HoverKdError, ValueError):
    """Coordinate is NaN or infinite."""
