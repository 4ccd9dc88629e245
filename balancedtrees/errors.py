"""Exceptions raised by the tree classes."""


class NoSuchVertexError(LookupError):
    """Raised when asking for a root, parent or child that does not exist."""


class InvalidPositionError(ValueError):
    """Raised when a position does not belong to the tree it is used with."""


class RotationNotSupportedError(NotImplementedError):
    """Raised when a caller tries to rotate a self-balancing tree directly."""
