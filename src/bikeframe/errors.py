"""
Exceptions raised by the geometry calculator.

All are ``ValueError`` subclasses so callers that only care about "bad
input" can keep catching ``ValueError``. Each error carries the parameter
names involved so UIs can highlight the offending fields.
"""

from typing import Iterable, Tuple


class GeometryError(ValueError):
    """Base class for geometry calculation failures."""

    def __init__(self, message: str, fields: Iterable[str] = ()):
        super().__init__(message)
        self.fields: Tuple[str, ...] = tuple(fields)


class MissingParameterError(GeometryError):
    """One or more required parameters were not supplied."""

    def __init__(self, fields: Iterable[str]):
        fields = tuple(fields)
        super().__init__(f"Missing required parameter(s): {', '.join(fields)}", fields)


class InvalidConfigurationError(GeometryError):
    """
    Parameters are present but describe an impossible frame.

    Raised before any inverse-trig call whose argument would leave [-1, 1],
    for near-zero denominators, and when the finished point set contains a
    non-finite coordinate.
    """
