# -*- coding: utf-8 -*-
"""
Exceptions
==========

Error taxonomy of the geometry kernel.

Fit errors are raised to the immediate caller. A missing contact between two
objects is not an error: the extractor returns an empty point cloud for it.
"""


class ContactFitError(Exception):
    """Base class for all geometry kernel errors."""


class InsufficientPointsError(ContactFitError, ValueError):
    """Fewer points than a fit needs (plane: 3, ellipse: 6, circle: 1)."""

    def __init__(self, operation: str, required: int, given: int):
        self.operation = operation
        self.required = required
        self.given = given
        super().__init__(
            f"{operation}: needs at least {required} points, got {given}."
        )


# Name used by the error taxonomy of the planning stack.
InsufficientInputError = InsufficientPointsError


class InvalidParameterCountError(ContactFitError, ValueError):
    """A conic parameter vector does not have exactly 6 coefficients."""

    def __init__(self, given: int, expected: int = 6):
        self.given = given
        self.expected = expected
        super().__init__(
            f"Wrong number of parameters in conic function: expected {expected}, got {given}."
        )


class NoValidEllipseError(ContactFitError, RuntimeError):
    """Direct ellipse fit found no eigenvector with 4AC - B^2 > 0.

    Callers usually retry with the circle fit.
    """


class InvalidConicError(ContactFitError, ValueError):
    """Conic coefficients do not describe a real circle or ellipse."""


class DegenerateGeometryError(ContactFitError, ValueError):
    """Zero-area triangle, zero-length vector or coplanar triangle pair."""
