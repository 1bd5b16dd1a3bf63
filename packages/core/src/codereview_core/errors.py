"""Exceptions raised while preparing, sending, or decoding a review.

Every failure a review can hit is a ReviewError. Callers that only need to
show a message catch the base class; the subclasses exist so tests and
logging can tell the stages apart.
"""

from __future__ import annotations


class ReviewError(Exception):
    """Base class for all review failures. ``str(err)`` is user-facing."""


class LocalValidationError(ReviewError):
    """Rejected before any network activity (empty input, missing key, ...)."""


class ReviewInProgressError(LocalValidationError):
    """A review is already in flight for this session."""


class TransportError(ReviewError):
    """The remote service could not be reached or answered with an error status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ResponseShapeError(ReviewError):
    """The service answered successfully but without the expected text field."""


class ParseError(ReviewError):
    """The returned text is not JSON, or not JSON matching the review schema."""
