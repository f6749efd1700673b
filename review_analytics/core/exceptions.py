"""Error taxonomy shared by the review services and the HTTP layer."""


class ReviewServiceError(Exception):
    """Base class for errors raised by the review services."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ReviewServiceError):
    """A required input is missing or malformed."""


class GenerationError(ReviewServiceError):
    """The AI model failed to produce a review."""


class StorageError(ReviewServiceError):
    """The record store failed to persist or query records."""


class AggregationError(StorageError):
    """Dashboard statistics could not be computed from the record store."""
