"""
Error types raised by the review services.

Input errors surface to callers (HTTP 422). External-service errors are
internal: the fallback cascade always catches them.
"""


class InvalidInputError(ValueError):
    """Request input cannot be analyzed."""


class InvalidChangeDescriptionError(InvalidInputError):
    """Change description text is missing or blank."""


class EmptyDocumentError(InvalidInputError):
    """Document text is missing or blank."""


class ExternalServiceError(RuntimeError):
    """An external reasoning or similarity call did not produce a usable result."""


class MalformedReasoningError(ExternalServiceError):
    """Response was not a non-blank string."""
