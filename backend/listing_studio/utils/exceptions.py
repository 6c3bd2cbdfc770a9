"""Exception hierarchy for listing_studio.

Generation failures are never retried here; they propagate to the caller of
the pipeline, which decides how to surface them.
"""

from __future__ import annotations


class ListingStudioError(Exception):
    """Base class for all application errors."""


# -- generation pipeline -------------------------------------------------------


class GenerationError(ListingStudioError):
    """A completion call or pipeline stage failed."""


class TransportError(GenerationError):
    """Connection, DNS, TLS or stream read failure before a usable response."""


class ApiStatusError(GenerationError):
    """The completion API answered with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"API returned {status_code}: {body}")


class ResponseDecodeError(GenerationError):
    """The response body does not match the expected message envelope."""


class SchemaValidationError(GenerationError):
    """Model output parsed badly or did not match the shape a stage expects."""


class AnalysisSchemaError(SchemaValidationError):
    pass


class VoiceSchemaError(SchemaValidationError):
    pass


class StreamedApiError(GenerationError):
    """The API sent an explicit ``error`` event in the middle of a stream."""


# -- caller input ----------------------------------------------------------------


class InputValidationError(ListingStudioError):
    pass


class InsufficientSamplesError(InputValidationError):
    pass


class MissingApiKeyError(ListingStudioError):
    pass


# -- persistence -----------------------------------------------------------------


class NotFoundError(ListingStudioError):
    pass


class PropertyNotFoundError(NotFoundError):
    pass


class ContentNotFoundError(NotFoundError):
    pass


class BrandVoiceNotFoundError(NotFoundError):
    pass
