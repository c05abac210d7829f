"""Error taxonomy for the review-to-ad pipeline.

Every error a pipeline stage can raise derives from ``RTAError``. The job
orchestrator catches these at its boundary and stores ``str(exc)`` as the
job's error message, so messages are written for end users.
"""


class RTAError(Exception):
    """Base class for all pipeline errors."""


class ConfigError(RTAError):
    """A required credential or setting is missing or invalid."""


# Name used for credential errors raised by the upstream-facing stages.
UpstreamConfigError = ConfigError


class ValidationError(RTAError):
    """Malformed or insufficient input."""


class InsufficientReviews(ValidationError):
    def __init__(self, found: int, required: int = 3):
        self.found = found
        self.required = required
        super().__init__(
            f"At least {required} reviews are required (found {found} after removing blanks and duplicates)"
        )


class MissingReviewSource(ValidationError):
    """The form lacks the review text or Maps link the configured mode needs."""


class InvalidMapsLink(ValidationError):
    """No place identifier could be derived from the Maps link."""


class PlaceNotFound(ValidationError):
    """The place directory returned no candidate for the link."""


class NoReviewsFound(ValidationError):
    """The resolved place has no review text."""


class UpstreamCallError(RTAError):
    """An external collaborator returned a non-success response."""


class ResponseParseError(RTAError):
    """A generation collaborator returned text that is not the expected JSON."""


class ImageGenerationExhausted(RTAError):
    """Every candidate image model failed."""

    def __init__(self, failures: list[tuple[str, str]]):
        self.failures = failures
        if failures:
            last_model, last_reason = failures[-1]
            tried = ", ".join(name for name, _ in failures)
            msg = (
                f"Failed to generate image: all {len(failures)} candidate models failed "
                f"({tried}); last error from {last_model}: {last_reason}"
            )
        else:
            msg = "Failed to generate image: no candidate models configured"
        super().__init__(msg)
