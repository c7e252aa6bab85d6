"""Error taxonomy for the ICD-11 diagnoses client."""


class DiagnosesSystemError(Exception):
    """Base class for every error raised by the client.

    ``operation`` names the client call that failed and ``subject`` the code,
    id or query it was working on, so callers can tell bad input from an
    unavailable upstream or a misconfigured client.
    """

    def __init__(self, message: str, operation: str | None = None, subject: str | None = None):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.subject = subject

    def __str__(self) -> str:
        context = []
        if self.operation:
            context.append(f"operation={self.operation}")
        if self.subject is not None:
            context.append(f"subject={self.subject!r}")
        if context:
            return f"{self.message} ({', '.join(context)})"
        return self.message


class ConfigurationError(DiagnosesSystemError):
    """A required parameter or setting is missing or invalid."""


class AuthenticationError(DiagnosesSystemError):
    """The token endpoint rejected the credentials, or no token is available."""


class NotFoundError(DiagnosesSystemError):
    """The API answered 404 for a code, entity or category id."""


class NotCategoryError(DiagnosesSystemError):
    """Children were requested for an entity that has none."""


class UnrecognizedEntityShapeError(DiagnosesSystemError):
    """An API response is neither a category, a diagnosis nor a symptom."""


class UnsupportedLanguageError(DiagnosesSystemError, ValueError):
    """Translation is not available, or the language code is unknown."""


class RemoteError(DiagnosesSystemError):
    """Any other non-success answer from the API."""

    def __init__(self, message: str, operation: str | None = None, subject: str | None = None,
                 status: int | None = None):
        super().__init__(message, operation, subject)
        self.status = status


class TransportError(DiagnosesSystemError):
    """The request failed before a status was obtained (network, timeout)."""


class NoProviderFoundError(DiagnosesSystemError):
    """No registered symptom supplier or code converter accepts the request."""
