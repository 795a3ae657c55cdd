"""Application exception hierarchy."""


class BidSmartError(Exception):
    """Base exception for all BidSmart errors."""

    status_code = 500

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(BidSmartError):
    """A required setting (usually a provider credential) is missing."""


class UpstreamError(BidSmartError):
    """Error reported by the scrape/search provider (transport, auth, non-2xx)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        provider: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.status_code = status_code or 500
        self.provider = provider


class AIProcessingError(BidSmartError):
    """Error during AI/LLM processing."""

    def __init__(
        self,
        message: str,
        model: str | None = None,
        prompt_preview: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.model = model
        self.prompt_preview = prompt_preview[:200] if prompt_preview else None


class ParsingError(AIProcessingError):
    """Error parsing AI output into structured format."""

    def __init__(
        self,
        message: str,
        raw_output: str | None = None,
        expected_schema: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details=details)
        self.raw_output = raw_output[:500] if raw_output else None
        self.expected_schema = expected_schema


class StorageError(BidSmartError):
    """Unexpected failure of the storage backend."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        key: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.operation = operation
        self.key = key


class NotFoundError(BidSmartError):
    """Referenced record does not exist."""

    status_code = 404


class StatusTransitionError(BidSmartError):
    """Requested project status change is not allowed."""

    status_code = 409

    def __init__(
        self,
        message: str,
        current: str | None = None,
        requested: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.current = current
        self.requested = requested


class TriageError(BidSmartError):
    """Tender triage action not allowed in the tender's current state."""

    status_code = 409
