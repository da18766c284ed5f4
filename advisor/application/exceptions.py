class CatalogUnavailableError(RuntimeError):
    """Raised when the catalog cannot be fetched or its payload is malformed."""
    pass


class CompletionUpstreamError(RuntimeError):
    """Raised when the completion service fails (network errors, non-success status)."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class CompletionContractError(RuntimeError):
    """Raised when the completion service answers without usable content."""
    pass


class SubmissionInProgressError(RuntimeError):
    """Raised when a chat submission starts while another one is still awaiting its reply."""
    pass
