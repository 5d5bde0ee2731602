"""
Errors
Exception taxonomy shared by the analysis pipeline, providers and storage.
"""


class LegalensError(Exception):
    """Base class for all application errors."""


class ProviderError(LegalensError):
    """An LLM provider failed, timed out or returned no completion."""

    def __init__(self, message: str, provider: str | None = None):
        super().__init__(message)
        self.provider = provider


class ParseError(LegalensError):
    """Model output held no usable JSON object."""


class PersistenceError(LegalensError):
    """A read or write against the backing store failed."""


class NoContentError(LegalensError):
    """A document has no content that could be analyzed."""


class NotFoundError(LegalensError):
    """The row does not exist or belongs to another user."""
