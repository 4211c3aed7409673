"""Domain exceptions."""

from typing import Optional


class JournalChatException(Exception):
    """Base exception for the journal chat application."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code
        super().__init__(message)


# Validation

class ValidationError(JournalChatException):
    """Domain validation error."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(message=message, code=code)


class InvalidIntentionError(ValidationError):
    """Chat intention is not one of the known values."""

    def __init__(self, intention: object):
        self.intention = intention
        super().__init__(
            message=f"Invalid chat intention: {intention}",
            code="INVALID_INTENTION"
        )


class InsufficientExchangeError(ValidationError):
    """Session lacks a complete user/assistant exchange."""

    def __init__(self):
        super().__init__(
            message=(
                "Cannot save chat session: conversation must include at least "
                "one exchange between you and the assistant."
            ),
            code="INSUFFICIENT_EXCHANGE"
        )


class NoActiveSessionError(ValidationError):
    """Operation requires a current chat session."""

    def __init__(self, message: str = "No active chat session. Please start a chat session first."):
        super().__init__(message=message, code="NO_ACTIVE_SESSION")


class MissingEntryReferenceError(ValidationError):
    """Current session is not bound to a journal entry."""

    def __init__(self):
        super().__init__(message="Journal entry ID is missing.", code="MISSING_ENTRY_REFERENCE")


# Lookup

class NotFoundError(JournalChatException):
    """Referenced record does not exist."""

    def __init__(self, message: str, code: str = "NOT_FOUND"):
        super().__init__(message=message, code=code)


class EntryNotFoundError(NotFoundError):
    """Journal entry not found error."""

    def __init__(self, entry_id: str):
        self.entry_id = entry_id
        super().__init__(message="Journal entry not found.", code="ENTRY_NOT_FOUND")


class SessionNotFoundError(NotFoundError):
    """Chat session not found error."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(message="Chat session not found.", code="SESSION_NOT_FOUND")


# Completion service

class CredentialError(JournalChatException):
    """API credential problem."""


class MissingCredentialError(CredentialError):
    """No API key has been stored."""

    def __init__(self):
        super().__init__(
            message=(
                "OpenAI API key is not configured. "
                "Please add your API key in Profile settings."
            ),
            code="MISSING_CREDENTIAL"
        )


class InvalidCredentialError(CredentialError):
    """The completion endpoint rejected the API key."""

    def __init__(self):
        super().__init__(
            message="Invalid API key. Please check your API key in Profile settings.",
            code="INVALID_CREDENTIAL"
        )


class RateLimitError(JournalChatException):
    """Completion endpoint answered with too-many-requests."""

    def __init__(self):
        super().__init__(
            message="Rate limit exceeded. Please try again in a moment.",
            code="RATE_LIMITED"
        )


class TransportError(JournalChatException):
    """No response was received from the completion endpoint."""

    def __init__(self):
        super().__init__(
            message="Network error. Please check your connection and try again.",
            code="TRANSPORT_ERROR"
        )


class RemoteApiError(JournalChatException):
    """Completion endpoint answered with a non-success status."""

    def __init__(self, status_code: int, details: Optional[str] = None):
        self.status_code = status_code
        message = details or f"API request failed with status {status_code}. Please try again."
        super().__init__(message=message, code="REMOTE_API_ERROR")


class MalformedResponseError(JournalChatException):
    """Success payload without a usable reply."""

    def __init__(self, message: str = "Invalid response from API. Please try again."):
        super().__init__(message=message, code="MALFORMED_RESPONSE")


# Storage

class PersistenceError(JournalChatException):
    """Entry store read or write failure."""

    def __init__(self, operation: str, details: Optional[str] = None):
        self.operation = operation
        message = details or f"Failed to {operation}."
        super().__init__(message=message, code="PERSISTENCE_ERROR")
