"""
domain.exceptions - Custom exception hierarchy for the tutor agent.

All domain-level errors inherit from DomainError so callers can catch
broad or specific exceptions as needed.
"""


class DomainError(Exception):
    """Base exception for all domain-level errors."""


class ServiceUnavailableError(DomainError):
    """Raised when the language model client is not configured."""


class RateLimitExceededError(DomainError):
    """Raised when a user exceeds the per-minute turn ceiling."""


class NotFoundError(DomainError):
    """Raised when a resource is missing or not owned by the caller."""


class ConversationNotFoundError(NotFoundError):
    """Raised when a conversation id does not resolve to an owned conversation."""


class UserNotFoundError(NotFoundError):
    """Raised when the calling user does not exist in the directory."""


class ModelCallError(DomainError):
    """Raised when talking to the language model fails or times out."""


class RecipientUnavailableError(DomainError):
    """Raised when a direct message targets an unknown or inactive user."""


class AuthenticationError(DomainError):
    """Raised when a bearer token cannot be verified."""
