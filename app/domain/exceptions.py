from __future__ import annotations


class DomainError(Exception):
    """Base for domain errors."""


class InvalidSignatureError(DomainError):
    """Webhook payload failed signature verification."""


class BillingProviderError(DomainError):
    """Call to the billing provider failed."""


class UserNotFoundError(DomainError):
    """Referenced user does not exist."""


class InvalidInputError(DomainError):
    """Required input is missing or malformed."""


class EmailAlreadyExistsError(DomainError):
    """Email is already registered."""


class InvalidCredentialsError(DomainError):
    """Email/password pair did not match."""


class SubscriptionRequiredError(DomainError):
    """Operation requires an active subscription."""


class AdminRequiredError(DomainError):
    """Operation requires the ADMIN role."""


class InvalidVideoUrlError(DomainError):
    """URL is not a recognizable YouTube link."""


class VideoAlreadyExistsError(DomainError):
    """Video is already in the library."""
