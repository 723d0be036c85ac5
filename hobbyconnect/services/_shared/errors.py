"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
concerns. They are the stable contract between stores, repositories and
application services.

The translation to HTTP responses (RFC 7807) is handled by
``hobbyconnect/core/errors.py``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    :param exc: The exception raised by SQLAlchemy during flush/commit.
    :param constraint_name: Constraint to match (e.g. ``"uq_users_email"``).
    :returns: ``True`` if the error message mentions the constraint.

    .. note::
       SQLite reports the column (``users.email``) instead of the constraint
       name, so callers usually pass both spellings.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from stores, repositories or domain logic.
    - ``hobbyconnect.core.errors`` maps them onto problem responses.
    """


# --------------------------------------------------------------------------- #
# Resource errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class ForbiddenError(ServiceError):
    """Raised when an authenticated actor touches a resource it does not own."""

    def __init__(self, message: str = "You can only modify your own resources.") -> None:
        super().__init__(message)


# --------------------------------------------------------------------------- #
# Authentication errors
# --------------------------------------------------------------------------- #


class AuthenticationError(ServiceError):
    """
    Raised when credentials or tokens are rejected.

    Every subclass is surfaced to clients with the same generic 401 body; the
    concrete type only exists for logs and tests.
    """

    public_message = "Invalid email or password"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.public_message)


class InvalidTokenError(AuthenticationError):
    """Signature, token type or subject check failed."""

    public_message = "Invalid or expired token"


class TokenExpiredError(InvalidTokenError):
    """The ``exp`` claim is in the past."""


class MalformedTokenError(InvalidTokenError):
    """The token could not be decoded or lacks a required claim."""


class TokenNotRecognizedError(InvalidTokenError):
    """A well-formed refresh token is not in its owner's outstanding set."""


# --------------------------------------------------------------------------- #
# Infrastructure errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class StaleAccountError(ServiceError):
    """
    Raised by a credential store when a compare-and-swap save loses a race.

    :param user_id: Account whose save was rejected.
    :param expected_version: Version the caller read before mutating.
    """

    user_id: str
    expected_version: int

    def __str__(self) -> str:
        return f"Account {self.user_id} changed since version {self.expected_version}"


class StoreError(ServiceError):
    """Persistence failed; never reported to clients beyond a generic 5xx."""


class ConfigurationError(ServiceError):
    """Required configuration (e.g. the signing secret) is missing or invalid."""
