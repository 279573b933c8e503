from __future__ import annotations


class AppError(Exception):
    """Base app error. The message is the contract, callers match on str(err)."""


class ParseError(AppError):
    """Raised when instance or solution text does not match its grammar."""


class SanityError(AppError):
    """Raised when a well-formed instance is semantically invalid."""


class VerificationError(AppError):
    """Raised on the first infeasibility found while checking a solution."""


class NotFoundError(AppError):
    """Raised when an instance name is unknown to the database."""
