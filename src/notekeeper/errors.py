from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Note not found") -> None:
        super().__init__(message)


class InvalidArgumentError(UserError):
    """Raised when a caller-supplied argument is malformed or out of range."""


class InvalidIdError(InvalidArgumentError, NotFoundError):
    """Raised when a note id is not a well-formed ObjectId.

    It is both an InvalidArgumentError and a NotFoundError, so callers can
    either tell a malformed id apart from a missing note or treat both alike.
    """

    def __init__(self, message: str = "Invalid note id") -> None:
        super().__init__(message)


class StorageError(Exception):
    """Raised when the persistence layer is unavailable or rejects an operation.

    Not a UserError: the message may carry driver details and is never shown to users.
    """
