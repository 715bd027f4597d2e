"""Custom exception classes for ShareNote."""


class ShareNoteException(Exception):
    """
    Base exception class for all ShareNote errors.
    """
    pass


class UserAlreadyExistsError(ShareNoteException):
    """
    Raised when attempting to register a username that already exists.
    """
    pass


class InvalidCredentialsError(ShareNoteException):
    """
    Raised when login credentials are invalid.
    """
    pass


class InvalidAPIKeyError(ShareNoteException):
    """
    Raised when an API Key is invalid or expired.
    """
    pass


class InvalidTitleError(ShareNoteException):
    """
    Raised when a title normalizes to an empty slug.
    """
    pass


class InvalidCustomSlugError(ShareNoteException):
    """
    Raised when a user-supplied slug is unusable after normalization.
    """
    pass


class SlugTakenError(ShareNoteException):
    """
    Raised when a user-supplied slug already belongs to another record.
    """
    pass


class SlugGenerationExhaustedError(ShareNoteException):
    """
    Raised when no free slug could be stored within the retry budget.
    """
    pass


class IdentifierConflictError(ShareNoteException):
    """
    Raised by the repository when a unique identifier index rejects a write.
    """

    def __init__(self, field: str, value: str):
        super().__init__(f"Identifier conflict on {field}")
        self.field = field
        self.value = value


class InvalidPathError(ShareNoteException):
    """
    Raised when a path is malformed or tries to escape its folder.
    """
    pass


class PathConflictError(ShareNoteException):
    """
    Raised when the owner already has a record at the requested path.
    """
    pass


class InvalidContentError(ShareNoteException):
    """
    Raised when a content create or update request is inconsistent.
    """
    pass


class ContentNotFoundError(ShareNoteException):
    """
    Raised for every unsuccessful read of shared content.

    Missing, blocked, expired and forbidden records all raise this with the
    same message so callers cannot tell them apart.
    """

    MESSAGE = "Content not found"

    def __init__(self):
        super().__init__(self.MESSAGE)


class UnauthorizedAccessError(ShareNoteException):
    """
    Raised when a user attempts to modify a record they don't own.
    """
    pass
