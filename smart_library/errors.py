class LibraryError(Exception):
    """Base exception for library engine errors."""


class ValidationError(LibraryError):
    """Malformed or missing input; the caller should correct it and retry."""


class NotFoundError(LibraryError):
    """Referenced book, member, transaction or feedback does not exist."""


class EligibilityError(LibraryError):
    """Borrow refused by a lending rule (no copies, active borrowing)."""


class InvalidStateError(LibraryError):
    """Operation attempted on a record that is not in the required state."""


class InvariantViolation(LibraryError):
    """Internal consistency failure, e.g. availability going negative."""


class AuthenticationError(LibraryError):
    """Credential check failed."""
