"""Storage-layer exceptions raised by the user and session stores."""


class StorageError(Exception):
    """Raised when the database cannot complete an operation (connectivity loss, bad SQL)."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class DuplicateEmailError(StorageError):
    """Raised when a user is created with an email that is already registered."""

    def __init__(self, email: str, cause: Exception | None = None) -> None:
        self.email = email
        super().__init__(f"Email already registered: {email}", cause)
