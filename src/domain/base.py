from datetime import UTC, datetime


def utc_now() -> datetime:
    """Naive UTC timestamp, the form every DateTime column stores."""
    return datetime.now(UTC).replace(tzinfo=None)


class ConflictError(Exception):
    """A write violated a uniqueness guarantee of the store."""


class DuplicateEmailError(ConflictError):
    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email already registered: {email}")


def normalize_email(email: str) -> str:
    """Canonical stored form of an address; one account per mailbox."""
    return email.strip().lower()
