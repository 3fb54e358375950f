# services/errors.py


class BulletinError(Exception):
    """Raised when the latest bulletin cannot be fetched or decoded."""


class TransportError(BulletinError):
    """The upstream could not be reached at all (DNS, connection, bad URL, timeout)."""


class NoBulletinError(BulletinError):
    """No hour from the current one down to midnight has a published bulletin."""

    def __init__(self, message: str = "no measurements found for today"):
        super().__init__(message)


class DecodeError(BulletinError):
    """The bulletin body is not a complete, well-typed document."""
