"""Domain exceptions shared by accounts, catalog and dispatch."""


class SongLinkError(Exception):
    """Base exception for SongLink operations."""

    pass


class ValidationError(SongLinkError):
    """Raised when caller input is malformed (e.g. non-alphanumeric username)."""

    pass


class ConflictError(SongLinkError):
    """Raised when an email or username is already taken."""

    pass


class AuthenticationError(SongLinkError):
    """Raised for bad credentials. The message never says which part was wrong."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class NotFoundError(SongLinkError):
    """Base for lookups that found nothing."""

    pass


class AccountNotFoundError(NotFoundError):
    """Raised when a username does not resolve to an account."""

    def __init__(self, username: str, message: str = None):
        self.username = username
        super().__init__(message or "User not found")


class TrackNotFoundError(NotFoundError):
    """Raised when the catalog search yields nothing (or the provider failed)."""

    def __init__(self, provider: str, query: str):
        self.provider = provider
        self.query = query
        super().__init__("Song not found")


class ProviderUnconfiguredError(SongLinkError):
    """Raised when a catalog provider lacks the credentials to call its API."""

    def __init__(self, provider: str, message: str = None):
        self.provider = provider
        super().__init__(message or f"{provider} credentials not configured")


class SpectatorNotConnectedError(SongLinkError):
    """Raised when the target username has no live channel."""

    def __init__(self, username: str):
        self.username = username
        super().__init__("Spectator not connected")
