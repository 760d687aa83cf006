class RpcSyncError(Exception):
    """Base class for every error raised by the sync pipeline."""


class FetchError(RpcSyncError):
    """The upstream registry document could not be retrieved."""

    def __init__(self, url: str, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class ParseError(RpcSyncError):
    """A document could not be reduced to the expected data shape."""


class EntryMalformed(RpcSyncError):
    """One network or candidate is unusable; the rest of the run continues."""


class ProbeFailure(RpcSyncError):
    """An endpoint answered, but not with a usable block number."""


class VersionReadError(RpcSyncError):
    """The persisted version counter could not be read or parsed."""
