"""Exception hierarchy for cistern."""

from __future__ import annotations


class CisternError(Exception):
    """Base class for all cistern errors."""


class ValidationError(CisternError):
    """Declared configuration failed validation; no remote call was made."""

    def __init__(self, errors: dict[str, list[str]]) -> None:
        self.errors = errors
        lines = [msg for messages in errors.values() for msg in messages]
        super().__init__("; ".join(lines))


class DependencyMissing(CisternError):
    """A required parent (storage account, resource group) does not exist."""


class MalformedIdentity(CisternError):
    """A persisted resource id could not be parsed."""


class ResourceNotFound(CisternError):
    """The remote object for an id does not exist."""


class MigrationError(CisternError):
    """State could not be upgraded to the current schema."""


class RemoteError(CisternError):
    """A remote call failed for a non-retryable reason."""

    def __init__(self, message: str, *, container: str, account: str, cause: object = None) -> None:
        self.container = container
        self.account = account
        self.cause = cause
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class CreateFailed(RemoteError):
    """Container creation failed or did not succeed before the deadline."""


class PolicyApplyFailed(RemoteError):
    """The container exists but its access policy could not be applied."""
