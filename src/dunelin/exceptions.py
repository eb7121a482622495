"""Exceptions for dunelin."""


class DunelinError(Exception):
    """Base class for dunelin errors."""


class RemoteError(DunelinError):
    """Raised when cloning or pulling a git remote fails.

    The message is the underlying transport or git error, unchanged, so
    it can be shown to the operator verbatim.
    """


class WorkspaceNotFoundError(DunelinError):
    """Raised when a directory has no readable workspace config."""
