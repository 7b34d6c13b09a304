"""Exception classes for Shipnote.

Every error that should abort a release run derives from ShipnoteError.
The CLI catches ShipnoteError once and reports a single failure line.
"""


class ShipnoteError(Exception):
    """Base exception for release failures."""

    pass


class ConfigurationError(ShipnoteError):
    """Raised when a required setting is missing or invalid."""

    pass


class ReleaseNotesError(ShipnoteError):
    """Raised when release notes cannot be extracted."""

    pass


class NoCommitsSinceLastTagError(ReleaseNotesError):
    """Raised when nothing was committed after the previous release tag."""

    def __init__(self, message: str = "No commits found since last tag."):
        super().__init__(message)


class NoTagsFoundError(ReleaseNotesError):
    """Raised when the project has no tag to start the notes from."""

    pass


class ChangelogError(ShipnoteError):
    """Raised when the changelog file cannot be read or written."""

    pass


class GitError(ShipnoteError):
    """Raised when a git command fails."""

    pass


class UncommittedChangesError(GitError):
    """Raised when the working tree is not clean."""

    pass


class HostError(ShipnoteError):
    """Raised when a GitLab API call fails."""

    pass


class TagNotFoundError(HostError):
    """Raised when a pushed tag never shows up on the host."""

    pass


class VersionError(ShipnoteError):
    """Raised when the version file cannot be read or bumped."""

    pass


class PublishError(ShipnoteError):
    """Raised when the publish command fails."""

    pass


class NotificationError(ShipnoteError):
    """Raised when the chat notification cannot be delivered."""

    pass
