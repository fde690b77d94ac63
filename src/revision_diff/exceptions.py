"""Errors raised by the revision diff engine."""


class RevisionDiffError(Exception):
    """Base class for revision diff errors."""


class RevisionNotFoundError(RevisionDiffError):
    """The requested revision has no base record."""

    def __init__(self, revision_id: int):
        self.revision_id = revision_id
        super().__init__(f"Revision {revision_id} not found")


class InvalidNoteError(RevisionDiffError):
    """A note could not be attached to a revision."""
