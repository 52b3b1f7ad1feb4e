# projectcontent/errors.py

"""
Error and issue types for project content aggregation.

Two failure policies coexist when a content tree is read:

- fatal failures raise :class:`FatalMetadataError` and abort the run,
- recoverable failures are described by a :class:`ProjectContentWarning`
  subclass, logged, and never raised.
"""


from __future__ import annotations

from pathlib import Path


class ProjectContentError(Exception):
    """Base class for errors raised while aggregating project content."""


class FatalMetadataError(ProjectContentError):
    """
    A required metadata file could not be read or parsed.

    Raised for the project's package descriptor and for a page template's
    ``page-definition.json``. The original exception is chained.
    """

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class ProjectContentWarning(UserWarning):
    """
    Base class for issues that are logged but do not stop aggregation.

    Instances are never raised or emitted through :mod:`warnings`. Each one
    is attached to its ERROR log record as ``record.issue``.
    """


class SkippedEntityWarning(ProjectContentWarning):
    """An entity directory was dropped because its marker file is invalid."""

    def __init__(self, kind: str, directory: Path, marker: str) -> None:
        super().__init__(f"Invalid {directory / marker}, {kind} ignored")
        self.kind = kind
        self.directory = directory
        self.marker = marker


class DegradedContentWarning(ProjectContentWarning):
    """A referenced content file was unreadable; its field became ``""``."""

    def __init__(self, kind: str, owner: str, relative_path: object) -> None:
        super().__init__(
            f"{kind.capitalize()} {owner}: file {relative_path} was not found"
        )
        self.kind = kind
        self.owner = owner
        self.relative_path = relative_path
