"""Exception hierarchy for the portfolio builder."""

from __future__ import annotations

from enum import StrEnum


class PortfolioBuilderError(Exception):
    """Base class for all portfolio builder errors."""


class OutOfRangeError(PortfolioBuilderError, IndexError):
    """A list index passed to a remove operation does not exist."""

    def __init__(self, field_name: str, index: int, length: int) -> None:
        super().__init__(f"No {field_name} entry at index {index} (length {length})")
        self.field_name = field_name
        self.index = index
        self.length = length


class PersistenceError(PortfolioBuilderError):
    """Reading or writing the saved session failed."""


class AdapterError(PortfolioBuilderError):
    """An external collaborator (upload, deploy) failed."""


class UploadError(AdapterError):
    """An image upload was rejected or could not be stored."""


class DeployErrorKind(StrEnum):
    CONFIGURATION = "configuration"
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    TRANSIENT = "transient"


class DeployError(AdapterError):
    """A deployment failed; ``kind`` tells the user what to do about it."""

    def __init__(self, message: str, kind: DeployErrorKind = DeployErrorKind.TRANSIENT) -> None:
        super().__init__(message)
        self.kind = kind
