"""Custom exception classes for document operations."""

from typing import Dict, Optional


class DocumentError(Exception):
    """
    Base exception class for all document-related errors.
    """
    pass


class DocumentNotFoundError(DocumentError):
    """
    Raised when a document container cannot be read.

    Missing containers and denied access are reported the same way so a
    cross-pod caller learns nothing about the other pod's permissions.
    """

    def __init__(self, message: str = "No data found or unauthorized"):
        super().__init__(message)


class UnknownDocumentTypeError(DocumentError, ValueError):
    """
    Raised when a document type has no storage location.
    """
    pass


class PartialDeletionError(DocumentError):
    """
    Raised when some files of a document container could not be deleted.
    """

    def __init__(self, container_url: str, failures: Optional[Dict[str, Exception]] = None):
        self.container_url = container_url
        self.failures = failures or {}
        super().__init__(
            f"Failed to delete {len(self.failures)} file(s) from {container_url}: "
            f"{', '.join(sorted(self.failures))}"
        )
