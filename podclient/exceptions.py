"""Custom exception classes for the pod client."""

from typing import Optional


class PodError(Exception):
    """
    Base exception class for all pod-related errors.
    """
    pass


class PodRequestError(PodError):
    """
    Raised when the pod answers a request with an error status.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class PodNotFoundError(PodRequestError):
    """
    Raised when the requested resource does not exist (404).
    """
    pass


class PodUnauthorizedError(PodRequestError):
    """
    Raised when the caller is not authenticated or not allowed (401/403).
    """
    pass


class ResourceExistsError(PodRequestError):
    """
    Raised when creating a resource that is already present.
    """
    pass


class ContainerNotEmptyError(PodRequestError):
    """
    Raised when deleting a container that still holds resources.
    """
    pass


class PodConflictError(PodRequestError):
    """
    Raised when a conditional write loses against a concurrent modification.
    """
    pass


class MissingLocationError(PodError):
    """
    Raised when the pod accepts a new resource without reporting its URL.
    """
    pass


class AclNotFoundError(PodError):
    """
    Raised when a resource has no ACL of its own or does not advertise one.
    """
    pass
