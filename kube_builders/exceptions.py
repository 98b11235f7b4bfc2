"""Exceptions related to kube-builders."""

__all__ = [
    "BuilderException",
    "BuilderValidationError",
    "StoreError",
    "ObjectNotFoundError",
    "AlreadyExistsError",
    "FragmentError",
    "ProfileNotFoundError",
]


class BuilderException(Exception):
    """Generic base exception used for this library."""


class BuilderValidationError(BuilderException):
    """Raised when a builder is misconfigured or was given invalid input.

    Once a builder records one of these it keeps raising it on every lifecycle
    call for the rest of its life.
    """


class StoreError(BuilderException):
    """Raised when the remote object store rejects or fails a request."""


class ObjectNotFoundError(StoreError):
    """Raised when an object is not found in the store."""


class AlreadyExistsError(StoreError):
    """Raised when creating an object that is already present in the store."""


class FragmentError(BuilderException):
    """Raised when extracting a sub-object that was assembled from an invalid fragment."""


class ProfileNotFoundError(BuilderException):
    """Raised when looking up a hardware profile that is not defined."""

    def __init__(self, name: str) -> None:
        super().__init__(f"no hardware profile named {name!r}")
        self.name = name
