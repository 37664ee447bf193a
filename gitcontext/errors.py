"""
Exceptions raised while reading a repository's metadata directory.

Two failure kinds exist:
- NotFoundError: the metadata directory, HEAD, a ref file or an object file is missing
- MalformedObjectError: content does not match the expected format
"""


class GitContextError(Exception):
    """Base class for all gitcontext failures."""


class NotFoundError(GitContextError):
    """Raised when a file the reader needs does not exist."""


class RepositoryNotFoundError(NotFoundError):
    """Raised when no .git directory exists in the start directory or its parents."""
    def __init__(self, message: str = "Git directory not found"):
        super().__init__(message)


class ObjectNotFoundError(NotFoundError):
    """Raised when a loose object file is missing from the object store."""
    def __init__(self, object_hash: str):
        super().__init__(f"Object not found: {object_hash}")
        self.object_hash = object_hash


class MalformedObjectError(GitContextError):
    """Raised when a ref, HEAD or object violates the expected format."""


class ConfigError(GitContextError):
    """Raised when a configuration file cannot be read."""
