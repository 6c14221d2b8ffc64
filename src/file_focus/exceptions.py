"""Custom exceptions for file focus."""


class FileFocusError(Exception):
    """Base exception for file focus errors."""
    pass


class ConfigurationError(FileFocusError):
    """Raised when there's an error in configuration."""
    pass


class StorageError(FileFocusError):
    """Raised when the persisted groups document cannot be read."""
    pass


class GroupNotFoundError(FileFocusError):
    """Raised when a group cannot be resolved by id or name."""

    def __init__(self, reference: str):
        super().__init__(f"No group matches '{reference}'")
        self.reference = reference


class DuplicateGroupError(FileFocusError):
    """Raised when creating a group whose name is already taken."""

    def __init__(self, name: str):
        super().__init__(f"A group named '{name}' already exists")
        self.name = name
