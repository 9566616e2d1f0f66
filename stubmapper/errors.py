"""Custom exceptions for stubmapper."""


class MapperError(Exception):
    """Base exception for all mapping errors."""


class NilInputError(MapperError):
    """Raised when a required top-level input is missing."""

    def __init__(self, what: str):
        self.what = what
        super().__init__(f"{what} is nil")


class DevfileParseError(MapperError):
    """Raised when devfile text cannot be parsed into a devfile model."""


class MalformedValueError(MapperError):
    """Raised when an attribute exists but its value cannot be decoded."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"malformed value for attribute '{key}': {reason}")


class DuplicateNameError(MapperError):
    """Raised when a component name already exists in the target model."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"application already has a component with name {name}")


class InvalidSourceError(MapperError):
    """Raised when a component carries neither a git nor an image source."""

    def __init__(self) -> None:
        super().__init__("component source is nil")
