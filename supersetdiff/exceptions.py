"""Custom exceptions for the supersetdiff engine."""


class SupersetDiffError(Exception):
    """Base exception for supersetdiff errors."""
    pass


class InvalidJSONError(SupersetDiffError):
    """Raised when an input document cannot be decoded."""
    def __init__(self, message: str, side: str = None):
        super().__init__(message)
        self.message = message
        self.side = side


class ConfigurationError(SupersetDiffError):
    """Raised when options, presets or an options file are invalid."""
    def __init__(self, message: str, key: str = None):
        super().__init__(message)
        self.message = message
        self.key = key


class CaseFileError(SupersetDiffError):
    """Raised when a comparison case file is malformed."""
    def __init__(self, path: str, reason: str):
        super().__init__(f"Invalid case file '{path}': {reason}")
        self.path = path
        self.reason = reason
