"""Exceptions raised by the icon generator."""


class FaviconError(Exception):
    """Base class for every error raised by favicon_generator."""


class ConfigurationError(FaviconError):
    """An option is missing or out of range. Raised before any I/O."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field


class SourceNotFoundError(FaviconError):
    def __init__(self, path):
        super().__init__(f"SVG file not found: {path}")
        self.path = path


class FileSystemError(FaviconError):
    """Directory creation or file write failed."""

    def __init__(self, path, reason):
        super().__init__(f"Failed to write {path}: {reason}")
        self.path = path
        self.reason = reason


class EncodingError(FaviconError):
    """Bad input handed to the ICO encoder."""


class RenderError(FaviconError):
    """The SVG could not be rasterised."""
