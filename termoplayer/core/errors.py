"""Domain-specific exceptions for the terminal frame player."""

from pathlib import Path


class ValidationError(ValueError):
    """Raised when startup flags fail validation."""


class FrameDirectoryError(ValidationError):
    """Raised when the frame directory is missing, empty or not a directory."""

    def __init__(self, path: Path, reason: str | None = None):
        self.path = path
        message = f"Invalid frame directory: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class RasterizerError(RuntimeError):
    """Raised when the external rasterizer cannot render a frame."""

    def __init__(self, image_path: Path, reason: str, returncode: int | None = None):
        self.image_path = image_path
        self.reason = reason
        self.returncode = returncode
        super().__init__(f"Rasterizer failed on {image_path}: {reason}")


class InvalidMediaError(ValueError):
    """Raised when a media file handed to the splicer is missing or unreadable."""

    def __init__(self, path: Path, reason: str | None = None):
        message = f"Invalid media file: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ProcessingError(RuntimeError):
    """Raised when frame splicing fails unexpectedly."""
