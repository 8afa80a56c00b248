"""
DocuClear - Custom Exceptions Module

This module defines custom exception classes for the failure cases of the
scanning pipeline and its codec boundary.
"""


class DocuClearError(Exception):
    """Base exception for all DocuClear errors.

    All custom exceptions should inherit from this class to allow
    catching any DocuClear-specific error.
    """

    def __init__(self, message: str, details: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional technical details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class DegenerateTransformError(DocuClearError):
    """Raised when the homography system is numerically singular.

    Happens when corner points are collinear or duplicated; the caller
    should reject the current corner placement.
    """

    def __init__(self, step: int, pivot: float) -> None:
        """Initialize the exception.

        Args:
            step: Elimination step at which the pivot vanished
            pivot: Magnitude of the rejected pivot
        """
        self.step = step
        self.pivot = pivot
        super().__init__(
            "Corner points do not define a valid perspective transform",
            details=f"step={step}, pivot={pivot:.3e}",
        )


class DecodeError(DocuClearError):
    """Raised when an image cannot be decoded into a pixel surface."""

    def __init__(self, source: str, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            source: Description of the image source (path or byte count)
            reason: Optional reason reported by the decoder
        """
        self.source = source
        self.reason = reason
        msg = f"Could not decode image: {source}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg)


class EncodeError(DocuClearError):
    """Raised when a pixel surface cannot be encoded."""

    def __init__(self, image_format: str, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            image_format: Target container format
            reason: Optional reason reported by the encoder
        """
        self.image_format = image_format
        self.reason = reason
        msg = f"Could not encode image as {image_format}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg)


class ConfigurationError(DocuClearError):
    """Raised when there's a configuration-related error."""

    def __init__(self, setting_name: str | None = None, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            setting_name: Optional name of the problematic setting
            reason: Optional reason for the error
        """
        self.setting_name = setting_name
        self.reason = reason

        if setting_name:
            msg = f"Configuration error for '{setting_name}'"
        else:
            msg = "Configuration error"

        if reason:
            msg += f": {reason}"

        super().__init__(msg)
