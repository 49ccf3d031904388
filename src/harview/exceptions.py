"""Custom exceptions for harview package."""


class HarViewError(Exception):
    """Base exception class for all harview errors."""


class MalformedDocumentError(HarViewError):
    """Raised when uploaded bytes are not a HAR document.

    Covers invalid UTF-8, invalid JSON, a root that is not an object, a
    missing ``log`` object, or fields carrying the wrong JSON type.
    """


class MissingUploadError(HarViewError):
    """Raised when an upload request carries no file."""


class EmptySessionError(HarViewError):
    """Raised when an operation needs a loaded HAR document but none is loaded."""


class UploadTooLargeError(HarViewError):
    """Uploaded file exceeds the configured size limit.

    Attributes:
        limit: Maximum accepted upload size in bytes.
        size: Number of bytes received before the upload was rejected.
    """

    def __init__(self, limit: int, size: int) -> None:
        """Initialize UploadTooLargeError.

        Args:
            limit: Maximum accepted upload size in bytes.
            size: Number of bytes received.
        """
        super().__init__(f"Upload of {size} bytes exceeds limit of {limit} bytes")
        self.limit = limit
        self.size = size
