"""Domain exceptions for coder artifacts.

These map to consistent HTTP responses when handled by the global exception handler.
The extractor itself never raises; these come from the layers around it.
"""


class CoderArtifactsError(Exception):
    """Base exception for coder artifacts domain errors."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int = 500,
        detail: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail or message


class InputTooLargeError(CoderArtifactsError):
    """Raised when submitted text exceeds the configured size limit."""

    def __init__(self, size: int, limit: int) -> None:
        message = f"Input is {size} characters; limit is {limit}"
        super().__init__(message, status_code=413)
        self.size = size
        self.limit = limit


class UnsafeFilenameError(CoderArtifactsError):
    """Raised when a block's filename would be written outside the output directory."""

    def __init__(self, filename: str, detail: str | None = None) -> None:
        message = f"Refusing to write unsafe filename: {filename}"
        super().__init__(message, status_code=400, detail=detail or message)
        self.filename = filename


class FileConflictError(CoderArtifactsError):
    """Raised when a target path is already taken on disk or by another block."""

    def __init__(self, path: str, detail: str | None = None) -> None:
        message = f"File already exists: {path}"
        super().__init__(message, status_code=409, detail=detail or message)
        self.path = path


class InputReadError(CoderArtifactsError):
    """Raised when a response cannot be read or decoded."""

    def __init__(self, source: str, reason: str) -> None:
        message = f"Could not read input {source}: {reason}"
        super().__init__(message, status_code=400)
        self.source = source
