"""
Ingestion error taxonomy. Every failure the upload path can report is an
IngestError; the service turns it into the JSON body + HTTP status.
"""
from typing import List, Optional


class IngestError(Exception):
    status = 500

    def __init__(self, message: str, details: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.details = list(details) if details else []

    def to_response(self) -> dict:
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class Unauthorized(IngestError):
    status = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class InputShapeError(IngestError):
    """No file, wrong extension, unreadable/empty workbook. Raised before parsing rows."""
    status = 400


class ValidationFailed(IngestError):
    """Structural or row-level problems; `details` lists every one that was found."""
    status = 400

    def __init__(self, details: List[str], message: str = "Invalid Excel format"):
        super().__init__(message, details)


class UploadConflict(IngestError):
    status = 409

    def __init__(self, message: str = "Some data already exists. Please check for duplicates."):
        super().__init__(message)


class PersistenceFailure(IngestError):
    status = 500

    def __init__(self, message: str = "Failed to process file"):
        super().__init__(message)
