"""Errors raised or delivered by the mock S3 client."""
from __future__ import annotations

from typing import Any, Dict, List, Optional


class S3MockError(Exception):
    """Base error carrying an S3-style code and HTTP status."""

    code = "S3MockError"
    status_code: Optional[int] = None
    default_message = "Mock-AWS-S3 error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message or self.default_message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    @property
    def name(self) -> str:
        return self.code


class NoSuchKey(S3MockError):
    """The requested object does not exist."""

    code = "NoSuchKey"
    status_code = 404
    default_message = "The specified key does not exist."


class NoSuchBucket(S3MockError):
    """The requested bucket directory does not exist."""

    code = "NoSuchBucket"
    status_code = 404
    default_message = "The specified bucket does not exist."


class InvalidParameterError(S3MockError, ValueError):
    """Malformed request parameters."""

    code = "InvalidParameter"
    status_code = 400
    default_message = "Mock-AWS-S3: invalid parameters"


class DeleteObjectsError(S3MockError):
    """Some keys of a batch delete could not be deleted."""

    code = "DeleteObjectsError"
    default_message = "Error deleting objects"

    def __init__(self, deleted: List[Dict[str, Any]], errors: List[Dict[str, Any]]):
        self.deleted = deleted
        self.errors = errors
        super().__init__()


def mark_not_found(err: OSError) -> OSError:
    """Attach a 404 status to a filesystem not-found error."""
    if isinstance(err, FileNotFoundError):
        err.status_code = 404  # type: ignore[attr-defined]
    return err
