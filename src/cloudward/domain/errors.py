"""Errors shared by resource operations and the adapters that serve them."""

from __future__ import annotations


class CloudAPIError(RuntimeError):
    """Raised when a management API answers with an unexpected status or payload."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        error_code: str | None = None,
        error_msg: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
        self.error_msg = error_msg


class ResourceNotFoundError(CloudAPIError):
    """The addressed remote resource does not exist (HTTP 404)."""


class ImportIdError(ValueError):
    """An import identifier does not have the expected ``a/b`` shape."""
