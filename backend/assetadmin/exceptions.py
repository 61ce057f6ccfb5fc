"""Domain errors raised by the asset query layer.

Every error terminates the request; the handler registered in
``create_app()`` turns it into ``{"detail": ...}`` with ``status_code``.
"""

from __future__ import annotations

from typing import Iterable


class AssetAdminError(Exception):
    """Base class for request-terminating asset admin errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArgumentError(AssetAdminError):
    """Malformed parameter value or disallowed flag combination."""

    status_code = 400


class RecordNotFoundError(AssetAdminError):
    """An explicitly requested record does not exist in the draft stage."""

    status_code = 404


NotFoundError = RecordNotFoundError


class IdentifierNotFoundError(RecordNotFoundError):
    """Part of a requested identifier list could not be resolved."""

    def __init__(self, record_class: str, missing_ids: Iterable[str]) -> None:
        self.missing_ids = list(missing_ids)
        super().__init__(
            f"{record_class} items {', '.join(self.missing_ids)} are not found"
        )


class PermissionDeniedError(AssetAdminError):
    """The principal may not view an anchor record."""

    status_code = 403
