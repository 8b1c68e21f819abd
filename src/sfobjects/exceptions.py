from __future__ import annotations

from typing import Any, Dict, List, Optional


class MissingCredentialsError(RuntimeError):
    """Raised when the required Salesforce env vars are not present."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__("Missing required environment variables: " + ", ".join(missing))


class SObjectsError(RuntimeError):
    """Base class for failures of an sObject operation."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        self.status_code = status_code
        self.errors = errors or []
        super().__init__(message)


class TransportError(SObjectsError):
    """Network failure, or a non-2xx status without a more specific meaning."""


class NotFoundError(TransportError):
    """The object type or record id does not exist (HTTP 404)."""


class ValidationError(TransportError):
    """Salesforce rejected the request with structured field-level errors."""

    @property
    def fields(self) -> List[str]:
        names: List[str] = []
        for err in self.errors:
            for name in err.get("fields") or []:
                if name not in names:
                    names.append(name)
        return names

    def __str__(self) -> str:
        msg = super().__str__()
        codes = [e.get("errorCode") for e in self.errors if e.get("errorCode")]
        if codes:
            msg = f"[{', '.join(codes)}] {msg}"
        if self.fields:
            msg = f"{msg} (fields: {', '.join(self.fields)})"
        return msg


class MappingError(SObjectsError):
    """Response body does not have the shape the mapper expects."""
