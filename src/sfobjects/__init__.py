from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("sfobjects")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

from .api import SalesforceAPI, SFConfig  # noqa: E402
from .client import SObjectsClient  # noqa: E402
from .exceptions import (  # noqa: E402
    MappingError,
    MissingCredentialsError,
    NotFoundError,
    SObjectsError,
    TransportError,
    ValidationError,
)
from .models import (  # noqa: E402
    ChildRelationship,
    DeletedRecord,
    Field,
    GetDeletedResult,
    GetUpdatedResult,
    PicklistEntry,
    Record,
    RecordTypeInfo,
    SObjectDetail,
    SObjectSummary,
)

__all__ = [
    "ChildRelationship",
    "DeletedRecord",
    "Field",
    "GetDeletedResult",
    "GetUpdatedResult",
    "MappingError",
    "MissingCredentialsError",
    "NotFoundError",
    "PicklistEntry",
    "Record",
    "RecordTypeInfo",
    "SFConfig",
    "SObjectDetail",
    "SObjectSummary",
    "SObjectsClient",
    "SObjectsError",
    "SalesforceAPI",
    "TransportError",
    "ValidationError",
]

# Keep library modules quiet unless the app configures logging:
logging.getLogger(__name__).addHandler(logging.NullHandler())
