"""Translate Salesforce JSON bodies into value objects and back.

All functions are pure: they take the decoded body (dicts/lists as the JSON
codec produced them) and return fresh objects. Record maps are never
normalised, so a ``"true"`` string stays a string and ``1`` stays an int.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Tuple

from .exceptions import MappingError
from .models import (
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

# Outgoing window bounds: explicit UTC offset, no fractional seconds.
WIRE_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S+0000"

_PARSE_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
)

# wire key -> attribute name
_SUMMARY_FLAGS = {
    "custom": "custom",
    "customSetting": "custom_setting",
    "createable": "createable",
    "deletable": "deletable",
    "undeletable": "undeletable",
    "updateable": "updateable",
    "queryable": "queryable",
    "retrieveable": "retrieveable",
    "searchable": "searchable",
    "layoutable": "layoutable",
    "replicateable": "replicateable",
    "triggerable": "triggerable",
    "mergeable": "mergeable",
    "feedEnabled": "feed_enabled",
    "activateable": "activateable",
    "deprecatedAndHidden": "deprecated_and_hidden",
}

_FIELD_ATTRS = {
    "label": "label",
    "length": "length",
    "precision": "precision",
    "scale": "scale",
    "byteLength": "byte_length",
    "digits": "digits",
    "soapType": "soap_type",
    "nillable": "nillable",
    "custom": "custom",
    "createable": "createable",
    "updateable": "updateable",
    "unique": "unique",
    "nameField": "name_field",
    "externalId": "external_id",
    "calculated": "calculated",
    "autoNumber": "auto_number",
    "filterable": "filterable",
    "sortable": "sortable",
    "defaultValue": "default_value",
    "relationshipName": "relationship_name",
}


# ----------------------------------------------------------------------
# Timestamps
# ----------------------------------------------------------------------
def format_datetime(value: datetime) -> str:
    """Render ``value`` as ``YYYY-MM-DDTHH:MM:SS+0000``; naive means UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(WIRE_DATETIME_FORMAT)


def parse_datetime(text: Any) -> datetime:
    """Parse a Salesforce dateTime (``2014-01-03T00:00:00.000+0000``) to aware UTC."""
    if not isinstance(text, str):
        raise MappingError(f"Expected a date-time string, got {text!r}")
    for fmt in _PARSE_FORMATS:
        try:
            return datetime.strptime(text, fmt).astimezone(timezone.utc)
        except ValueError:
            continue
    raise MappingError(f"Malformed date-time value: {text!r}")


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------
def _require_mapping(payload: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise MappingError(f"Expected a JSON object for {what}, got {type(payload).__name__}")
    return payload


def _require(payload: Mapping[str, Any], key: str, what: str) -> Any:
    value = payload.get(key)
    if value is None:
        raise MappingError(f"{what} is missing required member {key!r}")
    return value


def _require_list(payload: Mapping[str, Any], key: str, what: str) -> List[Any]:
    value = _require(payload, key, what)
    if not isinstance(value, list):
        raise MappingError(f"{what} member {key!r} should be an array")
    return value


def _optional_list(payload: Mapping[str, Any], key: str, what: str) -> List[Any]:
    if payload.get(key) is None:
        return []
    return _require_list(payload, key, what)


def _copy_attrs(payload: Mapping[str, Any], table: Mapping[str, str]) -> Dict[str, Any]:
    return {attr: payload[key] for key, attr in table.items() if payload.get(key) is not None}


# ----------------------------------------------------------------------
# Responses
# ----------------------------------------------------------------------
def to_record_list(payload: Any) -> List[Record]:
    """Entries of ``GET sobjects`` as raw maps, in source order."""
    if isinstance(payload, list):
        entries = payload
    else:
        entries = _require_list(_require_mapping(payload, "sObject list"), "sobjects", "sObject list")
    for entry in entries:
        _require_mapping(entry, "sObject list entry")
    return list(entries)


def to_summary(payload: Any) -> SObjectSummary:
    """``GET sobjects/{type}`` (or a bare describe object) to ``SObjectSummary``."""
    body = _require_mapping(payload, "sObject summary")
    if "objectDescribe" in body:
        body = _require_mapping(body["objectDescribe"], "objectDescribe")

    name = _require(body, "name", "sObject summary")
    urls = _require_mapping(_require(body, "urls", "sObject summary"), "urls")
    if not urls.get("sobject"):
        raise MappingError(f"sObject summary {name!r} has no canonical 'sobject' url")
    return SObjectSummary(
        name=name,
        urls=dict(urls),
        label=body.get("label"),
        label_plural=body.get("labelPlural"),
        key_prefix=body.get("keyPrefix"),
        **_copy_attrs(body, _SUMMARY_FLAGS),
    )


def to_picklist_entry(payload: Any) -> PicklistEntry:
    body = _require_mapping(payload, "picklist entry")
    return PicklistEntry(
        value=_require(body, "value", "picklist entry"),
        label=body.get("label"),
        active=bool(body.get("active", True)),
        default_value=bool(body.get("defaultValue", False)),
    )


def to_field(payload: Any) -> Field:
    body = _require_mapping(payload, "field")
    what = f"field {body.get('name')!r}"
    return Field(
        name=_require(body, "name", "field"),
        type=_require(body, "type", what),
        reference_to=tuple(_optional_list(body, "referenceTo", what)),
        picklist_values=tuple(
            to_picklist_entry(p) for p in _optional_list(body, "picklistValues", what)
        ),
        **_copy_attrs(body, _FIELD_ATTRS),
    )


def to_record_type_info(payload: Any) -> RecordTypeInfo:
    body = _require_mapping(payload, "record type info")
    return RecordTypeInfo(
        name=_require(body, "name", "record type info"),
        record_type_id=body.get("recordTypeId"),
        available=bool(body.get("available", False)),
        default_record_type_mapping=bool(body.get("defaultRecordTypeMapping", False)),
        master=bool(body.get("master", False)),
    )


def to_child_relationship(payload: Any) -> ChildRelationship:
    body = _require_mapping(payload, "child relationship")
    return ChildRelationship(
        field=_require(body, "field", "child relationship"),
        child_sobject=body.get("childSObject"),
        relationship_name=body.get("relationshipName"),
        cascade_delete=bool(body.get("cascadeDelete", False)),
        restricted_delete=bool(body.get("restrictedDelete", False)),
        deprecated_and_hidden=bool(body.get("deprecatedAndHidden", False)),
    )


def to_detail(payload: Any) -> SObjectDetail:
    """``GET sobjects/{type}/describe`` to ``SObjectDetail``, order preserved."""
    body = _require_mapping(payload, "sObject describe")
    return SObjectDetail(
        summary=to_summary(body),
        fields=tuple(to_field(f) for f in _require_list(body, "fields", "sObject describe")),
        record_type_infos=tuple(
            to_record_type_info(r) for r in _optional_list(body, "recordTypeInfos", "sObject describe")
        ),
        child_relationships=tuple(
            to_child_relationship(c)
            for c in _optional_list(body, "childRelationships", "sObject describe")
        ),
    )


def to_record(payload: Any) -> Record:
    """Create/update/get bodies: the decoded map as is; no body means ``{}``."""
    if payload is None:
        return {}
    return dict(_require_mapping(payload, "record"))


def to_get_deleted_result(payload: Any) -> GetDeletedResult:
    body = _require_mapping(payload, "deleted records")
    records: Tuple[DeletedRecord, ...] = tuple(
        DeletedRecord(
            id=_require(_require_mapping(r, "deleted record"), "id", "deleted record"),
            deleted_date=parse_datetime(_require(r, "deletedDate", "deleted record")),
        )
        for r in _require_list(body, "deletedRecords", "deleted records")
    )
    return GetDeletedResult(
        earliest_date_available=parse_datetime(
            _require(body, "earliestDateAvailable", "deleted records")
        ),
        latest_date_covered=parse_datetime(_require(body, "latestDateCovered", "deleted records")),
        deleted_records=records,
    )


def to_get_updated_result(payload: Any) -> GetUpdatedResult:
    body = _require_mapping(payload, "updated records")
    return GetUpdatedResult(
        latest_date_covered=parse_datetime(_require(body, "latestDateCovered", "updated records")),
        ids=tuple(_require_list(body, "ids", "updated records")),
    )
