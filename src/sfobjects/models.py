"""Value objects for sObject metadata and replication windows.

Records themselves stay schema-less (``Record``): object shapes differ per org
and per type, so they are passed around as plain field maps.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

Record = Dict[str, Any]


@dataclass(frozen=True)
class SObjectSummary:
    name: str
    urls: Dict[str, str]
    label: Optional[str] = None
    label_plural: Optional[str] = None
    key_prefix: Optional[str] = None
    custom: bool = False
    custom_setting: bool = False
    createable: bool = False
    deletable: bool = False
    undeletable: bool = False
    updateable: bool = False
    queryable: bool = False
    retrieveable: bool = False
    searchable: bool = False
    layoutable: bool = False
    replicateable: bool = False
    triggerable: bool = False
    mergeable: bool = False
    feed_enabled: bool = False
    activateable: bool = False
    deprecated_and_hidden: bool = False


@dataclass(frozen=True)
class PicklistEntry:
    value: str
    label: Optional[str] = None
    active: bool = True
    default_value: bool = False


@dataclass(frozen=True)
class Field:
    """One entry of the ``fields`` array of a describe result."""

    name: str
    type: str
    label: Optional[str] = None
    length: int = 0
    precision: int = 0
    scale: int = 0
    byte_length: int = 0
    digits: int = 0
    soap_type: Optional[str] = None
    nillable: bool = False
    custom: bool = False
    createable: bool = False
    updateable: bool = False
    unique: bool = False
    name_field: bool = False
    external_id: bool = False
    calculated: bool = False
    auto_number: bool = False
    filterable: bool = False
    sortable: bool = False
    default_value: Any = None
    reference_to: Tuple[str, ...] = ()
    relationship_name: Optional[str] = None
    picklist_values: Tuple[PicklistEntry, ...] = ()


@dataclass(frozen=True)
class RecordTypeInfo:
    name: str
    record_type_id: Optional[str] = None
    available: bool = False
    default_record_type_mapping: bool = False
    master: bool = False


@dataclass(frozen=True)
class ChildRelationship:
    field: str
    child_sobject: Optional[str] = None
    relationship_name: Optional[str] = None
    cascade_delete: bool = False
    restricted_delete: bool = False
    deprecated_and_hidden: bool = False


@dataclass(frozen=True)
class SObjectDetail:
    """Full describe result: the summary identity plus its nested metadata."""

    summary: SObjectSummary
    fields: Tuple[Field, ...] = ()
    record_type_infos: Tuple[RecordTypeInfo, ...] = ()
    child_relationships: Tuple[ChildRelationship, ...] = ()

    @property
    def name(self) -> str:
        return self.summary.name

    @property
    def label(self) -> Optional[str]:
        return self.summary.label

    @property
    def label_plural(self) -> Optional[str]:
        return self.summary.label_plural

    @property
    def key_prefix(self) -> Optional[str]:
        return self.summary.key_prefix

    @property
    def custom(self) -> bool:
        return self.summary.custom

    @property
    def urls(self) -> Dict[str, str]:
        return self.summary.urls

    def field_named(self, name: str) -> Optional[Field]:
        for f in self.fields:
            if f.name == name:
                return f
        return None


@dataclass(frozen=True)
class DeletedRecord:
    id: str
    deleted_date: datetime


@dataclass(frozen=True)
class GetDeletedResult:
    earliest_date_available: datetime
    latest_date_covered: datetime
    deleted_records: Tuple[DeletedRecord, ...] = ()


@dataclass(frozen=True)
class GetUpdatedResult:
    latest_date_covered: datetime
    ids: Tuple[str, ...] = ()
