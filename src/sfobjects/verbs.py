from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional

OVERRIDE_PARAM = "_HttpMethod"


class Operation(str, Enum):
    LIST = "list"
    SUMMARY = "summary"
    DESCRIBE = "describe"
    GET_RECORD = "get-record"
    GET_BLOB = "get-blob"
    GET_DELETED = "get-deleted"
    GET_UPDATED = "get-updated"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class Verb:
    """HTTP method actually sent, plus the verb Salesforce should apply."""

    method: str
    override: Optional[str] = None
    sends_body: bool = False

    def query(self, extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """Query parameters for this verb; the override always comes first."""
        params: Dict[str, str] = {}
        if self.override:
            params[OVERRIDE_PARAM] = self.override
        for key, value in (extra or {}).items():
            if key in params:
                raise ValueError(f"Duplicate query parameter {key!r}")
            params[key] = value
        return params


_GET = Verb("GET")

# PATCH and DELETE tunnel through POST; Salesforce honours the _HttpMethod override.
_VERBS: Dict[Operation, Verb] = {
    Operation.LIST: _GET,
    Operation.SUMMARY: _GET,
    Operation.DESCRIBE: _GET,
    Operation.GET_RECORD: _GET,
    Operation.GET_BLOB: _GET,
    Operation.GET_DELETED: _GET,
    Operation.GET_UPDATED: _GET,
    Operation.CREATE: Verb("POST", sends_body=True),
    Operation.UPDATE: Verb("POST", override="PATCH", sends_body=True),
    Operation.DELETE: Verb("POST", override="DELETE"),
}


def verb_for(operation: Operation) -> Verb:
    return _VERBS[operation]
