import json
from unittest.mock import MagicMock

import pytest

from sfobjects.api import SalesforceAPI, SFConfig
from sfobjects.client import SObjectsClient

INSTANCE_URL = "https://na7.salesforce.com"
API_VERSION = "v23.0"
DATA_URL = f"{INSTANCE_URL}/services/data/{API_VERSION}"


def _make_response(status=200, body=None, headers=None):
    """requests.Response stand-in; dict/list bodies are JSON-encoded."""
    if body is None:
        content = b""
    elif isinstance(body, bytes):
        content = body
    elif isinstance(body, str):
        content = body.encode("utf-8")
    else:
        content = json.dumps(body).encode("utf-8")

    r = MagicMock()
    r.status_code = status
    r.content = content
    r.text = content.decode("utf-8", "replace")
    r.headers = headers or {"Content-Type": "application/json;charset=UTF-8"}
    r.iter_content.side_effect = lambda chunk_size=1: iter(
        [content[i : i + chunk_size] for i in range(0, len(content), chunk_size)]
    )
    return r


@pytest.fixture
def make_response():
    return _make_response


@pytest.fixture
def connected_api():
    """Return a pre-connected API instance."""
    cfg = SFConfig(
        access_token="token",
        instance_url=INSTANCE_URL,
        api_version=API_VERSION,
    )
    api = SalesforceAPI(cfg)
    api.access_token = "token"
    api.instance_url = INSTANCE_URL
    api.api_version = API_VERSION
    return api


@pytest.fixture
def client(connected_api):
    return SObjectsClient(connected_api)


def _urls(name):
    base = f"/services/data/{API_VERSION}/sobjects/{name}"
    return {
        "sobject": base,
        "describe": f"{base}/describe",
        "rowTemplate": f"{base}/{{ID}}",
    }


def _account_identity():
    return {
        "name": "Account",
        "label": "Account",
        "labelPlural": "Accounts",
        "keyPrefix": "001",
        "custom": False,
        "customSetting": False,
        "createable": True,
        "deletable": True,
        "undeletable": True,
        "updateable": True,
        "queryable": True,
        "retrieveable": True,
        "searchable": True,
        "layoutable": True,
        "replicateable": True,
        "triggerable": True,
        "mergeable": True,
        "feedEnabled": True,
        "activateable": False,
        "deprecatedAndHidden": False,
        "urls": _urls("Account"),
    }


@pytest.fixture
def sobjects_payload():
    """Global describe body with 160 entries, Account first."""
    entries = [_account_identity()]
    for i in range(1, 160):
        name = f"Custom{i:03d}__c"
        entries.append(
            {
                "name": name,
                "label": f"Custom {i}",
                "labelPlural": f"Custom {i}s",
                "keyPrefix": f"a{i:02d}"[:3],
                "custom": True,
                "queryable": i % 10 != 0,
                "urls": _urls(name),
            }
        )
    return {"encoding": "UTF-8", "maxBatchSize": 200, "sobjects": entries}


@pytest.fixture
def account_payload():
    """Body of GET sobjects/Account."""
    return {
        "objectDescribe": _account_identity(),
        "recentItems": [
            {
                "attributes": {
                    "type": "Account",
                    "url": f"/services/data/{API_VERSION}/sobjects/Account/001D000000INjVeIAL",
                },
                "Id": "001D000000INjVeIAL",
                "Name": "GenePoint",
            }
        ],
    }


@pytest.fixture
def account_describe_payload():
    """Describe body: 45 fields, 1 record type, 36 child relationships."""
    fields = [
        {
            "name": "Id",
            "type": "id",
            "label": "Account ID",
            "length": 18,
            "byteLength": 18,
            "soapType": "tns:ID",
            "nillable": False,
            "custom": False,
            "createable": False,
            "updateable": False,
            "unique": False,
            "idLookup": True,
            "filterable": True,
            "sortable": True,
            "defaultValue": None,
            "referenceTo": [],
            "relationshipName": None,
            "picklistValues": [],
        },
        {
            "name": "ParentId",
            "type": "reference",
            "label": "Parent Account ID",
            "length": 18,
            "nillable": True,
            "createable": True,
            "updateable": True,
            "referenceTo": ["Account"],
            "relationshipName": "Parent",
            "picklistValues": [],
        },
        {
            "name": "Type",
            "type": "picklist",
            "label": "Account Type",
            "length": 40,
            "nillable": True,
            "createable": True,
            "updateable": True,
            "referenceTo": [],
            "picklistValues": [
                {"value": "Prospect", "label": "Prospect", "active": True, "defaultValue": False},
                {"value": "Other", "label": "Other", "active": False, "defaultValue": False},
            ],
        },
    ]
    for i in range(len(fields), 45):
        fields.append({"name": f"Field{i}__c", "type": "string", "length": 255, "custom": True})

    child_relationships = [
        {
            "field": "ParentId",
            "childSObject": "Account",
            "relationshipName": "ChildAccounts",
            "cascadeDelete": False,
            "restrictedDelete": False,
            "deprecatedAndHidden": False,
        }
    ]
    for i in range(1, 36):
        child_relationships.append(
            {
                "field": "AccountId",
                "childSObject": f"Child{i}",
                "relationshipName": f"Children{i}",
                "cascadeDelete": i % 2 == 0,
            }
        )

    body = _account_identity()
    body.update(
        {
            "fields": fields,
            "recordTypeInfos": [
                {
                    "name": "Master",
                    "recordTypeId": "012000000000000AAA",
                    "available": True,
                    "defaultRecordTypeMapping": True,
                    "master": True,
                }
            ],
            "childRelationships": child_relationships,
        }
    )
    return body


@pytest.fixture
def deleted_payload():
    return {
        "deletedRecords": [
            {"id": "001Z000000gFpeGIAS", "deletedDate": "2014-01-03T00:00:00.000+0000"}
        ],
        "earliestDateAvailable": "2014-01-01T00:00:00.000+0000",
        "latestDateCovered": "2014-01-05T00:00:00.000+0000",
    }
