"""Helpers shared by the sfobjects subcommands."""

from __future__ import annotations

import dataclasses
import json
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Sequence

import click

from .api import SalesforceAPI, SFConfig
from .client import SObjectsClient
from .exceptions import MissingCredentialsError, SObjectsError


def connect_or_abort(api: Any) -> None:
    """Connect ``api``; missing credentials or a rejected login become a ClickException."""
    try:
        api.connect()
    except MissingCredentialsError as e:
        needed = ", ".join(e.missing)
        msg = (
            f"Missing Salesforce credentials: {needed}\n\n"
            "Set these environment variables (or create a .env file), e.g. for "
            "client-credentials auth:\n"
            "  SF_AUTH_FLOW=client_credentials\n"
            "  SF_CLIENT_ID=...             # Connected App Consumer Key\n"
            "  SF_CLIENT_SECRET=...         # Connected App Client Secret\n"
            "  SF_LOGIN_URL=https://login.salesforce.com  # or your custom domain URL\n"
            "  SF_API_VERSION=v60.0         # optional; will auto-discover if omitted\n\n"
            "Alternatively set SF_ACCESS_TOKEN and SF_INSTANCE_URL to reuse a session."
        )
        raise click.ClickException(msg) from e
    except SObjectsError as e:
        raise click.ClickException(f"Could not connect to Salesforce: {e}") from e


def open_client() -> SObjectsClient:
    """Connected client configured from the environment."""
    api = SalesforceAPI(SFConfig.from_env())
    connect_or_abort(api)
    return SObjectsClient(api)


@contextmanager
def reported_errors() -> Iterator[None]:
    """Render sObject failures as ClickException (exit code 1)."""
    try:
        yield
    except SObjectsError as e:
        raise click.ClickException(str(e)) from e


def echo_json(value: Any) -> None:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        value = dataclasses.asdict(value)
    click.echo(json.dumps(value, indent=2, default=str))


def parse_fields(assignments: Sequence[str], json_text: Optional[str]) -> Dict[str, Any]:
    """Build a field map from ``KEY=VALUE`` pairs and/or a JSON object.

    ``KEY=VALUE`` values are kept as strings; use ``--json`` for typed values.
    """
    fields: Dict[str, Any] = {}
    if json_text:
        try:
            loaded = json.loads(json_text)
        except ValueError as e:
            raise click.BadParameter(f"not valid JSON: {e}", param_hint="--json") from e
        if not isinstance(loaded, dict):
            raise click.BadParameter("must be a JSON object", param_hint="--json")
        fields.update(loaded)
    for item in assignments:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}", param_hint="FIELDS")
        fields[key] = value
    if not fields:
        raise click.UsageError("No fields given; pass KEY=VALUE pairs or --json.")
    return fields
