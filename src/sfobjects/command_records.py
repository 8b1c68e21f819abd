from __future__ import annotations

from typing import Optional, Tuple

import click

from .command_common import echo_json, open_client, parse_fields, reported_errors


@click.command("get")
@click.argument("object_type")
@click.argument("record_id")
@click.option("--field", "fields", multiple=True, help="Only return this field (repeatable).")
def get_cmd(object_type: str, record_id: str, fields: Tuple[str, ...]) -> None:
    """Fetch one record as JSON."""
    client = open_client()
    with reported_errors():
        echo_json(client.get_record(object_type, record_id, fields or None))


@click.command("create")
@click.argument("object_type")
@click.argument("assignments", nargs=-1, metavar="[KEY=VALUE]...")
@click.option("--json", "json_text", help="Field values as a JSON object.")
def create_cmd(object_type: str, assignments: Tuple[str, ...], json_text: Optional[str]) -> None:
    """Create an OBJECT_TYPE record and print the response."""
    fields = parse_fields(assignments, json_text)
    client = open_client()
    with reported_errors():
        echo_json(client.create(object_type, fields))


@click.command("update")
@click.argument("object_type")
@click.argument("record_id")
@click.argument("assignments", nargs=-1, metavar="[KEY=VALUE]...")
@click.option("--json", "json_text", help="Field values as a JSON object.")
def update_cmd(
    object_type: str,
    record_id: str,
    assignments: Tuple[str, ...],
    json_text: Optional[str],
) -> None:
    """Update fields of one record."""
    fields = parse_fields(assignments, json_text)
    client = open_client()
    with reported_errors():
        result = client.update(object_type, record_id, fields)
    if result:
        echo_json(result)
    click.echo(f"Updated {object_type} {record_id}")


@click.command("delete")
@click.argument("object_type")
@click.argument("record_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
def delete_cmd(object_type: str, record_id: str, yes: bool) -> None:
    """Delete one record."""
    if not yes:
        click.confirm(f"Delete {object_type} {record_id}?", abort=True)
    client = open_client()
    with reported_errors():
        client.delete(object_type, record_id)
    click.echo(f"Deleted {object_type} {record_id}")
