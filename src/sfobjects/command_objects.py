from __future__ import annotations

import click

from .command_common import echo_json, open_client, reported_errors


@click.command("objects")
@click.option(
    "--all",
    "show_all",
    is_flag=True,
    help="Show all sObjects (default: only queryable).",
)
def objects_cmd(show_all: bool) -> None:
    """List sObject names (queryable by default)."""
    client = open_client()
    with reported_errors():
        sobjs = client.list_objects()

    names = sorted(s["name"] for s in sobjs if show_all or s.get("queryable"))
    for n in names:
        click.echo(n)


@click.command("summary")
@click.argument("object_type")
def summary_cmd(object_type: str) -> None:
    """Show the summary (flags, key prefix, URLs) of OBJECT_TYPE."""
    client = open_client()
    with reported_errors():
        echo_json(client.get_summary(object_type))


@click.command("describe")
@click.argument("object_type")
@click.option("--fields", "fields_only", is_flag=True, help="Print field names and types only.")
def describe_cmd(object_type: str, fields_only: bool) -> None:
    """Describe OBJECT_TYPE: fields, record types and child relationships."""
    client = open_client()
    with reported_errors():
        detail = client.describe(object_type)

    if fields_only:
        for f in detail.fields:
            click.echo(f"{f.name}\t{f.type}")
        return
    echo_json(detail)
