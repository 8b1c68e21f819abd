from __future__ import annotations

from datetime import datetime, timezone

import click

from .command_common import open_client, reported_errors

_DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S"]


def _window_options(f):
    f = click.option(
        "--end",
        required=True,
        type=click.DateTime(formats=_DATE_FORMATS),
        help="End of the window (UTC).",
    )(f)
    f = click.option(
        "--start",
        required=True,
        type=click.DateTime(formats=_DATE_FORMATS),
        help="Start of the window (UTC).",
    )(f)
    return f


def _utc(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc)


@click.command("deleted")
@click.argument("object_type")
@_window_options
def deleted_cmd(object_type: str, start: datetime, end: datetime) -> None:
    """List OBJECT_TYPE records deleted between --start and --end."""
    client = open_client()
    with reported_errors():
        result = client.get_deleted(object_type, _utc(start), _utc(end))

    for rec in result.deleted_records:
        click.echo(f"{rec.id}\t{rec.deleted_date.isoformat()}")
    click.echo(
        f"# {len(result.deleted_records)} deleted; "
        f"earliest available {result.earliest_date_available.isoformat()}, "
        f"latest covered {result.latest_date_covered.isoformat()}",
        err=True,
    )


@click.command("updated")
@click.argument("object_type")
@_window_options
def updated_cmd(object_type: str, start: datetime, end: datetime) -> None:
    """List ids of OBJECT_TYPE records updated between --start and --end."""
    client = open_client()
    with reported_errors():
        result = client.get_updated(object_type, _utc(start), _utc(end))

    for record_id in result.ids:
        click.echo(record_id)
    click.echo(
        f"# {len(result.ids)} updated; latest covered {result.latest_date_covered.isoformat()}",
        err=True,
    )
