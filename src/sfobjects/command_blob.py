from __future__ import annotations

import logging
import os
from typing import Optional

import click
from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

from .client import BLOB_CHUNK_SIZE
from .command_common import open_client, reported_errors

_logger = logging.getLogger(__name__)


@click.command("blob")
@click.argument("object_type")
@click.argument("record_id")
@click.argument("field_name")
@click.option(
    "-o",
    "--output",
    "output",
    type=click.Path(dir_okay=False, writable=True),
    help="Write to this file (default: <record_id>_<field_name>.bin).",
)
@click.option("--no-progress", is_flag=True, help="Disable the progress bar.")
def blob_cmd(
    object_type: str,
    record_id: str,
    field_name: str,
    output: Optional[str],
    no_progress: bool,
) -> None:
    """Download a binary field, e.g. `blob Attachment 00P... Body`."""
    target = output or f"{record_id}_{field_name}.bin"
    parent = os.path.dirname(target)
    if parent:
        os.makedirs(parent, exist_ok=True)

    client = open_client()
    written = 0
    # console log lines go through tqdm.write so the bar stays on one line
    with reported_errors(), logging_redirect_tqdm():
        with client.get_blob(object_type, record_id, field_name) as stream, open(
            target, "wb"
        ) as fh, tqdm(
            unit="B", unit_scale=True, desc=field_name, disable=no_progress
        ) as bar:
            for chunk in iter(lambda: stream.read(BLOB_CHUNK_SIZE), b""):
                fh.write(chunk)
                written += len(chunk)
                bar.update(len(chunk))

    _logger.info("Wrote %d bytes to %s", written, target)
    click.echo(f"{target} ({written} bytes)")
