"""Absolute, version-qualified URLs for the Salesforce REST data API."""

from __future__ import annotations

from typing import Mapping, Optional
from urllib.parse import quote, urlencode

DATA_PREFIX = "services/data"

# ':' stays literal inside timestamps; everything else reserved (notably '+') is escaped.
_QUERY_SAFE = ":"


def sobject_path(*segments: str) -> str:
    """Join path segments under ``sobjects``; segments are used verbatim."""
    return "/".join(("sobjects",) + segments)


def encode_query(params: Mapping[str, str]) -> str:
    return urlencode(list(params.items()), quote_via=quote, safe=_QUERY_SAFE)


def build_url(
    base: str,
    version: str,
    path: str,
    params: Optional[Mapping[str, str]] = None,
) -> str:
    """Return ``<base>/services/data/<version>/<path>[?<query>]``.

    ``path`` is inserted as given, so a trailing ``/`` (``sobjects/X/deleted/``)
    is preserved. Query values are percent-encoded so a ``+0000`` offset reads
    ``%2B0000`` on the wire.
    """
    url = f"{base.rstrip('/')}/{DATA_PREFIX}/{version}/{path.lstrip('/')}"
    if params:
        url = f"{url}?{encode_query(params)}"
    return url
