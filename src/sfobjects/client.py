"""Operation facade for generic sObject resources.

Each public method is one request/response exchange: build the URL, pick the
verb, send through the injected transport, map the body. The client keeps no
state beyond its collaborators, so one instance can serve concurrent callers
whenever the transport can.
"""

from __future__ import annotations

import io
import json
import logging
from datetime import datetime
from typing import Any, BinaryIO, Dict, Iterable, List, Mapping, Optional

from . import mapper
from .exceptions import MappingError, NotFoundError, TransportError, ValidationError
from .models import GetDeletedResult, GetUpdatedResult, Record, SObjectDetail, SObjectSummary
from .urls import build_url, sobject_path
from .verbs import Operation, verb_for

_logger = logging.getLogger(__name__)

BLOB_CHUNK_SIZE = 64 * 1024
_JSON_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}
# Statuses that carry an error list but are not field validation problems.
_NOT_VALIDATION = (401, 403, 404)


class BlobStream(io.RawIOBase):
    """Raw reader over a streamed response; closing it releases the connection."""

    def __init__(self, response: Any, chunk_size: int = BLOB_CHUNK_SIZE) -> None:
        super().__init__()
        self._response = None
        self._pending = b""
        self._chunks = iter(response.iter_content(chunk_size=chunk_size))
        # set last: a half-built stream must not close what get_blob still owns
        self._response = response

    def readable(self) -> bool:
        return True

    def readinto(self, b: Any) -> int:
        while not self._pending:
            try:
                self._pending = next(self._chunks)
            except StopIteration:
                return 0
        n = min(len(b), len(self._pending))
        b[:n] = self._pending[:n]
        self._pending = self._pending[n:]
        return n

    def close(self) -> None:
        if not self.closed and self._response is not None:
            self._response.close()
        super().close()


class SObjectsClient:
    """Typed access to ``/services/data/<version>/sobjects`` resources.

    ``api`` is the transport: anything with ``instance_url``, ``api_version``
    and ``request(method, url, *, data=None, headers=None, stream=False)``
    returning a requests-style response (``SalesforceAPI`` fits). ``codec``
    encodes and decodes JSON bodies and defaults to the ``json`` module.
    """

    def __init__(self, api: Any, codec: Any = json) -> None:
        self.api = api
        self.codec = codec

    # --------------------------- Metadata ---------------------------

    def list_objects(self) -> List[Record]:
        """All sObject descriptors of the org, raw and in server order."""
        return mapper.to_record_list(self._call(Operation.LIST, sobject_path()))

    def get_summary(self, object_type: str) -> SObjectSummary:
        return mapper.to_summary(self._call(Operation.SUMMARY, sobject_path(object_type)))

    def describe(self, object_type: str) -> SObjectDetail:
        """Full metadata: fields, record types and child relationships."""
        body = self._call(Operation.DESCRIBE, sobject_path(object_type, "describe"))
        return mapper.to_detail(body)

    # --------------------------- Records ----------------------------

    def get_record(
        self,
        object_type: str,
        record_id: str,
        fields: Optional[Iterable[str]] = None,
    ) -> Record:
        params = {"fields": ",".join(fields)} if fields else None
        body = self._call(Operation.GET_RECORD, sobject_path(object_type, record_id), params=params)
        return mapper.to_record(body)

    def get_blob(self, object_type: str, record_id: str, field_name: str) -> BinaryIO:
        """Stream a binary field (e.g. ``Attachment.Body``).

        The caller owns the returned file object and must close it, which
        also releases the underlying connection.
        """
        url = self._url(Operation.GET_BLOB, sobject_path(object_type, record_id, field_name))
        response = self._send(Operation.GET_BLOB, url, stream=True)
        try:
            return io.BufferedReader(BlobStream(response))
        except Exception:
            response.close()
            raise

    def create(self, object_type: str, fields: Mapping[str, Any]) -> Record:
        """Insert a record; the result holds at least the new ``id``."""
        body = self._call(Operation.CREATE, sobject_path(object_type), body=fields)
        return mapper.to_record(body)

    def update(self, object_type: str, record_id: str, fields: Mapping[str, Any]) -> Record:
        """Patch a record. Salesforce usually answers with an empty body, giving ``{}``."""
        body = self._call(Operation.UPDATE, sobject_path(object_type, record_id), body=fields)
        return mapper.to_record(body)

    def delete(self, object_type: str, record_id: str) -> None:
        self._call(Operation.DELETE, sobject_path(object_type, record_id))

    # --------------------------- Replication ------------------------

    def get_deleted(self, object_type: str, start: datetime, end: datetime) -> GetDeletedResult:
        """Records of ``object_type`` deleted between ``start`` and ``end``.

        Bound inclusiveness is whatever Salesforce applies; values are sent as given.
        """
        body = self._call(
            Operation.GET_DELETED,
            sobject_path(object_type, "deleted", ""),
            params=self._window(start, end),
        )
        return mapper.to_get_deleted_result(body)

    def get_updated(self, object_type: str, start: datetime, end: datetime) -> GetUpdatedResult:
        body = self._call(
            Operation.GET_UPDATED,
            sobject_path(object_type, "updated", ""),
            params=self._window(start, end),
        )
        return mapper.to_get_updated_result(body)

    # --------------------------- Internals --------------------------

    @staticmethod
    def _window(start: datetime, end: datetime) -> Dict[str, str]:
        return {"start": mapper.format_datetime(start), "end": mapper.format_datetime(end)}

    def _url(
        self,
        operation: Operation,
        path: str,
        params: Optional[Mapping[str, str]] = None,
    ) -> str:
        if not self.api.instance_url or not self.api.api_version:
            raise RuntimeError("Not connected to Salesforce; call connect() first.")
        query = verb_for(operation).query(params)
        return build_url(self.api.instance_url, self.api.api_version, path, query)

    def _call(
        self,
        operation: Operation,
        path: str,
        *,
        params: Optional[Mapping[str, str]] = None,
        body: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        url = self._url(operation, path, params)
        response = self._send(operation, url, body=body)
        return self._decode(response)

    def _send(
        self,
        operation: Operation,
        url: str,
        *,
        body: Optional[Mapping[str, Any]] = None,
        stream: bool = False,
    ) -> Any:
        verb = verb_for(operation)
        data = None
        headers = {} if stream else {"Accept": "application/json"}
        if verb.sends_body:
            data = self.codec.dumps(dict(body or {}))
            headers = dict(_JSON_HEADERS)

        _logger.debug("%s %s (%s)", verb.method, url, operation.value)
        response = self.api.request(verb.method, url, data=data, headers=headers, stream=stream)
        if 200 <= response.status_code < 300:
            return response

        try:
            self._raise_for_status(response, verb.method, url)
        finally:
            response.close()

    def _decode(self, response: Any) -> Any:
        content = response.content
        if not content:
            return None
        try:
            return self.codec.loads(content)
        except ValueError as e:
            raise MappingError(
                f"Response body is not valid JSON: {e}", status_code=response.status_code
            ) from e

    def _raise_for_status(self, response: Any, method: str, url: str) -> None:
        status = response.status_code
        errors = self._error_list(response)
        detail = "; ".join(e.get("message", "") for e in errors if e.get("message"))
        message = f"HTTP {status} from {method} {url}" + (f": {detail}" if detail else "")
        _logger.warning("%s", message)

        if status == 404:
            raise NotFoundError(message, status_code=status, errors=errors)
        if 400 <= status < 500 and errors and status not in _NOT_VALIDATION:
            raise ValidationError(message, status_code=status, errors=errors)
        raise TransportError(message, status_code=status, errors=errors)

    def _error_list(self, response: Any) -> List[Dict[str, Any]]:
        """Salesforce's ``[{"message", "errorCode", "fields"}]`` body, or ``[]``."""
        try:
            body = self._decode(response)
        except MappingError:
            return []
        if isinstance(body, dict):
            body = [body]
        if not isinstance(body, list):
            return []
        return [e for e in body if isinstance(e, dict) and ("errorCode" in e or "message" in e)]
