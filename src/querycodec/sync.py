"""Request preparation for REST sync.

The interceptor is an explicit configuration object handed to whatever
transport performs the request. It adds the ``Accept`` and
``Authorization`` headers and, for write methods, strips server-managed
fields from the payload before serialising it as JSON. Nothing here performs
I/O.
"""

import json
from typing import Any, Callable, Dict, FrozenSet, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .codec import encode
from .codec.scalars import percent_encode
from .constants import DEFAULT_STRIPPED_FIELDS, SYNC_METHODS, WRITE_METHODS
from .exceptions import InvalidFieldError
from .logger import get_logger
from .settings import settings as api_settings

__all__ = (
    "PreparedRequest",
    "SyncInterceptor",
    "entity_url",
    "collection_url",
    "unwrap_collection",
)

logger = get_logger(__name__)


class PreparedRequest(BaseModel):
    method: str = Field(..., description="Sync method: create, read, update, patch or delete.")
    headers: Dict[str, str] = Field(default_factory=dict, description="Headers to send.")
    body: Optional[str] = Field(None, description="JSON body for write methods.")


def _has_header(headers: Mapping[str, str], name: str) -> bool:
    lowered = name.lower()
    return any(key.lower() == lowered and value for key, value in headers.items())


class SyncInterceptor(BaseModel):
    """Header injection and payload cleanup applied before every request.

    Requests that open the session itself must not carry the session header:
    prepare them with an interceptor that has no `auth_provider`, or a provider
    that returns None until login completes.

    Example:
        >>> interceptor = SyncInterceptor(auth_provider=lambda: "abc123")
        >>> interceptor.prepare("read").headers["Authorization"]
        'AuthSession abc123'
    """

    model_config = ConfigDict(frozen=True)

    auth_provider: Optional[Callable[[], Optional[str]]] = Field(
        None, description="Returns the current session token, or None when logged out."
    )
    fields_to_strip: FrozenSet[str] = Field(
        DEFAULT_STRIPPED_FIELDS, description="Payload keys removed before create/update/patch."
    )
    auth_scheme: str = Field(default_factory=lambda: api_settings.SYNC_AUTH_SCHEME)
    accept: str = Field(default_factory=lambda: api_settings.SYNC_ACCEPT)
    content_type: str = Field(default_factory=lambda: api_settings.SYNC_CONTENT_TYPE)
    adjust_payload: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = Field(
        None, description="Final payload hook, applied after stripping."
    )

    def prepare(
        self,
        method: str,
        payload: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[str] = None,
    ) -> PreparedRequest:
        """Build the headers and body for one sync call.

        Args:
            method: One of create, read, update, patch, delete
            payload: Mapping or pydantic model to send on writes
            headers: Caller headers; values already present are never overridden
            body: Pre-serialised body; when given, `payload` is ignored

        Raises:
            InvalidFieldError: If `method` is not a sync method
        """
        if method not in SYNC_METHODS:
            raise InvalidFieldError(
                "Unsupported sync method", field="method", value=method, expected=sorted(SYNC_METHODS)
            )

        prepared: Dict[str, str] = dict(headers or {})
        if not _has_header(prepared, "Accept"):
            prepared["Accept"] = self.accept

        if not _has_header(prepared, "Authorization") and self.auth_provider is not None:
            token = self.auth_provider()
            if token:
                prepared["Authorization"] = f"{self.auth_scheme} {token}"

        if method not in WRITE_METHODS:
            return PreparedRequest(method=method, headers=prepared)

        if not _has_header(prepared, "Content-Type"):
            prepared["Content-Type"] = self.content_type
        if body is None:
            body = json.dumps(self.clean_payload(payload))
        return PreparedRequest(method=method, headers=prepared, body=body)

    def clean_payload(self, payload: Any) -> Dict[str, Any]:
        """Copy `payload` without server-managed fields, then apply `adjust_payload`."""
        if payload is None:
            data: Dict[str, Any] = {}
        elif isinstance(payload, BaseModel):
            data = payload.model_dump(mode="json")
        else:
            data = dict(payload)

        stripped = [key for key in data if key in self.fields_to_strip]
        for key in stripped:
            del data[key]
        if stripped:
            logger.debug("Stripped server-managed fields: %s", ", ".join(stripped))

        if self.adjust_payload is not None:
            data = self.adjust_payload(data)
        return data


def entity_url(base: str, key: Any = None) -> str:
    """Return the OData entity URL ``base('<key>')``, or `base` for a new entity."""
    if key is None:
        return base
    if base.endswith("/"):
        base = base[:-1]
    return f"{base}('{percent_encode(str(key))}')"


def collection_url(base: str, query: Any = None) -> str:
    """Append a query string to a collection URL. Non-string queries are encoded first."""
    if query is None or query == "":
        return base
    if not isinstance(query, str):
        query = encode(query)
    return f"{base}?{query}"


def unwrap_collection(response: Any) -> Any:
    """Return the ``value`` list of an OData collection response, or the response itself."""
    if isinstance(response, Mapping) and isinstance(response.get("value"), list):
        return response["value"]
    return response
