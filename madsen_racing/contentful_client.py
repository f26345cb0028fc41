"""Contentful connection and query helpers for the site's content types."""

import re
import threading
from typing import Any

import contentful

from madsen_racing import config

_clients: dict[bool, contentful.Client] = {}
_client_lock = threading.Lock()


def create_client(preview: bool = False) -> contentful.Client:
    """Build a Delivery (or Preview) API client from the current config.

    The content type cache is disabled so construction never touches the
    network.
    """
    token = config.CONTENTFUL_PREVIEW_TOKEN if preview else config.CONTENTFUL_ACCESS_TOKEN
    host = config.CONTENTFUL_PREVIEW_HOST if preview else config.CONTENTFUL_DELIVERY_HOST
    return contentful.Client(
        config.CONTENTFUL_SPACE_ID,
        token,
        api_url=host,
        environment=config.CONTENTFUL_ENVIRONMENT,
        timeout_s=config.CONTENTFUL_TIMEOUT_S,
        content_type_cache=False,
    )


def get_client(preview: bool = False) -> contentful.Client | None:
    """Return the cached client for the mode, or None when unconfigured (thread-safe)."""
    if not config.contentful_configured(preview):
        return None
    client = _clients.get(preview)
    if client is None:
        with _client_lock:
            client = _clients.get(preview)
            if client is None:
                client = create_client(preview)
                _clients[preview] = client
    return client


def reset_clients() -> None:
    """Forget cached clients (after a config change)."""
    with _client_lock:
        _clients.clear()


# ---------------------------------------------------------------------------
# Query building
# ---------------------------------------------------------------------------

def _param(value: Any) -> Any:
    """Encode a filter value the way the Delivery API expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, set)):
        return ",".join(str(v) for v in value)
    return value


def build_query(content_type: str, filters: dict | None = None,
                order: str | list[str] | None = None, limit: int | None = None,
                **extra: Any) -> dict:
    """Compose a Delivery API query dict.

    ``filters`` keys are field ids, optionally with an operator suffix:
    ``{"season": "2026", "date[gte]": "2026-01-01", "tags[in]": [...]}``.
    ``order`` uses field ids too; a leading ``-`` sorts descending.
    """
    query: dict[str, Any] = {"content_type": content_type}
    for key, value in (filters or {}).items():
        if value is None:
            continue
        query[f"fields.{key}"] = _param(value)
    if order:
        fields = [order] if isinstance(order, str) else list(order)
        query["order"] = ",".join(
            f"-fields.{f[1:]}" if f.startswith("-") else f"fields.{f}" for f in fields
        )
    if limit:
        query["limit"] = limit
    if config.CONTENTFUL_LOCALE:
        query["locale"] = config.CONTENTFUL_LOCALE
    for key, value in extra.items():
        if value is not None:
            query[key] = _param(value)
    return query


def fetch_entries(client, query: dict) -> list:
    """Run an entries query and return the items as a list."""
    return list(client.entries(query))


# ---------------------------------------------------------------------------
# Entry normalisation
# ---------------------------------------------------------------------------

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def snake_case(name: str) -> str:
    return _CAMEL_RE.sub("_", name).lower()


def _raw(value: Any) -> Any:
    """SDK resources → their raw JSON; lists element-wise; everything else as-is."""
    if isinstance(value, (list, tuple)):
        return [_raw(v) for v in value]
    raw = getattr(value, "raw", None)
    if isinstance(raw, dict):
        return raw
    return value


def entry_sys(entry: Any) -> dict:
    """The ``sys`` block of an entry (SDK object or JSON dict)."""
    if isinstance(entry, dict):
        return entry.get("sys") or {}
    raw = getattr(entry, "raw", None)
    if isinstance(raw, dict):
        return raw.get("sys") or {}
    return {}


def entry_fields(entry: Any) -> dict:
    """Field values keyed by their camelCase Contentful ids.

    SDK entries resolve links (assets, referenced entries) in ``fields()``
    but key them in snake_case; raw JSON keeps camelCase ids with unresolved
    links. Merge the two so callers see camelCase ids with resolved values.
    """
    if isinstance(entry, dict):
        return {k: _raw(v) for k, v in (entry.get("fields") or {}).items()}

    raw = getattr(entry, "raw", None) or {}
    raw_fields = raw.get("fields") or {}
    try:
        resolved = entry.fields()
    except (AttributeError, TypeError):
        resolved = {}

    out = {}
    for key, value in raw_fields.items():
        if key in resolved:
            out[key] = _raw(resolved[key])
        elif snake_case(key) in resolved:
            out[key] = _raw(resolved[snake_case(key)])
        else:
            out[key] = value
    return out
