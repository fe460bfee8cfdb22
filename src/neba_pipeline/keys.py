"""Cache key schema.

Key format: {context}:{type}:{identifier}[:{qualifier}...]

Where:
- context: "website", "api" or "shared" (bounded context owning the entry)
- type: "doc", "query", "job", "session", "awards"
- identifier: query name, document key, award type, ...
- qualifier: query parameters or a variant such as "content"

Keys are pure functions of their inputs so they are identical across
processes and restarts.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any

WEBSITE_CONTEXT = "website"
API_CONTEXT = "api"
SHARED_CONTEXT = "shared"

MAX_KEY_LENGTH = 512

_ESCAPE_MAP = {
    char: "\\" + char for char in ("\\", ":", "~", ",", "=", "[", "]", "{", "}")
}
_NONE_MARKER = "~"


class CacheTypes:
    """Cache type identifiers (second key segment)."""

    DOCUMENT = "doc"
    QUERY = "query"
    JOB = "job"
    SESSION = "session"
    AWARDS = "awards"


def _escape(text: str) -> str:
    return "".join(_ESCAPE_MAP.get(char, char) for char in text)


def render_part(value: Any) -> str:
    """Render one key/tag segment deterministically and escape separators.

    Sets are rendered sorted and mappings by sorted items, so the result
    does not depend on hash order.
    """
    if value is None:
        return _NONE_MARKER
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return _escape(str(value.value))
    if isinstance(value, (datetime, date)):
        return _escape(value.isoformat())
    if isinstance(value, (set, frozenset)):
        return "{" + ",".join(sorted(render_part(v) for v in value)) + "}"
    if isinstance(value, Mapping):
        items = sorted(f"{render_part(k)}={render_part(v)}" for k, v in value.items())
        return "{" + ",".join(items) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(render_part(v) for v in value) + "]"
    return _escape(str(value))


def build_key(query_name: str, *parameters: Any) -> str:
    """Build the cache key for a query and its parameters.

    Queries without parameters (list-all queries) share the fixed key
    ``website:query:{query_name}``.
    """
    if not query_name:
        raise ValueError("query_name must not be empty")

    base = f"{WEBSITE_CONTEXT}:{CacheTypes.QUERY}:{query_name}"
    if not parameters:
        return base
    return f"{base}:" + ":".join(render_part(p) for p in parameters)


# Document keys


def document_content(document_key: str) -> str:
    """Key for document content: website:doc:{document_key}:content."""
    document = render_part(document_key)
    return f"{WEBSITE_CONTEXT}:{CacheTypes.DOCUMENT}:{document}:content"


def document_metadata(document_key: str) -> str:
    """Key for document metadata: website:doc:{document_key}:metadata."""
    document = render_part(document_key)
    return f"{WEBSITE_CONTEXT}:{CacheTypes.DOCUMENT}:{document}:metadata"


def document_job_state(document_key: str) -> str:
    """Key for the current document sync job state."""
    document = render_part(document_key)
    return f"{WEBSITE_CONTEXT}:{CacheTypes.JOB}:doc-sync:{document}:current"


# Award keys


def bowler_of_the_year_awards() -> str:
    return f"{WEBSITE_CONTEXT}:{CacheTypes.AWARDS}:bowler-of-the-year"


def high_average_awards() -> str:
    return f"{WEBSITE_CONTEXT}:{CacheTypes.AWARDS}:high-average"


def high_block_awards() -> str:
    return f"{WEBSITE_CONTEXT}:{CacheTypes.AWARDS}:high-block"


# Key inspection


def is_valid_cache_key(key: str | None) -> bool:
    """Check a key against the naming convention.

    A valid key is non-blank, at most 512 characters, and has at least
    three colon-delimited parts, none of them blank.
    """
    if key is None or not key.strip() or len(key) > MAX_KEY_LENGTH:
        return False
    parts = key.split(":")
    return len(parts) >= 3 and all(part.strip() for part in parts)


def _part(key: str, index: int) -> str:
    parts = key.split(":")
    return parts[index] if len(parts) > index else ""


def get_context(key: str) -> str:
    """Return the context segment ("website" for "website:doc:bylaws")."""
    return _part(key, 0)


def get_cache_type(key: str) -> str:
    """Return the type segment ("doc" for "website:doc:bylaws")."""
    return _part(key, 1)


def get_identifier(key: str) -> str:
    """Return the identifier segment ("bylaws" for "website:doc:bylaws")."""
    return _part(key, 2)
