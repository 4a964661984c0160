"""
Shared utility functions for ID generation, serialization and query strings.
"""

import json
import uuid
from typing import Any, List, Mapping, Tuple


def new_message_id() -> str:
    """
    Generate a random, globally unique protocol identifier.

    Returns:
        UUID4 string like "3f1c9a52-8d0e-4b8e-9a51-0d7c2b1e6f44"
    """
    return str(uuid.uuid4())


def serialize_value(value: Any) -> str:
    """
    Serialize a nested repository object for a tag value.

    Compact JSON with non-ASCII characters kept as-is, so consumers can
    ``json.loads`` it back to an equal structure.

    Examples:
        >>> serialize_value({"type": "income", "evidence": "₹ certificate"})
        '{"type":"income","evidence":"₹ certificate"}'
    """
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def capitalize_first(text: str) -> str:
    """
    Upper-case the first character only.

    Examples:
        >>> capitalize_first("personal")
        'Personal'
        >>> capitalize_first("")
        ''
    """
    return text[:1].upper() + text[1:]


def build_query_string(params: Mapping[str, Any]) -> str:
    """
    Encode nested parameters in bracket style, without percent-encoding.

    The content repository expects the qs library's format.

    Examples:
        >>> build_query_string({"page": "1", "filters": {"title": {"$contains": "merit"}}})
        'page=1&filters[title][$contains]=merit'
        >>> build_query_string({"tags": ["a", "b"]})
        'tags[]=a&tags[]=b'
    """
    pairs: List[Tuple[str, str]] = []
    for key, value in params.items():
        _flatten(str(key), value, pairs)
    return "&".join(f"{k}={v}" for k, v in pairs)


def _flatten(prefix: str, value: Any, pairs: List[Tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, item in value.items():
            _flatten(f"{prefix}[{key}]", item, pairs)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _flatten(f"{prefix}[]", item, pairs)
    elif isinstance(value, bool):
        pairs.append((prefix, "true" if value else "false"))
    else:
        pairs.append((prefix, str(value)))
