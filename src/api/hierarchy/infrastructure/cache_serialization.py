"""JSON codecs for cached hierarchy derivations.

Cache stores hold strings. Ancestor ids are stored as a JSON list of
integers, group lists as a JSON list of group dicts, and existence
checks as JSON booleans.
"""

from __future__ import annotations

import json
from typing import Any

from hierarchy.domain.cache_keys import CacheOperation
from hierarchy.domain.value_objects import Group

_GROUP_OPERATIONS = (CacheOperation.DESCENDANTS, CacheOperation.ANCESTOR_PATH)


def encode_value(operation: CacheOperation, value: Any) -> str:
    """Serialize a derived value for a cache store.

    Args:
        operation: The kind of derivation the value belongs to
        value: list[int], list[Group] or bool, depending on operation

    Returns:
        JSON text
    """
    if operation in _GROUP_OPERATIONS:
        return json.dumps([group.to_dict() for group in value])
    if operation == CacheOperation.HAS_CHILDREN:
        return json.dumps(bool(value))
    return json.dumps([int(group_id) for group_id in value])


def decode_value(operation: CacheOperation, raw: str) -> Any:
    """Reconstruct a derived value from its cached JSON text.

    Raises:
        ValueError: If the text is not valid for the operation
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid cached {operation} value") from e

    if operation == CacheOperation.HAS_CHILDREN:
        if not isinstance(data, bool):
            raise ValueError(f"Invalid cached {operation} value: {data!r}")
        return data

    if not isinstance(data, list):
        raise ValueError(f"Invalid cached {operation} value: {data!r}")

    try:
        if operation in _GROUP_OPERATIONS:
            return [Group.from_dict(item) for item in data]
        return [int(item) for item in data]
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid cached {operation} value") from e
