from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional

import structlog
from boto3.dynamodb.conditions import Key
from botocore.exceptions import BotoCoreError, ClientError

from socialshop.core.cursor import decode_cursor, encode_cursor
from socialshop.core.errors import PersistenceError, ValidationError
from socialshop.core.normalize import clean_str, require_str
from socialshop.core.settings import S
from socialshop.core.tables import T
from socialshop.core.time import now_ms
from socialshop.metrics import record_feeling_attached
from socialshop.services.feeling_catalog import lookup_feeling, parse_feeling_type

logger = structlog.get_logger(__name__)

MIN_INTENSITY = 1
MAX_INTENSITY = 10
DEFAULT_INTENSITY = 5
MAX_DESCRIPTION_LEN = 200


def _item_to_feeling(item: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "feeling_id": item["feeling_id"],
        "post_id": item["post_id"],
        "user_id": item["user_id"],
        "type": item["feeling_type"],
        "intensity": int(item.get("intensity", DEFAULT_INTENSITY)),
        "emoji": item["emoji"],
        "description": item.get("description") or "",
        "created_at": int(item["created_at"]),
        "updated_at": int(item.get("updated_at", item["created_at"])),
    }


def _validate_intensity(value: Any) -> int:
    if value is None:
        return DEFAULT_INTENSITY
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("intensity must be an integer")
    if not MIN_INTENSITY <= value <= MAX_INTENSITY:
        raise ValidationError(f"intensity must be between {MIN_INTENSITY} and {MAX_INTENSITY}")
    return value


def attach_feeling(user_id: str, post_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    post_id = require_str(post_id, "postId is required")
    feeling_type = parse_feeling_type(payload.get("type"))
    if feeling_type is None:
        raise ValidationError(f"Unsupported feeling type: {payload.get('type')}")
    meta = lookup_feeling(feeling_type.value)
    description = clean_str(payload.get("description"), max_len=MAX_DESCRIPTION_LEN, field="description")
    ts = now_ms()
    item = {
        "post_id": post_id,
        "feeling_id": uuid.uuid4().hex,
        "user_id": user_id,
        "feeling_type": feeling_type.value,
        "intensity": _validate_intensity(payload.get("intensity")),
        "emoji": clean_str(payload.get("emoji")) or meta.emoji,
        "description": description or meta.description,
        "created_at": ts,
        "updated_at": ts,
    }
    try:
        T.feelings.put_item(Item=item, ConditionExpression="attribute_not_exists(feeling_id)")
    except (BotoCoreError, ClientError) as exc:
        raise PersistenceError("Failed to add feeling") from exc
    record_feeling_attached(item["feeling_type"])
    return _item_to_feeling(item)


def list_post_feelings(post_id: str) -> List[Dict[str, Any]]:
    items: List[Dict[str, Any]] = []
    kwargs: Dict[str, Any] = {"KeyConditionExpression": Key("post_id").eq(post_id)}
    try:
        while True:
            resp = T.feelings.query(**kwargs)
            items.extend(resp.get("Items", []))
            last = resp.get("LastEvaluatedKey")
            if not last:
                break
            kwargs["ExclusiveStartKey"] = last
    except (BotoCoreError, ClientError) as exc:
        raise PersistenceError("Failed to fetch feelings") from exc
    feelings = [_item_to_feeling(item) for item in items]
    feelings.sort(key=lambda f: (f["created_at"], f["feeling_id"]), reverse=True)
    return feelings


_CURSOR_STR_KEYS = ("post_id", "feeling_id", "feeling_type")


def _start_key_from_cursor(cursor: str, feeling_type: str) -> Dict[str, Any]:
    # must be exactly a LastEvaluatedKey of the type index: table key + index key
    start = decode_cursor(cursor)
    if start is None or set(start) != {*_CURSOR_STR_KEYS, "created_at"}:
        raise ValidationError("Invalid cursor")
    if not all(isinstance(start[k], str) and start[k] for k in _CURSOR_STR_KEYS):
        raise ValidationError("Invalid cursor")
    created_at = start["created_at"]
    if isinstance(created_at, bool) or not isinstance(created_at, int):
        raise ValidationError("Invalid cursor")
    if start["feeling_type"] != feeling_type:
        raise ValidationError("Invalid cursor")
    return start


def list_feelings_by_type(feeling_type: str, limit: int, cursor: Optional[str] = None) -> Dict[str, Any]:
    """
    One page of feelings of a given type across all posts, newest first.

    ``cursor`` is the opaque ``next_cursor`` of the previous page.
    """
    parsed = parse_feeling_type(feeling_type)
    if parsed is None:
        raise ValidationError(f"Unsupported feeling type: {feeling_type}")
    limit = max(1, min(int(limit), S.feelings_page_max))

    kwargs: Dict[str, Any] = {
        "IndexName": S.feelings_type_index,
        "KeyConditionExpression": Key("feeling_type").eq(parsed.value),
        "ScanIndexForward": False,
        "Limit": limit,
    }
    if cursor:
        kwargs["ExclusiveStartKey"] = _start_key_from_cursor(cursor, parsed.value)

    try:
        resp = T.feelings.query(**kwargs)
    except (BotoCoreError, ClientError) as exc:
        raise PersistenceError("Failed to fetch feelings") from exc
    return {
        "items": [_item_to_feeling(item) for item in resp.get("Items", [])],
        "next_cursor": encode_cursor(resp.get("LastEvaluatedKey")),
    }
