from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional

import structlog
from boto3.dynamodb.conditions import Key
from botocore.exceptions import BotoCoreError, ClientError

from socialshop.core.errors import ConflictError, NotFoundError, PersistenceError
from socialshop.core.normalize import clean_str, require_str
from socialshop.core.tables import T
from socialshop.core.time import now_ms
from socialshop.core.transact import (
    cancellation_codes,
    is_condition_failed,
    is_transaction_cancelled,
    put_op,
    transact_write,
    update_op,
)
from socialshop.metrics import record_address_write, record_default_conflict

logger = structlog.get_logger(__name__)

MAX_FIELD_LEN = 256
OPTIONAL_FIELDS = ("phone", "country", "city", "zip_code", "address")


def normalize_address_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate and normalize a create/update body.

    Updates are full replaces, so this always yields every mutable field:
    absent optional fields become ``""`` and an absent default flag is false.
    """
    out = {"name": require_str(data.get("name"), "Name is required", max_len=MAX_FIELD_LEN, field="name")}
    for field in OPTIONAL_FIELDS:
        out[field] = clean_str(data.get(field), max_len=MAX_FIELD_LEN, field=field)
    out["is_default"] = bool(data.get("is_default"))
    return out


def _item_to_address(item: Dict[str, Any]) -> Dict[str, Any]:
    out = {k: item.get(k) or "" for k in ("address_id", "user_id", "name", *OPTIONAL_FIELDS)}
    out["is_default"] = bool(item.get("is_default", False))
    out["created_at"] = int(item.get("created_at", 0))
    out["updated_at"] = int(item.get("updated_at", 0))
    return out


def _query_addresses(user_id: str) -> List[Dict[str, Any]]:
    items: List[Dict[str, Any]] = []
    kwargs: Dict[str, Any] = {"KeyConditionExpression": Key("user_id").eq(user_id)}
    while True:
        resp = T.addresses.query(**kwargs)
        items.extend(resp.get("Items", []))
        last = resp.get("LastEvaluatedKey")
        if not last:
            return items
        kwargs["ExclusiveStartKey"] = last


def _get_owned(user_id: str, address_id: str) -> Dict[str, Any]:
    # the table key is (user_id, address_id): a miss means absent or not ours
    item = T.addresses.get_item(Key={"user_id": user_id, "address_id": address_id}).get("Item")
    if not item:
        raise NotFoundError("Address not found")
    return item


def _put_existing(item: Dict[str, Any]) -> None:
    try:
        T.addresses.put_item(Item=item, ConditionExpression="attribute_exists(address_id)")
    except ClientError as exc:
        # deleted after the ownership lookup
        if is_condition_failed(exc):
            raise NotFoundError("Address not found") from exc
        raise


def _default_version(user_id: str) -> Optional[int]:
    item = T.address_defaults.get_item(Key={"user_id": user_id}).get("Item")
    if not item:
        return None
    return int(item.get("version", 0))


def _bump_version_op(user_id: str, version: Optional[int], ts: int) -> Dict[str, Any]:
    if version is None:
        condition = "attribute_not_exists(user_id)"
        values: Dict[str, Any] = {":next": 1, ":ts": ts}
    else:
        condition = "#v = :cur"
        values = {":next": version + 1, ":ts": ts, ":cur": version}
    return update_op(
        T.address_defaults,
        {"user_id": user_id},
        "SET #v = :next, updated_at = :ts",
        names={"#v": "version"},
        values=values,
        condition=condition,
    )


def _clear_default_op(user_id: str, address_id: str, ts: int) -> Dict[str, Any]:
    return update_op(
        T.addresses,
        {"user_id": user_id, "address_id": address_id},
        "SET is_default = :f, updated_at = :ts",
        values={":f": False, ":ts": ts},
        condition="attribute_exists(address_id)",
    )


def _commit_as_default(user_id: str, target_op: Dict[str, Any], target_id: str, ts: int) -> None:
    """
    Make ``target_id`` the user's only default in one transaction.

    The transaction clears every other flagged address, applies ``target_op``
    and compare-and-swaps the user's default version, so a concurrent default
    change cancels it instead of leaving two defaults behind. If the target
    itself fails its guard it was deleted meanwhile, which is a 404.
    """
    version = _default_version(user_id)
    others = [
        a["address_id"]
        for a in _query_addresses(user_id)
        if a.get("is_default") and a.get("address_id") != target_id
    ]
    ops = [_clear_default_op(user_id, address_id, ts) for address_id in others]
    ops.append(target_op)
    ops.append(_bump_version_op(user_id, version, ts))
    try:
        transact_write(ops)
    except ClientError as exc:
        if not is_transaction_cancelled(exc):
            raise
        codes = cancellation_codes(exc)
        if len(codes) > len(others) and codes[len(others)] == "ConditionalCheckFailed":
            logger.info("address_vanished", user_id=user_id, address_id=target_id)
            raise NotFoundError("Address not found") from exc
        record_default_conflict()
        logger.warning("address_default_conflict", user_id=user_id, address_id=target_id)
        raise ConflictError("Default address changed concurrently, please retry") from exc
    if others:
        logger.info("address_default_cleared", user_id=user_id, address_ids=others)


def list_addresses(user_id: str) -> List[Dict[str, Any]]:
    try:
        items = _query_addresses(user_id)
    except (BotoCoreError, ClientError) as exc:
        raise PersistenceError("Failed to fetch addresses") from exc
    addresses = [_item_to_address(item) for item in items]
    addresses.sort(key=lambda a: (a["created_at"], a["address_id"]), reverse=True)
    return addresses


def create_address(user_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    fields = normalize_address_payload(payload)
    ts = now_ms()
    item = {
        "user_id": user_id,
        "address_id": uuid.uuid4().hex,
        "created_at": ts,
        "updated_at": ts,
        **fields,
    }
    try:
        if item["is_default"]:
            target = put_op(T.addresses, item, condition="attribute_not_exists(address_id)")
            _commit_as_default(user_id, target, item["address_id"], ts)
        else:
            T.addresses.put_item(Item=item, ConditionExpression="attribute_not_exists(address_id)")
    except (BotoCoreError, ClientError) as exc:
        raise PersistenceError("Failed to add address") from exc
    record_address_write("create")
    return _item_to_address(item)


def update_address(user_id: str, address_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    fields = normalize_address_payload(payload)
    try:
        current = _get_owned(user_id, address_id)
        updated = {
            **current,
            **fields,
            "updated_at": now_ms(),
        }
        if updated["is_default"]:
            target = put_op(T.addresses, updated, condition="attribute_exists(address_id)")
            _commit_as_default(user_id, target, address_id, updated["updated_at"])
        else:
            _put_existing(updated)
    except (BotoCoreError, ClientError) as exc:
        raise PersistenceError("Failed to update address") from exc
    record_address_write("update")
    return _item_to_address(updated)


def delete_address(user_id: str, address_id: str) -> Dict[str, Any]:
    try:
        current = _get_owned(user_id, address_id)
        T.addresses.delete_item(Key={"user_id": user_id, "address_id": address_id})
    except (BotoCoreError, ClientError) as exc:
        raise PersistenceError("Failed to delete address") from exc
    if current.get("is_default"):
        # no other address is promoted; the user is left without a default
        logger.info("address_default_deleted", user_id=user_id, address_id=address_id)
    record_address_write("delete")
    return _item_to_address(current)


def set_default_address(user_id: str, address_id: str) -> Dict[str, Any]:
    try:
        current = _get_owned(user_id, address_id)
        ts = now_ms()
        target = update_op(
            T.addresses,
            {"user_id": user_id, "address_id": address_id},
            "SET is_default = :t, updated_at = :ts",
            values={":t": True, ":ts": ts},
            condition="attribute_exists(address_id)",
        )
        _commit_as_default(user_id, target, address_id, ts)
    except (BotoCoreError, ClientError) as exc:
        raise PersistenceError("Failed to set default address") from exc
    record_address_write("set_default")
    return _item_to_address({**current, "is_default": True, "updated_at": ts})
