"""
Helpers for DynamoDB ``TransactWriteItems``.

The table resources in ``T`` speak plain Python values; the transaction API
only exists on the low-level client, so the ops built here are serialized to
attribute-value form up front.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import ClientError

from .aws import ddb

_serializer = TypeSerializer()

MAX_TRANSACT_ITEMS = 100


def _av(values: Dict[str, Any]) -> Dict[str, Any]:
    return {k: _serializer.serialize(v) for k, v in values.items()}


def _with_expr(
    op: Dict[str, Any],
    *,
    condition: Optional[str],
    names: Optional[Dict[str, str]],
    values: Optional[Dict[str, Any]],
) -> Dict[str, Any]:
    if condition:
        op["ConditionExpression"] = condition
    if names:
        op["ExpressionAttributeNames"] = dict(names)
    if values:
        op["ExpressionAttributeValues"] = _av(values)
    return op


def put_op(
    table: Any,
    item: Dict[str, Any],
    *,
    condition: Optional[str] = None,
    names: Optional[Dict[str, str]] = None,
    values: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    op = {"TableName": table.name, "Item": _av(item)}
    return {"Put": _with_expr(op, condition=condition, names=names, values=values)}


def update_op(
    table: Any,
    key: Dict[str, Any],
    update: str,
    *,
    values: Dict[str, Any],
    condition: Optional[str] = None,
    names: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    op = {"TableName": table.name, "Key": _av(key), "UpdateExpression": update}
    return {"Update": _with_expr(op, condition=condition, names=names, values=values)}


def transact_write(ops: List[Dict[str, Any]]) -> None:
    if not ops:
        return
    if len(ops) > MAX_TRANSACT_ITEMS:
        raise ValueError(f"transaction too large ({len(ops)} > {MAX_TRANSACT_ITEMS})")
    ddb.meta.client.transact_write_items(TransactItems=ops)


def is_transaction_cancelled(exc: ClientError) -> bool:
    code = (exc.response or {}).get("Error", {}).get("Code", "")
    return code in ("TransactionCanceledException", "ConditionalCheckFailedException")


def is_condition_failed(exc: ClientError) -> bool:
    return (exc.response or {}).get("Error", {}).get("Code", "") == "ConditionalCheckFailedException"


def cancellation_codes(exc: ClientError) -> List[str]:
    """Per-op reason codes of a cancelled transaction, in op order ("None" for ops that passed)."""
    reasons = (exc.response or {}).get("CancellationReasons") or []
    return [r.get("Code", "None") for r in reasons]
