from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Any, Dict

import structlog
from botocore.exceptions import BotoCoreError, ClientError

from socialshop.core.errors import PersistenceError, ValidationError
from socialshop.core.tables import T
from socialshop.core.time import now_ms
from socialshop.metrics import record_order_created

logger = structlog.get_logger(__name__)

REQUIRED_ORDER_FIELDS = (
    "product_id",
    "product_name",
    "product_image",
    "product_price",
    "buyer_name",
    "address",
    "phone",
    "city",
    "postal",
)


def create_order(payload: Dict[str, Any]) -> Dict[str, Any]:
    # falsy counts as missing, so a zero price or id is rejected too
    missing = [field for field in REQUIRED_ORDER_FIELDS if not payload.get(field)]
    if missing:
        logger.info("order_rejected", missing=missing)
        raise ValidationError("All fields are required.")

    # DynamoDB has no float type, and NaN/Infinity have no number form at all
    price = Decimal(str(payload["product_price"]))
    if not price.is_finite():
        logger.info("order_rejected", invalid=["product_price"])
        raise ValidationError("productPrice must be a finite number")

    order = {field: payload[field] for field in REQUIRED_ORDER_FIELDS}
    order["order_id"] = uuid.uuid4().hex
    order["created_at"] = now_ms()

    item = {**order, "product_price": price}
    try:
        T.orders.put_item(Item=item, ConditionExpression="attribute_not_exists(order_id)")
    except (BotoCoreError, ClientError) as exc:
        # orders report store failures as a client error with the store's message
        raise PersistenceError(str(exc), status_code=400) from exc
    record_order_created()
    return order
