from __future__ import annotations

from fastapi import APIRouter, Request

from socialshop.models import OrderIn, OrderOut
from socialshop.services.audit import audit_event
from socialshop.services.orders import create_order

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderOut, status_code=201)
async def post_order(req: Request, body: OrderIn):
    order = create_order(body.model_dump())
    audit_event("order_create", None, req, outcome="success", order_id=order["order_id"], product_id=order["product_id"])
    return order
