from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from socialshop.auth.deps import require_user
from socialshop.models import AddressIn, AddressMutationResp, AddressOut, MessageResp
from socialshop.services.addresses import (
    create_address,
    delete_address,
    list_addresses,
    set_default_address,
    update_address,
)
from socialshop.services.audit import audit_event

router = APIRouter(prefix="/addresses", tags=["addresses"])


@router.get("", response_model=list[AddressOut])
async def get_user_addresses(ctx=Depends(require_user)):
    return list_addresses(ctx["user_id"])


@router.post("", response_model=AddressMutationResp, status_code=201)
async def add_address(req: Request, body: AddressIn, ctx=Depends(require_user)):
    address = create_address(ctx["user_id"], body.model_dump())
    audit_event(
        "address_create",
        ctx["user_id"],
        req,
        outcome="success",
        address_id=address["address_id"],
        is_default=address["is_default"],
    )
    return {"message": "Address added successfully", "address": address}


@router.put("/{address_id}", response_model=AddressMutationResp)
async def put_address(req: Request, address_id: str, body: AddressIn, ctx=Depends(require_user)):
    address = update_address(ctx["user_id"], address_id, body.model_dump())
    audit_event(
        "address_update",
        ctx["user_id"],
        req,
        outcome="success",
        address_id=address_id,
        is_default=address["is_default"],
    )
    return {"message": "Address updated successfully", "address": address}


@router.delete("/{address_id}", response_model=MessageResp)
async def remove_address(req: Request, address_id: str, ctx=Depends(require_user)):
    address = delete_address(ctx["user_id"], address_id)
    audit_event(
        "address_delete",
        ctx["user_id"],
        req,
        outcome="success",
        address_id=address_id,
        was_default=address["is_default"],
    )
    return {"message": "Address deleted successfully"}


@router.patch("/{address_id}/default", response_model=AddressMutationResp)
async def make_default_address(req: Request, address_id: str, ctx=Depends(require_user)):
    address = set_default_address(ctx["user_id"], address_id)
    audit_event("address_default_set", ctx["user_id"], req, outcome="success", address_id=address_id)
    return {"message": "Default address set successfully", "address": address}
