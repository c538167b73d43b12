from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from socialshop.auth.deps import require_user
from socialshop.models import FeelingIn, FeelingMetaOut, FeelingOut, FeelingPage
from socialshop.services.audit import audit_event
from socialshop.services.feeling_catalog import catalog_entries, lookup_feeling
from socialshop.services.feelings import attach_feeling, list_feelings_by_type, list_post_feelings

router = APIRouter(tags=["feelings"])


@router.get("/feelings/catalog", response_model=list[FeelingMetaOut])
async def get_feeling_catalog():
    return catalog_entries()


@router.get("/feelings/catalog/{feeling_type}", response_model=FeelingMetaOut)
async def get_feeling_meta(feeling_type: str):
    meta = lookup_feeling(feeling_type)
    return {"type": feeling_type, "emoji": meta.emoji, "description": meta.description}


@router.get("/feelings", response_model=FeelingPage)
async def get_feelings_by_type(
    feeling_type: str = Query(..., alias="type", min_length=1),
    limit: int = Query(20, ge=1, le=100),
    cursor: Optional[str] = Query(None),
):
    return list_feelings_by_type(feeling_type, limit, cursor)


@router.post("/posts/{post_id}/feelings", response_model=FeelingOut, status_code=201)
async def add_post_feeling(req: Request, post_id: str, body: FeelingIn, ctx=Depends(require_user)):
    feeling = attach_feeling(ctx["user_id"], post_id, body.model_dump())
    audit_event(
        "feeling_attach",
        ctx["user_id"],
        req,
        outcome="success",
        post_id=post_id,
        feeling_id=feeling["feeling_id"],
        feeling_type=feeling["type"],
    )
    return feeling


@router.get("/posts/{post_id}/feelings", response_model=list[FeelingOut])
async def get_post_feelings(post_id: str):
    return list_post_feelings(post_id)
