from __future__ import annotations

import base64
import json
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, HTTPException, Request

from socialshop.core.settings import S

def _jwt_enabled() -> bool:
    return bool(S.jwt_secret)


def _decode_token(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(token, S.jwt_secret, algorithms=[S.jwt_algorithm])
    except jwt.ExpiredSignatureError as exc:
        raise HTTPException(401, "Token expired") from exc
    except jwt.PyJWTError as exc:
        raise HTTPException(401, "Invalid token") from exc


def _user_id_from_claims(claims: Dict[str, Any]) -> Optional[str]:
    for claim in ("userId", "sub"):
        value = claims.get(claim)
        if isinstance(value, (str, int)) and str(value).strip():
            return str(value).strip()
    return None


def _decode_jwt_user_id(token: str) -> Optional[str]:
    if token.count(".") != 2:
        return None
    _, payload, _ = token.split(".", 2)
    if not payload:
        return None
    padding = "=" * (-len(payload) % 4)
    try:
        decoded = base64.urlsafe_b64decode(payload + padding)
        data = json.loads(decoded.decode("utf-8"))
    except (ValueError, json.JSONDecodeError, UnicodeDecodeError):
        return None
    if not isinstance(data, dict):
        return None
    return _user_id_from_claims(data)


def extract_bearer_token(auth_header: Optional[str]) -> str:
    if not auth_header:
        raise HTTPException(401, "No token provided")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(401, "Invalid Authorization header")
    return token.strip()


async def get_authenticated_user_id(request: Request) -> str:
    """
    Resolve the caller's user id.

    With ``JWT_SECRET`` set the bearer token must verify and carry a
    ``userId`` (or ``sub``) claim.

    Dev fallback: ``X-User-Id: <user_id>``, or ``Authorization: Bearer <jwt or user_id>``
    """
    if _jwt_enabled():
        token = extract_bearer_token(request.headers.get("authorization", ""))
        user_id = _user_id_from_claims(_decode_token(token))
        if not user_id:
            raise HTTPException(401, "Token missing user id")
        return user_id

    fallback_user = request.headers.get("x-user-id")
    if fallback_user:
        return fallback_user

    token = extract_bearer_token(request.headers.get("authorization", ""))
    return _decode_jwt_user_id(token) or token


async def require_user(request: Request, user_id: str = Depends(get_authenticated_user_id)) -> Dict[str, str]:
    request.state.user_id = user_id
    return {"user_id": user_id}
