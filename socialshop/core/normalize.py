from __future__ import annotations

from typing import Any, Optional

from .errors import ValidationError

def client_ip_from_request(req) -> str:
    xff = req.headers.get("x-forwarded-for")
    if xff:
        return xff.split(",")[0].strip()
    return req.client.host if req.client else "0.0.0.0"

def clean_str(value: Any, *, max_len: Optional[int] = None, field: str = "value") -> str:
    """Trim a free-text field; ``None`` and blanks collapse to ``""``."""
    if value is None:
        return ""
    trimmed = str(value).strip()
    if max_len is not None and len(trimmed) > max_len:
        raise ValidationError(f"{field} too long (max {max_len})")
    return trimmed

def require_str(value: Any, message: str, *, max_len: Optional[int] = None, field: str = "value") -> str:
    cleaned = clean_str(value, max_len=max_len, field=field)
    if not cleaned:
        raise ValidationError(message)
    return cleaned
