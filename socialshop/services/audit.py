from __future__ import annotations

from typing import Any, Dict, Optional

import structlog

from socialshop.core.normalize import client_ip_from_request
from socialshop.core.settings import S

logger = structlog.get_logger("socialshop.audit")


def audit_event(event: str, user_id: Optional[str], request=None, **fields: Any) -> None:
    """Structured audit line for a completed mutation (stdout, one JSON object per line)."""
    if not S.audit_log_enabled:
        return
    payload: Dict[str, Any] = {"user_id": user_id, **fields}
    if request is not None:
        payload["ip"] = client_ip_from_request(request)
        payload["user_agent"] = request.headers.get("user-agent", "")[:256]
    logger.info(event, **payload)
