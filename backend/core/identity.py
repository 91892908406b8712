"""Caller identity from the platform-injected client principal header."""
import base64
import binascii
import json
import logging
from typing import Optional

from models.telemetry import UserInfo, ANONYMOUS_USER

logger = logging.getLogger(__name__)

PRINCIPAL_HEADER = "x-ms-client-principal"


def extract_user_info(principal_header: Optional[str]) -> UserInfo:
    """Decode the base64 JSON principal; anonymous when missing or unreadable."""
    if not principal_header:
        return ANONYMOUS_USER
    try:
        principal = json.loads(base64.b64decode(principal_header).decode("utf-8"))
        if not isinstance(principal, dict):
            raise ValueError("principal is not an object")
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        logger.error("Failed to parse user principal: %s", e)
        return ANONYMOUS_USER

    user_id = str(principal.get("userId") or "unknown")
    return UserInfo(
        user_id=user_id,
        user_login=str(principal.get("userDetails") or user_id),
        user_provider=str(principal.get("identityProvider") or "unknown"),
    )
