"""PDF download tokens — short-lived signed JWTs carrying a generation request.

Rules
-----
- Secret comes from the environment (TOKEN_SECRET); the default is for
  local development only
- The token carries the selection and answers, never the generated prose:
  redeeming it regenerates the policy deterministically
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional

from dotenv import load_dotenv
from jose import JWTError, jwt

load_dotenv()

logger = logging.getLogger(__name__)

_TOKEN_SECRET = os.getenv("TOKEN_SECRET", "development-secret-change-in-production")
_TOKEN_ALGORITHM = "HS256"
_TOKEN_EXPIRE_SECONDS = int(os.getenv("PDF_TOKEN_EXPIRE_SECONDS", "600"))  # 10 min default


def create_pdf_token(
    selected_ids: List[str],
    answers: Mapping[str, Any],
    generated_at: datetime,
    expires_in: Optional[int] = None,
) -> str:
    """Sign a token that lets the client fetch PDF data for this generation."""
    now = datetime.now(timezone.utc)
    lifetime = _TOKEN_EXPIRE_SECONDS if expires_in is None else expires_in
    payload = {
        "selectedIds": list(selected_ids),
        "answers": dict(answers),
        "generatedAt": generated_at.isoformat(),
        "iat": now,
        "exp": now + timedelta(seconds=lifetime),
    }
    return jwt.encode(payload, _TOKEN_SECRET, algorithm=_TOKEN_ALGORITHM)


def decode_pdf_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode and validate a PDF token. Returns payload dict or None."""
    try:
        payload = jwt.decode(token, _TOKEN_SECRET, algorithms=[_TOKEN_ALGORITHM])
    except JWTError as exc:
        logger.info("Rejected PDF token: %s", exc)
        return None
    if not isinstance(payload.get("selectedIds"), list) or not isinstance(payload.get("answers"), dict):
        logger.info("Rejected PDF token: missing selectedIds/answers claims")
        return None
    return payload
