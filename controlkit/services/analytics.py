"""Usage tracking hooks for policy generation.

Hooks only log today. Callers treat them as non-blocking: a failure here
must never fail the request.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


def track_generation(
    jurisdictions: List[str],
    session_id: Optional[str] = None,
    client_host: Optional[str] = None,
) -> Dict[str, Any]:
    """Emit one ``policy_generated`` event and return it."""
    event = {
        "event": "policy_generated",
        "jurisdictions": list(jurisdictions),
        "jurisdictionCount": len(jurisdictions),
        "sessionId": session_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "client": client_host or "unknown",
    }
    logger.info(json.dumps(event))
    return event
