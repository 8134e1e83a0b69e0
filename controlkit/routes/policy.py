"""Policy routes — generate a governance document and redeem PDF tokens.

Endpoints:
  POST /api/generate             — Generate a policy for the selected jurisdictions
  GET  /api/pdf?token=...        — Regenerate a policy from a signed PDF token
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, Query, Request, status

from ..jurisdictions import generate_policy
from ..schemas.policy_schema import (
    GeneratePolicyRequest,
    GeneratePolicyResponse,
    PdfDataResponse,
)
from ..services.analytics import track_generation
from ..services.token_utils import create_pdf_token, decode_pdf_token
from ..timing import sync_timer

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Policy"],
)


# ── Helpers ──────────────────────────────────────────────────────────────

def _token_timestamp(payload: Dict[str, Any]) -> Optional[datetime]:
    """Generation time carried by a token, if readable."""
    raw = payload.get("generatedAt")
    if not isinstance(raw, str):
        return None
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


# ── Routes ───────────────────────────────────────────────────────────────

@router.post(
    "/generate",
    response_model=GeneratePolicyResponse,
    summary="Generate Policy",
    response_description="Policy document and a short-lived PDF token",
)
def generate(body: GeneratePolicyRequest, request: Request) -> GeneratePolicyResponse:
    """Generate the governance policy for the submitted wizard answers.

    Rules:
    - At least one jurisdiction id is required; unknown ids are skipped.
    - Analytics and token signing never fail the request.
    """
    if not body.jurisdictions:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="At least one jurisdiction must be selected",
        )
    if body.answers is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Answers are required",
        )

    # ── Analytics hook ───────────────────────────────────────────
    try:
        track_generation(
            body.jurisdictions,
            session_id=body.session_id,
            client_host=request.client.host if request.client else None,
        )
    except Exception as exc:
        logger.warning("Analytics hook failed (non-blocking): %s", exc)

    # ── Generate ─────────────────────────────────────────────────
    with sync_timer("policy", "GENERATE"):
        policy = generate_policy(body.jurisdictions, body.answers)

    # ── PDF token ────────────────────────────────────────────────
    pdf_token = None
    try:
        with sync_timer("pdf_token", "SIGN"):
            pdf_token = create_pdf_token(body.jurisdictions, body.answers, policy.generated_at)
    except Exception as exc:
        logger.error("PDF token signing failed (client will render locally): %s", exc)

    return GeneratePolicyResponse(policy=policy, pdfToken=pdf_token)


@router.get(
    "/pdf",
    response_model=PdfDataResponse,
    summary="Get PDF data",
    response_description="Regenerated policy for client-side PDF rendering",
)
def pdf_data(
    token: Optional[str] = Query(None, description="Token returned by POST /api/generate"),
) -> PdfDataResponse:
    """Verify a PDF token and regenerate the policy it describes."""
    if not token:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Token required",
        )

    payload = decode_pdf_token(token)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    with sync_timer("pdf", "REGENERATE"):
        policy = generate_policy(
            payload["selectedIds"],
            payload["answers"],
            now=_token_timestamp(payload),
        )
    return PdfDataResponse(policy=policy)
