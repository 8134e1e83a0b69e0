"""Jurisdiction routes — listing and question lookup for the wizard.

Endpoints:
  GET  /api/jurisdictions        — All jurisdictions with summary metadata
  GET  /api/questions/{id}       — Question list for one jurisdiction
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ..jurisdictions import get_jurisdiction_questions, list_jurisdictions
from ..jurisdictions.schema import JurisdictionQuestions
from ..schemas.policy_schema import JurisdictionListResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Jurisdictions"],
)


@router.get(
    "/jurisdictions",
    response_model=JurisdictionListResponse,
    summary="List jurisdictions",
    response_description="Every supported jurisdiction in display order",
)
def get_jurisdictions() -> JurisdictionListResponse:
    return JurisdictionListResponse(jurisdictions=list_jurisdictions())


@router.get(
    "/questions/{jurisdiction_id}",
    response_model=JurisdictionQuestions,
    response_model_exclude_none=True,
    summary="Get questions for a jurisdiction",
    response_description="Ordered questions with dependsOn metadata",
)
def get_questions(jurisdiction_id: str) -> JurisdictionQuestions:
    """Return the question list. Dependencies are not evaluated server-side."""
    questions = get_jurisdiction_questions(jurisdiction_id)
    if questions is None:
        logger.info("Question lookup for unknown jurisdiction '%s'", jurisdiction_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Jurisdiction '{jurisdiction_id}' not found",
        )
    return questions
