"""Pydantic schemas for the policy API request and response bodies."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..jurisdictions.schema import JurisdictionSummary, PolicyDocument


class JurisdictionListResponse(BaseModel):
    """List wrapper for jurisdiction summaries."""

    jurisdictions: List[JurisdictionSummary] = Field(default_factory=list)


class GeneratePolicyRequest(BaseModel):
    """Wizard submission: selected jurisdictions plus answers keyed by jurisdiction id.

    Both fields are optional at the schema level so the route can answer a
    missing selection with a specific 400 message.
    """

    model_config = ConfigDict(populate_by_name=True)

    jurisdictions: Optional[List[str]] = Field(
        None,
        description="Jurisdiction ids in the order their blocks should appear",
    )
    answers: Optional[Dict[str, Optional[Dict[str, Any]]]] = Field(
        None,
        description="Answer maps keyed by jurisdiction id, e.g. {'eu': {'ai_purpose': 'employment'}}",
    )
    session_id: Optional[str] = Field(None, alias="sessionId")


class GeneratePolicyResponse(BaseModel):
    """Generated document plus a token for the PDF data endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    policy: PolicyDocument
    pdf_token: Optional[str] = Field(
        None,
        alias="pdfToken",
        description="Null when token signing failed; the client falls back to local PDF rendering",
    )


class PdfDataResponse(BaseModel):
    """Regenerated document for client-side PDF rendering."""

    policy: PolicyDocument
    message: str = "Use client-side PDF generation with this data"
