# Schemas package
from .policy_schema import (
    GeneratePolicyRequest,
    GeneratePolicyResponse,
    JurisdictionListResponse,
    PdfDataResponse,
)

__all__ = [
    "GeneratePolicyRequest",
    "GeneratePolicyResponse",
    "JurisdictionListResponse",
    "PdfDataResponse",
]
