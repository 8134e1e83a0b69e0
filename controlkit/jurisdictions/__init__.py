# Jurisdictions package
from .registry import (
    JURISDICTIONS,
    generate_policy,
    get_jurisdiction,
    get_jurisdiction_questions,
    list_jurisdictions,
    visible_questions,
)
from .schema import (
    JurisdictionDefinition,
    JurisdictionQuestions,
    JurisdictionSummary,
    PolicyBlock,
    PolicyDocument,
    Question,
    Section,
)

__all__ = [
    "JURISDICTIONS",
    "generate_policy",
    "get_jurisdiction",
    "get_jurisdiction_questions",
    "list_jurisdictions",
    "visible_questions",
    "JurisdictionDefinition",
    "JurisdictionQuestions",
    "JurisdictionSummary",
    "PolicyBlock",
    "PolicyDocument",
    "Question",
    "Section",
]
