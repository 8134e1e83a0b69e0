"""Jurisdiction registry — listing, question lookup and policy assembly.

The registry is a module-level mapping built once at import time. Iteration
order is the listing order the wizard shows.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Iterable, List, Mapping, Optional

from . import australia, brazil, canada, china, eu, uk, usa
from .schema import (
    AnswerMap,
    JurisdictionDefinition,
    JurisdictionQuestions,
    JurisdictionSummary,
    PolicyBlock,
    PolicyDocument,
    Question,
)

JURISDICTIONS: Dict[str, JurisdictionDefinition] = {
    module.JURISDICTION.id: module.JURISDICTION
    for module in (eu, usa, uk, brazil, china, australia, canada)
}


def get_jurisdiction(jurisdiction_id: str) -> Optional[JurisdictionDefinition]:
    return JURISDICTIONS.get(jurisdiction_id)


def list_jurisdictions() -> List[JurisdictionSummary]:
    """Summary metadata for every jurisdiction, in registry order."""
    return [definition.summary() for definition in JURISDICTIONS.values()]


def get_jurisdiction_questions(jurisdiction_id: str) -> Optional[JurisdictionQuestions]:
    """Full question list for one jurisdiction, or None if the id is unknown.

    ``dependsOn`` metadata is returned as declared; visibility is evaluated
    by the client.
    """
    definition = JURISDICTIONS.get(jurisdiction_id)
    if definition is None:
        return None
    return JurisdictionQuestions(
        jurisdiction=definition.id,
        questions=list(definition.questions),
    )


def visible_questions(jurisdiction_id: str, answers: AnswerMap) -> List[Question]:
    """Questions whose ``dependsOn`` gate is satisfied by ``answers``."""
    definition = JURISDICTIONS.get(jurisdiction_id)
    if definition is None:
        return []
    return [
        q for q in definition.questions
        if q.depends_on is None or q.depends_on.is_met(answers)
    ]


def generate_policy(
    selected_ids: Iterable[str],
    answers: Optional[Mapping[str, AnswerMap]] = None,
    now: Optional[datetime] = None,
) -> PolicyDocument:
    """Assemble a policy document for the selected jurisdictions.

    Selection order is preserved and unknown ids are skipped. A jurisdiction
    without an answer map is generated from ``{}``. The timestamp is taken
    once for the whole document.
    """
    generated_at = now or datetime.now(timezone.utc)
    answers = answers or {}

    blocks: List[PolicyBlock] = []
    for jurisdiction_id in selected_ids:
        definition = JURISDICTIONS.get(jurisdiction_id)
        if definition is None:
            continue
        blocks.append(PolicyBlock(
            jurisdiction=definition.id,
            title=definition.title,
            content=definition.generate_policy(answers.get(jurisdiction_id) or {}),
        ))

    return PolicyDocument(generatedAt=generated_at, sections=blocks)
