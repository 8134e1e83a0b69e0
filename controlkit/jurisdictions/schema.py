"""Question and policy schemas shared by every jurisdiction.

These models are the contract between the jurisdiction definitions, the
registry, and the API layer. Field aliases are the wire names the wizard
frontend consumes (``dependsOn``, ``questionCount``, ``generatedAt``).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


AnswerMap = Mapping[str, Any]


# ── Questions ────────────────────────────────────────────────────────────

class QuestionOption(BaseModel):
    """One selectable value of a ``select`` question."""

    model_config = ConfigDict(frozen=True)

    value: str
    label: str


class DependsOn(BaseModel):
    """Visibility gate: show the question only when another answer matches."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    field: str = Field(..., description="Id of an earlier question in the same jurisdiction")
    equals: Optional[Union[bool, str]] = None
    not_equals: Optional[Union[bool, str]] = Field(None, alias="notEquals")

    @model_validator(mode="after")
    def exactly_one_condition(self) -> "DependsOn":
        if (self.equals is None) == (self.not_equals is None):
            raise ValueError(
                f"dependsOn '{self.field}' must set exactly one of equals / notEquals"
            )
        return self

    def is_met(self, answers: AnswerMap) -> bool:
        """Evaluate the gate against an answer map (absent answers count as unset)."""
        actual = answers.get(self.field)
        if self.equals is not None:
            return actual == self.equals
        return actual != self.not_equals


class Question(BaseModel):
    """A single wizard question."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    type: Literal["boolean", "select"]
    question: str
    help: Optional[str] = None
    options: Optional[Tuple[QuestionOption, ...]] = None
    depends_on: Optional[DependsOn] = Field(None, alias="dependsOn")

    @model_validator(mode="after")
    def options_match_type(self) -> "Question":
        if self.type == "select" and not self.options:
            raise ValueError(f"Select question '{self.id}' must declare options")
        if self.type == "boolean" and self.options:
            raise ValueError(f"Boolean question '{self.id}' cannot declare options")
        return self

    def option_values(self) -> List[str]:
        return [o.value for o in self.options or ()]


def boolean(
    qid: str,
    question: str,
    help: Optional[str] = None,
    depends_on: Optional[Dict[str, Any]] = None,
) -> Question:
    """Shorthand for declaring a yes/no question."""
    return Question(id=qid, type="boolean", question=question, help=help, dependsOn=depends_on)


def select(
    qid: str,
    question: str,
    options: List[Tuple[Any, str]],
    help: Optional[str] = None,
    depends_on: Optional[Dict[str, Any]] = None,
) -> Question:
    """Shorthand for declaring a single-select question from (value, label) pairs.

    Values may be plain strings or members of the jurisdiction's str enums.
    """
    return Question(
        id=qid,
        type="select",
        question=question,
        help=help,
        options=tuple(
            QuestionOption(value=getattr(v, "value", v), label=label) for v, label in options
        ),
        dependsOn=depends_on,
    )


# ── Generated policy ─────────────────────────────────────────────────────

class Section(BaseModel):
    """One heading + body unit of generated policy prose."""

    model_config = ConfigDict(frozen=True)

    heading: str
    body: str


class PolicyBlock(BaseModel):
    """All sections generated for one jurisdiction."""

    model_config = ConfigDict(frozen=True)

    jurisdiction: str = Field(..., description="Jurisdiction id, e.g. 'eu'")
    title: str = Field(..., description="'<name> — <regulation>'")
    content: List[Section] = Field(default_factory=list)


class PolicyDocument(BaseModel):
    """The combined multi-jurisdiction generation result."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    generated_at: datetime = Field(
        ...,
        alias="generatedAt",
        description="UTC timestamp captured once for the whole document",
    )
    sections: List[PolicyBlock] = Field(default_factory=list)


# ── Jurisdiction definition ──────────────────────────────────────────────

class JurisdictionSummary(BaseModel):
    """Listing metadata for one jurisdiction."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    regulation: str
    icon: str
    question_count: int = Field(..., alias="questionCount")


class JurisdictionQuestions(BaseModel):
    """Full question list for one jurisdiction."""

    jurisdiction: str
    questions: List[Question]


@dataclass(frozen=True)
class JurisdictionDefinition:
    """Static definition of one regulatory regime.

    ``generate`` must be a pure function of the answer map. The question list
    is validated on construction: ids are unique and every ``dependsOn``
    references a question declared earlier in the list.
    """

    id: str
    name: str
    regulation: str
    icon: str
    questions: Tuple[Question, ...]
    generate: Callable[[AnswerMap], List[Section]]

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for q in self.questions:
            if q.id in seen:
                raise ValueError(f"[{self.id}] duplicate question id '{q.id}'")
            if q.depends_on is not None and q.depends_on.field not in seen:
                raise ValueError(
                    f"[{self.id}] question '{q.id}' depends on '{q.depends_on.field}', "
                    "which is not declared earlier in the list"
                )
            seen.add(q.id)

    @property
    def title(self) -> str:
        return f"{self.name} — {self.regulation}"

    def summary(self) -> JurisdictionSummary:
        return JurisdictionSummary(
            id=self.id,
            name=self.name,
            regulation=self.regulation,
            icon=self.icon,
            questionCount=len(self.questions),
        )

    def generate_policy(self, answers: AnswerMap) -> List[Section]:
        return self.generate(answers)
