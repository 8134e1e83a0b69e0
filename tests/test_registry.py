"""Registry tests — listing, question lookup, policy assembly, definition validation."""

import os
import sys

# Ensure the project package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import datetime, timezone

import pytest

from controlkit.jurisdictions import (
    JURISDICTIONS,
    generate_policy,
    get_jurisdiction,
    get_jurisdiction_questions,
    list_jurisdictions,
    visible_questions,
)
from controlkit.jurisdictions import eu
from controlkit.jurisdictions.schema import (
    DependsOn,
    JurisdictionDefinition,
    Question,
    Section,
    boolean,
    select,
)

FIXED_NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def _definition(questions):
    return JurisdictionDefinition(
        id="test",
        name="Testland",
        regulation="Test Act",
        icon="🏳️",
        questions=tuple(questions),
        generate=lambda answers: [Section(heading="Recommended Next Steps", body="1. Review.")],
    )


# ===================================================================== #
#  Listing and lookup                                                     #
# ===================================================================== #

class TestListing:
    def test_registry_order(self):
        ids = [j.id for j in list_jurisdictions()]
        assert ids == ["eu", "usa", "uk", "brazil", "china", "australia", "canada"]

    def test_question_counts_match_definitions(self):
        for summary in list_jurisdictions():
            assert summary.question_count == len(JURISDICTIONS[summary.id].questions)

    def test_summary_wire_shape(self):
        dumped = list_jurisdictions()[0].model_dump(by_alias=True)
        assert dumped == {
            "id": "eu",
            "name": "European Union",
            "regulation": "EU AI Act",
            "icon": "🇪🇺",
            "questionCount": 12,
        }

    def test_get_jurisdiction(self):
        assert get_jurisdiction("uk").name == "United Kingdom"
        assert get_jurisdiction("mars") is None


class TestQuestionLookup:
    def test_unknown_id_returns_none(self):
        assert get_jurisdiction_questions("mars") is None

    def test_dependency_metadata_preserved(self):
        result = get_jurisdiction_questions("eu")
        assert result.jurisdiction == "eu"
        by_id = {q.id: q for q in result.questions}
        dumped = by_id["generates_synthetic"].model_dump(by_alias=True, exclude_none=True)
        assert dumped["dependsOn"] == {"field": "ai_purpose", "equals": "content_generation"}

    def test_question_order_preserved(self):
        result = get_jurisdiction_questions("usa")
        assert [q.id for q in result.questions] == [q.id for q in JURISDICTIONS["usa"].questions]

    def test_visible_questions_hide_unmet_dependencies(self):
        hidden = {q.id for q in visible_questions("eu", {})}
        assert "generates_synthetic" not in hidden
        assert "gpai_provider" not in hidden

        shown = {q.id for q in visible_questions("eu", {"ai_purpose": "content_generation"})}
        assert "generates_synthetic" in shown

    def test_visible_questions_unknown_id(self):
        assert visible_questions("mars", {}) == []


# ===================================================================== #
#  Policy assembly                                                        #
# ===================================================================== #

class TestGeneratePolicy:
    def test_selection_order_preserved(self):
        document = generate_policy(["usa", "eu"], {}, now=FIXED_NOW)
        assert [b.jurisdiction for b in document.sections] == ["usa", "eu"]
        assert document.sections[0].title == "United States — NIST AI RMF"
        assert document.sections[1].title == "European Union — EU AI Act"

    def test_unknown_ids_skipped(self):
        document = generate_policy(["eu", "mars", "uk"], {}, now=FIXED_NOW)
        assert [b.jurisdiction for b in document.sections] == ["eu", "uk"]

    def test_all_unknown_is_empty_document(self):
        document = generate_policy(["mars"], {}, now=FIXED_NOW)
        assert document.sections == []

    def test_missing_answers_default_to_empty(self):
        document = generate_policy(["eu"], now=FIXED_NOW)
        assert document.sections[0].content == eu.generate_policy({})

    def test_answers_routed_by_jurisdiction(self):
        document = generate_policy(
            ["eu", "uk"],
            {"eu": {"ai_purpose": "employment"}, "uk": {}},
            now=FIXED_NOW,
        )
        risk = next(s for s in document.sections[0].content if s.heading == "Risk Classification")
        assert risk.body.startswith("High-Risk System.")

    def test_single_timestamp(self):
        document = generate_policy(["eu", "usa"], {}, now=FIXED_NOW)
        assert document.generated_at == FIXED_NOW
        assert "generatedAt" in document.model_dump(by_alias=True)

    def test_default_timestamp_is_utc(self):
        document = generate_policy(["eu"], {})
        assert document.generated_at.tzinfo is not None
        assert document.generated_at.utcoffset().total_seconds() == 0

    def test_same_inputs_same_document(self):
        answers = {"canada": {"province": "quebec", "significant_impact": True}}
        first = generate_policy(["canada"], answers, now=FIXED_NOW)
        second = generate_policy(["canada"], answers, now=FIXED_NOW)
        assert first == second


# ===================================================================== #
#  Definition validation                                                  #
# ===================================================================== #

class TestDefinitionValidation:
    @pytest.mark.parametrize("jurisdiction_id", list(JURISDICTIONS))
    def test_registered_definitions_are_well_formed(self, jurisdiction_id):
        seen = set()
        for q in JURISDICTIONS[jurisdiction_id].questions:
            assert q.id not in seen
            if q.depends_on is not None:
                assert q.depends_on.field in seen
            if q.type == "select":
                assert q.options
            else:
                assert not q.options
            seen.add(q.id)

    def test_duplicate_question_ids_rejected(self):
        with pytest.raises(ValueError, match="duplicate question id"):
            _definition([boolean("a", "A?"), boolean("a", "A again?")])

    def test_forward_dependency_rejected(self):
        with pytest.raises(ValueError, match="not declared earlier"):
            _definition([
                boolean("b", "B?", depends_on={"field": "a", "equals": True}),
                boolean("a", "A?"),
            ])

    def test_dangling_dependency_rejected(self):
        with pytest.raises(ValueError, match="not declared earlier"):
            _definition([boolean("b", "B?", depends_on={"field": "ghost", "equals": True})])

    def test_valid_definition_accepted(self):
        definition = _definition([
            boolean("a", "A?"),
            select("b", "B?", [("x", "X"), ("y", "Y")], depends_on={"field": "a", "equals": True}),
        ])
        assert definition.title == "Testland — Test Act"
        assert definition.summary().question_count == 2

    def test_select_requires_options(self):
        with pytest.raises(ValueError):
            Question(id="s", type="select", question="Pick?")

    def test_boolean_rejects_options(self):
        with pytest.raises(ValueError):
            Question(
                id="b",
                type="boolean",
                question="Yes?",
                options=[{"value": "x", "label": "X"}],
            )

    def test_depends_on_needs_exactly_one_condition(self):
        with pytest.raises(ValueError):
            DependsOn(field="a")
        with pytest.raises(ValueError):
            DependsOn(field="a", equals=True, notEquals=False)

    def test_not_equals_gate(self):
        gate = DependsOn(field="tier", notEquals="none")
        assert gate.is_met({"tier": "gold"}) is True
        assert gate.is_met({"tier": "none"}) is False
        assert gate.is_met({}) is True
