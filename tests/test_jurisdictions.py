"""Jurisdiction engine tests — determinism, completeness, risk escalation, branch scenarios."""

import os
import sys

# Ensure the project package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from controlkit.jurisdictions import JURISDICTIONS
from controlkit.jurisdictions import australia, brazil, canada, china, eu, uk, usa
from controlkit.jurisdictions.rules import Answers, UNSPECIFIED_PURPOSE, describe

ALL_IDS = list(JURISDICTIONS)

OVERVIEW_HEADINGS = {
    "eu": "EU AI Act Overview",
    "usa": "NIST AI Risk Management Framework",
    "uk": "UK Pro-Innovation AI Framework",
    "brazil": "Brazil AI Regulatory Framework",
    "china": "China AI Regulatory Framework",
    "australia": "Australia's AI Governance Framework",
    "canada": "Canadian AI Regulatory Framework",
}


def _headings(sections):
    return [s.heading for s in sections]


def _section(sections, heading):
    for s in sections:
        if s.heading == heading:
            return s
    raise AssertionError(f"section '{heading}' not generated; got {_headings(sections)}")


def _steps(sections):
    return _section(sections, "Recommended Next Steps").body


def _everything_compliant(definition):
    """Answer every boolean True and every select with its first option."""
    answers = {}
    for q in definition.questions:
        answers[q.id] = True if q.type == "boolean" else q.options[0].value
    return answers


# ===================================================================== #
#  Properties shared by every jurisdiction                                #
# ===================================================================== #

class TestGeneratorProperties:
    @pytest.mark.parametrize("jurisdiction_id", ALL_IDS)
    def test_empty_answers_produce_a_policy(self, jurisdiction_id):
        sections = JURISDICTIONS[jurisdiction_id].generate_policy({})
        assert len(sections) >= 2
        assert sections[-1].heading == "Recommended Next Steps"
        assert all(s.heading and s.body for s in sections)

    @pytest.mark.parametrize("jurisdiction_id", ALL_IDS)
    def test_empty_answers_open_with_framework_overview(self, jurisdiction_id):
        sections = JURISDICTIONS[jurisdiction_id].generate_policy({})
        assert sections[0].heading == OVERVIEW_HEADINGS[jurisdiction_id]

    @pytest.mark.parametrize("jurisdiction_id", ALL_IDS)
    def test_non_scalar_answers_do_not_crash(self, jurisdiction_id):
        definition = JURISDICTIONS[jurisdiction_id]
        answers = {q.id: True for q in definition.questions if q.type == "boolean"}
        answers.update({q.id: ["employment"] for q in definition.questions if q.type == "select"})
        answers["ai_purpose"] = {"nested": 1}
        sections = definition.generate_policy(answers)
        assert sections[-1].heading == "Recommended Next Steps"

    @pytest.mark.parametrize("jurisdiction_id", ALL_IDS)
    def test_generation_is_deterministic(self, jurisdiction_id):
        definition = JURISDICTIONS[jurisdiction_id]
        answers = _everything_compliant(definition)
        assert definition.generate_policy(answers) == definition.generate_policy(answers)

    @pytest.mark.parametrize("jurisdiction_id", ALL_IDS)
    def test_next_steps_never_empty_when_fully_compliant(self, jurisdiction_id):
        definition = JURISDICTIONS[jurisdiction_id]
        body = _steps(definition.generate_policy(_everything_compliant(definition)))
        assert body.startswith("1. ")

    @pytest.mark.parametrize("jurisdiction_id", ALL_IDS)
    def test_unknown_select_values_fall_through(self, jurisdiction_id):
        definition = JURISDICTIONS[jurisdiction_id]
        answers = {q.id: "not_a_real_option" for q in definition.questions if q.type == "select"}
        sections = definition.generate_policy(answers)
        assert sections[-1].heading == "Recommended Next Steps"

    @pytest.mark.parametrize("jurisdiction_id", ALL_IDS)
    def test_input_map_is_not_mutated(self, jurisdiction_id):
        answers = {"ai_purpose": "other"}
        JURISDICTIONS[jurisdiction_id].generate_policy(answers)
        assert answers == {"ai_purpose": "other"}


class TestAnswerHelpers:
    def test_flag_defaults_to_false(self):
        answers = Answers({"a": True, "b": False})
        assert answers.flag("a") is True
        assert answers.flag("b") is False
        assert answers.flag("missing") is False

    def test_choice_maps_unknown_to_none(self):
        answers = Answers({"ai_purpose": "employment", "other": "nonsense"})
        assert answers.choice("ai_purpose", eu.Purpose) is eu.Purpose.EMPLOYMENT
        assert answers.choice("other", eu.Purpose) is None
        assert answers.choice("missing", eu.Purpose) is None

    def test_describe_echoes_unknown_values(self):
        assert describe("employment", eu.PURPOSE_LABELS) == "employment and recruitment"
        assert describe("space_mining", eu.PURPOSE_LABELS) == "space_mining"
        assert describe(None, eu.PURPOSE_LABELS) == UNSPECIFIED_PURPOSE

    def test_describe_tolerates_unhashable_values(self):
        assert describe(["credit"], eu.PURPOSE_LABELS) == "['credit']"
        assert describe({"x": 1}, eu.PURPOSE_LABELS) == "{'x': 1}"


# ===================================================================== #
#  European Union                                                         #
# ===================================================================== #

class TestEU:
    def test_employment_is_high_risk(self):
        sections = eu.generate_policy({"ai_purpose": "employment"})
        risk = _section(sections, "Risk Classification").body
        assert risk.startswith("High-Risk System.")
        assert "Article 6" in risk
        assert "employment and recruitment" in risk

        headings = _headings(sections)
        assert "Conformity Assessment" in headings
        assert "EU Database Registration" in headings

        steps = _steps(sections)
        assert "Complete the conformity assessment procedure." in steps
        assert "Register the system in the EU high-risk AI database." in steps

    def test_chatbot_is_limited_risk(self):
        sections = eu.generate_policy({"ai_purpose": "customer_service", "interacts_with_people": True})
        assert _section(sections, "Risk Classification").body.startswith("Limited Risk System.")
        assert "Transparency Obligations" in _headings(sections)
        assert "Conformity Assessment" not in _headings(sections)

    def test_empty_answers_are_minimal_risk(self):
        sections = eu.generate_policy({})
        assert _section(sections, "Risk Classification").body.startswith("Minimal Risk System.")
        assert "Transparency Obligations" not in _headings(sections)

    def test_high_risk_purpose_outranks_limited_signals(self):
        answers = Answers({"ai_purpose": "law_enforcement", "interacts_with_people": True})
        assert eu.classify_risk(answers) is eu.RiskTier.HIGH

    def test_closing_step_always_present(self):
        steps = _steps(eu.generate_policy({}))
        assert steps.endswith("Establish post-market monitoring and periodic governance review.")


# ===================================================================== #
#  United States                                                          #
# ===================================================================== #

class TestUSA:
    def test_nyc_local_law_144_present_when_flagged(self):
        sections = usa.generate_policy({"ai_purpose": "hiring", "nyc_employment": True})
        assert "NYC Local Law 144 Compliance" in _headings(sections)
        steps = _steps(sections)
        assert "Engage an independent auditor for NYC Local Law 144 bias audit." in steps
        assert "Prepare and post required public disclosures." in steps

    def test_nyc_local_law_144_absent_otherwise(self):
        sections = usa.generate_policy({"ai_purpose": "hiring", "nyc_employment": False})
        assert "NYC Local Law 144 Compliance" not in _headings(sections)
        assert "Local Law 144" not in _steps(sections)

    def test_nyc_local_law_144_absent_when_unanswered(self):
        sections = usa.generate_policy({"ai_purpose": "hiring"})
        assert "NYC Local Law 144 Compliance" not in _headings(sections)
        assert "Local Law 144" not in _steps(sections)

    def test_first_section_is_nist_overview(self):
        sections = usa.generate_policy({})
        assert sections[0].heading == "NIST AI Risk Management Framework"

    def test_only_selected_state_contributes(self):
        state_headings = {heading for heading, _ in usa.STATE_SECTIONS.values()}
        sections = usa.generate_policy({"operating_states": "colorado"})
        generated = [h for h in _headings(sections) if h in state_headings]
        assert generated == [usa.STATE_SECTIONS[usa.State.COLORADO][0]]

    def test_fully_automated_consumer_decisions_need_disclosure(self):
        sections = usa.generate_policy({"automated_decisions": "fully_automated", "impacts_consumers": True})
        assert "Automated Decision-Making Disclosure" in _headings(sections)


# ===================================================================== #
#  United Kingdom                                                         #
# ===================================================================== #

class TestUK:
    def test_known_regulator_gets_specific_guidance(self):
        sections = uk.generate_policy({"regulated_sector": True, "regulator": "fca"})
        assert _section(sections, "Sector Regulator Guidance").body == uk.REGULATOR_GUIDANCE[uk.Regulator.FCA]

    def test_other_regulator_gets_default_guidance(self):
        sections = uk.generate_policy({"regulated_sector": True, "regulator": "hse"})
        assert _section(sections, "Sector Regulator Guidance").body == uk.DEFAULT_REGULATOR_GUIDANCE

    def test_no_regulator_section_without_regulator(self):
        sections = uk.generate_policy({"regulated_sector": True})
        assert "Sector Regulator Guidance" not in _headings(sections)

    def test_automated_decisions_without_challenge_are_critical(self):
        sections = uk.generate_policy({"automated_decisions": "fully_automated"})
        assert "CRITICAL" in _section(sections, "Contestability and Redress").body


# ===================================================================== #
#  Risk escalation (Brazil, Australia, Canada)                            #
# ===================================================================== #

class TestRiskEscalation:
    def test_brazil_rights_flag_escalates(self):
        base = {"ai_purpose": "customer_service"}
        low = brazil.generate_policy(base)
        high = brazil.generate_policy({**base, "affects_rights": True})
        assert "HIGH RISK" not in _section(low, "Risk Classification").body
        assert "HIGH RISK" in _section(high, "Risk Classification").body

    def test_brazil_high_risk_purpose_escalates(self):
        sections = brazil.generate_policy({"ai_purpose": "credit"})
        assert "credit/financial decisions" in _section(sections, "Risk Classification").body

    def test_australia_decision_flag_escalates(self):
        base = {"ai_purpose": "internal"}
        low = australia.generate_policy(base)
        high = australia.generate_policy({**base, "high_risk_decisions": True})
        assert "HIGH RISK" not in _section(low, "Risk Classification").body
        assert "HIGH RISK" in _section(high, "Risk Classification").body

    def test_canada_impact_flag_escalates(self):
        base = {"ai_purpose": "customer_service"}
        low = canada.generate_policy(base)
        high = canada.generate_policy({**base, "significant_impact": True})
        assert "HIGH-IMPACT" not in _section(low, "AIDA High-Impact Classification").body
        assert "HIGH-IMPACT" in _section(high, "AIDA High-Impact Classification").body
        assert "Enforcement Considerations" not in _headings(low)
        assert "Enforcement Considerations" in _headings(high)

    def test_canada_unknown_purpose_echoed_in_prose(self):
        sections = canada.generate_policy({"ai_purpose": "space_mining", "significant_impact": True})
        assert "use in space_mining and its potential" in _section(sections, "AIDA High-Impact Classification").body

    def test_brazil_list_purpose_with_rights_flag(self):
        sections = brazil.generate_policy({"ai_purpose": ["credit"], "affects_rights": True})
        body = _section(sections, "Risk Classification").body
        assert "HIGH RISK" in body
        assert "['credit']" in body

    def test_canada_missing_purpose_is_unspecified(self):
        sections = canada.generate_policy({"significant_impact": True})
        assert UNSPECIFIED_PURPOSE in _section(sections, "AIDA High-Impact Classification").body


# ===================================================================== #
#  China, Australia, Canada branch scenarios                              #
# ===================================================================== #

class TestChina:
    def test_public_anonymous_service_needs_real_name(self):
        sections = china.generate_policy({"public_facing": True, "user_identity": "anonymous"})
        assert _section(sections, "User Identity Verification").body.startswith("CRITICAL")
        assert "Implement real-name verification for users." in _steps(sections)
        assert "Algorithm Registration" in _headings(sections)

    def test_phone_verification_satisfies_public_service(self):
        sections = china.generate_policy({"public_facing": True, "user_identity": "phone"})
        assert "real-name verification for users" not in _steps(sections)

    def test_empty_answers_skip_conditional_sections(self):
        headings = _headings(china.generate_policy({}))
        assert "Content Filtering" not in headings
        assert "Generative AI Compliance" not in headings
        assert "Data Localization and Cross-Border Transfer" not in headings

    def test_generative_public_service_without_assessment(self):
        sections = china.generate_policy({"ai_type": "generative", "public_facing": True})
        assert "CRITICAL" in _section(sections, "Generative AI Compliance").body
        assert "Conduct required security assessment." in _steps(sections)

    def test_cross_border_only(self):
        sections = china.generate_policy({"cross_border_transfer": True})
        body = _section(sections, "Data Localization and Cross-Border Transfer").body
        assert body.startswith("Cross-border data transfers")


class TestAustralia:
    def test_missing_oversight_gets_default_sentence(self):
        body = _section(australia.generate_policy({}), "Human Oversight (Guardrail 6)").body
        assert "Define and document the level of human oversight" in body

    def test_autonomous_high_risk_is_critical(self):
        sections = australia.generate_policy({"ai_purpose": "healthcare", "human_oversight": "human_out_loop"})
        assert "CRITICAL" in _section(sections, "Human Oversight (Guardrail 6)").body

    def test_unassessed_third_party_components(self):
        sections = australia.generate_policy({"third_party_components": True})
        assert "Assess risks of third-party AI components." in _steps(sections)


class TestCanada:
    def test_quebec_adds_law_25(self):
        sections = canada.generate_policy({"province": "quebec"})
        assert "Quebec Law 25 Requirements" in _headings(sections)
        assert "Quebec Law 25" in _steps(sections)

    def test_other_provinces_skip_law_25(self):
        sections = canada.generate_policy({"province": "ontario"})
        assert "Quebec Law 25 Requirements" not in _headings(sections)

    def test_closing_steps(self):
        steps = _steps(canada.generate_policy({})).split("\n")
        assert steps[-2].endswith("Monitor AIDA regulatory developments as the law progresses.")
        assert steps[-1].endswith("Establish ongoing governance and review procedures.")
