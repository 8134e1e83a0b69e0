"""Australia jurisdiction — Voluntary AI Safety Standard and its 10 guardrails."""

from __future__ import annotations

from enum import Enum
from typing import List

from .rules import Answers, bullets, is_high_risk, next_steps
from .schema import AnswerMap, JurisdictionDefinition, Section, boolean, select


class Purpose(str, Enum):
    HIGH_RISK_DECISION = "high_risk_decision"
    HEALTHCARE = "healthcare"
    FINANCIAL = "financial"
    EMPLOYMENT = "employment"
    GOVERNMENT = "government"
    EDUCATION = "education"
    CONTENT_GENERATION = "content_generation"
    CUSTOMER_SERVICE = "customer_service"
    INTERNAL = "internal"
    OTHER = "other"


class Oversight(str, Enum):
    HUMAN_IN_LOOP = "human_in_loop"
    HUMAN_ON_LOOP = "human_on_loop"
    HUMAN_OUT_LOOP = "human_out_loop"


HIGH_RISK_PURPOSES = frozenset({
    Purpose.HIGH_RISK_DECISION,
    Purpose.HEALTHCARE,
    Purpose.FINANCIAL,
    Purpose.EMPLOYMENT,
    Purpose.GOVERNMENT,
})


QUESTIONS = (
    select(
        "ai_purpose",
        "What is the primary purpose of your AI system?",
        [
            (Purpose.HIGH_RISK_DECISION, "Decisions affecting rights, safety, or legal status"),
            (Purpose.HEALTHCARE, "Healthcare / medical"),
            (Purpose.FINANCIAL, "Financial services"),
            (Purpose.EMPLOYMENT, "Employment / HR"),
            (Purpose.GOVERNMENT, "Government services"),
            (Purpose.EDUCATION, "Education"),
            (Purpose.CONTENT_GENERATION, "Content generation"),
            (Purpose.CUSTOMER_SERVICE, "Customer service"),
            (Purpose.INTERNAL, "Internal business tools"),
            (Purpose.OTHER, "Other"),
        ],
    ),
    boolean(
        "high_risk_decisions",
        "Does the AI make or significantly influence decisions that affect individuals' legal "
        "rights, safety, or access to essential services?",
        help="High-risk decisions require enhanced governance.",
    ),
    select(
        "human_oversight",
        "What level of human oversight exists for AI decisions?",
        [
            (Oversight.HUMAN_IN_LOOP, "Human-in-the-loop (reviews each decision)"),
            (Oversight.HUMAN_ON_LOOP, "Human-on-the-loop (monitors and can intervene)"),
            (Oversight.HUMAN_OUT_LOOP, "Human-out-of-the-loop (fully autonomous)"),
        ],
    ),
    boolean(
        "supply_chain_known",
        "Do you know and document the full AI supply chain (models, data sources, third-party components)?",
        help="Supply chain transparency is emphasized in Australian guidance.",
    ),
    boolean("third_party_components", "Does your AI system use third-party models or components?"),
    boolean(
        "third_party_assessment",
        "Have you assessed third-party AI components for risks?",
        depends_on={"field": "third_party_components", "equals": True},
    ),
    boolean("testing_conducted", "Has the AI system been tested for safety, accuracy, and bias?"),
    boolean(
        "affected_stakeholders",
        "Have you consulted with stakeholders who may be affected by the AI system?",
        help="Including potential users, impacted communities, and domain experts.",
    ),
    boolean(
        "transparency_measures",
        "Do you provide transparency about AI use to affected individuals?",
        help="Including disclosure that AI is being used and how.",
    ),
    boolean(
        "contestability",
        "Can individuals contest or appeal AI-influenced decisions?",
        help="Mechanism for human review of AI decisions.",
    ),
    boolean(
        "privacy_compliance",
        "Does the system comply with the Privacy Act 1988?",
        help="Australian Privacy Principles apply to personal information handling.",
    ),
    boolean(
        "ongoing_monitoring",
        "Do you have ongoing monitoring for AI system performance and issues?",
    ),
)


def _human_oversight(answers: Answers, high_risk: bool) -> str:
    text = "Human oversight is a core principle of responsible AI. "
    mode = answers.choice("human_oversight", Oversight)
    if mode is Oversight.HUMAN_IN_LOOP:
        return text + (
            "Your human-in-the-loop approach, with human review of each decision, provides "
            "strong oversight. Ensure reviewers are appropriately trained, have authority to "
            "override AI, and are not overwhelmed by volume."
        )
    if mode is Oversight.HUMAN_ON_LOOP:
        return text + (
            "Your human-on-the-loop approach allows intervention when needed. Ensure monitoring "
            "is effective, escalation paths are clear, and humans can meaningfully intervene in "
            "real-time when required."
        )
    if mode is Oversight.HUMAN_OUT_LOOP:
        if high_risk:
            return text + (
                "CRITICAL: Your fully autonomous approach may not be appropriate for high-risk "
                "applications. The Australian framework emphasizes meaningful human oversight "
                "for decisions affecting individuals. Consider implementing human review mechanisms."
            )
        return text + (
            "Fully autonomous operation may be acceptable for lower-risk applications. Ensure "
            "robust monitoring and the ability to intervene if issues arise."
        )
    return text + (
        "Define and document the level of human oversight for this system, proportionate to "
        "the impact of its decisions on individuals."
    )


def _supply_chain(answers: Answers) -> str:
    if answers.flag("supply_chain_known"):
        text = "You maintain supply chain documentation. Ensure records include:\n\n" + bullets([
            "Foundation models and their providers",
            "Training data sources",
            "Third-party APIs and services",
            "Version information and update history",
            "Known limitations or risks of components",
        ]).rstrip("\n")
    else:
        text = (
            "RECOMMENDED: Document your AI supply chain including models, data sources, and "
            "third-party components. This enables risk assessment, incident response, and "
            "regulatory compliance."
        )
    if answers.flag("third_party_components"):
        if answers.flag("third_party_assessment"):
            text += (
                "\n\nYou have assessed third-party components for risks. Maintain this assessment "
                "and update when components change or new risks emerge."
            )
        else:
            text += (
                "\n\nIMPORTANT: Conduct risk assessment of third-party AI components. Understand "
                "their limitations, data practices, and how they affect your system's overall "
                "risk profile."
            )
    return text


def _contestability(answers: Answers, high_risk: bool) -> str:
    if answers.flag("contestability"):
        return "You have contestability mechanisms in place. Ensure they:\n\n" + bullets([
            "Are easily accessible to affected individuals",
            "Result in meaningful human review",
            "Have reasonable response timeframes",
            "Can lead to decision reversal where appropriate",
        ]).rstrip("\n")
    if high_risk:
        return (
            "CRITICAL: High-risk AI decisions should have contestability mechanisms allowing "
            "affected individuals to request human review. Implement a clear process for "
            "challenging AI-influenced decisions."
        )
    return (
        "Consider implementing contestability mechanisms proportionate to the impact of AI "
        "decisions. Even for lower-risk applications, users benefit from recourse options."
    )


def generate_policy(raw: AnswerMap) -> List[Section]:
    answers = Answers(raw)
    high_risk = is_high_risk(
        answers.choice("ai_purpose", Purpose),
        HIGH_RISK_PURPOSES,
        answers.flag("high_risk_decisions"),
    )
    sections: List[Section] = []

    sections.append(Section(
        heading="Australia's AI Governance Framework",
        body=(
            "Australia has adopted a voluntary guardrails approach to AI governance, with the "
            "Voluntary AI Safety Standard providing guidance for responsible AI development and "
            "deployment. The framework emphasizes human oversight, transparency, accountability, "
            "and ongoing monitoring. While currently voluntary, mandatory requirements may "
            "emerge, and organizations are encouraged to adopt these practices proactively."
        ),
    ))

    sections.append(Section(
        heading="The 10 AI Guardrails",
        body=(
            "Australia's voluntary guardrails for AI are:\n\n"
            "1. Establish accountability processes\n"
            "2. Manage AI-related risks throughout the lifecycle\n"
            "3. Protect privacy and data\n"
            "4. Ensure transparency about AI use\n"
            "5. Enable contestability for AI-influenced decisions\n"
            "6. Ensure appropriate human oversight\n"
            "7. Use representative data and test for bias\n"
            "8. Maintain supply chain transparency\n"
            "9. Consider environmental impact\n"
            "10. Keep records and documentation\n\n"
            "Your governance should address each applicable guardrail."
        ),
    ))

    if high_risk:
        risk_text = (
            "This AI system is considered HIGH RISK based on its potential to affect "
            "individuals' rights, safety, or access to services. High-risk systems should "
            "implement all guardrails with enhanced rigor and documentation."
        )
    else:
        risk_text = (
            "This AI system appears lower risk. Apply guardrails proportionately while "
            "maintaining good governance practices."
        )
    sections.append(Section(heading="Risk Classification", body=risk_text))

    sections.append(Section(
        heading="Human Oversight (Guardrail 6)",
        body=_human_oversight(answers, high_risk),
    ))
    sections.append(Section(
        heading="Supply Chain Transparency (Guardrail 8)",
        body=_supply_chain(answers),
    ))

    if answers.flag("testing_conducted"):
        test_text = (
            "You have conducted testing for safety, accuracy, and bias. Ensure testing covered:\n\n"
            + bullets([
                "Representative test data reflecting real-world use",
                "Performance across different demographic groups",
                "Edge cases and failure modes",
                "Adversarial robustness (where applicable)",
            ])
            + "\nDocument results and remediation steps taken."
        )
    else:
        test_text = (
            "RECOMMENDED: Conduct testing for safety, accuracy, and bias before deployment. Test "
            "with representative data covering the diversity of expected users and use cases. "
            "Document findings and address identified issues."
        )
    sections.append(Section(heading="Testing and Bias (Guardrail 7)", body=test_text))

    if answers.flag("transparency_measures"):
        trans_text = "You provide transparency about AI use. Ensure disclosures include:\n\n" + bullets([
            "Clear indication when AI is being used",
            "General explanation of how AI influences outcomes",
            "Limitations and potential for errors",
            "How to get more information or raise concerns",
        ]).rstrip("\n")
    else:
        trans_text = (
            "RECOMMENDED: Implement transparency measures to inform affected individuals about "
            "AI use. Be clear about what the AI does, how it influences decisions, and its "
            "limitations."
        )
    sections.append(Section(heading="Transparency (Guardrail 4)", body=trans_text))

    sections.append(Section(
        heading="Contestability (Guardrail 5)",
        body=_contestability(answers, high_risk),
    ))

    if answers.flag("affected_stakeholders"):
        sections.append(Section(
            heading="Stakeholder Engagement",
            body=(
                "You have consulted with affected stakeholders. Document engagement activities, "
                "feedback received, and how it influenced system design or deployment. Consider "
                "ongoing engagement as the system evolves."
            ),
        ))
    elif high_risk:
        sections.append(Section(
            heading="Stakeholder Engagement",
            body=(
                "RECOMMENDED: For high-risk AI systems, engage with potentially affected "
                "stakeholders including users, impacted communities, and domain experts. Their "
                "input can identify risks and improve outcomes."
            ),
        ))

    if answers.flag("privacy_compliance"):
        privacy_text = (
            "You have indicated Privacy Act compliance. Ensure ongoing adherence to Australian "
            "Privacy Principles (APPs), including:\n\n"
            + bullets([
                "Transparent collection and handling of personal information",
                "Purpose limitation and data minimization",
                "Data quality and security",
                "Access and correction rights",
                "Cross-border disclosure requirements",
            ]).rstrip("\n")
        )
    else:
        privacy_text = (
            "REQUIRED: Ensure compliance with the Privacy Act 1988 and Australian Privacy "
            "Principles (APPs) for any handling of personal information. This includes AI "
            "systems that collect, use, or generate personal data."
        )
    sections.append(Section(heading="Privacy Compliance (Guardrail 3)", body=privacy_text))

    if answers.flag("ongoing_monitoring"):
        monitoring_text = (
            "You have ongoing monitoring in place. Ensure monitoring covers:\n\n"
            + bullets([
                "Performance metrics and drift detection",
                "User feedback and complaints",
                "Incident tracking and response",
                "Regular audits and reviews",
                "Updates to address identified issues",
            ])
            + "\nDocument monitoring activities and findings."
        )
    else:
        monitoring_text = (
            "RECOMMENDED: Implement ongoing monitoring throughout the AI system lifecycle. "
            "Monitor for performance degradation, emerging risks, user issues, and changing "
            "context. Establish procedures for addressing problems identified."
        )
    sections.append(Section(heading="Ongoing Monitoring (Guardrail 2)", body=monitoring_text))

    steps = ["Review this policy with relevant stakeholders."]
    if not answers.flag("testing_conducted"):
        steps.append("Conduct comprehensive testing for safety, accuracy, and bias.")
    if not answers.flag("supply_chain_known"):
        steps.append("Document AI supply chain (models, data, components).")
    if answers.flag("third_party_components") and not answers.flag("third_party_assessment"):
        steps.append("Assess risks of third-party AI components.")
    if not answers.flag("transparency_measures"):
        steps.append("Implement transparency measures for affected individuals.")
    if high_risk and not answers.flag("contestability"):
        steps.append("Implement contestability mechanisms for AI decisions.")
    if high_risk and not answers.flag("affected_stakeholders"):
        steps.append("Engage with affected stakeholders.")
    if not answers.flag("ongoing_monitoring"):
        steps.append("Establish ongoing monitoring procedures.")
    if not answers.flag("privacy_compliance"):
        steps.append("Review and ensure Privacy Act compliance.")
    steps.append("Document governance procedures and maintain records.")
    steps.append("Review and update governance as regulations evolve.")
    sections.append(next_steps(steps))

    return sections


JURISDICTION = JurisdictionDefinition(
    id="australia",
    name="Australia",
    regulation="AI Guardrails",
    icon="🇦🇺",
    questions=QUESTIONS,
    generate=generate_policy,
)
