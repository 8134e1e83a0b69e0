"""Brazil jurisdiction — proposed AI Bill (PL 2338/2023) aligned with LGPD.

Binary risk tier: a high-risk purpose OR the ``affects_rights`` flag makes the
system HIGH RISK, which adds the impact-assessment and emergency-stop sections.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from .rules import Answers, bullets, describe, is_high_risk, next_steps
from .schema import AnswerMap, JurisdictionDefinition, Section, boolean, select


class Purpose(str, Enum):
    PUBLIC_SERVICES = "public_services"
    HEALTHCARE = "healthcare"
    EDUCATION = "education"
    EMPLOYMENT = "employment"
    CREDIT = "credit"
    JUSTICE = "justice"
    SECURITY = "security"
    CONTENT_GENERATION = "content_generation"
    CUSTOMER_SERVICE = "customer_service"
    INTERNAL = "internal"
    OTHER = "other"


class Automation(str, Enum):
    FULLY_AUTOMATED = "fully_automated"
    SEMI_AUTOMATED = "semi_automated"
    HUMAN_FINAL = "human_final"
    ADVISORY = "advisory"


HIGH_RISK_PURPOSES = frozenset({
    Purpose.PUBLIC_SERVICES,
    Purpose.HEALTHCARE,
    Purpose.EDUCATION,
    Purpose.EMPLOYMENT,
    Purpose.CREDIT,
    Purpose.JUSTICE,
    Purpose.SECURITY,
})

PURPOSE_LABELS = {
    "public_services": "public services",
    "healthcare": "healthcare",
    "education": "education",
    "employment": "employment decisions",
    "credit": "credit/financial decisions",
    "justice": "justice system",
    "security": "public security",
    "content_generation": "content generation",
    "customer_service": "customer service",
    "internal": "internal operations",
    "other": "other purposes",
}


QUESTIONS = (
    select(
        "ai_purpose",
        "What is the primary purpose of your AI system?",
        [
            (Purpose.PUBLIC_SERVICES, "Public services / government"),
            (Purpose.HEALTHCARE, "Healthcare"),
            (Purpose.EDUCATION, "Education"),
            (Purpose.EMPLOYMENT, "Employment / HR"),
            (Purpose.CREDIT, "Credit / financial decisions"),
            (Purpose.JUSTICE, "Justice system / legal"),
            (Purpose.SECURITY, "Public security"),
            (Purpose.CONTENT_GENERATION, "Content generation"),
            (Purpose.CUSTOMER_SERVICE, "Customer service"),
            (Purpose.INTERNAL, "Internal business operations"),
            (Purpose.OTHER, "Other"),
        ],
    ),
    boolean(
        "affects_rights",
        "Can the AI system affect fundamental rights or access to services?",
        help="Including decisions about employment, credit, healthcare, education, or public services.",
    ),
    select(
        "automated_decisions",
        "What role does the AI play in decision-making?",
        [
            (Automation.FULLY_AUTOMATED, "Fully automated decisions"),
            (Automation.SEMI_AUTOMATED, "Semi-automated (human reviews some decisions)"),
            (Automation.HUMAN_FINAL, "Human makes final decision"),
            (Automation.ADVISORY, "Advisory / informational only"),
        ],
    ),
    boolean(
        "processes_personal_data",
        "Does the system process personal data?",
        help="Subject to LGPD (Brazil's data protection law).",
    ),
    boolean(
        "sensitive_data",
        "Does the system process sensitive personal data?",
        help="Health, biometric, genetic, racial/ethnic origin, religious belief, political opinion, etc.",
        depends_on={"field": "processes_personal_data", "equals": True},
    ),
    boolean(
        "explanation_mechanism",
        "Can affected individuals request an explanation of AI decisions?",
        help="Brazil emphasizes the right to explanation.",
    ),
    boolean(
        "human_review_available",
        "Can affected individuals request human review of AI decisions?",
        help="Required for certain automated decisions under LGPD.",
    ),
    boolean(
        "risk_assessment",
        "Have you conducted an algorithmic impact assessment?",
        help="Evaluating risks to rights and freedoms.",
    ),
    boolean(
        "error_monitoring",
        "Do you monitor the system for errors or harmful outputs?",
        help="Brazil's strict liability approach emphasizes error prevention.",
    ),
    boolean(
        "kill_switch",
        "Can the system be quickly shut down if serious problems occur?",
        help="Emergency stop capability.",
    ),
)


def _risk_classification(answers: Answers, high_risk: bool) -> str:
    if high_risk:
        purpose = describe(answers.raw("ai_purpose"), PURPOSE_LABELS)
        rights = " and its potential to affect fundamental rights" if answers.flag("affects_rights") else ""
        return (
            f"This AI system is classified as HIGH RISK based on its use in {purpose}{rights}. "
            "High-risk systems face enhanced requirements including algorithmic impact "
            "assessments, transparency obligations, human oversight mandates, and strict "
            "liability provisions."
        )
    return (
        "This AI system appears to be lower risk under the proposed framework. However, you "
        "should still adhere to general principles of transparency, non-discrimination, and "
        "accountability."
    )


def _explanation(answers: Answers) -> str:
    text = "Brazilian law emphasizes the right to explanation for automated decisions. "
    if answers.flag("explanation_mechanism"):
        return text + "You have an explanation mechanism in place. Ensure explanations are:\n\n" + bullets([
            "Clear and accessible to affected individuals",
            'Meaningful (not just stating "an algorithm decided")',
            "Provided in a timely manner upon request",
            "Documented for regulatory review",
        ]).rstrip("\n")
    return text + (
        "REQUIRED: Implement a mechanism for affected individuals to request and receive "
        "meaningful explanations of AI-influenced decisions. This is a core right under "
        "Brazilian AI governance principles."
    )


def _human_oversight(answers: Answers, mode: Optional[Automation]) -> str:
    if mode is Automation.FULLY_AUTOMATED:
        if answers.flag("human_review_available"):
            return (
                "While your system operates with full automation, you provide human review on "
                "request. This aligns with LGPD Article 20 requirements. Ensure human reviewers "
                "have authority to override AI decisions and are appropriately trained."
            )
        return (
            "CRITICAL: Fully automated decisions affecting individuals typically require the "
            "option for human review under LGPD Article 20. Implement a human review mechanism, "
            "particularly for decisions with legal or significant effects."
        )
    if mode is Automation.SEMI_AUTOMATED:
        return (
            "Your semi-automated approach with human review aligns with Brazilian requirements "
            "for meaningful human oversight. Document the criteria for human review and ensure "
            "reviewers can effectively assess and override AI recommendations."
        )
    return (
        "Your approach maintains human authority over final decisions. Document the human "
        "decision-making process and how AI outputs are considered."
    )


def _lgpd(answers: Answers, mode: Optional[Automation]) -> str:
    text = (
        "Your processing of personal data is subject to LGPD (Lei Geral de Proteção de Dados). "
        "Requirements include:\n\n"
        + bullets([
            "Identify and document your legal basis for processing (Article 7)",
            "Provide clear privacy notices",
            "Honor data subject rights (access, correction, deletion, portability)",
            "Implement appropriate security measures",
        ])
    )
    if answers.flag("sensitive_data"):
        text += (
            "\nSensitive data processing requires explicit consent or specific legal grounds "
            "(Article 11). Implement enhanced protections and document your legal basis carefully."
        )
    if mode in (Automation.FULLY_AUTOMATED, Automation.SEMI_AUTOMATED):
        text += (
            "\nArticle 20 of LGPD specifically addresses automated decisions: data subjects may "
            "request review of decisions made solely through automated processing that affect "
            "their interests."
        )
    return text


def _impact_assessment(answers: Answers) -> str:
    if answers.flag("risk_assessment"):
        return (
            "You have conducted an algorithmic impact assessment. Ensure it covers:\n\n"
            + bullets([
                "Potential risks to fundamental rights",
                "Discrimination risks across protected groups",
                "Accuracy and reliability assessment",
                "Mitigation measures implemented",
                "Ongoing monitoring procedures",
            ])
            + "\nReview and update the assessment periodically."
        )
    return (
        "REQUIRED: High-risk AI systems require an algorithmic impact assessment evaluating "
        "risks to rights and freedoms. This assessment should identify potential harms, evaluate "
        "discrimination risks, and document mitigation measures. Conduct this assessment before "
        "deployment."
    )


def generate_policy(raw: AnswerMap) -> List[Section]:
    answers = Answers(raw)
    high_risk = is_high_risk(
        answers.choice("ai_purpose", Purpose),
        HIGH_RISK_PURPOSES,
        answers.flag("affects_rights"),
    )
    mode = answers.choice("automated_decisions", Automation)
    sections: List[Section] = []

    sections.append(Section(
        heading="Brazil AI Regulatory Framework",
        body=(
            "Brazil is advancing comprehensive AI legislation built on rights-based principles. "
            "The framework emphasizes human dignity, non-discrimination, transparency, and "
            "accountability. Key features include strong rights to explanation, human oversight "
            "requirements, and a strict liability approach for AI harms. Your governance policy "
            "should align with these principles and the existing LGPD data protection framework."
        ),
    ))
    sections.append(Section(heading="Risk Classification", body=_risk_classification(answers, high_risk)))
    sections.append(Section(heading="Right to Explanation", body=_explanation(answers)))
    sections.append(Section(heading="Human Oversight", body=_human_oversight(answers, mode)))

    if answers.flag("processes_personal_data"):
        sections.append(Section(heading="LGPD Compliance", body=_lgpd(answers, mode)))

    if high_risk:
        sections.append(Section(heading="Algorithmic Impact Assessment", body=_impact_assessment(answers)))

    sections.append(Section(
        heading="Strict Liability Considerations",
        body=(
            "Brazilian AI governance includes strict liability provisions for AI-caused harms. "
            "This means you may be liable for damages regardless of fault or negligence. To "
            "manage this exposure:\n\n"
            + bullets([
                "Implement robust testing before deployment",
                "Monitor for errors and harmful outputs continuously",
                "Maintain the ability to quickly intervene or stop the system",
                "Document due diligence efforts",
                "Consider appropriate insurance coverage",
            ]).rstrip("\n")
        ),
    ))

    if high_risk:
        if answers.flag("kill_switch"):
            kill_text = "You have emergency stop capability in place. Ensure:\n\n" + bullets([
                "Kill switch can be activated quickly by authorized personnel",
                "Procedures for when to activate are documented",
                "Backup processes exist for when AI is unavailable",
                "Regular testing of shutdown procedures",
            ]).rstrip("\n")
        else:
            kill_text = (
                'RECOMMENDED: Implement emergency stop capability ("kill switch") for high-risk '
                "AI systems. This allows rapid shutdown if serious errors, discrimination, or "
                "harms are detected. Document activation procedures and backup processes."
            )
        sections.append(Section(heading="Emergency Stop Capability", body=kill_text))

    if answers.flag("error_monitoring"):
        monitoring_text = (
            "You have error monitoring in place. Ensure monitoring covers accuracy metrics, "
            "fairness indicators, and user complaints. Establish thresholds that trigger review "
            "or intervention. Maintain logs for regulatory demonstration of due diligence."
        )
    else:
        monitoring_text = (
            "RECOMMENDED: Implement ongoing monitoring for errors and harmful outputs. Given the "
            "strict liability approach in Brazil, demonstrating active monitoring and quick "
            "response to problems is important for managing legal exposure."
        )
    sections.append(Section(heading="Error Monitoring", body=monitoring_text))

    steps = ["Review this policy with legal counsel familiar with Brazilian AI regulation."]
    if high_risk and not answers.flag("risk_assessment"):
        steps.append("Conduct an algorithmic impact assessment.")
    if not answers.flag("explanation_mechanism"):
        steps.append("Implement a mechanism for individuals to request decision explanations.")
    if mode is Automation.FULLY_AUTOMATED and not answers.flag("human_review_available"):
        steps.append("Implement human review capability for automated decisions.")
    if high_risk and not answers.flag("kill_switch"):
        steps.append("Implement emergency stop capability.")
    if not answers.flag("error_monitoring"):
        steps.append("Implement error and harm monitoring procedures.")
    if answers.flag("processes_personal_data"):
        steps.append("Review LGPD compliance for personal data processing.")
    steps.append("Establish ongoing governance and review procedures.")
    sections.append(next_steps(steps))

    return sections


JURISDICTION = JurisdictionDefinition(
    id="brazil",
    name="Brazil",
    regulation="AI Bill + LGPD",
    icon="🇧🇷",
    questions=QUESTIONS,
    generate=generate_policy,
)
