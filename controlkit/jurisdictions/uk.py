"""United Kingdom jurisdiction — pro-innovation, regulator-led framework."""

from __future__ import annotations

from enum import Enum
from typing import List

from .rules import Answers, bullets, next_steps
from .schema import AnswerMap, JurisdictionDefinition, Section, boolean, select


class Regulator(str, Enum):
    FCA = "fca"
    PRA = "pra"
    CQC = "cqc"
    MHRA = "mhra"
    OFCOM = "ofcom"
    ICO = "ico"
    HSE = "hse"
    OTHER = "other"


class Automation(str, Enum):
    FULLY_AUTOMATED = "fully_automated"
    SUPPORTS_DECISIONS = "supports_decisions"
    PROVIDES_INFO = "provides_info"


REGULATOR_GUIDANCE = {
    Regulator.FCA: (
        "The FCA has issued guidance on AI in financial services, emphasizing model risk "
        "management, consumer protection, and fair treatment. Your AI governance should "
        "integrate with existing Senior Managers and Certification Regime (SM&CR) "
        "accountability structures. Monitor FCA publications on AI and machine learning."
    ),
    Regulator.CQC: (
        "Healthcare AI must meet CQC standards for safety and effectiveness. AI systems "
        "supporting clinical decisions should have appropriate clinical validation and human "
        "oversight. Ensure integration with existing clinical governance frameworks."
    ),
    Regulator.MHRA: (
        "AI systems qualifying as medical devices are subject to MHRA regulation. Post-Brexit, "
        "the UK has its own UKCA marking requirements. Clinical decision support AI may fall "
        "under software as a medical device (SaMD) regulations."
    ),
    Regulator.OFCOM: (
        "Ofcom oversees AI used in communications and online services. The Online Safety Act "
        "creates duties around algorithmic transparency and content moderation. AI recommender "
        "systems may face specific compliance requirements."
    ),
    Regulator.ICO: (
        "The ICO provides extensive guidance on AI and data protection. Key areas include "
        "lawful basis for processing, automated decision-making rights under UK GDPR Article "
        "22, data protection impact assessments, and transparency requirements."
    ),
}

DEFAULT_REGULATOR_GUIDANCE = (
    "Consult your sector regulator's specific guidance on AI governance. Most regulators are "
    "developing AI-specific guidance within the pro-innovation framework."
)


QUESTIONS = (
    select(
        "ai_purpose",
        "What is the primary purpose of your AI system?",
        [
            ("safety_critical", "Safety-critical systems (transport, infrastructure)"),
            ("healthcare", "Healthcare / medical"),
            ("financial", "Financial services"),
            ("employment", "Employment / HR decisions"),
            ("legal", "Legal services"),
            ("education", "Education"),
            ("content_generation", "Content generation"),
            ("customer_service", "Customer service"),
            ("internal", "Internal business tools"),
            ("other", "Other"),
        ],
    ),
    boolean(
        "regulated_sector",
        "Does your organization operate in a sector with an existing regulator?",
        help="E.g., FCA for financial services, CQC for healthcare, Ofcom for communications.",
    ),
    select(
        "regulator",
        "Which regulator has primary oversight of your sector?",
        [
            (Regulator.FCA, "Financial Conduct Authority (FCA)"),
            (Regulator.PRA, "Prudential Regulation Authority (PRA)"),
            (Regulator.CQC, "Care Quality Commission (CQC)"),
            (Regulator.MHRA, "Medicines and Healthcare products Regulatory Agency (MHRA)"),
            (Regulator.OFCOM, "Ofcom"),
            (Regulator.ICO, "Information Commissioner's Office (ICO)"),
            (Regulator.HSE, "Health and Safety Executive (HSE)"),
            (Regulator.OTHER, "Other regulator"),
        ],
        depends_on={"field": "regulated_sector", "equals": True},
    ),
    boolean(
        "interacts_with_public",
        "Does the AI system interact directly with members of the public?",
        help="Including chatbots, recommendation systems, or automated communications.",
    ),
    select(
        "automated_decisions",
        "What role does the AI play in decision-making?",
        [
            (Automation.FULLY_AUTOMATED, "Makes decisions without human review"),
            (Automation.SUPPORTS_DECISIONS, "Supports human decision-makers"),
            (Automation.PROVIDES_INFO, "Provides information only"),
        ],
    ),
    boolean(
        "contestability_mechanism",
        "Do affected individuals have a way to challenge AI-influenced decisions?",
        help="A mechanism for humans to contest or appeal decisions.",
    ),
    boolean(
        "processes_personal_data",
        "Does the system process personal data?",
        help="Subject to UK GDPR requirements.",
    ),
    boolean("third_party_model", "Are you using a third-party AI model or foundation model?"),
    boolean("risk_assessment", "Have you conducted a risk assessment for this AI system?"),
    boolean(
        "transparency_measures",
        "Have you implemented transparency measures explaining how the AI works?",
    ),
)


def _transparency(answers: Answers) -> str:
    text = "The transparency principle requires appropriate disclosure about AI use. "
    if answers.flag("interacts_with_public"):
        text += (
            "Since your AI interacts with the public, you should clearly inform users when they "
            "are engaging with an AI system. "
        )
    if answers.flag("transparency_measures"):
        return text + (
            "You have indicated transparency measures are in place. Ensure these include clear "
            "explanations of how the AI influences outcomes and any limitations."
        )
    return text + (
        "RECOMMENDED: Implement transparency measures appropriate to your context, including "
        "user-facing explanations and technical documentation."
    )


def _contestability(answers: Answers, fully_automated: bool) -> str:
    text = "The contestability principle ensures affected individuals can challenge AI decisions. "
    has_mechanism = answers.flag("contestability_mechanism")
    if fully_automated and not has_mechanism:
        return text + (
            "CRITICAL: Your system makes automated decisions without a challenge mechanism. "
            "Implement a process for individuals to request human review of AI-influenced "
            "decisions that affect them."
        )
    if has_mechanism:
        return text + (
            "You have a contestability mechanism in place. Ensure it is accessible, clearly "
            "communicated, and results in meaningful human review."
        )
    return text + (
        "Consider implementing a challenge mechanism proportionate to the impact of AI "
        "decisions on individuals."
    )


def _uk_gdpr(fully_automated: bool) -> str:
    items = [
        "Identify and document your lawful basis for processing",
        "Conduct a Data Protection Impact Assessment (DPIA) for high-risk processing",
        "Provide privacy information to data subjects",
    ]
    if fully_automated:
        items.append(
            "Article 22 provides rights around solely automated decisions with legal/significant "
            "effects — ensure you have lawful grounds and safeguards"
        )
    return (
        "Your processing of personal data is subject to UK GDPR. Key requirements include:\n\n"
        + bullets(items)
        + "\nConsult ICO guidance on AI and data protection for detailed requirements."
    )


def generate_policy(raw: AnswerMap) -> List[Section]:
    answers = Answers(raw)
    fully_automated = answers.choice("automated_decisions", Automation) is Automation.FULLY_AUTOMATED
    sections: List[Section] = []

    sections.append(Section(
        heading="UK Pro-Innovation AI Framework",
        body=(
            "The UK has adopted a principles-based, context-specific approach to AI regulation. "
            "Rather than creating a single AI regulator, existing sector regulators apply five "
            "cross-cutting principles to AI within their domains. This policy addresses your "
            "obligations under this framework."
        ),
    ))

    sections.append(Section(
        heading="The Five AI Principles",
        body=(
            "UK regulators are expected to apply these principles:\n\n"
            "1. Safety, security, and robustness — AI should function securely and safely\n"
            "2. Transparency and explainability — AI should be appropriately transparent\n"
            "3. Fairness — AI should not undermine legal rights or discriminate\n"
            "4. Accountability and governance — Clear lines of responsibility\n"
            "5. Contestability and redress — People should be able to challenge AI decisions\n\n"
            "Your governance approach should address each principle relevant to your use case."
        ),
    ))

    if answers.flag("regulated_sector") and answers.raw("regulator"):
        regulator = answers.choice("regulator", Regulator)
        sections.append(Section(
            heading="Sector Regulator Guidance",
            body=REGULATOR_GUIDANCE.get(regulator, DEFAULT_REGULATOR_GUIDANCE),
        ))

    sections.append(Section(heading="Transparency and Explainability", body=_transparency(answers)))
    sections.append(Section(
        heading="Contestability and Redress",
        body=_contestability(answers, fully_automated),
    ))

    if answers.flag("processes_personal_data"):
        sections.append(Section(heading="UK GDPR Compliance", body=_uk_gdpr(fully_automated)))

    if answers.flag("risk_assessment"):
        risk_text = (
            "You have conducted a risk assessment. Ensure it covers the five principles and is "
            "reviewed periodically. Document risks, mitigations, and residual risks. Consider "
            "using the DSIT AI Assurance Framework or sector-specific guidance."
        )
    else:
        risk_text = (
            "RECOMMENDED: Conduct a risk assessment covering safety, fairness, transparency, "
            "accountability, and contestability. The DSIT AI Assurance Framework provides useful "
            "guidance. Document your assessment and planned mitigations."
        )
    sections.append(Section(heading="Risk Assessment", body=risk_text))

    sections.append(Section(
        heading="AI Safety Institute",
        body=(
            "The UK AI Safety Institute (AISI) conducts research and evaluations on AI safety. "
            "While currently focused on frontier AI models, AISI resources and evaluation "
            "frameworks may be relevant for understanding safety best practices. Monitor AISI "
            "publications for emerging guidance."
        ),
    ))

    if answers.flag("third_party_model"):
        sections.append(Section(
            heading="Third-Party Model Governance",
            body=(
                "When using third-party AI models, you remain responsible for your deployment "
                "context. Document the model provider, version, intended use, and any "
                "customizations. Conduct due diligence on the provider's safety measures. "
                "Maintain the ability to monitor, update, or discontinue model use if issues arise."
            ),
        ))

    steps = ["Review this policy with legal and compliance teams."]
    if answers.flag("regulated_sector"):
        steps.append("Confirm alignment with sector regulator AI guidance.")
    if not answers.flag("risk_assessment"):
        steps.append("Conduct a risk assessment covering the five AI principles.")
    if fully_automated and not answers.flag("contestability_mechanism"):
        steps.append("Implement a contestability mechanism for affected individuals.")
    if answers.flag("processes_personal_data"):
        steps.append("Complete or review DPIA for AI processing of personal data.")
    if not answers.flag("transparency_measures"):
        steps.append("Develop transparency documentation for stakeholders.")
    steps.append("Establish ongoing monitoring and governance procedures.")
    sections.append(next_steps(steps))

    return sections


JURISDICTION = JurisdictionDefinition(
    id="uk",
    name="United Kingdom",
    regulation="Pro-Innovation Framework",
    icon="🇬🇧",
    questions=QUESTIONS,
    generate=generate_policy,
)
