"""Canada jurisdiction — AIDA (Bill C-27) high-impact rules plus PIPEDA."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from .rules import Answers, bullets, describe, is_high_risk, next_steps
from .schema import AnswerMap, JurisdictionDefinition, Section, boolean, select


class Purpose(str, Enum):
    EMPLOYMENT = "employment"
    CREDIT = "credit"
    INSURANCE = "insurance"
    HEALTHCARE = "healthcare"
    GOVERNMENT = "government"
    LEGAL = "legal"
    EDUCATION = "education"
    BIOMETRIC = "biometric"
    CONTENT_MODERATION = "content_moderation"
    CONTENT_GENERATION = "content_generation"
    CUSTOMER_SERVICE = "customer_service"
    INTERNAL = "internal"
    OTHER = "other"


class Province(str, Enum):
    QUEBEC = "quebec"
    ONTARIO = "ontario"
    BC = "bc"
    ALBERTA = "alberta"
    NATIONAL = "national"
    OTHER = "other"


class Automation(str, Enum):
    FULLY_AUTOMATED = "fully_automated"
    RECOMMENDATION = "recommendation"
    ADVISORY = "advisory"
    AUGMENTATION = "augmentation"


HIGH_IMPACT_PURPOSES = frozenset({
    Purpose.EMPLOYMENT,
    Purpose.CREDIT,
    Purpose.INSURANCE,
    Purpose.HEALTHCARE,
    Purpose.GOVERNMENT,
    Purpose.LEGAL,
    Purpose.EDUCATION,
    Purpose.BIOMETRIC,
})

PURPOSE_LABELS = {
    "employment": "employment decisions",
    "credit": "credit and lending",
    "insurance": "insurance",
    "healthcare": "healthcare",
    "government": "government services",
    "legal": "legal services",
    "education": "education",
    "biometric": "biometric identification",
    "content_moderation": "content moderation",
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
            (Purpose.EMPLOYMENT, "Employment decisions (hiring, promotion, termination)"),
            (Purpose.CREDIT, "Credit and lending decisions"),
            (Purpose.INSURANCE, "Insurance underwriting or claims"),
            (Purpose.HEALTHCARE, "Healthcare services or triage"),
            (Purpose.GOVERNMENT, "Government services or benefits"),
            (Purpose.LEGAL, "Legal services or court proceedings"),
            (Purpose.EDUCATION, "Educational admissions or assessment"),
            (Purpose.BIOMETRIC, "Biometric identification"),
            (Purpose.CONTENT_MODERATION, "Content moderation"),
            (Purpose.CONTENT_GENERATION, "Content generation"),
            (Purpose.CUSTOMER_SERVICE, "Customer service"),
            (Purpose.INTERNAL, "Internal business operations"),
            (Purpose.OTHER, "Other"),
        ],
        help='This helps determine if the system may be considered "high-impact" under AIDA.',
    ),
    boolean(
        "significant_impact",
        "Could the AI system significantly impact individuals' health, safety, or economic interests?",
        help="High-impact systems face additional requirements under AIDA.",
    ),
    boolean(
        "federal_regulated",
        "Is your organization federally regulated or engaged in international/interprovincial trade?",
        help="Determines whether AIDA and PIPEDA apply directly.",
    ),
    select(
        "province",
        "In which province(s) does your AI system primarily operate?",
        [
            (Province.QUEBEC, "Quebec"),
            (Province.ONTARIO, "Ontario"),
            (Province.BC, "British Columbia"),
            (Province.ALBERTA, "Alberta"),
            (Province.NATIONAL, "National / Multiple provinces"),
            (Province.OTHER, "Other provinces"),
        ],
        help="Quebec has additional AI and privacy requirements.",
    ),
    boolean(
        "processes_personal_info",
        "Does the AI system process personal information?",
        help="Subject to PIPEDA or provincial privacy laws.",
    ),
    select(
        "automated_decisions",
        "What role does the AI play in decision-making?",
        [
            (Automation.FULLY_AUTOMATED, "Fully automated decisions"),
            (Automation.RECOMMENDATION, "Recommendations reviewed by humans"),
            (Automation.ADVISORY, "Advisory only — humans decide"),
            (Automation.AUGMENTATION, "Augments human analysis"),
        ],
    ),
    boolean(
        "transparency_measures",
        "Do you inform individuals when AI is used in decisions affecting them?",
        help="PIPEDA requires transparency about automated decision-making.",
    ),
    boolean(
        "explanation_available",
        "Can individuals request an explanation of AI-assisted decisions?",
        help="Required under PIPEDA for automated decisions with significant impact.",
    ),
    boolean(
        "bias_assessment",
        "Have you assessed the AI system for biased outputs?",
        help="AIDA will require bias mitigation for high-impact systems.",
    ),
    boolean(
        "risk_assessment",
        "Have you conducted a risk assessment for this AI system?",
        help="Required for high-impact systems under AIDA.",
    ),
    boolean(
        "human_oversight",
        "Is there meaningful human oversight of AI operations?",
        help="Important for high-impact decision-making systems.",
    ),
    boolean(
        "third_party_model",
        "Are you using a third-party AI model (e.g., GPT, Claude)?",
        help="Affects accountability and documentation requirements.",
    ),
)


def _classification(answers: Answers, high_impact: bool) -> str:
    if not high_impact:
        return (
            "This AI system does not appear to meet the high-impact threshold under AIDA based "
            "on current information. However, you should monitor regulatory developments as the "
            "definition of high-impact systems may be clarified through regulations."
        )
    purpose = describe(answers.raw("ai_purpose"), PURPOSE_LABELS)
    impact = (
        " and its potential to significantly impact individuals"
        if answers.flag("significant_impact") else ""
    )
    return (
        f"This AI system is likely to be classified as HIGH-IMPACT under AIDA based on its use "
        f"in {purpose}{impact}. High-impact systems will be subject to mandatory requirements "
        "including risk assessments, bias mitigation measures, transparency obligations, and "
        "human oversight requirements."
    )


def _aida_sections(answers: Answers, automation: Optional[Automation]) -> List[Section]:
    sections: List[Section] = []

    if answers.flag("risk_assessment"):
        risk_text = (
            "You have conducted a risk assessment. Under AIDA, high-impact systems require "
            "documented assessments that identify potential harms and mitigation measures. "
            "Ensure your assessment covers:\n\n"
            + bullets([
                "Potential harms to individuals (physical, psychological, economic)",
                "Risks of biased or discriminatory outputs",
                "Data quality and representativeness issues",
                "Security and misuse risks",
                "Mitigation measures for identified risks",
            ])
            + "\nReview and update the assessment periodically."
        )
    else:
        risk_text = (
            "REQUIRED UNDER AIDA: Conduct a risk assessment before deploying this high-impact AI "
            "system. Document potential harms, their likelihood and severity, and your mitigation "
            "measures. This will be mandatory once AIDA comes into force."
        )
    sections.append(Section(heading="Risk Assessment (AIDA)", body=risk_text))

    if answers.flag("bias_assessment"):
        bias_text = (
            "You have assessed for biased outputs. AIDA will require ongoing bias monitoring and "
            "mitigation for high-impact systems. Ensure your assessment:\n\n"
            + bullets([
                "Tests across protected grounds (race, gender, age, disability, etc.)",
                "Documents methodology and findings",
                "Implements mitigation for identified biases",
                "Establishes ongoing monitoring procedures",
            ]).rstrip("\n")
        )
    else:
        bias_text = (
            "REQUIRED UNDER AIDA: High-impact AI systems must include measures to identify and "
            "mitigate biased outputs, particularly those that could disadvantage individuals "
            "based on prohibited grounds under the Canadian Human Rights Act. Conduct bias "
            "testing before deployment."
        )
    sections.append(Section(heading="Bias Mitigation (AIDA)", body=bias_text))

    oversight_text = "AIDA emphasizes human oversight for high-impact AI systems. "
    if answers.flag("human_oversight"):
        oversight_text += "You have indicated human oversight is in place. Ensure:\n\n" + bullets([
            "Humans can understand and interpret AI outputs",
            "Humans have authority to override AI decisions",
            "Oversight is meaningful, not merely procedural",
            "Staff are trained on system capabilities and limitations",
        ]).rstrip("\n")
    elif automation is Automation.FULLY_AUTOMATED:
        oversight_text += (
            "CRITICAL: Your system operates with full automation. For high-impact decisions, "
            "implement meaningful human oversight including the ability to review, understand, "
            "and override AI outputs."
        )
    else:
        oversight_text += (
            "Consider formalizing human oversight procedures to ensure they are effective and "
            "documented."
        )
    sections.append(Section(heading="Human Oversight (AIDA)", body=oversight_text))

    return sections


def _pipeda(automation: Optional[Automation]) -> str:
    text = (
        "Your processing of personal information is subject to PIPEDA (or substantially similar "
        "provincial legislation). Key requirements:\n\n"
        + bullets([
            "Consent: Obtain meaningful consent for collection, use, and disclosure",
            "Purpose limitation: Use information only for stated purposes",
            "Transparency: Be open about your practices",
            "Access: Allow individuals to access their information",
            "Accuracy: Keep information accurate and up-to-date",
            "Safeguards: Protect information with appropriate security",
        ])
    )
    if automation in (Automation.FULLY_AUTOMATED, Automation.RECOMMENDATION):
        text += (
            "\nFor automated decision-making, PIPEDA requires transparency about how decisions "
            "are made and, in some cases, the opportunity for human review."
        )
    return text


def _transparency(answers: Answers) -> str:
    informs = answers.flag("transparency_measures")
    explains = answers.flag("explanation_available")
    if informs and explains:
        return (
            "You provide transparency and explanations about AI use. This aligns with both "
            "PIPEDA and anticipated AIDA requirements. Ensure:\n\n"
            + bullets([
                "Notices are clear and understandable to affected individuals",
                "Explanations describe the general logic of AI decisions",
                "Information is provided proactively, not just on request",
                'Explanations are meaningful (not just "an algorithm decided")',
            ]).rstrip("\n")
        )
    if not informs:
        text = (
            "RECOMMENDED: Implement transparency measures informing individuals when AI is used "
            "in decisions affecting them. This is expected under PIPEDA for automated "
            "decision-making and will be required under AIDA for high-impact systems."
        )
        if not explains:
            text += (
                "\n\nAlso implement a mechanism for individuals to request explanations of "
                "AI-assisted decisions."
            )
        return text
    return (
        "You inform individuals about AI use, but should also provide a mechanism for them to "
        "request explanations of AI-assisted decisions. This supports both PIPEDA compliance and "
        "anticipated AIDA requirements."
    )


def generate_policy(raw: AnswerMap) -> List[Section]:
    answers = Answers(raw)
    automation = answers.choice("automated_decisions", Automation)
    quebec = answers.choice("province", Province) is Province.QUEBEC
    high_impact = is_high_risk(
        answers.choice("ai_purpose", Purpose),
        HIGH_IMPACT_PURPOSES,
        answers.flag("significant_impact"),
    )
    sections: List[Section] = []

    sections.append(Section(
        heading="Canadian AI Regulatory Framework",
        body=(
            "Canada's AI governance framework centers on the proposed Artificial Intelligence "
            "and Data Act (AIDA), which is part of Bill C-27. AIDA establishes requirements for "
            '"high-impact" AI systems, including risk assessments, bias mitigation, '
            "transparency, and human oversight. Until AIDA comes into force, AI systems are "
            "primarily governed by PIPEDA (Personal Information Protection and Electronic "
            "Documents Act) for privacy, and provincial laws where applicable. This policy "
            "addresses both current obligations and anticipated AIDA requirements."
        ),
    ))

    sections.append(Section(
        heading="AIDA High-Impact Classification",
        body=_classification(answers, high_impact),
    ))

    if high_impact:
        sections.extend(_aida_sections(answers, automation))

    if answers.flag("processes_personal_info"):
        sections.append(Section(heading="PIPEDA Privacy Compliance", body=_pipeda(automation)))

    sections.append(Section(heading="Transparency and Explainability", body=_transparency(answers)))

    if quebec:
        sections.append(Section(
            heading="Quebec Law 25 Requirements",
            body=(
                "Operating in Quebec subjects you to Law 25 (formerly Bill 64), which has "
                "additional AI-related requirements:\n\n"
                + bullets([
                    "Automated decision-making must be disclosed to affected individuals at or "
                    "before the time a decision is made",
                    "Individuals have the right to be informed of the personal information used, "
                    "the reasons and principal factors leading to the decision, and the right to "
                    "have the decision reviewed by a person",
                    "Privacy Impact Assessments are required for projects involving personal "
                    "information",
                    "Stricter consent requirements and data governance obligations apply",
                ])
                + "\nEnsure your AI governance addresses these Quebec-specific obligations."
            ),
        ))

    if answers.flag("third_party_model"):
        sections.append(Section(
            heading="Third-Party AI Model Governance",
            body=(
                "Using third-party AI models does not transfer your compliance obligations. "
                "Under AIDA, you remain responsible for ensuring high-impact systems meet "
                "requirements regardless of who developed the underlying model. Document:\n\n"
                + bullets([
                    "Model provider and version information",
                    "Provider's stated capabilities and limitations",
                    "Your evaluation of the model for your specific use case",
                    "Any fine-tuning or customization performed",
                    "Contractual provisions addressing compliance responsibilities",
                ])
                + "\nMaintain the ability to switch providers if compliance issues arise."
            ),
        ))

    if answers.flag("federal_regulated"):
        jurisdiction_text = (
            "As a federally regulated organization or one engaged in interprovincial/"
            "international trade, PIPEDA and AIDA (once in force) apply directly to your "
            "operations. Ensure compliance with federal requirements across all provinces."
        )
    else:
        jurisdiction_text = (
            "Provincial privacy laws may apply depending on your operations. In Quebec, Alberta, "
            "and British Columbia, substantially similar provincial laws govern privacy. AIDA, "
            "once in force, will apply to AI systems based on their impact regardless of "
            "provincial jurisdiction."
        )
    sections.append(Section(heading="Jurisdictional Application", body=jurisdiction_text))

    if high_impact:
        sections.append(Section(
            heading="Enforcement Considerations",
            body=(
                "AIDA proposes significant penalties for non-compliance with high-impact AI "
                "system requirements:\n\n"
                + bullets([
                    "Administrative monetary penalties up to $10 million or 3% of global revenue",
                    "Criminal offenses for knowing violations causing serious harm, with fines up "
                    "to $25 million or 5% of global revenue",
                    "Personal liability for directors and officers in certain circumstances",
                ])
                + "\nProactive compliance is strongly recommended given these potential consequences."
            ),
        ))

    steps = ["Review this policy with legal counsel familiar with Canadian AI and privacy law."]
    if high_impact and not answers.flag("risk_assessment"):
        steps.append("Conduct a comprehensive risk assessment for this high-impact AI system.")
    if high_impact and not answers.flag("bias_assessment"):
        steps.append("Conduct bias testing across protected grounds under Canadian human rights law.")
    if not answers.flag("transparency_measures"):
        steps.append("Implement transparency measures informing individuals of AI use.")
    if not answers.flag("explanation_available"):
        steps.append("Create a mechanism for individuals to request decision explanations.")
    if high_impact and not answers.flag("human_oversight"):
        steps.append("Implement meaningful human oversight procedures.")
    if quebec:
        steps.append("Review Quebec Law 25 specific requirements for automated decision-making.")
    if answers.flag("processes_personal_info"):
        steps.append("Review and document PIPEDA compliance measures.")
    steps.append("Monitor AIDA regulatory developments as the law progresses.")
    steps.append("Establish ongoing governance and review procedures.")
    sections.append(next_steps(steps))

    return sections


JURISDICTION = JurisdictionDefinition(
    id="canada",
    name="Canada",
    regulation="AIDA + PIPEDA",
    icon="🇨🇦",
    questions=QUESTIONS,
    generate=generate_policy,
)
