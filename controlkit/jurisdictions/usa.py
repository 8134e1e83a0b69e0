"""United States jurisdiction — NIST AI RMF plus state and sector overlays.

There is no federal risk tier; instead purposes with a known disparate-impact
history (hiring, credit, insurance, housing, healthcare) escalate the bias
section from advisory to CRITICAL wording.
"""

from __future__ import annotations

from enum import Enum
from typing import List

from .rules import Answers, bullets, describe, is_high_risk, next_steps
from .schema import AnswerMap, JurisdictionDefinition, Section, boolean, select


class Purpose(str, Enum):
    HIRING = "hiring"
    CREDIT = "credit"
    INSURANCE = "insurance"
    HEALTHCARE = "healthcare"
    HOUSING = "housing"
    CONTENT_MODERATION = "content_moderation"
    CONTENT_GENERATION = "content_generation"
    CUSTOMER_SERVICE = "customer_service"
    INTERNAL = "internal"
    OTHER = "other"


class State(str, Enum):
    CALIFORNIA = "california"
    COLORADO = "colorado"
    ILLINOIS = "illinois"
    NEW_YORK = "new_york"
    TEXAS = "texas"
    NATIONWIDE = "nationwide"
    OTHER = "other"


class DataSource(str, Enum):
    LICENSED = "licensed"
    PUBLIC_DOMAIN = "public_domain"
    USER_GENERATED = "user_generated"
    WEB_SCRAPED = "web_scraped"
    PROPRIETARY = "proprietary"
    MIXED = "mixed"
    UNKNOWN = "unknown"


class Automation(str, Enum):
    FULLY_AUTOMATED = "fully_automated"
    RECOMMENDATION = "recommendation"
    ADVISORY = "advisory"
    AUGMENTATION = "augmentation"


class Sector(str, Enum):
    FINANCIAL = "financial"
    HEALTHCARE = "healthcare"
    EDUCATION = "education"
    GOVERNMENT = "government"
    RETAIL = "retail"
    TECHNOLOGY = "technology"
    OTHER = "other"


BIAS_SENSITIVE_PURPOSES = frozenset({
    Purpose.HIRING,
    Purpose.CREDIT,
    Purpose.INSURANCE,
    Purpose.HOUSING,
    Purpose.HEALTHCARE,
})

PURPOSE_LABELS = {
    "hiring": "employment decisions",
    "credit": "credit decisions",
    "insurance": "insurance underwriting",
    "healthcare": "healthcare decisions",
    "housing": "housing decisions",
    "content_moderation": "content moderation",
    "content_generation": "content generation",
    "customer_service": "customer service",
    "internal": "internal operations",
    "other": "other purposes",
}

# State overlays; only the selected state contributes a section.
STATE_SECTIONS = {
    State.COLORADO: (
        "Colorado AI Act Considerations",
        "Colorado has enacted AI legislation focusing on high-risk AI systems. If your system "
        "makes consequential decisions in employment, education, financial services, healthcare, "
        "housing, insurance, or legal services, you may be subject to risk management, "
        "disclosure, and impact assessment requirements. Monitor the Colorado Attorney "
        "General's rulemaking for specific compliance obligations.",
    ),
    State.CALIFORNIA: (
        "California Requirements",
        "California has various AI-related requirements including the California Consumer "
        "Privacy Act (CCPA) provisions on automated decision-making, proposed regulations on AI "
        "in employment, and the Bot Disclosure Law for conversational AI. Ensure your system "
        "complies with applicable California privacy and consumer protection laws.",
    ),
    State.ILLINOIS: (
        "Illinois Considerations",
        "Illinois has enacted the Artificial Intelligence Video Interview Act requiring notice "
        "and consent for AI analysis of video interviews. If using AI in hiring processes, "
        "ensure compliance with this and the Illinois Human Rights Act's provisions on "
        "automated decision-making in employment.",
    ),
}

SECTOR_SECTIONS = {
    Sector.FINANCIAL: (
        "Financial Services Considerations",
        "Financial institutions using AI must comply with existing regulatory frameworks "
        "including fair lending laws (ECOA, Fair Housing Act), model risk management guidance "
        "(SR 11-7), and consumer protection requirements. The CFPB has indicated increased "
        "scrutiny of AI in consumer financial services. Ensure your AI governance integrates "
        "with existing compliance programs.",
    ),
    Sector.HEALTHCARE: (
        "Healthcare AI Considerations",
        "Healthcare AI systems may be subject to FDA regulation if they meet the definition of "
        "a medical device. Clinical decision support software has specific regulatory pathways. "
        "Additionally, ensure HIPAA compliance for systems processing protected health "
        "information, and consider clinical validation requirements for AI used in patient care.",
    ),
}


QUESTIONS = (
    select(
        "ai_purpose",
        "What is the primary purpose of your AI system?",
        [
            (Purpose.HIRING, "Employment decisions / hiring"),
            (Purpose.CREDIT, "Credit decisions / lending"),
            (Purpose.INSURANCE, "Insurance underwriting"),
            (Purpose.HEALTHCARE, "Healthcare / clinical decisions"),
            (Purpose.HOUSING, "Housing decisions"),
            (Purpose.CONTENT_MODERATION, "Content moderation"),
            (Purpose.CONTENT_GENERATION, "Content generation"),
            (Purpose.CUSTOMER_SERVICE, "Customer service"),
            (Purpose.INTERNAL, "Internal business operations"),
            (Purpose.OTHER, "Other"),
        ],
        help="Different use cases may trigger specific state regulations.",
    ),
    select(
        "operating_states",
        "In which states does your AI system primarily operate?",
        [
            (State.CALIFORNIA, "California"),
            (State.COLORADO, "Colorado"),
            (State.ILLINOIS, "Illinois"),
            (State.NEW_YORK, "New York"),
            (State.TEXAS, "Texas"),
            (State.NATIONWIDE, "Nationwide / Multiple states"),
            (State.OTHER, "Other states"),
        ],
        help="Some states have specific AI regulations.",
    ),
    boolean(
        "nyc_employment",
        "Is this system used for employment decisions in New York City?",
        help="NYC Local Law 144 requires bias audits for automated employment decision tools.",
        depends_on={"field": "ai_purpose", "equals": "hiring"},
    ),
    select(
        "training_data_source",
        "What is the source of your training data?",
        [
            (DataSource.LICENSED, "Licensed / purchased data"),
            (DataSource.PUBLIC_DOMAIN, "Public domain content"),
            (DataSource.USER_GENERATED, "User-generated content (with consent)"),
            (DataSource.WEB_SCRAPED, "Web-scraped content"),
            (DataSource.PROPRIETARY, "Proprietary / internal data"),
            (DataSource.MIXED, "Mixed sources"),
            (DataSource.UNKNOWN, "Unknown / third-party model"),
        ],
        help="This affects copyright and IP considerations.",
    ),
    boolean(
        "generates_content",
        "Does the system generate text, images, audio, or video?",
        help="Generative AI has specific copyright considerations.",
    ),
    boolean(
        "content_for_commercial",
        "Is AI-generated content used for commercial purposes?",
        depends_on={"field": "generates_content", "equals": True},
    ),
    select(
        "automated_decisions",
        "How are AI outputs used in decision-making?",
        [
            (Automation.FULLY_AUTOMATED, "Fully automated decisions"),
            (Automation.RECOMMENDATION, "Recommendations reviewed by humans"),
            (Automation.ADVISORY, "Advisory only — humans make final decisions"),
            (Automation.AUGMENTATION, "Augments human analysis"),
        ],
    ),
    boolean(
        "impacts_consumers",
        "Does the AI system make decisions that materially impact consumers?",
        help="This includes decisions about credit, employment, housing, insurance, or access to services.",
    ),
    select(
        "sector",
        "What industry sector does your organization operate in?",
        [
            (Sector.FINANCIAL, "Financial services"),
            (Sector.HEALTHCARE, "Healthcare"),
            (Sector.EDUCATION, "Education"),
            (Sector.GOVERNMENT, "Government / public sector"),
            (Sector.RETAIL, "Retail / e-commerce"),
            (Sector.TECHNOLOGY, "Technology"),
            (Sector.OTHER, "Other"),
        ],
        help="Certain sectors have additional regulatory requirements.",
    ),
    boolean(
        "risk_assessment_done",
        "Have you conducted a formal AI risk assessment?",
        help="The NIST AI RMF recommends regular risk assessments.",
    ),
    boolean(
        "bias_testing",
        "Have you tested the system for bias across protected classes?",
        help="Required for certain use cases and recommended as best practice.",
    ),
)


def _bias(answers: Answers, sensitive: bool) -> str:
    tested = answers.flag("bias_testing")
    if sensitive:
        purpose = describe(answers.raw("ai_purpose"), PURPOSE_LABELS)
        lead = (
            f"Your AI system is used for {purpose}, which has significant potential for "
            "disparate impact on protected classes. "
        )
        if tested:
            return lead + (
                "You have indicated bias testing has been performed. Ensure testing covered "
                "relevant protected classes (race, gender, age, disability, etc.) and document "
                "results and any remediation steps taken."
            )
        return lead + (
            "CRITICAL: You must conduct bias testing before deployment. Test for disparate "
            "impact across protected classes including race, gender, age, disability, national "
            "origin, and religion. Document methodology and results."
        )
    if tested:
        return (
            "Bias testing has been conducted. Maintain documentation and consider periodic "
            "re-testing, especially after model updates."
        )
    return (
        "Consider conducting bias testing as a best practice, even for lower-risk applications. "
        "This demonstrates due diligence and supports responsible AI development."
    )


def _copyright(answers: Answers, risky_source: bool) -> str:
    items: List[str] = []
    if risky_source:
        items.append(
            "Training on copyrighted material without license may constitute infringement; "
            "fair use analysis is fact-specific and uncertain"
        )
        items.append("Document your training data provenance and any licensing arrangements")
    if answers.flag("generates_content"):
        items.append(
            "AI-generated content may not be eligible for copyright protection under current "
            "U.S. Copyright Office guidance"
        )
        items.append("Generated content that substantially copies training data may infringe source copyrights")
        if answers.flag("content_for_commercial"):
            items.append(
                "Commercial use increases litigation risk; consider content filtering and "
                "indemnification provisions"
            )
    return (
        "AI-generated content and training data practices raise copyright considerations under "
        "U.S. law:\n\n"
        + bullets(items)
        + "\nConsult intellectual property counsel for your specific use case."
    )


def generate_policy(raw: AnswerMap) -> List[Section]:
    answers = Answers(raw)
    sections: List[Section] = []

    sections.append(Section(
        heading="NIST AI Risk Management Framework",
        body=(
            "This policy aligns with the NIST AI Risk Management Framework (AI RMF 1.0), which "
            "provides voluntary guidance for managing AI risks. The framework emphasizes four "
            "core functions: Govern (establishing accountability), Map (understanding context "
            "and risks), Measure (assessing and tracking risks), and Manage (prioritizing and "
            "responding to risks)."
        ),
    ))

    if answers.flag("risk_assessment_done"):
        risk_text = (
            "You have indicated that a formal risk assessment has been conducted. Ensure this "
            "assessment is documented and reviewed periodically. The NIST AI RMF recommends "
            "ongoing risk monitoring throughout the AI system lifecycle."
        )
    else:
        risk_text = (
            "RECOMMENDED: Conduct a formal AI risk assessment following the NIST AI RMF Map and "
            "Measure functions. Document identified risks, their likelihood and impact, and "
            "planned mitigations. Risk assessments should be reviewed at least annually or when "
            "significant changes occur."
        )
    sections.append(Section(heading="Risk Assessment", body=risk_text))

    sensitive = is_high_risk(answers.choice("ai_purpose", Purpose), BIAS_SENSITIVE_PURPOSES)
    sections.append(Section(heading="Bias and Fairness", body=_bias(answers, sensitive)))

    if answers.flag("nyc_employment"):
        sections.append(Section(
            heading="NYC Local Law 144 Compliance",
            body=(
                "Your use of automated employment decision tools (AEDT) in New York City "
                "triggers Local Law 144 requirements:\n\n"
                + bullets([
                    "Annual bias audit by an independent auditor is required",
                    "Audit results must be publicly posted on your website",
                    "Candidates must receive notice at least 10 business days before use",
                    "Notice must describe the job qualifications assessed and data sources",
                    "Candidates may request alternative selection process",
                ])
                + "\nNon-compliance can result in penalties of $500-$1,500 per violation."
            ),
        ))

    state = answers.choice("operating_states", State)
    if state in STATE_SECTIONS:
        heading, body = STATE_SECTIONS[state]
        sections.append(Section(heading=heading, body=body))

    source = answers.choice("training_data_source", DataSource)
    risky_source = source in (DataSource.WEB_SCRAPED, DataSource.MIXED)
    if answers.flag("generates_content") or risky_source:
        sections.append(Section(
            heading="Copyright and Intellectual Property",
            body=_copyright(answers, risky_source),
        ))

    sector = answers.choice("sector", Sector)
    if sector in SECTOR_SECTIONS:
        heading, body = SECTOR_SECTIONS[sector]
        sections.append(Section(heading=heading, body=body))

    fully_automated = answers.choice("automated_decisions", Automation) is Automation.FULLY_AUTOMATED
    if answers.flag("impacts_consumers") and fully_automated:
        sections.append(Section(
            heading="Automated Decision-Making Disclosure",
            body=(
                "When AI systems make fully automated decisions materially impacting consumers, "
                "best practices and emerging regulations recommend:\n\n"
                + bullets([
                    "Providing notice that automated processing is used",
                    "Explaining the general logic involved",
                    "Offering a mechanism to request human review",
                    "Maintaining records of decisions for potential challenges",
                ])
                + "\nThis approach aligns with FTC guidance on algorithmic transparency and "
                "emerging state requirements."
            ),
        ))

    steps = ["Review and finalize this governance policy with your legal team."]
    if not answers.flag("risk_assessment_done"):
        steps.append("Conduct a formal AI risk assessment using the NIST AI RMF.")
    if sensitive and not answers.flag("bias_testing"):
        steps.append("Conduct bias testing across protected classes before deployment.")
    if answers.flag("nyc_employment"):
        steps.append("Engage an independent auditor for NYC Local Law 144 bias audit.")
        steps.append("Prepare and post required public disclosures.")
    if answers.flag("generates_content") or source is DataSource.WEB_SCRAPED:
        steps.append("Consult IP counsel regarding copyright exposure.")
    steps.append("Establish ongoing monitoring and periodic reassessment procedures.")
    sections.append(next_steps(steps))

    return sections


JURISDICTION = JurisdictionDefinition(
    id="usa",
    name="United States",
    regulation="NIST AI RMF",
    icon="🇺🇸",
    questions=QUESTIONS,
    generate=generate_policy,
)
