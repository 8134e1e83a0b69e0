"""EU AI Act jurisdiction.

Three risk tiers: a purpose listed in Annex III makes the system High-Risk;
otherwise interacting with natural persons or generating synthetic content
makes it Limited Risk; everything else is Minimal Risk.
"""

from __future__ import annotations

from enum import Enum
from typing import List

from .rules import Answers, bullets, describe, next_steps
from .schema import AnswerMap, JurisdictionDefinition, Section, boolean, select


class Purpose(str, Enum):
    BIOMETRIC_ID = "biometric_id"
    CRITICAL_INFRASTRUCTURE = "critical_infrastructure"
    EDUCATION = "education"
    EMPLOYMENT = "employment"
    ESSENTIAL_SERVICES = "essential_services"
    LAW_ENFORCEMENT = "law_enforcement"
    MIGRATION = "migration"
    JUSTICE = "justice"
    CONTENT_GENERATION = "content_generation"
    CUSTOMER_SERVICE = "customer_service"
    INTERNAL_PRODUCTIVITY = "internal_productivity"
    OTHER = "other"


class Automation(str, Enum):
    FULLY_AUTOMATED = "fully_automated"
    HUMAN_ON_LOOP = "human_on_loop"
    HUMAN_IN_LOOP = "human_in_loop"
    ADVISORY_ONLY = "advisory_only"


class TrainingData(str, Enum):
    PUBLIC = "public"
    PROPRIETARY = "proprietary"
    PERSONAL = "personal"
    SPECIAL_CATEGORY = "special_category"
    UNKNOWN = "unknown"


class GPAIRole(str, Enum):
    DEPLOYER = "deployer"
    FINE_TUNED = "fine_tuned"
    INTEGRATED = "integrated"


class RiskTier(str, Enum):
    HIGH = "High-Risk"
    LIMITED = "Limited Risk"
    MINIMAL = "Minimal Risk"


HIGH_RISK_PURPOSES = frozenset({
    Purpose.BIOMETRIC_ID,
    Purpose.CRITICAL_INFRASTRUCTURE,
    Purpose.EDUCATION,
    Purpose.EMPLOYMENT,
    Purpose.ESSENTIAL_SERVICES,
    Purpose.LAW_ENFORCEMENT,
    Purpose.MIGRATION,
    Purpose.JUSTICE,
})

PURPOSE_LABELS = {
    "biometric_id": "biometric identification",
    "critical_infrastructure": "critical infrastructure",
    "education": "education and vocational training",
    "employment": "employment and recruitment",
    "essential_services": "essential services access",
    "law_enforcement": "law enforcement",
    "migration": "migration and border control",
    "justice": "administration of justice",
    "content_generation": "content generation",
    "customer_service": "customer service",
    "internal_productivity": "internal productivity",
    "other": "other purposes",
}


QUESTIONS = (
    select(
        "ai_purpose",
        "What is the primary purpose of your AI system?",
        [
            (Purpose.BIOMETRIC_ID, "Biometric identification (facial recognition, etc.)"),
            (Purpose.CRITICAL_INFRASTRUCTURE, "Critical infrastructure (energy, water, transport)"),
            (Purpose.EDUCATION, "Education and vocational training"),
            (Purpose.EMPLOYMENT, "Employment, worker management, recruitment"),
            (Purpose.ESSENTIAL_SERVICES, "Access to essential services (credit, insurance, public benefits)"),
            (Purpose.LAW_ENFORCEMENT, "Law enforcement"),
            (Purpose.MIGRATION, "Migration, asylum, border control"),
            (Purpose.JUSTICE, "Administration of justice"),
            (Purpose.CONTENT_GENERATION, "Content generation (text, image, video)"),
            (Purpose.CUSTOMER_SERVICE, "Customer service chatbot"),
            (Purpose.INTERNAL_PRODUCTIVITY, "Internal productivity tools"),
            (Purpose.OTHER, "Other"),
        ],
        help="This determines your risk classification under the EU AI Act.",
    ),
    boolean(
        "interacts_with_people",
        "Does the AI system interact directly with natural persons?",
        help="For example, chatbots, virtual assistants, or recommendation systems that communicate with users.",
    ),
    boolean(
        "generates_synthetic",
        "Does the system generate or manipulate synthetic content?",
        help="This includes AI-generated text, images, audio, video, or deepfakes.",
        depends_on={"field": "ai_purpose", "equals": "content_generation"},
    ),
    boolean(
        "emotion_recognition",
        "Does the system perform emotion recognition or biometric categorization?",
        help="Systems that infer emotions, intentions, or categorize people based on biometric data.",
    ),
    select(
        "automated_decisions",
        "What level of automation does the system have in decision-making?",
        [
            (Automation.FULLY_AUTOMATED, "Fully automated — no human review"),
            (Automation.HUMAN_ON_LOOP, "Human-on-the-loop — human can intervene"),
            (Automation.HUMAN_IN_LOOP, "Human-in-the-loop — human approves each decision"),
            (Automation.ADVISORY_ONLY, "Advisory only — AI suggests, human decides"),
        ],
        help="Consider whether humans review AI outputs before they take effect.",
    ),
    select(
        "training_data",
        "What type of data was used to train the AI system?",
        [
            (TrainingData.PUBLIC, "Publicly available data only"),
            (TrainingData.PROPRIETARY, "Proprietary/internal data"),
            (TrainingData.PERSONAL, "Personal data (GDPR applies)"),
            (TrainingData.SPECIAL_CATEGORY, "Special category data (health, biometric, etc.)"),
            (TrainingData.UNKNOWN, "Unknown / third-party model"),
        ],
        help="This affects data governance requirements.",
    ),
    boolean(
        "third_party_model",
        "Are you using a third-party foundation model or general-purpose AI?",
        help="For example, GPT-4, Claude, Gemini, or other large language models.",
    ),
    select(
        "gpai_provider",
        "What is your role in relation to this third-party model?",
        [
            (GPAIRole.DEPLOYER, "Deployer — using the model as-is"),
            (GPAIRole.FINE_TUNED, "Fine-tuned — customized for specific use"),
            (GPAIRole.INTEGRATED, "Integrated — embedded in larger system"),
        ],
        help="This determines your obligations under the GPAI provisions.",
        depends_on={"field": "third_party_model", "equals": True},
    ),
    select(
        "target_users",
        "Who are the primary users of this AI system?",
        [
            ("internal", "Internal employees only"),
            ("b2b", "Business customers (B2B)"),
            ("consumers", "General public / consumers (B2C)"),
            ("government", "Government / public sector"),
        ],
    ),
    select(
        "market_placement",
        "How is the AI system made available in the EU market?",
        [
            ("eu_developed", "Developed and deployed in the EU"),
            ("imported", "Imported into the EU"),
            ("remote", "Provided remotely to EU users"),
            ("not_eu", "Not available to EU users"),
        ],
    ),
    boolean(
        "documentation_exists",
        "Do you maintain technical documentation for this AI system?",
        help="This includes architecture descriptions, training methodologies, and evaluation results.",
    ),
    boolean(
        "logging_enabled",
        "Does the system automatically log its operations?",
        help="Required for traceability under the AI Act.",
    ),
)


def classify_risk(answers: Answers) -> RiskTier:
    if answers.choice("ai_purpose", Purpose) in HIGH_RISK_PURPOSES:
        return RiskTier.HIGH
    if answers.flag("interacts_with_people") or answers.flag("generates_synthetic"):
        return RiskTier.LIMITED
    return RiskTier.MINIMAL


def _risk_explanation(tier: RiskTier, answers: Answers) -> str:
    if tier is RiskTier.HIGH:
        purpose = describe(answers.raw("ai_purpose"), PURPOSE_LABELS)
        return (
            f"Based on your indicated purpose ({purpose}), this AI system is classified as "
            "high-risk under Article 6 of the EU AI Act. High-risk systems are subject to "
            "mandatory requirements including conformity assessments, registration in the EU "
            "database, and ongoing monitoring obligations."
        )
    if tier is RiskTier.LIMITED:
        return (
            "This AI system is classified as limited risk due to its interaction with natural "
            "persons or generation of synthetic content. Limited-risk systems must comply with "
            "transparency obligations under Article 50, ensuring users are aware they are "
            "interacting with AI."
        )
    return (
        "This AI system is classified as minimal risk under the EU AI Act. While not subject "
        "to mandatory requirements, voluntary adoption of codes of practice is encouraged."
    )


def _transparency(answers: Answers) -> str:
    items: List[str] = []
    if answers.flag("interacts_with_people"):
        items.append("Users must be informed they are interacting with an AI system (Article 50(1)).")
    if answers.flag("generates_synthetic"):
        items.append("AI-generated content must be marked in a machine-readable format (Article 50(2)).")
        items.append("Deepfakes must disclose they were artificially created (Article 50(4)).")
    if answers.flag("emotion_recognition"):
        items.append("Persons exposed to emotion recognition must be informed of its operation (Article 50(3)).")
    if not items:
        items.append("Provide users with clear information about the system's AI nature and intended purpose (Article 13).")
    return "This system must comply with the following transparency obligations:\n\n" + bullets(items)


def _human_oversight(answers: Answers) -> str:
    text = "High-risk AI systems must be designed to allow effective human oversight (Article 14). "
    mode = answers.choice("automated_decisions", Automation)
    if mode is Automation.FULLY_AUTOMATED:
        return text + (
            "CRITICAL: Your system currently operates with no human review. You must implement "
            "human oversight measures, including the ability for human operators to understand "
            "system capabilities, monitor for anomalies, and intervene or stop the system."
        )
    if mode is Automation.HUMAN_ON_LOOP:
        return text + (
            "Your human-on-the-loop approach may be sufficient if operators can effectively "
            "intervene. Ensure operators receive appropriate training and tools."
        )
    return text + (
        "Your current human oversight approach appears appropriate. Maintain documentation "
        "of oversight procedures."
    )


def _gpai(answers: Answers) -> str:
    text = (
        "Your use of a general-purpose AI (GPAI) model triggers additional considerations "
        "under Chapter V of the AI Act.\n\n"
    )
    role = answers.choice("gpai_provider", GPAIRole)
    if role is GPAIRole.DEPLOYER:
        return text + (
            "As a deployer using the model as-is, you may rely on the GPAI provider's "
            "documentation and compliance measures. However, you remain responsible for your "
            "specific deployment context and must ensure the model is appropriate for your use case."
        )
    if role is GPAIRole.FINE_TUNED:
        return text + (
            "By fine-tuning the model, you have created a derivative system. You must document "
            "your modifications, assess any new risks introduced, and may be considered a "
            "provider for the modified system."
        )
    return text + (
        "By integrating the GPAI into a larger system, you share responsibility with the GPAI "
        "provider. Document the integration architecture and ensure clear allocation of "
        "compliance responsibilities."
    )


def generate_policy(raw: AnswerMap) -> List[Section]:
    answers = Answers(raw)
    tier = classify_risk(answers)
    high = tier is RiskTier.HIGH
    limited = answers.flag("interacts_with_people") or answers.flag("generates_synthetic")
    sections: List[Section] = []

    sections.append(Section(
        heading="EU AI Act Overview",
        body=(
            "The EU Artificial Intelligence Act (Regulation (EU) 2024/1689) establishes a "
            "risk-based framework for AI systems placed on the market or used in the European "
            "Union. Obligations scale with risk: certain practices are prohibited outright, "
            "high-risk systems face mandatory requirements, limited-risk systems carry "
            "transparency duties, and minimal-risk systems are encouraged to follow voluntary "
            "codes of practice. The Act applies to providers and deployers regardless of where "
            "they are established when the system's output is used in the EU."
        ),
    ))

    sections.append(Section(
        heading="Risk Classification",
        body=f"{tier.value} System. {_risk_explanation(tier, answers)}",
    ))

    if limited or high:
        sections.append(Section(heading="Transparency Obligations", body=_transparency(answers)))

    if high:
        sections.append(Section(
            heading="Conformity Assessment",
            body=(
                "Before placing this high-risk AI system on the market, you must complete a "
                "conformity assessment procedure as specified in Article 43. For biometric "
                "identification and critical infrastructure systems, this requires third-party "
                "assessment by a notified body. For other high-risk categories, self-assessment "
                "following Annex VI procedures may be sufficient."
            ),
        ))
        sections.append(Section(
            heading="EU Database Registration",
            body=(
                "This high-risk AI system must be registered in the EU database for high-risk AI "
                "systems before being placed on the market (Article 71). Registration includes "
                "providing system information, intended purpose, conformity status, and contact "
                "details for the provider."
            ),
        ))
        lead = (
            "You have indicated that technical documentation exists. Ensure it meets"
            if answers.flag("documentation_exists")
            else "You must create technical documentation meeting"
        )
        sections.append(Section(
            heading="Technical Documentation Requirements",
            body=(
                f"{lead} the requirements of Annex IV, including: general system description, "
                "detailed technical design, training data governance documentation, performance "
                "metrics, and cybersecurity measures."
            ),
        ))
        sections.append(Section(heading="Human Oversight", body=_human_oversight(answers)))
        logging_text = (
            "Your system includes automatic logging, which is required."
            if answers.flag("logging_enabled")
            else "REQUIRED: You must implement automatic logging capabilities."
        )
        sections.append(Section(
            heading="Automatic Logging",
            body=(
                f"{logging_text} Logs must enable traceability of system operations and be "
                "retained for the duration of the system's intended purpose, with a minimum "
                "period to be specified in implementing acts."
            ),
        ))

    if answers.flag("third_party_model"):
        sections.append(Section(heading="General-Purpose AI Obligations", body=_gpai(answers)))

    data = answers.choice("training_data", TrainingData)
    if data in (TrainingData.PERSONAL, TrainingData.SPECIAL_CATEGORY):
        kind = "special category personal data" if data is TrainingData.SPECIAL_CATEGORY else "personal data"
        sections.append(Section(
            heading="Data Governance & GDPR Alignment",
            body=(
                f"Your AI system uses {kind}, requiring alignment with GDPR obligations. Ensure "
                "lawful basis for processing (Article 6 GDPR), implement data protection impact "
                "assessments, and maintain records of processing activities. For high-risk AI "
                "systems, data governance practices must meet the specific requirements of "
                "Article 10 of the AI Act."
            ),
        ))

    steps = ["Review and finalize this governance policy with your legal team."]
    if high:
        steps.append("Complete the conformity assessment procedure.")
        steps.append("Register the system in the EU high-risk AI database.")
        steps.append("Implement required technical documentation per Annex IV.")
        steps.append("Establish human oversight procedures.")
        if not answers.flag("logging_enabled"):
            steps.append("Implement automatic logging capabilities.")
    if limited:
        steps.append("Implement transparency notices for users.")
        if answers.flag("generates_synthetic"):
            steps.append("Add machine-readable markers to AI-generated content.")
    if answers.flag("third_party_model"):
        steps.append("Document GPAI provider information and integration details.")
    steps.append("Establish post-market monitoring and periodic governance review.")
    sections.append(next_steps(steps))

    return sections


JURISDICTION = JurisdictionDefinition(
    id="eu",
    name="European Union",
    regulation="EU AI Act",
    icon="🇪🇺",
    questions=QUESTIONS,
    generate=generate_policy,
)
