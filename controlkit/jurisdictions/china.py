"""China jurisdiction — CAC generative AI, recommendation and deep synthesis rules.

China has no single risk tier; obligations hang off the service type and
whether the service is public facing.
"""

from __future__ import annotations

from enum import Enum
from typing import List

from .rules import Answers, bullets, next_steps
from .schema import AnswerMap, JurisdictionDefinition, Section, boolean, select


class ServiceType(str, Enum):
    GENERATIVE = "generative"
    RECOMMENDATION = "recommendation"
    DEEPFAKE = "deepfake"
    DECISION_SUPPORT = "decision_support"
    AUTONOMOUS = "autonomous"
    OTHER = "other"


class Identity(str, Enum):
    REAL_NAME = "real_name"
    PHONE = "phone"
    ACCOUNT = "account"
    ANONYMOUS = "anonymous"
    INTERNAL = "internal"


VERIFIED_IDENTITIES = frozenset({Identity.REAL_NAME, Identity.PHONE})


QUESTIONS = (
    select(
        "ai_type",
        "What type of AI service are you providing?",
        [
            (ServiceType.GENERATIVE, "Generative AI (text, image, video, code)"),
            (ServiceType.RECOMMENDATION, "Recommendation algorithms"),
            (ServiceType.DEEPFAKE, "Deep synthesis (deepfakes, voice cloning)"),
            (ServiceType.DECISION_SUPPORT, "Decision support systems"),
            (ServiceType.AUTONOMOUS, "Autonomous systems"),
            (ServiceType.OTHER, "Other AI applications"),
        ],
        help="Different AI types have specific regulations in China.",
    ),
    boolean(
        "public_facing",
        "Is the AI service available to the general public in China?",
        help="Public-facing services have additional requirements.",
    ),
    boolean(
        "generates_content",
        "Does the AI generate or synthesize content (text, images, audio, video)?",
    ),
    boolean(
        "content_labeling",
        "Is AI-generated content labeled or watermarked?",
        help="Required for synthetic content in China.",
        depends_on={"field": "generates_content", "equals": True},
    ),
    boolean(
        "content_filtering",
        "Do you have content filtering to prevent illegal or harmful outputs?",
        help="Required for generative AI services in China.",
    ),
    select(
        "user_identity",
        "How do you verify user identity?",
        [
            (Identity.REAL_NAME, "Real-name verification (ID-based)"),
            (Identity.PHONE, "Phone number verification"),
            (Identity.ACCOUNT, "Account registration only"),
            (Identity.ANONYMOUS, "Anonymous access allowed"),
            (Identity.INTERNAL, "Internal use only (employees)"),
        ],
        help="Real-name verification is required for many internet services.",
    ),
    boolean(
        "training_data_review",
        "Has training data been reviewed for compliance with Chinese law?",
        help="Training data must not contain prohibited content.",
    ),
    boolean(
        "algorithm_registered",
        "Has the algorithm been registered with the Cyberspace Administration of China (CAC)?",
        help="Required for recommendation algorithms and generative AI with public opinion influence.",
        depends_on={"field": "public_facing", "equals": True},
    ),
    boolean(
        "security_assessment",
        "Has a security assessment been conducted?",
        help="Required before launching public-facing generative AI services.",
    ),
    boolean(
        "data_localization",
        "Is user data stored within mainland China?",
        help="Data localization requirements apply to many services.",
    ),
    boolean(
        "cross_border_transfer",
        "Does any data transfer outside of China occur?",
        help="Cross-border data transfers require security assessments or other mechanisms.",
    ),
)


def _generative(answers: Answers) -> str:
    text = (
        "Generative AI services in China are subject to the Interim Measures for Generative AI "
        "Services Management. Key requirements:\n\n"
        + bullets([
            "Content must adhere to core socialist values and not subvert state power",
            "Training data must be legally obtained and reviewed for prohibited content",
            "AI-generated content must be labeled/watermarked",
            "Content filtering must prevent illegal, false, or harmful outputs",
            "User complaint mechanisms must be available",
            "Algorithm filing with CAC is required for public-facing services",
        ])
    )
    if answers.flag("public_facing") and not answers.flag("security_assessment"):
        text += (
            "\nCRITICAL: Public-facing generative AI services require a security assessment "
            "before launch. Complete this assessment and file with relevant authorities."
        )
    return text


def _content_filtering(answers: Answers) -> str:
    if answers.flag("content_filtering"):
        return (
            "You have content filtering in place. Ensure filters effectively prevent:\n\n"
            + bullets([
                "Content subverting state power or socialist system",
                "Content endangering national security or interests",
                "Content inciting ethnic hatred or discrimination",
                "False information harming national or public interest",
                "Content promoting terrorism or extremism",
                "Obscene, violent, or otherwise illegal content",
                "Content infringing others' rights",
            ])
            + "\nMaintain logs of filtered content for potential regulatory review."
        )
    if answers.flag("generates_content") or answers.flag("public_facing"):
        return (
            "REQUIRED: Implement content filtering to prevent generation or distribution of "
            "illegal or harmful content. This is mandatory for AI services in China. Filtering "
            "must cover political, security, and social harm categories defined in Chinese law."
        )
    return ""


def _identity(answers: Answers) -> str:
    identity = answers.choice("user_identity", Identity)
    if identity is Identity.REAL_NAME:
        return (
            "You have implemented real-name verification, which meets regulatory requirements "
            "for internet services in China."
        )
    if identity is Identity.PHONE:
        return (
            "Phone-based verification may satisfy real-name requirements as phone numbers in "
            "China are linked to identity. Confirm this meets requirements for your specific "
            "service type."
        )
    if answers.flag("public_facing") and identity in (Identity.ANONYMOUS, Identity.ACCOUNT):
        return (
            "CRITICAL: Public-facing internet services in China generally require real-name "
            "verification. Anonymous access for generative AI or recommendation services may "
            "not comply with regulations. Implement appropriate identity verification."
        )
    return (
        "For internal-only services, real-name requirements may not apply. Ensure employee "
        "access is appropriately controlled and logged."
    )


def _localization(answers: Answers) -> str:
    text = ""
    if answers.flag("data_localization"):
        text = (
            "You store user data within mainland China. Ensure data centers meet relevant "
            "security standards and certifications."
        )
    elif answers.flag("public_facing"):
        text = (
            "IMPORTANT: Many internet services in China require data localization. User data, "
            "particularly personal information, may need to be stored within mainland China. "
            "Review your obligations under the Cybersecurity Law and Data Security Law."
        )
    if answers.flag("cross_border_transfer"):
        transfer = (
            "Cross-border data transfers require compliance mechanisms such as CAC security "
            "assessment, standard contractual clauses, or certification. Assess which mechanism "
            "applies based on data volume and sensitivity."
        )
        text = f"{text}\n\n{transfer}" if text else transfer
    return text


def generate_policy(raw: AnswerMap) -> List[Section]:
    answers = Answers(raw)
    service = answers.choice("ai_type", ServiceType)
    generates = answers.flag("generates_content")
    public = answers.flag("public_facing")
    sections: List[Section] = []

    sections.append(Section(
        heading="China AI Regulatory Framework",
        body=(
            "China has implemented a comprehensive AI governance framework through multiple "
            "regulations including the Interim Measures for Generative AI Services, Algorithm "
            "Recommendation Regulations, Deep Synthesis Provisions, and related cybersecurity "
            "and data protection laws. This framework emphasizes content control, algorithm "
            "transparency and registration, real-identity verification, and alignment with "
            '"core socialist values."'
        ),
    ))

    if service is ServiceType.GENERATIVE or generates:
        sections.append(Section(heading="Generative AI Compliance", body=_generative(answers)))

    if service is ServiceType.RECOMMENDATION:
        sections.append(Section(
            heading="Recommendation Algorithm Compliance",
            body=(
                "Recommendation algorithms are regulated under the Internet Information Service "
                "Algorithmic Recommendation Management Provisions. Requirements include:\n\n"
                + bullets([
                    "Algorithm registration/filing with CAC (for services with public opinion attributes)",
                    "Transparency about recommendation principles",
                    "User controls to disable personalized recommendations",
                    "Prohibition of algorithms that induce addiction or excessive spending",
                    "Special protections for minors",
                    "No illegal discrimination based on user characteristics",
                ])
                + "\nReview your algorithm's compliance with these specific requirements."
            ),
        ))

    if service is ServiceType.DEEPFAKE:
        sections.append(Section(
            heading="Deep Synthesis Compliance",
            body=(
                "Deep synthesis (deepfake) technology is regulated under specific provisions. "
                "Requirements include:\n\n"
                + bullets([
                    "Clear labeling of synthesized content",
                    "Prohibition of synthesis without consent for realistic human likenesses",
                    "No creation of false news or information",
                    "Technical measures to embed identifiable marks in generated content",
                    "Verification of user identity for synthesis services",
                    "Mechanisms to handle complaints about misuse",
                ])
                + "\nDeep synthesis services face strict scrutiny and enforcement."
            ),
        ))

    filtering_text = _content_filtering(answers)
    if filtering_text:
        sections.append(Section(heading="Content Filtering", body=filtering_text))

    if generates:
        if answers.flag("content_labeling"):
            label_text = "You have implemented AI content labeling. Ensure labels:\n\n" + bullets([
                "Are clearly visible to users",
                "Include machine-readable watermarks where technically feasible",
                "Cannot be easily removed",
                "Are applied consistently to all AI-generated content",
            ]).rstrip("\n")
        else:
            label_text = (
                "REQUIRED: AI-generated content must be clearly labeled. Implement visible "
                "labeling and, where feasible, embedded watermarks. This applies to text, "
                "images, audio, and video generated by AI."
            )
        sections.append(Section(heading="AI Content Labeling", body=label_text))

    sections.append(Section(heading="User Identity Verification", body=_identity(answers)))

    if public:
        if answers.flag("algorithm_registered"):
            reg_text = (
                "Your algorithm is registered with CAC. Maintain registration and file updates "
                "if the algorithm significantly changes. Keep records of the filing for "
                "compliance demonstration."
            )
        else:
            reg_text = (
                "REQUIRED: Public-facing AI services with public opinion influence or "
                "recommendation capabilities must register algorithms with the Cyberspace "
                "Administration of China (CAC). Complete the algorithm filing process, which "
                "includes disclosing basic principles, intended purpose, and operating mechanisms."
            )
        sections.append(Section(heading="Algorithm Registration", body=reg_text))

    if generates or service is ServiceType.GENERATIVE:
        if answers.flag("training_data_review"):
            data_text = "You have reviewed training data for compliance. Maintain documentation of:\n\n" + bullets([
                "Data sources and legality of collection",
                "Review process for prohibited content",
                "Measures taken to remove non-compliant data",
                "Ongoing monitoring for data quality",
            ]).rstrip("\n")
        else:
            data_text = (
                "REQUIRED: Training data for generative AI must be reviewed to ensure it does "
                "not contain illegal content and was legally obtained. Conduct a comprehensive "
                "review and document your process. Be prepared to demonstrate compliance to "
                "regulators."
            )
        sections.append(Section(heading="Training Data Compliance", body=data_text))

    localization_text = _localization(answers)
    if localization_text:
        sections.append(Section(
            heading="Data Localization and Cross-Border Transfer",
            body=localization_text,
        ))

    steps = ["Engage legal counsel with China regulatory expertise."]
    if public and not answers.flag("algorithm_registered"):
        steps.append("Complete algorithm registration/filing with CAC.")
    if public and not answers.flag("security_assessment"):
        steps.append("Conduct required security assessment.")
    if not answers.flag("content_filtering") and (generates or public):
        steps.append("Implement content filtering for illegal/harmful content.")
    if generates and not answers.flag("content_labeling"):
        steps.append("Implement AI content labeling and watermarking.")
    if public and answers.choice("user_identity", Identity) not in VERIFIED_IDENTITIES:
        steps.append("Implement real-name verification for users.")
    if generates and not answers.flag("training_data_review"):
        steps.append("Conduct training data compliance review.")
    steps.append("Establish ongoing monitoring and reporting procedures.")
    sections.append(next_steps(steps))

    return sections


JURISDICTION = JurisdictionDefinition(
    id="china",
    name="China",
    regulation="AI Governance Rules",
    icon="🇨🇳",
    questions=QUESTIONS,
    generate=generate_policy,
)
