"""Score reports for graded quizzes.

``generate_quiz_report`` turns a completed attempt into a per-category
breakdown, a pass/fail verdict and a block of study recommendations. It is
a pure function: nothing is read from or written to storage and the inputs
are never mutated.
"""

import logging
import math
from typing import Iterable, List, Optional

from quizreport.schemas import AnswerDetail, CertificationFamily, ReportData, WeakArea

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "General"
WEAK_AREA_THRESHOLD = 70
STRENGTH_THRESHOLD = 80
MAX_WEAK_AREAS_IN_RECOMMENDATIONS = 3

PASS_THRESHOLDS = {
    "beginner": 60,
    "intermediate": 70,
    "advanced": 75,
    "expert": 75,
}
DEFAULT_PASS_THRESHOLD = 70

# (exclusive upper score bound, lines); the last bracket catches everything else.
SCORE_BRACKETS = [
    (
        60,
        [
            "**Full Review Needed**",
            "Your score shows that a deeper preparation is required. Suggested plan:",
            "",
            "**Recommended Study Plan:**",
            "1. Set aside at least 2-3 weeks of systematic study",
            "2. Study one module at a time and move on only once you master it",
            "3. Build flashcards for the key concepts",
            "4. Retake the quiz only after completing the full review",
            "",
        ],
    ),
    (
        75,
        [
            "**Solid Base, Refinement Needed**",
            "You have a fair grasp of the topics. To reach excellence:",
            "",
            "**Next Steps:**",
            "1. Focus on the weak areas listed below",
            "2. Spend 1-2 hours a day on targeted study of these topics",
            "3. Practise with extra quizzes on the weak areas",
            "4. Review your mistakes to understand the correct reasoning",
            "",
        ],
    ),
    (
        90,
        [
            "**Great Level, One Last Push**",
            "You are very close to excellence. To polish your preparation:",
            "",
            "**Final Touches:**",
            "1. Review in detail only the critical areas below",
            "2. Take advanced practice quizzes to consolidate",
            "3. Go deeper on practical use cases and real scenarios",
            "4. You are almost ready for the official certification",
            "",
        ],
    ),
    (
        None,
        [
            "**Excellent Command of the Topics**",
            "You showed a solid and complete understanding. You are ready for the next step!",
            "",
            "**You Are Ready To:**",
            "- Sit the official certification exam",
            "- Apply these skills in a professional context",
            "- Move on to more advanced modules or related certifications",
            "",
        ],
    ),
]

PRIORITY_LABELS = ["HIGH PRIORITY", "MEDIUM PRIORITY", "LOW PRIORITY"]

# Matched in order against the lower-cased category name.
CATEGORY_ADVICE = [
    (
        ("security and risk management",),
        (
            "Study: CIA triad, governance, compliance, legal and ethics",
            "Practice: risk assessment and business impact analysis cases",
            "Resources: NIST RMF, ISO 31000, compliance frameworks",
        ),
    ),
    (
        ("asset security",),
        (
            "Study: data classification, data retention, privacy protection",
            "Practice: data lifecycle and handling requirement scenarios",
            "Resources: ISO 27001 Annex A.8, data classification schemes",
        ),
    ),
    (
        ("security architecture",),
        (
            "Study: security models (Bell-LaPadula, Biba), cryptography, PKI",
            "Practice: secure architecture design, choosing crypto algorithms",
            "Resources: NIST SP 800-53, security design principles",
        ),
    ),
    (
        ("communication and network",),
        (
            "Study: secure network protocols, VPN, wireless security, segmentation",
            "Practice: secure network architecture design and troubleshooting",
            "Resources: TCP/IP guides, RFCs for secure protocols, wireless standards",
        ),
    ),
    (
        ("identity and access",),
        (
            "Study: AAA, SSO, federation, RBAC/ABAC",
            "Practice: IAM rollout, access control models, identity federation",
            "Resources: NIST SP 800-63, OAuth/OIDC specs, SAML documentation",
        ),
    ),
    (
        ("principi", "principles"),
        (
            "Study: GDPR art. 5, the six processing principles",
            "Practice: apply the principles to concrete cases (minimisation, purpose limitation)",
            "Resources: EDPB guidelines, supervisory authority decisions",
        ),
    ),
    (
        ("diritti", "rights"),
        (
            "Study: GDPR art. 15-22, data subject rights and how they are exercised",
            "Practice: handling access, erasure and portability requests",
            "Resources: SAR response templates, industry standard procedures",
        ),
    ),
    (
        ("basi giuridiche", "lawful"),
        (
            "Study: GDPR art. 6 and 9, the six lawful bases and special categories",
            "Practice: pick the right basis for different processing scenarios",
            "Resources: EDPB guidelines on consent and legitimate interest",
        ),
    ),
    (
        ("controlli", "controls"),
        (
            "Study: ISO 27001 Annex A controls and their domains",
            "Practice: map controls to specific risks, gap analysis",
            "Resources: ISO 27002 implementation guidance, CIS Controls mapping",
        ),
    ),
    (
        ("risk", "rischi"),
        (
            "Study: qualitative and quantitative risk assessment methods",
            "Practice: compute SLE, ALE and control ROI, risk treatment",
            "Resources: ISO 27005, NIST SP 800-30, FAIR methodology",
        ),
    ),
    (
        ("network", "rete"),
        (
            "Study: network segmentation, firewalls, IDS/IPS, secure protocols",
            "Practice: VLAN design, ACLs, network monitoring, packet analysis",
            "Resources: Wireshark tutorials, network hardening guides",
        ),
    ),
    (
        ("cryptography", "crittografia"),
        (
            "Study: symmetric and asymmetric algorithms, hashing, PKI, key management",
            "Practice: choosing algorithms per use case, TLS deployment",
            "Resources: NIST crypto standards, OpenSSL documentation",
        ),
    ),
]

GENERIC_ADVICE = (
    "Study: review the basic theory and definitions",
    "Practice: solve exercises focused on this topic",
    "Resources: official documentation and practical case studies",
)

CERTIFICATION_TIPS = {
    CertificationFamily.CISSP: [
        "**CISSP Specific Tips:**",
        "- Study the 8 domains in the priority order suggested by your results",
        "- Think like a manager, not only like a technician",
        "- Memorise key definitions and acronyms (RTO, RPO, BCP, ...)",
        "- Practise \"what would you do if...\" scenarios to sharpen critical thinking",
        "- Review NIST, ISO 27001 and COBIT in your weak areas",
    ],
    CertificationFamily.CISM: [
        "**CISM Specific Tips:**",
        "- Focus on governance and the role of the security manager",
        "- Study end-to-end risk management processes",
        "- Learn how to communicate risk to management",
        "- Review incident response planning and business continuity",
        "- Practise crisis management and decision-making scenarios",
    ],
    CertificationFamily.GDPR: [
        "**GDPR/Privacy Specific Tips:**",
        "- Memorise the key GDPR articles (6, 9, 15-22, 32-36)",
        "- Understand the six processing principles of art. 5",
        "- Study data subject rights and how to apply them in practice",
        "- Review the lawful bases for processing and when to use them",
        "- Practise with real cases: DPIA, breach notification, transfers outside the EU",
    ],
    CertificationFamily.ISO27001: [
        "**ISO 27001 Specific Tips:**",
        "- Study Annex A: every control and when it applies",
        "- Understand the PDCA cycle applied to the ISMS",
        "- Review risk assessment and risk treatment",
        "- Study the mandatory clauses (4-10) in depth",
        "- Practise building an ISMS from scratch",
    ],
    CertificationFamily.NIS2: [
        "**NIS2 Specific Tips:**",
        "- Tell essential and important entities apart, with their obligations",
        "- Study the cybersecurity risk management requirements",
        "- Memorise incident notification deadlines (24h early warning, 72h report)",
        "- Understand supply chain security and third-party risk",
        "- Review sanctions and the enforcement framework",
    ],
    CertificationFamily.DORA: [
        "**DORA Specific Tips:**",
        "- Focus on ICT risk management for financial entities",
        "- Study digital operational resilience requirements",
        "- Understand threat-led penetration testing (TLPT)",
        "- Review management of third-party ICT service providers",
        "- Study information sharing arrangements and oversight",
    ],
}

# Title fallback for quizzes without an explicit certification, checked in order.
TITLE_KEYWORDS = [
    (("CISSP",), CertificationFamily.CISSP),
    (("CISM",), CertificationFamily.CISM),
    (("GDPR", "Privacy"), CertificationFamily.GDPR),
    (("ISO 27001",), CertificationFamily.ISO27001),
    (("NIS2",), CertificationFamily.NIS2),
    (("DORA",), CertificationFamily.DORA),
]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def get_pass_threshold(difficulty: Optional[str]) -> int:
    return PASS_THRESHOLDS.get((difficulty or "").strip().lower(), DEFAULT_PASS_THRESHOLD)


def resolve_certification(quiz) -> Optional[CertificationFamily]:
    """Explicit ``quiz.certification`` wins; otherwise fall back to title keywords."""
    explicit = getattr(quiz, "certification", None)
    if explicit:
        try:
            return CertificationFamily(explicit)
        except ValueError:
            logger.warning("Ignoring unknown certification %r on quiz %r", explicit, quiz.title)

    title = quiz.title or ""
    for keywords, family in TITLE_KEYWORDS:
        if any(keyword in title for keyword in keywords):
            return family
    return None


def get_category_advice(category: str) -> tuple[str, str, str]:
    category_lower = category.lower()
    for keywords, advice in CATEGORY_ADVICE:
        if any(keyword in category_lower for keyword in keywords):
            return advice
    return GENERIC_ADVICE


def _opening_lines(score: int) -> List[str]:
    for upper_bound, lines in SCORE_BRACKETS:
        if upper_bound is None or score < upper_bound:
            return lines
    return SCORE_BRACKETS[-1][1]


def generate_recommendations(
    weak_areas: List[WeakArea],
    score: int,
    certification: Optional[CertificationFamily],
) -> str:
    lines = list(_opening_lines(score))

    if weak_areas:
        lines.append("**Detailed Analysis of Areas to Improve:**")
        lines.append("")
        for idx, area in enumerate(weak_areas[:MAX_WEAK_AREAS_IN_RECOMMENDATIONS]):
            level = "Critical" if area.percentage < 50 else "Insufficient"
            study, practice, resources = get_category_advice(area.category)
            lines.extend(
                [
                    f"**{PRIORITY_LABELS[idx]} - {area.category}**",
                    f"|- Performance: {level} ({area.percentage}% correct, "
                    f"{area.wrong_count}/{area.total_count} wrong)",
                    f"|- {study}",
                    f"|- {practice}",
                    f"`- {resources}",
                    "",
                ]
            )

    if certification is not None:
        lines.extend(CERTIFICATION_TIPS[certification])

    return "\n".join(lines)


def _category_stats(attempt, questions: Iterable):
    question_lookup = {q.id: q for q in questions}
    by_category: dict[str, dict[str, int]] = {}
    detailed_answers = []

    for answer in attempt.answers:
        question = question_lookup.get(answer.question_id)
        if question is None:
            logger.debug("Skipping answer for unknown question_id=%s", answer.question_id)
            continue

        category = question.category or DEFAULT_CATEGORY
        stats = by_category.setdefault(category, {"correct": 0, "total": 0})
        stats["total"] += 1
        stats["correct"] += int(bool(answer.is_correct))

        detailed_answers.append(
            AnswerDetail(
                question_id=question.id,
                question=question.question,
                category=question.category,
                user_answer=answer.answer,
                correct_answer=question.correct_answer or "",
                is_correct=bool(answer.is_correct),
            )
        )

    return by_category, detailed_answers


def generate_quiz_report(attempt, quiz, questions) -> ReportData:
    by_category, detailed_answers = _category_stats(attempt, questions)

    weak_areas = []
    strengths = []
    for category, stats in by_category.items():
        exact = stats["correct"] / stats["total"] * 100
        percentage = round_half_up(exact)
        if percentage < WEAK_AREA_THRESHOLD:
            weak_areas.append(
                WeakArea(
                    category=category,
                    wrong_count=stats["total"] - stats["correct"],
                    total_count=stats["total"],
                    percentage=percentage,
                )
            )
        if exact >= STRENGTH_THRESHOLD:
            strengths.append(category)
    weak_areas.sort(key=lambda area: area.percentage)

    threshold = get_pass_threshold(quiz.difficulty)
    pass_status = "pass" if attempt.score >= threshold else "fail"
    recommendations = generate_recommendations(weak_areas, attempt.score, resolve_certification(quiz))

    logger.info(
        "Quiz report built (quiz=%r, score=%s, threshold=%s, categories=%s, weak_areas=%s)",
        quiz.title,
        attempt.score,
        threshold,
        len(by_category),
        len(weak_areas),
    )
    return ReportData(
        score=attempt.score,
        correct_answers=attempt.correct_answers,
        total_questions=attempt.total_questions,
        time_spent=attempt.time_spent,
        pass_status=pass_status,
        weak_areas=weak_areas,
        strengths=strengths,
        recommendations=recommendations,
        detailed_answers=detailed_answers,
    )
