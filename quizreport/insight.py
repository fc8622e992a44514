"""Insight Discovery personality profiles.

Every option of a personality question carries one of four colour tags.
``generate_insight_discovery_report`` tallies the tags of the chosen
options and builds a profile from static trait tables keyed by colour.
"""

import logging
from typing import Dict, List

from quizreport.reports import round_half_up
from quizreport.schemas import ColorScore, DetailedAnalysis, InsightProfile, OppositeType

logger = logging.getLogger(__name__)

COLORS = ("red", "yellow", "green", "blue")

COLOR_NAMES = {
    "red": "Fiery Red",
    "yellow": "Sunshine Yellow",
    "green": "Earth Green",
    "blue": "Cool Blue",
}

# Start of each colour's quadrant on the 72-type wheel.
COLOR_QUADRANTS = {"red": 0, "yellow": 18, "green": 36, "blue": 54}

METHODOLOGICAL_INTRODUCTION = "\n".join(
    [
        "The theory of human types goes back to the 5th century BC, when Hippocrates described four "
        "distinct \"energies\" shown by different people. The Insights Discovery system builds on the "
        "model first published by the Swiss psychologist Carl Gustav Jung in \"Psychological Types\" "
        "(1921) and developed in his later writings.",
        "",
        "Jung's work on types and preferences has since become a foundation for understanding people. "
        "Building on it, Insights Discovery offers a frame of reference for self-understanding and "
        "personal development.",
        "",
        "**The Four Colour Energies**",
        "",
        "- **Fiery Red**: action, determination and focus on results. Goal-oriented, competitive and "
        "direct.",
        "- **Sunshine Yellow**: sociability, enthusiasm and creativity. Communicative, optimistic and "
        "people-oriented.",
        "- **Earth Green**: stability, empathy and support. Patient, loyal and harmony-seeking.",
        "- **Cool Blue**: analysis, precision and quality. Methodical, reflective and driven by "
        "excellence.",
        "",
        "Everyone holds all four energies in different proportions. The profile below shows the "
        "order of preference expressed in your answers.",
    ]
)

COLOR_TRAITS: Dict[str, Dict] = {
    "red": {
        "strengths": [
            "Natural leadership and decisiveness",
            "Results orientation and focus on goals",
            "Determination and courage when facing challenges",
            "Ability to act fast and take the initiative",
        ],
        "development_areas": [
            "Build more patience and active listening",
            "Take other people's feelings and needs into account",
            "Delegate and involve the team in decisions",
            "Handle stress without becoming authoritarian",
        ],
        "working_style": "Action-oriented, competitive and focused on results. Prefers a dynamic "
        "environment with challenges to overcome.",
        "communication_style": "Direct, concise and assertive. Goes straight to the point and "
        "values frankness.",
        "behavioral_patterns": [
            "You decide quickly, trusting instinct and experience",
            "You face challenges with determination and see them as opportunities",
            "You tend to take control in a crisis",
            "You focus on outcomes rather than processes",
        ],
        "stress_management": [
            "Under stress you become more directive and impatient",
            "Effective strategy: channel the energy into physical activity or new projects",
            "Avoid isolating yourself, share the challenges with the team",
            "Practise relaxation techniques to balance the intensity",
        ],
        "leadership_style": [
            "You lead by example, showing determination and courage",
            "You set clear and challenging goals for the team",
            "You are effective in crises and fast change",
            "Develop: involving the team and listening to their views",
        ],
        "team_interaction": [
            "You are the catalyst that pushes the team into action",
            "You value efficiency and results",
            "You may come across as too direct or impatient",
            "Recognise and celebrate the team's successes, not only the results",
        ],
        "decision_making": [
            "You decide fast, trusting instinct and experience",
            "You weigh options by their impact on results",
            "You are willing to take calculated risks",
            "Balance decision speed with the impact on people",
        ],
        "conflict_resolution": [
            "You face conflicts directly instead of avoiding them",
            "You look for quick solutions that let everyone move on",
            "You may tend to impose your own view",
            "Develop: listening to every perspective before deciding",
        ],
        "motivational_drivers": [
            "Ambitious challenges and goals that seem impossible",
            "Recognition of the results achieved",
            "Autonomy in making decisions",
            "Opportunities to lead and make a difference",
        ],
        "learning_preferences": [
            "You learn best through action and direct experience",
            "You prefer practical, results-oriented training",
            "You enjoy simulations and concrete case studies",
            "Look for chances to apply what you learn right away",
        ],
        "career_guidance": [
            "You excel in leadership and management roles with clear goals",
            "Ideal environments: startups, turnarounds, transformation programmes",
            "Suitable roles: CEO, operations director, sales manager, entrepreneur",
            "Develop coaching and mentoring skills to grow as a leader",
        ],
    },
    "yellow": {
        "strengths": [
            "Contagious enthusiasm and the ability to motivate others",
            "Creativity and innovative thinking",
            "Excellent relationship and networking skills",
            "Optimism and an eye for opportunities",
        ],
        "development_areas": [
            "Improve focus and follow projects through to the end",
            "Pay more attention to detail",
            "Manage time in a more structured way",
            "Balance enthusiasm with planning",
        ],
        "working_style": "Creative, collaborative and people-oriented. Prefers dynamic and social "
        "environments.",
        "communication_style": "Expressive, narrative and engaging. Uses stories and emotions to "
        "connect.",
        "behavioral_patterns": [
            "You generate creative and innovative ideas with ease",
            "You engage others with enthusiasm and positive energy",
            "You prefer variety and new experiences to routine",
            "You build wide personal and professional networks",
        ],
        "stress_management": [
            "Under stress you may become scattered or avoid problems",
            "Effective strategy: share your worries with people you trust",
            "Keep a basic routine to balance spontaneity",
            "Use creativity as an outlet for stress",
        ],
        "leadership_style": [
            "You inspire the team with vision and enthusiasm",
            "You create a positive and motivating workplace",
            "You are effective in change and innovation",
            "Develop: follow-through and accountability for results",
        ],
        "team_interaction": [
            "You are the soul of the team, creating energy and cohesion",
            "You ease communication and collaboration",
            "You may lack focus on operational details",
            "Make sure enthusiasm turns into concrete actions",
        ],
        "decision_making": [
            "You weigh the emotional and relational impact of decisions",
            "You look for input and consensus from the group",
            "You rely on intuition and future possibilities",
            "Balance creativity with a practical analysis of risks",
        ],
        "conflict_resolution": [
            "You try to defuse tension and find common ground",
            "You use empathy and relationships to mediate",
            "You may avoid difficult confrontations",
            "Develop: facing uncomfortable conflicts as well",
        ],
        "motivational_drivers": [
            "Public recognition and appreciation",
            "Opportunities to be creative and innovative",
            "Working with positive and stimulating people",
            "Variety and new challenges that keep interest high",
        ],
        "learning_preferences": [
            "You learn best in interactive and group settings",
            "You prefer engaging training with creative elements",
            "You enjoy discussions, workshops and brainstorming",
            "Look for inspiring content and innovative applications",
        ],
        "career_guidance": [
            "You excel in creative, communication and relationship roles",
            "Ideal environments: marketing, communications, innovation, sales",
            "Suitable roles: creative director, brand manager, consultant, trainer",
            "Develop project management skills to maximise your impact",
        ],
    },
    "green": {
        "strengths": [
            "Empathy and the ability to support others",
            "Long-term reliability and loyalty",
            "Ability to create harmony and mediate conflicts",
            "Patience and consistency at work",
        ],
        "development_areas": [
            "Build assertiveness and the ability to say \"no\"",
            "Cope better with change and uncertainty",
            "Voice your own opinions with more confidence",
            "Speed up decisions when needed",
        ],
        "working_style": "Collaborative, steady and team-oriented. Prefers harmonious and "
        "predictable environments.",
        "communication_style": "Empathetic, patient and attentive. Listens actively and answers "
        "with care.",
        "behavioral_patterns": [
            "You create stability and harmony at work",
            "You support others with patience and dedication",
            "You prefer gradual, well-planned change",
            "You build deep and lasting relationships",
        ],
        "stress_management": [
            "Under stress you tend to internalise and withdraw",
            "Effective strategy: talk about your needs with people you trust",
            "Set clear boundaries to protect yourself from overload",
            "Practise assertiveness in low-risk situations",
        ],
        "leadership_style": [
            "You lead with empathy, supporting the team's growth",
            "You create a safe and collaborative workplace",
            "You are effective at building cohesive and loyal teams",
            "Develop: taking difficult decisions when needed",
        ],
        "team_interaction": [
            "You are the glue that holds the team together",
            "You ease collaboration and resolve tension",
            "You may avoid necessary confrontations to keep the peace",
            "Speak up, the team needs your perspective",
        ],
        "decision_making": [
            "You carefully consider the impact on the people involved",
            "You seek consensus and harmony in decisions",
            "You take time to reflect before deciding",
            "Balance the wish for harmony with the need for timely decisions",
        ],
        "conflict_resolution": [
            "You are a natural mediator looking for win-win solutions",
            "You listen to every side with genuine empathy",
            "You may sacrifice your own needs for the sake of peace",
            "Develop: facing conflicts even when uncomfortable",
        ],
        "motivational_drivers": [
            "A harmonious and respectful workplace",
            "Authentic and meaningful relationships",
            "Contributing to the wellbeing of others",
            "Long-term stability and security",
        ],
        "learning_preferences": [
            "You learn best in safe and structured settings",
            "You prefer gradual learning with time to absorb",
            "You enjoy case studies and practical applications",
            "Look for training that respects your pace and style",
        ],
        "career_guidance": [
            "You excel in support, care and service roles",
            "Ideal environments: HR, healthcare, education, customer service",
            "Suitable roles: HR manager, counsellor, team coordinator, mediator",
            "Develop leadership skills to amplify your impact",
        ],
    },
    "blue": {
        "strengths": [
            "In-depth analysis and critical thinking",
            "Precision and attention to detail",
            "Planning and organisation skills",
            "Pursuit of quality and excellence",
        ],
        "development_areas": [
            "Build flexibility and adaptability",
            "Improve interpersonal skills",
            "Cope with ambiguity and uncertainty",
            "Balance analysis with timely decisions",
        ],
        "working_style": "Analytical, methodical and quality-oriented. Prefers structured and "
        "well-organised environments.",
        "communication_style": "Precise, fact-based and detailed. Provides accurate information.",
        "behavioral_patterns": [
            "You analyse situations in depth before acting",
            "You seek precision and quality in everything you do",
            "You prefer structured and systematic processes",
            "You base your conclusions on verifiable data and facts",
        ],
        "stress_management": [
            "Under stress you may become overly critical or withdrawn",
            "Effective strategy: balance analysis with moments of rest",
            "Accept that not everything can be perfect or under control",
            "Share your worries instead of analysing them alone",
        ],
        "leadership_style": [
            "You lead with expertise, data and strategic planning",
            "You build systems and processes that ensure quality",
            "You are effective in technical and complex contexts",
            "Develop: flexibility and interpersonal skills to inspire the team",
        ],
        "team_interaction": [
            "You are the team's guarantee of quality and precision",
            "You provide thorough analysis and considered solutions",
            "You may be seen as too critical or distant",
            "Acknowledge progress too, not only imperfections",
        ],
        "decision_making": [
            "You gather and analyse all the available data",
            "You weigh risks and benefits systematically",
            "You look for the optimal, logic-based solution",
            "Balance the wish for perfection with the need to decide",
        ],
        "conflict_resolution": [
            "You handle conflicts with logic and objectivity",
            "You look for solutions based on facts and standards",
            "You may downplay the emotional side of conflicts",
            "Develop: empathy and attention to human factors",
        ],
        "motivational_drivers": [
            "Opportunities to excel in expertise and quality",
            "Recognition of expertise and precision",
            "Autonomy in organising your own work",
            "Complex projects that need deep analysis",
        ],
        "learning_preferences": [
            "You learn best through in-depth study and reflection",
            "You prefer structured training with detailed material",
            "You enjoy theory, research and technical documentation",
            "Look for opportunities to specialise and reach mastery",
        ],
        "career_guidance": [
            "You excel in technical, analytical and expert roles",
            "Ideal environments: R&D, finance, quality assurance, engineering",
            "Suitable roles: analyst, researcher, technical specialist, auditor",
            "Develop communication skills to turn complexity into simplicity",
        ],
    },
}

OPPOSITE_TYPES = {
    "red": OppositeType(
        description="Your opposite type is Earth Green. You are driven by action and fast results, "
        "while your opposite values reflection, stability and harmony in relationships.",
        differences=[
            "Decision approach: you decide fast, your opposite prefers to weigh things at length",
            "Pace: you seek speed and efficiency, your opposite values consistency and patience",
            "Relational focus: you aim at results, your opposite at people's wellbeing",
            "Change: you embrace it, your opposite approaches it with caution",
        ],
        working_together=[
            "Recognise that Green patience can balance your impulsiveness",
            "Value their ability to restore harmony when you push too hard for results",
            "Involve them in decisions that affect people, not only processes",
            "Slow down when working with them to leave room for reflection",
        ],
    ),
    "yellow": OppositeType(
        description="Your opposite type is Cool Blue. You are spontaneous, enthusiastic and "
        "people-oriented, while your opposite values analysis, precision and methodical quality.",
        differences=[
            "Communication: you are expressive and narrative, your opposite concise and precise",
            "Projects: you generate creative ideas, your opposite refines their details",
            "Social life: you are outgoing, your opposite reserved and selective",
            "Operational focus: you see the big picture, your opposite the details",
        ],
        working_together=[
            "Value the rigour and quality they bring to your creative ideas",
            "Give them time to analyse before making decisions",
            "Remember that their reserve does not mean lack of interest",
            "Balance your enthusiasm with their attention to detail",
        ],
    ),
    "green": OppositeType(
        description="Your opposite type is Fiery Red. You are patient, reflective and "
        "harmony-seeking, while your opposite values fast action, competition and immediate results.",
        differences=[
            "Decision speed: you reflect at length, your opposite decides quickly",
            "Conflicts: you look for mediation, your opposite confronts directly",
            "Priorities: you value relationships, your opposite focuses on results",
            "Change: you prefer stability, your opposite constantly seeks new challenges",
        ],
        working_together=[
            "Recognise that their drive can balance your tendency to over-reflect",
            "State your process needs when they want to speed up",
            "Value their ability to take the hard decisions you might avoid",
            "Bring your people perspective to balance their focus on results",
        ],
    ),
    "blue": OppositeType(
        description="Your opposite type is Sunshine Yellow. You are analytical, precise and "
        "quality-oriented, while your opposite values creativity, enthusiasm and spontaneous "
        "relationships.",
        differences=[
            "Working style: you are methodical and structured, your opposite spontaneous and flexible",
            "Communication: you are concise and precise, your opposite expressive and narrative",
            "Decisions: you rely on data, your opposite on intuition",
            "Social life: you are selective, your opposite naturally sociable",
        ],
        working_together=[
            "Value the energy and creativity they bring to complex projects",
            "Combine your analysis with their lateral thinking for innovative solutions",
            "Recognise that their spontaneity can speed up processes you might slow down",
            "Share your quality standards to give structure to their ideas",
        ],
    ),
}

TEAM_VALUES = {
    "red": [
        "Brings energy and determination to overcome obstacles and hit ambitious goals",
        "Takes fast decisions at critical moments, moving the team to action",
        "Sets clear goals and keeps the focus on measurable results",
        "Challenges the status quo and pushes the team out of its comfort zone",
        "Naturally takes the lead in crises or change",
    ],
    "yellow": [
        "Creates a positive, motivating atmosphere that lifts team morale",
        "Eases communication and builds bridges between people and departments",
        "Generates creative ideas to solve complex problems",
        "Promotes collaboration and involves every member",
        "Brings contagious enthusiasm that inspires others",
    ],
    "green": [
        "Gives steady, reliable support to colleagues, building trust",
        "Mediates conflicts and promotes harmony in the team",
        "Listens actively to everyone's concerns so every voice is heard",
        "Keeps things stable during change and uncertainty",
        "Builds lasting relationships based on loyalty and respect",
    ],
    "blue": [
        "Ensures quality and precision through thorough analysis",
        "Brings methodological rigour and structure to team processes",
        "Spots potential problems before they happen",
        "Sets high standards that push the team towards excellence",
        "Provides concrete data and facts to support informed decisions",
    ],
}

COMMUNICATION_OBSTACLES = {
    "red": [
        "You may seem too direct or blunt and unintentionally hurt others",
        "Your impatience may read as lack of interest in other opinions",
        "You may interrupt people before they finish, eager to act",
        "Your focus on results can make others feel like means rather than people",
        "You may not spend enough time on active listening and empathy",
        "Your tendency to dominate conversations can intimidate quieter colleagues",
    ],
    "yellow": [
        "You may talk too much and leave others little room to speak",
        "Your tendency to digress can derail the discussion",
        "You may seem superficial when jumping between topics",
        "Your optimism can downplay other people's legitimate concerns",
        "You may promise more than you can deliver in the excitement of the moment",
        "Your dislike of detail can frustrate people who need precision",
    ],
    "green": [
        "You may avoid necessary conflicts and leave problems unresolved",
        "Your reluctance to say \"no\" can lead to over-commitment",
        "You may hide your real opinions so as not to disturb the harmony",
        "Your slow decisions can frustrate people who want fast action",
        "You may seem passive when firmness is required",
        "Your sensitivity to criticism may come across as defensiveness",
    ],
    "blue": [
        "You may seem cold or detached, lacking warmth in interactions",
        "Your insistence on detail can slow conversations down",
        "You may be seen as overly critical or perfectionist",
        "Your preference for written communication can limit personal contact",
        "You may over-analyse when an emotional response is appropriate",
        "Your reserve may be read as lack of interest or involvement",
    ],
}

PROFILE_NAMES = {
    "red": {
        "red": "Visionary Leader",
        "yellow": "Dynamic Innovator",
        "green": "Empathetic Director",
        "blue": "Decisive Strategist",
    },
    "yellow": {
        "red": "Energetic Communicator",
        "yellow": "Enthusiastic Creative",
        "green": "Social Facilitator",
        "blue": "Analytical Innovator",
    },
    "green": {
        "red": "Proactive Collaborator",
        "yellow": "Optimistic Mediator",
        "green": "Guardian of Harmony",
        "blue": "Methodical Supporter",
    },
    "blue": {
        "red": "Results-Driven Analyst",
        "yellow": "Creative Researcher",
        "green": "Patient Expert",
        "blue": "Systematic Perfectionist",
    },
}

COMBINATION_TRAITS = {
    "red": {
        "yellow": "dynamic, energetic and focused on both results and people",
        "green": "determined yet attentive to the team's wellbeing",
        "blue": "strategic and results-oriented with analytical precision",
    },
    "yellow": {
        "red": "enthusiastic and action-oriented with great energy",
        "green": "sociable, empathetic and focused on relationships",
        "blue": "creative yet attentive to detail and quality",
    },
    "green": {
        "red": "supportive yet able to decide when needed",
        "yellow": "collaborative, positive and team-oriented",
        "blue": "reliable, methodical and quality-minded",
    },
    "blue": {
        "red": "analytical and results-oriented with data-driven decisions",
        "yellow": "precise yet open to creativity",
        "green": "methodical, patient and focused on quality",
    },
}
DEFAULT_COMBINATION_TRAIT = "unique in your approach to work and relationships"


def _find_option(question, answer: str):
    wanted = (answer or "").lower()
    if not wanted:
        return None
    for option in question.options:
        if (option.id or "").lower() == wanted or (option.label or "").lower() == wanted:
            return option
    return None


def score_colors(attempt, questions) -> List[ColorScore]:
    """Tally colour tags of the chosen options, sorted by percentage descending.

    The denominator is every submitted answer, so answers whose question or
    colour cannot be resolved lower all percentages instead of being dropped.
    """
    question_lookup = {q.id: q for q in questions}
    counts = {color: 0 for color in COLORS}

    for answer in attempt.answers:
        question = question_lookup.get(answer.question_id)
        if question is None:
            logger.debug("Skipping answer for unknown question_id=%s", answer.question_id)
            continue
        option = _find_option(question, answer.answer)
        color = (option.color or "").lower() if option else ""
        if color in counts:
            counts[color] += 1
        else:
            logger.debug("Answer %r to question_id=%s has no known colour", answer.answer, question.id)

    total = len(attempt.answers)
    scores = [
        ColorScore(
            color=color,
            name=COLOR_NAMES[color],
            count=count,
            percentage=round_half_up(count / total * 100) if total else 0,
        )
        for color, count in counts.items()
    ]
    return sorted(scores, key=lambda s: s.percentage, reverse=True)


def get_combination_trait(dominant: str, secondary: str) -> str:
    return COMBINATION_TRAITS.get(dominant, {}).get(secondary, DEFAULT_COMBINATION_TRAIT)


def generate_profile_type(dominant: ColorScore, secondary: ColorScore) -> str:
    """Place the profile on the 72-type wheel and name it."""
    base = COLOR_QUADRANTS.get(dominant.color, 0)
    sub_position = 0
    if dominant.percentage > 50:
        sub_position = 9
    elif secondary.percentage > 20:
        direction = (COLOR_QUADRANTS.get(secondary.color, 0) - base + 72) % 72
        blend = int(secondary.percentage / dominant.percentage * 9)
        sub_position = blend if direction < 36 else 17 - blend

    name = PROFILE_NAMES.get(dominant.color, {}).get(secondary.color, "Balanced Profile")
    return f"{base + sub_position + 1} {name}"


def generate_insight_recommendations(
    dominant: ColorScore, secondary: ColorScore, color_scores: List[ColorScore]
) -> str:
    lowest = color_scores[-1]
    lines = [
        f"Your Insight Discovery profile shows a strong {dominant.name} energy "
        f"({dominant.percentage}%), combined with {secondary.name} ({secondary.percentage}%).",
        f"\nThis combination makes you {get_combination_trait(dominant.color, secondary.color)}.",
        "\nTo make the most of your potential:",
    ]
    if dominant.percentage > 50:
        lines.append(
            f"  - Recognise and value your strong {dominant.name} energy, but also integrate the others"
        )
    if lowest.percentage < 15:
        lines.append(
            f"  - Develop your {lowest.name} energy ({lowest.percentage}%) for a more balanced profile"
        )
    lines.extend(
        [
            "\nPractical tips:",
            f"  - When working with {secondary.name} people, build on the similarities",
            f"  - When working with {lowest.name} people, adapt your approach",
            "  - Use your strengths while staying aware of your development areas",
        ]
    )
    return "\n".join(lines)


def generate_profile_description(color_scores: List[ColorScore]) -> str:
    dominant, secondary, third, lowest = color_scores
    lines = [
        "**Your Complete Insight Discovery Profile**\n",
        f"Your profile is mainly {dominant.name} ({dominant.percentage}%), your dominant energy and "
        "your natural approach to professional and personal life.\n",
        "**Energy Distribution:**",
        f"- {dominant.name}: {dominant.percentage}% - your main energy",
        f"- {secondary.name}: {secondary.percentage}% - your supporting energy",
        f"- {third.name}: {third.percentage}% - complementary energy",
        f"- {lowest.name}: {lowest.percentage}% - energy to develop\n",
    ]
    if dominant.percentage > 40:
        lines.append(
            f"Your strong {dominant.name} predominance points to a distinctive, well-defined profile. "
            "It makes you especially effective where this energy is valued, and is also a chance to "
            "gain flexibility by integrating the other energies.\n"
        )
    elif dominant.percentage < 30:
        lines.append(
            "Your profile shows a balanced spread across the energies. This versatility lets you adapt "
            "easily to different contexts and people, making you a valuable link in diverse teams.\n"
        )
    if lowest.percentage < 15:
        lines.append(
            f"Your {lowest.name} energy ({lowest.percentage}%) is a significant growth area. Developing "
            "it can enrich your profile and make you more effective where these skills are needed."
        )
    return "\n".join(lines)


def generate_action_plan(dominant: ColorScore, secondary: ColorScore, lowest: ColorScore) -> List[str]:
    return [
        "**Personal Development Action Plan:**\n",
        f"**1. Build on Your Strengths ({dominant.name} Energy)**",
        f"   - Find 2-3 situations this week where you can use your {dominant.name.lower()} skills",
        "   - Share with the team how your natural skills can help current projects",
        "   - Look for roles that make the most of your dominant energy\n",
        f"**2. Integrate Your Secondary Energy ({secondary.name})**",
        f"   - Notice how your {secondary.name.lower()} energy complements the {dominant.name.lower()} one",
        "   - Practise using both energies deliberately in complex situations",
        "   - Ask for feedback on how you balance the two\n",
        f"**3. Develop Your Least Expressed Energy ({lowest.name})**",
        f"   - Observe a colleague with strong {lowest.name.lower()} energy",
        f"   - Pick ONE typical {lowest.name.lower()} behaviour to practise this week",
        "   - Reflect on how it widens your skills and perspective\n",
        "**4. Stress Management and Balance**",
        f"   - Learn the stress signals typical of the {dominant.name.lower()} profile",
        "   - Apply at least one of the suggested stress strategies",
        "   - Build a support network of people with different energies\n",
        "**5. 90-Day Professional Growth**",
        "   - Choose ONE development area and write a concrete plan for it",
        "   - Find a mentor or coach to support you",
        "   - Track progress with regular team feedback\n",
        "**6. Working with Other Profiles**",
        "   - Identify the dominant profiles of your key colleagues",
        "   - Adapt your communication style to each of them",
        "   - Evaluate how effective your interactions are and adjust\n",
        "**Immediate Actions (This Week):**",
        "- Share these results with your manager or team",
        "- Find one situation where you can try a new behaviour",
        "- Ask for feedback on one specific development area",
        "- Reflect on how your energies shape your daily decisions",
    ]


def generate_insight_discovery_report(attempt, questions) -> InsightProfile:
    color_scores = score_colors(attempt, questions)
    dominant, secondary, _third, lowest = color_scores
    traits = COLOR_TRAITS[dominant.color]

    logger.info(
        "Insight profile built (answers=%s, dominant=%s %s%%, secondary=%s %s%%)",
        len(attempt.answers),
        dominant.color,
        dominant.percentage,
        secondary.color,
        secondary.percentage,
    )
    return InsightProfile(
        dominant_color=dominant,
        secondary_color=secondary,
        color_scores=color_scores,
        profile_type=generate_profile_type(dominant, secondary),
        strengths=traits["strengths"],
        development_areas=traits["development_areas"],
        working_style=traits["working_style"],
        communication_style=traits["communication_style"],
        recommendations=generate_insight_recommendations(dominant, secondary, color_scores),
        methodological_introduction=METHODOLOGICAL_INTRODUCTION,
        opposite_type=OPPOSITE_TYPES[dominant.color].model_copy(deep=True),
        team_value=TEAM_VALUES[dominant.color][:3] + TEAM_VALUES[secondary.color][:2],
        communication_obstacles=COMMUNICATION_OBSTACLES[dominant.color],
        detailed_analysis=DetailedAnalysis(
            profile_description=generate_profile_description(color_scores),
            behavioral_patterns=traits["behavioral_patterns"],
            stress_management=traits["stress_management"],
            leadership_style=traits["leadership_style"],
            team_interaction=traits["team_interaction"],
            decision_making=traits["decision_making"],
            conflict_resolution=traits["conflict_resolution"],
            motivational_drivers=traits["motivational_drivers"],
            learning_preferences=traits["learning_preferences"],
            career_guidance=traits["career_guidance"],
            action_plan=generate_action_plan(dominant, secondary, lowest),
        ),
    )
