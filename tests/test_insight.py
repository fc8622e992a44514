from quizreport.insight import (
    COLOR_TRAITS,
    generate_insight_discovery_report,
    generate_profile_type,
    get_combination_trait,
    score_colors,
)
from quizreport.schemas import AttemptAnswer, AttemptRecord, ColorScore, QuestionOption, QuestionOut


def make_question(qid, colors=("red", "yellow", "green", "blue")):
    return QuestionOut(
        id=qid,
        question=f"Which describes you best? #{qid}",
        options=[
            QuestionOption(id=label.lower(), label=label, text=f"option {label}", color=color)
            for label, color in zip("ABCD", colors)
        ],
    )


def make_attempt(pairs):
    return AttemptRecord(answers=[AttemptAnswer(question_id=qid, answer=answer) for qid, answer in pairs])


def test_red_and_yellow_split():
    questions = [make_question(i) for i in range(1, 11)]
    attempt = make_attempt([(i, "A") for i in range(1, 7)] + [(i, "B") for i in range(7, 11)])

    profile = generate_insight_discovery_report(attempt, questions)

    assert profile.dominant_color.color == "red"
    assert profile.dominant_color.percentage == 60
    assert profile.secondary_color.color == "yellow"
    assert profile.secondary_color.percentage == 40
    percentages = [s.percentage for s in profile.color_scores]
    assert percentages == sorted(percentages, reverse=True)
    assert profile.strengths == COLOR_TRAITS["red"]["strengths"]
    assert profile.working_style == COLOR_TRAITS["red"]["working_style"]


def test_option_matching_is_case_insensitive_on_id_and_label():
    questions = [make_question(1), make_question(2)]
    attempt = make_attempt([(1, "c"), (2, "C")])

    scores = {s.color: s.count for s in score_colors(attempt, questions)}

    assert scores["green"] == 2


def test_padded_answer_does_not_match_an_option():
    questions = [make_question(1), make_question(2)]
    attempt = make_attempt([(1, " A "), (2, "a")])

    scores = {s.color: s.percentage for s in score_colors(attempt, questions)}

    assert scores["red"] == 50
    assert sum(scores.values()) == 50


def test_unknown_tags_and_missing_questions_still_count_in_denominator():
    questions = [make_question(1, colors=("purple", "yellow", "green", "blue")), make_question(2)]
    attempt = make_attempt([(1, "A"), (2, "D"), (3, "A"), (2, "Z")])

    scores = {s.color: s.percentage for s in score_colors(attempt, questions)}

    assert scores["blue"] == 25
    assert sum(scores.values()) == 25


def test_empty_attempt_has_zero_percentages():
    profile = generate_insight_discovery_report(make_attempt([]), [make_question(1)])

    assert all(s.percentage == 0 for s in profile.color_scores)
    assert [s.color for s in profile.color_scores] == ["red", "yellow", "green", "blue"]


def test_recommendations_mention_dominance_and_lowest_energy():
    questions = [make_question(i) for i in range(1, 11)]
    attempt = make_attempt([(i, "D") for i in range(1, 8)] + [(i, "C") for i in range(8, 11)])

    profile = generate_insight_discovery_report(attempt, questions)

    assert "Cool Blue energy (70%)" in profile.recommendations
    assert "Recognise and value your strong Cool Blue energy" in profile.recommendations
    assert "for a more balanced profile" in profile.recommendations
    assert get_combination_trait("blue", "green") in profile.recommendations


def test_team_value_mixes_dominant_and_secondary():
    questions = [make_question(i) for i in range(1, 11)]
    attempt = make_attempt([(i, "C") for i in range(1, 6)] + [(i, "A") for i in range(6, 10)] + [(10, "B")])

    profile = generate_insight_discovery_report(attempt, questions)

    assert profile.dominant_color.color == "green"
    assert len(profile.team_value) == 5
    assert profile.opposite_type.description.startswith("Your opposite type is Fiery Red")


def test_profile_type_wheel_position():
    def score(color, pct):
        return ColorScore(color=color, name=color, count=0, percentage=pct)

    assert generate_profile_type(score("red", 60), score("yellow", 40)) == "10 Dynamic Innovator"
    assert generate_profile_type(score("red", 40), score("yellow", 30)) == "7 Dynamic Innovator"
    assert generate_profile_type(score("red", 40), score("blue", 30)) == "12 Decisive Strategist"
    assert generate_profile_type(score("green", 30), score("blue", 10)) == "37 Methodical Supporter"


def test_combination_trait_fallback_for_same_colour():
    assert get_combination_trait("red", "red") == "unique in your approach to work and relationships"
