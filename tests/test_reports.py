from types import SimpleNamespace

from quizreport.reports import (
    GENERIC_ADVICE,
    generate_quiz_report,
    get_category_advice,
    get_pass_threshold,
    resolve_certification,
)
from quizreport.schemas import AttemptAnswer, AttemptRecord, CertificationFamily, QuestionOption, QuestionOut

OPTIONS = [QuestionOption(label="A", text="first"), QuestionOption(label="B", text="second")]


def make_questions(categories):
    return [
        QuestionOut(id=idx, question=f"Q{idx}", options=OPTIONS, correct_answer="A", category=category)
        for idx, category in enumerate(categories, start=1)
    ]


def make_attempt(correct_flags, score, question_ids=None):
    question_ids = question_ids or list(range(1, len(correct_flags) + 1))
    answers = [
        AttemptAnswer(question_id=qid, answer="A" if ok else "B", is_correct=ok)
        for qid, ok in zip(question_ids, correct_flags)
    ]
    return AttemptRecord(
        score=score,
        correct_answers=sum(correct_flags),
        total_questions=len(correct_flags),
        time_spent=300,
        answers=answers,
    )


def make_quiz(title="Security Fundamentals", difficulty="intermediate", certification=None):
    return SimpleNamespace(title=title, difficulty=difficulty, certification=certification)


def test_perfect_score_single_category():
    questions = make_questions(["Security"] * 10)
    attempt = make_attempt([True] * 10, score=100)

    report = generate_quiz_report(attempt, make_quiz(), questions)

    assert report.score == 100
    assert report.pass_status == "pass"
    assert report.weak_areas == []
    assert report.strengths == ["Security"]
    assert len(report.detailed_answers) == 10


def test_mixed_categories_weak_area_and_strength():
    questions = make_questions(["Network"] * 5 + ["Crypto"] * 5)
    attempt = make_attempt([True, True, True, False, False] + [True] * 5, score=80)

    report = generate_quiz_report(attempt, make_quiz(), questions)

    assert len(report.weak_areas) == 1
    weak = report.weak_areas[0]
    assert (weak.category, weak.wrong_count, weak.total_count, weak.percentage) == ("Network", 2, 5, 60)
    assert report.strengths == ["Crypto"]


def test_missing_question_is_skipped_everywhere():
    questions = make_questions(["Network", "Network"])
    attempt = make_attempt([True, False, True], score=67, question_ids=[1, 2, 99])

    report = generate_quiz_report(attempt, make_quiz(), questions)

    assert [a.question_id for a in report.detailed_answers] == [1, 2]
    assert report.weak_areas[0].total_count == 2


def test_category_totals_partition_found_answers():
    questions = make_questions(["A", "B", "B", None, "C", "C", "C"])
    flags = [True, False, True, True, False, False, True]
    attempt = make_attempt(flags + [True], score=57, question_ids=[1, 2, 3, 4, 5, 6, 7, 42])

    report = generate_quiz_report(attempt, make_quiz(), questions)

    totals = {}
    for detail in report.detailed_answers:
        key = detail.category or "General"
        totals[key] = totals.get(key, 0) + 1
    assert sum(totals.values()) == 7
    assert totals == {"A": 1, "B": 2, "General": 1, "C": 3}


def test_weak_areas_sorted_worst_first_and_disjoint_from_strengths():
    questions = make_questions(["X"] * 4 + ["Y"] * 4 + ["Z"] * 4 + ["W"] * 2)
    flags = [True, True, False, False] + [False] * 4 + [True, True, True, True] + [True, False]
    attempt = make_attempt(flags, score=50)

    report = generate_quiz_report(attempt, make_quiz(), questions)

    percentages = [w.percentage for w in report.weak_areas]
    assert percentages == sorted(percentages)
    assert [w.category for w in report.weak_areas] == ["Y", "X", "W"]
    assert not {w.category for w in report.weak_areas} & set(report.strengths)
    assert report.strengths == ["Z"]


def test_pass_boundary_is_inclusive():
    questions = make_questions(["General"])
    quiz = make_quiz(difficulty="beginner")

    at_threshold = generate_quiz_report(make_attempt([True], score=60), quiz, questions)
    below = generate_quiz_report(make_attempt([True], score=59), quiz, questions)

    assert at_threshold.pass_status == "pass"
    assert below.pass_status == "fail"


def test_pass_thresholds_by_difficulty():
    assert get_pass_threshold("beginner") == 60
    assert get_pass_threshold("intermediate") == 70
    assert get_pass_threshold("advanced") == 75
    assert get_pass_threshold("expert") == 75
    assert get_pass_threshold("legendary") == 70
    assert get_pass_threshold(None) == 70


def test_report_is_deterministic_and_leaves_inputs_untouched():
    questions = make_questions(["Network"] * 3 + ["Crypto"] * 2)
    attempt = make_attempt([True, False, False, True, True], score=60)
    quiz = make_quiz(title="CISSP Practice")
    before = attempt.model_dump()

    first = generate_quiz_report(attempt, quiz, questions)
    second = generate_quiz_report(attempt, quiz, questions)

    assert first.model_dump_json() == second.model_dump_json()
    assert attempt.model_dump() == before


def test_empty_attempt_yields_zeroed_breakdown():
    report = generate_quiz_report(make_attempt([], score=0), make_quiz(), make_questions(["General"]))

    assert report.weak_areas == []
    assert report.strengths == []
    assert report.detailed_answers == []
    assert report.pass_status == "fail"


def test_recommendations_list_at_most_three_weak_areas_by_priority():
    questions = make_questions(["A"] * 2 + ["B"] * 2 + ["C"] * 2 + ["D"] * 2)
    flags = [False, False, False, True, False, False, False, True]
    attempt = make_attempt(flags, score=25)

    report = generate_quiz_report(attempt, make_quiz(), questions)

    assert len(report.weak_areas) == 4
    assert report.recommendations.startswith("**Full Review Needed**")
    assert "HIGH PRIORITY" in report.recommendations
    assert "LOW PRIORITY" in report.recommendations
    assert report.recommendations.count("PRIORITY - ") == 3


def test_opening_block_follows_score_bracket():
    questions = make_questions(["General"])
    quiz = make_quiz()

    def opening(score):
        return generate_quiz_report(make_attempt([True], score=score), quiz, questions).recommendations.splitlines()[0]

    assert opening(59) == "**Full Review Needed**"
    assert opening(74) == "**Solid Base, Refinement Needed**"
    assert opening(89) == "**Great Level, One Last Push**"
    assert opening(90) == "**Excellent Command of the Topics**"


def test_title_keyword_selects_certification_tips():
    questions = make_questions(["General"])
    report = generate_quiz_report(make_attempt([True], score=95), make_quiz(title="GDPR Essentials"), questions)

    assert "**GDPR/Privacy Specific Tips:**" in report.recommendations


def test_explicit_certification_overrides_title():
    quiz = make_quiz(title="CISSP style warm-up", certification="dora")

    assert resolve_certification(quiz) == CertificationFamily.DORA
    assert resolve_certification(make_quiz(title="CISSP style warm-up")) == CertificationFamily.CISSP
    assert resolve_certification(make_quiz(title="Cloud basics")) is None


def test_unknown_certification_falls_back_to_title():
    assert resolve_certification(make_quiz(title="NIS2 drill", certification="sox")) == CertificationFamily.NIS2


def test_category_advice_lookup():
    study, _practice, _resources = get_category_advice("Communication and Network Security")
    assert "secure network protocols" in study
    assert get_category_advice("Cryptography")[0].startswith("Study: symmetric")
    assert get_category_advice("Underwater basket weaving") == GENERIC_ADVICE
