import json
import logging
from typing import Optional

from fastapi import Depends, FastAPI, Header, HTTPException
from fastapi.responses import Response
from sqlalchemy import text
from sqlalchemy.orm import Session

from quizreport.config import load_settings
from quizreport.database import Base, engine, get_db
from quizreport.insight import generate_insight_discovery_report
from quizreport.models import Question, Quiz, QuizAttempt, QuizReport
from quizreport.pdf import render_report_pdf
from quizreport.reports import generate_quiz_report, get_pass_threshold, round_half_up
from quizreport.schemas import (
    AIAnalysisOut,
    AIAnalysisResponse,
    AttemptAnswer,
    AttemptRecord,
    InsightProfile,
    QuestionOption,
    QuestionOut,
    QuizCreateRequest,
    QuizOut,
    QuizReportOut,
    ReportData,
    SubmitAttemptRequest,
    SubmitAttemptResponse,
    UserProgressResponse,
)
from quizreport.services import LLMReportService, ReportAnalysisError

settings = load_settings()

app = FastAPI(title="Quiz Report Service")
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
logger = logging.getLogger(__name__)
service = LLMReportService()

Base.metadata.create_all(bind=engine)


def _question_out(question: Question) -> QuestionOut:
    return QuestionOut(
        id=question.id,
        question=question.question,
        options=[QuestionOption(**o) for o in json.loads(question.options_json)],
        correct_answer=question.correct_answer,
        category=question.category,
        explanation=question.explanation,
    )


def _quiz_out(quiz: Quiz, questions) -> QuizOut:
    return QuizOut(
        id=quiz.id,
        title=quiz.title,
        description=quiz.description,
        difficulty=quiz.difficulty,
        quiz_type=quiz.quiz_type,
        certification=quiz.certification,
        questions=[_question_out(q) for q in questions],
    )


def _attempt_record(attempt: QuizAttempt) -> AttemptRecord:
    return AttemptRecord(
        id=attempt.id,
        quiz_id=attempt.quiz_id,
        user_id=attempt.user_id,
        score=attempt.score,
        correct_answers=attempt.correct_answers,
        total_questions=attempt.total_questions,
        time_spent=attempt.time_spent,
        answers=[AttemptAnswer(**a) for a in json.loads(attempt.answers_json)],
    )


def _load_report(row: QuizReport):
    payload = json.loads(row.report_json)
    if row.report_type == "insight":
        return InsightProfile(**payload)
    return ReportData(**payload)


def _get_owned_report(attempt_id: int, x_user_id: Optional[str], db: Session) -> QuizReport:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    row = db.query(QuizReport).filter(QuizReport.attempt_id == attempt_id).first()
    if not row:
        raise HTTPException(status_code=404, detail="Report not found")
    if row.user_id != x_user_id:
        raise HTTPException(status_code=403, detail="Unauthorized")
    return row


def _is_correct(answer: str, correct_answer: Optional[str]) -> bool:
    if not correct_answer:
        return False
    return answer.strip().upper() == correct_answer.strip().upper()


@app.get("/api/health")
def health(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"status": "ok"}


@app.post("/api/quizzes", response_model=QuizOut)
def create_quiz(payload: QuizCreateRequest, db: Session = Depends(get_db)):
    quiz = Quiz(
        title=payload.title,
        description=payload.description,
        difficulty=payload.difficulty.strip().lower(),
        quiz_type=payload.quiz_type,
        certification=payload.certification.value if payload.certification else None,
    )
    db.add(quiz)
    db.flush()

    for q in payload.questions:
        db.add(
            Question(
                quiz_id=quiz.id,
                question=q.question,
                options_json=json.dumps([o.model_dump() for o in q.options]),
                correct_answer=q.correct_answer,
                category=q.category,
                explanation=q.explanation,
            )
        )
    db.commit()
    db.refresh(quiz)
    logger.info("Created quiz %s (%r, type=%s, questions=%s)", quiz.id, quiz.title, quiz.quiz_type, len(payload.questions))

    questions = db.query(Question).filter(Question.quiz_id == quiz.id).order_by(Question.id.asc()).all()
    return _quiz_out(quiz, questions)


@app.get("/api/quizzes/{quiz_id}", response_model=QuizOut)
def get_quiz(quiz_id: int, db: Session = Depends(get_db)):
    quiz = db.query(Quiz).filter(Quiz.id == quiz_id).first()
    if not quiz:
        raise HTTPException(status_code=404, detail="Quiz not found")
    questions = db.query(Question).filter(Question.quiz_id == quiz.id).order_by(Question.id.asc()).all()
    return _quiz_out(quiz, questions)


@app.post("/api/quiz-attempts", response_model=SubmitAttemptResponse)
def submit_attempt(payload: SubmitAttemptRequest, db: Session = Depends(get_db)):
    quiz = db.query(Quiz).filter(Quiz.id == payload.quiz_id).first()
    if not quiz:
        raise HTTPException(status_code=404, detail="Quiz not found")
    questions = db.query(Question).filter(Question.quiz_id == quiz.id).order_by(Question.id.asc()).all()

    question_by_id = {q.id: q for q in questions}
    answers_by_qid = {a.question_id: a for a in payload.answers}
    if len(answers_by_qid) != len(payload.answers):
        raise HTTPException(status_code=400, detail="Each question can only be submitted once")
    unknown_ids = set(answers_by_qid.keys()) - set(question_by_id.keys())
    if unknown_ids:
        raise HTTPException(status_code=400, detail="Submission includes unknown question_id values")

    is_insight = quiz.quiz_type == "insight"
    answers = [
        AttemptAnswer(
            question_id=a.question_id,
            answer=a.answer,
            is_correct=False if is_insight else _is_correct(a.answer, question_by_id[a.question_id].correct_answer),
        )
        for a in payload.answers
    ]
    correct = sum(1 for a in answers if a.is_correct)
    total = len(questions)
    score = 0 if is_insight or not total else round_half_up(correct / total * 100)

    attempt = QuizAttempt(
        quiz_id=quiz.id,
        user_id=payload.user_id,
        score=score,
        correct_answers=correct,
        total_questions=total,
        time_spent=payload.time_spent,
        answers_json=json.dumps([a.model_dump() for a in answers]),
    )
    db.add(attempt)
    db.flush()

    record = _attempt_record(attempt)
    question_models = [_question_out(q) for q in questions]
    if is_insight:
        report = generate_insight_discovery_report(record, question_models)
        passed = None
    else:
        report = generate_quiz_report(record, quiz, question_models)
        passed = report.pass_status == "pass"

    db.add(
        QuizReport(
            attempt_id=attempt.id,
            user_id=payload.user_id,
            quiz_id=quiz.id,
            report_type=quiz.quiz_type,
            report_json=report.model_dump_json(),
            recommendations=report.recommendations,
            passed=passed,
        )
    )
    db.commit()
    logger.info(
        "Attempt %s stored for user %r on quiz %s (score=%s, correct=%s/%s, report=%s)",
        attempt.id,
        payload.user_id,
        quiz.id,
        score,
        correct,
        total,
        quiz.quiz_type,
    )

    return SubmitAttemptResponse(
        attempt_id=attempt.id,
        quiz_id=quiz.id,
        score=score,
        correct_answers=correct,
        total_questions=total,
        time_spent=payload.time_spent,
        report_type=quiz.quiz_type,
        report=report,
    )


@app.get("/api/quiz-reports/{attempt_id}", response_model=QuizReportOut)
def get_quiz_report(attempt_id: int, x_user_id: Optional[str] = Header(default=None), db: Session = Depends(get_db)):
    row = _get_owned_report(attempt_id, x_user_id, db)
    return QuizReportOut(
        attempt_id=row.attempt_id,
        quiz_id=row.quiz_id,
        user_id=row.user_id,
        report_type=row.report_type,
        created_at=row.created_at.isoformat() if row.created_at else "",
        report=_load_report(row),
        ai_analysis=AIAnalysisOut(**json.loads(row.ai_analysis)) if row.ai_analysis else None,
    )


@app.get("/api/quiz-reports/{attempt_id}/download")
def download_quiz_report(
    attempt_id: int, x_user_id: Optional[str] = Header(default=None), db: Session = Depends(get_db)
):
    row = _get_owned_report(attempt_id, x_user_id, db)
    quiz = db.query(Quiz).filter(Quiz.id == row.quiz_id).first()
    pdf_bytes = render_report_pdf(
        quiz_title=quiz.title if quiz else "Quiz",
        user_id=row.user_id,
        created_at=row.created_at,
        report=_load_report(row),
    )
    logger.info("Rendered PDF for attempt %s (%s bytes)", attempt_id, len(pdf_bytes))
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="quiz-report-{attempt_id}.pdf"'},
    )


@app.post("/api/quiz-reports/{attempt_id}/ai-analysis", response_model=AIAnalysisResponse)
def generate_ai_analysis(
    attempt_id: int, x_user_id: Optional[str] = Header(default=None), db: Session = Depends(get_db)
):
    row = _get_owned_report(attempt_id, x_user_id, db)
    if row.ai_analysis:
        return {**json.loads(row.ai_analysis), "cached": True}
    if not service.enabled:
        raise HTTPException(status_code=503, detail="AI analysis is not configured")

    quiz = db.query(Quiz).filter(Quiz.id == row.quiz_id).first()
    try:
        analysis = service.generate_ai_analysis(quiz_title=quiz.title if quiz else "Quiz", report=_load_report(row))
    except ReportAnalysisError as exc:
        logger.warning("AI analysis failed for attempt %s: %s", attempt_id, exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    row.ai_analysis = analysis.model_dump_json()
    db.commit()
    return {**analysis.model_dump(), "cached": False}


@app.get("/api/users/{user_id}/progress", response_model=UserProgressResponse)
def get_user_progress(user_id: str, db: Session = Depends(get_db)):
    attempts = (
        db.query(QuizAttempt)
        .join(Quiz, Quiz.id == QuizAttempt.quiz_id)
        .filter(QuizAttempt.user_id == user_id, Quiz.quiz_type == "standard")
        .all()
    )
    quiz_ids = {a.quiz_id for a in attempts}
    quizzes = db.query(Quiz).filter(Quiz.id.in_(quiz_ids)).all() if quiz_ids else []
    questions = db.query(Question).filter(Question.quiz_id.in_(quiz_ids)).all() if quiz_ids else []
    quiz_by_id = {qz.id: qz for qz in quizzes}
    question_by_id = {q.id: q for q in questions}

    category_bucket: dict[str, dict[str, int]] = {}
    passed = 0
    for attempt in attempts:
        quiz = quiz_by_id.get(attempt.quiz_id)
        if quiz and attempt.score >= get_pass_threshold(quiz.difficulty):
            passed += 1
        for answer in json.loads(attempt.answers_json):
            question = question_by_id.get(answer["question_id"])
            if not question:
                continue
            stats = category_bucket.setdefault(question.category or "General", {"correct": 0, "total": 0})
            stats["total"] += 1
            stats["correct"] += int(bool(answer["is_correct"]))

    average = round(sum(a.score for a in attempts) / len(attempts), 2) if attempts else 0.0
    return {
        "user_id": user_id,
        "attempts": len(attempts),
        "passed_attempts": passed,
        "average_score": average,
        "per_category_stats": [
            {
                "category": category,
                "correct": row["correct"],
                "total": row["total"],
                "accuracy_percentage": round((row["correct"] / row["total"]) * 100, 2) if row["total"] else 0.0,
            }
            for category, row in sorted(category_bucket.items(), key=lambda item: item[0].lower())
        ],
    }
