import os

import pytest

from quizreport.schemas import ReportData, WeakArea
from quizreport.services import LLMReportService


@pytest.mark.integration
@pytest.mark.skipif(not os.getenv("OPENAI_API_KEY"), reason="OPENAI_API_KEY not set")
def test_live_ai_analysis():
    service = LLMReportService()
    report = ReportData(
        score=62,
        correct_answers=31,
        total_questions=50,
        time_spent=2400,
        pass_status="fail",
        weak_areas=[WeakArea(category="Identity and Access Management", wrong_count=7, total_count=10, percentage=30)],
        strengths=["Asset Security"],
        recommendations="",
        detailed_answers=[],
    )

    analysis = service.generate_ai_analysis(quiz_title="CISSP Full Mock Exam", report=report)

    assert analysis.summary.strip()
    assert analysis.study_plan
