import pytest

from quizreport.schemas import AnswerDetail, ReportData, WeakArea
from quizreport.services import LLMReportService, ReportAnalysisError


def _report():
    return ReportData(
        score=55,
        correct_answers=11,
        total_questions=20,
        time_spent=900,
        pass_status="fail",
        weak_areas=[WeakArea(category="Network", wrong_count=4, total_count=6, percentage=33)],
        strengths=["Cryptography"],
        recommendations="**Full Review Needed**",
        detailed_answers=[
            AnswerDetail(
                question_id=1,
                question="Which layer does a router operate at?",
                category="Network",
                user_answer="B",
                correct_answer="C",
                is_correct=False,
            )
        ],
    )


class FakeResponse:
    def __init__(self, output_text):
        self.output_text = output_text


class FakeResponses:
    def __init__(self, outputs):
        self.outputs = list(outputs)
        self.prompts = []

    def create(self, *, model, input):
        self.prompts.append(input)
        return FakeResponse(self.outputs.pop(0))


class FakeClient:
    def __init__(self, outputs):
        self.responses = FakeResponses(outputs)


def test_analysis_prompt_includes_weak_areas_and_missed_questions():
    prompt = LLMReportService.build_analysis_prompt("CISSP Practice", _report())

    assert "Network (33% correct, 4/6 wrong)" in prompt
    assert "- Which layer does a router operate at?" in prompt
    assert "Return JSON only" in prompt


def test_generate_ai_analysis_retries_once_on_invalid_json():
    service = LLMReportService()
    service.client = FakeClient(
        [
            "Sure! Here is your plan.",
            '```json\n{"summary": "Rebuild networking basics", "focus_areas": ["Network"], "study_plan": ["OSI model"]}\n```',
        ]
    )

    analysis = service.generate_ai_analysis(quiz_title="CISSP Practice", report=_report())

    assert analysis.summary == "Rebuild networking basics"
    assert analysis.study_plan == ["OSI model"]
    assert len(service.client.responses.prompts) == 2
    assert "STRICT JSON" in service.client.responses.prompts[1]


def test_generate_ai_analysis_rejects_unexpected_shape():
    service = LLMReportService()
    service.client = FakeClient(['{"focus_areas": "not a list"}', '{"summary": "ok", "focus_areas": "not a list"}'])

    with pytest.raises(ReportAnalysisError):
        service.generate_ai_analysis(quiz_title="CISSP Practice", report=_report())


def test_generate_ai_analysis_requires_client():
    service = LLMReportService()
    service.client = None

    with pytest.raises(ReportAnalysisError, match="OPENAI_API_KEY"):
        service.generate_ai_analysis(quiz_title="CISSP Practice", report=_report())


def test_parse_analysis_payload_reports_preview_on_garbage():
    with pytest.raises(ReportAnalysisError, match="did not return a JSON object"):
        LLMReportService._parse_analysis_payload("no braces here")


@pytest.mark.parametrize("text", ['{"focus_areas": []}', '{"summary": "   "}', '["summary"]', "```json\n```"])
def test_parse_analysis_payload_requires_summary(text):
    with pytest.raises(ReportAnalysisError):
        LLMReportService._parse_analysis_payload(text)


def test_missing_summary_triggers_retry():
    service = LLMReportService()
    service.client = FakeClient(['{"focus_areas": ["Network"]}', '{"summary": "Drill subnetting", "focus_areas": ["Network"]}'])

    analysis = service.generate_ai_analysis(quiz_title="CISSP Practice", report=_report())

    assert analysis.summary == "Drill subnetting"
    assert "non-empty 'summary'" in service.client.responses.prompts[1]
