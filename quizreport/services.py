import json
import logging
from typing import Union

from openai import AuthenticationError, OpenAI
from pydantic import ValidationError

from quizreport.config import load_settings
from quizreport.schemas import AIAnalysisOut, InsightProfile, ReportData

logger = logging.getLogger(__name__)


class ReportAnalysisError(RuntimeError):
    pass


class LLMReportService:
    def __init__(self):
        settings = load_settings()
        self.api_key = settings.openai_api_key
        self.model = settings.openai_model
        self.client = OpenAI(api_key=self.api_key) if self.api_key else None

    @property
    def enabled(self) -> bool:
        return self.client is not None

    @staticmethod
    def build_analysis_prompt(quiz_title: str, report: Union[ReportData, InsightProfile]) -> str:
        if isinstance(report, InsightProfile):
            context = (
                "The learner completed a personality assessment. "
                f"Dominant colour: {report.dominant_color.name} ({report.dominant_color.percentage}%). "
                f"Secondary colour: {report.secondary_color.name} ({report.secondary_color.percentage}%). "
                f"Profile type: {report.profile_type}. "
                f"Development areas: {'; '.join(report.development_areas)}."
            )
        else:
            weak_text = (
                "; ".join(
                    f"{w.category} ({w.percentage}% correct, {w.wrong_count}/{w.total_count} wrong)"
                    for w in report.weak_areas
                )
                or "none"
            )
            missed = [a.question for a in report.detailed_answers if not a.is_correct][:10]
            missed_text = "\n".join(f"- {m}" for m in missed) if missed else "- none"
            context = (
                f"The learner scored {report.score}/100 "
                f"({report.correct_answers}/{report.total_questions} correct) and the verdict is "
                f"{report.pass_status}. "
                f"Weak areas: {weak_text}. "
                f"Strengths: {', '.join(report.strengths) or 'none'}. "
                "Missed questions:\n"
                f"{missed_text}"
            )

        return (
            "You are a certification coach. Return JSON only with keys 'summary' (string), "
            "'focus_areas' (string[]) and 'study_plan' (string[]). "
            "Keep the summary under 120 words, list at most 5 focus areas and at most 7 study plan steps. "
            "Be concrete and actionable, and do not repeat the raw numbers verbatim. "
            f"Quiz: {quiz_title}. "
            f"{context}"
        )

    def generate_ai_analysis(self, *, quiz_title: str, report: Union[ReportData, InsightProfile]) -> AIAnalysisOut:
        if not self.client:
            raise ReportAnalysisError("OPENAI_API_KEY is required to analyse reports")

        prompt = self.build_analysis_prompt(quiz_title, report)
        logger.info("Requesting AI analysis via OpenAI (quiz=%r, model=%s)", quiz_title, self.model)

        try:
            response = self.client.responses.create(model=self.model, input=prompt)
        except AuthenticationError as exc:
            raise ReportAnalysisError("Invalid OpenAI API key") from exc

        text = response.output_text or ""
        logger.info("OpenAI analysis response length=%s", len(text))

        try:
            payload = self._parse_analysis_payload(text)
        except ReportAnalysisError as first_exc:
            logger.warning("Initial parse failed (%s). Retrying analysis once.", first_exc)
            retry_prompt = (
                f"{prompt} IMPORTANT: Return STRICT JSON only, one object with a non-empty 'summary'. "
                "No markdown fences and no prose outside JSON."
            )
            retry_response = self.client.responses.create(model=self.model, input=retry_prompt)
            retry_text = retry_response.output_text or ""
            logger.info("OpenAI analysis retry response length=%s", len(retry_text))
            payload = self._parse_analysis_payload(retry_text)

        try:
            return AIAnalysisOut(**payload)
        except ValidationError as exc:
            raise ReportAnalysisError(f"Model returned an unexpected analysis shape ({exc.error_count()} errors)") from exc

    @staticmethod
    def _parse_analysis_payload(text: str) -> dict:
        """Pull the analysis object out of a model reply.

        Fenced blocks and surrounding prose are tolerated. The object must carry a
        non-empty ``summary`` string; list fields are left to ``AIAnalysisOut``.
        """
        body = (text or "").strip()
        if body.startswith("```"):
            body = body.strip("`").removeprefix("json").strip()
        if not body:
            raise ReportAnalysisError("Model returned an empty analysis")

        start, end = body.find("{"), body.rfind("}")
        if start == -1 or end < start:
            raise ReportAnalysisError(f"Model did not return a JSON object. Preview: {body[:200]!r}")

        try:
            payload = json.loads(body[start : end + 1])
        except json.JSONDecodeError as exc:
            raise ReportAnalysisError(f"Model returned invalid JSON ({exc.msg} at col {exc.colno})") from exc

        summary = payload.get("summary") if isinstance(payload, dict) else None
        if not isinstance(summary, str) or not summary.strip():
            raise ReportAnalysisError("Model analysis is missing a summary")
        return payload
