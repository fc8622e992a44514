from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator


class CertificationFamily(str, Enum):
    CISSP = "cissp"
    CISM = "cism"
    GDPR = "gdpr"
    ISO27001 = "iso27001"
    NIS2 = "nis2"
    DORA = "dora"


class QuestionOption(BaseModel):
    id: Optional[str] = None
    label: Optional[str] = None
    text: str = ""
    color: Optional[str] = None


class QuestionPayload(BaseModel):
    question: str
    options: List[QuestionOption] = Field(min_length=2)
    correct_answer: Optional[str] = None
    category: Optional[str] = None
    explanation: str = ""


class QuestionOut(QuestionPayload):
    id: int


class QuizCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = ""
    difficulty: str = "intermediate"
    quiz_type: Literal["standard", "insight"] = "standard"
    certification: Optional[CertificationFamily] = None
    questions: List[QuestionPayload] = Field(min_length=1)

    @model_validator(mode="after")
    def graded_questions_need_answers(self):
        if self.quiz_type == "standard":
            missing = [q.question for q in self.questions if not (q.correct_answer or "").strip()]
            if missing:
                raise ValueError("Every question of a standard quiz needs a correct_answer")
        return self


class QuizOut(BaseModel):
    id: int
    title: str
    description: str
    difficulty: str
    quiz_type: str
    certification: Optional[CertificationFamily] = None
    questions: List[QuestionOut]


class AnswerIn(BaseModel):
    question_id: int
    answer: str


class SubmitAttemptRequest(BaseModel):
    quiz_id: int
    user_id: str = Field(min_length=1, max_length=64)
    time_spent: int = Field(default=0, ge=0)
    answers: List[AnswerIn]


class AttemptAnswer(BaseModel):
    question_id: int
    answer: str
    is_correct: bool = False


class AttemptRecord(BaseModel):
    id: Optional[int] = None
    quiz_id: Optional[int] = None
    user_id: str = ""
    score: int = Field(default=0, ge=0, le=100)
    correct_answers: int = 0
    total_questions: int = 0
    time_spent: int = 0
    answers: List[AttemptAnswer] = Field(default_factory=list)


class WeakArea(BaseModel):
    category: str
    wrong_count: int
    total_count: int
    percentage: int


class AnswerDetail(BaseModel):
    question_id: int
    question: str
    category: Optional[str] = None
    user_answer: str
    correct_answer: str
    is_correct: bool


class ReportData(BaseModel):
    score: int
    correct_answers: int
    total_questions: int
    time_spent: int
    pass_status: Literal["pass", "fail"]
    weak_areas: List[WeakArea]
    strengths: List[str]
    recommendations: str
    detailed_answers: List[AnswerDetail]


class ColorScore(BaseModel):
    color: str
    name: str
    count: int
    percentage: int


class OppositeType(BaseModel):
    description: str
    differences: List[str]
    working_together: List[str]


class DetailedAnalysis(BaseModel):
    profile_description: str
    behavioral_patterns: List[str]
    stress_management: List[str]
    leadership_style: List[str]
    team_interaction: List[str]
    decision_making: List[str]
    conflict_resolution: List[str]
    motivational_drivers: List[str]
    learning_preferences: List[str]
    career_guidance: List[str]
    action_plan: List[str]


class InsightProfile(BaseModel):
    dominant_color: ColorScore
    secondary_color: ColorScore
    color_scores: List[ColorScore]
    profile_type: str
    strengths: List[str]
    development_areas: List[str]
    working_style: str
    communication_style: str
    recommendations: str
    methodological_introduction: str
    opposite_type: OppositeType
    team_value: List[str]
    communication_obstacles: List[str]
    detailed_analysis: DetailedAnalysis


class SubmitAttemptResponse(BaseModel):
    attempt_id: int
    quiz_id: int
    score: int
    correct_answers: int
    total_questions: int
    time_spent: int
    report_type: str
    report: Union[ReportData, InsightProfile]


class QuizReportOut(BaseModel):
    attempt_id: int
    quiz_id: int
    user_id: str
    report_type: str
    created_at: str
    report: Union[ReportData, InsightProfile]
    ai_analysis: Optional["AIAnalysisOut"] = None


class AIAnalysisOut(BaseModel):
    summary: str
    focus_areas: List[str] = Field(default_factory=list)
    study_plan: List[str] = Field(default_factory=list)


class AIAnalysisResponse(AIAnalysisOut):
    cached: bool


class CategoryProgressOut(BaseModel):
    category: str
    correct: int
    total: int
    accuracy_percentage: float


class UserProgressResponse(BaseModel):
    user_id: str
    attempts: int
    passed_attempts: int
    average_score: float
    per_category_stats: List[CategoryProgressOut]


QuizReportOut.model_rebuild()
