from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Optional, Literal
from datetime import datetime
from models.readiness import ReadinessCategory, ReadinessLevel, QuickCheckLevel

MAX_OPTION_POINTS = 5

class QuestionOption(BaseModel):
    value: str
    label: str
    points: int = Field(ge=1, le=MAX_OPTION_POINTS)

    class Config:
        frozen = True

class ReadinessQuestion(BaseModel):
    id: str
    prompt: str
    category: ReadinessCategory
    options: List[QuestionOption]

    class Config:
        frozen = True

    @field_validator("options")
    @classmethod
    def options_strictly_decreasing(cls, options: List[QuestionOption]) -> List[QuestionOption]:
        if not options:
            raise ValueError("a question needs at least one option")
        points = [option.points for option in options]
        if any(later >= earlier for earlier, later in zip(points, points[1:])):
            raise ValueError("option points must be unique and strictly decreasing")
        return options

class AssessmentResult(BaseModel):
    total_score: int
    max_score: int
    percentage: float
    level: ReadinessLevel
    category_scores: Dict[ReadinessCategory, int]
    recommendations: List[str]

    class Config:
        frozen = True

class ReadinessSubmission(BaseModel):
    answers: Dict[str, str]  # question_id -> option value

class StoredAssessment(BaseModel):
    id: int
    user_id: str
    assessment_data: Dict[str, str]
    score: int
    percentage: float
    level: ReadinessLevel
    recommendations: List[str]
    completed_at: datetime

    class Config:
        from_attributes = True

class SessionState(BaseModel):
    current_index: int = Field(default=0, ge=0)
    answers: Dict[str, str] = {}
    result: Optional[AssessmentResult] = None

    class Config:
        frozen = True

    @property
    def completed(self) -> bool:
        return self.result is not None

class SessionAction(BaseModel):
    state: SessionState = SessionState()
    action: Literal["answer", "previous", "reset"]
    value: Optional[str] = None

class SessionView(BaseModel):
    state: SessionState
    progress: float
    live_score: AssessmentResult
    completed: bool

class QuickCheckQuestion(BaseModel):
    question: str
    options: List[str]
    scores: List[int]

class QuickCheckSubmission(BaseModel):
    answers: List[int]  # option index per question, in order

class QuickCheckResult(BaseModel):
    total_score: int
    max_score: int
    percentage: float
    level: QuickCheckLevel
    message: str
