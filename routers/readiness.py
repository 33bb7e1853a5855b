import logging
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import Callable, Dict, List, Optional
from database import get_db
from config import settings
from dependencies import get_current_user_id, get_optional_user_id, get_session_factory
from schemas.readiness import (
    AssessmentResult,
    QuickCheckQuestion,
    QuickCheckResult,
    QuickCheckSubmission,
    ReadinessQuestion,
    ReadinessSubmission,
    SessionAction,
    SessionView,
    StoredAssessment,
)
from services import assessment_session
from services.quick_check_service import QuickCheckService
from services.readiness_service import ReadinessService

logger = logging.getLogger(__name__)

router = APIRouter()

def schedule_persistence(
    background_tasks: BackgroundTasks,
    session_factory: Callable[[], Session],
    user_id: Optional[str],
    answers: Dict[str, str],
    result: AssessmentResult
) -> None:
    if not user_id or not settings.PERSIST_RESULTS:
        return
    background_tasks.add_task(ReadinessService.persist_in_background, session_factory, user_id, answers, result)

@router.get("/questions", response_model=List[ReadinessQuestion])
async def get_readiness_questions():
    return ReadinessService.get_questions()

@router.post("/score", response_model=AssessmentResult)
async def score_answers(submission: ReadinessSubmission):
    """Score a full or partial answer map without storing anything"""
    return ReadinessService.score(ReadinessService.get_questions(), submission.answers)

@router.post("/submit", response_model=AssessmentResult)
async def submit_assessment(
    submission: ReadinessSubmission,
    background_tasks: BackgroundTasks,
    user_id: Optional[str] = Depends(get_optional_user_id),
    session_factory: Callable[[], Session] = Depends(get_session_factory)
):
    result = ReadinessService.score(ReadinessService.get_questions(), submission.answers)
    logger.info("Readiness assessment scored %.0f%% (%s)", result.percentage, result.level.value)
    schedule_persistence(background_tasks, session_factory, user_id, submission.answers, result)
    return result

@router.get("/result", response_model=StoredAssessment)
async def get_latest_result(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    assessment = ReadinessService.latest_result(db, user_id)

    if not assessment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No assessment found. Please take the assessment first."
        )

    return assessment

@router.post("/session", response_model=SessionView)
async def advance_session(
    request: SessionAction,
    background_tasks: BackgroundTasks,
    user_id: Optional[str] = Depends(get_optional_user_id),
    session_factory: Callable[[], Session] = Depends(get_session_factory)
):
    questions = ReadinessService.get_questions()

    try:
        transition = assessment_session.apply(request.state, questions, request.action, request.value)
    except assessment_session.InvalidTransition as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    if transition.event is not None:
        schedule_persistence(
            background_tasks, session_factory, user_id,
            transition.event.answers, transition.event.result
        )

    state = transition.state
    return SessionView(
        state=state,
        progress=assessment_session.progress(state, questions),
        live_score=state.result or ReadinessService.score(questions, state.answers),
        completed=state.completed
    )

@router.get("/quick-check/questions", response_model=List[QuickCheckQuestion])
async def get_quick_check_questions():
    return QuickCheckService.get_questions()

@router.post("/quick-check/submit", response_model=QuickCheckResult)
async def submit_quick_check(submission: QuickCheckSubmission):
    return QuickCheckService.score(submission.answers)
