"""Readiness assessment session as an immutable state plus a reducer.

A session is InProgress while ``state.result`` is None and Completed once the
last question has been answered. Each action returns a new ``SessionState``;
entering Completed also yields an ``AssessmentCompleted`` event that callers
hand to whatever stores results.
"""
from typing import Dict, List, NamedTuple, Optional

from schemas.readiness import AssessmentResult, ReadinessQuestion, SessionState
from services.readiness_service import ReadinessService


class InvalidTransition(Exception):
    pass


class AssessmentCompleted(NamedTuple):
    answers: Dict[str, str]
    result: AssessmentResult


class SessionTransition(NamedTuple):
    state: SessionState
    event: Optional[AssessmentCompleted] = None


def start() -> SessionState:
    return SessionState()


def reset() -> SessionTransition:
    return SessionTransition(start())


def check_state(state: SessionState, questions: List[ReadinessQuestion]) -> None:
    """Reject states the reducer could never have produced.

    Answers always cover a prefix of the question bank at least as long as
    ``current_index``, since going back keeps later answers. A Completed state
    has every question answered and carries the result of scoring them.
    """
    if not 0 <= state.current_index < len(questions):
        raise InvalidTransition(f"no question at index {state.current_index}")

    known = {question.id for question in questions}
    unknown = sorted(set(state.answers) - known)
    if unknown:
        raise InvalidTransition(f"unknown questions in answers: {', '.join(unknown)}")

    answered = 0
    for question in questions:
        if question.id not in state.answers:
            break
        if state.answers[question.id] not in {option.value for option in question.options}:
            raise InvalidTransition(f"'{state.answers[question.id]}' is not an option for {question.id}")
        answered += 1

    if answered != len(state.answers):
        raise InvalidTransition("answers must follow question order without gaps")

    if state.completed:
        if answered != len(questions) or state.current_index != len(questions) - 1:
            raise InvalidTransition("a completed assessment must answer every question")
        if state.result != ReadinessService.score(questions, state.answers):
            raise InvalidTransition("result does not match the recorded answers")
    elif answered < state.current_index or answered == len(questions):
        raise InvalidTransition(f"answers do not match question index {state.current_index}")


def answer(state: SessionState, questions: List[ReadinessQuestion], value: str) -> SessionTransition:
    if state.completed:
        raise InvalidTransition("assessment already completed; reset to retake it")
    check_state(state, questions)

    question = questions[state.current_index]
    if value not in {option.value for option in question.options}:
        raise InvalidTransition(f"'{value}' is not an option for {question.id}")

    answers = {**state.answers, question.id: value}

    if state.current_index < len(questions) - 1:
        return SessionTransition(SessionState(current_index=state.current_index + 1, answers=answers))

    missing = [q.id for q in questions if q.id not in answers]
    if missing:
        raise InvalidTransition(f"unanswered questions: {', '.join(missing)}")

    result = ReadinessService.score(questions, answers)
    completed = SessionState(current_index=state.current_index, answers=answers, result=result)
    return SessionTransition(completed, AssessmentCompleted(answers, result))


def previous(state: SessionState, questions: List[ReadinessQuestion]) -> SessionTransition:
    if state.completed:
        raise InvalidTransition("assessment already completed; reset to retake it")
    check_state(state, questions)
    if state.current_index == 0:
        return SessionTransition(state)
    return SessionTransition(SessionState(current_index=state.current_index - 1, answers=state.answers))


def progress(state: SessionState, questions: List[ReadinessQuestion]) -> float:
    if state.completed or not questions:
        return 100.0
    return min(state.current_index + 1, len(questions)) * 100 / len(questions)


def apply(state: SessionState, questions: List[ReadinessQuestion], action: str, value: Optional[str] = None) -> SessionTransition:
    if action == "reset":
        return reset()
    if action == "previous":
        return previous(state, questions)
    if action == "answer":
        if value is None:
            raise InvalidTransition("an answer action needs a value")
        return answer(state, questions, value)
    raise InvalidTransition(f"unknown action '{action}'")
