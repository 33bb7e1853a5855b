from fastapi import HTTPException, status
from typing import List
from models.readiness import QuickCheckLevel
from schemas.readiness import QuickCheckQuestion, QuickCheckResult

QUICK_CHECK_POINTS = [4, 3, 2, 1]

QUICK_CHECK_MESSAGES = {
    QuickCheckLevel.HIGH: "Excellent! You're well-prepared for your educational journey.",
    QuickCheckLevel.MEDIUM: "Good start! There are some areas where you can improve.",
    QuickCheckLevel.LOW: "Don't worry! We'll help you build the skills you need.",
}

class QuickCheckService:

    @staticmethod
    def get_questions() -> List[QuickCheckQuestion]:
        """Return the short readiness quiz shown on the readiness tools page"""
        return [
            QuickCheckQuestion(
                question="How confident are you about your academic goals?",
                options=["Very confident", "Somewhat confident", "Not sure", "Need guidance"],
                scores=QUICK_CHECK_POINTS
            ),
            QuickCheckQuestion(
                question="How prepared are you for standardized tests (SAT, TOEFL, etc.)?",
                options=["Fully prepared", "Mostly prepared", "Somewhat prepared", "Not prepared"],
                scores=QUICK_CHECK_POINTS
            ),
            QuickCheckQuestion(
                question="How strong is your English proficiency?",
                options=["Native/Fluent", "Advanced", "Intermediate", "Beginner"],
                scores=QUICK_CHECK_POINTS
            ),
            QuickCheckQuestion(
                question="How well do you understand university application processes?",
                options=["Very well", "Somewhat", "Little knowledge", "No knowledge"],
                scores=QUICK_CHECK_POINTS
            ),
            QuickCheckQuestion(
                question="How prepared are you financially for your education goals?",
                options=["Fully prepared", "Mostly prepared", "Partially prepared", "Not prepared"],
                scores=QUICK_CHECK_POINTS
            )
        ]

    @staticmethod
    def classify(percentage: float) -> QuickCheckLevel:
        if percentage >= 80:
            return QuickCheckLevel.HIGH
        if percentage >= 60:
            return QuickCheckLevel.MEDIUM
        return QuickCheckLevel.LOW

    @staticmethod
    def score(answers: List[int]) -> QuickCheckResult:
        questions = QuickCheckService.get_questions()

        if len(answers) > len(questions):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Expected at most {len(questions)} answers, got {len(answers)}"
            )

        total_score = 0
        for position, (question, option_index) in enumerate(zip(questions, answers)):
            if not 0 <= option_index < len(question.scores):
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Answer {position + 1} must be between 0 and {len(question.scores) - 1}"
                )
            total_score += question.scores[option_index]

        max_score = len(questions) * max(QUICK_CHECK_POINTS)
        percentage = total_score * 100 / max_score
        level = QuickCheckService.classify(percentage)

        return QuickCheckResult(
            total_score=total_score,
            max_score=max_score,
            percentage=percentage,
            level=level,
            message=QUICK_CHECK_MESSAGES[level]
        )
