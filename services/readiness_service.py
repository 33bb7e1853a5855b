import logging
from typing import Callable, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.readiness import ReadinessAssessment, ReadinessCategory, ReadinessLevel
from schemas.readiness import AssessmentResult, MAX_OPTION_POINTS, ReadinessQuestion

logger = logging.getLogger(__name__)

# Lower bound of each tier, checked from the top down
LEVEL_THRESHOLDS = [
    (80, ReadinessLevel.EXCELLENT),
    (60, ReadinessLevel.GOOD),
    (40, ReadinessLevel.FAIR),
]

TIER_RECOMMENDATIONS = {
    ReadinessLevel.EXCELLENT: [
        "You are well-prepared for competitive scholarship applications!",
        "Focus on applying to top-tier universities and prestigious scholarships.",
        "Consider starting your application process immediately.",
    ],
    ReadinessLevel.GOOD: [
        "You have a solid foundation but can improve in some areas.",
        "Focus on strengthening your weakest areas before applying.",
        "Consider taking English proficiency tests if needed.",
    ],
    ReadinessLevel.FAIR: [
        "You need significant preparation before applying for scholarships.",
        "Focus on improving your academic performance and gaining experience.",
        "Consider taking preparatory courses or gaining more research experience.",
    ],
    ReadinessLevel.NEEDS_WORK: [
        "You should spend more time preparing before applying for international programs.",
        "Focus on fundamental academic improvement and skill building.",
        "Consider seeking mentorship and guidance for your preparation journey.",
    ],
}

# Academic is scored but has no advisory of its own
CATEGORY_ADVISORIES = [
    (ReadinessCategory.LANGUAGE, 4, "Take an English proficiency course or practice more English daily."),
    (ReadinessCategory.EXPERIENCE, 3, "Seek research opportunities or internships in your field."),
    (ReadinessCategory.LEADERSHIP, 3, "Join student organizations or volunteer for leadership roles."),
    (ReadinessCategory.FINANCIAL, 3, "Research scholarship opportunities and start saving for application costs."),
]

READINESS_QUESTIONS = [
    ReadinessQuestion(
        id="academic_performance",
        prompt="How would you rate your current academic performance?",
        category=ReadinessCategory.ACADEMIC,
        options=[
            {"value": "excellent", "label": "Excellent (GPA 3.7+)", "points": 5},
            {"value": "good", "label": "Good (GPA 3.0-3.6)", "points": 4},
            {"value": "average", "label": "Average (GPA 2.5-2.9)", "points": 3},
            {"value": "below_average", "label": "Below Average (GPA 2.0-2.4)", "points": 2},
            {"value": "poor", "label": "Needs Improvement (GPA < 2.0)", "points": 1},
        ],
    ),
    ReadinessQuestion(
        id="english_proficiency",
        prompt="What is your current English proficiency level?",
        category=ReadinessCategory.LANGUAGE,
        options=[
            {"value": "native", "label": "Native/Near-native speaker", "points": 5},
            {"value": "advanced", "label": "Advanced (Can handle complex topics)", "points": 4},
            {"value": "intermediate", "label": "Intermediate (Can handle daily conversations)", "points": 3},
            {"value": "basic", "label": "Basic (Can handle simple conversations)", "points": 2},
            {"value": "beginner", "label": "Beginner (Limited vocabulary)", "points": 1},
        ],
    ),
    ReadinessQuestion(
        id="research_experience",
        prompt="How much research or project experience do you have?",
        category=ReadinessCategory.EXPERIENCE,
        options=[
            {"value": "extensive", "label": "Extensive (Multiple published papers/projects)", "points": 5},
            {"value": "moderate", "label": "Moderate (1-2 significant projects)", "points": 4},
            {"value": "some", "label": "Some (Course projects and assignments)", "points": 3},
            {"value": "limited", "label": "Limited (Basic coursework only)", "points": 2},
            {"value": "none", "label": "None (No research experience)", "points": 1},
        ],
    ),
    ReadinessQuestion(
        id="leadership_experience",
        prompt="How would you describe your leadership and extracurricular involvement?",
        category=ReadinessCategory.LEADERSHIP,
        options=[
            {"value": "extensive", "label": "Extensive (President/leader of multiple organizations)", "points": 5},
            {"value": "moderate", "label": "Moderate (Active member with some leadership roles)", "points": 4},
            {"value": "some", "label": "Some (Participated in clubs/activities)", "points": 3},
            {"value": "limited", "label": "Limited (Minimal involvement)", "points": 2},
            {"value": "none", "label": "None (No extracurricular activities)", "points": 1},
        ],
    ),
    ReadinessQuestion(
        id="financial_preparation",
        prompt="How prepared are you financially for international education?",
        category=ReadinessCategory.FINANCIAL,
        options=[
            {"value": "fully_funded", "label": "Fully funded (Scholarship/family support)", "points": 5},
            {"value": "mostly_funded", "label": "Mostly funded (70-90% covered)", "points": 4},
            {"value": "partially_funded", "label": "Partially funded (40-70% covered)", "points": 3},
            {"value": "limited_funding", "label": "Limited funding (10-40% covered)", "points": 2},
            {"value": "no_funding", "label": "No funding secured yet", "points": 1},
        ],
    ),
]


class ReadinessService:

    @staticmethod
    def get_questions() -> List[ReadinessQuestion]:
        """Return the readiness question bank"""
        return READINESS_QUESTIONS

    @staticmethod
    def classify(percentage: float) -> ReadinessLevel:
        for threshold, level in LEVEL_THRESHOLDS:
            if percentage >= threshold:
                return level
        return ReadinessLevel.NEEDS_WORK

    @staticmethod
    def build_recommendations(level: ReadinessLevel, category_scores: Dict[ReadinessCategory, int]) -> List[str]:
        recommendations = list(TIER_RECOMMENDATIONS[level])

        for category, threshold, advice in CATEGORY_ADVISORIES:
            # Categories with no answered question stay silent
            subtotal = category_scores.get(category)
            if subtotal is not None and subtotal < threshold:
                recommendations.append(advice)

        return recommendations

    @staticmethod
    def score(questions: List[ReadinessQuestion], answers: Dict[str, str]) -> AssessmentResult:
        """Score an answer map against a question set.

        Unanswered questions, and answers that match none of a question's
        options, contribute nothing. The percentage is always taken against
        the full question set, so a partial answer map yields a running score.
        """
        total_score = 0
        category_scores: Dict[ReadinessCategory, int] = {}

        for question in questions:
            answer = answers.get(question.id)
            if answer is None:
                continue
            option = next((opt for opt in question.options if opt.value == answer), None)
            if option is None:
                continue
            total_score += option.points
            category_scores[question.category] = category_scores.get(question.category, 0) + option.points

        max_score = len(questions) * MAX_OPTION_POINTS
        percentage = total_score * 100 / max_score if max_score else 0.0
        level = ReadinessService.classify(percentage)

        return AssessmentResult(
            total_score=total_score,
            max_score=max_score,
            percentage=percentage,
            level=level,
            category_scores={
                category: category_scores[category]
                for category in ReadinessCategory
                if category in category_scores
            },
            recommendations=ReadinessService.build_recommendations(level, category_scores),
        )

    @staticmethod
    def record_result(db: Session, user_id: str, answers: Dict[str, str], result: AssessmentResult) -> ReadinessAssessment:
        db_assessment = ReadinessAssessment(
            user_id=user_id,
            assessment_data=dict(answers),
            score=result.total_score,
            percentage=result.percentage,
            level=result.level.value,
            recommendations=list(result.recommendations)
        )

        db.add(db_assessment)
        db.commit()
        db.refresh(db_assessment)

        logger.info("Stored readiness assessment %s for user %s (%s)", db_assessment.id, user_id, result.level.value)
        return db_assessment

    @staticmethod
    def persist_in_background(
        session_factory: Callable[[], Session],
        user_id: str,
        answers: Dict[str, str],
        result: AssessmentResult
    ) -> None:
        """Store a completed result without letting storage errors reach the caller"""
        db = session_factory()
        try:
            ReadinessService.record_result(db, user_id, answers, result)
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Failed to store readiness assessment for user %s", user_id)
        finally:
            db.close()

    @staticmethod
    def latest_result(db: Session, user_id: str) -> Optional[ReadinessAssessment]:
        return db.query(ReadinessAssessment).filter(
            ReadinessAssessment.user_id == user_id
        ).order_by(ReadinessAssessment.completed_at.desc(), ReadinessAssessment.id.desc()).first()
