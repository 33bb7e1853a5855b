from sqlalchemy import Column, Integer, String, Float, JSON, DateTime
from sqlalchemy.sql import func
from database import Base
import enum

class ReadinessCategory(enum.Enum):
    ACADEMIC = "Academic"
    LANGUAGE = "Language"
    EXPERIENCE = "Experience"
    LEADERSHIP = "Leadership"
    FINANCIAL = "Financial"

class ReadinessLevel(enum.Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    NEEDS_WORK = "Needs Work"

class QuickCheckLevel(enum.Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

class ReadinessAssessment(Base):
    __tablename__ = "readiness_assessments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    assessment_data = Column(JSON, nullable=False)  # question id -> option value
    score = Column(Integer, nullable=False)
    percentage = Column(Float, nullable=False)
    level = Column(String(20), nullable=False)
    recommendations = Column(JSON, nullable=False)
    completed_at = Column(DateTime(timezone=True), server_default=func.now())
