from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class LanguageCount(BaseModel):
    name: str
    count: int


class ActivityItem(BaseModel):
    id: int
    action: str = "Code Review"
    status: str = "Completed"
    language: str
    rating: int
    created_at: datetime
    time: str
    duration: int
    code_preview: str


class DashboardStats(BaseModel):
    total_reviews: int = 0
    this_week_reviews: int = 0
    last_week_reviews: int = 0
    weekly_improvement_percent: int = 0
    average_rating: float = 0.0
    average_rating_display: float = 0.0
    current_week_rating: float = 0.0
    last_week_rating: float = 0.0
    quality_score_percent: int = 0
    rating_improvement_percent: int = 0
    languages_count: int = 0
    language_distribution: List[LanguageCount] = []
    recent_activity: List[ActivityItem] = []


class LanguageBreakdown(BaseModel):
    language: str
    count: int
    average_rating: float


class ProfileStats(BaseModel):
    total_reviews: int
    favorite_language: str
    languages_used: int
    language_breakdown: List[LanguageBreakdown]


class ProfileOut(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    created_at: Optional[datetime] = None
    stats: ProfileStats
