from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class ReviewRequest(BaseModel):
    code: str = ""
    language: Optional[str] = None


class ReviewResponse(BaseModel):
    success: bool = True
    review: str
    rating: int
    tags: List[str]
    suggestion_id: int
    timestamp: datetime


class ReviewRecordOut(BaseModel):
    id: int
    code: str
    language: str
    review_text: str
    rating: int
    tags: List[str]
    review_duration_seconds: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class HistoryPage(BaseModel):
    items: List[ReviewRecordOut]
    page: int
    page_size: int
    total: Optional[int] = None
    total_pages: Optional[int] = None
