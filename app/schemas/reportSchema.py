from datetime import datetime, timezone
from typing import List, Optional
from pydantic import BaseModel, Field

from app.constants.constants import REPORT_CATEGORIES, ReportStatus, Urgency, UserRole


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Comment(BaseModel):
    """A threaded reply attached to exactly one report."""
    id: str
    user_name: str
    user_role: UserRole
    text: str
    timestamp: datetime = Field(default_factory=utc_now)


class Report(BaseModel):
    """A facility-issue submission and its lifecycle state."""
    id: str
    name: str
    user_identifier: str
    location: str
    specific_location: Optional[str] = None
    category: str
    description: str
    status: ReportStatus = ReportStatus.pending
    submitted_at: datetime = Field(default_factory=utc_now)
    urgency: Urgency = Urgency.rendah
    photos: List[str] = Field(default_factory=list)
    comments: List[Comment] = Field(default_factory=list)


class ReportDraft(BaseModel):
    """Fields supplied by the author when submitting a report."""
    name: str = ""
    user_identifier: str = ""
    location: str = ""
    specific_location: Optional[str] = None
    category: str = REPORT_CATEGORIES[0]
    description: str = ""
    urgency: Urgency = Urgency.rendah
    photos: List[str] = Field(default_factory=list)


class SubmitReportRequest(BaseModel):
    name: Optional[str] = None
    location: str = ""
    specific_location: Optional[str] = None
    category: str = REPORT_CATEGORIES[0]
    description: str = ""
    urgency: Urgency = Urgency.rendah
    photos: List[str] = Field(default_factory=list)


class UpdateStatusRequest(BaseModel):
    """Schema for an admin status change."""
    status: ReportStatus


class AddCommentRequest(BaseModel):
    text: str


class ReportStats(BaseModel):
    total: int = 0
    pending: int = 0
    in_progress: int = 0
    resolved: int = 0
