"""Facility report router."""

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.constants.constants import REPORT_CATEGORIES, REPORT_URGENCIES, ReportStatus
from app.core.security import get_campus_store, get_current_session, require_admin
from app.schemas.reportSchema import (
    AddCommentRequest,
    Comment,
    Report,
    ReportDraft,
    ReportStats,
    SubmitReportRequest,
    UpdateStatusRequest,
)
from app.schemas.userSchema import Session
from app.services.CampusStore import CampusStore
from app.utils.report_filters import count_by_status, filter_reports

router = APIRouter(
    prefix="/reports",
    tags=["reports"]
)

REPORT_NOT_FOUND = "Report not found"


def get_report_or_404(store: CampusStore, report_id: str) -> Report:
    report = store.reports.get(report_id)
    if report is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=REPORT_NOT_FOUND)
    return report


def ensure_can_view(session: Session, report: Report):
    if not session.is_admin and report.user_identifier != session.user_identifier:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only access your own reports"
        )


@router.get("/categories")
async def get_categories():
    """Known report categories and urgency levels for the submission form."""
    return {
        "categories": REPORT_CATEGORIES,
        "urgencies": [u.value for u in REPORT_URGENCIES],
        "statuses": [s.value for s in ReportStatus],
    }


@router.get("/stats", response_model=ReportStats)
async def get_report_stats(
    session: Session = Depends(require_admin),
    store: CampusStore = Depends(get_campus_store)
):
    """Report counters for the admin dashboard."""
    return count_by_status(store.reports.list_all())


@router.get("")
async def list_reports(
    status_filter: Optional[str] = Query(None, alias="status"),
    category: Optional[str] = None,
    q: Optional[str] = None,
    session: Session = Depends(get_current_session),
    store: CampusStore = Depends(get_campus_store)
):
    """
    List reports, newest first.
    Admins see every report and may filter by status, category and free text.
    Everyone else sees their own reports, searchable by free text.
    """
    if session.is_admin:
        try:
            reports = filter_reports(store.reports.list_all(), status=status_filter, category=category, query=q)
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid status: {status_filter}"
            )
    else:
        reports = filter_reports(store.reports.list_for_user(session.user_identifier), query=q)

    return {"reports": reports, "total": len(reports)}


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Report)
async def submit_report(
    payload: SubmitReportRequest,
    session: Session = Depends(get_current_session),
    store: CampusStore = Depends(get_campus_store)
):
    """Submit a new report as the logged-in user."""
    draft = ReportDraft(
        name=payload.name if payload.name is not None else session.name,
        user_identifier=session.user_identifier,
        location=payload.location,
        specific_location=payload.specific_location,
        category=payload.category,
        description=payload.description,
        urgency=payload.urgency,
        photos=payload.photos,
    )
    return await store.reports.submit(draft)


@router.get("/{report_id}", response_model=Report)
async def get_report(
    report_id: str,
    session: Session = Depends(get_current_session),
    store: CampusStore = Depends(get_campus_store)
):
    report = get_report_or_404(store, report_id)
    ensure_can_view(session, report)
    return report


@router.patch("/{report_id}/status", response_model=Report)
async def update_report_status(
    report_id: str,
    payload: UpdateStatusRequest,
    session: Session = Depends(require_admin),
    store: CampusStore = Depends(get_campus_store)
):
    """Change the status of a report. Any status may follow any other."""
    report = await store.reports.set_status(report_id, payload.status)
    if report is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=REPORT_NOT_FOUND)
    return report


@router.post("/{report_id}/comments", status_code=status.HTTP_201_CREATED, response_model=Comment)
async def add_comment(
    report_id: str,
    payload: AddCommentRequest,
    session: Session = Depends(get_current_session),
    store: CampusStore = Depends(get_campus_store)
):
    """Reply on a report thread. Admins may reply anywhere, authors on their own reports."""
    report = get_report_or_404(store, report_id)
    ensure_can_view(session, report)

    if not payload.text.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Comment text cannot be empty")

    comment = await store.reports.append_comment(report_id, session, payload.text)
    if comment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=REPORT_NOT_FOUND)
    return comment
