"""Report store: submission, admin status changes and threaded comments."""

import uuid
import logging
from typing import List, Optional

from app.constants.constants import (
    REPORT_CATEGORIES,
    NotificationType,
    ReportStatus,
)
from app.core.errors import ValidationFailed
from app.schemas.reportSchema import Comment, Report, ReportDraft, utc_now
from app.schemas.userSchema import Session
from app.services.CampusState import CampusState
from app.services.NotificationService import NotificationService
from app.utils.uploads.val_report_photos import validate_report_photos

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Nama Pelapor, Email/Username, Lokasi, dan Deskripsi tidak boleh kosong."


def new_report_id() -> str:
    """Creation-time-derived id with a random suffix so same-instant submissions differ."""
    return f"{utc_now():%Y%m%d%H%M%S%f}-{uuid.uuid4().hex[:8]}"


def comment_preview(text: str, limit: int = 30) -> str:
    """First ``limit`` characters of ``text``, with an ellipsis when it was cut."""
    return text[:limit] + ("..." if len(text) > limit else "")


class ReportService:
    """All report mutations, each paired with its notification side effect."""

    def __init__(
        self,
        state: CampusState,
        notifications: NotificationService,
        max_photos: int = 3,
        max_photo_size_mb: int = 2,
        preview_length: int = 30,
    ):
        self.state = state
        self.notifications = notifications
        self.max_photos = max_photos
        self.max_photo_size_mb = max_photo_size_mb
        self.preview_length = preview_length

    # -----------------------------
    # Queries
    # -----------------------------
    def get(self, report_id: str) -> Optional[Report]:
        for report in self.state.reports:
            if report.id == report_id:
                return report
        return None

    def list_all(self) -> List[Report]:
        return list(self.state.reports)

    def list_for_user(self, user_identifier: str) -> List[Report]:
        return [r for r in self.state.reports if r.user_identifier == user_identifier]

    def _index_of(self, report_id: str) -> Optional[int]:
        for index, report in enumerate(self.state.reports):
            if report.id == report_id:
                return index
        return None

    # -----------------------------
    # Mutations
    # -----------------------------
    async def submit(self, draft: ReportDraft) -> Report:
        """
        Create a Pending report from ``draft`` and notify its author.

        Raises:
            ValidationFailed: a required field is blank or a photo is rejected.
        """
        required = [draft.name, draft.user_identifier, draft.location, draft.description]
        if any(not value or not value.strip() for value in required):
            raise ValidationFailed(REQUIRED_FIELDS_MESSAGE)

        validate_report_photos(draft.photos, self.max_photos, self.max_photo_size_mb)

        specific_location = (draft.specific_location or "").strip() or None
        report = Report(
            id=new_report_id(),
            name=draft.name.strip(),
            user_identifier=draft.user_identifier.strip(),
            location=draft.location.strip(),
            specific_location=specific_location,
            category=draft.category.strip() or REPORT_CATEGORIES[-1],
            description=draft.description.strip(),
            status=ReportStatus.pending,
            submitted_at=utc_now(),
            urgency=draft.urgency,
            photos=list(draft.photos),
            comments=[],
        )
        self.state.reports.insert(0, report)
        await self.state.persist_reports()
        logger.info(f"📝 Report {report.id} submitted by {report.user_identifier}")

        await self.notifications.notify(
            report.user_identifier,
            f'Laporan Anda "{report.category} di {report.location}" berhasil dikirim '
            f'dan statusnya "{ReportStatus.pending.value}".',
            NotificationType.success,
        )
        return report

    async def set_status(self, report_id: str, new_status: ReportStatus) -> Optional[Report]:
        """Replace the status of a report. Unknown ids are a no-op returning None."""
        new_status = ReportStatus(new_status)
        index = self._index_of(report_id)
        if index is None:
            logger.info(f"Status change ignored, report {report_id} not found")
            return None

        updated = self.state.reports[index].model_copy(update={"status": new_status})
        self.state.reports[index] = updated
        await self.state.persist_reports()
        logger.info(f"🔄 Report {report_id} status set to {new_status.value}")

        await self.notifications.notify(
            updated.user_identifier,
            f'Status laporan "{updated.category}" Anda telah diperbarui menjadi: {new_status.value}',
            NotificationType.info,
        )
        return updated

    async def append_comment(self, report_id: str, author: Session, text: str) -> Optional[Comment]:
        """
        Append a comment to a report.

        Blank text or an unknown report id is a no-op returning None. Admin
        comments notify the report author with a short preview of the text;
        comments by anyone else notify nobody.
        """
        text = (text or "").strip()
        if not text:
            return None

        report = self.get(report_id)
        if report is None:
            logger.info(f"Comment ignored, report {report_id} not found")
            return None

        comment = Comment(
            id=str(uuid.uuid4()),
            user_name=author.name,
            user_role=author.role,
            text=text,
            timestamp=utc_now(),
        )
        report.comments.append(comment)
        await self.state.persist_reports()
        logger.info(f"💬 Comment added to report {report_id} by {author.user_identifier}")

        if author.is_admin:
            await self.notifications.notify(
                report.user_identifier,
                f'Admin menanggapi laporan "{report.category}": '
                f'"{comment_preview(text, self.preview_length)}"',
                NotificationType.info,
            )
        return comment
