"""Pure view derivations over a list of reports."""

from typing import Iterable, List, Optional

from app.constants.constants import FILTER_ALL, ReportStatus
from app.schemas.reportSchema import Report, ReportStats


def searchable_fields(report: Report) -> List[str]:
    return [
        report.name,
        report.user_identifier,
        report.location,
        report.specific_location or "",
        report.description,
        report.category,
    ]


def matches_query(report: Report, query: Optional[str]) -> bool:
    """True when any searchable field contains ``query``, ignoring case. An empty query matches."""
    if not query:
        return True
    needle = query.lower()
    return any(needle in field.lower() for field in searchable_fields(report))


def filter_reports(
    reports: Iterable[Report],
    status: Optional[str] = None,
    category: Optional[str] = None,
    query: Optional[str] = None,
) -> List[Report]:
    """Reports matching every given constraint, in their original order."""
    status_value = ReportStatus(status) if status and status != FILTER_ALL else None
    category_value = category if category and category != FILTER_ALL else None

    return [
        report for report in reports
        if (status_value is None or report.status == status_value)
        and (category_value is None or report.category == category_value)
        and matches_query(report, query)
    ]


def count_by_status(reports: Iterable[Report]) -> ReportStats:
    stats = ReportStats()
    for report in reports:
        stats.total += 1
        if report.status == ReportStatus.pending:
            stats.pending += 1
        elif report.status == ReportStatus.in_progress:
            stats.in_progress += 1
        elif report.status == ReportStatus.resolved:
            stats.resolved += 1
    return stats
