import pytest

from app.constants.constants import ReportStatus
from app.constants.seed import initial_reports
from app.schemas.reportSchema import Report
from app.utils.report_filters import count_by_status, filter_reports, matches_query, searchable_fields


@pytest.fixture
def reports():
    return initial_reports()


@pytest.mark.parametrize(
    "query,expected_ids",
    [
        ("", ["1", "2", "3"]),
        (" ", ["1", "2", "3"]),
        ("   ", []),
        ("budi", ["1"]),
        ("CITRALESTARI", ["2"]),
        ("kantin", ["2"]),
        ("t-201", ["3"]),
        ("proyektor", ["3"]),
        ("kerusakan ac", ["1"]),
        ("tidak", ["1", "2", "3"]),
        ("tidak ada di mana pun", []),
    ],
)
def test_query_matches_any_searchable_field(reports, query, expected_ids):
    assert [r.id for r in filter_reports(reports, query=query)] == expected_ids


def test_search_agrees_with_field_containment(reports):
    for query in ["a", "lantai", "EMAIL", "gedung", "zzz"]:
        result = {r.id for r in filter_reports(reports, query=query)}
        expected = {
            r.id for r in reports
            if any(query.lower() in field.lower() for field in searchable_fields(r))
        }
        assert result == expected


def test_filtering_is_pure_and_repeatable(reports):
    snapshot = [r.model_dump() for r in reports]

    first = filter_reports(reports, status="Pending", category="All", query="ac")
    second = filter_reports(reports, status="Pending", category="All", query="ac")

    assert first == second
    assert [r.model_dump() for r in reports] == snapshot


def test_status_and_category_filters(reports):
    assert [r.id for r in filter_reports(reports, status=ReportStatus.resolved.value)] == ["3"]
    assert [r.id for r in filter_reports(reports, status="All", category="Kebersihan")] == ["2"]
    assert filter_reports(reports, status="In Progress", category="Kerusakan AC") == []


def test_invalid_status_raises(reports):
    with pytest.raises(ValueError):
        filter_reports(reports, status="Closed")


def test_missing_specific_location_is_searchable():
    report = Report(
        id="x", name="A", user_identifier="a", location="Aula",
        category="Lainnya", description="Kursi patah",
    )
    assert matches_query(report, "aula")
    assert not matches_query(report, "none")


def test_count_by_status(reports):
    stats = count_by_status(reports)

    assert (stats.total, stats.pending, stats.in_progress, stats.resolved) == (3, 1, 1, 1)


def test_whitespace_query_is_matched_literally():
    report = Report(
        id="x", name="A", user_identifier="a", location="Aula",
        category="Lainnya", description="Kursi",
    )

    assert filter_reports([report], query=" ") == []
    assert filter_reports([report], query="") == [report]
