"""Seed reports used when the persisted reports collection is missing or unreadable."""

from datetime import timedelta
from typing import List

from app.constants.constants import ReportStatus, Urgency, UserRole
from app.schemas.reportSchema import Comment, Report, utc_now


def initial_reports() -> List[Report]:
    """Build a fresh copy of the seed data set, newest first by list position."""
    now = utc_now()
    return [
        Report(
            id="1",
            name="Budi Hartono",
            user_identifier="budi.hartono@email.com",
            location="Perpustakaan Pusat",
            specific_location="Ruang Baca Lantai 2, dekat rak buku fiksi",
            category="Kerusakan AC",
            description="AC di lantai 2 tidak dingin sama sekali, sangat panas dan tidak nyaman untuk belajar.",
            status=ReportStatus.pending,
            submitted_at=now - timedelta(days=2),
            urgency=Urgency.tinggi,
            comments=[
                Comment(
                    id="c1",
                    user_name="Admin Fasilkom",
                    user_role=UserRole.admin,
                    text="Terima kasih laporannya. Teknisi akan segera mengecek ke lokasi siang ini.",
                    timestamp=now - timedelta(days=1),
                )
            ],
        ),
        Report(
            id="2",
            name="Citra Lestari",
            user_identifier="citralestari",
            location="Kantin Pusat (Food Court)",
            category="Kebersihan",
            description="Banyak sampah berserakan di bawah meja dan tidak ada petugas yang membersihkan.",
            status=ReportStatus.in_progress,
            submitted_at=now - timedelta(days=1),
            urgency=Urgency.sedang,
        ),
        Report(
            id="3",
            name="Dewi Anggraini",
            user_identifier="d.anggraini@email.com",
            location="Fakultas Teknik - Gedung A",
            specific_location="Ruang Kelas T-201",
            category="Fasilitas Belajar",
            description="Proyektor di ruang kelas T-201 mati dan tidak bisa digunakan untuk presentasi.",
            status=ReportStatus.resolved,
            submitted_at=now - timedelta(days=5),
            urgency=Urgency.rendah,
        ),
    ]
