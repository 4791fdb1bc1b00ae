"""Constants for user roles, report statuses, urgencies, notification types and storage keys."""

from enum import Enum


class UserRole(str, Enum):
    """Enumeration of campus roles."""

    mahasiswa = "Mahasiswa"  # Student
    dosen = "Dosen"  # Faculty
    pegawai = "Pegawai"  # Staff
    admin = "Admin"


class ReportStatus(str, Enum):
    """Enumeration of report statuses."""

    pending = "Pending"
    in_progress = "In Progress"
    resolved = "Resolved"


class Urgency(str, Enum):
    """Enumeration of author-assigned urgency levels."""

    rendah = "Rendah"  # Low
    sedang = "Sedang"  # Medium
    tinggi = "Tinggi"  # High


class NotificationType(str, Enum):
    """Enumeration of notification kinds."""

    info = "info"
    success = "success"
    warning = "warning"


REPORT_CATEGORIES = [
    "Kebersihan",
    "Kerusakan AC",
    "Fasilitas Belajar",
    "Penerangan",
    "Kerusakan Toilet",
    "Keamanan",
    "Lainnya",
]

REPORT_URGENCIES = [Urgency.rendah, Urgency.sedang, Urgency.tinggi]

# Key-value storage keys
REPORTS_STORAGE_KEY = "campusReports-shared"
USERS_STORAGE_KEY = "campusUsers"
NOTIFICATIONS_STORAGE_KEY = "campusNotifications"

# Filter value meaning "no constraint"
FILTER_ALL = "All"

MIN_PASSWORD_LENGTH = 6
