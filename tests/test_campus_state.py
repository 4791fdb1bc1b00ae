import logging

from app.constants.constants import (
    NOTIFICATIONS_STORAGE_KEY,
    REPORTS_STORAGE_KEY,
    USERS_STORAGE_KEY,
    ReportStatus,
)
from app.core.database import DatabaseSessionManager
from app.core.storage import DatabaseKeyValueStore, MemoryKeyValueStore
from app.services.CampusStore import CampusStore
from helpers import make_draft


class FailingWrites(MemoryKeyValueStore):
    async def set(self, key, value):
        raise OSError("quota exceeded")


class FailingReads(MemoryKeyValueStore):
    async def get(self, key):
        raise OSError("storage unavailable")


async def test_missing_reports_fall_back_to_seed(settings_with_seed):
    kv = MemoryKeyValueStore()
    store = await CampusStore(kv, settings_with_seed).init()

    assert [r.id for r in store.state.reports] == ["1", "2", "3"]
    assert store.state.users == []
    assert store.state.notifications == []
    assert [r["id"] for r in await kv.get(REPORTS_STORAGE_KEY)] == ["1", "2", "3"]


async def test_corrupt_reports_fall_back_to_seed(settings_with_seed):
    kv = MemoryKeyValueStore({REPORTS_STORAGE_KEY: {"not": "a list"}})
    kv.put_raw(USERS_STORAGE_KEY, '[{"name": "broken"}]')

    store = await CampusStore(kv, settings_with_seed).init()

    assert len(store.state.reports) == 3
    assert store.state.users == []


async def test_read_failure_falls_back(settings_with_seed, caplog):
    with caplog.at_level(logging.ERROR):
        store = await CampusStore(FailingReads(), settings_with_seed).init()

    assert len(store.state.reports) == 3
    assert store.state.notifications == []
    assert "Failed to read" in caplog.text


async def test_state_survives_reload(kv, test_settings, admin_session):
    store = await CampusStore(kv, test_settings).init()
    report = await store.reports.submit(make_draft())
    await store.reports.set_status(report.id, ReportStatus.resolved)
    await store.reports.append_comment(report.id, admin_session, "Selesai diperbaiki")
    await store.auth.register("Budi", "budi", "rahasia1")

    reloaded = await CampusStore(kv, test_settings).init()

    restored = reloaded.reports.get(report.id)
    assert restored.status == ReportStatus.resolved
    assert restored.submitted_at == report.submitted_at
    assert [c.text for c in restored.comments] == ["Selesai diperbaiki"]
    assert reloaded.auth.login("BUDI", "rahasia1") is not None
    assert len(reloaded.notifications.for_recipient("u1")) == 3


async def test_dates_are_stored_as_iso_strings(store, kv):
    await store.reports.submit(make_draft())

    saved_report = (await kv.get(REPORTS_STORAGE_KEY))[0]
    saved_notification = (await kv.get(NOTIFICATIONS_STORAGE_KEY))[0]
    assert isinstance(saved_report["submitted_at"], str)
    assert saved_report["submitted_at"][:4].isdigit()
    assert isinstance(saved_notification["timestamp"], str)


async def test_write_failures_are_logged_and_ignored(test_settings, caplog):
    store = await CampusStore(FailingWrites(), test_settings).init()

    with caplog.at_level(logging.ERROR):
        report = await store.reports.submit(make_draft())

    assert store.reports.get(report.id) is not None
    assert store.notifications.unread_count("u1") == 1
    assert "Failed to save" in caplog.text


async def test_state_survives_reload_from_sqlite(tmp_path, test_settings):
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path}/campus.db")
    await manager.init()
    try:
        kv = DatabaseKeyValueStore(manager)
        store = await CampusStore(kv, test_settings).init()
        report = await store.reports.submit(make_draft())
        await store.reports.set_status(report.id, ReportStatus.resolved)

        reloaded = await CampusStore(DatabaseKeyValueStore(manager), test_settings).init()

        restored = reloaded.reports.get(report.id)
        assert restored.status == ReportStatus.resolved
        assert restored.submitted_at == report.submitted_at
        assert isinstance((await kv.get(REPORTS_STORAGE_KEY))[0]["submitted_at"], str)
        assert len(reloaded.notifications.for_recipient("u1")) == 2
    finally:
        await manager.close()
