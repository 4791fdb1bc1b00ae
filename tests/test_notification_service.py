from datetime import timedelta

from app.constants.constants import NotificationType


async def test_notify_prepends_unread_notification(store):
    first = await store.notifications.notify("u1", "pertama")
    second = await store.notifications.notify("u2", "kedua", NotificationType.warning)

    assert store.state.notifications == [second, first]
    assert second.is_read is False
    assert second.type == NotificationType.warning


async def test_unread_count_is_per_recipient(store):
    await store.notifications.notify("u1", "a")
    await store.notifications.notify("u1", "b")
    await store.notifications.notify("u2", "c")

    assert store.notifications.unread_count("u1") == 2
    assert store.notifications.unread_count("u2") == 1
    assert store.notifications.unread_count("nobody") == 0


async def test_mark_all_read_only_touches_recipient(store):
    await store.notifications.notify("u1", "a")
    await store.notifications.notify("u2", "b")

    marked = await store.notifications.mark_all_read("u1")

    assert marked == 1
    assert store.notifications.unread_count("u1") == 0
    assert store.notifications.unread_count("u2") == 1


async def test_mark_all_read_is_idempotent(store):
    await store.notifications.notify("u1", "a")
    await store.notifications.notify("u1", "b")

    await store.notifications.mark_all_read("u1")
    once = [n.model_copy() for n in store.state.notifications]
    marked_again = await store.notifications.mark_all_read("u1")

    assert marked_again == 0
    assert store.state.notifications == once


async def test_for_recipient_sorts_newest_first(store):
    older = await store.notifications.notify("u1", "lama")
    newer = await store.notifications.notify("u1", "baru")
    older.timestamp = newer.timestamp + timedelta(seconds=5)

    result = store.notifications.for_recipient("u1")

    assert [n.message for n in result] == ["lama", "baru"]


async def test_for_recipient_unread_only_and_limit(store):
    for i in range(3):
        await store.notifications.notify("u1", f"n{i}")
    store.state.notifications[0].is_read = True

    assert len(store.notifications.for_recipient("u1", unread_only=True)) == 2
    assert len(store.notifications.for_recipient("u1", limit=1)) == 1
