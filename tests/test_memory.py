"""InMemoryFlagStore のユニットテスト"""

from datetime import datetime, timedelta, timezone

from flagstate import FlagRecord, InMemoryFlagStore


def make_record(key: str, created_at: datetime | None = None) -> FlagRecord:
    record = FlagRecord(key=key, global_enabled=True, description=f"Description for {key}")
    if created_at is not None:
        record.created_at = created_at
    return record


async def test_insert_and_get() -> None:
    """レコードの挿入と取得。"""
    store = InMemoryFlagStore()
    await store.insert(make_record("flag-a"))
    record = await store.get("flag-a")
    assert record is not None
    assert record.key == "flag-a"
    assert record.global_enabled is True


async def test_get_nonexistent_returns_none() -> None:
    """存在しないキーは None。"""
    assert await InMemoryFlagStore().get("missing") is None


async def test_returned_record_is_a_copy() -> None:
    """取得したレコードを変更してもストアに影響しないこと。"""
    store = InMemoryFlagStore()
    await store.insert(make_record("flag-a"))
    record = await store.get("flag-a")
    assert record is not None
    record.user_overrides["u1"] = True
    stored = await store.get("flag-a")
    assert stored is not None
    assert stored.user_overrides == {}


async def test_save_replaces_record() -> None:
    """save で置き換わること。"""
    store = InMemoryFlagStore()
    await store.insert(make_record("flag-a"))
    record = await store.get("flag-a")
    assert record is not None
    record.region_overrides["eu"] = False
    await store.save(record)
    stored = await store.get("flag-a")
    assert stored is not None
    assert stored.region_overrides == {"eu": False}


async def test_list_all_newest_first() -> None:
    """作成日時の新しい順で返ること。"""
    store = InMemoryFlagStore()
    now = datetime.now(timezone.utc)
    await store.insert(make_record("old", now - timedelta(hours=1)))
    await store.insert(make_record("new", now))
    assert [r.key for r in await store.list_all()] == ["new", "old"]


async def test_delete() -> None:
    """削除の成否。"""
    store = InMemoryFlagStore()
    await store.insert(make_record("flag-a"))
    assert await store.delete("flag-a") is True
    assert await store.delete("flag-a") is False
    assert await store.get("flag-a") is None


def test_record_translates_to_core_types() -> None:
    """FlagRecord から評価用の型へ変換できること。"""
    record = FlagRecord(
        key="flag-a",
        global_enabled=False,
        user_overrides={"u1": True},
        group_overrides={"beta": False},
    )
    flag = record.definition()
    assert flag.key == "flag-a"
    assert flag.global_enabled is False
    overrides = record.override_set()
    assert overrides.user_overrides == {"u1": True}
    assert overrides.group_overrides == {"beta": False}
    assert overrides.region_overrides == {}
    overrides.user_overrides["u2"] = False
    assert "u2" not in record.user_overrides
