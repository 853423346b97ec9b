"""InMemoryFlagStore 実装"""

from __future__ import annotations

import copy

from .models import FlagRecord
from .store import FlagStore


class InMemoryFlagStore(FlagStore):
    """テスト用インメモリフラグストア。

    呼び出し側の変更が保存済みレコードに漏れないよう、入出力ともにコピーする。
    """

    def __init__(self) -> None:
        self._records: dict[str, FlagRecord] = {}

    async def get(self, key: str) -> FlagRecord | None:
        record = self._records.get(key)
        return copy.deepcopy(record) if record is not None else None

    async def list_all(self) -> list[FlagRecord]:
        records = sorted(self._records.values(), key=lambda r: r.created_at, reverse=True)
        return [copy.deepcopy(r) for r in records]

    async def insert(self, record: FlagRecord) -> None:
        self._records[record.key] = copy.deepcopy(record)

    async def save(self, record: FlagRecord) -> None:
        self._records[record.key] = copy.deepcopy(record)

    async def delete(self, key: str) -> bool:
        if key in self._records:
            del self._records[key]
            return True
        return False
