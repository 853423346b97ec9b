"""FlagStore 抽象基底クラス"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import FlagRecord


class FlagStore(ABC):
    """フラグレコードの永続ストア抽象基底クラス。"""

    @abstractmethod
    async def get(self, key: str) -> FlagRecord | None:
        """キーに対応するレコードを取得する。存在しなければ None。"""
        ...

    @abstractmethod
    async def list_all(self) -> list[FlagRecord]:
        """全レコードを作成日時の新しい順で返す。"""
        ...

    @abstractmethod
    async def insert(self, record: FlagRecord) -> None:
        """レコードを挿入する。"""
        ...

    @abstractmethod
    async def save(self, record: FlagRecord) -> None:
        """既存レコードを置き換える。"""
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """レコードを削除する。削除できたら True。"""
        ...
