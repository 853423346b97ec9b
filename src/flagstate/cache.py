"""FlagCache 実装"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from .models import CacheEntry, FlagDefinition, OverrideSet

DEFAULT_TTL_SECONDS = 30.0


class FlagCache:
    """フラグ定義とオーバーライドの短命インメモリキャッシュ。

    スレッドセーフ。TTL は生成時に固定され、キー単位では変更できない。
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: str) -> CacheEntry | None:
        """キーに対応するエントリを取得する。存在しないか期限切れなら None。"""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry.cached_at > self._ttl:
                del self._entries[key]
                return None
            return entry

    def set(self, key: str, flag: FlagDefinition, overrides: OverrideSet) -> None:
        """エントリを丸ごと置き換える。cached_at は現在時刻。"""
        entry = CacheEntry(flag=flag, overrides=overrides, cached_at=self._clock())
        with self._lock:
            self._entries[key] = entry

    def invalidate(self, key: str) -> None:
        """キーのエントリを削除する。存在しなければ何もしない。"""
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        """全エントリを削除する。"""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
