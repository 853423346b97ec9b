"""FeatureFlagService — ストア・キャッシュ・評価器のオーケストレーション"""

from __future__ import annotations

import re

import structlog

from .cache import FlagCache
from .config import FlagStateConfig
from .evaluator import evaluate
from .exceptions import FeatureFlagError, FeatureFlagErrorCodes
from .logger import configure_logging
from .metrics import (
    flag_cache_hits_total,
    flag_cache_invalidations_total,
    flag_cache_misses_total,
    flag_evaluations_total,
)
from .models import EvaluationContext, EvaluationResult, FlagRecord
from .store import FlagStore

_FLAG_KEY_RE = re.compile(r"^[a-z0-9][a-z0-9-]*[a-z0-9]$")

# レイヤー名 -> (FlagRecord の属性名, ログ用の識別子フィールド名)
_OVERRIDE_LAYERS: dict[str, tuple[str, str]] = {
    "user": ("user_overrides", "user_id"),
    "group": ("group_overrides", "group_name"),
    "region": ("region_overrides", "region"),
}

logger = structlog.stdlib.get_logger(__name__)


class FeatureFlagService:
    """フラグの CRUD・オーバーライド管理・評価を行うサービス。

    読み取り: キャッシュヒット時はそのまま評価し、ミス時はストアから取得して
    キャッシュに格納してから評価する。
    書き込み: ストア更新に成功したら、戻る前に必ずキャッシュを無効化する。
    """

    def __init__(self, store: FlagStore, cache: FlagCache | None = None) -> None:
        self._store = store
        # 空の FlagCache は len() == 0 で偽になるため、None と明示的に比較する。
        self._cache = cache if cache is not None else FlagCache()

    @classmethod
    def from_config(cls, config: FlagStateConfig, store: FlagStore) -> FeatureFlagService:
        """設定からサービスを構成する。

        キャッシュ TTL に config.cache を、ログレベルと出力形式に config.log を使う。
        """
        configure_logging(config.log)
        return cls(store, FlagCache(ttl_seconds=config.cache.ttl_seconds))

    @property
    def cache(self) -> FlagCache:
        return self._cache

    # --- フラグ管理 ---

    async def create_flag(
        self, key: str, global_enabled: bool, description: str = ""
    ) -> FlagRecord:
        """フラグを作成する。

        Raises:
            FeatureFlagError: キーが不正 (INVALID_FLAG_KEY) または既存 (FLAG_ALREADY_EXISTS)
        """
        if not _FLAG_KEY_RE.match(key):
            raise FeatureFlagError(
                FeatureFlagErrorCodes.INVALID_FLAG_KEY,
                f'key must be lowercase alphanumeric with hyphens, e.g. "dark-mode": {key}',
            )
        if await self._store.get(key) is not None:
            raise FeatureFlagError(
                FeatureFlagErrorCodes.FLAG_ALREADY_EXISTS,
                f'Feature flag "{key}" already exists',
            )
        record = FlagRecord(key=key, global_enabled=global_enabled, description=description)
        await self._store.insert(record)
        logger.info("flag created", flag_key=key, global_enabled=global_enabled)
        return record

    async def list_flags(self) -> list[FlagRecord]:
        return await self._store.list_all()

    async def get_flag(self, key: str) -> FlagRecord:
        return await self._require(key)

    async def update_flag(
        self,
        key: str,
        *,
        global_enabled: bool | None = None,
        description: str | None = None,
    ) -> FlagRecord:
        """グローバル状態や説明を更新する。None のフィールドは変更しない。"""
        record = await self._require(key)
        if global_enabled is not None:
            record.global_enabled = global_enabled
        if description is not None:
            record.description = description
        record.touch()
        await self._store.save(record)
        self._invalidate(key)
        logger.info("flag updated", flag_key=key, global_enabled=record.global_enabled)
        return record

    async def delete_flag(self, key: str) -> FlagRecord:
        record = await self._require(key)
        await self._store.delete(key)
        self._invalidate(key)
        logger.info("flag deleted", flag_key=key)
        return record

    # --- オーバーライド管理 ---

    async def set_user_override(self, key: str, user_id: str, enabled: bool) -> FlagRecord:
        return await self._set_override(key, "user", user_id, enabled)

    async def remove_user_override(self, key: str, user_id: str) -> FlagRecord:
        return await self._remove_override(key, "user", user_id)

    async def set_group_override(self, key: str, group_name: str, enabled: bool) -> FlagRecord:
        return await self._set_override(key, "group", group_name, enabled)

    async def remove_group_override(self, key: str, group_name: str) -> FlagRecord:
        return await self._remove_override(key, "group", group_name)

    async def set_region_override(self, key: str, region: str, enabled: bool) -> FlagRecord:
        return await self._set_override(key, "region", region, enabled)

    async def remove_region_override(self, key: str, region: str) -> FlagRecord:
        return await self._remove_override(key, "region", region)

    # --- 評価 ---

    async def evaluate(self, key: str, context: EvaluationContext) -> EvaluationResult:
        """フラグを評価する。

        Raises:
            FeatureFlagError: フラグが存在しない場合 (FLAG_NOT_FOUND)
        """
        cached = self._cache.get(key)
        if cached is not None:
            flag_cache_hits_total.add(1)
            logger.debug("flag cache hit", flag_key=key)
            result = evaluate(cached.flag, cached.overrides, context)
        else:
            flag_cache_misses_total.add(1)
            logger.debug("flag cache miss", flag_key=key)
            record = await self._require(key)
            flag, overrides = record.definition(), record.override_set()
            self._cache.set(key, flag, overrides)
            result = evaluate(flag, overrides, context)
        flag_evaluations_total.add(1, {"reason": result.reason.value})
        return result

    async def is_enabled(self, key: str, context: EvaluationContext) -> bool:
        result = await self.evaluate(key, context)
        return result.enabled

    # --- ヘルパー ---

    async def _require(self, key: str) -> FlagRecord:
        record = await self._store.get(key)
        if record is None:
            logger.warning("flag not found", flag_key=key)
            raise FeatureFlagError(
                FeatureFlagErrorCodes.FLAG_NOT_FOUND,
                f'Feature flag "{key}" not found',
            )
        return record

    async def _set_override(
        self, key: str, layer: str, identity: str, enabled: bool
    ) -> FlagRecord:
        attr, field_name = _OVERRIDE_LAYERS[layer]
        record = await self._require(key)
        getattr(record, attr)[identity] = enabled
        record.touch()
        await self._store.save(record)
        self._invalidate(key)
        logger.info(
            "override set", flag_key=key, layer=layer, enabled=enabled, **{field_name: identity}
        )
        return record

    async def _remove_override(self, key: str, layer: str, identity: str) -> FlagRecord:
        attr, field_name = _OVERRIDE_LAYERS[layer]
        record = await self._require(key)
        entries: dict[str, bool] = getattr(record, attr)
        if identity not in entries:
            raise FeatureFlagError(
                FeatureFlagErrorCodes.OVERRIDE_NOT_FOUND,
                f'No {layer} override found for {layer} "{identity}" on flag "{key}"',
            )
        del entries[identity]
        record.touch()
        await self._store.save(record)
        self._invalidate(key)
        logger.info("override removed", flag_key=key, layer=layer, **{field_name: identity})
        return record

    def _invalidate(self, key: str) -> None:
        self._cache.invalidate(key)
        flag_cache_invalidations_total.add(1)
