"""flagstate データモデル"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class EvaluationReason(str, Enum):
    """評価結果を決定したレイヤー。"""

    USER_OVERRIDE = "user_override"
    GROUP_OVERRIDE = "group_override"
    REGION_OVERRIDE = "region_override"
    DEFAULT = "default"


@dataclass(frozen=True)
class FlagDefinition:
    """フラグ定義。key は不変の識別子。"""

    key: str
    global_enabled: bool = False


@dataclass
class OverrideSet:
    """フラグ単位のオーバーライド集合。

    region_overrides が None の場合は空として扱う。
    """

    user_overrides: dict[str, bool] = field(default_factory=dict)
    group_overrides: dict[str, bool] = field(default_factory=dict)
    region_overrides: dict[str, bool] | None = None


@dataclass
class EvaluationContext:
    """フラグ評価コンテキスト。groups は呼び出し側の順序で評価される。"""

    user_id: str | None = None
    groups: list[str] | None = None
    region: str | None = None


@dataclass(frozen=True)
class EvaluationResult:
    """フラグ評価結果。"""

    enabled: bool
    reason: EvaluationReason


@dataclass(frozen=True)
class CacheEntry:
    """キャッシュされたフラグのスナップショット。"""

    flag: FlagDefinition
    overrides: OverrideSet
    cached_at: float


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class FlagRecord:
    """ストアに保存されるフラグレコード。"""

    key: str
    global_enabled: bool = False
    description: str = ""
    user_overrides: dict[str, bool] = field(default_factory=dict)
    group_overrides: dict[str, bool] = field(default_factory=dict)
    region_overrides: dict[str, bool] = field(default_factory=dict)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def definition(self) -> FlagDefinition:
        """評価用のフラグ定義に変換する。"""
        return FlagDefinition(key=self.key, global_enabled=self.global_enabled)

    def override_set(self) -> OverrideSet:
        """評価用のオーバーライド集合に変換する。元レコードとは独立したコピーを返す。"""
        return OverrideSet(
            user_overrides=dict(self.user_overrides),
            group_overrides=dict(self.group_overrides),
            region_overrides=dict(self.region_overrides),
        )

    def touch(self) -> None:
        """updated_at を現在時刻に更新する。"""
        self.updated_at = _utcnow()
