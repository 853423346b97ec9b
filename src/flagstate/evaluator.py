"""フラグ評価ロジック"""

from __future__ import annotations

from collections.abc import Callable

from .models import (
    EvaluationContext,
    EvaluationReason,
    EvaluationResult,
    FlagDefinition,
    OverrideSet,
)

_Lookup = Callable[[OverrideSet, EvaluationContext], bool | None]


def _user_lookup(overrides: OverrideSet, context: EvaluationContext) -> bool | None:
    if not context.user_id:
        return None
    return overrides.user_overrides.get(context.user_id)


def _group_lookup(overrides: OverrideSet, context: EvaluationContext) -> bool | None:
    # 先に並んでいるグループが優先。エントリがないグループは読み飛ばす。
    for group in context.groups or ():
        value = overrides.group_overrides.get(group)
        if value is not None:
            return value
    return None


def _region_lookup(overrides: OverrideSet, context: EvaluationContext) -> bool | None:
    if not context.region:
        return None
    return (overrides.region_overrides or {}).get(context.region)


# 優先順位の高い順。
_LAYERS: tuple[tuple[_Lookup, EvaluationReason], ...] = (
    (_user_lookup, EvaluationReason.USER_OVERRIDE),
    (_group_lookup, EvaluationReason.GROUP_OVERRIDE),
    (_region_lookup, EvaluationReason.REGION_OVERRIDE),
)


def evaluate(
    flag: FlagDefinition,
    overrides: OverrideSet,
    context: EvaluationContext,
) -> EvaluationResult:
    """コンテキストに対するフラグの有効/無効を評価する。

    優先順位（高い順）:
        1. ユーザーオーバーライド
        2. グループオーバーライド（コンテキスト内で最初に一致したグループ）
        3. リージョンオーバーライド
        4. グローバルデフォルト

    Args:
        flag: フラグ定義
        overrides: フラグのオーバーライド集合
        context: 評価コンテキスト

    Returns:
        有効/無効と、決定したレイヤーを示す理由
    """
    for lookup, reason in _LAYERS:
        value = lookup(overrides, context)
        if value is not None:
            return EvaluationResult(enabled=value, reason=reason)
    return EvaluationResult(enabled=flag.global_enabled, reason=EvaluationReason.DEFAULT)
