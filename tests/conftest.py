"""テスト共通フィクスチャとヘルパー"""

from __future__ import annotations

import pytest
from opentelemetry import metrics
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import InMemoryMetricReader


class FakeClock:
    """手動で進めるテスト用時計。"""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def counter_value(
    reader: InMemoryMetricReader, name: str, attributes: dict[str, str] | None = None
) -> int:
    """累積カウンターの現在値を返す。attributes 指定時は一致するデータポイントのみ合計。"""
    data = reader.get_metrics_data()
    if data is None:
        return 0
    total = 0
    for resource_metrics in data.resource_metrics:
        for scope_metrics in resource_metrics.scope_metrics:
            for metric in scope_metrics.metrics:
                if metric.name != name:
                    continue
                for point in metric.data.data_points:
                    if attributes is None or dict(point.attributes) == attributes:
                        total += point.value
    return total


@pytest.fixture(scope="session")
def metric_reader() -> InMemoryMetricReader:
    """グローバル MeterProvider にインメモリリーダーを設定する。"""
    reader = InMemoryMetricReader()
    metrics.set_meter_provider(MeterProvider(metric_readers=[reader]))
    return reader
