"""OpenTelemetry フラグ評価メトリクス定義"""

from __future__ import annotations

from opentelemetry import metrics

_meter = metrics.get_meter("flagstate", version="0.1.0")

flag_evaluations_total = _meter.create_counter(
    name="flag_evaluations_total",
    description="Total number of feature flag evaluations",
    unit="1",
)

flag_cache_hits_total = _meter.create_counter(
    name="flag_cache_hits_total",
    description="Total number of flag cache hits",
    unit="1",
)

flag_cache_misses_total = _meter.create_counter(
    name="flag_cache_misses_total",
    description="Total number of flag cache misses",
    unit="1",
)

flag_cache_invalidations_total = _meter.create_counter(
    name="flag_cache_invalidations_total",
    description="Total number of flag cache invalidations",
    unit="1",
)
