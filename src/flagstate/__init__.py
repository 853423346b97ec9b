"""flagstate feature flag evaluation library."""

from .cache import DEFAULT_TTL_SECONDS, FlagCache
from .config import CacheSection, FlagStateConfig, LogSection, deep_merge, load
from .evaluator import evaluate
from .exceptions import (
    ConfigError,
    ConfigErrorCodes,
    FeatureFlagError,
    FeatureFlagErrorCodes,
)
from .logger import configure_logging, new_logger
from .memory import InMemoryFlagStore
from .models import (
    CacheEntry,
    EvaluationContext,
    EvaluationReason,
    EvaluationResult,
    FlagDefinition,
    FlagRecord,
    OverrideSet,
)
from .service import FeatureFlagService
from .store import FlagStore

__all__ = [
    "CacheEntry",
    "CacheSection",
    "ConfigError",
    "ConfigErrorCodes",
    "DEFAULT_TTL_SECONDS",
    "EvaluationContext",
    "EvaluationReason",
    "EvaluationResult",
    "FeatureFlagError",
    "FeatureFlagErrorCodes",
    "FeatureFlagService",
    "FlagCache",
    "FlagDefinition",
    "FlagRecord",
    "FlagStateConfig",
    "FlagStore",
    "InMemoryFlagStore",
    "LogSection",
    "OverrideSet",
    "configure_logging",
    "deep_merge",
    "evaluate",
    "load",
    "new_logger",
]
