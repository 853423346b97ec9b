"""structlog ベースのロガー設定"""

from __future__ import annotations

import logging
import sys

import structlog

from .config import LogSection

LOGGER_NAME = "flagstate"


def _renderer(format: str) -> list[structlog.types.Processor]:
    if format == "json":
        return [structlog.processors.StackInfoRenderer(), structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer()]


def configure_logging(section: LogSection) -> None:
    """flagstate 配下のロガーを LogSection に従って構成する。

    レベルは標準ライブラリの "flagstate" ロガーに設定するため、サービスなど
    flagstate.* のモジュールロガーすべてに適用される。再構成は既存の
    モジュールロガーにも反映される。
    """
    stdlib_logger = logging.getLogger(LOGGER_NAME)
    stdlib_logger.setLevel(getattr(logging, section.level.upper(), logging.INFO))
    if not stdlib_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        stdlib_logger.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            *_renderer(section.format),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # モジュールレベルのロガーが再構成後の設定を参照できるようにキャッシュしない。
        cache_logger_on_first_use=False,
    )


def new_logger(level: str = "INFO", format: str = "json") -> structlog.stdlib.BoundLogger:
    """flagstate ロガーを構成して返す。

    Args:
        level: ログレベル ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        format: 出力形式 ("json" or "text")
    """
    configure_logging(LogSection(level=level, format=format))
    return structlog.stdlib.get_logger(LOGGER_NAME)
