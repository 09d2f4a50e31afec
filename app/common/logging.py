# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""结构化日志

- 每条日志输出为一行 JSON：timestamp / level / rid / context / message / trace
- rid 即 trace_id，由 TraceIdFilter 在记录时写入
- error / warn 走 stderr，其余走 stdout，格式完全一致
- AppLogger 按等级白名单过滤，不在白名单内的调用直接丢弃
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, TextIO, Tuple

from app.common.trace import get_trace_id

VERBOSE = 5
logging.addLevelName(VERBOSE, "VERBOSE")

APP_LOGGER_NAME = "app"

LOG_LEVELS: Tuple[str, ...] = ("log", "error", "warn", "debug", "verbose")

_TO_STDLIB: Dict[str, int] = {
    "log": logging.INFO,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "debug": logging.DEBUG,
    "verbose": VERBOSE,
}
_FROM_STDLIB: Dict[int, str] = {v: k for k, v in _TO_STDLIB.items()}


def parse_log_levels(raw: Optional[str]) -> List[str]:
    """'log, warn,foo' -> ['log', 'warn']，未知等级忽略"""
    if not raw:
        return []
    return [x.strip() for x in raw.split(",") if x.strip() in LOG_LEVELS]


class TraceIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        if not getattr(record, "trace_id", None):
            setattr(record, "trace_id", get_trace_id())
        return True


class MaxLevelFilter(logging.Filter):
    """只放行低于 max_level 的记录"""

    def __init__(self, max_level: int) -> None:
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        return record.levelno < self.max_level


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: Dict[str, Any] = {
            "timestamp": ts.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": _FROM_STDLIB.get(record.levelno, record.levelname.lower()),
            "rid": getattr(record, "trace_id", None) or get_trace_id(),
        }

        # 第三方 logger 没有 context，用 logger 名代替
        context = getattr(record, "context", None) if hasattr(record, "context") else record.name
        if context:
            entry["context"] = context

        entry["message"] = record.getMessage()

        trace = getattr(record, "trace", None)
        if not trace and record.exc_info:
            trace = self.formatException(record.exc_info)
        if trace:
            entry["trace"] = trace

        return json.dumps(entry, ensure_ascii=False, default=str)


def build_handlers(
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> List[logging.Handler]:
    out = logging.StreamHandler(stdout or sys.stdout)
    out.addFilter(MaxLevelFilter(logging.WARNING))

    err = logging.StreamHandler(stderr or sys.stderr)
    err.setLevel(logging.WARNING)

    handlers: List[logging.Handler] = [out, err]
    for h in handlers:
        h.setFormatter(JsonFormatter())
        h.addFilter(TraceIdFilter())
    return handlers


def setup_logging(level: int = logging.INFO) -> None:
    """初始化全局日志"""

    root = logging.getLogger()
    root.setLevel(level)

    if not root.handlers:
        for h in build_handlers():
            root.addHandler(h)

    # 给现有 handler 全部加 filter
    for h in root.handlers:
        has_filter = any(isinstance(f, TraceIdFilter) for f in getattr(h, "filters", []))
        if not has_filter:
            h.addFilter(TraceIdFilter())

    # 业务日志的开关交给 AppLogger 的白名单
    logging.getLogger(APP_LOGGER_NAME).setLevel(VERBOSE)


class AppLogger:
    """应用日志器：log / error / warn / debug / verbose 五个等级"""

    def __init__(self, levels: Optional[Iterable[str]] = None, name: str = APP_LOGGER_NAME) -> None:
        self._logger = logging.getLogger(name)
        self._levels: List[str] = list(LOG_LEVELS)
        if levels is not None:
            self.set_log_levels(levels)

    @property
    def levels(self) -> List[str]:
        return list(self._levels)

    def set_log_levels(self, levels: Iterable[str]) -> None:
        self._levels = [x for x in levels if x in LOG_LEVELS]

    def is_enabled(self, level: str) -> bool:
        return level in self._levels

    def log(self, message: Any, context: Optional[str] = None) -> None:
        self._print("log", message, context)

    def error(self, message: Any, trace: Optional[str] = None, context: Optional[str] = None) -> None:
        self._print("error", message, context, trace)

    def warn(self, message: Any, context: Optional[str] = None) -> None:
        self._print("warn", message, context)

    def debug(self, message: Any, context: Optional[str] = None) -> None:
        self._print("debug", message, context)

    def verbose(self, message: Any, context: Optional[str] = None) -> None:
        self._print("verbose", message, context)

    def emit(self, level: str, message: Any, context: Optional[str] = None) -> None:
        """按等级名输出，未知等级按 log 处理"""
        self._print(level if level in _TO_STDLIB else "log", message, context)

    def _print(
        self,
        level: str,
        message: Any,
        context: Optional[str] = None,
        trace: Optional[str] = None,
    ) -> None:
        if not self.is_enabled(level):
            return
        self._logger.log(
            _TO_STDLIB[level],
            "%s",
            message,
            extra={"context": context, "trace": trace, "trace_id": get_trace_id()},
        )


app_logger = AppLogger()
