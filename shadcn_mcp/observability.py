"""Observability for the shadcn MCP server.

Provides:
- Correlation ID generation
- Text or JSON structured logging to stderr
- In-memory per-tool metrics
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timezone
import json
import logging
import sys
from threading import Lock
import time
from typing import Any
import uuid

from shadcn_mcp.config import ObservabilityConfig

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Per-call attributes passed via `extra=` by ShadcnMcpServer.call_tool,
# in the order they are rendered.
CALL_FIELDS = ("correlation_id", "tool", "status", "latency_ms", "error")
_SHORT_NAMES = {"correlation_id": "cid"}


def generate_correlation_id() -> str:
    """Generate a unique correlation ID for request tracing."""
    return str(uuid.uuid4())[:8]


def call_fields(record: logging.LogRecord, include_correlation_id: bool = True) -> dict[str, Any]:
    """Collect the per-call attributes present on ``record``, keyed by their short names."""
    fields: dict[str, Any] = {}
    for attr in CALL_FIELDS:
        if attr == "correlation_id" and not include_correlation_id:
            continue
        value = getattr(record, attr, None)
        if value is not None:
            fields[_SHORT_NAMES.get(attr, attr)] = value
    return fields


class JsonLogFormatter(logging.Formatter):
    """One JSON object per line: ts, level, logger, msg, then any per-call fields."""

    def __init__(self, include_correlation_id: bool = True):
        super().__init__()
        self.include_correlation_id = include_correlation_id

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
            **call_fields(record, self.include_correlation_id),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, separators=(",", ":"))


class TextLogFormatter(logging.Formatter):
    """TEXT_FORMAT with per-call fields appended as ``key=value`` pairs, e.g.

        ... call_tool done: list_components cid=1a2b3c4d tool=list_components status=ok
    """

    def __init__(self, include_correlation_id: bool = True):
        super().__init__(TEXT_FORMAT)
        self.include_correlation_id = include_correlation_id

    @staticmethod
    def _render(value: Any) -> str:
        text = str(value)
        # keep one pair per token; stderr text can hold spaces and newlines
        if any(ch.isspace() for ch in text) or '"' in text:
            return json.dumps(text)
        return text

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        fields = call_fields(record, self.include_correlation_id)
        if not fields:
            return line
        pairs = " ".join(f"{key}={self._render(value)}" for key, value in fields.items())
        return f"{line} {pairs}"


@dataclass
class ToolMetrics:
    """Running totals for one tool."""

    calls: int = 0
    errors: int = 0
    total_ms: float = 0.0
    min_ms: float | None = None
    max_ms: float = 0.0

    def add(self, latency_ms: float, success: bool) -> None:
        self.calls += 1
        self.errors += 0 if success else 1
        self.total_ms += latency_ms
        self.min_ms = latency_ms if self.min_ms is None else min(self.min_ms, latency_ms)
        self.max_ms = max(self.max_ms, latency_ms)

    def snapshot(self) -> dict[str, Any]:
        return {
            "calls": self.calls,
            "errors": self.errors,
            "avg_ms": round(self.total_ms / self.calls, 2) if self.calls else 0.0,
            "min_ms": round(self.min_ms, 2) if self.min_ms is not None else 0,
            "max_ms": round(self.max_ms, 2),
        }


class MetricsCollector:
    """In-memory per-tool call counts, errors and latencies. Safe across threads."""

    def __init__(self):
        self._lock = Lock()
        self._tools: dict[str, ToolMetrics] = defaultdict(ToolMetrics)
        self._started = time.time()

    def record_call(self, tool: str, latency_ms: float, success: bool) -> None:
        with self._lock:
            self._tools[tool].add(latency_ms, success)

    def get_stats(self) -> dict[str, Any]:
        """Snapshot of totals plus a per-tool breakdown."""
        with self._lock:
            tools = {name: m.snapshot() for name, m in self._tools.items()}

        requests = sum(t["calls"] for t in tools.values())
        errors = sum(t["errors"] for t in tools.values())
        return {
            "uptime_s": round(time.time() - self._started, 1),
            "total_requests": requests,
            "total_errors": errors,
            "error_rate": round(errors / max(1, requests), 4),
            "tools": tools,
        }


class ObservabilityContext:
    """Correlation ids plus metrics, gated on ``config.enabled``.

    Usage:
        obs = ObservabilityContext(config.observability)

        cid = obs.correlation_id()
        start = time.time()
        # ... do work ...
        obs.record("init_shadcn", latency_ms=..., success=True)
    """

    def __init__(self, config: ObservabilityConfig):
        self.config = config
        self.enabled = config.enabled
        self.metrics = MetricsCollector()

    def correlation_id(self) -> str:
        return generate_correlation_id()

    def record(self, tool: str, latency_ms: float, success: bool) -> None:
        if not self.enabled:
            return
        self.metrics.record_call(tool=tool, latency_ms=latency_ms, success=success)

    def get_stats(self) -> dict[str, Any]:
        return self.metrics.get_stats()


def setup_logging(
    config: ObservabilityConfig,
    log_level: str = "info",
    logger_name: str = "shadcn-mcp",
) -> logging.Logger:
    """Configure the server logger. Always writes to stderr; stdout is the protocol stream.

    Args:
        config: Observability configuration
        log_level: Level name (debug, info, warning, error)
        logger_name: Name of logger to configure

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)
    logger.handlers.clear()
    logger.propagate = False

    level = getattr(logging, log_level.upper(), logging.INFO)
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    formatter_cls = JsonLogFormatter if config.log_format == "json" else TextLogFormatter
    handler.setFormatter(formatter_cls(include_correlation_id=config.include_correlation_id))

    logger.addHandler(handler)

    return logger
