"""Axiom 리포트 호출 로깅.

Axiom report-call logging.
Sends one structured event per report operation to Axiom:
operation name, parameters, row counts, duration and error reason.
Without an Axiom token/dataset the logger is a pass-through.
"""

import re
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from axiom_py import Client as AxiomClient

from evalreports.config import settings

# 마스킹 대상 필드 패턴 — Parameter names to mask in logged events
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_key|apikey|access_token|refresh_token|credential)",
    re.IGNORECASE,
)


def _mask_dict(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive fields in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else _mask_dict(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask_dict(item, depth + 1) for item in data[:20]]
    return _truncate(data)


def _truncate(value: Any, max_len: int = 300) -> Any:
    """로그 크기 제한 — Truncate large values to prevent oversized logs."""
    if isinstance(value, str) and len(value) > max_len:
        return value[:max_len] + "...(truncated)"
    return value


class ReportEventLogger:
    """리포트 호출을 Axiom에 로깅합니다.

    Logs report operations to Axiom. Store failures are recorded and then
    re-raised unchanged; a failing Axiom ingest never affects the report.
    """

    def __init__(self, client: AxiomClient | None = None, dataset: str = "") -> None:
        self._client = client
        self._dataset: str = dataset

    @classmethod
    def from_settings(cls) -> "ReportEventLogger":
        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            return cls(AxiomClient(token=settings.AXIOM_API_TOKEN), settings.AXIOM_DATASET)
        return cls()

    @property
    def enabled(self) -> bool:
        return self._client is not None

    @asynccontextmanager
    async def track(self, operation: str, **params: Any) -> AsyncIterator[dict[str, Any]]:
        """리포트 호출 하나를 감싸는 컨텍스트.

        Yields a mutable event dict; the caller may add fields such as
        ``row_count`` before the block exits.

        Usage:
            async with report_logger.track("topic_summary", period_id=3) as event:
                rows = ...
                event["row_count"] = len(rows)
        """
        event: dict[str, Any] = {"operation": operation, "params": _mask_dict(params)}

        # Axiom 미설정시 패스스루 — Pass through if Axiom not configured
        if not self._client:
            yield event
            return

        start_time = time.time()
        try:
            yield event
        except Exception as exc:
            event["error"] = _truncate(f"{type(exc).__name__}: {exc}")
            raise
        finally:
            event["duration_ms"] = round((time.time() - start_time) * 1000, 2)

            try:
                self._client.ingest_events(self._dataset, [event])
            except Exception:
                pass  # 로깅 실패가 리포트 조회에 영향주지 않도록 — Never break a report on log failure


# 전역 리포트 로거 — Module-level logger configured from settings
report_logger: ReportEventLogger = ReportEventLogger.from_settings()
