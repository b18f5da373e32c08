"""리포트 로깅 테스트.

Report-call logging tests — event contents, error propagation and
resilience to Axiom ingest failures.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from evalreports.services.report_service import ReportService
from evalreports.utils.report_logging import ReportEventLogger
from tests.conftest import add_result


class _FakeAxiom:
    """ingest_events 호출을 기록하는 Axiom 클라이언트 대역."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.events: list[tuple[str, dict]] = []

    def ingest_events(self, dataset: str, events: list[dict]) -> None:
        if self.fail:
            raise ConnectionError("axiom unreachable")
        for event in events:
            self.events.append((dataset, event))


class TestReportEventLogger:
    """로거 단위 테스트."""

    async def test_passthrough_without_client(self):
        logger = ReportEventLogger()
        assert not logger.enabled
        async with logger.track("topic_summary", period_id=1) as event:
            event["row_count"] = 3
        assert event["operation"] == "topic_summary"

    async def test_event_sent(self):
        client = _FakeAxiom()
        logger = ReportEventLogger(client, "reports")
        async with logger.track("overall_summary", period_id=7) as event:
            event["row_count"] = 2

        dataset, sent = client.events[0]
        assert dataset == "reports"
        assert sent["operation"] == "overall_summary"
        assert sent["params"] == {"period_id": 7}
        assert sent["row_count"] == 2
        assert sent["duration_ms"] >= 0
        assert "error" not in sent

    async def test_error_logged_and_reraised(self):
        client = _FakeAxiom()
        logger = ReportEventLogger(client, "reports")
        with pytest.raises(RuntimeError):
            async with logger.track("topic_summary", period_id=1):
                raise RuntimeError("connection lost")

        _, sent = client.events[0]
        assert sent["error"] == "RuntimeError: connection lost"

    async def test_long_error_truncated(self):
        client = _FakeAxiom()
        logger = ReportEventLogger(client, "reports")
        with pytest.raises(ValueError):
            async with logger.track("topic_summary", period_id=1):
                raise ValueError("x" * 1000)

        _, sent = client.events[0]
        assert sent["error"].endswith("...(truncated)")

    async def test_sensitive_params_masked(self):
        """토큰/비밀번호 계열 파라미터는 마스킹, 긴 값은 잘림."""
        client = _FakeAxiom()
        logger = ReportEventLogger(client, "reports")
        async with logger.track(
            "export_data",
            evaluatee_id=1,
            token="abc123",
            filters={"api_key": "k", "note": "n" * 500},
        ):
            pass

        _, sent = client.events[0]
        assert sent["params"]["evaluatee_id"] == 1
        assert sent["params"]["token"] == "***"
        assert sent["params"]["filters"]["api_key"] == "***"
        assert sent["params"]["filters"]["note"].endswith("...(truncated)")

    async def test_ingest_failure_ignored(self):
        logger = ReportEventLogger(_FakeAxiom(fail=True), "reports")
        async with logger.track("topic_summary", period_id=1) as event:
            event["row_count"] = 0


class TestServiceLogging:
    """서비스 호출 로깅 테스트."""

    async def test_individual_summary_event(self, db: AsyncSession, catalog):
        client = _FakeAxiom()
        service = ReportService(ReportEventLogger(client, "reports"))
        await add_result(db, 1, indicator=2, score=8)

        report = await service.get_individual_summary(db, 1, 1)
        assert report is not None

        _, sent = client.events[0]
        assert sent["operation"] == "individual_summary"
        assert sent["params"] == {"evaluatee_id": 1, "period_id": 1}
        assert sent["found"] is True
        assert sent["row_count"] == 1

    async def test_missing_evaluatee_event(self, db: AsyncSession, catalog):
        client = _FakeAxiom()
        service = ReportService(ReportEventLogger(client, "reports"))

        assert await service.get_export_data(db, 404, 1) is None
        _, sent = client.events[0]
        assert sent["operation"] == "export_data"
        assert sent["found"] is False
        assert sent["row_count"] == 0

    async def test_export_and_individual_events_match(self, db: AsyncSession, catalog):
        """두 진입점의 이벤트 필드가 동일함."""
        client = _FakeAxiom()
        service = ReportService(ReportEventLogger(client, "reports"))
        await add_result(db, 1, indicator=2, score=8)
        await add_result(db, 1, indicator=1, score=6)

        await service.get_individual_summary(db, 1, 1)
        await service.get_export_data(db, 1, 1)

        (_, individual), (_, exported) = client.events
        assert set(individual) == set(exported)
        assert exported["row_count"] == individual["row_count"] == 2

    async def test_store_failure_propagates(self, db: AsyncSession, catalog, monkeypatch):
        """저장소 오류는 변환 없이 호출자에게 전달됨."""
        from sqlalchemy.exc import OperationalError

        from evalreports.repositories.report_repository import report_repository

        async def _broken(*args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("server closed the connection"))

        monkeypatch.setattr(report_repository, "get_topic_rows", _broken)
        client = _FakeAxiom()
        service = ReportService(ReportEventLogger(client, "reports"))

        with pytest.raises(OperationalError):
            await service.get_topic_summary(db, 1)

        _, sent = client.events[0]
        assert sent["error"].startswith("OperationalError")
