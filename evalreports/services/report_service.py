"""리포트 서비스 — 평가 리포트 조립 로직.

Report Service — Assembles the individual, overall, department and topic
evaluation reports from repository queries and the summary reducer.

Every method takes the caller's AsyncSession and runs its sub-queries in
sequence without an enclosing transaction. Store errors are not caught here.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from evalreports.repositories.period_repository import period_repository
from evalreports.repositories.report_repository import report_repository
from evalreports.repositories.user_repository import user_repository
from evalreports.schemas.report import (
    DepartmentPersonAggregate,
    EvaluateeInfo,
    IndividualReport,
    OverallPersonAggregate,
    PeriodInfo,
    TopicAggregate,
)
from evalreports.services.summary import reduce_results
from evalreports.utils.report_logging import ReportEventLogger, report_logger


class ReportService:
    """리포트 서비스.

    Report service providing the four report views and the export entry point.
    """

    def __init__(self, event_logger: ReportEventLogger | None = None) -> None:
        self._events: ReportEventLogger = event_logger or report_logger

    # === 개인 리포트 ===

    async def _build_individual_report(
        self,
        db: AsyncSession,
        evaluatee_id: int,
        period_id: int,
    ) -> IndividualReport | None:
        # 피평가자가 없으면 이후 쿼리 없이 종료
        evaluatee = await user_repository.get_evaluatee(db, evaluatee_id)
        if evaluatee is None:
            return None

        period = await period_repository.get_period(db, period_id)
        results = await report_repository.get_results_for_person(db, evaluatee_id, period_id)
        comments = await report_repository.get_comments(db, evaluatee_id, period_id)
        signatures = await report_repository.get_signatures(db, evaluatee_id, period_id)

        return IndividualReport(
            evaluatee=EvaluateeInfo(**evaluatee),
            period=PeriodInfo(**period) if period is not None else None,
            results=results,
            comments=comments,
            signatures=signatures,
            summary=reduce_results(results),
        )

    async def get_individual_summary(
        self,
        db: AsyncSession,
        evaluatee_id: int,
        period_id: int,
    ) -> IndividualReport | None:
        """개인 평가 리포트.

        Individual report for one evaluatee in one period.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            evaluatee_id: 피평가자 ID (Evaluatee user ID)
            period_id: 평가 기간 ID (Evaluation period ID)

        Returns:
            IndividualReport | None: 피평가자가 없으면 None
                                     (None when the evaluatee does not exist;
                                     a missing period yields ``period=None``)
        """
        async with self._events.track(
            "individual_summary", evaluatee_id=evaluatee_id, period_id=period_id
        ) as event:
            report = await self._build_individual_report(db, evaluatee_id, period_id)
            event["found"] = report is not None
            event["row_count"] = len(report.results) if report is not None else 0
            return report

    async def get_export_data(
        self,
        db: AsyncSession,
        evaluatee_id: int,
        period_id: int,
    ) -> IndividualReport | None:
        """문서 출력용 데이터 — 개인 리포트와 동일.

        Same contract as get_individual_summary, for the document export.
        """
        async with self._events.track(
            "export_data", evaluatee_id=evaluatee_id, period_id=period_id
        ) as event:
            report = await self._build_individual_report(db, evaluatee_id, period_id)
            event["found"] = report is not None
            event["row_count"] = len(report.results) if report is not None else 0
            return report

    # === 그룹 리포트 ===

    async def get_overall_summary(
        self,
        db: AsyncSession,
        period_id: int,
    ) -> list[OverallPersonAggregate]:
        """기간 전체 피평가자 집계 — 이름순."""
        async with self._events.track("overall_summary", period_id=period_id) as event:
            rows = await report_repository.get_overall_rows(db, period_id)
            event["row_count"] = len(rows)
            return [OverallPersonAggregate(**row) for row in rows]

    async def get_department_summary(
        self,
        db: AsyncSession,
        department_id: int,
        period_id: int,
    ) -> list[DepartmentPersonAggregate]:
        """부서 소속 피평가자 집계 — 이름순."""
        async with self._events.track(
            "department_summary", department_id=department_id, period_id=period_id
        ) as event:
            rows = await report_repository.get_department_rows(db, department_id, period_id)
            event["row_count"] = len(rows)
            return [DepartmentPersonAggregate(**row) for row in rows]

    async def get_topic_summary(
        self,
        db: AsyncSession,
        period_id: int,
    ) -> list[TopicAggregate]:
        """주제별 집계 — 주제 ID순."""
        async with self._events.track("topic_summary", period_id=period_id) as event:
            rows = await report_repository.get_topic_rows(db, period_id)
            event["row_count"] = len(rows)
            return [TopicAggregate(**row) for row in rows]


report_service: ReportService = ReportService()
