"""리포트 레포지토리 — 평가 결과 조인/그룹 쿼리.

Report Repository — Joined and grouped queries over evaluation_results.

Every join here is a LEFT OUTER JOIN: a result whose indicator, topic,
evaluator or evaluatee row is missing is still returned, with null joined
fields. Rows come back as plain dicts so that all stored result columns pass
through to the report unchanged.
"""

from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from evalreports.models.evaluation import (
    EvaluationResult,
    EvaluationTopic,
    EvaluatorComment,
    Indicator,
    Signature,
)
from evalreports.models.organization import Department, User

# 평가자 별칭 — users 테이블을 평가자 역할로 조인 (users joined as the evaluator)
Evaluator = aliased(User, name="evaluator")


def _aggregate_columns(count_label: str) -> tuple:
    """그룹 뷰 공통 집계 컬럼.

    COUNT counts result rows, AVG is the database average (nulls excluded),
    SUM adds the indicator weight of every row, so a recurring indicator is
    counted once per result.
    """
    return (
        func.count(EvaluationResult.id).label(count_label),
        func.avg(EvaluationResult.score).label("avg_score"),
        func.coalesce(func.sum(Indicator.weight), 0).label("total_weight"),
    )


async def _fetch_dicts(db: AsyncSession, query: Select) -> list[dict[str, Any]]:
    result = await db.execute(query)
    return [dict(row._mapping) for row in result.all()]


class ReportRepository:
    """평가 리포트 쿼리 모음.

    Query set behind the individual, overall, department and topic views.
    """

    # === 개인 리포트 ===

    async def get_results_for_person(
        self, db: AsyncSession, evaluatee_id: int, period_id: int
    ) -> list[dict[str, Any]]:
        """개인/기간 범위의 평가 결과를 지표, 주제, 평가자 정보와 함께 조회.

        Ordered by topic id, then indicator id; result id breaks ties.
        """
        query: Select = (
            select(
                EvaluationResult.__table__,
                EvaluationTopic.id.label("topic_id"),
                Indicator.name.label("indicator_name"),
                Indicator.type.label("indicator_type"),
                Indicator.weight.label("indicator_weight"),
                EvaluationTopic.title.label("topic_name"),
                EvaluationTopic.weight.label("topic_weight"),
                Evaluator.full_name.label("evaluator_name"),
            )
            .select_from(EvaluationResult)
            .outerjoin(Indicator, EvaluationResult.indicator_id == Indicator.id)
            .outerjoin(EvaluationTopic, Indicator.topic_id == EvaluationTopic.id)
            .outerjoin(Evaluator, EvaluationResult.evaluator_id == Evaluator.id)
            .where(
                EvaluationResult.evaluatee_id == evaluatee_id,
                EvaluationResult.period_id == period_id,
            )
            .order_by(
                EvaluationTopic.id.asc(),
                Indicator.id.asc(),
                EvaluationResult.id.asc(),
            )
        )
        return await _fetch_dicts(db, query)

    async def get_comments(
        self, db: AsyncSession, evaluatee_id: int, period_id: int
    ) -> list[dict[str, Any]]:
        """평가자 의견 — 최신순 (newest first)."""
        query: Select = (
            select(
                EvaluatorComment.__table__,
                Evaluator.full_name.label("evaluator_name"),
            )
            .select_from(EvaluatorComment)
            .outerjoin(Evaluator, EvaluatorComment.evaluator_id == Evaluator.id)
            .where(
                EvaluatorComment.evaluatee_id == evaluatee_id,
                EvaluatorComment.period_id == period_id,
            )
            .order_by(EvaluatorComment.created_at.desc(), EvaluatorComment.id.desc())
        )
        return await _fetch_dicts(db, query)

    async def get_signatures(
        self, db: AsyncSession, evaluatee_id: int, period_id: int
    ) -> list[dict[str, Any]]:
        """범위 내 결과에 달린 서명 — 평가자당 1건.

        When an evaluator signed several results, the latest signed_at wins,
        then the highest signature id.
        """
        ranked = (
            select(
                Signature.id.label("signature_id"),
                func.row_number()
                .over(
                    partition_by=Signature.evaluator_id,
                    order_by=(Signature.signed_at.desc(), Signature.id.desc()),
                )
                .label("signature_rank"),
            )
            .select_from(Signature)
            .join(EvaluationResult, Signature.result_id == EvaluationResult.id)
            .where(
                EvaluationResult.evaluatee_id == evaluatee_id,
                EvaluationResult.period_id == period_id,
            )
            .subquery("ranked_signatures")
        )

        query: Select = (
            select(
                Signature.__table__,
                Evaluator.full_name.label("evaluator_name"),
                EvaluationResult.indicator_id,
            )
            .select_from(Signature)
            .join(ranked, ranked.c.signature_id == Signature.id)
            .outerjoin(Evaluator, Signature.evaluator_id == Evaluator.id)
            .outerjoin(EvaluationResult, Signature.result_id == EvaluationResult.id)
            .where(ranked.c.signature_rank == 1)
            .order_by(Signature.evaluator_id.asc())
        )
        return await _fetch_dicts(db, query)

    # === 그룹 리포트 ===

    async def get_overall_rows(
        self, db: AsyncSession, period_id: int
    ) -> list[dict[str, Any]]:
        """기간 전체 — 피평가자별 집계, 이름순."""
        query: Select = (
            select(
                User.id.label("evaluatee_id"),
                User.full_name.label("evaluatee_name"),
                Department.name.label("department_name"),
                *_aggregate_columns("total_indicators"),
            )
            .select_from(EvaluationResult)
            .outerjoin(User, EvaluationResult.evaluatee_id == User.id)
            .outerjoin(Department, User.department_id == Department.id)
            .outerjoin(Indicator, EvaluationResult.indicator_id == Indicator.id)
            .where(EvaluationResult.period_id == period_id)
            .group_by(User.id, User.full_name, Department.name)
            .order_by(User.full_name.asc())
        )
        return await _fetch_dicts(db, query)

    async def get_department_rows(
        self, db: AsyncSession, department_id: int, period_id: int
    ) -> list[dict[str, Any]]:
        """부서 범위 — 피평가자별 집계, 이름순."""
        query: Select = (
            select(
                User.id.label("evaluatee_id"),
                User.full_name.label("evaluatee_name"),
                User.email,
                *_aggregate_columns("total_indicators"),
            )
            .select_from(EvaluationResult)
            .outerjoin(User, EvaluationResult.evaluatee_id == User.id)
            .outerjoin(Indicator, EvaluationResult.indicator_id == Indicator.id)
            .where(
                User.department_id == department_id,
                EvaluationResult.period_id == period_id,
            )
            .group_by(User.id, User.full_name, User.email)
            .order_by(User.full_name.asc())
        )
        return await _fetch_dicts(db, query)

    async def get_topic_rows(
        self, db: AsyncSession, period_id: int
    ) -> list[dict[str, Any]]:
        """주제별 집계 — 주제 ID순."""
        query: Select = (
            select(
                EvaluationTopic.id.label("topic_id"),
                EvaluationTopic.title.label("topic_name"),
                EvaluationTopic.weight.label("topic_weight"),
                *_aggregate_columns("total_results"),
            )
            .select_from(EvaluationResult)
            .outerjoin(Indicator, EvaluationResult.indicator_id == Indicator.id)
            .outerjoin(EvaluationTopic, Indicator.topic_id == EvaluationTopic.id)
            .where(EvaluationResult.period_id == period_id)
            .group_by(EvaluationTopic.id, EvaluationTopic.title, EvaluationTopic.weight)
            .order_by(EvaluationTopic.id.asc())
        )
        return await _fetch_dicts(db, query)


report_repository: ReportRepository = ReportRepository()
