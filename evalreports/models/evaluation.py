"""평가 관련 SQLAlchemy ORM 모델 정의.

Evaluation SQLAlchemy ORM model definitions.
Includes evaluation periods, topics (weighted groups of indicators),
indicators (individual scoring criteria), results (one score per
evaluator/indicator), evaluator comments and approval signatures.

The report engine only reads these tables. Foreign keys describe the intended
relationships, but every report query uses outer joins so a row whose parent
was deleted still shows up with null joined fields.

Tables:
    - evaluation_periods: 평가 기간 (Evaluation periods)
    - evaluation_topics: 평가 주제 (Weighted topics)
    - indicators: 평가 지표 (Indicators within a topic)
    - evaluation_results: 평가 결과 (Per-indicator scores)
    - evaluator_comments: 평가자 의견 (Free-text comments)
    - signatures: 승인 서명 (Approval signatures on results)
"""

from datetime import date, datetime, timezone
from sqlalchemy import String, Integer, Float, Date, DateTime, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from evalreports.database import Base


class EvaluationPeriod(Base):
    """평가 기간 모델.

    Attributes:
        id: 고유 식별자
        name: 기간 표시 이름 (e.g. "2026 H1")
        start_date: 시작일
        end_date: 종료일
    """

    __tablename__ = "evaluation_periods"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)


class EvaluationTopic(Base):
    """평가 주제 모델 — 지표를 묶는 가중치 그룹.

    Evaluation topic model — Weighted group of indicators.

    Attributes:
        id: 고유 식별자
        title: 주제 제목
        weight: 가중치 (nullable)
    """

    __tablename__ = "evaluation_topics"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)


class Indicator(Base):
    """평가 지표 모델 — 주제 내 개별 평가 기준.

    Indicator model — Individual scoring criterion within a topic.

    Attributes:
        id: 고유 식별자
        topic_id: 소속 주제 FK (nullable)
        name: 지표 이름
        type: 지표 유형 태그 (e.g. "score", "rubric")
        weight: 가중치 (nullable)
    """

    __tablename__ = "indicators"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    topic_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("evaluation_topics.id", ondelete="SET NULL"), nullable=True)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    type: Mapped[str] = mapped_column(String(50), default="score")
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)


class EvaluationResult(Base):
    """평가 결과 모델 — 평가자가 지표 하나에 매긴 점수.

    Evaluation result model — One evaluator's score on one indicator
    for one evaluatee in one period.

    Attributes:
        id: 고유 식별자
        evaluatee_id: 피평가자 FK
        evaluator_id: 평가자 FK
        period_id: 평가 기간 FK
        indicator_id: 평가 지표 FK
        score: 점수 (nullable, 미채점)
        remark: 평가자 메모
        evidence_url: 증빙 자료 URL
        created_at: 생성 일시 UTC
        updated_at: 수정 일시 UTC
    """

    __tablename__ = "evaluation_results"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    evaluatee_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    evaluator_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    period_id: Mapped[int] = mapped_column(Integer, ForeignKey("evaluation_periods.id"), nullable=False)
    indicator_id: Mapped[int] = mapped_column(Integer, ForeignKey("indicators.id"), nullable=False)
    score: Mapped[float | None] = mapped_column(Float, nullable=True)
    remark: Mapped[str | None] = mapped_column(Text, nullable=True)
    evidence_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))


class EvaluatorComment(Base):
    """평가자 의견 모델.

    Free-text comment an evaluator leaves for an evaluatee in a period.
    """

    __tablename__ = "evaluator_comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    evaluatee_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    evaluator_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    period_id: Mapped[int] = mapped_column(Integer, ForeignKey("evaluation_periods.id"), nullable=False)
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))


class Signature(Base):
    """승인 서명 모델 — 평가 결과에 대한 평가자 승인.

    Signature model — An evaluator's approval on one evaluation result.

    Attributes:
        id: 고유 식별자
        result_id: 대상 평가 결과 FK
        evaluator_id: 서명한 평가자 FK
        approval_status: 승인 상태 ("approved", "rejected")
        remark: 서명 메모
        signed_at: 서명 일시 UTC
    """

    __tablename__ = "signatures"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    result_id: Mapped[int] = mapped_column(Integer, ForeignKey("evaluation_results.id"), nullable=False)
    evaluator_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    approval_status: Mapped[str] = mapped_column(String(20), default="approved")  # approved, rejected
    remark: Mapped[str | None] = mapped_column(Text, nullable=True)
    signed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
