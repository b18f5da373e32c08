"""리포트 Pydantic 스키마 — Report view shapes.

Report Pydantic schema definitions.
Individual report (evaluatee, period, joined records, summary) and the
grouped rows of the overall, department and topic views.
"""

from datetime import date
from typing import Any

from pydantic import BaseModel


# === 개인 리포트 (Individual) 스키마 ===

class EvaluateeInfo(BaseModel):
    """피평가자 정보 — 부서명 포함."""
    id: int
    full_name: str
    email: str | None = None
    department_id: int | None = None
    department_name: str | None = None


class PeriodInfo(BaseModel):
    """평가 기간 정보."""
    id: int
    name: str
    start_date: date | None = None
    end_date: date | None = None


class ReportSummary(BaseModel):
    """개인 리포트 요약.

    Attributes:
        total_indicators: 결과 행 수 (Result rows, null scores included)
        total_score: 점수 합계 (Sum of scores, null counted as 0)
        total_weight: 지표 가중치 합계 (Sum of indicator weights, null counted as 0)
        avg_score: total_score / total_indicators 소수 둘째 자리 문자열,
                   결과가 없으면 정수 0 ("7.00", or 0 for an empty scope)
    """
    total_indicators: int = 0
    total_score: int | float = 0
    total_weight: int | float = 0
    avg_score: str | int = 0


class IndividualReport(BaseModel):
    """개인 리포트 — results/comments/signatures는 저장된 컬럼을 그대로 전달."""
    evaluatee: EvaluateeInfo
    period: PeriodInfo | None = None
    results: list[dict[str, Any]] = []
    comments: list[dict[str, Any]] = []
    signatures: list[dict[str, Any]] = []
    summary: ReportSummary


# === 그룹 리포트 (Grouped) 스키마 ===

class PersonAggregate(BaseModel):
    """피평가자별 집계 행.

    avg_score는 DB AVG 결과 (null 점수 제외), 모든 점수가 null이면 None.
    """
    evaluatee_id: int | None = None
    evaluatee_name: str | None = None
    total_indicators: int = 0
    avg_score: float | None = None
    total_weight: int | float = 0


class OverallPersonAggregate(PersonAggregate):
    """전체 리포트 행 — 부서명 포함."""
    department_name: str | None = None


class DepartmentPersonAggregate(PersonAggregate):
    """부서 리포트 행 — 이메일 포함."""
    email: str | None = None


class TopicAggregate(BaseModel):
    """주제별 집계 행."""
    topic_id: int | None = None
    topic_name: str | None = None
    topic_weight: float | None = None
    total_results: int = 0
    avg_score: float | None = None
    total_weight: int | float = 0
