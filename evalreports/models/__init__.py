"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package registers every model with the metadata.

Modules:
    organization: 부서 및 사용자 (Department and User)
    evaluation: 기간, 주제, 지표, 결과, 의견, 서명
                (Periods, topics, indicators, results, comments, signatures)
"""

from evalreports.models.organization import Department, User
from evalreports.models.evaluation import (
    EvaluationPeriod,
    EvaluationTopic,
    Indicator,
    EvaluationResult,
    EvaluatorComment,
    Signature,
)

__all__ = [
    "Department", "User",
    "EvaluationPeriod", "EvaluationTopic", "Indicator",
    "EvaluationResult", "EvaluatorComment", "Signature",
]
