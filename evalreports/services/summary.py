"""점수 집계 — Summary reducer for the individual report.

Pure functions, no database access. A row is one evaluation result joined
with its indicator; the reducer folds a scope's rows into a ReportSummary.
"""

import math
from typing import Any, Iterable

from evalreports.schemas.report import ReportSummary


def as_number(value: Any) -> float:
    """점수/가중치를 숫자로 변환 — null이나 숫자가 아닌 값은 0.

    Accepts ints, floats, Decimals and numeric strings.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


def whole_number(value: float) -> float | int:
    """정수로 떨어지는 합계는 int로 — 14.0 becomes 14, 14.5 stays 14.5."""
    return int(value) if value.is_integer() else value


def format_average(total_score: float, total_count: int) -> str | int:
    """평균 점수 — 행 수로 나눈 값을 소수 둘째 자리 문자열로, 행이 없으면 0.

    Divides by the number of rows, not the number of non-null scores.
    """
    if total_count == 0:
        return 0
    return f"{total_score / total_count:.2f}"


def reduce_results(
    rows: Iterable[dict[str, Any]],
    score_key: str = "score",
    weight_key: str = "indicator_weight",
) -> ReportSummary:
    """결과 행을 요약으로 축약합니다.

    Args:
        rows: 조인된 결과 행 (Joined result rows of one evaluatee/period scope)
        score_key: 점수 컬럼 이름 (Score column name)
        weight_key: 지표 가중치 컬럼 이름 (Indicator weight column name)

    Returns:
        ReportSummary: 행 수, 점수 합계, 가중치 합계, 평균
    """
    total_count = 0
    total_score = 0.0
    total_weight = 0.0

    for row in rows:
        total_count += 1
        total_score += as_number(row.get(score_key))
        total_weight += as_number(row.get(weight_key))

    return ReportSummary(
        total_indicators=total_count,
        total_score=whole_number(total_score),
        total_weight=whole_number(total_weight),
        avg_score=format_average(total_score, total_count),
    )
