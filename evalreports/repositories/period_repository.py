"""평가 기간 레포지토리 — Evaluation period lookup."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from evalreports.models.evaluation import EvaluationPeriod
from evalreports.repositories.base import BaseRepository


class PeriodRepository(BaseRepository[EvaluationPeriod]):

    def __init__(self) -> None:
        super().__init__(EvaluationPeriod)

    async def get_period(
        self, db: AsyncSession, period_id: int
    ) -> dict[str, Any] | None:
        period = await self.get_by_id(db, period_id)
        if period is None:
            return None
        return {
            "id": period.id,
            "name": period.name,
            "start_date": period.start_date,
            "end_date": period.end_date,
        }


period_repository: PeriodRepository = PeriodRepository()
