"""기본 조회 레포지토리 — 모든 레포지토리의 부모 클래스.

Base read-only repository — Parent class for all domain repositories.
The report engine never writes, so only lookups are provided.

Usage:
    class PeriodRepository(BaseRepository[EvaluationPeriod]):
        def __init__(self) -> None:
            super().__init__(EvaluationPeriod)
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from evalreports.database import Base

# 제네릭 타입 변수 — SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """제네릭 조회 레포지토리.

    Generic read-only repository providing common lookups.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        self.model: type[ModelType] = model

    async def get_by_id(
        self,
        db: AsyncSession,
        record_id: int,
    ) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다.

        Retrieve a single record by its primary key.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 조회할 레코드의 ID (ID of the record to retrieve)

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        query: Select = select(self.model).where(self.model.id == record_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def exists(
        self,
        db: AsyncSession,
        filters: dict[str, Any],
    ) -> bool:
        """주어진 조건에 일치하는 레코드가 존재하는지 확인합니다.

        Check if a record matching the given filters exists.
        Keys that are not columns of the model are ignored.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            filters: 검색 조건 딕셔너리 (Filter criteria dictionary)

        Returns:
            bool: 레코드 존재 여부 (Whether a matching record exists)
        """
        query: Select = select(func.count()).select_from(self.model)
        for column_name, value in filters.items():
            if hasattr(self.model, column_name):
                query = query.where(getattr(self.model, column_name) == value)

        count: int = (await db.execute(query)).scalar() or 0
        return count > 0
