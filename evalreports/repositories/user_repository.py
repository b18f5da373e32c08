"""사용자 레포지토리 — 피평가자 조회.

User Repository — Evaluatee lookup joined with the department name.
"""

from typing import Any

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from evalreports.models.organization import Department, User
from evalreports.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):

    def __init__(self) -> None:
        super().__init__(User)

    async def get_evaluatee(
        self, db: AsyncSession, evaluatee_id: int
    ) -> dict[str, Any] | None:
        """피평가자와 부서명을 조회합니다. 없으면 None.

        Returns:
            dict | None: {id, full_name, email, department_id, department_name}
        """
        query: Select = (
            select(
                User.id,
                User.full_name,
                User.email,
                User.department_id,
                Department.name.label("department_name"),
            )
            .outerjoin(Department, User.department_id == Department.id)
            .where(User.id == evaluatee_id)
        )
        result = await db.execute(query)
        row = result.first()
        return dict(row._mapping) if row is not None else None


user_repository: UserRepository = UserRepository()
