"""부서 및 사용자 SQLAlchemy ORM 모델 정의.

Department and User SQLAlchemy ORM model definitions.
A user is both an evaluatee and an evaluator; the department link is optional.

Tables:
    - departments: 부서 (Departments)
    - users: 사용자 계정 (Evaluatees and evaluators)
"""

from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from evalreports.database import Base


class Department(Base):
    """부서 모델 — 사용자의 소속 조직 단위.

    Department model — Organizational unit users belong to.

    Attributes:
        id: 고유 식별자 (Unique identifier)
        name: 부서 표시 이름 (Department display name)

    Relationships:
        users: 소속 사용자 목록 (Users in this department)
    """

    __tablename__ = "departments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    users = relationship("User", back_populates="department")


class User(Base):
    """사용자 모델 — 피평가자이자 평가자.

    User model — Identity for both evaluatees and evaluators.

    Attributes:
        id: 고유 식별자 (Unique identifier)
        full_name: 실명 (Display name used in every report)
        email: 이메일 (Email address, optional)
        department_id: 소속 부서 FK (Department, optional)

    Relationships:
        department: 소속 부서 (Parent department)
    """

    __tablename__ = "users"

    # 사용자 고유 식별자 — User unique identifier
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # 실명 — User's full display name
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 이메일 — Email address (optional)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # 소속 부서 FK — Department (부서 삭제 시 NULL, SET NULL on department deletion)
    department_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("departments.id", ondelete="SET NULL"), nullable=True)

    department = relationship("Department", back_populates="users")
