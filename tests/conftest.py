"""테스트 인프라 — 인메모리 DB, 세션, 평가 데이터 픽스처.

Test infrastructure — In-memory database, session, and evaluation data fixtures.
Defaults to SQLite through aiosqlite; set TEST_DATABASE_URL to run the same
suite against PostgreSQL. The schema is created per test and dropped afterwards.
"""

import os
from collections.abc import AsyncGenerator
from datetime import date, datetime, timezone

import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from evalreports.database import Base
from evalreports.models import (
    Department,
    EvaluationPeriod,
    EvaluationResult,
    EvaluationTopic,
    EvaluatorComment,
    Indicator,
    Signature,
    User,
)

# ---------------------------------------------------------------------------
# 테스트 DB 설정
# ---------------------------------------------------------------------------
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 스키마를 생성하고 종료 시 삭제합니다."""
    if TEST_DATABASE_URL.startswith("sqlite"):
        # 인메모리 DB를 하나의 연결로 공유 — one shared connection keeps the in-memory DB alive
        eng = create_async_engine(
            TEST_DATABASE_URL,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        eng = create_async_engine(TEST_DATABASE_URL, pool_pre_ping=True)

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        yield session
        await session.rollback()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 평가 데이터 생성
# ---------------------------------------------------------------------------
T1 = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
T2 = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)
T3 = datetime(2026, 3, 3, 9, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def departments(db: AsyncSession) -> dict[str, Department]:
    """개발팀, 영업팀."""
    result = {
        "eng": Department(id=1, name="Engineering"),
        "sales": Department(id=2, name="Sales"),
    }
    db.add_all(result.values())
    await db.flush()
    return result


@pytest_asyncio.fixture
async def users(db: AsyncSession, departments) -> dict[str, User]:
    """피평가자 3명, 평가자 2명."""
    result = {
        "carol": User(id=1, full_name="Carol", email="carol@test.com", department_id=1),
        "alice": User(id=2, full_name="Alice", email="alice@test.com", department_id=1),
        "bob": User(id=3, full_name="Bob", email="bob@test.com", department_id=2),
        "kim": User(id=10, full_name="Evaluator Kim", email="kim@test.com"),
        "lee": User(id=11, full_name="Evaluator Lee"),
    }
    db.add_all(result.values())
    await db.flush()
    return result


@pytest_asyncio.fixture
async def periods(db: AsyncSession) -> dict[str, EvaluationPeriod]:
    result = {
        "h1": EvaluationPeriod(id=1, name="2026 H1", start_date=date(2026, 1, 1), end_date=date(2026, 6, 30)),
        "h2": EvaluationPeriod(id=2, name="2026 H2", start_date=date(2026, 7, 1), end_date=date(2026, 12, 31)),
    }
    db.add_all(result.values())
    await db.flush()
    return result


@pytest_asyncio.fixture
async def indicators(db: AsyncSession) -> dict[int, Indicator]:
    """주제 1(Quality) — 지표 2, 5 / 주제 2(Teamwork) — 지표 1.

    Indicator ids are chosen so that id order and topic order disagree.
    """
    db.add_all([
        EvaluationTopic(id=1, title="Quality", weight=40),
        EvaluationTopic(id=2, title="Teamwork", weight=60),
    ])
    await db.flush()
    result = {
        1: Indicator(id=1, topic_id=2, name="Collaboration", type="score", weight=70),
        2: Indicator(id=2, topic_id=1, name="Accuracy", type="score", weight=30),
        5: Indicator(id=5, topic_id=1, name="Timeliness", type="rubric", weight=None),
    }
    db.add_all(result.values())
    await db.flush()
    return result


@pytest_asyncio.fixture
async def catalog(users, periods, indicators) -> None:
    """사용자, 기간, 주제, 지표 전체."""
    return None


async def add_result(
    db: AsyncSession,
    evaluatee: int,
    indicator: int,
    score: float | None,
    evaluator: int = 10,
    period: int = 1,
    **extra,
) -> EvaluationResult:
    """평가 결과 한 건을 추가합니다."""
    result = EvaluationResult(
        evaluatee_id=evaluatee,
        evaluator_id=evaluator,
        period_id=period,
        indicator_id=indicator,
        score=score,
        **extra,
    )
    db.add(result)
    await db.flush()
    await db.refresh(result)
    return result


async def add_comment(
    db: AsyncSession, evaluatee: int, evaluator: int, text: str, created_at: datetime, period: int = 1
) -> EvaluatorComment:
    comment = EvaluatorComment(
        evaluatee_id=evaluatee,
        evaluator_id=evaluator,
        period_id=period,
        comment=text,
        created_at=created_at,
    )
    db.add(comment)
    await db.flush()
    return comment


async def add_signature(
    db: AsyncSession, result_id: int, evaluator: int, signed_at: datetime
) -> Signature:
    signature = Signature(result_id=result_id, evaluator_id=evaluator, signed_at=signed_at)
    db.add(signature)
    await db.flush()
    return signature
