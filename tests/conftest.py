"""공통 테스트 픽스처 (in-memory SQLite + ASGI 클라이언트)"""
import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "test")

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.security import create_access_token, hash_password
from app.main import app
from app.models import (
    Base,
    ExamBranch,
    QuestionCategory,
    QuestionTag,
    SubCategory,
    Subject,
    User,
)
from app.models.base import create_session_maker, get_db
from app.schemas.user import TokenPayload


@pytest_asyncio.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_maker(test_engine):
    return create_session_maker(test_engine)


@pytest_asyncio.fixture
async def test_db_session(test_session_maker):
    """테스트 데이터 준비/검증용 세션"""
    async with test_session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(test_session_maker):
    """요청마다 새 세션을 쓰는 ASGI 클라이언트"""

    async def override_get_db():
        async with test_session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def make_token(user: User) -> str:
    return create_access_token(
        TokenPayload(user_id=user.user_id, email=user.email, name=user.name, is_admin=user.is_admin)
    )


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user)}"}


async def create_user(session, email: str, is_admin: bool = False, password: str = "secret123") -> User:
    user = User(
        email=email,
        name=email.split("@")[0],
        password_hash=hash_password(password),
        is_admin=is_admin,
    )
    session.add(user)
    await session.commit()
    return user


@pytest_asyncio.fixture
async def admin_user(test_db_session):
    return await create_user(test_db_session, "admin@example.com", is_admin=True)


@pytest_asyncio.fixture
async def normal_user(test_db_session):
    return await create_user(test_db_session, "student@example.com")


@pytest_asyncio.fixture
async def taxonomy(test_db_session):
    """Operating System 과목, operating-systems 분류/세부분류, gatecse 시험 분야, 예약 태그"""
    subject = Subject(name="Operating System")
    category = QuestionCategory(name="operating-systems", subject=subject)
    self_sub_category = SubCategory(name="operating-systems", question_categories=[category])
    scheduling = SubCategory(name="process-scheduling", question_categories=[category])
    branch = ExamBranch(name="gatecse", exam_tag_names=["gate-2020", "gatecse-2021"])
    tags = [QuestionTag(name=name) for name in ("multiple-selects", "numerical-answers", "descriptive")]
    test_db_session.add_all([subject, category, self_sub_category, scheduling, branch, *tags])
    await test_db_session.commit()
    return {
        "subject": subject,
        "category": category,
        "sub_category": self_sub_category,
        "scheduling": scheduling,
        "branch": branch,
    }
