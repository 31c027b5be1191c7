"""문제 API 테스트"""
import pytest
from sqlalchemy import select

from app.models import Question, SubCategory
from conftest import auth_headers


def bulk_payload(*records, branches=("gatecse",)):
    return {
        "questions": {f"q{i}": record for i, record in enumerate(records, start=1)},
        "examBranchNames": list(branches),
    }


def record(link, title="Round robin", tags=("gate-2020", "process-scheduling"), answer="B", **extra):
    return {
        "title": title,
        "content": f"{title} content",
        "category": "Operating Systems",
        "tags": list(tags),
        "answer": answer,
        "link": link,
        **extra,
    }


async def scalar(session_maker, stmt):
    """요청 세션과 분리된 새 세션으로 값 확인"""
    async with session_maker() as session:
        return await session.scalar(stmt)


@pytest.mark.asyncio
async def test_create_bulk_requires_token(client, taxonomy):
    response = await client.post("/api/questions/create-bulk", json=bulk_payload(record("http://x/1")))
    assert response.status_code == 401
    assert response.json()["detail"] == "Authentication required"


@pytest.mark.asyncio
async def test_create_bulk_rejects_invalid_token(client, taxonomy):
    response = await client.post(
        "/api/questions/create-bulk",
        json=bulk_payload(record("http://x/1")),
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid or expired token"


@pytest.mark.asyncio
async def test_create_bulk_requires_admin(client, taxonomy, normal_user):
    response = await client.post(
        "/api/questions/create-bulk",
        json=bulk_payload(record("http://x/1")),
        headers=auth_headers(normal_user),
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_create_bulk_success(client, taxonomy, admin_user, test_session_maker):
    response = await client.post(
        "/api/questions/create-bulk",
        json=bulk_payload(
            record("http://x/1"),
            record("http://x/2", title="Missing year", tags=("process-scheduling",)),
            record("http://x/3", category="Networks"),
        ),
        headers=auth_headers(admin_user),
    )

    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Questions processing completed"
    assert data["summary"] == {
        "total": 3,
        "successful": 1,
        "failed": 2,
        "alreadyExists": 0,
        "inActiveTags": 0,
    }
    success = data["results"]["success"][0]
    assert success["link"] == "http://x/1"
    assert success["answer"] == "B"
    assert success["questionNumber"] >= 100003

    errors = {error["link"]: error for error in data["results"]["errors"]}
    assert "yearError" in errors["http://x/2"] and errors["http://x/2"]["yearError"]
    assert errors["http://x/3"]["error"] == "Question category 'Networks' not found"

    count = await scalar(
        test_session_maker,
        select(SubCategory.question_count).where(SubCategory.id == taxonomy["scheduling"].id),
    )
    assert count == 1


@pytest.mark.asyncio
async def test_create_bulk_reports_existing_links(client, taxonomy, admin_user):
    headers = auth_headers(admin_user)
    await client.post("/api/questions/create-bulk", json=bulk_payload(record("http://x/1")), headers=headers)

    response = await client.post(
        "/api/questions/create-bulk",
        json=bulk_payload(record("http://x/1"), record("http://x/2")),
        headers=headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["summary"]["alreadyExists"] == 1
    assert data["summary"]["successful"] == 1
    assert data["results"]["alreadyExists"][0] == {
        "error": "Question with this link already exists",
        "yearError": None,
        "link": "http://x/1",
    }


@pytest.mark.asyncio
async def test_create_bulk_unknown_exam_branch(client, taxonomy, admin_user):
    response = await client.post(
        "/api/questions/create-bulk",
        json=bulk_payload(record("http://x/1"), branches=("gatecse", "gateda")),
        headers=auth_headers(admin_user),
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Exam branches not found: gateda"


@pytest.mark.asyncio
async def test_create_bulk_empty_questions(client, taxonomy, admin_user):
    response = await client.post(
        "/api/questions/create-bulk",
        json={"questions": {}, "examBranchNames": ["gatecse"]},
        headers=auth_headers(admin_user),
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Questions must be provided as a non-empty object"


@pytest.mark.asyncio
async def test_create_bulk_validation_error(client, taxonomy, admin_user):
    """필수 필드 누락은 422"""
    invalid = record("http://x/1")
    del invalid["title"]
    response = await client.post(
        "/api/questions/create-bulk",
        json=bulk_payload(invalid),
        headers=auth_headers(admin_user),
    )
    assert response.status_code == 422
    assert "detail" in response.json()


@pytest.mark.asyncio
async def test_create_single_question(client, taxonomy, admin_user):
    headers = auth_headers(admin_user)
    payload = {
        **record("http://x/10", tags=("gatecse-2021", "numerical-answers"), answer="1.5:2"),
        "examBranchNames": ["gatecse"],
    }

    response = await client.post("/api/questions/create", json=payload, headers=headers)

    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Question created successfully"
    assert data["data"]["year"] == 2021
    assert data["data"]["category"] == "Operating Systems"
    assert data["data"]["answer"] == {"min": 1.5, "max": 2.0}

    duplicate = await client.post("/api/questions/create", json=payload, headers=headers)
    assert duplicate.status_code == 400
    assert duplicate.json()["detail"] == "Question with this link already exists"


@pytest.mark.asyncio
async def test_create_single_question_invalid_answer(client, taxonomy, admin_user):
    payload = {
        **record("http://x/11", tags=("gate-2020", "numerical-answers"), answer="abc"),
        "examBranchNames": ["gatecse"],
    }
    response = await client.post("/api/questions/create", json=payload, headers=auth_headers(admin_user))
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_bulk_rejects_non_finite_numerical_answer(client, taxonomy, admin_user, test_session_maker):
    """nan/inf 는 숫자로 인정하지 않는다"""
    response = await client.post(
        "/api/questions/create-bulk",
        json=bulk_payload(
            record("http://x/nan", tags=("gate-2020", "numerical-answers"), answer="nan"),
            record("http://x/inf", tags=("gate-2020", "numerical-answers"), answer="10:inf"),
        ),
        headers=auth_headers(admin_user),
    )

    assert response.status_code == 201
    data = response.json()
    assert data["summary"]["successful"] == 0
    assert data["summary"]["failed"] == 2
    errors = {error["link"]: error["error"] for error in data["results"]["errors"]}
    assert errors["http://x/nan"] == 'Invalid numerical answer format. Expected a number or "min:max"'
    assert errors["http://x/inf"] == 'Invalid numerical answer range format. Expected "min:max"'
    assert await scalar(test_session_maker, select(Question.id)) is None


@pytest.mark.asyncio
async def test_list_questions(client, taxonomy, admin_user, normal_user):
    await client.post(
        "/api/questions/create-bulk",
        json=bulk_payload(
            record("http://x/1", title="Round robin"),
            record("http://x/2", title="Paging basics"),
            record("http://x/3", title="Hidden question", isActive=False),
        ),
        headers=auth_headers(admin_user),
    )

    unauthenticated = await client.get("/api/questions")
    assert unauthenticated.status_code == 401

    response = await client.get("/api/questions", headers=auth_headers(normal_user))
    assert response.status_code == 200
    data = response.json()
    assert data["pagination"] == {"total": 2, "page": 1, "limit": 10, "pages": 1}
    assert {q["title"] for q in data["data"]} == {"Round robin", "Paging basics"}

    searched = await client.get("/api/questions", params={"search": "PAGING"}, headers=auth_headers(normal_user))
    items = searched.json()["data"]
    assert len(items) == 1
    assert items[0]["title"] == "Paging basics"
    assert set(items[0]["tags"]) == {"gate-2020", "process-scheduling"}
    assert items[0]["examBranches"] == ["gatecse"]
    assert items[0]["correctAnswer"] == "B"


@pytest.mark.asyncio
async def test_questions_by_category_subcategory(client, taxonomy, admin_user):
    await client.post(
        "/api/questions/create-bulk",
        json=bulk_payload(
            record("http://x/1", title="Older", tags=("gate-2020", "process-scheduling")),
            record("http://x/2", title="Newer", tags=("gatecse-2021", "process-scheduling")),
            record("http://x/3", title="Other subcategory", tags=("gate-2020",)),
        ),
        headers=auth_headers(admin_user),
    )

    response = await client.get(
        "/api/questions/by-category-subcategory",
        params={"categoryName": "Operating Systems", "subCategoryName": "Process Scheduling"},
    )

    assert response.status_code == 200
    data = response.json()
    assert [q["title"] for q in data["data"]] == ["Newer", "Older"]
    assert data["pagination"]["total"] == 2


@pytest.mark.asyncio
async def test_questions_by_category_not_found(client, taxonomy):
    missing_category = await client.get(
        "/api/questions/by-category-subcategory",
        params={"categoryName": "networks", "subCategoryName": "process-scheduling"},
    )
    assert missing_category.status_code == 404

    missing_sub_category = await client.get(
        "/api/questions/by-category-subcategory",
        params={"categoryName": "operating-systems", "subCategoryName": "deadlocks"},
    )
    assert missing_sub_category.status_code == 404
    assert missing_sub_category.json()["detail"] == "SubCategory 'deadlocks' not found"


@pytest.mark.asyncio
async def test_delete_question_decrements_count(client, taxonomy, admin_user, test_session_maker):
    headers = auth_headers(admin_user)
    created = await client.post("/api/questions/create-bulk", json=bulk_payload(record("http://x/1")), headers=headers)
    question_id = created.json()["results"]["success"][0]["questionId"]

    response = await client.delete(f"/api/questions/{question_id}", headers=headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Question deleted successfully"
    count = await scalar(
        test_session_maker,
        select(SubCategory.question_count).where(SubCategory.id == taxonomy["scheduling"].id),
    )
    assert count == 0
    remaining = await scalar(test_session_maker, select(Question.id).where(Question.id == question_id))
    assert remaining is None

    again = await client.delete(f"/api/questions/{question_id}", headers=headers)
    assert again.status_code == 404


@pytest.mark.asyncio
async def test_normalize_math(client, taxonomy, admin_user, test_session_maker):
    headers = auth_headers(admin_user)
    await client.post(
        "/api/questions/create-bulk",
        json=bulk_payload(
            record("http://x/1", content="Solve $x^2$ now"),
            record("http://x/2", content="No math here"),
        ),
        headers=headers,
    )

    response = await client.post("/api/questions/normalize-math", headers=headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Question content normalized", "total": 2, "updated": 1}
    content = await scalar(test_session_maker, select(Question.content).where(Question.link == "http://x/1"))
    assert content == r"Solve \(x^2\) now"
