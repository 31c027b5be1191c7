"""주제/문제 진도 API 테스트"""
import pytest
import pytest_asyncio

from app.models import Module, Subject, Topic
from conftest import auth_headers


@pytest_asyncio.fixture
async def syllabus(test_db_session):
    """과목 1개, 모듈 2개 (주제 2개 / 0개)"""
    subject = Subject(name="Computer Networks")
    routing = Module(name="Routing", subject=subject)
    empty = Module(name="Security", subject=subject)
    topics = [Topic(name="Distance vector", module=routing), Topic(name="Link state", module=routing)]
    test_db_session.add_all([subject, routing, empty, *topics])
    await test_db_session.commit()
    return {"subject": subject, "routing": routing, "empty": empty, "topics": topics}


@pytest.mark.asyncio
async def test_topic_progress_crud(client, syllabus, normal_user):
    headers = auth_headers(normal_user)
    topic_id = syllabus["topics"][0].id

    missing = await client.get(f"/api/user-topic-progress/{topic_id}", headers=headers)
    assert missing.status_code == 404

    saved = await client.put(f"/api/user-topic-progress/{topic_id}", json={"toRevise": True}, headers=headers)
    assert saved.status_code == 200
    # 복습 필요 표시는 완료로도 저장된다
    assert saved.json()["data"] == {"topicId": topic_id, "isCompleted": True, "toRevise": True}

    fetched = await client.get(f"/api/user-topic-progress/{topic_id}", headers=headers)
    assert fetched.json()["data"]["toRevise"] is True

    unknown_topic = await client.put("/api/user-topic-progress/9999", json={"isCompleted": True}, headers=headers)
    assert unknown_topic.status_code == 404

    deleted = await client.delete(f"/api/user-topic-progress/{topic_id}", headers=headers)
    assert deleted.status_code == 200
    listed = await client.get("/api/user-topic-progress", headers=headers)
    assert listed.json()["data"] == []


@pytest.mark.asyncio
async def test_topic_progress_is_per_user(client, syllabus, normal_user, admin_user):
    topic_id = syllabus["topics"][0].id
    await client.put(
        f"/api/user-topic-progress/{topic_id}",
        json={"isCompleted": True},
        headers=auth_headers(normal_user),
    )

    other = await client.get("/api/user-topic-progress", headers=auth_headers(admin_user))
    assert other.json()["data"] == []


@pytest.mark.asyncio
async def test_bulk_update_validates_every_item(client, syllabus, normal_user):
    headers = auth_headers(normal_user)
    first, second = (topic.id for topic in syllabus["topics"])

    no_flags = await client.post(
        "/api/user-topic-progress/bulk-update",
        json={"updates": [{"topicId": first, "isCompleted": True}, {"topicId": second}]},
        headers=headers,
    )
    assert no_flags.status_code == 400
    assert no_flags.json()["detail"] == "Update at index 1 must set at least one of isCompleted or toRevise"

    no_topic = await client.post(
        "/api/user-topic-progress/bulk-update",
        json={"updates": [{"isCompleted": True}]},
        headers=headers,
    )
    assert no_topic.status_code == 400
    assert no_topic.json()["detail"] == "Update at index 0 is missing topicId"

    # 검증 실패 시 앞 항목도 저장되지 않는다
    listed = await client.get("/api/user-topic-progress", headers=headers)
    assert listed.json()["data"] == []

    updated = await client.post(
        "/api/user-topic-progress/bulk-update",
        json={"updates": [{"topicId": first, "isCompleted": True}, {"topicId": second, "toRevise": True}]},
        headers=headers,
    )
    assert updated.status_code == 200
    assert len(updated.json()["data"]) == 2

    checked = await client.post(
        "/api/user-topic-progress/bulk-check",
        json={"topicIds": [second]},
        headers=headers,
    )
    assert checked.json()["data"] == [{"topicId": second, "isCompleted": True, "toRevise": True}]


@pytest.mark.asyncio
async def test_topic_progress_summary(client, syllabus, normal_user):
    headers = auth_headers(normal_user)
    await client.put(
        f"/api/user-topic-progress/{syllabus['topics'][0].id}",
        json={"isCompleted": True},
        headers=headers,
    )

    response = await client.get("/api/user-topic-progress/summary", headers=headers)

    assert response.status_code == 200
    summary = response.json()["data"]
    assert summary["totalTopics"] == 2
    assert summary["completed"] == 1
    assert summary["completionPercentage"] == "50.00"
    modules = {m["moduleName"]: m for m in summary["subjects"][0]["modules"]}
    assert modules["Routing"]["completionPercentage"] == "50.00"
    assert modules["Security"]["totalTopics"] == 0
    assert modules["Security"]["completionPercentage"] == "0.00"


@pytest.mark.asyncio
async def test_question_progress(client, taxonomy, admin_user, normal_user):
    created = await client.post(
        "/api/questions/create-bulk",
        json={
            "questions": {
                "q1": {
                    "title": "Round robin",
                    "content": "Which process runs next?",
                    "category": "operating-systems",
                    "tags": ["gate-2020", "process-scheduling"],
                    "answer": "B",
                    "link": "http://x/1",
                },
                "q2": {
                    "title": "FCFS",
                    "content": "Average waiting time?",
                    "category": "operating-systems",
                    "tags": ["gate-2020"],
                    "answer": "A",
                    "link": "http://x/2",
                },
            },
            "examBranchNames": ["gatecse"],
        },
        headers=auth_headers(admin_user),
    )
    question_number = created.json()["results"]["success"][0]["questionNumber"]
    headers = auth_headers(normal_user)

    missing = await client.put("/api/user-question-progress", json={"questionNumber": 1}, headers=headers)
    assert missing.status_code == 404

    saved = await client.put(
        "/api/user-question-progress",
        json={"questionNumber": question_number, "timeSpent": 90, "toRevise": True, "remarks": "tricky"},
        headers=headers,
    )
    assert saved.status_code == 200
    assert saved.json()["message"] == "Progress saved successfully"
    data = saved.json()["data"]
    assert data["questionNumber"] == question_number
    assert data["timeSpent"] == 90
    assert data["isCompleted"] is True
    assert data["attemptedAt"]

    fetched = await client.post(
        "/api/user-question-progress/bulk-get",
        json={"questionNumbers": [question_number, 1]},
        headers=headers,
    )
    assert [p["remarks"] for p in fetched.json()["data"]] == ["tricky"]

    summary = await client.get("/api/user-question-progress/summary", headers=headers)
    body = summary.json()["data"]
    assert body["totalQuestions"] == 2
    assert body["totalCompleted"] == 1
    assert body["totalToRevise"] == 1
    assert body["overallCompletionPercentage"] == "50.00"
    assert body["categorySummaries"][0]["categoryName"] == "operating-systems"


@pytest.mark.asyncio
async def test_get_single_question_progress(client, taxonomy, admin_user, normal_user):
    created = await client.post(
        "/api/questions/create-bulk",
        json={
            "questions": {
                "q1": {
                    "title": "SJF",
                    "content": "Which job runs first?",
                    "category": "operating-systems",
                    "tags": ["gate-2020", "process-scheduling"],
                    "answer": "C",
                    "link": "http://x/sjf",
                }
            },
            "examBranchNames": ["gatecse"],
        },
        headers=auth_headers(admin_user),
    )
    question_number = created.json()["results"]["success"][0]["questionNumber"]
    headers = auth_headers(normal_user)

    unknown = await client.post("/api/user-question-progress/get", json={"questionNumber": 1}, headers=headers)
    assert unknown.status_code == 404
    assert unknown.json()["detail"] == "Question not found: 1"

    no_progress = await client.post(
        "/api/user-question-progress/get",
        json={"questionNumber": question_number},
        headers=headers,
    )
    assert no_progress.status_code == 404
    assert no_progress.json()["detail"] == "No progress found for this question"

    await client.put(
        "/api/user-question-progress",
        json={"questionNumber": question_number, "timeSpent": 45, "remarks": "easy"},
        headers=headers,
    )
    fetched = await client.post(
        "/api/user-question-progress/get",
        json={"questionNumber": question_number},
        headers=headers,
    )
    assert fetched.status_code == 200
    assert fetched.json()["message"] == "Progress retrieved successfully"
    data = fetched.json()["data"]
    assert data["questionNumber"] == question_number
    assert data["timeSpent"] == 45
    assert data["remarks"] == "easy"

    # 다른 사용자의 진도는 보이지 않는다
    other = await client.post(
        "/api/user-question-progress/get",
        json={"questionNumber": question_number},
        headers=auth_headers(admin_user),
    )
    assert other.status_code == 404
