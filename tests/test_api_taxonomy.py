"""과목/분류/세부분류/태그/시험 분야 API 테스트"""
import pytest
from sqlalchemy import select

from app.models import QuestionCategory, QuestionTag
from conftest import auth_headers


@pytest.mark.asyncio
async def test_subjects_list_and_create(client, admin_user, normal_user):
    headers = auth_headers(admin_user)

    created = await client.post("/api/subjects", json={"name": "Databases"}, headers=headers)
    assert created.status_code == 201
    assert created.json() == {"id": created.json()["id"], "name": "Databases", "questionCount": 0}

    duplicate = await client.post("/api/subjects", json={"name": "Databases"}, headers=headers)
    assert duplicate.status_code == 409

    forbidden = await client.post("/api/subjects", json={"name": "Networks"}, headers=auth_headers(normal_user))
    assert forbidden.status_code == 403

    listed = await client.get("/api/subjects")
    assert listed.status_code == 200
    assert listed.json()["total"] == 1
    assert listed.json()["subjects"][0]["name"] == "Databases"


@pytest.mark.asyncio
async def test_delete_subject_blocked_by_categories(client, taxonomy, admin_user):
    response = await client.delete(f"/api/subjects/{taxonomy['subject'].id}", headers=auth_headers(admin_user))
    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot delete subject while question categories reference it"


@pytest.mark.asyncio
async def test_syllabus_tree(client, admin_user, normal_user):
    headers = auth_headers(admin_user)
    subject = (await client.post("/api/subjects", json={"name": "Algorithms"}, headers=headers)).json()
    module = await client.post("/api/modules", json={"name": "Sorting", "subjectId": subject["id"]}, headers=headers)
    assert module.status_code == 201
    module_id = module.json()["id"]

    topics = await client.post(
        "/api/topics/bulk",
        json={"moduleId": module_id, "topics": [{"name": "Merge sort", "length": 30}, {"name": "Heap sort", "difficulty": "Hard"}]},
        headers=headers,
    )
    assert topics.status_code == 201
    assert topics.json()["total"] == 2

    missing_module = await client.post(
        "/api/topics/bulk",
        json={"moduleId": 9999, "topics": [{"name": "Radix sort"}]},
        headers=headers,
    )
    assert missing_module.status_code == 404

    listed = await client.get("/api/topics", params={"moduleId": module_id})
    assert [t["name"] for t in listed.json()["topics"]] == ["Merge sort", "Heap sort"]

    assert (await client.get("/api/syllabus")).status_code == 401
    syllabus = await client.get("/api/syllabus", headers=auth_headers(normal_user))
    assert syllabus.status_code == 200
    tree = syllabus.json()["subjects"]
    assert tree[0]["name"] == "Algorithms"
    assert tree[0]["modules"][0]["name"] == "Sorting"
    assert len(tree[0]["modules"][0]["topics"]) == 2


@pytest.mark.asyncio
async def test_create_question_category_normalizes_name(client, taxonomy, admin_user):
    response = await client.post(
        "/api/question-categories",
        json={"name": "Memory Management", "subjectId": taxonomy["subject"].id},
        headers=auth_headers(admin_user),
    )
    assert response.status_code == 201
    assert response.json()["name"] == "memory-management"

    listed = await client.get("/api/question-categories", params={"subject": "Operating-System"})
    names = {c["name"] for c in listed.json()["categories"]}
    assert names == {"operating-systems", "memory-management"}


@pytest.mark.asyncio
async def test_bulk_categories_all_or_nothing(client, taxonomy, admin_user, test_session_maker):
    headers = auth_headers(admin_user)

    rejected = await client.post(
        "/api/question-categories/create-bulk",
        json={
            "categories": [
                {"name": "Deadlocks", "subjectName": "Operating System"},
                {"name": "Operating Systems", "subjectId": taxonomy["subject"].id},
            ]
        },
        headers=headers,
    )
    assert rejected.status_code == 400
    assert rejected.json()["detail"] == "Some categories already exist: operating-systems"

    async with test_session_maker() as session:
        deadlocks = await session.scalar(select(QuestionCategory.id).where(QuestionCategory.name == "deadlocks"))
    assert deadlocks is None

    missing_subject = await client.post(
        "/api/question-categories/create-bulk",
        json={"categories": [{"name": "Deadlocks", "subjectName": "Compilers"}]},
        headers=headers,
    )
    assert missing_subject.status_code == 400

    both_references = await client.post(
        "/api/question-categories/create-bulk",
        json={"categories": [{"name": "Deadlocks", "subjectName": "Operating System", "subjectId": 1}]},
        headers=headers,
    )
    assert both_references.status_code == 422

    created = await client.post(
        "/api/question-categories/create-bulk",
        json={"categories": [{"name": "Deadlocks", "subjectName": "Operating System"}]},
        headers=headers,
    )
    assert created.status_code == 201
    assert [c["name"] for c in created.json()["categories"]] == ["deadlocks"]


@pytest.mark.asyncio
async def test_sub_category_bulk_merges_links(client, taxonomy, admin_user):
    headers = auth_headers(admin_user)
    await client.post(
        "/api/question-categories",
        json={"name": "memory-management", "subjectId": taxonomy["subject"].id},
        headers=headers,
    )

    response = await client.post(
        "/api/sub-categories/create-bulk",
        json={
            "subCategories": [
                {"name": "paging", "questionCategoryNames": ["memory-management"]},
                {"name": "process-scheduling", "questionCategoryNames": ["operating-systems", "memory-management"]},
                {"name": "sockets", "questionCategoryNames": ["networks"]},
            ]
        },
        headers=headers,
    )

    assert response.status_code == 207
    results = response.json()["results"]
    assert [(s["name"], s["isNew"]) for s in results["success"]] == [("paging", True), ("process-scheduling", False)]
    assert results["failed"] == [{"name": "sockets", "reason": 'Question category with name "networks" not found'}]

    listed = await client.get("/api/sub-categories", params={"categoryName": "memory-management"})
    assert {s["name"] for s in listed.json()["subCategories"]} == {"paging", "process-scheduling"}
    scheduling = next(s for s in listed.json()["subCategories"] if s["name"] == "process-scheduling")
    assert len(scheduling["questionCategoryIds"]) == 2


@pytest.mark.asyncio
async def test_question_tag_toggle(client, taxonomy, admin_user, test_session_maker):
    headers = auth_headers(admin_user)
    created = await client.post("/api/question-tags", json={"name": "paging"}, headers=headers)
    assert created.status_code == 201
    tag_id = created.json()["id"]

    duplicate = await client.post("/api/question-tags", json={"name": "paging"}, headers=headers)
    assert duplicate.status_code == 409

    toggled = await client.patch(f"/api/question-tags/{tag_id}", json={"isActive": False}, headers=headers)
    assert toggled.status_code == 200
    assert toggled.json()["isActive"] is False

    async with test_session_maker() as session:
        is_active = await session.scalar(select(QuestionTag.is_active).where(QuestionTag.id == tag_id))
    assert is_active is False

    missing = await client.patch("/api/question-tags/9999", json={"isActive": True}, headers=headers)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_exam_branch_tag_names(client, taxonomy, admin_user):
    headers = auth_headers(admin_user)

    added = await client.post(
        "/api/exam-branches/gatecse/tag-names",
        json={"examTagNames": ["gate-2020", "gatecse-2022"]},
        headers=headers,
    )
    assert added.status_code == 200
    assert added.json()["message"] == "1 tag name(s) added successfully"
    assert added.json()["addedTags"] == ["gatecse-2022"]

    again = await client.post(
        "/api/exam-branches/gatecse/tag-names",
        json={"examTagNames": ["gate-2020"]},
        headers=headers,
    )
    assert again.status_code == 400

    renamed = await client.put(
        "/api/exam-branches/gatecse/tag-names",
        json={"oldTagName": "gate-2020", "newTagName": "gatecse-2020"},
        headers=headers,
    )
    assert renamed.status_code == 200
    assert renamed.json()["examBranch"]["examTagNames"] == ["gatecse-2020", "gatecse-2021", "gatecse-2022"]

    clash = await client.put(
        "/api/exam-branches/gatecse/tag-names",
        json={"oldTagName": "gatecse-2020", "newTagName": "gatecse-2021"},
        headers=headers,
    )
    assert clash.status_code == 400

    removed = await client.delete("/api/exam-branches/gatecse/tag-names/gatecse-2021", headers=headers)
    assert removed.status_code == 200
    assert removed.json()["message"] == "Tag name removed successfully"
    assert removed.json()["examBranch"]["examTagNames"] == ["gatecse-2020", "gatecse-2022"]

    missing_branch = await client.delete("/api/exam-branches/gateda/tag-names/gate-2020", headers=headers)
    assert missing_branch.status_code == 404


@pytest.mark.asyncio
async def test_exam_branch_create_and_list(client, admin_user):
    headers = auth_headers(admin_user)
    created = await client.post(
        "/api/exam-branches",
        json={"name": "gateda", "examTagNames": ["gateda-2024", "gateda-2024"]},
        headers=headers,
    )
    assert created.status_code == 201
    assert created.json()["examTagNames"] == ["gateda-2024"]

    duplicate = await client.post("/api/exam-branches", json={"name": "gateda"}, headers=headers)
    assert duplicate.status_code == 409

    listed = await client.get("/api/exam-branches")
    assert [b["name"] for b in listed.json()["examBranches"]] == ["gateda"]


async def create_question(client, headers, link, tags=("gate-2020", "process-scheduling")):
    """operating-systems 분류에 문제 하나 등록"""
    response = await client.post(
        "/api/questions/create-bulk",
        json={
            "questions": {
                "q1": {
                    "title": "Round robin",
                    "content": "Which process runs next?",
                    "category": "operating-systems",
                    "tags": list(tags),
                    "answer": "B",
                    "link": link,
                }
            },
            "examBranchNames": ["gatecse"],
        },
        headers=headers,
    )
    assert response.json()["summary"]["successful"] == 1


@pytest.mark.asyncio
async def test_replace_subjects(client, admin_user, normal_user):
    headers = auth_headers(admin_user)
    await client.post("/api/subjects", json={"name": "Databases"}, headers=headers)

    missing = await client.post("/api/subjects/replace-all", json={}, headers=headers)
    assert missing.status_code == 400
    assert missing.json()["detail"] == "At least one subject is required"

    forbidden = await client.post(
        "/api/subjects/replace-all",
        json={"subjects": ["Algorithms"]},
        headers=auth_headers(normal_user),
    )
    assert forbidden.status_code == 403

    replaced = await client.post(
        "/api/subjects/replace-all",
        json={"subjects": ["Algorithms", "Compilers", "Algorithms"]},
        headers=headers,
    )
    assert replaced.status_code == 201
    assert replaced.json()["message"] == "Old subjects removed and new subjects created successfully"
    assert [s["name"] for s in replaced.json()["subjectsCreated"]] == ["Algorithms", "Compilers"]

    listed = await client.get("/api/subjects")
    assert [s["name"] for s in listed.json()["subjects"]] == ["Algorithms", "Compilers"]


@pytest.mark.asyncio
async def test_replace_subjects_blocked_by_categories(client, taxonomy, admin_user):
    response = await client.post(
        "/api/subjects/replace-all",
        json={"subjects": ["Algorithms"]},
        headers=auth_headers(admin_user),
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot replace subjects while question categories or modules reference them"

    listed = await client.get("/api/subjects")
    assert [s["name"] for s in listed.json()["subjects"]] == ["Operating System"]


@pytest.mark.asyncio
async def test_delete_question_categories_bulk(client, taxonomy, admin_user, test_session_maker):
    headers = auth_headers(admin_user)
    created = await client.post(
        "/api/question-categories/create-bulk",
        json={
            "categories": [
                {"name": "Memory Management", "subjectId": taxonomy["subject"].id},
                {"name": "Deadlocks", "subjectId": taxonomy["subject"].id},
            ]
        },
        headers=headers,
    )
    deadlocks_id = created.json()["categories"][1]["id"]
    await client.post(
        "/api/sub-categories/create-bulk",
        json={"subCategories": [{"name": "paging", "questionCategoryNames": ["memory-management"]}]},
        headers=headers,
    )
    await create_question(client, headers, "http://x/os-1")

    neither = await client.request(
        "DELETE", "/api/question-categories/delete-bulk", json={"categories": [{}]}, headers=headers
    )
    assert neither.status_code == 400
    assert neither.json()["detail"] == "Each category must have a name or id"

    both = await client.request(
        "DELETE",
        "/api/question-categories/delete-bulk",
        json={"categories": [{"id": deadlocks_id, "name": "deadlocks"}]},
        headers=headers,
    )
    assert both.status_code == 400
    assert both.json()["detail"] == "Both id and name cannot be provided. Provide only one."

    unknown = await client.request(
        "DELETE",
        "/api/question-categories/delete-bulk",
        json={"categories": [{"name": "memory-management"}, {"name": "networks"}]},
        headers=headers,
    )
    assert unknown.status_code == 404
    assert unknown.json()["detail"] == "Category 'networks' not found"

    referenced = await client.request(
        "DELETE",
        "/api/question-categories/delete-bulk",
        json={"categories": [{"id": deadlocks_id}, {"name": "operating-systems"}]},
        headers=headers,
    )
    assert referenced.status_code == 400
    assert referenced.json()["detail"] == "Cannot delete category while questions reference it: operating-systems"

    # 실패한 요청은 어떤 분류도 지우지 않는다
    async with test_session_maker() as session:
        remaining = set((await session.scalars(select(QuestionCategory.name))).all())
    assert remaining == {"operating-systems", "memory-management", "deadlocks"}

    deleted = await client.request(
        "DELETE",
        "/api/question-categories/delete-bulk",
        json={"categories": [{"name": "Memory Management"}, {"id": deadlocks_id}]},
        headers=headers,
    )
    assert deleted.status_code == 200
    assert deleted.json()["message"] == "Question categories deleted successfully"
    assert [c["name"] for c in deleted.json()["deletedCategories"]] == ["memory-management", "deadlocks"]

    listed = await client.get("/api/question-categories")
    assert [c["name"] for c in listed.json()["categories"]] == ["operating-systems"]
    paging = await client.get("/api/sub-categories", params={"categoryName": "memory-management"})
    assert paging.status_code == 404


@pytest.mark.asyncio
async def test_delete_sub_categories_bulk(client, taxonomy, admin_user, normal_user):
    headers = auth_headers(admin_user)
    await client.post(
        "/api/sub-categories/create-bulk",
        json={"subCategories": [{"name": "paging", "questionCategoryNames": ["operating-systems"]}]},
        headers=headers,
    )
    await create_question(client, headers, "http://x/os-2")

    both = await client.request(
        "DELETE",
        "/api/sub-categories/delete-bulk",
        json={"subCategoryNames": ["paging"], "subCategoryIds": [1]},
        headers=headers,
    )
    assert both.status_code == 400
    assert both.json()["detail"] == "Both subCategoryNames and subCategoryIds cannot be provided. Provide only one."

    neither = await client.request("DELETE", "/api/sub-categories/delete-bulk", json={}, headers=headers)
    assert neither.status_code == 400
    assert neither.json()["detail"] == "At least one subcategory name or id is required"

    forbidden = await client.request(
        "DELETE",
        "/api/sub-categories/delete-bulk",
        json={"subCategoryNames": ["paging"]},
        headers=auth_headers(normal_user),
    )
    assert forbidden.status_code == 403

    by_name = await client.request(
        "DELETE",
        "/api/sub-categories/delete-bulk",
        json={"subCategoryNames": ["Paging", "process-scheduling", "sockets"]},
        headers=headers,
    )
    assert by_name.status_code == 207
    results = by_name.json()["results"]
    assert by_name.json()["message"] == "Bulk subcategory deletion completed"
    assert results["success"] == [{"identifier": "Paging"}]
    assert results["failed"] == [
        {"identifier": "process-scheduling", "reason": "Cannot delete subcategory while questions reference it"},
        {"identifier": "sockets", "reason": "Subcategory not found"},
    ]

    by_id = await client.request(
        "DELETE",
        "/api/sub-categories/delete-bulk",
        json={"subCategoryIds": [taxonomy["sub_category"].id, 9999]},
        headers=headers,
    )
    assert by_id.status_code == 207
    assert by_id.json()["results"]["success"] == [{"identifier": taxonomy["sub_category"].id}]
    assert by_id.json()["results"]["failed"] == [{"identifier": 9999, "reason": "Subcategory not found"}]

    listed = await client.get("/api/sub-categories", params={"categoryName": "operating-systems"})
    assert [s["name"] for s in listed.json()["subCategories"]] == ["process-scheduling"]
