from app.crud.exam_branch import get_exam_branch_by_name, get_exam_branches_by_names
from app.crud.question import count_questions, get_existing_links, get_question_by_id
from app.crud.question_category import get_question_categories_by_names
from app.crud.question_tag import add_question_links, get_question_tags_by_names
from app.crud.sub_category import get_sub_categories_for_categories, increment_question_counts
from app.crud.subject import get_all_subjects, get_subject_by_id
from app.crud.user import get_user_by_email, get_user_by_user_id

__all__ = [
    "get_subject_by_id",
    "get_all_subjects",
    "get_question_categories_by_names",
    "get_sub_categories_for_categories",
    "increment_question_counts",
    "get_question_tags_by_names",
    "add_question_links",
    "get_exam_branch_by_name",
    "get_exam_branches_by_names",
    "count_questions",
    "get_existing_links",
    "get_question_by_id",
    "get_user_by_email",
    "get_user_by_user_id",
]
