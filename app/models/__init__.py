from app.models.base import Base, get_db
from app.models.exam_branch import ExamBranch
from app.models.module import Module
from app.models.question import Question, question_exam_branches
from app.models.question_category import QuestionCategory
from app.models.question_tag import QuestionTag, question_tag_links
from app.models.sub_category import SubCategory, sub_category_question_categories
from app.models.subject import Subject
from app.models.topic import Difficulty, Topic
from app.models.user import SubscriptionStatus, User
from app.models.user_question_progress import UserQuestionProgress
from app.models.user_topic_progress import UserTopicProgress

__all__ = [
    "Base",
    "Subject",
    "Module",
    "Topic",
    "Difficulty",
    "QuestionCategory",
    "SubCategory",
    "sub_category_question_categories",
    "QuestionTag",
    "question_tag_links",
    "ExamBranch",
    "Question",
    "question_exam_branches",
    "User",
    "SubscriptionStatus",
    "UserQuestionProgress",
    "UserTopicProgress",
    "get_db",
]
