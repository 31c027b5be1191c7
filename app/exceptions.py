"""커스텀 예외 클래스 정의"""


class BaseAppError(Exception):
    """애플리케이션 기본 예외 클래스"""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class InvalidRequestError(BaseAppError):
    """잘못된 요청일 때 발생하는 예외 (400)"""

    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class AuthenticationError(BaseAppError):
    """인증 실패 (401)"""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, status_code=401)


class PermissionDeniedError(BaseAppError):
    """권한 부족 (403)"""

    def __init__(self, message: str = "Admin access required"):
        super().__init__(message, status_code=403)


class ConflictError(BaseAppError):
    """이미 존재하는 리소스 (409)"""

    def __init__(self, message: str):
        super().__init__(message, status_code=409)


class NotFoundError(BaseAppError):
    """리소스를 찾을 수 없을 때 발생하는 예외 (404)"""

    def __init__(self, message: str):
        super().__init__(message, status_code=404)


class SubjectNotFoundError(NotFoundError):
    def __init__(self, subject_id: int | str):
        super().__init__(f"Subject not found: {subject_id}")


class SyllabusModuleNotFoundError(NotFoundError):
    def __init__(self, module_id: int | str):
        super().__init__(f"Module not found: {module_id}")


class TopicNotFoundError(NotFoundError):
    def __init__(self, topic_id: int | str):
        super().__init__(f"Topic not found: {topic_id}")


class QuestionCategoryNotFoundError(NotFoundError):
    def __init__(self, category: int | str):
        super().__init__(f"Category '{category}' not found")


class SubCategoryNotFoundError(NotFoundError):
    def __init__(self, sub_category: int | str):
        super().__init__(f"SubCategory '{sub_category}' not found")


class QuestionTagNotFoundError(NotFoundError):
    def __init__(self, tag_id: int | str):
        super().__init__(f"Question tag not found: {tag_id}")


class ExamBranchNotFoundError(NotFoundError):
    def __init__(self, branch: int | str):
        super().__init__(f"Exam branch not found: {branch}")


class QuestionNotFoundError(NotFoundError):
    def __init__(self, question: int | str):
        super().__init__(f"Question not found: {question}")


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: str):
        super().__init__(f"User not found: {user_id}")


class ProgressNotFoundError(NotFoundError):
    def __init__(self, message: str = "Progress entry not found"):
        super().__init__(message)


class QuestionIntegrityError(BaseAppError):
    """저장 직전 문제 불변식 위반 (500)

    파이프라인 검증을 통과한 문제가 여기서 실패하면 파이프라인 버그이다.
    """

    def __init__(self, message: str):
        super().__init__(message, status_code=500)
