"""문제 유형 판별 / 정답 형식 / 연도 태그 규칙

import 파이프라인과 저장 직전 불변식 검사가 함께 사용하는 동기 함수 모음.
DB에 접근하지 않으며 이미 해석된 태그 이름과 시험 분야만 다룬다.
"""
import enum
import math
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

MSQ_TAG = "multiple-selects"
NAT_TAG = "numerical-answers"
DESCRIPTIVE_TAG = "descriptive"

YEAR_PATTERN = re.compile(r"\d{4}")


class QuestionKind(str, enum.Enum):
    MCQ = "MCQ"
    MSQ = "MSQ"
    NAT = "NAT"
    DESCRIPTIVE = "DESCRIPTIVE"


class AnswerValidationError(ValueError):
    """정답 형식 오류 (메시지는 그대로 import 결과에 노출)"""


@dataclass(frozen=True)
class AnswerFields:
    correct_answer: str | None = None
    correct_answers: list[str] | None = None
    numerical_answer: float | None = None
    numerical_answer_min: float | None = None
    numerical_answer_max: float | None = None

    @property
    def is_empty(self) -> bool:
        return (
            self.correct_answer is None
            and not self.correct_answers
            and self.numerical_answer is None
            and self.numerical_answer_min is None
            and self.numerical_answer_max is None
        )


def normalize_category_name(category: str) -> str:
    """'Operating Systems' -> 'operating-systems'"""
    return "-".join(category.lower().split(" "))


def classify_question_kind(tag_names: Iterable[str]) -> QuestionKind:
    """태그 목록으로 문제 유형 결정 (descriptive > NAT > MSQ > MCQ)"""
    names = set(tag_names)
    if DESCRIPTIVE_TAG in names:
        return QuestionKind.DESCRIPTIVE
    if NAT_TAG in names:
        return QuestionKind.NAT
    if MSQ_TAG in names:
        return QuestionKind.MSQ
    return QuestionKind.MCQ


def _parse_float(value: str) -> float | None:
    # float()는 "nan", "inf"도 받으므로 유한한 값만 숫자로 인정
    try:
        number = float(value.strip())
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _numerical_range(low: float, high: float) -> AnswerFields:
    if low > high:
        raise AnswerValidationError("Numerical answer range min must be less than or equal to max")
    return AnswerFields(numerical_answer_min=low, numerical_answer_max=high)


def parse_answer(kind: QuestionKind, answer) -> AnswerFields:
    """유형별 정답 형식 검증 후 저장할 정답 필드 반환

    Raises:
        AnswerValidationError: 유형에 맞지 않는 정답
    """
    match kind:
        case QuestionKind.DESCRIPTIVE:
            # 서술형은 정답이 주어져도 저장하지 않는다
            return AnswerFields()

        case QuestionKind.NAT:
            if isinstance(answer, bool):
                raise AnswerValidationError("Numerical answer questions require a valid number or range")
            if isinstance(answer, (int, float)):
                if not math.isfinite(answer):
                    raise AnswerValidationError("Numerical answer questions require a valid number or range")
                return _numerical_range(float(answer), float(answer))
            if isinstance(answer, str):
                if ":" in answer:
                    parts = answer.split(":")
                    bounds = [_parse_float(part) for part in parts]
                    if len(bounds) != 2 or None in bounds:
                        raise AnswerValidationError('Invalid numerical answer range format. Expected "min:max"')
                    return _numerical_range(bounds[0], bounds[1])
                exact = _parse_float(answer)
                if exact is None:
                    raise AnswerValidationError('Invalid numerical answer format. Expected a number or "min:max"')
                return _numerical_range(exact, exact)
            raise AnswerValidationError("Numerical answer questions require a valid number or range")

        case QuestionKind.MSQ:
            if not isinstance(answer, list) or not answer:
                raise AnswerValidationError("Multiple select questions require at least one correct answer")
            return AnswerFields(correct_answers=[str(item) for item in answer])

        case QuestionKind.MCQ:
            if isinstance(answer, (int, float)) and not isinstance(answer, bool):
                answer = str(answer)
            if not isinstance(answer, str) or not answer:
                raise AnswerValidationError("Single choice questions require a correct answer")
            return AnswerFields(correct_answer=answer)

    raise AssertionError(f"unhandled question kind: {kind}")


def check_answer_fields(kind: QuestionKind, fields: AnswerFields) -> str | None:
    """저장될 정답 필드가 유형과 맞는지 확인 (위반 메시지 또는 None)"""
    match kind:
        case QuestionKind.DESCRIPTIVE:
            if not fields.is_empty:
                return "Descriptive questions should not have any answer fields"
        case QuestionKind.NAT:
            has_range = fields.numerical_answer_min is not None or fields.numerical_answer_max is not None
            if fields.numerical_answer is None and not has_range:
                return "NAT must have either a numerical answer or a range"
            if fields.numerical_answer is not None and not math.isfinite(fields.numerical_answer):
                return "NAT numerical answer must be a finite number"
            if has_range:
                if fields.numerical_answer_min is None or fields.numerical_answer_max is None:
                    return "NAT range must have both min and max values"
                if not (math.isfinite(fields.numerical_answer_min) and math.isfinite(fields.numerical_answer_max)):
                    return "NAT range bounds must be finite numbers"
                if fields.numerical_answer_min > fields.numerical_answer_max:
                    return "NAT range min must be less than or equal to max"
        case QuestionKind.MSQ:
            if not fields.correct_answers:
                return "MSQ must have at least one correct answer"
        case QuestionKind.MCQ:
            if not fields.correct_answer:
                return "MCQ must have a correct answer"
    return None


def extract_year_text(tag_name: str) -> str | None:
    """태그의 첫 4자리 숫자"""
    match = YEAR_PATTERN.search(tag_name)
    return match.group(0) if match else None


def build_exam_tag_map(branches: Iterable) -> dict[str, list[str]]:
    """{시험 분야 이름: examTagNames}"""
    return {branch.name: list(branch.exam_tag_names or []) for branch in branches}


def _year_in_exam_tags(year_text: str, exam_tag_names: Iterable[str]) -> bool:
    return any(year_text in exam_tag for exam_tag in exam_tag_names)


def find_question_year(
    tag_names: Sequence[str],
    exam_tag_map: Mapping[str, Sequence[str]],
    candidate_branch_names: Sequence[str],
) -> int | None:
    """태그 순서대로 첫 번째로 후보 시험 분야에서 확인되는 연도

    태그에서 추출한 4자리 숫자가 후보 분야 examTagNames 중 하나에 포함되면 채택한다.
    """
    candidate_tags = [
        exam_tag
        for branch_name in candidate_branch_names
        for exam_tag in exam_tag_map.get(branch_name, [])
    ]
    for tag_name in tag_names:
        year_text = extract_year_text(tag_name)
        if year_text and _year_in_exam_tags(year_text, candidate_tags):
            return int(year_text)
    return None


def check_year(year: int | None, tag_names: Iterable[str], exam_tag_names: Iterable[str]) -> str | None:
    """저장될 연도가 태그와 연결된 시험 분야로 뒷받침되는지 확인"""
    if year is None:
        return "Question must have a year"
    year_text = f"{year:04d}"
    if not any(extract_year_text(tag_name) == year_text for tag_name in tag_names):
        return f"No tag carries the year {year_text}"
    if not _year_in_exam_tags(year_text, exam_tag_names):
        return f'The year "{year_text}" must exist in at least one of the selected exam branches\' tag names.'
    return None
