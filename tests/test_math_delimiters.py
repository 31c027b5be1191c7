"""수식 구분자 정규화 테스트"""
from app.utils.math_delimiters import normalize_math_delimiters


def test_inline_dollars_become_parentheses():
    assert normalize_math_delimiters("Let $x$ and $y$") == "Let \\(x\\) and \\(y\\)"


def test_display_dollars_become_brackets():
    assert normalize_math_delimiters("$$a+b$$") == "\\[a+b\\]"


def test_existing_parentheses_are_kept():
    """\\( \\) 는 한 번 $ 로 바뀐 뒤 다시 \\( \\) 가 된다"""
    assert normalize_math_delimiters("\\(x\\) then $y$") == "\\(x\\) then \\(y\\)"


def test_single_dollar_inside_display_math():
    assert normalize_math_delimiters("$$ 5$ $$") == "\\[ 5$ \\]"


def test_plain_text_unchanged():
    assert normalize_math_delimiters("<p>no math</p>") == "<p>no math</p>"
