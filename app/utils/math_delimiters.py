"""문제 본문 수식 구분자 정규화

$$..$$ 는 \[..\] 로, $..$ 와 \(..\) 는 \(..\) 로 통일한다.
"""


def normalize_math_delimiters(content: str) -> str:
    content = content.replace("\\(", "$").replace("\\)", "$")

    parts: list[str] = []
    in_display = False
    inline_count = 0
    i = 0
    while i < len(content):
        char = content[i]
        if char != "$":
            parts.append(char)
            i += 1
            continue

        if content.startswith("$$", i):
            in_display = not in_display
            parts.append("\\[" if in_display else "\\]")
            i += 2
        elif in_display:
            # 블록 수식 안의 단일 $는 그대로 둔다
            parts.append(char)
            i += 1
        else:
            inline_count += 1
            parts.append("\\(" if inline_count % 2 else "\\)")
            i += 1
    return "".join(parts)
