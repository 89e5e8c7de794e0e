"""텍스트 측정·줄바꿈 모듈 — 글자 수 기반 폰트 크기와 위치 보정값을 계산한다.

실제 글리프 높이를 재지 않고 글자 수로 보정값을 정하는 휴리스틱이다.
기존 카드 이미지와 같은 결과가 나오도록 공식을 그대로 유지한다.
"""

# 이름 라벨: 15자까지는 기본 크기, 이후 3자마다 1pt 작아진다
NAME_MAX_LENGTH = 15
NAME_STEP = 3
NAME_FONT_SIZE = 8
NAME_MIN_FONT_SIZE = 4

# 코스트 배지
COST_FONT_SIZE = 10
COST_FONT_SIZE_WIDE = 8
COST_OFFSET_WIDE = (6, -7)  # (top, left)

# 본문 보정: 글자 수 / 기준 글자 수 * 픽셀
USE_TEXT_CHARS_PER_STEP = 25
FLAVOUR_TEXT_CHARS_PER_STEP = 18
TEXT_STEP_PX = 6


def wrap(text: str, width: int) -> list[str]:
    """텍스트를 width 글자 이하의 줄로 나눈다.

    단어를 욕심껏 한 줄에 채우고, width보다 긴 단어는 width 글자에서 자른다.
    하이픈은 넣지 않는다. width 이하의 텍스트는 공백까지 그대로 한 줄이 된다.
    """
    if width < 1:
        raise ValueError(f"줄 너비는 1 이상이어야 한다: {width}")
    if len(text) <= width:
        return [text]

    lines = []
    current = ""
    for word in text.split():
        while len(word) > width:
            if current:
                lines.append(current)
                current = ""
            lines.append(word[:width])
            word = word[width:]
        if not word:
            continue
        if not current:
            current = word
        elif len(current) + 1 + len(word) <= width:
            current = f"{current} {word}"
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines


def name_metrics(name: str) -> tuple[int, int]:
    """이름 길이로 (폰트 크기, 추가 top 오프셋)을 계산한다.

    긴 이름은 작아지는 동시에 아래로 내려가 일러스트와 겹치지 않는다.
    """
    overflow = max(0, len(name) - NAME_MAX_LENGTH)
    font_size = max(NAME_MIN_FONT_SIZE, NAME_FONT_SIZE - overflow // NAME_STEP)
    return font_size, overflow


def cost_metrics(cost: str) -> tuple[int, tuple[int, int]]:
    """코스트 문자열로 (폰트 크기, (top, left) 보정)을 계산한다."""
    if len(cost) <= 1:
        return COST_FONT_SIZE, (0, 0)
    return COST_FONT_SIZE_WIDE, COST_OFFSET_WIDE


def use_text_extra_top(text: str) -> int:
    """use 텍스트 아래에 놓이는 요소들이 내려가야 할 픽셀 수."""
    return len(text) // USE_TEXT_CHARS_PER_STEP * TEXT_STEP_PX


def flavour_text_offset(text: str) -> int:
    """플레이버 텍스트 top 보정값 (음수: 위로). 카드 아래쪽 기준이라 길수록 올라간다."""
    return len(text) // FLAVOUR_TEXT_CHARS_PER_STEP * -TEXT_STEP_PX
