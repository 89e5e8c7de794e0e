"""그리드(컨택트 시트) 모듈 — 완성된 카드 이미지를 빈칸 없는 직사각형으로 배치한다."""

import logging

from PIL import Image

from errors import PackingError

logger = logging.getLogger(__name__)

MAX_ROWS = 10
MAX_COLUMNS = 7

# 팩 확률 미리보기용 레어도별 반복 횟수
RARITY_WEIGHTS = {
    "common": 4,
    "rare": 2,
    "epic": 1,
    "legendary": 1,
}


def grid_shape(count: int) -> tuple[int, int]:
    """count칸을 정확히 채우는 (rows, columns)를 찾는다.

    columns 1..7 바깥, rows 1..10 안쪽 순서로 훑어 처음 맞는 쌍을 쓴다.
    약수가 여럿이면 이 순서가 결과를 정한다 (28 → 7행 4열).
    """
    for columns in range(1, MAX_COLUMNS + 1):
        for rows in range(1, MAX_ROWS + 1):
            if rows * columns == count:
                return rows, columns
    raise PackingError(
        f"{count}장을 {MAX_ROWS}x{MAX_COLUMNS} 이내의 빈칸 없는 그리드로 배치할 수 없다"
    )


def weighted(entries: list[tuple], weights: dict[str, int] = RARITY_WEIGHTS) -> list:
    """(항목, 레어도) 목록을 레어도 가중치만큼 반복한 항목 목록으로 만든다."""
    result = []
    for item, rarity in entries:
        result.extend([item] * weights.get(rarity, 1))
    return result


def pack(images: list[Image.Image], cell_width: int, cell_height: int) -> Image.Image:
    """이미지들을 흰 배경 캔버스에 행 우선(왼→오, 위→아래)으로 빈틈없이 배치한다."""
    if cell_width <= 0 or cell_height <= 0:
        raise PackingError(f"셀 크기는 0보다 커야 한다: {cell_width}x{cell_height}")
    rows, columns = grid_shape(len(images))
    logger.debug("그리드 %d장 → %d행 %d열", len(images), rows, columns)

    sheet = Image.new("RGB", (columns * cell_width, rows * cell_height), (255, 255, 255))
    for i, img in enumerate(images):
        if img.size != (cell_width, cell_height):
            img = img.resize((cell_width, cell_height), Image.Resampling.LANCZOS)
        row, col = divmod(i, columns)
        position = (col * cell_width, row * cell_height)
        if img.mode == "RGBA":
            sheet.paste(img, position, img)
        else:
            sheet.paste(img.convert("RGB"), position)
    return sheet
