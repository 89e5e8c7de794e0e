"""그리드 배치 테스트 — 탐색 순서와 빈칸 금지."""

import pytest
from PIL import Image

from errors import PackingError
from renderer.grid import grid_shape, pack, weighted


@pytest.mark.parametrize("count, shape", [
    (1, (1, 1)),
    (6, (6, 1)),
    (12, (6, 2)),
    (28, (7, 4)),
    (70, (10, 7)),
])
def test_grid_shape_scan_order(count, shape):
    assert grid_shape(count) == shape


@pytest.mark.parametrize("count", [0, 11, 13, 71, 100])
def test_grid_shape_fails_without_exact_fit(count):
    with pytest.raises(PackingError):
        grid_shape(count)


def test_pack_row_major_on_white():
    colors = [(i * 20, 0, 0, 255) for i in range(12)]
    images = [Image.new("RGBA", (10, 20), c) for c in colors]
    images[3] = Image.new("RGBA", (10, 20), (0, 0, 0, 0))

    sheet = pack(images, 10, 20)

    assert sheet.size == (20, 120)
    assert sheet.mode == "RGB"
    assert sheet.getpixel((5, 10)) == (0, 0, 0)
    assert sheet.getpixel((15, 10)) == (20, 0, 0)
    assert sheet.getpixel((5, 30)) == (40, 0, 0)
    assert sheet.getpixel((15, 30)) == (255, 255, 255)  # 투명 카드는 흰 배경
    assert sheet.getpixel((15, 110)) == (220, 0, 0)


def test_pack_resizes_to_cell():
    images = [Image.new("RGB", (40, 40), (0, 128, 0))] * 2
    sheet = pack(images, 10, 10)
    assert sheet.size == (10, 20)
    assert sheet.getpixel((5, 15)) == (0, 128, 0)


def test_pack_refuses_gaps():
    with pytest.raises(PackingError):
        pack([Image.new("RGB", (10, 10))] * 11, 10, 10)


def test_weighted_by_rarity():
    items = weighted([("a", "common"), ("b", "rare"), ("c", "epic"), ("d", "legendary")])
    assert items == ["a"] * 4 + ["b"] * 2 + ["c", "d"]
