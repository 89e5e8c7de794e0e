"""테스트 공용 픽스처 — 임시 디렉토리에 프레임·일러스트·아이콘 에셋을 만든다."""

import json

import pytest
from PIL import Image, ImageDraw

from config import Lord, load_config

FRAME_SIZE = (200, 300)
# 테스트용 로드 스타일
LORDS = {
    "gaidda": {"cost_color": "#B1CAB1", "text_color": "#1E2A1E"},
    "selene": {"cost_color": "#A9B8D6", "text_color": "#141C2B", "frame_offset": 4},
}
# 프레임의 투명 창 (left, top, right, bottom)
WINDOW = (20, 20, 180, 180)


def make_frame(size=FRAME_SIZE, color=(200, 30, 30, 255)) -> Image.Image:
    """불투명 테두리와 투명 창이 있는 프레임."""
    frame = Image.new("RGBA", size, color)
    ImageDraw.Draw(frame).rectangle(WINDOW, fill=(0, 0, 0, 0))
    return frame


@pytest.fixture
def lord():
    return Lord(id="gaidda", cost_color="#B1CAB1", text_color="#1E2A1E")


@pytest.fixture
def asset_dirs(tmp_path):
    """gaidda 로드용 프레임(레어도별), 일러스트 0..11, 아이콘을 만든다."""
    frames = tmp_path / "frames"
    illustrations = tmp_path / "illustrations"
    icons = tmp_path / "icons"
    for d in (frames, illustrations, icons):
        d.mkdir()

    for rarity in ("common", "rare", "epic", "legendary"):
        make_frame().save(frames / f"frame_gaidda_{rarity}.png")
    for i in range(12):
        Image.new("RGBA", (64, 64), (30, 30, 200 - i, 255)).save(illustrations / f"gaidda_{i}.png")
    for action in ("use", "play"):
        Image.new("RGBA", (32, 32), (250, 250, 0, 255)).save(icons / f"{action}_gaidda.png")

    return {
        "cards": str(tmp_path / "cards.json"),
        "frames": str(frames),
        "illustrations": str(illustrations),
        "icons": str(icons),
        "output": str(tmp_path / "out"),
    }


@pytest.fixture
def config(tmp_path, asset_dirs):
    cfg = load_config(tmp_path / "missing.json")
    cfg["paths"] = asset_dirs
    cfg["render"]["density"] = 72
    cfg["lords"] = dict(LORDS)
    return cfg


def card_record(i: int, **overrides) -> dict:
    record = {
        "rarity": "common",
        "name": f"Card {i}",
        "cost": 2,
        "hp": 3,
        "use": "Draw a card from the top of the pile.",
        "play": "Gain one favour.",
        "flavour": "Old roads remember.",
    }
    record.update(overrides)
    return record


def write_decks(path, decks: dict) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(decks, f)
