"""카드 레이아웃 모듈 — 카드 데이터로 각 오버레이의 크기·폰트·위치를 계산한다.

모든 좌표는 프레임 이미지 기준 (top, left) 픽셀이다. 합성 순서:
일러스트(dest-over) → 코스트 → 이름 → HP → use 텍스트/아이콘 →
play 텍스트/아이콘 → 플레이버 → 버전.
"""

from typing import Callable

from PIL import Image

from renderer.layers import BLEND_DEST_OVER, Layer
from renderer.metrics import (
    cost_metrics,
    flavour_text_offset,
    name_metrics,
    use_text_extra_top,
    wrap,
)
from renderer.text import OverlaySpec, get_font

# 일러스트: 프레임 폭의 95%, 정사각형, 프레임 높이 5% 지점
ILLUSTRATION_WIDTH_RATIO = 0.95
ILLUSTRATION_TOP_RATIO = 0.05
ILLUSTRATION_ASPECT = 512 / 512

# 오버레이 배치. right/bottom은 프레임 오른쪽/아래 가장자리로부터의 거리
COST_BOX = (24, 24)
COST_ANCHOR = {"top": 6, "right": 30}

NAME_BOX = (150, 24)
NAME_ANCHOR = {"top": 8, "left": 16}
NAME_WRAP = 40

HP_BOX = (24, 20)
HP_ANCHOR = {"bottom": 34}
HP_FONT_SIZE = 8

BODY_BOX = (180, 40)
BODY_FONT_SIZE = 6
BODY_WRAP = 25
USE_ANCHOR = {"bottom": 130, "left": 40}
PLAY_STEP = 40
ICON_LEFT = 18
ICON_RAISE = 2

FLAVOUR_BOX = (150, 36)
FLAVOUR_FONT_SIZE = 5
FLAVOUR_WRAP = 18
FLAVOUR_ANCHOR = {"bottom": 60, "right": 170}

VERSION_BOX = (40, 10)
VERSION_FONT_SIZE = 4
VERSION_ANCHOR = {"bottom": 14, "right": 46}

# 로드 요약 카드의 설명 블록
SUMMARY_WRAP = 30
SUMMARY_MARGIN = 20
SUMMARY_HEIGHT = 80

Renderer = Callable[[OverlaySpec], Image.Image]


class CardLayout:
    """프레임 크기와 로드 스타일이 정해진 카드들의 배치를 계산한다."""

    def __init__(self, frame_size: tuple[int, int], lord, version: str = "v1.0",
                 font_family: str = "card", scale: float = 1.0):
        self.width, self.height = frame_size
        self.lord = lord
        self.version = version
        self.font_family = font_family
        self.scale = scale

    def text_box(self, text: str, box: tuple[int, int], wrap_width: int, font_size: int,
                 font_style: str = "normal") -> tuple[int, int]:
        """줄 수가 많으면 box 높이를 늘려 모든 줄이 들어가게 한다. 위치는 바뀌지 않는다."""
        font = get_font(max(1, round(font_size * self.scale)), self.font_family, style=font_style)
        ascent, descent = font.getmetrics()
        needed = len(wrap(text, wrap_width)) * (ascent + descent)
        return box[0], max(box[1], needed)

    def _spec(self, text: str, box: tuple[int, int], top: int, left: int,
              font_size: int, **kwargs) -> OverlaySpec:
        kwargs.setdefault("color", self.lord.text_color)
        return OverlaySpec(
            text=text,
            width=box[0],
            height=box[1],
            font_size=font_size,
            font_family=self.font_family,
            top=top + self.lord.frame_offset,
            left=left,
            **kwargs,
        )

    def illustration_box(self, offset: tuple[int, int] = (0, 0)) -> tuple[int, int, int, int]:
        """일러스트의 (width, height, top, left)."""
        width = round(self.width * ILLUSTRATION_WIDTH_RATIO)
        height = round(width * ILLUSTRATION_ASPECT)
        top = round(self.height * ILLUSTRATION_TOP_RATIO) + offset[0]
        left = round((self.width - width) / 2) + offset[1]
        return width, height, top, left

    # ------------------------------------------------------------------
    # 일반(play) 카드
    # ------------------------------------------------------------------

    def use_top(self) -> int:
        return self.height - USE_ANCHOR["bottom"]

    def play_top(self, card) -> int:
        return self.use_top() + PLAY_STEP + use_text_extra_top(card.use_text)

    def overlays(self, card) -> list[tuple[str, OverlaySpec]]:
        """텍스트 오버레이 (이름, 정의) 목록을 합성 순서대로 반환한다.

        use/play/플레이버 텍스트가 비어 있으면 해당 항목은 빠진다.
        """
        result = []

        cost_size, (cost_dy, cost_dx) = cost_metrics(card.cost)
        result.append(("cost", self._spec(
            card.cost, COST_BOX,
            top=COST_ANCHOR["top"] + cost_dy,
            left=self.width - COST_ANCHOR["right"] + cost_dx,
            font_size=cost_size, color=self.lord.cost_color,
            font_weight="bold", wrap=3, anchor="middle",
        )))

        name_size, name_dy = name_metrics(card.name)
        result.append(("name", self._spec(
            card.name, NAME_BOX,
            top=NAME_ANCHOR["top"] + name_dy, left=NAME_ANCHOR["left"],
            font_size=name_size, font_weight="bold", wrap=NAME_WRAP,
        )))

        result.append(("hp", self._spec(
            card.hp, HP_BOX,
            top=self.height - HP_ANCHOR["bottom"],
            left=(self.width - HP_BOX[0]) // 2,
            font_size=HP_FONT_SIZE, color=self.lord.cost_color,
            font_weight="bold", wrap=4, anchor="middle",
        )))

        if card.use_text:
            result.append(("use", self._spec(
                card.use_text, self.text_box(card.use_text, BODY_BOX, BODY_WRAP, BODY_FONT_SIZE),
                top=self.use_top(), left=USE_ANCHOR["left"],
                font_size=BODY_FONT_SIZE, wrap=BODY_WRAP,
            )))

        if card.play_text:
            result.append(("play", self._spec(
                card.play_text, self.text_box(card.play_text, BODY_BOX, BODY_WRAP, BODY_FONT_SIZE),
                top=self.play_top(card), left=USE_ANCHOR["left"],
                font_size=BODY_FONT_SIZE, wrap=BODY_WRAP,
            )))

        if card.flavour_text:
            result.append(("flavour", self._spec(
                card.flavour_text, self.text_box(card.flavour_text, FLAVOUR_BOX, FLAVOUR_WRAP,
                                                 FLAVOUR_FONT_SIZE, font_style="italic"),
                top=self.height - FLAVOUR_ANCHOR["bottom"] + flavour_text_offset(card.flavour_text),
                left=self.width - FLAVOUR_ANCHOR["right"],
                font_size=FLAVOUR_FONT_SIZE, font_style="italic", wrap=FLAVOUR_WRAP,
            )))

        result.append(("version", self._version_spec()))
        return result

    def icon_position(self, text_spec: OverlaySpec) -> tuple[int, int]:
        """액션 아이콘의 (top, left). 텍스트보다 2px 위."""
        return text_spec.top - ICON_RAISE, ICON_LEFT

    def layers(self, card, illustration: Image.Image, icons: dict[str, Image.Image],
               render: Renderer) -> list[Layer]:
        """카드 한 장의 합성 레이어 목록을 만든다.

        Args:
            illustration: 원본 일러스트 (리사이즈는 여기서 한다)
            icons: {"use": 이미지, "play": 이미지}
            render: OverlaySpec → 투명 이미지 (OverlayCache.render 등)
        """
        result = [self.illustration_layer(illustration, card.offset)]
        for name, spec in self.overlays(card):
            result.append(Layer(render(spec), spec.top, spec.left, name=name))
            if name in ("use", "play"):
                top, left = self.icon_position(spec)
                result.append(Layer(icons[name], top, left, name=f"{name}_icon"))
        return result

    def illustration_layer(self, illustration: Image.Image, offset: tuple[int, int]) -> Layer:
        width, height, top, left = self.illustration_box(offset)
        resized = illustration.resize((width, height), Image.Resampling.LANCZOS)
        return Layer(resized, top, left, blend=BLEND_DEST_OVER, name="illustration")

    def _version_spec(self) -> OverlaySpec:
        return self._spec(
            self.version, VERSION_BOX,
            top=self.height - VERSION_ANCHOR["bottom"],
            left=self.width - VERSION_ANCHOR["right"],
            font_size=VERSION_FONT_SIZE, font_style="italic", wrap=20,
        )

    # ------------------------------------------------------------------
    # 로드 요약 카드 (request / condition / effect 덱)
    # ------------------------------------------------------------------

    def summary_overlays(self, card) -> list[tuple[str, OverlaySpec]]:
        """요약 카드: 이름 + 가운데 정렬 설명 블록 + 버전."""
        name_size, name_dy = name_metrics(card.name)
        result = [("name", self._spec(
            card.name, NAME_BOX,
            top=NAME_ANCHOR["top"] + name_dy, left=NAME_ANCHOR["left"],
            font_size=name_size, font_weight="bold", wrap=NAME_WRAP,
        ))]

        description = card.flavour_text or card.use_text
        if description:
            result.append(("description", self._spec(
                description,
                self.text_box(description, (self.width - 2 * SUMMARY_MARGIN, SUMMARY_HEIGHT),
                              SUMMARY_WRAP, BODY_FONT_SIZE),
                top=self.use_top(), left=SUMMARY_MARGIN,
                font_size=BODY_FONT_SIZE, wrap=SUMMARY_WRAP, anchor="middle",
            )))

        result.append(("version", self._version_spec()))
        return result

    def summary_layers(self, card, illustration: Image.Image, render: Renderer) -> list[Layer]:
        result = [self.illustration_layer(illustration, card.offset)]
        for name, spec in self.summary_overlays(card):
            result.append(Layer(render(spec), spec.top, spec.left, name=name))
        return result
