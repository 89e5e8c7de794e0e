"""텍스트 오버레이 렌더링 모듈 — 텍스트 한 덩어리를 투명 RGBA 이미지로 만든다.

SVG를 고정 밀도로 래스터화하던 방식과 같게, 폰트 크기(pt)에 밀도 배율을 곱해
픽셀 크기를 정한다. 오버레이 캔버스 크기는 프레임 픽셀 단위 그대로다.
"""

import logging
import os
import sys as _sys
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, ImageColor, ImageDraw, ImageFont

from renderer.metrics import wrap

logger = logging.getLogger(__name__)

# 카드 폰트 경로: assets/fonts/<family>/<family>-<variant>.ttf
_FONT_DIR = Path(__file__).parent.parent / "assets" / "fonts"
_VARIANTS = {
    ("normal", "normal"): "Regular",
    ("bold", "normal"): "Bold",
    ("normal", "italic"): "Italic",
    ("bold", "italic"): "BoldItalic",
}

# 밀도 기준 (pt → px)
BASE_DENSITY = 72


def _find_fallback(variant: str) -> str:
    """OS에 맞는 폴백 폰트 경로를 반환한다."""
    suffix = {"Regular": "", "Bold": "-Bold", "Italic": "-Oblique", "BoldItalic": "-BoldOblique"}[variant]
    if _sys.platform == "win32":
        candidates = [{
            "Regular": "C:/Windows/Fonts/georgia.ttf",
            "Bold": "C:/Windows/Fonts/georgiab.ttf",
            "Italic": "C:/Windows/Fonts/georgiai.ttf",
            "BoldItalic": "C:/Windows/Fonts/georgiaz.ttf",
        }[variant]]
    elif _sys.platform == "darwin":
        candidates = ["/System/Library/Fonts/Supplemental/Georgia.ttf"]
    else:
        candidates = [
            f"/usr/share/fonts/truetype/dejavu/DejaVuSerif{suffix.replace('Oblique', 'Italic')}.ttf",
            f"/usr/share/fonts/truetype/dejavu/DejaVuSans{suffix}.ttf",
            f"/usr/share/fonts/TTF/DejaVuSans{suffix}.ttf",  # Arch Linux
        ]
    for path in candidates:
        if os.path.exists(path):
            return path
    return ""


# 폰트 캐시
_font_cache: dict[tuple[str, int], ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}


def _font_path(family: str, weight: str, style: str) -> str:
    variant = _VARIANTS.get((weight, style), "Regular")
    path = _FONT_DIR / family / f"{family}-{variant}.ttf"
    if path.exists():
        return str(path)
    return _find_fallback(variant)


def get_font(size: int, family: str = "card", weight: str = "normal", style: str = "normal"):
    """폰트를 로드한다 (캐싱)."""
    path = _font_path(family, weight, style)
    key = (path, size)
    if key not in _font_cache:
        if path:
            _font_cache[key] = ImageFont.truetype(path, size)
        else:
            _font_cache[key] = ImageFont.load_default(size)
    return _font_cache[key]


@dataclass(frozen=True)
class OverlaySpec:
    """렌더링 한 번에 쓰이는 텍스트 오버레이 정의와 배치 위치."""
    text: str
    color: str
    width: int
    height: int
    font_size: int
    font_family: str = "card"
    font_weight: str = "normal"
    font_style: str = "normal"
    wrap: int = 40
    top: int = 0
    left: int = 0
    anchor: str = "start"

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"오버레이 크기는 0보다 커야 한다: {self.width}x{self.height}")

    @property
    def render_key(self) -> tuple:
        """래스터 결과를 결정하는 값들 (위치 제외)."""
        return (self.text, self.color, self.width, self.height, self.font_size,
                self.font_family, self.font_weight, self.font_style, self.wrap, self.anchor)


def render_overlay(spec: OverlaySpec, scale: float = 1.0) -> Image.Image:
    """오버레이 정의를 width x height 투명 RGBA 이미지로 렌더링한다.

    wrap 글자 수로 줄을 나눈 뒤 위에서부터 한 줄씩 그린다.
    캔버스를 벗어나는 줄은 잘리고 경고 로그를 남긴다.
    """
    img = Image.new("RGBA", (spec.width, spec.height), (0, 0, 0, 0))
    if not spec.text:
        return img
    lines = wrap(spec.text, spec.wrap)

    font = get_font(max(1, round(spec.font_size * scale)),
                    spec.font_family, spec.font_weight, spec.font_style)
    ascent, descent = font.getmetrics()
    line_height = ascent + descent
    if len(lines) * line_height > spec.height:
        logger.warning("오버레이 높이 부족, 일부 줄이 잘림: %r (%d줄, %dpx > %dpx)",
                       spec.text[:20], len(lines), len(lines) * line_height, spec.height)
    fill = ImageColor.getrgb(spec.color)

    draw = ImageDraw.Draw(img)
    y = 0
    for line in lines:
        if spec.anchor == "middle":
            draw.text((spec.width / 2, y), line, font=font, fill=fill, anchor="ma")
        else:
            draw.text((0, y), line, font=font, fill=fill, anchor="la")
        y += line_height
    return img


class OverlayCache:
    """같은 입력의 오버레이 래스터를 공유한다. 반환 이미지는 읽기 전용으로 다룬다."""

    def __init__(self, scale: float = 1.0):
        self._scale = scale
        self._cache: dict[tuple, Image.Image] = {}

    def render(self, spec: OverlaySpec) -> Image.Image:
        key = spec.render_key
        if key not in self._cache:
            self._cache[key] = render_overlay(spec, self._scale)
        return self._cache[key]

    def __len__(self) -> int:
        return len(self._cache)
