"""레이어 합성 모듈 — 프레임 + 일러스트 + 텍스트/아이콘 오버레이."""

from dataclasses import dataclass

from PIL import Image

from .canvas import Canvas

BLEND_OVER = "over"
BLEND_DEST_OVER = "dest-over"


@dataclass
class Layer:
    """합성 목록의 한 항목. top/left는 프레임 좌표."""
    image: Image.Image
    top: int
    left: int
    blend: str = BLEND_OVER
    name: str = ""


class LayerCompositor:
    """프레임 위에 레이어들을 순서대로 합성하여 최종 카드를 생성한다."""

    def compose(self, base: Image.Image, layers: list[Layer]) -> Image.Image:
        """base 위에 layers를 목록 순서대로 합성하여 RGBA 이미지를 반환한다.

        Args:
            base: 프레임 이미지 (수정하지 않음)
            layers: Layer 목록. blend가 dest-over면 기존 내용 아래로 들어간다.

        Returns:
            프레임 크기의 RGBA 이미지
        """
        canvas = Canvas(base)
        for layer in layers:
            position = (layer.left, layer.top)
            if layer.blend == BLEND_DEST_OVER:
                canvas.paste_under(layer.image, position)
            elif layer.blend == BLEND_OVER:
                canvas.paste(layer.image, position)
            else:
                raise ValueError(f"지원하지 않는 블렌드 모드: {layer.blend}")
        return canvas.image
