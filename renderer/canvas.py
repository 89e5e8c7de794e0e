"""카드 프레임 기준 Pillow 캔버스 관리 모듈."""

from pathlib import Path

from PIL import Image


class Canvas:
    """프레임 크기의 RGBA 캔버스. 입력 이미지는 복사해서 쓰고 수정하지 않는다."""

    def __init__(self, base: Image.Image):
        self._image = base.convert("RGBA") if base.mode != "RGBA" else base.copy()

    @property
    def image(self) -> Image.Image:
        return self._image

    @property
    def size(self) -> tuple[int, int]:
        return self._image.size

    def paste(self, layer: Image.Image, position: tuple = (0, 0)) -> None:
        """레이어를 캔버스 위에 합성한다 (알파 블렌딩)."""
        placed = _place(layer, position, self.size)
        self._image = Image.alpha_composite(self._image, placed)

    def paste_under(self, layer: Image.Image, position: tuple = (0, 0)) -> None:
        """레이어를 기존 내용 아래에 합성한다 (destination-over).

        프레임의 투명한 창으로만 레이어가 보인다.
        """
        placed = _place(layer, position, self.size)
        self._image = Image.alpha_composite(placed, self._image)


def _place(layer: Image.Image, position: tuple, size: tuple[int, int]) -> Image.Image:
    """레이어를 캔버스 크기에 맞춰 지정 위치(x, y)에 배치한다. 벗어난 부분은 잘린다."""
    if layer.mode != "RGBA":
        layer = layer.convert("RGBA")
    if layer.size == size and tuple(position) == (0, 0):
        return layer
    result = Image.new("RGBA", size, (0, 0, 0, 0))
    result.paste(layer, tuple(position))
    return result


def save_image(image: Image.Image, path: Path) -> Path:
    """이미지를 PNG로 저장한다. 상위 디렉토리가 없으면 만든다."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    image.save(path, format="PNG")
    return path
