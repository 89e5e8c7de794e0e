"""카드 에셋 관리 모듈 — 프레임·일러스트 이미지를 찾고 디코딩한다."""

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from errors import AssetError

logger = logging.getLogger(__name__)

_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp")


def find_asset(directory: Path, key: str) -> Path:
    """directory에서 key 이름의 이미지 파일을 찾는다."""
    for ext in _EXTENSIONS:
        path = directory / f"{key}{ext}"
        if path.is_file():
            return path
    raise AssetError(f"에셋 없음: {directory / key}.*")


def open_rgba(path: Path) -> Image.Image:
    """이미지를 디코딩하여 RGBA로 반환한다."""
    try:
        with Image.open(path) as img:
            img.load()
            return img.convert("RGBA")
    except (OSError, UnidentifiedImageError) as e:
        raise AssetError(f"이미지 디코딩 실패: {path} ({e})") from e


def check_size(size, path: Path) -> tuple[int, int]:
    """프레임 크기가 양의 정수인지 확인한다."""
    try:
        width, height = size
    except (TypeError, ValueError):
        raise AssetError(f"프레임 크기 정보 오류: {path} ({size!r})") from None
    if not (isinstance(width, int) and isinstance(height, int)) or width <= 0 or height <= 0:
        raise AssetError(f"프레임 크기 정보 오류: {path} ({size!r})")
    return width, height


class AssetStore:
    """프레임/일러스트 디렉토리를 관리한다. 디코딩한 프레임은 캐시해서 읽기 전용으로 공유한다."""

    def __init__(self, frames_dir: str = "assets/frames/", illustrations_dir: str = "assets/illustrations/"):
        self._frames_dir = Path(frames_dir)
        self._illustrations_dir = Path(illustrations_dir)
        self._frames: dict[str, Image.Image] = {}

    def frame(self, key: str) -> Image.Image:
        """frame_<lord>_<rarity> 프레임을 반환한다 (캐싱)."""
        if key not in self._frames:
            path = find_asset(self._frames_dir, key)
            img = open_rgba(path)
            check_size(img.size, path)
            self._frames[key] = img
            logger.debug("프레임 로드: %s %dx%d", path.name, img.width, img.height)
        return self._frames[key]

    def illustration(self, key: str, deck: str = "") -> Image.Image:
        """일러스트를 반환한다. 덱별 하위 디렉토리(<illustrations>/<deck>/)가 있으면 그곳에서 찾는다."""
        directory = self._illustrations_dir
        if deck and (directory / deck).is_dir():
            directory = directory / deck
        return open_rgba(find_asset(directory, key))
