"""액션 아이콘 모듈 — <action>_<lord> 아이콘을 18x18로 로드한다."""

import logging
from pathlib import Path

from PIL import Image

from content.assets import find_asset, open_rgba

logger = logging.getLogger(__name__)

# 아이콘 크기
ICON_SIZE = 18

ACTIONS = ("use", "play")


class IconSet:
    """로드·액션별 아이콘 캐시. 반환 이미지는 여러 카드가 읽기 전용으로 공유한다."""

    def __init__(self, icon_dir: str = "assets/icons/"):
        self._icon_dir = Path(icon_dir)
        self._cache: dict[str, Image.Image] = {}

    def get(self, action: str, lord: str) -> Image.Image:
        """action 아이콘을 ICON_SIZE 정사각형으로 반환한다."""
        if action not in ACTIONS:
            raise ValueError(f"알 수 없는 액션 종류: {action}")
        key = f"{action}_{lord}"
        if key not in self._cache:
            icon = open_rgba(find_asset(self._icon_dir, key))
            if icon.size != (ICON_SIZE, ICON_SIZE):
                icon = icon.resize((ICON_SIZE, ICON_SIZE), Image.Resampling.LANCZOS)
            self._cache[key] = icon
            logger.debug("아이콘 로드: %s", key)
        return self._cache[key]
