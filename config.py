"""설정 파일 로더 모듈."""

import copy
import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from errors import ConfigError

# 기본 설정 경로
_CONFIG_PATH = Path(__file__).parent / "config.json"

# 기본값 — config.json에 누락된 키가 있을 때 사용
_DEFAULTS = {
    "paths": {
        "cards": "assets/cards.json",
        "frames": "assets/frames/",
        "illustrations": "assets/illustrations/",
        "icons": "assets/icons/",
        "output": "out/",
    },
    "render": {
        "density": 150,
        "font_family": "card",
        "version": "v1.0",
    },
    "grid": {
        # 0이면 첫 카드 크기를 셀 크기로 사용
        "cell_width": 0,
        "cell_height": 0,
    },
    # 로드 스타일은 config.json에서만 정의한다
    "lords": {},
}


@dataclass(frozen=True)
class Lord:
    """세력(로드)별 스타일."""
    id: str
    cost_color: str
    text_color: str
    frame_offset: int = 0


def _deep_merge(base: dict, override: dict) -> dict:
    """base 딕셔너리에 override 값을 병합한다 (깊은 병합)."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path: Path | None = None) -> dict:
    """설정 파일을 읽어 딕셔너리로 반환한다.

    파일이 없으면 기본값을 사용한다.
    """
    config_path = path or _CONFIG_PATH
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            user_config = json.load(f)
        return _deep_merge(_DEFAULTS, user_config)
    return copy.deepcopy(_DEFAULTS)


def load_lords(config: dict) -> MappingProxyType:
    """설정의 lords 섹션을 읽기 전용 {id: Lord} 테이블로 만든다."""
    lords = {}
    for lord_id, style in config.get("lords", {}).items():
        try:
            lords[lord_id] = Lord(
                id=lord_id,
                cost_color=style["cost_color"],
                text_color=style["text_color"],
                frame_offset=int(style.get("frame_offset", 0)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"로드 스타일 형식 오류: {lord_id} ({e})") from e
    return MappingProxyType(lords)


def get_lord(lords, lord_id: str) -> Lord:
    """로드 스타일을 찾는다. 없으면 ConfigError."""
    try:
        return lords[lord_id]
    except KeyError:
        raise ConfigError(f"알 수 없는 로드: {lord_id}") from None
