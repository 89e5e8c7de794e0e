"""카드 데이터 모듈 — 덱 JSON을 읽고 레코드를 Card로 변환한다."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from errors import ConfigError

logger = logging.getLogger(__name__)

RARITIES = ("common", "rare", "epic", "legendary")

# 덱 종류: play는 일반 카드, 나머지는 로드 요약 카드
DECK_PLAY = "play"
AUX_DECKS = ("request", "condition", "effect")
DECK_TYPES = (DECK_PLAY,) + AUX_DECKS


@dataclass(frozen=True)
class Card:
    """카드 한 장의 입력 데이터."""
    deck: str
    lord: str
    index: int
    rarity: str
    name: str
    image: str = ""
    cost: str = ""
    hp: str = ""
    use_text: str = ""
    play_text: str = ""
    flavour_text: str = ""
    offset: tuple[int, int] = (0, 0)  # 일러스트 보정 (top, left)

    @property
    def illustration_key(self) -> str:
        return self.image or f"{self.lord}_{self.index}"

    @property
    def frame_key(self) -> str:
        return f"frame_{self.lord}_{self.rarity}"

    @property
    def output_name(self) -> str:
        return f"{self.lord}_{self.index}"

    def describe(self) -> str:
        """로그용 위치 정보."""
        return f"{self.deck}/{self.lord}#{self.index} ({self.rarity})"

    @classmethod
    def from_record(cls, deck: str, lord: str, index: int, record: dict) -> "Card":
        """JSON 레코드를 Card로 변환한다. 형식이 틀리면 ConfigError."""
        where = f"{deck}/{lord}#{index}"
        if not isinstance(record, dict):
            raise ConfigError(f"카드 레코드가 객체가 아님: {where}")

        name = record.get("name")
        if not isinstance(name, str) or not name:
            raise ConfigError(f"카드 이름 없음: {where}")

        rarity = str(record.get("rarity", "common")).lower()
        if rarity not in RARITIES:
            raise ConfigError(f"알 수 없는 레어도 '{rarity}': {where}")

        offset = record.get("offset") or {}
        try:
            offset = (int(offset.get("top", 0)), int(offset.get("left", 0)))
        except (AttributeError, TypeError, ValueError) as e:
            raise ConfigError(f"일러스트 오프셋 형식 오류: {where} ({e})") from e

        return cls(
            deck=deck,
            lord=lord,
            index=index,
            rarity=rarity,
            name=name,
            image=str(record.get("image") or ""),
            cost=_text(record.get("cost")),
            hp=_text(record.get("hp")),
            use_text=_text(record.get("use")),
            play_text=_text(record.get("play")),
            flavour_text=_text(record.get("flavour")),
            offset=offset,
        )


def _text(value) -> str:
    """숫자/None을 포함한 값을 표시용 문자열로 바꾼다."""
    if value is None:
        return ""
    return str(value)


def load_decks(path: Path) -> dict[str, dict[str, list]]:
    """덱 JSON을 {덱 종류: {로드 id: [레코드, ...]}} 형태로 읽는다.

    레코드 단위 검증은 Card.from_record에서 카드별로 한다.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ConfigError(f"덱 파일 최상위가 객체가 아님: {path}")

    decks = {}
    for deck, lords in data.items():
        if deck not in DECK_TYPES:
            logger.warning("알 수 없는 덱 종류 무시: %s", deck)
            continue
        if not isinstance(lords, dict):
            raise ConfigError(f"덱 '{deck}' 형식 오류: 로드별 객체가 필요함")
        for lord, records in lords.items():
            if not isinstance(records, list):
                raise ConfigError(f"덱 '{deck}/{lord}' 형식 오류: 카드 레코드 목록이 필요함")
        decks[deck] = {lord: list(records) for lord, records in lords.items()}
        logger.info("덱 로드: %s (%d장)", deck, sum(len(r) for r in decks[deck].values()))
    return decks
